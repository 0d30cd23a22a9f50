from __future__ import annotations
from typing import Optional, List
from pydantic import BaseModel, Field

class RunRecord(BaseModel):
    # One evaluated entry, as appended to a --report JSONL file
    schema_version: str = Field(default='0.1.0')
    name: str
    outcome: str
    ok: bool
    exit_code: Optional[int] = None
    sha: Optional[str] = None
    missing: List[str] = Field(default_factory=list)
    dry_run: bool = False
    timestamp: str
