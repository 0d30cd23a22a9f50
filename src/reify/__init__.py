"""
reify | content-fingerprinted task entries.

Exports the public API:
- Entry and the outcome variants
- reify / dry_run / decide
- load_entries / dump_entries
"""
from .entries.types import (
    Entry,
    Outcome,
    ExecSuccess,
    Noop,
    ExecFail,
    MissingRequiredFiles,
    DryFail,
    Staleness,
)
from .entries.hashing import fingerprint
from .entries.reify import decide, reify, dry_run
from .entries.load import entry_from_node, load_entries
from .entries.dump import dump_entry, dump_entries, write_entries
from .errors import ReifyError

__version__ = "0.1.0"
