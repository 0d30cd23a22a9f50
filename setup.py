from setuptools import setup, find_packages
import pathlib

# Detect layout
use_src = pathlib.Path("src/reify").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="reify-tools",
    version="0.1.0",
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "typer>=0.9",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["reify=reify.cli:app"],
    },
    **pkg_args
)
