"""
javastyle - Java source style checker

Checks one Java file at a time for identifier naming and length, spacing
around braces, commas, semicolons and operators, brace placement
consistency, doc comments that do not match their declaration, and
line-level problems. Each file gets a Verdict listing every violation.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, StyleConfig, load_config
from .pipeline import analyze_file, analyze_source
from .verdict import Verdict

__all__ = [
    "analyze_source",  # Main entry point
    "analyze_file",
    "Verdict",
    "StyleConfig",
    "DEFAULT_CONFIG",
    "load_config",
]
