"""Shared CLI helpers."""

from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console

from ..config import StyleConfig, load_config
from ..exceptions import InvalidPathError

console = Console()
err_console = Console(stderr=True)

# Exit codes
EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def resolve_config(
    config: Optional[Path] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    max_line_length: Optional[int] = None,
    allowed_violations: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> StyleConfig:
    """Build the style configuration from CLI options."""
    overrides = {
        "min_identifier_length": min_length,
        "max_identifier_length": max_length,
        "max_line_length": max_line_length,
        "allowed_violations": allowed_violations,
    }
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def collect_java_files(paths: Iterable[Path]) -> List[Path]:
    """Expand the given paths into Java source files.

    Files are taken as given; directories are searched recursively for
    ``*.java``. Order follows the arguments, then sorted paths.

    Raises:
        InvalidPathError: If a path does not exist
    """
    files: List[Path] = []
    seen = set()
    for path in paths:
        if not path.exists():
            raise InvalidPathError(path, "does not exist")
        candidates = sorted(path.rglob("*.java")) if path.is_dir() else [path]
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)
    return files
