"""
File discovery for a conversion run.

Both finders walk the directory recursively, return absolute paths sorted
by their relative path, and skip anything matched by the gitignore-style
exclusion patterns.
"""
from pathlib import Path
from typing import Iterable, List

from js2ts.helpers import anchor_pattern, build_ignore_spec, matches_ignore
from js2ts.logger import Js2TsLogger as logger
from js2ts.settings import (
    DECLARATION_IGNORE,
    DECLARATION_SUFFIX,
    DEFAULT_IGNORE,
    SOURCE_SUFFIXES,
)


def _walk(directory: str | Path, patterns: Iterable[str]) -> List[Path]:
    root = Path(directory).absolute()
    spec = build_ignore_spec(patterns)

    out: List[Path] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel_path = path.relative_to(root)
        if matches_ignore(rel_path, spec):
            continue
        out.append(path)
    return out


def find_javascript_files(directory: str | Path, ignore: Iterable[str] = ()) -> List[str]:
    """
    Return every JavaScript source under *directory*, minus the default
    exclusions (``node_modules``, ``dist``, minified files, declarations)
    and the caller's *ignore* patterns (slash-free ones match at the top
    level only).
    """
    patterns = [*DEFAULT_IGNORE, *(anchor_pattern(p) for p in ignore)]
    files = [
        str(p) for p in _walk(directory, patterns)
        if p.suffix in SOURCE_SUFFIXES and not p.name.endswith(DECLARATION_SUFFIX)
    ]
    logger.debug("javascript files found", directory=str(directory), count=len(files))
    return files


def find_type_definition_files(directory: str | Path) -> List[str]:
    """Return every ``.d.ts`` file under *directory*."""
    files = [
        str(p) for p in _walk(directory, DECLARATION_IGNORE)
        if p.name.endswith(DECLARATION_SUFFIX)
    ]
    logger.debug("declaration files found", directory=str(directory), count=len(files))
    return files
