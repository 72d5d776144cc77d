import os
from pathlib import Path
from typing import Iterable

import pathspec

from js2ts.settings import SOURCE_SUFFIXES


def build_ignore_spec(patterns: Iterable[str]) -> "pathspec.PathSpec":
    """
    Return a *pathspec.PathSpec* for *patterns* using the ‘gitwildmatch’
    syntax (what Git uses). Blank and comment lines are skipped.
    """
    valid_lines = [p.rstrip() for p in patterns if p.strip() and not p.lstrip().startswith("#")]
    return pathspec.PathSpec.from_lines("gitwildmatch", valid_lines)


def anchor_pattern(pattern: str) -> str:
    """
    Anchor a slash-free pattern to the scanned root, so ``*.test.js`` matches
    top-level files only, the way a shell glob would. Patterns containing a
    slash are already relative to the root and are returned as given.
    """
    body = pattern.strip()
    if not body or body.startswith("#") or "/" in body:
        return pattern
    if body.startswith("!"):
        return "!/" + body[1:]
    return "/" + body


def matches_ignore(path: str | Path, spec: "pathspec.PathSpec") -> bool:
    """
    Return True if *path* (relative to the scanned root) is excluded by *spec*.
    """
    return spec.match_file(Path(path).as_posix())


def get_output_file_path(input_path: str | Path, input_root: str | Path, output_root: str | Path) -> str:
    """
    Mirror *input_path* from *input_root* under *output_root*, swapping the
    JavaScript suffix for its TypeScript counterpart (``.js`` → ``.ts``,
    ``.jsx`` → ``.tsx``).
    """
    rel = Path(os.path.relpath(input_path, input_root))
    new_suffix = SOURCE_SUFFIXES.get(rel.suffix)
    if new_suffix is not None:
        rel = rel.with_suffix(new_suffix)
    return str(Path(output_root) / rel)


def ensure_directory(path: str | Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)

