from pathlib import Path


class Js2TsError(Exception):
    """Base class for every error raised by js2ts."""


class InputNotFoundError(Js2TsError, FileNotFoundError):
    """The conversion input (file or directory) does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Input path does not exist: {self.path}")


class ParseError(Js2TsError):
    """
    Source text could not be parsed.

    ``line`` / ``column`` are 1-based and point at the first syntax error
    tree-sitter reported, when one could be located.
    """

    def __init__(
        self,
        path: str | None,
        line: int | None = None,
        column: int | None = None,
        reason: str = "syntax error",
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason
        where = path or "<string>"
        if line is not None:
            where = f"{where}:{line}:{column}"
        super().__init__(f"{where}: {reason}")


class DeclarationParseError(ParseError):
    """A ``.d.ts`` file failed to read or parse. Aborts the whole run."""


class SourceParseError(ParseError):
    """A JavaScript source file failed to parse. Fails that file only."""
