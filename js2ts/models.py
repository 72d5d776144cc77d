from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SymbolKind(str, Enum):
    # interface Foo { ... }
    INTERFACE = "interface"
    # type Foo = ...
    TYPE_ALIAS = "type_alias"
    # enum Foo { ... }
    ENUM = "enum"
    # class Foo { ... }
    CLASS = "class"
    # function foo(...): T / declare function foo(...): T;
    FUNCTION = "function"


# ---------------------------------------------------------------------------
# Symbol table
# ---------------------------------------------------------------------------


class SymbolEntry(BaseModel):
    """A single named declaration pulled out of a ``.d.ts`` file."""

    model_config = ConfigDict(frozen=True)

    name: str
    raw_signature: str  # canonical declaration text
    source_file: str
    kind: SymbolKind


class SymbolTable(Mapping[str, SymbolEntry]):
    """
    Read-only, name-indexed view over the declarations of one conversion run.

    Built once from an ordered iterable of entries; a later entry with the
    same name replaces an earlier one (last writer wins) while keeping the
    position of the first insertion.
    """

    def __init__(self, entries: Iterable[SymbolEntry] = ()) -> None:
        self._entries: dict[str, SymbolEntry] = {}
        for entry in entries:
            self._entries[entry.name] = entry

    def __getitem__(self, name: str) -> SymbolEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SymbolTable({list(self._entries)!r})"

    def of_kind(self, *kinds: SymbolKind) -> list[SymbolEntry]:
        return [e for e in self._entries.values() if e.kind in kinds]

    def lookup(self, name: str, *kinds: SymbolKind) -> Optional[SymbolEntry]:
        """Return the entry for *name*, restricted to *kinds* when given."""
        entry = self._entries.get(name)
        if entry is None or (kinds and entry.kind not in kinds):
            return None
        return entry


# ---------------------------------------------------------------------------
# Signatures and results
# ---------------------------------------------------------------------------

ANY_TYPE = "any"


class ParsedSignature(BaseModel):
    params: dict[str, str] = Field(default_factory=dict)
    return_type: str = ANY_TYPE


class TransformationResult(BaseModel):
    original_path: str
    new_path: str = ""
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "original_path": self.original_path,
            "new_path": self.new_path,
            "success": self.success,
        }
        if self.error is not None:
            data["error"] = self.error
        return data
