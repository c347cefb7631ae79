"""Named block ranges (macros) and the registry they are looked up in"""

import threading
from typing import Iterator, Optional

from litweave.core.blocks import BlockList
from litweave.core.errors import DuplicateMacroName, MacroNotFound
from litweave.core.models import Block


class Macro:
    """A view over blocks[start:end] of one BlockList; end=None means to the end of the list.

    The macro never copies blocks. While the owning file is still being extracted
    start and end may be unresolved (None); they are fixed before the macro is
    registered in a MacroTable.
    """

    def __init__(self, name: str, blocks: BlockList, start: Optional[int] = None, end: Optional[int] = None):
        self.name = name.strip()
        self.blocks = blocks
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[Block]:
        start = len(self.blocks) if self.start is None else self.start
        return iter(self.blocks.slice(start, self.end))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Macro({self.name!r}, start={self.start}, end={self.end})"


class MacroTable:
    """Registry of macros for one run. Names are trimmed and case-sensitive."""

    def __init__(self):
        self._macros: dict[str, Macro] = {}
        self._lock = threading.Lock()

    def add(self, macro: Macro) -> Macro:
        """Register a macro; raises DuplicateMacroName if the name is taken."""
        with self._lock:
            if macro.name in self._macros:
                raise DuplicateMacroName(macro.name)
            self._macros[macro.name] = macro
        return macro

    def add_all(self, macros: list[Macro]) -> None:
        """Register several macros at once, all or none."""
        with self._lock:
            for m in macros:
                if m.name in self._macros:
                    raise DuplicateMacroName(m.name)
            for m in macros:
                self._macros[m.name] = m

    def get(self, name: str) -> Macro:
        """Look up a macro by (trimmed) name; raises MacroNotFound."""
        name = name.strip()
        try:
            return self._macros[name]
        except KeyError:
            raise MacroNotFound(name) from None

    def names(self) -> list[str]:
        return list(self._macros)

    def __contains__(self, name: str) -> bool:
        return name.strip() in self._macros

    def __len__(self) -> int:
        return len(self._macros)
