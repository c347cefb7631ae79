"""Open block builders, code block decoration, and the ordered block list"""

import re
from typing import Iterator, Optional

from litweave.core.models import Block, BlockKind, OutputFormat


LEADING_BLANK_LINES_RE = re.compile(r'^(?:[^\S\r\n]*(?:\r\n|\r|\n))+')


def _trim_code(text: str) -> str:
    """Drop whitespace-only leading lines (keeping the first real line's indent) and trailing whitespace."""
    return LEADING_BLANK_LINES_RE.sub('', text, count=1).rstrip()


def decorate_code(text: str, fmt: OutputFormat, language: str = 'csharp') -> str:
    """Wrap trimmed code in a markdown fence or an html pre/code pair."""
    if fmt == OutputFormat.html:
        return f'<pre class="{language}"><code class="{language}">{text}\n</code></pre>\n'
    return f"``` {language}\n{text}\n```\n"


class BlockBuilder:
    """Accumulates text for one block until it is closed into an immutable Block."""

    def __init__(self, kind: BlockKind):
        self.kind = kind
        self._parts: Optional[list[str]] = []

    @property
    def closed(self) -> bool:
        return self._parts is None

    def append(self, text: str) -> None:
        if self._parts is None:
            raise RuntimeError(f"Cannot append to a closed {self.kind.value} block")
        self._parts.append(text)

    def close(self, fmt: OutputFormat, language: str = 'csharp') -> Block:
        """Finalize the block. Code is trimmed and decorated; documentation is kept verbatim."""
        if self._parts is None:
            raise RuntimeError(f"{self.kind.value} block is already closed")
        text = ''.join(self._parts)
        self._parts = None
        if self.kind == BlockKind.code:
            text = _trim_code(text)
            if text:
                text = decorate_code(text, fmt, language)
        return Block(kind=self.kind, content=text)


class BlockList:
    """The ordered blocks produced for one input file."""

    def __init__(self, blocks: Optional[list[Block]] = None):
        self._blocks: list[Block] = list(blocks or [])

    def append(self, block: Block) -> int:
        """Append a block and return its index."""
        self._blocks.append(block)
        return len(self._blocks) - 1

    def extend(self, blocks) -> None:
        self._blocks.extend(blocks)

    def slice(self, start: int, end: Optional[int] = None) -> list[Block]:
        """Return blocks[start:end]; end=None runs to the end of the list."""
        return self._blocks[start:end]

    def contents(self) -> str:
        return ''.join(b.content for b in self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __getitem__(self, index: int) -> Block:
        return self._blocks[index]

    def __repr__(self) -> str:
        return f"BlockList({self._blocks!r})"
