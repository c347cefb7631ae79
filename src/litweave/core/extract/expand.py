"""Markdown macro expansion: replace <<name>> lines with the blocks of the named region"""

import re
from pathlib import Path
from typing import Optional

from litweave.core.blocks import BlockList
from litweave.core.errors import MacroNotFound
from litweave.core.macros import MacroTable
from litweave.core.models import Block


MACRO_LINE_RE = re.compile(r'^\s*(<<.*>>)\s*$', re.MULTILINE)


def expand_markdown(text: str, table: MacroTable, path: Optional[str] = None) -> BlockList:
    """Split markdown on macro reference lines and inline copies of the referenced blocks.

    re.split with one capture group alternates plain segments (even indices)
    and captured references (odd indices).
    """
    blocks: list[Block] = []
    for i, part in enumerate(MACRO_LINE_RE.split(text)):
        if i % 2 == 0:
            blocks.append(Block.from_text(part))
            continue
        try:
            macro = table.get(part[2:-2])
        except MacroNotFound as e:
            raise MacroNotFound(e.name, path) from None
        blocks.extend(b.model_copy() for b in macro)
    return BlockList(blocks)


def expand_file(path: Path, table: MacroTable) -> BlockList:
    return expand_markdown(path.read_text(encoding='utf-8'), table, str(path))
