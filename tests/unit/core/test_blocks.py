"""Unit tests for core/blocks.py"""

import pytest

from litweave.core.blocks import BlockBuilder, BlockList, decorate_code
from litweave.core.models import Block, BlockKind, OutputFormat


def _close(kind: BlockKind, text: str, fmt: OutputFormat = OutputFormat.md) -> Block:
    builder = BlockBuilder(kind)
    builder.append(text)
    return builder.close(fmt)


def test_code_block_md_fence():
    """Closed code in md format is wrapped in a csharp fence."""
    block = _close(BlockKind.code, "int x;")
    assert block.content == "``` csharp\nint x;\n```\n"


def test_code_block_html_wrapper():
    """Closed code in html format is wrapped in pre/code tags."""
    block = _close(BlockKind.code, "int x;", OutputFormat.html)
    assert block.content == '<pre class="csharp"><code class="csharp">int x;\n</code></pre>\n'


def test_code_block_trims_blank_lines_keeps_indent():
    """Leading blank lines go, the first real line keeps its indentation, trailing whitespace goes."""
    block = _close(BlockKind.code, "\n   \n\r\n  foo();\n\n  \n")
    assert block.content == "``` csharp\n  foo();\n```\n"


@pytest.mark.parametrize("fmt", [OutputFormat.md, OutputFormat.html])
def test_empty_code_block_has_no_markers(fmt):
    """Whitespace-only code closes to an empty string with no decoration."""
    block = _close(BlockKind.code, "  \n\t\n ", fmt)
    assert block.content == ""


def test_documentation_block_verbatim():
    """Documentation content is kept exactly as appended."""
    block = _close(BlockKind.documentation, "\n  # Title\n\n")
    assert block.kind == BlockKind.documentation
    assert block.content == "\n  # Title\n\n"


def test_decorate_code_language():
    """The language name appears on the fence."""
    assert decorate_code("x", OutputFormat.md, "java").startswith("``` java\n")


def test_append_after_close_fails():
    builder = BlockBuilder(BlockKind.code)
    builder.close(OutputFormat.md)
    assert builder.closed
    with pytest.raises(RuntimeError):
        builder.append("x")


def test_close_twice_fails():
    builder = BlockBuilder(BlockKind.documentation)
    builder.close(OutputFormat.md)
    with pytest.raises(RuntimeError):
        builder.close(OutputFormat.md)


def test_block_is_immutable():
    """Closed blocks cannot be mutated."""
    block = Block.from_text("text")
    with pytest.raises(Exception):
        block.content = "other"


def test_from_text_is_documentation():
    block = Block.from_text("---\n")
    assert block.kind == BlockKind.documentation
    assert block.content == "---\n"


def test_block_list_iteration_restartable():
    """Iterating a BlockList twice yields the same blocks in order."""
    blocks = BlockList([Block.from_text("a"), Block.from_text("b")])
    assert [b.content for b in blocks] == ["a", "b"]
    assert [b.content for b in blocks] == ["a", "b"]
    assert blocks.contents() == "ab"


def test_block_list_slice_to_end():
    blocks = BlockList([Block.from_text(c) for c in "abcd"])
    assert [b.content for b in blocks.slice(1, 3)] == ["b", "c"]
    assert [b.content for b in blocks.slice(2, None)] == ["c", "d"]
    assert blocks.append(Block.from_text("e")) == 4
