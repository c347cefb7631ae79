"""Unit tests for core/weave.py"""

from pathlib import Path

import pytest

from litweave.core.blocks import BlockList
from litweave.core.models import Block, BlockKind
from litweave.core.weave import (
    make_environment,
    make_parser,
    page_params,
    relative_root,
    render_page,
    weave_html,
    weave_markdown,
)


@pytest.fixture(name="md")
def md_fixture():
    return make_parser()


@pytest.fixture(name="page_blocks")
def page_blocks_fixture():
    return BlockList([
        Block(kind=BlockKind.documentation, content="\n---\ntitle: Greeter\n_summary: '*short*'\n---\n# Body\n"),
        Block(kind=BlockKind.code, content='<pre class="csharp"><code class="csharp">x;\n</code></pre>\n'),
    ])


def test_weave_markdown_concatenates():
    blocks = BlockList([Block.from_text("a\n"), Block(kind=BlockKind.code, content="b\n")])
    assert weave_markdown(blocks) == "a\nb\n"


@pytest.mark.parametrize("rel,expected", [
    ("c.md",      ""),
    ("b/c.md",    "../"),
    ("a/b/c.md",  "../../"),
])
def test_relative_root(rel, expected):
    assert relative_root(Path(rel)) == expected


def test_page_params_front_matter(page_blocks, md):
    """Front matter from the first documentation block becomes page params and leaves the body."""
    template, params = page_params(page_blocks, Path("sub/greeter.cs"), md)
    assert template == "default"
    assert params["title"] == "Greeter"
    assert params["filename"] == "greeter"
    assert params["root"] == "../"
    assert "---" not in params["contents"]
    assert "<h1>Body</h1>" in params["contents"]
    assert '<pre class="csharp">' in params["contents"]


def test_underscore_keys_render_markdown(page_blocks, md):
    _, params = page_params(page_blocks, Path("greeter.cs"), md)
    assert str(params["_summary"]) == "<em>short</em>"


def test_defaults_are_overridden_by_front_matter(page_blocks, md):
    _, params = page_params(page_blocks, Path("greeter.cs"), md, {"title": "Fallback", "css": "site.css"})
    assert params["title"] == "Greeter"
    assert params["css"] == "site.css"


def test_title_defaults_to_file_stem(md):
    blocks = BlockList([Block.from_text("plain text\n")])
    _, params = page_params(blocks, Path("notes.md"), md)
    assert params["title"] == "notes"


def test_template_key_selects_template(md):
    blocks = BlockList([Block.from_text("---\ntemplate: wide\n---\nx\n")])
    template, params = page_params(blocks, Path("a.md"), md)
    assert template == "wide"
    assert "template" not in params


def test_unknown_template_fails():
    with pytest.raises(ValueError, match="'missing' not found"):
        render_page(make_environment(), "missing", {})


def test_weave_html_default_page(page_blocks, md):
    html = weave_html(page_blocks, Path("a/greeter.cs"), make_environment(), md, {"css": "style.css"})
    assert "<title>Greeter</title>" in html
    assert '<link rel="stylesheet" href="../style.css">' in html
    assert "<h1>Body</h1>" in html


def test_custom_templates_dir(tmp_path, md):
    """A template file in templates_dir replaces the built-in default page."""
    (tmp_path / "default.html").write_text("<p>{{ title }}|{{ filename }}</p>{{ contents }}")
    blocks = BlockList([Block.from_text("hello")])
    html = weave_html(blocks, Path("page.md"), make_environment(str(tmp_path)), md)
    assert html.startswith("<p>page|page</p>")
    assert "<p>hello</p>" in html


def test_empty_front_matter_is_removed(md):
    """An empty header leaves no delimiters behind to render as rules."""
    blocks = BlockList([Block.from_text("---\n---\n# Body\n")])
    _, params = page_params(blocks, Path("a.md"), md)
    assert "<hr" not in params["contents"]
    assert "<h1>Body</h1>" in params["contents"]
