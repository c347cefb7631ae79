"""Weaving: turn a BlockList into a markdown document or a rendered HTML page"""

from pathlib import Path
from typing import Any, Optional

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, TemplateNotFound
from markdown_it import MarkdownIt
from markupsafe import Markup

from litweave.core.blocks import BlockList
from litweave.core.models import BlockKind
from litweave.core.parse import split_frontmatter


DEFAULT_TEMPLATE = "default"

DEFAULT_PAGE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  {%- if css %}
  <link rel="stylesheet" href="{{ root }}{{ css }}">
  {%- endif %}
</head>
<body>
  <main>
{{ contents }}
  </main>
</body>
</html>
"""


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance; raw html stays enabled so html code blocks pass through."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True})


def make_environment(templates_dir: Optional[str] = None) -> Environment:
    """Template environment: files in templates_dir (<name>.html) override the built-in default page."""
    loaders = [DictLoader({f"{DEFAULT_TEMPLATE}.html": DEFAULT_PAGE})]
    if templates_dir:
        loaders.insert(0, FileSystemLoader(templates_dir))
    return Environment(loader=ChoiceLoader(loaders), autoescape=True, keep_trailing_newline=True)


def relative_root(rel_path: Path) -> str:
    """Prefix leading from the output file back to the output root (e.g. 'a/b/c.html' -> '../../')."""
    return "../" * (len(rel_path.parts) - 1)


def weave_markdown(blocks: BlockList) -> str:
    return blocks.contents()


def _inline_html(md: MarkdownIt, text: str) -> str:
    """Render a short markdown value, dropping a single wrapping paragraph."""
    result = md.render(text).strip()
    if result.startswith("<p>") and result.endswith("</p>") and result.count("<p>") == 1:
        result = result[3:-4]
    return result


def page_params(
    blocks: BlockList,
    rel_path: Path,
    md: MarkdownIt,
    defaults: Optional[dict[str, Any]] = None,
    ) -> tuple[str, dict[str, Any]]:
    """Collect (template_name, params) for a page.

    Front matter comes from the first documentation block and is layered over
    defaults. Keys starting with '_' are markdown and get rendered; 'template'
    picks the page template. Each block is rendered separately.
    """
    front: dict[str, Any] = dict(defaults or {})
    parts = []
    seen_doc = False
    for block in blocks:
        content = block.content
        if block.kind == BlockKind.documentation and not seen_doc:
            seen_doc = True
            stripped = content.lstrip()
            fm, body = split_frontmatter(stripped)
            if body != stripped:
                front.update(fm)
                content = body
        parts.append(md.render(content))

    template = str(front.pop("template", DEFAULT_TEMPLATE))
    params = {
        key: Markup(_inline_html(md, str(value))) if key.startswith("_") else value
        for key, value in front.items()
    }
    params.setdefault("title", rel_path.stem)
    params.update({
        "filename": rel_path.stem,
        "root": relative_root(rel_path),
        "contents": Markup("".join(parts)),
    })
    return template, params


def render_page(env: Environment, template: str, params: dict[str, Any]) -> str:
    try:
        tmpl = env.get_template(f"{template}.html")
    except TemplateNotFound as e:
        raise ValueError(f"Page template '{template}' not found") from e
    return tmpl.render(params)


def weave_html(
    blocks: BlockList,
    rel_path: Path,
    env: Environment,
    md: MarkdownIt,
    defaults: Optional[dict[str, Any]] = None,
    ) -> str:
    template, params = page_params(blocks, rel_path, md, defaults)
    return render_page(env, template, params)
