"""File discovery, wildcard filters, and YAML front matter extraction"""

import re
from pathlib import Path
from typing import Any, Iterable

import yaml


FRONTMATTER_RE = re.compile(r"^---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def wildcard_to_regex(pattern: str) -> re.Pattern:
    """Compile a path wildcard: ** crosses directories, * stays within one, ? is one character."""
    escaped = re.escape(pattern.replace('\\', '/'))
    escaped = escaped.replace(r'\*\*', '.*').replace(r'\*', '[^/]*').replace(r'\?', '.')
    return re.compile(f'^{escaped}$')


def _matches(rel_path: str, filters: list[re.Pattern]) -> bool:
    return not filters or any(f.match(rel_path) for f in filters)


def discover_files(
    path: Path,
    extensions: Iterable[str],
    filters: Iterable[str] = (),
    recursive: bool = False,
    ) -> list[Path]:
    """Return sorted files under path with one of the extensions, or [path] if a single matching file."""
    extensions = set(extensions)
    if path.is_file():
        return [path] if path.suffix in extensions else []
    regexes = [wildcard_to_regex(f) for f in filters]
    candidates = path.rglob('*') if recursive else path.glob('*')
    return sorted(
        p for p in candidates
        if p.is_file() and p.suffix in extensions and _matches(p.relative_to(path).as_posix(), regexes)
    )


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def load_defaults(path: Path) -> dict[str, Any]:
    """Read a defaults.yml mapping of front matter shared by every page; {} if the file is missing."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data
