"""Pipeline step functions: discover files, extract and expand blocks, write woven output"""

from pathlib import Path
from typing import Optional

from litweave.config import Settings
from litweave.core.blocks import BlockList
from litweave.core.extract.expand import expand_file
from litweave.core.extract.extractor import create_extractor
from litweave.core.macros import MacroTable
from litweave.core.models import OutputFormat
from litweave.core.parse import discover_files, load_defaults
from litweave.core.weave import make_environment, make_parser, weave_html, weave_markdown
from litweave.util.logging import get_logger


logger = get_logger(__name__)

DEFAULTS_FILE = "defaults.yml"


def _relative(path: Path, root: Path) -> Path:
    return path.relative_to(root) if root.is_dir() else Path(path.name)


def plan_outputs(inputs: list[Path], input_dir: Path, output_dir: Path, suffix: str) -> dict[Path, Path]:
    """Map every input to its output path before anything is written.

    Raises ValueError when an output would replace one of the inputs or when
    two inputs would be written to the same output.
    """
    originals = {p.resolve(): p for p in inputs}
    claimed: dict[Path, Path] = {}
    plan: dict[Path, Path] = {}
    for src in inputs:
        out = output_dir / _relative(src, input_dir).with_suffix(suffix)
        key = out.resolve()
        if key in originals:
            raise ValueError(f"Output {out} would overwrite the input file {originals[key]}")
        if key in claimed:
            raise ValueError(f"{claimed[key]} and {src} would both be written to {out}")
        claimed[key] = src
        plan[src] = out
    return plan


def source_files(settings: Settings) -> list[Path]:
    return discover_files(Path(settings.input_dir), [settings.source_ext], settings.filters, settings.recursive)


def markdown_files(settings: Settings) -> list[Path]:
    return discover_files(Path(settings.input_dir), [settings.markdown_ext], settings.filters, settings.recursive)


def _outside(paths: list[Path], output_dir: Path, input_dir: Path) -> list[Path]:
    """Drop files under an output_dir nested in input_dir so earlier output is never re-woven."""
    root = output_dir.resolve()
    if not input_dir.is_dir() or root == input_dir.resolve():
        return paths
    return [p for p in paths if not p.resolve().is_relative_to(root)]


def extract_source(path: Path, settings: Settings, table: MacroTable) -> BlockList:
    """Split one source file into blocks, registering its regions in table."""
    extractor = create_extractor(
        table, OutputFormat(settings.output_format), settings.trim, settings.language, str(path),
    )
    return extractor.from_file(path)


def collect_macros(settings: Settings, table: Optional[MacroTable] = None) -> MacroTable:
    """Extract every source file only to fill a MacroTable."""
    if table is None:
        table = MacroTable()
    for p in source_files(settings):
        try:
            extract_source(p, settings, table)
        except Exception as e:
            raise RuntimeError(f"Failed to extract {p}: {e}") from e
    return table


def run_weave(settings: Settings, table: Optional[MacroTable] = None) -> list[tuple[Path, Path]]:
    """Weave source files, then markdown files (which may reference their regions).

    Returns (source_path, output_path) pairs. Output paths are checked up front
    (see plan_outputs); after that the first failing file aborts the run.
    """
    if table is None:
        table = MacroTable()
    input_dir = Path(settings.input_dir)
    output_dir = Path(settings.output_dir)
    fmt = OutputFormat(settings.output_format)

    if fmt == OutputFormat.html:
        md = make_parser()
        env = make_environment(settings.templates_dir)
        defaults = load_defaults(input_dir / DEFAULTS_FILE) if input_dir.is_dir() else {}
        suffix = ".html"
    else:
        suffix = settings.markdown_ext

    def write(src: Path, blocks: BlockList) -> tuple[Path, Path]:
        rel = _relative(src, input_dir)
        out = plan[src]
        out.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Weaving file", source=str(src), output=str(out))
        if fmt == OutputFormat.html:
            text = weave_html(blocks, rel, env, md, defaults)
        else:
            text = weave_markdown(blocks)
        out.write_text(text, encoding='utf-8')
        return src, out

    sources = _outside(source_files(settings), output_dir, input_dir)
    documents = _outside(markdown_files(settings), output_dir, input_dir)
    plan = plan_outputs(sources + documents, input_dir, output_dir, suffix)
    results = []
    for p in sources:
        try:
            results.append(write(p, extract_source(p, settings, table)))
        except Exception as e:
            raise RuntimeError(f"Failed to weave {p}: {e}") from e
    for p in documents:
        try:
            results.append(write(p, expand_file(p, table)))
        except Exception as e:
            raise RuntimeError(f"Failed to weave {p}: {e}") from e
    logger.info("Done", files=len(results), macros=len(table))
    return results
