"""Token-stream scanner that splits source into documentation and code blocks and records regions as macros"""

import html
import re
from pathlib import Path
from typing import Iterable, Optional

from litweave.core.blocks import BlockBuilder, BlockList
from litweave.core.errors import DuplicateMacroName, MalformedInput
from litweave.core.extract.lexer import tokenize
from litweave.core.extract.trim import trim_indentation
from litweave.core.macros import Macro, MacroTable
from litweave.core.models import BlockKind, OutputFormat, Token, Trivia, TriviaKind
from litweave.util.logging import get_logger


logger = get_logger(__name__)

COMMENT_BODY_RE = re.compile(r'/\*(.*?)\*/', re.DOTALL)

# Trivia that never reaches the output; whitespace before it and line ends after it are dropped too.
SKIPPED_TRIVIA = frozenset({TriviaKind.block_comment, TriviaKind.region_start, TriviaKind.region_end})


def strip_comment_delimiters(comment: str) -> str:
    """Return the body of a /* ... */ comment."""
    m = COMMENT_BODY_RE.search(comment)
    return m.group(1) if m else comment[2:]


class BlockExtractor:
    """Builds the BlockList for one file and registers the file's regions in a MacroTable.

    Regions are recorded as macros whose start is the first block opened after
    the `#region` line and whose end is the first block opened after the
    matching `#endregion`. Macros are added to the table only once the whole
    file has been extracted successfully.
    """

    def __init__(
        self,
        table: MacroTable,
        fmt: OutputFormat = OutputFormat.md,
        trim: bool = False,
        language: str = 'csharp',
        path: Optional[str] = None,
        ):
        self.table = table
        self.fmt = fmt
        self.trim = trim
        self.language = language
        self.path = path
        self._reset()

    def _reset(self) -> None:
        self._blocks = BlockList()
        self._current: Optional[BlockBuilder] = None
        self._start_new_block = False
        self._stack: list[Macro] = []
        self._found: list[Macro] = []
        self._pending_starts: list[Macro] = []
        self._pending_ends: list[Macro] = []

    # --- entry points ---

    def extract(self, tokens: Iterable[Token]) -> BlockList:
        """Consume a token stream and return its blocks."""
        self._reset()
        for token in tokens:
            self.visit_token(token)
        if self._stack:
            raise MalformedInput(f"Region '{self._stack[-1].name}' is not closed", self.path)
        self._close_current()

        for macro in self._pending_starts:
            macro.start = len(self._blocks)
        for macro in self._pending_ends:
            macro.end = None
        try:
            self.table.add_all(self._found)
        except DuplicateMacroName as e:
            raise DuplicateMacroName(e.name, self.path) from None
        for macro in self._found:
            logger.debug("Registered macro", macro=macro.name, blocks=len(macro), path=self.path)
        return self._blocks

    def from_source(self, source: str) -> BlockList:
        return self.extract(tokenize(source))

    def from_file(self, path: Path) -> BlockList:
        self.path = str(path)
        return self.from_source(path.read_text(encoding='utf-8'))

    # --- token walking ---

    def visit_token(self, token: Token) -> None:
        self._process_trivia(token.leading)
        if not token.is_end:
            self.output_token(token)
        self._process_trivia(token.trailing)

    def _process_trivia(self, trivia: list[Trivia]) -> None:
        last = len(trivia) - 1
        for i, item in enumerate(trivia):
            match item.kind:
                case TriviaKind.block_comment:
                    self._append_documentation(strip_comment_delimiters(item.text))
                case TriviaKind.whitespace:
                    if i == last or trivia[i + 1].kind not in SKIPPED_TRIVIA:
                        self.output_trivia(item)
                case TriviaKind.end_of_line:
                    if i == 0 or trivia[i - 1].kind not in SKIPPED_TRIVIA:
                        self.output_trivia(item)
                case TriviaKind.region_start:
                    self._start_new_block = True
                    self._enter_region(item)
                case TriviaKind.region_end:
                    self._start_new_block = True
                    self._exit_region()
                case _:
                    self.output_trivia(item)

    def _enter_region(self, item: Trivia) -> None:
        name = (item.name or '').strip()
        if not name:
            raise MalformedInput("Region directive has no name", self.path)
        if name in self.table or any(m.name == name for m in self._found):
            raise DuplicateMacroName(name, self.path)
        macro = Macro(name, self._blocks)
        self._stack.append(macro)
        self._found.append(macro)
        self._pending_starts.append(macro)

    def _exit_region(self) -> None:
        if not self._stack:
            raise MalformedInput("'#endregion' without a matching '#region'", self.path)
        self._pending_ends.append(self._stack.pop())

    # --- block management ---

    def _close_current(self) -> None:
        if self._current is not None:
            self._blocks.append(self._current.close(self.fmt, self.language))
            self._current = None

    def _current_block(self, kind: BlockKind) -> BlockBuilder:
        """Return the open block of the given kind, starting a new one when needed."""
        if self._current is None or self._current.kind != kind or self._start_new_block:
            self._close_current()
            self._current = BlockBuilder(kind)
        if self._start_new_block:
            self._start_new_block = False
            index = len(self._blocks)   # the open block is appended here when closed
            for macro in self._pending_starts:
                macro.start = index
            for macro in self._pending_ends:
                macro.end = index
            self._pending_starts.clear()
            self._pending_ends.clear()
        return self._current

    def _append_documentation(self, text: str) -> None:
        block = self._current_block(BlockKind.documentation)
        block.append(trim_indentation(text) if self.trim else text)

    def append_code(self, text: str) -> None:
        self._current_block(BlockKind.code).append(text)

    def output_token(self, token: Token) -> None:
        self.append_code(token.text)

    def output_trivia(self, trivia: Trivia) -> None:
        self.append_code(trivia.text)


class HtmlBlockExtractor(BlockExtractor):
    """Extractor for html output: code is escaped and wrapped in styled spans."""

    def __init__(self, table: MacroTable, trim: bool = False, language: str = 'csharp', path: Optional[str] = None):
        super().__init__(table, OutputFormat.html, trim, language, path)

    def _output_decorated(self, code: str, style: Optional[str]) -> None:
        escaped = html.escape(code, quote=False)
        if style is None:
            self.append_code(escaped)
        else:
            self.append_code(f'<span class="{style}">{escaped}</span>')

    def output_token(self, token: Token) -> None:
        self._output_decorated(token.text, token.style)

    def output_trivia(self, trivia: Trivia) -> None:
        self._output_decorated(trivia.text, trivia.style)


def create_extractor(
    table: MacroTable,
    fmt: OutputFormat = OutputFormat.md,
    trim: bool = False,
    language: str = 'csharp',
    path: Optional[str] = None,
    ) -> BlockExtractor:
    """Pick the extractor matching the output format."""
    if fmt == OutputFormat.html:
        return HtmlBlockExtractor(table, trim, language, path)
    return BlockExtractor(table, fmt, trim, language, path)
