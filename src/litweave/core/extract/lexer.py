"""C# front end: pygments tokens regrouped into tokens with leading/trailing trivia

Trivia is attached the way compiler front ends usually do it: a token owns the
whitespace and comments that follow it up to and including the end of its line
(trailing trivia); everything else before the next token is that token's
leading trivia. Preprocessor lines always land in leading trivia, and
`#region`/`#endregion` lines become region markers that carry their own line
ending.

pygments does the scanning and supplies highlighting styles. Comments,
directives and raw string literals are cut from the source at the position
pygments reports them, and lexing resumes after them, so their extent never
depends on how pygments splits them.
"""

import re
from typing import Iterator, Optional, Union

from pygments.lexers import CSharpLexer
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String, _TokenType

from litweave.core.models import Token, Trivia, TriviaKind


NEWLINE_RE = re.compile(r'\r\n|\r|\n')
LINE_SPLIT_RE = re.compile(r'(\r\n|\r|\n)')
BLOCK_COMMENT_RE = re.compile(r'/\*.*?(?:\*/|\Z)', re.DOTALL)
LINE_COMMENT_RE = re.compile(r'//[^\r\n]*')
DIRECTIVE_RE = re.compile(r'#[^\S\r\n]*(\w*)([^\r\n]*)(?:\r\n|\r|\n)?')
RAW_STRING_RE = re.compile(r'\$*("{3,})[\s\S]*?(?:\1|\Z)')

# Most specific first: Keyword.Type is a keyword, Comment.Preproc is not a comment.
TOKEN_STYLES: list[tuple[_TokenType, str]] = [
    (Comment.Preproc, 'preprocessor'),
    (Comment, 'comment'),
    (Keyword, 'keyword'),
    (String, 'string'),
    (Number, 'number'),
    (Name.Function, 'function'),
    (Name.Class, 'type'),
    (Operator, 'punctuation'),
    (Punctuation, 'punctuation'),
]

# A plain token before it is grouped with its trivia: (text, style)
Piece = tuple[str, Optional[str]]


def token_style(ttype: _TokenType) -> Optional[str]:
    """Highlighting class for a pygments token type, None for plain text."""
    for base, style in TOKEN_STYLES:
        if ttype in base:
            return style
    return None


def _blank_trivia(text: str) -> Iterator[Trivia]:
    """Split a whitespace run into whitespace and end_of_line trivia."""
    for piece in LINE_SPLIT_RE.split(text):
        if not piece:
            continue
        kind = TriviaKind.end_of_line if NEWLINE_RE.fullmatch(piece) else TriviaKind.whitespace
        yield Trivia(kind=kind, text=piece)


class Lexer:
    """Single-use scanner over one source text."""

    def __init__(self, source: str):
        self.source = source
        self._pygments = CSharpLexer()

    def _at_line_start(self, index: int) -> bool:
        i = index - 1
        while i >= 0 and self.source[i] not in '\r\n':
            if not self.source[i].isspace():
                return False
            i -= 1
        return True

    def _directive(self, m: re.Match) -> Trivia:
        keyword = m.group(1)
        if keyword == 'region':
            return Trivia(kind=TriviaKind.region_start, text=m.group(0),
                          name=m.group(2).strip(), style='preprocessor')
        if keyword == 'endregion':
            return Trivia(kind=TriviaKind.region_end, text=m.group(0), style='preprocessor')
        return Trivia(kind=TriviaKind.other, text=m.group(0), style='preprocessor')

    def _span(self, start: int, text: str) -> Optional[tuple[int, Union[Trivia, Piece]]]:
        """A comment, directive or raw string starting at `start` as (end, item), else None."""
        source = self.source
        if text.startswith('#') and self._at_line_start(start):
            m = DIRECTIVE_RE.match(source, start)
            return m.end(), self._directive(m)
        if source.startswith('//', start):
            m = LINE_COMMENT_RE.match(source, start)
            return m.end(), Trivia(kind=TriviaKind.other, text=m.group(0), style='comment')
        if source.startswith('/*', start):
            m = BLOCK_COMMENT_RE.match(source, start)
            return m.end(), Trivia(kind=TriviaKind.block_comment, text=m.group(0), style='comment')
        if text[0] in '$"' and (m := RAW_STRING_RE.match(source, start)):
            return m.end(), (m.group(0), 'string')
        return None

    def items(self) -> Iterator[Union[Trivia, Piece]]:
        """Yield trivia and token pieces covering the whole source in order."""
        source = self.source
        pos = 0
        blank: list[str] = []
        while pos < len(source):
            for index, ttype, text in self._pygments.get_tokens_unprocessed(source[pos:]):
                if not text:
                    continue
                if text.isspace():
                    blank.append(text)
                    continue
                yield from _blank_trivia(''.join(blank))
                blank = []
                start = pos + index
                if span := self._span(start, text):
                    pos, item = span
                    yield item
                    break
                yield text, token_style(ttype)
            else:
                pos = len(source)
        yield from _blank_trivia(''.join(blank))

    def tokens(self) -> Iterator[Token]:
        items = list(self.items())
        i, n = 0, len(items)
        while True:
            leading = []
            while i < n and isinstance(items[i], Trivia):
                leading.append(items[i])
                i += 1
            if i == n:
                yield Token(text='', leading=leading, is_end=True)
                return
            text, style = items[i]
            i += 1
            trailing = []
            while i < n and isinstance(items[i], Trivia) and items[i].style != 'preprocessor':
                trailing.append(items[i])
                i += 1
                if trailing[-1].kind == TriviaKind.end_of_line:
                    break
            yield Token(text=text, leading=leading, trailing=trailing, style=style)


def tokenize(source: str) -> list[Token]:
    """Lex source into tokens; the last token is always the end-of-stream marker."""
    return list(Lexer(source).tokens())
