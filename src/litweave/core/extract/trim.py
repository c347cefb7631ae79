"""Indentation trimming for documentation comment bodies"""

import re


LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def trim_indentation(text: str) -> str:
    """Strip the comment's incidental indentation, line by line.

    The first line holding a non-whitespace character fixes the offset. That line
    and the ones after it lose `offset` leading characters; lines shorter than the
    offset, and blank lines seen before it, pass unchanged. Every line ends with
    a newline in the result.
    """
    offset = -1
    out = []
    for line in LINE_BREAK_RE.split(text):
        if offset < 0:
            width = _indent_width(line)
            if width < len(line):
                offset = width
        if offset < 0 or len(line) < offset:
            out.append(line)
        else:
            out.append(line[offset:])
        out.append('\n')
    return ''.join(out)
