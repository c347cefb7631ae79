"""Core data models: blocks of woven output and the token/trivia stream they are built from"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockKind(str, Enum):
    """Restrict blocks to documentation text or code text"""
    documentation = "documentation"
    code = "code"


class OutputFormat(str, Enum):
    """Target format of the woven output; controls how code blocks are decorated"""
    md = "md"
    html = "html"


class Block(BaseModel):
    """A finished, immutable span of documentation or code in source order."""
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    content: str

    @classmethod
    def from_text(cls, text: str) -> "Block":
        """Build a closed documentation block directly from finished text (no decoration)."""
        return cls(kind=BlockKind.documentation, content=text)


class TriviaKind(str, Enum):
    """Kinds of non-token material the front end attaches to tokens"""
    block_comment = "block_comment"
    whitespace = "whitespace"
    end_of_line = "end_of_line"
    region_start = "region_start"
    region_end = "region_end"
    other = "other"


class Trivia(BaseModel):
    """A comment, whitespace run, line ending or directive attached to a token."""
    model_config = ConfigDict(frozen=True)

    kind: TriviaKind
    text: str
    name: Optional[str] = None      # declared region name; region_start only
    style: Optional[str] = None     # highlighting class for html output


class Token(BaseModel):
    """A syntax token with its leading and trailing trivia."""
    model_config = ConfigDict(frozen=True)

    text: str
    leading: list[Trivia] = Field(default_factory=list)
    trailing: list[Trivia] = Field(default_factory=list)
    is_end: bool = False
    style: Optional[str] = None
