"""Application configuration: settings schema and litweave.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "litweave.yaml"
ENV_PREFIX = "LITWEAVE_"


class Settings(BaseModel):
    input_dir:     str  = Field(default=".",    description="Root folder of the files to process")
    output_dir:    str  = Field(default="docs", description="Folder the woven documents are written to")
    output_format: str  = Field(default="md", pattern="^(md|html)$", description="md or html")
    trim:          bool = Field(default=False, description="Left-trim comment indentation before weaving")
    recursive:     bool = Field(default=False, description="Also search subfolders of input_dir")
    filters:   list[str] = Field(default_factory=list, description="Wildcards selecting files relative to input_dir")
    source_ext:    str  = Field(default=".cs", description="Extension identifying source files")
    markdown_ext:  str  = Field(default=".md", description="Extension identifying markdown files")
    language:      str  = Field(default="csharp", description="Language name on code fences and html classes")
    templates_dir: Optional[str] = Field(default=None, description="Folder of jinja2 page templates (html only)")
    verbose:       bool = Field(default=False, description="Log progress for every processed file")


def _env_value(name: str, raw: str) -> Any:
    """List fields take comma-separated env values; pydantic coerces the rest."""
    if name == "filters":
        return [f.strip() for f in raw.split(",") if f.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from litweave.yaml, then LITWEAVE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
