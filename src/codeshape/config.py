"""Configuration for codeshape.

Two layers feed the render Format:
- a project file (codeshape.yaml) with a ``format:`` mapping, discovered in
  the current directory or any parent
- explicit overrides (a document's own ``format:``, CLI flags)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from codeshape.errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_FILENAME = "codeshape.yaml"

# indent value that selects one tab character per level
INDENT_TAB = -1


class Format(BaseModel):
    """Render options."""

    model_config = {"frozen": True, "extra": "forbid"}

    indent: int = Field(
        default=4,
        description=f"Spaces per indent level, or {INDENT_TAB} to indent with tabs",
    )
    trailing_newline: bool = Field(
        default=False,
        description="End the joined output with exactly one newline",
    )

    @field_validator("indent")
    @classmethod
    def check_indent(cls, value: int) -> int:
        if value != INDENT_TAB and value <= 0:
            raise ValueError(
                f"indent must be a positive number of spaces or {INDENT_TAB} for tabs"
            )
        return value

    @classmethod
    def tab(cls) -> "Format":
        """Format that indents with tabs."""
        return cls(indent=INDENT_TAB)

    def with_indent(self, indent: int) -> "Format":
        return Format(indent=indent, trailing_newline=self.trailing_newline)

    def with_trailing_newline(self, trailing_newline: bool = True) -> "Format":
        return Format(indent=self.indent, trailing_newline=trailing_newline)

    @property
    def uses_tabs(self) -> bool:
        return self.indent == INDENT_TAB

    @property
    def indent_unit(self) -> str:
        """The text added for one level of indentation."""
        return "\t" if self.uses_tabs else " " * self.indent

    def indent_with(self, base: str) -> str:
        """Return the indent one level deeper than ``base``."""
        return base + self.indent_unit


class ProjectConfig(BaseModel):
    """Contents of codeshape.yaml."""

    model_config = {"extra": "forbid"}

    format: dict[str, Any] = Field(
        default_factory=dict, description="Default Format options"
    )


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find codeshape.yaml in ``start`` (default: cwd) or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_format_file(path: Path) -> Format:
    """Load the Format defaults from a codeshape.yaml file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    try:
        project = ProjectConfig(**data)
        fmt = Format(**project.format)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    log.info("Loaded format from %s", path)
    return fmt


def merge_format(base: Format, overrides: dict[str, Any]) -> Format:
    """Layer ``overrides`` on top of ``base``. ``None`` values are ignored."""
    data = base.model_dump()
    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    try:
        return Format(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid format options: {exc}") from exc
