"""Fragment documents - YAML descriptions of a fragment tree.

    format:
      indent: 2
    vars:
      name: main
    root:
      block:
        start: "fn {{ name }}() {"
        body:
          - "foo();"
          - list:
              separator: ","
              items: [a, b, c]
              inline: always
        end: "}"

Node forms:
- a string is a Line
- a sequence is a Concat
- ``{line: text}``, ``{block: {...}}``, ``{list: {...}}``, ``{concat: [...]}``

Texts containing ``{{`` are rendered with jinja2 against ``vars``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Literal, Union

import yaml
from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import BaseModel, Field, ValidationError, field_validator

from codeshape.errors import DocumentError
from codeshape.fragment.spec import Block, Concat, Fragment, Line, List, Trailing

log = logging.getLogger(__name__)


class MaxItems(BaseModel):
    """Inline when the node has at most ``max_items`` non-empty children."""

    model_config = {"extra": "forbid"}

    max_items: int = Field(ge=0)


InlineSpec = Union[Literal["auto", "always", "never"], MaxItems]


def _wrap_scalar(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class BlockNode(BaseModel):
    """``block:`` mapping."""

    model_config = {"extra": "forbid"}

    start: str
    body: list[Any] = Field(default_factory=list)
    end: str
    connect: bool = False
    inline: InlineSpec = "auto"

    @field_validator("body", mode="before")
    @classmethod
    def body_as_list(cls, value: Any) -> Any:
        return _wrap_scalar(value)


class ListNode(BaseModel):
    """``list:`` mapping."""

    model_config = {"extra": "forbid"}

    separator: str
    items: list[Any] = Field(default_factory=list)
    trailing: Trailing = Trailing.IF_MULTI_LINE
    inline: InlineSpec = "auto"

    @field_validator("items", mode="before")
    @classmethod
    def items_as_list(cls, value: Any) -> Any:
        return _wrap_scalar(value)


class DocumentConfig(BaseModel):
    """Top level of a fragment document."""

    model_config = {"extra": "forbid"}

    format: dict[str, Any] = Field(
        default_factory=dict, description="Format options for this document"
    )
    vars: dict[str, Any] = Field(
        default_factory=dict, description="Template variables for node texts"
    )
    root: Any = Field(description="The root node")


@dataclass
class Document:
    """A loaded document: the fragment tree plus its own format options."""

    root: Fragment
    format: Dict[str, Any] = field(default_factory=dict)
    vars: Dict[str, Any] = field(default_factory=dict)
    source: str = "<string>"


class NodeBuilder:
    """Builds fragments from parsed YAML nodes."""

    def __init__(self, variables: Dict[str, Any] | None = None):
        self.vars = variables or {}
        self.env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
        self.kinds: Dict[str, Callable[[Any, str], Fragment]] = {
            "line": self._build_line,
            "block": self._build_block,
            "list": self._build_list,
            "concat": self._build_concat,
        }

    def build(self, node: Any, path: str = "root") -> Fragment:
        """Build the fragment for ``node`` found at ``path``."""
        text = _scalar_text(node)
        if text is not None:
            return Line(self.text(text, path))
        if isinstance(node, bool) or node is None:
            raise DocumentError(f"expected a node, got {node!r}", path)
        if isinstance(node, list):
            return self._build_concat(node, path)
        if isinstance(node, dict):
            if len(node) != 1:
                raise DocumentError(
                    f"a node mapping needs exactly one of {sorted(self.kinds)}, "
                    f"got {sorted(map(str, node))}",
                    path,
                )
            ((kind, value),) = node.items()
            if kind not in self.kinds:
                raise DocumentError(
                    f"unknown node kind '{kind}' (expected one of {sorted(self.kinds)})",
                    path,
                )
            return self.kinds[kind](value, f"{path}.{kind}")
        raise DocumentError(f"unsupported node type {type(node).__name__}", path)

    def text(self, value: str, path: str) -> str:
        """Render template syntax in a node text."""
        if "{{" not in value:
            return value
        try:
            return self.env.from_string(value).render(**self.vars)
        except TemplateError as exc:
            raise DocumentError(f"template error: {exc}", path) from exc

    def _build_line(self, value: Any, path: str) -> Fragment:
        if value is None:
            return Line("")
        text = _scalar_text(value)
        if text is None:
            raise DocumentError("'line' must be a string or a number", path)
        return Line(self.text(text, path))

    def _build_block(self, value: Any, path: str) -> Fragment:
        spec = _validate(BlockNode, value, path)
        body = [
            self.build(child, f"{path}.body[{i}]") for i, child in enumerate(spec.body)
        ]
        block = Block(
            start=self.text(spec.start, f"{path}.start"),
            body=body,
            end=self.text(spec.end, f"{path}.end"),
            connect=spec.connect,
        )
        if spec.inline == "always":
            return block.inlined()
        if spec.inline == "never":
            return block.never_inline()
        if isinstance(spec.inline, MaxItems):
            limit = spec.inline.max_items
            return block.inline_when(
                lambda b: sum(1 for c in b.body if not c.is_empty()) <= limit
            )
        return block

    def _build_list(self, value: Any, path: str) -> Fragment:
        spec = _validate(ListNode, value, path)
        items = [
            self.build(item, f"{path}.items[{i}]") for i, item in enumerate(spec.items)
        ]
        lst = List(
            separator=self.text(spec.separator, f"{path}.separator"),
            body=items,
            trailing=spec.trailing,
        )
        if spec.inline == "always":
            return lst.inlined()
        if spec.inline == "never":
            return lst.never_inline()
        if isinstance(spec.inline, MaxItems):
            limit = spec.inline.max_items
            return lst.inline_when(lambda x: len(x.items()) <= limit)
        return lst

    def _build_concat(self, value: Any, path: str) -> Fragment:
        if value is None:
            value = []
        if not isinstance(value, list):
            raise DocumentError("'concat' must be a sequence", path)
        return Concat(
            body=[self.build(child, f"{path}[{i}]") for i, child in enumerate(value)]
        )


def _scalar_text(value: Any) -> str | None:
    """Text of a string or number node; booleans are not accepted as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _validate(model: type[BaseModel], value: Any, path: str) -> Any:
    if not isinstance(value, dict):
        raise DocumentError("expected a mapping", path)
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        err = exc.errors()[0]
        loc = ".".join(str(part) for part in err["loc"])
        where = f"{path}.{loc}" if loc else path
        raise DocumentError(err["msg"], where) from exc


def parse_document(source: str, name: str = "<string>") -> Document:
    """Parse a YAML fragment document from a string.

    Raises:
        DocumentError: If the YAML, the document schema or any node is invalid.
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        raise DocumentError(f"failed to parse YAML: {exc}", name) from exc

    if not isinstance(data, dict):
        raise DocumentError("document must be a mapping at the top level", name)
    if "root" not in data:
        raise DocumentError("document has no 'root' node", name)

    try:
        config = DocumentConfig.model_validate(data)
    except ValidationError as exc:
        raise DocumentError(f"invalid document: {exc}", name) from exc

    builder = NodeBuilder(config.vars)
    root = builder.build(config.root)
    log.debug("Parsed document %s (size hint %d)", name, root.size_hint())
    return Document(root=root, format=config.format, vars=config.vars, source=name)


def load_document(path: Union[str, Path]) -> Document:
    """Load a YAML fragment document from a file."""
    p = Path(path)
    try:
        source = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentError(f"could not read file: {exc}", str(p)) from exc

    document = parse_document(source, name=str(p))
    log.info("Loaded document %s", p)
    return document


def count_fragments(fragment: Fragment) -> int:
    """Number of nodes in a fragment tree, the root included."""
    if isinstance(fragment, (Block, List, Concat)):
        return 1 + sum(count_fragments(child) for child in fragment.body)
    return 1
