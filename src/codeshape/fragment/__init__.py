"""Fragment model and renderer."""

from codeshape.fragment.buffer import append_line
from codeshape.fragment.builders import (
    block,
    clist,
    concat,
    connected_block,
    fline,
    line,
)
from codeshape.fragment.renderer import Renderer, render, render_lines
from codeshape.fragment.spec import (
    Block,
    Concat,
    Fragment,
    Line,
    List,
    Trailing,
    as_fragment,
    as_fragments,
)

__all__ = [
    "Fragment",
    "Line",
    "Block",
    "List",
    "Concat",
    "Trailing",
    "as_fragment",
    "as_fragments",
    "append_line",
    "Renderer",
    "render",
    "render_lines",
    "line",
    "fline",
    "block",
    "connected_block",
    "clist",
    "concat",
]
