"""codeshape - structural code formatting.

Describe generated code as a tree of fragments (lines, blocks, separated
lists, concatenations) and let the renderer handle indentation, single-line
collapsing, ``} else {`` style joins and trailing separators.
"""

from codeshape._version import __version__
from codeshape.config import INDENT_TAB, Format
from codeshape.errors import CodeshapeError, ConfigError, DocumentError
from codeshape.fragment import (
    Block,
    Concat,
    Fragment,
    Line,
    List,
    Renderer,
    Trailing,
    as_fragment,
    block,
    clist,
    concat,
    connected_block,
    fline,
    line,
    render,
    render_lines,
)

__all__ = [
    "__version__",
    # Model
    "Fragment",
    "Line",
    "Block",
    "List",
    "Concat",
    "Trailing",
    "as_fragment",
    # Builders
    "line",
    "fline",
    "block",
    "connected_block",
    "clist",
    "concat",
    # Rendering
    "Format",
    "INDENT_TAB",
    "Renderer",
    "render",
    "render_lines",
    # Errors
    "CodeshapeError",
    "ConfigError",
    "DocumentError",
]
