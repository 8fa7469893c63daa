"""Shorthand constructors for fragments.

    block("fn main() {", [
        block("if (x) {", ["bar();"], "}"),
        connected_block("else {", [fline("baz({});", arg)], "}"),
    ], "}")
"""

from __future__ import annotations

from typing import Any, Iterable, Union

from codeshape.fragment.spec import (
    Block,
    Concat,
    Fragment,
    FragmentLike,
    Line,
    List,
    Trailing,
)

Body = Union[FragmentLike, Iterable[Any]]


def line(text: str = "") -> Line:
    """A single line. With no argument, a blank line."""
    return Line(text)


def fline(template: str, *args: Any, **kwargs: Any) -> Line:
    """A line built with ``str.format``."""
    return Line(template.format(*args, **kwargs))


def block(start: str, body: Body, end: str) -> Block:
    return Block(start=start, body=body, end=end)


def connected_block(start: str, body: Body, end: str) -> Block:
    """A block whose start joins the previous line, e.g. ``} else {``."""
    return Block(start=start, body=body, end=end, connect=True)


def clist(separator: str, items: Body = ()) -> List:
    """A separated list that trails the separator when split across lines."""
    return List(separator=separator, body=items, trailing=Trailing.IF_MULTI_LINE)


def concat(*items: Union[FragmentLike, Fragment]) -> Concat:
    return Concat(body=items)
