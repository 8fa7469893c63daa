"""Renderer - converts a Fragment tree to lines of text."""

from __future__ import annotations

import logging
from typing import List as TList
from typing import Optional

from codeshape.config import Format
from codeshape.fragment.buffer import append_line, append_to_last
from codeshape.fragment.spec import Block, Concat, Fragment, Line, List, Trailing

log = logging.getLogger(__name__)


class Renderer:
    """Renders Fragment trees with a fixed Format.

    A render is a single synchronous walk of the tree. The tree is never
    mutated, so one Renderer (and one tree) can be reused freely.
    """

    def __init__(self, fmt: Optional[Format] = None):
        self.fmt = fmt or Format()

    def render(self, fragment: Fragment) -> str:
        """Render a fragment and join the lines with newlines.

        When ``fmt.trailing_newline`` is set, the result ends with exactly one
        newline (unless nothing was rendered).
        """
        text = "\n".join(self.render_lines(fragment))
        if self.fmt.trailing_newline and text:
            text = text.rstrip("\n") + "\n"
        return text

    def render_lines(self, fragment: Fragment) -> TList[str]:
        """Render a fragment into a fresh list of lines."""
        out: TList[str] = []
        self.render_into(fragment, out, connect=False, indent="")
        log.debug(
            "Rendered %s into %d line(s) (size hint %d)",
            type(fragment).__name__,
            len(out),
            fragment.size_hint(),
        )
        return out

    def render_into(
        self, fragment: Fragment, out: TList[str], connect: bool, indent: str
    ) -> None:
        """Render ``fragment`` onto the end of ``out``.

        Args:
            fragment: The fragment to emit.
            out: The output buffer, mutated in place.
            connect: Whether the first emitted line joins the last one in ``out``.
            indent: The indent prefix for new lines.
        """
        if isinstance(fragment, Line):
            append_line(out, fragment.text, connect, indent)
        elif isinstance(fragment, Block):
            self._render_block(fragment, out, connect, indent)
        elif isinstance(fragment, List):
            self._render_list(fragment, out, connect, indent)
        elif isinstance(fragment, Concat):
            self._render_concat(fragment, out, connect, indent)
        else:
            raise TypeError(f"Unknown fragment type: {type(fragment).__name__}")

    def _render_block(
        self, block: Block, out: TList[str], connect: bool, indent: str
    ) -> None:
        append_line(out, block.start, block.connect or connect, indent)

        should_inline = block.should_inline()
        if should_inline:
            for child in block.body:
                self.render_into(child, out, True, indent)
        else:
            body_indent = self.fmt.indent_with(indent)
            for child in block.body:
                self.render_into(child, out, False, body_indent)

        append_line(out, block.end, should_inline, indent)

    def _render_list(
        self, lst: List, out: TList[str], connect: bool, indent: str
    ) -> None:
        should_inline = lst.should_inline()

        initial_size = len(out)
        previous_size = initial_size
        # only an item that spread over several lines lets the next one join it
        previous_multi_line = False
        first = True

        for item in lst.items():
            if first:
                item_connect = connect
            else:
                append_to_last(out, lst.separator)
                item_connect = should_inline or (
                    previous_multi_line and not _is_inline_block(item)
                )

            self.render_into(item, out, item_connect, indent)

            new_size = len(out)
            previous_multi_line = new_size > previous_size + 1
            previous_size = new_size
            first = False

        if lst.trailing is Trailing.ALWAYS:
            should_trail = True
        elif lst.trailing is Trailing.NEVER:
            should_trail = False
        else:
            should_trail = len(out) > initial_size + 1

        if should_trail:
            append_to_last(out, lst.separator)

    def _render_concat(
        self, concat: Concat, out: TList[str], connect: bool, indent: str
    ) -> None:
        for i, child in enumerate(concat.body):
            self.render_into(child, out, connect and i == 0, indent)


def _is_inline_block(fragment: Fragment) -> bool:
    return isinstance(fragment, Block) and fragment.should_inline()


def render_lines(fragment: Fragment, fmt: Optional[Format] = None) -> TList[str]:
    """Render a fragment to a list of lines."""
    return Renderer(fmt).render_lines(fragment)


def render(fragment: Fragment, fmt: Optional[Format] = None) -> str:
    """Render a fragment to text."""
    return Renderer(fmt).render(fragment)
