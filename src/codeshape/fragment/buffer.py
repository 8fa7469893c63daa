"""Line buffer primitive shared by every renderer."""

from __future__ import annotations

from typing import List


def append_line(out: List[str], text: str, connect: bool, indent: str) -> None:
    """Append one logical line to ``out`` within the given context.

    With ``connect`` set and a non-empty buffer, ``text`` is glued onto the
    last entry, separated by one space unless that entry is empty or is just
    the current indent. Otherwise a new entry ``indent + text`` is pushed,
    after blanking the previous entry if it only held whitespace.
    """
    if connect and out:
        last = out[-1]
        if last and last != indent:
            out[-1] = f"{last} {text}"
        else:
            out[-1] = last + text
        return

    # a blank line must not keep the indent it was emitted with
    if out and not out[-1].strip():
        out[-1] = ""

    out.append(f"{indent}{text}" if indent else text)


def append_to_last(out: List[str], text: str) -> None:
    """Glue ``text`` to the last entry without any spacing. No-op when empty."""
    if out:
        out[-1] += text
