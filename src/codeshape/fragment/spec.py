"""Fragment IR - the tree a caller builds to describe the output shape."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Tuple, Union


class Fragment(ABC):
    """Base class for the four fragment variants.

    Fragments are immutable. Modifiers like ``connected()`` or ``no_trail()``
    return a new node and leave the receiver untouched.
    """

    def is_empty(self) -> bool:
        """Whether rendering this fragment produces no code at all."""
        return False

    def should_inline(self) -> bool:
        """Whether this fragment renders on a single line.

        Only Blocks and Lists can decide to inline; everything else is false.
        """
        return False

    @abstractmethod
    def size_hint(self) -> int:
        """Upper bound for the number of lines this fragment emits."""

    def __str__(self) -> str:
        from codeshape.fragment.renderer import render

        return render(self)


@dataclass(frozen=True)
class Line(Fragment):
    """A single line of output. The text is emitted verbatim."""

    text: str = ""

    def size_hint(self) -> int:
        return 1


BlockPredicate = Callable[["Block"], bool]
ListPredicate = Callable[["List"], bool]


@dataclass(frozen=True)
class Block(Fragment):
    """A start line, an indented body and an end line.

    ``connect`` glues ``start`` onto the previously emitted line, which is how
    ``} else {`` is produced from two sibling blocks.
    """

    start: str
    body: Tuple[Fragment, ...]
    end: str
    connect: bool = False
    inline_condition: Optional[BlockPredicate] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", as_fragments(self.body))

    def connected(self) -> "Block":
        """Return a copy whose start is appended to the previous line."""
        return dataclasses.replace(self, connect=True)

    def inline_when(self, condition: BlockPredicate) -> "Block":
        """Return a copy that inlines whenever ``condition(block)`` is true."""
        return dataclasses.replace(self, inline_condition=condition)

    def inlined(self) -> "Block":
        return self.inline_when(_always)

    def never_inline(self) -> "Block":
        return self.inline_when(_never)

    def should_inline(self) -> bool:
        if self.inline_condition is not None:
            return bool(self.inline_condition(self))
        return self.should_inline_intrinsic()

    def should_inline_intrinsic(self) -> bool:
        """Inline only a body made of exactly one child that is itself inline."""
        return len(self.body) == 1 and self.body[0].should_inline()

    def size_hint(self) -> int:
        return sum(child.size_hint() for child in self.body) + 2


class Trailing(str, Enum):
    """When a List appends a separator after its last item."""

    IF_MULTI_LINE = "if_multiline"
    ALWAYS = "always"
    NEVER = "never"


@dataclass(frozen=True)
class List(Fragment):
    """Items joined by ``separator``. Empty items are skipped.

    The separator is glued to the end of the previous item's last line; the
    space after it comes from the connect join, not from the separator.
    """

    separator: str
    body: Tuple[Fragment, ...] = ()
    trailing: Trailing = Trailing.IF_MULTI_LINE
    inline_condition: Optional[ListPredicate] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", as_fragments(self.body))
        object.__setattr__(self, "trailing", Trailing(self.trailing))

    def items(self) -> Tuple[Fragment, ...]:
        """The items that will actually be rendered."""
        return tuple(item for item in self.body if not item.is_empty())

    def no_trail(self) -> "List":
        return dataclasses.replace(self, trailing=Trailing.NEVER)

    def always_trail(self) -> "List":
        return dataclasses.replace(self, trailing=Trailing.ALWAYS)

    def trail_if_multiline(self) -> "List":
        return dataclasses.replace(self, trailing=Trailing.IF_MULTI_LINE)

    def inline_when(self, condition: ListPredicate) -> "List":
        """Return a copy that inlines whenever ``condition(list)`` is true."""
        return dataclasses.replace(self, inline_condition=condition)

    def inlined(self) -> "List":
        return self.inline_when(_always)

    def never_inline(self) -> "List":
        return self.inline_when(_never)

    def is_empty(self) -> bool:
        return all(item.is_empty() for item in self.body)

    def should_inline(self) -> bool:
        if self.inline_condition is not None:
            return bool(self.inline_condition(self))
        return self.should_inline_intrinsic()

    def should_inline_intrinsic(self) -> bool:
        items = self.items()
        return len(items) == 1 and items[0].should_inline()

    def size_hint(self) -> int:
        return sum(item.size_hint() for item in self.body)


@dataclass(frozen=True)
class Concat(Fragment):
    """Fragments rendered back to back, with no separator and no indent."""

    body: Tuple[Fragment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", as_fragments(self.body))

    def is_empty(self) -> bool:
        return all(child.is_empty() for child in self.body)

    def size_hint(self) -> int:
        return sum(child.size_hint() for child in self.body)


FragmentLike = Union[Fragment, str]


def as_fragment(value: Any) -> Fragment:
    """Convert a string or fragment into a fragment.

    Raises:
        TypeError: If the value has no fragment form.
    """
    if isinstance(value, Fragment):
        return value
    if isinstance(value, str):
        return Line(value)
    raise TypeError(
        f"Cannot convert {type(value).__name__} to a fragment; "
        "expected str or Fragment"
    )


def as_fragments(values: Union[FragmentLike, Iterable[Any]]) -> Tuple[Fragment, ...]:
    """Normalize a body into a tuple of fragments.

    A single string or fragment is treated as a one-item body.
    """
    if isinstance(values, (str, Fragment)):
        return (as_fragment(values),)
    return tuple(as_fragment(value) for value in values)


def _always(_: Any) -> bool:
    return True


def _never(_: Any) -> bool:
    return False
