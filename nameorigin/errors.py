"""
NameOrigin Errors
=================
Exception types raised by the encoding layer, the unroller and the
trainer. Each one also derives from the built-in exception a caller would
naturally expect (``KeyError`` for failed lookups, ``ValueError`` for bad
shapes), so existing ``except`` clauses keep working.

None of these are caught inside the package: they propagate to whoever
called ``train`` or ``predict``.
"""

from __future__ import annotations


class NameOriginError(Exception):
    """Base class for all nameorigin errors."""


class UnknownLetterError(NameOriginError, KeyError):
    """A character is not part of the alphabet."""

    def __init__(self, letter: str, n_letters: int):
        self.letter = letter
        super().__init__(
            f"Letter {letter!r} is not in the alphabet "
            f"({n_letters} symbols). Normalize the input first."
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class UnknownCategoryError(NameOriginError, KeyError):
    """A category name is not part of the category space."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        super().__init__(
            f"Unknown category {name!r}. Known categories: {known}"
        )

    def __str__(self) -> str:
        return self.args[0]


class EmptySequenceError(NameOriginError, ValueError):
    """A word (or word tensor) has zero characters."""


class ShapeMismatchError(NameOriginError, ValueError):
    """
    Tensors of incompatible shapes were combined.

    Raised when word tensors of different lengths are stacked into one
    batch, when a batched tensor is fed to the single-example trainer, or
    when model parameter shapes disagree with each other.
    """
