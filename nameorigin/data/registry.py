"""
NameOrigin Alphabet & Category Registry
========================================
Fixes the two ordered symbol sets the network works over:

    Alphabet       - the characters a name may contain (model input)
    CategorySpace  - the nationalities a name may belong to (model output)

Each symbol gets a stable index the moment the registry is built, and
those indices decide which position of a one-hot vector is set. They never
change during a run: the shapes of all model parameters depend on them.

Default alphabet (57 symbols, in this order):
    a b c ... z  A B C ... Z  ' ' . , ; '

Usage:
    >>> corpus = {"English": ["Smith", "Jones"], "Czech": ["Novak"]}
    >>> alphabet, categories = build_registry(corpus)
    >>> alphabet.index("b"), len(alphabet)
    (1, 57)
    >>> categories.index("Czech")
    1
"""

from __future__ import annotations

import logging
import string
from typing import Iterable, Mapping, Sequence

from nameorigin.errors import UnknownCategoryError, UnknownLetterError

logger = logging.getLogger(__name__)

PUNCTUATION = " .,;'"
ALL_LETTERS = string.ascii_lowercase + string.ascii_uppercase + PUNCTUATION


class Alphabet:
    """
    Ordered set of distinct input symbols.

    Parameters
    ----------
    symbols : iterable of str
        Single characters in index order. Defaults to ``ALL_LETTERS``.
    """

    def __init__(self, symbols: Iterable[str] = ALL_LETTERS):
        self.symbols: tuple[str, ...] = tuple(symbols)
        if not self.symbols:
            raise ValueError("Alphabet must contain at least one symbol.")
        for s in self.symbols:
            if len(s) != 1:
                raise ValueError(f"Alphabet symbols must be single characters, got {s!r}")
        self._index = {s: i for i, s in enumerate(self.symbols)}
        if len(self._index) != len(self.symbols):
            raise ValueError(f"Alphabet symbols must be distinct: {self.symbols}")

    def index(self, letter: str) -> int:
        """Index of ``letter``; raises UnknownLetterError if absent."""
        try:
            return self._index[letter]
        except KeyError:
            raise UnknownLetterError(letter, len(self)) from None

    def __contains__(self, letter: object) -> bool:
        return letter in self._index

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and self.symbols == other.symbols

    def __repr__(self) -> str:
        return f"Alphabet(n_letters={len(self)}, symbols={''.join(self.symbols)!r})"


class CategorySpace:
    """
    Ordered set of category names (nationalities).

    Index order is the order in which the names were discovered.
    """

    def __init__(self, names: Iterable[str]):
        self.names: tuple[str, ...] = tuple(names)
        if not self.names:
            raise ValueError("CategorySpace must contain at least one category.")
        self._index = {n: i for i, n in enumerate(self.names)}
        if len(self._index) != len(self.names):
            raise ValueError(f"Category names must be distinct: {self.names}")

    def index(self, name: str) -> int:
        """Index of ``name``; raises UnknownCategoryError if absent."""
        try:
            return self._index[name]
        except KeyError:
            raise UnknownCategoryError(name, list(self.names)) from None

    def name(self, index: int) -> str:
        """Category name at ``index``."""
        if not 0 <= index < len(self.names):
            raise IndexError(
                f"Category index {index} out of range [0, {len(self.names)})"
            )
        return self.names[index]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(self.names)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CategorySpace) and self.names == other.names

    def __repr__(self) -> str:
        return f"CategorySpace(n_categories={len(self)}, names={list(self.names)})"


def build_registry(
    corpus: Mapping[str, Sequence[str]],
    symbols: Iterable[str] = ALL_LETTERS,
) -> tuple[Alphabet, CategorySpace]:
    """
    Build the alphabet and category space for a corpus.

    Parameters
    ----------
    corpus : mapping of str to list of str
        Category name → names of that category, already normalized.
        Iteration order of the mapping is the category discovery order.
    symbols : iterable of str
        Alphabet symbols in index order.

    Returns
    -------
    (Alphabet, CategorySpace)

    Raises
    ------
    ValueError
        If the corpus has no categories.
    """
    if not corpus:
        raise ValueError("Cannot build a registry from an empty corpus.")

    alphabet = Alphabet(symbols)
    categories = CategorySpace(corpus.keys())

    for name, words in corpus.items():
        if not words:
            logger.warning(f"Category '{name}' has no names and will never be sampled")

    logger.info(
        f"Registry built: {len(alphabet)} letters, "
        f"{len(categories)} categories, "
        f"{sum(len(w) for w in corpus.values()):,} names"
    )
    return alphabet, categories
