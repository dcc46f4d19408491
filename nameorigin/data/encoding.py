"""
NameOrigin Encoder & Tensorizer
================================
Turns letters, words and category names into one-hot tensors.

    encode_letter("b")        → [0, 1, 0, ..., 0]        (n_letters,)
    word_to_tensor("ab")      → [[1, 0, ...], [0, 1, ...]] (len(word), n_letters)
    category_to_tensor("X")   → [1, 0, ...]              (n_categories,)

A word tensor keeps the sequence axis dynamic: every word gets exactly as
many rows as it has characters. There is no padding, so two words of
different length can never share one tensor. ``stack_word_tensors``
enforces that.

Unknown letters and categories raise immediately. An all-zero vector would
still flow through the network and silently produce a wrong prediction.
"""

from __future__ import annotations

from typing import Sequence

import torch

from nameorigin.data.registry import Alphabet, CategorySpace
from nameorigin.errors import EmptySequenceError, ShapeMismatchError


def one_hot(index: int, size: int) -> torch.Tensor:
    """Float vector of length ``size`` with a single 1 at ``index``."""
    vec = torch.zeros(size)
    vec[index] = 1.0
    return vec


def encode_letter(letter: str, alphabet: Alphabet) -> torch.Tensor:
    """
    One-hot encode a single character.

    Raises
    ------
    UnknownLetterError
        If ``letter`` is not in ``alphabet``.
    """
    return one_hot(alphabet.index(letter), len(alphabet))


def encode_category(name: str, categories: CategorySpace) -> torch.Tensor:
    """
    One-hot encode a category name.

    Raises
    ------
    UnknownCategoryError
        If ``name`` is not in ``categories``.
    """
    return one_hot(categories.index(name), len(categories))


def word_to_tensor(word: str, alphabet: Alphabet) -> torch.Tensor:
    """
    Encode a word as a (len(word), n_letters) stack of one-hot rows.

    Row ``t`` encodes ``word[t]``; character order is preserved.

    Raises
    ------
    EmptySequenceError
        If ``word`` is empty.
    UnknownLetterError
        If any character is outside ``alphabet``.
    """
    if len(word) == 0:
        raise EmptySequenceError("Cannot tensorize an empty word.")

    tensor = torch.zeros(len(word), len(alphabet))
    for pos, letter in enumerate(word):
        tensor[pos] = encode_letter(letter, alphabet)
    return tensor


def category_to_tensor(name: str, categories: CategorySpace) -> torch.Tensor:
    """Target tensor for a category; same as ``encode_category``."""
    return encode_category(name, categories)


def stack_word_tensors(tensors: Sequence[torch.Tensor]) -> torch.Tensor:
    """
    Stack word tensors of identical length into (batch, length, n_letters).

    Raises
    ------
    ShapeMismatchError
        If the tensors do not all share the same shape. Words are never
        padded or truncated to make them fit.
    ValueError
        If ``tensors`` is empty.
    """
    if not tensors:
        raise ValueError("Cannot stack an empty list of word tensors.")

    shapes = {tuple(t.shape) for t in tensors}
    if len(shapes) != 1:
        lengths = sorted({t.shape[0] for t in tensors})
        raise ShapeMismatchError(
            f"Cannot batch word tensors of different shapes {sorted(shapes)} "
            f"(sequence lengths {lengths}). Train one example per step instead."
        )
    return torch.stack(list(tensors))
