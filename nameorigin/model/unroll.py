"""
NameOrigin Sequence Unroller
=============================
Runs the recurrent cell over every letter of one word, in order, and keeps
only the last output:

    h₀ = 0
    (y₁, h₁) = step(x₁, h₀)
    (y₂, h₂) = step(x₂, h₁)
    ...
    prediction = y_T

The loop is a left fold with ``(hidden, last_output)`` as the accumulator.
Every call starts from a new zero hidden state, so nothing leaks from one
word to the next. The autograd graph that comes out of it is as deep as the
word is long.
"""

from __future__ import annotations

from functools import reduce
from typing import Optional

import torch

from nameorigin.errors import EmptySequenceError, ShapeMismatchError
from nameorigin.model.cell import step, zero_hidden
from nameorigin.model.params import ModelParameters


def check_word_tensor(word_tensor: torch.Tensor, params: ModelParameters) -> None:
    """
    Reject anything that is not a single, non-empty (length, n_letters) word.

    Raises
    ------
    ShapeMismatchError
        If the tensor is batched or its letter width does not match the
        parameters.
    EmptySequenceError
        If the word has no positions.
    """
    if word_tensor.dim() != 2:
        raise ShapeMismatchError(
            f"Expected a single word tensor of shape (length, n_letters), got "
            f"{tuple(word_tensor.shape)}. Batches of words are not supported."
        )
    if word_tensor.shape[0] == 0:
        raise EmptySequenceError("Cannot run the network on an empty word.")
    if word_tensor.shape[1] != params.n_letters:
        raise ShapeMismatchError(
            f"Word tensor has {word_tensor.shape[1]} letters per position, "
            f"parameters expect n_letters={params.n_letters}"
        )


def forward(word_tensor: torch.Tensor, params: ModelParameters) -> torch.Tensor:
    """
    Predict a category distribution for one tensorized word.

    Parameters
    ----------
    word_tensor : torch.Tensor
        Shape (length, n_letters), length >= 1.
    params : ModelParameters
        Cell parameters.

    Returns
    -------
    torch.Tensor
        Shape (n_categories,), non-negative, sums to 1.
    """
    check_word_tensor(word_tensor, params)

    def apply(
        carry: tuple[torch.Tensor, Optional[torch.Tensor]],
        letter: torch.Tensor,
    ) -> tuple[torch.Tensor, torch.Tensor]:
        hidden, _ = carry
        output, new_hidden = step(letter, hidden, params)
        return new_hidden, output

    _, output = reduce(apply, word_tensor.unbind(0), (zero_hidden(params), None))
    return output
