"""
NameOrigin Prediction
======================
Inference helpers on top of the unroller.

Usage:
    >>> dist = predict(params, "Dovesky", alphabet)
    >>> dist.shape
    torch.Size([18])
    >>> top_categories(params, "Dovesky", alphabet, categories, k=3)
    [('Russian', 0.11), ('Czech', 0.07), ('Polish', 0.06)]
"""

from __future__ import annotations

import logging
from typing import Optional

import torch

from nameorigin.data.encoding import word_to_tensor
from nameorigin.data.registry import Alphabet, CategorySpace
from nameorigin.model.params import ModelParameters
from nameorigin.model.unroll import forward

logger = logging.getLogger(__name__)


@torch.no_grad()
def predict(
    params: ModelParameters,
    word: str,
    alphabet: Optional[Alphabet] = None,
) -> torch.Tensor:
    """
    Category distribution for a raw word.

    Parameters
    ----------
    params : ModelParameters
        Trained (or fresh) parameters.
    word : str
        Name to classify. Must be non-empty and use only alphabet symbols.
    alphabet : Alphabet or None
        Defaults to the 57-symbol alphabet.

    Returns
    -------
    torch.Tensor
        Shape (n_categories,), on the CPU, no gradient history.

    Raises
    ------
    EmptySequenceError, UnknownLetterError
        Propagated from the tensorizer.
    """
    alphabet = alphabet or Alphabet()
    word_tensor = word_to_tensor(word, alphabet).to(params.device)
    return forward(word_tensor, params).cpu()


def top_categories(
    params: ModelParameters,
    word: str,
    alphabet: Alphabet,
    categories: CategorySpace,
    k: int = 3,
) -> list[tuple[str, float]]:
    """
    The ``k`` most likely categories for ``word``, most likely first.

    ``k`` is capped at the number of categories.
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")

    dist = predict(params, word, alphabet)
    values, indices = dist.topk(min(k, len(categories)))
    ranked = [
        (categories.name(int(i)), float(v))
        for v, i in zip(values.tolist(), indices.tolist())
    ]
    logger.debug(f"{word!r}: {ranked}")
    return ranked
