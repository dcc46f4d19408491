"""
NameOrigin Evaluation Metrics
==============================
Quantitative checks on a trained model.

1. CONFUSION MATRIX
   Sample names from the corpus (same with-replacement sampler used for
   training), predict each one, and count (true, predicted) pairs. Rows
   are normalized so row i shows where names of category i end up.
   Bright off-diagonal cells are the pairs the model mixes up
   (e.g. Spanish vs. Portuguese).

2. ACCURACY
   Fraction of sampled names whose most likely category is correct.
   Because sampling follows corpus size, this is weighted towards the
   large categories.

3. LOSS SMOOTHING
   The trainer records single-step losses, which are noisy. A windowed
   mean makes the trend readable.

Usage:
    >>> matrix, acc = confusion_matrix(params, sampler, n_samples=10_000)
    >>> print(f"Accuracy: {acc:.1%}")
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

import numpy as np
import torch

from nameorigin.data.sampler import ExampleSampler
from nameorigin.model.params import ModelParameters
from nameorigin.model.unroll import forward

logger = logging.getLogger(__name__)


@torch.no_grad()
def confusion_matrix(
    params: ModelParameters,
    sampler: ExampleSampler,
    n_samples: int = 10_000,
) -> tuple[np.ndarray, float]:
    """
    Row-normalized confusion matrix and accuracy over sampled examples.

    Parameters
    ----------
    params : ModelParameters
        Model to evaluate.
    sampler : ExampleSampler
        Source of examples; its category space defines the matrix axes.
    n_samples : int
        Number of examples to draw.

    Returns
    -------
    (np.ndarray, float)
        Matrix of shape (n_categories, n_categories) where entry [i, j] is
        the fraction of category-i names predicted as j (rows with no
        samples stay zero), and the overall accuracy.
    """
    n_categories = len(sampler.categories)
    counts = np.zeros((n_categories, n_categories), dtype=np.int64)

    for example in sampler.stream(limit=n_samples):
        output = forward(example.word_tensor.to(params.device), params)
        true_idx = int(example.category_tensor.argmax())
        pred_idx = int(output.argmax())
        counts[true_idx, pred_idx] += 1

    total = counts.sum()
    acc = float(np.trace(counts) / total) if total else 0.0

    row_sums = counts.sum(axis=1, keepdims=True)
    matrix = np.divide(
        counts,
        row_sums,
        out=np.zeros_like(counts, dtype=np.float64),
        where=row_sums > 0,
    )

    logger.info(f"Accuracy: {acc:.1%} over {int(total):,} sampled names")
    return matrix, acc


def per_category_accuracy(
    matrix: np.ndarray,
    categories: Sequence[str],
) -> dict[str, float]:
    """Diagonal of a row-normalized confusion matrix, keyed by category."""
    return {name: float(matrix[i, i]) for i, name in enumerate(categories)}


def average_loss(
    history: Sequence[tuple[int, float]],
    window: int = 10,
) -> list[tuple[int, float]]:
    """
    Trailing mean of recorded losses.

    Each output point keeps the step index of the last sample in its
    window; the first ``window - 1`` points average over what is available.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if not history:
        return []

    steps = [s for s, _ in history]
    losses = np.asarray([loss for _, loss in history], dtype=np.float64)
    cumsum = np.concatenate(([0.0], np.cumsum(losses)))

    smoothed = []
    for i, step in enumerate(steps):
        start = max(0, i + 1 - window)
        smoothed.append((step, float((cumsum[i + 1] - cumsum[start]) / (i + 1 - start))))
    return smoothed


class Timer:
    """
    Simple context manager for timing operations.

    Usage:
        >>> with Timer("Training") as t:
        ...     train(...)
        >>> print(f"Took: {t.elapsed:.2f}s")
    """

    def __init__(self, label: str = "operation"):
        self.label = label
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def __enter__(self):
        self._start = time.time()
        return self

    def __exit__(self, *args):
        self.elapsed = time.time() - self._start
        logger.info(f"[{self.label}] Time: {self.elapsed:.2f}s")
