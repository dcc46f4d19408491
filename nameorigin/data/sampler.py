"""
NameOrigin Example Sampler
===========================
Draws training examples from the corpus, uniformly at random and with
replacement, over the flattened multiset of (category, name) pairs.

Because every *name* is equally likely, a category's share of the samples
equals its share of the corpus: with 90 Czech names and 10 Irish names,
about 90% of the examples are Czech. That imbalance is intentional. The
sampler does not stratify by category.

Usage:
    >>> sampler = ExampleSampler(corpus, alphabet, categories, seed=0)
    >>> example = sampler.sample()
    >>> example.category, example.word, example.word_tensor.shape
    ('Czech', 'Novak', torch.Size([5, 57]))
    >>> for example in sampler.stream(limit=1000):
    ...     ...
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence

import torch

from nameorigin.data.encoding import category_to_tensor, word_to_tensor
from nameorigin.data.registry import Alphabet, CategorySpace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TrainingExample:
    """One (word, category) pair together with its tensors."""
    category: str
    word: str
    category_tensor: torch.Tensor
    word_tensor: torch.Tensor


class ExampleSampler:
    """
    Uniform with-replacement sampler over all (category, name) pairs.

    Parameters
    ----------
    corpus : mapping of str to list of str
        Category name → names.
    alphabet : Alphabet
        Used to tensorize the sampled word.
    categories : CategorySpace
        Used to tensorize the sampled category.
    seed : int or None
        Seed for a private ``random.Random``. None = non-deterministic.
    """

    def __init__(
        self,
        corpus: Mapping[str, Sequence[str]],
        alphabet: Alphabet,
        categories: CategorySpace,
        seed: Optional[int] = None,
    ):
        self.alphabet = alphabet
        self.categories = categories
        self.pairs: list[tuple[str, str]] = [
            (category, word)
            for category, words in corpus.items()
            for word in words
        ]
        if not self.pairs:
            raise ValueError("Cannot sample from a corpus with no names.")

        self._rng = random.Random(seed)

        logger.info(
            f"Sampler ready: {len(self.pairs):,} (category, name) pairs, "
            f"seed={seed}"
        )

    def __len__(self) -> int:
        return len(self.pairs)

    def sample_pair(self) -> tuple[str, str]:
        """Draw one (category, word) pair."""
        return self._rng.choice(self.pairs)

    def sample(self) -> TrainingExample:
        """Draw one pair and tensorize it."""
        category, word = self.sample_pair()
        return TrainingExample(
            category=category,
            word=word,
            category_tensor=category_to_tensor(category, self.categories),
            word_tensor=word_to_tensor(word, self.alphabet),
        )

    def stream(self, limit: Optional[int] = None) -> Iterator[TrainingExample]:
        """Yield examples forever, or ``limit`` times."""
        n = 0
        while limit is None or n < limit:
            yield self.sample()
            n += 1
