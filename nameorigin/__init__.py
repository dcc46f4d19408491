"""
NameOrigin
==========
Classify a surname into a nationality with a character-level recurrent
network built from raw tensors: no ``nn.RNN``, no optimizer object, just
four parameter tensors, a sigmoid cell, autograd and a hand-written SGD
update.

Quick Start:
    >>> from nameorigin import (
    ...     load_corpus, build_registry, build_model, ExampleSampler, train, predict,
    ... )
    >>> corpus = load_corpus("data/names")
    >>> alphabet, categories = build_registry(corpus)
    >>> params = build_model(len(alphabet), len(categories), seed=42)
    >>> sampler = ExampleSampler(corpus, alphabet, categories, seed=42)
    >>> params, history = train(
    ...     params, sampler.stream(), steps=100_000,
    ...     learning_rate=0.05, report_every=1000,
    ... )
    >>> predict(params, "Dovesky", alphabet)

Subpackages:
    - nameorigin.data       - Registry, encoding, corpus loading, sampling
    - nameorigin.model      - Parameters, recurrent cell, sequence unroller
    - nameorigin.training   - Single-example SGD trainer
    - nameorigin.evaluation - Prediction and metrics
"""

from nameorigin.errors import (
    EmptySequenceError,
    NameOriginError,
    ShapeMismatchError,
    UnknownCategoryError,
    UnknownLetterError,
)
from nameorigin.data import (
    ALL_LETTERS,
    Alphabet,
    CategorySpace,
    ExampleSampler,
    TrainingExample,
    build_registry,
    category_to_tensor,
    encode_category,
    encode_letter,
    load_corpus,
    word_to_tensor,
)
from nameorigin.model import ModelParameters, build_model, forward, step
from nameorigin.training import Trainer, train
from nameorigin.evaluation import predict, top_categories

__version__ = "0.1.0"
