"""
nameorigin.data - Data Pipeline
================================
Everything between raw names on disk and the tensors the network reads:

    1. **Registry** (`registry.py`):
       Fixes the ordered alphabet and category space and their indices.

    2. **Encoding** (`encoding.py`):
       One-hot encodes letters and categories; turns a word into a
       (length, n_letters) tensor.

    3. **Corpus** (`corpus.py`):
       Reads one file per category and strips diacritics.

    4. **Sampler** (`sampler.py`):
       Draws (word, category) training examples uniformly with replacement.

Information Flow:
    data/names/*.txt
        → load_corpus (category → names)
        → build_registry (Alphabet, CategorySpace)
        → ExampleSampler (TrainingExample stream)
        → Trainer
"""

from nameorigin.data.registry import (
    ALL_LETTERS,
    Alphabet,
    CategorySpace,
    build_registry,
)
from nameorigin.data.encoding import (
    category_to_tensor,
    encode_category,
    encode_letter,
    stack_word_tensors,
    word_to_tensor,
)
from nameorigin.data.corpus import load_corpus, unicode_to_ascii
from nameorigin.data.sampler import ExampleSampler, TrainingExample
