"""
NameOrigin Corpus Loader
=========================
Reads the names corpus from disk: one UTF-8 text file per category, one
name per line, with the category named after the file stem.

    data/names/
        Arabic.txt
        Chinese.txt
        Czech.txt
        ...

Names are converted to plain ASCII on the way in. "Ślusàrski" becomes
"Slusarski": accents are split off by Unicode NFD decomposition and
dropped, and any character that is still outside the alphabet is removed.

Usage:
    >>> corpus = load_corpus("data/names")
    >>> list(corpus)[:3]
    ['Arabic', 'Chinese', 'Czech']
"""

from __future__ import annotations

import logging
import unicodedata
from pathlib import Path

from nameorigin.data.registry import Alphabet

logger = logging.getLogger(__name__)


def unicode_to_ascii(text: str, alphabet: Alphabet | None = None) -> str:
    """
    Strip diacritics and drop characters outside the alphabet.

    Parameters
    ----------
    text : str
        Raw name, possibly with accents.
    alphabet : Alphabet or None
        Allowed symbols. Defaults to the 57-symbol alphabet.
    """
    alphabet = alphabet or Alphabet()
    return "".join(
        c for c in unicodedata.normalize("NFD", text)
        if unicodedata.category(c) != "Mn" and c in alphabet
    )


def read_names(path: str | Path, alphabet: Alphabet | None = None) -> list[str]:
    """Read and normalize one category file, skipping blank lines."""
    names = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            name = unicode_to_ascii(line.strip(), alphabet)
            if name:
                names.append(name)
    return names


def load_corpus(
    data_dir: str | Path,
    alphabet: Alphabet | None = None,
) -> dict[str, list[str]]:
    """
    Load every ``*.txt`` file under ``data_dir`` into a category mapping.

    Files are read in sorted order, which becomes the category order.

    Returns
    -------
    dict[str, list[str]]
        Category name → normalized names.

    Raises
    ------
    FileNotFoundError
        If ``data_dir`` does not exist or holds no ``.txt`` files.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Corpus directory not found: {data_dir}")

    files = sorted(data_dir.glob("*.txt"))
    if not files:
        raise FileNotFoundError(f"No category files (*.txt) found in: {data_dir}")

    corpus = {path.stem: read_names(path, alphabet) for path in files}

    logger.info(
        f"Loaded {sum(len(v) for v in corpus.values()):,} names in "
        f"{len(corpus)} categories from {data_dir}"
    )
    return corpus
