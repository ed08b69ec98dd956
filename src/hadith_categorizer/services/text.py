"""
Text helpers shared by keyword scoring and cluster matching.
"""

from collections import Counter
from typing import Dict

import regex


# Common English function words dropped before vectorizing
STOP_WORDS = frozenset(
    "the is and of a in to for with on that this it he she they you we be are was were "
    "will would could should has had have do does did but not so if then than as at by "
    "an or from".split()
)

MIN_TOKEN_LENGTH = 3

_NON_ALNUM = regex.compile(r"[^\p{L}\p{N}]+")


def tokenize(text: str) -> Dict[str, int]:
    """
    Bag of words for vectorizing.

    Lower-cases, splits on anything that is not a letter or number
    (Unicode-aware), and drops short tokens and stop words.

    Returns:
        Mapping token -> occurrence count, in first-seen order
    """
    tokens = _NON_ALNUM.sub(" ", text.lower()).split()
    return dict(Counter(t for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t not in STOP_WORDS))


def keyword_pattern(keyword: str) -> "regex.Pattern":
    """
    Whole-word, case-insensitive pattern for a keyword.

    The keyword is escaped so it always matches literally.
    """
    return regex.compile(r"\b" + regex.escape(keyword.lower()) + r"\b", regex.IGNORECASE)


def word_count(text: str) -> int:
    """Number of whitespace-delimited tokens in the raw text."""
    return len(text.split())
