"""Tokenization for the Naive Bayes classifier.

Text is split on every run of characters that are neither letters nor
numbers, and each run is lower-cased. Classification is Unicode-aware, so
accented Latin, Cyrillic, CJK and non-ASCII digits all survive as token
characters.
"""

from __future__ import annotations

import re

# [^\W_] is "word character minus underscore", i.e. str.isalnum().
_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Split text into lower-case letter/number tokens.

    Adjacent delimiters collapse, so no empty tokens are produced.

    Example::

        >>> tokenize("Great -- and WONDERFUL!")
        ['great', 'and', 'wonderful']
    """
    # Lower-casing can expand one letter into a letter plus a combining mark
    # ("İ" -> "i\u0307"); re-matching drops the mark so the run stays whole.
    return ["".join(_TOKEN_RE.findall(match.lower())) for match in _TOKEN_RE.findall(text)]
