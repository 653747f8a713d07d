"""
Query tokenization.

A token is a maximal run of ASCII digits or ASCII lowercase letters.
Everything else (whitespace, punctuation, uppercase letters) separates tokens
and is dropped, so callers lower-case the text first when they want
case-insensitive tokens.
"""

from __future__ import annotations

import re
from typing import List

TOKENS_RE = re.compile(r"[0-9]+|[a-z]+")


def tokenize(text: str) -> List[str]:
    """
    Split text into tokens, left to right.

        tokenize("csci-005 a") -> ["csci", "005", "a"]
    """
    return TOKENS_RE.findall(text)
