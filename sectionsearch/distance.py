"""
Weighted Levenshtein distance.

Standalone helper for fuzzy scoring; it does not depend on the rest of the package.
"""

from __future__ import annotations


def edit_distance(start: str, end: str, insert: int = 1, delete: int = 1, replace: int = 1) -> int:
    """
    Minimum cost to turn `start` into `end`.

    Each operation cost can be overridden; 0 is allowed for all of them.
    """
    cols = len(end) + 1

    # flat (len(start)+1) x (len(end)+1) table, row-major
    table = [0] * ((len(start) + 1) * cols)

    for i in range(len(start) + 1):
        table[i * cols] = i * delete
    for j in range(cols):
        table[j] = j * insert

    for i in range(1, len(start) + 1):
        for j in range(1, cols):
            table[i * cols + j] = min(
                delete + table[(i - 1) * cols + j],
                replace * (start[i - 1] != end[j - 1]) + table[(i - 1) * cols + j - 1],
                insert + table[i * cols + j - 1],
            )

    return table[len(start) * cols + len(end)]
