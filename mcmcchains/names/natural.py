"""
mcmcchains/names/natural.py

Natural ("human") ordering of variable names.

Digit runs compare by numeric value, so Param2 sorts before Param10.
At the same position a number sorts before text, and a name that is a
prefix of another sorts first.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple, Union

_TOKEN = re.compile(r"\d+|\D+")

Token = Tuple[int, Union[int, str]]


def natural_key(name: object) -> Tuple[Token, ...]:
    """
    Sort key for natural ordering.

    Args:
        name: Variable name (converted with str())

    Returns:
        Tuple of (0, int) for digit runs and (1, str) for text runs
    """
    tokens = []
    for tok in _TOKEN.findall(str(name)):
        if tok.isdecimal():
            tokens.append((0, int(tok)))
        else:
            tokens.append((1, tok))
    return tuple(tokens)


def natural_sort(names: Iterable[str]) -> List[str]:
    """Return names in natural order (stable for equal keys)."""
    return sorted(names, key=natural_key)


def natural_order(names: Sequence[str]) -> List[int]:
    """
    Permutation that puts `names` into natural order.

    perm[i] is the position in `names` of the i-th name after sorting.
    """
    return sorted(range(len(names)), key=lambda i: natural_key(names[i]))
