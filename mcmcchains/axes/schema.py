"""
mcmcchains/axes/schema.py

Axis descriptions for a 3-D draws array.

Key types:
- IterationRange: arithmetic progression labelling the iteration axis
- ChainAxes: the (iter, var, chain) triple with label -> position lookup

Axis order is fixed: 0 = iterations, 1 = variables, 2 = chains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from mcmcchains.errors import DuplicateNamesError, ShapeError, UnknownVariableError

ITER_AXIS = 0
VAR_AXIS = 1
CHAIN_AXIS = 2

AXIS_NAMES = ("iter", "var", "chain")


@dataclass(frozen=True)
class IterationRange:
    """
    Iteration labels start, start + thin, ..., for `length` draws.

    Attributes:
        start: Label of the first stored draw
        thin: Thinning interval between consecutive labels
        length: Number of stored draws
    """
    start: int
    thin: int
    length: int

    def __post_init__(self):
        if int(self.thin) != self.thin or self.thin < 1:
            raise ValueError(f"thinning interval must be a positive integer, got {self.thin!r}")
        if int(self.start) != self.start:
            raise ValueError(f"start must be an integer, got {self.start!r}")
        if self.length < 0:
            raise ValueError(f"iteration count must be non-negative, got {self.length!r}")

    @property
    def first(self) -> int:
        return self.start

    @property
    def last(self) -> int:
        """Label of the final draw (start - thin when the range is empty)."""
        return self.start + (self.length - 1) * self.thin

    @property
    def step(self) -> int:
        return self.thin

    def as_range(self) -> range:
        return range(self.start, self.start + self.length * self.thin, self.thin)

    def contiguous_with(self, other: "IterationRange") -> bool:
        """True if `other` begins exactly one step after this range ends."""
        return self.last + self.thin == other.first

    def extend(self, other: "IterationRange") -> "IterationRange":
        """Range covering self followed by other (caller checks contiguity)."""
        return IterationRange(self.start, self.thin, self.length + other.length)

    def __len__(self) -> int:
        return self.length

    def __str__(self) -> str:
        return f"{self.first}:{self.thin}:{self.last}"


@dataclass(frozen=True)
class ChainAxes:
    """
    The three labelled axes of a Chains value array.

    Attributes:
        iterations: Iteration labels
        names: Variable names in axis order
        chain_ids: Chain identifiers in axis order
    """
    iterations: IterationRange
    names: Tuple[str, ...]
    chain_ids: Tuple[str, ...]

    def __post_init__(self):
        for label, values in (("var", self.names), ("chain", self.chain_ids)):
            if len(set(values)) != len(values):
                dups = sorted({v for v in values if values.count(v) > 1})
                raise DuplicateNamesError(f"duplicate labels on the {label} axis: {dups}")

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (len(self.iterations), len(self.names), len(self.chain_ids))

    def check_shape(self, shape: Tuple[int, ...]) -> None:
        """Raise ShapeError unless `shape` matches the axis lengths."""
        if tuple(shape) != self.shape:
            raise ShapeError(
                f"value shape {tuple(shape)} does not match axes "
                f"(iter={self.shape[0]}, var={self.shape[1]}, chain={self.shape[2]})"
            )

    def var_pos(self) -> Dict[str, int]:
        return {n: i for i, n in enumerate(self.names)}

    def chain_pos(self) -> Dict[str, int]:
        return {c: i for i, c in enumerate(self.chain_ids)}

    def with_names(self, names: Sequence[str]) -> "ChainAxes":
        return ChainAxes(self.iterations, tuple(names), self.chain_ids)

    def resolve(self, axis: int, key: Any) -> Any:
        """
        Translate a label-based key into a numpy index along `axis`.

        Strings (and sequences of strings) are looked up on the variable or
        chain axis; everything else (ints, slices, masks, Ellipsis) passes
        through unchanged as a positional index.

        Args:
            axis: VAR_AXIS or CHAIN_AXIS (ITER_AXIS keys are positional)
            key: Label, positional index, or a sequence of either

        Returns:
            Index usable on the underlying ndarray
        """
        if axis == ITER_AXIS:
            return key
        if axis == VAR_AXIS:
            pos = self.var_pos()
        else:
            pos = self.chain_pos()

        if isinstance(key, str):
            return self._lookup(pos, key, axis)
        if isinstance(key, (list, tuple)) and any(isinstance(k, str) for k in key):
            return [self._lookup(pos, k, axis) if isinstance(k, str) else k for k in key]
        if isinstance(key, np.ndarray) and key.dtype.kind in ("U", "S", "O"):
            return [self._lookup(pos, str(k), axis) for k in key.tolist()]
        return key

    @staticmethod
    def _lookup(pos: Dict[str, int], label: str, axis: int) -> int:
        if label not in pos:
            raise UnknownVariableError(label, AXIS_NAMES[axis])
        return pos[label]
