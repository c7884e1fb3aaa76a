"""
mcmcchains/chains.py

Chains: MCMC draws stored as a 3-D array over (iter, var, chain).

Key operations:
  - construction: normalize the name map, label the axes, sort variables
  - indexing:     c[var] for one projection, c[i, j, k] for full indexing
  - extract:      new Chains restricted to one or more sections
  - sort:         natural ordering of the variable axis

Design constraints:
  - Axes are never changed in place; derived containers are new objects.
  - Only value elements are writable, through c[...] = v.
  - After construction the variable axis is in natural order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from mcmcchains.axes.schema import CHAIN_AXIS, ITER_AXIS, VAR_AXIS, ChainAxes, IterationRange
from mcmcchains.config import default_chain_ids, default_names
from mcmcchains.errors import ChainsError, ShapeError
from mcmcchains.names.name_map import (
    NameMap,
    NameMapLike,
    as_section_list,
    check_names_present,
    collect_section_names,
    normalize_name_map,
    restrict_name_map,
)
from mcmcchains.names.natural import natural_order

logger = logging.getLogger(__name__)


def _as_value_array(values: Any) -> np.ndarray:
    """
    Copy `values` into a floating point array with NaN for missing draws.
    """
    arr = np.asarray(values)
    if arr.dtype == object:
        arr = np.vectorize(lambda x: np.nan if x is None else x, otypes=[np.float64])(arr)
    if arr.dtype.kind not in "biuf":
        raise ChainsError(f"Chains values must be real numbers, got dtype {arr.dtype}")
    if arr.ndim != 3:
        raise ShapeError(f"Chains values must be 3-D (iter, var, chain), got shape {arr.shape}")
    if np.issubdtype(arr.dtype, np.floating):
        return arr.copy()
    return arr.astype(np.float64)


def _is_sequence(key: Any) -> bool:
    if isinstance(key, np.ndarray):
        return key.ndim > 0
    return isinstance(key, (list, tuple, range))


class Chains:
    """
    Container for MCMC output.

    Attributes:
        value: ndarray shaped (n_iterations, n_variables, n_chains)
        axes: Iteration, variable and chain labels
        logevidence: Log model evidence (0.0 unless supplied)
        name_map: Section -> variable names
        info: Free-form metadata, carried through derived containers
    """

    def __init__(
        self,
        values: Any,
        names: Optional[Sequence[str]] = None,
        name_map: NameMapLike = None,
        *,
        start: int = 1,
        thin: int = 1,
        chain_ids: Optional[Sequence[str]] = None,
        logevidence: float = 0.0,
        info: Optional[Mapping[str, Any]] = None,
    ):
        value = _as_value_array(values)
        n, p, m = value.shape

        names = default_names(p) if names is None else [str(v) for v in names]
        chain_ids = default_chain_ids(m) if chain_ids is None else [str(c) for c in chain_ids]
        if len(names) != p:
            raise ShapeError(f"got {len(names)} variable names for {p} variables")
        if len(chain_ids) != m:
            raise ShapeError(f"got {len(chain_ids)} chain ids for {m} chains")

        nm = normalize_name_map(names, name_map)
        axes = ChainAxes(IterationRange(start, thin, n), tuple(names), tuple(chain_ids))
        axes.check_shape(value.shape)

        perm = natural_order(axes.names)
        value = value[:, perm, :]
        axes = axes.with_names([axes.names[i] for i in perm])

        self._init_parts(value, axes, float(logevidence), nm, dict(info or {}))
        logger.debug(
            "built Chains: iter=%s, %d variables, %d chains, sections=%s",
            axes.iterations, p, m, list(nm),
        )

    def _init_parts(
        self,
        value: np.ndarray,
        axes: ChainAxes,
        logevidence: float,
        name_map: NameMap,
        info: Dict[str, Any],
    ) -> None:
        axes.check_shape(value.shape)
        self._value = value
        self._axes = axes
        self._logevidence = logevidence
        self._name_map = name_map
        self._info = info

    @classmethod
    def _from_parts(
        cls,
        value: np.ndarray,
        axes: ChainAxes,
        logevidence: float,
        name_map: NameMap,
        info: Dict[str, Any],
    ) -> "Chains":
        """Build without normalizing or sorting (used by derived containers)."""
        obj = cls.__new__(cls)
        obj._init_parts(value, axes, logevidence, name_map, info)
        return obj

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def value(self) -> np.ndarray:
        return self._value

    @property
    def axes(self) -> ChainAxes:
        return self._axes

    @property
    def logevidence(self) -> float:
        return self._logevidence

    @property
    def name_map(self) -> NameMap:
        """Copy of the section -> names mapping."""
        return {k: list(v) for k, v in self._name_map.items()}

    @property
    def info(self) -> Dict[str, Any]:
        return self._info

    @property
    def n_iterations(self) -> int:
        return len(self._axes.iterations)

    def iterations(self) -> range:
        return self._axes.iterations.as_range()

    def variable_names(self) -> Tuple[str, ...]:
        return self._axes.names

    def chain_ids(self) -> Tuple[str, ...]:
        return self._axes.chain_ids

    def keys(self) -> Tuple[str, ...]:
        return self.variable_names()

    def first(self) -> int:
        return self._axes.iterations.first

    def last(self) -> int:
        return self._axes.iterations.last

    def step(self) -> int:
        return self._axes.iterations.step

    def size(self, dim: Optional[int] = None):
        """
        (last iteration label, n_variables, n_chains), or one entry of it.

        The first entry is the label of the final draw, not the number of
        stored draws; the two differ whenever start != 1 or thin != 1.
        """
        _, p, m = self._value.shape
        dims = (self.last(), p, m)
        if dim is None:
            return dims
        return dims[dim]

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _index(self, key: Any) -> Tuple[Any, ...]:
        """
        Resolve a user key into a positional (iter, var, chain) index.

        A non-tuple key selects variables across all iterations and chains.
        A tuple is applied axis by axis; missing trailing positions mean all.
        """
        if not isinstance(key, tuple):
            return (slice(None), self._axes.resolve(VAR_AXIS, key), slice(None))
        if len(key) > 3:
            raise IndexError(f"Chains takes at most 3 indices, got {len(key)}")
        full = tuple(key) + (slice(None),) * (3 - len(key))
        out = []
        for axis, k in enumerate(full):
            if k is Ellipsis:
                k = slice(None)
            out.append(self._axes.resolve(axis, k))
        return tuple(out)

    def __getitem__(self, key: Any) -> np.ndarray:
        index = self._index(key)
        out = self._value
        # Last axis first, so scalar keys never shift the axes still to index.
        for axis in (CHAIN_AXIS, VAR_AXIS, ITER_AXIS):
            k = index[axis]
            if isinstance(k, slice) and k == slice(None):
                continue
            out = out[(slice(None),) * axis + (k,)]
        return out

    def __setitem__(self, key: Any, v: Any) -> None:
        index = self._index(key)
        if not any(_is_sequence(k) for k in index):
            self._value[index] = v
            return

        # Write the outer product of the selections, with `v` laid out as
        # __getitem__ returns it for the same key.
        grids = [np.atleast_1d(np.arange(size)[k]) for size, k in zip(self._value.shape, index)]
        full_shape = tuple(len(g) for g in grids)
        kept_shape = tuple(len(g) for g, k in zip(grids, index) if _is_sequence(k) or isinstance(k, slice))
        v = np.broadcast_to(np.asarray(v), kept_shape).reshape(full_shape)
        self._value[np.ix_(*grids)] = v

    # ------------------------------------------------------------------
    # Derived containers
    # ------------------------------------------------------------------

    def sort(self) -> "Chains":
        """
        New Chains with the variable axis in natural order.

        Only the variable axis and the matching value slices move.
        """
        perm = natural_order(self._axes.names)
        axes = self._axes.with_names([self._axes.names[i] for i in perm])
        if perm != list(range(len(perm))):
            logger.debug("sort: reordered %d variables", len(perm))
        return Chains._from_parts(
            self._value[:, perm, :],
            axes,
            self._logevidence,
            self.name_map,
            dict(self._info),
        )

    def extract(self, sections: Any, sorted: bool = True) -> "Chains":
        """
        New Chains holding only the variables of the requested sections.

        Args:
            sections: Section identifier or sequence of identifiers
            sorted: Re-sort the variable axis naturally (default True);
                    False keeps the section listing order

        Returns:
            The same object for an empty request, otherwise a new Chains
            whose name map has exactly the requested sections
        """
        requested = as_section_list(sections)
        if not requested:
            return self

        names = collect_section_names(self._name_map, requested)
        check_names_present(names, self._axes.names)
        # A variable listed by two requested sections appears once.
        names = list(dict.fromkeys(names))

        pos = self._axes.var_pos()
        value = self._value[:, [pos[n] for n in names], :]
        chn = Chains._from_parts(
            value,
            self._axes.with_names(names),
            self._logevidence,
            restrict_name_map(self._name_map, requested),
            dict(self._info),
        )
        logger.debug("extract: sections=%s -> %d variables", requested, len(names))
        return chn.sort() if sorted else chn

    def get_sections(self, sections: Any = None) -> List["Chains"]:
        """One new Chains per requested section (every section by default)."""
        requested = as_section_list(sections)
        if not requested:
            requested = list(self._name_map)
        return [self.extract(s) for s in requested]

    def copy(self) -> "Chains":
        """Independent copy whose value array may be written freely."""
        return Chains._from_parts(
            self._value.copy(),
            self._axes,
            self._logevidence,
            self.name_map,
            dict(self._info),
        )

    def __repr__(self) -> str:
        from mcmcchains.api.summary import header

        return f'Object of type "{type(self).__name__}"\n\n{header(self)}'
