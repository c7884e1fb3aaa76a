"""
mcmcchains/concat.py

Concatenation of Chains along one of the three axes.

  dim 1 ("iter"):  append later draws of the same variables and chains
  dim 2 ("var"):   add new variables sampled over the same iterations
  dim 3 ("chain"): add independent chains of the same variables

Inputs are validated before any array is touched and are never modified.
The result goes through the Chains constructor, so name-map completion and
natural sorting run again.
"""

from __future__ import annotations

import logging
from typing import Dict, Union

import numpy as np

from mcmcchains.chains import Chains
from mcmcchains.errors import (
    ChainsMismatchError,
    DuplicateNamesError,
    InvalidDimensionError,
    NamesMismatchError,
    NoncontiguousIterationsError,
    RangeMismatchError,
    ThinningMismatchError,
)
from mcmcchains.names.name_map import merge_name_maps

logger = logging.getLogger(__name__)

DIM_ALIASES: Dict[str, int] = {"iter": 1, "var": 2, "chain": 3}


def cat(dim: Union[int, str], c1: Chains, *args: Chains) -> Chains:
    """
    Concatenate chains along `dim`.

    Args:
        dim: 1/"iter", 2/"var" or 3/"chain"
        c1: First container
        args: Further containers, in order

    Returns:
        New Chains holding every input
    """
    if isinstance(dim, (bool, np.bool_)):
        raise InvalidDimensionError(f"cannot concatenate along dimension {dim!r}")
    d = DIM_ALIASES.get(dim, dim) if isinstance(dim, str) else dim
    if d == 1:
        return cat_iterations(c1, *args)
    if d == 2:
        return cat_variables(c1, *args)
    if d == 3:
        return cat_chains(c1, *args)
    raise InvalidDimensionError(f"cannot concatenate along dimension {dim!r}")


def vcat(c1: Chains, *args: Chains) -> Chains:
    return cat(1, c1, *args)


def hcat(c1: Chains, *args: Chains) -> Chains:
    return cat(2, c1, *args)


def cat_iterations(c1: Chains, *args: Chains) -> Chains:
    """
    Stack draws: each input must continue where the previous one ended,
    with the same thinning, variable names and chain ids.
    """
    rng = c1.axes.iterations
    for c in args:
        other = c.axes.iterations
        if other.thin != rng.thin:
            raise ThinningMismatchError(other.thin, rng.thin)
        if not rng.contiguous_with(other):
            raise NoncontiguousIterationsError(other.first, rng.last, rng.thin)
        rng = rng.extend(other)

    names = c1.variable_names()
    for c in args:
        if c.variable_names() != names:
            raise NamesMismatchError(list(c.variable_names()), list(names))

    chains = c1.chain_ids()
    for c in args:
        if c.chain_ids() != chains:
            raise ChainsMismatchError(list(c.chain_ids()), list(chains))

    value = np.concatenate([c1.value] + [c.value for c in args], axis=0)
    logger.debug("cat_iterations: %d inputs -> iter=%s", len(args) + 1, rng)
    return Chains(
        value,
        names,
        c1.name_map,
        start=rng.first,
        thin=rng.thin,
        chain_ids=chains,
        info=c1.info,
    )


def cat_variables(c1: Chains, *args: Chains) -> Chains:
    """
    Stack variables: same iteration range and chain ids, and no variable
    name may appear in more than one input.
    """
    rng = c1.axes.iterations
    for c in args:
        if c.axes.iterations != rng:
            raise RangeMismatchError(str(c.axes.iterations), str(rng))

    names = list(c1.variable_names())
    seen = set(names)
    for c in args:
        dups = [n for n in c.variable_names() if n in seen]
        if dups:
            raise DuplicateNamesError(f"non-unique chain names: {dups}")
        names.extend(c.variable_names())
        seen.update(c.variable_names())

    chains = c1.chain_ids()
    for c in args:
        if c.chain_ids() != chains:
            raise ChainsMismatchError(list(c.chain_ids()), list(chains))

    value = np.concatenate([c1.value] + [c.value for c in args], axis=1)
    name_map = merge_name_maps([c1.name_map] + [c.name_map for c in args])
    logger.debug("cat_variables: %d inputs -> %d variables", len(args) + 1, len(names))
    return Chains(
        value,
        names,
        name_map,
        start=rng.first,
        thin=rng.thin,
        chain_ids=chains,
        info=c1.info,
    )


def cat_chains(c1: Chains, *args: Chains) -> Chains:
    """
    Stack chains: same iteration range and variable names.

    Chain ids of the result are renumbered from the configured prefix, so
    stacking a container with itself yields distinct ids.
    """
    rng = c1.axes.iterations
    for c in args:
        if c.axes.iterations != rng:
            raise RangeMismatchError(str(c.axes.iterations), str(rng))

    names = c1.variable_names()
    for c in args:
        if c.variable_names() != names:
            raise NamesMismatchError(list(c.variable_names()), list(names))

    value = np.concatenate([c1.value] + [c.value for c in args], axis=2)
    logger.debug("cat_chains: %d inputs -> %d chains", len(args) + 1, value.shape[2])
    return Chains(
        value,
        names,
        c1.name_map,
        start=rng.first,
        thin=rng.thin,
        info=c1.info,
    )
