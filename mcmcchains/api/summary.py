"""
mcmcchains/api/summary.py

Read-only helpers built on the public Chains accessors.

None of these functions modify the container they are given.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from scipy.special import logit

from mcmcchains.chains import Chains


def header(c: Chains) -> str:
    """
    Human-readable description of the axes.

    Fields, in order: iteration range, thinning interval, chain ids,
    samples per chain, parameter names.
    """
    return (
        f"Iterations        = {c.first()}:{c.last()}\n"
        f"Thinning interval = {c.step()}\n"
        f"Chains            = {', '.join(map(str, c.chain_ids()))}\n"
        f"Samples per chain = {len(c.iterations())}\n"
        f"Parameters        = {', '.join(map(str, c.variable_names()))}\n"
    )


def indiscretesupport(c: Chains, bounds: Tuple[float, float] = (0, np.inf)) -> np.ndarray:
    """
    Flag variables whose draws are all integers within `bounds`.

    Args:
        c: Chains to inspect
        bounds: Inclusive (lower, upper) limits

    Returns:
        Boolean array with one entry per variable, or an empty array when
        the container holds no iterations
    """
    nrows, nvars, _ = c.value.shape
    if nrows == 0:
        return np.zeros(0, dtype=bool)

    lo, hi = bounds
    x = c.value
    # NaN fails every comparison, so a missing draw rules a variable out.
    with np.errstate(invalid="ignore"):
        ok = np.isfinite(x) & (x == np.round(x)) & (x >= lo) & (x <= hi)
    return ok.all(axis=(0, 2)).reshape(nvars)


def link(c: Chains) -> np.ndarray:
    """
    Copy of the draws mapped to an unbounded scale.

    Variables with all draws in (0, 1) get the logit transform, other
    strictly positive variables get the log; the rest are copied as is.
    """
    cc = c.value.copy()
    for j in range(cc.shape[1]):
        x = cc[:, j, :]
        if x.size == 0 or not np.min(x) > 0.0:
            continue
        if np.max(x) < 1.0:
            cc[:, j, :] = logit(x)
        else:
            cc[:, j, :] = np.log(x)
    return cc


def combine(c: Chains) -> np.ndarray:
    """
    Pool all chains into a (n_iterations * n_chains, n_variables) matrix.

    Rows run over chains fastest: iteration 1 of every chain, then
    iteration 2 of every chain, and so on.
    """
    n, p, m = c.value.shape
    return np.transpose(c.value, (0, 2, 1)).reshape(n * m, p).astype(np.float64)
