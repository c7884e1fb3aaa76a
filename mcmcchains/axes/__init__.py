"""
Axes module: labelled iteration, variable and chain axes.
"""

from mcmcchains.axes.schema import (
    AXIS_NAMES,
    CHAIN_AXIS,
    ITER_AXIS,
    VAR_AXIS,
    ChainAxes,
    IterationRange,
)

__all__ = [
    "AXIS_NAMES",
    "CHAIN_AXIS",
    "ITER_AXIS",
    "VAR_AXIS",
    "ChainAxes",
    "IterationRange",
]
