"""
mcmcchains: containers for MCMC sample output

Draws are held in a 3-D array indexed by (iteration, variable, chain), with
variables grouped into named sections and kept in natural sort order.

Key components:
- chains: the Chains container, indexing, section extraction, sorting
- concat: concatenation along iterations, variables or chains
- axes: iteration range and labelled axes
- names: name-map normalization and natural ordering
- api: header, discrete-support and link-transform helpers
- config: donfig-backed defaults for names and sections
"""

__version__ = "0.1.0"
__author__ = "mcmcchains developers"

from mcmcchains.axes.schema import ChainAxes, IterationRange
from mcmcchains.chains import Chains
from mcmcchains.concat import cat, cat_chains, cat_iterations, cat_variables, hcat, vcat
from mcmcchains.names.natural import natural_key, natural_sort
from mcmcchains.api.summary import combine, header, indiscretesupport, link
from mcmcchains.config import config

__all__ = [
    # Container
    "Chains",
    "ChainAxes",
    "IterationRange",
    # Concatenation
    "cat",
    "cat_chains",
    "cat_iterations",
    "cat_variables",
    "hcat",
    "vcat",
    # Ordering
    "natural_key",
    "natural_sort",
    # Summaries
    "combine",
    "header",
    "indiscretesupport",
    "link",
    "config",
]
