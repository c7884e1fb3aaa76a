"""
Names module: section name maps and natural ordering of variable names.
"""

from mcmcchains.names.name_map import (
    NameMap,
    collect_section_names,
    merge_name_maps,
    normalize_name_map,
    pairs_to_map,
)
from mcmcchains.names.natural import natural_key, natural_order, natural_sort

__all__ = [
    "NameMap",
    "collect_section_names",
    "merge_name_maps",
    "normalize_name_map",
    "pairs_to_map",
    "natural_key",
    "natural_order",
    "natural_sort",
]
