"""
mcmcchains/names/name_map.py

Section bookkeeping: which variables belong to which named group.

A name map is a plain Dict[str, List[str]] from section identifier to the
variable names in that section. The parameters section always exists.
Variables that no section claims are routed automatically:
  - names starting or ending with "_" go to the internals section
  - everything else goes to the parameters section
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from mcmcchains.config import internals_section, parameters_section
from mcmcchains.errors import UnknownSectionError, UnknownVariableError

logger = logging.getLogger(__name__)

NameMap = Dict[str, List[str]]
NameMapLike = Union[Mapping[str, Iterable[str]], Sequence[Tuple[str, Iterable[str]]], None]


def pairs_to_map(pairs: Iterable[Tuple[str, Iterable[str]]]) -> NameMap:
    """
    Convert a sequence of (section, names) pairs into a name map.

    A section listed twice keeps its last entry.
    """
    out: NameMap = {}
    for section, names in pairs:
        out[str(section)] = [str(n) for n in names]
    return out


def copy_name_map(name_map: NameMapLike) -> NameMap:
    """
    Fresh name map from any accepted input form.

    Lists are copied, so later normalization never touches the caller's
    object. None yields an empty map.
    """
    if name_map is None:
        return {}
    if isinstance(name_map, Mapping):
        return {str(k): [str(n) for n in v] for k, v in name_map.items()}
    return pairs_to_map(name_map)


def is_internal(name: str) -> bool:
    return name.startswith("_") or name.endswith("_")


def normalize_name_map(names: Sequence[str], name_map: NameMapLike = None) -> NameMap:
    """
    Complete a caller-supplied name map for the given variable names.

    Args:
        names: Every variable name on the var axis
        name_map: Mapping, sequence of (section, names) pairs, or None

    Returns:
        New name map containing the parameters section, in which every
        name is listed under at least one section
    """
    nm = copy_name_map(name_map)
    params = parameters_section()

    # A single section claims every variable.
    if len(nm) == 1:
        only = next(iter(nm))
        nm[only] = list(names)
        nm.setdefault(params, [])
        logger.debug("name map: single section %r claims %d names", only, len(names))
        return nm

    nm.setdefault(params, [])

    assigned = set()
    for listed in nm.values():
        assigned.update(listed)

    internals = internals_section()
    for name in names:
        if name in assigned:
            continue
        if is_internal(name):
            nm.setdefault(internals, []).append(name)
        else:
            nm[params].append(name)
        assigned.add(name)

    logger.debug(
        "name map: %s",
        ", ".join(f"{k}={len(v)}" for k, v in nm.items()),
    )
    return nm


def as_section_list(sections: Any) -> List[str]:
    """Accept a single identifier or a sequence of them."""
    if sections is None:
        return []
    if isinstance(sections, str):
        return [sections]
    return [str(s) for s in sections]


def collect_section_names(name_map: Mapping[str, Sequence[str]], sections: Sequence[str]) -> List[str]:
    """
    Concatenate the names of the requested sections in the listed order.

    Duplicates are kept. Raises UnknownSectionError for a missing section.
    """
    out: List[str] = []
    for s in sections:
        if s not in name_map:
            raise UnknownSectionError(s, sorted(name_map))
        out.extend(name_map[s])
    return out


def check_names_present(requested: Iterable[str], available: Iterable[str]) -> None:
    avail = set(available)
    for name in requested:
        if name not in avail:
            raise UnknownVariableError(name, "var")


def merge_name_maps(maps: Iterable[Mapping[str, Sequence[str]]]) -> NameMap:
    """
    Union of several name maps, section by section, first-seen order.
    """
    out: NameMap = {}
    for nm in maps:
        for section, names in nm.items():
            dest = out.setdefault(section, [])
            for n in names:
                if n not in dest:
                    dest.append(n)
    return out


def restrict_name_map(name_map: Mapping[str, Sequence[str]], sections: Sequence[str]) -> NameMap:
    return {s: list(name_map[s]) for s in sections}
