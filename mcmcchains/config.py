"""
mcmcchains/config.py

Runtime configuration.

Values are looked up at call time, so overrides made with
``config.set(...)`` or ``MCMCCHAINS_*`` environment variables take effect
for every container built afterwards.
"""

from __future__ import annotations

from donfig import Config

config = Config(
    "mcmcchains",
    defaults=[
        {
            "naming": {"parameter_prefix": "Param", "chain_prefix": "Chain"},
            "sections": {"parameters": "parameters", "internals": "internals"},
        }
    ],
)


def parameters_section() -> str:
    """Name of the section that receives ordinary variables."""
    return str(config.get("sections.parameters"))


def internals_section() -> str:
    """Name of the section that receives underscore-marked variables."""
    return str(config.get("sections.internals"))


def default_names(count: int) -> list:
    prefix = config.get("naming.parameter_prefix")
    return [f"{prefix}{i}" for i in range(1, count + 1)]


def default_chain_ids(count: int) -> list:
    prefix = config.get("naming.chain_prefix")
    return [f"{prefix}{i}" for i in range(1, count + 1)]
