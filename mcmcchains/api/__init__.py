"""
API module: read-only summaries over a Chains container.
"""

from mcmcchains.api.summary import combine, header, indiscretesupport, link

__all__ = ["combine", "header", "indiscretesupport", "link"]
