"""
Example: grouping variables into sections.

Underscore-marked names land in "internals" unless a section claims them.
"""

import numpy as np
from mcmcchains import Chains, header


def main():
    rng = np.random.default_rng(42)
    names = ["theta[10]", "theta[2]", "theta[1]", "sigma", "lp__", "_divergent"]
    draws = rng.normal(size=(200, len(names), 2))

    chn = Chains(draws, names, [("likelihood", ["sigma"]), ("parameters", [])])
    print(header(chn))
    for section, members in chn.name_map.items():
        print(f"{section}: {members}")

    for sub in chn.get_sections():
        print()
        print(header(sub))


if __name__ == "__main__":
    main()
