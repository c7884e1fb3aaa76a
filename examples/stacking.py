"""
Example: combining runs along iterations, variables and chains.
"""

import numpy as np
from mcmcchains import Chains, cat, hcat, vcat
from mcmcchains.errors import ThinningMismatchError


def main():
    rng = np.random.default_rng(7)

    warm = Chains(rng.normal(size=(100, 2, 3)), ["a", "b"])
    more = Chains(rng.normal(size=(100, 2, 3)), ["a", "b"], start=101)
    longer = vcat(warm, more)
    print("iterations:", longer.first(), "to", longer.last(), "size", longer.size())

    extra = Chains(rng.normal(size=(200, 1, 3)), ["c"])
    wider = hcat(longer, extra)
    print("variables:", wider.variable_names())

    doubled = cat(3, wider, wider)
    print("chains:", doubled.chain_ids())

    thinned = Chains(rng.normal(size=(50, 2, 3)), ["a", "b"], start=201, thin=2)
    try:
        vcat(longer, thinned)
    except ThinningMismatchError as e:
        print("rejected:", e)


if __name__ == "__main__":
    main()
