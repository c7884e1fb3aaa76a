#!/usr/bin/env python3
"""
mcmcchains: containers for MCMC sample output

Usage:
    # Describe a draws file (.npy, .npz or .json)
    python main.py show --input draws.npy --start 1001 --thin 2

    # One header per section
    python main.py sections --input draws.json --section parameters

    # Run the demo
    python main.py demo

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from mcmcchains import Chains, __version__, cat, header

logger = logging.getLogger("mcmcchains.cli")


def load_chains(
    filepath: str,
    names: Optional[List[str]] = None,
    start: Optional[int] = None,
    thin: Optional[int] = None,
) -> Chains:
    """
    Load draws from disk.

    Supported formats:
      .npy   a (iter, var, chain) array
      .npz   key "value", optional key "names"
      .json  {"value": [...], "names": [...], "name_map": {...},
              "start": 1, "thin": 1, "chain_ids": [...]}

    Command-line names/start/thin override values stored in the file.
    """
    path = Path(filepath)
    payload: Dict[str, Any] = {}
    suffix = path.suffix.lower()

    if suffix == ".npy":
        payload["value"] = np.load(path)
    elif suffix == ".npz":
        with np.load(path) as data:
            payload["value"] = data["value"]
            if "names" in data.files:
                payload["names"] = [str(n) for n in data["names"]]
    elif suffix == ".json":
        with open(path, "r") as f:
            payload = json.load(f)
        payload["value"] = np.array(payload["value"], dtype=object)
    else:
        raise ValueError(f"unsupported draws file type: {path.suffix!r}")

    if names is not None:
        payload["names"] = names
    if start is not None:
        payload["start"] = start
    if thin is not None:
        payload["thin"] = thin

    logger.info("Loaded %s with shape %s", path, np.shape(payload["value"]))
    return Chains(
        payload["value"],
        payload.get("names"),
        payload.get("name_map"),
        start=int(payload.get("start", 1)),
        thin=int(payload.get("thin", 1)),
        chain_ids=payload.get("chain_ids"),
        logevidence=float(payload.get("logevidence", 0.0)),
        info=payload.get("info"),
    )


def parse_names_string(names_str: Optional[str]) -> Optional[List[str]]:
    """Parse a variable name list: 'alpha,beta[1],beta[2]'"""
    if not names_str:
        return None
    return [n.strip() for n in names_str.split(",") if n.strip()]


def print_name_map(chn: Chains) -> None:
    print("Sections:")
    for section, names in chn.name_map.items():
        print(f"  {section}: {', '.join(names) if names else '(empty)'}")


def cmd_show(args):
    """Execute the show command."""
    chn = load_chains(args.input, parse_names_string(args.names), args.start, args.thin)
    print(header(chn), end="")
    print_name_map(chn)
    return 0


def cmd_sections(args):
    """Execute the sections command."""
    chn = load_chains(args.input, parse_names_string(args.names), args.start, args.thin)
    for section, sub in zip(args.section or list(chn.name_map), chn.get_sections(args.section)):
        print(f"[{section}]")
        print(header(sub))
    return 0


def cmd_demo(args):
    """Build synthetic chains and exercise extraction and concatenation."""
    rng = np.random.default_rng(args.seed)
    names = ["sigma", "beta10", "beta2", "beta1", "lp__", "_accept"]

    print("=" * 60)
    print("Demo: two batches of 4 chains, 6 variables")
    print("=" * 60)

    first = Chains(rng.normal(size=(500, len(names), 4)), names, info={"sampler": "demo"})
    second = Chains(rng.normal(size=(500, len(names), 4)), names, start=501)
    print(repr(first))
    print_name_map(first)

    full = cat(1, first, second)
    print("\nAfter stacking iterations:")
    print(header(full), end="")

    params = full.extract("parameters")
    print("\nParameters only:")
    print(header(params), end="")

    pooled = cat(3, params, params)
    print(f"\nAfter stacking chains: size = {pooled.size()}")
    return 0


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=mcmcchains", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    print(f"mcmcchains v{__version__}")
    print("Containers for MCMC sample output")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)

    import scipy
    import donfig

    print("SciPy:", scipy.__version__)
    print("donfig:", getattr(donfig, "__version__", "unknown"))
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="mcmcchains",
        description="Inspect MCMC draws stored as (iteration, variable, chain) arrays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcmcchains show --input draws.npy --names "mu,tau,lp__"
  mcmcchains sections --input draws.json --section parameters --section internals
  mcmcchains demo
  mcmcchains test -v
""",
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcmcchains {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (("show", "Print the header of a draws file"),
                            ("sections", "Print one header per section")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--input", "-i", type=str, required=True, help="Draws file (.npy, .npz, .json)")
        sub.add_argument("--names", type=str, help="Comma separated variable names")
        sub.add_argument("--start", type=int, help="Label of the first iteration")
        sub.add_argument("--thin", type=int, help="Thinning interval")
        if name == "sections":
            sub.add_argument("--section", "-s", action="append", help="Section to extract (repeatable)")

    demo_parser = subparsers.add_parser("demo", help="Run a demonstration")
    demo_parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")

    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "show": cmd_show,
        "sections": cmd_sections,
        "demo": cmd_demo,
        "test": cmd_test,
        "info": cmd_info,
    }
    if args.command is None:
        parser.print_help()
        return 0
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
