"""
Command-line interface for tilefactor.
"""

import argparse
import logging
import sys

import yaml

from tilefactor.arch import PEArray, default_pe_array
from tilefactor.factors import Factors, ResidualFactors, get_divisors
from tilefactor.mapspace import IndexFactorization, ResidualIndexFactorization
from tilefactor.utils import Timer, format_number
from tilefactor.workload import DIMENSION_ID, WorkloadConfig, get_max_working_set_sizes

logger = logging.getLogger(__name__)


def parse_assignment(text: str) -> tuple[int, int]:
    """Parse a POS=VALUE pair."""
    try:
        pos, value = text.split("=", 1)
        return int(pos), int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected POS=VALUE, got '{text}'")


def parse_spatial_dim(text: str) -> tuple[str, int]:
    """Parse a DIM=AXIS pair, e.g. K=0."""
    try:
        dim, axis = text.split("=", 1)
        return dim.upper(), int(axis)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected DIM=AXIS, got '{text}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="tilefactor - Enumerate loop tiling factorizations"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================
    # divisors command
    # =========================================
    div_parser = subparsers.add_parser("divisors", help="List all divisors of N")
    div_parser.add_argument("n", type=int, help="Dimension size")

    # =========================================
    # factors command
    # =========================================
    fac_parser = subparsers.add_parser(
        "factors",
        help="Enumerate ordered factorizations of N"
    )
    fac_parser.add_argument("n", type=int, help="Dimension size")
    fac_parser.add_argument(
        "-k", "--order",
        type=int,
        required=True,
        help="Number of tiling levels"
    )
    fac_parser.add_argument(
        "--given",
        type=parse_assignment,
        action="append",
        default=[],
        help="Fix the factor at a position (POS=VALUE, repeatable)"
    )
    fac_parser.add_argument(
        "--max",
        type=parse_assignment,
        action="append",
        default=[],
        help="Maximum factor at a position (POS=VALUE, repeatable)"
    )
    fac_parser.add_argument(
        "-o", "--output",
        help="Output file for results (YAML format)"
    )

    # =========================================
    # residual command
    # =========================================
    res_parser = subparsers.add_parser(
        "residual",
        help="Enumerate boundary-aware factorizations of N"
    )
    res_parser.add_argument("n", type=int, help="Dimension size")
    res_parser.add_argument(
        "-k", "--order",
        type=int,
        required=True,
        help="Number of tiling levels"
    )
    res_parser.add_argument(
        "--spatial",
        type=parse_assignment,
        action="append",
        default=[],
        help="Spatial level and its capacity (POS=BOUND, repeatable)"
    )
    res_parser.add_argument(
        "--given",
        type=parse_assignment,
        action="append",
        default=[],
        help="Fix the factor at a position (POS=VALUE, repeatable)"
    )
    res_parser.add_argument(
        "-o", "--output",
        help="Output file for results (YAML format)"
    )

    # =========================================
    # info command
    # =========================================
    info_parser = subparsers.add_parser(
        "info",
        help="Display workload information"
    )
    info_parser.add_argument(
        "-w", "--workload",
        required=True,
        help="Path to workload YAML file"
    )

    # =========================================
    # mapspace command
    # =========================================
    map_parser = subparsers.add_parser(
        "mapspace",
        help="Count per-dimension factorizations of a workload"
    )
    map_parser.add_argument(
        "-w", "--workload",
        required=True,
        help="Path to workload YAML file"
    )
    map_parser.add_argument(
        "-l", "--levels",
        type=int,
        required=True,
        help="Number of tiling levels"
    )
    map_parser.add_argument(
        "--residual",
        action="store_true",
        help="Use boundary-aware factorization"
    )
    map_parser.add_argument(
        "-a", "--arch",
        help="Path to architecture YAML file (default: 16x16 PE array)"
    )
    map_parser.add_argument(
        "--spatial-level",
        type=int,
        default=0,
        help="Tiling level mapped onto the PE array (default: 0)"
    )
    map_parser.add_argument(
        "--spatial-dim",
        type=parse_spatial_dim,
        action="append",
        default=[],
        help="Dimension mapped onto a PE array axis (DIM=AXIS, repeatable)"
    )
    map_parser.add_argument(
        "-o", "--output",
        help="Output file for results (YAML format)"
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "divisors": cmd_divisors,
        "factors": cmd_factors,
        "residual": cmd_residual,
        "info": cmd_info,
        "mapspace": cmd_mapspace,
    }
    try:
        return commands[args.command](args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1


def _save(output: str, data: dict):
    with open(output, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    print(f"\nResults saved to: {output}")


def cmd_divisors(args) -> int:
    """Execute divisors command."""
    divisors = get_divisors(args.n)
    print(f"All factors of {args.n}: {', '.join(str(d) for d in divisors)}")
    print(f"Count: {len(divisors)}")
    return 0


def cmd_factors(args) -> int:
    """Execute factors command."""
    timer = Timer()
    timer.start("enumerate")
    factors = Factors(args.n, args.order, dict(args.given))
    if args.max:
        factors.prune_max(dict(args.max))
    timer.stop("enumerate")

    factors.print()
    print(f"Total: {format_number(len(factors))}")
    logger.debug(timer.report())

    if args.output:
        _save(args.output, {
            "n": args.n,
            "order": args.order,
            "given": factors.given,
            "cofactors": [list(c) for c in factors],
        })
    return 0


def cmd_residual(args) -> int:
    """Execute residual command."""
    spatial = dict(args.spatial)
    timer = Timer()
    timer.start("enumerate")
    factors = ResidualFactors(
        args.n,
        args.order,
        spatial_bounds=list(spatial.values()),
        spatial_indices=list(spatial.keys()),
        given=dict(args.given),
    )
    timer.stop("enumerate")

    factors.print()
    print(f"Total: {format_number(len(factors))}")
    logger.debug(timer.report())

    if args.output:
        _save(args.output, {
            "n": args.n,
            "order": args.order,
            "spatial": spatial,
            "given": factors.given,
            "solutions": [
                {"factors": list(f), "residuals": list(r)} for f, r in factors
            ],
        })
    return 0


def cmd_info(args) -> int:
    """Execute info command."""
    workload = WorkloadConfig.from_yaml(args.workload)
    print("Workload Information")
    print("=" * 60)
    print(workload.summary())

    print("\nDivisors:")
    for dim, bound in sorted(workload.bounds.items()):
        print(f"  {dim.name}: {get_divisors(bound)}")

    print("\nMax working set sizes:")
    print(get_max_working_set_sizes(workload.dimension_sizes()))
    return 0


def cmd_mapspace(args) -> int:
    """Execute mapspace command."""
    workload = WorkloadConfig.from_yaml(args.workload)

    if args.residual:
        pe_array = PEArray.from_yaml(args.arch) if args.arch else default_pe_array()
        spatial_dims = {}
        for name, axis in args.spatial_dim:
            if name not in DIMENSION_ID:
                raise ValueError(f"Unknown dimension '{name}'")
            spatial_dims[DIMENSION_ID[name]] = axis
        mapspace = ResidualIndexFactorization(
            workload, args.levels, pe_array, args.spatial_level, spatial_dims
        )
    else:
        mapspace = IndexFactorization(workload, args.levels)

    print(mapspace.pretty_print())

    if args.output:
        _save(args.output, mapspace.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
