"""
LONGTRAIL - Main Entry Point
============================
The pipeline: Load -> Compact -> Search

Finds the longest hike from the single gap in the top row of a trail map
to the single gap in the bottom row, never stepping on a tile twice.

Usage:
    # Slippery slopes (one-way), map from a file
    python main.py input.txt

    # Slopes are ordinary path
    python main.py input.txt --mode dry
    python main.py input.txt --part 2

    # Map from stdin, with search statistics
    python main.py --stats < input.txt

    # Graphviz view of the compacted junction graph
    python main.py input.txt --dot | dot -Tsvg > trail.svg

    # Cross-check against the exhaustive solvers
    python main.py input.txt --compare

Exit codes:
    0 success (including "unreachable"), 2 malformed map, 3 too many junctions
"""

import argparse
import logging
import sys
from typing import List, Optional

from longtrail.core.definitions import DEFAULT_MAX_JUNCTIONS
from longtrail.core.errors import CapacityExceededError, MalformedGridError
from longtrail.data.trail_loader import load_trail_file, parse_trail_lines
from longtrail.simulation import (
    GraphCompactor,
    LongestPathSearch,
    SolverComparison,
    SolverOptions,
    TrailGrid,
)
from longtrail.utils.graph_utils import graph_summary, to_dot

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MALFORMED = 2
EXIT_CAPACITY = 3


def load_grid(source: Optional[str]) -> TrailGrid:
    """
    Load a trail map from a file path, or stdin for None / "-".

    Raises:
        MalformedGridError: Invalid map text
        FileNotFoundError: Missing file
    """
    if source is None or source == '-':
        logger.debug("Reading trail map from stdin")
        return TrailGrid(parse_trail_lines(sys.stdin.readlines()))
    return TrailGrid(load_trail_file(source))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='LONGTRAIL - longest scenic hike through a trail map',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        'input', nargs='?', default=None,
        help='Trail map file ("-" or omitted for stdin)'
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        '--mode', '-m', choices=['slippery', 'dry'], default=None,
        help='Slope rules: one-way (slippery) or plain path (dry); default slippery'
    )
    mode_group.add_argument(
        '--part', '-p', type=int, choices=[1, 2], default=None,
        help='Puzzle part alias: 1 = slippery, 2 = dry'
    )
    parser.add_argument(
        '--max-junctions', type=int, default=DEFAULT_MAX_JUNCTIONS,
        help='Width of the visited bit field'
    )
    parser.add_argument(
        '--memoize-bounds', action='store_true',
        help='Cache spanning forest bounds per visited set'
    )
    parser.add_argument(
        '--dot', action='store_true',
        help='Print the junction graph in DOT format instead of solving'
    )
    parser.add_argument(
        '--compare', action='store_true',
        help='Run every solver and print a comparison'
    )
    parser.add_argument(
        '--stats', action='store_true',
        help='Print search diagnostics'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose', '-v', action='store_true',
        help='Debug logging'
    )
    verbosity.add_argument(
        '--quiet', '-q', action='store_true',
        help='Only log warnings and errors'
    )
    return parser


def options_from_args(args: argparse.Namespace) -> SolverOptions:
    overrides = dict(
        max_junctions=args.max_junctions,
        memoize_bounds=args.memoize_bounds,
    )
    if args.part is not None:
        return SolverOptions.for_part(args.part, **overrides)
    return SolverOptions.for_mode(args.mode or 'slippery', **overrides)


def run_pipeline(grid: TrailGrid, options: SolverOptions,
                 dot: bool = False, compare: bool = False, stats: bool = False) -> int:
    """
    Compact and solve one trail map, printing the result to stdout.

    Returns:
        Process exit code
    """
    logger.info(f"[STEP 1] Compacting {grid.height}x{grid.width} trail map "
                f"(slippery={options.slippery})")
    graph = GraphCompactor(grid, slippery=options.slippery,
                           max_junctions=options.max_junctions).compact()
    logger.debug(f"Graph summary: {graph_summary(graph)}")

    if dot:
        print(to_dot(graph))
        return EXIT_OK

    if compare:
        comparison = SolverComparison(graph, grid=grid, options=options)
        print(SolverComparison.format_table(comparison.compare_all()))
        return EXIT_OK

    logger.info("[STEP 2] Searching for the longest trail...")
    result = LongestPathSearch(graph, options).solve()
    print(result)  # User-facing output
    if stats:
        print(result.diagnostics.summary())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    options = options_from_args(args)
    try:
        grid = load_grid(args.input)
        return run_pipeline(grid, options, dot=args.dot,
                            compare=args.compare, stats=args.stats)
    except MalformedGridError as e:
        logger.error(f"Malformed trail map: {e}")
        return EXIT_MALFORMED
    except CapacityExceededError as e:
        logger.error(f"Capacity exceeded: {e}")
        return EXIT_CAPACITY


if __name__ == "__main__":
    sys.exit(main())
