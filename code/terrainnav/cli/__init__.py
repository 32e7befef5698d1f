"""
Command Line Interface for terrain navigation.
Builds a grid graph from a heightmap and delegates to NavigationManager.
"""

import argparse
import logging
import os
import sys
import time
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

from ..cfg import NavigationConfig
from ..core import NavigationManager
from ..utils import heightmap_to_vertices, load_heightmap, parse_cell, path_cost, save_path_to_csv


def create_parser():
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        description="Terrain navigation graph builder and path solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
        %(prog)s solve --heightmap terrain.csv --start 0,0 --end 9,9 --override search.heuristic=octile
        %(prog)s inspect --heightmap terrain.npy --override graph.allowed_angle=0.2
        %(prog)s benchmark --heightmap terrain.csv --queries 500 --jobs 4
        """
    )
    parser.add_argument('--config', help='YAML config merged over the packaged defaults')
    parser.add_argument('--log-dir', help='Log directory (defaults to config log_dir)')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Command')

    def add_common(sub):
        sub.add_argument('--heightmap', required=True, help='Heightmap file (.npy, .csv or whitespace text)')
        sub.add_argument('--spacing', type=float, default=1.0, help='World distance between grid cells')
        sub.add_argument('--override', action='append',
                         help='Override config parameter using dot notation (e.g., graph.allowed_angle=0.2)')

    solve_parser = subparsers.add_parser('solve', help='Find a path between two grid cells')
    add_common(solve_parser)
    solve_parser.add_argument('--start', required=True, help='Start cell as col,row')
    solve_parser.add_argument('--end', required=True, help='End cell as col,row')
    solve_parser.add_argument('--csv', help='Write the path to this CSV file')
    solve_parser.add_argument('--plot', help='Write a plot of the graph and path to this image file')

    inspect_parser = subparsers.add_parser('inspect', help='Print graph statistics')
    add_common(inspect_parser)

    bench_parser = subparsers.add_parser('benchmark', help='Run random path queries')
    add_common(bench_parser)
    bench_parser.add_argument('--queries', type=int, default=100, help='Number of random queries')
    bench_parser.add_argument('--jobs', type=int, default=1, help='Parallel worker threads')
    bench_parser.add_argument('--seed', type=int, help='Random seed for query selection')

    return parser


def parse_overrides(override_args) -> Dict[str, Any]:
    """Parse CLI override arguments into parameter dictionary"""
    overrides = {}

    if not override_args:
        return overrides

    for override in override_args:
        if '=' not in override:
            continue

        key, value = override.split('=', 1)

        try:
            if value.lower() in ('true', 'false'):
                value = value.lower() == 'true'
            elif value.lower() in ('none', 'null'):
                value = None
            elif '.' in value:
                value = float(value)
            else:
                value = int(value)
        except ValueError:
            pass  # Keep as string

        overrides[key] = value

    return overrides


def setup_logging(log_dir: str, verbose: bool = False):
    """Setup logging to a file in log_dir and to stdout."""
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, "navigation.log")

    # Clear any existing handlers
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_manager(args, config: NavigationConfig) -> NavigationManager:
    """Generate the grid graph described by the heightmap argument"""
    heights = load_heightmap(args.heightmap)
    height, width = heights.shape
    manager = NavigationManager.from_config(config)
    manager.generate_nodes(heightmap_to_vertices(heights, args.spacing), width, height)
    return manager


def run_solve(args, manager: NavigationManager) -> int:
    start_col, start_row = parse_cell(args.start)
    end_col, end_row = parse_cell(args.end)
    start = manager.graph.node_at(start_col, start_row)
    end = manager.graph.node_at(end_col, end_row)

    path = manager.generate_path(start, end)
    if not path:
        print(f"No path found from {args.start} to {args.end}")
        return 1

    print(f"Path found: {len(path)} nodes, cost {path_cost(path):.3f}")
    print(" -> ".join(str(node.grid_coordinate) for node in path))

    if args.csv:
        save_path_to_csv(path, args.csv)
    if args.plot:
        from ..analysis import plot_navigation_graph
        plot_navigation_graph(manager.graph, path, out_file=args.plot)
    return 0


def run_inspect(args, manager: NavigationManager) -> int:
    graph = manager.graph
    components = graph.connected_components()
    print(f"Grid: {graph.width}x{graph.height}")
    print(f"Nodes: {len(graph.all_nodes)} ({len(graph.traversable_nodes)} traversable)")
    print(f"Connections: {graph.edge_count()}")
    print(f"Components: {len(components)} (largest {len(components[0]) if components else 0} nodes)")
    return 0


def _timed_query(solver, start, end) -> Dict[str, Any]:
    began = time.perf_counter()
    path = solver.find_path(start, end)
    return {
        'found': bool(path),
        'nodes': len(path),
        'cost': path_cost(path) if path else np.nan,
        'seconds': time.perf_counter() - began
    }


def run_benchmark(args, manager: NavigationManager) -> int:
    nodes = manager.graph.traversable_nodes
    if not nodes:
        print("No traversable nodes to benchmark")
        return 1

    rng = np.random.default_rng(args.seed)
    indices = rng.integers(0, len(nodes), size=(args.queries, 2))
    pairs = [(nodes[int(a)], nodes[int(b)]) for a, b in indices]

    results: List[Dict[str, Any]] = Parallel(n_jobs=args.jobs, prefer='threads')(
        delayed(_timed_query)(manager.solver, start, end) for start, end in tqdm(pairs, desc="Queries")
    )

    df = pd.DataFrame(results)
    print(f"Solved {int(df['found'].sum())}/{len(df)} queries")
    print(df[['nodes', 'cost', 'seconds']].describe().to_string())
    return 0


COMMANDS = {
    'solve': run_solve,
    'inspect': run_inspect,
    'benchmark': run_benchmark,
}


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        overrides = parse_overrides(getattr(args, 'override', None))
        config = NavigationConfig.from_params(args.config, **overrides)
        setup_logging(args.log_dir or config.log_dir, args.verbose)

        manager = build_manager(args, config)
        return COMMANDS[args.command](args, manager)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
