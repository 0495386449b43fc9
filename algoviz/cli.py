"""CLI entry point for the algorithm visualizer."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from algoviz import collection
from algoviz.algorithms import GRAPH, SEARCHING, REGISTRY, require_algorithm
from algoviz.config import Config, load_config
from algoviz.engine import MIN_DELAY_MS, PlaybackState, Recorder, Stepper
from algoviz.graph import Graph

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="algoviz", description="Algorithm Visualizer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-c", "--config", type=Path, default=None, help="YAML config file")
    sub = parser.add_subparsers(dest="command")

    # serve command
    serve_parser = sub.add_parser("serve", help="Start the web visualizer")
    serve_parser.add_argument("--host", default=None, help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default from config)")
    serve_parser.add_argument("--debug", action="store_true", help="Flask debug mode")

    # run command
    run_parser = sub.add_parser("run", help="Run one algorithm headlessly and print its narration")
    run_parser.add_argument("algorithm", choices=sorted(REGISTRY), help="Algorithm key")
    run_parser.add_argument("--values", default=None, help="Comma-separated array, e.g. '5,3,8,1'")
    run_parser.add_argument("--size", type=int, default=None, help="Random array size")
    run_parser.add_argument("--target", default=None, help="Search target")
    run_parser.add_argument("--nodes", type=int, default=None, help="Random graph node count")
    run_parser.add_argument("--start", default=None, help="Traversal start node (default: first node)")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed for arrays / graphs")
    run_parser.add_argument(
        "--delay", type=int, default=MIN_DELAY_MS, help="Milliseconds between printed steps (clamped to 10-2000)",
    )
    run_parser.add_argument("--json", action="store_true", help="Print the recorded run as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        serve(config, host=args.host, port=args.port, debug=args.debug)
    elif args.command == "run":
        try:
            run(config, args)
        except ValueError as e:
            parser.error(str(e))
    else:
        parser.print_help()


def serve(config: Config, host: Optional[str] = None, port: Optional[int] = None, debug: bool = False) -> None:
    from algoviz.app import create_app

    app = create_app(config)
    host = host or config.server.host
    port = port or config.server.port
    logger.info("Serving on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=debug or config.server.debug, threaded=True)


def run(config: Config, args: argparse.Namespace) -> None:
    info = require_algorithm(args.algorithm)
    seed = args.seed if args.seed is not None else config.seed

    values: List[int] = []
    graph: Optional[Graph] = None
    target: Optional[int] = None
    start: Optional[str] = None

    if info.family == GRAPH:
        cfg = config.graph
        nodes = collection.clamp(args.nodes or cfg.default_nodes, cfg.min_nodes, cfg.max_nodes)
        graph = Graph.generate_random(
            num_nodes=nodes,
            weight_range=(cfg.min_weight, cfg.max_weight),
            extra_link_probability=cfg.extra_link_probability,
            seed=seed,
            center=(cfg.center_x, cfg.center_y),
            radius=cfg.radius,
        )
        start = args.start or graph.node_ids()[0]
    elif info.family == SEARCHING:
        cfg = config.searching
        target = collection.parse_target(args.target)
        if target is None:
            raise ValueError(f"{info.label} needs a numeric --target")
        if args.values:
            values = collection.parse_custom_array(args.values)
            if not collection.is_sorted(values):
                logger.info("Sorting --values for %s", info.label)
                values = sorted(values)
        else:
            values = collection.random_sorted_array(args.size or cfg.size, cfg.min_value, cfg.max_value, seed=seed)
    else:
        cfg = config.sorting
        if args.values:
            values = collection.parse_custom_array(args.values)
        else:
            size = collection.clamp(args.size or cfg.default_size, cfg.min_size, cfg.max_size)
            values = collection.random_array(size, cfg.min_value, cfg.max_value, seed=seed)

    if args.json:
        rec = Recorder()
        rec.start(info.key, values=values, target=target, graph=graph, start=start)
        rec.run_to_completion()
        json.dump(rec.export(), sys.stdout, indent=2, allow_nan=False)
        print()
        return

    steps = info.steps(values=values, target=target, graph=graph, start=start)
    print(f"{info.label}  ({info.complexity_time} time, {info.complexity_space} space)")
    if graph is not None:
        for edge in graph.edges.values():
            print(f"  {edge.source} -- {edge.target}  (weight {edge.weight})")
        print(f"Start: {start}")
        reachable = set(graph.reachable_from(start))
        unreachable = [nid for nid in graph.node_ids() if nid not in reachable]
        if unreachable:
            print(f"Unreachable from {start}: {', '.join(unreachable)}")
    else:
        print(f"Input: {values}")
        if target is not None:
            print(f"Target: {target}")

    state = PlaybackState(values=values, graph=graph, start_node=start)
    driver = Stepper(state, on_step=lambda step: print(f"[{step.step_number:4d}] {step.explanation}"))
    driver.start(steps, args.delay, background=False)

    summary = driver.summary
    print()
    print(f"Result: {summary['result']}")
    if graph is None:
        print(f"Final: {state.values}")
    else:
        print(f"Visited: {' → '.join(summary['visited'])}")
    for name, count in summary["counters"].items():
        if count:
            print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
