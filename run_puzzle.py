#!/usr/bin/env python3
"""Entry point for generating Bridges puzzles from the command line.

Generates (or loads from cache) one puzzle, validates its solution, prints
the board, and optionally writes the puzzle as JSON.

Usage:
    python run_puzzle.py --difficulty medium --seed 7
    python run_puzzle.py --config config.json --output puzzle.json
    python run_puzzle.py --difficulty hard --show-solution --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from hashi.config import (
    Difficulty,
    PuzzleConfig,
    config_from_json,
    full_config_hash,
    puzzle_config_hash,
)
from hashi.generator import (
    generate_from_config,
    generate_or_load_puzzle,
    puzzle_to_dict,
    validate_puzzle,
)
from hashi.puzzle import Puzzle

log = logging.getLogger(__name__)


def render_board(puzzle: Puzzle, show_solution: bool = False) -> str:
    """Text board: required degrees at nodes, '.' on empty cells.

    With show_solution, bridges are drawn between nodes: '-' / '=' for
    single / double horizontal, '|' / 'H' for vertical.
    """
    size = puzzle.grid_size
    # Doubled resolution so bridges fit between cells
    canvas = [[" "] * (2 * size - 1) for _ in range(2 * size - 1)]
    for y in range(size):
        for x in range(size):
            canvas[2 * y][2 * x] = "."

    if show_solution:
        for e in puzzle.solution_edges:
            p = puzzle.index.position(e.node_a)
            q = puzzle.index.position(e.node_b)
            if p.y == q.y:
                glyph = "=" if e.multiplicity == 2 else "-"
                for cx in range(2 * min(p.x, q.x) + 1, 2 * max(p.x, q.x)):
                    canvas[2 * p.y][cx] = glyph
            else:
                glyph = "H" if e.multiplicity == 2 else "|"
                for cy in range(2 * min(p.y, q.y) + 1, 2 * max(p.y, q.y)):
                    canvas[cy][2 * p.x] = glyph

    for node in puzzle.nodes:
        canvas[2 * node.y][2 * node.x] = str(node.required_degree)

    return "\n".join("".join(row).rstrip() for row in canvas)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a Bridges puzzle")
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.EASY.value,
        help="Difficulty tier (ignored when --config is given)",
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="RNG seed (ignored with --config)"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to puzzle config JSON file"
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Write the puzzle JSON here"
    )
    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Reuse/store puzzles in this cache directory",
    )
    parser.add_argument(
        "--show-solution",
        action="store_true",
        help="Draw the solution bridges and include them in --output",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the resolved config without generating",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable DEBUG-level logging"
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())
    else:
        config = PuzzleConfig(difficulty=Difficulty(args.difficulty), seed=args.seed)

    settings = config.settings
    print(f"Config hash:   {full_config_hash(config)}")
    print(f"Puzzle hash:   {puzzle_config_hash(config)}")
    print(
        f"Tier:          {config.difficulty.value} "
        f"(grid={settings.grid_size}, nodes={settings.min_nodes}-"
        f"{settings.max_nodes}, max_degree={settings.max_degree})"
    )
    print(f"Seed:          {config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config resolved successfully. Exiting.")
        return

    if args.cache_dir is not None:
        puzzle = generate_or_load_puzzle(config, Path(args.cache_dir))
    else:
        puzzle = generate_from_config(config)

    errors = validate_puzzle(
        puzzle.nodes, puzzle.solution_edges, puzzle.grid_size, puzzle.max_degree
    )
    if errors:
        log.error("Generated puzzle failed validation: %s", "; ".join(errors))
        sys.exit(1)

    print()
    print(render_board(puzzle, show_solution=args.show_solution))
    print()
    print(
        f"Nodes: {len(puzzle.nodes)}  Solution bridges: "
        f"{len(puzzle.solution_edges)}  Attempt: {puzzle.attempt}"
        f"{'  (fallback)' if puzzle.is_fallback else ''}"
    )

    if args.output is not None:
        out_path = Path(args.output)
        out_path.write_text(
            json.dumps(
                puzzle_to_dict(puzzle, include_solution=args.show_solution),
                indent=2,
            )
        )
        log.info("Puzzle written to %s", out_path)


if __name__ == "__main__":
    main()
