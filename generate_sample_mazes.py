#!/usr/bin/env python3
"""
Generate sample mazes with the full pipeline.

This includes:
1. Layout selection over random Voronoi subdivisions
2. Spanning tree maze
3. Room distances
4. Waypoint placement

Usage:
    python generate_sample_mazes.py [--seed SEED] [--count N] [--serial SERIAL]
                                    [--strategy first_fit|best_of] [--output DIR]
"""

import argparse
import json
from pathlib import Path

import structlog

from voronoi_maze import MazeOptions, generate_maze
from voronoi_maze.config import settings
from voronoi_maze.core.distances import max_distance
from voronoi_maze.utils.logging import configure_logging

logger = structlog.get_logger()


def generate_samples(seed="default_seed", count=1, serial_number=None, strategy="first_fit",
                     output_dir=None):
    """Generate count mazes with seeds seed-0, seed-1, ... and optionally write them as JSON."""
    options = MazeOptions(layout_strategy=strategy)
    mazes = []

    for i in range(count):
        maze_seed = f"{seed}-{i}"
        maze = generate_maze(options, seed=maze_seed, serial_number=serial_number)
        mazes.append(maze)

        print(f"\nMaze {maze_seed}")
        print(f"  Rooms: {maze.num_sites}, walls: {len(maze.subdivision.edges)}, "
              f"passages: {len(maze.maze.passable)}")
        print(f"  Root room: {maze.maze.root_site}, start room: {maze.start_site}, "
              f"targets: {maze.targets}")
        print(f"  Longest path: {max_distance(maze.distances)} steps, "
              f"layout trials: {maze.layout_trials}, regenerations: {maze.regenerations}")

        if output_dir is not None:
            output_dir = Path(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            output_file = output_dir / f"maze_{maze_seed}.json"
            output_file.write_text(json.dumps(maze.to_dict(), indent=2))
            print(f"  Saved to: {output_file}")

    logger.info("Sample mazes generated", count=len(mazes), seed=seed, strategy=strategy)
    return mazes


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate sample Voronoi mazes")
    parser.add_argument("--seed", default="default_seed", help="Base seed")
    parser.add_argument("--count", type=int, default=1, help="Number of mazes")
    parser.add_argument("--serial", default=None, help="Serial number driving the maze passages")
    parser.add_argument("--strategy", default=settings.layout_strategy,
                        choices=["first_fit", "best_of"], help="Layout strategy")
    parser.add_argument("--output", default=None, help="Directory for JSON output")
    parser.add_argument("--log-level", default="WARNING", help="Log level")

    args = parser.parse_args(argv)
    configure_logging(args.log_level, "plain")

    generate_samples(args.seed, args.count, args.serial, args.strategy, args.output)


if __name__ == "__main__":
    main()
