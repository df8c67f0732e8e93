#!/usr/bin/env python3
"""Visualize a generated maze: rooms, walls, passages and waypoints."""

import argparse

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as PolygonPatch

from voronoi_maze import MazeOptions, generate_maze

WAYPOINT_COLORS = ["#2e7d32", "#c62828", "#f9a825", "#1565c0", "#6a1b9a", "#00838f"]


def plot_maze(maze, output_file):
    """Draw maze to output_file and return the path."""
    fig, ax = plt.subplots(figsize=(8, 8))

    for site, polygon in enumerate(maze.subdivision.polygons):
        if polygon is None:
            continue
        ax.add_patch(PolygonPatch([(v.x, v.y) for v in polygon.vertices], closed=True,
                                  facecolor="#f5f5f5", edgecolor="none"))
        label = maze.label_points[site]
        ax.text(label.x, label.y - 0.03, str(site), ha="center", va="top", fontsize=9)

    for i, (edge, _, _) in enumerate(maze.subdivision.edges):
        passable = maze.maze.is_passable(i)
        ax.plot([edge.start.x, edge.end.x], [edge.start.y, edge.end.y],
                color="#bdbdbd" if passable else "black",
                linestyle=":" if passable else "-",
                linewidth=1 if passable else 2.5)

    ax.plot([0, 1, 1, 0, 0], [0, 0, 1, 1, 0], color="black", linewidth=3)

    for order, site in enumerate(maze.waypoints):
        label = maze.label_points[site]
        ax.scatter([label.x], [label.y], s=120, zorder=3,
                   color=WAYPOINT_COLORS[order % len(WAYPOINT_COLORS)],
                   marker="s" if order == 0 else "o")

    ax.set_xlim(-0.02, 1.02)
    ax.set_ylim(-0.02, 1.02)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(f"Seed: {maze.seed} | start {maze.start_site} -> targets {maze.targets}")

    plt.savefig(output_file, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return output_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="Visualize a generated maze")
    parser.add_argument("--seed", default="default_seed", help="Maze seed")
    parser.add_argument("--serial", default=None, help="Serial number driving the passages")
    parser.add_argument("--strategy", default="first_fit", choices=["first_fit", "best_of"])
    parser.add_argument("--output", default=None, help="Output PNG path")

    args = parser.parse_args(argv)

    maze = generate_maze(MazeOptions(layout_strategy=args.strategy), seed=args.seed,
                         serial_number=args.serial)
    output_file = args.output or f"maze_{args.seed}.png"
    plot_maze(maze, output_file)
    print(f"Saved to: {output_file}")


if __name__ == "__main__":
    main()
