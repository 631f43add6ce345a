from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import webbrowser

import yaml

from dot import to_graphviz, write_text
from graph import Graph, GraphError
from maze import build_grid_graph, cell_name, extract_maze


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("maze.yaml")


@dataclass(frozen=True)
class MazeSettings:
    rows: int = 5
    cols: int = 5
    start: str = "r0c0"
    grid_out: Optional[Path] = Path("files/grid.dot")
    maze_out: Optional[Path] = Path("files/maze.dot")
    html_out: Optional[Path] = None
    png_out: Optional[Path] = None
    log_level: str = "WARNING"

    @property
    def goal(self) -> str:
        """The cell diagonally opposite the top-left corner."""
        return cell_name(self.rows - 1, self.cols - 1)


@dataclass(frozen=True)
class MazeResult:
    grid: Graph
    maze: Graph
    solution: List[str]
    written: List[Path]


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _optional_path(value) -> Optional[Path]:
    return Path(value) if value else None


def resolve_settings(config: Dict, args: Optional[argparse.Namespace] = None) -> MazeSettings:
    """Merge the YAML configuration with command-line overrides."""
    grid_config = config.get("grid", {})
    maze_config = config.get("maze", {})
    output_config = config.get("output", {})
    defaults = MazeSettings()

    settings = MazeSettings(
        rows=int(grid_config.get("rows", defaults.rows)),
        cols=int(grid_config.get("cols", defaults.cols)),
        start=str(maze_config.get("start", defaults.start)),
        grid_out=_optional_path(output_config.get("grid", defaults.grid_out)),
        maze_out=_optional_path(output_config.get("maze", defaults.maze_out)),
        html_out=_optional_path(output_config.get("html")),
        png_out=_optional_path(output_config.get("png")),
        log_level=str(config.get("log_level", defaults.log_level)).upper(),
    )

    if args is None:
        return settings

    overrides = {
        field: value
        for field, value in (
            ("rows", args.rows),
            ("cols", args.cols),
            ("start", args.start),
            ("grid_out", args.grid_out),
            ("maze_out", args.maze_out),
            ("html_out", args.html_out),
            ("png_out", args.png_out),
        )
        if value is not None
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG" if args.verbose > 1 else "INFO"
    return replace(settings, **overrides)


def generate(settings: MazeSettings) -> MazeResult:
    grid = build_grid_graph(settings.rows, settings.cols)
    maze = extract_maze(grid, settings.start)
    _, solution = maze.shortest_path(settings.start, settings.goal)
    written: List[Path] = []

    if settings.grid_out:
        written.append(
            write_text(settings.grid_out, to_graphviz(grid, settings.rows, settings.cols, "grid1"))
        )
    if settings.maze_out:
        written.append(
            write_text(settings.maze_out, to_graphviz(maze, settings.rows, settings.cols, "maze1"))
        )
    if settings.html_out:
        from visualize_html import render_html

        html = render_html(maze, settings.rows, settings.cols, settings.start, settings.goal)
        written.append(write_text(settings.html_out, html))
    if settings.png_out:
        from visualize import draw_maze

        draw_maze(
            grid=grid,
            maze=maze,
            rows=settings.rows,
            cols=settings.cols,
            solution=solution,
            output=settings.png_out,
            show=False,
        )
        written.append(settings.png_out)

    for path in written:
        logger.info("wrote %s", path)
    return MazeResult(grid=grid, maze=maze, solution=solution, written=written)


def print_summary(settings: MazeSettings, result: MazeResult) -> None:
    print("=== Grid Graph ===")
    print(f"{settings.rows}x{settings.cols} cells, {len(result.grid.edges())} edges")
    print()

    print("=== Maze ===")
    print(f"Start {settings.start}, {len(result.maze.edges())} passages")
    print(f"Solution to {settings.goal}: {len(result.solution) - 1} steps")
    print(f"  {' -> '.join(result.solution)}")

    if result.written:
        print()
        for path in result.written:
            print(f"Wrote {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a grid graph and carve a maze out of it with a depth-first walk."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the YAML maze configuration.",
    )
    parser.add_argument("--rows", type=int, help="Number of grid rows.")
    parser.add_argument("--cols", type=int, help="Number of grid columns.")
    parser.add_argument("--start", help="Name of the start cell, e.g. r0c0.")
    parser.add_argument("--grid-out", type=Path, help="Graphviz output for the full grid.")
    parser.add_argument("--maze-out", type=Path, help="Graphviz output for the maze.")
    parser.add_argument("--html-out", type=Path, help="Optional HTML rendering of the maze.")
    parser.add_argument("--png-out", type=Path, help="Optional PNG rendering of the maze.")
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Open the HTML rendering of the maze in a browser.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config: Dict = {}
    if args.config.exists():
        config = load_config(args.config)
    elif args.config != DEFAULT_CONFIG:
        parser.error(f"config file {args.config} does not exist")

    settings = resolve_settings(config, args)
    if args.visualize and settings.html_out is None:
        settings = replace(settings, html_out=Path("files/maze.html"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = generate(settings)
    except (GraphError, ValueError) as exc:
        parser.error(str(exc))

    print_summary(settings, result)

    if args.visualize:
        opened = webbrowser.open_new_tab(settings.html_out.resolve().as_uri())
        if not opened:
            print(f"Visualisation stored at: {settings.html_out}")


if __name__ == "__main__":
    main()
