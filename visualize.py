from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from graph import Graph
from maze import build_grid_graph, cell_name, extract_maze, maze_passages, parse_cell_name


def to_networkx(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(node.name for node in graph.all_nodes())
    for origin, target, cost in graph.edges():
        g.add_edge(origin, target, cost=cost)
    return g


def grid_layout(rows: int, cols: int) -> Dict[str, Tuple[float, float]]:
    """Column on x, row on y, with row 0 at the top."""
    return {
        cell_name(r, c): (float(c), float(rows - 1 - r))
        for r in range(rows)
        for c in range(cols)
    }


def path_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def draw_maze(
    grid: Graph,
    maze: Graph,
    rows: int,
    cols: int,
    solution: Sequence[str] = (),
    output: Path | None = None,
    show: bool = True,
) -> None:
    fig, ax = plt.subplots(figsize=(max(4, cols * 0.8), max(4, rows * 0.8)))

    layout = grid_layout(rows, cols)
    grid_nx = to_networkx(grid)
    maze_nx = to_networkx(maze)

    nx.draw_networkx_edges(grid_nx, layout, ax=ax, edge_color="lightgray", width=1.0, style="dotted")
    nx.draw_networkx_edges(maze_nx, layout, ax=ax, edge_color="#1f2937", width=4.0)

    solution_edges = path_edges(solution)
    if solution_edges:
        nx.draw_networkx_edges(
            maze_nx,
            layout,
            edgelist=solution_edges,
            edge_color="#d62728",
            width=2.0,
            ax=ax,
        )

    endpoints = {solution[0], solution[-1]} if solution else set()
    node_colours = ["#d62728" if node in endpoints else "#9ca3af" for node in grid_nx.nodes]
    nx.draw_networkx_nodes(grid_nx, layout, node_color=node_colours, node_size=60, ax=ax)

    summary = [f"Cells: {len(maze)}", f"Passages: {len(maze.edges())}"]
    if solution:
        summary.append(f"Solution: {len(solution) - 1} steps")
    ax.text(
        1.02,
        0.5,
        "\n".join(summary),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Maze {rows}x{cols} – Static Overview")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def animate_carving(
    grid: Graph,
    passages: Sequence[Tuple[str, str]],
    rows: int,
    cols: int,
    output: Path | None = None,
    show: bool = True,
) -> None:
    if not passages:
        return

    layout = grid_layout(rows, cols)
    grid_nx = to_networkx(grid)

    fig, ax = plt.subplots(figsize=(max(4, cols * 0.8), max(4, rows * 0.8)))
    nx.draw_networkx_edges(grid_nx, layout, ax=ax, edge_color="lightgray", width=1.0, style="dotted")
    nx.draw_networkx_nodes(grid_nx, layout, node_color="#9ca3af", node_size=60, ax=ax)

    carved_lines = [
        ax.plot([], [], color="#1f2937", linewidth=4.0, zorder=2)[0] for _ in passages
    ]
    head_marker = ax.scatter([], [], s=160, c="#1f77b4", zorder=4)
    status_text = ax.text(
        0.02,
        0.98,
        "",
        transform=ax.transAxes,
        va="top",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Maze {rows}x{cols} – Carving Order")

    def init():
        for line in carved_lines:
            line.set_data([], [])
        head_marker.set_offsets([[float("nan"), float("nan")]])
        status_text.set_text("")
        return (*carved_lines, head_marker, status_text)

    def update(frame: int):
        origin, target = passages[frame]
        x0, y0 = layout[origin]
        x1, y1 = layout[target]
        carved_lines[frame].set_data([x0, x1], [y0, y1])
        head_marker.set_offsets([[x1, y1]])
        row, col = parse_cell_name(target)
        status_text.set_text(
            f"Passage {frame + 1}/{len(passages)}\n{origin} -> {target} (row {row}, col {col})"
        )
        return (*carved_lines, head_marker, status_text)

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=len(passages),
        init_func=init,
        interval=300,
        blit=False,
    )

    if output:
        output_path = Path(output)
        suffix = output_path.suffix.lower()
        if suffix == ".gif":
            writer = animation.PillowWriter(fps=4)
            anim.save(output_path, writer=writer)
        elif suffix in {".mp4", ".m4v"}:
            writer = animation.FFMpegWriter(fps=4)
            anim.save(output_path, writer=writer)
        else:
            anim.save(output_path)

    if show:
        plt.show()
    else:
        plt.close(fig)


def main() -> None:
    from main import load_config, resolve_settings

    parser = argparse.ArgumentParser(
        description="Visualise a generated maze and the order its passages were carved."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("maze.yaml"),
        help="Path to the YAML maze configuration.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the maze and its solution.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save an animation (GIF/MP4) of the carving.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    args = parser.parse_args()

    settings = resolve_settings(load_config(args.config))
    grid = build_grid_graph(settings.rows, settings.cols)
    passages = maze_passages(grid, settings.start)
    maze = extract_maze(grid, settings.start)
    _, solution = maze.shortest_path(settings.start, settings.goal)

    show = not args.no_show

    draw_maze(
        grid=grid,
        maze=maze,
        rows=settings.rows,
        cols=settings.cols,
        solution=solution,
        output=args.static_out,
        show=show,
    )

    animate_carving(
        grid=grid,
        passages=passages,
        rows=settings.rows,
        cols=settings.cols,
        output=args.animation_out,
        show=show,
    )


if __name__ == "__main__":
    main()
