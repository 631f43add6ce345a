from __future__ import annotations

from pathlib import Path
from typing import List

from graph import Graph
from maze import cell_name


def to_graphviz(graph: Graph, rows: int, cols: int, name: str) -> str:
    """Render ``graph`` as an undirected Graphviz document laid out by grid row."""
    lines: List[str] = [f"graph {name} {{"]

    # rank=same keeps each grid row on one horizontal line.
    for r in range(rows):
        rank = ", ".join(cell_name(r, c) for c in range(cols))
        lines.append(f"{{ rank=same; {rank} }}")

    for origin, target, _ in graph.edges():
        lines.append(f"{origin} -- {target};")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_text(path: Path, text: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)
    return path
