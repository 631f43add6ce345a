from __future__ import annotations

import json
from string import Template
from typing import Dict, List, Tuple

from graph import Graph, NoPathError, UnknownNodeError
from maze import cell_name


def compute_layout(
    rows: int, cols: int, cell_size: float = 40.0, margin: float = 30.0
) -> Dict[str, Tuple[float, float]]:
    """Centre of every grid cell in SVG coordinates."""
    positions: Dict[str, Tuple[float, float]] = {}
    for r in range(rows):
        for c in range(cols):
            x = margin + cell_size * (c + 0.5)
            y = margin + cell_size * (r + 0.5)
            positions[cell_name(r, c)] = (x, y)
    return positions


def render_html(
    maze: Graph,
    rows: int,
    cols: int,
    start: str,
    goal: str,
    cell_size: float = 40.0,
) -> str:
    margin = 30.0
    layout = compute_layout(rows, cols, cell_size, margin)
    width = int(2 * margin + cell_size * cols)
    height = int(2 * margin + cell_size * rows)

    try:
        steps, solution = maze.shortest_path(start, goal)
    except (NoPathError, UnknownNodeError):
        steps, solution = -1, []

    solution_set = {
        tuple(sorted(edge)) for edge in zip(solution[:-1], solution[1:])
    }

    passages: List[Dict] = []
    for origin, target, _ in maze.edges():
        passages.append(
            {
                "source": origin,
                "target": target,
                "on_solution": (origin, target) in solution_set,
            }
        )

    cells = [{"id": name, "x": x, "y": y} for name, (x, y) in layout.items()]

    data = {
        "canvas": {"width": width, "height": height},
        "cell_size": cell_size,
        "cells": cells,
        "passages": passages,
        "solution": solution,
        "start": start,
        "goal": goal,
    }

    json_payload = json.dumps(data, ensure_ascii=False).replace("</", "<\\/")

    template = Template("""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Maze $rows x $cols</title>
    <style>
      :root {
        color-scheme: light dark;
        font-family: "Segoe UI", Roboto, sans-serif;
      }
      body {
        margin: 0;
        background: #111827;
        color: #f9fafb;
        display: flex;
        flex-direction: column;
        min-height: 100vh;
      }
      header {
        padding: 1rem 2rem;
        background: #1f2937;
      }
      h1 {
        margin: 0;
        font-size: 1.4rem;
      }
      main {
        flex: 1;
        display: flex;
        gap: 1.5rem;
        padding: 1.5rem;
      }
      #maze-container {
        flex: 1;
        background: #0f172a;
        border-radius: 14px;
      }
      svg {
        width: 100%;
        height: 100%;
      }
      .passage {
        stroke: #e5e7eb;
        stroke-width: $passage_width;
        stroke-linecap: square;
      }
      .solution {
        stroke: #f97316;
        stroke-width: 4;
        fill: none;
      }
      .endpoint {
        fill: #38bdf8;
      }
      .panel {
        width: 260px;
        background: #1f2937;
        border-radius: 12px;
        padding: 1rem 1.2rem;
      }
      .stats {
        display: grid;
        grid-template-columns: 1fr 1fr;
        gap: 0.4rem 0.9rem;
      }
    </style>
    <script src="https://cdn.jsdelivr.net/npm/d3@7"></script>
  </head>
  <body>
    <header>
      <h1>Maze $rows x $cols</h1>
    </header>
    <main>
      <div id="maze-container">
        <svg id="maze" viewBox="0 0 $width $height"></svg>
      </div>
      <aside class="panel">
        <div class="stats">
          <span>Start</span><span>$start</span>
          <span>Goal</span><span>$goal</span>
          <span>Passages</span><span>$passage_count</span>
          <span>Solution</span><span>$steps steps</span>
        </div>
        <p><button id="toggle">Toggle solution</button></p>
      </aside>
    </main>
    <script type="application/json" id="maze-data">$json_payload</script>
    <script>
      const data = JSON.parse(document.getElementById("maze-data").textContent);
      const svg = d3.select("#maze");
      const cellById = new Map(data.cells.map(cell => [cell.id, cell]));

      // Passages are drawn as thick corridors between cell centres.
      svg.append("g")
        .selectAll("line")
        .data(data.passages)
        .join("line")
        .attr("class", "passage")
        .attr("x1", p => cellById.get(p.source).x)
        .attr("y1", p => cellById.get(p.source).y)
        .attr("x2", p => cellById.get(p.target).x)
        .attr("y2", p => cellById.get(p.target).y);

      const solution = svg.append("polyline")
        .attr("class", "solution")
        .attr("points", data.solution.map(id => cellById.get(id).x + "," + cellById.get(id).y).join(" "));

      svg.append("g")
        .selectAll("circle")
        .data([data.start, data.goal].filter(id => cellById.has(id)))
        .join("circle")
        .attr("class", "endpoint")
        .attr("r", data.cell_size / 5)
        .attr("cx", id => cellById.get(id).x)
        .attr("cy", id => cellById.get(id).y);

      document.getElementById("toggle").addEventListener("click", () => {
        solution.attr("visibility", solution.attr("visibility") === "hidden" ? "visible" : "hidden");
      });
    </script>
  </body>
</html>
""")

    return template.substitute(
        rows=rows,
        cols=cols,
        width=width,
        height=height,
        passage_width=f"{cell_size * 0.6:.0f}",
        start=start,
        goal=goal,
        passage_count=len(passages),
        steps=steps if steps >= 0 else "n/a",
        json_payload=json_payload,
    )
