from collections import deque
from typing import Dict, List, Optional
from maze_animator.core.grid import Grid, Position

class GridAnalyzer:
    @staticmethod
    def open_neighbors(grid: Grid, x: int, y: int) -> List[Position]:
        return [(nx, ny) for nx, ny in grid.get_neighbors(x, y) if grid.is_traversable(nx, ny)]

    @staticmethod
    def bfs_distance(grid: Grid, start: Position, end: Position) -> Optional[int]:
        """
        Plain breadth-first distance over non-blocked cells.
        Returns None when end is unreachable.
        """
        if not grid.is_traversable(*start) or not grid.is_traversable(*end):
            return None

        dist = {start: 0}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == end:
                return dist[current]
            for n in GridAnalyzer.open_neighbors(grid, *current):
                if n not in dist:
                    dist[n] = dist[current] + 1
                    queue.append(n)
        return None

    @staticmethod
    def count_components(grid: Grid) -> int:
        """Number of 4-connected regions of non-blocked cells."""
        seen = set()
        components = 0
        for idx, status in enumerate(grid.cells):
            if status == Grid.BLOCKED:
                continue
            pos = grid.position_of(idx)
            if pos in seen:
                continue
            components += 1
            seen.add(pos)
            queue = deque([pos])
            while queue:
                cx, cy = queue.popleft()
                for n in GridAnalyzer.open_neighbors(grid, cx, cy):
                    if n not in seen:
                        seen.add(n)
                        queue.append(n)
        return components

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        junctions = 0
        open_cells = 0

        for idx, status in enumerate(grid.cells):
            if status == Grid.BLOCKED:
                continue
            open_cells += 1
            exits = len(GridAnalyzer.open_neighbors(grid, *grid.position_of(idx)))
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: junctions += 1

        total = grid.width * grid.height
        return {
            "open_cells": open_cells,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "components": GridAnalyzer.count_components(grid),
            "open_percent": (open_cells / total) * 100 if total > 0 else 0
        }
