import sys
import os
import time
import argparse
from typing import List

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_animator.core.grid import Grid
from maze_animator.core.analysis import GridAnalyzer
from maze_animator.algo.prim import RandomizedPrim
from maze_animator.algo.kruskal import RandomizedKruskal
from maze_animator.algo.dijkstra import init_search
from maze_animator.algo.chunking import chunk_size, PLAY, PRIM_DIVISOR, KRUSKAL_DIVISOR, DIJKSTRA_DIVISOR

GENERATORS = {
    "prim": (RandomizedPrim, PRIM_DIVISOR),
    "kruskal": (RandomizedKruskal, KRUSKAL_DIVISOR),
}

def benchmark_size(size: int, algo: str, seed: int):
    print(f"\n--- {algo.upper()} {size}x{size} ({size*size/1e6:.2f}M cells) ---")
    gen_cls, divisor = GENERATORS[algo]
    chunk = chunk_size(PLAY, size, size, divisor)

    # 1. Generation in play-sized chunks
    grid = Grid(size, size)
    gen = gen_cls(grid, seed=seed)
    gen_start = time.time()
    gen.initialize()
    calls = 0
    while not gen.step(chunk).done:
        calls += 1
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s ({calls} chunks of {chunk}, ~{calls / 60:.1f}s at 60fps)")
    print(f"Speed: {(size*size)/max(gen_time, 1e-9):,.0f} cells/sec")

    stats = GridAnalyzer.calculate_stats(grid)
    print(f"Open: {stats['open_percent']:.1f}%, dead ends: {stats['dead_ends']}, junctions: {stats['junctions']}")

    # 2. Dijkstra corner to corner
    passages = grid.positions(Grid.PASSAGE)
    source, target = passages[0], passages[-1]
    search_chunk = chunk_size(PLAY, size, size, DIJKSTRA_DIVISOR)
    search_start = time.time()
    search = init_search(grid, source, target)
    calls = 0
    while not search.step(search_chunk).done:
        calls += 1
    search_time = time.time() - search_start
    path = search.reconstruct_path()
    print(f"Search Time: {search_time:.4f}s ({calls} chunks of {search_chunk})")
    print(f"Path Length: {len(path) - 1}, visited {search.visited_count} cells, {search.pops} heap pops")

def run_suite(sizes: List[int], algos: List[str], seed: int):
    for size in sizes:
        for algo in algos:
            benchmark_size(size, algo, seed)

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Time chunked generation and search")
    parser.add_argument("--sizes", type=int, nargs="+", default=[51, 101, 301, 601])
    parser.add_argument("--algo", choices=list(GENERATORS), nargs="+", default=list(GENERATORS))
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()
    run_suite(args.sizes, args.algo, args.seed)
