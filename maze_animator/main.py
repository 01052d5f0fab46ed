import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_animator' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def parse_position(text: str):
    try:
        x, y = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'")
    return (x, y)

def add_grid_args(parser, algo_choices, default_algo):
    parser.add_argument("--rows", type=int, default=99, help="Grid rows (odd sizes recommended)")
    parser.add_argument("--cols", type=int, default=99, help="Grid columns (odd sizes recommended)")
    parser.add_argument("--algo", type=str, default=default_algo, choices=algo_choices, help="Maze algorithm")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--prim-divisor", dest="prim_divisor", type=int, default=None, help="Prim play chunk = (rows+cols)/N")
    parser.add_argument("--kruskal-divisor", dest="kruskal_divisor", type=int, default=None, help="Kruskal play chunk = (rows+cols)/N")
    parser.add_argument("--dijkstra-divisor", dest="dijkstra_divisor", type=int, default=None, help="Dijkstra play chunk = (rows+cols)/N")

def add_view_args(parser):
    parser.add_argument("--visual", action="store_true", help="Show visualization")
    parser.add_argument("--record", action="store_true", help="Record video of the window")
    parser.add_argument("--fps", type=int, default=None, help="Frames per second")
    parser.add_argument("--record-events", type=str, help="Save cell status events to binary file")

def build_parser():
    parser = argparse.ArgumentParser(description="Maze Animator: step-by-step maze generation and shortest paths")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a maze")
    add_grid_args(gen_parser, ["prim", "kruskal"], "prim")
    add_view_args(gen_parser)
    gen_parser.add_argument("--print", dest="print_grid", action="store_true", help="Print the finished grid as text")

    solve_parser = subparsers.add_parser("solve", help="Generate a maze and run Dijkstra on it")
    add_grid_args(solve_parser, ["prim", "kruskal"], "prim")
    add_view_args(solve_parser)
    solve_parser.add_argument("--source", type=parse_position, help="Source cell X,Y (default: first passage)")
    solve_parser.add_argument("--target", type=parse_position, help="Target cell X,Y (default: last passage)")
    solve_parser.add_argument("--print", dest="print_grid", action="store_true", help="Print the solved grid as text")

    draw_parser = subparsers.add_parser("draw", help="Draw walls by hand and run Dijkstra (visual)")
    draw_parser.add_argument("--rows", type=int, default=99, help="Grid rows")
    draw_parser.add_argument("--cols", type=int, default=99, help="Grid columns")
    draw_parser.add_argument("--dijkstra-divisor", dest="dijkstra_divisor", type=int, default=None, help="Dijkstra play chunk = (rows+cols)/N")
    add_view_args(draw_parser)

    replay_parser = subparsers.add_parser("replay", help="Replay a status event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--visual", action="store_true", help="Show visualization")
    replay_parser.add_argument("--record", action="store_true", help="Record video")
    replay_parser.add_argument("--print", dest="print_grid", action="store_true", help="Print the final grid as text")

    return parser

def open_renderer(config, session=None, replay=None, record=False):
    from maze_animator.viz.renderer import Renderer
    renderer = Renderer(session=session, replay=replay, width=config.window_width,
                        height=config.window_height, fps=config.fps, record=record)
    renderer.init_window()
    renderer.run_loop()

def default_markers(grid):
    from maze_animator.core.grid import Grid
    passages = grid.positions(Grid.PASSAGE)
    if len(passages) < 2:
        return None, None
    return passages[0], passages[-1]

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_animator")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    from maze_animator.config import AnimatorConfig
    from maze_animator.core.analysis import GridAnalyzer
    from maze_animator.core.events import EventWriter

    if args.command == "replay":
        from maze_animator.core.events import EventReader
        from maze_animator.viz.replay import EventAdapter

        logger.info(f"Replaying {args.event_file}...")
        reader = EventReader(args.event_file)
        try:
            adapter = EventAdapter(reader)
            logger.info(f"Log Header: {adapter.grid.width}x{adapter.grid.height}")
            if args.visual or args.record:
                config = AnimatorConfig(rows=adapter.grid.height, cols=adapter.grid.width)
                open_renderer(config, replay=adapter, record=args.record)
            else:
                adapter.run_all()
            logger.info(f"Applied {adapter.applied} events ({adapter.resets} resets)")
            if args.print_grid:
                print("\n".join(adapter.grid.rows_as_text()))
        finally:
            reader.close()
        return 0

    if args.command == "draw":
        args.algo = "draw"
    config = AnimatorConfig.from_args(args)
    if config.has_even_size and config.algo != "draw":
        logger.warning(f"Even grid size {config.rows}x{config.cols}: the last row/column stays blocked")

    evt_writer = None
    if args.record_events:
        evt_writer = EventWriter(args.record_events)
        logger.info(f"Recording events to {args.record_events}...")

    from maze_animator.session import Session
    session = Session(config, event_writer=evt_writer)

    try:
        if args.command == "draw":
            open_renderer(config, session=session, record=args.record)
            return 0

        logger.info(f"Generating {config.rows}x{config.cols} maze with {config.algo.upper()}...")
        if args.command == "generate" and (args.visual or args.record):
            session.play_generator()
            open_renderer(config, session=session, record=args.record)
        else:
            session.run_generator_to_end()
            logger.info(f"Stats: {GridAnalyzer.calculate_stats(session.grid)}")

        if args.command == "solve":
            source, target = args.source, args.target
            if source is None or target is None:
                first, last = default_markers(session.grid)
                source = source or first
                target = target or last
            if source is None or target is None:
                logger.error("Maze has fewer than two passage cells, nothing to solve")
                return 1
            if not (session.place_source(*source) and session.place_target(*target)):
                logger.error(f"Source {source} and target {target} must both be passage cells")
                return 1

            logger.info(f"Solving with DIJKSTRA from {source} to {target}...")
            if args.visual or args.record:
                session.play_search()
                open_renderer(config, session=session, record=args.record)
            else:
                session.run_search_to_end()

            path = session.shortest_path()
            if path:
                print(f"Path Length: {len(path) - 1} ({session.search.visited_count} cells visited)")
            else:
                print("No path exists.")

        if args.print_grid:
            print("\n".join(session.grid.rows_as_text()))
    finally:
        if evt_writer:
            logger.info(f"Saved {evt_writer.count} events to {args.record_events}")
            evt_writer.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
