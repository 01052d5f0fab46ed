import unittest
import tempfile
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_animator.config import AnimatorConfig
from maze_animator.core.grid import Grid
from maze_animator.core.events import EventWriter, EventReader, EVT_STATUS, EVT_RESET, MAGIC
from maze_animator.viz.replay import EventAdapter
from maze_animator.session import Session

class TestEvents(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "events.bin")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_write_and_read(self):
        writer = EventWriter(self.path)
        writer.write_header(7, 5)
        writer.log_status(1, 2, Grid.PASSAGE)
        writer.log_reset(9, 3)
        writer.log_status(8, 2, Grid.TARGET)
        writer.close()
        self.assertEqual(writer.count, 2)

        reader = EventReader(self.path)
        self.assertEqual(reader.read_header(), (7, 5))
        events = list(reader.stream_events())
        reader.close()

        self.assertEqual(events, [
            (EVT_STATUS, (1, 2, Grid.PASSAGE)),
            (EVT_RESET, (9, 3)),
            (EVT_STATUS, (8, 2, Grid.TARGET)),
        ])

    def test_grid_writer_records_mutations(self):
        writer = EventWriter(self.path)
        grid = Grid(3, 3, event_writer=writer)
        grid.set_status(1, 1, Grid.PASSAGE)
        grid.set_status(2, 1, Grid.PASSAGE)
        writer.close()
        self.assertEqual(writer.count, 2)

    def test_bad_magic(self):
        with open(self.path, "wb") as f:
            f.write(b"NOTALOG" + b"\x00" * 8)
        reader = EventReader(self.path)
        with self.assertRaises(ValueError):
            reader.read_header()
        reader.close()

    def test_truncated_record(self):
        with open(self.path, "wb") as f:
            f.write(MAGIC + b"\x00\x00\x00\x03\x00\x00\x00\x03")
            f.write(b"\x01\x00\x01")
        reader = EventReader(self.path)
        reader.read_header()
        with self.assertRaises(ValueError):
            list(reader.stream_events())
        reader.close()

    def test_unknown_event_type(self):
        with open(self.path, "wb") as f:
            f.write(MAGIC + b"\x00\x00\x00\x03\x00\x00\x00\x03")
            f.write(b"\x7f")
        reader = EventReader(self.path)
        reader.read_header()
        with self.assertRaises(ValueError):
            list(reader.stream_events())
        reader.close()

class TestReplay(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "session.bin")

    def tearDown(self):
        self.tmpdir.cleanup()

    def replay(self):
        reader = EventReader(self.path)
        try:
            adapter = EventAdapter(reader)
            adapter.run_all()
        finally:
            reader.close()
        return adapter

    def test_replay_matches_session(self):
        writer = EventWriter(self.path)
        session = Session(AnimatorConfig(rows=15, cols=15, algo="kruskal", seed=7), event_writer=writer)
        session.run_generator_to_end()
        passages = session.grid.positions(Grid.PASSAGE)
        session.place_source(*passages[0])
        session.place_target(*passages[-1])
        session.run_search_to_end()
        writer.close()

        adapter = self.replay()

        self.assertTrue(adapter.done)
        self.assertEqual(adapter.grid.cells.tobytes(), session.grid.cells.tobytes())
        self.assertEqual(adapter.resets, 0)

    def test_replay_across_resize(self):
        writer = EventWriter(self.path)
        session = Session(AnimatorConfig(rows=9, cols=9, seed=1), event_writer=writer)
        session.run_generator_to_end()
        session.resize(5, 11)
        session.run_generator_to_end()
        writer.close()

        adapter = self.replay()

        self.assertEqual(adapter.resets, 1)
        self.assertEqual((adapter.grid.width, adapter.grid.height), (11, 5))
        self.assertEqual(adapter.grid.cells.tobytes(), session.grid.cells.tobytes())

    def test_chunked_steps(self):
        writer = EventWriter(self.path)
        session = Session(AnimatorConfig(rows=7, cols=7, algo="draw"), event_writer=writer)
        session.paint(3, 3, "blocked")
        writer.close()

        reader = EventReader(self.path)
        adapter = EventAdapter(reader)
        self.assertFalse(adapter.step(10))
        self.assertEqual(adapter.applied, 10)
        while not adapter.step(10):
            pass
        reader.close()
        self.assertEqual(adapter.grid.get_status(3, 3), Grid.BLOCKED)
        self.assertEqual(adapter.grid.count(Grid.PASSAGE), 48)

if __name__ == '__main__':
    unittest.main()
