import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_animator.algo.base import StepResult
from maze_animator.algo.chunking import (
    StepLoop, chunk_size, MANUAL, PLAY,
    PRIM_DIVISOR, PRIM_FAST_DIVISOR, KRUSKAL_DIVISOR, DIJKSTRA_DIVISOR,
)

class CountingStepper:
    """Finishes after `total` units of work."""
    def __init__(self, total):
        self.total = total
        self.work = 0
        self.chunks = []

    def __call__(self, chunk):
        self.chunks.append(chunk)
        self.work = min(self.total, self.work + chunk)
        return StepResult(self.work >= self.total)

class TestChunkSize(unittest.TestCase):
    def test_manual_is_one(self):
        self.assertEqual(chunk_size(MANUAL, 99, 99, PRIM_DIVISOR), 1)
        self.assertEqual(chunk_size(MANUAL, 999, 999, KRUSKAL_DIVISOR), 1)

    def test_play_scales_with_grid(self):
        self.assertEqual(chunk_size(PLAY, 99, 99, PRIM_DIVISOR), 4)
        self.assertEqual(chunk_size(PLAY, 99, 99, PRIM_FAST_DIVISOR), 9)
        self.assertEqual(chunk_size(PLAY, 99, 99, KRUSKAL_DIVISOR), 49)
        self.assertEqual(chunk_size(PLAY, 99, 99, DIJKSTRA_DIVISOR), 12)

    def test_play_never_below_one(self):
        self.assertEqual(chunk_size(PLAY, 5, 5, PRIM_DIVISOR), 1)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            chunk_size("fast", 9, 9, PRIM_DIVISOR)
        with self.assertRaises(ValueError):
            chunk_size(PLAY, 9, 9, 0)

class TestStepLoop(unittest.TestCase):
    def test_tick_does_nothing_until_played(self):
        stepper = CountingStepper(10)
        loop = StepLoop(stepper, play_chunk=3)
        loop.tick()
        self.assertEqual(stepper.chunks, [])

    def test_play_ticks_in_play_chunks(self):
        stepper = CountingStepper(10)
        loop = StepLoop(stepper, play_chunk=3)
        loop.play()
        for _ in range(3):
            loop.tick()
        self.assertEqual(stepper.chunks, [3, 3, 3])
        self.assertTrue(loop.running)

        loop.tick()
        self.assertTrue(loop.finished)
        self.assertFalse(loop.running)

    def test_stop_keeps_progress(self):
        stepper = CountingStepper(10)
        loop = StepLoop(stepper, play_chunk=4)
        loop.play()
        loop.tick()
        loop.stop()
        loop.tick()
        self.assertEqual(stepper.work, 4)

        loop.play()
        loop.tick()
        self.assertEqual(stepper.work, 8)

    def test_step_once_uses_single_unit(self):
        stepper = CountingStepper(10)
        loop = StepLoop(stepper, play_chunk=5)
        loop.step_once()
        loop.step_once()
        self.assertEqual(stepper.chunks, [1, 1])
        self.assertEqual(loop.calls, 2)

    def test_play_after_finish_is_ignored(self):
        stepper = CountingStepper(2)
        loop = StepLoop(stepper, play_chunk=5)
        loop.run_to_end()
        loop.play()
        self.assertFalse(loop.running)

    def test_run_to_end(self):
        stepper = CountingStepper(11)
        loop = StepLoop(stepper, play_chunk=4)
        result = loop.run_to_end()
        self.assertTrue(result.done)
        self.assertEqual(stepper.chunks, [4, 4, 4])

    def test_play_chunk_floor(self):
        loop = StepLoop(CountingStepper(1), play_chunk=0)
        self.assertEqual(loop.play_chunk, 1)

if __name__ == '__main__':
    unittest.main()
