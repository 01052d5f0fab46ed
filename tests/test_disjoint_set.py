import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_animator.core.disjoint_set import DisjointSet
from maze_animator.core.errors import GroupBookkeepingError

class TestDisjointSet(unittest.TestCase):
    def test_singletons(self):
        ds = DisjointSet(range(5))
        self.assertEqual(ds.groups, 5)
        for i in range(5):
            self.assertEqual(ds.find(i), i)

    def test_union_merges(self):
        ds = DisjointSet(range(4))
        self.assertTrue(ds.union(0, 1))
        self.assertTrue(ds.union(2, 3))
        self.assertFalse(ds.union(1, 0))
        self.assertEqual(ds.groups, 2)
        self.assertTrue(ds.connected(0, 1))
        self.assertFalse(ds.connected(1, 2))

        ds.union(1, 3)
        self.assertEqual(ds.groups, 1)
        self.assertEqual(len(ds.roots()), 1)

    def test_union_by_size(self):
        ds = DisjointSet(range(4))
        ds.union(0, 1) # tie: 0 stays root
        self.assertEqual(ds.find(1), 0)
        self.assertEqual(ds.size[0], 2)

        # Smaller tree (2) goes under larger (0) regardless of argument order
        ds.union(2, 1)
        self.assertEqual(ds.find(2), 0)
        self.assertEqual(ds.size[0], 3)

    def test_path_compression(self):
        ds = DisjointSet(range(4))
        # Build the chain 3 -> 2 -> 1 -> 0 by hand
        ds.parent.update({1: 0, 2: 1, 3: 2})
        self.assertEqual(ds.find(3), 0)
        for node in (1, 2, 3):
            self.assertEqual(ds.parent[node], 0)

    def test_long_chain_no_recursion_limit(self):
        n = 50000
        ds = DisjointSet(range(n))
        for i in range(1, n):
            ds.parent[i] = i - 1
        self.assertEqual(ds.find(n - 1), 0)

    def test_unknown_id(self):
        ds = DisjointSet([1])
        with self.assertRaises(GroupBookkeepingError):
            ds.find(2)
        with self.assertRaises(GroupBookkeepingError):
            ds.add(1)

    def test_matches_naive_connectivity(self):
        rng = random.Random(7)
        n = 60
        ds = DisjointSet(range(n))
        labels = list(range(n))

        for _ in range(80):
            a, b = rng.randrange(n), rng.randrange(n)
            ds.union(a, b)
            old, new = labels[a], labels[b]
            labels = [new if l == old else l for l in labels]

            for _ in range(10):
                x, y = rng.randrange(n), rng.randrange(n)
                self.assertEqual(ds.connected(x, y), labels[x] == labels[y])

        self.assertEqual(ds.groups, len(set(labels)))
        self.assertEqual(len(ds.roots()), len(set(labels)))

if __name__ == '__main__':
    unittest.main()
