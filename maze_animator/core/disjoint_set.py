from typing import Dict, Iterable
from maze_animator.core.errors import GroupBookkeepingError

class DisjointSet:
    """
    Union-find over integer group ids.
    find() compresses paths iteratively, union() merges by subtree size.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self.parent: Dict[int, int] = {}
        self.size: Dict[int, int] = {}
        self.groups = 0
        for group_id in ids:
            self.add(group_id)

    def add(self, group_id: int):
        if group_id in self.parent:
            raise GroupBookkeepingError(f"Group {group_id} already exists")
        self.parent[group_id] = group_id
        self.size[group_id] = 1
        self.groups += 1

    def __contains__(self, group_id: int) -> bool:
        return group_id in self.parent

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, group_id: int) -> int:
        parent = self.parent
        if group_id not in parent:
            raise GroupBookkeepingError(f"Unknown group {group_id}")

        root = group_id
        while parent[root] != root:
            root = parent[root]

        # Path compression: point every node on the walk straight at the root
        node = group_id
        while parent[node] != root:
            next_node = parent[node]
            parent[node] = root
            node = next_node

        return root

    def union(self, a: int, b: int) -> bool:
        """
        Merges the groups of a and b. Returns False if they were already joined.
        The smaller tree goes under the larger one; on a tie b's root goes under a's.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        size_a = self.size[root_a]
        size_b = self.size[root_b]
        if size_a < size_b:
            self.parent[root_a] = root_b
            self.size[root_b] = size_a + size_b
        else:
            self.parent[root_b] = root_a
            self.size[root_a] = size_a + size_b

        self.groups -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def roots(self):
        return {gid for gid, p in self.parent.items() if gid == p}
