"""Disjoint-set forest used to grow the spanning tree."""


class DisjointSet:
    """Union-Find over elements 0..n-1 with path compression.

    count tracks the number of live components; it reaches 1 exactly when
    every element has been joined.
    """

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        self.parent: list[int] = list(range(n))
        self.count = n

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression: point every node on the walk at the root
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> bool:
        """Join the components of i and j. Returns True if they were separate."""
        root_i = self.find(i)
        root_j = self.find(j)
        if root_i == root_j:
            return False
        self.parent[root_i] = root_j
        self.count -= 1
        return True

    def connected(self, i: int, j: int) -> bool:
        return self.find(i) == self.find(j)
