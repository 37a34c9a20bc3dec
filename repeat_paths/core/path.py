"""
Walks through a sequence graph.

Author: Kevin R. Roy
"""

from functools import total_ordering
from typing import List, Sequence, Tuple

from .graph import Edge, Graph


@total_ordering
class Path:
    """
    A walk through a graph.

    Attributes:
        graph: Graph the walk belongs to (not owned; must outlive the path)
        start: Offset into the sequence of the first node
        nodes: Node ids visited in order, repeated for loop traversals
        end: Offset into the sequence of the last node (exclusive)

    Paths compare lexicographically by (start, nodes, end); paths over
    different graph objects are never equal.
    """

    __slots__ = ('graph', 'start', 'nodes', 'end')

    def __init__(self, graph: Graph, start: int, nodes: Sequence[int], end: int):
        self.graph = graph
        self.start = start
        self.nodes: Tuple[int, ...] = tuple(nodes)
        self.end = end
        self._validate()

    def _validate(self):
        if not self.nodes:
            raise ValueError("Path must contain at least one node")

        for node_id in self.nodes:
            if not 0 <= node_id < self.graph.num_nodes:
                raise ValueError(f"Path node {node_id} is not in the graph")

        for source, sink in self.edges():
            if not self.graph.has_edge(source, sink):
                raise ValueError(f"Path nodes {source} and {sink} are not connected")

        first_len = len(self.graph.node_seq(self.first_node))
        last_len = len(self.graph.node_seq(self.last_node))
        if not 0 <= self.start <= first_len:
            raise ValueError(f"Start {self.start} is outside of node {self.first_node}")
        if not 0 <= self.end <= last_len:
            raise ValueError(f"End {self.end} is outside of node {self.last_node}")
        if len(self.nodes) == 1 and self.start > self.end:
            raise ValueError(f"Start {self.start} is past end {self.end}")

    @property
    def key(self) -> Tuple[int, Tuple[int, ...], int]:
        return self.start, self.nodes, self.end

    @property
    def first_node(self) -> int:
        return self.nodes[0]

    @property
    def last_node(self) -> int:
        return self.nodes[-1]

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def length(self) -> int:
        """Number of bases spanned by the path."""
        if len(self.nodes) == 1:
            return self.end - self.start
        first_len = len(self.graph.node_seq(self.first_node))
        middle_len = sum(len(self.graph.node_seq(n)) for n in self.nodes[1:-1])
        return (first_len - self.start) + middle_len + self.end

    def seq(self) -> str:
        """Sequence spelled by the path (may contain degenerate bases)."""
        full = ''.join(self.graph.node_seq(n) for n in self.nodes)
        last_len = len(self.graph.node_seq(self.last_node))
        return full[self.start:len(full) - last_len + self.end]

    def edges(self) -> List[Edge]:
        """Consecutive (source, sink) node pairs traversed by the path."""
        return list(zip(self.nodes[:-1], self.nodes[1:]))

    def count(self, node_id: int) -> int:
        """Number of times the path visits a node."""
        return self.nodes.count(node_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.graph is other.graph and self.key == other.key

    def __lt__(self, other: 'Path') -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash((id(self.graph), self.key))

    def __repr__(self) -> str:
        nodes = ','.join(str(n) for n in self.nodes)
        return f"({self.start})[{nodes}]({self.end})"
