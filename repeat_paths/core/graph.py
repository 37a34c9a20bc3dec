"""
Sequence graph describing the topology of a locus.

Nodes are numbered 0..num_nodes-1 in locus order: node 0 is the left flank
and the last node is the right flank. A node with a self-loop edge is a
repeat motif node.

Author: Kevin R. Roy
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..utils.sequence import is_valid_sequence

Edge = Tuple[int, int]


class Graph:
    """Immutable directed sequence graph."""

    def __init__(
        self,
        sequences: Sequence[str],
        edges: Iterable[Edge],
        name: Optional[str] = None,
    ):
        self.name = name
        self._seqs: Tuple[str, ...] = tuple(seq.upper() for seq in sequences)
        for node_id, seq in enumerate(self._seqs):
            if not is_valid_sequence(seq):
                raise ValueError(f"Node {node_id} has invalid sequence: {seq}")

        successors: Dict[int, set] = {n: set() for n in range(len(self._seqs))}
        predecessors: Dict[int, set] = {n: set() for n in range(len(self._seqs))}
        edge_set = set()
        for source, sink in edges:
            self._check_node(source)
            self._check_node(sink)
            edge_set.add((source, sink))
            successors[source].add(sink)
            predecessors[sink].add(source)

        self._edges: FrozenSet[Edge] = frozenset(edge_set)
        self._successors = {n: tuple(sorted(s)) for n, s in successors.items()}
        self._predecessors = {n: tuple(sorted(p)) for n, p in predecessors.items()}

    def __repr__(self) -> str:
        return f"Graph(name={self.name}, nodes={self.num_nodes}, edges={len(self._edges)})"

    @property
    def num_nodes(self) -> int:
        return len(self._seqs)

    @property
    def edges(self) -> List[Edge]:
        """All edges sorted by (source, sink)."""
        return sorted(self._edges)

    def node_seq(self, node_id: int) -> str:
        self._check_node(node_id)
        return self._seqs[node_id]

    def has_edge(self, source: int, sink: int) -> bool:
        return (source, sink) in self._edges

    def successors(self, node_id: int) -> Tuple[int, ...]:
        self._check_node(node_id)
        return self._successors[node_id]

    def predecessors(self, node_id: int) -> Tuple[int, ...]:
        self._check_node(node_id)
        return self._predecessors[node_id]

    def is_loop_node(self, node_id: int) -> bool:
        """True for repeat motif nodes (nodes with a self-loop)."""
        return self.has_edge(node_id, node_id)

    def _check_node(self, node_id: int):
        if not 0 <= node_id < len(self._seqs):
            raise ValueError(f"Node {node_id} is not in graph with {len(self._seqs)} nodes")


def make_deletion_graph(left_flank: str, deletion: str, right_flank: str) -> Graph:
    """Graph with an optional middle node: 0 -> 1 -> 2 and 0 -> 2."""
    return Graph(
        [left_flank, deletion, right_flank],
        [(0, 1), (0, 2), (1, 2)],
    )


def make_swap_graph(left_flank: str, deletion: str, insertion: str, right_flank: str) -> Graph:
    """Graph where node 1 or node 2 is taken between the flanks."""
    return Graph(
        [left_flank, deletion, insertion, right_flank],
        [(0, 1), (0, 2), (1, 3), (2, 3)],
    )


def make_double_swap_graph(
    left_flank: str,
    deletion1: str,
    insertion1: str,
    middle: str,
    deletion2: str,
    insertion2: str,
    right_flank: str,
) -> Graph:
    """Two swaps in a row separated by a shared middle node."""
    return Graph(
        [left_flank, deletion1, insertion1, middle, deletion2, insertion2, right_flank],
        [(0, 1), (0, 2), (1, 3), (2, 3), (3, 4), (3, 5), (4, 6), (5, 6)],
    )


def make_str_graph(left_flank: str, repeat_unit: str, right_flank: str) -> Graph:
    """Single short tandem repeat between two flanks (repeat may be skipped)."""
    return Graph(
        [left_flank, repeat_unit, right_flank],
        [(0, 1), (0, 2), (1, 1), (1, 2)],
    )
