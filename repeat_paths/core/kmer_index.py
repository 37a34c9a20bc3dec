"""
K-mer index of a sequence graph.

Maps every k-mer spelled by a graph walk to the minimal walks (paths spanning
exactly k bases) that spell it. Repeat nodes are traversed as many times as
needed to reach k bases, and degenerate bases are expanded to all concrete
k-mers they can produce.

Author: Kevin R. Roy
"""

import logging
from collections import Counter, deque
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from ..utils.sequence import expand_degenerate_sequence
from .graph import Edge, Graph
from .path import Path

logger = logging.getLogger(__name__)


def enumerate_kmer_paths(graph: Graph, kmer_size: int) -> Iterator[Path]:
    """
    Generate all paths spanning exactly kmer_size bases.

    Paths start at every base of every node and are extended breadth-first
    through successors until kmer_size bases are covered; the last node of
    each path contributes at least one base. Empty nodes may be passed
    through but not re-entered before another base is consumed, which keeps
    the walk finite around empty loops.

    Args:
        graph: Graph to walk
        kmer_size: Path length in bases

    Yields:
        Paths ordered by start node, start offset, then breadth-first
    """
    if kmer_size < 1:
        raise ValueError(f"K-mer size must be positive, got {kmer_size}")

    for node_id in range(graph.num_nodes):
        node_len = len(graph.node_seq(node_id))
        for offset in range(node_len):
            covered = node_len - offset
            if covered >= kmer_size:
                yield Path(graph, offset, [node_id], offset + kmer_size)
                continue

            # (nodes so far, bases still needed, empty nodes entered since the last base)
            queue: deque = deque([([node_id], kmer_size - covered, frozenset())])
            while queue:
                nodes, remaining, empty_seen = queue.popleft()
                for successor in graph.successors(nodes[-1]):
                    successor_len = len(graph.node_seq(successor))
                    if successor_len == 0:
                        if successor not in empty_seen:
                            queue.append((nodes + [successor], remaining, empty_seen | {successor}))
                    elif successor_len >= remaining:
                        yield Path(graph, offset, nodes + [successor], remaining)
                    else:
                        queue.append((nodes + [successor], remaining - successor_len, frozenset()))


class KmerIndex:
    """
    Index from k-mers to the graph paths that spell them.

    Use KmerIndex.build(graph, kmer_size) to index a graph, or
    KmerIndex.from_mapping() to wrap a precomputed mapping.
    """

    def __init__(self, kmer_to_paths: Mapping[str, Sequence[Path]], kmer_size: Optional[int] = None):
        self._kmer_to_paths: Dict[str, List[Path]] = {
            kmer: list(paths) for kmer, paths in kmer_to_paths.items() if paths
        }

        lengths = {len(kmer) for kmer in self._kmer_to_paths}
        if len(lengths) > 1:
            raise ValueError(f"K-mers of different lengths in index: {sorted(lengths)}")
        if kmer_size is None and lengths:
            kmer_size = lengths.pop()
        elif lengths and lengths.pop() != kmer_size:
            raise ValueError(f"K-mers do not have length {kmer_size}")
        self.kmer_size = kmer_size

        self._kmers_by_node: Counter = Counter()
        self._kmers_by_edge: Counter = Counter()
        self._single_path_kmers_by_node: Counter = Counter()
        self._single_path_kmers_by_edge: Counter = Counter()
        self._count_overlaps()

    @classmethod
    def build(cls, graph: Graph, kmer_size: int) -> 'KmerIndex':
        """
        Index all k-mers of a graph.

        Args:
            graph: Graph to index
            kmer_size: K-mer length (at least 1)

        Returns:
            KmerIndex
        """
        kmer_to_paths: Dict[str, List[Path]] = {}
        num_paths = 0
        for path in enumerate_kmer_paths(graph, kmer_size):
            num_paths += 1
            for kmer in expand_degenerate_sequence(path.seq()):
                kmer_to_paths.setdefault(kmer, []).append(path)

        index = cls(kmer_to_paths, kmer_size)
        logger.info(
            f"Indexed {len(index)} distinct {kmer_size}-mers from {num_paths} paths "
            f"over {graph.num_nodes} nodes"
        )
        return index

    @classmethod
    def from_mapping(cls, kmer_to_paths: Mapping[str, Sequence[Path]]) -> 'KmerIndex':
        """Create an index from an explicit k-mer to paths mapping."""
        return cls(kmer_to_paths)

    def _count_overlaps(self):
        for paths in self._kmer_to_paths.values():
            nodes: Set[int] = set()
            edges: Set[Edge] = set()
            for path in paths:
                nodes.update(path.nodes)
                edges.update(path.edges())

            self._kmers_by_node.update(nodes)
            self._kmers_by_edge.update(edges)
            if len(paths) == 1:
                self._single_path_kmers_by_node.update(nodes)
                self._single_path_kmers_by_edge.update(edges)

    def contains(self, kmer: str) -> bool:
        return kmer in self._kmer_to_paths

    def paths(self, kmer: str) -> List[Path]:
        """Paths spelling the k-mer, in build order (empty if absent)."""
        return list(self._kmer_to_paths.get(kmer, []))

    def count(self, kmer: str) -> int:
        """Number of paths spelling the k-mer."""
        return len(self._kmer_to_paths.get(kmer, []))

    def kmers(self) -> Set[str]:
        return set(self._kmer_to_paths)

    def unique_kmers_overlapping_edge(self, source: int, sink: int, single_path_only: bool = False) -> int:
        """
        Number of distinct k-mers with a path traversing the edge source -> sink.

        With single_path_only, only k-mers spelled by exactly one path count.
        """
        counts = self._single_path_kmers_by_edge if single_path_only else self._kmers_by_edge
        return counts[(source, sink)]

    def unique_kmers_overlapping_node(self, node_id: int, single_path_only: bool = False) -> int:
        """
        Number of distinct k-mers with a path visiting the node.

        With single_path_only, only k-mers spelled by exactly one path count.
        """
        counts = self._single_path_kmers_by_node if single_path_only else self._kmers_by_node
        return counts[node_id]

    def items(self) -> Iterator[Tuple[str, List[Path]]]:
        for kmer, paths in self._kmer_to_paths.items():
            yield kmer, list(paths)

    def __contains__(self, kmer: str) -> bool:
        return self.contains(kmer)

    def __len__(self) -> int:
        return len(self._kmer_to_paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self._kmer_to_paths)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KmerIndex):
            return NotImplemented
        return self._as_sets() == other._as_sets()

    def _as_sets(self) -> Dict[str, FrozenSet[Path]]:
        return {kmer: frozenset(paths) for kmer, paths in self._kmer_to_paths.items()}

    def __repr__(self) -> str:
        return f"KmerIndex(k={self.kmer_size}, kmers={len(self)})"
