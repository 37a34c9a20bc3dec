"""
Compact text summaries of haplotype paths.

Author: Kevin R. Roy
"""

from typing import Sequence

from .path import Path

LEFT_FLANK_LABEL = "(LF)"
RIGHT_FLANK_LABEL = "(RF)"


def summarize_path(path: Path) -> str:
    """
    Summarize a path as a motif string, e.g. '(LF)(CAG){3}(RF)'.

    Each distinct node is rendered once, in order of first visit. Repeat
    nodes carry the total number of times the path visits them.
    """
    graph = path.graph
    right_flank = graph.num_nodes - 1
    observed = set()
    pieces = []

    for node_id in path.nodes:
        if node_id in observed:
            continue
        observed.add(node_id)

        if node_id == 0:
            pieces.append(LEFT_FLANK_LABEL)
        elif node_id == right_flank:
            pieces.append(RIGHT_FLANK_LABEL)
        else:
            pieces.append(f"({graph.node_seq(node_id)})")
            if graph.is_loop_node(node_id):
                pieces.append(f"{{{path.count(node_id)}}}")

    return ''.join(pieces)


def summarize_diplotype(diplotype: Sequence[Path]) -> str:
    """Haplotype summaries joined by '/'."""
    return '/'.join(summarize_path(path) for path in diplotype)
