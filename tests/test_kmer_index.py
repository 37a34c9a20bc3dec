"""Tests for repeat_paths.core.kmer_index."""

import pytest
from repeat_paths.core.graph import (
    Graph,
    make_deletion_graph,
    make_double_swap_graph,
    make_str_graph,
    make_swap_graph,
)
from repeat_paths.core.kmer_index import KmerIndex, enumerate_kmer_paths
from repeat_paths.core.path import Path


def example_graphs():
    return [
        make_deletion_graph("AC", "GG", "CAG"),
        make_swap_graph("TTAC", "G", "CCA", "GTA"),
        make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT"),
        make_str_graph("ATCG", "CAG", "GCTA"),
        make_deletion_graph("AC", "", "GT"),
    ]


class TestKmerIndexInitialization:
    """Test index construction against hand-built indexes."""

    def test_1mers(self):
        """Test the 1-mer index of a deletion graph."""
        graph = make_deletion_graph("AC", "GG", "CAG")
        index = KmerIndex.build(graph, 1)

        expected = KmerIndex.from_mapping({
            "A": [Path(graph, 0, [0], 1), Path(graph, 1, [2], 2)],
            "C": [Path(graph, 1, [0], 2), Path(graph, 0, [2], 1)],
            "G": [Path(graph, 0, [1], 1), Path(graph, 1, [1], 2), Path(graph, 2, [2], 3)],
        })
        assert index == expected

    def test_1mers_paths_in_build_order(self):
        graph = make_deletion_graph("AC", "GG", "CAG")
        index = KmerIndex.build(graph, 1)
        assert index.paths("G") == [Path(graph, 0, [1], 1), Path(graph, 1, [1], 2), Path(graph, 2, [2], 3)]

    def test_2mers_with_degenerate_base(self):
        """Test that K expands to both G and T."""
        graph = make_deletion_graph("AK", "GG", "CAG")
        index = KmerIndex.build(graph, 2)

        expected = KmerIndex.from_mapping({
            "AG": [Path(graph, 0, [0], 2), Path(graph, 1, [2], 3)],
            "AT": [Path(graph, 0, [0], 2)],
            "GG": [Path(graph, 1, [0, 1], 1), Path(graph, 0, [1], 2)],
            "TG": [Path(graph, 1, [0, 1], 1)],
            "GC": [Path(graph, 1, [0, 2], 1), Path(graph, 1, [1, 2], 1)],
            "TC": [Path(graph, 1, [0, 2], 1)],
            "CA": [Path(graph, 0, [2], 2)],
        })
        assert index == expected

    def test_different_indexes_are_not_equal(self):
        graph = make_deletion_graph("AC", "GG", "CAG")
        assert KmerIndex.build(graph, 1) != KmerIndex.build(graph, 2)

    def test_invalid_kmer_size(self):
        graph = make_deletion_graph("AC", "GG", "CAG")
        with pytest.raises(ValueError):
            KmerIndex.build(graph, 0)

    def test_mapping_with_mixed_lengths_raises(self):
        graph = make_deletion_graph("AC", "GG", "CAG")
        with pytest.raises(ValueError):
            KmerIndex.from_mapping({"A": [Path(graph, 0, [0], 1)], "AC": [Path(graph, 0, [0], 2)]})


class TestKmerExtraction:
    """Test k-mer listing."""

    def test_kmers(self):
        graph = make_deletion_graph("AC", "GG", "CAG")
        index = KmerIndex.build(graph, 2)
        assert index.kmers() == {"AC", "CG", "CC", "GG", "GC", "CA", "AG"}
        assert len(index) == 7
        assert index.kmer_size == 2


class TestPathExtraction:
    """Test path lookup."""

    def test_paths(self):
        graph = make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT")
        index = KmerIndex.build(graph, 4)
        assert index.paths("AATT") == [
            Path(graph, 1, [0, 1], 2),
            Path(graph, 1, [3, 4], 2),
            Path(graph, 1, [5, 6], 2),
        ]

    def test_absent_kmer_has_no_paths(self):
        graph = make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT")
        index = KmerIndex.build(graph, 4)
        assert index.paths("GGGG") == []

    def test_repeat_kmer_spans_loop(self):
        """Test k-mers produced purely by traversing a repeat node."""
        graph = make_str_graph("AT", "CAG", "GC")
        index = KmerIndex.build(graph, 9)
        assert index.paths("CAGCAGCAG") == [Path(graph, 0, [1, 1, 1], 3)]

    def test_repeat_kmer_leaving_loop(self):
        graph = make_str_graph("AT", "CAG", "GC")
        index = KmerIndex.build(graph, 7)
        assert index.paths("CAGCAGC") == [Path(graph, 0, [1, 1, 1], 1)]
        assert index.paths("CAGCAGG") == [Path(graph, 0, [1, 1, 2], 1)]

    def test_empty_node_gives_distinct_paths(self):
        """Test that walks through an empty node count separately."""
        graph = make_deletion_graph("AC", "", "GT")
        index = KmerIndex.build(graph, 2)
        assert index.count("CG") == 2
        assert set(index.paths("CG")) == {Path(graph, 1, [0, 2], 1), Path(graph, 1, [0, 1, 2], 1)}

    def test_empty_loop_node_terminates(self):
        graph = Graph(["A", "", "T"], [(0, 1), (1, 1), (1, 2)])
        index = KmerIndex.build(graph, 2)
        assert index.paths("AT") == [Path(graph, 0, [0, 1, 2], 1)]


class TestContains:
    """Test k-mer membership."""

    def test_contains(self):
        graph = make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT")
        index = KmerIndex.build(graph, 6)
        assert index.contains("AAATTT")
        assert not index.contains("AAATTG")
        assert not index.contains("AAA")
        assert "AAATTT" in index

    def test_contains_matches_count(self):
        """Test that contains(kmer) == (count(kmer) > 0)."""
        for graph in example_graphs():
            for kmer_size in range(1, 5):
                index = KmerIndex.build(graph, kmer_size)
                for kmer in list(index.kmers()) + ["N" * kmer_size, "G" * kmer_size]:
                    assert index.contains(kmer) == (index.count(kmer) > 0)


class TestCounting:
    """Test path counts."""

    def test_6mers(self):
        graph = make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT")
        index = KmerIndex.build(graph, 6)
        assert index.count("AAATTT") == 3
        assert index.count("AAATTG") == 0
        assert index.count("TTTTTT") == 1

    def test_1mers(self):
        graph = make_double_swap_graph("AAA", "TTT", "CCC", "AAA", "TTT", "AAA", "TTT")
        index = KmerIndex.build(graph, 1)
        assert index.count("A") == 9
        assert index.count("C") == 3
        assert index.count("T") == 9
        assert index.count("G") == 0

    def test_1mers_of_deletion_graph(self):
        """Test 1-mer node overlaps and path counts against direct enumeration."""
        graph = make_deletion_graph("AC", "GG", "CAG")
        index = KmerIndex.build(graph, 1)

        assert index.count("A") == 2
        assert index.count("C") == 2
        assert index.count("G") == 3
        assert index.unique_kmers_overlapping_node(0) == 2
        assert index.unique_kmers_overlapping_node(1) == 1
        assert index.unique_kmers_overlapping_node(2) == 3
        assert index.unique_kmers_overlapping_edge(0, 1) == 0


class TestOverlapCounting:
    """Test distinct k-mers overlapping edges and nodes."""

    def test_overlaps(self):
        graph = make_deletion_graph("AC", "GG", "ACG")
        index = KmerIndex.build(graph, 3)

        assert index.unique_kmers_overlapping_edge(0, 1) == 2
        assert index.unique_kmers_overlapping_edge(1, 2) == 2
        assert index.unique_kmers_overlapping_edge(0, 2) == 2
        assert index.unique_kmers_overlapping_node(0) == 4
        assert index.unique_kmers_overlapping_node(1) == 4
        assert index.unique_kmers_overlapping_node(2) == 5

    def test_single_path_overlaps(self):
        """Test counting only k-mers spelled by a single path."""
        graph = make_deletion_graph("AC", "GG", "ACG")
        index = KmerIndex.build(graph, 3)

        assert index.unique_kmers_overlapping_edge(0, 1, single_path_only=True) == 1
        assert index.unique_kmers_overlapping_edge(1, 2, single_path_only=True) == 2
        assert index.unique_kmers_overlapping_node(0, single_path_only=True) == 3
        assert index.unique_kmers_overlapping_node(2, single_path_only=True) == 4

    def test_unknown_edge(self):
        graph = make_deletion_graph("AC", "GG", "ACG")
        index = KmerIndex.build(graph, 3)
        assert index.unique_kmers_overlapping_edge(2, 0) == 0

    def test_node_overlap_covers_incoming_edges(self):
        """Test node overlap >= overlap of any incoming edge."""
        for graph in example_graphs():
            for kmer_size in range(1, 7):
                index = KmerIndex.build(graph, kmer_size)
                for source, sink in graph.edges:
                    for single in (False, True):
                        assert (index.unique_kmers_overlapping_node(sink, single_path_only=single)
                                >= index.unique_kmers_overlapping_edge(source, sink, single_path_only=single))


class TestPathProperties:
    """Test that indexed paths spell their k-mers."""

    def test_paths_spell_kmers(self):
        for graph in example_graphs():
            for kmer_size in range(1, 8):
                index = KmerIndex.build(graph, kmer_size)
                for kmer, paths in index.items():
                    for path in paths:
                        assert path.seq() == kmer
                        assert path.length == kmer_size

    def test_paths_are_distinct(self):
        for graph in example_graphs():
            index = KmerIndex.build(graph, 4)
            for _, paths in index.items():
                assert len(set(paths)) == len(paths)

    def test_enumerated_paths_end_inside_last_node(self):
        """Test that every path takes at least one base from its last node."""
        graph = make_str_graph("ATCG", "CAG", "GCTA")
        for path in enumerate_kmer_paths(graph, 5):
            assert path.end >= 1
            assert path.start < len(graph.node_seq(path.first_node))
            assert path.end <= len(graph.node_seq(path.last_node))
