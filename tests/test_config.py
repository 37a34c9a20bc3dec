"""Tests for repeat_paths.config module."""

from pathlib import Path

import pytest
from repeat_paths.config import RunConfig, load_locus, locus_from_dict
from repeat_paths.core.locus import VariantType


HTT_LOCUS_YAML = """\
locus_id: HTT
nodes:
  - ATTCGA
  - CAG
  - sequence: CAACAG
  - CCG
  - GTGCTG
edges:
  - [0, 1]
  - [0, 2]
  - [1, 1]
  - [1, 2]
  - [2, 3]
  - [2, 4]
  - [3, 3]
  - [3, 4]
variants:
  - id: HTT
    type: repeat
    nodes: [1]
  - id: HTT_CCG
    type: repeat
    nodes: [3]
"""


class TestLoadLocus:
    """Test loading locus descriptions."""

    def test_load(self, tmp_path):
        """Test loading graph and variants from YAML."""
        path = tmp_path / "HTT.yaml"
        path.write_text(HTT_LOCUS_YAML)

        locus = load_locus(path)

        assert locus.locus_id == "HTT"
        assert locus.graph.num_nodes == 5
        assert locus.graph.node_seq(2) == "CAACAG"
        assert locus.graph.is_loop_node(1)
        assert locus.graph.is_loop_node(3)
        assert not locus.graph.is_loop_node(2)
        assert [v.variant_id for v in locus.variants] == ["HTT", "HTT_CCG"]
        assert locus.get_variant("HTT_CCG").nodes == [3]

    def test_variant_types(self):
        data = {
            'locus_id': 'X',
            'nodes': ['AC', 'G', 'TT'],
            'edges': [[0, 1], [1, 2]],
            'variants': [
                {'id': 'R', 'type': 'repeat', 'nodes': [1]},
                {'id': 'S', 'type': 'smallvariant', 'nodes': [1]},
            ],
        }
        locus = locus_from_dict(data)
        assert locus.variants[0].variant_type == VariantType.REPEAT
        assert locus.variants[1].variant_type == VariantType.SMALL_VARIANT

    def test_unknown_variant_type_raises(self):
        data = {
            'nodes': ['AC', 'G', 'TT'],
            'edges': [[0, 1], [1, 2]],
            'variants': [{'id': 'R', 'type': 'inversion', 'nodes': [1]}],
        }
        with pytest.raises(ValueError):
            locus_from_dict(data)

    def test_missing_key_raises(self):
        with pytest.raises(ValueError):
            locus_from_dict({'nodes': ['AC'], 'edges': []})

    def test_bad_edge_raises(self):
        data = {'nodes': ['AC', 'G'], 'edges': [[0, 1, 2]], 'variants': []}
        with pytest.raises(ValueError):
            locus_from_dict(data)

    def test_missing_variant_raises(self, tmp_path):
        path = tmp_path / "HTT.yaml"
        path.write_text(HTT_LOCUS_YAML)
        with pytest.raises(KeyError):
            load_locus(path).get_variant("FMR1")


class TestRunConfig:
    """Test run configuration."""

    def test_from_yaml(self, tmp_path):
        """Test loading a run configuration with relative paths."""
        path = tmp_path / "run.yaml"
        path.write_text(
            "loci: [HTT.yaml, FMR1.yaml]\n"
            "vcf: sample.vcf\n"
            "output_dir: out\n"
            "mean_fragment_length: 350\n"
            "kmer_size: 8\n"
            "threads: 2\n"
        )

        config = RunConfig.from_yaml(path)

        assert config.loci == [tmp_path / "HTT.yaml", tmp_path / "FMR1.yaml"]
        assert config.vcf == tmp_path / "sample.vcf"
        assert config.output_dir == tmp_path / "out"
        assert config.mean_fragment_length == 350
        assert config.kmer_size == 8
        assert config.threads == 2

    def test_defaults(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("loci: HTT.yaml\nvcf: /data/sample.vcf\n")

        config = RunConfig.from_yaml(path)

        assert config.loci == [tmp_path / "HTT.yaml"]
        assert config.vcf == Path("/data/sample.vcf")
        assert config.mean_fragment_length == 400
        assert config.kmer_size == 12
        assert config.threads == 4

    def test_kmer_indexing_disabled(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("loci: [HTT.yaml]\nvcf: sample.vcf\nkmer_size: null\n")
        assert RunConfig.from_yaml(path).kmer_size is None

    def test_quoted_kmer_size_is_converted(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("loci: [HTT.yaml]\nvcf: sample.vcf\nkmer_size: '12'\n")
        assert RunConfig.from_yaml(path).kmer_size == 12

    def test_missing_vcf_raises(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("loci: [HTT.yaml]\n")
        with pytest.raises(ValueError):
            RunConfig.from_yaml(path)

    def test_invalid_kmer_size_raises(self):
        with pytest.raises(ValueError):
            RunConfig(loci=[Path("HTT.yaml")], vcf=Path("sample.vcf"), kmer_size=0)
