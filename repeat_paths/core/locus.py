"""
Data models for a locus: its graph and the variants it contains.

Author: Kevin R. Roy
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .graph import Graph


# Marks a variant node that is absent from the graph
ABSENT_NODE = -1


class VariantType(Enum):
    """Supported variant classifications."""
    REPEAT = "repeat"
    SMALL_VARIANT = "small_variant"

    @classmethod
    def from_string(cls, value: str) -> 'VariantType':
        normalized = value.strip().lower().replace('-', '_')
        if normalized in ('repeat', 'str', 'rarerepeat'):
            return cls.REPEAT
        if normalized in ('small_variant', 'smallvariant', 'snv', 'indel'):
            return cls.SMALL_VARIANT
        raise ValueError(f"Unknown variant type: {value}")


@dataclass
class VariantSpecification:
    """
    A variant annotated on the locus graph.

    Attributes:
        variant_id: Identifier used to look the variant up in the call file
        variant_type: Repeat or small variant
        nodes: Graph nodes making up the variant; None or -1 mark absent nodes
    """
    variant_id: str
    variant_type: VariantType
    nodes: List[Optional[int]] = field(default_factory=list)

    @property
    def present_nodes(self) -> List[int]:
        return [n for n in self.nodes if n is not None and n != ABSENT_NODE]

    @property
    def node_range(self) -> Tuple[int, int]:
        """Inclusive (from, to) range of the variant's present nodes."""
        present = self.present_nodes
        if not present:
            raise ValueError(f"Variant {self.variant_id} has no graph nodes")
        return min(present), max(present)

    def __repr__(self) -> str:
        return f"VariantSpecification(id={self.variant_id}, type={self.variant_type.value}, nodes={self.nodes})"


@dataclass
class LocusSpecification:
    """Locus graph plus the ordered list of variants it carries."""
    locus_id: str
    graph: Graph
    variants: List[VariantSpecification] = field(default_factory=list)

    def get_variant(self, variant_id: str) -> VariantSpecification:
        for variant in self.variants:
            if variant.variant_id == variant_id:
                return variant
        raise KeyError(f"Locus {self.locus_id} has no variant {variant_id}")
