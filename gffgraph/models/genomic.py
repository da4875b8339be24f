"""
Data models for GFF3 features and the nodes of the feature graph.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from Bio.SeqFeature import SeqFeature, SimpleLocation


class Strand(Enum):
    """Enumeration of GFF3 strand values."""
    POSITIVE = "+"
    NEGATIVE = "-"
    NONE = "."
    UNKNOWN = "?"
    UNSPECIFIED = ""

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> "Strand":
        """Decode column 7. Anything other than +, -, . or ? is unspecified."""
        if not symbol:
            return cls.UNSPECIFIED
        try:
            strand = cls(symbol.strip())
        except ValueError:
            return cls.UNSPECIFIED
        return strand

    def to_biopython(self) -> Optional[int]:
        """Strand as Biopython encodes it: 1, -1, 0 for unstranded, None when unknown."""
        return {Strand.POSITIVE: 1, Strand.NEGATIVE: -1, Strand.NONE: 0}.get(self)


@dataclass(eq=False)
class Feature:
    """Represents one record (line) of a GFF3 file."""
    landmark_id: str
    source: str
    type: str
    start: int = 0
    end: int = 0
    score: float = 0.0
    strand: Strand = Strand.UNSPECIFIED
    phase: Optional[int] = None
    attributes: Dict[str, List[str]] = field(default_factory=dict)
    id: Optional[str] = None
    name: Optional[str] = None
    alias: Optional[str] = None
    target_of_alignment: Optional[str] = None
    gap: Optional[str] = None
    derives_from: Optional[str] = None
    note: Optional[str] = None
    ontology_term: Optional[str] = None
    parents: List[str] = field(default_factory=list)
    dbxref: List[str] = field(default_factory=list)
    line_num: Optional[int] = None

    @property
    def identity(self) -> Tuple[Optional[str], int, int, str]:
        """The (id, start, end, landmark_id) tuple that decides whether two records are the same."""
        return (self.id, self.start, self.end, self.landmark_id)

    def __eq__(self, other):
        if not isinstance(other, Feature):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self):
        return hash(self.identity)

    def to_seqfeature(self) -> SeqFeature:
        """
        Convert to a Biopython SeqFeature.

        The location is 0-based and half-open, as Biopython expects; the
        attributes become the qualifiers.
        """
        low, high = sorted((self.start, self.end))
        location = SimpleLocation(max(low - 1, 0), high, strand=self.strand.to_biopython())
        qualifiers = {tag: list(values) for tag, values in self.attributes.items()}
        return SeqFeature(location, type=self.type, id=self.id or "<unknown id>", qualifiers=qualifiers)


@dataclass
class FeatureNode:
    """
    A vertex of the feature graph.

    A node may exist before its feature has been read, when a child names it as
    parent first. Edges are stored as node ids; the owning FeatureGraph resolves
    them.
    """
    id: str
    feature: Optional[Feature] = None
    parent_ids: List[str] = field(default_factory=list)
    child_ids: List[str] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return self.feature is None

    def attach(self, feature: Feature) -> bool:
        """Attach the feature read for this id. Returns False if one is already attached."""
        if self.feature is not None:
            return False
        self.feature = feature
        return True
