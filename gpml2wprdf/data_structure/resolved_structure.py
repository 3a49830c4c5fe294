"""
Records produced by interaction and complex resolution.

These are handed to the writers in object2wprdf and are not mutated once
a conversion has finished.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from gpml2wprdf.data_structure.wiki_data_structure import ArrowHeadType, DataNodeType, Group


class ParticipantShape(Enum):
    NODE = "DataNode"
    GROUP = "Group"
    LINE = "Interaction"


class InteractionKind(Enum):
    CATALYSIS = "catalysis"
    DIRECTED = "directed"
    UNDIRECTED = "undirected"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_arrow_head(cls, arrow_head: ArrowHeadType) -> "InteractionKind":
        if arrow_head is ArrowHeadType.CATALYSIS:
            return cls.CATALYSIS
        if arrow_head is ArrowHeadType.DIRECTED:
            return cls.DIRECTED
        if arrow_head is ArrowHeadType.UNDIRECTED:
            return cls.UNDIRECTED
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class ParticipantIdentity:
    """Resolved handle of a data node, group or interaction."""
    iri: str
    elementId: str
    shape: ParticipantShape = ParticipantShape.NODE
    label: Optional[str] = None
    nodeType: Optional[DataNodeType] = None
    identifier: Optional[str] = None
    dataSource: Optional[str] = None
    about: Optional[str] = None


@dataclass(frozen=True)
class ResolvedInteraction:
    elementId: str
    iri: str
    kind: InteractionKind
    arrowHead: ArrowHeadType
    sources: Tuple[ParticipantIdentity, ...] = ()
    targets: Tuple[ParticipantIdentity, ...] = ()
    others: Tuple[ParticipantIdentity, ...] = ()
    mergedLineIds: Tuple[str, ...] = ()
    regulatoryLineIds: Tuple[str, ...] = ()
    about: Optional[str] = None
    xrefIri: Optional[str] = None
    complexBinding: bool = False

    @property
    def participants(self) -> Tuple[ParticipantIdentity, ...]:
        return unique_participants(self.sources + self.targets + self.others)


@dataclass(frozen=True)
class ComplexRecord:
    group: Group
    identity: ParticipantIdentity
    members: Tuple[ParticipantIdentity, ...]
    binding: ResolvedInteraction
    embeddedComplexId: Optional[str] = None


@dataclass
class ResolutionResult:
    pathway_iri: str
    interactions: List[ResolvedInteraction] = field(default_factory=list)
    unsupported: List[ResolvedInteraction] = field(default_factory=list)
    complexes: List[ComplexRecord] = field(default_factory=list)
    datanodes: List[ParticipantIdentity] = field(default_factory=list)
    part_of: Dict[str, List[str]] = field(default_factory=dict)
    report: Optional[object] = None
    stats: Dict[str, int] = field(default_factory=dict)

    def add_part_of(self, member_iri: str, container_iri: str):
        containers = self.part_of.setdefault(member_iri, [])
        if container_iri not in containers:
            containers.append(container_iri)

    def interaction_by_id(self, element_id: str) -> Optional[ResolvedInteraction]:
        for interaction in self.interactions:
            if interaction.elementId == element_id:
                return interaction
        return None


def unique_participants(participants) -> Tuple[ParticipantIdentity, ...]:
    """Drop repeated resources, keeping first-seen order."""
    seen = set()
    ordered = []
    for participant in participants:
        if participant.iri in seen:
            continue
        seen.add(participant.iri)
        ordered.append(participant)
    return tuple(ordered)
