import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

# --- GPML Enums ---
class DataNodeType(Enum):
    UNDEFINED = "Undefined"
    GENE_PRODUCT = "GeneProduct"
    DNA = "DNA"
    RNA = "RNA"
    PROTEIN = "Protein"
    COMPLEX = "Complex"
    METABOLITE = "Metabolite"
    PATHWAY = "Pathway"
    DISEASE = "Disease"
    PHENOTYPE = "Phenotype"
    ALIAS = "Alias"
    EVENT = "Event"
    UNKNOWN = "Unknown"

class GroupType(Enum):
    GROUP = "Group"
    TRANSPARENT = "Transparent"
    COMPLEX = "Complex"
    PATHWAY = "Pathway"
    ANALOG = "Analog"
    PARALOG = "Paralog"
    NONE = "None"

class ArrowHeadType(Enum):
    UNDIRECTED = "Undirected"
    DIRECTED = "Directed"
    CONVERSION = "Conversion"
    INHIBITION = "Inhibition"
    CATALYSIS = "Catalysis"
    STIMULATION = "Stimulation"
    BINDING = "Binding"
    TRANSLOCATION = "Translocation"
    TRANSCRIPTION_TRANSLATION = "TranscriptionTranslation"

class AnchorShapeType(Enum):
    SQUARE = "Square"
    CIRCLE = "Circle"
    NONE = "None"

class ElementKind(Enum):
    """What an element id resolves to inside one pathway."""
    DATANODE = "DataNode"
    STATE = "State"
    GROUP = "Group"
    INTERACTION = "Interaction"
    GRAPHICAL_LINE = "GraphicalLine"
    ANCHOR = "Anchor"
    LABEL = "Label"
    SHAPE = "Shape"

class Endpoint(Enum):
    START = "start"
    END = "end"

# --- Core GPML Data Structures ---

@dataclass
class Xref:
    identifier: str
    dataSource: str

@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    arrowHead: ArrowHeadType = ArrowHeadType.UNDIRECTED
    elementRef: Optional[str] = None

@dataclass
class Anchor:
    position: float
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    shapeType: AnchorShapeType = AnchorShapeType.SQUARE

@dataclass
class Comment:
    value: str
    source: Optional[str] = None

# --- Pathway Elements ---

@dataclass
class State:
    textLabel: str
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    xref: Optional[Xref] = None

@dataclass
class DataNode:
    textLabel: str
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: DataNodeType = DataNodeType.UNDEFINED
    groupRef: Optional[str] = None
    aliasRef: Optional[str] = None
    xref: Optional[Xref] = None
    states: List[State] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)

@dataclass
class Interaction:
    """
    A diagram line. Only the first and last waypoint carry semantics:
    they hold the element references and arrowheads of the two ends.
    """
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    groupRef: Optional[str] = None
    xref: Optional[Xref] = None
    waypoints: List[Point] = field(default_factory=list)
    anchors: List[Anchor] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)

    @property
    def startElementRef(self) -> Optional[str]:
        return self.waypoints[0].elementRef if self.waypoints else None

    @property
    def endElementRef(self) -> Optional[str]:
        return self.waypoints[-1].elementRef if len(self.waypoints) > 1 else None

    @property
    def startArrowHead(self) -> ArrowHeadType:
        return self.waypoints[0].arrowHead if self.waypoints else ArrowHeadType.UNDIRECTED

    @property
    def endArrowHead(self) -> ArrowHeadType:
        if len(self.waypoints) > 1:
            return self.waypoints[-1].arrowHead
        return ArrowHeadType.UNDIRECTED

    def element_ref(self, endpoint: Endpoint) -> Optional[str]:
        return self.startElementRef if endpoint is Endpoint.START else self.endElementRef

    def arrow_head(self, endpoint: Endpoint) -> ArrowHeadType:
        return self.startArrowHead if endpoint is Endpoint.START else self.endArrowHead

@dataclass
class GraphicalLine:
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    groupRef: Optional[str] = None
    waypoints: List[Point] = field(default_factory=list)
    anchors: List[Anchor] = field(default_factory=list)

@dataclass
class Label:
    textLabel: str
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    groupRef: Optional[str] = None
    href: Optional[str] = None

@dataclass
class Shape:
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    textLabel: Optional[str] = None
    groupRef: Optional[str] = None

@dataclass
class Group:
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    textLabel: Optional[str] = None
    type: GroupType = GroupType.GROUP
    groupRef: Optional[str] = None
    xref: Optional[Xref] = None
    comments: List[Comment] = field(default_factory=list)


@dataclass
class Pathway:
    title: str
    elementId: str = field(default_factory=lambda: str(uuid.uuid4()))
    organism: Optional[str] = None
    source: Optional[str] = None
    version: Optional[str] = None
    license: Optional[str] = None
    xref: Optional[Xref] = None
    description: Optional[str] = None
    dataNodes: List[DataNode] = field(default_factory=list)
    interactions: List[Interaction] = field(default_factory=list)
    graphicalLines: List[GraphicalLine] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    shapes: List[Shape] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    _index: Optional[Dict[str, Tuple[ElementKind, object]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    # --- query surface used by the resolution code ---

    def reindex(self) -> Dict[str, Tuple[ElementKind, object]]:
        """
        Rebuild the element id index. Call again after mutating the element
        lists of an already queried pathway.

        Returns:
            dict: element id -> (ElementKind, element)
        """
        index = {}

        def register(kind, element):
            # first definition of an id wins, as in a GPML document
            index.setdefault(element.elementId, (kind, element))

        for datanode in self.dataNodes:
            register(ElementKind.DATANODE, datanode)
            for state in datanode.states:
                register(ElementKind.STATE, state)
        for group in self.groups:
            register(ElementKind.GROUP, group)
        for interaction in self.interactions:
            register(ElementKind.INTERACTION, interaction)
            for anchor in interaction.anchors:
                register(ElementKind.ANCHOR, anchor)
        for line in self.graphicalLines:
            register(ElementKind.GRAPHICAL_LINE, line)
            for anchor in line.anchors:
                register(ElementKind.ANCHOR, anchor)
        for label in self.labels:
            register(ElementKind.LABEL, label)
        for shape in self.shapes:
            register(ElementKind.SHAPE, shape)

        self._index = index
        return index

    def _element_index(self):
        if self._index is None:
            self.reindex()
        return self._index

    def lookup_by_id(self, element_id: Optional[str]):
        """Return the element with this id, or None."""
        if not element_id:
            return None
        entry = self._element_index().get(element_id)
        return entry[1] if entry else None

    def kind_of(self, element_id: Optional[str]) -> Optional[ElementKind]:
        if not element_id:
            return None
        entry = self._element_index().get(element_id)
        return entry[0] if entry else None

    def all_lines(self) -> List[Interaction]:
        return list(self.interactions)

    def all_groups(self) -> List[Group]:
        return list(self.groups)

    def anchors_of(self, line) -> List[Anchor]:
        return list(line.anchors)

    def members_of(self, group: Group) -> List[DataNode]:
        """Data nodes declaring this group in their groupRef, in document order."""
        return [node for node in self.dataNodes if node.groupRef == group.elementId]
