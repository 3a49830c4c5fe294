import logging
import uuid
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

import chardet

from gpml2wprdf.data_structure.wiki_data_structure import (
    Anchor, AnchorShapeType, ArrowHeadType, Comment, DataNode, DataNodeType,
    GraphicalLine, Group, GroupType, Interaction, Label, Pathway, Point, Shape,
    State, Xref
)
from gpml2wprdf.errors import GPMLParseError

logger = logging.getLogger(__name__)

GPML_2021_NS = "http://pathvisio.org/GPML/2021"

# GPML 2013a arrowheads and MIM names -> GPML 2021 arrowheads
LEGACY_ARROW_HEADS = {
    'line': ArrowHeadType.UNDIRECTED,
    'arrow': ArrowHeadType.DIRECTED,
    'tbar': ArrowHeadType.INHIBITION,
    'mim-conversion': ArrowHeadType.CONVERSION,
    'mim-catalysis': ArrowHeadType.CATALYSIS,
    'mim-inhibition': ArrowHeadType.INHIBITION,
    'mim-stimulation': ArrowHeadType.STIMULATION,
    'mim-necessary-stimulation': ArrowHeadType.STIMULATION,
    'mim-binding': ArrowHeadType.BINDING,
    'mim-translocation': ArrowHeadType.TRANSLOCATION,
    'mim-transcription-translation': ArrowHeadType.TRANSCRIPTION_TRANSLATION,
}

# Attribute names per dialect
ATTRIBUTES_2021 = {
    'id': 'elementId', 'ref': 'elementRef', 'label': 'textLabel', 'type': 'type',
    'group_ref': 'groupRef', 'group_type': 'type', 'arrow': 'arrowHead',
    'position': 'position', 'anchor_shape': 'shapeType', 'xref_id': 'identifier',
    'xref_source': 'dataSource', 'title': 'title', 'organism': 'organism',
    'version': 'version', 'x': 'x', 'y': 'y', 'alias_ref': 'aliasRef',
}
ATTRIBUTES_2013 = {
    'id': 'GraphId', 'ref': 'GraphRef', 'label': 'TextLabel', 'type': 'Type',
    'group_ref': 'GroupRef', 'group_type': 'Style', 'arrow': 'ArrowHead',
    'position': 'Position', 'anchor_shape': 'Shape', 'xref_id': 'ID',
    'xref_source': 'Database', 'title': 'Name', 'organism': 'Organism',
    'version': 'Version', 'x': 'X', 'y': 'Y', 'alias_ref': 'AliasRef',
}


def local_name(tag):
    """Strip the namespace from an element tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def _enum_by_value(enum_cls, value, default):
    if not value:
        return default
    wanted = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return default


def parse_arrow_head(value):
    """
    Map a GPML arrowHead value (2021 or legacy) to an ArrowHeadType.

    Args:
        value: Raw attribute value (None means no arrowhead)

    Returns:
        ArrowHeadType: Unknown values fall back to UNDIRECTED
    """
    if not value:
        return ArrowHeadType.UNDIRECTED
    arrow_head = _enum_by_value(ArrowHeadType, value, None)
    if arrow_head is not None:
        return arrow_head
    arrow_head = LEGACY_ARROW_HEADS.get(value.strip().lower())
    if arrow_head is not None:
        return arrow_head
    logger.warning("Unknown arrowHead '%s', treating it as Undirected", value)
    return ArrowHeadType.UNDIRECTED


def _float(value, default=0.0):
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class FileReader:
    """Read a GPML file with encoding handling."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def find(self, filename: str) -> Optional[Path]:
        """Return the file path, searching recursively under base_dir if needed."""
        path = Path(filename)
        if path.is_file():
            return path
        matches = list(self.base_dir.rglob(filename))
        if not matches:
            logger.error("File '%s' not found under %s", filename, self.base_dir)
            return None
        logger.debug("Found file: %s", matches[0])
        return matches[0]

    def _detect_encoding(self, file_path: Path) -> Optional[str]:
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)
            result = chardet.detect(raw_data)
        encoding = result['encoding']
        confidence = result['confidence'] or 0.0
        logger.debug("Detected encoding for %s: %s (confidence: %.2f)", file_path.name, encoding, confidence)
        return encoding if confidence >= 0.7 else None

    def read(self, filename: str) -> str:
        """Find the file and read it with the appropriate encoding."""
        file_path = self.find(filename)
        if file_path is None:
            raise FileNotFoundError(f"Could not find file: {filename}")

        detected_encoding = self._detect_encoding(file_path)
        encodings_to_try = [e for e in [detected_encoding, 'utf-8', 'latin-1'] if e]
        encodings_to_try = list(dict.fromkeys(encodings_to_try))

        for enc in encodings_to_try:
            try:
                with open(file_path, 'r', encoding=enc) as f:
                    content = f.read()
                logger.debug("Read %s with encoding: %s", file_path.name, enc)
                return content
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Failed with %s: %s", enc, e)

        logger.warning("All encodings failed for %s, reading utf-8 with replacement", file_path.name)
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()


class GPMLParser:
    """
    Parse GPML 2021 and GPML 2013a documents into a Pathway.
    """

    def parse_file(self, filename: str, base_dir: Optional[Path] = None) -> Pathway:
        content = FileReader(base_dir).read(filename)
        return self.parse_string(content, source=str(filename))

    def parse_string(self, content: str, source: str = "<string>") -> Pathway:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise GPMLParseError(f"XML parsing failed for {source}: {e}") from e

        if local_name(root.tag) != "Pathway":
            raise GPMLParseError(f"Root element of {source} is not 'Pathway', got '{root.tag}'")

        attrs = self._dialect(root)
        pathway = Pathway(
            title=root.get(attrs['title']) or "",
            organism=root.get(attrs['organism']),
            version=root.get(attrs['version']),
            license=root.get('license') or root.get('License'),
        )
        self._parse_pathway_metadata(root, pathway, attrs)

        group_ids = {}
        pathway.groups = [self._parse_group(e, attrs, group_ids) for e in self._all(root, 'Group')]
        pathway.dataNodes = [self._parse_datanode(e, attrs) for e in self._all(root, 'DataNode')]
        pathway.interactions = [self._parse_interaction(e, attrs) for e in self._all(root, 'Interaction')]
        pathway.graphicalLines = [self._parse_graphical_line(e, attrs) for e in self._all(root, 'GraphicalLine')]
        pathway.labels = [
            Label(textLabel=e.get(attrs['label']) or "", elementId=self._element_id(e, attrs),
                  groupRef=e.get(attrs['group_ref']), href=e.get('href') or e.get('Href'))
            for e in self._all(root, 'Label')
        ]
        pathway.shapes = [
            Shape(elementId=self._element_id(e, attrs), textLabel=e.get(attrs['label']),
                  groupRef=e.get(attrs['group_ref']))
            for e in self._all(root, 'Shape')
        ]

        if attrs is ATTRIBUTES_2013:
            self._attach_legacy_states(root, pathway, attrs)
            self._remap_legacy_group_refs(pathway, group_ids)

        pathway.reindex()
        logger.info(
            "Parsed %s: %d data nodes, %d interactions, %d groups",
            source, len(pathway.dataNodes), len(pathway.interactions), len(pathway.groups)
        )
        return pathway

    # --- helpers ---

    def _dialect(self, root) -> Dict[str, str]:
        if root.tag.startswith(f"{{{GPML_2021_NS}}}") or root.get('title') is not None:
            return ATTRIBUTES_2021
        return ATTRIBUTES_2013

    def _all(self, root, name) -> List[ET.Element]:
        return [e for e in root.iter() if local_name(e.tag) == name]

    def _children(self, element, name) -> List[ET.Element]:
        return [e for e in element if local_name(e.tag) == name]

    def _element_id(self, element, attrs) -> str:
        element_id = element.get(attrs['id'])
        if not element_id:
            # elements without an id can still be parsed, but nothing can point at them
            element_id = str(uuid.uuid4())
        return element_id

    def _parse_xref(self, element, attrs) -> Optional[Xref]:
        for xref in self._children(element, 'Xref'):
            return Xref(
                identifier=(xref.get(attrs['xref_id']) or "").strip(),
                dataSource=(xref.get(attrs['xref_source']) or "").strip(),
            )
        return None

    def _parse_comments(self, element) -> List[Comment]:
        comments = []
        for comment in self._children(element, 'Comment'):
            text = (comment.text or "").strip()
            if text:
                comments.append(Comment(value=text, source=comment.get('source') or comment.get('Source')))
        return comments

    def _parse_pathway_metadata(self, root, pathway, attrs):
        pathway.xref = self._parse_xref(root, attrs)
        pathway.comments = self._parse_comments(root)
        for description in self._children(root, 'Description'):
            pathway.description = (description.text or "").strip() or None
        if pathway.description is None:
            for comment in pathway.comments:
                if comment.source == 'WikiPathways-description':
                    pathway.description = comment.value

    def _parse_datanode(self, element, attrs) -> DataNode:
        node = DataNode(
            textLabel=element.get(attrs['label']) or "",
            elementId=self._element_id(element, attrs),
            type=_enum_by_value(DataNodeType, element.get(attrs['type']), DataNodeType.UNDEFINED),
            groupRef=element.get(attrs['group_ref']),
            aliasRef=element.get(attrs['alias_ref']),
            xref=self._parse_xref(element, attrs),
            comments=self._parse_comments(element),
        )
        for state in self._all(element, 'State'):
            node.states.append(State(
                textLabel=state.get(attrs['label']) or "",
                elementId=self._element_id(state, attrs),
                xref=self._parse_xref(state, attrs),
            ))
        return node

    def _parse_points_and_anchors(self, element, attrs):
        points = []
        for point in self._all(element, 'Point'):
            points.append(Point(
                x=_float(point.get(attrs['x'])),
                y=_float(point.get(attrs['y'])),
                elementId=self._element_id(point, attrs),
                arrowHead=parse_arrow_head(point.get(attrs['arrow'])),
                elementRef=point.get(attrs['ref']) or None,
            ))
        anchors = []
        for anchor in self._all(element, 'Anchor'):
            anchors.append(Anchor(
                position=_float(anchor.get(attrs['position']), 0.5),
                elementId=self._element_id(anchor, attrs),
                shapeType=_enum_by_value(AnchorShapeType, anchor.get(attrs['anchor_shape']), AnchorShapeType.SQUARE),
            ))
        return points, anchors

    def _parse_interaction(self, element, attrs) -> Interaction:
        points, anchors = self._parse_points_and_anchors(element, attrs)
        interaction = Interaction(
            elementId=self._element_id(element, attrs),
            groupRef=element.get(attrs['group_ref']),
            xref=self._parse_xref(element, attrs),
            waypoints=points,
            anchors=anchors,
            comments=self._parse_comments(element),
        )
        if len(points) < 2:
            logger.warning("Interaction '%s' has fewer than 2 waypoints (%d)", interaction.elementId, len(points))
        return interaction

    def _parse_graphical_line(self, element, attrs) -> GraphicalLine:
        points, anchors = self._parse_points_and_anchors(element, attrs)
        return GraphicalLine(
            elementId=self._element_id(element, attrs),
            groupRef=element.get(attrs['group_ref']),
            waypoints=points,
            anchors=anchors,
        )

    def _parse_group(self, element, attrs, group_ids) -> Group:
        element_id = element.get(attrs['id']) or element.get('GroupId') or str(uuid.uuid4())
        legacy_group_id = element.get('GroupId')
        if legacy_group_id:
            group_ids[legacy_group_id] = element_id
        return Group(
            elementId=element_id,
            textLabel=element.get(attrs['label']),
            type=_enum_by_value(GroupType, element.get(attrs['group_type']), GroupType.GROUP),
            groupRef=element.get(attrs['group_ref']),
            xref=self._parse_xref(element, attrs),
            comments=self._parse_comments(element),
        )

    def _attach_legacy_states(self, root, pathway, attrs):
        # GPML 2013a states are top-level elements pointing at their data node
        nodes = {node.elementId: node for node in pathway.dataNodes}
        for state in self._children(root, 'State'):
            parent = nodes.get(state.get(attrs['ref']))
            if parent is None:
                logger.warning("State '%s' refers to missing data node '%s'",
                               state.get(attrs['id']), state.get(attrs['ref']))
                continue
            parent.states.append(State(
                textLabel=state.get(attrs['label']) or "",
                elementId=self._element_id(state, attrs),
                xref=self._parse_xref(state, attrs),
            ))

    def _remap_legacy_group_refs(self, pathway, group_ids):
        # GPML 2013a members point at the GroupId, not at the group's GraphId
        for element in pathway.dataNodes + pathway.groups + pathway.interactions + pathway.labels + pathway.shapes:
            if element.groupRef in group_ids:
                element.groupRef = group_ids[element.groupRef]


def read_pathway(filename: str, base_dir: Optional[Path] = None) -> Pathway:
    """Read a GPML file into a Pathway."""
    return GPMLParser().parse_file(filename, base_dir)
