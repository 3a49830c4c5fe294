"""
Small builders for in-memory test pathways.
"""
from gpml2wprdf.build_functions.pathway_converter_core import PathwayConverter
from gpml2wprdf.config import ConversionConfig
from gpml2wprdf.data_structure.wiki_data_structure import (
    Anchor, ArrowHeadType, DataNode, DataNodeType, GraphicalLine, Group, GroupType,
    Interaction, Label, Pathway, Point, Xref
)

UNDIRECTED = ArrowHeadType.UNDIRECTED
DIRECTED = ArrowHeadType.DIRECTED
CATALYSIS = ArrowHeadType.CATALYSIS
INHIBITION = ArrowHeadType.INHIBITION

CONFIG = ConversionConfig(base_iri="https://rdf.example.org", wp_id="WP1", revision="1")


def node(element_id, identifier=None, data_source="Entrez Gene", type=DataNodeType.GENE_PRODUCT,
         group_ref=None, label=None, xref=True):
    return DataNode(
        textLabel=label or element_id,
        elementId=element_id,
        type=type,
        groupRef=group_ref,
        xref=Xref(identifier=identifier or element_id, dataSource=data_source) if xref else None,
    )


def line(element_id, start=None, end=None, start_arrow=UNDIRECTED, end_arrow=UNDIRECTED, anchors=()):
    return Interaction(
        elementId=element_id,
        waypoints=[
            Point(elementId=f"{element_id}_p1", elementRef=start, arrowHead=start_arrow),
            Point(elementId=f"{element_id}_p2", elementRef=end, arrowHead=end_arrow),
        ],
        anchors=[Anchor(position=0.5, elementId=anchor_id) for anchor_id in anchors],
    )


def graphical_line(element_id, anchors=()):
    return GraphicalLine(
        elementId=element_id,
        waypoints=[Point(), Point()],
        anchors=[Anchor(position=0.5, elementId=anchor_id) for anchor_id in anchors],
    )


def group(element_id, type=GroupType.COMPLEX, label=None):
    return Group(elementId=element_id, textLabel=label, type=type)


def label(element_id, text="note"):
    return Label(textLabel=text, elementId=element_id)


def make_pathway(nodes=(), lines=(), groups=(), graphical_lines=(), labels=()):
    return Pathway(
        title="Test pathway",
        organism="Homo sapiens",
        xref=Xref(identifier="WP1", dataSource="WikiPathways"),
        dataNodes=list(nodes),
        interactions=list(lines),
        groups=list(groups),
        graphicalLines=list(graphical_lines),
        labels=list(labels),
    )


def convert(pathway):
    return PathwayConverter(pathway, CONFIG).convert()


def node_iri(identifier):
    return f"https://identifiers.org/ncbigene/{identifier}"


def interaction_iri(element_id):
    return f"{CONFIG.pathway_base}/WP/Interaction/{element_id}"


def iris(participants):
    return [p.iri for p in participants]
