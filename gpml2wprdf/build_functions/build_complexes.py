"""
Group and complex resolution.

A group referenced by a line or resolved as a complex gets one participant
identity, minted on first use and shared through the participant cache.
Complex groups with at least two resolvable members also yield a binding
interaction between the members.
"""
import logging

from gpml2wprdf.data_structure.resolved_structure import (
    ComplexRecord, InteractionKind, ParticipantIdentity, ParticipantShape,
    ResolvedInteraction, unique_participants
)
from gpml2wprdf.data_structure.wiki_data_structure import ArrowHeadType, DataNodeType, GroupType
from gpml2wprdf.errors import DropReason
from gpml2wprdf.utils.identifiers import identifiers_org_url
from gpml2wprdf.utils.participant_cache import sanitize_element_id
from gpml2wprdf.utils.text_cleaner import clean_text_label

logger = logging.getLogger(__name__)


def find_embedded_complex_nodes(group, pathway):
    """Member data nodes typed Complex, in document order."""
    return [node for node in pathway.members_of(group) if node.type is DataNodeType.COMPLEX]


def get_group_identity(group, pathway, cache, config):
    """
    Get the identity of a group, creating and caching it on first use.

    Complex groups are named .../Complex/<id> and take label and xref from
    their embedded Complex data node when there is one. Other groups are
    named .../Group/<id>.

    Args:
        group (Group): Group from the pathway
        pathway (Pathway): Pathway being converted
        cache (ParticipantCache): Shared participant cache
        config (ConversionConfig): Conversion configuration

    Returns:
        ParticipantIdentity
    """
    identity = cache.get(group.elementId)
    if identity is not None:
        return identity

    group_id = sanitize_element_id(group.elementId)
    label = clean_text_label(group.textLabel)
    xref = group.xref
    node_type = None

    if group.type is GroupType.COMPLEX:
        iri = f"{config.pathway_base}/Complex/{group_id}"
        node_type = DataNodeType.COMPLEX
        embedded = find_embedded_complex_nodes(group, pathway)
        if embedded:
            if embedded[0].xref is not None and (embedded[0].xref.identifier or "").strip():
                label = clean_text_label(embedded[0].textLabel) or label
                xref = embedded[0].xref
    else:
        iri = f"{config.pathway_base}/Group/{group_id}"

    identifier = data_source = None
    resolved = identifiers_org_url(xref)
    if resolved is not None:
        _, data_source, identifier = resolved

    identity = ParticipantIdentity(
        iri=iri,
        elementId=group.elementId,
        shape=ParticipantShape.GROUP,
        label=label,
        nodeType=node_type,
        identifier=identifier,
        dataSource=data_source,
        about=f"{config.pathway_base}/Group/{group_id}",
    )
    cache.put(group.elementId, identity)
    return identity


def create_complex_record(group, pathway, cache, config, report):
    """
    Resolve a complex group into a composite identity and a binding interaction.

    Args:
        group (Group): Group with type Complex
        pathway (Pathway): Pathway being converted
        cache (ParticipantCache): Participant cache filled with data node identities
        config (ConversionConfig): Conversion configuration
        report (ResolutionReport): Report for dropped complexes

    Returns:
        ComplexRecord or None if fewer than two members resolve
    """
    embedded = find_embedded_complex_nodes(group, pathway)
    embedded_node = embedded[0] if embedded else None
    if len(embedded) > 1:
        report.add_warning(
            f"Complex '{group.elementId}' has {len(embedded)} Complex data nodes, "
            f"using '{embedded_node.elementId}' for its label and xref"
        )

    resolved = []
    for node in pathway.members_of(group):
        if embedded_node is not None and node.elementId == embedded_node.elementId:
            continue
        identity = cache.get(node.elementId)
        if identity is None:
            logger.debug("Complex '%s': member '%s' has no identity", group.elementId, node.elementId)
            continue
        resolved.append(identity)

    if len(resolved) < 2:
        report.add_drop(
            DropReason.DEGENERATE_COMPLEX,
            f"Complex has {len(resolved)} resolvable member(s), at least 2 are needed",
            group.elementId
        )
        return None

    identity = get_group_identity(group, pathway, cache, config)
    members = unique_participants(resolved)
    binding = ResolvedInteraction(
        elementId=group.elementId,
        iri=f"{config.pathway_base}/ComplexBinding/{sanitize_element_id(group.elementId)}",
        kind=InteractionKind.UNDIRECTED,
        arrowHead=ArrowHeadType.UNDIRECTED,
        others=members,
        about=identity.about,
        complexBinding=True,
    )
    return ComplexRecord(
        group=group,
        identity=identity,
        members=members,
        binding=binding,
        embeddedComplexId=embedded_node.elementId if embedded_node is not None else None,
    )


def create_all_complex_records(pathway, cache, config, report):
    """
    Resolve every complex group of a pathway.

    Returns:
        list: ComplexRecord objects in document order
    """
    records = []
    for group in pathway.all_groups():
        if group.type is not GroupType.COMPLEX:
            continue
        record = create_complex_record(group, pathway, cache, config, report)
        if record is not None:
            records.append(record)

    logger.info("Resolved %d complexes", len(records))
    return records
