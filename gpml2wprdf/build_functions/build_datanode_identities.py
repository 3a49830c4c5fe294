import logging

from gpml2wprdf.data_structure.resolved_structure import ParticipantIdentity, ParticipantShape
from gpml2wprdf.utils.identifiers import identifiers_org_url
from gpml2wprdf.utils.participant_cache import sanitize_element_id
from gpml2wprdf.utils.text_cleaner import clean_text_label

logger = logging.getLogger(__name__)


def create_datanode_identity(datanode, config):
    """
    Create the participant identity of a data node from its Xref.

    Args:
        datanode (DataNode): Data node from the pathway
        config (ConversionConfig): Conversion configuration

    Returns:
        ParticipantIdentity or None if the node has no usable Xref
    """
    resolved = identifiers_org_url(datanode.xref)
    if resolved is None:
        return None

    iri, data_source, identifier = resolved
    return ParticipantIdentity(
        iri=iri,
        elementId=datanode.elementId,
        shape=ParticipantShape.NODE,
        label=clean_text_label(datanode.textLabel),
        nodeType=datanode.type,
        identifier=identifier,
        dataSource=data_source,
        about=f"{config.pathway_base}/DataNode/{sanitize_element_id(datanode.elementId)}",
    )


def create_all_datanode_identities(pathway, cache, config, report=None):
    """
    Resolve every data node of a pathway and fill the participant cache.

    Must run before any line or group is resolved: a node missing from the
    cache afterwards is treated as "not a molecule".

    Args:
        pathway (Pathway): Pathway being converted
        cache (ParticipantCache): Cache to fill
        config (ConversionConfig): Conversion configuration
        report (ResolutionReport): Optional report for duplicate IDs

    Returns:
        list: ParticipantIdentity objects in document order
    """
    identities = []
    skipped = 0

    for datanode in pathway.dataNodes:
        if datanode.elementId in cache:
            # a repeated elementId, the first definition already owns the identity
            if report is not None:
                report.add_warning(f"Data node ID '{datanode.elementId}' is defined more than once, "
                                   f"keeping the first definition")
            continue

        identity = create_datanode_identity(datanode, config)
        if identity is None:
            skipped += 1
            logger.debug("Data node '%s' (%s) has no usable xref", datanode.elementId, datanode.textLabel)
            continue

        cache.put(datanode.elementId, identity)
        identities.append(identity)

    logger.info("Resolved %d of %d data nodes (%d without usable xref)",
                len(identities), len(pathway.dataNodes), skipped)
    return identities
