"""
Interaction resolution: overall type of a merged line set and the roles
of every participant.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from gpml2wprdf.build_functions.build_complexes import get_group_identity
from gpml2wprdf.data_structure.resolved_structure import (
    InteractionKind, ParticipantIdentity, ParticipantShape, ResolvedInteraction,
    unique_participants
)
from gpml2wprdf.data_structure.wiki_data_structure import (
    ArrowHeadType, ElementKind, Endpoint, Interaction
)
from gpml2wprdf.errors import DropReason
from gpml2wprdf.utils.identifiers import identifiers_org_url
from gpml2wprdf.utils.participant_cache import sanitize_element_id

logger = logging.getLogger(__name__)


def interaction_iri(config, element_id):
    return f"{config.pathway_base}/WP/Interaction/{sanitize_element_id(element_id)}"


def interaction_about(config, element_id):
    return f"{config.pathway_base}/Interaction/{sanitize_element_id(element_id)}"


def reconcile_interaction_type(lines: Sequence[Interaction]) -> Optional[ArrowHeadType]:
    """
    Decide the overall arrowhead of a merged line set.

    Args:
        lines: Merged lines

    Returns:
        ArrowHeadType: The only non-undirected arrowhead, UNDIRECTED when
        there is none, or None when the lines disagree
    """
    distinct = []
    for line in lines:
        for arrow_head in (line.startArrowHead, line.endArrowHead):
            if arrow_head is not ArrowHeadType.UNDIRECTED and arrow_head not in distinct:
                distinct.append(arrow_head)

    if len(distinct) > 1:
        return None
    if len(distinct) == 1:
        return distinct[0]
    return ArrowHeadType.UNDIRECTED


def get_line_identity(line_id, cache, config):
    """
    Get the identity of the interaction named after a primary line,
    creating and caching it on first use.
    """
    identity = cache.get(line_id)
    if identity is None:
        identity = ParticipantIdentity(
            iri=interaction_iri(config, line_id),
            elementId=line_id,
            shape=ParticipantShape.LINE,
            about=interaction_about(config, line_id),
        )
        cache.put(line_id, identity)
    return identity


class ParticipantClassifier:
    """
    Resolves line endpoints to participant identities and sorts them into
    sources, targets and others.
    """

    def __init__(self, pathway, cache, anchor_index, config, report, primary_of: Dict[str, str]):
        self.pathway = pathway
        self.cache = cache
        self.anchor_index = anchor_index
        self.config = config
        self.report = report
        # line id -> id of the primary line its interaction is named after
        self.primary_of = primary_of

    def resolve_endpoint(self, line, endpoint, merged_ids) -> Optional[ParticipantIdentity]:
        """
        Resolve the element an endpoint references.

        Args:
            line (Interaction): Line owning the endpoint
            endpoint (Endpoint): START or END
            merged_ids (set): IDs of the lines merged into the current interaction

        Returns:
            ParticipantIdentity or None if the endpoint is skipped
        """
        ref = line.element_ref(endpoint)
        if not ref:
            return None

        kind = self.pathway.kind_of(ref)
        if kind is None:
            self.report.add_drop(
                DropReason.DANGLING_REFERENCE,
                f"{endpoint.value} of line references unknown element '{ref}', endpoint dropped",
                line.elementId
            )
            return None

        if kind is ElementKind.DATANODE:
            identity = self.cache.get(ref)
            if identity is None:
                self.report.add_warning(
                    f"Line '{line.elementId}': data node '{ref}' has no identity, endpoint dropped"
                )
            return identity

        if kind is ElementKind.GROUP:
            return get_group_identity(self.pathway.lookup_by_id(ref), self.pathway, self.cache, self.config)

        if kind is ElementKind.ANCHOR:
            owner = self.anchor_index.owner_of(ref)
            if not isinstance(owner, Interaction):
                self.report.add_warning(
                    f"Line '{line.elementId}': anchor '{ref}' belongs to a graphical line, endpoint dropped"
                )
                return None
            if owner.elementId in merged_ids:
                # joint between two segments of this interaction
                return None
            return self._line_identity(owner.elementId)

        if kind is ElementKind.INTERACTION:
            if ref in merged_ids:
                return None
            return self._line_identity(ref)

        self.report.add_warning(
            f"Line '{line.elementId}': {endpoint.value} references {kind.value} '{ref}', endpoint dropped"
        )
        return None

    def _line_identity(self, line_id):
        primary_id = self.primary_of.get(line_id, line_id)
        return get_line_identity(primary_id, self.cache, self.config)

    def classify(self, lines, overall: ArrowHeadType) -> Tuple[tuple, tuple, tuple]:
        """
        Bucket every endpoint of the merged lines.

        An undirected interaction puts everything in others. Otherwise an
        endpoint is a source when its own arrowhead is undirected and a
        target when it carries any other arrowhead.

        Args:
            lines (list): Merged lines
            overall (ArrowHeadType): Reconciled arrowhead

        Returns:
            tuple: (sources, targets, others), each without duplicates
        """
        merged_ids = {line.elementId for line in lines}
        sources, targets, others = [], [], []

        for line in lines:
            for endpoint in (Endpoint.START, Endpoint.END):
                identity = self.resolve_endpoint(line, endpoint, merged_ids)
                if identity is None:
                    continue
                if overall is ArrowHeadType.UNDIRECTED:
                    others.append(identity)
                elif line.arrow_head(endpoint) is ArrowHeadType.UNDIRECTED:
                    sources.append(identity)
                else:
                    targets.append(identity)

        return unique_participants(sources), unique_participants(targets), unique_participants(others)


def create_resolved_interaction(primary, merged: List[Interaction], regulatory: List[Interaction],
                                classifier: ParticipantClassifier, config, report):
    """
    Build the interaction for a merged line set.

    Args:
        primary (Interaction): Line the interaction is named after
        merged (list): Lines merged into it, primary first
        regulatory (list): Lines acting on it through its anchors
        classifier (ParticipantClassifier): Endpoint resolver
        config (ConversionConfig): Conversion configuration
        report (ResolutionReport): Report for drops

    Returns:
        ResolvedInteraction or None if the interaction is dropped. An
        interaction of kind UNSUPPORTED is returned and reported.
    """
    overall = reconcile_interaction_type(merged)
    if overall is None:
        arrow_heads = sorted({
            a.value for line in merged for a in (line.startArrowHead, line.endArrowHead)
            if a is not ArrowHeadType.UNDIRECTED
        })
        report.add_drop(
            DropReason.AMBIGUOUS_INTERACTION_TYPE,
            f"Merged lines {[line.elementId for line in merged]} disagree on arrowhead: {arrow_heads}",
            primary.elementId
        )
        return None

    sources, targets, others = classifier.classify(merged, overall)
    participants = unique_participants(sources + targets + others)
    if not any(p.shape is ParticipantShape.NODE for p in participants):
        shapes = sorted({p.shape.value for p in participants}) or ["none"]
        report.add_drop(
            DropReason.UNSUPPORTED_PARTICIPANT_SHAPE,
            f"Interaction has no data node participant (participants: {', '.join(shapes)})",
            primary.elementId
        )
        return None

    kind = InteractionKind.from_arrow_head(overall)
    if kind is InteractionKind.UNSUPPORTED:
        report.add_drop(
            DropReason.UNSUPPORTED_ARROWHEAD,
            f"Arrowhead '{overall.value}' has no interaction type",
            primary.elementId
        )

    xref = identifiers_org_url(primary.xref)
    return ResolvedInteraction(
        elementId=primary.elementId,
        iri=interaction_iri(config, primary.elementId),
        kind=kind,
        arrowHead=overall,
        sources=sources,
        targets=targets,
        others=others,
        mergedLineIds=tuple(line.elementId for line in merged),
        regulatoryLineIds=tuple(line.elementId for line in regulatory),
        about=interaction_about(config, primary.elementId),
        xrefIri=xref[0] if xref else None,
    )
