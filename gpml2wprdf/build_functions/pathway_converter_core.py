"""
Pathway conversion core: turns a parsed GPML pathway into resolved
interactions and complexes.
"""
import dataclasses
import logging

from gpml2wprdf.build_functions.anchor_index import AnchorIndex
from gpml2wprdf.build_functions.build_complexes import create_all_complex_records
from gpml2wprdf.build_functions.build_datanode_identities import create_all_datanode_identities
from gpml2wprdf.build_functions.build_interactions import (
    ParticipantClassifier, create_resolved_interaction
)
from gpml2wprdf.build_functions.line_merger import LineMerger
from gpml2wprdf.config import ConversionConfig
from gpml2wprdf.data_structure.resolved_structure import (
    InteractionKind, ParticipantShape, ResolutionResult
)
from gpml2wprdf.errors import DropReason, MissingPathwayError
from gpml2wprdf.utils.participant_cache import ParticipantCache
from gpml2wprdf.validation.resolution_report import ResolutionReport

logger = logging.getLogger(__name__)


class PathwayConverter:
    """
    Converts one pathway.

    Order of work: data node identities fill the participant cache, lines
    are grouped into merged interactions, each group is typed and
    classified, and complex groups are resolved last.
    """

    def __init__(self, pathway, config=None, report=None):
        """
        Args:
            pathway (Pathway): Parsed pathway
            config (ConversionConfig): Defaults to ConversionConfig.for_pathway(pathway)
            report (ResolutionReport): Report to fill (a new one when omitted)
        """
        self.pathway = pathway
        self.config = config
        self.report = report if report is not None else ResolutionReport()
        self.cache = ParticipantCache()
        self.result = None

    def convert(self) -> ResolutionResult:
        """
        Run the conversion.

        Returns:
            ResolutionResult

        Raises:
            MissingPathwayError: if no pathway was given
        """
        if self.pathway is None:
            raise MissingPathwayError("No pathway given to convert")

        if self.config is None:
            self.config = ConversionConfig.for_pathway(self.pathway)
        self.pathway.reindex()

        result = ResolutionResult(pathway_iri=self.config.pathway_iri, report=self.report)
        result.datanodes = create_all_datanode_identities(self.pathway, self.cache, self.config, self.report)

        anchor_index = AnchorIndex(self.pathway)
        merger = LineMerger(self.pathway, anchor_index)
        line_groups = self._group_lines(merger)

        primary_of = {}
        for primary, merged, _ in line_groups:
            for line in merged:
                primary_of[line.elementId] = primary.elementId

        classifier = ParticipantClassifier(
            self.pathway, self.cache, anchor_index, self.config, self.report, primary_of
        )
        resolved = []
        for primary, merged, regulatory in line_groups:
            interaction = create_resolved_interaction(
                primary, merged, regulatory, classifier, self.config, self.report
            )
            if interaction is not None:
                resolved.append(interaction)

        for interaction in self._prune_line_participants(resolved):
            if interaction.kind is InteractionKind.UNSUPPORTED:
                result.unsupported.append(interaction)
                continue
            result.interactions.append(interaction)
            for participant in interaction.participants:
                result.add_part_of(participant.iri, interaction.iri)

        result.complexes = create_all_complex_records(self.pathway, self.cache, self.config, self.report)
        for record in result.complexes:
            for member in record.members:
                result.add_part_of(member.iri, record.identity.iri)

        result.stats = self._collect_stats(result, line_groups)
        self.report.stats.update(result.stats)
        self.result = result
        return result

    def _group_lines(self, merger):
        """
        Split all lines into merged groups, in enumeration order.

        Returns:
            list: (primary, merged_lines, regulatory_lines) tuples
        """
        consumed = set()
        groups = []

        for line in self.pathway.all_lines():
            if line.elementId in consumed:
                continue

            primary = merger.find_primary(line, consumed)
            dangling = merger.dangling_refs(primary)
            if dangling:
                self.report.add_drop(
                    DropReason.DANGLING_REFERENCE,
                    f"Line references unknown element(s) {', '.join(dangling)}, line skipped",
                    primary.elementId
                )
                consumed.add(primary.elementId)
                continue

            merged, regulatory = merger.merge(primary, consumed)
            consumed.update(merged_line.elementId for merged_line in merged)
            groups.append((primary, merged, regulatory))

        return groups

    def _prune_line_participants(self, resolved):
        """
        Remove interaction participants pointing at interactions that were
        dropped or are unsupported.
        """
        emitted = {i.elementId for i in resolved if i.kind is not InteractionKind.UNSUPPORTED}

        def keep(identity):
            return identity.shape is not ParticipantShape.LINE or identity.elementId in emitted

        pruned = []
        for interaction in resolved:
            removed = [p.elementId for p in interaction.participants if not keep(p)]
            if not removed:
                pruned.append(interaction)
                continue
            self.report.add_warning(
                f"Interaction '{interaction.elementId}': participant interaction(s) "
                f"{', '.join(removed)} were not converted and are left out"
            )
            pruned.append(dataclasses.replace(
                interaction,
                sources=tuple(p for p in interaction.sources if keep(p)),
                targets=tuple(p for p in interaction.targets if keep(p)),
                others=tuple(p for p in interaction.others if keep(p)),
            ))
        return pruned

    def _collect_stats(self, result, line_groups):
        return {
            'datanodes': len(self.pathway.dataNodes),
            'datanodes_resolved': len(result.datanodes),
            'lines': len(self.pathway.all_lines()),
            'line_groups': len(line_groups),
            'interactions': len(result.interactions),
            'unsupported_interactions': len(result.unsupported),
            'complexes': len(result.complexes),
            'drops': len(self.report.drops),
        }

    def get_stats(self):
        """
        Get summary statistics of the last conversion.
        """
        if self.result is None:
            return {}
        return dict(self.result.stats)


def convert_pathway(pathway, config=None, report=None) -> ResolutionResult:
    """Convert a pathway with a fresh participant cache."""
    return PathwayConverter(pathway, config, report).convert()
