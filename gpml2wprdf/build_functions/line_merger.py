"""
Line merging: group diagram lines that are joined through anchors into one
logical interaction.

A line ending on an anchor of another line with an undirected arrowhead at
that end continues the other line (e.g. the second branch of a binding).
A line ending on an anchor with any other arrowhead acts on the interaction
(e.g. a catalysis arrow pointing at a reaction) and is kept apart as a
regulatory line.
"""
import logging
from collections import deque
from itertools import chain
from typing import Iterable, List, Set, Tuple

import networkx as nx

from gpml2wprdf.build_functions.anchor_index import AnchorIndex
from gpml2wprdf.data_structure.wiki_data_structure import (
    ArrowHeadType, Endpoint, Interaction, Pathway
)

logger = logging.getLogger(__name__)


class LineMerger:
    """
    Merges lines of one pathway. Which lines are already consumed is tracked
    by the caller across the whole pathway.
    """

    def __init__(self, pathway: Pathway, anchor_index: AnchorIndex):
        self.pathway = pathway
        self.anchor_index = anchor_index

    def dangling_refs(self, line: Interaction) -> List[str]:
        """
        Get the start/end references of a line that name no element at all.

        Args:
            line (Interaction): Line to check

        Returns:
            list: Dangling element IDs (empty for a valid line)
        """
        dangling = []
        for endpoint in (Endpoint.START, Endpoint.END):
            ref = line.element_ref(endpoint)
            if ref and self.pathway.lookup_by_id(ref) is None:
                dangling.append(ref)
        return dangling

    def find_primary(self, line: Interaction, consumed: Set[str] = frozenset()) -> Interaction:
        """
        Follow undirected anchor references up to the line that owns the
        anchors, so a merge starts from the same line whatever the
        enumeration order.

        Args:
            line (Interaction): Line to start from
            consumed (set): IDs of lines already merged elsewhere

        Returns:
            Interaction: The primary line (``line`` itself if it continues nothing)
        """
        visited = {line.elementId}
        current = line
        while True:
            parent = None
            for endpoint in (Endpoint.START, Endpoint.END):
                ref = current.element_ref(endpoint)
                if not self.anchor_index.is_anchor(ref):
                    continue
                if current.arrow_head(endpoint) is not ArrowHeadType.UNDIRECTED:
                    continue
                owner = self.anchor_index.owner_of(ref)
                if not isinstance(owner, Interaction):
                    continue
                if owner.elementId in visited or owner.elementId in consumed:
                    continue
                if self.dangling_refs(owner):
                    continue
                parent = owner
                break

            if parent is None:
                return current
            visited.add(parent.elementId)
            current = parent

    def merge(self, primary: Interaction,
              consumed: Iterable[str] = frozenset()) -> Tuple[List[Interaction], List[Interaction]]:
        """
        Collect the lines belonging to the same interaction as the primary.

        Args:
            primary (Interaction): Line the interaction is named after
            consumed (iterable): IDs of lines already merged elsewhere

        Returns:
            tuple: (merged_lines, regulatory_lines), primary first, discovery order
        """
        graph = self.anchor_index.graph
        if primary.elementId not in graph:
            return [primary], []

        consumed = set(consumed)

        def open_line(line_id):
            if line_id == primary.elementId:
                return True
            if line_id in consumed:
                return False
            # lines with unknown endpoints are skipped on their own turn
            return not self.dangling_refs(graph.nodes[line_id]['line'])

        def continues(u, v, k):
            return graph.edges[u, v, k]['arrow'] is ArrowHeadType.UNDIRECTED

        view = nx.subgraph_view(graph, filter_node=open_line, filter_edge=continues)

        # breadth first over undirected anchor joints, either direction
        merged_ids = [primary.elementId]
        seen = {primary.elementId}
        queue = deque([primary.elementId])
        while queue:
            current = queue.popleft()
            for neighbour in chain(view.successors(current), view.predecessors(current)):
                if neighbour in seen:
                    continue
                seen.add(neighbour)
                merged_ids.append(neighbour)
                queue.append(neighbour)

        regulatory_ids = []
        for line_id in merged_ids:
            for _, target, data in graph.out_edges(line_id, data=True):
                if data['arrow'] is ArrowHeadType.UNDIRECTED:
                    continue
                if target in seen or target in regulatory_ids:
                    continue
                if self.dangling_refs(graph.nodes[target]['line']):
                    continue
                regulatory_ids.append(target)

        merged = [graph.nodes[line_id]['line'] for line_id in merged_ids]
        regulatory = [graph.nodes[line_id]['line'] for line_id in regulatory_ids]
        if len(merged) > 1 or regulatory:
            logger.debug(
                "Merged %s with %s, regulatory: %s", primary.elementId,
                merged_ids[1:], regulatory_ids
            )
        return merged, regulatory
