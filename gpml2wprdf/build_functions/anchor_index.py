"""
Anchor index for one pathway.

Maps every anchor to the line that owns it and to the lines whose start or
end point references it. The references are also kept as a networkx
MultiDiGraph (owner line -> referencing line, one edge per reference) so
the line merger can walk connected lines.
"""
import logging
from typing import Dict, List, Optional, Tuple

import networkx as nx

from gpml2wprdf.data_structure.wiki_data_structure import Endpoint, Interaction, Pathway

logger = logging.getLogger(__name__)


class AnchorIndex:
    """
    Built once per pathway from all interactions and graphical lines.
    """

    def __init__(self, pathway: Pathway):
        self.pathway = pathway
        self.graph = nx.MultiDiGraph()
        self._owners = {}  # {anchor_id: owning line}
        self._references: Dict[str, List[Tuple[Interaction, Endpoint]]] = {}
        self._build()

    def _build(self):
        for line in self.pathway.all_lines():
            self.graph.add_node(line.elementId, line=line)
            for anchor in self.pathway.anchors_of(line):
                self._owners.setdefault(anchor.elementId, line)

        # anchors on graphical lines can be referenced too, they just never carry semantics
        for line in self.pathway.graphicalLines:
            for anchor in line.anchors:
                self._owners.setdefault(anchor.elementId, line)

        for line in self.pathway.all_lines():
            for endpoint in (Endpoint.START, Endpoint.END):
                ref = line.element_ref(endpoint)
                if not ref or ref not in self._owners:
                    continue
                self._references.setdefault(ref, []).append((line, endpoint))

                owner = self._owners[ref]
                if owner.elementId in self.graph and owner.elementId != line.elementId:
                    self.graph.add_edge(
                        owner.elementId, line.elementId,
                        anchor=ref, endpoint=endpoint, arrow=line.arrow_head(endpoint)
                    )

        logger.debug(
            "Anchor index: %d anchors, %d anchor references",
            len(self._owners), sum(len(refs) for refs in self._references.values())
        )

    def is_anchor(self, element_id: Optional[str]) -> bool:
        return bool(element_id) and element_id in self._owners

    def owner_of(self, anchor_id: Optional[str]):
        """
        Get the line owning an anchor.

        Args:
            anchor_id (str): Anchor element ID

        Returns:
            Interaction or GraphicalLine, or None if the ID is not an anchor
        """
        if not anchor_id:
            return None
        return self._owners.get(anchor_id)

    def referencing_lines(self, anchor_id: Optional[str]) -> List[Tuple[Interaction, Endpoint]]:
        """
        Get every interaction whose start or end references an anchor.

        Args:
            anchor_id (str): Anchor element ID

        Returns:
            list: (Interaction, Endpoint) pairs in pathway order
        """
        if not anchor_id:
            return []
        return list(self._references.get(anchor_id, []))

    def lines_attached_to(self, line) -> List[Tuple[Interaction, Endpoint, str]]:
        """
        Get every other interaction ending on one of this line's anchors.

        Returns:
            list: (Interaction, Endpoint, anchor_id) triples
        """
        if line.elementId not in self.graph:
            return []
        attached = []
        for _, target, data in self.graph.out_edges(line.elementId, data=True):
            attached.append((self.graph.nodes[target]['line'], data['endpoint'], data['anchor']))
        return attached
