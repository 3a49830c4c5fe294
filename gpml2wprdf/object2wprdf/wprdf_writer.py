import json

from gpml2wprdf.config import IDENTIFIERS_ORG_URL, NAMESPACE_PREFIXES, WIKIPATHWAYS_PAGE_URL
from gpml2wprdf.data_structure.resolved_structure import (
    InteractionKind, ParticipantShape, ResolutionResult, ResolvedInteraction
)
from gpml2wprdf.data_structure.wiki_data_structure import DataNodeType, Pathway, Xref
from gpml2wprdf.utils.identifiers import identifiers_org_url

# wp: classes for data node types, anything else is only a wp:DataNode
DATANODE_CLASSES = {
    DataNodeType.GENE_PRODUCT: 'wp:GeneProduct',
    DataNodeType.PROTEIN: 'wp:Protein',
    DataNodeType.RNA: 'wp:Rna',
    DataNodeType.METABOLITE: 'wp:Metabolite',
    DataNodeType.PATHWAY: 'wp:Pathway',
    DataNodeType.COMPLEX: 'wp:Complex',
}

INTERACTION_CLASSES = {
    InteractionKind.UNDIRECTED: ['wp:Interaction'],
    InteractionKind.DIRECTED: ['wp:Interaction', 'wp:DirectedInteraction'],
    InteractionKind.CATALYSIS: ['wp:Interaction', 'wp:DirectedInteraction', 'wp:Catalysis'],
}

IRI_UNSAFE_CHARACTERS = {' ': '%20', '<': '%3C', '>': '%3E', '"': '%22', '{': '%7B',
                         '}': '%7D', '|': '%7C', '^': '%5E', '`': '%60', '\\': '%5C'}


class WPRDFWriter:
    """
    Writes a ResolutionResult as Turtle in the WikiPathways RDF vocabulary,
    or as a JSON summary.
    """

    def __init__(self, config):
        self.config = config

    def escape_literal(self, text):
        """
        Escape special characters in a Turtle string literal

        Args:
            text: String to escape

        Returns:
            str: Escaped string safe inside double quotes
        """
        if text is None:
            return ""
        if not isinstance(text, str):
            text = str(text)

        text = text.replace('\\', '\\\\')
        text = text.replace('"', '\\"')
        text = text.replace('\n', '\\n')
        text = text.replace('\r', '\\r')
        text = text.replace('\t', '\\t')

        return text

    def iri(self, value):
        """Format an IRI reference, percent-encoding characters Turtle does not allow."""
        for char, encoded in IRI_UNSAFE_CHARACTERS.items():
            value = value.replace(char, encoded)
        return f'<{value}>'

    def literal(self, text, language=None):
        suffix = f'@{language}' if language else ''
        return f'"{self.escape_literal(text)}"{suffix}'

    def write_block(self, subject, types, statements) -> str:
        """
        Write one subject with its rdf:type and predicate/object pairs.

        Args:
            subject (str): Subject IRI
            types (list): Prefixed class names
            statements (list): (predicate, formatted object) pairs

        Returns:
            str: Turtle block ending with a blank line
        """
        lines = [f'{self.iri(subject)} a {", ".join(types)}']
        for predicate, obj in statements:
            lines.append(f'    {predicate} {obj}')
        return ' ;\n'.join(lines) + ' .\n\n'

    def write_prefixes(self) -> str:
        output = ''
        for prefix, namespace in NAMESPACE_PREFIXES.items():
            output += f'@prefix {prefix}: <{namespace}> .\n'
        return output + '\n'

    def _xref_statements(self, identity):
        if not identity.identifier or not identity.dataSource:
            return []
        statements = []
        resolved = identifiers_org_url(Xref(identifier=identity.identifier, dataSource=identity.dataSource))
        if resolved is not None:
            statements.append(('dc:identifier', self.iri(resolved[0])))
        statements.append(('dc:source', self.literal(identity.dataSource)))
        statements.append(('dcterms:identifier', self.literal(identity.identifier)))
        return statements

    def write_pathway_resource(self, pathway: Pathway) -> str:
        wp_revision = f'{self.config.wp_id}_r{self.config.revision}'
        statements = [('dc:title', self.literal(pathway.title, 'en'))]
        if pathway.organism:
            statements.append(('wp:organismName', self.literal(pathway.organism, 'en')))
        if pathway.description:
            statements.append(('dcterms:description', self.literal(pathway.description)))
        if pathway.license:
            statements.append(('dcterms:license', self.literal(pathway.license)))
        statements.append(('dc:identifier', self.iri(f'{IDENTIFIERS_ORG_URL}/wikipathways/{self.config.wp_id}')))
        statements.append(('dcterms:identifier', self.literal(self.config.wp_id)))
        statements.append(('foaf:page', self.iri(f'{WIKIPATHWAYS_PAGE_URL}/{wp_revision}')))
        statements.append(('wp:isAbout', self.iri(self.config.pathway_base)))
        return self.write_block(self.config.pathway_iri, ['wp:Pathway', 'skos:Collection'], statements)

    def write_datanode(self, identities, part_of) -> str:
        """
        Write the resource of one external identifier.

        Args:
            identities (list): Identities sharing this IRI (same molecule drawn more than once)
            part_of (dict): member IRI -> container IRIs

        Returns:
            str: Turtle block
        """
        first = identities[0]
        types = ['wp:DataNode']
        if first.nodeType in DATANODE_CLASSES:
            types.append(DATANODE_CLASSES[first.nodeType])

        statements = []
        if first.label:
            statements.append(('rdfs:label', self.literal(first.label, 'en')))
        statements.extend(self._xref_statements(first))
        statements.append(('dcterms:isPartOf', self.iri(self.config.pathway_iri)))
        for container in part_of.get(first.iri, []):
            statements.append(('dcterms:isPartOf', self.iri(container)))
        for identity in identities:
            if identity.about:
                statements.append(('wp:isAbout', self.iri(identity.about)))
        return self.write_block(first.iri, types, statements)

    def write_group(self, identity, part_of, members=()) -> str:
        types = ['wp:DataNode']
        if identity.nodeType is DataNodeType.COMPLEX:
            types.append('wp:Complex')
        statements = []
        if identity.label:
            statements.append(('rdfs:label', self.literal(identity.label, 'en')))
        statements.extend(self._xref_statements(identity))
        statements.append(('dcterms:isPartOf', self.iri(self.config.pathway_iri)))
        for container in part_of.get(identity.iri, []):
            statements.append(('dcterms:isPartOf', self.iri(container)))
        for member in members:
            statements.append(('wp:participants', self.iri(member.iri)))
        statements.append(('wp:isAbout', self.iri(identity.about)))
        return self.write_block(identity.iri, types, statements)

    def write_interaction(self, interaction: ResolvedInteraction, part_of=None, composite_iri=None) -> str:
        """
        Write one interaction resource.

        Args:
            interaction (ResolvedInteraction): Interaction or complex binding
            part_of (dict): member IRI -> container IRIs, for interactions that are participants themselves
            composite_iri (str): Complex IRI, listed first among the participants of a binding

        Returns:
            str: Turtle block
        """
        if interaction.complexBinding:
            types = ['wp:Interaction', 'wp:Binding', 'wp:ComplexBinding']
        else:
            types = INTERACTION_CLASSES[interaction.kind]

        statements = []
        if composite_iri:
            statements.append(('wp:participants', self.iri(composite_iri)))
        for participant in interaction.participants:
            statements.append(('wp:participants', self.iri(participant.iri)))
        for source in interaction.sources:
            statements.append(('wp:source', self.iri(source.iri)))
        for target in interaction.targets:
            statements.append(('wp:target', self.iri(target.iri)))
        if interaction.xrefIri:
            statements.append(('dc:identifier', self.iri(interaction.xrefIri)))
        statements.append(('dcterms:isPartOf', self.iri(self.config.pathway_iri)))
        for container in (part_of or {}).get(interaction.iri, []):
            statements.append(('dcterms:isPartOf', self.iri(container)))
        if interaction.about:
            statements.append(('wp:isAbout', self.iri(interaction.about)))
        return self.write_block(interaction.iri, types, statements)

    def write_result(self, result: ResolutionResult, pathway: Pathway) -> str:
        """
        Write a complete conversion result in Turtle

        Args:
            result: ResolutionResult of the pathway
            pathway: Pathway the result was built from

        Returns:
            str: Complete Turtle document
        """
        output = self.write_prefixes()
        output += self.write_pathway_resource(pathway)

        # DataNodes, one resource per external identifier
        by_iri = {}
        for identity in result.datanodes:
            by_iri.setdefault(identity.iri, []).append(identity)
        for identities in by_iri.values():
            output += self.write_datanode(identities, result.part_of)

        # Groups used as participants or resolved as complexes
        groups = {}
        members = {}
        for record in result.complexes:
            groups.setdefault(record.identity.iri, record.identity)
            members.setdefault(record.identity.iri, record.members)
        for interaction in result.interactions:
            for participant in interaction.participants:
                if participant.shape is ParticipantShape.GROUP:
                    groups.setdefault(participant.iri, participant)
        for iri, identity in groups.items():
            output += self.write_group(identity, result.part_of, members.get(iri, ()))

        for interaction in result.interactions:
            output += self.write_interaction(interaction, result.part_of)

        for record in result.complexes:
            output += self.write_interaction(record.binding, composite_iri=record.identity.iri)

        return output

    def write_file(self, result: ResolutionResult, pathway: Pathway, output_file):
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(self.write_result(result, pathway))

    # --- JSON summary ---

    def _interaction_dict(self, interaction: ResolvedInteraction):
        return {
            'elementId': interaction.elementId,
            'iri': interaction.iri,
            'kind': interaction.kind.value,
            'arrowHead': interaction.arrowHead.value,
            'sources': [p.iri for p in interaction.sources],
            'targets': [p.iri for p in interaction.targets],
            'others': [p.iri for p in interaction.others],
            'mergedLines': list(interaction.mergedLineIds),
            'regulatoryLines': list(interaction.regulatoryLineIds),
        }

    def to_dict(self, result: ResolutionResult, pathway: Pathway):
        report = result.report
        return {
            'pathway': result.pathway_iri,
            'title': pathway.title,
            'organism': pathway.organism,
            'datanodes': [
                {
                    'elementId': identity.elementId,
                    'iri': identity.iri,
                    'label': identity.label,
                    'type': identity.nodeType.value if identity.nodeType else None,
                }
                for identity in result.datanodes
            ],
            'interactions': [self._interaction_dict(i) for i in result.interactions],
            'unsupported': [self._interaction_dict(i) for i in result.unsupported],
            'complexes': [
                {
                    'group': record.group.elementId,
                    'iri': record.identity.iri,
                    'label': record.identity.label,
                    'members': [member.iri for member in record.members],
                    'binding': record.binding.iri,
                }
                for record in result.complexes
            ],
            'partOf': result.part_of,
            'stats': result.stats,
            'drops': [
                {'reason': drop.reason.value, 'elementId': drop.element_id, 'message': drop.message}
                for drop in (report.drops if report is not None else [])
            ],
        }

    def write_json(self, result: ResolutionResult, pathway: Pathway) -> str:
        return json.dumps(self.to_dict(result, pathway), indent=2)
