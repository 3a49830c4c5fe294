"""
Data source utilities: map GPML Xref data sources to identifiers.org IRIs.
"""
from gpml2wprdf.config import IDENTIFIERS_ORG_URL

# Known data sources: full name -> identifiers.org prefix.
# GPML 2013a files use the full names, GPML 2021 files mostly the prefixes.
DATA_SOURCES = {
    'Entrez Gene': 'ncbigene',
    'Ensembl': 'ensembl',
    'Uniprot-TrEMBL': 'uniprot',
    'Uniprot-SwissProt': 'uniprot',
    'UniProt': 'uniprot',
    'HGNC': 'hgnc.symbol',
    'HGNC Accession number': 'hgnc',
    'RefSeq': 'refseq',
    'miRBase Sequence': 'mirbase',
    'miRBase mature sequence': 'mirbase.mature',
    'ChEBI': 'chebi',
    'HMDB': 'hmdb',
    'KEGG Compound': 'kegg.compound',
    'KEGG Genes': 'kegg.genes',
    'KEGG Pathway': 'kegg.pathway',
    'PubChem-compound': 'pubchem.compound',
    'PubChem-substance': 'pubchem.substance',
    'ChemSpider': 'chemspider',
    'CAS': 'cas',
    'LIPID MAPS': 'lipidmaps',
    'SwissLipids': 'slm',
    'Wikidata': 'wikidata',
    'Complex Portal': 'complexportal',
    'Reactome': 'reactome',
    'Rhea': 'rhea',
    'WikiPathways': 'wikipathways',
    'Gene Ontology': 'go',
    'Enzyme Nomenclature': 'ec-code',
    'InChIKey': 'inchikey',
    'PubMed': 'pubmed',
    'DOI': 'doi',
}

_LOOKUP = {}
for _full_name, _prefix in DATA_SOURCES.items():
    _LOOKUP[_full_name.lower()] = (_full_name, _prefix)
    _LOOKUP.setdefault(_prefix.lower(), (_full_name, _prefix))


def resolve_data_source(data_source):
    """
    Look up a data source by full name or identifiers.org prefix.

    Args:
        data_source (str): Value of the Xref dataSource attribute

    Returns:
        tuple: (full_name, prefix) or None if the data source is unknown
    """
    if not data_source:
        return None
    return _LOOKUP.get(data_source.strip().lower())


def normalize_identifier(prefix, identifier):
    """
    Normalize identifiers whose registered pattern differs from what
    pathway authors usually type.

    Args:
        prefix (str): identifiers.org prefix
        identifier (str): Raw identifier

    Returns:
        str: Normalized identifier
    """
    identifier = identifier.strip().replace(' ', '_')
    if prefix == 'chebi':
        if not identifier.upper().startswith('CHEBI:'):
            return f"CHEBI:{identifier}"
        return "CHEBI:" + identifier[len('CHEBI:'):]
    if prefix == 'hmdb':
        # HMDBxxxxx -> HMDB00xxxxx
        if len(identifier) != 11 and len(identifier) > 4 and identifier.upper().startswith('HMDB'):
            return "HMDB00" + identifier[4:]
    return identifier


def identifiers_org_url(xref):
    """
    Build the identifiers.org IRI for an Xref.

    Args:
        xref (Xref): Cross reference of a data node or group

    Returns:
        tuple: (iri, full_name, normalized_identifier), or None when the Xref
               has no identifier or an unknown data source
    """
    if xref is None or not xref.identifier or not xref.identifier.strip():
        return None

    source = resolve_data_source(xref.dataSource)
    if source is None:
        return None

    full_name, prefix = source
    identifier = normalize_identifier(prefix, xref.identifier)
    return f"{IDENTIFIERS_ORG_URL}/{prefix}/{identifier}", full_name, identifier
