"""
Configuration constants for the GPML to WikiPathways RDF conversion.
All IRIs and defaults are centralized here.
"""
import os
import re
from dataclasses import dataclass
from typing import Optional

# ============================================================================
# IRI CONFIGURATION
# ============================================================================

WP_RDF_URL = "https://rdf.wikipathways.org"
IDENTIFIERS_ORG_URL = "https://identifiers.org"
WIKIPATHWAYS_PAGE_URL = "http://www.wikipathways.org/instance"

# Overrides WP_RDF_URL when set (same as the --domain option)
BASE_IRI_ENV = "GPML2WPRDF_BASE_IRI"

# ============================================================================
# PATHWAY DEFAULTS
# ============================================================================

# Used when a GPML file has no WikiPathways xref and no id in its file name
DEFAULT_WP_ID = "WP0"
DEFAULT_REVISION = "1"

WP_ID_PATTERN = re.compile(r'(WP\d+|PC\d+)')

# ============================================================================
# OUTPUT CONFIGURATION
# ============================================================================

OUTPUT_FORMATS = ("turtle", "json")

NAMESPACE_PREFIXES = {
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "skos": "http://www.w3.org/2004/02/skos/core#",
    "wp": "http://vocabularies.wikipathways.org/wp#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
}


def default_base_iri():
    """Base IRI from the environment, falling back to WP_RDF_URL."""
    env_value = os.environ.get(BASE_IRI_ENV)
    if env_value:
        return env_value.rstrip('/')
    return WP_RDF_URL


@dataclass
class ConversionConfig:
    base_iri: str = WP_RDF_URL
    wp_id: str = DEFAULT_WP_ID
    revision: str = DEFAULT_REVISION

    @property
    def pathway_base(self) -> str:
        """Prefix shared by every resource minted for this pathway revision."""
        return f"{self.base_iri}/Pathway/{self.wp_id}_r{self.revision}"

    @property
    def pathway_iri(self) -> str:
        return f"{IDENTIFIERS_ORG_URL}/wikipathways/{self.wp_id}_r{self.revision}"

    @classmethod
    def for_pathway(cls, pathway, wp_id: Optional[str] = None, revision: Optional[str] = None,
                    base_iri: Optional[str] = None, file_name: Optional[str] = None) -> "ConversionConfig":
        """
        Build the configuration for one pathway.

        Precedence for the pathway id: explicit wp_id, the pathway's
        WikiPathways xref, a WP/PC id in the file name, DEFAULT_WP_ID.

        Args:
            pathway: Pathway being converted
            wp_id: Explicit WikiPathways id (optional)
            revision: Explicit revision (optional)
            base_iri: Base IRI for minted resources (optional)
            file_name: Source file name, used to guess the id (optional)

        Returns:
            ConversionConfig
        """
        if not wp_id and pathway is not None and pathway.xref and pathway.xref.identifier:
            wp_id = pathway.xref.identifier.strip()
        if not wp_id and file_name:
            match = WP_ID_PATTERN.search(os.path.basename(file_name))
            if match:
                wp_id = match.group(1)

        if not revision and pathway is not None and pathway.version:
            revision = pathway.version
        revision = (revision or DEFAULT_REVISION).strip().replace(" ", "_")

        return cls(
            base_iri=(base_iri or default_base_iri()).rstrip('/'),
            wp_id=wp_id or DEFAULT_WP_ID,
            revision=revision or DEFAULT_REVISION,
        )
