"""
Participant identity cache for one pathway conversion.
"""
import re

from gpml2wprdf.errors import DuplicateParticipantError


def sanitize_element_id(element_id):
    """
    Sanitize element IDs for use as the last segment of a resource IRI.

    Args:
        element_id (str): Original element ID

    Returns:
        str: Sanitized element ID safe for IRIs
    """
    if not element_id:
        return element_id

    # restrict to characters that need no escaping in a Turtle IRI
    return re.sub(r'[^a-zA-Z0-9_.\-]', '_', element_id)


class ParticipantCache:
    """
    Maps element IDs to their resolved ParticipantIdentity.

    Filled by data node conversion before any line or group is resolved,
    then only read. Every element ID may be registered once.
    """

    def __init__(self):
        """Initialize empty identity mapping."""
        self.identities = {}  # {element_id: ParticipantIdentity}

    def put(self, element_id, identity):
        """
        Register the identity for an element ID.

        Args:
            element_id (str): Element ID from the pathway
            identity (ParticipantIdentity): Resolved identity

        Raises:
            DuplicateParticipantError: if the ID already has an identity
        """
        if element_id in self.identities:
            raise DuplicateParticipantError(element_id)
        self.identities[element_id] = identity

    def get(self, element_id):
        """
        Get the identity for an element ID.

        Args:
            element_id (str): Element ID to look up

        Returns:
            ParticipantIdentity or None if the element was never resolved
        """
        if not element_id:
            return None
        return self.identities.get(element_id)

    def __contains__(self, element_id):
        return element_id in self.identities

    def __len__(self):
        return len(self.identities)

    def values(self):
        return list(self.identities.values())
