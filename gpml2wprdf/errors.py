"""
Exceptions and drop categories used during pathway conversion.

Malformed diagram content is never raised: it is recorded as a drop with a
DropReason and the conversion carries on. The exceptions below are reserved
for broken preconditions and contract violations.
"""
from enum import Enum


class DropReason(Enum):
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    AMBIGUOUS_INTERACTION_TYPE = "AMBIGUOUS_INTERACTION_TYPE"
    UNSUPPORTED_PARTICIPANT_SHAPE = "UNSUPPORTED_PARTICIPANT_SHAPE"
    UNSUPPORTED_ARROWHEAD = "UNSUPPORTED_ARROWHEAD"
    DEGENERATE_COMPLEX = "DEGENERATE_COMPLEX"


class ConversionError(Exception):
    """Base class for conversion failures."""


class MissingPathwayError(ConversionError):
    """Raised when no pathway is given to convert."""


class DuplicateParticipantError(ConversionError):
    """Raised when a participant identity is registered twice for one element id."""

    def __init__(self, element_id):
        super().__init__(f"Participant identity for '{element_id}' is already registered")
        self.element_id = element_id


class GPMLParseError(ConversionError):
    """Raised when a GPML document cannot be read as XML."""
