"""
Exceptions raised by the ontology graph module.
"""


class OntographError(Exception):
    """Base class for all ontograph errors."""


class OntologyParseError(OntographError):
    """The input could not be turned into triples."""


class UnsupportedFormatError(OntologyParseError):
    """The input is in a serialization the parser does not accept."""
