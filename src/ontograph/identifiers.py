"""
Local identifier derivation for graph node keys.
"""

from typing import Union

from rdflib import BNode, URIRef

BLANK_NODE_PREFIX = "_:"


def local_id(uri: Union[str, URIRef, BNode]) -> str:
    """Return the fragment or last path segment of an IRI.

    Blank node labels (``_:b0`` style, or an rdflib BNode) come back unchanged.
    If the IRI has no ``#`` or ``/``, or ends with one, the whole input is
    returned. Two IRIs sharing a local name map to the same id.
    """
    if isinstance(uri, BNode):
        return str(uri)

    value = str(uri)
    if value.startswith(BLANK_NODE_PREFIX):
        return value

    last_index = max(value.rfind("#"), value.rfind("/"))
    if 0 <= last_index < len(value) - 1:
        return value[last_index + 1:]
    return value
