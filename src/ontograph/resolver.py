"""
RDF list expansion and anonymous restriction resolution.

OWL encodes "range is any concept of scheme X" as an anonymous restriction,
optionally wrapped in an intersection list:

    ex:usedAs rdfs:range [
        owl:intersectionOf ( [ a owl:Restriction ;
                               owl:onProperty skos:inScheme ;
                               owl:hasValue ex:Usage ] )
    ] .

The resolver unwinds such structures down to the named schemes they mention.
Malformed or cyclic structures yield partial results, never errors.
"""

import logging
from typing import List, Optional, Set, Tuple

from rdflib import URIRef

from .domain import NodeType, Term, is_blank, is_named
from .store import TripleStore
from .vocabulary import (
    OWL_HAS_VALUE, OWL_INTERSECTION_OF, OWL_ON_PROPERTY,
    RDF_FIRST, RDF_NIL, RDF_REST, SKOS_IN_SCHEME,
)

logger = logging.getLogger(__name__)


class RestrictionResolver:
    """Resolves RDF lists and in-scheme restrictions against a triple store."""

    def __init__(self, store: TripleStore):
        self.store = store

    def expand_list(self, head: Term, visited: Optional[Set[str]] = None) -> List[Term]:
        """
        Collect the elements of an RDF list starting at ``head``.

        Args:
            head: First cell of the list (usually a blank node)
            visited: Cell labels already traversed; a fresh set if None

        Returns:
            Elements in list order; stops early on a cycle, a missing
            rdf:first or a missing rdf:rest
        """
        if visited is None:
            visited = set()

        elements: List[Term] = []
        current = head

        while is_blank(current) or is_named(current):
            if current == RDF_NIL:
                break

            key = str(current)
            if key in visited:
                logger.debug(f"RDF list cycle at {key}, returning {len(elements)} elements")
                break
            visited.add(key)

            first = self.store.first_object(current, RDF_FIRST)
            if first is None:
                break
            elements.append(first)

            rest = self.store.first_object(current, RDF_REST)
            if rest is None or rest == RDF_NIL:
                break
            current = rest

        return elements

    def resolve_concept_schemes_from_range(self, term: Term,
                                           visited: Optional[Set[str]] = None) -> List[URIRef]:
        """
        Find the concept schemes an anonymous range restriction points to.

        Handles ``owl:onProperty skos:inScheme ; owl:hasValue <scheme>``
        restrictions, directly or nested in ``owl:intersectionOf`` lists.

        Args:
            term: The range value
            visited: Blank node labels already resolved; a fresh set if None

        Returns:
            Named schemes from the restriction itself, then from nested members
        """
        if visited is None:
            visited = set()

        if not is_blank(term):
            return []

        key = str(term)
        if key in visited:
            return []
        visited.add(key)

        results: List[URIRef] = []

        on_properties = self.store.objects(term, OWL_ON_PROPERTY)
        if any(is_named(prop) and prop == SKOS_IN_SCHEME for prop in on_properties):
            for value in self.store.objects(term, OWL_HAS_VALUE):
                if is_named(value):
                    results.append(value)

        for list_head in self.store.objects(term, OWL_INTERSECTION_OF):
            for element in self.expand_list(list_head):
                if is_blank(element):
                    results.extend(self.resolve_concept_schemes_from_range(element, visited))

        return results

    def resolve_range_targets(self, term: Term) -> List[Tuple[URIRef, NodeType]]:
        """Map a range value to (target resource, node type) pairs."""
        if is_named(term):
            return [(term, NodeType.CLASS)]

        if is_blank(term):
            return [(scheme, NodeType.SKOS_CONCEPT_SCHEME)
                    for scheme in self.resolve_concept_schemes_from_range(term, set())]

        return []
