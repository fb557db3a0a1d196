"""
Read-only triple stores consumed by the ontology graph extractor.

The extractor only needs wildcard pattern lookup. Two implementations are
provided: an adapter over an rdflib Graph, and an insertion-ordered in-memory
store whose lookup order is stable across calls.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Set

from rdflib import Graph

from .domain import Term, Triple


class TripleStore(ABC):
    """Abstract pattern-matching interface over a set of triples."""

    @abstractmethod
    def match(self,
              subject: Optional[Term] = None,
              predicate: Optional[Term] = None,
              obj: Optional[Term] = None) -> List[Triple]:
        """
        Return all triples matching the pattern.

        Args:
            subject: Subject to match, or None for any
            predicate: Predicate to match, or None for any
            obj: Object to match, or None for any

        Returns:
            Matching triples in an implementation-defined, call-stable order
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def all(self) -> List[Triple]:
        return self.match(None, None, None)

    def objects(self, subject: Term, predicate: Term) -> List[Term]:
        return [t.object for t in self.match(subject, predicate, None)]

    def first_object(self, subject: Term, predicate: Term) -> Optional[Term]:
        """First object for (subject, predicate) in store order, or None."""
        triples = self.match(subject, predicate, None)
        return triples[0].object if triples else None

    def subjects(self, predicate: Term, obj: Term) -> List[Term]:
        return [t.subject for t in self.match(None, predicate, obj)]


class MemoryTripleStore(TripleStore):
    """Insertion-ordered in-memory store with per-position indexes.

    Duplicate triples are ignored on insert, so every triple appears at most once.
    """

    def __init__(self, triples: Optional[Iterable] = None):
        self._triples: List[Triple] = []
        self._seen: Set[Triple] = set()
        self._by_subject: Dict[Term, List[int]] = {}
        self._by_predicate: Dict[Term, List[int]] = {}
        self._by_object: Dict[Term, List[int]] = {}

        if triples is not None:
            self.add_all(triples)

    @classmethod
    def from_graph(cls, graph: Graph) -> 'MemoryTripleStore':
        """Copy every triple of an rdflib graph, in the graph's iteration order."""
        return cls(graph.triples((None, None, None)))

    def add(self, subject: Term, predicate: Term, obj: Term) -> bool:
        """
        Add one triple.

        Returns:
            True if the triple was new, False if it was already present
        """
        triple = Triple(subject, predicate, obj)
        if triple in self._seen:
            return False

        position = len(self._triples)
        self._triples.append(triple)
        self._seen.add(triple)
        self._by_subject.setdefault(subject, []).append(position)
        self._by_predicate.setdefault(predicate, []).append(position)
        self._by_object.setdefault(obj, []).append(position)
        return True

    def add_all(self, triples: Iterable) -> int:
        added = 0
        for subject, predicate, obj in triples:
            if self.add(subject, predicate, obj):
                added += 1
        return added

    def match(self,
              subject: Optional[Term] = None,
              predicate: Optional[Term] = None,
              obj: Optional[Term] = None) -> List[Triple]:
        candidates = None
        for key, index in ((subject, self._by_subject),
                           (predicate, self._by_predicate),
                           (obj, self._by_object)):
            if key is None:
                continue
            positions = index.get(key)
            if not positions:
                return []
            if candidates is None or len(positions) < len(candidates):
                candidates = positions

        if candidates is None:
            return list(self._triples)

        results = []
        for position in candidates:
            triple = self._triples[position]
            if subject is not None and triple.subject != subject:
                continue
            if predicate is not None and triple.predicate != predicate:
                continue
            if obj is not None and triple.object != obj:
                continue
            results.append(triple)
        return results

    def __len__(self) -> int:
        return len(self._triples)

    def __contains__(self, triple) -> bool:
        return Triple(*triple) in self._seen


class GraphTripleStore(TripleStore):
    """Adapter exposing an rdflib Graph through the TripleStore interface."""

    def __init__(self, graph: Graph):
        self.graph = graph

    def match(self,
              subject: Optional[Term] = None,
              predicate: Optional[Term] = None,
              obj: Optional[Term] = None) -> List[Triple]:
        return [Triple(s, p, o) for s, p, o in self.graph.triples((subject, predicate, obj))]

    def __len__(self) -> int:
        return len(self.graph)
