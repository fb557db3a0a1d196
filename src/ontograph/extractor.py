"""
Ontology graph extraction.

Builds a typed, de-duplicated node/edge graph from a triple store in a fixed
sequence of stages. Every stage may add nodes but never removes or retypes one
added earlier ("first writer wins"). Malformed input produces fewer nodes and
edges, never an exception.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from rdflib import Literal, URIRef

from .domain import (
    EdgeType, GraphMetadata, NodeType, OntologyEdge, OntologyGraph, OntologyNode,
    Term, is_literal, is_named,
)
from .identifiers import local_id
from .resolver import RestrictionResolver
from .store import TripleStore
from .vocabulary import (
    CLASS_TYPES, DC_DESCRIPTION, DC_TITLE, NON_ASSERTION_PREDICATES,
    OWL_ANNOTATION_PROPERTY, OWL_CLASS, OWL_DATATYPE_PROPERTY, OWL_NAMED_INDIVIDUAL,
    OWL_OBJECT_PROPERTY, OWL_ONTOLOGY, PROPERTY_TYPES, RDF_PROPERTY, RDF_TYPE,
    RDFS_CLASS, RDFS_DOMAIN, RDFS_LABEL, RDFS_RANGE, RDFS_SUBCLASS_OF,
    RDFS_SUBPROPERTY_OF, SKOS_CONCEPT, SKOS_CONCEPT_SCHEME, SKOS_IN_SCHEME,
    XSD_STRING, is_reserved_iri,
)

logger = logging.getLogger(__name__)

# rdf:type values recognised when typing the target of an object assertion
RESOURCE_TYPE_MAP = {
    OWL_CLASS: NodeType.CLASS,
    RDFS_CLASS: NodeType.CLASS,
    OWL_OBJECT_PROPERTY: NodeType.PROPERTY,
    OWL_DATATYPE_PROPERTY: NodeType.PROPERTY,
    OWL_ANNOTATION_PROPERTY: NodeType.PROPERTY,
    RDF_PROPERTY: NodeType.PROPERTY,
    SKOS_CONCEPT: NodeType.SKOS_CONCEPT,
    SKOS_CONCEPT_SCHEME: NodeType.SKOS_CONCEPT_SCHEME,
    OWL_ONTOLOGY: NodeType.ONTOLOGY,
    OWL_NAMED_INDIVIDUAL: NodeType.INDIVIDUAL,
}


class NodeRegistry:
    """Node map keyed by local id; an existing entry is never overwritten."""

    def __init__(self):
        self._nodes: Dict[str, OntologyNode] = {}

    def insert_if_absent(self, node_id: str, label: str, node_type: NodeType,
                         uri: Optional[str] = None) -> OntologyNode:
        """Insert a node unless the id is taken; return whichever node holds the id."""
        existing = self._nodes.get(node_id)
        if existing is not None:
            return existing
        node = OntologyNode(id=node_id, label=label, type=node_type, uri=uri)
        self._nodes[node_id] = node
        return node

    def get(self, node_id: str) -> Optional[OntologyNode]:
        return self._nodes.get(node_id)

    def ids_of_type(self, node_type: NodeType) -> Set[str]:
        return {node.id for node in self._nodes.values() if node.type == node_type}

    def count(self, node_type: NodeType) -> int:
        return len(self.ids_of_type(node_type))

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def as_dict(self) -> Dict[str, OntologyNode]:
        return dict(self._nodes)


class EdgeList:
    """Edges in discovery order with sequential ids and per-kind dedup keys."""

    def __init__(self):
        self._edges: List[OntologyEdge] = []
        self._keys: Dict[EdgeType, Set[Tuple]] = {}

    def append(self, source: str, target: str, label: str, edge_type: EdgeType) -> OntologyEdge:
        edge = OntologyEdge(
            id=f"edge_{len(self._edges)}",
            source=source,
            target=target,
            label=label,
            type=edge_type,
        )
        self._edges.append(edge)
        return edge

    def claim(self, edge_type: EdgeType, key: Tuple) -> bool:
        """Reserve a dedup key; False if it was already claimed for this kind."""
        keys = self._keys.setdefault(edge_type, set())
        if key in keys:
            return False
        keys.add(key)
        return True

    def count(self, edge_type: EdgeType) -> int:
        return sum(1 for edge in self._edges if edge.type == edge_type)

    def __len__(self) -> int:
        return len(self._edges)

    def as_list(self) -> List[OntologyEdge]:
        return list(self._edges)


@dataclass
class ExtractionState:
    """Mutable state owned by a single extraction run."""

    store: TripleStore
    resolver: RestrictionResolver
    nodes: NodeRegistry = field(default_factory=NodeRegistry)
    edges: EdgeList = field(default_factory=EdgeList)
    metadata: GraphMetadata = field(default_factory=GraphMetadata)
    property_kinds: Dict[str, str] = field(default_factory=dict)  # property IRI -> object|data|annotation|unknown
    literal_ids: Dict[Tuple[str, str, str], str] = field(default_factory=dict)


class OntologyGraphExtractor:
    """Extracts an OntologyGraph from a TripleStore.

    The extractor itself holds no per-document state, so one instance can serve
    any number of independent extractions.
    """

    def __init__(self, sample_size: int = 5):
        """
        Args:
            sample_size: Number of leading triples echoed at debug level
        """
        self.sample_size = max(0, sample_size)

    def extract(self, store: TripleStore) -> OntologyGraph:
        """
        Run every extraction stage over the store.

        Args:
            store: Read-only triple store snapshot

        Returns:
            Fresh OntologyGraph

        Raises:
            ValueError: If no store is given
        """
        if store is None:
            raise ValueError("A triple store is required for extraction")

        logger.info(f"Starting extraction from store with {len(store)} triples")
        self._log_sample(store)

        state = ExtractionState(store=store, resolver=RestrictionResolver(store))

        self._extract_metadata(state)
        self._discover_classes(state)
        self._discover_properties(state)
        self._discover_individuals(state)
        self._extract_structural_edges(state)
        self._extract_skos(state)
        self._extract_instances(state)
        self._extract_assertions(state)

        graph = OntologyGraph(
            nodes=state.nodes.as_dict(),
            edges=state.edges.as_list(),
            metadata=state.metadata,
        )
        stats = graph.stats()
        logger.info(f"Extraction complete: {stats.total_nodes} nodes, {stats.total_edges} edges")
        logger.info(f"Node breakdown: classes={stats.classes}, properties={stats.properties}, "
                    f"individuals={stats.individuals}, skosConcepts={stats.skos_concepts}, "
                    f"skosConceptSchemes={stats.skos_concept_schemes}, literals={stats.literals}")
        return graph

    # ---- helpers -----------------------------------------------------------

    def _log_sample(self, store: TripleStore) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        for i, triple in enumerate(store.all()[:self.sample_size]):
            logger.debug(f"  {i}: {triple.subject} {triple.predicate} {triple.object}")

    def _get_label(self, state: ExtractionState, term: Term) -> Optional[str]:
        """First rdfs:label of a named resource, or None."""
        if not is_named(term):
            return None
        label = state.store.first_object(term, RDFS_LABEL)
        return str(label) if label is not None else None

    def _add_discovered(self, state: ExtractionState, term: Term, node_type: NodeType) -> OntologyNode:
        node_id = local_id(term)
        if node_id in state.nodes:
            return state.nodes.get(node_id)
        label = self._get_label(state, term) or node_id
        return state.nodes.insert_if_absent(node_id, label, node_type, str(term))

    def _ensure_node(self, state: ExtractionState, term: Term, node_type: NodeType) -> str:
        """Make sure a node exists for the resource; labelled by its local id."""
        node_id = local_id(term)
        state.nodes.insert_if_absent(node_id, node_id, node_type, str(term))
        return node_id

    def _named_subjects(self, state: ExtractionState, type_iri: URIRef) -> Iterator[URIRef]:
        for triple in state.store.match(None, RDF_TYPE, type_iri):
            if is_named(triple.subject):
                yield triple.subject

    # ---- stage 1 -----------------------------------------------------------

    def _extract_metadata(self, state: ExtractionState) -> None:
        ontologies = state.store.subjects(RDF_TYPE, OWL_ONTOLOGY)
        logger.info(f"Found {len(ontologies)} ontology declarations")
        if not ontologies:
            return

        # First declaration in store order is canonical
        ontology = ontologies[0]
        state.metadata.ontologyURI = str(ontology)

        title = state.store.first_object(ontology, DC_TITLE)
        if title is not None:
            state.metadata.title = str(title)

        description = state.store.first_object(ontology, DC_DESCRIPTION)
        if description is not None:
            state.metadata.description = str(description)

    # ---- stages 2-4 --------------------------------------------------------

    def _discover_classes(self, state: ExtractionState) -> None:
        for class_type in CLASS_TYPES:
            for subject in self._named_subjects(state, class_type):
                self._add_discovered(state, subject, NodeType.CLASS)

        # Classes implied by subclass axioms, declared or not
        for triple in state.store.match(None, RDFS_SUBCLASS_OF, None):
            for term in (triple.subject, triple.object):
                if is_named(term):
                    self._add_discovered(state, term, NodeType.CLASS)

        logger.info(f"After class discovery: {state.nodes.count(NodeType.CLASS)} classes")

    def _discover_properties(self, state: ExtractionState) -> None:
        for property_type, kind in PROPERTY_TYPES:
            for subject in self._named_subjects(state, property_type):
                self._add_discovered(state, subject, NodeType.PROPERTY)
                uri = str(subject)
                if state.property_kinds.get(uri, "unknown") == "unknown":
                    state.property_kinds[uri] = kind

        for predicate in (RDFS_DOMAIN, RDFS_RANGE):
            for triple in state.store.match(None, predicate, None):
                if not is_named(triple.subject):
                    continue
                self._add_discovered(state, triple.subject, NodeType.PROPERTY)
                state.property_kinds.setdefault(str(triple.subject), "unknown")

        logger.info(f"After property discovery: {state.nodes.count(NodeType.PROPERTY)} properties")

    def _discover_individuals(self, state: ExtractionState) -> None:
        for subject in self._named_subjects(state, OWL_NAMED_INDIVIDUAL):
            self._add_discovered(state, subject, NodeType.INDIVIDUAL)

        logger.info(f"After individual discovery: {state.nodes.count(NodeType.INDIVIDUAL)} individuals")

    # ---- stage 5 -----------------------------------------------------------

    def _extract_structural_edges(self, state: ExtractionState) -> None:
        for predicate, node_type, edge_type in (
                (RDFS_SUBCLASS_OF, NodeType.CLASS, EdgeType.SUBCLASS_OF),
                (RDFS_SUBPROPERTY_OF, NodeType.PROPERTY, EdgeType.SUBPROPERTY_OF)):
            for triple in state.store.match(None, predicate, None):
                if not (is_named(triple.subject) and is_named(triple.object)):
                    continue
                source_id = self._ensure_node(state, triple.subject, node_type)
                target_id = self._ensure_node(state, triple.object, node_type)
                state.edges.append(source_id, target_id, edge_type.value, edge_type)

        # Domain edges point from the class to the property it carries
        for triple in state.store.match(None, RDFS_DOMAIN, None):
            if not (is_named(triple.subject) and is_named(triple.object)):
                continue
            property_id = self._ensure_node(state, triple.subject, NodeType.PROPERTY)
            class_id = self._ensure_node(state, triple.object, NodeType.CLASS)
            state.edges.append(class_id, property_id, "domain", EdgeType.DOMAIN)

        for triple in state.store.match(None, RDFS_RANGE, None):
            if not is_named(triple.subject):
                continue

            source_id = local_id(triple.subject)
            targets = state.resolver.resolve_range_targets(triple.object)
            if not targets and is_named(triple.object):
                targets = [(triple.object, NodeType.CLASS)]

            for target, target_type in targets:
                target_id = local_id(target)
                if not state.edges.claim(EdgeType.RANGE, (source_id, target_id)):
                    continue
                self._ensure_node(state, triple.subject, NodeType.PROPERTY)
                self._ensure_node(state, target, target_type)
                state.edges.append(source_id, target_id, "range", EdgeType.RANGE)

    # ---- stage 6 -----------------------------------------------------------

    def _extract_skos(self, state: ExtractionState) -> None:
        for subject in self._named_subjects(state, SKOS_CONCEPT_SCHEME):
            self._add_discovered(state, subject, NodeType.SKOS_CONCEPT_SCHEME)

        for subject in self._named_subjects(state, SKOS_CONCEPT):
            self._add_discovered(state, subject, NodeType.SKOS_CONCEPT)

        for triple in state.store.match(None, SKOS_IN_SCHEME, None):
            if not (is_named(triple.subject) and is_named(triple.object)):
                continue
            concept_id = local_id(triple.subject)
            scheme_id = local_id(triple.object)
            if not state.edges.claim(EdgeType.SKOS_IN_SCHEME, (concept_id, scheme_id)):
                continue
            self._ensure_node(state, triple.subject, NodeType.SKOS_CONCEPT)
            self._ensure_node(state, triple.object, NodeType.SKOS_CONCEPT_SCHEME)
            state.edges.append(concept_id, scheme_id, "inScheme", EdgeType.SKOS_IN_SCHEME)

    # ---- stage 7 -----------------------------------------------------------

    def _extract_instances(self, state: ExtractionState) -> None:
        class_uris = {node.uri for node in state.nodes.as_dict().values()
                      if node.type == NodeType.CLASS and node.uri}
        type_triples = state.store.match(None, RDF_TYPE, None)
        logger.info(f"Scanning {len(type_triples)} rdf:type statements for instances "
                    f"({len(class_uris)} known classes)")

        instance_count = 0
        for triple in type_triples:
            if not (is_named(triple.subject) and is_named(triple.object)):
                continue

            individual_uri = str(triple.subject)
            class_uri = str(triple.object)

            # Built-in meta-classes are only targets if declared as classes
            if class_uri not in class_uris and is_reserved_iri(class_uri):
                continue

            individual_id = local_id(individual_uri)
            class_id = local_id(class_uri)

            existing = state.nodes.get(individual_id)
            if existing is not None and existing.type != NodeType.INDIVIDUAL:
                continue

            if existing is None:
                self._add_discovered(state, triple.subject, NodeType.INDIVIDUAL)
            else:
                if not existing.uri:
                    existing.uri = individual_uri
                if not existing.label or existing.label == individual_id:
                    label = self._get_label(state, triple.subject)
                    if label:
                        existing.label = label

            self._add_discovered(state, triple.object, NodeType.CLASS)
            class_uris.add(class_uri)

            if not state.edges.claim(EdgeType.TYPE, (class_id, individual_id)):
                continue
            state.edges.append(individual_id, class_id, "instanceOf", EdgeType.TYPE)
            instance_count += 1

        logger.info(f"Added {instance_count} individual-to-class instance relationships")

    # ---- stage 8 -----------------------------------------------------------

    def _extract_assertions(self, state: ExtractionState) -> None:
        individual_ids = state.nodes.ids_of_type(NodeType.INDIVIDUAL)
        if not individual_ids:
            logger.info("No individuals found, skipping assertion extraction")
            return

        object_count = 0
        data_count = 0

        for triple in state.store.all():
            if not (is_named(triple.subject) and is_named(triple.predicate)):
                continue

            subject_id = local_id(triple.subject)
            if subject_id not in individual_ids:
                continue

            predicate = triple.predicate
            if predicate in NON_ASSERTION_PREDICATES:
                continue

            predicate_uri = str(predicate)
            property_id = local_id(predicate_uri)
            property_node = state.nodes.get(property_id)
            is_property_node = property_node is not None and property_node.type == NodeType.PROPERTY
            if not is_property_node and predicate_uri not in state.property_kinds:
                continue

            if is_property_node:
                edge_label = property_node.label
            else:
                edge_label = self._get_label(state, predicate) or property_id

            obj = triple.object
            edge_key = (subject_id, predicate_uri, str(obj))

            if is_named(obj):
                if not state.edges.claim(EdgeType.PROPERTY_ASSERTION, edge_key):
                    continue
                target_id = local_id(obj)
                target = state.nodes.get(target_id)
                if target is None:
                    label = self._get_label(state, obj) or target_id
                    state.nodes.insert_if_absent(target_id, label, self._infer_node_type(state, obj), str(obj))
                elif not target.uri:
                    target.uri = str(obj)
                state.edges.append(subject_id, target_id, edge_label, EdgeType.PROPERTY_ASSERTION)
                object_count += 1

            elif is_literal(obj):
                if not state.edges.claim(EdgeType.DATA_ASSERTION, edge_key):
                    continue
                literal_id = self._intern_literal(state, obj)
                state.edges.append(subject_id, literal_id, edge_label, EdgeType.DATA_ASSERTION)
                data_count += 1

        logger.info(f"Added {object_count} object property assertions and "
                    f"{data_count} data property assertions for instances")

    def _intern_literal(self, state: ExtractionState, literal: Literal) -> str:
        """Return the node id for a literal, creating it on first sight."""
        # Simple literals are xsd:string literals
        datatype = literal.datatype or (XSD_STRING if not literal.language else None)
        key = (
            str(literal),
            str(datatype) if datatype else "",
            literal.language or "",
        )
        literal_id = state.literal_ids.get(key)
        if literal_id is None:
            literal_id = f"literal_{len(state.literal_ids) + 1}"
            state.literal_ids[key] = literal_id
            state.nodes.insert_if_absent(literal_id, format_literal(literal), NodeType.LITERAL)
        return literal_id

    def _infer_node_type(self, state: ExtractionState, resource: URIRef) -> NodeType:
        """Node type from the resource's own rdf:type statements; individual by default."""
        for type_iri in state.store.objects(resource, RDF_TYPE):
            node_type = RESOURCE_TYPE_MAP.get(type_iri)
            if node_type is not None:
                return node_type
        return NodeType.INDIVIDUAL


def format_literal(literal: Literal) -> str:
    """Display form of a literal: value plus language tag or datatype name."""
    if literal.language:
        qualifier = f"@{literal.language}"
    elif literal.datatype:
        qualifier = local_id(literal.datatype) or str(literal.datatype)
    else:
        qualifier = "string"
    return f"{literal}\n({qualifier})"


def extract_ontology_graph(store: TripleStore) -> OntologyGraph:
    """Convenience wrapper around OntologyGraphExtractor().extract(store)."""
    return OntologyGraphExtractor().extract(store)
