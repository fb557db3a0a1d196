"""
Domain models for the ontology graph module.

Terms are plain rdflib terms (URIRef, BNode, Literal). The extracted graph is
made of pydantic models whose field names and type tags are the wire contract
consumed by the visualization layer.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, Field
from rdflib import BNode, Literal, URIRef

Term = Union[URIRef, BNode, Literal]


class Triple(NamedTuple):
    """A single (subject, predicate, object) statement."""

    subject: Union[URIRef, BNode]
    predicate: URIRef
    object: Term


def is_named(term: Optional[Term]) -> bool:
    return isinstance(term, URIRef)


def is_blank(term: Optional[Term]) -> bool:
    return isinstance(term, BNode)


def is_literal(term: Optional[Term]) -> bool:
    return isinstance(term, Literal)


class NodeType(str, Enum):
    """Kinds of graph nodes."""
    CLASS = "class"
    PROPERTY = "property"
    INDIVIDUAL = "individual"
    ONTOLOGY = "ontology"
    SKOS_CONCEPT = "skosConcept"
    SKOS_CONCEPT_SCHEME = "skosConceptScheme"
    LITERAL = "literal"


class EdgeType(str, Enum):
    """Kinds of graph edges."""
    SUBCLASS_OF = "subClassOf"
    SUBPROPERTY_OF = "subPropertyOf"
    TYPE = "type"
    DOMAIN = "domain"
    RANGE = "range"
    SKOS_IN_SCHEME = "skosInScheme"
    PROPERTY_ASSERTION = "propertyAssertion"
    DATA_ASSERTION = "dataAssertion"
    OTHER = "other"


class OntologyNode(BaseModel):
    """A class, property, individual, SKOS resource or literal in the graph."""

    id: str = Field(..., description="Local identifier, unique within one graph")
    label: str = Field(..., description="Human readable label")
    type: NodeType = Field(..., description="Node kind")
    uri: Optional[str] = Field(None, description="Full IRI; absent for literal nodes")


class OntologyEdge(BaseModel):
    """A directed relationship between two nodes."""

    id: str = Field(..., description="Sequential edge identifier (edge_<n>)")
    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")
    label: str = Field(..., description="Display label")
    type: EdgeType = Field(..., description="Edge kind")


class GraphMetadata(BaseModel):
    """Ontology header information."""

    ontologyURI: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass
class GraphStats:
    """Node breakdown of an extracted graph."""

    total_nodes: int
    total_edges: int
    classes: int
    properties: int
    individuals: int
    skos_concepts: int
    skos_concept_schemes: int
    literals: int


class OntologyGraph(BaseModel):
    """Result of one extraction: nodes keyed by id, edges in discovery order."""

    nodes: Dict[str, OntologyNode] = Field(default_factory=dict)
    edges: List[OntologyEdge] = Field(default_factory=list)
    metadata: GraphMetadata = Field(default_factory=GraphMetadata)

    def nodes_of_type(self, node_type: NodeType) -> List[OntologyNode]:
        return [node for node in self.nodes.values() if node.type == node_type]

    def edges_of_type(self, edge_type: EdgeType) -> List[OntologyEdge]:
        return [edge for edge in self.edges if edge.type == edge_type]

    def sorted_edges(self) -> List[OntologyEdge]:
        """Edges ordered by (type, source, target), independent of store order."""
        return sorted(self.edges, key=lambda e: (e.type.value, e.source, e.target))

    def stats(self) -> GraphStats:
        return GraphStats(
            total_nodes=len(self.nodes),
            total_edges=len(self.edges),
            classes=len(self.nodes_of_type(NodeType.CLASS)),
            properties=len(self.nodes_of_type(NodeType.PROPERTY)),
            individuals=len(self.nodes_of_type(NodeType.INDIVIDUAL)),
            skos_concepts=len(self.nodes_of_type(NodeType.SKOS_CONCEPT)),
            skos_concept_schemes=len(self.nodes_of_type(NodeType.SKOS_CONCEPT_SCHEME)),
            literals=len(self.nodes_of_type(NodeType.LITERAL)),
        )

    def to_dict(self, sort_edges: bool = False) -> Dict[str, object]:
        """Presentation payload: node list, edge list and metadata."""
        edges = self.sorted_edges() if sort_edges else self.edges
        return {
            "nodes": [node.model_dump(mode="json", exclude_none=True) for node in self.nodes.values()],
            "edges": [edge.model_dump(mode="json") for edge in edges],
            "metadata": self.metadata.model_dump(mode="json", exclude_none=True),
        }

    def to_json(self, indent: Optional[int] = 2, sort_edges: bool = False) -> str:
        return json.dumps(self.to_dict(sort_edges=sort_edges), indent=indent, ensure_ascii=False)
