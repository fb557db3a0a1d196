"""
Vocabulary constants used by the ontology graph extractor.

Term constants come from rdflib's bundled namespaces so that the extractor compares
against the same URIRef values the parser produces. The reserved namespace table
is plain prefix data.
"""

from rdflib.namespace import DC, OWL, RDF, RDFS, SKOS, XSD

# Core predicates
RDF_TYPE = RDF.type
RDF_FIRST = RDF.first
RDF_REST = RDF.rest
RDF_NIL = RDF.nil
RDF_PROPERTY = RDF.Property

RDFS_SUBCLASS_OF = RDFS.subClassOf
RDFS_SUBPROPERTY_OF = RDFS.subPropertyOf
RDFS_DOMAIN = RDFS.domain
RDFS_RANGE = RDFS.range
RDFS_LABEL = RDFS.label
RDFS_COMMENT = RDFS.comment
RDFS_CLASS = RDFS.Class

OWL_CLASS = OWL.Class
OWL_OBJECT_PROPERTY = OWL.ObjectProperty
OWL_DATATYPE_PROPERTY = OWL.DatatypeProperty
OWL_ANNOTATION_PROPERTY = OWL.AnnotationProperty
OWL_NAMED_INDIVIDUAL = OWL.NamedIndividual
OWL_ONTOLOGY = OWL.Ontology
OWL_ON_PROPERTY = OWL.onProperty
OWL_HAS_VALUE = OWL.hasValue
OWL_INTERSECTION_OF = OWL.intersectionOf

SKOS_CONCEPT = SKOS.Concept
SKOS_CONCEPT_SCHEME = SKOS.ConceptScheme
SKOS_IN_SCHEME = SKOS.inScheme

DC_TITLE = DC.title
DC_DESCRIPTION = DC.description

XSD_STRING = XSD.string

# Class declarations, checked in this order
CLASS_TYPES = (OWL_CLASS, RDFS_CLASS)

# Property declarations, checked in this order; the value is the semantic kind
PROPERTY_TYPES = (
    (OWL_OBJECT_PROPERTY, "object"),
    (OWL_DATATYPE_PROPERTY, "data"),
    (OWL_ANNOTATION_PROPERTY, "annotation"),
    (RDF_PROPERTY, "unknown"),
)

# Predicates that never produce assertion edges
NON_ASSERTION_PREDICATES = frozenset({RDF_TYPE, RDFS_LABEL, RDFS_COMMENT})

# Namespaces whose members are meta-classes rather than user classes
RESERVED_NAMESPACES = (
    "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "http://www.w3.org/2000/01/rdf-schema#",
    "http://www.w3.org/2002/07/owl#",
)


def is_reserved_iri(iri: str) -> bool:
    """Return True if the IRI lies in one of the built-in RDF/RDFS/OWL namespaces."""
    return any(iri.startswith(ns) for ns in RESERVED_NAMESPACES)
