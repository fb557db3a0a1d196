"""
Ontology Graph Extraction Module

This module turns RDF/OWL/RDFS/SKOS statements into a typed, de-duplicated graph
of ontology entities and relations for visualization.

Public Interface:
- OntologyGraphService: High-level service for loading and extracting graphs

Private Components:
- OntologyParser: rdflib-backed parsing front end
- OntologyGraphExtractor: multi-stage node/edge extraction
- RestrictionResolver: RDF list and OWL restriction unwinding
- TripleStore implementations and domain models
"""

from .service import OntologyGraphService

__all__ = ["OntologyGraphService"]
