"""
Parsing front end: serialized ontology text -> triple store -> OntologyGraph.

Tokenizing is delegated to rdflib. This module only guards the accepted input
formats, wraps parser failures and hands the triples to the extractor.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rdflib import Graph

from .config import ParserConfig
from .domain import OntologyGraph
from .errors import OntologyParseError, UnsupportedFormatError
from .extractor import OntologyGraphExtractor
from .store import MemoryTripleStore

logger = logging.getLogger(__name__)

RDF_XML_HINT = ("RDF/XML format detected. Please convert your OWL file to Turtle format (.ttl) "
                "for better compatibility. You can use online converters or tools like Protégé "
                "to export as Turtle.")


def looks_like_rdf_xml(content: str) -> bool:
    return content.strip().startswith("<?xml") or "<rdf:RDF" in content


class OntologyParser:
    """Parses Turtle / N-Triples text into an OntologyGraph."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.extractor = OntologyGraphExtractor(sample_size=self.config.sample_size)

    def load_store(self, content: str) -> MemoryTripleStore:
        """
        Parse text into an in-memory triple store.

        Raises:
            UnsupportedFormatError: If RDF/XML input is rejected by configuration
            OntologyParseError: If rdflib cannot parse the content
        """
        logger.info(f"Parsing content of length {len(content)} as {self.config.rdf_format}")

        if self.config.reject_rdf_xml and looks_like_rdf_xml(content):
            raise UnsupportedFormatError(f"Failed to parse OWL file: {RDF_XML_HINT}")

        if not content.strip():
            logger.warning("Empty ontology content, nothing to parse")
            return MemoryTripleStore()

        graph = Graph()
        try:
            graph.parse(data=content, format=self.config.rdf_format)
        except Exception as e:
            raise OntologyParseError(f"Failed to parse OWL file: {e}") from e

        store = MemoryTripleStore.from_graph(graph)
        logger.info(f"Parsed {len(store)} triples")
        return store

    def parse(self, content: str) -> OntologyGraph:
        store = self.load_store(content)
        return self.extractor.extract(store)

    def parse_file(self, path: Union[str, Path]) -> OntologyGraph:
        """Read a UTF-8 file and parse it."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise OntologyParseError(f"Failed to read ontology file {path}: {e}") from e
        return self.parse(content)
