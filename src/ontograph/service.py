"""
High-level ontology graph service providing the public interface of the module.

This is the only public interface into the ontograph module. All other components
are private implementation details.
"""

from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import ParserConfig
from .domain import OntologyGraph
from .parser import OntologyParser
from .store import TripleStore


class OntologyGraphService:
    """High-level interface for turning ontologies into visualization graphs."""

    def __init__(self, parser: Optional[OntologyParser] = None, config: Optional[ParserConfig] = None):
        """Initialize the ontology graph service.

        Args:
            parser: Optional parser. If None, creates one from ``config``.
            config: Parser configuration, used only when no parser is given.
        """
        self.parser = parser if parser is not None else OntologyParser(config)

    def load_text(self, content: str) -> OntologyGraph:
        """Parse serialized ontology text into a graph.

        Args:
            content: Turtle (or configured format) text

        Returns:
            Extracted OntologyGraph

        Raises:
            OntologyParseError: If the content cannot be parsed
        """
        return self.parser.parse(content)

    def load_file(self, path: Union[str, Path]) -> OntologyGraph:
        """Parse an ontology file into a graph.

        Raises:
            OntologyParseError: If the file cannot be read or parsed
        """
        return self.parser.parse_file(path)

    def extract(self, store: TripleStore) -> OntologyGraph:
        """Extract a graph from an already populated triple store."""
        return self.parser.extractor.extract(store)

    def summarize(self, graph: OntologyGraph) -> Dict[str, Any]:
        """Get an overview of an extracted graph.

        Returns:
            Dict containing:
            - metadata: ontology URI, title, description (when present)
            - stats: node breakdown by type
            - edge_types: number of edges per edge type
        """
        edge_types = Counter(edge.type.value for edge in graph.edges)
        return {
            "metadata": graph.metadata.model_dump(exclude_none=True),
            "stats": asdict(graph.stats()),
            "edge_types": dict(sorted(edge_types.items())),
        }
