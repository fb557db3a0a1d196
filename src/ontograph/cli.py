#!/usr/bin/env python3
"""
Command line entry point: parse an ontology file and print its graph.

Usage:
    cd src
    python -m ontograph.cli path/to/ontology.ttl [options]
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import ParserConfig
from .domain import OntologyGraph
from .errors import OntographError
from .service import OntologyGraphService


def print_summary(service: OntologyGraphService, graph: OntologyGraph) -> None:
    summary = service.summarize(graph)
    stats = summary["stats"]

    print("--- Parsed data summary ---")
    print(f"Nodes: {stats['total_nodes']} Edges: {stats['total_edges']}")

    metadata = summary["metadata"]
    if metadata:
        print("Metadata:")
        for key, value in metadata.items():
            print(f"  {key}: {value}")
    else:
        print("Metadata: none")

    print("Node breakdown:")
    for key in ("classes", "properties", "individuals", "skos_concepts", "skos_concept_schemes", "literals"):
        print(f"  {key}: {stats[key]}")

    if summary["edge_types"]:
        print("Edge breakdown:")
        for edge_type, count in summary["edge_types"].items():
            print(f"  {edge_type}: {count}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Extract a visualization graph from an OWL/RDFS/SKOS ontology",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a summary of the ontology graph
  python -m ontograph.cli sample.ttl

  # Dump the full graph payload as JSON, edges in stable order
  python -m ontograph.cli sample.ttl --json --sorted

  # Parse N-Triples and write the payload to a file
  python -m ontograph.cli data.nt --format nt --output graph.json
        """
    )

    parser.add_argument("input_file", help="Path to the ontology file (Turtle by default)")
    parser.add_argument("--format", dest="rdf_format", help="rdflib parser format (default: turtle)")
    parser.add_argument("--json", action="store_true", help="Print the full graph payload as JSON")
    parser.add_argument("--output", help="Write the JSON payload to this file")
    parser.add_argument("--sorted", action="store_true", help="Order edges by (type, source, target)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: ONTOGRAPH_LOG_LEVEL or WARNING)"
    )

    args = parser.parse_args(argv)

    config = ParserConfig.from_env()
    if args.rdf_format:
        config = replace(config, rdf_format=args.rdf_format)
    if args.log_level:
        config = replace(config, log_level=args.log_level)

    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING),
                        format='%(levelname)s: %(message)s')

    service = OntologyGraphService(config=config)

    try:
        graph = service.load_file(args.input_file)
    except OntographError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            Path(args.output).write_text(graph.to_json(sort_edges=args.sorted), encoding="utf-8")
        except OSError as e:
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Graph written to {args.output}")
    elif args.json:
        print(graph.to_json(sort_edges=args.sorted))
    else:
        print_summary(service, graph)

    return 0


if __name__ == "__main__":
    sys.exit(main())
