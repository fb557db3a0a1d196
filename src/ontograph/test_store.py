"""
Unit test for the triple stores.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m ontograph.test_store

Or from the project root:
    cd src; python -m ontograph.test_store
"""

from rdflib import BNode, Graph, Literal, Namespace, RDF, RDFS
from rdflib.namespace import OWL

from .domain import Triple
from .store import GraphTripleStore, MemoryTripleStore

EX = Namespace("http://example.org/animals#")


def _sample_triples():
    return [
        (EX.Dog, RDF.type, OWL.Class),
        (EX.Dog, RDFS.subClassOf, EX.Animal),
        (EX.Cat, RDFS.subClassOf, EX.Animal),
        (EX.Dog, RDFS.label, Literal("Dog", lang="en")),
    ]


def test_memory_store_insertion_order():
    """Test that full scans return triples in insertion order."""
    print("Testing MemoryTripleStore insertion order...")

    store = MemoryTripleStore(_sample_triples())

    assert len(store) == 4
    assert store.all() == [Triple(*t) for t in _sample_triples()]

    print("✓ Insertion order working correctly")


def test_memory_store_deduplicates():
    """Test duplicate triples are stored once."""
    print("Testing MemoryTripleStore deduplication...")

    store = MemoryTripleStore()
    assert store.add(EX.Dog, RDFS.subClassOf, EX.Animal) is True
    assert store.add(EX.Dog, RDFS.subClassOf, EX.Animal) is False
    assert store.add_all(_sample_triples()) == 3

    assert len(store) == 4
    assert (EX.Dog, RDFS.subClassOf, EX.Animal) in store

    print("✓ Deduplication working correctly")


def test_memory_store_pattern_match():
    """Test wildcard matching on every position."""
    print("Testing MemoryTripleStore pattern matching...")

    store = MemoryTripleStore(_sample_triples())

    assert len(store.match(EX.Dog, None, None)) == 3
    assert [t.subject for t in store.match(None, RDFS.subClassOf, EX.Animal)] == [EX.Dog, EX.Cat]
    assert store.match(EX.Cat, RDFS.subClassOf, EX.Animal) == [Triple(EX.Cat, RDFS.subClassOf, EX.Animal)]
    assert store.match(EX.Cat, RDF.type, None) == []
    assert store.match(EX.Unknown, None, None) == []
    assert store.match(None, None, Literal("Dog", lang="en"))[0].subject == EX.Dog
    # Different language tag is a different literal
    assert store.match(None, None, Literal("Dog", lang="cs")) == []

    print("✓ Pattern matching working correctly")


def test_store_convenience_lookups():
    """Test objects, first_object and subjects helpers."""
    print("Testing convenience lookups...")

    store = MemoryTripleStore(_sample_triples())

    assert store.objects(EX.Dog, RDFS.subClassOf) == [EX.Animal]
    assert store.first_object(EX.Dog, RDFS.label) == Literal("Dog", lang="en")
    assert store.first_object(EX.Cat, RDFS.label) is None
    assert store.subjects(RDFS.subClassOf, EX.Animal) == [EX.Dog, EX.Cat]

    print("✓ Convenience lookups working correctly")


def test_blank_node_terms():
    """Test blank nodes match by label."""
    print("Testing blank node terms...")

    node = BNode("r1")
    store = MemoryTripleStore([(node, OWL.onProperty, EX.hasOwner)])

    assert store.first_object(BNode("r1"), OWL.onProperty) == EX.hasOwner
    assert store.first_object(BNode("r2"), OWL.onProperty) is None

    print("✓ Blank node terms working correctly")


def test_graph_store_adapter():
    """Test the rdflib Graph adapter and copying a graph into memory."""
    print("Testing GraphTripleStore adapter...")

    graph = Graph()
    for triple in _sample_triples():
        graph.add(triple)

    adapter = GraphTripleStore(graph)
    assert len(adapter) == 4
    assert set(adapter.match(None, RDFS.subClassOf, None)) == {
        Triple(EX.Dog, RDFS.subClassOf, EX.Animal),
        Triple(EX.Cat, RDFS.subClassOf, EX.Animal),
    }
    assert adapter.first_object(EX.Dog, RDF.type) == OWL.Class

    copied = MemoryTripleStore.from_graph(graph)
    assert len(copied) == 4
    assert set(copied.all()) == set(adapter.all())

    print("✓ GraphTripleStore adapter working correctly")


def run_all_tests():
    """Run all store tests."""
    print("=" * 50)
    print("Running Triple Store Tests")
    print("=" * 50)

    test_functions = [
        test_memory_store_insertion_order,
        test_memory_store_deduplicates,
        test_memory_store_pattern_match,
        test_store_convenience_lookups,
        test_blank_node_terms,
        test_graph_store_adapter,
    ]

    passed = 0
    failed = 0

    for test_func in test_functions:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"✗ {test_func.__name__} FAILED: {e}")
            failed += 1

    print("=" * 50)
    print(f"Test Results: {passed} passed, {failed} failed")
    print("=" * 50)

    return failed == 0


def main():
    """Main function to run the tests."""
    success = run_all_tests()
    if success:
        print("All tests passed!")
        return 0
    else:
        print("Some tests failed!")
        return 1


if __name__ == "__main__":
    exit(main())
