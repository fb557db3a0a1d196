"""
Unit test for configuration and the command line entry point.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m ontograph.test_cli

Or from the project root:
    cd src; python -m ontograph.test_cli
"""

import contextlib
import io
import json
import os
import tempfile
from pathlib import Path

from .cli import main as cli_main
from .config import ParserConfig
from .test_parser import SAMPLE_TTL

ENV_KEYS = ("ONTOGRAPH_RDF_FORMAT", "ONTOGRAPH_REJECT_RDF_XML", "ONTOGRAPH_SAMPLE_SIZE", "ONTOGRAPH_LOG_LEVEL")


@contextlib.contextmanager
def _environment(**values):
    saved = {key: os.environ.get(key) for key in ENV_KEYS}
    try:
        for key in ENV_KEYS:
            os.environ.pop(key, None)
        os.environ.update(values)
        yield
    finally:
        for key, value in saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


def _run_cli(args):
    out = io.StringIO()
    err = io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = cli_main(args)
    return code, out.getvalue(), err.getvalue()


def test_config_defaults():
    """Test ParserConfig defaults."""
    print("Testing ParserConfig defaults...")

    config = ParserConfig()
    assert config.rdf_format == "turtle"
    assert config.reject_rdf_xml is True
    assert config.sample_size == 5
    assert config.log_level == "WARNING"

    print("✓ ParserConfig defaults working correctly")


def test_config_from_env():
    """Test ParserConfig reads ONTOGRAPH_* variables."""
    print("Testing ParserConfig.from_env...")

    with _environment(ONTOGRAPH_RDF_FORMAT="nt",
                      ONTOGRAPH_REJECT_RDF_XML="false",
                      ONTOGRAPH_SAMPLE_SIZE="2",
                      ONTOGRAPH_LOG_LEVEL="debug"):
        config = ParserConfig.from_env()

    assert config.rdf_format == "nt"
    assert config.reject_rdf_xml is False
    assert config.sample_size == 2
    assert config.log_level == "DEBUG"

    print("✓ ParserConfig.from_env working correctly")


def test_config_sample_size_fallback():
    """Test unusable ONTOGRAPH_SAMPLE_SIZE values."""
    print("Testing sample size fallback...")

    with _environment(ONTOGRAPH_SAMPLE_SIZE="abc"):
        assert ParserConfig.from_env().sample_size == 5

    with _environment(ONTOGRAPH_SAMPLE_SIZE="-3"):
        assert ParserConfig.from_env().sample_size == 0

    print("✓ Sample size fallback working correctly")


def test_cli_summary_and_json():
    """Test summary, JSON and file output modes."""
    print("Testing CLI output modes...")

    with _environment(), tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "animals.ttl"
        path.write_text(SAMPLE_TTL, encoding="utf-8")

        code, out, _ = _run_cli([str(path)])
        assert code == 0
        assert "Nodes: 15 Edges: 15" in out
        assert "ontologyURI: http://example.org/animals" in out

        code, out, _ = _run_cli([str(path), "--json", "--sorted"])
        assert code == 0
        payload = json.loads(out)
        assert len(payload["nodes"]) == 15
        edge_keys = [(e["type"], e["source"], e["target"]) for e in payload["edges"]]
        assert edge_keys == sorted(edge_keys)

        output = Path(temp_dir) / "graph.json"
        code, out, _ = _run_cli([str(path), "--output", str(output)])
        assert code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["metadata"]["title"] == "Animals"

    print("✓ CLI output modes working correctly")


def test_cli_reports_errors():
    """Test parse failures exit with status 1."""
    print("Testing CLI error reporting...")

    with _environment(), tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "broken.owl"
        path.write_text('<?xml version="1.0"?><rdf:RDF/>', encoding="utf-8")

        code, _, err = _run_cli([str(path)])
        assert code == 1
        assert err.startswith("Error: ")

    print("✓ CLI error reporting working correctly")


def test_cli_reports_unwritable_output():
    """Test a failed --output write exits with status 1."""
    print("Testing CLI output write failure...")

    with _environment(), tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "animals.ttl"
        path.write_text(SAMPLE_TTL, encoding="utf-8")
        output = Path(temp_dir) / "missing" / "graph.json"

        code, out, err = _run_cli([str(path), "--output", str(output)])
        assert code == 1
        assert err.startswith("Error: ")
        assert "Graph written" not in out
        assert not output.exists()

    print("✓ CLI output write failure working correctly")


def run_all_tests():
    """Run all config and CLI tests."""
    print("=" * 50)
    print("Running Config and CLI Tests")
    print("=" * 50)

    test_functions = [
        test_config_defaults,
        test_config_from_env,
        test_config_sample_size_fallback,
        test_cli_summary_and_json,
        test_cli_reports_errors,
        test_cli_reports_unwritable_output,
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
