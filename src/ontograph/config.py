"""
Configuration for the ontology parsing front end.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_count(name: str, default: int) -> int:
    """Non-negative integer from the environment; the default if unparseable."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    return max(0, value)


@dataclass
class ParserConfig:
    """Configuration for OntologyParser."""
    rdf_format: str = "turtle"    # rdflib parser plugin name
    reject_rdf_xml: bool = True   # refuse RDF/XML input with a conversion hint
    sample_size: int = 5          # triples echoed at debug level before extraction
    log_level: str = "WARNING"    # used by the CLI when configuring logging

    @classmethod
    def from_env(cls) -> 'ParserConfig':
        """Build a config from ONTOGRAPH_* environment variables (and a .env file)."""
        load_dotenv()
        defaults = cls()
        return cls(
            rdf_format=os.getenv("ONTOGRAPH_RDF_FORMAT", defaults.rdf_format),
            reject_rdf_xml=_env_flag(os.getenv("ONTOGRAPH_REJECT_RDF_XML", str(defaults.reject_rdf_xml))),
            sample_size=_env_count("ONTOGRAPH_SAMPLE_SIZE", defaults.sample_size),
            log_level=os.getenv("ONTOGRAPH_LOG_LEVEL", defaults.log_level).upper(),
        )
