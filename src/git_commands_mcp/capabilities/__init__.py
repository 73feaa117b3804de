"""Git command discovery models, extractor, and catalog."""

from .catalog import CapabilityCatalog, build_capabilities
from .extractor import CatalogExtractor, ExtractionError, SectionPolicy, parse_help_output
from .models import GitOperation, ToolCapability

__all__ = [
    "CapabilityCatalog",
    "CatalogExtractor",
    "ExtractionError",
    "GitOperation",
    "SectionPolicy",
    "ToolCapability",
    "build_capabilities",
    "parse_help_output",
]
