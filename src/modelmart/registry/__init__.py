"""Model registry module for modelmart.

Read-only lookup of persona profiles that seed chat sessions.
"""

from .base import ModelRegistry
from .catalog import load_catalog, parse_catalog
from .factory import create_model_registry
from .in_memory import InMemoryModelRegistry
from .models import ModelProfile

__all__ = [
    "InMemoryModelRegistry",
    "ModelProfile",
    "ModelRegistry",
    "create_model_registry",
    "load_catalog",
    "parse_catalog",
]
