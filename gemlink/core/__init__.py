"""Core abstractions for the gem engine."""

from .base import GemTemplate
from .registry import GemRegistry, get_registry

__all__ = [
    "GemTemplate",
    "GemRegistry",
    "get_registry",
]
