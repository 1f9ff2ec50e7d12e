"""
Interface definitions for gitversion-build's services.

These abstract base classes define the contracts that implementations must
follow, so the generator depends on behaviour rather than concrete classes.
"""

from .logger import ILogger
from .publisher import IPublisher
from .source import IVersionSource

__all__ = [
    "ILogger",
    "IPublisher",
    "IVersionSource",
]
