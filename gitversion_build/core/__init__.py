"""
Core infrastructure for gitversion-build.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for the pipeline services
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, try_resolve
from .exceptions import (
    ArtifactIOError,
    ConfigError,
    ConfigFileError,
    DecodeError,
    GitVersionBuildError,
    MissingConfigError,
    SubprocessUnavailableError,
)

__all__ = [
    "ArtifactIOError",
    "ConfigError",
    "ConfigFileError",
    "DecodeError",
    "GitVersionBuildError",
    "MissingConfigError",
    "ServiceContainer",
    "SubprocessUnavailableError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "try_resolve",
]
