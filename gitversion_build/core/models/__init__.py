"""
Pydantic models for gitversion-build.

This package provides typed, validated models for the version document
and for configuration. All models use Pydantic v2.
"""

from .base import GitVersionBuildBaseModel, ImmutableModel

# Configuration models
from .config import LoggingConfig, PublishConfig, SourceConfig

# Version domain models
from .version import EMPTY_PAYLOAD, ENV_KEY_PREFIX, VERSION_FIELDS, FieldSpec, GitVersion

__all__ = [
    "EMPTY_PAYLOAD",
    "ENV_KEY_PREFIX",
    "VERSION_FIELDS",
    "FieldSpec",
    "GitVersion",
    "GitVersionBuildBaseModel",
    "ImmutableModel",
    "LoggingConfig",
    "PublishConfig",
    "SourceConfig",
]
