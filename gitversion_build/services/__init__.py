"""
Services implementing the gitversion-build pipeline.

The version source, schema decoding, publishing, rendering and idempotent
writing each live in their own module; generator.py composes them.
"""

from .generator import GenerationResult, GeneratorService
from .publisher import (
    EnvFilePublisher,
    EnvironPublisher,
    StreamPublisher,
    create_publishers,
    published_values,
)
from .renderer import render_module
from .schema import decode, decode_or_default
from .source import GitVersionToolSource, PayloadFileSource, create_version_source
from .writer import write_if_changed

__all__ = [
    "EnvFilePublisher",
    "EnvironPublisher",
    "GenerationResult",
    "GeneratorService",
    "GitVersionToolSource",
    "PayloadFileSource",
    "StreamPublisher",
    "create_publishers",
    "create_version_source",
    "decode",
    "decode_or_default",
    "published_values",
    "render_module",
    "write_if_changed",
]
