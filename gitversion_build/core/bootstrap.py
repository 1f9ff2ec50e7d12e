"""
Application bootstrap for gitversion-build.

Initializes the DI container with the logger and the version source
described by the loaded settings. Call once at startup; tests call
reset() between cases.
"""

from __future__ import annotations

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.source import IVersionSource
from .settings import GitVersionBuildSettings

_initialized = False


def bootstrap(settings: GitVersionBuildSettings) -> ServiceContainer:
    """
    Bootstrap gitversion-build.

    Args:
        settings: Loaded settings

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: GitVersionBuildSettings) -> None:
    """Register core application services."""
    from ..services.logging import BuildLogger
    from ..services.source import create_version_source

    def create_logger() -> ILogger:
        return BuildLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
            log_file=settings.logging.log_file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_singleton(
        IVersionSource,  # type: ignore[type-abstract]
        factory=lambda: create_version_source(settings.source),
    )


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
