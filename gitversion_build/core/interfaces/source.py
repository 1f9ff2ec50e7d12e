"""
Version source interface definitions.

A version source produces the raw JSON text describing the current commit.
The pipeline does not care whether it comes from running GitVersion or from
a file computed earlier in CI.
"""

from abc import ABC, abstractmethod


class IVersionSource(ABC):
    """
    Interface for version payload providers.

    Implementations absorb their own failures: a source that cannot
    produce a payload returns None instead of raising, and the pipeline
    falls back to the empty document.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Source identifier used in diagnostics.

        Examples: 'dotnet-gitversion', 'file'
        """
        pass

    @abstractmethod
    def fetch(self) -> str | None:
        """
        Obtain the version payload.

        Returns:
            Trimmed payload text, or None when no payload is available
        """
        pass
