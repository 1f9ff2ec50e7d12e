"""
Publisher interface definitions.

Publishers hand the GITVERSION_* key/value pairs to whatever consumes them
after this build step: the orchestrator reading stdout, the current
process environment, or a dotenv file.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class IPublisher(ABC):
    """
    Interface for publishing build-visible version values.
    """

    @abstractmethod
    def publish(self, pairs: Sequence[tuple[str, str]]) -> None:
        """
        Publish key/value pairs.

        Args:
            pairs: Ordered (key, value) pairs; keys are unique
        """
        pass
