"""Abstract base class for candidate sources."""

from abc import ABC, abstractmethod

from ma_engine.models import UnifiedVar


class CandidateSource(ABC):
    """Abstract interface for the data layer that supplies VAR records."""

    name: str = "base"

    @abstractmethod
    async def load(self) -> list[UnifiedVar]:
        """
        Load all candidate VARs.

        Returns:
            List of candidate records, read-only to the engine
        """
        pass
