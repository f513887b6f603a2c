"""
Vehicle State - Interface for the ego vehicle's current state.
"""

from abc import ABC, abstractmethod


class IVehicleState(ABC):
    """Abstract interface for ego vehicle state queries."""

    @abstractmethod
    def timestamp(self) -> float:
        """
        Get the timestamp of the current planning cycle.

        Returns:
            Absolute time in seconds
        """
        pass
