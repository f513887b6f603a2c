"""
Driving decisions attached to the scene or to individual obstacles.

A decision is one of a closed set of frozen dataclasses. Consumers dispatch
with isinstance over the full set and reject anything else.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StopDecision:
    """Stop before an enforced line given as a lane reference."""
    lane_id: str
    distance_s: float  # Arc length along the lane [m]


@dataclass(frozen=True)
class MissionCompleteDecision:
    """Destination reached; stop inside the success tunnel."""


@dataclass(frozen=True)
class FollowDecision:
    """Stay behind the obstacle by at least distance_s."""
    distance_s: float = 0.0


@dataclass(frozen=True)
class YieldDecision:
    """Let the obstacle pass first, keeping distance_s behind its overlap."""
    distance_s: float = 0.0


@dataclass(frozen=True)
class OvertakeDecision:
    """Pass ahead of the obstacle by at least distance_s."""
    distance_s: float = 0.0


@dataclass(frozen=True)
class NoDecision:
    """No constraint is attached."""


MainDecision = Union[StopDecision, MissionCompleteDecision, NoDecision]
ObjectDecision = Union[FollowDecision, YieldDecision, OvertakeDecision, NoDecision]
Decision = Union[StopDecision, MissionCompleteDecision, FollowDecision,
                 YieldDecision, OvertakeDecision, NoDecision]

DECISION_TYPES = (StopDecision, MissionCompleteDecision, FollowDecision,
                  YieldDecision, OvertakeDecision, NoDecision)
MAIN_DECISION_TYPES = (StopDecision, MissionCompleteDecision, NoDecision)


def check_decision(decision) -> Decision:
    """
    Reject objects outside the known decision set.

    Raises:
        TypeError: If decision is not one of the known decision kinds
    """
    if not isinstance(decision, DECISION_TYPES):
        raise TypeError(f"Unknown decision kind: {type(decision).__name__}")
    return decision
