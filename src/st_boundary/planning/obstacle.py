"""
Obstacle model and the per-cycle decision container.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from st_boundary.gateway.data_types import PredictionTrajectory
from st_boundary.planning.decisions import (
    MAIN_DECISION_TYPES, MainDecision, NoDecision, ObjectDecision, check_decision
)


@dataclass
class Obstacle:
    """Perceived obstacle with its predicted motion and attached decisions."""
    id: str
    length: float   # [m]
    width: float    # [m]
    speed: float = 0.0  # [m/s]
    prediction_trajectories: List[PredictionTrajectory] = field(default_factory=list)
    decisions: List[ObjectDecision] = field(default_factory=list)

    def __post_init__(self):
        for decision in self.decisions:
            check_decision(decision)

    @property
    def is_static(self) -> bool:
        """True if no prediction trajectory carries any point."""
        return all(t.num_of_points == 0 for t in self.prediction_trajectories)


@dataclass
class DecisionData:
    """
    Decisions of one planning cycle.

    Obstacle lists supplied by collaborators may contain None entries; they
    are dropped here so the mapper only ever sees real obstacles.
    """
    main_decision: MainDecision = field(default_factory=NoDecision)
    static_obstacles: List[Obstacle] = field(default_factory=list)
    dynamic_obstacles: List[Obstacle] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(check_decision(self.main_decision), MAIN_DECISION_TYPES):
            raise TypeError(f"{type(self.main_decision).__name__} cannot be a main decision")
        self.static_obstacles = _drop_missing(self.static_obstacles)
        self.dynamic_obstacles = _drop_missing(self.dynamic_obstacles)

    @classmethod
    def from_obstacles(
        cls,
        obstacles: Iterable[Optional[Obstacle]],
        main_decision: Optional[MainDecision] = None
    ) -> 'DecisionData':
        """Split obstacles into static and dynamic by their predicted motion."""
        present = _drop_missing(obstacles)
        return cls(
            main_decision=main_decision or NoDecision(),
            static_obstacles=[o for o in present if o.is_static],
            dynamic_obstacles=[o for o in present if not o.is_static]
        )


def _drop_missing(obstacles: Iterable[Optional[Obstacle]]) -> List[Obstacle]:
    return [o for o in obstacles if o is not None]
