"""
result.py — Final Result of a Shortest-Path Run
================================================
What the generator returns once it is exhausted.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, Tuple


@dataclass(frozen=True)
class ShortestPathResult:
    """
    Attributes:
        start, end      : The endpoints the run was started with.
        distances       : {vertex: final distance} for SETTLED vertices only.
        tentative       : The whole working distance map at termination;
                          entries outside `settled` are upper bounds (or ∞).
        predecessors    : {vertex: vertex it was last relaxed from}.
        settled         : Vertices whose distance is final.
        path            : start … end, or () when end is unreachable.
        total_distance  : Cost of `path`, ∞ when end is unreachable.
    """

    start:          Hashable
    end:            Hashable
    distances:      Dict[Hashable, float]     = field(default_factory=dict)
    tentative:      Dict[Hashable, float]     = field(default_factory=dict)
    predecessors:   Dict[Hashable, Hashable]  = field(default_factory=dict)
    settled:        FrozenSet[Hashable]       = frozenset()
    path:           Tuple[Hashable, ...]      = ()
    total_distance: float                     = math.inf

    @property
    def reached(self) -> bool:
        return bool(self.path)

    def distance_to(self, vertex: Hashable) -> float:
        """Final distance to `vertex`, ∞ if it was never settled."""
        return self.distances.get(vertex, math.inf)
