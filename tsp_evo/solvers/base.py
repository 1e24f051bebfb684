import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


Tour = List[int]


class InvalidInputError(ValueError):
    """Raised when an operator or the engine is handed a malformed problem or candidate."""


class CandidateSolution(ABC):
    """One member of a population, bound to the problem it was built against."""

    @abstractmethod
    def evaluate(self) -> float:
        """Raw score, lower is better."""
        raise NotImplementedError

    @property
    def fitness(self) -> float:
        return 1.0 / self.evaluate()


@dataclass(frozen=True, eq=True)
class PermutationCandidate(CandidateSolution):
    data: Tuple[int, ...]
    problem: object = field(compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.data, tuple):
            object.__setattr__(self, "data", tuple(self.data))

    def __len__(self) -> int:
        return len(self.data)

    @property
    def tour(self) -> Tour:
        return list(self.data)

    def evaluate(self) -> float:
        return self.problem.tour_length(self.data)


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def run(self, problem, optimum: Optional[float] = None) -> "SolveResult":
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str
    optimum: Optional[float]
    generation: int = 0

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
