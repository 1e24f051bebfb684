import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .solvers.base import Solver, Tour


@dataclass
class Fitness:
    length: float
    runtime: float
    gap: float
    score: float
    solver_name: str
    generation: int = 0
    tour: Tour = field(default_factory=list, repr=False)


def fitness_of(candidate) -> float:
    """Selection fitness: reciprocal of the candidate's tour length."""
    return candidate.fitness


def evaluate_population(population: Sequence) -> np.ndarray:
    return np.array([fitness_of(ind) for ind in population], dtype=float)


def evaluate_solver(solver: Solver, problem, optimum: Optional[float] = None) -> Fitness:
    start = time.perf_counter()
    result = solver.run(problem, optimum=optimum)
    runtime = time.perf_counter() - start
    return Fitness(
        length=result.length,
        runtime=runtime,
        gap=result.gap,
        score=1.0 / result.length if result.length > 0 else float("inf"),
        solver_name=result.solver_name,
        generation=result.generation,
        tour=result.tour,
    )


def aggregate_fitness(fitnesses: List[Fitness]) -> Dict[str, float]:
    if not fitnesses:
        return {"length": float("inf"), "gap": float("inf"), "runtime": float("inf")}
    length = sum(f.length for f in fitnesses) / len(fitnesses)
    gap = sum(f.gap for f in fitnesses if f.gap != float("inf")) / max(
        1, sum(1 for f in fitnesses if f.gap != float("inf"))
    )
    runtime = sum(f.runtime for f in fitnesses) / len(fitnesses)
    return {"length": length, "gap": gap, "runtime": runtime}
