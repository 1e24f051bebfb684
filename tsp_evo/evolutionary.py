import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from .evaluation import evaluate_population
from .solvers.base import InvalidInputError
from .solvers.operators import BinaryOperator, NullaryOperator, UnaryOperator


@dataclass
class GAConfig:
    population_size: int = 100
    evolution_steps: int = 1000
    mutation_rate: float = 0.1
    random_seed: int = 123

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError("population_size must be positive.")
        if self.evolution_steps < 1:
            raise ValueError("evolution_steps must be positive.")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be within [0, 1].")

    @property
    def mutation_threshold(self) -> float:
        return 1.0 - self.mutation_rate


@dataclass
class BestRecord:
    candidate: object = None
    fitness: float = 0.0
    generation: int = -1


ProgressCallback = Callable[[object, int], None]


def splitting_points(probabilities: Sequence[float]) -> np.ndarray:
    """Cumulative selection probabilities; the last entry is 1 up to rounding."""
    return np.cumsum(np.asarray(probabilities, dtype=float))


def index_of_next_greater(points: np.ndarray, value: float) -> int:
    """First index whose splitting point is >= ``value``, capped at the last index."""
    idx = int(np.searchsorted(points, value, side="left"))
    return min(idx, len(points) - 1)


class GeneticSearch:
    """
    Generational GA with roulette-wheel selection.

    Each generation is fully replaced by offspring; the best individual is
    only recorded, never carried over.
    """

    def __init__(
        self,
        config: GAConfig,
        initializer: NullaryOperator,
        crossover: BinaryOperator,
        mutation: UnaryOperator,
        rng: random.Random = None,
    ):
        self.cfg = config
        self.initializer = initializer
        self.crossover = crossover
        self.mutation = mutation
        self.rng = rng or random.Random(config.random_seed)
        self.population: List = []
        self.best = BestRecord()
        self.history: List[float] = []
        self.generation = 0

    def initialize(self, problem) -> None:
        if problem.num_cities < 2:
            raise InvalidInputError(
                f"Need at least two cities to evolve tours, got {problem.num_cities}."
            )
        self.population = [self.initializer(problem) for _ in range(self.cfg.population_size)]
        self.best = BestRecord()
        self.history = []
        self.generation = 0

    def select(self, points: np.ndarray) -> int:
        return index_of_next_greater(points, self.rng.random())

    def step(self, on_improvement: Optional[ProgressCallback] = None) -> None:
        if not self.population:
            raise InvalidInputError("Population is empty; call initialize() first.")
        fitness = evaluate_population(self.population)
        best_idx = int(np.argmax(fitness))
        if fitness[best_idx] > self.best.fitness:
            self.best = BestRecord(self.population[best_idx], float(fitness[best_idx]), self.generation)
            if on_improvement is not None:
                on_improvement(self.best.candidate, self.generation)
        self.history.append(self.best.fitness)

        points = splitting_points(fitness / fitness.sum())
        offspring = []
        for _ in range(len(self.population)):
            first = self.select(points)
            second = self.select(points)
            child = self.crossover(self.population[first], self.population[second])
            if self.rng.random() > self.cfg.mutation_threshold:
                child = self.mutation(child)
            offspring.append(child)
        self.population = offspring
        self.generation += 1

    def solve(self, problem, on_improvement: Optional[ProgressCallback] = None):
        self.initialize(problem)
        for _ in range(self.cfg.evolution_steps):
            self.step(on_improvement)
        return self.best.candidate
