import random
from typing import Optional

from .evolutionary import GAConfig, GeneticSearch, ProgressCallback
from .problem import TSPProblem
from .solvers.base import SolveResult, Solver
from .solvers.operators import OrderCrossover, PermutationRandomizer, SwapMutation


class GeneticSolver(Solver):
    """Roulette-wheel GA with order crossover and swap mutation, sharing one random source."""

    name = "genetic"

    def __init__(
        self,
        config: GAConfig = None,
        rng: random.Random = None,
        on_improvement: Optional[ProgressCallback] = None,
    ):
        self.cfg = config or GAConfig()
        self.rng = rng or random.Random(self.cfg.random_seed)
        self.on_improvement = on_improvement
        self.search = GeneticSearch(
            self.cfg,
            initializer=PermutationRandomizer(self.rng),
            crossover=OrderCrossover(self.rng),
            mutation=SwapMutation(self.rng),
            rng=self.rng,
        )

    def run(self, problem: TSPProblem, optimum: Optional[float] = None) -> SolveResult:
        best = self.search.solve(problem, self.on_improvement)
        return SolveResult(
            tour=best.tour,
            length=best.evaluate(),
            solver_name=self.name,
            optimum=optimum,
            generation=self.search.best.generation,
        )
