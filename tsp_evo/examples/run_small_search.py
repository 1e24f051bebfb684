import math
import random

from tsp_evo.evolutionary import GAConfig
from tsp_evo.genetic import GeneticSolver
from tsp_evo.problem import TSPProblem


def main():
    # Unit square: the optimal tour is the perimeter, length 4.
    r = math.sqrt(2)
    square = TSPProblem.from_distance_matrix(
        [
            [0, 1, r, 1],
            [1, 0, 1, r],
            [r, 1, 0, 1],
            [1, r, 1, 0],
        ],
        name="square",
    )
    cfg = GAConfig(population_size=20, evolution_steps=50, random_seed=7)

    def report(best, gen):
        print(f"gen {gen}: best tour={best.tour} length={best.evaluate():.2f}")

    result = GeneticSolver(cfg, on_improvement=report).run(square, optimum=4.0)
    print(f"square: length={result.length:.2f} gap={result.gap:.2%}")

    problem = TSPProblem.random_euclidean(25, random.Random(0))
    result = GeneticSolver(GAConfig(population_size=60, evolution_steps=300)).run(problem)
    print(f"{problem.name}: length={result.length:.2f} at generation {result.generation}")


if __name__ == "__main__":
    main()
