import argparse
import random
import time
from pathlib import Path
from typing import List

from tsp_evo.data import Instance, load_data, load_instance
from tsp_evo.evaluation import Fitness, aggregate_fitness, evaluate_solver
from tsp_evo.evolutionary import GAConfig
from tsp_evo.genetic import GeneticSolver
from tsp_evo.problem import TSPProblem


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def print_progress(candidate, steps: int) -> None:
    log(f"steps={steps} best distance={candidate.evaluate():.2f}")


def _config_from_args(args) -> GAConfig:
    return GAConfig(
        population_size=args.population_size,
        evolution_steps=args.steps,
        mutation_rate=args.mutation_rate,
        random_seed=args.seed,
    )


def _run_instance(problem: TSPProblem, cfg: GAConfig, optimum=None, quiet: bool = False) -> Fitness:
    solver = GeneticSolver(cfg, on_improvement=None if quiet else print_progress)
    log(f"GA started on {problem.name} ({problem.num_cities} cities)")
    fit = evaluate_solver(solver, problem, optimum)
    log("GA search ended")
    msg = f"{problem.name}: length={fit.length:.2f} found at generation {fit.generation}"
    if optimum is not None:
        msg += f" optimum={optimum:.2f} gap={fit.gap:.2%}"
    log(msg)
    return fit


def solve(args) -> None:
    cfg = _config_from_args(args)
    path = Path(args.path)
    if path.is_dir():
        log(f"loading data from {path}")
        instances: List[Instance] = load_data(path, max_nodes=args.max_nodes)
        if not instances:
            raise RuntimeError(
                f"No TSPLIB instances found in {path}. "
                "Place .tsp (and optional .opt.tour) files there before running."
            )
    else:
        instances = [load_instance(path)]
    log(f"using instances: {', '.join(inst.name for inst in instances)} (count={len(instances)})")

    fitnesses: List[Fitness] = []
    for inst in instances:
        problem = inst.to_problem()
        fit = _run_instance(problem, cfg, inst.optimum, quiet=args.quiet)
        log(f"{inst.name} tour: {' '.join(str(c) for c in problem.to_labels(fit.tour))}")
        fitnesses.append(fit)
    if len(fitnesses) > 1:
        summary = aggregate_fitness(fitnesses)
        log(
            f"mean length={summary['length']:.2f} mean gap={summary['gap']:.2%} "
            f"mean runtime={summary['runtime']:.2f}s"
        )


def random_instance(args) -> None:
    cfg = _config_from_args(args)
    problem = TSPProblem.random_euclidean(args.cities, random.Random(args.instance_seed))
    fit = _run_instance(problem, cfg, quiet=args.quiet)
    print(" ".join(str(c) for c in fit.tour))


def _add_ga_args(parser: argparse.ArgumentParser) -> None:
    defaults = GAConfig()
    parser.add_argument("--population-size", type=int, default=defaults.population_size)
    parser.add_argument("--steps", type=int, default=defaults.evolution_steps)
    parser.add_argument("--mutation-rate", type=float, default=defaults.mutation_rate)
    parser.add_argument("--seed", type=int, default=defaults.random_seed)
    parser.add_argument("--quiet", action="store_true", help="Only report the final result")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TSP GA CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Run the GA on a TSPLIB file or directory")
    solve_parser.add_argument("path", nargs="?", default="data/tsplib")
    solve_parser.add_argument("--max-nodes", type=int, default=None)
    _add_ga_args(solve_parser)
    solve_parser.set_defaults(func=solve)

    random_parser = subparsers.add_parser("random", help="Run the GA on random Euclidean cities")
    random_parser.add_argument("--cities", type=int, default=30)
    random_parser.add_argument("--instance-seed", type=int, default=0)
    _add_ga_args(random_parser)
    random_parser.set_defaults(func=random_instance)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
