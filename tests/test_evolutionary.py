import random

import numpy as np
import pytest

from tsp_evo.evolutionary import (
    GAConfig,
    GeneticSearch,
    index_of_next_greater,
    splitting_points,
)
from tsp_evo.problem import TSPProblem
from tsp_evo.solvers.base import InvalidInputError
from tsp_evo.solvers.operators import OrderCrossover, PermutationRandomizer, SwapMutation


def make_search(cfg, seed):
    rng = random.Random(seed)
    return GeneticSearch(
        cfg,
        initializer=PermutationRandomizer(rng),
        crossover=OrderCrossover(rng),
        mutation=SwapMutation(rng),
        rng=rng,
    )


def test_config_defaults():
    cfg = GAConfig()
    assert cfg.population_size == 100
    assert cfg.evolution_steps == 1000
    assert cfg.mutation_rate == pytest.approx(0.1)
    assert cfg.mutation_threshold == pytest.approx(0.9)


@pytest.mark.parametrize(
    "kwargs",
    [{"population_size": 0}, {"evolution_steps": 0}, {"mutation_rate": 1.5}, {"mutation_rate": -0.1}],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        GAConfig(**kwargs)


def test_splitting_points_end_at_one():
    fitness = np.array([1.0, 3.0, 4.0, 2.0])
    points = splitting_points(fitness / fitness.sum())
    assert points.tolist() == pytest.approx([0.1, 0.4, 0.8, 1.0])


def test_index_of_next_greater():
    points = np.array([0.1, 0.4, 0.8, 1.0])
    assert index_of_next_greater(points, 0.0) == 0
    assert index_of_next_greater(points, 0.1) == 0
    assert index_of_next_greater(points, 0.10001) == 1
    assert index_of_next_greater(points, 0.79) == 2
    assert index_of_next_greater(points, 0.95) == 3


def test_index_capped_when_sum_rounds_below_draw():
    points = np.array([0.5, 0.9999999])
    assert index_of_next_greater(points, 0.99999995) == 1


def test_roulette_frequency_tracks_fitness_share():
    rng = random.Random(0)
    points = splitting_points([0.7, 0.2, 0.1])
    counts = [0, 0, 0]
    for _ in range(20000):
        counts[index_of_next_greater(points, rng.random())] += 1
    assert counts[0] / 20000 == pytest.approx(0.7, abs=0.02)
    assert counts[2] / 20000 == pytest.approx(0.1, abs=0.02)


def test_population_stays_valid_each_generation(cities):
    cfg = GAConfig(population_size=30, evolution_steps=25, mutation_rate=0.5)
    search = make_search(cfg, seed=5)
    search.initialize(cities)
    n = cities.num_cities
    for _ in range(cfg.evolution_steps):
        assert len(search.population) == cfg.population_size
        for cand in search.population:
            assert sorted(cand.data) == list(range(n))
        search.step()
    assert search.generation == cfg.evolution_steps


def test_best_so_far_is_monotone_and_reported(cities):
    cfg = GAConfig(population_size=25, evolution_steps=60)
    search = make_search(cfg, seed=11)
    reports = []
    best = search.solve(cities, lambda cand, gen: reports.append((cand.fitness, gen)))
    assert len(search.history) == cfg.evolution_steps
    assert all(b >= a for a, b in zip(search.history, search.history[1:]))
    assert reports[0][1] == 0
    fits = [f for f, _ in reports]
    gens = [g for _, g in reports]
    assert all(b > a for a, b in zip(fits, fits[1:]))
    assert gens == sorted(gens)
    assert best.fitness == pytest.approx(search.best.fitness)
    assert search.best.generation == gens[-1]


def test_runs_without_callback(cities):
    cfg = GAConfig(population_size=10, evolution_steps=5)
    best = make_search(cfg, seed=2).solve(cities)
    assert sorted(best.data) == list(range(cities.num_cities))


def test_deterministic_given_seed(cities):
    cfg = GAConfig(population_size=20, evolution_steps=30)
    runs = []
    for _ in range(2):
        search = make_search(cfg, seed=99)
        seen = []
        best = search.solve(cities, lambda cand, gen: seen.append((cand.data, gen)))
        runs.append((best.data, seen, [c.data for c in search.population]))
    assert runs[0] == runs[1]


def test_exactly_evolution_steps_generations(square):
    cfg = GAConfig(population_size=5, evolution_steps=7)
    search = make_search(cfg, seed=1)
    search.solve(square)
    assert search.generation == 7
    assert len(search.history) == 7


def test_square_converges_to_perimeter(square):
    cfg = GAConfig(population_size=20, evolution_steps=50)
    best = make_search(cfg, seed=2024).solve(square)
    assert best.evaluate() == pytest.approx(4.0)


def test_rejects_problem_with_fewer_than_two_cities():
    one = TSPProblem.from_distance_matrix([[0.0]])
    search = make_search(GAConfig(population_size=4, evolution_steps=2), seed=0)
    with pytest.raises(InvalidInputError):
        search.solve(one)


def test_step_before_initialize_fails_fast():
    search = make_search(GAConfig(population_size=4, evolution_steps=2), seed=0)
    with pytest.raises(InvalidInputError, match="initialize"):
        search.step()
