"""
Variation operators over permutation-encoded candidates.

Every operator has one of three shapes: nullary (problem -> candidate),
unary (candidate -> candidate) or binary (candidate, candidate -> candidate).
The permutation operators build their output through a ``factory`` so they
work for any candidate type that stores its tour as an integer sequence in
``.data`` and its instance in ``.problem``.
"""
import random
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Sequence, Tuple, TypeVar

from .base import InvalidInputError, PermutationCandidate

C = TypeVar("C")
P = TypeVar("P")

CandidateFactory = Callable[[Sequence[int], object], C]


class NullaryOperator(ABC, Generic[C, P]):
    @abstractmethod
    def apply(self, problem: P) -> C:
        raise NotImplementedError

    def __call__(self, problem: P) -> C:
        return self.apply(problem)


class UnaryOperator(ABC, Generic[C, P]):
    @abstractmethod
    def apply(self, candidate: C) -> C:
        raise NotImplementedError

    def __call__(self, candidate: C) -> C:
        return self.apply(candidate)


class BinaryOperator(ABC, Generic[C, P]):
    @abstractmethod
    def apply(self, first: C, second: C) -> C:
        raise NotImplementedError

    def __call__(self, first: C, second: C) -> C:
        return self.apply(first, second)


class PermutationRandomizer(NullaryOperator):
    """Uniformly random tour over the problem's cities."""

    def __init__(self, rng: random.Random, factory: CandidateFactory = PermutationCandidate):
        self.rng = rng
        self.factory = factory

    def apply(self, problem):
        n = problem.num_cities
        if n <= 0:
            raise InvalidInputError("Cannot build a tour for a problem with no cities.")
        cities = list(range(n))
        self.rng.shuffle(cities)
        return self.factory(cities, problem)


class OrderCrossover(BinaryOperator):
    """
    Order crossover keeping a contiguous segment of the first parent in place.

    The segment ``first[start..end]`` (inclusive) is copied unchanged; the
    cities it does not contain are taken from the second parent in that
    parent's order and laid out around it, ``start`` of them before the
    segment and the rest after.
    """

    def __init__(self, rng: random.Random, factory: CandidateFactory = PermutationCandidate):
        self.rng = rng
        self.factory = factory

    def cut_points(self, n: int) -> Tuple[int, int]:
        first = self.rng.randrange(n)
        second = self.rng.randrange(n)
        while second == first:
            second = self.rng.randrange(n)
        return min(first, second), max(first, second)

    @staticmethod
    def recombine(first: Sequence[int], second: Sequence[int], start: int, end: int) -> List[int]:
        segment = list(first[start : end + 1])
        fixed = set(segment)
        rest = [city for city in second if city not in fixed]
        return rest[:start] + segment + rest[start:]

    def apply(self, first, second):
        if len(first.data) != len(second.data):
            raise InvalidInputError(
                f"Parents differ in length ({len(first.data)} != {len(second.data)})."
            )
        n = len(first.data)
        if n < 2:
            return self.factory(list(first.data), first.problem)
        start, end = self.cut_points(n)
        return self.factory(self.recombine(first.data, second.data, start, end), first.problem)


class SwapMutation(UnaryOperator):
    """Exchange the cities at two random positions."""

    def __init__(self, rng: random.Random, factory: CandidateFactory = PermutationCandidate):
        self.rng = rng
        self.factory = factory

    def apply(self, candidate):
        tour = list(candidate.data)
        n = len(tour)
        if n < 2:
            return self.factory(tour, candidate.problem)
        i = self.rng.randrange(n)
        j = self.rng.randrange(n)
        tour[i], tour[j] = tour[j], tour[i]
        return self.factory(tour, candidate.problem)
