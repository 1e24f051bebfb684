from .base import (
    CandidateSolution,
    InvalidInputError,
    PermutationCandidate,
    Solver,
    SolveResult,
    Tour,
)
from .operators import (
    BinaryOperator,
    NullaryOperator,
    OrderCrossover,
    PermutationRandomizer,
    SwapMutation,
    UnaryOperator,
)

__all__ = [
    "CandidateSolution",
    "InvalidInputError",
    "PermutationCandidate",
    "Solver",
    "SolveResult",
    "Tour",
    "NullaryOperator",
    "UnaryOperator",
    "BinaryOperator",
    "PermutationRandomizer",
    "OrderCrossover",
    "SwapMutation",
]
