"""
Generational genetic algorithm for the TSP over permutation-encoded tours.
"""

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "genetic",
    "problem",
]
