import math
import random
from typing import List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np


class TSPProblem:
    """Symmetric TSP instance over cities ``0..N-1``.

    Holds the complete weighted graph and a dense distance matrix built from
    it. Instances are read-only and are shared by every candidate built
    against them.
    """

    def __init__(self, graph: nx.Graph, name: str = "tsp", coords: Optional[Sequence[Tuple[float, float]]] = None):
        nodes = list(graph.nodes())
        mapping = {n: i for i, n in enumerate(nodes)}
        self.name = name
        self.node_labels = nodes
        self.graph = nx.relabel_nodes(graph, mapping, copy=True)
        self.coords = list(coords) if coords is not None else None
        self.dist = np.zeros((len(nodes), len(nodes)), dtype=float)
        for u, v, w in self.graph.edges(data="weight", default=1.0):
            if u != v:
                self.dist[u, v] = self.dist[v, u] = w

    @classmethod
    def from_distance_matrix(cls, matrix, name: str = "tsp") -> "TSPProblem":
        mat = np.asarray(matrix, dtype=float)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {mat.shape}.")
        graph = nx.Graph()
        n = mat.shape[0]
        graph.add_nodes_from(range(n))
        for i in range(n):
            for j in range(i + 1, n):
                graph.add_edge(i, j, weight=float(mat[i, j]))
        return cls(graph, name=name)

    @classmethod
    def from_coords(cls, coords: Sequence[Tuple[float, float]], name: str = "tsp") -> "TSPProblem":
        graph = nx.Graph()
        graph.add_nodes_from(range(len(coords)))
        for i in range(len(coords)):
            for j in range(i + 1, len(coords)):
                (x1, y1), (x2, y2) = coords[i], coords[j]
                graph.add_edge(i, j, weight=math.hypot(x1 - x2, y1 - y2))
        return cls(graph, name=name, coords=coords)

    @classmethod
    def random_euclidean(cls, num_cities: int, rng: random.Random, size: float = 100.0) -> "TSPProblem":
        coords = [(rng.random() * size, rng.random() * size) for _ in range(num_cities)]
        return cls.from_coords(coords, name=f"random{num_cities}")

    @property
    def num_cities(self) -> int:
        return self.dist.shape[0]

    def distance(self, a: int, b: int) -> float:
        return float(self.dist[a, b])

    def tour_length(self, tour: Sequence[int]) -> float:
        idx = np.asarray(tour, dtype=np.intp)
        return float(self.dist[idx, np.roll(idx, -1)].sum())

    def to_labels(self, tour: Sequence[int]) -> List:
        """Map a tour over ``0..N-1`` back to the node labels of the source graph."""
        return [self.node_labels[i] for i in tour]

    def __repr__(self) -> str:
        return f"TSPProblem(name={self.name!r}, num_cities={self.num_cities})"
