import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import networkx as nx
import tsplib95

from .problem import TSPProblem


@dataclass
class Instance:
    name: str
    path: Path
    graph: nx.Graph
    optimum: Optional[float]

    def to_problem(self) -> TSPProblem:
        return TSPProblem(self.graph, name=self.name)


def hash_file(path: Path, chunk_size: int = 65536) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        while True:
            data = f.read(chunk_size)
            if not data:
                break
            h.update(data)
    return h.hexdigest()


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _read_dimension(path: Path) -> Optional[int]:
    try:
        with path.open("r") as f:
            for line in f:
                if "DIMENSION" in line.upper():
                    parts = line.replace(":", " ").split()
                    for token in parts:
                        if token.isdigit():
                            return int(token)
        return None
    except OSError:
        return None


def _load_optimum(problem, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            continue
        nodes = list(tour_file.tours[0])
        dist = 0.0
        for i in range(len(nodes)):
            a = nodes[i]
            b = nodes[(i + 1) % len(nodes)]
            dist += problem.get_weight(a, b)
        return float(dist)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No TSPLIB file at {path}")
    problem = tsplib95.load(path)
    graph = problem.get_graph()
    optimum = _load_optimum(problem, path)
    return Instance(name=problem.name or path.stem, path=path, graph=graph, optimum=optimum)


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    tsp_files = sorted(root.glob("*.tsp"))
    instances: List[Instance] = []
    for p in tsp_files:
        if max_nodes is not None:
            dim = _read_dimension(p)
            if dim is not None and dim > max_nodes:
                continue
        instances.append(load_instance(p))
        if max_instances is not None and len(instances) >= max_instances:
            break
    return instances


def cache_manifest(instances: List[Instance], cache_path: Path) -> None:
    cache = [
        {
            "name": inst.name,
            "path": str(inst.path),
            "optimum": inst.optimum,
            "hash": hash_file(inst.path),
        }
        for inst in instances
    ]
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(json.dumps(cache, indent=2))


def load_manifest(cache_path: Path) -> Optional[List[Dict]]:
    if not cache_path.exists():
        return None
    return json.loads(cache_path.read_text())


def _manifest_current(root: Path, cached: List[Dict]) -> bool:
    on_disk = sorted(str(p) for p in root.glob("*.tsp"))
    if sorted(item["path"] for item in cached) != on_disk:
        return False
    return all(hash_file(Path(item["path"])) == item["hash"] for item in cached)


def _select(
    instances: List[Instance], max_nodes: Optional[int], max_instances: Optional[int]
) -> List[Instance]:
    selected = [inst for inst in instances if max_nodes is None or len(inst.graph) <= max_nodes]
    if max_instances is not None:
        selected = selected[:max_instances]
    return selected


def load_data(
    root: Path,
    use_cache: bool = True,
    max_nodes: Optional[int] = None,
    max_instances: Optional[int] = None,
) -> List[Instance]:
    """Load every ``*.tsp`` under ``root``, then apply the size filters.

    The manifest always describes the whole directory, so a filtered call
    never hides instances from a later unfiltered one.
    """
    if not use_cache:
        return load_tsplib_instances(root, max_nodes=max_nodes, max_instances=max_instances)
    cache_path = root / "manifest.json"
    cached = load_manifest(cache_path)
    if cached and _manifest_current(root, cached):
        instances = [load_instance(Path(item["path"])) for item in cached]
    else:
        instances = load_tsplib_instances(root)
        if instances:
            cache_manifest(instances, cache_path)
    return _select(instances, max_nodes, max_instances)
