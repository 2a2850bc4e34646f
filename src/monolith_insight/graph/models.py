"""Data models for module dependency analysis.

Levels:
  Vertices: modules (identity = name; path is display-only)
  Edges: dependency records held in an indexable arena on the graph
  Derived structures: cycles (SCCs with 2+ members) and their statistics
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional

from ..exceptions import InputValidationError

# ── Vertices and edges ─────────────────────────────────────────────


class DependencyKind(Enum):
    """How one module references another."""

    PROJECT_REFERENCE = "project_reference"
    BINARY_REFERENCE = "binary_reference"


class CouplingStrength(Enum):
    """Three-level coupling category derived from a call count."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


@dataclass(frozen=True)
class Module:
    """A vertex in the dependency graph. Equality and hashing use the name only."""

    name: str
    path: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Dependency:
    """A directed edge: ``source`` depends on ``target``.

    Edge records are compared by identity, so parallel edges between the
    same pair of modules stay independent. ``coupling_score`` defaults to 1
    (reference only, no semantic data) until coupling annotation runs.
    """

    source: Module
    target: Module
    kind: DependencyKind = DependencyKind.PROJECT_REFERENCE
    coupling_score: int = 1
    coupling_strength: CouplingStrength = CouplingStrength.WEAK
    index: int = -1

    @property
    def is_project_reference(self) -> bool:
        return self.kind is DependencyKind.PROJECT_REFERENCE

    @property
    def endpoints(self) -> tuple[str, str]:
        return (self.source.name, self.target.name)

    def __str__(self) -> str:
        return (
            f"{self.source.name} -> {self.target.name} "
            f"({self.kind.value}, {self.coupling_score} calls, {self.coupling_strength.value})"
        )


# ── The dependency graph ───────────────────────────────────────────


class DependencyGraph:
    """Directed multigraph of modules.

    Edges live in a list (the arena) and are addressed by ``Dependency.index``;
    per-vertex out/in lists store arena indices. Vertices keep insertion order,
    which makes every traversal deterministic for a given build order.

    The external loader adds vertices and edges; analysis code only annotates
    coupling through ``set_coupling`` and reads structure.
    """

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._edges: list[Dependency] = []
        self._out: dict[str, list[int]] = {}
        self._in: dict[str, list[int]] = {}

    # -- construction (loader side) --

    def add_module(self, module: Module) -> bool:
        """Add a vertex. Returns False if a module with that name already exists."""
        if module is None:
            raise InputValidationError("module", "must not be None")
        if module.name in self._modules:
            return False
        self._modules[module.name] = module
        self._out[module.name] = []
        self._in[module.name] = []
        return True

    def add_dependency(
        self,
        source: Module | str,
        target: Module | str,
        kind: DependencyKind = DependencyKind.PROJECT_REFERENCE,
    ) -> Dependency:
        """Add an edge between two existing vertices and return its record."""
        src = self._resolve(source)
        tgt = self._resolve(target)
        edge = Dependency(source=src, target=tgt, kind=kind, index=len(self._edges))
        self._edges.append(edge)
        self._out[src.name].append(edge.index)
        self._in[tgt.name].append(edge.index)
        return edge

    def _resolve(self, module: Module | str) -> Module:
        if module is None:
            raise InputValidationError("module", "must not be None")
        name = module if isinstance(module, str) else module.name
        found = self._modules.get(name)
        if found is None:
            raise InputValidationError("dependency endpoint", f"unknown module {name!r}")
        return found

    # -- annotation (single write phase) --

    def set_coupling(self, index: int, score: int, strength: CouplingStrength) -> None:
        edge = self._edges[index]
        edge.coupling_score = score
        edge.coupling_strength = strength

    # -- queries --

    def vertices(self) -> tuple[Module, ...]:
        return tuple(self._modules.values())

    def edges(self) -> tuple[Dependency, ...]:
        return tuple(self._edges)

    def edge(self, index: int) -> Dependency:
        return self._edges[index]

    def get_module(self, name: str) -> Optional[Module]:
        return self._modules.get(name)

    def __contains__(self, module: object) -> bool:
        name = module.name if isinstance(module, Module) else module
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    @property
    def vertex_count(self) -> int:
        return len(self._modules)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def out_edges(self, module: Module | str) -> list[Dependency]:
        name = self._resolve(module).name
        return [self._edges[i] for i in self._out[name]]

    def in_edges(self, module: Module | str) -> list[Dependency]:
        name = self._resolve(module).name
        return [self._edges[i] for i in self._in[name]]

    def successors(self, module: Module | str) -> list[str]:
        """Target names of outgoing edges, in edge order (parallel edges repeat)."""
        return [edge.target.name for edge in self.out_edges(module)]

    def adjacency(self) -> dict[str, list[str]]:
        """Name -> successor names, the shape the graph algorithms walk."""
        return {name: [self._edges[i].target.name for i in idx] for name, idx in self._out.items()}

    def orphaned_modules(self) -> list[Module]:
        """Modules with neither incoming nor outgoing dependencies."""
        return [m for m in self._modules.values() if not self._out[m.name] and not self._in[m.name]]


# ── Derived structures ─────────────────────────────────────────────


@dataclass(frozen=True)
class Cycle:
    """A strongly connected component with more than one module (a real cycle).

    ``weak_edges`` and ``weak_coupling_score`` stay empty / None until weak-edge
    analysis produces an annotated copy through ``with_weak_edges``.
    """

    cycle_id: int
    modules: tuple[Module, ...]
    weak_edges: tuple[Dependency, ...] = ()
    weak_coupling_score: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.modules) < 2:
            raise InputValidationError("cycle", "must contain at least 2 modules")

    @property
    def size(self) -> int:
        return len(self.modules)

    @property
    def module_names(self) -> frozenset[str]:
        return frozenset(m.name for m in self.modules)

    def with_weak_edges(self, edges: Iterable[Dependency], score: int) -> Cycle:
        return replace(self, weak_edges=tuple(edges), weak_coupling_score=score)


@dataclass(frozen=True)
class CycleStatistics:
    """Aggregate view over one detection run's cycles."""

    total_cycles: int = 0
    total_modules_in_cycles: int = 0
    total_modules_analyzed: int = 0
    participation_rate: float = 0.0  # in_cycles / analyzed, 0.0 for an empty graph
    largest_cycle_size: Optional[int] = None  # None when there are no cycles

    @property
    def participation_percent(self) -> float:
        return self.participation_rate * 100.0
