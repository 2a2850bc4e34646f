"""Dependency graph construction from plain module/dependency records.

Real project loading (solution files, build manifests) happens outside this
package. What lives here is the thin adapter the CLI and tests use: a JSON
graph snapshot of the form

    {
      "modules": [{"name": "Core", "path": "src/Core"}, ...],
      "dependencies": [
        {"source": "Web", "target": "Core", "kind": "project_reference",
         "coupling_score": 12},
        ...
      ],
      "metrics": {
        "Core": {"complexity": 40, "tech_debt": 20, "api_exposure": 0},
        ...
      }
    }

``coupling_score`` is optional per dependency. A present value belongs to that
one entry, so parallel entries between the same pair keep their own counts.

With a FrameworkFilter, blocked modules and every dependency touching them
are skipped while parsing. A blocked dependency target need not be declared
under "modules".
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..context import AnalysisContext, ensure_context
from ..exceptions import InputValidationError, InvalidGraphDocumentError
from .filtering import FrameworkFilter, log_filter_summary
from .models import DependencyGraph, DependencyKind, Module


@dataclass
class GraphDocument:
    """A graph snapshot plus the raw data that travels with it."""

    graph: DependencyGraph
    edge_counts: dict[int, int] = field(default_factory=dict)
    metrics: dict[str, dict[str, float]] = field(default_factory=dict)


def build_dependency_graph(
    modules: Iterable[Module | str],
    dependencies: Iterable[tuple[str, str] | tuple[str, str, DependencyKind]],
) -> DependencyGraph:
    """Build a graph from modules and ``(source, target[, kind])`` tuples.

    Modules are added in iteration order, which fixes the traversal order of
    every later analysis. Duplicate module names are ignored; dependencies
    must reference declared modules.
    """
    if modules is None or dependencies is None:
        raise InputValidationError("module list", "must not be None")

    graph = DependencyGraph()
    for module in modules:
        graph.add_module(Module(module) if isinstance(module, str) else module)

    for dep in dependencies:
        if len(dep) == 3:
            source, target, kind = dep  # type: ignore[misc]
        else:
            source, target = dep  # type: ignore[misc]
            kind = DependencyKind.PROJECT_REFERENCE
        graph.add_dependency(source, target, kind)

    return graph


def load_graph_document(
    path: Path,
    framework_filter: Optional[FrameworkFilter] = None,
    context: Optional[AnalysisContext] = None,
) -> GraphDocument:
    """Read a JSON graph snapshot from *path*."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidGraphDocumentError(f"cannot read file: {e}", Path(path))
    except json.JSONDecodeError as e:
        raise InvalidGraphDocumentError(f"invalid JSON: {e}", Path(path))

    try:
        return parse_graph_document(raw, framework_filter, context)
    except InvalidGraphDocumentError as e:
        raise InvalidGraphDocumentError(e.reason, Path(path)) from e


def parse_graph_document(
    raw: Mapping[str, Any],
    framework_filter: Optional[FrameworkFilter] = None,
    context: Optional[AnalysisContext] = None,
) -> GraphDocument:
    """Turn an already-decoded snapshot into a GraphDocument."""
    if not isinstance(raw, Mapping):
        raise InvalidGraphDocumentError("top level must be an object")
    ctx = ensure_context(context, __name__)

    def blocked(name: str) -> bool:
        return framework_filter is not None and framework_filter.is_blocked(name)

    graph = DependencyGraph()
    for entry in _list_of(raw, "modules"):
        name = _entry_str(entry, "name", "modules")
        if blocked(name):
            ctx.logger.debug(f"Skipping framework module {name}")
            continue
        graph.add_module(Module(name=name, path=str(entry.get("path", ""))))

    edge_counts: dict[int, int] = {}
    skipped = 0
    for entry in _list_of(raw, "dependencies"):
        source = _entry_str(entry, "source", "dependencies")
        target = _entry_str(entry, "target", "dependencies")
        kind = _parse_kind(entry.get("kind"))
        if blocked(source) or blocked(target):
            skipped += 1
            continue
        try:
            edge = graph.add_dependency(source, target, kind)
        except InputValidationError as e:
            raise InvalidGraphDocumentError(e.reason)

        score = entry.get("coupling_score")
        if score is not None:
            if isinstance(score, bool) or not isinstance(score, int) or score < 0:
                raise InvalidGraphDocumentError(
                    f"coupling_score for {source} -> {target} must be a non-negative integer"
                )
            edge_counts[edge.index] = score

    if framework_filter is not None:
        log_filter_summary(skipped, graph.edge_count, ctx)

    metrics = raw.get("metrics", {})
    if not isinstance(metrics, Mapping):
        raise InvalidGraphDocumentError("'metrics' must be an object")
    for name, values in metrics.items():
        if not isinstance(values, Mapping):
            raise InvalidGraphDocumentError(f"metrics for {name} must be an object")

    return GraphDocument(
        graph=graph,
        edge_counts=edge_counts,
        metrics={name: dict(values) for name, values in metrics.items()},
    )


def _list_of(raw: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = raw.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
        raise InvalidGraphDocumentError(f"'{key}' must be a list of objects")
    return value


def _entry_str(entry: Mapping[str, Any], key: str, section: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidGraphDocumentError(f"every entry in '{section}' needs a '{key}' string")
    return value


def _parse_kind(value: Optional[str]) -> DependencyKind:
    if value is None:
        return DependencyKind.PROJECT_REFERENCE
    try:
        return DependencyKind(value)
    except ValueError:
        allowed = ", ".join(k.value for k in DependencyKind)
        raise InvalidGraphDocumentError(f"unknown dependency kind {value!r} (expected {allowed})")
