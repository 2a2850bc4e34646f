"""Per-run analysis context: logger handle plus cooperative cancellation.

Every operation that logs or loops over modules, edges or cycles takes an
explicit ``AnalysisContext`` instead of reaching for process-wide state, so
concurrent runs stay independent and tests can inject their own logger.

Usage:
    token = CancellationToken()
    ctx = AnalysisContext(cancellation=token)
    cycles = detect_cycles(graph, ctx)   # token.cancel() from another thread aborts
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import AnalysisCancelled
from .logging_config import get_logger


class CancellationToken:
    """Thread-safe cancellation flag checked between loop iterations."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class AnalysisContext:
    """Logger and cancellation signal shared by one analysis run."""

    logger: logging.Logger = field(default_factory=get_logger)
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    def check_cancelled(self, stage: str = "analysis") -> None:
        """Raise AnalysisCancelled if the run has been cancelled."""
        if self.cancellation.cancelled:
            self.logger.warning(f"{stage} cancelled")
            raise AnalysisCancelled(stage)

    def child(self, name: str) -> AnalysisContext:
        """Same cancellation token, logger scoped to a sub-component."""
        return AnalysisContext(
            logger=self.logger.getChild(name), cancellation=self.cancellation
        )


def ensure_context(context: Optional[AnalysisContext], name: str) -> AnalysisContext:
    """Return *context* scoped to *name*, or a fresh context when None."""
    if context is None:
        return AnalysisContext(logger=get_logger(name))
    suffix = name.rsplit(".", 1)[-1]
    if context.logger.name.endswith(f".{suffix}"):
        return context
    return context.child(suffix)
