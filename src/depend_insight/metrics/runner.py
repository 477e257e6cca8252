"""AnalysisRunner - runs a set of analyzers over one package collection."""

from __future__ import annotations

import concurrent.futures
from typing import Callable, Iterable, Optional

from ..code.models import Package
from ..exceptions.taxonomy import AnalyzerError, ErrorCode
from ..logging_config import get_logger
from .base import Analyzer
from .toposort import resolve_analyzer_order

logger = get_logger(__name__)


class AnalyzerTimeoutError(Exception):
    """Raised when an analyzer exceeds its time limit."""

    pass


def _run_with_timeout(func: Callable[[], None], timeout: Optional[float], name: str) -> None:
    """Run a function with a timeout. Raises AnalyzerTimeoutError if exceeded.

    The worker thread cannot be killed; on timeout it is left to finish in
    the background while the caller moves on.
    """
    if timeout is None:
        func()
        return
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
    future = executor.submit(func)
    try:
        future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        raise AnalyzerTimeoutError(f"Analyzer '{name}' exceeded {timeout}s timeout")
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class AnalysisRunner:
    """Order analyzers by requires/provides and run each over the same packages.

    An analyzer runs only when every slot it requires has been provided by an
    analyzer that already completed. Dependencies are handed over through
    ``add_dependency`` when the analyzer supports it.
    """

    def __init__(self, analyzers: Iterable[Analyzer], timeout_seconds: Optional[float] = None):
        self.analyzers = resolve_analyzer_order(list(analyzers))
        self.timeout_seconds = timeout_seconds
        self.errors: list[AnalyzerError] = []

    def run(self, packages: Iterable[Package]) -> dict[str, Analyzer]:
        """Run every analyzer; return completed analyzers keyed by provided slot."""
        packages = tuple(packages)
        self.errors = []
        available: dict[str, Analyzer] = {}

        for analyzer in self.analyzers:
            missing = set(analyzer.requires) - set(available)
            if missing:
                self._record(
                    analyzer.name,
                    ErrorCode.DI400,
                    f"Analyzer {analyzer.name} skipped: missing {sorted(missing)}",
                )
                continue

            if hasattr(analyzer, "add_dependency"):
                for slot in analyzer.requires:
                    analyzer.add_dependency(slot, available[slot])

            try:
                _run_with_timeout(
                    lambda a=analyzer: a.analyze(packages),
                    self.timeout_seconds,
                    analyzer.name,
                )
            except AnalyzerTimeoutError as e:
                self._record(analyzer.name, ErrorCode.DI402, str(e))
                continue
            except Exception as e:
                self._record(analyzer.name, ErrorCode.DI401, f"Analyzer {analyzer.name} failed: {e}")
                continue

            logger.debug(f"Analyzer {analyzer.name} completed")
            for slot in analyzer.provides:
                available[slot] = analyzer

        return available

    def project_metrics(self, completed: dict[str, Analyzer]) -> dict[str, float]:
        """Merge the project rows of all completed analyzers."""
        merged: dict[str, float] = {}
        for analyzer in dict.fromkeys(completed.values()):
            merged.update(analyzer.get_project_metrics())
        return merged

    def _record(self, name: str, code: ErrorCode, message: str) -> None:
        error = AnalyzerError(message=message, code=code, context={"analyzer": name})
        self.errors.append(error)
        logger.warning(str(error))
