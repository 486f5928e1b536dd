"""Compile one source for several dump kinds, newest request wins."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from ir_explorer.compiler import CompileResult, compile_source
from ir_explorer.config import CompilerConfig

logger = logging.getLogger(__name__)

CompileFn = Callable[[str, str, CompilerConfig], CompileResult]


class CompileSession:
    """Holds the latest compile result per dump kind.

    Every request bumps a generation counter and clears the results. A result
    is stored only if it belongs to the current generation, so a slow answer
    to a superseded request can never replace a newer one.
    """

    def __init__(
        self,
        config: CompilerConfig | None = None,
        *,
        compile_fn: CompileFn = compile_source,
        max_workers: int = 4,
    ) -> None:
        self.config = config or CompilerConfig()
        self.compile_fn = compile_fn
        self.max_workers = max_workers
        self._lock = threading.Lock()
        self._generation = 0
        self._results: dict[str, CompileResult] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        """Start a new request, dropping every stored result."""
        with self._lock:
            self._generation += 1
            self._results = {}
            return self._generation

    def store(self, generation: int, kind: str, result: CompileResult) -> bool:
        """Record *result* unless *generation* has been superseded."""
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "dropping stale %s result (generation %d, current %d)",
                    kind, generation, self._generation,
                )
                return False
            self._results[kind] = result
            return True

    def result(self, kind: str) -> CompileResult | None:
        with self._lock:
            return self._results.get(kind)

    def results(self) -> dict[str, CompileResult]:
        with self._lock:
            return dict(self._results)

    def _compile_one(self, source: str, kind: str) -> CompileResult:
        try:
            return self.compile_fn(source, kind, self.config)
        except Exception as e:
            logger.exception("compile of %s failed", kind)
            return CompileResult(success=False, ir_output="", messages=f"Error: {e}")

    def compile_all(
        self,
        source: str,
        kinds: Iterable[str],
        *,
        on_result: Callable[[str, CompileResult], None] | None = None,
    ) -> dict[str, CompileResult]:
        """Compile *source* for every kind in parallel.

        *on_result* is called as each kind finishes, if its result is still
        current. Returns the results stored for this request.
        """
        generation = self.begin()
        kinds = list(dict.fromkeys(kinds))
        collected: dict[str, CompileResult] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                pool.submit(self._compile_one, source, kind): kind for kind in kinds
            }
            for future in as_completed(futures):
                kind = futures[future]
                result = future.result()
                if self.store(generation, kind, result):
                    collected[kind] = result
                    if on_result is not None:
                        on_result(kind, result)

        return collected
