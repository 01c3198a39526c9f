# rm_preprocessor/pipeline/parallel/executor.py
from __future__ import annotations

import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable

from rm_preprocessor.pipeline.parallel.types import ItemOutcome, ParallelKind
from rm_preprocessor import logs


class ParallelExecutor:
    """
    Fixed-size worker pool for batch stages.

    - items are independent, no ordering guarantee across items
    - fail_fast=False: every item runs, failures come back as ItemOutcome
    - fail_fast=True : the first failure is re-raised once the pool is done
    - use_processes=False (default) runs on threads; handlers given to a
      process pool must be picklable (module-level functions / partials)
    """

    @staticmethod
    def run(
            *,
            kind: ParallelKind,
            items: Iterable[Any],
            handler: Callable[[Any], Any],
            max_workers: int | None = None,
            use_processes: bool = False,
            fail_fast: bool = False,
    ) -> list[ItemOutcome]:
        items = list(items)
        if not items:
            logs.info(f"[ParallelExecutor] kind={kind.value} no items to process")
            return []

        workers = ParallelExecutor._resolve_workers(items, max_workers)

        logs.info(
            f"[ParallelExecutor] start "
            f"kind={kind.value} total={len(items)} workers={workers}"
        )

        if workers == 1:
            outcomes = ParallelExecutor._run_sequential(items, handler, fail_fast)
        else:
            outcomes = ParallelExecutor._run_parallel(items, handler, workers, use_processes, fail_fast)

        failed = sum(1 for o in outcomes if not o.ok)
        logs.info(
            f"[ParallelExecutor] done kind={kind.value} ok={len(outcomes) - failed} failed={failed}"
        )
        return outcomes

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: list[Any], max_workers: int | None) -> int:
        cpu = os.cpu_count() or 1
        if max_workers is None:
            return max(1, min(cpu, len(items)))
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _run_sequential(
            items: list[Any],
            handler: Callable[[Any], Any],
            fail_fast: bool,
    ) -> list[ItemOutcome]:
        outcomes = []
        for item in items:
            try:
                outcomes.append(ItemOutcome.success(item, handler(item)))
            except Exception as e:
                if fail_fast:
                    raise
                outcomes.append(ItemOutcome.failure(item, e))
        return outcomes

    @staticmethod
    def _run_parallel(
            items: list[Any],
            handler: Callable[[Any], Any],
            workers: int,
            use_processes: bool,
            fail_fast: bool,
    ) -> list[ItemOutcome]:
        pool_cls: type[Executor] = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        logs.info(
            f"[ParallelExecutor] run parallel | pool={pool_cls.__name__} workers={workers}"
        )

        outcomes = []
        with pool_cls(max_workers=workers) as pool:
            futures = {
                pool.submit(handler, item): item
                for item in items
            }
            for fut in as_completed(futures):
                item = futures[fut]
                try:
                    outcomes.append(ItemOutcome.success(item, fut.result()))
                except Exception as e:
                    outcomes.append(ItemOutcome.failure(item, e))

        if fail_fast:
            for outcome in outcomes:
                if not outcome.ok:
                    raise outcome.exc

        return outcomes
