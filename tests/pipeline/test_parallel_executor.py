from __future__ import annotations

import os

import pytest

from rm_preprocessor.pipeline.parallel.executor import ParallelExecutor
from rm_preprocessor.pipeline.parallel.types import ParallelKind


def worker_maybe_fail(item: str) -> str:
    if item == "bad":
        raise RuntimeError("boom")
    return item.upper()


def test_run_with_empty_items_does_nothing():
    called = []

    outcomes = ParallelExecutor.run(
        kind=ParallelKind.DATASET,
        items=[],
        handler=called.append,
    )

    assert outcomes == []
    assert called == []


def test_run_sequential_order_preserved():
    called = []

    def handler(x):
        called.append(x)

    items = ["a", "b", "c"]

    ParallelExecutor.run(
        kind=ParallelKind.DATASET,
        items=items,
        handler=handler,
        max_workers=1,
    )

    assert called == items


def test_run_parallel_all_items_processed():
    items = [f"item{i}" for i in range(20)]

    outcomes = ParallelExecutor.run(
        kind=ParallelKind.ARCHIVE,
        items=items,
        handler=worker_maybe_fail,
        max_workers=4,
    )

    assert sorted(o.item for o in outcomes) == sorted(items)
    assert all(o.ok and o.value == o.item.upper() for o in outcomes)


@pytest.mark.parametrize("workers", [1, 3])
def test_collect_mode_keeps_siblings_running(workers):
    items = ["ok1", "bad", "ok2"]

    outcomes = ParallelExecutor.run(
        kind=ParallelKind.DATASET,
        items=items,
        handler=worker_maybe_fail,
        max_workers=workers,
    )

    by_item = {o.item: o for o in outcomes}
    assert by_item["ok1"].ok and by_item["ok2"].ok
    assert not by_item["bad"].ok
    assert by_item["bad"].error_type == "RuntimeError"
    assert by_item["bad"].error == "boom"


@pytest.mark.parametrize("workers", [1, 3])
def test_fail_fast_propagates(workers):
    with pytest.raises(RuntimeError, match="boom"):
        ParallelExecutor.run(
            kind=ParallelKind.RELOCATE,
            items=["ok", "bad", "never"],
            handler=worker_maybe_fail,
            max_workers=workers,
            fail_fast=True,
        )


def test_resolve_workers_caps_by_items():
    assert ParallelExecutor._resolve_workers(["a", "b"], max_workers=10) == 2


def test_resolve_workers_caps_by_cpu():
    items = list(range(100))
    cpu = os.cpu_count() or 1

    assert ParallelExecutor._resolve_workers(items, max_workers=None) <= cpu


def test_resolve_workers_at_least_one():
    assert ParallelExecutor._resolve_workers(["a"], max_workers=0) == 1
