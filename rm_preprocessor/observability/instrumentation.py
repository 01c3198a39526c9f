#!filepath: rm_preprocessor/observability/instrumentation.py
from __future__ import annotations

import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict

from rm_preprocessor.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Leaf-only stage timing.

    Rules:
    1. only leaf timers (record=True) land in the timeline
    2. step-level timers (record=False) only bound wall time
    3. nothing is logged while a batch runs
    """

    enabled: bool = True

    # timeline: OrderedDict[leaf_name, elapsed_seconds]
    timeline: Dict[str, float] = field(default_factory=OrderedDict)

    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            timer name
        record : bool
            - True  : leaf, written to the timeline
            - False : parent scope, no side effect
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            start = time.perf_counter()
            try:
                yield
            finally:
                if record:
                    inst.timeline[name] = time.perf_counter() - start

        return _ctx()

    def generate_timeline_report(self, label: str):
        TimelineReporter(self.timeline, label).print()


class NoOpInstrumentation:
    """Used when instrumentation is disabled."""

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, label: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
