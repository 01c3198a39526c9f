#!filepath: rm_preprocessor/observability/timeline_reporter.py
from typing import Dict, List

from rm_preprocessor import logs


class TimelineReporter:
    """
    Per-run timing table: one row per leaf timer, in the order the leaves
    finished, with its share of the summed time.
    """

    def __init__(self, timeline: Dict[str, float], label: str):
        self.timeline = timeline
        self.label = label

    def lines(self) -> List[str]:
        total = sum(self.timeline.values())
        rows = [f"===== Pipeline timeline for {self.label} ====="]

        for name, sec in self.timeline.items():
            share = sec / total * 100 if total > 0 else 0.0
            rows.append(f"{name:<30} {sec:>8.3f}s {share:>5.1f}%")

        rows.append(f"{'total':<30} {total:>8.3f}s")
        return rows

    def print(self):
        if not self.timeline:
            logs.debug(f"[Timeline] {self.label}: no timed stages")
            return
        for line in self.lines():
            logs.info(f"[Timeline] {line}")
