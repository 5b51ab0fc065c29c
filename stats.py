# stats.py
"""
Periodic statistics about wall hits.

The StatsAggregator owns the hit counter. The integrator reports the hits
of each tick here, and once per reporting interval the aggregator emits a
single line with the derived metric and starts counting from zero again.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from timer import RepeatingTimer
from constants import STATS_LOGGER

logger = logging.getLogger(STATS_LOGGER)

# --- Data Contracts ---
#
# class StatsAggregator:
#   - __init__(self, interval: float):
#     - Inputs:
#       - interval: float, seconds between two reports.
#
#   - record_hits(self, count: int) -> None:
#     - Side Effects: Adds `count` to the hit counter.
#
#   - update(self, dt: float, width: float, height: float) -> Optional[StatsReport]:
#     - Outputs: A StatsReport when the timer fired, None otherwise.
#     - Side Effects: On report, logs the metric and resets the counter to 0.
#     - Invariants: metric = hits * (width * height), with the container
#       size current at report time.


@dataclass(frozen=True)
class StatsReport:
    """One reporting interval worth of wall-hit statistics."""
    hits: int
    area: float
    metric: float
    elapsed: float

    def format(self) -> str:
        return f"stats - nb_hits/surface : {self.metric}"


class StatsAggregator:
    """
    Counts wall hits and reports them once per interval.
    """
    def __init__(self, interval: float):
        self.timer = RepeatingTimer(interval)
        self.hit_count = 0
        self.report_count = 0
        self.last_report: Optional[StatsReport] = None

    def record_hits(self, count: int) -> None:
        self.hit_count += int(count)

    def update(self, dt: float, width: float, height: float) -> Optional[StatsReport]:
        """
        Advances the report timer and emits a report if it fired.
        """
        if not self.timer.accumulate(dt):
            return None

        area = width * height
        # A count times an area; kept as-is so reports stay comparable
        # with earlier runs.
        report = StatsReport(
            hits=self.hit_count,
            area=area,
            metric=float(self.hit_count) * area,
            elapsed=self.timer.last_period
        )
        logger.info(report.format())
        self.hit_count = 0
        self.report_count += 1
        self.last_report = report
        return report
