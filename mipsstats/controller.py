import logging
from typing import Iterable, Tuple

from .model import TraceAggregator
from .stats import Stats

logger = logging.getLogger(__name__)


class AnalysisController:
    def __init__(self, aggregator: TraceAggregator, view, strict: bool = False):
        """Tie the aggregator to a report view and pick the invariant policy."""
        self.aggregator = aggregator
        self.view = view
        self.strict = strict

    def run_all(self, entries: Iterable[Tuple[int, int]]) -> Stats:
        """Fold the whole trace, check the result and hand it to the view."""
        stats = self.aggregator.run(entries)
        stats.check(strict=self.strict)
        if not self.strict:
            bad = stats.negative_registers()
            if bad:
                logger.warning("jal bookkeeping left negative counters on %s",
                               ", ".join(f"reg-{i}" for i in bad))
        if stats.insts == 0:
            logger.warning("empty trace; all percentages reported as 0.000000")
        self.view(stats)
        return stats
