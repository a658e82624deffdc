"""Text views over the aggregator.

This file is the "View" slice of MVC. Nothing here influences the counts; the
report view formats a finished Stats record and the step logger observes the
aggregator while it runs so a trace can be followed instruction by
instruction.
"""

import logging
import sys

from . import isa
from .errors import OutputUnavailable

logger = logging.getLogger(__name__)

# (report label, Stats attribute) in output order
COUNT_FIELDS = (
    ("insts", "insts"),
    ("r-type", "r_type"),
    ("i-type", "i_type"),
    ("j-type", "j_type"),
)
PERCENT_FIELDS = (
    ("fwd-taken", "fwd_taken"),
    ("bkw-taken", "bkw_taken"),
    ("not-taken", "not_taken"),
    ("loads", "loads"),
    ("stores", "stores"),
    ("arith", "arith"),
)


def format_report(stats) -> str:
    """Render stats as the plain-text statistics report."""
    lines = [f"{label}: {getattr(stats, attr)}" for label, attr in COUNT_FIELDS]
    lines += [f"{label}: {stats.percent(getattr(stats, attr)):.6f}" for label, attr in PERCENT_FIELDS]
    lines += [f"reg-{i}: {u.read} {u.write}" for i, u in enumerate(stats.regs)]
    return "\n".join(lines) + "\n"


class ReportView:
    def __init__(self, path: str = "statistics.txt"):
        """Remember where the report goes; '-' means standard output."""
        self.path = path

    def __call__(self, stats):
        self.write(stats)

    def write(self, stats):
        """Write the report, raising OutputUnavailable if the file can't be written."""
        text = format_report(stats)
        if self.path == "-":
            sys.stdout.write(text)
            return
        try:
            with open(self.path, "w") as f:
                f.write(text)
        except OSError as e:
            raise OutputUnavailable(f"cannot write report {self.path}: {e.strerror or e}") from e
        logger.info("wrote statistics for %d instructions to %s", stats.insts, self.path)


class StepLogger:
    """Aggregator observer that logs every decoded instruction at DEBUG."""

    def __init__(self, log=logger):
        self.log = log

    def __call__(self, aggregator, inst):
        if not self.log.isEnabledFor(logging.DEBUG):
            return
        if inst.type is isa.InstrType.R:
            fields = (f"rs={isa.REG_NAMES[inst.rs]} rt={isa.REG_NAMES[inst.rt]} "
                      f"rd={isa.REG_NAMES[inst.rd]} shamt={inst.shamt} funct={inst.funct:#04x}")
        elif inst.type is isa.InstrType.I:
            fields = f"rs={isa.REG_NAMES[inst.rs]} rt={isa.REG_NAMES[inst.rt]} imm={inst.imm:#06x}"
        else:
            fields = f"target={inst.j_addr:#09x}"
        self.log.debug("#%d %s [%s] %s", aggregator.stats.insts, inst, inst.type.name, fields)
