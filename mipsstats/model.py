import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from . import isa
from .isa import Instruction, InstrType
from .stats import Stats

logger = logging.getLogger(__name__)

SEQUENTIAL_STEP = 4  # bytes between fall-through instructions
ADDR_BITS = 64

READ = "read"
WRITE = "write"

# Register bookkeeping as delta tables. Each entry is
# (instruction field name or fixed register index, counter, delta); a base
# pattern is chosen by instruction type and then corrected per opcode/funct.
R_BASE = (("rd", WRITE, +1), ("rs", READ, +1), ("rt", READ, +1))
R_FIXUPS = {
    isa.FUNCT_JR: (("rd", WRITE, -1), ("rt", READ, -1)),
    isa.FUNCT_SLL: (("rs", READ, -1),),
    isa.FUNCT_SRL: (("rs", READ, -1),),
    isa.FUNCT_SRA: (("rs", READ, -1),),
}

I_BASE = (("rt", WRITE, +1), ("rs", READ, +1))
_I_BRANCH = (("rt", WRITE, -1), ("rt", READ, +1))
_I_STORE = (("rt", READ, +1), ("rt", WRITE, -1))
I_FIXUPS = {
    isa.OP_LUI: (("rs", READ, -1),),
    isa.OP_BEQ: _I_BRANCH,
    isa.OP_BNE: _I_BRANCH,
    isa.OP_SB: _I_STORE,
    isa.OP_SH: _I_STORE,
    isa.OP_SW: _I_STORE,
    isa.OP_SC: _I_STORE,
}

# J-type has no base pattern. The jal rt/rs decrements have nothing to cancel
# and drive those counters negative; reproduced as-is so reports stay
# comparable with existing statistics (use strict mode to reject them).
J_FIXUPS = {
    isa.OP_JAL: (("rt", WRITE, -1), ("rs", READ, -1), (isa.RA, WRITE, +1)),
}

_BASES = {InstrType.R: R_BASE, InstrType.I: I_BASE, InstrType.J: ()}


def register_deltas(inst: Instruction) -> List[Tuple[int, str, int]]:
    """Resolve the delta tables for inst into (register, counter, delta) triples."""
    if inst.type is InstrType.R:
        fixups = R_FIXUPS.get(inst.funct, ())
    elif inst.type is InstrType.I:
        fixups = I_FIXUPS.get(inst.op, ())
    else:
        fixups = J_FIXUPS.get(inst.op, ())
    deltas = []
    for src, counter, delta in _BASES[inst.type] + fixups:
        reg = getattr(inst, src) if isinstance(src, str) else src
        deltas.append((reg, counter, delta))
    return deltas


def signed_delta(prev_addr: int, cur_addr: int) -> int:
    """Distance from prev_addr to cur_addr, wrapped to a signed 64-bit value."""
    half = 1 << (ADDR_BITS - 1)
    return ((cur_addr - prev_addr + half) % (1 << ADDR_BITS)) - half


Observer = Callable[["TraceAggregator", Instruction], None]

@dataclass
class TraceAggregator:
    """Fold decoded instructions, in trace order, into a Stats record."""
    stats: Stats = field(default_factory=Stats)
    prev: Optional[Instruction] = None
    observers: List[Observer] = field(default_factory=list)

    def attach(self, obs: Observer):
        """Register an observer callback invoked after each instruction."""
        self.observers.append(obs)

    def notify(self, inst: Instruction):
        """Call every observer so external views can follow along."""
        for obs in self.observers:
            obs(self, inst)

    def step(self, inst: Instruction):
        """Account for one instruction; prev must be the preceding trace entry."""
        s = self.stats
        s.bump_instr()
        s.bump_type(inst.type)
        self._tally_memory(inst)
        self._tally_arith(inst)
        self._tally_registers(inst)
        if self.prev is not None:
            self._tally_branch(self.prev, inst)
        self.prev = inst
        self.notify(inst)

    def feed(self, addr: int, word: int):
        """Decode a raw trace entry and step over it."""
        self.step(isa.decode(addr, word))

    def run(self, entries: Iterable[Tuple[int, int]]) -> Stats:
        """Consume every (addr, word) pair and return the final stats."""
        for addr, word in entries:
            self.feed(addr, word)
        self.prev = None
        return self.stats

    def _tally_memory(self, inst: Instruction):
        if inst.op in isa.LOAD_OPS:
            self.stats.bump_load()
        elif inst.op in isa.STORE_OPS:
            self.stats.bump_store()

    def _tally_arith(self, inst: Instruction):
        if inst.op == isa.OP_RTYPE:
            if inst.funct in isa.ARITH_FUNCTS:
                self.stats.bump_arith()
        elif inst.op in isa.ARITH_OPS:
            self.stats.bump_arith()

    def _tally_registers(self, inst: Instruction):
        for reg, counter, delta in register_deltas(inst):
            if counter == READ:
                self.stats.bump_reg(reg, read=delta)
            else:
                self.stats.bump_reg(reg, write=delta)

    def _tally_branch(self, prev: Instruction, cur: Instruction):
        diff = signed_delta(prev.addr, cur.addr)
        if diff > SEQUENTIAL_STEP:
            self.stats.bump_fwd_taken()
            outcome = "fwd-taken"
        elif diff < 0:
            self.stats.bump_bkw_taken()
            outcome = "bkw-taken"
        elif diff in (0, SEQUENTIAL_STEP) and prev.op in isa.BRANCH_OPS:
            self.stats.bump_not_taken()
            outcome = "not-taken"
        else:
            return
        logger.debug("%s -> 0x%08x: %s (%+d)", prev, cur.addr, outcome, diff)


def aggregate(entries: Iterable[Tuple[int, int]]) -> Stats:
    """Convenience wrapper: fold a whole trace with a fresh aggregator."""
    return TraceAggregator().run(entries)
