from dataclasses import dataclass, field
from typing import List

from .errors import StatsInvariantError
from .isa import InstrType

NUM_REGS = 32

@dataclass
class RegisterUsage:
    read: int = 0
    write: int = 0


@dataclass
class Stats:
    insts: int = 0
    r_type: int = 0
    i_type: int = 0
    j_type: int = 0
    fwd_taken: int = 0
    bkw_taken: int = 0
    not_taken: int = 0
    loads: int = 0
    stores: int = 0
    arith: int = 0
    regs: List[RegisterUsage] = field(default_factory=lambda: [RegisterUsage() for _ in range(NUM_REGS)])

    def bump_instr(self):
        """Count one more instruction in the trace."""
        self.insts += 1

    def bump_type(self, kind: InstrType):
        """Increment the per-type counter for kind."""
        if kind is InstrType.R:
            self.r_type += 1
        elif kind is InstrType.J:
            self.j_type += 1
        else:
            self.i_type += 1

    def bump_load(self):
        """Record an instruction whose opcode is in the load table."""
        self.loads += 1

    def bump_store(self):
        """Record a byte, half or word store."""
        self.stores += 1

    def bump_arith(self):
        """Record an arithmetic instruction."""
        self.arith += 1

    def bump_fwd_taken(self):
        """Record a transfer to a higher address than the fall-through one."""
        self.fwd_taken += 1

    def bump_bkw_taken(self):
        """Record a transfer to a lower address."""
        self.bkw_taken += 1

    def bump_not_taken(self):
        """Record a beq/bne that fell through."""
        self.not_taken += 1

    def bump_reg(self, idx: int, *, read: int = 0, write: int = 0):
        """Apply signed deltas to the read/write counters of register idx."""
        usage = self.regs[idx]
        usage.read += read
        usage.write += write

    def percent(self, count: int) -> float:
        """Return count as a percentage of all instructions (0.0 for an empty trace)."""
        if self.insts == 0:
            return 0.0
        return count / self.insts * 100

    def negative_registers(self) -> List[int]:
        """Indices of registers whose read or write counter went below zero."""
        return [i for i, u in enumerate(self.regs) if u.read < 0 or u.write < 0]

    def check(self, strict: bool = False):
        """Verify the counter invariants, raising StatsInvariantError on failure.

        Register counters may legitimately go negative after a jal (see
        TraceAggregator); that is only treated as a failure when strict.
        """
        if self.r_type + self.i_type + self.j_type != self.insts:
            raise StatsInvariantError(
                f"type counts {self.r_type}+{self.i_type}+{self.j_type} != insts {self.insts}")
        branches = self.fwd_taken + self.bkw_taken + self.not_taken
        if branches > self.insts:
            raise StatsInvariantError(f"{branches} branch outcomes for {self.insts} instructions")
        if self.loads + self.stores > self.insts or self.arith > self.insts:
            raise StatsInvariantError("load/store/arith counts exceed instruction count")
        if strict:
            bad = self.negative_registers()
            if bad:
                names = ", ".join(f"reg-{i}" for i in bad)
                raise StatsInvariantError(f"negative register counters: {names}")
