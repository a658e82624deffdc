from dataclasses import dataclass
from enum import Enum

# MIPS32 encodings (big-endian conceptual layout, but we store ints)
# R-type: opcode(6)=0 | rs(5) | rt(5) | rd(5) | shamt(5) | funct(6)
# I-type: opcode(6)   | rs(5) | rt(5) | imm(16)
# J-type: opcode(6)   | address(26)

OP_RTYPE = 0x00
OP_J     = 0x02
OP_JAL   = 0x03
OP_BEQ   = 0x04
OP_BNE   = 0x05
OP_ADDI  = 0x08
OP_ADDIU = 0x09
OP_LUI   = 0x0F
OP_SB    = 0x28
OP_SH    = 0x29
OP_SW    = 0x2B
OP_SC    = 0x38

FUNCT_SLL   = 0x00
FUNCT_MTC0  = 0x01
FUNCT_SRL   = 0x02
FUNCT_SRA   = 0x03
FUNCT_JR    = 0x08
FUNCT_MFHI  = 0x10
FUNCT_MFLO  = 0x12
FUNCT_MULT  = 0x18
FUNCT_MULTU = 0x19
FUNCT_DIV   = 0x1A
FUNCT_DIVU  = 0x1B
FUNCT_ADD   = 0x20
FUNCT_ADDU  = 0x21
FUNCT_SUB   = 0x22
FUNCT_SUBU  = 0x23
FUNCT_AND   = 0x24
FUNCT_OR    = 0x25
FUNCT_SLT   = 0x2A

RA = 31

# Keyed on op, not funct, so these values are the R-type add/addu/subu/and/or
# function codes rather than real load opcodes (0x20-0x27). Kept as is.
LOAD_OPS = frozenset({0x20, 0x21, 0x23, 0x24, 0x25})
STORE_OPS = frozenset({OP_SB, OP_SH, OP_SW})
BRANCH_OPS = frozenset({OP_BEQ, OP_BNE})

# funct 0x00/0x01 double as mfc0/mtc0 in this taxonomy, so sll counts too
ARITH_FUNCTS = frozenset({
    FUNCT_ADD, FUNCT_ADDU, FUNCT_SUB, FUNCT_SUBU,
    FUNCT_MULT, FUNCT_MULTU, FUNCT_DIV, FUNCT_DIVU,
    FUNCT_MFHI, FUNCT_MFLO, FUNCT_SLL, FUNCT_MTC0,
})
ARITH_OPS = frozenset({OP_ADDI, OP_ADDIU})

REG_NAMES = {
    0: "$zero", 1:"$at",
    2:"$v0", 3:"$v1",
    4:"$a0", 5:"$a1", 6:"$a2", 7:"$a3",
    8:"$t0", 9:"$t1", 10:"$t2", 11:"$t3", 12:"$t4", 13:"$t5", 14:"$t6", 15:"$t7",
    16:"$s0", 17:"$s1", 18:"$s2", 19:"$s3", 20:"$s4", 21:"$s5", 22:"$s6", 23:"$s7",
    24:"$t8", 25:"$t9",
    26:"$k0", 27:"$k1",
    28:"$gp", 29:"$sp", 30:"$fp", 31:"$ra",
}

OP_MNEMONICS = {
    OP_J: "j", OP_JAL: "jal", OP_BEQ: "beq", OP_BNE: "bne",
    0x06: "blez", 0x07: "bgtz",
    OP_ADDI: "addi", OP_ADDIU: "addiu", 0x0A: "slti", 0x0B: "sltiu",
    0x0C: "andi", 0x0D: "ori", 0x0E: "xori", OP_LUI: "lui",
    0x20: "lb", 0x21: "lh", 0x23: "lw", 0x24: "lbu", 0x25: "lhu", 0x30: "ll",
    OP_SB: "sb", OP_SH: "sh", OP_SW: "sw", OP_SC: "sc",
}

FUNCT_MNEMONICS = {
    FUNCT_SLL: "sll", FUNCT_SRL: "srl", FUNCT_SRA: "sra", FUNCT_JR: "jr",
    0x09: "jalr", FUNCT_MFHI: "mfhi", FUNCT_MFLO: "mflo",
    FUNCT_MULT: "mult", FUNCT_MULTU: "multu", FUNCT_DIV: "div", FUNCT_DIVU: "divu",
    FUNCT_ADD: "add", FUNCT_ADDU: "addu", FUNCT_SUB: "sub", FUNCT_SUBU: "subu",
    FUNCT_AND: "and", FUNCT_OR: "or", 0x26: "xor", 0x27: "nor",
    FUNCT_SLT: "slt", 0x2B: "sltu",
}


class InstrType(Enum):
    R = "r"
    I = "i"
    J = "j"


def bits_at(word: int, lo: int, hi: int) -> int:
    """Return bits [lo, hi] (inclusive) of word as an unsigned int."""
    return (word >> lo) & ((1 << (hi - lo + 1)) - 1)

def type_of(op: int) -> InstrType:
    """Classify an opcode as R, I or J; anything unrecognized is I-type."""
    if op == OP_RTYPE:
        return InstrType.R
    if op in (OP_J, OP_JAL):
        return InstrType.J
    return InstrType.I


@dataclass(frozen=True)
class Instruction:
    addr: int
    word: int
    op: int
    rs: int
    rt: int
    rd: int
    shamt: int
    funct: int
    imm: int      # raw 16-bit pattern, never sign extended
    j_addr: int
    type: InstrType

    @property
    def mnemonic(self) -> str:
        if self.type is InstrType.R:
            return FUNCT_MNEMONICS.get(self.funct, "unknown")
        return OP_MNEMONICS.get(self.op, "unknown")

    def __str__(self):
        return f"0x{self.addr:08x}: {self.word:08x} {self.mnemonic}"


def decode(addr: int, word: int) -> Instruction:
    """Break a 32-bit instruction word into its constituent fields.

    Every field is extracted regardless of the instruction type; consumers
    only look at the ones that make sense for the opcode.
    """
    op = bits_at(word, 26, 31)
    return Instruction(
        addr=addr,
        word=word,
        op=op,
        rs=bits_at(word, 21, 25),
        rt=bits_at(word, 16, 20),
        rd=bits_at(word, 11, 15),
        shamt=bits_at(word, 6, 10),
        funct=bits_at(word, 0, 5),
        imm=bits_at(word, 0, 15),
        j_addr=bits_at(word, 0, 25),
        type=type_of(op),
    )

def encode_r(rs: int, rt: int, rd: int, shamt: int, funct: int) -> int:
    """Build an R-type instruction word from its fields."""
    return (OP_RTYPE << 26) | (rs << 21) | (rt << 16) | (rd << 11) | (shamt << 6) | funct

def encode_i(op: int, rs: int, rt: int, imm: int) -> int:
    """Build an I-type instruction word with a 16-bit immediate."""
    imm &= 0xFFFF
    return (op << 26) | (rs << 21) | (rt << 16) | imm

def encode_j(op: int, addr: int) -> int:
    """Build a J-type instruction word from opcode and 26-bit address."""
    addr &= 0x3FFFFFF
    return (op << 26) | addr
