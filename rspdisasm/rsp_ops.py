# rspdisasm/rsp_ops.py
"""
Scalar unit instruction shapes and the secondary decoders for the
SPECIAL, REGIMM and COP0 opcode groups.

Every decoder returns None when a field does not resolve; the primary
dispatch turns that into Unsupported.
"""
from dataclasses import dataclass

from rspdisasm.rsp_bits import u_at, s_at
from rspdisasm.rsp_consts import (
    SPECIAL_FUNCT, SHIFT_IMM_FUNCTS, REGIMM_RT, COP0_RS, IMM_ARITH_OPCODE, LOAD_STORE_OPCODE
)
from rspdisasm.rsp_regs import GpReg, Cop0Reg
from rspdisasm.rsp_symbols import Sym


class Instruction:
    """Base of every decoded instruction shape."""

    def symbol(self):
        """The jump/branch target this instruction refers to, if any."""
        return None


@dataclass(frozen=True)
class Nop(Instruction):
    pass


@dataclass(frozen=True)
class Unsupported(Instruction):
    word: int


# --- SPECIAL shapes ---

@dataclass(frozen=True)
class ShiftImm(Instruction):
    mnemonic: str
    rd: GpReg
    rt: GpReg
    sa: int


@dataclass(frozen=True)
class ThreeReg(Instruction):
    mnemonic: str
    rd: GpReg
    rs: GpReg
    rt: GpReg


@dataclass(frozen=True)
class JumpReg(Instruction):
    rs: GpReg


@dataclass(frozen=True)
class JumpLinkReg(Instruction):
    rd: GpReg
    rs: GpReg


@dataclass(frozen=True)
class Break(Instruction):
    code: int


# --- Control flow ---

@dataclass(frozen=True)
class Jump(Instruction):
    mnemonic: str # j / jal
    target: Sym

    def symbol(self):
        return self.target


@dataclass(frozen=True)
class BranchTwoReg(Instruction):
    mnemonic: str # beq / bne
    rs: GpReg
    rt: GpReg
    target: Sym

    def symbol(self):
        return self.target


@dataclass(frozen=True)
class BranchOneReg(Instruction):
    mnemonic: str # blez / bgtz and the REGIMM group
    rs: GpReg
    target: Sym

    def symbol(self):
        return self.target


# --- Immediates and memory ---

@dataclass(frozen=True)
class ImmArith(Instruction):
    mnemonic: str
    rt: GpReg
    rs: GpReg
    imm: int # sign-extended; logical ops print the low 16 bits in hex
    as_hex: bool = False


@dataclass(frozen=True)
class Lui(Instruction):
    rt: GpReg
    imm: int


@dataclass(frozen=True)
class LoadStore(Instruction):
    mnemonic: str
    rt: GpReg
    base: GpReg
    offset: int


@dataclass(frozen=True)
class Cop0Move(Instruction):
    mnemonic: str # mfc0 / mtc0
    rt: GpReg
    rd: Cop0Reg


# --- Secondary decoders ---

def decode_special(word):
    """ SPECIAL group (opcode 0x00), selected by the function field. """
    mnemonic = SPECIAL_FUNCT.get(u_at(0, 6, word))
    if mnemonic is None:
        return None

    rs = GpReg.at_bit(21, word)
    rt = GpReg.at_bit(16, word)
    rd = GpReg.at_bit(11, word)
    if None in (rs, rt, rd):
        return None

    if mnemonic in SHIFT_IMM_FUNCTS:
        return ShiftImm(mnemonic, rd, rt, u_at(6, 5, word))
    if mnemonic == "jr":
        return JumpReg(rs)
    if mnemonic == "jalr":
        return JumpLinkReg(rd, rs)
    if mnemonic == "break":
        return Break(u_at(6, 20, word))
    return ThreeReg(mnemonic, rd, rs, rt)


def decode_regimm(word, vaddr):
    """ REGIMM group (opcode 0x01): branch on the sign of rs, selected by the rt field. """
    mnemonic = REGIMM_RT.get(u_at(16, 5, word))
    rs = GpReg.at_bit(21, word)
    if mnemonic is None or rs is None:
        return None
    return BranchOneReg(mnemonic, rs, Sym.from_branch(word, vaddr))


def decode_cop0(word):
    mnemonic = COP0_RS.get(u_at(21, 5, word))
    rt = GpReg.at_bit(16, word)
    rd = Cop0Reg.at_bit(11, word)
    if mnemonic is None or rt is None or rd is None:
        return None
    return Cop0Move(mnemonic, rt, rd)


def decode_branch_two_reg(mnemonic, word, vaddr):
    rs = GpReg.at_bit(21, word)
    rt = GpReg.at_bit(16, word)
    if rs is None or rt is None:
        return None
    return BranchTwoReg(mnemonic, rs, rt, Sym.from_branch(word, vaddr))


def decode_branch_one_reg(mnemonic, word, vaddr):
    rs = GpReg.at_bit(21, word)
    if rs is None:
        return None
    return BranchOneReg(mnemonic, rs, Sym.from_branch(word, vaddr))


def decode_imm_arith(opcode, word):
    mnemonic, as_hex = IMM_ARITH_OPCODE[opcode]
    rs = GpReg.at_bit(21, word)
    rt = GpReg.at_bit(16, word)
    if rs is None or rt is None:
        return None
    return ImmArith(mnemonic, rt, rs, s_at(0, 16, word), as_hex)


def decode_lui(word):
    rt = GpReg.at_bit(16, word)
    if rt is None:
        return None
    return Lui(rt, u_at(0, 16, word))


def decode_load_store(opcode, word):
    rt = GpReg.at_bit(16, word)
    base = GpReg.at_bit(21, word)
    if rt is None or base is None:
        return None
    return LoadStore(LOAD_STORE_OPCODE[opcode], rt, base, s_at(0, 16, word))
