# rspdisasm/rsp_vu_ops.py
"""
Vector unit (COP2) instructions: scalar<->vector moves, vector compute
operations and the LWC2/SWC2 vector load/store group.
"""
from dataclasses import dataclass

from rspdisasm.rsp_bits import u_at, s_at
from rspdisasm.rsp_consts import (
    COP2_MOVE_RS, COP2_CTRL_RS, VU_OPCODE, VU_SCALAR_OPS, VU_ADDRESS_MODES
)
from rspdisasm.rsp_ops import Instruction
from rspdisasm.rsp_regs import GpReg, VuReg, VuCtrlReg, Element


@dataclass(frozen=True)
class VuMove(Instruction):
    mnemonic: str # mfc2 / mtc2
    rt: GpReg
    vs: VuReg
    element: int # byte index 0-15


@dataclass(frozen=True)
class VuCtrlMove(Instruction):
    mnemonic: str # cfc2 / ctc2
    rt: GpReg
    vc: VuCtrlReg


@dataclass(frozen=True)
class VuNop(Instruction):
    pass


@dataclass(frozen=True)
class VuCompute(Instruction):
    mnemonic: str
    vd: VuReg
    vs: VuReg
    vt: VuReg
    element: Element


@dataclass(frozen=True)
class VuScalar(Instruction):
    """Reciprocal / move family: writes a single lane `de` of vd."""
    mnemonic: str
    vd: VuReg
    de: int
    vt: VuReg
    element: Element


@dataclass(frozen=True)
class VuLoadStore(Instruction):
    mnemonic: str
    vt: VuReg
    element: int
    base: GpReg
    offset: int # already scaled by the addressing mode's item size


def decode_cop2(word):
    """ COP2 group (opcode 0x12). A zero low-11-bit field selects the move forms. """
    if word & 0x7FF != 0:
        return decode_vector_op(word)

    subop = u_at(21, 5, word)
    rt = GpReg.at_bit(16, word)
    if rt is None:
        return None
    if subop in COP2_MOVE_RS:
        return VuMove(COP2_MOVE_RS[subop], rt, VuReg.at_bit(11, word), u_at(7, 4, word))
    if subop in COP2_CTRL_RS:
        vc = VuCtrlReg.at_bit(11, word)
        if vc is None:
            return None
        return VuCtrlMove(COP2_CTRL_RS[subop], rt, vc)
    return None


def decode_vector_op(word):
    mnemonic = VU_OPCODE.get(u_at(0, 6, word))
    if mnemonic is None:
        return None
    if mnemonic == "vnop":
        return VuNop()

    element = Element.at_bit(21, word)
    if element is None:
        return None
    vt = VuReg.at_bit(16, word)
    vd = VuReg.at_bit(6, word)

    if mnemonic in VU_SCALAR_OPS:
        return VuScalar(mnemonic, vd, u_at(11, 5, word), vt, element)
    return VuCompute(mnemonic, vd, VuReg.at_bit(11, word), vt, element)


def decode_vector_load_store(is_store, word):
    """ LWC2 (0x32) / SWC2 (0x3A). The 7-bit offset is encoded in units of the item size. """
    mode = u_at(11, 5, word)
    if mode >= len(VU_ADDRESS_MODES):
        return None
    letter, item_size = VU_ADDRESS_MODES[mode]
    base = GpReg.at_bit(21, word)
    if base is None:
        return None

    mnemonic = f"{'s' if is_store else 'l'}{letter}v"
    return VuLoadStore(
        mnemonic,
        VuReg.at_bit(16, word),
        u_at(7, 4, word),
        base,
        s_at(0, 7, word) * item_size,
    )
