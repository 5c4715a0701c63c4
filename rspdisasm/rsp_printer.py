# rspdisasm/rsp_printer.py
from dataclasses import dataclass

from rspdisasm.rsp_consts import SHIFT_VAR_FUNCTS
from rspdisasm.rsp_ops import (
    Nop, Unsupported, ShiftImm, ThreeReg, JumpReg, JumpLinkReg, Break, Jump,
    BranchTwoReg, BranchOneReg, ImmArith, Lui, LoadStore, Cop0Move
)
from rspdisasm.rsp_regs import GpReg
from rspdisasm.rsp_vu_ops import VuMove, VuCtrlMove, VuNop, VuCompute, VuScalar, VuLoadStore


@dataclass(frozen=True)
class PrintOptions:
    reg_names: bool = True          # t0/r0 and v1 instead of $8/$0 and $v1
    armips_cop0_names: bool = True  # $c4 instead of SP_STATUS


def _hex(value):
    """ Signed hex, e.g. 0x10 or -0x4. """
    return f"-0x{-value:x}" if value < 0 else f"0x{value:x}"


def _ops(mnemonic, *operands):
    return f"{mnemonic} {', '.join(operands)}" if operands else mnemonic


def _render_three_reg(i, opts):
    if i.mnemonic in SHIFT_VAR_FUNCTS:
        # Format: instr rd, rt, rs
        return _ops(i.mnemonic, i.rd.render(opts), i.rt.render(opts), i.rs.render(opts))
    return _ops(i.mnemonic, i.rd.render(opts), i.rs.render(opts), i.rt.render(opts))


def _render_jalr(i, opts):
    # Default link register is ra
    if i.rd == GpReg.RA:
        return _ops("jalr", i.rs.render(opts))
    return _ops("jalr", i.rd.render(opts), i.rs.render(opts))


def _render_imm_arith(i, opts):
    imm = f"0x{i.imm & 0xFFFF:x}" if i.as_hex else str(i.imm)
    return _ops(i.mnemonic, i.rt.render(opts), i.rs.render(opts), imm)


def _render_load_store(i, opts):
    # Format: instr rt, offset(base)
    return _ops(i.mnemonic, i.rt.render(opts), f"{_hex(i.offset)}({i.base.render(opts)})")


def _render_vu_compute(i, opts):
    return _ops(i.mnemonic, i.vd.render(opts), i.vs.render(opts),
                i.vt.render(opts) + i.element.render(opts))


def _render_vu_scalar(i, opts):
    return _ops(i.mnemonic, f"{i.vd.render(opts)}[{i.de}]", i.vt.render(opts) + i.element.render(opts))


def _render_vu_load_store(i, opts):
    return _ops(i.mnemonic, f"{i.vt.render(opts)}[{i.element}]",
                f"{_hex(i.offset)}({i.base.render(opts)})")


_RENDERERS = {
    Nop: lambda i, opts: "nop",
    Unsupported: lambda i, opts: f"; unrecognized op [{i.word:08X}]",
    ShiftImm: lambda i, opts: _ops(i.mnemonic, i.rd.render(opts), i.rt.render(opts), str(i.sa)),
    ThreeReg: _render_three_reg,
    JumpReg: lambda i, opts: _ops("jr", i.rs.render(opts)),
    JumpLinkReg: _render_jalr,
    Break: lambda i, opts: _ops("break", str(i.code)),
    Jump: lambda i, opts: _ops(i.mnemonic, i.target.render(opts)),
    BranchTwoReg: lambda i, opts: _ops(i.mnemonic, i.rs.render(opts), i.rt.render(opts), i.target.render(opts)),
    BranchOneReg: lambda i, opts: _ops(i.mnemonic, i.rs.render(opts), i.target.render(opts)),
    ImmArith: _render_imm_arith,
    Lui: lambda i, opts: _ops("lui", i.rt.render(opts), f"0x{i.imm:x}"),
    LoadStore: _render_load_store,
    Cop0Move: lambda i, opts: _ops(i.mnemonic, i.rt.render(opts), i.rd.render(opts)),
    VuMove: lambda i, opts: _ops(i.mnemonic, i.rt.render(opts), f"{i.vs.render(opts)}[{i.element}]"),
    VuCtrlMove: lambda i, opts: _ops(i.mnemonic, i.rt.render(opts), i.vc.render(opts)),
    VuNop: lambda i, opts: "vnop",
    VuCompute: _render_vu_compute,
    VuScalar: _render_vu_scalar,
    VuLoadStore: _render_vu_load_store,
}


def render(instruction, opts=PrintOptions()):
    """Renders one decoded instruction as an assembler line (without address comment)."""
    return _RENDERERS[type(instruction)](instruction, opts)
