# rspdisasm/tests/test_decoder.py
import pytest

from rspdisasm.rsp_bits import u_at, s_at, sign_extend
from rspdisasm.rsp_decoder import decode_instruction
from rspdisasm.rsp_ops import (
    Nop, Unsupported, Jump, BranchTwoReg, BranchOneReg, ImmArith, LoadStore, Cop0Move, Instruction
)
from rspdisasm.rsp_printer import PrintOptions, render
from rspdisasm.rsp_regs import GpReg, Cop0Reg
from rspdisasm.rsp_symbols import Sym, SymKind

VRAM = 0x84000000


@pytest.fixture
def opts():
    """Default print options: mnemonic register names, armips COP0 names."""
    return PrintOptions()


def disasm(word, opts, vaddr=VRAM):
    return render(decode_instruction(word, vaddr), opts)


# --- Bitfield helpers ---

def test_u_at_extracts_field():
    assert u_at(26, 6, 0x08100004) == 0x02
    assert u_at(0, 16, 0x1234ABCD) == 0xABCD
    assert u_at(7, 4, 0x00000780) == 0xF

def test_s_at_sign_extends():
    assert s_at(0, 16, 0xFFFF) == -1
    assert s_at(0, 16, 0x7FFF) == 32767
    assert s_at(0, 7, 0x40) == -64, "7-bit field with top bit set should be negative"
    assert s_at(0, 7, 0x3F) == 63
    assert sign_extend(0x8000, 16) == -32768


# --- Totality ---

def test_decode_is_total():
    """Every primary opcode, with a spread of operand bit patterns, decodes and renders."""
    fills = [0x0000000, 0x3FFFFFF, 0x1234567, 0x2AAAAAA, 0x1555555, 0x00007FF, 0x0000800, 0x0010000]
    for opcode in range(64):
        for fill in fills:
            word = (opcode << 26) | fill
            instr = decode_instruction(word, 0xFFFFFFFC)
            assert isinstance(instr, Instruction), f"No instruction for 0x{word:08X}"
            assert isinstance(render(instr, PrintOptions()), str)


# --- Special cases ---

def test_zero_word_is_nop(opts):
    assert decode_instruction(0x00000000, VRAM) == Nop()
    assert decode_instruction(0x00000000, 0x12345678) == Nop()
    assert disasm(0x00000000, opts) == "nop"

def test_unknown_primary_opcode(opts):
    assert decode_instruction(0xFC000000, VRAM) == Unsupported(0xFC000000)
    assert disasm(0xFC000000, opts) == "; unrecognized op [FC000000]"


# --- Control flow targets ---

def test_jump_target_keeps_segment():
    # j: opcode 2, field 0x100004 -> (0x100004 << 2) | (0x84000000 & 0xF0000000)
    instr = decode_instruction(0x08100004, VRAM)
    assert instr == Jump("j", Sym(SymKind.GLOBAL, 0x80400010))
    assert instr.symbol().value == (0x100004 << 2) | (VRAM & 0xF0000000)

def test_jal_target(opts):
    instr = decode_instruction(0x0D000004, VRAM)
    assert instr.target == Sym(SymKind.GLOBAL, 0x84000010)
    assert disasm(0x0D000004, opts) == "jal subr_84000010"

def test_branch_target_relative_to_delay_slot():
    # beq r0, r0, -1: delay slot (VRAM + 4) minus 4 -> branch to itself
    instr = decode_instruction(0x1000FFFF, VRAM)
    assert isinstance(instr, BranchTwoReg)
    assert instr.target == Sym(SymKind.LOCAL, VRAM)

def test_branch_forward(opts):
    # bne a0, a1, +2 at 0x84000010 -> 0x84000014 + 8
    assert disasm(0x14850002, opts, 0x84000010) == "bne a0, a1, @L8400001C"

def test_blez_bgtz(opts):
    assert disasm(0x18800003, opts, 0x84000010) == "blez a0, @L84000020"
    assert disasm(0x1C800003, opts, 0x84000010) == "bgtz a0, @L84000020"

def test_branch_target_wraps_at_zero():
    instr = decode_instruction(0x1000FFFE, 0x00000000)
    assert instr.target.value == 0xFFFFFFFC


# --- REGIMM ---

@pytest.mark.parametrize("word, expected", [
    (0x04800002, "bltz a0, @L8400000C"),
    (0x04810002, "bgez a0, @L8400000C"),
    (0x04900002, "bltzal a0, @L8400000C"),
    (0x04910002, "bgezal a0, @L8400000C"),
])
def test_regimm_branches(opts, word, expected):
    instr = decode_instruction(word, VRAM)
    assert isinstance(instr, BranchOneReg)
    assert render(instr, opts) == expected

def test_regimm_unknown_condition():
    assert decode_instruction(0x04820002, VRAM) == Unsupported(0x04820002)


# --- SPECIAL ---

@pytest.mark.parametrize("word, expected", [
    (0x00851020, "add v0, a0, a1"),
    (0x00851023, "subu v0, a0, a1"),
    (0x0085102A, "slt v0, a0, a1"),
    (0x00094100, "sll t0, t1, 4"),
    (0x00094103, "sra t0, t1, 4"),
    (0x01494004, "sllv t0, t1, t2"),
    (0x03E00008, "jr ra"),
    (0x0320F809, "jalr t9"),
    (0x03204009, "jalr t0, t9"),
    (0x0000000D, "break 0"),
    (0x0000028D, "break 10"),
])
def test_special_group(opts, word, expected):
    assert disasm(word, opts) == expected

def test_special_unknown_function():
    # funct 0x0C (syscall) does not exist on this unit
    assert decode_instruction(0x0000000C, VRAM) == Unsupported(0x0000000C)
    assert decode_instruction(0x00000001, VRAM) == Unsupported(0x00000001)


# --- Immediates ---

def test_addi_fields():
    instr = decode_instruction(0x20080005, VRAM)
    assert instr == ImmArith("addi", GpReg.T0, GpReg.R0, 5)

def test_arith_immediates_are_signed_decimal(opts):
    assert disasm(0x27BDFFE8, opts) == "addiu sp, sp, -24"
    assert disasm(0x2908FFFF, opts) == "slti t0, t0, -1"
    assert disasm(0x2D080010, opts) == "sltiu t0, t0, 16"

def test_logical_immediates_are_hex(opts):
    assert disasm(0x3508FFFF, opts) == "ori t0, t0, 0xffff"
    assert disasm(0x31090010, opts) == "andi t1, t0, 0x10"
    assert disasm(0x39088000, opts) == "xori t0, t0, 0x8000"

def test_lui(opts):
    assert disasm(0x3C011234, opts) == "lui at, 0x1234"


# --- Loads and stores ---

def test_load_store(opts):
    assert decode_instruction(0x8FA80010, VRAM) == LoadStore("lw", GpReg.T0, GpReg.SP, 0x10)
    assert disasm(0x8FA80010, opts) == "lw t0, 0x10(sp)"
    assert disasm(0xAFBFFFFC, opts) == "sw ra, -0x4(sp)"
    assert disasm(0x84880002, opts) == "lh t0, 0x2(a0)"
    assert disasm(0x9C880000, opts) == "lwu t0, 0x0(a0)"


# --- COP0 ---

def test_mtc0(opts):
    assert decode_instruction(0x40882000, VRAM) == Cop0Move("mtc0", GpReg.T0, Cop0Reg.SP_STATUS)
    assert disasm(0x40882000, opts) == "mtc0 t0, $c4"

def test_mfc0_vendor_names():
    opts = PrintOptions(armips_cop0_names=False)
    assert disasm(0x40087800, opts) == "mfc0 t0, CMD_TMEM_BUSY"

def test_cop0_register_out_of_range():
    # rd = 16 names no RSP COP0 register
    assert decode_instruction(0x40088000, VRAM) == Unsupported(0x40088000)

def test_cop0_unknown_direction():
    assert decode_instruction(0x40282000, VRAM) == Unsupported(0x40282000)


# --- Print options ---

def test_register_name_option():
    word = 0x20080005 # addi $t0, $0, 5
    assert disasm(word, PrintOptions(reg_names=True)) == "addi t0, r0, 5"
    assert disasm(word, PrintOptions(reg_names=False)) == "addi $8, $0, 5"

def test_cop0_option_does_not_touch_gp_registers():
    word = 0x40882000
    assert disasm(word, PrintOptions(reg_names=False, armips_cop0_names=False)) == "mtc0 $8, SP_STATUS"
    assert disasm(word, PrintOptions(reg_names=False, armips_cop0_names=True)) == "mtc0 $8, $c4"
