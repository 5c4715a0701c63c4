# rspdisasm/rsp_decoder.py
import logging

from rspdisasm.rsp_bits import u_at
from rspdisasm.rsp_consts import (
    OP_SPECIAL, OP_REGIMM, OP_J, OP_JAL, OP_BEQ, OP_BNE, OP_BLEZ, OP_BGTZ, OP_LUI,
    OP_COP0, OP_COP2, OP_LWC2, OP_SWC2, IMM_ARITH_OPCODE, LOAD_STORE_OPCODE
)
from rspdisasm.rsp_ops import (
    Nop, Unsupported, Jump,
    decode_special, decode_regimm, decode_cop0, decode_branch_two_reg,
    decode_branch_one_reg, decode_imm_arith, decode_lui, decode_load_store
)
from rspdisasm.rsp_symbols import Sym
from rspdisasm.rsp_vu_ops import decode_cop2, decode_vector_load_store

logger = logging.getLogger(__name__)


def _decode_primary(opcode, word, vaddr):
    if opcode == OP_SPECIAL:
        return decode_special(word)
    elif opcode == OP_REGIMM:
        return decode_regimm(word, vaddr)
    elif opcode == OP_J:
        return Jump("j", Sym.from_jump(word, vaddr))
    elif opcode == OP_JAL:
        return Jump("jal", Sym.from_jump(word, vaddr))
    elif opcode == OP_BEQ:
        return decode_branch_two_reg("beq", word, vaddr)
    elif opcode == OP_BNE:
        return decode_branch_two_reg("bne", word, vaddr)
    elif opcode == OP_BLEZ:
        return decode_branch_one_reg("blez", word, vaddr)
    elif opcode == OP_BGTZ:
        return decode_branch_one_reg("bgtz", word, vaddr)
    elif opcode in IMM_ARITH_OPCODE:
        return decode_imm_arith(opcode, word)
    elif opcode == OP_LUI:
        return decode_lui(word)
    elif opcode == OP_COP0:
        return decode_cop0(word)
    elif opcode == OP_COP2:
        return decode_cop2(word)
    elif opcode in LOAD_STORE_OPCODE:
        return decode_load_store(opcode, word)
    elif opcode == OP_LWC2:
        return decode_vector_load_store(False, word)
    elif opcode == OP_SWC2:
        return decode_vector_load_store(True, word)
    return None


def decode_instruction(word, vaddr):
    """
    Decodes one 32-bit word located at `vaddr`.

    Never raises: words that match no known shape, or whose fields do not
    resolve to valid registers or modes, decode to Unsupported(word).
    """
    word &= 0xFFFFFFFF
    if word == 0:
        return Nop()

    opcode = u_at(26, 6, word)
    decoded = _decode_primary(opcode, word, vaddr)
    if decoded is None:
        logger.debug(f"Unsupported word 0x{word:08X} at 0x{vaddr:08X} (opcode=0x{opcode:02x})")
        return Unsupported(word)
    return decoded
