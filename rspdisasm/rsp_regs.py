# rspdisasm/rsp_regs.py
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from rspdisasm.rsp_bits import u_at
from rspdisasm.rsp_consts import (
    GP_REG_NAMES, GP_REG_NUMERIC, COP0_VENDOR_NAMES, COP0_ARMIPS_NAMES, VU_CTRL_REG_NAMES
)


class _CheckedRegister(IntEnum):
    """Register enumeration read from a 5-bit instruction field."""

    @classmethod
    def at_bit(cls, bit, word):
        """Reads five bits starting at `bit`. Returns None if the value names no register."""
        try:
            return cls(u_at(bit, 5, word))
        except ValueError:
            return None


class GpReg(_CheckedRegister):
    R0 = 0
    AT = 1
    V0 = 2
    V1 = 3
    A0 = 4
    A1 = 5
    A2 = 6
    A3 = 7
    T0 = 8
    T1 = 9
    T2 = 10
    T3 = 11
    T4 = 12
    T5 = 13
    T6 = 14
    T7 = 15
    S0 = 16
    S1 = 17
    S2 = 18
    S3 = 19
    S4 = 20
    S5 = 21
    S6 = 22
    S7 = 23
    T8 = 24
    T9 = 25
    K0 = 26
    K1 = 27
    GP = 28
    SP = 29
    S8 = 30
    RA = 31

    def render(self, opts):
        if opts.reg_names:
            return GP_REG_NAMES[self.value]
        return GP_REG_NUMERIC[self.value]


class Cop0Reg(_CheckedRegister):
    """RSP system-control registers. Only indices 0-15 exist."""
    DMA_CACHE = 0
    DMA_READ = 1
    DMA_READ_LENGTH = 2
    DMA_WRITE_LENGTH = 3
    SP_STATUS = 4
    DMA_FULL = 5
    DMA_BUSY = 6
    SP_RESERVED = 7
    CMD_START = 8
    CMD_END = 9
    CMD_CURRENT = 10
    CMD_STATUS = 11
    CMD_CLOCK = 12
    CMD_BUSY = 13
    CMD_PIPE_BUSY = 14
    CMD_TMEM_BUSY = 15

    def render(self, opts):
        if opts.armips_cop0_names:
            return COP0_ARMIPS_NAMES[self.value]
        return COP0_VENDOR_NAMES[self.value]


class VuCtrlReg(_CheckedRegister):
    VCO = 0
    VCC = 1
    VCE = 2

    def render(self, opts):
        name = VU_CTRL_REG_NAMES[self.value]
        return name if opts.reg_names else f"${name}"


@dataclass(frozen=True)
class VuReg:
    """One of the 32 vector registers. Every 5-bit value is valid."""
    index: int

    @classmethod
    def at_bit(cls, bit, word):
        return cls(u_at(bit, 5, word))

    def render(self, opts):
        return f"v{self.index}" if opts.reg_names else f"$v{self.index}"


class ElementKind(IntEnum):
    WHOLE = 0
    QUARTER = 1
    HALF = 2
    SINGLE = 3


_ELEMENT_SUFFIX = {
    ElementKind.QUARTER: "q",
    ElementKind.HALF: "h",
    ElementKind.SINGLE: "",
}


@dataclass(frozen=True)
class Element:
    """
    Vector lane selector from a 4-bit field.

    0 selects the whole vector, 2-3 a quarter pair (0q, 1q), 4-7 a half
    group (0h..3h) and 8-15 a single lane (0..7). 1 is not a valid selector.
    """
    kind: ElementKind
    index: int = 0

    @classmethod
    def from_field(cls, value) -> Optional["Element"]:
        if value == 0:
            return cls(ElementKind.WHOLE)
        if value & 0b1110 == 0b0010:
            return cls(ElementKind.QUARTER, value & 0b1)
        if value & 0b1100 == 0b0100:
            return cls(ElementKind.HALF, value & 0b11)
        if value & 0b1000 == 0b1000:
            return cls(ElementKind.SINGLE, value & 0b111)
        return None

    @classmethod
    def at_bit(cls, bit, word):
        return cls.from_field(u_at(bit, 4, word))

    def render(self, opts=None):
        if self.kind == ElementKind.WHOLE:
            return ""
        return f"[{self.index}{_ELEMENT_SUFFIX[self.kind]}]"
