# rspdisasm/rsp_symbols.py
from dataclasses import dataclass
from enum import Enum
import logging

from rspdisasm.rsp_bits import s_at
from rspdisasm.rsp_consts import GLOBAL_LABEL_PREFIX, LOCAL_LABEL_PREFIX

logger = logging.getLogger(__name__)


class SymKind(Enum):
    GLOBAL = "global" # jump target, a subroutine entry
    LOCAL = "local"   # branch target inside the current function


@dataclass(frozen=True)
class Sym:
    kind: SymKind
    value: int

    @classmethod
    def from_jump(cls, word, vaddr):
        """ Pseudo-absolute J/JAL target: stays in the 256MB segment of the instruction. """
        return cls(SymKind.GLOBAL, ((word & 0x03FFFFFF) << 2) | (vaddr & 0xF0000000))

    @classmethod
    def from_branch(cls, word, vaddr):
        """ Branch target: delay slot address plus the sign-extended word offset. """
        target = vaddr + 4 + s_at(0, 16, word) * 4
        return cls(SymKind.LOCAL, target & 0xFFFFFFFF)

    @property
    def is_global(self):
        return self.kind == SymKind.GLOBAL

    @property
    def name(self):
        prefix = GLOBAL_LABEL_PREFIX if self.is_global else LOCAL_LABEL_PREFIX
        return f"{prefix}{self.value:08X}"

    def render(self, opts=None):
        return self.name


class SymbolTable:
    """
    Symbols referenced by control-flow instructions, keyed by (kind, address).

    A jump and a branch may land on the same address; both entries are kept
    so that the subroutine label and the local label are both emitted.
    """

    def __init__(self):
        self.symbols = {}

    def add(self, sym):
        self.symbols[(sym.kind, sym.value)] = sym

    def discover(self, instructions):
        """ Scans decoded instructions (in address order) and records every referenced symbol. """
        for instr in instructions:
            sym = instr.symbol()
            if sym is not None:
                logger.debug(f"Discovered {sym.kind.value} symbol {sym.name}")
                self.add(sym)
        return self

    def labels_at(self, address):
        """ Returns the symbols to label at `address`: global first, then local. """
        found = []
        for kind in (SymKind.GLOBAL, SymKind.LOCAL):
            sym = self.symbols.get((kind, address))
            if sym is not None:
                found.append(sym)
        return found

    def __contains__(self, address):
        return bool(self.labels_at(address))

    def __len__(self):
        return len(self.symbols)
