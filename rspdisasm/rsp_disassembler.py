# rspdisasm/rsp_disassembler.py
import logging

from rspdisasm.rsp_consts import DEFAULT_VRAM
from rspdisasm.rsp_decoder import decode_instruction
from rspdisasm.rsp_errors import UnalignedInputError
from rspdisasm.rsp_printer import PrintOptions, render
from rspdisasm.rsp_symbols import SymbolTable

logger = logging.getLogger(__name__)


def decode_words(data, vaddr=DEFAULT_VRAM):
    """ Splits `data` into big-endian words and decodes each. Returns a list of (pc, word, instruction). """
    if len(data) % 4 != 0:
        raise UnalignedInputError(len(data))

    decoded = []
    for i in range(0, len(data), 4):
        word = int.from_bytes(data[i:i + 4], "big")
        pc = (vaddr + i) & 0xFFFFFFFF
        decoded.append((pc, word, decode_instruction(word, pc)))
    return decoded


def iter_listing(data, vaddr=DEFAULT_VRAM, opts=PrintOptions()):
    """
    Yields the output lines for `data`: label lines for every discovered
    symbol that lands on an instruction, followed by the instruction line.

    Raises UnalignedInputError before yielding anything if the buffer is not
    a whole number of words.
    """
    decoded = decode_words(data, vaddr)
    symbols = SymbolTable().discover(instr for _, _, instr in decoded)
    logger.debug(f"Decoded {len(decoded)} words, {len(symbols)} symbols referenced")
    return _emit(decoded, symbols, opts)


def _emit(decoded, symbols, opts):
    first = True
    for pc, word, instr in decoded:
        for sym in symbols.labels_at(pc):
            if sym.is_global and not first:
                yield ""
            yield f"{sym.name}:"
            first = False
        yield f"/* {pc:08X} {word:08X} */\t{render(instr, opts)}"
        first = False


def disassemble(data, vaddr=DEFAULT_VRAM, opts=PrintOptions()):
    """ Disassembles a whole buffer into text, one instruction per line. """
    return "".join(f"{line}\n" for line in iter_listing(data, vaddr, opts))


def write_listing(stream, data, vaddr=DEFAULT_VRAM, opts=PrintOptions()):
    """ Writes the listing to a text stream. Write failures propagate as OSError. """
    for line in iter_listing(data, vaddr, opts):
        stream.write(line)
        stream.write("\n")


class RspDisassembler:
    def __init__(self, opts=None):
        self.opts = opts or PrintOptions()
        self.errors = [] # Store errors encountered during the last run

    def disassemble_bytes(self, data, vaddr=DEFAULT_VRAM):
        return disassemble(data, vaddr, self.opts)

    def _parse_hex_word(self, hex_line):
        # Sanitize input hex string
        hex_line = hex_line.strip().lower()
        if hex_line.startswith("0x"): hex_line = hex_line[2:]

        # Validate hex format and length
        if len(hex_line) > 8: raise ValueError(f"Invalid hex length: '{hex_line}' (max 8 digits)")
        if not all(c in '0123456789abcdef' for c in hex_line): raise ValueError(f"Invalid hex character found: '{hex_line}'")

        # Pad if necessary (e.g., user enters 'c' instead of '0000000c')
        return int(hex_line.zfill(8), 16)

    def disassemble_hex_words(self, machine_code_hex_lines, vaddr=DEFAULT_VRAM):
        """ Disassembles a list of hex word strings. Returns dict with 'assembly_code' and 'errors'. """
        self.errors = [] # Clear errors from previous runs
        words = []
        for i, hex_line in enumerate(machine_code_hex_lines):
            line_num = i + 1
            if not hex_line.strip(): continue # Skip empty lines
            try:
                words.append(self._parse_hex_word(hex_line))
            except ValueError as e:
                logger.warning(f"Rejected machine code line {line_num}: {e}")
                self.errors.append({"line": line_num, "message": f"Invalid hex format/value: {e}"})

        if self.errors:
            return {"assembly_code": "", "errors": self.errors}

        data = b"".join(word.to_bytes(4, "big") for word in words)
        return {"assembly_code": self.disassemble_bytes(data, vaddr), "errors": self.errors}
