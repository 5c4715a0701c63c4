# rspdisasm/cli.py
"""Command-line front end: disassemble a slice of a ROM or raw binary."""
import argparse
import logging
import sys

from rspdisasm.rsp_consts import DEFAULT_VRAM
from rspdisasm.rsp_disassembler import disassemble, write_listing
from rspdisasm.rsp_errors import RspDisasmError
from rspdisasm.rsp_printer import PrintOptions

logger = logging.getLogger(__name__)


def parse_int(text: str) -> int:
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rspdisasm", description="Disassemble N64 RSP microcode")
    parser.add_argument("-i", "--input", required=True, help="Input ROM or binary")
    parser.add_argument("-o", "--output", help="Output for disassembled text (default: stdout)")
    parser.add_argument("-p", "--offset", type=parse_int, default=0, help="Offset in input to begin disassembly")
    parser.add_argument("-n", "--size", type=parse_int, required=True, help="Number of bytes to disassemble")
    parser.add_argument("-v", "--vram", type=parse_int, default=DEFAULT_VRAM,
                        help="vram of first instruction (default: 0x84000000)")
    parser.add_argument("--numeric-regs", action="store_true", help="Print registers as $8 instead of t0")
    parser.add_argument("--vendor-cop0-names", action="store_true", help="Print COP0 registers as SP_STATUS instead of $c4")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def read_input(path: str, offset: int, size: int) -> bytes:
    with open(path, "rb") as f:
        f.seek(offset)
        data = f.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes at offset 0x{offset:X} of {path}, got {len(data)}")
    return data


def run(args: argparse.Namespace) -> None:
    opts = PrintOptions(reg_names=not args.numeric_regs, armips_cop0_names=not args.vendor_cop0_names)
    data = read_input(args.input, args.offset, args.size)
    logger.info(f"Disassembling {len(data)} bytes from {args.input} at vram 0x{args.vram:08X}")

    if args.output:
        # Render first so an unaligned size leaves no output file behind
        text = disassemble(data, args.vram & 0xFFFFFFFF, opts)
        with open(args.output, "w", encoding="utf-8") as out:
            out.write(text)
    else:
        write_listing(sys.stdout, data, args.vram & 0xFFFFFFFF, opts)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except (RspDisasmError, OSError, EOFError) as e:
        logger.error(f"{e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
