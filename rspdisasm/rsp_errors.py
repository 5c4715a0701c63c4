# rspdisasm/rsp_errors.py


class RspDisasmError(Exception):
    """Base class for errors surfaced by the disassembler."""


class UnalignedInputError(RspDisasmError):
    def __init__(self, size):
        self.size = size
        super().__init__(
            f"data was not aligned to four-byte size (was {size} byte{'s' if size > 1 else ''} sized)"
        )
