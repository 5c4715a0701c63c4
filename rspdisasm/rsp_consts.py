# rspdisasm/rsp_consts.py

# --- Defaults ---
DEFAULT_VRAM = 0x84000000 # IMEM as mapped by most microcode loaders
DEFAULT_PORT = 5001
CORS_ORIGIN = "http://localhost:3000"

# --- Primary opcodes (bits 31-26) ---
OP_SPECIAL = 0x00
OP_REGIMM = 0x01
OP_J = 0x02
OP_JAL = 0x03
OP_BEQ = 0x04
OP_BNE = 0x05
OP_BLEZ = 0x06
OP_BGTZ = 0x07
OP_LUI = 0x0F
OP_COP0 = 0x10
OP_COP2 = 0x12
OP_LWC2 = 0x32
OP_SWC2 = 0x3A

# I-Type arithmetic: opcode -> (mnemonic, print immediate as hex)
IMM_ARITH_OPCODE = {
    0x08: ("addi", False), 0x09: ("addiu", False),
    0x0A: ("slti", False), 0x0B: ("sltiu", False),
    # Logical operations zero-extend, conventionally shown in hex
    0x0C: ("andi", True), 0x0D: ("ori", True), 0x0E: ("xori", True),
}

LOAD_STORE_OPCODE = {
    0x20: "lb", 0x21: "lh", 0x23: "lw", 0x24: "lbu", 0x25: "lhu", 0x27: "lwu",
    0x28: "sb", 0x29: "sh", 0x2B: "sw",
}

# --- SPECIAL (opcode 0x00) function field ---
SPECIAL_FUNCT = {
    0x00: "sll", 0x02: "srl", 0x03: "sra",
    0x04: "sllv", 0x06: "srlv", 0x07: "srav",
    0x08: "jr", 0x09: "jalr",
    0x0D: "break",
    0x20: "add", 0x21: "addu", 0x22: "sub", 0x23: "subu",
    0x24: "and", 0x25: "or", 0x26: "xor", 0x27: "nor",
    0x2A: "slt", 0x2B: "sltu",
}
SHIFT_IMM_FUNCTS = {"sll", "srl", "sra"}
SHIFT_VAR_FUNCTS = {"sllv", "srlv", "srav"} # rd, rt, rs

# --- REGIMM (opcode 0x01) rt field ---
REGIMM_RT = {
    0x00: "bltz",
    0x01: "bgez",
    0x10: "bltzal",
    0x11: "bgezal",
}

# --- COP0 / COP2 move sub-ops (rs field) ---
COP0_RS = {0x00: "mfc0", 0x04: "mtc0"}
COP2_MOVE_RS = {0x00: "mfc2", 0x04: "mtc2"}
COP2_CTRL_RS = {0x02: "cfc2", 0x06: "ctc2"}

# --- GP registers ---
# Mnemonic names, indexed by register number
GP_REG_NAMES = [
    "r0", "at", "v0", "v1", "a0", "a1", "a2", "a3",
    "t0", "t1", "t2", "t3", "t4", "t5", "t6", "t7",
    "s0", "s1", "s2", "s3", "s4", "s5", "s6", "s7",
    "t8", "t9", "k0", "k1", "gp", "sp", "s8", "ra",
]
# Numeric names, as accepted by armips
GP_REG_NUMERIC = [f"${n}" for n in range(32)]

# --- COP0 registers (RSP status / DMA / RDP command registers) ---
COP0_VENDOR_NAMES = [
    "DMA_CACHE", "DMA_READ", "DMA_READ_LENGTH", "DMA_WRITE_LENGTH",
    "SP_STATUS", "DMA_FULL", "DMA_BUSY", "SP_RESERVED",
    "CMD_START", "CMD_END", "CMD_CURRENT", "CMD_STATUS",
    "CMD_CLOCK", "CMD_BUSY", "CMD_PIPE_BUSY", "CMD_TMEM_BUSY",
]
COP0_ARMIPS_NAMES = [f"$c{n}" for n in range(16)]

# --- Vector unit ---
VU_CTRL_REG_NAMES = ["vco", "vcc", "vce"]

# Function field (bits 5-0) -> mnemonic
VU_OPCODE = {
    0x00: "vmulf", 0x01: "vmulu", 0x02: "vrndp", 0x03: "vmulq",
    0x04: "vmudl", 0x05: "vmudm", 0x06: "vmudn", 0x07: "vmudh",
    0x08: "vmacf", 0x09: "vmacu", 0x0A: "vrndn", 0x0B: "vmacq",
    0x0C: "vmadl", 0x0D: "vmadm", 0x0E: "vmadn", 0x0F: "vmadh",
    0x10: "vadd", 0x11: "vsub", 0x13: "vabs", 0x14: "vaddc", 0x15: "vsubc",
    0x1D: "vsar",
    0x20: "vlt", 0x21: "veq", 0x22: "vne", 0x23: "vge",
    0x24: "vcl", 0x25: "vch", 0x26: "vcr", 0x27: "vmrg",
    0x28: "vand", 0x29: "vnand", 0x2A: "vor", 0x2B: "vnor",
    0x2C: "vxor", 0x2D: "vnxor",
    0x30: "vrcp", 0x31: "vrcpl", 0x32: "vrcph", 0x33: "vmov",
    0x34: "vrsq", 0x35: "vrsql", 0x36: "vrsqh", 0x37: "vnop",
}
# Scalar-lane ops: the vs field holds a destination lane index
VU_SCALAR_OPS = {"vrcp", "vrcpl", "vmov", "vrsq", "vrsql", "vrsqh"}

# LWC2/SWC2 addressing mode (bits 15-11) -> (letter, item size in bytes)
VU_ADDRESS_MODES = [
    ("b", 1),   # Byte
    ("s", 2),   # Short
    ("l", 4),   # Word
    ("d", 8),   # Double
    ("q", 16),  # Quad
    ("r", 16),  # Rest
    ("p", 8),   # Pack
    ("u", 8),   # UPack
    ("h", 16),  # HalfPack
    ("f", 16),  # FourthPack
    ("w", 16),  # Wrap
    ("t", 16),  # Transpose
]

# --- Labels ---
GLOBAL_LABEL_PREFIX = "subr_"
LOCAL_LABEL_PREFIX = "@L"
