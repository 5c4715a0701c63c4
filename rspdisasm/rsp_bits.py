# rspdisasm/rsp_bits.py


def sign_extend(value, bits):
    """ Sign extend a 'bits'-bit value represented as an integer. """
    sign_bit = 1 << (bits - 1)
    value &= (1 << bits) - 1
    if (value & sign_bit) != 0: # Check if sign bit is set
        return value - (1 << bits)
    return value


def u_at(bit, size, word):
    """Extracts the unsigned `size`-bit field whose lowest bit sits at `bit`."""
    return (word >> bit) & ((1 << size) - 1)


def s_at(bit, size, word):
    """Same as u_at, but the field is read as a two's complement integer."""
    return sign_extend(u_at(bit, size, word), size)
