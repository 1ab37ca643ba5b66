"""
Unsigned 64-bit wrapping arithmetic.

Workloads and meter deltas never fail on overflow; every result is reduced
modulo 2**64 the way a fixed-width unsigned register would hold it.
"""

U64_MASK = (1 << 64) - 1


def to_u64(value: int) -> int:
    """Truncate an integer to its unsigned 64-bit representation."""
    return value & U64_MASK


def wrapping_add(a: int, b: int) -> int:
    return (a + b) & U64_MASK


def wrapping_sub(a: int, b: int) -> int:
    """Subtract modulo 2**64; a negative difference wraps to a large value."""
    return (a - b) & U64_MASK


def wrapping_mul(a: int, b: int) -> int:
    return (a * b) & U64_MASK


def wrapping_div(a: int, b: int) -> int:
    """Unsigned division. Division by zero is not masked and still raises."""
    return to_u64(a) // to_u64(b)
