from __future__ import annotations
from typing import Union

from snark2move.core.fields import FR_MODULUS, fq_coeffs, fq_is_negative
from snark2move.core.points import G1Point, G2Point

# arkworks 0.4 compressed layout: one 32-byte little-endian word per Fq
# coefficient, flags in the two top bits of the last byte.
FQ_BYTES = 32
FR_BYTES = 32
G1_COMPRESSED_BYTES = FQ_BYTES
G2_COMPRESSED_BYTES = 2 * FQ_BYTES

FLAG_Y_NEGATIVE = 1 << 7
FLAG_INFINITY = 1 << 6


def _le(n: int, width: int) -> bytearray:
    return bytearray(n.to_bytes(width, "little"))


def _encode_with_flags(coeffs: tuple, flags: int) -> bytes:
    buf = bytearray()
    for c in coeffs:
        buf += _le(c, FQ_BYTES)
    buf[-1] |= flags
    return bytes(buf)


def encode_point(point: Union[G1Point, G2Point]) -> bytes:
    """
    Compressed serialization of a G1 (32 bytes) or G2 (64 bytes) point.

    The x coordinate is written little-endian (Fq2 as c0 || c1); the last byte
    carries bit 7 when y is the "negative" root and bit 6 for infinity.
    """
    if not isinstance(point, (G1Point, G2Point)):
        raise TypeError(f"cannot encode {type(point).__name__} as a curve point")
    n_coeffs = 1 if isinstance(point, G1Point) else 2
    affine = point.to_affine()
    if affine is None:
        return _encode_with_flags((0,) * n_coeffs, FLAG_INFINITY)
    x, y = affine
    flags = FLAG_Y_NEGATIVE if fq_is_negative(y) else 0
    return _encode_with_flags(fq_coeffs(x), flags)


def encode_scalar(value: int) -> bytes:
    """Fr element -> 32 bytes little-endian, no flags."""
    return int(value % FR_MODULUS).to_bytes(FR_BYTES, "little")
