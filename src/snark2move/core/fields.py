from __future__ import annotations
from typing import Any, Optional, Sequence

from py_ecc.bn128 import FQ, FQ2, curve_order, field_modulus

from snark2move.core.errors import MalformedArtifact, MalformedNumber

# BN254 (snarkjs "bn128")
FR_MODULUS = int(curve_order)
FQ_MODULUS = int(field_modulus)

_DIGITS = frozenset("0123456789")
# below the interpreter's int<->str digit limit (sys.get_int_max_str_digits)
_CHUNK_DIGITS = 4000


def _check_decimal(repr: Any) -> str:
    if not isinstance(repr, str):
        raise MalformedNumber("expected a decimal string", value=repr)
    if not repr or not _DIGITS.issuperset(repr):
        raise MalformedNumber("not an unsigned decimal integer", value=repr)
    return repr


def _accumulate(digits: str, modulus: Optional[int] = None) -> int:
    acc = 0
    for i in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[i:i + _CHUNK_DIGITS]
        acc = acc * 10 ** len(chunk) + int(chunk)
        if modulus is not None:
            acc %= modulus
    return acc


def parse_decimal(repr: Any) -> int:
    """Unsigned base-10 text -> int of any length. Signs, whitespace and hex are rejected."""
    return _accumulate(_check_decimal(repr))


def parse_field(repr: Any, modulus: int) -> int:
    """
    Parse a decimal string and reduce it modulo `modulus`.
    Values >= modulus are wrapped, never rejected, whatever their length.
    """
    return _accumulate(_check_decimal(repr), modulus)


def parse_fr(repr: Any) -> int:
    return parse_field(repr, FR_MODULUS)


def parse_fq(repr: Any) -> FQ:
    return FQ(parse_field(repr, FQ_MODULUS))


def parse_extension_field(pair: Sequence[Any]) -> FQ2:
    """[c0, c1] -> c0 + c1*u over Fq2."""
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise MalformedArtifact("Fq2 element must be a pair [c0, c1]", value=pair)
    coeffs = []
    for i, c in enumerate(pair):
        if isinstance(c, (list, tuple, dict)):
            raise MalformedArtifact("Fq2 component must be a decimal string", field=f"[{i}]", value=c)
        try:
            coeffs.append(parse_field(c, FQ_MODULUS))
        except MalformedNumber as e:
            raise e.at(field=f"[{i}]")
    return FQ2(coeffs)


def fq_coeffs(el) -> tuple:
    """Canonical integer coefficients of an FQ (1-tuple) or FQ2 (c0, c1)."""
    if isinstance(el, FQ):
        return (int(el),)
    return tuple(int(c) for c in el.coeffs)


def fq_is_negative(el) -> bool:
    """
    True iff el > -el in arkworks field order.
    Fq compares canonical integers; Fq2 compares c1 first, then c0.
    """
    coeffs = fq_coeffs(el)
    neg = tuple((-c) % FQ_MODULUS for c in coeffs)
    return tuple(reversed(coeffs)) > tuple(reversed(neg))
