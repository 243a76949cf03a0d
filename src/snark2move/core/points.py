from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from py_ecc.bn128 import FQ, FQ2, b, b2, is_on_curve

from snark2move.core.errors import ConversionError, MalformedArtifact
from snark2move.core.fields import parse_extension_field, parse_fq


def _is_zero(el) -> bool:
    if isinstance(el, FQ):
        return int(el) == 0
    return all(int(c) == 0 for c in el.coeffs)


def _jacobian_to_affine(x, y, z) -> Optional[Tuple[Any, Any]]:
    # x = X/Z^2, y = Y/Z^3
    if _is_zero(z):
        return None
    zz = z * z
    return x / zz, y / (zz * z)


@dataclass(frozen=True)
class G1Point:
    """
    BN254 G1 point in Jacobian coordinates over Fq.
    Built as-is from the artifact triple; curve membership is not checked.
    """
    x: FQ
    y: FQ
    z: FQ

    def is_infinity(self) -> bool:
        return _is_zero(self.z)

    def to_affine(self) -> Optional[Tuple[FQ, FQ]]:
        return _jacobian_to_affine(self.x, self.y, self.z)

    def is_on_curve(self) -> bool:
        return is_on_curve(self.to_affine(), b)


@dataclass(frozen=True)
class G2Point:
    """BN254 G2 point in Jacobian coordinates over Fq2; no membership check."""
    x: FQ2
    y: FQ2
    z: FQ2

    def is_infinity(self) -> bool:
        return _is_zero(self.z)

    def to_affine(self) -> Optional[Tuple[FQ2, FQ2]]:
        return _jacobian_to_affine(self.x, self.y, self.z)

    def is_on_curve(self) -> bool:
        return is_on_curve(self.to_affine(), b2)


def _coords(triple: Sequence[Any], kind: str, parse) -> list:
    if not isinstance(triple, (list, tuple)) or len(triple) != 3:
        raise MalformedArtifact(f"{kind} point must be a triple [x, y, z]", value=triple)
    out = []
    for i, c in enumerate(triple):
        try:
            out.append(parse(c))
        except ConversionError as e:
            raise e.at(field=f"[{i}]")
    return out


def _fq_coordinate(c: Any) -> FQ:
    if isinstance(c, (list, tuple, dict)):
        raise MalformedArtifact("G1 coordinate must be a decimal string", value=c)
    return parse_fq(c)


def parse_g1_point(triple: Sequence[Any], strict: bool = False) -> G1Point:
    """["x", "y", "z"] -> G1Point. With strict=True, off-curve points are rejected."""
    p = G1Point(*_coords(triple, "G1", _fq_coordinate))
    if strict and not p.is_on_curve():
        raise MalformedArtifact("G1 point is not on the curve", value=triple)
    return p


def parse_g2_point(triple: Sequence[Any], strict: bool = False) -> G2Point:
    """[["x0","x1"], ["y0","y1"], ["z0","z1"]] -> G2Point."""
    p = G2Point(*_coords(triple, "G2", parse_extension_field))
    if strict and not p.is_on_curve():
        raise MalformedArtifact("G2 point is not on the twist", value=triple)
    return p
