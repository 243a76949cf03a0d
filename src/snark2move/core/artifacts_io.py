from __future__ import annotations
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple
import numpy as np

from snark2move.core.errors import ArtifactIOError, ConversionError, MalformedArtifact
from snark2move.core.fields import parse_fr
from snark2move.core.points import G1Point, G2Point, parse_g1_point, parse_g2_point


@dataclass(frozen=True)
class VerificationKey:
    alpha: G1Point
    beta: G2Point
    gamma: G2Point
    delta: G2Point
    ic: Tuple[G1Point, ...]


@dataclass(frozen=True)
class Proof:
    a: G1Point
    b: G2Point
    c: G1Point


def _read_json(path, artifact: str) -> Any:
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ArtifactIOError(f"cannot read file: {e.strerror or e}", artifact=artifact, value=str(path)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ArtifactIOError(f"invalid JSON at line {e.lineno} column {e.colno}",
                              artifact=artifact, value=str(path)) from e


def _field(obj: Dict[str, Any], key: str, artifact: str, decode: Callable[..., Any], **kw):
    if key not in obj:
        raise MalformedArtifact(f"missing key '{key}'", artifact=artifact)
    try:
        return decode(obj[key], **kw)
    except ConversionError as e:
        raise e.at(artifact, key)


def _require_object(obj: Any, artifact: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise MalformedArtifact(f"expected a JSON object, got {type(obj).__name__}", artifact=artifact)
    return obj


def _g1_list(items: Any, strict: bool = False) -> Tuple[G1Point, ...]:
    if not isinstance(items, list):
        raise MalformedArtifact("expected a list of G1 points", value=items)
    out = []
    for i, t in enumerate(items):
        try:
            out.append(parse_g1_point(t, strict=strict))
        except ConversionError as e:
            raise e.at(field=f"[{i}]")
    return tuple(out)


def verification_key_from_json(obj: Any, strict: bool = False,
                               artifact: str = "verification key") -> VerificationKey:
    """
    snarkjs verification_key.json -> VerificationKey.
    Extra keys (protocol, curve, nPublic, vk_alphabeta_12) are ignored.
    """
    obj = _require_object(obj, artifact)
    return VerificationKey(
        alpha=_field(obj, "vk_alpha_1", artifact, parse_g1_point, strict=strict),
        beta=_field(obj, "vk_beta_2", artifact, parse_g2_point, strict=strict),
        gamma=_field(obj, "vk_gamma_2", artifact, parse_g2_point, strict=strict),
        delta=_field(obj, "vk_delta_2", artifact, parse_g2_point, strict=strict),
        ic=_field(obj, "IC", artifact, _g1_list, strict=strict),
    )


def proof_from_json(obj: Any, strict: bool = False, artifact: str = "proof") -> Proof:
    obj = _require_object(obj, artifact)
    return Proof(
        a=_field(obj, "pi_a", artifact, parse_g1_point, strict=strict),
        b=_field(obj, "pi_b", artifact, parse_g2_point, strict=strict),
        c=_field(obj, "pi_c", artifact, parse_g1_point, strict=strict),
    )


def public_inputs_from_json(obj: Any, artifact: str = "public input") -> np.ndarray:
    """
    Flat snarkjs public.json array -> object array of Fr residues, order kept.
    """
    if not isinstance(obj, list):
        raise MalformedArtifact(f"expected a JSON array, got {type(obj).__name__}", artifact=artifact)
    vals: List[int] = []
    for i, v in enumerate(obj):
        try:
            vals.append(parse_fr(v))
        except ConversionError as e:
            raise e.at(artifact, f"[{i}]")
    return np.array(vals, dtype=object)


def load_verification_key(path, strict: bool = False) -> VerificationKey:
    name = f"verification key {Path(path).name}"
    return verification_key_from_json(_read_json(path, name), strict=strict, artifact=name)


def load_proof(path, strict: bool = False) -> Proof:
    name = f"proof {Path(path).name}"
    return proof_from_json(_read_json(path, name), strict=strict, artifact=name)


def load_public_inputs(path) -> np.ndarray:
    name = f"public input {Path(path).name}"
    return public_inputs_from_json(_read_json(path, name), artifact=name)


def check_arity(vk: VerificationKey, public_inputs) -> None:
    """IC carries one point per public input plus the constant term."""
    if len(vk.ic) != len(public_inputs) + 1:
        raise MalformedArtifact(
            f"IC has {len(vk.ic)} points but {len(public_inputs)} public inputs need {len(public_inputs) + 1}",
            artifact="verification key", field="IC",
        )
