from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from snark2move.core.artifacts_io import (
    Proof, VerificationKey, check_arity, load_proof, load_public_inputs, load_verification_key,
)
from snark2move.core.errors import ConfigurationError
from snark2move.core.literals import to_literal, to_literal_array
from snark2move.core.serialize import encode_point, encode_scalar
from snark2move.template.binder import populate_module
from snark2move.template.staging import CopyTreeStager, Stager

logger = logging.getLogger(__name__)

# Move package shipped with snark2move as package data
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "groth16_module_template"
DEFAULT_MODULE_PATH = "sources/groth16.move"


@dataclass(frozen=True)
class ConverterConfig:
    verification_key_path: Optional[Path]
    public_input_path: Optional[Path]
    proof_path: Optional[Path]
    output_dir: Optional[Path]
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    module_path: str = DEFAULT_MODULE_PATH
    check_on_curve: bool = False
    check_arity: bool = False

    def validate(self) -> "ConverterConfig":
        required = {
            "verification_key_path": self.verification_key_path,
            "public_input_path": self.public_input_path,
            "proof_path": self.proof_path,
            "output_dir": self.output_dir,
        }
        missing = [k for k, v in required.items() if v in (None, "")]
        if missing:
            raise ConfigurationError(f"missing required settings: {', '.join(missing)}")
        return self

    @property
    def module_file(self) -> Path:
        return Path(self.output_dir) / self.module_path


def encode_expressions(vk: VerificationKey, proof: Proof, public_inputs: Sequence[int]) -> Dict[str, str]:
    """Placeholder token -> Move expression, for all nine placeholders."""
    return {
        "__VK_ALPHA_G1__": to_literal(encode_point(vk.alpha)),
        "__VK_BETA_G2__": to_literal(encode_point(vk.beta)),
        "__VK_GAMMA_G2__": to_literal(encode_point(vk.gamma)),
        "__VK_DELTA_G2__": to_literal(encode_point(vk.delta)),
        "__VK_GAMMA_ABC_G1__": to_literal_array(encode_point(p) for p in vk.ic),
        "__VK_PUBLIC_INPUTS__": to_literal_array(encode_scalar(s) for s in public_inputs),
        "__PROOF_A__": to_literal(encode_point(proof.a)),
        "__PROOF_B__": to_literal(encode_point(proof.b)),
        "__PROOF_C__": to_literal(encode_point(proof.c)),
    }


def build_expressions(config: ConverterConfig) -> Dict[str, str]:
    """Load, decode and encode the three artifacts. Touches no output files."""
    config.validate()
    vk = load_verification_key(config.verification_key_path, strict=config.check_on_curve)
    logger.info("verification key: %d IC points", len(vk.ic))
    public_inputs = load_public_inputs(config.public_input_path)
    logger.info("public input: %d values", len(public_inputs))
    proof = load_proof(config.proof_path, strict=config.check_on_curve)
    logger.info("proof loaded from %s", config.proof_path)
    if config.check_arity:
        check_arity(vk, public_inputs)
    return encode_expressions(vk, proof, public_inputs)


def run(config: ConverterConfig, stager: Optional[Stager] = None) -> Path:
    """
    Full conversion: encode artifacts, stage the output tree from the template
    directory, then populate the Move module. Returns the module path.
    """
    expressions = build_expressions(config)
    stager = stager or CopyTreeStager()
    out_dir = Path(config.output_dir)
    logger.info("staging %s -> %s", config.template_dir, out_dir)
    stager.stage(Path(config.template_dir), out_dir)
    module = config.module_file
    counts = populate_module(module, expressions)
    logger.info("wrote %s (%d substitutions)", module, sum(counts.values()))
    return module
