import json

import pytest
from py_ecc.bn128 import G1, G2, multiply

from snark2move.pipeline import DEFAULT_TEMPLATE_DIR

TEMPLATE_DIR = DEFAULT_TEMPLATE_DIR


def g1_json(pt):
    x, y = (int(c) for c in pt)
    return [str(x), str(y), "1"]


def g2_json(pt):
    x, y = pt
    return [[str(int(c)) for c in x.coeffs], [str(int(c)) for c in y.coeffs], ["1", "0"]]


def make_vk(n_public=2):
    return {
        "protocol": "groth16",
        "curve": "bn128",
        "nPublic": n_public,
        "vk_alpha_1": g1_json(multiply(G1, 5)),
        "vk_beta_2": g2_json(multiply(G2, 7)),
        "vk_gamma_2": g2_json(G2),
        "vk_delta_2": g2_json(multiply(G2, 11)),
        "IC": [g1_json(multiply(G1, k)) for k in range(1, n_public + 2)],
    }


def make_proof():
    return {
        "pi_a": g1_json(multiply(G1, 3)),
        "pi_b": g2_json(multiply(G2, 13)),
        "pi_c": g1_json(G1),
        "protocol": "groth16",
        "curve": "bn128",
    }


@pytest.fixture
def artifacts(tmp_path):
    """Write vk/proof/public JSON into tmp_path; returns a dict of paths."""
    def write(vk=None, proof=None, public=None):
        paths = {
            "vk": tmp_path / "verification_key.json",
            "proof": tmp_path / "proof.json",
            "public": tmp_path / "public.json",
        }
        paths["vk"].write_text(json.dumps(make_vk() if vk is None else vk))
        paths["proof"].write_text(json.dumps(make_proof() if proof is None else proof))
        paths["public"].write_text(json.dumps(["1", "2"] if public is None else public))
        return paths
    return write
