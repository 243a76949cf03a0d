import json

from click.testing import CliRunner

from snark2move.cli import cli
from snark2move.template.binder import PLACEHOLDERS
from conftest import TEMPLATE_DIR, make_proof


def test_convert_from_environment(artifacts, tmp_path):
    paths = artifacts()
    out_dir = tmp_path / "pkg"
    env = {
        "IN_VK_PATH": str(paths["vk"]),
        "IN_PUBLIC_INPUT_PATH": str(paths["public"]),
        "IN_PROOF_PATH": str(paths["proof"]),
        "OUT_DIR": str(out_dir),
    }
    res = CliRunner().invoke(cli, ["convert", "--stager", "copy", "--template-dir", str(TEMPLATE_DIR)], env=env)
    assert res.exit_code == 0, res.output
    text = (out_dir / "sources" / "groth16.move").read_text()
    assert not any(token in text for token in PLACEHOLDERS)


def test_convert_missing_setting(artifacts, tmp_path):
    paths = artifacts()
    res = CliRunner().invoke(cli, ["convert", "--vk", str(paths["vk"]), "--proof", str(paths["proof"])],
                             env={"IN_PUBLIC_INPUT_PATH": None, "OUT_DIR": None})
    assert res.exit_code != 0
    assert "missing required settings" in res.output


def test_inspect_prints_expressions(artifacts, tmp_path):
    paths = artifacts()
    res = CliRunner().invoke(cli, ["inspect", "--vk", str(paths["vk"]), "--proof", str(paths["proof"]),
                                   "--public-input", str(paths["public"])])
    assert res.exit_code == 0, res.output
    exprs = json.loads(res.output)
    assert set(exprs) == set(PLACEHOLDERS)
    assert exprs["__VK_PUBLIC_INPUTS__"].startswith("vector[")


def test_inspect_reports_failing_field(artifacts):
    proof = make_proof()
    proof["pi_b"][0][0] = "-5"
    paths = artifacts(proof=proof)
    res = CliRunner().invoke(cli, ["inspect", "--vk", str(paths["vk"]), "--proof", str(paths["proof"]),
                                   "--public-input", str(paths["public"])])
    assert res.exit_code == 1
    assert "pi_b[0][0]" in res.output and "proof proof.json" in res.output


def test_convert_uses_bundled_template(artifacts, tmp_path, monkeypatch):
    paths = artifacts()
    monkeypatch.chdir(tmp_path)
    res = CliRunner().invoke(cli, ["convert", "--stager", "copy", "--vk", str(paths["vk"]),
                                   "--proof", str(paths["proof"]), "--public-input", str(paths["public"]),
                                   "--out-dir", "pkg"])
    assert res.exit_code == 0, res.output
    assert (tmp_path / "pkg" / "Move.toml").exists()
