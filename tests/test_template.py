import pytest

from snark2move.core.errors import ArtifactIOError, TemplateError
from snark2move.template.binder import PLACEHOLDERS, bind_template, populate_module
from snark2move.template.staging import CopyTreeStager, RsyncStager

EXPRS = {token: f'x"{i:02x}"' for i, token in enumerate(PLACEHOLDERS)}
TEMPLATE = "\n".join(f"const C{i} = {token};" for i, token in enumerate(PLACEHOLDERS)) + "\n"


def test_bind_replaces_every_token():
    out = bind_template(TEMPLATE + "// again __PROOF_A__\n", EXPRS)
    for token in PLACEHOLDERS:
        assert token not in out
    assert out.count('x"06"') == 2


def test_missing_placeholder_in_template():
    text = TEMPLATE.replace("__PROOF_C__", "nothing")
    with pytest.raises(TemplateError) as ei:
        bind_template(text, EXPRS)
    assert ei.value.field == "__PROOF_C__"


def test_missing_or_empty_expression():
    exprs = dict(EXPRS)
    exprs["__VK_BETA_G2__"] = ""
    with pytest.raises(TemplateError):
        bind_template(TEMPLATE, exprs)
    del exprs["__VK_BETA_G2__"]
    with pytest.raises(TemplateError):
        bind_template(TEMPLATE, exprs)


def test_populate_module_in_place(tmp_path):
    module = tmp_path / "groth16.move"
    module.write_text(TEMPLATE)
    counts = populate_module(module, EXPRS)
    assert set(counts.values()) == {1}
    assert "__" not in module.read_text()


def test_populate_leaves_file_untouched_on_failure(tmp_path):
    module = tmp_path / "groth16.move"
    partial = TEMPLATE.replace("__VK_PUBLIC_INPUTS__", "vector[]")
    module.write_text(partial)
    with pytest.raises(TemplateError):
        populate_module(module, EXPRS)
    assert module.read_text() == partial


def test_unreadable_template(tmp_path):
    with pytest.raises(TemplateError):
        populate_module(tmp_path / "nope.move", EXPRS)


def test_copytree_stager_merges(tmp_path):
    src = tmp_path / "tpl"
    (src / "sources").mkdir(parents=True)
    (src / "sources" / "m.move").write_text("m")
    out = tmp_path / "out"
    (out / "build").mkdir(parents=True)
    (out / "build" / "keep").write_text("k")
    CopyTreeStager().stage(src, out)
    assert (out / "sources" / "m.move").read_text() == "m"
    assert (out / "build" / "keep").exists()


def test_copytree_stager_missing_template(tmp_path):
    with pytest.raises(ArtifactIOError):
        CopyTreeStager().stage(tmp_path / "absent", tmp_path / "out")


def test_rsync_stager_missing_executable(tmp_path):
    with pytest.raises(ArtifactIOError):
        RsyncStager(executable="definitely-not-rsync-xyz").stage(tmp_path, tmp_path / "out")
