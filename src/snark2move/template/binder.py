from __future__ import annotations
from pathlib import Path
from typing import Dict, Mapping

from snark2move.core.errors import ArtifactIOError, TemplateError

PLACEHOLDERS = (
    "__VK_ALPHA_G1__",
    "__VK_BETA_G2__",
    "__VK_GAMMA_G2__",
    "__VK_DELTA_G2__",
    "__VK_GAMMA_ABC_G1__",
    "__VK_PUBLIC_INPUTS__",
    "__PROOF_A__",
    "__PROOF_B__",
    "__PROOF_C__",
)


def bind_template(text: str, expressions: Mapping[str, str]) -> str:
    """
    Replace every placeholder token with its Move expression.
    All nine placeholders must have a non-empty expression and appear in `text`.
    """
    for token in PLACEHOLDERS:
        if not expressions.get(token):
            raise TemplateError("no expression for placeholder", field=token)
        if token not in text:
            raise TemplateError("placeholder missing from template", field=token)
    unknown = sorted(set(expressions) - set(PLACEHOLDERS))
    if unknown:
        raise TemplateError(f"unknown placeholders {unknown}")
    for token in PLACEHOLDERS:
        text = text.replace(token, expressions[token])
    return text


def populate_module(path, expressions: Mapping[str, str]) -> Dict[str, int]:
    """Bind the module at `path` in place; returns per-placeholder replacement counts."""
    path = Path(path)
    try:
        template = path.read_text()
    except OSError as e:
        raise TemplateError(f"cannot read template: {e.strerror or e}", artifact=str(path)) from e
    counts = {token: template.count(token) for token in PLACEHOLDERS}
    populated = bind_template(template, expressions)
    try:
        path.write_text(populated)
    except OSError as e:
        raise ArtifactIOError(f"cannot write module: {e.strerror or e}", artifact=str(path)) from e
    return counts
