from __future__ import annotations
import re
from typing import Iterable, List

from snark2move.core.errors import TemplateError

_LITERAL_RE = re.compile(r'x"([0-9a-fA-F]*)"')
_ARRAY_RE = re.compile(r"vector\[(.*)\]", re.DOTALL)


def to_literal(data: bytes) -> str:
    """bytes -> Move byte-string literal x"<hex>"."""
    return f'x"{bytes(data).hex()}"'


def to_literal_array(items: Iterable[bytes]) -> str:
    """Ordered Move vector of byte literals; order is kept exactly."""
    return "vector[" + ",".join(to_literal(b) for b in items) + "]"


def parse_literal(text: str) -> bytes:
    m = _LITERAL_RE.fullmatch(text.strip())
    if m is None or len(m.group(1)) % 2:
        raise TemplateError("not a Move byte-string literal", value=text)
    return bytes.fromhex(m.group(1))


def parse_literal_array(text: str) -> List[bytes]:
    m = _ARRAY_RE.fullmatch(text.strip())
    if m is None:
        raise TemplateError("not a Move vector literal", value=text)
    body = m.group(1).strip()
    if not body:
        return []
    return [parse_literal(item) for item in body.split(",")]
