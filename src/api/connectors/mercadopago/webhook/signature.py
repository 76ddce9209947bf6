"""Validação do header `x-signature` das notificações do Mercado Pago.

Formato do header: `ts=1704908010,v1=<hex>`. O HMAC-SHA256 (chave =
secret do webhook) é calculado sobre o manifest
`id:{data.id};request-id:{x-request-id};ts:{ts};`, omitindo as partes
ausentes.
"""

from __future__ import annotations

import hashlib
import hmac


class SignatureValidationError(ValueError):
    """Assinatura ausente, malformada ou divergente."""


def parse_signature_header(header: str) -> tuple[str, str]:
    """Retorna (ts, v1).

    Raises:
        SignatureValidationError: header sem ts ou v1
    """
    parts: dict[str, str] = {}
    for chunk in header.split(","):
        key, _, value = chunk.strip().partition("=")
        if key and value:
            parts[key.strip()] = value.strip()
    ts = parts.get("ts")
    v1 = parts.get("v1")
    if not ts or not v1:
        raise SignatureValidationError("malformed_signature")
    return ts, v1


def build_manifest(data_id: str | None, request_id: str | None, ts: str) -> str:
    manifest = ""
    if data_id:
        # IDs alfanuméricos vêm em minúsculas no manifest
        manifest += f"id:{data_id.lower()};"
    if request_id:
        manifest += f"request-id:{request_id};"
    return manifest + f"ts:{ts};"


def verify_signature(
    *,
    signature_header: str | None,
    request_id: str | None,
    data_id: str | None,
    secret: str,
) -> None:
    """Valida a assinatura.

    Raises:
        SignatureValidationError: assinatura ausente ou inválida
    """
    if not signature_header:
        raise SignatureValidationError("missing_signature")
    ts, received = parse_signature_header(signature_header)
    manifest = build_manifest(data_id, request_id, ts)
    expected = hmac.new(secret.encode(), manifest.encode(), hashlib.sha256).hexdigest()
    if not hmac.compare_digest(expected, received):
        raise SignatureValidationError("signature_mismatch")


__all__ = [
    "SignatureValidationError",
    "build_manifest",
    "parse_signature_header",
    "verify_signature",
]
