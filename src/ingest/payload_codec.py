"""Webhook payload JSON codec.

This module converts between upstream webhook JSON and typed models.
Parsing is tolerant of unknown and missing keys but rejects wrong types.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.errors import ReadmapPayloadError
from core.types import Desafio, Edition, Profile, Series, Vinculado, WebhookPayload


def parse_webhook_payload(text: str | bytes) -> WebhookPayload:
    """Decode webhook JSON text into a typed payload.

    Args:
        text: Raw JSON document.

    Returns:
        Parsed payload.

    Raises:
        ReadmapPayloadError: If the document is not valid JSON or has wrong types.
    """
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as error:
        raise ReadmapPayloadError(f"Failed to parse webhook JSON: {error}") from error
    return payload_from_dict(document)


def payload_from_dict(document: Any) -> WebhookPayload:
    """Build a payload from a decoded JSON document.

    Args:
        document: Decoded JSON value.

    Returns:
        Parsed payload.

    Raises:
        ReadmapPayloadError: If a field has the wrong JSON type.
    """
    root = _as_object(document, "payload")
    profile = _as_object(root.get("perfil"), "perfil")
    series = _as_object(root.get("maratona"), "maratona")
    desafios = _as_list(root.get("desafios"), "desafios")
    return WebhookPayload(
        profile=Profile(
            name=_as_str(profile.get("nome"), "perfil.nome"),
            link=_as_str(profile.get("link"), "perfil.link"),
            avatar_url=_as_str(profile.get("imagem"), "perfil.imagem"),
        ),
        series=Series(
            name=_as_str(series.get("nome"), "maratona.nome"),
            identifier=_as_str(series.get("identificador"), "maratona.identificador"),
        ),
        desafios=tuple(
            _desafio_from_dict(item, f"desafios[{index}]") for index, item in enumerate(desafios)
        ),
    )


def payload_to_dict(payload: WebhookPayload) -> dict[str, object]:
    """Serialize a payload into upstream JSON shape.

    Empty optional fields are omitted.

    Args:
        payload: Typed payload.

    Returns:
        Dictionary ready for ``json.dumps``.
    """
    return {
        "perfil": {
            "nome": payload.profile.name,
            "link": payload.profile.link,
            "imagem": payload.profile.avatar_url,
        },
        "maratona": {
            "nome": payload.series.name,
            "identificador": payload.series.identifier,
        },
        "desafios": [_desafio_to_dict(desafio) for desafio in payload.desafios],
    }


def _desafio_from_dict(value: Any, path: str) -> Desafio:
    item = _as_object(value, path)
    linked = _as_list(item.get("vinculados"), f"{path}.vinculados")
    return Desafio(
        description=_as_str(item.get("descricao"), f"{path}.descricao"),
        category=_as_str(item.get("categoria"), f"{path}.categoria"),
        completed=_as_bool(item.get("concluido"), f"{path}.concluido"),
        kind=_as_str(item.get("tipo"), f"{path}.tipo"),
        linked=tuple(
            _vinculado_from_dict(entry, f"{path}.vinculados[{index}]")
            for index, entry in enumerate(linked)
        ),
        desafio_id=_as_str(item.get("id"), f"{path}.id"),
    )


def _vinculado_from_dict(value: Any, path: str) -> Vinculado:
    item = _as_object(value, path)
    edition_value = item.get("edicao")
    edition = None
    if edition_value is not None:
        edition_dict = _as_object(edition_value, f"{path}.edicao")
        edition = Edition(
            title=_as_str(edition_dict.get("titulo"), f"{path}.edicao.titulo"),
            author=_as_str(edition_dict.get("autor"), f"{path}.edicao.autor"),
            cover_url=_as_str(edition_dict.get("capa"), f"{path}.edicao.capa"),
        )
    return Vinculado(
        completed=_as_bool(item.get("completo"), f"{path}.completo"),
        progress=_as_int(item.get("progresso"), f"{path}.progresso"),
        updated_at=_as_str(item.get("updatedAt"), f"{path}.updatedAt"),
        edition=edition,
        entry_id=_as_str(item.get("id"), f"{path}.id"),
        rating=_as_int(item.get("avaliacao"), f"{path}.avaliacao"),
        comment=_as_str(item.get("comentario"), f"{path}.comentario"),
        marked_day=_as_str(item.get("diaMarcado"), f"{path}.diaMarcado"),
    )


def _desafio_to_dict(desafio: Desafio) -> dict[str, object]:
    payload: dict[str, object] = {
        "descricao": desafio.description,
        "categoria": desafio.category,
        "concluido": desafio.completed,
        "tipo": desafio.kind,
        "vinculados": [_vinculado_to_dict(entry) for entry in desafio.linked],
    }
    if desafio.desafio_id:
        payload["id"] = desafio.desafio_id
    return payload


def _vinculado_to_dict(entry: Vinculado) -> dict[str, object]:
    payload: dict[str, object] = {
        "completo": entry.completed,
        "progresso": entry.progress,
        "updatedAt": entry.updated_at,
    }
    if entry.entry_id:
        payload["id"] = entry.entry_id
    if entry.rating:
        payload["avaliacao"] = entry.rating
    if entry.comment:
        payload["comentario"] = entry.comment
    if entry.marked_day:
        payload["diaMarcado"] = entry.marked_day
    if entry.edition is not None:
        payload["edicao"] = _edition_to_dict(entry.edition)
    return payload


def _edition_to_dict(edition: Edition) -> dict[str, str]:
    payload: dict[str, str] = {}
    if edition.title:
        payload["titulo"] = edition.title
    if edition.author:
        payload["autor"] = edition.author
    if edition.cover_url:
        payload["capa"] = edition.cover_url
    return payload


def _as_object(value: Any, path: str) -> Mapping[str, Any]:
    """Return a JSON object, treating null as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ReadmapPayloadError(f"Invalid payload field '{path}': expected JSON object")
    return value


def _as_list(value: Any, path: str) -> list[Any]:
    """Return a JSON array, treating null as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ReadmapPayloadError(f"Invalid payload field '{path}': expected JSON array")
    return value


def _as_str(value: Any, path: str) -> str:
    """Return a JSON string, treating null as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ReadmapPayloadError(f"Invalid payload field '{path}': expected string")
    return value


def _as_bool(value: Any, path: str) -> bool:
    """Return a JSON boolean, treating null as false."""
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ReadmapPayloadError(f"Invalid payload field '{path}': expected boolean")
    return value


def _as_int(value: Any, path: str) -> int:
    """Return a JSON integer, treating null as zero.

    Integral floats such as ``50.0`` are accepted; booleans are not.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ReadmapPayloadError(f"Invalid payload field '{path}': expected integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ReadmapPayloadError(f"Invalid payload field '{path}': expected integer")
