"""
Decoding of GitVersion payloads into the GitVersion model.
"""

from __future__ import annotations

from pydantic import ValidationError

from ..core.exceptions import DecodeError
from ..core.models.version import EMPTY_PAYLOAD, GitVersion


def _format_errors(exc: ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<document>"
        messages.append(f"{location}: {err['msg']}")
    return messages


def decode(payload: str) -> GitVersion:
    """
    Decode a GitVersion JSON document.

    Keys are matched case-sensitively against the external names
    ("Major", "SemVer", ...). Python field names ("semver") are not
    external keys and are ignored like any other unknown key.

    Args:
        payload: JSON text, as printed by the version tool

    Returns:
        The decoded, immutable GitVersion

    Raises:
        DecodeError: If the payload is not JSON, not an object, has a wrongly
            typed value, or is non-empty but lacks Major/Minor/Patch.
    """
    try:
        return GitVersion.model_validate_json(payload, by_name=False)
    except ValidationError as e:
        raise DecodeError(
            "Invalid version payload",
            payload=payload,
            errors=_format_errors(e),
            cause=e,
        ) from e


def decode_or_default(payload: str | None) -> GitVersion:
    """Decode payload, substituting the empty document when there is none."""
    return decode(EMPTY_PAYLOAD if payload is None else payload)
