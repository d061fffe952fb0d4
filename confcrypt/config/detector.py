"""
Encrypted-value detection.

A configuration value is an encrypted literal when, ignoring surrounding
whitespace, it reads ``ENC(<payload>)`` with a non-empty payload. Every
other value, including ``ENC()`` and values that only contain the markers,
is plain text and passes through verbatim.
"""

from dataclasses import dataclass
from typing import Any, Union

from ..constants import Markers


@dataclass(frozen=True)
class PlainValue:
    """A value to be returned as-is."""
    text: Any


@dataclass(frozen=True)
class EncryptedValue:
    """A marked value; ``payload`` is the encoded ciphertext between the markers."""
    payload: str
    raw: str


EncryptedLiteral = Union[PlainValue, EncryptedValue]


def detect(raw: Any) -> EncryptedLiteral:
    """Classify a raw configuration value. Never raises."""
    if not isinstance(raw, str):
        return PlainValue(raw)

    trimmed = raw.strip()
    if not (trimmed.startswith(Markers.PREFIX) and trimmed.endswith(Markers.SUFFIX)):
        return PlainValue(raw)

    payload = trimmed[len(Markers.PREFIX):-len(Markers.SUFFIX)].strip()
    if not payload:
        return PlainValue(raw)

    return EncryptedValue(payload=payload, raw=raw)


def is_encrypted(raw: Any) -> bool:
    return isinstance(detect(raw), EncryptedValue)


def wrap(payload: str) -> str:
    """Render an encoded ciphertext as an encrypted literal."""
    return f"{Markers.PREFIX}{payload}{Markers.SUFFIX}"
