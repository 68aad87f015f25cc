"""Attachment reference key normalization.

Reference keys are URLs that the service returns percent-encoded an
inconsistent number of times. Destination keys are always produced the same
way: decode until nothing changes, check the result is an absolute URL, then
encode exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from plannerclone.contracts.exceptions import AttachmentValidationError
from plannerclone.contracts.plan import AttachmentReference

_LOG = logging.getLogger(__name__)

# Encoded keys shrink on every pass, so this bound is never reached by real data.
_MAX_DECODE_PASSES = 32


@dataclass(frozen=True)
class DecodeOutcome:
    value: str
    passes: int
    fell_back: bool = False


@dataclass(frozen=True)
class NormalizedReference:
    """A reference whose ``key`` is the canonical singly-encoded absolute URL."""

    url: str
    reference: AttachmentReference

    @property
    def key(self) -> str:
        return self.reference.key


def decode_fully(value: str) -> DecodeOutcome:
    """Percent-decode *value* until a pass produces no change.

    If a pass ever yields an empty string the original value is returned
    undecoded with ``fell_back`` set.
    """
    current = value
    passes = 0
    while passes < _MAX_DECODE_PASSES:
        decoded = unquote(current)
        if not decoded:
            return DecodeOutcome(value=value, passes=passes, fell_back=True)
        if decoded == current:
            break
        current = decoded
        passes += 1
    return DecodeOutcome(value=current, passes=passes)


def is_absolute_url(value: str) -> bool:
    """True when *value* has a scheme followed by a non-empty scheme-specific part.

    Host-less URIs such as ``file:///C:/share/a.docx``, ``mailto:`` and ``urn:`` count.
    """
    if value != value.strip():
        return False
    try:
        scheme = urlsplit(value).scheme
    except ValueError:
        return False
    return bool(scheme) and bool(value[len(scheme) + 1 :])


def encode_reference_key(url: str) -> str:
    """Percent-encode *url* once in the form the service expects for reference keys.

    Only letters, digits, ``-``, ``_`` and ``~`` stay literal, so ``.`` becomes ``%2E``.
    """
    return quote(url, safe="").replace(".", "%2E")


def normalize_reference(reference: AttachmentReference) -> NormalizedReference:
    """Decode, validate and re-encode *reference*'s key in one step.

    Raises:
        AttachmentValidationError: If the decoded key is not an absolute URL.
    """
    outcome = decode_fully(reference.key)
    if outcome.fell_back:
        _LOG.warning("Attachment %r key decoded to an empty value; using it undecoded", reference.alias)
    if not is_absolute_url(outcome.value):
        reason = "is empty" if not outcome.value else "is not an absolute URL"
        raise AttachmentValidationError(
            f"Attachment '{reference.alias}' key {reason}: {reference.key!r}",
            alias=reference.alias,
            key=reference.key,
        )
    canonical = reference.model_copy(update={"key": encode_reference_key(outcome.value)})
    return NormalizedReference(url=outcome.value, reference=canonical)
