"""Pure ordering and attachment helpers."""

from plannerclone.core.attachments import (
    DecodeOutcome,
    NormalizedReference,
    decode_fully,
    encode_reference_key,
    is_absolute_url,
    normalize_reference,
)
from plannerclone.core.ordering import OrderStrategy, find_pivot_position, rank_order_keys, sort_by_order_key

__all__ = [
    "DecodeOutcome",
    "NormalizedReference",
    "OrderStrategy",
    "decode_fully",
    "encode_reference_key",
    "find_pivot_position",
    "is_absolute_url",
    "normalize_reference",
    "rank_order_keys",
    "sort_by_order_key",
]
