"""
Lightweight JSON encoding and decoding.
"""

from .encoder import (
    ConversionStats,
    REDUNDANT_ROLE_DESCRIPTIONS,
    conversion_stats,
    decode_flat,
    decode_tree,
    encode_flat,
    encode_tree,
    filter_redundant_description,
    is_group_minimal,
    to_lightweight,
)

__all__ = [
    "ConversionStats",
    "REDUNDANT_ROLE_DESCRIPTIONS",
    "conversion_stats",
    "decode_flat",
    "decode_tree",
    "encode_flat",
    "encode_tree",
    "filter_redundant_description",
    "is_group_minimal",
    "to_lightweight",
]
