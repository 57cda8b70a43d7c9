"""
Codec Package
Literal codecs used by the obfuscator's string concealment

Each module contains one codec:
- base.py: Base classes and interfaces
- ascii85.py: <~...~> delimited base-85
- bit_pairs.py: {x,y,...} numeric bit pairs
- five_bit.py: 5-bit packing (default codec, most variant levels)
- base91.py: basE91 (default codec, variant level 1)
"""

from .base import BaseCodec, DelimitedCodec
from .ascii85 import DelimitedBase85Codec
from .bit_pairs import BitPairCodec
from .five_bit import FiveBitPackCodec
from .base91 import Base91Codec


__all__ = [
    'BaseCodec',
    'DelimitedCodec',
    'DelimitedBase85Codec',
    'BitPairCodec',
    'FiveBitPackCodec',
    'Base91Codec',
    'get_all_codecs',
]


def get_all_codecs(config=None):
    """
    Get all codecs in dispatch order

    Args:
        config: DecodeConfig object

    Returns:
        List of initialized codec instances, delimited codecs first
    """
    return [
        DelimitedBase85Codec(config),
        BitPairCodec(config),
        Base91Codec(config),
        FiveBitPackCodec(config),
    ]
