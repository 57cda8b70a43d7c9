"""
Codec Dispatch Module
Routes each candidate literal to the codec its shape and the variant level call for

Dispatch order:
- <~ ... ~>  → delimited base-85
- { ... }    → numeric bit-pair
- level 1    → base-91
- otherwise  → 5-bit packing
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .deobfuscation import (
    Base91Codec, BaseCodec, DelimitedCodec, FiveBitPackCodec, get_all_codecs,
)
from .exceptions import MalformedLiteralError
from .extractor import CandidateLiteral

logger = logging.getLogger(__name__)

BASE91_LEVEL = 1


@dataclass(frozen=True)
class DecodedResult:
    """Decoded bytes of one candidate, produced once by the dispatcher"""
    candidate: CandidateLiteral
    codec: str
    data: bytes


class CodecDispatcher:
    """
    Selects and runs the codec for a candidate literal

    Delimited shapes are checked first; undelimited literals use the
    default codec of the detected variant level.
    """

    def __init__(self, config=None):
        """Initialize dispatcher with one instance of every codec"""
        self.config = config
        self.codecs = get_all_codecs(config)
        self.delimited_codecs = [c for c in self.codecs if isinstance(c, DelimitedCodec)]
        self.base91 = next(c for c in self.codecs if isinstance(c, Base91Codec))
        self.five_bit = next(c for c in self.codecs if isinstance(c, FiveBitPackCodec))

    def select_codec(self, text: str, level: int) -> BaseCodec:
        """
        Pick the codec for a literal

        Args:
            text: Normalized literal text
            level: Variant level from the detector

        Returns:
            Codec instance to decode with
        """
        for codec in self.delimited_codecs:
            if codec.can_decode(text):
                return codec
        if level == BASE91_LEVEL:
            return self.base91
        return self.five_bit

    def decode(self, candidate: CandidateLiteral, level: int) -> Optional[DecodedResult]:
        """
        Decode one candidate literal

        Args:
            candidate: Literal from the extractor
            level: Variant level from the detector

        Returns:
            DecodedResult, or None if the literal is malformed for its codec
        """
        codec = self.select_codec(candidate.text, level)
        try:
            data = codec.decode(candidate.text)
        except MalformedLiteralError as e:
            logger.debug("Skipping malformed literal: %s", e)
            return None

        return DecodedResult(candidate=candidate, codec=codec.get_name(), data=data)
