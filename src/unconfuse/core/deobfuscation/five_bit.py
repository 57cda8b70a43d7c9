"""
5-bit packing codec
Default codec for every variant level other than 1
"""

from .base import BaseCodec

WORD_MASK = 0xFFFFFFFF


class FiveBitPackCodec(BaseCodec):
    """
    Decode literals where each character carries 5 payload bits

    Characters map to symbols by subtracting 33; output bytes are
    reassembled 8 bits at a time from a rolling bit buffer.
    """

    def get_name(self) -> str:
        return "five_bit"

    def decode(self, text: str) -> bytes:
        output = bytearray()
        bit_count = 0
        buffer = 0

        for char in text:
            symbol = ord(char) - 33
            bit_count += 5
            shifted = (buffer << 5) | symbol
            if bit_count >= 8:
                bit_count -= 8
                output.append((shifted >> bit_count) & 255)
            # Bits above the low word never reach an output byte
            buffer = shifted & WORD_MASK

        return bytes(output)
