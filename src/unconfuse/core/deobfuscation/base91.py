"""
Base-91 codec
Default codec for variant level 1
"""

from .base import BaseCodec

ALPHABET = (
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    'abcdefghijklmnopqrstuvwxyz'
    '0123456789'
    '!#$%&()*+,./:;<=>?@[]^_`{|}~"'
)
DECODE_TABLE = {char: index for index, char in enumerate(ALPHABET)}


class Base91Codec(BaseCodec):
    """
    Standard basE91 decoding over the fixed 91-symbol alphabet

    Characters outside the alphabet are skipped, never an error.
    """

    def get_name(self) -> str:
        return "base91"

    def decode(self, text: str) -> bytes:
        output = bytearray()
        accumulator = 0
        shift = 0
        pending = -1

        for char in text:
            index = DECODE_TABLE.get(char)
            if index is None:
                continue

            if pending < 0:
                pending = index
                continue

            value = pending + index * 91
            accumulator |= value << shift
            shift += 13 if (value & 8191) > 88 else 14
            while shift > 7:
                output.append(accumulator & 255)
                accumulator >>= 8
                shift -= 8
            pending = -1

        if pending >= 0:
            output.append((accumulator | pending << shift) & 255)

        return bytes(output)
