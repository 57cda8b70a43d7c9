"""
Delimited base-85 codec
Handles literals wrapped in <~ ... ~> (ASCII85 family with the obfuscator's shorthands)
"""

from .base import DelimitedCodec

# Positional weights for one 5-character group: 85^4 .. 85^0
GROUP_WEIGHTS = (52200625, 614125, 7225, 85, 1)
GROUP_SIZE = 5
PAD_CHAR = 'u'


class DelimitedBase85Codec(DelimitedCodec):
    """
    Decode <~...~> literals

    Every 5 characters carry one 32-bit big-endian word. `s` is noise and is
    dropped, the first `z` is shorthand for an all-zero group (`!!!!!`).
    A short final group is padded with `u` and the bytes it could not carry are dropped.
    """

    opening = '<~'
    closing = '~>'

    def get_name(self) -> str:
        return "base85"

    def decode(self, text: str) -> bytes:
        body = self._strip_delimiters(text)

        body = body.replace('s', '').replace('z', '!!!!!', 1)

        # Only the first z is shorthand; later ones are ordinary digits
        for char in body:
            if not 33 <= ord(char) <= 122:
                raise self._malformed(text, f"character {char!r} outside the base-85 range")

        unpadded_length = len(body)
        padding = (-unpadded_length) % GROUP_SIZE
        body += PAD_CHAR * padding

        output = bytearray()
        for i in range(0, len(body), GROUP_SIZE):
            value = 0
            for char, weight in zip(body[i:i + GROUP_SIZE], GROUP_WEIGHTS):
                value += (ord(char) - 33) * weight
            output += bytes((
                (value >> 24) & 255,
                (value >> 16) & 255,
                (value >> 8) & 255,
                value & 255,
            ))

        if padding == 0:
            return bytes(output)

        # One output byte is dropped per padding character
        return bytes(output[:len(output) - padding])
