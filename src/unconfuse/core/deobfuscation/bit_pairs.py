"""
Numeric bit-pair codec
Handles literals of the form {x1,y1,x2,y2,...}
"""

from typing import List

from .base import DelimitedCodec

SENTINEL = ord('~')
WORD_MASK = 0xFFFFFFFF
# Shift counts wrap at 32, as for 32-bit integer shifts
SHIFT_MASK = 31


class BitPairCodec(DelimitedCodec):
    """
    Decode {x,y,...} literals

    Each (x, y) pair yields bytes of x: the low three bits of y select which
    byte of x comes next, then y shifts right by three until exhausted.
    The encoder pads with `~`, which is dropped from the output.
    """

    opening = '{'
    closing = '}'

    def get_name(self) -> str:
        return "bit_pairs"

    def decode(self, text: str) -> bytes:
        numbers = self._parse_numbers(text, self._strip_delimiters(text))

        output = bytearray()
        # A trailing unpaired number has no selector and contributes nothing
        for i in range(0, len(numbers) - 1, 2):
            x, y = numbers[i], numbers[i + 1]
            while y:
                output.append(((x & WORD_MASK) >> ((8 * (y & 7)) & SHIFT_MASK)) & 255)
                y >>= 3

        return bytes(b for b in output if b != SENTINEL)

    def _parse_numbers(self, text: str, body: str) -> List[int]:
        """Parse the comma-separated integers between the braces"""
        if not body.strip():
            return []

        numbers = []
        for index, part in enumerate(body.split(',')):
            try:
                value = int(part.strip())
            except ValueError:
                raise self._malformed(text, f"non-integer value {part.strip()!r}") from None

            # Negative selectors never reach zero under an arithmetic shift
            if index % 2 == 1 and value < 0:
                raise self._malformed(text, f"negative selector {value}")
            numbers.append(value)

        return numbers
