"""
Table Decompression Module
Expands the LZW-packed string table returned by the obfuscator's table function
"""

import logging
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

FIRST_CODE = 256
SEPARATOR = '1'


class TableDecompressor:
    """
    Reverses the LZW-style compression of a packed literal table

    Symbols below 256 are literal characters; anything at or above 256 is a
    dictionary code. The expanded text holds every packed literal joined by
    the separator character `1`.
    """

    def decompress(self, text: str) -> List[str]:
        """
        Expand a packed table and split it into literals

        Args:
            text: Payload of the table function (escapes already expanded)

        Returns:
            Packed literals in table order (empty list for empty input)
        """
        if not text:
            return []

        literals = self.expand(text).split(SEPARATOR)
        logger.debug("Packed table expanded to %d literals", len(literals))
        return literals

    def expand(self, text: str) -> str:
        """Expand a packed table without splitting it"""
        units, _ = self.expand_units(text)
        return ''.join(units)

    def expand_units(self, text: str) -> Tuple[List[str], Dict[int, str]]:
        """
        Run the LZW expansion

        Args:
            text: Compressed symbol string

        Returns:
            Tuple of (emitted units, dictionary built during the expansion).
            The dictionary is discarded by every caller except tests.
        """
        if not text:
            return [], {}

        previous = text[0]
        units = [previous]
        table: Dict[int, str] = {}
        next_code = FIRST_CODE

        for symbol in text[1:]:
            code = ord(symbol)
            if code < FIRST_CODE:
                unit = symbol
            else:
                # A code may reference the entry that is about to be created
                unit = table.get(code) or previous + previous[0]

            units.append(unit)
            table[next_code] = previous + unit[0]
            next_code += 1
            previous = unit

        return units, table
