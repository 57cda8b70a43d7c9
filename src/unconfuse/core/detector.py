"""
Variant Detection Module
Classifies which default codec the obfuscator used from a structural fingerprint

The obfuscator emits decoy indirection functions whose parameter list is two
plain identifiers followed by two identifiers with default values:

    function _0x1f(a, b, c = x, d = {}) { ... }

Identifier names are random, so matching is done on token shape only.
The number of such functions is the variant level.
"""

import logging
from typing import List

from .tokenizer import IDENTIFIER, JSTokenizer, Token, find_closing, split_top_level

logger = logging.getLogger(__name__)

PLAIN_PARAMETERS = 2
DEFAULTED_PARAMETERS = 2


class VariantDetector:
    """Counts decoy-function fingerprints in source text"""

    def __init__(self, tokenizer: JSTokenizer = None):
        self.tokenizer = tokenizer or JSTokenizer()

    def detect(self, source: str) -> int:
        """
        Determine the variant level of a source text

        Args:
            source: JavaScript source text

        Returns:
            Number of fingerprint matches (0 means not produced by this obfuscator)
        """
        return self.detect_tokens(self.tokenizer.tokenize(source))

    def detect_tokens(self, tokens: List[Token]) -> int:
        level = 0
        index = 0
        while index < len(tokens):
            if tokens[index].is_keyword('function'):
                params_open = self._parameter_list_start(tokens, index)
                if params_open >= 0:
                    params_close = find_closing(tokens, params_open)
                    if params_close > 0 and self.is_fingerprint(tokens, params_open, params_close):
                        level += 1
                        index = params_close
            index += 1

        logger.debug("Variant fingerprint matched %d time(s)", level)
        return level

    @staticmethod
    def _parameter_list_start(tokens: List[Token], index: int) -> int:
        """Index of the `(` following `function [*] [name]`, or -1"""
        position = index + 1
        if position < len(tokens) and tokens[position].is_punct('*'):
            position += 1
        if position < len(tokens) and tokens[position].kind == IDENTIFIER:
            position += 1
        if position < len(tokens) and tokens[position].is_punct('('):
            return position
        return -1

    @staticmethod
    def is_fingerprint(tokens: List[Token], params_open: int, params_close: int) -> bool:
        """
        Check a parameter list against the decoy shape

        Args:
            tokens: Token list
            params_open: Index of the opening parenthesis
            params_close: Index of the matching closing parenthesis

        Returns:
            True for exactly two bare identifiers followed by two `identifier = expr`
        """
        params = split_top_level(tokens, params_open + 1, params_close)
        if len(params) != PLAIN_PARAMETERS + DEFAULTED_PARAMETERS:
            return False

        for param in params[:PLAIN_PARAMETERS]:
            if len(param) != 1 or param[0].kind != IDENTIFIER:
                return False

        for param in params[PLAIN_PARAMETERS:]:
            if len(param) < 3 or param[0].kind != IDENTIFIER or not param[1].is_punct('='):
                return False

        return True
