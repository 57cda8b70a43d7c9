"""
Literal Extraction Module
Finds the string literals the obfuscator stores its encoded payloads in

Three storage shapes are recognised:
- array-literal: the first `= ['...', '...']` string array
- packed-function-table: `function f() { return '<packed>' }`, LZW compressed
- quoted-alphanumeric: any single-quoted literal made of letters, digits and escapes
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .decompressor import TableDecompressor
from .tokenizer import (
    IDENTIFIER, STRING, JSTokenizer, Token, find_closing, split_top_level,
)

logger = logging.getLogger(__name__)

ARRAY_LITERAL = 'array-literal'
PACKED_FUNCTION_TABLE = 'packed-function-table'
QUOTED_ALPHANUMERIC = 'quoted-alphanumeric'

ESCAPE_PATTERN = re.compile(r'\\x([0-9A-Fa-f]{2})|\\u([0-9A-Fa-f]{4})')
ALPHANUMERIC_CONTENT = re.compile(r'(?:[A-Za-z0-9]|\\x[0-9A-Fa-f]{2}|\\u[0-9A-Fa-f]{4})+')


@dataclass(frozen=True)
class CandidateLiteral:
    """One literal suspected of carrying an encoded payload"""
    raw: str
    method: str
    text: str

    def to_dict(self) -> dict:
        return {'raw': self.raw, 'method': self.method, 'text': self.text}


def normalize_escapes(text: str) -> str:
    """
    Expand textual \\xHH and \\uHHHH escape sequences into characters

    Other backslash sequences are left as they are.
    """
    if '\\' not in text:
        return text
    return ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1) or m.group(2), 16)), text)


class LiteralExtractor:
    """
    Scans obfuscated source for candidate literals

    Each form is extracted independently; a missing form contributes nothing.
    Results are deduplicated on their normalized text, first occurrence wins.
    """

    def __init__(self, tokenizer: JSTokenizer = None, decompressor: TableDecompressor = None):
        self.tokenizer = tokenizer or JSTokenizer()
        self.decompressor = decompressor or TableDecompressor()

    def extract(self, source: str) -> List[CandidateLiteral]:
        """
        Extract all candidate literals from source text

        Args:
            source: JavaScript source text

        Returns:
            Ordered, deduplicated list of candidates
        """
        return self.extract_tokens(self.tokenizer.tokenize(source))

    def extract_tokens(self, tokens: List[Token]) -> List[CandidateLiteral]:
        """Extract candidates from an already tokenized source"""
        candidates = []
        candidates.extend(self.extract_array_literal(tokens))
        candidates.extend(self.extract_packed_table(tokens))
        candidates.extend(self.extract_quoted_alphanumeric(tokens))

        unique = self._deduplicate(candidates)
        logger.debug("Extracted %d candidates (%d before deduplication)", len(unique), len(candidates))
        return unique

    def extract_array_literal(self, tokens: List[Token]) -> List[CandidateLiteral]:
        """Strings of the first `= [a, b, ...]` assignment"""
        for index in range(len(tokens) - 1):
            if not (tokens[index].is_punct('=') and tokens[index + 1].is_punct('[')):
                continue

            close = find_closing(tokens, index + 1)
            if close < 0:
                continue

            elements = split_top_level(tokens, index + 2, close)
            if len(elements) < 2:
                continue

            literals = []
            for element in elements:
                if len(element) == 1 and element[0].kind == STRING and element[0].quote == "'":
                    literals.append(self._candidate(element[0].value, ARRAY_LITERAL, element[0].content))
            return literals

        return []

    def extract_packed_table(self, tokens: List[Token]) -> List[CandidateLiteral]:
        """Literals packed into the first `function f() { return '...' }`"""
        for index, token in enumerate(tokens):
            if not token.is_keyword('function'):
                continue

            payload = self._table_payload(tokens, index)
            if payload is None:
                continue

            raw = payload.value
            expanded = self.decompressor.decompress(normalize_escapes(payload.content))
            return [CandidateLiteral(raw=raw, method=PACKED_FUNCTION_TABLE, text=text) for text in expanded]

        return []

    def extract_quoted_alphanumeric(self, tokens: List[Token]) -> List[CandidateLiteral]:
        """Every single-quoted literal made only of letters, digits and escapes"""
        literals = []
        for token in tokens:
            if token.kind != STRING or token.quote != "'":
                continue
            if ALPHANUMERIC_CONTENT.fullmatch(token.content):
                literals.append(self._candidate(token.value, QUOTED_ALPHANUMERIC, token.content))
        return literals

    @staticmethod
    def _table_payload(tokens: List[Token], index: int):
        """
        Match `function NAME ( ) { return '<payload>' [;] }` starting at index

        Returns:
            The payload string token, or None if the shape does not match
        """
        shape = tokens[index + 1:index + 9]
        if len(shape) < 7:
            return None

        name, open_paren, close_paren, open_brace, keyword, payload = shape[:6]
        if name.kind != IDENTIFIER or not open_paren.is_punct('(') or not close_paren.is_punct(')'):
            return None
        if not open_brace.is_punct('{') or not keyword.is_keyword('return'):
            return None
        if payload.kind != STRING or payload.quote != "'":
            return None

        rest = shape[6:]
        if rest and rest[0].is_punct(';'):
            rest = rest[1:]
        if not rest or not rest[0].is_punct('}'):
            return None
        return payload

    def candidate_from_text(self, text: str, method: str) -> Optional[CandidateLiteral]:
        """
        Wrap a literal supplied directly (not found in source)

        Returns:
            CandidateLiteral, or None if the text is empty after normalization
        """
        candidate = self._candidate(text, method, text)
        return candidate if candidate.text else None

    @staticmethod
    def _candidate(raw: str, method: str, content: str) -> CandidateLiteral:
        return CandidateLiteral(raw=raw, method=method, text=normalize_escapes(content))

    @staticmethod
    def _deduplicate(candidates: Iterable[CandidateLiteral]) -> List[CandidateLiteral]:
        seen = set()
        unique = []
        for candidate in candidates:
            if not candidate.text or candidate.text in seen:
                continue
            seen.add(candidate.text)
            unique.append(candidate)
        return unique
