"""
JavaScript Tokenizer
Turns raw source text into a flat token stream for structural matching

Only as much of the lexical grammar as the literal extractor and the variant
detector need: identifiers, numbers, string literals, template literals,
regex literals and punctuators. Comments and whitespace are dropped.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

IDENTIFIER = 'identifier'
NUMBER = 'number'
STRING = 'string'
TEMPLATE = 'template'
REGEX = 'regex'
PUNCTUATOR = 'punctuator'

# Each pattern is anchored at the scan position and has no nested
# quantifiers, so a failed match costs at most one pass over the token.
_WHITESPACE = re.compile(r'\s+')
_LINE_COMMENT = re.compile(r'//[^\n]*')
_BLOCK_COMMENT = re.compile(r'/\*.*?(?:\*/|\Z)', re.DOTALL)
_IDENTIFIER = re.compile(r"[A-Za-z_$\u0080-\uffff][\w$\u0080-\uffff]*")
_NUMBER = re.compile(r'0[xX][0-9a-fA-F_]+n?|0[oObB][0-7_]+n?|(?:\d[\d_]*\.?\d*|\.\d+)(?:[eE][+-]?\d+)?n?')
_SINGLE_QUOTED = re.compile(r"'(?:[^'\\\n]|\\.)*'?", re.DOTALL)
_DOUBLE_QUOTED = re.compile(r'"(?:[^"\\\n]|\\.)*"?', re.DOTALL)
_TEMPLATE = re.compile(r'`(?:[^`\\]|\\.)*`?', re.DOTALL)
_REGEX = re.compile(r'/(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[A-Za-z]*')
_PUNCTUATOR = re.compile(
    r'>>>=|\.\.\.|===|!==|\*\*=|<<=|>>=|>>>|&&=|\|\|=|\?\?='
    r'|=>|==|!=|<=|>=|&&|\|\||\?\?|\?\.|\+\+|--|\+=|-=|\*=|/=|%=|&=|\|=|\^=|\*\*|<<|>>'
    r'|[{}()\[\];,<>+\-*/%&|^!~?:=.@#\\]'
)

# Keywords after which a slash starts a regex rather than a division
_REGEX_PREFIX_KEYWORDS = {
    'return', 'typeof', 'instanceof', 'in', 'of', 'new', 'delete', 'void',
    'throw', 'case', 'do', 'else', 'yield', 'await',
}


@dataclass(frozen=True)
class Token:
    """One lexical token with its span in the source"""
    kind: str
    value: str
    start: int
    end: int

    def is_punct(self, value: str) -> bool:
        return self.kind == PUNCTUATOR and self.value == value

    def is_keyword(self, value: str) -> bool:
        return self.kind == IDENTIFIER and self.value == value

    @property
    def quote(self) -> Optional[str]:
        """Opening quote character of a string token"""
        if self.kind in (STRING, TEMPLATE):
            return self.value[0]
        return None

    @property
    def content(self) -> str:
        """Raw text between the quotes of a string token (escapes untouched)"""
        if self.kind not in (STRING, TEMPLATE):
            return self.value
        closed = len(self.value) >= 2 and self.value.endswith(self.value[0])
        return self.value[1:-1] if closed else self.value[1:]


class JSTokenizer:
    """
    Lightweight JavaScript lexer

    Never raises on malformed input: unterminated strings run to the end of
    their line, and any character no rule recognises becomes a one-character
    punctuator.
    """

    def tokenize(self, source: str) -> List[Token]:
        """
        Tokenize a full source text

        Args:
            source: JavaScript source

        Returns:
            List of tokens in source order
        """
        return list(self.iter_tokens(source))

    def iter_tokens(self, source: str) -> Iterator[Token]:
        pos = 0
        length = len(source)
        previous = None

        while pos < length:
            char = source[pos]

            match = _WHITESPACE.match(source, pos)
            if match:
                pos = match.end()
                continue

            if char == '/':
                match = _LINE_COMMENT.match(source, pos) or _BLOCK_COMMENT.match(source, pos)
                if match:
                    pos = match.end()
                    continue
                if self._regex_allowed(previous):
                    match = _REGEX.match(source, pos)
                    if match:
                        previous = Token(REGEX, match.group(), pos, match.end())
                        pos = match.end()
                        yield previous
                        continue

            kind, match = self._match_at(source, pos, char)
            if match is None:
                token = Token(PUNCTUATOR, char, pos, pos + 1)
            else:
                token = Token(kind, match.group(), pos, match.end())

            previous = token
            pos = token.end
            yield token

    def _match_at(self, source: str, pos: int, char: str):
        """Pick the rule for the character at pos"""
        if char == "'":
            return STRING, _SINGLE_QUOTED.match(source, pos)
        if char == '"':
            return STRING, _DOUBLE_QUOTED.match(source, pos)
        if char == '`':
            return TEMPLATE, _TEMPLATE.match(source, pos)
        if char.isdigit() or (char == '.' and source[pos + 1:pos + 2].isdigit()):
            return NUMBER, _NUMBER.match(source, pos)

        match = _IDENTIFIER.match(source, pos)
        if match:
            return IDENTIFIER, match
        return PUNCTUATOR, _PUNCTUATOR.match(source, pos)

    @staticmethod
    def _regex_allowed(previous: Optional[Token]) -> bool:
        """A slash opens a regex at the start, after an operator, or after certain keywords"""
        if previous is None:
            return True
        if previous.kind == IDENTIFIER:
            return previous.value in _REGEX_PREFIX_KEYWORDS
        if previous.kind == PUNCTUATOR:
            return previous.value not in (')', ']', '}')
        return False


def find_closing(tokens: List[Token], open_index: int) -> int:
    """
    Find the index of the bracket closing tokens[open_index]

    Args:
        tokens: Token list
        open_index: Index of an opening (, [ or { punctuator

    Returns:
        Index of the matching closer, or -1 if the group is unterminated
    """
    pairs = {'(': ')', '[': ']', '{': '}'}
    depth = 0
    for index in range(open_index, len(tokens)):
        token = tokens[index]
        if token.kind != PUNCTUATOR:
            continue
        if token.value in pairs:
            depth += 1
        elif token.value in (')', ']', '}'):
            depth -= 1
            if depth == 0:
                return index
    return -1


def split_top_level(tokens: List[Token], start: int, end: int) -> List[List[Token]]:
    """
    Split tokens[start:end] at commas that are not nested in brackets

    Returns:
        List of token groups (an empty group for consecutive commas)
    """
    groups = [[]]
    depth = 0
    for token in tokens[start:end]:
        if token.kind == PUNCTUATOR:
            if token.value in ('(', '[', '{'):
                depth += 1
            elif token.value in (')', ']', '}'):
                depth -= 1
            elif token.value == ',' and depth == 0:
                groups.append([])
                continue
        groups[-1].append(token)
    return groups
