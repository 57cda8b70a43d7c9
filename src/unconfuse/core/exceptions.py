"""
Exception hierarchy for the decoding engine
"""


class UnconfuseError(Exception):
    """Base class for all engine errors"""


class MalformedLiteralError(UnconfuseError, ValueError):
    """
    Raised by a codec when a literal matches its delimiter shape but the
    interior does not parse under that codec's grammar

    Recoverable per candidate: the dispatcher skips the literal and continues.
    """

    def __init__(self, codec: str, literal: str, reason: str):
        self.codec = codec
        self.literal = literal
        self.reason = reason
        super().__init__(f"{codec}: {reason} ({literal[:40]!r})")


class ConfigurationError(UnconfuseError, ValueError):
    """Raised for unknown presets or scoring strategies"""
