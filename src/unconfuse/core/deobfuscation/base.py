"""
Base Codec Interface
Defines the abstract interface all literal codecs must implement
"""

from abc import ABC, abstractmethod

from ..exceptions import MalformedLiteralError


class BaseCodec(ABC):
    """Abstract base class for all literal decoding methods"""

    def __init__(self, config=None):
        """
        Initialize codec with optional configuration

        Args:
            config: Codec-specific configuration object
        """
        self.config = config

    @abstractmethod
    def decode(self, text: str) -> bytes:
        """
        Decode one literal to bytes

        Args:
            text: Literal text (escape sequences already expanded)

        Returns:
            Decoded byte sequence

        Raises:
            MalformedLiteralError: If the literal does not parse under this codec
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get the name of this decoding method

        Returns:
            Short identifier (e.g., "base85", "base91")
        """
        pass

    def can_decode(self, text: str) -> bool:
        """
        Check whether the literal carries this codec's delimiters

        Default-form codecs accept anything.
        """
        return True

    def _malformed(self, text: str, reason: str) -> MalformedLiteralError:
        """Build a MalformedLiteralError tagged with this codec's name"""
        return MalformedLiteralError(self.get_name(), text, reason)


class DelimitedCodec(BaseCodec):
    """Base class for codecs selected by an opening/closing delimiter pair"""

    opening = ''
    closing = ''

    def can_decode(self, text: str) -> bool:
        return (len(text) >= len(self.opening) + len(self.closing)
                and text.startswith(self.opening)
                and text.endswith(self.closing))

    def _strip_delimiters(self, text: str) -> str:
        """Remove the delimiter pair, raising if it is not present"""
        if not self.can_decode(text):
            raise self._malformed(text, f"missing {self.opening}...{self.closing} delimiters")
        return text[len(self.opening):len(text) - len(self.closing)]
