"""Exception types raised by the lexical engine.

Every hard failure derives from ``ValueError`` so callers that only care about
"bad input" can keep catching the builtin. Soft failures (for example a
dictionary pronunciation that cannot be represented) are returned as ``None``
by the relevant functions instead of being raised.
"""

from __future__ import annotations


class SinolexError(ValueError):
    """Base class for hard input errors."""


class InvalidPinyin(SinolexError):
    """Raised when a pronunciation cannot be segmented into legal syllables."""


class MultifieldError(SinolexError):
    """Raised when a slash/parenthesis alternative field is malformed."""


class RecordFormatError(SinolexError):
    """Raised when a source line does not have the expected shape."""


class MatchError(SinolexError):
    """Raised when headwords and pronunciations cannot be paired."""


class AmbiguousMatch(MatchError):
    """Raised when a pronunciation could belong to more than one headword."""


class Unmatched(MatchError):
    """Raised when a headword or pronunciation is left without a partner."""
