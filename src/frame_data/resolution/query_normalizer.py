"""
Query normalization.

Reduces loosely formatted user input to the form aliases are stored in.
"""
import re

from ..exceptions import InvalidQueryError

# Word characters and whitespace, plus the punctuation move names use:
#   []  charge inputs           .  e.g. 5.LP
#   -   e.g. MERRY-GO-RILLA     ,  taunt inputs
#   '   e.g. LOCK 'N' LOAD      +  e.g. 236+PP
#   ~   follow-ups, e.g. [4]6+K~LK
DISALLOWED_CHARACTERS = re.compile(r"[^\w\s\[\].\-,'+~]")
WHITESPACE_RUN = re.compile(r"\s+")


class QueryNormalizer:
    """Strips disallowed characters, collapses whitespace, upper-cases and truncates."""

    DEFAULT_MAX_LENGTH = 100

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        if max_length < 1:
            raise ValueError(f"max_length must be positive, got {max_length}")
        self.max_length = max_length

    def normalize(self, raw: str) -> str:
        if not raw:
            return ""
        cleaned = DISALLOWED_CHARACTERS.sub("", raw)
        cleaned = WHITESPACE_RUN.sub(" ", cleaned)
        return cleaned.upper().strip()[:self.max_length].strip()

    def validate(self, raw: str, field_name: str = "Query") -> str:
        """
        Normalize and reject input that normalizes to nothing.
        
        :raises InvalidQueryError: If nothing is left after normalization
        """
        if not isinstance(raw, str):
            raise InvalidQueryError(f"{field_name} must be a string")

        normalized = self.normalize(raw)
        if not normalized:
            raise InvalidQueryError(f"{field_name} cannot be empty after sanitization")
        return normalized
