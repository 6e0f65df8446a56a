"""
Exceptions raised while decoding Bencoded data.
"""
__all__ = [
    "BencodeDecodeError",
    "InvalidInt",
    "InvalidStr",
    "InvalidList",
    "InvalidDict",
    "UnrecognizedValue",
    "NestingTooDeep",
]


class BencodeDecodeError(Exception):
    """Custom exception for Bencode decoding errors."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at byte {position})")
        self.message = message
        self.position = position


class InvalidInt(BencodeDecodeError):
    """Malformed, unterminated or negative-zero integer."""


class InvalidStr(BencodeDecodeError):
    """Bad length prefix, missing colon or truncated payload."""


class InvalidList(BencodeDecodeError):
    """Unterminated list."""


class InvalidDict(BencodeDecodeError):
    """Unterminated dictionary, non-string or duplicate key."""


class UnrecognizedValue(BencodeDecodeError):
    """The byte at the cursor does not start any value."""


class NestingTooDeep(BencodeDecodeError):
    """Containers nested deeper than the configured limit."""
