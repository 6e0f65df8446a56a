"""
Bencode decoder.

Every parse method takes an absolute offset into the buffer and returns
``(value, consumed)``; nothing about the caller's position changes when a
method raises. Containers release the children they already built before
letting an error escape.
"""
import logging
from typing import Iterator, List, Optional, Tuple

from .config import DEFAULT_CONFIG, DecoderConfig
from .errors import (
    BencodeDecodeError,
    InvalidDict,
    InvalidInt,
    InvalidList,
    InvalidStr,
    NestingTooDeep,
    UnrecognizedValue,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

INT_START = ord("i")
LIST_START = ord("l")
DICT_START = ord("d")
END = ord("e")
COLON = ord(":")
MINUS = ord("-")
ZERO = ord("0")
DIGITS = b"0123456789"

Parsed = Tuple[BencodeType, int]


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.
    """
    def __init__(self, data: bytes, config: Optional[DecoderConfig] = None):
        if isinstance(data, str):
            raise TypeError("Bencode data must be bytes, not str")
        if isinstance(data, memoryview):
            data = data.tobytes()
        elif not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Cannot decode object of type {type(data)}")
        self.data = data
        self.config = config or DEFAULT_CONFIG
        self.depth = 0

    def decode(self, start: int = 0) -> Parsed:
        """Decodes the single value beginning at start."""
        if start < 0:
            raise ValueError("start offset must not be negative")
        self.depth = 0
        return self._parse_value(start)

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _fail(self, error_cls, message: str, position: int):
        logger.debug("%s at byte %d: %s", error_cls.__name__, position, message)
        raise error_cls(message, position)

    def _enter(self, position: int):
        limit = self.config.max_depth
        if limit is not None and self.depth >= limit:
            self._fail(NestingTooDeep, f"containers nested deeper than {limit}", position)
        self.depth += 1

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, pos: int) -> Parsed:
        if pos >= len(self.data):
            self._fail(UnrecognizedValue, "unexpected end of input", pos)

        ch = self.data[pos]

        if ch == INT_START:
            return self.parse_int(pos)

        if ch in DIGITS:  # strings start with their length
            return self.parse_string(pos)

        if ch == LIST_START:
            return self.parse_list(pos)

        if ch == DICT_START:
            return self.parse_dict(pos)

        self._fail(UnrecognizedValue, f"invalid token {bytes([ch])!r}", pos)

    def parse_int(self, start: int) -> Parsed:
        """Parses i[-]<digits>e."""
        data = self.data
        end = len(data)
        pos = start

        if pos >= end or data[pos] != INT_START:
            self._fail(InvalidInt, "integer must start with 'i'", pos)
        pos += 1

        negative = pos < end and data[pos] == MINUS
        if negative:
            pos += 1

        digits_start = pos
        significant = None  # offset of the first non-zero digit
        limit = self.config.int_digit_limit()
        while pos < end and data[pos] != END:
            if data[pos] not in DIGITS:
                self._fail(InvalidInt, f"unexpected byte {bytes([data[pos]])!r} in integer", pos)
            if significant is None and data[pos] != ZERO:
                significant = pos
            if significant is not None and limit is not None and pos - significant >= limit:
                self._fail(InvalidInt, f"integer longer than {limit} digits", pos)
            pos += 1

        if pos >= end:
            self._fail(InvalidInt, "unterminated integer", pos)
        if pos == digits_start:
            self._fail(InvalidInt, "integer has no digits", pos)

        num = 0
        if significant is not None:
            try:
                num = int(data[significant:pos])
            except ValueError as exc:
                raise InvalidInt("integer too long to convert", significant) from exc

        if negative:
            if num == 0:
                self._fail(InvalidInt, "negative zero is not allowed", start + 1)
            num = -num

        if not self.config.int_in_range(num):
            self._fail(InvalidInt, f"integer does not fit in {self.config.int_bits} bits", start)

        pos += 1  # skip 'e'
        return BencodeInt(num), pos - start

    def parse_string(self, start: int) -> Parsed:
        """Parses <length>:<bytes>."""
        data = self.data
        end = len(data)
        pos = start

        # read length until ':'
        length = 0
        while pos < end and data[pos] != COLON:
            if data[pos] not in DIGITS:
                self._fail(InvalidStr, f"unexpected byte {bytes([data[pos]])!r} in string length", pos)
            length = length * 10 + data[pos] - ZERO
            if length > end:
                self._fail(InvalidStr, "string length exceeds the input", pos)
            pos += 1

        if pos >= end:
            self._fail(InvalidStr, "missing ':' after string length", pos)
        if pos == start:
            self._fail(InvalidStr, "missing string length", pos)
        pos += 1

        available = end - pos
        if available < length:
            self._fail(InvalidStr, f"string needs {length} bytes but only {available} remain", pos)

        value = BencodeString(data[pos:pos + length])
        return value, pos + length - start

    def parse_list(self, start: int) -> Parsed:
        """Parses l<value>*e."""
        data = self.data
        end = len(data)

        if start >= end or data[start] != LIST_START:
            self._fail(InvalidList, "list must start with 'l'", start)

        self._enter(start)
        items = BencodeList()
        pos = start + 1
        try:
            while pos < end and data[pos] != END:
                value, used = self._parse_value(pos)
                items.append(value)
                pos += used

            if pos >= end:
                self._fail(InvalidList, "unterminated list", pos)
        except BencodeDecodeError:
            items.release()
            raise
        finally:
            self.depth -= 1

        pos += 1  # skip 'e'
        return items, pos - start

    def parse_dict(self, start: int) -> Parsed:
        """Parses d(<string><value>)*e."""
        data = self.data
        end = len(data)

        if start >= end or data[start] != DICT_START:
            self._fail(InvalidDict, "dictionary must start with 'd'", start)

        self._enter(start)
        obj = BencodeDict()
        pos = start + 1
        try:
            while pos < end and data[pos] != END:
                # keys MUST be strings
                if data[pos] not in DIGITS:
                    self._fail(InvalidDict, "dictionary key must be a byte string", pos)
                key, used = self.parse_string(pos)
                key_pos = pos
                pos += used

                if pos >= end:
                    self._fail(InvalidDict, f"missing value for key {key.value!r}", pos)
                value, used = self._parse_value(pos)
                pos += used

                self._store(obj, key.value, value, key_pos)

            if pos >= end:
                self._fail(InvalidDict, "unterminated dictionary", pos)
        except BencodeDecodeError:
            obj.release()
            raise
        finally:
            self.depth -= 1

        pos += 1  # skip 'e'
        return obj, pos - start

    def _store(self, obj: BencodeDict, key: bytes, value: BencodeType, key_pos: int):
        previous = obj.get(key)
        if previous is None:
            obj.insert(key, value)
            return

        policy = self.config.duplicate_keys
        if policy == "error":
            value.release()
            self._fail(InvalidDict, f"duplicate key {key!r}", key_pos)
        if policy == "first":
            value.release()
            return

        logger.warning("Duplicate key %r at byte %d, keeping the last value", key, key_pos)
        previous.release()
        obj.insert(key, value)


def decode(data: bytes, start: int = 0, config: Optional[DecoderConfig] = None) -> Parsed:
    """
    Decodes the value that begins at start.
    Returns the value and how many bytes it occupied; trailing bytes are left alone.
    """
    return BencodeDecoder(data, config).decode(start)


def iter_decode(
    data: bytes, start: int = 0, config: Optional[DecoderConfig] = None
) -> Iterator[Tuple[BencodeType, int, int]]:
    """Yields (value, offset, consumed) for each value laid end to end in data."""
    decoder = BencodeDecoder(data, config)
    pos = start
    while pos < len(decoder.data):
        value, used = decoder.decode(pos)
        yield value, pos, used
        pos += used


def decode_all(data: bytes, config: Optional[DecoderConfig] = None) -> List[BencodeType]:
    """Decodes every root value in data. Nothing decoded is kept if one fails."""
    values = []
    try:
        for value, _, _ in iter_decode(data, config=config):
            values.append(value)
    except BencodeDecodeError:
        for value in values:
            value.release()
        raise
    return values
