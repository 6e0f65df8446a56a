"""
Data structures for representing Bencoded types.

A decoded tree is made of these four node types. Containers own their
children exclusively; string payloads are always copied out of the input
buffer, so a tree never depends on the lifetime of the data it came from.
"""
__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "release",
]


class BencodeType:
    """Base class for all Bencode data types."""

    released = False

    def release(self):
        """
        Releases this value and, for containers, every value below it.
        Meant to be called once on the root; further calls do nothing.
        """
        self.released = True

    def to_python(self):
        """Returns the payload as plain Python objects."""
        return self.value

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    __hash__ = None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self.value = value

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    def __init__(self, value: list = None):
        if value is None:
            value = []
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            _check_item(item)
        self.value = list(value)

    def append(self, item: BencodeType):
        _check_item(item)
        self.value.append(item)

    def release(self):
        if self.released:
            return
        for item in self.value:
            item.release()
        self.value.clear()
        self.released = True

    def to_python(self):
        return [item.to_python() for item in self.value]

    def __len__(self):
        return len(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __iter__(self):
        return iter(self.value)

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """Represents a Bencoded dictionary."""
    def __init__(self, value: dict = None):
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            _check_item(v)
        self.value = {bytes(k): v for k, v in value.items()}

    def insert(self, key: bytes, item: BencodeType):
        """Stores item under key, replacing whatever was there."""
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError("BencodeDict keys must be bytes.")
        _check_item(item)
        self.value[bytes(key)] = item

    def get(self, key, default=None):
        return self.value.get(_key(key), default)

    def keys(self):
        return self.value.keys()

    def items(self):
        return self.value.items()

    def release(self):
        if self.released:
            return
        for item in self.value.values():
            item.release()
        self.value.clear()
        self.released = True

    def to_python(self):
        return {k: v.to_python() for k, v in self.value.items()}

    def __contains__(self, key):
        return _key(key) in self.value

    def __getitem__(self, key):
        return self.value[_key(key)]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __repr__(self):
        return f"BencodeDict({self.value!r})"


def release(value: BencodeType):
    """Releases a decoded tree. Call once on the root when done with it."""
    if not isinstance(value, BencodeType):
        raise TypeError(f"Cannot release object of type {type(value)}")
    value.release()


def _check_item(item):
    if not isinstance(item, BencodeType):
        raise TypeError(f"Bencode containers hold Bencode values, got {type(item)}")


def _key(key):
    return key.encode() if isinstance(key, str) else key
