"""
Text rendering of decoded Bencode trees.

This is not a Bencode re-encoder: it turns a tree into a readable string,
either a plain debug form or a JSON form.
"""
import json
from enum import Enum

from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType


class RenderMode(Enum):
    """Output styles for render()."""
    PLAIN = "plain"
    JSON = "json"


def render(obj: BencodeType, mode=RenderMode.PLAIN) -> str:
    """
    Renders a Bencode value as text.

    PLAIN writes strings as-is and is meant for eyeballing, not parsing.
    JSON quotes and escapes every string, key included.

    Works from an explicit stack, so any tree the decoder can build renders
    without touching the interpreter's recursion limit.
    """
    mode = RenderMode(mode)
    if not isinstance(obj, BencodeType):
        raise TypeError(f"Cannot render object of type {type(obj)}")

    out = []
    # pending text fragments and values, last one first
    stack = [obj]

    while stack:
        item = stack.pop()

        if isinstance(item, str):
            out.append(item)
            continue

        if not isinstance(item, BencodeType):
            raise TypeError(f"Cannot render object of type {type(item)}")
        if item.released:
            raise ValueError(f"Cannot render released {type(item).__name__}")

        if isinstance(item, BencodeInt):
            out.append(render_int(item.value))

        elif isinstance(item, BencodeString):
            out.append(render_bytes(item.value, mode))

        elif isinstance(item, BencodeList):
            stack.append("]")
            push_list(stack, item.value)
            stack.append("[")

        elif isinstance(item, BencodeDict):
            stack.append("}")
            push_dict(stack, item.value, mode)
            stack.append("{")

        else:
            raise TypeError(f"Cannot render object of type {type(item)}")

    return "".join(out)


# ------------------------------------------------------------
#   Rendering primitives
# ------------------------------------------------------------

def bytes_to_str(b: bytes) -> str:
    """Decodes as UTF-8, falling back to Latin-1 so every byte survives."""
    try:
        return b.decode("utf-8")
    except UnicodeDecodeError:
        return b.decode("latin-1")


def render_int(n: int) -> str:
    """Renders an integer (e.g., -42)."""
    return str(n)


def render_bytes(b: bytes, mode: RenderMode) -> str:
    """Renders a byte string (e.g., spam, or "spam" in JSON mode)."""
    text = bytes_to_str(b)
    if mode is RenderMode.JSON:
        return json.dumps(text)
    return text


def push_list(stack: list, lst: list):
    """Queues list items comma-separated (e.g., [spam,3])."""
    for index in range(len(lst) - 1, -1, -1):
        stack.append(lst[index])
        if index:
            stack.append(",")


def push_dict(stack: list, d: dict, mode: RenderMode):
    """Queues key:value pairs in insertion order (e.g., {cow:moo})."""
    pairs = list(d.items())
    for index in range(len(pairs) - 1, -1, -1):
        key, value = pairs[index]
        stack.append(value)
        stack.append(render_bytes(key, mode) + ":")
        if index:
            stack.append(",")
