import json

import pytest

from bencode import decode, render, RenderMode
from bencode.config import DEFAULT_MAX_DEPTH
from bencode.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_int():
    assert render(BencodeInt(123)) == "123"
    assert render(BencodeInt(-7), RenderMode.JSON) == "-7"


def test_string():
    s = BencodeString(b"Hello")
    assert render(s, RenderMode.PLAIN) == "Hello"
    assert render(s, RenderMode.JSON) == "\"Hello\""


def test_string_modes_accept_names():
    s = BencodeString(b"Hello")
    assert render(s, "plain") == "Hello"
    assert render(s, "json") == "\"Hello\""
    with pytest.raises(ValueError):
        render(s, "xml")


def test_json_escapes_strings():
    s = BencodeString(b'say "hi"\n')
    assert render(s, RenderMode.JSON) == '"say \\"hi\\"\\n"'
    assert render(s) == 'say "hi"\n'


def test_non_utf8_bytes_survive():
    s = BencodeString(b"\xff\xfe")
    assert render(s) == "\xff\xfe"


def test_list():
    print("Testing list rendering...")
    obj, _ = decode(b"l3:one3:two5:threee")
    out = render(obj)
    print("Rendered:", out)
    assert out == "[one,two,three]"
    assert render(obj, RenderMode.JSON) == '["one","two","three"]'
    assert render(BencodeList()) == "[]"


def test_dict():
    print("Testing dictionary rendering...")
    obj, _ = decode(b"d3:cow3:moo4:spam4:eggse")
    out = render(obj)
    print("Rendered:", out)
    assert out == "{cow:moo,spam:eggs}"
    assert render(obj, RenderMode.JSON) == '{"cow":"moo","spam":"eggs"}'
    assert render(BencodeDict()) == "{}"


def test_nested_json_is_parseable():
    obj, _ = decode(b"d4:listli1ei-2ee4:name4:spam3:subd1:x0:ee")
    out = render(obj, RenderMode.JSON)
    assert json.loads(out) == {"list": [1, -2], "name": "spam", "sub": {"x": ""}}


def test_render_does_not_mutate():
    obj, _ = decode(b"d1:al1:bee")
    before = obj.to_python()
    render(obj)
    render(obj, RenderMode.JSON)
    assert obj.to_python() == before


def test_render_rejects_bad_input():
    with pytest.raises(TypeError):
        render(b"spam")

    obj, _ = decode(b"li1ee")
    obj.release()
    with pytest.raises(ValueError):
        render(obj)


def test_render_at_default_max_depth():
    depth = DEFAULT_MAX_DEPTH
    obj, _ = decode(b"l" * depth + b"e" * depth)
    expected = "[" * depth + "]" * depth
    assert render(obj, RenderMode.PLAIN) == expected
    assert render(obj, RenderMode.JSON) == expected

    obj, _ = decode(b"d1:a" * depth + b"i1e" + b"e" * depth)
    out = render(obj, RenderMode.JSON)
    assert out.startswith('{"a":' * 3)
    assert out.endswith("1" + "}" * depth)


def test_render_far_deeper_than_recursion_limit():
    node = BencodeList([BencodeString(b"x")])
    for _ in range(2000):
        node = BencodeList([node, BencodeInt(0)])
    out = render(node)
    assert out.startswith("[[[")
    assert out.count("[") == 2001
    assert out.count(",0]") == 2000
