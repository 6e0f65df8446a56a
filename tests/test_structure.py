import pytest

from bencode import decode, release
from bencode.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_constructors_validate_payload():
    with pytest.raises(TypeError):
        BencodeInt("3")
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(TypeError):
        BencodeString("spam")
    with pytest.raises(TypeError):
        BencodeList((BencodeInt(1),))
    with pytest.raises(TypeError):
        BencodeList([1])
    with pytest.raises(TypeError):
        BencodeDict({"cow": BencodeString(b"moo")})


def test_string_copies_its_payload():
    buf = bytearray(b"spam")
    s = BencodeString(buf)
    buf[0:1] = b"S"
    assert s.value == b"spam"
    assert isinstance(s.value, bytes)


def test_equality():
    assert BencodeInt(3) == BencodeInt(3)
    assert BencodeInt(3) != BencodeInt(4)
    assert BencodeInt(3) != BencodeString(b"3")
    assert BencodeList([BencodeString(b"spam"), BencodeInt(3)]) == decode(b"l4:spami3ee")[0]


def test_dict_lookup_accepts_str_keys():
    d = BencodeDict({b"cow": BencodeString(b"moo")})
    assert d["cow"] == BencodeString(b"moo")
    assert "cow" in d
    assert b"pig" not in d
    assert d.get("pig") is None


def test_containers_build_in_place():
    lst = BencodeList()
    lst.append(BencodeInt(1))
    lst.append(BencodeString(b"two"))
    assert lst.to_python() == [1, b"two"]
    with pytest.raises(TypeError):
        lst.append(3)

    d = BencodeDict()
    d.insert(b"a", BencodeInt(1))
    d.insert(b"a", BencodeInt(2))
    assert d.to_python() == {b"a": 2}
    with pytest.raises(TypeError):
        d.insert("a", BencodeInt(3))


def test_repr():
    print(repr(decode(b"d4:listli1eee")[0]))
    assert repr(BencodeInt(-3)) == "BencodeInt(-3)"
    assert repr(BencodeString(b"spam")) == "BencodeString(b'spam')"
    assert repr(BencodeList([BencodeInt(1)])) == "BencodeList([BencodeInt(1)])"


def test_release_walks_the_whole_tree():
    root, _ = decode(b"d4:listli1el1:aee3:subd1:xi2eee")
    inner_list = root[b"list"]
    nested = inner_list[1]
    sub = root[b"sub"]
    leaf = sub[b"x"]

    release(root)

    for node in (root, inner_list, nested, sub, leaf):
        assert node.released
    assert len(root) == 0
    assert len(inner_list) == 0
    assert len(sub) == 0


def test_release_twice_is_harmless():
    root, _ = decode(b"ll1:aee")
    root.release()
    root.release()
    assert root.released


def test_release_rejects_foreign_objects():
    with pytest.raises(TypeError):
        release([1, 2])


def test_list_does_not_share_callers_list():
    items = [BencodeInt(1)]
    lst = BencodeList(items)
    items.append(BencodeInt(2))
    assert len(lst) == 1

    lst.release()
    assert len(items) == 2
