from __future__ import annotations

import pytest

from chainsim.abi import (ZERO_ADDRESS, AbiError, DispatchTable, ErrorRegistry,
                          decode_values, encode_call, encode_values, external,
                          selector, split_call, split_signature)
from chainsim.abi.types import ABITypeError, ValidationError
from chainsim.errors import AbiDecodeError

ADDR = bytes.fromhex("1111111111111111111111111111111111111111")


# ----------------------------- selectors ------------------------------------


@pytest.mark.parametrize(
    "sig, hexsel",
    [
        ("transfer(address,uint256)", "a9059cbb"),
        ("balanceOf(address)", "70a08231"),
        ("approve(address,uint256)", "095ea7b3"),
        ("transferFrom(address,address,uint256)", "23b872dd"),
        ("totalSupply()", "18160ddd"),
        ("allowance(address,address)", "dd62ed3e"),
        ("decimals()", "313ce567"),
        ("Error(string)", "08c379a0"),
        ("Panic(uint256)", "4e487b71"),
    ],
)
def test_known_selectors(sig, hexsel):
    assert selector(sig).hex() == hexsel


def test_selector_canonicalizes_uint_alias_and_whitespace():
    assert selector("transfer(address, uint)") == selector("transfer(address,uint256)")


def test_split_signature():
    assert split_signature("f()") == ("f", ())
    assert split_signature("g(address,uint8)") == ("g", ("address", "uint8"))
    with pytest.raises(ABITypeError):
        split_signature("nope")
    with pytest.raises(ABITypeError):
        split_signature("f(int256)")


# ----------------------------- encoding -------------------------------------


def test_address_is_right_aligned_in_word():
    data = encode_call("balanceOf(address)", [ADDR])
    assert data[:4].hex() == "70a08231"
    assert data[4:16] == b"\x00" * 12
    assert data[16:36] == ADDR
    assert len(data) == 36


def test_transfer_call_layout():
    data = encode_call("transfer(address,uint256)", [ADDR, 258])
    assert len(data) == 4 + 64
    assert data[36:68] == (258).to_bytes(32, "big")


def test_bool_and_uint_words():
    out = encode_values(["bool", "uint8"], [True, 255])
    assert out[31] == 1 and out[63] == 255
    with pytest.raises(ValidationError):
        encode_values(["uint8"], [256])
    with pytest.raises(ValidationError):
        encode_values(["uint256"], [-1])
    with pytest.raises(ValidationError):
        encode_values(["uint256"], [True])


def test_string_head_tail_layout():
    out = encode_values(["string", "uint256"], ["Test Token", 7])
    # head: offset word, then the static uint
    assert int.from_bytes(out[0:32], "big") == 64
    assert int.from_bytes(out[32:64], "big") == 7
    assert int.from_bytes(out[64:96], "big") == len("Test Token")
    assert out[96:106] == b"Test Token"
    assert len(out) == 128
    assert decode_values(["string", "uint256"], out) == ("Test Token", 7)


def test_hex_address_accepted():
    assert encode_values(["address"], ["0x" + ADDR.hex()]) == encode_values(["address"], [ADDR])
    with pytest.raises(ValidationError):
        encode_values(["address"], [b"\x01" * 19])


# ----------------------------- decoding -------------------------------------


def test_decode_rejects_short_data():
    with pytest.raises(AbiDecodeError):
        decode_values(["uint256"], b"\x00" * 31)


def test_decode_rejects_dirty_address_padding():
    word = b"\x01" + b"\x00" * 11 + ADDR
    with pytest.raises(AbiDecodeError):
        decode_values(["address"], word)
    assert decode_values(["address"], word, strict=False) == (ADDR,)


def test_decode_rejects_bad_bool_and_wide_uint():
    with pytest.raises(AbiDecodeError):
        decode_values(["bool"], (2).to_bytes(32, "big"))
    with pytest.raises(AbiDecodeError):
        decode_values(["uint8"], (256).to_bytes(32, "big"))


def test_decode_ignores_trailing_bytes():
    data = (5).to_bytes(32, "big") + b"\xff" * 7
    assert decode_values(["uint256"], data) == (5,)


def test_split_call():
    sel, body = split_call(b"\x01\x02\x03\x04rest")
    assert sel == b"\x01\x02\x03\x04" and body == b"rest"
    with pytest.raises(AbiDecodeError):
        split_call(b"\x01\x02")


# ----------------------------- errors ---------------------------------------


class _Short(AbiError):
    SIGNATURE = "Short(address,uint256)"
    FIELDS = ("who", "amount")


def test_abi_error_roundtrip_and_equality():
    err = _Short(ADDR, 9)
    data = err.encode()
    assert data[:4] == selector("Short(address,uint256)")
    assert _Short.decode(data) == err
    assert err != _Short(ADDR, 10)
    assert str(err) == f"Short(who=0x{ADDR.hex()}, amount=9)"
    assert err.to_dict() == {"error": "Short", "who": "0x" + ADDR.hex(), "amount": 9}


def test_abi_error_field_validation():
    with pytest.raises(TypeError):
        _Short(ADDR)
    with pytest.raises(TypeError):
        _Short(ADDR, 1, 2)
    with pytest.raises(TypeError):
        _Short(ADDR, amount=1, bogus=2)


def test_registry_decodes_known_and_ignores_unknown():
    reg = ErrorRegistry()
    reg.register(_Short)
    assert reg.decode(_Short(ZERO_ADDRESS, 1).encode()) == _Short(ZERO_ADDRESS, 1)
    assert reg.decode(b"\xde\xad\xbe\xef") is None
    # known selector, truncated args
    assert reg.decode(_Short(ZERO_ADDRESS, 1).encode()[:10]) is None
    assert _Short in reg and len(reg) == 1


def test_registry_rejects_selector_collision():
    class _Other(AbiError):
        SIGNATURE = "Short(address,uint256)"
        FIELDS = ("a", "b")

    reg = ErrorRegistry()
    reg.register(_Short)
    with pytest.raises(ValueError):
        reg.register(_Other)


# ----------------------------- dispatch -------------------------------------


def test_dispatch_table_collects_marked_functions(make_contract):
    @external("get()", returns=("uint256",))
    def get() -> int:
        return 1

    @external("put(uint256)", caller=True, payable=True)
    def put(caller: bytes, v: int) -> None:
        return None

    def helper() -> None:
        return None

    table = DispatchTable.from_module(make_contract("t", get=get, put=put, helper=helper))
    assert len(table) == 2
    m = table.lookup(selector("put(uint256)"))
    assert m is not None and m.caller and m.payable
    assert table.lookup(b"\x00\x00\x00\x00") is None
    assert {d["name"] for d in table.describe()} == {"get", "put"}


def test_dispatch_table_rejects_duplicate_selector(make_contract):
    @external("f()")
    def a() -> None:
        return None

    @external("f()")
    def b() -> None:
        return None

    with pytest.raises(ValueError):
        DispatchTable.from_module(make_contract("dup", a=a, b=b))


def test_encode_result_multiple_returns():
    @external("pair()", returns=("uint256", "bool"))
    def pair():
        return 3, True

    m = pair.__abi_external__
    assert decode_values(["uint256", "bool"], m.encode_result(pair())) == (3, True)
