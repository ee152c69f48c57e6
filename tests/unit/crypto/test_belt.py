"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import pytest

from bign import KeyLengthError
from bign.crypto import belt


def h2b(hx):
    return bytes.fromhex("".join(hx.split()))


# Known answers of STB 34.101.31, appendix A.
X = h2b(
    """
    B194BAC8 0A08F53B 366D008E 584A5DE4 8504FA9D 1BB6C7AC 252E72C2 02FDCE0D
    5BE3D612 17B96181 FE6786AD 716B890B 5CB0C0FF 33C356B8 35C405AE D8E07F99
    """
)


def test_sbox():
    assert len(belt.H) == 256
    # H is a permutation of the octets.
    assert sorted(belt.H) == list(range(256))
    assert belt.H[0] == 0xB1
    assert belt.H[255] == 0x1D


def test_block():
    key = h2b(
        "E9DEE72C 8F0C0FA6 2DDB49F4 6F739647 06075316 ED247A37 39CBA383 03A98BF6"
    )
    y = belt.beltBlock(X[:16], key)
    assert y == h2b("69CCA1C9 3557C9E3 D66BC3E0 FA88FA6E")
    # bytearray input is accepted.
    assert belt.beltBlock(bytearray(X[:16]), bytearray(key)) == y

    with pytest.raises(KeyLengthError):
        belt.beltBlock(X[:15], key)
    with pytest.raises(KeyLengthError):
        belt.beltBlock(X[:16], key[:16])


def test_compress():
    s, y = belt.beltCompress(X)
    assert s == h2b("46FE7425 C9B181EB 41DFEE3E 72163D5A")
    assert y == h2b(
        "ED2F5481 D593F40D 87FCE37D 6BC1A2E1 B7D1A2CC 975C82D3 C0497488 C90D99D8"
    )
    with pytest.raises(KeyLengthError):
        belt.beltCompress(X[:63])


def test_hash():
    tests = [
        (
            X[:13],
            "ABEF9725 D4C5A835 97A367D1 4494CC25 42F20F65 9DDFECC9 61A3EC55 0CBA8C75",
        ),
        (
            X[:32],
            "749E4C36 53AECE5E 48DB4761 227742EB 6DBE13F4 A80F7BEF F1A9CF8D 10EE7786",
        ),
        (
            X[:48],
            "9D02EE44 6FB6A29F E5C982D4 B13AF9D3 E90861BC 4CEF27CF 306BFB0B 174A154A",
        ),
    ]
    for msg, digest in tests:
        assert belt.beltHash(msg) == h2b(digest)


def test_hash_lengths(randBytes):
    assert len(belt.beltHash(b"")) == belt.HASH_SIZE
    for _ in range(5):
        msg = randBytes(0, 100)
        assert len(belt.beltHash(msg)) == belt.HASH_SIZE
    # The bit length is part of the digest, so zero padding changes it.
    assert belt.beltHash(b"\x01") != belt.beltHash(b"\x01\x00")
