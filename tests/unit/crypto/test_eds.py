"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import hashlib
import random

import pytest

from bign import KeyLengthError, ParameterRangeError
from bign.crypto import eds, keys
from bign.crypto.belt import BELT_HASH_OID
from bign.crypto.ec.curve import Curve
from bign.crypto.ec.point import INFINITY, Point
from bign.util.encode import intFromHex


def h2b(hx):
    return bytes.fromhex("".join(hx.split()))


# Known answers of STB 34.101.45, appendix G.
D = intFromHex(
    "1F66B5B8 4B733967 4533F032 9C74F218 34281FED 0732429E 0C79235F C273E269"
)
Q = Point(
    intFromHex(
        "BD1A5650 179D79E0 3FCEE49D 4C2BD5DD F54CE46D 0CF11E4F F87BF7A8 90857FD0"
    ),
    intFromHex(
        "7AC6A603 61E8C817 3491686D 461B2826 190C2EDA 5909054A 9AB84D2A B9D99A90"
    ),
)

SIGN_X = h2b("B194BAC8 0A08F53B 366D008E 58")
SIGN_H = h2b(
    "ABEF9725 D4C5A835 97A367D1 4494CC25 42F20F65 9DDFECC9 61A3EC55 0CBA8C75"
)
SIGN_K = intFromHex(
    "4C0E74B2 CD5811AD 21F23DE7 E0FA742C 3ED6EC48 3C461CE1 5C33A77A A308B7D2"
)
SIGN_S = h2b(
    """
    E36B7F03 77AE4C52 4027C387 FADF1B20 CE72F153 0B71F2B5 FD3A8C58 4FE2E1AE
    D20082E3 0C8AF650 11F4FB54 649DFD3D
    """
)

VERIFY_H = h2b(
    "9D02EE44 6FB6A29F E5C982D4 B13AF9D3 E90861BC 4CEF27CF 306BFB0B 174A154A"
)
VERIFY_S = h2b(
    """
    47A63C8B 9C936E94 B5FAB3D9 CBD78366 290F3210 E163EEC8 DB4E921E 8479D413
    8F112CC2 3E6DCE65 EC5FF21D F4231C28
    """
)


def flipLast(b, value):
    return b[:-1] + bytes([value])


def test_oids():
    assert eds.oidForL(128) == h2b("0609608648016503040201")
    assert eds.oidForL(192) == h2b("0609608648016503040202")
    assert eds.oidForL(256) == h2b("0609608648016503040203")
    with pytest.raises(ParameterRangeError):
        eds.oidForL(100)


def test_messageDigest():
    assert eds.messageDigest(b"abc", 128) == hashlib.sha256(b"abc").digest()
    assert eds.messageDigest(b"abc", 192) == hashlib.sha384(b"abc").digest()
    assert eds.messageDigest(b"abc", 256) == hashlib.sha512(b"abc").digest()
    with pytest.raises(ParameterRangeError):
        eds.messageDigest(b"abc", 64)


def test_sign_standard(standardCurve):
    sig = eds.sign(standardCurve, SIGN_X, D, oid=BELT_HASH_OID, H=SIGN_H, k=SIGN_K)
    assert sig == SIGN_S
    assert len(sig) == 48
    assert eds.verify(standardCurve, SIGN_X, sig, Q, oid=BELT_HASH_OID, H=SIGN_H)


def test_sign_deterministic(standardCurve):
    # Without k the one-time key is derived from d and H.
    c = standardCurve
    sig = eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=SIGN_H)
    assert sig == eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=SIGN_H)
    assert sig != eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=SIGN_H, t=b"t")
    assert eds.verify(c, SIGN_X, sig, Q, oid=BELT_HASH_OID, H=SIGN_H)


def test_verify_standard(standardCurve):
    c = standardCurve
    assert eds.verify(c, b"", VERIFY_S, Q, oid=BELT_HASH_OID, H=VERIFY_H)
    sBad = flipLast(VERIFY_S, 0x27)
    hBad = flipLast(VERIFY_H, 0x4B)
    assert not eds.verify(c, b"", sBad, Q, oid=BELT_HASH_OID, H=VERIFY_H)
    assert not eds.verify(c, b"", VERIFY_S, Q, oid=BELT_HASH_OID, H=hBad)
    assert not eds.verify(c, b"", sBad, Q, oid=BELT_HASH_OID, H=hBad)
    # The identifier is part of the challenge.
    assert not eds.verify(c, b"", VERIFY_S, Q, H=VERIFY_H)


def test_round_trip(standardCurve, randBytes):
    c = standardCurve
    for method in ("binary", "naf", "chain", "window", "sliding", "jacobian"):
        d, pub = keys.generateKeyPair(c)
        msg = randBytes(0, 128)
        sig = eds.sign(c, msg, d, method=method)
        assert len(sig) == 3 * c.l // 8
        assert eds.verify(c, msg, sig, pub, method=method)
        assert eds.verify(c, bytearray(msg), bytearray(sig), pub)


def test_tamper(standardCurve):
    c = standardCurve
    d, pub = keys.generateKeyPair(c)
    msg = bytes(random.getrandbits(8) for _ in range(128))
    sig = eds.sign(c, msg, d)
    assert eds.verify(c, msg, sig, pub)

    for i in (0, 15, 16, 47):
        bad = bytearray(sig)
        bad[i] ^= 0x01
        assert not eds.verify(c, msg, bytes(bad), pub)

    badMsg = bytearray(msg)
    badMsg[2] ^= 0b01000
    assert not eds.verify(c, bytes(badMsg), sig, pub)

    _, otherPub = keys.generateKeyPair(c)
    assert not eds.verify(c, msg, sig, otherPub)

    # Single bit flips of the public key coordinates.
    for bit in (0, 1, 100, 255):
        assert not eds.verify(c, msg, sig, Point(pub.x ^ (1 << bit), pub.y))
        assert not eds.verify(c, msg, sig, Point(pub.x, pub.y ^ (1 << bit)))


def test_verify_rejects(standardCurve):
    c = standardCurve
    d, pub = keys.generateKeyPair(c)
    msg = b"rejects"
    sig = eds.sign(c, msg, d)
    # Wrong lengths.
    assert not eds.verify(c, msg, sig[:-1], pub)
    assert not eds.verify(c, msg, sig + b"\x00", pub)
    assert not eds.verify(c, msg, b"", pub)
    # S1 out of range.
    big = (c.Q).to_bytes(32, "little")
    assert not eds.verify(c, msg, sig[:16] + big, pub)
    assert not eds.verify(c, msg, sig[:16] + b"\xff" * 32, pub)
    # Invalid public keys.
    assert not eds.verify(c, msg, sig, Point(pub.x + 1, pub.y + 1))
    assert not eds.verify(c, msg, sig, INFINITY)
    assert not eds.verify(c, msg, sig, Point(-pub.x, pub.y))


def test_digest_length(standardCurve):
    c = standardCurve
    for H in (SIGN_H[:-1], SIGN_H + b"\x00", b"", hashlib.sha512(SIGN_X).digest()):
        with pytest.raises(KeyLengthError):
            eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=H, k=SIGN_K)
        with pytest.raises(KeyLengthError):
            eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=H)
    sig = eds.sign(c, SIGN_X, D, oid=BELT_HASH_OID, H=SIGN_H, k=SIGN_K)
    assert not eds.verify(c, SIGN_X, sig, Q, oid=BELT_HASH_OID, H=SIGN_H + b"\x00")
    assert not eds.verify(c, SIGN_X, sig, Q, oid=BELT_HASH_OID, H=SIGN_H[:-1])


def test_sign_ranges(standardCurve):
    c = standardCurve
    for d in (0, c.Q, -5):
        with pytest.raises(ParameterRangeError):
            eds.sign(c, b"msg", d)
    for k in (0, c.Q):
        with pytest.raises(ParameterRangeError):
            eds.sign(c, b"msg", D, k=k)


def test_unsupported_level():
    toy = Curve(P=97, A=2, B=3, Q=5, G=Point(3, 6))
    with pytest.raises(ParameterRangeError):
        eds.sign(toy, b"msg", 2)
    with pytest.raises(ParameterRangeError):
        eds.verify(toy, b"msg", b"\x00" * 3, toy.G)
