"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Pure Python belt primitives from STB 34.101.31: the belt-block cipher, the
belt-compress function and the belt-hash digest built on top of it. Only what
the signature scheme needs is implemented.

References:
  [STB31] STB 34.101.31-2011 Information technology and security. Data
    encryption and integrity algorithms.

All 32-bit words are read and written little-endian, as is every multi-octet
value in the standard.
"""

import struct

from bign import KeyLengthError
from bign.util.encode import intToBytes


BLOCK_SIZE = 16
KEY_SIZE = 32
HASH_SIZE = 32

MASK32 = 0xFFFFFFFF

# H is the substitution table of [STB31] 6.1.2, row by row.
H = bytes.fromhex(
    """
    B1 94 BA C8 0A 08 F5 3B 36 6D 00 8E 58 4A 5D E4
    85 04 FA 9D 1B B6 C7 AC 25 2E 72 C2 02 FD CE 0D
    5B E3 D6 12 17 B9 61 81 FE 67 86 AD 71 6B 89 0B
    5C B0 C0 FF 33 C3 56 B8 35 C4 05 AE D8 E0 7F 99
    E1 2B DC 1A E2 82 57 EC 70 3F CC F0 95 EE 8D F1
    C1 AB 76 38 9F E6 78 CA F7 C6 F8 60 D5 BB 9C 4F
    F3 3C 65 7B 63 7C 30 6A DD 4E A7 79 9E B2 3D 31
    3E 98 B5 6E 27 D3 BC CF 59 1E 18 1F 4C 5A B7 93
    E9 DE E7 2C 8F 0C 0F A6 2D DB 49 F4 6F 73 96 47
    06 07 53 16 ED 24 7A 37 39 CB A3 83 03 A9 8B F6
    92 BD 9B 1C E5 D1 41 01 54 45 FB C9 5E 4D 0E F2
    68 20 80 AA 22 7D 64 2F 26 87 F9 34 90 40 55 11
    BE 32 97 13 43 FC 9A 48 A0 2A 88 5F 19 4B 09 A1
    7E CD A4 D0 15 44 AF 8C A5 84 50 BF 66 D2 E8 8A
    A2 D7 46 52 42 A8 DF B3 69 74 C5 51 EB 23 29 21
    D4 EF D9 B4 3A 62 28 75 91 14 10 EA 77 6C DA 1D
    """
)

# The initial belt-hash state of [STB31] 6.9.3.
HASH_IV = bytes.fromhex(
    "B194BAC80A08F53B366D008E584A5DE48504FA9D1BB6C7AC252E72C202FDCE0D"
)

# DER encoded object identifier of belt-hash, 1.2.112.0.2.0.34.101.31.81.
BELT_HASH_OID = bytes.fromhex("06092A7000020022651F51")


def _rotHi(u, r):
    return ((u << r) | (u >> (32 - r))) & MASK32


def _g(u, r):
    """G_r: substitute each octet of the word through H, then rotate."""
    u = (
        H[u & 0xFF]
        | H[(u >> 8) & 0xFF] << 8
        | H[(u >> 16) & 0xFF] << 16
        | H[u >> 24] << 24
    )
    return _rotHi(u, r)


def _plus(*words):
    return sum(words) & MASK32


def _minus(u, v):
    return (u - v) & MASK32


def beltBlock(x, key):
    """
    Encrypt a single 16-byte block with belt-block.

    Args:
        x (bytes-like): The 16-byte plaintext block.
        key (bytes-like): The 32-byte key.

    Returns:
        bytes: The 16-byte ciphertext block.

    Raises:
        KeyLengthError if the block or key have the wrong size.
    """
    if len(x) != BLOCK_SIZE or len(key) != KEY_SIZE:
        raise KeyLengthError(
            f"belt-block needs a {BLOCK_SIZE}-byte block and {KEY_SIZE}-byte key,"
            f" got {len(x)} and {len(key)}"
        )
    a, b, c, d = struct.unpack("<4I", bytes(x))
    k = struct.unpack("<8I", bytes(key))
    for i in range(1, 9):
        # Round keys K_{7i-6} .. K_{7i}, taken cyclically from the 8 key words.
        j = 7 * i - 7
        b ^= _g(_plus(a, k[j % 8]), 5)
        c ^= _g(_plus(d, k[(j + 1) % 8]), 21)
        a = _minus(a, _g(_plus(b, k[(j + 2) % 8]), 13))
        e = _g(_plus(b, c, k[(j + 3) % 8]), 21) ^ i
        b = _plus(b, e)
        c = _minus(c, e)
        d = _plus(d, _g(_plus(c, k[(j + 4) % 8]), 13))
        b ^= _g(_plus(a, k[(j + 5) % 8]), 21)
        c ^= _g(_plus(d, k[(j + 6) % 8]), 5)
        a, b = b, a
        c, d = d, c
        b, c = c, b
    return struct.pack("<4I", b, d, a, c)


def _xor(a, b):
    return bytes(u ^ v for u, v in zip(a, b))


def beltCompress(x):
    """
    belt-compress maps 64 bytes X1 || X2 || X3 || X4 onto a 16-byte S and a
    32-byte Y:

        S = belt-block(X3 ⊕ X4, X1 || X2) ⊕ X3 ⊕ X4
        Y1 = belt-block(X1, S || X4) ⊕ X1
        Y2 = belt-block(X2, (S ⊕ 1^128) || X3) ⊕ X2

    Args:
        x (bytes-like): 64 input bytes.

    Returns:
        tuple(bytes, bytes): S and Y = Y1 || Y2.
    """
    if len(x) != 4 * BLOCK_SIZE:
        raise KeyLengthError(f"belt-compress needs 64 bytes, got {len(x)}")
    x = bytes(x)
    x1, x2, x3, x4 = (x[i : i + BLOCK_SIZE] for i in range(0, 64, BLOCK_SIZE))
    x34 = _xor(x3, x4)
    s = _xor(beltBlock(x34, x1 + x2), x34)
    y1 = _xor(beltBlock(x1, s + x4), x1)
    y2 = _xor(beltBlock(x2, _xor(s, b"\xff" * BLOCK_SIZE) + x3), x2)
    return s, y1 + y2


def beltHash(data):
    """
    belt-hash of the data. The message is processed in 32-byte blocks, the
    last one zero-padded, chaining the 32-byte state h through belt-compress
    and accumulating the S outputs. The final compression takes the 128-bit
    message bit length, the accumulator and h.

    Args:
        data (bytes-like): The message.

    Returns:
        bytes: The 32-byte digest.
    """
    data = bytes(data)
    h = HASH_IV
    s = bytes(BLOCK_SIZE)
    for i in range(0, len(data), HASH_SIZE):
        chunk = data[i : i + HASH_SIZE]
        chunk += bytes(HASH_SIZE - len(chunk))
        t, h = beltCompress(chunk + h)
        s = _xor(s, t)
    bitLen = bytes(intToBytes(8 * len(data), BLOCK_SIZE))
    _, y = beltCompress(bitLen + s + h)
    return y
