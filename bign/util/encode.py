"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Little-endian byte encodings. STB 34.101 writes every number as an octet
string with the least significant octet first, so unlike most network code
the fixed-width encodings here pad and truncate on the right.
"""

from bign import KeyLengthError


def intToBytes(i, length=None):
    """
    Encodes a non-negative integer as little-endian bytes.

    Args:
        i (int): The integer.
        length (int): optional. If provided, the encoding is zero-padded or
            truncated on the right to exactly this many bytes.

    Returns:
        bytearray: The encoded integer.
    """
    if i < 0:
        raise ValueError(f"cannot encode negative integer {i}")
    b = bytearray(i.to_bytes(max(1, (i.bit_length() + 7) // 8), "little"))
    if length is None:
        return b
    return fitBytes(b, length)


def intFromBytes(b):
    """
    Decodes an unsigned little-endian integer.

    Args:
        b (bytes-like): The encoded integer.

    Returns:
        int: The decoded integer.
    """
    return int.from_bytes(b, "little")


def intFromHex(hx):
    """
    Parse a hex string in the octet order used by the standard tables, which
    is little-endian. Whitespace is ignored, so tables can be pasted as
    they are printed, in groups of four octets.

    Args:
        hx (str): The hex string.

    Returns:
        int: The decoded integer.
    """
    return intFromBytes(bytes.fromhex("".join(hx.split())))


def fitBytes(b, length):
    """
    Fit the bytes to exactly length bytes, appending zeros or dropping the
    trailing bytes as needed.

    Args:
        b (bytes-like): The bytes.
        length (int): The wanted length.

    Returns:
        bytearray: A new bytearray of the given length.
    """
    b = bytearray(b)
    if len(b) < length:
        return b + bytearray(length - len(b))
    return b[:length]


def xorBytes(a, b):
    """
    XOR two equal-length byte strings.

    Args:
        a (bytes-like): The first operand.
        b (bytes-like): The second operand.

    Returns:
        bytearray: a ⊕ b.
    """
    if len(a) != len(b):
        raise KeyLengthError(f"xor of unequal lengths {len(a)} and {len(b)}")
    return bytearray(x ^ y for x, y in zip(a, b))


def decodeBA(b, copy=False):
    """
    Decode into a bytearray.

    Args:
        b (str, bytes-like, ByteArray, int, list(int)): The value to decode to
            a bytearray. Strings are interpreted as hexadecimal. Integers are
            minimally encoded as little-endian unsigned integers.

    Returns:
        bytearray: The decoded bytes.
    """
    if isinstance(b, ByteArray):
        return bytearray(b.b) if copy else b.b
    if isinstance(b, bytearray):
        return bytearray(b) if copy else b
    if isinstance(b, bytes):
        return bytearray(b)
    if isinstance(b, int):
        return intToBytes(b)
    if isinstance(b, str):
        return bytearray.fromhex("".join(b.split()))
    if hasattr(b, "__iter__"):
        return bytearray(b)
    raise TypeError("decodeBA: unknown type %s" % type(b))


class ByteArray:
    """
    ByteArray is a bytearray manager for little-endian fixed-width values.
    Since bytearrays are mutable, ByteArray can zero the internal value
    without relying on garbage collection, which is how transient secrets are
    wiped. An integer argument is encoded little-endian with the shortest
    representation. To get a zero-padded ByteArray of exactly n bytes, use the
    `length` keyword argument; longer input is truncated on the right.
    """

    def __init__(self, b=b"", copy=True, length=None):
        """
        Set copy to False if you want to share the memory with another
        bytearray/ByteArray. If the type of b is not bytearray or ByteArray,
        copy has no effect.
        """
        if length is not None:
            self.b = fitBytes(decodeBA(b), length)
        else:
            self.b = decodeBA(b, copy=copy)

    def __eq__(self, a):
        try:
            return bytearray.__eq__(self.b, decodeBA(a))
        except Exception:
            return False

    def __ne__(self, a):
        return not self.__eq__(a)

    def __repr__(self):
        return "ByteArray(" + self.hex() + ")"

    def __len__(self):
        return len(self.b)

    def __add__(self, a):
        """append the bytes and return a new ByteArray"""
        return ByteArray(self.b + decodeBA(a))

    def __iadd__(self, a):
        self.b += decodeBA(a)
        return self

    def __xor__(self, a):
        return ByteArray(xorBytes(self.b, decodeBA(a)))

    def __ixor__(self, a):
        a = decodeBA(a)
        if len(a) != len(self.b):
            raise KeyLengthError(f"xor of unequal lengths {len(self.b)} and {len(a)}")
        for i, v in enumerate(a):
            self.b[i] ^= v
        return self

    def __getitem__(self, k):
        if isinstance(k, slice):
            return ByteArray(self.b[k.start : k.stop : k.step])
        return self.b[k]

    def __setitem__(self, i, v):
        v = decodeBA(v)
        if i + len(v) > len(self.b):
            raise KeyLengthError("source bytes too long")
        self.b[i : i + len(v)] = v

    def __hash__(self):
        """Enables ByteArray to be a dict key."""
        return hash(bytes(self.b))

    def hex(self):
        """
        A hexadecimal string representation of the bytes.

        Returns:
            str: The hex bytes.
        """
        return self.b.hex()

    def zero(self):
        """
        Sets the bytes of the underlying bytearray to zero. The benefit of
        zeroing is that the info is destroyed immediately, rather than relying
        on the garbage collector.
        """
        for i in range(len(self.b)):
            self.b[i] = 0

    def iszero(self):
        """
        True if all bytes are zero.
        """
        return all((v == 0 for v in self.b))

    def int(self):
        """The bytes as a little-endian integer."""
        return intFromBytes(self.b)

    def bytes(self):
        """The bytes as Python `bytes`."""
        return bytes(self.b)

    def copy(self):
        """A copy of the ByteArray."""
        return ByteArray(self.b)

    def blocks(self, size):
        """
        Split into consecutive blocks of size bytes. The length must be a
        multiple of size.

        Returns:
            list(ByteArray): The blocks, each owning its own memory.
        """
        if size <= 0 or len(self.b) % size:
            raise KeyLengthError(
                f"cannot split {len(self.b)} bytes into {size}-byte blocks"
            )
        return [
            ByteArray(self.b[i : i + size]) for i in range(0, len(self.b), size)
        ]

