"""
Copyright (c) 2025, the bign developers
See LICENSE for details

The electronic digital signature (EDS) of STB 34.101.45, signature
generation and verification.

References:
  [STB45] STB 34.101.45-2013, 7.1 signature generation and 7.2 signature
    verification.

A signature for security level l is 3l/8 bytes, S0 || S1, where S0 is the
first l/8 bytes of belt-hash(oid || R.x || H) and S1 is a 2l/8-byte scalar.
Both halves are little-endian.
"""

import hashlib
import hmac

from bign import KeyLengthError, ParameterRangeError
from bign.util import helpers
from bign.util.encode import fitBytes, intFromBytes, intToBytes

from .belt import beltHash
from .keys import checkPrivateKey, checkPublicKey, generateOneTimeKey


log = helpers.getLogger("EDS")

# DER encoded object identifiers of SHA-256, SHA-384 and SHA-512, the default
# digests for l = 128, 192 and 256.
SHA2_OIDS = {
    128: bytes.fromhex("0609608648016503040201"),
    192: bytes.fromhex("0609608648016503040202"),
    256: bytes.fromhex("0609608648016503040203"),
}

_SHA2 = {
    128: hashlib.sha256,
    192: hashlib.sha384,
    256: hashlib.sha512,
}


def checkL(l):
    """
    Raises ParameterRangeError for security levels other than 128, 192 and
    256.
    """
    if l not in _SHA2:
        raise ParameterRangeError(f"unsupported security level {l}")


def oidForL(l):
    """
    The identifier of the default SHA-2 digest for the security level l.
    """
    checkL(l)
    return SHA2_OIDS[l]


def messageDigest(message, l):
    """
    The default 2l-bit SHA-2 digest of the message.

    Returns:
        bytes: The digest.
    """
    checkL(l)
    return _SHA2[l](bytes(message)).digest()


def _challenge(oid, x, H, curve):
    """S0 = first l/8 bytes of belt-hash(oid || <x>_2l || H)."""
    data = bytes(oid) + bytes(intToBytes(x, curve.coordLen)) + bytes(H)
    return bytes(fitBytes(beltHash(data), curve.byteLen))


def sign(curve, message, d, oid=None, H=None, k=None, t=None, method=None):
    """
    Sign the message with the private key d.

    Args:
        curve (Curve): The curve. Its security level must be 128, 192 or 256.
        message (bytes-like): The message. Only hashed when H is not given.
        d (int): The private key, 0 < d < q.
        oid (bytes-like): optional. The digest algorithm identifier. Default
            the SHA-2 identifier for the curve's security level.
        H (bytes-like): optional. A precomputed message digest of 2l/8 bytes.
            Default SHA-256/384/512 of the message.
        k (int): optional. A fixed one-time key. By default it is derived
            deterministically from d, H and t.
        t (bytes-like): optional. Additional data for the one-time key.
        method (str): optional. The scalar multiplier for k*G.

    Returns:
        bytes: The 3l/8 byte signature S0 || S1.
    """
    l = curve.l
    checkL(l)
    checkPrivateKey(d, curve)
    if oid is None:
        oid = oidForL(l)
    if H is None:
        H = messageDigest(message, l)
    elif len(H) != curve.coordLen:
        raise KeyLengthError(f"digest of {len(H)} bytes, expected {curve.coordLen}")
    if k is None:
        k = generateOneTimeKey(curve.Q, d, H, t=t, oid=oid)
    elif not 0 < k < curve.Q:
        raise ParameterRangeError("one-time key out of range (0, q)")

    R = curve.scalarBaseMult(k, method=method)
    s0 = _challenge(oid, R.x, H, curve)
    h = intFromBytes(H)
    s1 = (k - h % curve.Q - (intFromBytes(s0) % curve.P + (1 << l)) * d) % curve.Q
    return s0 + bytes(intToBytes(s1, curve.coordLen))


def verify(curve, message, signature, Q, oid=None, H=None, method=None):
    """
    Verify the signature of the message for the public key Q. Malformed
    signatures and invalid public keys are rejected rather than raised.

    Args:
        curve (Curve): The curve.
        message (bytes-like): The message. Only hashed when H is not given.
        signature (bytes-like): The 3l/8 byte signature.
        Q (Point): The public key.
        oid (bytes-like): optional. The digest algorithm identifier.
        H (bytes-like): optional. A precomputed message digest.
        method (str): optional. The scalar multiplier.

    Returns:
        bool: True if the signature is valid.
    """
    l = curve.l
    checkL(l)
    signature = bytes(signature)
    if len(signature) != 3 * curve.byteLen:
        log.debug("signature rejected")
        return False
    s0 = signature[: curve.byteLen]
    s1 = intFromBytes(signature[curve.byteLen :]) % curve.P
    if s1 >= curve.Q or not checkPublicKey(Q, curve):
        log.debug("signature rejected")
        return False
    if oid is None:
        oid = oidForL(l)
    if H is None:
        H = messageDigest(message, l)
    elif len(H) != curve.coordLen:
        log.debug("signature rejected")
        return False

    h = intFromBytes(H)
    R = curve.add(
        curve.scalarBaseMult(s1 + h % curve.Q, method=method),
        curve.scalarMult(Q, intFromBytes(s0) % curve.P + (1 << l), method=method),
    )
    if R.isInfinity:
        log.debug("signature rejected")
        return False
    if not hmac.compare_digest(_challenge(oid, R.x, H, curve), s0):
        log.debug("signature rejected")
        return False
    return True
