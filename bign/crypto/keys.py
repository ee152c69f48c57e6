"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Key pairs and one-time signing keys.

References:
  [STB45] STB 34.101.45-2013, 6.1 key generation, 6.2 public key check and
    6.3.3 deterministic one-time key generation.
"""

from bign import KeyLengthError, ParameterRangeError
from bign.util import helpers
from bign.util.encode import ByteArray, intToBytes

from . import rando
from .belt import BELT_HASH_OID, BLOCK_SIZE, HASH_SIZE, beltBlock, beltHash


log = helpers.getLogger("KEYS")

# Digest sizes for l = 128, 192 and 256.
DIGEST_SIZES = (32, 48, 64)


def checkPrivateKey(d, curve):
    """
    Raises ParameterRangeError unless 0 < d < q.
    """
    if not 0 < d < curve.Q:
        raise ParameterRangeError("private key out of range (0, q)")


def generateKeyPair(curve, d=None, method=None):
    """
    Generate a key pair. The private key is drawn by reducing 2l-bit random
    seeds modulo q until a non-zero value comes up.

    Args:
        curve (Curve): The curve.
        d (int): optional. A fixed private key in (0, q).
        method (str): optional. The multiplier for d*G.

    Returns:
        tuple(int, Point): The private key d and the public key Q = d*G.
    """
    if d is None:
        d = rando.randomScalar(curve.Q, curve.coordLen)
    else:
        checkPrivateKey(d, curve)
    return d, curve.scalarBaseMult(d, method=method)


def checkPublicKey(Q, curve):
    """
    checkPublicKey returns whether Q is usable as a public key, i.e. an affine
    point with coordinates in [0, p) that is on the curve.
    """
    if Q.isInfinity:
        return False
    if not (0 <= Q.x < curve.P and 0 <= Q.y < curve.P):
        return False
    return curve.isOnCurve(Q)


def generateOneTimeKey(q, d, H, t=None, theta=None, oid=BELT_HASH_OID):
    """
    Derive the one-time key k for signing the digest H with the private key d.
    The key is deterministic in (d, H, t), so no randomness is needed at
    signing time.

    θ = belt-hash(oid || d || t) keys belt-block. The register r = H, split
    into n = len(H)/16 blocks, is then stirred round after round. Every 2n
    rounds the register is read as a little-endian integer reduced mod q, and
    the first nonzero value is taken.

    Args:
        q (int): The group order.
        d (int): The private key.
        H (bytes-like): The message digest. 32, 48 or 64 bytes.
        t (bytes-like): optional. Additional data mixed into θ.
        theta (bytes-like): optional. A 32-byte θ to use instead of the derived
            one.
        oid (bytes-like): optional. The hash algorithm identifier mixed into
            θ. Default belt-hash.

    Returns:
        int: k in (0, q).
    """
    if len(H) not in DIGEST_SIZES:
        raise KeyLengthError(
            f"digest of {len(H)} bytes, expected one of {DIGEST_SIZES}"
        )
    n = len(H) // BLOCK_SIZE
    if theta is None:
        secret = ByteArray(oid) + intToBytes(d, len(H)) + (t or b"")
        theta = ByteArray(beltHash(secret.b))
        secret.zero()
    else:
        if len(theta) != HASH_SIZE:
            raise KeyLengthError(f"θ must be {HASH_SIZE} bytes, got {len(theta)}")
        theta = ByteArray(theta)
    r = ByteArray(H).blocks(BLOCK_SIZE)
    s = ByteArray(length=BLOCK_SIZE)
    i = 0
    try:
        while True:
            i += 1
            s.zero()
            for block in r[:-1]:
                s ^= block
            last = r[-1]
            # Shift the register down. The old r1 is dropped, but it has
            # already been absorbed into s.
            r[0].zero()
            r = r[1:-1] + [
                ByteArray(beltBlock(s.b, theta.b)) ^ last ^ intToBytes(i, BLOCK_SIZE),
                s.copy(),
            ]
            last.zero()
            if i % (2 * n):
                continue
            reg = ByteArray(b"".join(block.bytes() for block in r))
            k = reg.int() % q
            reg.zero()
            if k:
                return k
            log.debug(f"one-time key rejected at round {i}, continuing")
    finally:
        theta.zero()
        s.zero()
        for block in r:
            block.zero()
