"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Affine point arithmetic over a short Weierstrass curve y² = x³ + ax + b
(mod p). The curve argument only needs the attributes P and A.

References:
  [GECC]: Guide to Elliptic Curve Cryptography (Hankerson, Menezes, Vanstone)
"""

from bign import BignError, ParameterRangeError

from .point import INFINITY, Point


def modInverse(a, p):
    """
    modInverse computes a⁻¹ mod p by Fermat's little theorem, a^(p-2) mod p.
    p must be prime.

    Raises:
        BignError if a ≡ 0 (mod p), which has no inverse.
    """
    a %= p
    if a == 0:
        raise BignError("zero has no modular inverse")
    return pow(a, p - 2, p)


def add(p1, p2, curve):
    """
    add returns the sum of two affine points.
    """
    # A point at infinity is the identity according to the group law for
    # elliptic curve cryptography.  Thus, ∞ + P = P and P + ∞ = P.
    if p1.isInfinity:
        return p2
    if p2.isInfinity:
        return p1

    P = curve.P
    # When the x coordinates are the same, the y coordinates either are
    # opposite, or the point is being doubled. Doubling a point with y = 0 is
    # the same as adding it to its own negation.
    if p1.x == p2.x and (p1.y != p2.y or p1.y == 0):
        return INFINITY

    if p1.x != p2.x:
        # Chord through both points.
        lam = (p2.y - p1.y) * modInverse(p2.x - p1.x, P) % P
    else:
        # Tangent at the point.
        lam = (3 * p1.x * p1.x + curve.A) * modInverse(2 * p1.y, P) % P

    x3 = (lam * lam - p1.x - p2.x) % P
    y3 = (lam * (p1.x - x3) - p1.y) % P
    return Point(x3, y3)


def double(pt, curve):
    """
    double returns 2*pt.
    """
    return add(pt, pt, curve)


def negate(pt, curve):
    """
    negate returns -pt = (x, -y).
    """
    if pt.isInfinity:
        return pt
    return Point(pt.x, (curve.P - pt.y) % curve.P)


def subtract(p1, p2, curve):
    """
    subtract returns p1 - p2.
    """
    return add(p1, negate(p2, curve), curve)


def checkScalar(d):
    """
    Raises ParameterRangeError for negative scalars.
    """
    if d < 0:
        raise ParameterRangeError(f"negative scalar {d}")


def shamirTrick(d, p1, e, p2, curve):
    """
    shamirTrick returns d*p1 + e*p2 with a single left-to-right pass over the
    bits of both scalars, adding p1, p2 or the precomputed p1 + p2 as
    dictated by each bit pair. This is algorithm 3.48 from [GECC] with a
    window of 1.
    """
    if d < 0 or e < 0:
        raise ParameterRangeError(f"negative scalars {d}, {e}")
    both = add(p1, p2, curve)
    acc = INFINITY
    for i in range(max(d.bit_length(), e.bit_length()) - 1, -1, -1):
        acc = double(acc, curve)
        di = (d >> i) & 1
        ei = (e >> i) & 1
        if di and ei:
            acc = add(acc, both, curve)
        elif di:
            acc = add(acc, p1, curve)
        elif ei:
            acc = add(acc, p2, curve)
    return acc
