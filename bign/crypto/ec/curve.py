"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Short Weierstrass curves y² = x³ + ax + b over a prime field, and the
standard l = 128 curve of STB 34.101.45.

References:
  [STB45] STB 34.101.45-2013 Information technology and security. Digital
    signature and key transport algorithms based on elliptic curves.
    Table B.1.

The standard prints every parameter as a little-endian octet string, so the
constants below are read with intFromHex rather than int(hx, 16).
"""

from bign import CurveError, ParameterRangeError
from bign.util.encode import intFromHex

from . import arith, scalar
from .point import Point


# The l = 128 parameters of [STB45] Table B.1.
STD_P = "43FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
STD_A = "40FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
STD_B = "F1039CD66B7D2EB253928B976950F54CBEFBD8E4AB3AC1D2EDA8F315156CCE77"
STD_Q = "07663D2699BF5A7EFC4DFB0DD68E5CD9FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
STD_GY = "936A510418CF291E52F608C4663991785D83D651A3C9E45C9FD616FB3CFCF76B"
STD_SEED = "5E38010000000000"


def getL(p):
    """
    getL returns the security level of a field prime, the smallest l with
    p < 2^(2l).
    """
    return (p.bit_length() + 1) // 2


class Curve:
    """
    Curve holds the domain parameters. P is the field prime, A and B the
    equation coefficients, Q the order of the base point G and seed the
    value the parameters were derived from, which is informational only.
    """

    def __init__(self, P, A, B, Q, G, seed=0):
        if P <= 0 or Q <= 0:
            raise CurveError(f"non-positive modulus or order: p={P}, q={Q}")
        if not (0 <= A < P and 0 <= B < P):
            raise CurveError("curve coefficients must be reduced modulo p")
        self.P = P
        self.A = A
        self.B = B
        self.Q = Q
        self.seed = seed
        if G.isInfinity or not self.isOnCurve(G):
            raise CurveError(f"base point {G} is not on the curve")
        self.G = G

    @staticmethod
    def standard():
        """
        The l = 128 curve of STB 34.101.45.

        Returns:
            Curve: The standard curve.
        """
        return Curve(
            P=intFromHex(STD_P),
            A=intFromHex(STD_A),
            B=intFromHex(STD_B),
            Q=intFromHex(STD_Q),
            G=Point(0, intFromHex(STD_GY)),
            seed=intFromHex(STD_SEED),
        )

    @property
    def l(self):
        """The security level in bits."""
        return getL(self.P)

    @property
    def byteLen(self):
        """The length of l-bit values in bytes, e.g. S0."""
        return self.l // 8

    @property
    def coordLen(self):
        """The length of field elements and scalars in bytes."""
        return 2 * self.l // 8

    def isOnCurve(self, pt):
        """
        isOnCurve returns whether pt satisfies the curve equation. The point
        at infinity is on every curve.

        Raises:
            ParameterRangeError if a coordinate is negative.
        """
        if pt.isInfinity:
            return True
        x, y = pt.x, pt.y
        if x < 0 or y < 0:
            raise ParameterRangeError(f"negative coordinates in {pt}")
        # y² = x³ + ax + b
        y2 = y * y % self.P
        x3 = (x * x * x + self.A * x + self.B) % self.P
        return y2 == x3

    def add(self, p1, p2):
        return arith.add(p1, p2, self)

    def double(self, pt):
        return arith.double(pt, self)

    def negate(self, pt):
        return arith.negate(pt, self)

    def subtract(self, p1, p2):
        return arith.subtract(p1, p2, self)

    def scalarMult(self, pt, d, method=None, **params):
        """
        scalarMult returns d*pt with the named multiplier, or the configured
        default. See scalar.multiply.
        """
        return scalar.multiply(pt, d, self, method=method, **params)

    def scalarBaseMult(self, d, method=None, **params):
        """
        scalarBaseMult returns d*G.
        """
        return scalar.multiply(self.G, d, self, method=method, **params)

    def __repr__(self):
        return f"Curve(l={self.l}, p={self.P:#x})"


# curve is a global instance of the standard curve.
curve = Curve.standard()
