"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Scalar multiplication in Jacobian projective coordinates. For a given (x, y)
position on the curve, the Jacobian coordinates are (x1, y1, z1) where
x = x1/z1^2 and y = y1/z1^3. Point addition and doubling need no field
inversion in this representation, so a full scalar multiplication costs a
single inversion when the result is converted back to affine.

Jacobian points are plain (x, y, z) tuples of integers. Any point with z = 0
is the point at infinity.

References:
  [EFD]: Explicit-Formulas Database, short Weierstrass curves in Jacobian
    coordinates.
    http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html
"""

from .arith import checkScalar, modInverse
from .point import INFINITY, Point


JACOBIAN_INFINITY = (1, 1, 0)


def toJacobian(pt):
    """
    toJacobian lifts an affine point to Jacobian coordinates with z = 1.
    """
    if pt.isInfinity:
        return JACOBIAN_INFINITY
    return (pt.x, pt.y, 1)


def toAffine(jp, curve):
    """
    toAffine takes a Jacobian point (x, y, z) and converts it to an affine
    point. This is the only inversion of the whole multiplication.
    """
    x, y, z = jp
    if z % curve.P == 0:
        return INFINITY
    P = curve.P
    # fmt: off
    zInv = modInverse(z, P)         # zInv = Z^-1
    zInv2 = zInv * zInv % P         # zInv2 = Z^-2
    ax = x * zInv2 % P              # X = X/Z^2
    ay = y * zInv2 * zInv % P       # Y = Y/Z^3
    # fmt: on
    return Point(ax, ay)


def doubleJacobian(jp, curve):
    """
    doubleJacobian doubles the passed Jacobian point (x1, y1, z1) and returns
    the result.
    """
    x1, y1, z1 = jp
    P = curve.P
    # Doubling a point at infinity is still infinity, and so is doubling a
    # point of order two.
    if z1 % P == 0 or y1 % P == 0:
        return JACOBIAN_INFINITY

    # Point doubling formula for Jacobian coordinates with an arbitrary a,
    # from the method shown at:
    # http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#doubling-dbl-2007-bl
    #
    # In particular it performs the calculations using the following:
    # XX = X1^2, YY = Y1^2, YYYY = YY^2, ZZ = Z1^2
    # S = 2*((X1+YY)^2-XX-YYYY), M = 3*XX+a*ZZ^2, T = M^2-2*S
    # X3 = T, Y3 = M*(S-T)-8*YYYY, Z3 = (Y1+Z1)^2-YY-ZZ
    # fmt: off
    xx = x1 * x1 % P                                # XX = X1^2
    yy = y1 * y1 % P                                # YY = Y1^2
    yyyy = yy * yy % P                              # YYYY = YY^2
    zz = z1 * z1 % P                                # ZZ = Z1^2
    s = 2 * ((x1 + yy) ** 2 - xx - yyyy) % P        # S = 2*((X1+YY)^2-XX-YYYY)
    m = (3 * xx + curve.A * zz * zz) % P            # M = 3*XX+a*ZZ^2
    x3 = (m * m - 2 * s) % P                        # X3 = M^2-2*S
    y3 = (m * (s - x3) - 8 * yyyy) % P              # Y3 = M*(S-X3)-8*YYYY
    z3 = ((y1 + z1) ** 2 - yy - zz) % P             # Z3 = (Y1+Z1)^2-YY-ZZ
    # fmt: on
    return (x3, y3, z3)


def addJacobianAffine(jp, pt, curve):
    """
    addJacobianAffine adds an affine point pt to the Jacobian point
    (x1, y1, z1). The affine point behaves as a Jacobian point with z = 1,
    which saves the multiplications by the second z value.
    """
    if pt.isInfinity:
        return jp
    x1, y1, z1 = jp
    P = curve.P
    if z1 % P == 0:
        return toJacobian(pt)

    # To compute the point addition efficiently, this implementation splits
    # the equation into intermediate elements which are used to minimize
    # the number of field multiplications using the method shown at:
    # http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#addition-madd-2007-bl
    #
    # In particular it performs the calculations using the following:
    # Z1Z1 = Z1^2, U2 = X2*Z1Z1, S2 = Y2*Z1*Z1Z1, H = U2-X1, HH = H^2,
    # I = 4*HH, J = H*I, r = 2*(S2-Y1), V = X1*I
    # X3 = r^2-J-2*V, Y3 = r*(V-X3)-2*Y1*J, Z3 = (Z1+H)^2-Z1Z1-HH
    # fmt: off
    z1z1 = z1 * z1 % P                      # Z1Z1 = Z1^2
    u2 = pt.x * z1z1 % P                    # U2 = X2*Z1Z1
    s2 = pt.y * z1 * z1z1 % P               # S2 = Y2*Z1*Z1Z1
    h = (u2 - x1) % P                       # H = U2-X1
    r = 2 * (s2 - y1) % P                   # r = 2*(S2-Y1)
    # fmt: on

    # When the x coordinates are the same for two points on the curve, the
    # y coordinates either must be the same, in which case it is point
    # doubling, or they are opposite and the result is the point at
    # infinity per the group law for elliptic curve cryptography.
    if h == 0:
        if r == 0:
            return doubleJacobian(jp, curve)
        return JACOBIAN_INFINITY

    # fmt: off
    hh = h * h % P                          # HH = H^2
    i = 4 * hh % P                          # I = 4*HH
    j = h * i % P                           # J = H*I
    v = x1 * i % P                          # V = X1*I
    x3 = (r * r - j - 2 * v) % P            # X3 = r^2-J-2*V
    y3 = (r * (v - x3) - 2 * y1 * j) % P    # Y3 = r*(V-X3)-2*Y1*J
    z3 = ((z1 + h) ** 2 - z1z1 - hh) % P    # Z3 = (Z1+H)^2-Z1Z1-HH
    # fmt: on
    return (x3, y3, z3)


def multiplyJacobian(pt, d, curve):
    """
    multiplyJacobian returns d*pt, scanning the scalar bits from the most
    significant one down, doubling every round and adding pt on set bits. All
    intermediate values stay in Jacobian coordinates.
    """
    checkScalar(d)
    if d == 0 or pt.isInfinity:
        return INFINITY
    acc = JACOBIAN_INFINITY
    for i in range(d.bit_length() - 1, -1, -1):
        acc = doubleJacobian(acc, curve)
        if (d >> i) & 1:
            acc = addJacobianAffine(acc, pt, curve)
    return toAffine(acc, curve)
