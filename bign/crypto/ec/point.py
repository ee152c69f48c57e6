"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""


class Point:
    """
    Point is an affine curve point (x, y) or the point at infinity, which is
    the identity of the group. Since this accepts arbitrary x and y
    coordinates, it allows creation of points that are not on any curve.
    Membership is checked by Curve.isOnCurve.
    """

    __slots__ = ("x", "y", "isInfinity")

    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.isInfinity = False

    @staticmethod
    def infinity():
        """
        The point at infinity. It carries no coordinates.
        """
        p = Point(None, None)
        p.isInfinity = True
        return p

    def __eq__(self, other):
        """
        Infinity equals only infinity. Two affine points are equal if both
        coordinates match.
        """
        if not isinstance(other, Point):
            return False
        if self.isInfinity or other.isInfinity:
            return self.isInfinity and other.isInfinity
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y, self.isInfinity))

    def __repr__(self):
        return "Inf" if self.isInfinity else f"({self.x}, {self.y})"


INFINITY = Point.infinity()
