"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""


class BignError(Exception):
    pass


class ParameterRangeError(BignError):
    """
    An input parameter is out of the acceptable range. Negative scalars,
    private keys outside of (0, q), bad window widths or precomputed tables
    all end up here.
    """

    pass


class KeyLengthError(BignError):
    """
    A KeyLengthError indicates a fixed-size buffer (block, key, digest) of an
    unexpected length.
    """

    pass


class CurveError(BignError):
    """
    The elliptic curve domain parameters are not valid.
    """

    pass


class OracleError(BignError):
    """
    The external point counting process failed or returned garbage.
    """

    pass
