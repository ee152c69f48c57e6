"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Scalar point multiplication strategies. Every multiplier has the signature
multiplyX(pt, d, curve, ...) and returns d*pt as an affine Point. A zero
scalar or a point at infinity gives infinity, a negative scalar raises
ParameterRangeError. The strategies differ only in speed and all produce
the same result.

None of these run in constant time. The running time depends on the bit
pattern of the scalar.

References:
  [GECC]: Guide to Elliptic Curve Cryptography (Hankerson, Menezes, Vanstone)
"""

from bign import ParameterRangeError

from .arith import add, checkScalar, double, negate
from .jacobian import multiplyJacobian
from .point import INFINITY


DEFAULT_METHOD = "jacobian"
DEFAULT_WINDOW = 4

# Process-wide defaults, installed once at startup by the configuration.
_defaults = {"method": DEFAULT_METHOD, "window": DEFAULT_WINDOW}


def checkWindow(w):
    """
    Raises ParameterRangeError unless w is a positive integer.
    """
    if not isinstance(w, int) or w < 1:
        raise ParameterRangeError(f"invalid window width {w}")


def multiplyBinary(pt, d, curve):
    """
    multiplyBinary is the right-to-left double-and-add method. The addend is
    doubled every step and accumulated where the scalar has a set bit.
    """
    checkScalar(d)
    acc = INFINITY
    addend = pt
    while d:
        if d & 1:
            acc = add(acc, addend, curve)
        addend = double(addend, curve)
        d >>= 1
    return acc


def nafDigits(d):
    """
    nafDigits returns the non-adjacent form of d, least significant digit
    first. Every digit is -1, 0 or 1 and no two adjacent digits are both
    non-zero, so on average only a third of the digits need an addition.
    This is algorithm 3.30 from [GECC].

    Args:
        d (int): A non-negative scalar.

    Returns:
        list(int): The NAF digits.
    """
    checkScalar(d)
    digits = []
    while d > 0:
        if d & 1:
            # 2 - (d mod 4) is 1 when the next bit is clear and -1 when it is
            # set, which leaves d divisible by 4.
            digit = 2 - (d % 4)
            d -= digit
        else:
            digit = 0
        digits.append(digit)
        d >>= 1
    return digits


def multiplyNAF(pt, d, curve):
    """
    multiplyNAF scans the NAF digits from the most significant one, doubling
    every step and adding or subtracting pt on non-zero digits.
    """
    digits = nafDigits(d)
    if pt.isInfinity:
        return INFINITY
    neg = negate(pt, curve)
    acc = INFINITY
    for digit in reversed(digits):
        acc = double(acc, curve)
        if digit == 1:
            acc = add(acc, pt, curve)
        elif digit == -1:
            acc = add(acc, neg, curve)
    return acc


def windowTable(pt, w, curve):
    """
    windowTable precomputes i*pt for every w-bit digit i. The first entry is
    the point at infinity.

    Returns:
        list(Point): 2^w multiples of pt.
    """
    checkWindow(w)
    table = [INFINITY]
    for _ in range(1, 1 << w):
        table.append(add(table[-1], pt, curve))
    return table


def multiplyWindow(pt, d, curve, w=DEFAULT_WINDOW, table=None):
    """
    multiplyWindow is the fixed window method. The scalar is split into w-bit
    digits which are processed from the most significant one. Each digit
    costs w doublings and at most one table addition.

    Args:
        pt (Point): The point.
        d (int): The scalar.
        curve (Curve): The curve.
        w (int): optional. The window width. Default 4.
        table (list(Point)): optional. A table from windowTable(pt, w, curve).
            Passing one lets callers reuse the precomputation for many
            scalars with the same point.

    Returns:
        Point: d*pt.
    """
    checkScalar(d)
    checkWindow(w)
    if table is None:
        table = windowTable(pt, w, curve)
    elif len(table) != 1 << w:
        raise ParameterRangeError(
            f"window table has {len(table)} entries, expected {1 << w}"
        )
    if d == 0 or pt.isInfinity:
        return INFINITY
    mask = (1 << w) - 1
    nDigits = (d.bit_length() + w - 1) // w
    acc = INFINITY
    for i in range(nDigits - 1, -1, -1):
        for _ in range(w):
            acc = double(acc, curve)
        digit = (d >> (i * w)) & mask
        if digit:
            acc = add(acc, table[digit], curve)
    return acc


def slidingWindowTable(pt, w, curve):
    """
    slidingWindowTable precomputes the odd multiples (2i+1)*pt for
    i < 2^(w-1), each one obtained from the previous by adding 2*pt.
    """
    checkWindow(w)
    twice = double(pt, curve)
    table = [pt]
    for _ in range(1, 1 << (w - 1)):
        table.append(add(table[-1], twice, curve))
    return table


def multiplySlidingWindow(pt, d, curve, w=DEFAULT_WINDOW):
    """
    multiplySlidingWindow runs of zero bits cost a doubling each. Otherwise
    a window of at most w bits, starting and ending on a set bit, is taken,
    so its value is always odd and found in the half-size table of odd
    multiples.
    """
    checkScalar(d)
    checkWindow(w)
    if d == 0 or pt.isInfinity:
        return INFINITY
    table = slidingWindowTable(pt, w, curve)
    acc = INFINITY
    i = d.bit_length() - 1
    while i >= 0:
        if not (d >> i) & 1:
            acc = double(acc, curve)
            i -= 1
            continue
        # Shrink the window until its lowest bit is set.
        j = max(i - w + 1, 0)
        while not (d >> j) & 1:
            j += 1
        width = i - j + 1
        value = (d >> j) & ((1 << width) - 1)
        for _ in range(width):
            acc = double(acc, curve)
        acc = add(acc, table[value >> 1], curve)
        i = j - 1
    return acc


def buildAdditiveChain(d):
    """
    buildAdditiveChain builds an additive chain for d greedily. The chain
    starts from the value 1. While doubling the last value does not
    overshoot d, the last value is doubled. After that, each step appends
    the largest sum of two earlier values that does not exceed d.

    Args:
        d (int): The target. Must be positive.

    Returns:
        list(tuple(int, int)): The index pairs (j, k). Entry i of the chain
            produces value i + 1 as values[j] + values[k].
    """
    checkScalar(d)
    if d == 0:
        raise ParameterRangeError("no additive chain reaches zero")
    values = [1]
    chain = []
    while values[-1] < d:
        last = len(values) - 1
        if 2 * values[-1] <= d:
            pair = (last, last)
        else:
            # The values are strictly increasing, so a two-pointer walk finds
            # the largest pair sum not above d.
            pair, best = None, 0
            j, k = 0, last
            while j <= k:
                s = values[j] + values[k]
                if s <= d:
                    if s > best:
                        pair, best = (j, k), s
                    j += 1
                else:
                    k -= 1
        chain.append(pair)
        values.append(values[pair[0]] + values[pair[1]])
    return chain


def chainValues(chain):
    """
    chainValues replays the index pairs on integers.

    Returns:
        list(int): The values, starting with 1.

    Raises:
        ParameterRangeError if a pair refers to a value that is not yet known.
    """
    values = [1]
    for i, (j, k) in enumerate(chain):
        if not (0 <= j <= i and 0 <= k <= i):
            raise ParameterRangeError(f"chain step {i} references ({j}, {k})")
        values.append(values[j] + values[k])
    return values


def multiplyAdditiveChain(pt, d, curve, chain=None):
    """
    multiplyAdditiveChain evaluates an additive chain for d on points. The
    chain is built with buildAdditiveChain unless one is provided.

    Raises:
        ParameterRangeError if a provided chain does not end in d.
    """
    checkScalar(d)
    if d == 0 or pt.isInfinity:
        return INFINITY
    if chain is None:
        chain = buildAdditiveChain(d)
    elif chainValues(chain)[-1] != d:
        raise ParameterRangeError("the additive chain does not end in the scalar")
    points = [pt]
    for j, k in chain:
        if j == k:
            points.append(double(points[j], curve))
        else:
            points.append(add(points[j], points[k], curve))
    return points[-1]


MULTIPLIERS = {
    "binary": multiplyBinary,
    "naf": multiplyNAF,
    "chain": multiplyAdditiveChain,
    "window": multiplyWindow,
    "sliding": multiplySlidingWindow,
    "jacobian": multiplyJacobian,
}

_windowed = ("window", "sliding")


def checkMethod(method):
    """
    Raises ParameterRangeError if method is not a known multiplier name.
    """
    if method not in MULTIPLIERS:
        raise ParameterRangeError(
            f"unknown multiplier {method!r}, expected one of {sorted(MULTIPLIERS)}"
        )


def setDefaults(method=None, window=None):
    """
    Set the process-wide default multiplier and window width. Arguments left
    as None keep their current value.
    """
    if method is not None:
        checkMethod(method)
        _defaults["method"] = method
    if window is not None:
        checkWindow(window)
        _defaults["window"] = window


def getDefaults():
    """
    The current default multiplier name and window width.

    Returns:
        tuple(str, int): The method and window.
    """
    return _defaults["method"], _defaults["window"]


def multiply(pt, d, curve, method=None, **params):
    """
    multiply computes d*pt with the named multiplier, or the default one.
    Windowed multipliers get the default width unless w is provided. Any
    other keyword arguments are passed through.

    Args:
        pt (Point): The point.
        d (int): The scalar.
        curve (Curve): The curve.
        method (str): optional. One of the MULTIPLIERS keys.

    Returns:
        Point: d*pt.
    """
    if method is None:
        method = _defaults["method"]
    checkMethod(method)
    if method in _windowed:
        params.setdefault("w", _defaults["window"])
    return MULTIPLIERS[method](pt, d, curve, **params)
