"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Domain parameter utilities: the base point rule of STB 34.101.45, primality
and quadratic residue tests, and point counting through PARI/GP.
"""

import subprocess

from bign import CurveError, OracleError
from bign.crypto import rando
from bign.util import helpers

from .point import Point


log = helpers.getLogger("PARAMS")

# Sent to gp on stdin. ellcard returns the number of points of E over F_p.
GP_SCRIPT = """\
default(parisize, 100000000);
default(parisizemax, 800000000);
E = ellinit([0,0,0,{a},{b}], {p});
print(ellcard(E));
quit;
"""


def computeBasePoint(p, b):
    """
    computeBasePoint returns G = (0, b^((p+1)/4) mod p), the base point rule
    for primes p ≡ 3 (mod 4). The result is only on the curve when b is a
    quadratic residue.
    """
    return Point(0, pow(b, (p + 1) // 4, p))


def legendreSymbol(u, p):
    """
    legendreSymbol returns 1 if u is a non-zero square modulo the odd prime p,
    -1 if it is not a square and 0 if p divides u.
    """
    u %= p
    if u == 0:
        return 0
    ls = pow(u, (p - 1) // 2, p)
    return -1 if ls == p - 1 else ls


def isProbablePrime(n, certainty=40):
    """
    Miller-Rabin test with certainty random bases.

    Args:
        n (int): The number to test.
        certainty (int): optional. The number of rounds. A composite passes
            with a probability of at most 4^-certainty.

    Returns:
        bool: False if n is certainly composite.
    """
    if n in (2, 3):
        return True
    if n < 2 or n % 2 == 0:
        return False
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for _ in range(certainty):
        a = 2 + rando.randomBelow(n - 3)
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def countPoints(p, a, b, gp="gp", timeout=None):
    """
    countPoints returns the order of the group of points of y² = x³ + ax + b
    over F_p, including the point at infinity. The count is delegated to the
    PARI/GP calculator, which has to be installed.

    Args:
        p (int): The field prime.
        a (int): The coefficient a.
        b (int): The coefficient b.
        gp (str): optional. The gp executable. Default "gp".
        timeout (float): optional. Seconds to wait for gp.

    Returns:
        int: The number of points.

    Raises:
        OracleError if gp cannot be run, times out, fails or prints something
        that is not an integer.
    """
    script = GP_SCRIPT.format(a=a, b=b, p=p)
    log.debug(f"counting points with {gp}")
    try:
        proc = subprocess.run(
            [gp, "-q"],
            input=script,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise OracleError(f"{gp} timed out after {timeout} seconds") from e
    except OSError as e:
        raise OracleError(f"could not start {gp}: {e}") from e
    if proc.returncode != 0:
        raise OracleError(f"{gp} failed (exit {proc.returncode}): {proc.stderr}")
    lines = proc.stdout.split()
    try:
        return int(lines[0])
    except (IndexError, ValueError) as e:
        raise OracleError(f"could not parse {gp} output: {proc.stdout!r}") from e


def validateCurve(curve, count=None):
    """
    validateCurve checks the domain parameters. p and q must be probable
    primes and G a point of order q. If count, the number of points from
    countPoints, is given, the group must be cyclic of order q.

    Raises:
        CurveError naming the first check that failed.
    """
    if not isProbablePrime(curve.P):
        raise CurveError("p is not prime")
    if not isProbablePrime(curve.Q):
        raise CurveError("q is not prime")
    if not curve.isOnCurve(curve.G):
        raise CurveError("G is not on the curve")
    if not curve.scalarBaseMult(curve.Q).isInfinity:
        raise CurveError("q*G is not the point at infinity")
    if count is not None and count != curve.Q:
        raise CurveError(f"the curve has {count} points, expected q")
    log.info(f"curve parameters valid for l={curve.l}")
