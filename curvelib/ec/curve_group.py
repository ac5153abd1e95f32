#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup class CurveSubGroup and
the cyclic subgroup class of prime order Curve,
see the curvelib.ec.curve module.
"""

from math import ceil

from curvelib.alias import INF, Integer, Point
from curvelib.ec.number_theory import (
    is_probable_prime,
    legendre_symbol,
    mod_inv,
    mod_sqrt,
)
from curvelib.exceptions import (
    CurveLibTypeError,
    CurveLibValueError,
    PointNotOnCurveError,
    SingularCurveError,
)
from curvelib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is an odd prime
        if p < 3 or not is_probable_prime(p):
            raise SingularCurveError(f"p is not prime: {int_repr(p)}")

        # byte-length
        self.p_size = ceil(p.bit_length() / 8)
        # y(x) is a single exponentiation if p = 3 mod 4
        self.p_is_3_mod_4 = p % 4 == 3
        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise CurveLibValueError(f"negative a: {a}")
        if p <= a:
            raise CurveLibValueError(f"p <= a: {int_repr(p)} <= {int_repr(a)}")
        if b < 0:
            raise CurveLibValueError(f"negative b: {b}")
        if p <= b:
            raise CurveLibValueError(f"p <= b: {int_repr(p)} <= {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise SingularCurveError("zero discriminant")
        self._a = a
        self._b = b

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    def __str__(self) -> str:
        result = "Curve"
        if self.p > HEX_THRESHOLD:
            result += f"\n p   = {hex_string(self.p)}"
        else:
            result += f"\n p   = {self.p}"

        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f"\n a   = {hex_string(self._a)}"
            result += f"\n b   = {hex_string(self._b)}"
        else:
            result += f"\n a   = {self._a}"
            result += f"\n b   = {self._b}"

        return result

    def __repr__(self) -> str:
        result = "Curve("
        result += f"'{hex_string(self.p)}'" if self.p > HEX_THRESHOLD else f"{self.p}"
        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f", '{hex_string(self._a)}', '{hex_string(self._b)}'"
        else:
            result += f", {self._a}, {self._b}"

        result += ")"
        return result

    # methods using p: they could become functions

    def negate(self, Q: Point) -> Point:
        """Return the opposite point.

        The input point is not checked to be on the curve.
        """
        if Q is INF:
            return INF
        if isinstance(Q, tuple) and len(Q) == 2:
            # % self.p maps y=0 to itself: (x, 0) is its own opposite
            return Q[0], (self.p - Q[1]) % self.p
        raise CurveLibTypeError("not a point")

    # methods using _a, _b, p

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        return self.add_aff(Q1, Q2)

    def double(self, Q: Point) -> Point:
        """Return the double of a point.

        The input point must be on the curve.
        """

        self.require_on_curve(Q)
        return self.double_aff(Q)

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve

        if R is INF:
            return Q
        if Q is INF:
            return R

        if R[0] == Q[0]:
            if R[1] == Q[1]:  # point doubling
                return self.double_aff(R)
            # opposite points
            return INF

        lam = (R[1] - Q[1]) * mod_inv(R[0] - Q[0], self.p)
        x = lam * lam - Q[0] - R[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def double_aff(self, Q: Point) -> Point:
        # point is assumed to be on curve

        # vertical tangent: y=0 points have order two
        if Q is INF or Q[1] == 0:
            return INF

        lam = (3 * Q[0] * Q[0] + self._a) * mod_inv(2 * Q[1], self.p)
        x = lam * lam - Q[0] - Q[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def _y2(self, x: int) -> int:
        # skipping a crucial check here:
        # if sqrt(y*y) does not exist, then x is not valid.
        # This is a good reason to keep this method private
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y).

        Of the two roots y and p-y, no specific one is guaranteed:
        use y_even or y_odd to break the symmetry.
        """
        if not 0 <= x < self.p:
            raise CurveLibValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        y2 = self._y2(x)
        if legendre_symbol(y2, self.p) == -1:
            raise PointNotOnCurveError(f"invalid x-coordinate: {int_repr(x)}")
        if self.p_is_3_mod_4:
            return pow(y2, (self.p + 1) // 4, self.p)
        return mod_sqrt(y2, self.p)

    def is_valid_x(self, x: int) -> bool:
        "Return True if x is the x-coordinate of a curve point."
        if not 0 <= x < self.p:
            return False
        return legendre_symbol(self._y2(x), self.p) != -1

    def require_on_curve(self, Q: Point) -> None:
        """Require the input curve Point to be on the curve.

        An Error is raised if not.
        """
        if not self.is_on_curve(Q):
            raise PointNotOnCurveError("point not on curve")

    def is_on_curve(self, Q: Point) -> bool:
        """Return True if the point is on the curve."""
        if Q is INF:
            return True
        if not isinstance(Q, tuple) or len(Q) != 2:
            raise CurveLibValueError("point must be a tuple[int, int]")
        if not 0 <= Q[0] < self.p:
            raise CurveLibValueError(f"x-coordinate not in 0..p-1: {int_repr(Q[0])}")
        if not 0 <= Q[1] < self.p:
            raise CurveLibValueError(f"y-coordinate not in 0..p-1: {int_repr(Q[1])}")
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)

    #  y-simmetry tiebreaker criteria: even/odd

    def y_even(self, x: int) -> int:
        """Return the even affine y-coordinate associated to x."""
        root = self.y(x)
        # (p - 0) % p is still zero, the only root when y2 == 0
        return (self.p - root) % self.p if root % 2 else root

    def y_odd(self, x: int) -> int:
        """Return the odd affine y-coordinate associated to x.

        If the only root is zero, zero is returned.
        """
        root = self.y(x)
        return root if root % 2 else (self.p - root) % self.p


def mult_aff(m: int, Q: Point, ec: CurveGroup) -> Point:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    'double & add' algorithm,
    'left-to-right' binary decomposition of the m coefficient,
    affine coordinates.
    It is not constant-time.

    The accumulator starts from Q at the most significant set bit of m,
    then each remaining bit doubles it and, if the bit is set, adds Q.
    m equal to zero returns INF.
    If a doubling collapses to INF and no set bit is left,
    INF is returned without completing the loop.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    if m < 0:
        raise CurveLibValueError(f"negative m: {hex(m)}")

    if m == 0 or Q is INF:
        return INF

    R = Q
    for i in range(m.bit_length() - 2, -1, -1):
        # the doubling part of 'double & add'
        R = ec.double_aff(R)
        if R is INF and (m & ((1 << (i + 1)) - 1)) == 0:
            return INF
        if (m >> i) & 1:
            R = ec.add_aff(R, Q)
    return R
