#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Montgomery curve class and functions.

A Montgomery curve is the set of points (x, y)
that are solutions to the equation y^2 = x^3 + A*x^2 + x,
with x, y, and A in Fp (p being a prime),
together with a point at infinity.

Points are handled in projective (X:Z) coordinates,
with x = X/Z and no y-coordinate at all:
the group law is only available as differential addition,
i.e. P+Q can be computed if P-Q is known.
This is all that is needed by the Montgomery ladder.

Curve25519 parameters are from RFC 7748, section 4.1:
https://datatracker.ietf.org/doc/html/rfc7748
"""

from math import ceil
from typing import Optional

from curvelib.alias import INFP, Integer, ProjPoint
from curvelib.ec.curve import CURVE_PARAMS
from curvelib.ec.number_theory import (
    is_probable_prime,
    legendre_symbol,
    mod_inv,
    mod_sqrt,
)
from curvelib.entropy import randbelow
from curvelib.exceptions import (
    CurveLibValueError,
    PointNotOnCurveError,
    SingularCurveError,
)
from curvelib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


class MontCurve:
    """Prime order subgroup of the points of a Montgomery curve over Fp.

    The subgroup is generated by the point with affine x-coordinate G_x,
    n is its prime order and h the cofactor.
    """

    def __init__(
        self,
        p: Integer,
        A: Integer,
        G_x: Integer,
        n: Integer,
        h: int,
        name: Optional[str] = None,
    ) -> None:

        p = int_from_integer(p)
        A = int_from_integer(A)
        G_x = int_from_integer(G_x)
        n = int_from_integer(n)

        if p < 3 or not is_probable_prime(p):
            raise SingularCurveError(f"p is not prime: {int_repr(p)}")
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        if not 0 <= A < p:
            raise CurveLibValueError(f"A not in 0..p-1: {int_repr(A)}")
        # B*(A^2 - 4) ≠ 0, with B = 1
        if (A * A - 4) % p == 0:
            raise SingularCurveError("zero discriminant")
        self._A = A

        if not 0 <= G_x < p:
            raise CurveLibValueError(f"x_G not in 0..p-1: {int_repr(G_x)}")
        if legendre_symbol(self._y2(G_x), p) == -1:
            raise CurveLibValueError("Generator is not on the curve")
        self.G_x = G_x
        self.G: ProjPoint = G_x, 1

        if n < 3 or not is_probable_prime(n):
            raise CurveLibValueError(f"n is not prime: {int_repr(n)}")
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8
        if mult_mont(n, self.G, self)[1] != 0:
            raise CurveLibValueError(f"n is not the group order: {int_repr(n)}")
        self.h = h
        self.name = name

    @property
    def A(self) -> int:
        return self._A

    def __str__(self) -> str:
        result = "MontCurve"
        if self.p > HEX_THRESHOLD:
            result += f"\n p   = {hex_string(self.p)}"
        else:
            result += f"\n p   = {self.p}"
        result += f"\n A   = {self._A}"
        result += f"\n x_G = {self.G_x}"
        if self.n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self.n)}"
        else:
            result += f"\n n   = {self.n}"
        result += f"\n h = {self.h}"
        return result

    def __repr__(self) -> str:
        result = "MontCurve("
        result += f"'{hex_string(self.p)}'" if self.p > HEX_THRESHOLD else f"{self.p}"
        result += f", {self._A}, {self.G_x}"
        if self.n > HEX_THRESHOLD:
            result += f", '{hex_string(self.n)}'"
        else:
            result += f", {self.n}"
        result += f", {self.h})"
        return result

    # coordinate conversions

    def proj_from_aff(self, x: int) -> ProjPoint:
        "Return the projective representation of the affine x-coordinate."
        if not 0 <= x < self.p:
            raise CurveLibValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        return x, 1

    def x_aff_from_proj(self, Q: ProjPoint) -> int:
        if Q[1] % self.p == 0:  # Infinity point in projective coordinates
            raise CurveLibValueError("INF has no x-coordinate")
        return Q[0] * mod_inv(Q[1], self.p) % self.p

    def proj_equality(self, P: ProjPoint, Q: ProjPoint) -> bool:
        """Return True if projective points are equal in affine coordinates.

        All the representations (X:0) of the point at infinity are equal.
        """
        if P[1] % self.p == 0 or Q[1] % self.p == 0:
            return P[1] % self.p == Q[1] % self.p
        return P[0] * Q[1] % self.p == Q[0] * P[1] % self.p

    # group law

    def add(
        self, P: ProjPoint, Q: ProjPoint, D: Optional[ProjPoint] = None
    ) -> ProjPoint:
        """Return the differential addition P+Q, with D = P-Q.

        If the difference D is not provided, the generator G is used,
        as it is the case for the Montgomery ladder on G,
        and points with equal x-coordinate are doubled.
        With an explicit difference, equal x-coordinates mean P = -Q,
        unless D is the infinity point.
        The input points are not checked to be on the curve.
        """
        if P[1] % self.p == 0:  # Infinity point in projective coordinates
            return Q
        if Q[1] % self.p == 0:  # Infinity point in projective coordinates
            return P

        X_D, Z_D = self.G if D is None else D
        if Z_D % self.p == 0 or D is None and self.proj_equality(P, Q):
            return self.double(P)

        U = P[0] * Q[0] - P[1] * Q[1]
        V = P[0] * Q[1] - Q[0] * P[1]
        return Z_D * U * U % self.p, X_D * V * V % self.p

    def double(self, P: ProjPoint) -> ProjPoint:
        "Return the projective double of the point."
        X2 = P[0] * P[0]
        Z2 = P[1] * P[1]
        XZ = P[0] * P[1]
        X = (X2 - Z2) * (X2 - Z2)
        Z = 4 * XZ * (X2 + self._A * XZ + Z2)
        return X % self.p, Z % self.p

    def _y2(self, x: int) -> int:
        # x^3 + A*x^2 + x
        return ((x + self._A) * x + 1) * x % self.p

    def y(self, Q: ProjPoint) -> int:
        """Return the affine y-coordinate of the point.

        Of the two roots y and p-y, no specific one is guaranteed.
        """
        x = self.x_aff_from_proj(Q)
        y2 = self._y2(x)
        if legendre_symbol(y2, self.p) == -1:
            raise PointNotOnCurveError(f"invalid x-coordinate: {int_repr(x)}")
        return mod_sqrt(y2, self.p)

    def is_valid(self, Q: ProjPoint) -> bool:
        "Return True if the projective point has a curve y-coordinate."
        if Q[1] % self.p == 0:  # Infinity point in projective coordinates
            return True
        x = self.x_aff_from_proj(Q)
        return legendre_symbol(self._y2(x), self.p) != -1

    def rand_point(self) -> ProjPoint:
        """Return a random curve point.

        The x-coordinate is drawn in [0, n-1],
        until it has a corresponding y-coordinate.
        """
        while True:
            x = randbelow(self.n)
            if legendre_symbol(self._y2(x), self.p) != -1:
                return x, 1


def mult_mont(m: int, Q: ProjPoint, ec: MontCurve) -> ProjPoint:
    """Scalar multiplication using 'Montgomery ladder' algorithm.

    This implementation uses
    'Montgomery ladder' algorithm,
    'left-to-right' binary decomposition of the m coefficient,
    projective (X:Z) coordinates.

    The running pair R[0], R[1] always differs by Q,
    which is then the difference in every differential addition.
    It is not constant-time.

    The input point is assumed to be on curve and
    the m coefficient is not reduced mod n,
    so that cofactor multiplication is possible.
    """

    if m < 0:
        raise CurveLibValueError(f"negative m: {hex(m)}")

    # R[0] is the running result, R[1] = R[0] + Q is an ancillary variable
    R = [INFP, Q]
    if m == 0:
        return R[0]
    for i in [int(i) for i in bin(m)[2:]]:
        R[1 - i] = ec.add(R[i], R[1 - i], Q)
        R[i] = ec.double(R[i])
    return R[0]


MONT_CURVES = {
    ec_name: MontCurve(*params, name=ec_name)
    for ec_name, params in CURVE_PARAMS["montgomery"].items()
}

curve25519 = MONT_CURVES["curve25519"]


def mult(
    m: Integer, Q: Optional[ProjPoint] = None, ec: MontCurve = curve25519
) -> ProjPoint:
    """Montgomery curve scalar multiplication.

    Q defaults to the curve generator G.
    """
    if Q is None:
        Q = ec.G
    elif not ec.is_valid(Q):
        raise PointNotOnCurveError("point not on curve")
    return mult_mont(int_from_integer(m), Q, ec)
