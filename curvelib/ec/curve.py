#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve classes and functions.

The prime order curves (i.e. secp256k1) are defined by parameters
stored as package data, see the data/curves.json file.

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf
"""

import json
from math import sqrt
from os import path
from typing import Dict, Optional, Sequence

from curvelib.alias import INF, Integer, Point
from curvelib.ec.curve_group import CurveGroup, mult_aff
from curvelib.ec.number_theory import is_probable_prime
from curvelib.exceptions import CurveLibValueError
from curvelib.utils import HEX_THRESHOLD, hex_string, int_from_integer, int_repr


class CurveSubGroup(CurveGroup):
    "Subgroup of the points of an elliptic curve over Fp generated by G."

    def __init__(self, p: Integer, a: Integer, b: Integer, G: Point) -> None:

        super().__init__(p, a, b)

        # 2. check that x_G and y_G are integers in the interval [0, p−1]
        # 4. Check that y_G^2 = x_G^3 + a*x_G + b (mod p)
        if G is INF:
            raise CurveLibValueError("INF point cannot be a generator")
        if not isinstance(G, Sequence) or len(G) != 2:
            raise CurveLibValueError("Generator must a be a sequence[int, int]")
        self.G = int_from_integer(G[0]), int_from_integer(G[1])
        if not self.is_on_curve(self.G):
            raise CurveLibValueError("Generator is not on the curve")

    def __str__(self) -> str:
        result = super().__str__()
        if self.p > HEX_THRESHOLD:
            result += f"\n x_G = {hex_string(self.G[0])}"
            result += f"\n y_G = {hex_string(self.G[1])}"
        else:
            result += f"\n x_G = {self.G[0]}"
            result += f"\n y_G = {self.G[1]}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        if self.p > HEX_THRESHOLD:
            result += f", ('{hex_string(self.G[0])}', '{hex_string(self.G[1])}')"
        else:
            result += f", ({self.G[0]}, {self.G[1]})"
        result += ")"
        return result


class Curve(CurveSubGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Point,
        n: Integer,
        h: int,
        weakness_check: bool = True,
        name: Optional[str] = None,
    ) -> None:

        super().__init__(p, a, b, G)
        n = int_from_integer(n)

        self.name = name
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8

        # 5. Check that n is prime.
        if n < 3 or not is_probable_prime(n):
            raise CurveLibValueError(f"n is not prime: {int_repr(n)}")
        delta = int(2 * sqrt(self.p))
        # also check n with Hasse Theorem
        if h < 2 and not self.p + 1 - delta <= n <= self.p + 1 + delta:
            raise CurveLibValueError(f"n not in p+1-delta..p+1+delta: {int_repr(n)}")

        # 7. Check that nG = INF
        if mult_aff(n, self.G, self) is not INF:
            raise CurveLibValueError(f"n is not the group order: {int_repr(n)}")

        # 6. Check cofactor
        exp_h = int(1 / n + delta / n + self.p / n)
        if h != exp_h:
            raise CurveLibValueError(f"invalid cofactor: {h}, expected {exp_h}")
        self.h = h

        # 8. Check that n ≠ p
        if n == self.p:
            raise UserWarning(f"n=p weak curve: {hex_string(n)}")

        if weakness_check:
            # 8. Check that p^i % n ≠ 1 for all 1≤i<100
            for i in range(1, 100):
                if pow(self.p, i, n) == 1:
                    raise UserWarning("weak curve")

    def __str__(self) -> str:
        result = super().__str__()
        if self.n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self.n)}"
        else:
            result += f"\n n   = {self.n}"
        result += f"\n h = {self.h}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        if self.n > HEX_THRESHOLD:
            result += f", '{hex_string(self.n)}'"
        else:
            result += f", {self.n}"
        result += f", {self.h}"
        result += ")"
        return result


datadir = path.join(path.dirname(__file__), "data")
filename = path.join(datadir, "curves.json")
with open(filename, "r", encoding="ascii") as file_:
    CURVE_PARAMS = json.load(file_)

CURVES: Dict[str, Curve] = {
    ec_name: Curve(*params, name=ec_name)
    for ec_name, params in CURVE_PARAMS["weierstrass"].items()
}

secp256k1 = CURVES["secp256k1"]


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication.

    Q defaults to the curve generator G;
    m is reduced mod n, the order of the group.
    """
    if Q is None:
        Q = ec.G
    else:
        ec.require_on_curve(Q)

    m = int_from_integer(m) % ec.n
    return mult_aff(m, Q, ec)


def double_mult(
    u: Integer, H: Point, v: Integer, Q: Point, ec: Curve = secp256k1
) -> Point:
    "Double scalar elliptic curve multiplication (u*H + v*Q)."

    return ec.add_aff(mult(u, H, ec), mult(v, Q, ec))
