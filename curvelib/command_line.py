#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Command line demonstration of the curvelib engine.

It generates a secp256k1 key-pair, signs a fixed message,
verifies the signature against the right and an unrelated public key,
then runs randomized self-tests of the curve arithmetic.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import Callable, List, Optional

from curvelib import dsa
from curvelib.alias import INF
from curvelib.ec import curve25519, mont_curve, mult_aff, mult_mont, secp256k1
from curvelib.ec.curve import mult
from curvelib.ec.sec_point import bytes_from_point, point_from_octets
from curvelib.entropy import randbelow
from curvelib.exceptions import CurveLibRuntimeError

logger = logging.getLogger(__name__)

MSG = "This message is to be signed"
ROUNDS = 1 << 10


def check_encoding(rounds: int = ROUNDS) -> None:
    "Random public keys must survive SEC compressed/uncompressed round-trips."
    ec = secp256k1
    for _ in range(rounds):
        _, Q = dsa.gen_keys(ec=ec)
        for compressed in (False, True):
            if point_from_octets(bytes_from_point(Q, ec, compressed), ec) != Q:
                raise CurveLibRuntimeError(f"invalid encoding: {Q}")


def check_secp256k1(rounds: int = ROUNDS) -> None:
    "Order, commutativity, and distributivity of the secp256k1 group law."
    ec = secp256k1
    if mult_aff(ec.n, ec.G, ec) is not INF:
        raise CurveLibRuntimeError("infinity check")

    for _ in range(rounds):
        a = randbelow(ec.n)
        b = randbelow(ec.n)
        P = mult(a, ec.G, ec)
        Q = mult(b, ec.G, ec)
        PQ = ec.add(P, Q)
        if PQ != ec.add(Q, P):
            raise CurveLibRuntimeError("commutative check")
        if PQ != mult(a + b, ec.G, ec):
            raise CurveLibRuntimeError("distributive check")


def check_curve25519(rounds: int = ROUNDS) -> None:
    "Order and commutativity of the curve25519 differential addition."
    ec = curve25519
    if mult_mont(ec.n, ec.G, ec)[1] != 0:
        raise CurveLibRuntimeError("infinity check")

    for _ in range(rounds):
        a = randbelow(ec.n)
        b = randbelow(ec.n)
        P = mont_curve.mult(a, ec.G, ec)
        Q = mont_curve.mult(b, ec.G, ec)
        if not ec.proj_equality(ec.add(Q, P), ec.add(P, Q)):
            raise CurveLibRuntimeError("commutative check")


SELF_TESTS: List[Callable[[int], None]] = [
    check_encoding,
    check_secp256k1,
    check_curve25519,
]


def main(argv: Optional[List[str]] = None) -> int:
    parser = ArgumentParser(description="curvelib ECDSA demo and self-tests")
    parser.add_argument(
        "-r",
        "--rounds",
        type=int,
        default=ROUNDS,
        help=f"randomized self-test rounds (default: {ROUNDS})",
    )
    parser.add_argument(
        "-v", "--verbose", help="report self-test progress", action="store_true"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    q, Q = dsa.gen_keys()
    print("Priv Key: ", hex(q)[2:])
    print("Pub key:  ", bytes_from_point(Q).hex())

    sig = dsa.sign(MSG, q)
    _, Q1 = dsa.gen_keys()
    print("Valid sig:  ", dsa.verify(MSG, Q, sig))
    print("Invalid sig:", dsa.verify(MSG, Q1, sig))

    for self_test in SELF_TESTS:
        logger.info("running %s, %d rounds", self_test.__name__, args.rounds)
        try:
            self_test(args.rounds)
        except CurveLibRuntimeError as e:
            logger.error("%s failed: %s", self_test.__name__, e)
            return 1
        logger.info("%s passed", self_test.__name__)

    return 0


def cmd_demo() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cmd_demo()
