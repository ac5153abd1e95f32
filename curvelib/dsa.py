#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implementation according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

The ephemeral nonce is drawn from the secure random source
(see curvelib.entropy), unless explicitly provided.
The message digest is taken as a big-endian integer,
without truncation to the bit-length of the group order.
"""

import contextlib
import hashlib
from dataclasses import InitVar, dataclass, field
from typing import Optional, Tuple, Type, TypeVar, Union

from dataclasses_json import DataClassJsonMixin, config

from curvelib.alias import INF, HashF, Integer, Octets, Point, String
from curvelib.ec.curve import Curve, double_mult, mult, secp256k1
from curvelib.ec.number_theory import mod_inv
from curvelib.ec.sec_point import point_from_octets
from curvelib.entropy import randbelow
from curvelib.exceptions import CurveLibRuntimeError, CurveLibValueError
from curvelib.hashes import reduce_to_hlen
from curvelib.utils import bytes_from_octets, int_from_integer, int_repr

# private key as int, bytes, or hex-string
PrvKey = Integer

# public key as curve point or SEC 1 v.2 compressed/uncompressed octets
Key = Union[Point, Octets]

_Sig = TypeVar("_Sig", bound="Sig")


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """ECDSA signature.

    The (r, s) pair is serialized as compact fixed-size octets,
    r and s being big-endian on ec.n_size bytes each
    (i.e. 64 bytes for secp256k1).

    The curve is not part of the dict/json representation:
    it defaults to secp256k1.
    """

    # scalar, 0 < r < ec.n (ec.n is the curve order)
    r: int
    # scalar, 0 < s < ec.n (ec.n is the curve order)
    s: int
    ec: Curve = field(
        default=secp256k1,
        repr=False,
        compare=False,
        metadata=config(exclude=lambda _: True),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # r is a scalar, fail if r is not in [1, n-1]
        if not 0 < self.r < self.ec.n:
            raise CurveLibValueError(f"scalar r not in 1..n-1: {int_repr(self.r)}")

        # ensure r is congruent to a valid x-coordinate
        r = self.r
        while r < self.ec.p:
            if self.ec.is_valid_x(r):
                break
            r += self.ec.n
        else:
            err_msg = "r is not (congruent to) a valid x-coordinate: "
            err_msg += int_repr(self.r)
            raise CurveLibValueError(err_msg)

        # s is a scalar, fail if s is not in [1, n-1]
        if not 0 < self.s < self.ec.n:
            raise CurveLibValueError(f"scalar s not in 1..n-1: {int_repr(self.s)}")

    def serialize(self, check_validity: bool = True) -> bytes:
        "Return the compact r || s representation of the signature."
        if check_validity:
            self.assert_valid()

        out = self.r.to_bytes(self.ec.n_size, byteorder="big", signed=False)
        out += self.s.to_bytes(self.ec.n_size, byteorder="big", signed=False)
        return out

    @classmethod
    def parse(
        cls: Type[_Sig],
        data: Octets,
        ec: Curve = secp256k1,
        check_validity: bool = True,
    ) -> _Sig:
        "Return a Sig from its compact r || s representation."
        data = bytes_from_octets(data, 2 * ec.n_size)
        r = int.from_bytes(data[: ec.n_size], byteorder="big", signed=False)
        s = int.from_bytes(data[ec.n_size :], byteorder="big", signed=False)
        return cls(r, s, ec, check_validity)


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    "Return the private key as int in [1, n-1]."
    q = int_from_integer(prv_key)
    if not 0 < q < ec.n:
        raise CurveLibValueError(f"private key not in 1..n-1: {int_repr(q)}")
    return q


def point_from_key(key: Key, ec: Curve = secp256k1) -> Point:
    """Return the public key as curve point.

    The key can be an affine point, that must be on the curve,
    or its SEC 1 v.2 octet representation.
    """
    if key is INF or isinstance(key, tuple):
        ec.require_on_curve(key)
        return key
    return point_from_octets(key, ec)


def gen_keys(
    prv_key: Optional[PrvKey] = None, ec: Curve = secp256k1
) -> Tuple[int, Point]:
    """Return a private/public (int, Point) key-pair.

    If not provided, the private key is drawn
    from the secure random source in the range [1, n-1].
    """
    if prv_key is None:
        q = 1 + randbelow(ec.n - 1)
    else:
        q = int_from_prv_key(prv_key, ec)

    return q, mult(q, ec.G, ec)


def challenge_(msg_hash: Octets, hf: HashF = hashlib.sha256) -> int:
    "Return the message digest as big-endian int."
    # the message msg_hash: a hf_len array
    hf_len = hf().digest_size
    msg_hash = bytes_from_octets(msg_hash, hf_len)
    return int.from_bytes(msg_hash, byteorder="big", signed=False)


def hash_to_int(msg: String, hf: HashF = hashlib.sha256) -> int:
    "Return the hf digest of the message as big-endian int."
    return challenge_(reduce_to_hlen(msg, hf), hf)


def _sign_(c: int, q: int, nonce: int, ec: Curve = secp256k1) -> Sig:
    # Private function for testing purposes: it allows to explore all
    # possible value of the challenge c (for low-cardinality curves).
    # It assume that q and nonce are in [1, n-1]
    # Steps numbering follows SEC 1 v.2 section 4.1.3
    K = mult(nonce, ec.G, ec)  # 1

    # mod n makes the affine x_K-coordinate a scalar
    r = K[0] % ec.n  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        raise CurveLibRuntimeError("failed to sign: r = 0")

    s = mod_inv(nonce, ec.n) * (c + r * q) % ec.n  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        raise CurveLibRuntimeError("failed to sign: s = 0")

    return Sig(r, s, ec)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    hf: HashF = hashlib.sha256,
) -> Sig:
    """Sign a hf_len bytes message according to ECDSA signature algorithm.

    If the nonce is not provided, it is drawn from the secure random source
    and drawn again in the unlikely event of r = 0 or s = 0.
    """
    # the challenge
    c = challenge_(msg_hash, hf)  # 4, 5

    # the secret key q: an integer in the range 1..n-1.
    # SEC 1 v.2 section 3.2.1
    q = int_from_prv_key(prv_key, ec)

    if nonce is not None:
        return _sign_(c, q, int_from_prv_key(nonce, ec), ec)

    while True:
        # nonce: an integer in the range 1..n-1.
        k = 1 + randbelow(ec.n - 1)  # 1
        with contextlib.suppress(CurveLibRuntimeError):
            return _sign_(c, q, k, ec)


def sign(
    msg: String,
    prv_key: PrvKey,
    nonce: Optional[PrvKey] = None,
    ec: Curve = secp256k1,
    hf: HashF = hashlib.sha256,
) -> Sig:
    """ECDSA signature.

    Implemented according to SEC 1 v.2
    The message msg is first processed by hf, yielding the value

        msg_hash = hf(msg),

    a sequence of bits of length *hf_len*,
    then taken as big-endian integer.
    A text string message is utf-8 encoded.
    """
    msg_hash = reduce_to_hlen(msg, hf)
    return sign_(msg_hash, prv_key, nonce, ec, hf)


def _assert_as_valid_(c: int, Q: Point, r: int, s: int, ec: Curve) -> None:
    # Private function for test/dev purposes

    w = mod_inv(s, ec.n)
    u = c * w % ec.n
    v = r * w % ec.n  # 4
    # Let K = u*G + v*Q.
    K = double_mult(v, Q, u, ec.G, ec)  # 5

    # Fail if infinite(K).
    if K is INF:  # 5
        raise CurveLibRuntimeError("invalid (INF) key")

    # Fail if r ≠ x_K %n.
    if r != K[0] % ec.n:  # 6, 7, 8
        raise CurveLibRuntimeError("signature verification failed")


def assert_as_valid_(
    msg_hash: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    hf: HashF = hashlib.sha256,
) -> None:
    # Private function for test/dev purposes
    # It raises Errors, while verify should always return True or False
    if isinstance(sig, Sig):
        sig.assert_valid()
    else:
        sig = Sig.parse(sig)

    c = challenge_(msg_hash, hf)  # 2, 3
    Q = point_from_key(key, sig.ec)
    if Q is INF:
        raise CurveLibValueError("INF public key")
    # second part delegated to helper function
    _assert_as_valid_(c, Q, sig.r, sig.s, sig.ec)


def assert_as_valid(
    msg: String,
    key: Key,
    sig: Union[Sig, Octets],
    hf: HashF = hashlib.sha256,
) -> None:
    # Private function for test/dev purposes
    # It raises Errors, while verify should always return True or False
    msg_hash = reduce_to_hlen(msg, hf)
    assert_as_valid_(msg_hash, key, sig, hf)


def verify_(
    msg_hash: Octets,
    key: Key,
    sig: Union[Sig, Octets],
    hf: HashF = hashlib.sha256,
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""
    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid_(msg_hash, key, sig, hf)
    except Exception:  # pylint: disable=broad-except
        return False

    return True


def verify(
    msg: String,
    key: Key,
    sig: Union[Sig, Octets],
    hf: HashF = hashlib.sha256,
) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4)."""
    msg_hash = reduce_to_hlen(msg, hf)
    return verify_(msg_hash, key, sig, hf)
