#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""X25519 elliptic curve Diffie-Hellman key agreement.

Implementation of the X25519 function of RFC 7748, section 5,
on top of the Montgomery ladder of curvelib.ec.mont_curve:

https://datatracker.ietf.org/doc/html/rfc7748

Scalars and u-coordinates are 32 bytes little-endian octet sequences.
The two entities exchange x25519_base(k) public keys,
then each of them computes the shared secret x25519(k, u)
with its own private scalar and the peer public u-coordinate.
"""

from typing import Tuple

from curvelib.alias import Octets
from curvelib.ec.mont_curve import MontCurve, curve25519, mult_mont
from curvelib.entropy import randbytes
from curvelib.utils import bytes_from_octets

X25519_SIZE = 32


def decode_scalar_25519(k: Octets) -> int:
    """Return the clamped scalar from its 32 bytes encoding.

    The three least significant bits are cleared,
    so that the scalar is a multiple of the cofactor 8,
    bit 255 is cleared and bit 254 is set.
    """
    k_list = list(bytes_from_octets(k, X25519_SIZE))
    k_list[0] &= 248
    k_list[31] &= 127
    k_list[31] |= 64
    return int.from_bytes(bytes(k_list), byteorder="little", signed=False)


def decode_u_coordinate(u: Octets, ec: MontCurve = curve25519) -> int:
    """Return the u-coordinate from its 32 bytes encoding.

    The most significant bit is masked;
    non-canonical values (i.e. in [p, 2^255-1]) are accepted
    and reduced mod p.
    """
    u_list = list(bytes_from_octets(u, X25519_SIZE))
    u_list[31] &= 127
    return int.from_bytes(bytes(u_list), byteorder="little", signed=False) % ec.p


def encode_u_coordinate(u: int, ec: MontCurve = curve25519) -> bytes:
    "Return the 32 bytes little-endian encoding of the u-coordinate."
    return (u % ec.p).to_bytes(X25519_SIZE, byteorder="little", signed=False)


def x25519(k: Octets, u: Octets, ec: MontCurve = curve25519) -> bytes:
    """Return the X25519 function of the scalar k and u-coordinate u.

    The point at infinity is encoded as the zero u-coordinate.
    """
    m = decode_scalar_25519(k)
    x = decode_u_coordinate(u, ec)
    X, Z = mult_mont(m, (x, 1), ec)
    # pow(0, p-2, p) is zero: INF maps to u = 0
    return encode_u_coordinate(X * pow(Z, ec.p - 2, ec.p), ec)


def x25519_base(k: Octets, ec: MontCurve = curve25519) -> bytes:
    "Return the X25519 public key of the private scalar k."
    return x25519(k, encode_u_coordinate(ec.G_x, ec), ec)


def x25519_gen_keys(ec: MontCurve = curve25519) -> Tuple[bytes, bytes]:
    "Return a random private scalar / public u-coordinate key-pair."
    k = randbytes(X25519_SIZE)
    return k, x25519_base(k, ec)
