#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed/uncompressed point representation."""

from curvelib.alias import INF, Octets, Point
from curvelib.ec.curve import Curve, secp256k1
from curvelib.exceptions import (
    CurveLibValueError,
    InvalidEncodingPrefixError,
    PointNotOnCurveError,
)
from curvelib.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence.

    Return a point as compressed (0x02, 0x03) or uncompressed (0x04)
    octet sequence, according to SEC 1 v.2, section 2.3.3.
    """

    if Q is INF:
        raise CurveLibValueError("no bytes representation for infinity point")

    # check that Q is a point and that is on curve
    ec.require_on_curve(Q)

    bytes_ = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        return (b"\x03" if (Q[1] & 1) else b"\x02") + bytes_

    return b"\x04" + bytes_ + Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    """Return a tuple (x_Q, y_Q) that belongs to the curve.

    Return a tuple (x_Q, y_Q) that belongs to the curve according to
    SEC 1 v.2, section 2.3.4.
    """

    pub_key = bytes_from_octets(pub_key)

    bsize = len(pub_key)  # bytes
    if bsize == 0:
        raise InvalidEncodingPrefixError("not a point: empty octet sequence")

    if pub_key[0] in (0x02, 0x03):  # compressed point
        if bsize != ec.p_size + 1:
            err_msg = "invalid size for compressed point: "
            err_msg += f"{bsize} instead of {ec.p_size + 1}"
            raise CurveLibValueError(err_msg)
        x_Q = int.from_bytes(pub_key[1:], byteorder="big", signed=False)
        if x_Q >= ec.p:
            raise PointNotOnCurveError(f"invalid x-coordinate: '{hex_string(x_Q)}'")
        # also check x_Q validity
        y_Q = ec.y_even(x_Q) if pub_key[0] == 0x02 else ec.y_odd(x_Q)
        # y_Q = 0 is the only root: 0x03 is not a valid prefix
        if y_Q & 1 != pub_key[0] & 1:
            err_msg = f"no odd y-coordinate for x: '{hex_string(x_Q)}'"
            raise PointNotOnCurveError(err_msg)
        return x_Q, y_Q

    if pub_key[0] == 0x04:  # uncompressed point
        if bsize != 2 * ec.p_size + 1:
            err_msg = "invalid size for uncompressed point: "
            err_msg += f"{bsize} instead of {2 * ec.p_size + 1}"
            raise CurveLibValueError(err_msg)
        x_Q = int.from_bytes(pub_key[1 : ec.p_size + 1], byteorder="big", signed=False)
        y_Q = int.from_bytes(pub_key[ec.p_size + 1 :], byteorder="big", signed=False)
        if x_Q >= ec.p or y_Q >= ec.p:
            raise PointNotOnCurveError(f"point not on curve: {(x_Q, y_Q)}")
        Q = x_Q, y_Q
        if ec.is_on_curve(Q):
            return Q
        raise PointNotOnCurveError(f"point not on curve: {Q}")

    err_msg = f"not a point: invalid prefix 0x{pub_key[0]:02x}, "
    err_msg += "must be one of (02, 03, 04)"
    raise InvalidEncodingPrefixError(err_msg)
