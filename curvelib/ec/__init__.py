#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module curvelib.ec."""

from curvelib.ec.curve import (
    CURVES,
    Curve,
    CurveSubGroup,
    double_mult,
    mult,
    secp256k1,
)
from curvelib.ec.curve_group import CurveGroup, mult_aff
from curvelib.ec.mont_curve import MONT_CURVES, MontCurve, curve25519, mult_mont
from curvelib.ec.sec_point import bytes_from_point, point_from_octets

__all__ = [
    "CURVES",
    "Curve",
    "CurveSubGroup",
    "double_mult",
    "mult",
    "secp256k1",
    "CurveGroup",
    "mult_aff",
    "MONT_CURVES",
    "MontCurve",
    "curve25519",
    "mult_mont",
    "bytes_from_point",
    "point_from_octets",
]
