#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

This are only meant to dicriminate between Exceptions being raised
by curvelib from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the curvelib versions are derived.
"""


class CurveLibValueError(ValueError):
    pass


class CurveLibTypeError(TypeError):
    pass


class CurveLibRuntimeError(RuntimeError):
    pass


class SingularCurveError(CurveLibValueError):
    "Non-prime field modulus or zero discriminant."


class PointNotOnCurveError(CurveLibValueError):
    "Coordinates not satisfying the curve equation."


class InvalidEncodingPrefixError(CurveLibValueError):
    "SEC point encoding with a leading byte not in (0x02, 0x03, 0x04)."


class RandomnessUnavailableError(CurveLibRuntimeError):
    "The secure random source failed to produce output."
