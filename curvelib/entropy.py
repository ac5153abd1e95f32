#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Secure random source.

Private keys, ECDSA nonces, and random curve points
are drawn from the operating system
cryptographically strong pseudo-random number generator (CSPRNG)
through the secrets module.

If the operating system cannot provide randomness
a RandomnessUnavailableError is raised:
there is no fallback to a non-cryptographic generator.
"""

import secrets

from curvelib.exceptions import CurveLibValueError, RandomnessUnavailableError
from curvelib.utils import int_repr


def randbelow(n: int) -> int:
    "Return a uniformly distributed random int in [0, n-1]."

    if n < 1:
        raise CurveLibValueError(f"invalid upper bound: {int_repr(n)}")
    try:
        return secrets.randbelow(n)
    except (OSError, NotImplementedError) as e:
        raise RandomnessUnavailableError("secure random source failure") from e


def randbytes(size: int) -> bytes:
    "Return size random bytes."

    try:
        return secrets.token_bytes(size)
    except (OSError, NotImplementedError) as e:
        raise RandomnessUnavailableError("secure random source failure") from e
