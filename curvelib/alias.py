#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Optional, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "02 79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
# "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
#
# use curvelib.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for SEC serialized points, message hashes,
# compact ECDSA signatures, and RFC 7748 scalars and u-coordinates
Octets = Union[bytes, str]

# bytes or text string (not hex-string), e.g. a message to be signed
#    if isinstance(msg, str):
#        msg = msg.encode()
String = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor: it may be any name suitable to hashlib.new()
HashF = Callable[[], Any]


class InfinityPoint:
    """The point at infinity, i.e. the neutral element of the group law.

    It is a distinct tag, not a coordinate pair:
    no affine point, not even (0, 0) or (x, 0), can be mistaken for it.
    There is only one instance, INF, so it can be checked with 'Q is INF'.
    """

    __slots__ = ()
    _instance: Optional["InfinityPoint"] = None

    def __new__(cls) -> "InfinityPoint":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INF"

    def __reduce__(self) -> str:
        return "INF"


INF = InfinityPoint()

# Elliptic curve point in affine coordinates, or the infinity point.
# Warning: to make Point a NamedTuple would slow down the code
Point = Union[Tuple[int, int], InfinityPoint]

# Montgomery curve point in projective (X:Z) coordinates,
# the affine x-coordinate being X/Z.
ProjPoint = Tuple[int, int]

# Infinity point in projective coordinates is (int, 0).
# It can be checked with 'Q[1] == 0'
INFP = 1, 0
