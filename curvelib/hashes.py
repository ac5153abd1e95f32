#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions."""

import hashlib

from curvelib.alias import HashF, String


def reduce_to_hlen(msg: String, hf: HashF = hashlib.sha256) -> bytes:
    """Return the hf digest of the message.

    A text string message is utf-8 encoded, not parsed as hex-string.
    """
    if isinstance(msg, str):
        msg = msg.encode()
    # Step 4 of SEC 1 v.2 section 4.1.3
    h = hf()
    h.update(msg)
    return bytes(h.digest())
