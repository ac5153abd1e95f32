#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the curvelib package."

name = "curvelib"
__version__ = "2022.6.1"
__author__ = "The curvelib developers"
__author_email__ = "devs@curvelib.org"
__copyright__ = "Copyright (C) 2021-2022 The curvelib developers"
__license__ = "MIT License"
