# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

These are the only exit codes the envgate command uses. CI scripts key off
REQUIREMENT_UNMET to tell "wrong environment" apart from "broken config".
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
REQUIREMENT_UNMET: int = 4
