# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
envgate — environment-compatibility gate for host application extensions.

Checks the interpreter and host-framework versions against minimum floors
before an extension is allowed to initialize.
"""

__version__ = "1.0.0"
