# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Compatibility gate for envgate.

Takes the requirement registry's descriptors, checks them fail-fast, and on the
first unmet floor notifies the host and halts the extension's initialization.
There is no retry and no re-check within a process: the operator fixes the
environment and restarts.
"""
