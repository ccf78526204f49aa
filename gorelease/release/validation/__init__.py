# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build-output validation.

Subsystems:
  - sizes: size difference against a percentage tolerance
  - architecture: `file` descriptor against the platform signature
  - health: running the host's native artifact
  - report: the end-of-run summary
  - validator: the comparison run tying them together
"""
