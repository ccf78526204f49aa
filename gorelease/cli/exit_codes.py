# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

Workflow steps only distinguish zero from non-zero, and the validation
commands have always exited 1 on failure, so 1 is the code for "the check
said no". The higher codes separate problems with the invocation itself.
"""

SUCCESS: int = 0
VALIDATION_ERROR: int = 1
USER_ERROR: int = 2
CONFIG_ERROR: int = 3
RUNTIME_ERROR: int = 4
