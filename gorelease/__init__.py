# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
gorelease: CI glue for cross-compiled Go release pipelines.

Validates build outputs, generates checksum manifests, prepares and publishes
per-platform npm packages, and wraps the release store. Every operation is a
subcommand of the single `gorelease` CLI.
"""

__version__ = "0.1.0"
