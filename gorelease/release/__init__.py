# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release subsystem for gorelease.

Everything that touches built artifacts lives here: the platform vocabulary,
build-output validation, checksum manifests, artifact collection, the
Makefile/output build contract, npm packaging, and the GitHub release store.
"""
