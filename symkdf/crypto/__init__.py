#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF cryptographic operations module.

This module provides HKDF key derivation, the symmetric key provider it is built on
and the hash, HMAC, AES and random number primitives behind the key handles.
"""
