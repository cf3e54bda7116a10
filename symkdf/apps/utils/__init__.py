#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF application utilities and helper functions.

Logging setup, shared click options and error handling of SYMKDF command-line applications.
"""
