#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF pytest configuration and shared test fixtures."""

import os

import pytest

from tests.cli_runner import CliRunner

os.environ["SYMKDF_DEBUG_LOGGING_DISABLED"] = "True"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()

