#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
import os
from typing import Any, Callable, Optional, TypeVar, Union

import click

from symkdf import __version__ as symkdf_version
from symkdf.utils.config import Config

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)


def symkdf_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(symkdf_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def symkdf_config_option(
    required: bool = True,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling config files.

    Provides: `config: Optional[Config]` configuration loaded from the file.

    :param required: Config file is required
    :param help: Customized help message, defaults to None
    :return: Click decorator.
    """

    def callback(
        ctx: click.Context,
        param: click.Parameter,  # pylint: disable=unused-argument  # click's callback signature
        value: Optional[str],
    ) -> Optional[Config]:
        if ctx.resilient_parsing or not value:
            return None
        return Config.create_from_file(value)

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        return click.option(
            "-c",
            "--config",
            type=click.Path(resolve_path=True, exists=True, dir_okay=False),
            required=required,
            help=help or "Path to the YAML/JSON configuration file.",
            callback=callback,
        )(func)

    return decorator


def symkdf_output_option(
    required: bool = True,
    force: bool = False,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling on output file.

    Provides: `output: str` a full path to file.
    The force option is not passed to click command.

    :param required: Output option is required, defaults to True
    :param force: Include --force option, defaults to False
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def callback(
        ctx: click.Context,
        param: click.Parameter,  # pylint: disable=unused-argument  # click's callback signature
        value: str,
    ) -> str:
        if ctx.resilient_parsing:
            return value
        if force and value and os.path.exists(value) and not ctx.params["force"]:
            click.echo(
                "Output file already exists. "
                "Please use --force is you want to overwrite existing files."
            )
            ctx.abort()
        if "force" in ctx.params:
            del ctx.params["force"]
        return value

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        if force:
            func = click.option(
                "--force",
                default=False,
                is_flag=True,
                help="Force overwriting of existing files.",
                is_eager=True,
            )(func)
        return click.option(
            "-o",
            "--output",
            type=click.Path(resolve_path=True, dir_okay=False),
            required=required,
            help=help or "Path to a file, where to store the output.",
            callback=callback,
        )(func)

    return decorator


class SymkdfClickGroup(click.Group):
    """SYMKDF Click group, lists commands in the order they were added."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Get names of the group commands.

        :param ctx: click Context
        :return: Command names in definition order.
        """
        return list(self.commands)
