#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console script for HKDF symmetric key derivation."""

import logging
import os
import sys
from typing import Optional

import click

from symkdf import SYMKDF_YML_INDENT
from symkdf.apps.utils import symkdf_logger
from symkdf.apps.utils.common_cli_options import (
    SymkdfClickGroup,
    symkdf_apps_common_options,
    symkdf_config_option,
    symkdf_output_option,
)
from symkdf.apps.utils.utils import SYMKDFAppError, catch_symkdf_error, format_raw_data, store_key
from symkdf.crypto.hash import KDF_HASH_ALGORITHMS
from symkdf.crypto.hkdf import (
    DEFAULT_HASH_ALG,
    DEFAULT_INFO,
    DEFAULT_KEY_USAGES,
    DEFAULT_SYMM_ALG,
    DEFAULT_SYMM_KEY_LENGTH,
    derive_key_from_config,
)
from symkdf.crypto.keys import EnumKeyUsage, EnumSymmetricAlgorithm
from symkdf.crypto.rng import DEFAULT_SALT_SIZE, random_salt
from symkdf.utils.config import Config
from symkdf.utils.misc import write_file

logger = logging.getLogger(__name__)

HASH_CHOICES = [alg.label for alg in KDF_HASH_ALGORITHMS] + [
    str(alg.description) for alg in KDF_HASH_ALGORITHMS
]


def get_config_template() -> str:
    """Get YAML configuration template of key derivation.

    :return: Commented YAML template.
    """
    indent = " " * SYMKDF_YML_INDENT
    usages = "\n".join(f"{indent}- {usage.label}" for usage in DEFAULT_KEY_USAGES)
    return (
        "# ===========  SYMKDF key derivation configuration  ===========\n"
        "# Input keying material: hexadecimal string or path to a binary/hex file. A file path\n"
        "# prefixed by 'binary:' is always loaded as raw bytes.\n"
        "# It must be high-entropy secret data, not a password.\n"
        "ikm: ikm.bin\n"
        "# Salt: hexadecimal string or path to a binary/hex file. Non-secret, use a fresh one\n"
        "# for every derived key ('symkdf generate-salt').\n"
        f'salt: "{random_salt().hex()}"\n'
        "# Context string used for domain separation.\n"
        f"info: {DEFAULT_INFO}\n"
        f"# HKDF hash algorithm: {', '.join(alg.label for alg in KDF_HASH_ALGORITHMS)}\n"
        f"hash: {DEFAULT_HASH_ALG.label}\n"
        "# Length of the derived key in bits.\n"
        f"length: {DEFAULT_SYMM_KEY_LENGTH}\n"
        f"# Algorithm of the derived key: {', '.join(EnumSymmetricAlgorithm.labels())}\n"
        f"algorithm: {DEFAULT_SYMM_ALG.label}\n"
        f"# Usages of the derived key: {', '.join(EnumKeyUsage.labels())}\n"
        f"usages:\n{usages}\n"
        "# Optional base path of the key files <output>.bin and <output>.txt, relative paths\n"
        "# are resolved against the directory of this file.\n"
        "# output: derived_key\n"
    )


@click.group(name="symkdf", no_args_is_help=True, cls=SymkdfClickGroup)
@symkdf_apps_common_options
def main(log_level: int) -> None:
    """Derive symmetric keys from input keying material using HKDF (RFC 5869)."""
    symkdf_logger.install(level=log_level, stream=sys.stderr)


@main.command(name="derive", no_args_is_help=True)
@click.option(
    "-k",
    "--ikm",
    help="Input keying material as hexadecimal string or path to a binary/hex file, "
    "prefix the path by 'binary:' to load the file content as is.",
)
@click.option(
    "-s",
    "--salt",
    help="Salt as hexadecimal string or path to a binary/hex file, "
    "prefix the path by 'binary:' to load the file content as is.",
)
@click.option(
    "-i",
    "--info",
    help=f"Context string for domain separation. Default is '{DEFAULT_INFO}'.",
)
@click.option(
    "-a",
    "--hash",
    "hash_alg",
    type=click.Choice(HASH_CHOICES, case_sensitive=False),
    help=f"HKDF hash algorithm. Default is {DEFAULT_HASH_ALG.label}.",
)
@click.option(
    "-l",
    "--length",
    type=click.IntRange(min=1),
    help=f"Length of the derived key in bits. Default is {DEFAULT_SYMM_KEY_LENGTH}.",
)
@click.option(
    "--algorithm",
    type=click.Choice(EnumSymmetricAlgorithm.labels(), case_sensitive=False),
    help=f"Algorithm of the derived key. Default is {DEFAULT_SYMM_ALG.label}.",
)
@click.option(
    "-u",
    "--usage",
    "usages",
    type=click.Choice(EnumKeyUsage.labels(), case_sensitive=False),
    multiple=True,
    help="Usage of the derived key, can be repeated. Default is encrypt and decrypt.",
)
@symkdf_config_option(required=False)
@symkdf_output_option(
    required=False,
    help="Base path of output files, the key is stored as <output>.bin and <output>.txt.",
)
@click.option(
    "--hexdump",
    "use_hexdump",
    is_flag=True,
    default=False,
    help="Print the derived key as hexdump.",
)
def derive(
    ikm: Optional[str],
    salt: Optional[str],
    info: Optional[str],
    hash_alg: Optional[str],
    length: Optional[int],
    algorithm: Optional[str],
    usages: tuple[str, ...],
    config: Optional[Config],
    output: Optional[str],
    use_hexdump: bool,
) -> None:
    """Derive a symmetric key.

    Parameters may come from the configuration file, command line options take precedence.
    A relative 'output' from the configuration file is resolved against its directory.
    """
    config = config or Config()
    overrides = {
        "ikm": ikm,
        "salt": salt,
        "info": info,
        "hash": hash_alg,
        "length": length,
        "algorithm": algorithm,
        "usages": list(usages) or None,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    for required in ("ikm", "salt"):
        if config.get(required) is None:
            raise SYMKDFAppError(
                f"The '{required}' must be specified by --{required} option or in configuration."
            )

    if not output and config.get("output"):
        output = config.get_output_file_name("output")

    key = derive_key_from_config(config)
    logger.info(f"Derived {key}")
    raw_key = key.export()
    if output:
        base_name = os.path.splitext(output)[0]
        store_key(base_name, raw_key)
        click.echo(f"The key has been stored: {base_name}.bin, {base_name}.txt")
    click.echo(format_raw_data(raw_key, use_hexdump=True) if use_hexdump else raw_key.hex())


@main.command(name="generate-salt")
@click.option(
    "-n",
    "--size",
    type=click.IntRange(min=1),
    default=DEFAULT_SALT_SIZE,
    show_default=True,
    help="Size of the salt in bytes.",
)
@symkdf_output_option(required=False, help="Path to a file, where to store the binary salt.")
def generate_salt(size: int, output: Optional[str]) -> None:
    """Generate random salt."""
    salt = random_salt(size)
    if output:
        write_file(salt, output, mode="wb")
        click.echo(f"The salt has been stored: {output}")
    click.echo(salt.hex())


@main.command(name="get-template", no_args_is_help=True)
@symkdf_output_option(force=True)
def get_template(output: str) -> None:
    """Create template of the key derivation configuration."""
    write_file(get_config_template(), output)
    click.echo(f"The configuration template has been created: {output}")


@catch_symkdf_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
