#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the symkdf command line application."""

import os
import sys
from typing import Any

import pytest

from symkdf import __version__
from symkdf.apps.symkdf_app import main, safe_main
from symkdf.apps.utils.utils import SYMKDFAppError
from symkdf.crypto.exceptions import SYMKDFDataError, SYMKDFOperationError
from symkdf.crypto.hkdf import DEFAULT_INFO, derive_key, hkdf
from symkdf.utils.misc import load_binary, load_configuration, load_text, write_file
from tests.cli_runner import CliRunner

IKM = "0b" * 22
SALT = "000102030405060708090a0b0c"


def _key_from_output(output: str) -> str:
    return output.strip().splitlines()[-1]


def test_help(cli_runner: CliRunner) -> None:
    """Test help of the application and its commands."""
    result = cli_runner.invoke(main, ["--help"])
    assert "derive" in result.output
    assert "generate-salt" in result.output
    assert "get-template" in result.output
    cli_runner.invoke(main, [], expected_code=cli_runner.get_help_error_code(False))
    cli_runner.invoke(main, ["derive"], expected_code=cli_runner.get_help_error_code(False))


def test_version(cli_runner: CliRunner) -> None:
    """Test printing of the application version."""
    result = cli_runner.invoke(main, ["--version"])
    assert __version__ in result.output


def test_derive_defaults(cli_runner: CliRunner) -> None:
    """Test derivation with default info, hash, length and algorithm."""
    result = cli_runner.invoke(main, ["derive", "-k", IKM, "-s", SALT])
    expected = hkdf(bytes.fromhex(SALT), bytes.fromhex(IKM), DEFAULT_INFO.encode(), 32)
    assert _key_from_output(result.output) == expected.hex()


@pytest.mark.parametrize(
    "hash_name,length,algorithm",
    [
        ("SHA-512", 128, "AES-CBC"),
        ("sha384", 192, "aes-ctr"),
        ("SHA-1", 256, "AES-GCM"),
    ],
)
def test_derive_options(cli_runner: CliRunner, hash_name: str, length: int, algorithm: str) -> None:
    """Test derivation with explicit hash, key length and algorithm.

    :param cli_runner: CLI runner fixture.
    :param hash_name: Name of the HKDF hash algorithm.
    :param length: Key length in bits.
    :param algorithm: Algorithm of the derived key.
    """
    cmd = ["derive", "-k", IKM, "-s", SALT, "-i", "my-app", "-a", hash_name]
    cmd.extend(["-l", str(length), "--algorithm", algorithm])
    result = cli_runner.invoke(main, cmd)
    expected = hkdf(bytes.fromhex(SALT), bytes.fromhex(IKM), b"my-app", length // 8, hash_name)
    assert _key_from_output(result.output) == expected.hex()


def test_derive_hmac_key(cli_runner: CliRunner) -> None:
    """Test derivation of HMAC key with sign and verify usages."""
    cmd = ["derive", "-k", IKM, "-s", SALT, "-a", "SHA-512", "-l", "512", "--algorithm", "HMAC"]
    cmd.extend(["-u", "sign", "-u", "verify"])
    result = cli_runner.invoke(main, cmd)
    key = derive_key(
        bytes.fromhex(IKM),
        bytes.fromhex(SALT),
        hash_alg="SHA-512",
        usages=["sign", "verify"],
        options={"length": 512, "alg": "HMAC"},
    )
    assert _key_from_output(result.output) == key.export().hex()


def test_derive_files(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test loading of input keying material and salt from files.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory with the input files.
    """
    ikm_path = os.path.join(tmpdir, "ikm.bin")
    salt_path = os.path.join(tmpdir, "salt.txt")
    write_file(bytes.fromhex(IKM), ikm_path, mode="wb")
    write_file(SALT, salt_path)

    result = cli_runner.invoke(main, ["derive", "-k", ikm_path, "-s", salt_path])
    expected = hkdf(bytes.fromhex(SALT), bytes.fromhex(IKM), DEFAULT_INFO.encode(), 32)
    assert _key_from_output(result.output) == expected.hex()


def test_derive_output(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test storing of the derived key into binary and text files.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory for the output files.
    """
    output = os.path.join(tmpdir, "keys", "derived.bin")
    result = cli_runner.invoke(main, ["derive", "-k", IKM, "-s", SALT, "-o", output])
    key_hex = _key_from_output(result.output)
    base_name = os.path.join(tmpdir, "keys", "derived")

    assert "The key has been stored" in result.output
    assert load_binary(base_name + ".bin") == bytes.fromhex(key_hex)
    assert load_text(base_name + ".txt") == key_hex


def test_derive_hexdump(cli_runner: CliRunner) -> None:
    """Test printing of the derived key as hexdump."""
    result = cli_runner.invoke(main, ["derive", "-k", IKM, "-s", SALT, "--hexdump"])
    assert "00000000:" in result.output
    assert "00000010:" in result.output


def test_derive_missing_ikm(cli_runner: CliRunner) -> None:
    """Test that missing input keying material is reported."""
    result = cli_runner.invoke(main, ["derive", "-s", SALT], expected_code=1)
    assert isinstance(result.exception, SYMKDFAppError)
    assert "ikm" in str(result.exception)


def test_derive_provider_errors(cli_runner: CliRunner) -> None:
    """Test that rejections of the key provider stop the derivation."""
    result = cli_runner.invoke(main, ["derive", "-k", "", "-s", SALT], expected_code=1)
    assert isinstance(result.exception, SYMKDFDataError)

    cmd = ["derive", "-k", IKM, "-s", SALT, "-l", "100"]
    result = cli_runner.invoke(main, cmd, expected_code=1)
    assert isinstance(result.exception, SYMKDFOperationError)

    cmd = ["derive", "-k", IKM, "-s", SALT, "-l", "120"]
    result = cli_runner.invoke(main, cmd, expected_code=1)
    assert isinstance(result.exception, SYMKDFDataError)


def test_derive_invalid_choices(cli_runner: CliRunner) -> None:
    """Test that unknown hash names and usages are rejected by the command line parser."""
    cli_runner.invoke(main, ["derive", "-k", IKM, "-s", SALT, "-a", "MD5"], expected_code=2)
    cli_runner.invoke(main, ["derive", "-k", IKM, "-s", SALT, "-u", "print"], expected_code=2)


def test_template_and_derive(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test creating of configuration template and derivation from it.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory for the configuration.
    """
    template = os.path.join(tmpdir, "derivation.yaml")
    result = cli_runner.invoke(main, ["get-template", "-o", template])
    assert "The configuration template has been created" in result.output

    config = load_configuration(template)
    assert config["ikm"] == "ikm.bin"
    assert config["info"] == DEFAULT_INFO
    assert config["usages"] == ["encrypt", "decrypt"]
    assert "output" not in config
    assert "# output: derived_key" in load_text(template)
    salt = bytes.fromhex(config["salt"])
    assert len(salt) == 16

    ikm = bytes(range(0x80, 0xA0))
    write_file(ikm, os.path.join(tmpdir, "ikm.bin"), mode="wb")
    result = cli_runner.invoke(main, ["derive", "-c", template])
    assert _key_from_output(result.output) == derive_key(ikm, salt).export().hex()

    # command line options take precedence over the configuration
    result = cli_runner.invoke(main, ["derive", "-c", template, "-l", "128", "-i", "other"])
    expected = derive_key(ikm, salt, "other", options={"length": 128})
    assert _key_from_output(result.output) == expected.export().hex()


def test_derive_config_output(cli_runner: CliRunner, tmpdir: Any, monkeypatch: Any) -> None:
    """Test storing of the key into the output given by the configuration file.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory for the configuration.
    :param monkeypatch: Pytest fixture changing the working directory.
    """
    cfg_dir = os.path.join(tmpdir, "cfg")
    config = os.path.join(cfg_dir, "derivation.yaml")
    write_file(f"ikm: '{IKM}'\nsalt: '{SALT}'\noutput: keys/derived\n", config)
    monkeypatch.chdir(str(tmpdir))

    result = cli_runner.invoke(main, ["derive", "-c", config])
    key_hex = _key_from_output(result.output)
    base_name = os.path.join(cfg_dir, "keys", "derived")
    assert load_binary(base_name + ".bin") == bytes.fromhex(key_hex)
    assert load_text(base_name + ".txt") == key_hex
    assert not os.path.exists(os.path.join(tmpdir, "keys"))

    # output option takes precedence over the configuration
    output = os.path.join(tmpdir, "other.bin")
    cli_runner.invoke(main, ["derive", "-c", config, "-o", output])
    assert load_binary(os.path.join(tmpdir, "other.bin")) == bytes.fromhex(key_hex)


def test_derive_binary_prefix(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test loading of a hexadecimal looking file as raw input keying material.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory with the input file.
    """
    ikm_path = os.path.join(tmpdir, "ikm.bin")
    write_file(b"abcd", ikm_path, mode="wb")

    result = cli_runner.invoke(main, ["derive", "-k", ikm_path, "-s", SALT])
    expected = derive_key(b"\xab\xcd", bytes.fromhex(SALT))
    assert _key_from_output(result.output) == expected.export().hex()

    result = cli_runner.invoke(main, ["derive", "-k", f"binary:{ikm_path}", "-s", SALT])
    expected = derive_key(b"abcd", bytes.fromhex(SALT))
    assert _key_from_output(result.output) == expected.export().hex()


def test_template_force(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test that existing template is overwritten only with --force.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory for the configuration.
    """
    template = os.path.join(tmpdir, "derivation.yaml")
    write_file("original", template)
    result = cli_runner.invoke(main, ["get-template", "-o", template], expected_code=1)
    assert "Output file already exists" in result.output
    assert load_text(template) == "original"

    cli_runner.invoke(main, ["get-template", "-o", template, "--force"])
    assert load_text(template) != "original"


def test_generate_salt(cli_runner: CliRunner, tmpdir: Any) -> None:
    """Test generating of random salt.

    :param cli_runner: CLI runner fixture.
    :param tmpdir: Temporary directory for the salt file.
    """
    result = cli_runner.invoke(main, ["generate-salt"])
    assert len(bytes.fromhex(_key_from_output(result.output))) == 16

    salt_path = os.path.join(tmpdir, "salt.bin")
    result = cli_runner.invoke(main, ["generate-salt", "-n", "32", "-o", salt_path])
    salt = load_binary(salt_path)
    assert len(salt) == 32
    assert _key_from_output(result.output) == salt.hex()

    cli_runner.invoke(main, ["generate-salt", "-n", "0"], expected_code=2)


def test_safe_main_app_error(monkeypatch: Any, capsys: Any) -> None:
    """Test that safe_main reports application errors with exit code 1.

    :param monkeypatch: Pytest fixture to patch the command line arguments.
    :param capsys: Pytest fixture capturing the output.
    """
    monkeypatch.setattr(sys, "argv", ["symkdf", "derive", "-s", SALT])
    with pytest.raises(SystemExit) as exc:
        safe_main()
    assert exc.value.code == 1
    assert "SYMKDFAppError" in capsys.readouterr().err


def test_safe_main_library_error(monkeypatch: Any, capsys: Any) -> None:
    """Test that safe_main reports library errors with exit code 2.

    :param monkeypatch: Pytest fixture to patch the command line arguments.
    :param capsys: Pytest fixture capturing the output.
    """
    monkeypatch.setattr(sys, "argv", ["symkdf", "derive", "-k", IKM, "-s", SALT, "-l", "100"])
    with pytest.raises(SystemExit) as exc:
        safe_main()
    assert exc.value.code == 2
    assert "SYMKDFOperationError" in capsys.readouterr().err
