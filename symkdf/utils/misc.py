#!/usr/bin/env python
# -*- coding: UTF-8 -*-
# Copyright 2020-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF miscellaneous utilities and helper functions.

This module provides file operations, configuration loading and value conversion
helpers used by the SYMKDF library and its command line application.
"""

import json
import logging
import os
import re
from typing import Callable, Optional, Union

import yaml

from symkdf.exceptions import (
    SYMKDFError,
    SYMKDFFileNotFoundError,
    SYMKDFLengthError,
    SYMKDFValueError,
)

logger = logging.getLogger(__name__)

# Prefix forcing a file to be loaded as raw bytes by load_hex_data
BINARY_FILE_PREFIX = "binary:"


def load_binary(path: str, search_paths: Optional[list[str]] = None) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the binary file to load.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :return: Content of the binary file as bytes.
    """
    data = load_file(path, mode="rb", search_paths=search_paths)
    assert isinstance(data, bytes)
    return data


def load_text(path: str, search_paths: Optional[list[str]] = None) -> str:
    """Load text file content into string.

    :param path: Path to the text file to load.
    :param search_paths: List of directories to search for the file, defaults to None.
    :return: Content of the text file as string.
    """
    text = load_file(path, mode="r", search_paths=search_paths)
    assert isinstance(text, str)
    return text


def load_file(
    path: str, mode: str = "r", search_paths: Optional[list[str]] = None
) -> Union[str, bytes]:
    """Load file content from specified path.

    The method searches for the file in provided search paths and loads its content
    either as text or binary data based on the specified mode.

    :param path: Path to the file to be loaded.
    :param mode: File reading mode, 'r' for text or 'rb' for binary.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :return: File content as string (text mode) or bytes (binary mode).
    """
    path = find_file(path, search_paths=search_paths)
    logger.debug(f"Loading {'binary' if 'b' in mode else 'text'} file from {path}")
    encoding = None if "b" in mode else "utf-8"
    with open(path, mode, encoding=encoding) as f:
        return f.read()


def write_file(
    data: Union[str, bytes],
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
) -> int:
    """Write data to a file, creating parent directories when needed.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding ('ascii', 'utf-8'), defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)


def get_abs_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """Convert relative or absolute file path to normalized absolute path.

    :param file_path: File path to be converted to absolute path.
    :param base_dir: Base directory to create absolute path, system CWD if not specified.
    :return: Absolute file path with normalized separators.
    """
    if os.path.isabs(file_path):
        return file_path.replace("\\", "/")

    return os.path.abspath(os.path.join(base_dir or os.getcwd(), file_path)).replace("\\", "/")


def _find_path(
    path: str,
    check_func: Callable[[str], bool],
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find and return the full path to a file or directory.

    Search paths take precedence over current working directory when both are specified.

    :param path: File name, part of file path or full path to search for.
    :param check_func: Function to validate if the found path exists and meets criteria.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path or empty string if not found and raise_exc is False.
    :raises SYMKDFFileNotFoundError: File not found in any of the searched locations.
    """
    path = path.replace("\\", "/")

    if os.path.isabs(path):
        if not check_func(path):
            if raise_exc:
                raise SYMKDFFileNotFoundError(f"Path '{path}' not found")
            return ""
        return path
    if search_paths:
        for dir_candidate in search_paths:
            if not dir_candidate:
                continue
            dir_candidate = dir_candidate.replace("\\", "/")
            path_candidate = get_abs_path(path, base_dir=dir_candidate)
            if check_func(path_candidate):
                return path_candidate
    if use_cwd and check_func(path):
        return get_abs_path(path)
    # list all directories in error message
    searched_in: list[str] = []
    if use_cwd:
        searched_in.append(os.path.abspath(os.curdir))
    if search_paths:
        searched_in.extend(filter(None, search_paths))
    searched_in = [s.replace("\\", "/") for s in searched_in]
    err_str = f"Path '{path}' not found, Searched in: {', '.join(searched_in)}"
    if not raise_exc:
        logger.debug(err_str)
        return ""
    raise SYMKDFFileNotFoundError(err_str)


def find_file(
    file_path: str,
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find file in filesystem using multiple search strategies.

    :param file_path: File name, part of file path or full path to search for.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path to the found file.
    :raises SYMKDFFileNotFoundError: File not found in any of the search locations.
    """
    return _find_path(
        path=file_path,
        check_func=os.path.isfile,
        use_cwd=use_cwd,
        search_paths=search_paths,
        raise_exc=raise_exc,
    )


def value_to_int(value: Union[bytes, bytearray, int, str], default: Optional[int] = None) -> int:
    """Convert value from multiple formats to integer.

    Supports conversion from integers, bytes, bytearrays, and string representations
    (binary, octal, decimal and hexadecimal formats with optional prefixes).

    :param value: Input value to convert (int, bytes, bytearray, or str).
    :param default: Default value returned when conversion fails.
    :return: Converted integer value.
    :raises SYMKDFError: Unsupported input type or invalid conversion without default.
    """
    if isinstance(value, int):
        return value

    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")

    if isinstance(value, str) and value != "":
        match = re.match(
            r"(?P<prefix>0[box])?(?P<number>[0-9a-f_]+)(?P<suffix>[ul]{0,3})$",
            value.strip().lower(),
        )
        if match:
            base = {"0b": 2, "0o": 8, "0": 10, "0x": 16, None: 10}[match.group("prefix")]
            try:
                return int(match.group("number"), base=base)
            except ValueError:
                pass

    if default is not None:
        return default
    raise SYMKDFError(f"Invalid input number type({type(value)}) with value ({value})")


def _parse_hex(text: str) -> bytes:
    """Parse hexadecimal text, keeping leading zero bytes."""
    hex_text = re.sub(r"[\s_]", "", text)
    if hex_text.lower().startswith("0x"):
        hex_text = hex_text[2:]
    if not re.fullmatch(r"([0-9a-fA-F]{2})*", hex_text):
        raise SYMKDFValueError(f"Invalid hexadecimal data: {text}")
    return bytes.fromhex(hex_text)


def load_hex_data(
    source: Union[str, bytes],
    search_paths: Optional[list[str]] = None,
    name: str = "data",
    expected_size: Optional[int] = None,
) -> bytes:
    """Load binary data from a hexadecimal string or a file.

    The source is first looked up as a file. A text file is expected to contain
    a hexadecimal string, any other file is taken as raw binary content. A source
    prefixed by "binary:" is always loaded as raw content of the file. When no file
    is found, the source itself is parsed as a hexadecimal string. Unlike integer based
    conversions, leading zero bytes are preserved.

    :param source: File path, hexadecimal string or bytes.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param name: Name of the loaded data used in error messages.
    :param expected_size: Expected size of the data in bytes, not checked if None.
    :raises SYMKDFError: Invalid input data.
    :raises SYMKDFLengthError: Data size mismatch.
    :return: Loaded data.
    """
    if isinstance(source, bytes):
        data = source
    elif source.startswith(BINARY_FILE_PREFIX):
        data = load_binary(source[len(BINARY_FILE_PREFIX) :], search_paths=search_paths)
    else:
        file_path = find_file(source, search_paths=search_paths, raise_exc=False)
        if file_path:
            data = load_binary(file_path)
            try:
                text = data.decode("utf-8")
                # whitespace only content is binary data too
                if text.strip():
                    data = _parse_hex(text)
                    logger.debug(
                        f"Loaded {name} from {file_path} as hexadecimal text, "
                        f"use '{BINARY_FILE_PREFIX}{source}' to load the raw file content"
                    )
            except (SYMKDFValueError, UnicodeDecodeError):
                logger.debug(f"Loading {name} from {file_path} as binary data")
        else:
            try:
                data = _parse_hex(source)
            except SYMKDFValueError as exc:
                raise SYMKDFError(f"Invalid {name} input: {source}") from exc

    if expected_size is not None and len(data) != expected_size:
        raise SYMKDFLengthError(f"Invalid {name} size. Expected: {expected_size}, got: {len(data)}")
    return data


def load_configuration(path: str, search_paths: Optional[list[str]] = None) -> dict:
    """Load configuration from YAML or JSON file.

    The method attempts to parse the file content as JSON first, then falls back
    to YAML parsing if JSON parsing fails.

    :param path: Path to configuration file (relative or absolute).
    :param search_paths: List of paths where to search for the file, defaults to None.
    :raises SYMKDFError: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        config = load_text(path, search_paths=search_paths)
    except Exception as exc:
        raise SYMKDFError(f"Can't load configuration file: {str(exc)}") from exc

    config_data: Optional[dict] = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except (yaml.YAMLError, UnicodeDecodeError):
            pass

    if not config_data:
        raise SYMKDFError(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise SYMKDFError(f"Invalid configuration file: {path}")

    return config_data
