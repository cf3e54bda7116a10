#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF configuration management utilities.

Derivation parameters may be stored in a YAML or JSON file. The :class:`Config` class
wraps the loaded data, remembers where it came from so that relative file references
resolve against the configuration directory, and provides typed getters.
"""

import logging
import os
from typing import Any, Optional, Union

from typing_extensions import Self

from symkdf.exceptions import SYMKDFError, SYMKDFKeyError
from symkdf.utils.misc import load_configuration, load_hex_data, value_to_int

logger = logging.getLogger(__name__)


class Config(dict):
    """SYMKDF Configuration Manager.

    Dictionary with nested key addressing ("derivation/salt"), source directory
    tracking and typed value getters.

    :cvar SEP: Path separator used for nested key addressing in configuration.
    """

    SEP = "/"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize configuration dictionary.

        The configuration directory defaults to the current working directory.

        :param args: Variable length argument list passed to parent dictionary constructor.
        :param kwargs: Arbitrary keyword arguments passed to parent dictionary constructor.
        """
        super().__init__(*args, **kwargs)
        self.config_dir = os.getcwd()
        self.config_name = ""
        self.search_paths: list[str] = []

    @classmethod
    def create_from_file(cls, file_path: str) -> Self:
        """Create configuration object from file.

        :param file_path: Path to the YAML or JSON configuration file.
        :return: Configuration object, its search paths contain the file directory.
        """
        cfg_abs_path = os.path.abspath(file_path).replace("\\", "/")
        cfg = cls(load_configuration(cfg_abs_path))
        cfg.config_dir = os.path.dirname(cfg_abs_path)
        cfg.config_name = os.path.basename(cfg_abs_path)
        cfg.search_paths = [cfg.config_dir]
        logger.debug(f"Loaded configuration {cfg.config_name} from {cfg.config_dir}")
        return cfg

    @classmethod
    def get_path(cls, key: Union[str, int]) -> list:
        """Get keypath in list format.

        Numeric path components are converted to integers to address list items.

        :param key: Key path with separators or single integer.
        :return: List of path components.
        """
        if isinstance(key, int):
            return [key]
        ret: list[Union[int, str]] = []
        for k in key.split(cls.SEP):
            try:
                ret.append(value_to_int(k))
            except SYMKDFError:
                ret.append(k)
        return ret

    def get(self, key: str, defaults: Optional[Any] = None) -> Any:
        """Get configuration value with nested key support.

        :param key: Key name including support of key path with '/'.
        :param defaults: Default value in case that item doesn't exist, defaults to None.
        :return: Configuration value or default if key not found.
        """
        try:
            return self.__getitem__(key)
        except SYMKDFError:
            return defaults

    def __getitem__(self, key: str) -> Any:
        """Get configuration value by key path.

        :param key: Configuration key or '/' separated path to nested value.
        :raises SYMKDFError: Invalid key path.
        :raises SYMKDFKeyError: Key doesn't exist in configuration.
        :return: Configuration value at the specified key path.
        """

        def gets(source: Any, key_path: list) -> Any:
            key = key_path.pop(0)
            if isinstance(source, list):
                if not isinstance(key, int) or key >= len(source):
                    raise SYMKDFError("Invalid key path - list item must be addressed by index")
                ret = source[key]
            elif isinstance(source, dict):
                ret = dict.get(source, key)
            else:
                raise SYMKDFError("Invalid configuration key path.")

            if ret is None:
                raise SYMKDFKeyError(f"The {key} doesn't exist in configuration")

            if key_path:
                return gets(ret, key_path)
            return ret

        try:
            return gets(self, self.get_path(key))
        except SYMKDFKeyError:
            return gets(self, [key])

    def get_output_file_name(self, key: str) -> str:
        """Get the absolute output file name.

        Relative paths are resolved against the configuration directory.

        :param key: Key path to config with output file name.
        :return: The absolute path to output file with forward slashes.
        """
        path = self[key]
        if os.path.isabs(path):
            return path
        return str(os.path.abspath(os.path.join(self.config_dir, path))).replace("\\", "/")

    def get_list(self, key: str, default: Optional[list] = None) -> list:
        """Get the key value as list.

        :param key: Key name of the configuration entry.
        :param default: Default value if configuration doesn't contain the key.
        :raises SYMKDFError: If the value at the specified key is not a list.
        :return: Configuration value as list.
        """
        ret = self.get(key, default)
        if not isinstance(ret, list):
            raise SYMKDFError(f"The value is not list at key: {key}")
        return ret

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get the key value as integer.

        :param key: Key name of the configuration entry.
        :param default: Default value if configuration doesn't contain it.
        :raises SYMKDFError: The value is not integer at specified key.
        :return: Integer loaded from configuration.
        """
        ret = self.get(key, default)
        if ret is None or isinstance(ret, bool):
            raise SYMKDFError(f"The value is not integer at key: {key}")
        return value_to_int(ret)

    def get_str(self, key: str, default: Optional[str] = None) -> str:
        """Get the key value as string.

        :param key: Key name of the configuration entry.
        :param default: Default value to return if the key doesn't exist in configuration.
        :raises SYMKDFError: If the retrieved value is not a string type.
        :return: Configuration value as string.
        """
        ret = self.get(key, default)
        if not isinstance(ret, str):
            raise SYMKDFError(f"The value is not string at key: {key}")
        return ret

    def load_hex_value(
        self,
        key: str,
        default: Optional[bytes] = None,
        expected_size: Optional[int] = None,
    ) -> bytes:
        """Load binary value from configuration.

        The value may be a hexadecimal string, or a path to a file holding either
        a hexadecimal string or binary data. Paths are searched relative to the
        configuration directory.

        :param key: Configuration key of the value.
        :param default: Default value to use if the configuration key doesn't exist.
        :param expected_size: Expected size of the value in bytes, not checked if None.
        :raises SYMKDFError: If the key doesn't exist and no default is provided.
        :return: Loaded value.
        """
        ret = self.get(key, default)
        if ret is None:
            raise SYMKDFError(f"The key '{key}' doesn't exist.")
        if isinstance(ret, int) and not isinstance(ret, bool):
            raise SYMKDFError(
                f"The '{key}' value must be a quoted hexadecimal string or a file path"
            )
        return load_hex_data(
            source=ret, search_paths=self.search_paths, name=key, expected_size=expected_size
        )
