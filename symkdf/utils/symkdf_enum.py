#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF custom enumeration extensions.

Enumerations in SYMKDF carry a numeric tag, a label used on the command line and in
configuration files, and an optional human readable description.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from typing_extensions import Self

from symkdf.exceptions import SYMKDFKeyError, SYMKDFTypeError


@dataclass(frozen=True)
class SymkdfEnumMember:
    """SYMKDF Enum member representation.

    This class represents a single member of a SYMKDF enumeration, containing
    the numeric tag, label, and optional description for the enumeration value.
    """

    tag: int
    label: str
    description: Optional[str] = None


class SymkdfEnum(SymkdfEnumMember, Enum):
    """SYMKDF enhanced enumeration.

    Members compare equal to their tag and to their label, and can be looked up by
    either of them.
    """

    def __eq__(self, __value: object) -> bool:
        """Check equality of enum value with another object.

        :param __value: Object to compare with this enum value.
        :return: True if the object equals tag or label, False otherwise.
        """
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        """Calculate hash value for the enum instance.

        :return: Hash value as integer.
        """
        return hash((self.tag, self.label, self.description))

    @classmethod
    def labels(cls) -> list[str]:
        """Get list of labels of all enum members.

        :return: List of all labels.
        """
        return [value.label for value in cls.__members__.values()]

    @classmethod
    def contains(cls, obj: Union[int, str]) -> bool:
        """Check if given member with given tag/label exists in enum.

        :param obj: Label or tag of enum member to check for existence.
        :raises SYMKDFTypeError: Object must be either string or integer.
        :return: True if member exists, False otherwise.
        """
        if not isinstance(obj, (int, str)):
            raise SYMKDFTypeError("Object must be either string or integer")
        try:
            cls.from_attr(obj)
            return True
        except SYMKDFKeyError:
            return False

    @classmethod
    def from_attr(cls, attribute: Union[int, str]) -> Self:
        """Get enum member with given tag/label attribute.

        :param attribute: Tag value (int) or label value (str) of the enum member to find.
        :return: Found enum member matching the given attribute.
        """
        # Let's make MyPy happy, see https://github.com/python/mypy/issues/10740
        from_tag: Callable = cls.from_tag
        from_label: Callable = cls.from_label
        from_method: Callable = from_tag if isinstance(attribute, int) else from_label
        return from_method(attribute)

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching
        :raises SYMKDFKeyError: If enum with given tag is not found
        :return: Found enum member
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise SYMKDFKeyError(f"There is no {cls.__name__} item in with tag {tag} defined")

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Get enum member with given label.

        The method performs case-insensitive search through all enum members.

        :param label: Label to be used for searching
        :raises SYMKDFKeyError: If enum with given label is not found or label is not string
        :return: Found enum member
        """
        if not isinstance(label, str):
            raise SYMKDFKeyError("Label must be string")
        for item in cls.__members__.values():
            if item.label.upper() == label.upper():
                return item
        raise SYMKDFKeyError(f"There is no {cls.__name__} item with label {label} defined")
