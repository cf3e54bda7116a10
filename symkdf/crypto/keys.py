#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2020-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""SYMKDF symmetric key provider.

This module is the cryptography provider the key derivation is built on. Its surface
follows the raw-key part of the W3C Web Cryptography API:

* :func:`import_key` turns raw bytes into a key handle bound to an algorithm,
  a set of usages and an extractable flag,
* :func:`derive_bits` runs HKDF (RFC 5869) over an HKDF base key,
* :func:`export_key` returns the raw bytes of an extractable key,
* :func:`generate_key` creates a random symmetric key.

All rejections are reported with the exception classes from
:mod:`symkdf.crypto.exceptions`.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from typing_extensions import Self

from symkdf.crypto.exceptions import (
    SYMKDFDataError,
    SYMKDFInvalidAccessError,
    SYMKDFNotSupportedError,
    SYMKDFOperationError,
    SYMKDFSyntaxError,
)
from symkdf.crypto.hash import (
    EnumHashAlgorithm,
    get_kdf_hash_algorithm,
    hash_algorithm_from_name,
)
from symkdf.crypto.rng import random_bytes
from symkdf.crypto.symkdf_hmac import hmac, hmac_validate
from symkdf.crypto.symmetric import (
    AES_KEY_SIZES,
    aes_cbc_decrypt,
    aes_cbc_encrypt,
    aes_ctr_decrypt,
    aes_ctr_encrypt,
    aes_gcm_decrypt,
    aes_gcm_encrypt,
    aes_key_unwrap,
    aes_key_wrap,
)
from symkdf.utils.symkdf_enum import SymkdfEnum

logger = logging.getLogger(__name__)

HKDF_ALGORITHM = "HKDF"


class EnumKeyFormat(SymkdfEnum):
    """Key import/export formats."""

    RAW = (0, "raw", "Raw key bytes")


class EnumKeyUsage(SymkdfEnum):
    """Operations a key handle may be permitted to perform."""

    ENCRYPT = (0, "encrypt", "Encrypt data")
    DECRYPT = (1, "decrypt", "Decrypt data")
    SIGN = (2, "sign", "Compute message authentication code")
    VERIFY = (3, "verify", "Verify message authentication code")
    DERIVE_KEY = (4, "deriveKey", "Derive a key")
    DERIVE_BITS = (5, "deriveBits", "Derive raw bits")
    WRAP_KEY = (6, "wrapKey", "Wrap a key")
    UNWRAP_KEY = (7, "unwrapKey", "Unwrap a key")


class EnumSymmetricAlgorithm(SymkdfEnum):
    """Symmetric key algorithms."""

    AES_GCM = (0, "AES-GCM", "AES in Galois/Counter Mode")
    AES_CBC = (1, "AES-CBC", "AES in Cipher Block Chaining mode with PKCS#7 padding")
    AES_CTR = (2, "AES-CTR", "AES in Counter mode")
    AES_KW = (3, "AES-KW", "AES key wrap (RFC 3394)")
    HMAC = (4, "HMAC", "Hash-based message authentication code")


AES_ALGORITHMS = (
    EnumSymmetricAlgorithm.AES_GCM,
    EnumSymmetricAlgorithm.AES_CBC,
    EnumSymmetricAlgorithm.AES_CTR,
    EnumSymmetricAlgorithm.AES_KW,
)

ALLOWED_USAGES: dict[Union[str, EnumSymmetricAlgorithm], tuple[EnumKeyUsage, ...]] = {
    HKDF_ALGORITHM: (EnumKeyUsage.DERIVE_KEY, EnumKeyUsage.DERIVE_BITS),
    EnumSymmetricAlgorithm.AES_GCM: (
        EnumKeyUsage.ENCRYPT,
        EnumKeyUsage.DECRYPT,
        EnumKeyUsage.WRAP_KEY,
        EnumKeyUsage.UNWRAP_KEY,
    ),
    EnumSymmetricAlgorithm.AES_CBC: (
        EnumKeyUsage.ENCRYPT,
        EnumKeyUsage.DECRYPT,
        EnumKeyUsage.WRAP_KEY,
        EnumKeyUsage.UNWRAP_KEY,
    ),
    EnumSymmetricAlgorithm.AES_CTR: (
        EnumKeyUsage.ENCRYPT,
        EnumKeyUsage.DECRYPT,
        EnumKeyUsage.WRAP_KEY,
        EnumKeyUsage.UNWRAP_KEY,
    ),
    EnumSymmetricAlgorithm.AES_KW: (EnumKeyUsage.WRAP_KEY, EnumKeyUsage.UNWRAP_KEY),
    EnumSymmetricAlgorithm.HMAC: (EnumKeyUsage.SIGN, EnumKeyUsage.VERIFY),
}

KeyUsages = Iterable[Union[str, EnumKeyUsage]]
AlgorithmIdentifier = Union[str, EnumSymmetricAlgorithm]


def get_symmetric_algorithm(algorithm: AlgorithmIdentifier) -> EnumSymmetricAlgorithm:
    """Get symmetric algorithm enum member from its name.

    :param algorithm: Algorithm name (e.g. "AES-GCM", case-insensitive) or enum member.
    :raises SYMKDFNotSupportedError: Unknown algorithm.
    :return: Symmetric algorithm enum member.
    """
    if isinstance(algorithm, EnumSymmetricAlgorithm):
        return algorithm
    if isinstance(algorithm, str) and EnumSymmetricAlgorithm.contains(algorithm):
        return EnumSymmetricAlgorithm.from_label(algorithm)
    raise SYMKDFNotSupportedError(f"Unsupported key algorithm: {algorithm}")


def get_key_usages(
    usages: KeyUsages, algorithm: Union[str, EnumSymmetricAlgorithm]
) -> frozenset[EnumKeyUsage]:
    """Normalize key usages and check them against the key algorithm.

    :param usages: Usage names or enum members.
    :param algorithm: HKDF_ALGORITHM or symmetric algorithm of the key.
    :raises SYMKDFNotSupportedError: Unknown algorithm.
    :raises SYMKDFSyntaxError: Empty usages, unknown usage or usage not permitted for algorithm.
    :return: Set of key usages.
    """
    if isinstance(algorithm, str) and algorithm.upper() == HKDF_ALGORITHM:
        algorithm = HKDF_ALGORITHM
    else:
        algorithm = get_symmetric_algorithm(algorithm)
    ret: set[EnumKeyUsage] = set()
    for usage in usages:
        if isinstance(usage, EnumKeyUsage):
            ret.add(usage)
        elif isinstance(usage, str) and EnumKeyUsage.contains(usage):
            ret.add(EnumKeyUsage.from_label(usage))
        else:
            raise SYMKDFSyntaxError(f"Unknown key usage: {usage}")
    if not ret:
        raise SYMKDFSyntaxError("Usages must not be empty for a secret key")
    allowed = ALLOWED_USAGES[algorithm]
    not_allowed = [usage.label for usage in ret if usage not in allowed]
    if not_allowed:
        name = algorithm if isinstance(algorithm, str) else algorithm.label
        raise SYMKDFSyntaxError(
            f"Usages {', '.join(sorted(not_allowed))} are not permitted for {name} keys"
        )
    return frozenset(ret)


@dataclass(frozen=True)
class HkdfParams:
    """Parameters of HKDF bit derivation.

    :param hash: Hash algorithm of the underlying HMAC.
    :param salt: Salt, non-secret value, ideally unique per derivation.
    :param info: Context and application specific information.
    """

    hash: Union[str, EnumHashAlgorithm]
    salt: bytes
    info: bytes


class KeyHandle(abc.ABC):
    """Abstract key handle.

    The handle keeps key material bound to the algorithm, the permitted usages and
    the extractable flag it was created with. Raw key material is reachable only
    through :func:`export_key` for extractable keys.
    """

    def __init__(
        self, key_data: bytes, extractable: bool, usages: frozenset[EnumKeyUsage]
    ) -> None:
        """Initialize the key handle.

        :param key_data: Raw key material.
        :param extractable: Whether the raw key material can be exported.
        :param usages: Permitted usages.
        """
        self._key_data = key_data
        self.extractable = extractable
        self.usages = usages

    @property
    @abc.abstractmethod
    def algorithm_name(self) -> str:
        """Get the name of the key algorithm.

        :return: Algorithm name.
        """

    @property
    def length(self) -> int:
        """Get key length in bits.

        :return: Key length in bits.
        """
        return len(self._key_data) * 8

    def check_usage(self, usage: EnumKeyUsage) -> None:
        """Check that the key is permitted to perform given operation.

        :param usage: Requested usage.
        :raises SYMKDFInvalidAccessError: The key was not created with the usage.
        """
        if usage not in self.usages:
            raise SYMKDFInvalidAccessError(
                f"The {self.algorithm_name} key does not allow the '{usage.label}' usage"
            )

    def export(self) -> bytes:
        """Export raw key material.

        :raises SYMKDFInvalidAccessError: The key is not extractable.
        :return: Raw key bytes.
        """
        return export_key(EnumKeyFormat.RAW, self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.algorithm_name}, {self.length} bits)"

    def __str__(self) -> str:
        usages = ", ".join(sorted(usage.label for usage in self.usages))
        return (
            f"{self.algorithm_name} key, {self.length} bits, "
            f"{'extractable' if self.extractable else 'non-extractable'}, usages: {usages}"
        )


class HkdfBaseKey(KeyHandle):
    """Input keying material imported for HKDF derivation."""

    @property
    def algorithm_name(self) -> str:
        """Get the name of the key algorithm.

        :return: Algorithm name.
        """
        return HKDF_ALGORITHM


class SymmetricKey(KeyHandle):
    """Symmetric key handle with the operations of its algorithm.

    Every operation checks the key usages first and raises
    :class:`SYMKDFInvalidAccessError` for an operation the key does not allow.
    """

    def __init__(
        self,
        key_data: bytes,
        algorithm: EnumSymmetricAlgorithm,
        extractable: bool,
        usages: frozenset[EnumKeyUsage],
        hash_algorithm: Optional[EnumHashAlgorithm] = None,
    ) -> None:
        """Initialize symmetric key handle.

        :param key_data: Raw key material.
        :param algorithm: Key algorithm.
        :param extractable: Whether the raw key material can be exported.
        :param usages: Permitted usages.
        :param hash_algorithm: Hash algorithm, used by HMAC keys only.
        """
        super().__init__(key_data, extractable, usages)
        self.algorithm = algorithm
        self.hash_algorithm = hash_algorithm

    @property
    def algorithm_name(self) -> str:
        """Get the name of the key algorithm.

        :return: Algorithm name.
        """
        if self.algorithm == EnumSymmetricAlgorithm.HMAC and self.hash_algorithm:
            return f"HMAC-{self.hash_algorithm.description}"
        return self.algorithm.label

    def _check_algorithm(self, *algorithms: EnumSymmetricAlgorithm) -> None:
        if self.algorithm not in algorithms:
            raise SYMKDFInvalidAccessError(
                f"The operation is not supported by {self.algorithm_name} key"
            )

    def _encrypt(self, data: bytes, iv: bytes, associated_data: bytes) -> bytes:
        self._check_algorithm(
            EnumSymmetricAlgorithm.AES_GCM,
            EnumSymmetricAlgorithm.AES_CBC,
            EnumSymmetricAlgorithm.AES_CTR,
        )
        if self.algorithm == EnumSymmetricAlgorithm.AES_GCM:
            return aes_gcm_encrypt(self._key_data, data, iv, associated_data)
        if self.algorithm == EnumSymmetricAlgorithm.AES_CBC:
            return aes_cbc_encrypt(self._key_data, data, iv)
        return aes_ctr_encrypt(self._key_data, data, iv)

    def _decrypt(self, data: bytes, iv: bytes, associated_data: bytes) -> bytes:
        self._check_algorithm(
            EnumSymmetricAlgorithm.AES_GCM,
            EnumSymmetricAlgorithm.AES_CBC,
            EnumSymmetricAlgorithm.AES_CTR,
        )
        if self.algorithm == EnumSymmetricAlgorithm.AES_GCM:
            return aes_gcm_decrypt(self._key_data, data, iv, associated_data)
        if self.algorithm == EnumSymmetricAlgorithm.AES_CBC:
            return aes_cbc_decrypt(self._key_data, data, iv)
        return aes_ctr_decrypt(self._key_data, data, iv)

    def encrypt(self, data: bytes, iv: bytes, associated_data: bytes = b"") -> bytes:
        """Encrypt data with the key.

        :param data: Plain data.
        :param iv: IV (12 bytes for AES-GCM, 16 bytes for AES-CBC) or counter block (AES-CTR).
        :param associated_data: Additional authenticated data, AES-GCM only.
        :raises SYMKDFInvalidAccessError: The key does not allow encryption.
        :return: Encrypted data, AES-GCM authentication tag appended.
        """
        self.check_usage(EnumKeyUsage.ENCRYPT)
        return self._encrypt(data, iv, associated_data)

    def decrypt(self, data: bytes, iv: bytes, associated_data: bytes = b"") -> bytes:
        """Decrypt data with the key.

        :param data: Encrypted data, AES-GCM authentication tag appended.
        :param iv: IV (12 bytes for AES-GCM, 16 bytes for AES-CBC) or counter block (AES-CTR).
        :param associated_data: Additional authenticated data, AES-GCM only.
        :raises SYMKDFInvalidAccessError: The key does not allow decryption.
        :raises SYMKDFOperationError: Authentication or padding check failed.
        :return: Plain data.
        """
        self.check_usage(EnumKeyUsage.DECRYPT)
        return self._decrypt(data, iv, associated_data)

    def wrap_key(self, key: KeyHandle, iv: Optional[bytes] = None) -> bytes:
        """Export a key and encrypt it with this key.

        AES-KW keys use RFC 3394 key wrap, other AES keys encrypt the raw key with the
        given IV.

        :param key: Extractable key to be wrapped.
        :param iv: IV for AES-GCM/AES-CBC/AES-CTR wrapping keys.
        :raises SYMKDFInvalidAccessError: The key does not allow wrapping.
        :return: Wrapped key.
        """
        self.check_usage(EnumKeyUsage.WRAP_KEY)
        raw_key = export_key(EnumKeyFormat.RAW, key)
        if self.algorithm == EnumSymmetricAlgorithm.AES_KW:
            return aes_key_wrap(self._key_data, raw_key)
        if iv is None:
            raise SYMKDFOperationError(f"IV is required to wrap a key with {self.algorithm_name}")
        return self._encrypt(raw_key, iv, b"")

    def unwrap_key(
        self,
        wrapped_key: bytes,
        algorithm: AlgorithmIdentifier,
        usages: KeyUsages,
        extractable: bool = True,
        iv: Optional[bytes] = None,
    ) -> "SymmetricKey":
        """Decrypt a wrapped key and import it.

        :param wrapped_key: Wrapped key.
        :param algorithm: Algorithm of the unwrapped key.
        :param usages: Usages of the unwrapped key.
        :param extractable: Whether the unwrapped key can be exported.
        :param iv: IV for AES-GCM/AES-CBC/AES-CTR wrapping keys.
        :raises SYMKDFInvalidAccessError: The key does not allow unwrapping.
        :raises SYMKDFOperationError: Integrity check of the wrapped key failed.
        :return: Unwrapped key.
        """
        self.check_usage(EnumKeyUsage.UNWRAP_KEY)
        if self.algorithm == EnumSymmetricAlgorithm.AES_KW:
            raw_key = aes_key_unwrap(self._key_data, wrapped_key)
        elif iv is None:
            raise SYMKDFOperationError(
                f"IV is required to unwrap a key with {self.algorithm_name}"
            )
        else:
            raw_key = self._decrypt(wrapped_key, iv, b"")
        key = import_key(EnumKeyFormat.RAW, raw_key, algorithm, extractable, usages)
        assert isinstance(key, SymmetricKey)
        return key

    def sign(self, data: bytes) -> bytes:
        """Compute HMAC of the data.

        :param data: Data to authenticate.
        :raises SYMKDFInvalidAccessError: The key does not allow signing.
        :return: HMAC value.
        """
        self.check_usage(EnumKeyUsage.SIGN)
        self._check_algorithm(EnumSymmetricAlgorithm.HMAC)
        assert self.hash_algorithm
        return hmac(self._key_data, data, self.hash_algorithm)

    def verify(self, data: bytes, signature: bytes) -> bool:
        """Verify HMAC of the data.

        :param data: Authenticated data.
        :param signature: HMAC value to verify.
        :raises SYMKDFInvalidAccessError: The key does not allow verification.
        :return: True if the signature matches, False otherwise.
        """
        self.check_usage(EnumKeyUsage.VERIFY)
        self._check_algorithm(EnumSymmetricAlgorithm.HMAC)
        assert self.hash_algorithm
        return hmac_validate(self._key_data, data, signature, self.hash_algorithm)

    def __eq__(self, obj: Any) -> bool:
        """Check object equality.

        :param obj: Object to compare with this instance.
        :return: True if both keys have the same algorithm, usages and key material.
        """
        return (
            isinstance(obj, self.__class__)
            and self.algorithm == obj.algorithm
            and self.hash_algorithm == obj.hash_algorithm
            and self.usages == obj.usages
            and self._key_data == obj._key_data  # pylint: disable=protected-access
        )

    def __hash__(self) -> int:
        return hash((self.algorithm, self.usages, self.length))

    @classmethod
    def generate_key(
        cls,
        algorithm: AlgorithmIdentifier = EnumSymmetricAlgorithm.AES_GCM,
        length: int = 256,
        usages: KeyUsages = (EnumKeyUsage.ENCRYPT, EnumKeyUsage.DECRYPT),
        extractable: bool = True,
        hash_alg: Union[str, EnumHashAlgorithm] = EnumHashAlgorithm.SHA256,
    ) -> Self:
        """Generate random symmetric key.

        :param algorithm: Key algorithm, defaults to AES-GCM.
        :param length: Key length in bits, defaults to 256.
        :param usages: Key usages, defaults to encrypt and decrypt.
        :param extractable: Whether the raw key material can be exported.
        :param hash_alg: Hash algorithm of HMAC keys.
        :raises SYMKDFOperationError: Invalid key length.
        :return: Generated key.
        """
        if length <= 0 or length % 8:
            raise SYMKDFOperationError(f"Invalid key length: {length} bits")
        key = import_key(
            EnumKeyFormat.RAW,
            random_bytes(length // 8),
            algorithm,
            extractable,
            usages,
            hash_alg=hash_alg,
        )
        assert isinstance(key, cls)
        return key


def _check_key_format(fmt: Union[str, EnumKeyFormat]) -> None:
    if isinstance(fmt, EnumKeyFormat) or (
        isinstance(fmt, str) and EnumKeyFormat.contains(fmt)
    ):
        return
    raise SYMKDFNotSupportedError(f"Unsupported key format: {fmt}")


def import_key(
    fmt: Union[str, EnumKeyFormat],
    key_data: bytes,
    algorithm: AlgorithmIdentifier,
    extractable: bool,
    usages: KeyUsages,
    hash_alg: Union[str, EnumHashAlgorithm] = EnumHashAlgorithm.SHA256,
) -> KeyHandle:
    """Import raw key material as a key handle.

    :param fmt: Key format, only RAW is supported.
    :param key_data: Raw key material.
    :param algorithm: "HKDF" for an HKDF base key, otherwise a symmetric algorithm.
    :param extractable: Whether the raw key material can be exported later.
    :param usages: Permitted key usages.
    :param hash_alg: Hash algorithm bound to HMAC keys, ignored for other algorithms.
    :raises SYMKDFNotSupportedError: Unsupported format, algorithm or hash.
    :raises SYMKDFSyntaxError: Invalid usages or extractable HKDF key.
    :raises SYMKDFDataError: Key material not valid for the algorithm.
    :return: HkdfBaseKey for HKDF, SymmetricKey otherwise.
    """
    _check_key_format(fmt)
    key_data = bytes(key_data)
    if isinstance(algorithm, str) and algorithm.upper() == HKDF_ALGORITHM:
        if extractable:
            raise SYMKDFSyntaxError("HKDF keys can't be imported as extractable")
        key_usages = get_key_usages(usages, HKDF_ALGORITHM)
        if not key_data:
            raise SYMKDFDataError("HKDF key material must not be empty")
        logger.debug(f"Importing {len(key_data) * 8} bits of HKDF key material")
        return HkdfBaseKey(key_data, extractable=False, usages=key_usages)

    symm_alg = get_symmetric_algorithm(algorithm)
    key_usages = get_key_usages(usages, symm_alg)
    hash_algorithm = None
    if symm_alg in AES_ALGORITHMS:
        if len(key_data) * 8 not in AES_KEY_SIZES:
            raise SYMKDFDataError(
                f"Invalid {symm_alg.label} key length: {len(key_data) * 8} bits, "
                f"expected one of {', '.join(str(size) for size in AES_KEY_SIZES)}"
            )
    else:
        if not key_data:
            raise SYMKDFDataError("HMAC key material must not be empty")
        get_kdf_hash_algorithm(hash_alg)
        hash_algorithm = hash_algorithm_from_name(hash_alg)
    logger.debug(f"Importing {len(key_data) * 8} bits {symm_alg.label} key")
    return SymmetricKey(
        key_data,
        algorithm=symm_alg,
        extractable=extractable,
        usages=key_usages,
        hash_algorithm=hash_algorithm,
    )


def derive_bits(params: HkdfParams, base_key: KeyHandle, length: int) -> bytes:
    """Derive bits from an HKDF base key (RFC 5869 extract and expand).

    :param params: HKDF hash, salt and info.
    :param base_key: HKDF base key allowing the deriveBits usage.
    :param length: Number of bits to derive, positive multiple of 8.
    :raises SYMKDFInvalidAccessError: Base key is not HKDF key or can't derive bits.
    :raises SYMKDFNotSupportedError: Unsupported hash algorithm.
    :raises SYMKDFOperationError: Invalid length.
    :return: Derived bits.
    """
    if not isinstance(base_key, HkdfBaseKey):
        raise SYMKDFInvalidAccessError(
            f"Bits can be derived only from HKDF keys, got {base_key.algorithm_name} key"
        )
    base_key.check_usage(EnumKeyUsage.DERIVE_BITS)
    hash_algorithm = get_kdf_hash_algorithm(params.hash)
    hash_name = hash_algorithm_from_name(params.hash).description
    if length <= 0 or length % 8:
        raise SYMKDFOperationError(
            f"Invalid length: {length} bits, must be a positive multiple of 8"
        )
    max_length = 255 * hash_algorithm.digest_size * 8
    if length > max_length:
        raise SYMKDFOperationError(
            f"Invalid length: {length} bits, HKDF-{hash_name} "
            f"can derive at most {max_length} bits"
        )
    logger.debug(f"Deriving {length} bits using HKDF-{hash_name}")
    hkdf_obj = HKDF(
        algorithm=hash_algorithm,
        length=length // 8,
        salt=bytes(params.salt) or None,
        info=bytes(params.info),
    )
    return hkdf_obj.derive(base_key._key_data)  # pylint: disable=protected-access


def export_key(fmt: Union[str, EnumKeyFormat], key: KeyHandle) -> bytes:
    """Export raw key material of an extractable key.

    :param fmt: Key format, only RAW is supported.
    :param key: Key to export.
    :raises SYMKDFNotSupportedError: Unsupported format.
    :raises SYMKDFInvalidAccessError: The key is not extractable.
    :return: Raw key bytes.
    """
    _check_key_format(fmt)
    if not key.extractable:
        raise SYMKDFInvalidAccessError(f"The {key.algorithm_name} key is not extractable")
    return key._key_data  # pylint: disable=protected-access


def generate_key(
    algorithm: AlgorithmIdentifier,
    length: int,
    usages: KeyUsages,
    extractable: bool = True,
) -> SymmetricKey:
    """Generate random symmetric key.

    :param algorithm: Key algorithm.
    :param length: Key length in bits.
    :param usages: Key usages.
    :param extractable: Whether the raw key material can be exported.
    :return: Generated key.
    """
    return SymmetricKey.generate_key(
        algorithm=algorithm, length=length, usages=usages, extractable=extractable
    )
