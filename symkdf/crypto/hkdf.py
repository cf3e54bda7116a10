#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF HKDF key derivation utilities.

This module derives symmetric keys from high-entropy input keying material with the
HMAC-based Key Derivation Function (RFC 5869). The input keying material must not be
a password, HKDF does no key stretching.

:func:`derive_key` is the main entry point. It imports the input keying material as
an HKDF base key, derives the requested number of bits and imports them as an
extractable symmetric key. Errors of the key provider are propagated unchanged.
"""

import asyncio
import logging
from dataclasses import dataclass, fields
from typing import Any, Iterable, Mapping, Optional, Union

# Used security modules
from cryptography.hazmat.primitives.kdf.hkdf import HKDF, HKDFExpand

from symkdf.crypto.hash import EnumHashAlgorithm, get_kdf_hash_algorithm
from symkdf.crypto.keys import (
    HKDF_ALGORITHM,
    EnumKeyFormat,
    EnumKeyUsage,
    EnumSymmetricAlgorithm,
    HkdfParams,
    KeyHandle,
    SymmetricKey,
    derive_bits,
    get_symmetric_algorithm,
    import_key,
)
from symkdf.crypto.symkdf_hmac import hmac
from symkdf.exceptions import SYMKDFValueError
from symkdf.utils.config import Config

logger = logging.getLogger(__name__)

DEFAULT_INFO = "default-info"
DEFAULT_HASH_ALG = EnumHashAlgorithm.SHA256
DEFAULT_SYMM_ALG = EnumSymmetricAlgorithm.AES_GCM
DEFAULT_SYMM_KEY_LENGTH = 256
DEFAULT_KEY_USAGES = (EnumKeyUsage.ENCRYPT, EnumKeyUsage.DECRYPT)


@dataclass(frozen=True)
class KeyOptions:
    """Options of the derived key.

    :param length: Length of the derived key in bits.
    :param alg: Algorithm the derived key is imported for.
    """

    length: int = DEFAULT_SYMM_KEY_LENGTH
    alg: EnumSymmetricAlgorithm = DEFAULT_SYMM_ALG

    @classmethod
    def from_partial(
        cls, options: Optional[Union["KeyOptions", Mapping[str, Any]]] = None
    ) -> "KeyOptions":
        """Create complete options from partial ones.

        Missing or empty fields (None, 0, "") take their default values, an algorithm
        given by name is converted to its enum member.

        :param options: Options object, mapping with some of the fields or None.
        :raises SYMKDFValueError: Unknown option name.
        :raises SYMKDFNotSupportedError: Unknown algorithm.
        :return: Complete key options.
        """
        if options is None:
            return cls()
        if isinstance(options, KeyOptions):
            return options
        known = {field.name for field in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise SYMKDFValueError(f"Unknown key options: {', '.join(sorted(unknown))}")
        return cls(
            length=options.get("length") or DEFAULT_SYMM_KEY_LENGTH,
            alg=get_symmetric_algorithm(options.get("alg") or DEFAULT_SYMM_ALG),
        )

    @classmethod
    def from_config(cls, config: Config) -> "KeyOptions":
        """Create options from the 'length' and 'algorithm' configuration keys.

        :param config: Derivation configuration.
        :return: Key options, defaults used for missing or empty keys.
        """
        return cls.from_partial(
            {
                "length": config.get_int("length", DEFAULT_SYMM_KEY_LENGTH),
                "alg": config.get_str("algorithm", DEFAULT_SYMM_ALG.label),
            }
        )


def hkdf(
    salt: bytes,
    ikm: bytes,
    info: bytes,
    length: int,
    algorithm: Union[str, EnumHashAlgorithm] = DEFAULT_HASH_ALG,
) -> bytes:
    """Derive key using HKDF (HMAC-based Key Derivation Function) algorithm.

    The function implements RFC 5869 HKDF algorithm to derive cryptographic keys from
    input key material using salt and additional context information.

    :param salt: Salt value used as randomization material for key derivation.
    :param ikm: Input Key Material - the source cryptographic material.
    :param info: Additional context information for key derivation.
    :param length: Length of the derived key in bytes.
    :param algorithm: Hash algorithm, defaults to SHA-256.
    :return: Derived cryptographic key as bytes.
    """
    hkdf_obj = HKDF(
        algorithm=get_kdf_hash_algorithm(algorithm), length=length, salt=salt or None, info=info
    )
    return hkdf_obj.derive(ikm)


def hkdf_extract(
    salt: bytes, ikm: bytes, algorithm: Union[str, EnumHashAlgorithm] = DEFAULT_HASH_ALG
) -> bytes:
    """HKDF-Extract step, compute pseudorandom key from input keying material.

    :param salt: Salt, an empty salt is replaced by zeros of the hash length.
    :param ikm: Input keying material.
    :param algorithm: Hash algorithm, defaults to SHA-256.
    :return: Pseudorandom key of the hash length.
    """
    hash_algorithm = get_kdf_hash_algorithm(algorithm)
    return hmac(salt or bytes(hash_algorithm.digest_size), ikm, algorithm)


def hkdf_expand(
    prk: bytes,
    info: bytes,
    length: int,
    algorithm: Union[str, EnumHashAlgorithm] = DEFAULT_HASH_ALG,
) -> bytes:
    """HKDF-Expand step, expand pseudorandom key into output keying material.

    :param prk: Pseudorandom key, at least of the hash length.
    :param info: Context and application specific information.
    :param length: Length of the output keying material in bytes.
    :param algorithm: Hash algorithm, defaults to SHA-256.
    :return: Output keying material.
    """
    hkdf_obj = HKDFExpand(algorithm=get_kdf_hash_algorithm(algorithm), length=length, info=info)
    return hkdf_obj.derive(prk)


def _import_base_key(ikm: bytes) -> KeyHandle:
    return import_key(EnumKeyFormat.RAW, ikm, HKDF_ALGORITHM, False, [EnumKeyUsage.DERIVE_BITS])


def _derive_symmetric_key(
    base_key: KeyHandle,
    salt: bytes,
    info_str: str,
    hash_alg: Union[str, EnumHashAlgorithm],
    usages: Iterable[Union[str, EnumKeyUsage]],
    options: KeyOptions,
) -> SymmetricKey:
    params = HkdfParams(hash=hash_alg, salt=salt, info=info_str.encode("utf-8"))
    bits = derive_bits(params, base_key, options.length)
    key = import_key(EnumKeyFormat.RAW, bits, options.alg, True, usages, hash_alg=hash_alg)
    assert isinstance(key, SymmetricKey)
    return key


def derive_key(
    ikm: bytes,
    salt: bytes,
    info_str: str = DEFAULT_INFO,
    hash_alg: Union[str, EnumHashAlgorithm] = DEFAULT_HASH_ALG,
    usages: Iterable[Union[str, EnumKeyUsage]] = DEFAULT_KEY_USAGES,
    options: Optional[Union[KeyOptions, Mapping[str, Any]]] = None,
) -> SymmetricKey:
    """Derive a symmetric key from input keying material using HKDF.

    The derived key material is a deterministic function of the input keying material,
    salt, info string, hash algorithm and key length. The returned key is always
    extractable.

    :param ikm: High-entropy input keying material, not a password.
    :param salt: Salt, non-secret and ideally unique per derivation.
    :param info_str: Context string for domain separation, UTF-8 encoded.
    :param hash_alg: HKDF hash algorithm (SHA-1, SHA-256, SHA-384 or SHA-512).
    :param usages: Usages of the derived key, defaults to encrypt and decrypt.
    :param options: Key length in bits and key algorithm, missing fields use defaults
        (256 bits, AES-GCM).
    :raises SYMKDFCryptoError: Any rejection of the key provider, propagated unchanged.
    :return: Derived symmetric key.
    """
    opts = KeyOptions.from_partial(options)
    logger.debug(
        f"Deriving {opts.length} bits {opts.alg.label} key with HKDF, "
        f"salt length: {len(salt)} bytes, info: '{info_str}'"
    )
    base_key = _import_base_key(ikm)
    return _derive_symmetric_key(base_key, salt, info_str, hash_alg, usages, opts)


async def derive_key_async(
    ikm: bytes,
    salt: bytes,
    info_str: str = DEFAULT_INFO,
    hash_alg: Union[str, EnumHashAlgorithm] = DEFAULT_HASH_ALG,
    usages: Iterable[Union[str, EnumKeyUsage]] = DEFAULT_KEY_USAGES,
    options: Optional[Union[KeyOptions, Mapping[str, Any]]] = None,
) -> SymmetricKey:
    """Derive a symmetric key from input keying material using HKDF, asynchronously.

    Same contract as :func:`derive_key`. The provider calls run in the default executor
    of the running event loop, the derivation waits for the base key import.

    :param ikm: High-entropy input keying material, not a password.
    :param salt: Salt, non-secret and ideally unique per derivation.
    :param info_str: Context string for domain separation, UTF-8 encoded.
    :param hash_alg: HKDF hash algorithm (SHA-1, SHA-256, SHA-384 or SHA-512).
    :param usages: Usages of the derived key, defaults to encrypt and decrypt.
    :param options: Key length in bits and key algorithm, missing fields use defaults.
    :raises SYMKDFCryptoError: Any rejection of the key provider, propagated unchanged.
    :return: Derived symmetric key.
    """
    opts = KeyOptions.from_partial(options)
    usages = list(usages)
    loop = asyncio.get_running_loop()
    base_key = await loop.run_in_executor(None, _import_base_key, ikm)
    return await loop.run_in_executor(
        None, _derive_symmetric_key, base_key, salt, info_str, hash_alg, usages, opts
    )


def derive_key_from_config(config: Config) -> SymmetricKey:
    """Derive a symmetric key from derivation configuration.

    Recognised keys: 'ikm' and 'salt' (hexadecimal string or file path), 'info', 'hash',
    'length', 'algorithm' and 'usages'.

    :param config: Derivation configuration.
    :return: Derived symmetric key.
    """
    return derive_key(
        ikm=config.load_hex_value("ikm"),
        salt=config.load_hex_value("salt"),
        info_str=config.get_str("info", DEFAULT_INFO),
        hash_alg=config.get_str("hash", DEFAULT_HASH_ALG.label),
        usages=config.get_list("usages", [usage.label for usage in DEFAULT_KEY_USAGES]),
        options=KeyOptions.from_config(config),
    )

