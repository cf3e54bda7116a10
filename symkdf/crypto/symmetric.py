#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF symmetric cryptography utilities.

This module provides the AES primitives behind symmetric key handles: AES-GCM
authenticated encryption, AES-CBC with PKCS#7 padding, AES-CTR and the RFC 3394
AES key wrap.
"""


# Used security modules
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import keywrap, padding
from cryptography.hazmat.primitives.ciphers import Cipher, aead, algorithms, modes

from symkdf.crypto.exceptions import SYMKDFDataError, SYMKDFOperationError

AES_BLOCK_SIZE = algorithms.AES.block_size // 8
AES_GCM_IV_SIZE = 12
# AES key sizes in bits, the 512 bits variant of `cryptography` is AES-XTS only
AES_KEY_SIZES = (128, 192, 256)


def _check_aes_key(key: bytes) -> None:
    """Check the key is a valid AES key.

    :param key: AES key.
    :raises SYMKDFDataError: Invalid key length.
    """
    if len(key) * 8 not in AES_KEY_SIZES:
        raise SYMKDFDataError(
            "The key must be a valid AES key length: "
            f"{', '.join(str(k) for k in AES_KEY_SIZES)} bits"
        )


def aes_key_wrap(kek: bytes, key_to_wrap: bytes) -> bytes:
    """Wrap a key using AES key wrapping algorithm with a key-encrypting key (KEK).

    This function implements the AES key wrap algorithm as defined in RFC 3394.

    :param kek: The key-encrypting key used to wrap the target key.
    :param key_to_wrap: The key data to be wrapped, at least 16 bytes, multiple of 8 bytes.
    :raises SYMKDFOperationError: The key to wrap has invalid length.
    :return: The wrapped key as bytes.
    """
    _check_aes_key(kek)
    try:
        return keywrap.aes_key_wrap(kek, key_to_wrap)
    except ValueError as exc:
        raise SYMKDFOperationError(f"AES key wrap failed: {str(exc)}") from exc


def aes_key_unwrap(kek: bytes, wrapped_key: bytes) -> bytes:
    """Unwrap a key using AES key wrapping algorithm with key-encrypting key (KEK).

    :param kek: The key-encrypting key used for unwrapping.
    :param wrapped_key: The wrapped key data to be unwrapped.
    :raises SYMKDFOperationError: Integrity check of the wrapped key failed.
    :return: The unwrapped key as bytes.
    """
    _check_aes_key(kek)
    try:
        return keywrap.aes_key_unwrap(kek, wrapped_key)
    except (ValueError, keywrap.InvalidUnwrap) as exc:
        raise SYMKDFOperationError(f"AES key unwrap failed: {str(exc)}") from exc


def aes_cbc_encrypt(key: bytes, plain_data: bytes, iv_data: bytes) -> bytes:
    """Encrypt plain data with AES in CBC mode.

    The plain data are padded with PKCS#7 padding, so the cipher text is always
    at least one block long.

    :param key: AES encryption key, must be valid AES key length (128, 192, or 256 bits).
    :param plain_data: Raw data to be encrypted.
    :param iv_data: Initialization vector for CBC mode, 16 bytes.
    :raises SYMKDFDataError: Invalid key length.
    :raises SYMKDFOperationError: Invalid IV length.
    :return: Encrypted data.
    """
    _check_aes_key(key)
    if len(iv_data) != AES_BLOCK_SIZE:
        raise SYMKDFOperationError(f"The initial vector length must be {AES_BLOCK_SIZE} Bytes")
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plain_data) + padder.finalize()
    cipher = Cipher(algorithms.AES(key), modes.CBC(iv_data))
    enc = cipher.encryptor()
    return enc.update(padded) + enc.finalize()


def aes_cbc_decrypt(key: bytes, encrypted_data: bytes, iv_data: bytes) -> bytes:
    """Decrypt encrypted data with AES in CBC mode and remove PKCS#7 padding.

    :param key: The AES key for data decryption.
    :param encrypted_data: The encrypted input data to be decrypted.
    :param iv_data: Initialization vector data, 16 bytes.
    :raises SYMKDFDataError: Invalid key length.
    :raises SYMKDFOperationError: Invalid IV length, data length or padding.
    :return: Decrypted data as bytes.
    """
    _check_aes_key(key)
    if len(iv_data) != AES_BLOCK_SIZE:
        raise SYMKDFOperationError(f"The initial vector length must be {AES_BLOCK_SIZE} Bytes")
    cipher = Cipher(algorithms.AES(key), modes.CBC(iv_data))
    dec = cipher.decryptor()
    try:
        padded = dec.update(encrypted_data) + dec.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise SYMKDFOperationError(f"AES-CBC decryption failed: {str(exc)}") from exc


def aes_ctr_encrypt(key: bytes, plain_data: bytes, nonce: bytes) -> bytes:
    """Encrypt plain data with AES in CTR mode.

    :param key: The encryption key in bytes format.
    :param plain_data: Input data to be encrypted.
    :param nonce: Initial 16 bytes counter block.
    :raises SYMKDFOperationError: Invalid counter block length.
    :return: Encrypted data in bytes format.
    """
    _check_aes_key(key)
    if len(nonce) != AES_BLOCK_SIZE:
        raise SYMKDFOperationError(f"The counter block length must be {AES_BLOCK_SIZE} Bytes")
    cipher = Cipher(algorithms.AES(key), modes.CTR(nonce))
    enc = cipher.encryptor()
    return enc.update(plain_data) + enc.finalize()


def aes_ctr_decrypt(key: bytes, encrypted_data: bytes, nonce: bytes) -> bytes:
    """Decrypt data using AES algorithm in CTR mode.

    :param key: AES encryption key (must be 16, 24, or 32 bytes for AES-128/192/256).
    :param encrypted_data: The encrypted data to be decrypted.
    :param nonce: Initial 16 bytes counter block.
    :raises SYMKDFOperationError: Invalid counter block length.
    :return: Decrypted plaintext data as bytes.
    """
    # CTR is symmetric, decryption is the same keystream XOR
    return aes_ctr_encrypt(key, encrypted_data, nonce)


def aes_gcm_encrypt(
    key: bytes, plain_data: bytes, init_vector: bytes, associated_data: bytes = b""
) -> bytes:
    """Encrypt plain data with AES in GCM mode (Galois/Counter Mode).

    The authentication tag (16 bytes) is appended to the encrypted data.

    :param key: The AES encryption key (must be 128, 192, or 256 bits).
    :param plain_data: Input data to be encrypted.
    :param init_vector: Initialization vector (nonce), 12 bytes.
    :param associated_data: Additional authenticated data that remains unencrypted.
    :raises SYMKDFDataError: Invalid key length.
    :raises SYMKDFOperationError: Invalid initialization vector length.
    :return: Encrypted data with authentication tag appended.
    """
    _check_aes_key(key)
    if len(init_vector) != AES_GCM_IV_SIZE:
        raise SYMKDFOperationError(
            f"The initial vector length must be {AES_GCM_IV_SIZE} Bytes long"
        )
    aesgcm = aead.AESGCM(key)
    return aesgcm.encrypt(init_vector, plain_data, associated_data)


def aes_gcm_decrypt(
    key: bytes,
    encrypted_data: bytes,
    init_vector: bytes,
    associated_data: bytes = b"",
) -> bytes:
    """Decrypt encrypted data with AES in GCM mode (Galois/Counter Mode).

    The encrypted data must include the authentication tag appended at the end.

    :param key: The key for data decryption (16, 24, or 32 bytes for AES-128/192/256)
    :param encrypted_data: Input data with authentication tag appended
    :param init_vector: Initialization vector (nonce) - must be exactly 12 bytes
    :param associated_data: Associated data - unencrypted but authenticated data
    :raises SYMKDFDataError: Invalid key length.
    :raises SYMKDFOperationError: Invalid IV length or authentication failure.
    :return: Decrypted data as bytes
    """
    _check_aes_key(key)
    if len(init_vector) != AES_GCM_IV_SIZE:
        raise SYMKDFOperationError(
            f"The initial vector length must be {AES_GCM_IV_SIZE} Bytes long"
        )
    aesgcm = aead.AESGCM(key)
    try:
        return aesgcm.decrypt(init_vector, encrypted_data, associated_data)
    except InvalidTag as e:
        raise SYMKDFOperationError("AES-GCM decryption failed: authentication tag mismatch") from e
