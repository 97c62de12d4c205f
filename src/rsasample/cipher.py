"""Encryption with the private key and decryption with the public key.

The pairing is transposed compared to textbook envelope encryption: the payload is padded with the PKCS#1 v1.5
block type 1 (as used for signatures) and transformed with the private exponent. Anyone holding ``public.key`` can
recover it. Keys produced by `rsasample.keystore` rely on this pairing.

Payloads are limited to a single RSA block, that is the key size in bytes minus 11 (245 bytes for 2048-bit keys).
Input files are read whole into memory.

Typical usage example:

    engine = CipherEngine(runtime)
    engine.run(Mode.ENCRYPT, "private.key", "sample.txt", "sample.enc")
    engine.run(Mode.DECRYPT, "public.key", "sample.enc")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import logging
import os

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric import utils as asym_utils

from rsasample.errors import CryptoError
from rsasample.keystore import load_private_key
from rsasample.keystore import load_public_key
from rsasample.runtime import Mode
from rsasample.runtime import OperationResult
from rsasample.runtime import Runtime
from rsasample.runtime import STDOUT

PADDING_OVERHEAD = 11

logger = logging.getLogger(__name__)


class CipherEngine:
    """Runs encrypt/decrypt jobs between files and the runtime output stream."""

    def __init__(self, runtime: Runtime) -> None:
        self.runtime = runtime

    def run(self,
            mode: Mode,
            key: str | os.PathLike,
            source: str | os.PathLike,
            output: str | os.PathLike = STDOUT,
            background: bool = False) -> OperationResult:
        """Encrypts or decrypts `source` with `key`.

        Args:
            mode: Mode.ENCRYPT or Mode.DECRYPT.
            key: Private key file when encrypting, public key file when decrypting.
            source: The input file.
            output: Output file, or "stdout" to print the result.
            background: Schedule the job on the runtime pool and return at once.
                The outcome of a background job is not reported to the caller.

        Returns:
            The result of the job, or an unconditional success for background jobs.

        Raises:
            ValueError: If `mode` is not a cipher mode.
        """
        if mode not in (Mode.ENCRYPT, Mode.DECRYPT):
            raise ValueError(f"{mode} is not a cipher mode")
        if background:
            self.runtime.submit(self.cipher, mode, key, source, output)
            return OperationResult(True, "Scheduled in background")
        return self.cipher(mode, key, source, output)

    def cipher(self, mode: Mode, key: str | os.PathLike, source: str | os.PathLike,
               output: str | os.PathLike) -> OperationResult:
        """Synchronous body of `run`. Nothing is printed when the job fails."""
        try:
            with open(source, "rb") as f:
                data = f.read()
            if mode is Mode.ENCRYPT:
                result = encrypt(load_private_key(key), data)
            else:
                result = decrypt(load_public_key(key), data)
            if output == STDOUT:
                self.runtime.write(render(mode, result))
            else:
                with open(output, "wb") as f:
                    f.write(result)
        except (CryptoError, OSError) as exc:
            logger.error("%s of %s failed: %s", mode.value.capitalize(), source, exc)
            return OperationResult(False, str(exc))
        return OperationResult(True)


def render(mode: Mode, data: bytes) -> str:
    """Text form of a result: Base64 for ciphertext, UTF-8 (with replacement) for plaintext."""
    if mode is Mode.ENCRYPT:
        return base64.b64encode(data).decode("ascii")
    return data.decode("utf-8", errors="replace")


def block_size(key: rsa.RSAPrivateKey | rsa.RSAPublicKey) -> int:
    return (key.key_size + 7) // 8


def encrypt(key: rsa.RSAPrivateKey, message: bytes) -> bytes:
    """Encrypts the message with the private key.

    The payload is padded with PKCS#1 v1.5 block type 1 and signed without a DigestInfo wrapper.

    Args:
        key: The private key.
        message: At most block size minus 11 bytes.

    Returns:
        The ciphertext, exactly one block long.

    Raises:
        CryptoError: If the message is too long for the key.
    """
    limit = block_size(key) - PADDING_OVERHEAD
    if len(message) > limit:
        raise CryptoError(f"Data must not be longer than {limit} bytes")
    try:
        return key.sign(message, padding.PKCS1v15(), asym_utils.NoDigestInfo())
    except ValueError as exc:
        raise CryptoError(str(exc)) from exc


def decrypt(key: rsa.RSAPublicKey, ciphertext: bytes) -> bytes:
    """Decrypts a ciphertext produced by `encrypt` with the matching public key.

    Args:
        key: The public key.
        ciphertext: One block of ciphertext.

    Returns:
        The recovered message.

    Raises:
        CryptoError: If the ciphertext was not produced by the matching private key or has the wrong length.
    """
    try:
        return key.recover_data_from_signature(ciphertext, padding.PKCS1v15(), None)
    except (InvalidSignature, ValueError) as exc:
        raise CryptoError("Decryption error, ciphertext does not match the key") from exc

