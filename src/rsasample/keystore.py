"""Key pair generation and key file handling.

Key files hold a single line of Base64 text: the DER encoding of a PKCS#8 private key in ``private.key`` and of an
X.509 SubjectPublicKeyInfo public key in ``public.key``.

Typical usage example:

    result = KeyStore(runtime).generate()
    priv = load_private_key(runtime.private_key_path)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import logging
import pathlib
import typing

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from rsasample.errors import CryptoError
from rsasample.runtime import KEY_SIZE
from rsasample.runtime import OperationResult
from rsasample.runtime import PUBLIC_EXPONENT
from rsasample.runtime import Runtime

ERR_COULD_NOT_CREATE_KP = "Could not create Key Pair"

logger = logging.getLogger(__name__)


class KeyPair(typing.NamedTuple):
    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey


class KeyStore:
    """Generates a fresh key pair into the runtime working directory."""

    def __init__(self, runtime: Runtime) -> None:
        self.runtime = runtime

    def generate_key_pair(self) -> KeyPair:
        """Generates a 2048-bit RSA key pair.

        Returns:
            The new key pair.

        Raises:
            CryptoError: If the backend refuses to generate the key.
        """
        try:
            priv = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=KEY_SIZE)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise CryptoError(ERR_COULD_NOT_CREATE_KP) from exc
        return KeyPair(priv, priv.public_key())

    def generate(self) -> OperationResult:
        """Generates a key pair and writes both halves, public key first.

        No cleanup happens if the second write fails, the public key is then left on disk.

        Returns:
            Success, or failure with a message describing what went wrong.
        """
        try:
            pair = self.generate_key_pair()
        except CryptoError as exc:
            logger.error("Key generation failed: %s", exc.__cause__)
            return OperationResult(False, str(exc))
        try:
            write_key(self.runtime.public_key_path, export_public_key(pair.public_key))
            write_key(self.runtime.private_key_path, export_private_key(pair.private_key))
        except OSError as exc:
            logger.error("Could not write key file %s: %s", exc.filename, exc.strerror)
            return OperationResult(False, str(exc))
        return OperationResult(True)


def export_private_key(key: rsa.RSAPrivateKey) -> bytes:
    """PKCS#8 DER encoding of the private key, unencrypted."""
    return key.private_bytes(encoding=serialization.Encoding.DER,
                             format=serialization.PrivateFormat.PKCS8,
                             encryption_algorithm=serialization.NoEncryption())


def export_public_key(key: rsa.RSAPublicKey) -> bytes:
    """X.509 SubjectPublicKeyInfo DER encoding of the public key."""
    return key.public_bytes(encoding=serialization.Encoding.DER,
                            format=serialization.PublicFormat.SubjectPublicKeyInfo)


def write_key(file: pathlib.Path, data: bytes) -> None:
    """Writes the key as a single Base64 line, creating or truncating the file.

    Args:
        file: Destination file.
        data: DER encoded key.
    """
    with open(file, "w", encoding="ascii") as f:
        f.write(base64.b64encode(data).decode("ascii"))


def read_key(file: pathlib.Path) -> bytes:
    """Reads a key file written by `write_key`.

    All lines are joined without line breaks before decoding, so wrapped Base64 is accepted as well.

    Args:
        file: The key file.

    Returns:
        The DER encoded key.

    Raises:
        OSError: If the file cannot be read.
        CryptoError: If the content is not valid Base64.
    """
    with open(file, "r", encoding="ascii", errors="replace") as f:
        payload = "".join(line.strip() for line in f)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise CryptoError(f"Key file {file} is not valid Base64") from exc


def load_private_key(file: pathlib.Path) -> rsa.RSAPrivateKey:
    """Loads a PKCS#8 RSA private key from a key file.

    Raises:
        OSError: If the file cannot be read.
        CryptoError: If the file does not hold an RSA private key.
    """
    try:
        key = serialization.load_der_private_key(read_key(file), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Key file {file} does not contain a PKCS#8 private key") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise CryptoError(f"Key file {file} does not contain an RSA key")
    return key


def load_public_key(file: pathlib.Path) -> rsa.RSAPublicKey:
    """Loads an X.509 RSA public key from a key file.

    Raises:
        OSError: If the file cannot be read.
        CryptoError: If the file does not hold an RSA public key.
    """
    try:
        key = serialization.load_der_public_key(read_key(file))
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Key file {file} does not contain an X.509 public key") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise CryptoError(f"Key file {file} does not contain an RSA key")
    return key
