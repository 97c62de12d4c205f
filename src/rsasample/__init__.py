"""RSA key generation and single-block file encryption from the command line.

Generates a 2048-bit key pair into ``private.key`` and ``public.key``, encrypts files with the private key and
decrypts them with the public key.

Typical usage example:

    with Runtime() as runtime:
        KeyStore(runtime).generate()
        CipherEngine(runtime).run(Mode.ENCRYPT, "private.key", "sample.txt")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
__version__ = "0.1.0"

from rsasample.cipher import CipherEngine  # noqa: E402
from rsasample.cipher import decrypt  # noqa: E402
from rsasample.cipher import encrypt  # noqa: E402
from rsasample.dispatch import Dispatcher  # noqa: E402
from rsasample.keystore import KeyStore  # noqa: E402
from rsasample.keystore import load_private_key  # noqa: E402
from rsasample.keystore import load_public_key  # noqa: E402
from rsasample.options import ActionRequest  # noqa: E402
from rsasample.options import OptionValidator  # noqa: E402
from rsasample.runtime import Mode  # noqa: E402
from rsasample.runtime import OperationResult  # noqa: E402
from rsasample.runtime import Runtime  # noqa: E402

__all__ = [
    "ActionRequest",
    "CipherEngine",
    "Dispatcher",
    "KeyStore",
    "Mode",
    "OperationResult",
    "OptionValidator",
    "Runtime",
    "decrypt",
    "encrypt",
    "load_private_key",
    "load_public_key",
]
