"""Exception types shared by the option validator, the key store and the cipher engine.

Validation errors carry the message shown to the user, so catching code may simply ``print(exc)``.

Hierarchy:

    RSASampleError
    ├── ParseError
    ├── ValidationError
    │   ├── NoActionSpecified
    │   ├── ConflictingActions
    │   ├── MissingKey
    │   ├── InvalidKeyOrInput
    │   ├── OutputNotWritable
    │   └── WorkingDirectoryNotWritable
    └── CryptoError
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSASampleError(Exception):
    """Base class for every error raised by rsasample."""


class ParseError(RSASampleError):
    """The command line could not be split into known flags and values."""


class ValidationError(RSASampleError):
    """A well-formed command line that asks for something impossible.

    Attributes:
        default_message: Message used when the error is raised without arguments.
    """
    default_message: str = "Invalid options"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoActionSpecified(ValidationError):
    default_message = "Please define action: encode, decode, generate"


class ConflictingActions(ValidationError):
    default_message = "Please define only one action: encode, decode, generate, help"


class MissingKey(ValidationError):
    default_message = "Please specify the key to use"


class InvalidKeyOrInput(ValidationError):
    default_message = "Please specify valid key and input"


class OutputNotWritable(ValidationError):
    default_message = "Please make sure output path is writable"


class WorkingDirectoryNotWritable(ValidationError):
    default_message = "Current directory is not writable - cannot generate the keys"


class CryptoError(RSASampleError):
    """Key parsing, padding or the RSA transform itself failed."""
