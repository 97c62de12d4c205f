"""Command line options and their validation.

Turns the raw argument list into an `ActionRequest`, checking that exactly one action is selected and that every
path the action needs can be used. Only file system metadata is consulted, no file is opened.

Typical usage example:

    validator = OptionValidator(runtime)
    request = validator.parse(["--encrypt", "sample.txt", "--key", "private.key"])
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import dataclasses
import os
import pathlib
import typing

import rsasample
from rsasample.errors import ConflictingActions
from rsasample.errors import InvalidKeyOrInput
from rsasample.errors import MissingKey
from rsasample.errors import NoActionSpecified
from rsasample.errors import OutputNotWritable
from rsasample.errors import ParseError
from rsasample.errors import WorkingDirectoryNotWritable
from rsasample.runtime import Mode
from rsasample.runtime import Runtime
from rsasample.runtime import STDOUT

APPLICATION = "rsasample"


class Flag(typing.NamedTuple):
    short: str
    description: str
    metavar: str | None = None


flags: dict[str, Flag] = {
    "key": Flag("-k", "Path to private/public key", "KEY"),
    "encrypt": Flag("-e", "Tells to encrypt input using private key", "INPUT"),
    "decrypt": Flag("-d", "Tells to decrypt input using public key", "INPUT"),
    "output": Flag("-o", f"File/stream to use as output, if not given will write to {STDOUT}", "OUTPUT"),
    "help": Flag("-h", "Display this help menu"),
    "generate": Flag("-g", "Generate private & public key in the current directory"),
    "background": Flag("-b", "Execute encryption/decryption in the background"),
    "verbose": Flag("-v", "Be verbose about what's going on"),
}


class ArgumentParser(argparse.ArgumentParser):
    """Raises `ParseError` instead of printing and exiting on malformed input.

    Messages argparse prints itself (`--version`) go to the runtime stream.
    """

    def __init__(self, *args, runtime: Runtime | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.runtime = runtime

    def _print_message(self, message: str, file: typing.TextIO | None = None) -> None:
        if message and self.runtime is not None:
            self.runtime.stream.write(message)
        else:
            super()._print_message(message, file)

    def error(self, message: str) -> typing.NoReturn:
        raise ParseError(message)


def build_parser(runtime: Runtime | None = None) -> ArgumentParser:
    parser = ArgumentParser(prog=APPLICATION, add_help=False, runtime=runtime)
    for name, flag in flags.items():
        if flag.metavar is None:
            parser.add_argument(flag.short, f"--{name}", action="store_true", help=flag.description)
        else:
            parser.add_argument(flag.short, f"--{name}", metavar=flag.metavar, help=flag.description)
    parser.add_argument("--version", action="version", version=f"%(prog)s {rsasample.__version__}")
    return parser


@dataclasses.dataclass(frozen=True)
class ActionRequest:
    """A validated request, consumed once by the dispatcher.

    Attributes:
        mode: The selected action.
        key: Key file for encryption/decryption.
        source: Input file for encryption/decryption.
        output: Output file or the "stdout" sentinel.
        background: Run the cipher job in the background.
        verbose: Reserved, currently without effect.
    """
    mode: Mode
    key: pathlib.Path | None = None
    source: pathlib.Path | None = None
    output: str | pathlib.Path = STDOUT
    background: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.mode in (Mode.ENCRYPT, Mode.DECRYPT) and (self.key is None or self.source is None):
            raise ValueError(f"{self.mode.value} requires both a key and a source")


def is_readable(path: pathlib.Path) -> bool:
    return path.exists() and os.access(path, os.R_OK)


def is_writable(path: pathlib.Path) -> bool:
    """Whether a file can be written at `path`.

    Existing files must be writable, otherwise the parent directory must be.
    """
    path = path.absolute()
    if path.exists():
        return not path.is_dir() and os.access(path, os.W_OK)
    return path.parent.is_dir() and os.access(path.parent, os.W_OK)


class OptionValidator:
    """Parses and validates command lines against the runtime it was built for."""

    def __init__(self, runtime: Runtime) -> None:
        self.runtime = runtime
        self.parser = build_parser(runtime)

    def usage(self) -> str:
        return self.parser.format_help()

    def parse(self, args: typing.Sequence[str] | None = None) -> ActionRequest:
        """Parses the arguments into a request.

        Args:
            args: The arguments without the program name. Defaults to ``sys.argv[1:]``.

        Returns:
            The validated request.

        Raises:
            ParseError: If an argument is unknown or a value is missing.
            ValidationError: If the request is well-formed but cannot be executed.
        """
        ns = self.parser.parse_args(args)
        selected = [mode for mode in Mode if getattr(ns, mode.value) not in (None, False)]
        if not selected:
            raise NoActionSpecified()
        if len(selected) > 1:
            raise ConflictingActions()
        mode = selected[0]
        match mode:
            case Mode.HELP:
                return ActionRequest(mode)
            case Mode.GENERATE:
                if not os.access(self.runtime.workdir, os.W_OK):
                    raise WorkingDirectoryNotWritable()
                return ActionRequest(mode, verbose=ns.verbose)
        if ns.key is None:
            raise MissingKey()
        key, source = pathlib.Path(ns.key), pathlib.Path(getattr(ns, mode.value))
        if not is_readable(key) or not is_readable(source):
            raise InvalidKeyOrInput()
        output = STDOUT
        if ns.output is not None and ns.output != STDOUT:
            output = pathlib.Path(ns.output)
            if not is_writable(output):
                raise OutputNotWritable()
        return ActionRequest(mode, key, source, output, ns.background, ns.verbose)
