"""The Command Line Interface for rsasample.

Parses the command line, runs the selected action and waits for background jobs before the process exits.

Exit codes: 0 on success, 1 if the action failed, 2 if the command line was rejected. All messages, including
validation errors, go to standard output; diagnostics from the logging module go to standard error.

Typical usage example:

    rsasample --generate
    rsasample --encrypt sample.txt --key private.key --output sample.enc
    python -m rsasample --decrypt sample.enc --key public.key
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import sys
import typing

from rsasample.dispatch import Dispatcher
from rsasample.errors import ParseError
from rsasample.errors import ValidationError
from rsasample.options import OptionValidator
from rsasample.runtime import Runtime

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def main(argv: typing.Sequence[str] | None = None, runtime: Runtime | None = None) -> int:
    """Runs one invocation of the tool.

    Args:
        argv: Arguments without the program name. Defaults to ``sys.argv[1:]``.
        runtime: Runtime to use, a fresh one for the current directory if omitted.

    Returns:
        The process exit code.
    """
    runtime = runtime if runtime is not None else Runtime()
    with runtime:
        validator = OptionValidator(runtime)
        try:
            request = validator.parse(argv)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else EXIT_SUCCESS
        except (ParseError, ValidationError) as exc:
            runtime.write(str(exc))
            runtime.write(validator.usage().rstrip("\n"))
            return EXIT_USAGE
        ok = Dispatcher(runtime, validator.usage()).execute(request)
    return EXIT_SUCCESS if ok else EXIT_FAILURE


def cli() -> None:
    """Console script entry point."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(main())


if __name__ == "__main__":
    cli()
