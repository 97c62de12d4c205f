"""Runtime configuration and the value types shared by every component.

Holds the constants of the tool as well as the per-invocation state: working directory, output stream and the
pool running background cipher jobs. A single instance is built by the entry point and passed down.

Typical usage example:

    with Runtime() as runtime:
        KeyStore(runtime).generate()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from concurrent import futures
import enum
import logging
import pathlib
import sys
import typing

KEY_SIZE: int = 2048
PUBLIC_EXPONENT: int = 65537
PRIVATE_KEY_NAME: str = "private.key"
PUBLIC_KEY_NAME: str = "public.key"
STDOUT: str = "stdout"

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    """The action requested on the command line. Exactly one is selected per invocation."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    GENERATE = "generate"
    HELP = "help"


class OperationResult(typing.NamedTuple):
    """Outcome of a terminal operation."""
    success: bool
    message: str = ""


class Runtime:
    """Explicit service object replacing process-wide singletons.

    Attributes:
        workdir: Directory the key pair is generated in.
        stream: Text stream receiving status lines and stdout-bound cipher output.
    """

    def __init__(self, workdir: pathlib.Path | None = None, stream: typing.TextIO | None = None) -> None:
        """Initialize the runtime.

        Args:
            workdir: Directory for generated keys. Defaults to the current working directory.
            stream: Output stream. Defaults to ``sys.stdout`` looked up at write time.
        """
        self.workdir: pathlib.Path = workdir if workdir is not None else pathlib.Path.cwd()
        self._stream = stream
        self._pool: futures.ThreadPoolExecutor | None = None
        self._jobs: list[futures.Future] = []

    @property
    def stream(self) -> typing.TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def private_key_path(self) -> pathlib.Path:
        return self.workdir / PRIVATE_KEY_NAME

    @property
    def public_key_path(self) -> pathlib.Path:
        return self.workdir / PUBLIC_KEY_NAME

    def write(self, text: str) -> None:
        """Print one line on the output stream."""
        print(text, file=self.stream, flush=True)

    def submit(self, fn: typing.Callable, *args, **kwargs) -> futures.Future:
        """Schedule a background job.

        The caller may drop the returned future; the runtime keeps it until `drain` is called.

        Args:
            fn: The callable to run.
            *args: Positional arguments for `fn`.
            **kwargs: Keyword arguments for `fn`.

        Returns:
            The future of the job.
        """
        if self._pool is None:
            self._pool = futures.ThreadPoolExecutor(thread_name_prefix="rsasample-bg")
        job = self._pool.submit(fn, *args, **kwargs)
        self._jobs.append(job)
        return job

    def drain(self) -> None:
        """Block until every submitted background job is finished."""
        if self._pool is None:
            return
        self._pool.shutdown(wait=True)
        for job in self._jobs:
            exc = job.exception()
            if exc is not None:
                logger.error("Background job failed: %s", exc)
        self._pool = None
        self._jobs = []

    def __enter__(self) -> "Runtime":
        return self

    def __exit__(self, *exc_info) -> None:
        self.drain()
