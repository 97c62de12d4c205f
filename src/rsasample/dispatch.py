"""Maps a validated request onto the key store or the cipher engine and prints the outcome."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsasample.cipher import CipherEngine
from rsasample.keystore import KeyStore
from rsasample.options import ActionRequest
from rsasample.runtime import Mode
from rsasample.runtime import Runtime

MSG_ENCRYPTION_SUCCESS = "Encryption completed successfully"
MSG_ENCRYPTION_FAILURE = "Encryption was not completed"
MSG_DECRYPTION_SUCCESS = "Decryption completed successfully"
MSG_DECRYPTION_FAILURE = "Decryption was not completed"
MSG_GENERATION_SUCCESS = "Generated keys in the current directory"

messages: dict[Mode, tuple[str, str]] = {
    Mode.ENCRYPT: (MSG_ENCRYPTION_SUCCESS, MSG_ENCRYPTION_FAILURE),
    Mode.DECRYPT: (MSG_DECRYPTION_SUCCESS, MSG_DECRYPTION_FAILURE),
}


class Dispatcher:
    """Executes requests, printing exactly one status line per request (usage text for help).

    Attributes:
        runtime: Where output goes and background jobs run.
        usage: Help text printed for Mode.HELP.
        engine: Cipher engine for encryption/decryption.
        keystore: Key store for generation.
    """

    def __init__(self,
                 runtime: Runtime,
                 usage: str,
                 engine: CipherEngine | None = None,
                 keystore: KeyStore | None = None) -> None:
        self.runtime = runtime
        self.usage = usage
        self.engine = engine if engine is not None else CipherEngine(runtime)
        self.keystore = keystore if keystore is not None else KeyStore(runtime)

    def execute(self, request: ActionRequest) -> bool:
        """Runs the request.

        Generation failures print the key store's own message, cipher failures a generic one.

        Args:
            request: The validated request.

        Returns:
            Whether the action succeeded.
        """
        match request.mode:
            case Mode.HELP:
                self.runtime.write(self.usage.rstrip("\n"))
                return True
            case Mode.GENERATE:
                result = self.keystore.generate()
                self.runtime.write(MSG_GENERATION_SUCCESS if result.success else result.message)
                return result.success
        result = self.engine.run(request.mode, request.key, request.source, request.output, request.background)
        success, failure = messages[request.mode]
        self.runtime.write(success if result.success else failure)
        return result.success
