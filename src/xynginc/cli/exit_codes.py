"""Exit codes for the xynginc CLI.

- 0: Success
- 1: Negative probe result (``test`` / ``check`` reported failure)
- 2: Engine command error
- 3: Invalid usage (bad arguments, invalid options file)
- 4: Bootstrap failure (binary not found or download failed)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_CHECK_FAILED = 1
EXIT_ENGINE_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_BOOTSTRAP_FAILURE = 4
