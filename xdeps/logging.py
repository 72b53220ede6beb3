# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Output channels for xdeps.

Library modules never print directly. They ask for the process-wide logger
with get_global_logger() and report through four channels:

- step(n, total, msg): progress of a multi-step command, always shown
- warning(prefix, msg): problems worth seeing, always shown
- verbose(prefix, msg): high-level detail, shown with --verbose
- debug(prefix, msg): low-level detail, shown with --debug

Until the CLI installs a ConsoleLogger, the global logger is a SilentLogger,
so importing and calling xdeps from other code produces no output.

Example:
    Install a console logger for one command:
        ```python
        from xdeps.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Report from library code:
        ```python
        from xdeps.logging import get_global_logger

        log = get_global_logger()
        log.verbose("REPO", "Found 3 version(s) of xbase")
        ```
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Anything with the four xdeps output channels."""

    def step(self, step: int, total: int, message: str) -> None: ...

    def verbose(self, prefix: str, message: str) -> None: ...

    def debug(self, prefix: str, message: str) -> None: ...

    def warning(self, prefix: str, message: str) -> None: ...


class ConsoleLogger:
    """Writes "[PREFIX] message" lines to a text stream.

    Args:
        verbose: Show the verbose channel.
        debug: Show the debug channel. Turns on verbose as well.
        stream: Destination; None means whatever sys.stdout is at write
            time (so output capture in tests keeps working).

    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.show_debug = debug
        self.show_verbose = verbose or debug
        self._stream = stream

    def _emit(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout)

    def step(self, step: int, total: int, message: str) -> None:
        self._emit(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self.show_verbose:
            self._emit(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self.show_debug:
            self._emit(f"[{prefix}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        self._emit(f"[WARNING] [{prefix}] {message}")


class SilentLogger:
    """Discards everything. The global default."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass


_active: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build a ConsoleLogger writing to stdout."""
    return ConsoleLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    return _active


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger used by library modules."""
    global _active
    _active = logger
