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

"""Console output for brewversion.

Version detection is called from hot loops (sorting, bulk URL scans), so
the library never prints on its own. Every module fetches the process-wide
logger with ``get_global_logger()``; it is a ``SilentLogger`` until the CLI
(or an embedding application) installs something louder.

Line formats written by ``DefaultLogger``:

    [2/4] Checking URL scheme...                      step
    [CONFIG] WARNING: Ignoring unknown top-level key  warning
    [FORMULA] Fetching formula metadata: https://...  verbose / debug

Prefixes in use:

    DETECT   rule cascade: normalized spec, winning rule (debug)
    COMPARE  compare_versions operands that are not versions (debug)
    CONFIG   files merged, unknown keys, final config dump
    FORMULA  formula API requests and stable versions
    CHECK    compatibility check progress and verdict

Example:
    Show which extraction rule fired:
        ```python
        from brewversion.logging import get_logger, set_global_logger
        from brewversion.versioning import match_spec

        set_global_logger(get_logger(debug=True))
        match_spec("https://example.com/tool-2.4.1.tar.gz")
        # [DETECT] Spec: https://example.com/tool-2.4.1.tar.gz
        # [DETECT] Rule 9 (dash-numeric) matched: 2.4.1
        ```
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """What library code may call on a logger.

    ``step`` and ``warning`` are user-facing and shown whenever a logger is
    installed; ``verbose`` and ``debug`` are gated by the CLI flags.
    """

    def step(self, step: int, total: int, message: str) -> None: ...

    def warning(self, prefix: str, message: str) -> None: ...

    def verbose(self, prefix: str, message: str) -> None: ...

    def debug(self, prefix: str, message: str) -> None: ...


class DefaultLogger:
    """Stdout logger driven by the ``-v/--verbose`` and ``-d/--debug`` flags.

    Args:
        verbose: Show ``verbose`` lines.
        debug: Show ``debug`` lines as well; turns on ``verbose`` too.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] WARNING: {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")


class SilentLogger:
    """Discards everything. Installed by default."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build a ``DefaultLogger`` for the given CLI verbosity."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger that detection, config and checks write to."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install ``logger`` for all brewversion modules.

    The CLI calls this once per command. Tests that install a printing
    logger should restore a ``SilentLogger`` afterwards (see
    ``tests/conftest.py``).
    """
    global _global_logger
    _global_logger = logger
