# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/completion_gate.py

"""Reference-counted keep-alive gate owned by a test."""

from __future__ import annotations

import logging
from typing import Callable

from . import utils_dv


class GateUnderflowError(RuntimeError):
    """Raised when the gate is dropped more times than it was raised."""


class CompletionGate:
    """Counting gate that keeps the run phase alive while work is pending.

    Every :meth:`raise_objection` must be matched by exactly one
    :meth:`drop_objection`. The gate detects over-dropping but cannot detect a
    missing drop; an unmatched raise shows up as a run that never ends.

    The 0 -> 1 transition calls ``on_raise`` and the 1 -> 0 transition calls
    ``on_clear``. A test wires these to its pyuvm run-phase objection so the
    run phase ends exactly when the gate clears.

    Example:
        >>> gate = CompletionGate("gate", on_raise=t.raise_objection,
        ...                       on_clear=t.drop_objection)
        >>> gate.raise_objection()
        >>> await seq.start(sqr)
        >>> gate.drop_objection()
    """

    def __init__(
        self,
        name: str = "gate",
        *,
        on_raise: Callable[[], None] | None = None,
        on_clear: Callable[[], None] | None = None,
    ) -> None:
        self.name = name
        self.logger = logging.getLogger(f"uvm.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self._on_raise = on_raise
        self._on_clear = on_clear
        self._count: int = 0
        self.total_raised: int = 0

    @property
    def count(self) -> int:
        """Outstanding raises."""
        return self._count

    @property
    def is_clear(self) -> bool:
        return self._count == 0

    def raise_objection(self, count: int = 1) -> None:
        """Keep the run alive for ``count`` more units of work."""
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        was_clear = self._count == 0
        self._count += count
        self.total_raised += count
        self.logger.debug("%s raised by %d -> %d", self.name, count, self._count)
        if was_clear and self._on_raise is not None:
            self._on_raise()

    def drop_objection(self, count: int = 1) -> None:
        """Release ``count`` units previously raised."""
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        if count > self._count:
            raise GateUnderflowError(
                f"{self.name}: drop of {count} with only {self._count} outstanding"
            )
        self._count -= count
        self.logger.debug("%s dropped by %d -> %d", self.name, count, self._count)
        if self._count == 0 and self._on_clear is not None:
            self._on_clear()
