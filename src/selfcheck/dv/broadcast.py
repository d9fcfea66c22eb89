# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/broadcast.py

"""One-to-many analysis port whose subscriber list is fixed after wiring."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

T = TypeVar("T")


class BroadcastSealedError(RuntimeError):
    """Raised when a subscriber is connected after the port was sealed."""


class BroadcastPort(pyuvm.uvm_analysis_port, Generic[T]):
    """Analysis port with a sealable subscriber list.

    ``write`` is pyuvm's: it calls ``write`` on every connected export in
    connection order before returning, so delivery order equals publish order
    and nothing is buffered between publishes. Subscribers must return
    promptly because the publisher waits for all of them.

    The owning component seals the port at end of elaboration; from then on
    ``connect`` raises :class:`BroadcastSealedError`.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component) -> None:
        super().__init__(name, parent)
        self.sealed: bool = False
        self.publish_count: int = 0

    def connect(self, export: Any) -> None:
        if self.sealed:
            raise BroadcastSealedError(
                f"{self.get_full_name()}: subscriptions are fixed after elaboration"
            )
        super().connect(export)

    def seal(self) -> None:
        """Freeze the subscriber list."""
        self.sealed = True

    def write(self, datum: T) -> None:
        self.publish_count += 1
        super().write(datum)
