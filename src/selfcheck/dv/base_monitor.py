# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_monitor.py

"""Base monitor with BFM sampling hook."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm
from cocotb.triggers import ReadOnly

from . import utils_dv
from .base_bus import BaseBus
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem
from .broadcast import BroadcastPort

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(BaseClockMixin, pyuvm.uvm_monitor, Generic[T]):
    """Passive monitor that reconstructs items and broadcasts them.

    The monitor only reads the bus. Each loop iteration waits for the sample
    edge, lets :meth:`sample_dut` build a fresh item (or return None for an
    idle cycle), freezes it, and writes it to ``ap``. Items are never touched
    again after publication.

    Sampling Strategy:
        1. Wait for rising edge of clock
        2. Enter ReadOnly region (equivalent to SV #1step)
        3. Sample signals in a stable state

    Subclasses must implement:
        sample_dut(bus): Sample DUT signals and return a transaction or None

    Attributes:
        ap: Broadcast port for observed transactions (sealed after elaboration)
        item_count: Number of transactions published
        cycle: Number of sample edges seen

    Example:
        >>> class MyMonitor(BaseMonitor[MyItem]):
        ...     async def sample_dut(self, bus):
        ...         await self.sample_dut_edge()
        ...         item = MyItem()
        ...         item.data = bus.sample("data")["data"]
        ...         return item
    """

    def __init__(
        self, name: str, parent: pyuvm.uvm_component | None, bus: BaseBus
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults(bus)
        self.ap: BroadcastPort[T]
        self.item_count: int = 0
        self.cycle: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = BroadcastPort("ap", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.ap.seal()
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T | None
        while True:
            tr = await self.sample_dut(self.bus)
            if tr is None:
                continue
            self.item_count += 1
            self.ap.write(tr.freeze())

    async def sample_dut_edge(self) -> None:
        """Wait until the edge to sample the DUT."""
        await self.clock_sample_edge()
        await ReadOnly()
        self.cycle += 1

    async def sample_dut(self, bus: BaseBus) -> T | None:
        """Return the next observed transaction (or None to skip)."""
        raise NotImplementedError("Implement sample_dut here")
