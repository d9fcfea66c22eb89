# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_driver.py

"""Driver base: sequencer items in, pin wiggles out."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm
from cocotb.triggers import NextTimeStep, ReadWrite

from . import utils_dv
from .base_bus import BaseBus
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseDriver(BaseClockMixin, pyuvm.uvm_driver, Generic[T]):
    """Pulls items one at a time and applies each to the bus.

    Before the first item the inputs listed in ``initial_dut_input_values``
    are written at time 0. After that the loop is get_next_item, then
    :meth:`drive_item`, then item_done, then :meth:`drive_idle`. Because
    item_done comes only after the item is on the pins, the sequence cannot
    get ahead of the DUT. The loop runs until the run phase ends.

    Subclasses implement :meth:`drive_item` and usually start it with
    ``await self.clock_drive_edge()`` so inputs change away from the
    sampling edge.
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None,
        bus: BaseBus,
        *,
        falling: bool = True,
        frac_after: float = 0.20,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults(bus, falling=falling, frac_after=frac_after)
        self.initial_dut_input_values: dict[str, int] = {}
        self.items_driven: int = 0

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self.clock_compute_skew()

    async def run_phase(self) -> None:
        await self.apply_initial_dut_inputs()
        while True:
            tr: T = await self.seq_item_port.get_next_item()
            await self.drive_item(self.bus, tr)
            self.items_driven += 1
            self.seq_item_port.item_done()
            await self.drive_idle(self.bus)

    async def apply_initial_dut_inputs(self) -> None:
        """Time-0 input values, settled before anything samples them."""
        if self.initial_dut_input_values:
            self.logger.debug("time-0 inputs: %s", self.initial_dut_input_values)
            self.bus.drive(**self.initial_dut_input_values)
        await ReadWrite()
        await NextTimeStep()

    async def drive_item(self, bus: BaseBus, tr: T) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement drive_item()")

    async def drive_idle(self, bus: BaseBus) -> None:
        """Hook between items; the default leaves the pins alone."""
