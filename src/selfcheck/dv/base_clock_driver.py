# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_clock_driver.py

"""Free-running clock on the bus clock pin."""

from __future__ import annotations

from typing import cast

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.handle import LogicObject
from cocotb.task import Task
from cocotb.triggers import Timer

from . import utils_dv
from .base_bus import BaseBus
from .base_clock_mixin import BaseClockMixin


class BaseClockDriver(BaseClockMixin, pyuvm.uvm_component):
    """Toggles ``bus.clk`` every half of ``bus.clock_period_ps``.

    The clock starts in start_of_simulation_phase, after ``init_delay_ps``
    when that is non-zero, and is cancelled in final_phase. With
    ``enable=False`` the component does nothing and the HDL is expected to
    drive the clock itself.
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None,
        bus: BaseBus,
        *,
        enable: bool = True,
        start_high: bool = False,
        init_delay_ps: int = 0,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults(bus)
        self.clock_enable: bool = enable
        self.clock_start_high: bool = start_high
        self.clock_init_delay_ps: int = max(0, int(init_delay_ps))
        self._tasks: list[Task] = []

    def start_of_simulation_phase(self) -> None:
        super().start_of_simulation_phase()
        if not self.clock_enable:
            self.logger.debug("clock '%s' left to the HDL", self.bus.clock_name)
            return
        self._tasks.append(cocotb.start_soon(self._run()))

    def final_phase(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
        super().final_phase()

    async def _run(self) -> None:
        if self.clock_init_delay_ps:
            await Timer(self.clock_init_delay_ps, unit="ps")
        clock = Clock(
            cast(LogicObject, self.bus.clk), self.bus.clock_period_ps, unit="ps"
        )
        self.logger.debug(
            "clock dut.%s: period=%d ps start_high=%s",
            self.bus.clock_name,
            self.bus.clock_period_ps,
            self.clock_start_high,
        )
        self._tasks.append(
            cocotb.start_soon(clock.start(start_high=self.clock_start_high))
        )
