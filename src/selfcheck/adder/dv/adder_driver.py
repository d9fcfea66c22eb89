# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_driver.py

"""Adder driver: operands plus a one-cycle valid strobe."""

from __future__ import annotations

import pyuvm

from selfcheck.dv import BaseBus, BaseDriver

from .adder_item import AdderItem


class AdderDriver(BaseDriver[AdderItem]):  # pylint: disable=too-many-ancestors
    """Drive a, b, cin with valid=1 on the drive edge; drop valid one edge later.

    Every item is therefore valid for exactly one sample edge, which is what
    lets the monitor publish each item once.
    """

    def __init__(
        self, name: str, parent: pyuvm.uvm_component | None, bus: BaseBus
    ) -> None:
        super().__init__(name, parent, bus)
        self.initial_dut_input_values = {"valid": 0, "a": 0, "b": 0, "cin": 0}

    async def drive_item(self, bus: BaseBus, tr: AdderItem) -> None:
        await self.clock_drive_edge()
        bus.drive(a=tr.a, b=tr.b, cin=tr.cin, valid=1)

    async def drive_idle(self, bus: BaseBus) -> None:
        await self.clock_drive_edge()
        bus.drive(valid=0)
