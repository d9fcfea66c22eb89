# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_monitor.py

"""Adder monitor: single-edge capture of valid cycles."""

from __future__ import annotations

from selfcheck.dv import BaseBus, BaseMonitor

from .adder_item import AdderItem


class AdderMonitor(BaseMonitor[AdderItem]):  # pylint: disable=too-many-ancestors
    """Capture inputs and outputs together at each rising edge where valid=1.

    Inputs change on the falling edge and the adder is combinational, so by
    the read-only region of the next rising edge sum and cout belong to the
    inputs sampled alongside them.
    """

    async def sample_dut(self, bus: BaseBus) -> AdderItem | None:
        await self.sample_dut_edge()
        vals = bus.sample()
        if vals["valid"] != 1:
            return None
        tr = AdderItem(f"obs{self.item_count}")
        tr.a = vals["a"]
        tr.b = vals["b"]
        tr.cin = vals["cin"]
        tr.sum = vals["sum"]
        tr.cout = vals["cout"]
        tr.cycle = self.cycle
        return tr
