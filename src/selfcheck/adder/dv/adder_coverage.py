# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_coverage.py

"""Coverage."""

from __future__ import annotations

import pyuvm
from cocotb_coverage.coverage import CoverCross, CoverPoint

from selfcheck.dv import BaseCoverage

from .adder_item import AdderItem
from .adder_stimulus import operand_mask


def operand_corner(value: int | None, width: int) -> str:
    """Classify an operand as zero, ones (all bits set), or mid."""
    if value == 0:
        return "zero"
    if value == operand_mask(width):
        return "ones"
    return "mid"


_CORNERS = ["zero", "ones", "mid"]


class AdderCoverage(BaseCoverage[AdderItem]):
    """Carry-in, carry-out, operand corners, and their crosses."""

    def __init__(
        self, name: str, parent: pyuvm.uvm_component | None, width: int = 4
    ) -> None:
        super().__init__(name, parent)
        self.width: int = width
        self.carries_out: int = 0

    @CoverPoint("adder.cin", xf=lambda self, tt: tt.cin, bins=[0, 1])
    @CoverPoint("adder.cout", xf=lambda self, tt: tt.cout, bins=[0, 1])
    @CoverPoint(
        "adder.a_corner",
        xf=lambda self, tt: operand_corner(tt.a, self.width),
        bins=_CORNERS,
    )
    @CoverPoint(
        "adder.b_corner",
        xf=lambda self, tt: operand_corner(tt.b, self.width),
        bins=_CORNERS,
    )
    @CoverCross("adder.cin_x_cout", items=["adder.cin", "adder.cout"])
    def sample(self, tt: AdderItem) -> None:
        if tt.cout == 1:
            self.carries_out += 1

    def report_phase(self) -> None:
        """Print simple counters (and let BaseCoverage handle YAML/export)."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        self.logger.info(
            "AdderCoverage summary: sampled=%d carries_out=%d",
            self.sampled,
            self.carries_out,
        )
        self.logger.debug("report_phase end")
