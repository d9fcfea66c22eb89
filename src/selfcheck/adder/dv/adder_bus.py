# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_bus.py

"""Pins of adder_tb_top."""

from __future__ import annotations

from selfcheck.dv import BaseBus


class AdderBus(BaseBus):
    """DUT inputs a, b, cin plus the bench-owned valid strobe; outputs sum, cout."""

    input_names = ("valid", "a", "b", "cin")
    output_names = ("sum", "cout")

    @property
    def operand_width(self) -> int:
        """Operand width N, taken from the bound ``a`` pin."""
        return self.width("a")
