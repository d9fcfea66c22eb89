# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_item.py

"""Transaction item for adder verification."""

from __future__ import annotations

from selfcheck.dv import BaseItem


class AdderItem(BaseItem):
    """One addition: operands and carry-in, and the observed sum and carry-out.

    ``cycle`` is the monitor's sample-edge index at capture (None for items
    that were never observed). It is diagnostic only and not compared.
    """

    def __init__(self, name: str = "adder_item") -> None:
        super().__init__(name)
        # None marks an X/Z operand on an observed item
        self.a: int | None = 0
        self.b: int | None = 0
        self.cin: int | None = 0
        self.sum: int | None = None
        self.cout: int | None = None
        self.cycle: int | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("a", "b", "cin")

    def _out_fields(self) -> tuple[str, ...]:
        return ("sum", "cout")
