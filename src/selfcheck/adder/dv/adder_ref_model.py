# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_ref_model.py

"""Adder reference model."""

from __future__ import annotations

from selfcheck.dv import BaseRefModel

from .adder_item import AdderItem
from .adder_stimulus import operand_mask


def expected_sum_cout(a: int, b: int, cin: int, width: int) -> tuple[int, int]:
    """Wide addition: sum is the low ``width`` bits, cout is bit ``width``."""
    total = a + b + cin
    return total & operand_mask(width), (total >> width) & 1


class AdderRefModel(BaseRefModel[AdderItem]):
    """Stateless: fills sum and cout from a, b, cin."""

    def __init__(self, name: str = "adder_ref_model", width: int = 4) -> None:
        super().__init__(name)
        operand_mask(width)
        self.width: int = width

    def calc_exp(self, tr: AdderItem) -> AdderItem:
        """Fill sum and cout; an X/Z operand (None) leaves both unknown."""
        if tr.a is None or tr.b is None or tr.cin is None:
            tr.sum, tr.cout = None, None
        else:
            tr.sum, tr.cout = expected_sum_cout(tr.a, tr.b, tr.cin, self.width)
        return tr
