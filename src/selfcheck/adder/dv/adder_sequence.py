# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_sequence.py

"""Random and directed sequences for adder verification."""

from __future__ import annotations

from typing import Iterator

from selfcheck.dv import BaseSequence, utils_cli

from .adder_item import AdderItem
from .adder_stimulus import Operands, directed_cases, random_operands


class AdderRandomSequence(BaseSequence[AdderItem]):
    """Generate uniformly random operands within the operand width."""

    item_type = AdderItem

    def __init__(
        self, name: str = "adder_rand_seq", seq_len: int = 50, width: int = 4
    ) -> None:
        super().__init__(name, seq_len)
        self.seq_len = max(1, utils_cli.get_int_setting("ADDER_SEQ_LEN", self.seq_len))
        self.width: int = width

    def set_item_inputs(self, item: AdderItem, index: int) -> None:
        item.a, item.b, item.cin = next(random_operands(1, self.width))


class AdderDirectedSequence(BaseSequence[AdderItem]):
    """Emit the fixed corner cases, once each, in table order."""

    item_type = AdderItem

    def __init__(self, name: str = "adder_dir_seq", width: int = 4) -> None:
        self.cases: list[Operands] = directed_cases(width)
        super().__init__(name, len(self.cases))
        self.width: int = width

    def produce(self) -> Iterator[AdderItem]:
        for i, op in enumerate(self.cases):
            item = self.make_item(i)
            item.a, item.b, item.cin = op
            yield item
