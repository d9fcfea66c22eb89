# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_sequencer.py

"""Base sequencer, extendable."""

from __future__ import annotations

import pyuvm

from . import utils_dv


class BaseSequencer(pyuvm.uvm_sequencer):
    """Scheduler between one or more sequences and a driver.

    The driver pulls items via ``seq_item_port.get_next_item()``, which blocks
    until some sequence has an item ready. pyuvm grants sequences in FIFO
    order, so a single sequence is a plain pass-through and additional
    sequences can be started on the same sequencer without touching the
    driver.

    Example:
        >>> sqr = BaseSequencer("sqr", agent)
        >>> await my_sequence.start(sqr)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
