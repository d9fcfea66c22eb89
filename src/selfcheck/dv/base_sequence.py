# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_sequence.py

"""Sequence base: a lazy stream of items pushed through the sequencer."""

from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_sequencer import BaseSequencer

T = TypeVar("T", bound=BaseItem)


class BaseSequence(pyuvm.uvm_sequence, Generic[T]):
    """Hands items to the driver one at a time.

    :meth:`produce` is a generator. :meth:`body` takes its items one by one
    and waits in ``finish_item`` until the driver calls item_done. So only
    one item per sequence is ever in flight, and the next item is not built
    or randomized until the previous one has been driven.

    By default :meth:`produce` makes ``seq_len`` blank ``item_type``
    instances and lets :meth:`set_item_inputs` fill each one in. A directed
    sequence overrides :meth:`produce` with its own list.
    :meth:`body_pre` and :meth:`body_post` run around the whole stream.

    Example:
        >>> class CountingSequence(BaseSequence[ParityItem]):
        ...     item_type = ParityItem
        ...
        ...     def set_item_inputs(self, item, index):
        ...         item.data = index & 0xFF
        ...
        >>> await CountingSequence("seq", seq_len=10).start(sequencer)
    """

    item_type: type[BaseItem] = BaseItem

    def __init__(self, name: str = "seq", seq_len: int = 100) -> None:
        super().__init__(name)
        self.logger: logging.Logger = logging.getLogger(f"uvm.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self.sequencer: BaseSequencer  # pyuvm sets this at runtime on start()
        self.seq_len: int = max(1, int(seq_len))
        self.items_sent: int = 0

    async def body(self) -> None:
        """UVM flow: start_item -> finish_item for every produced item."""
        self.logger.debug("%s: up to %d item(s)", self.get_name(), self.seq_len)
        await self.body_pre()
        for item in self.produce():
            await self.start_item(item)
            await self.finish_item(item)
            self.items_sent += 1
        await self.body_post()
        self.logger.debug("%s: %d item(s) sent", self.get_name(), self.items_sent)

    async def body_pre(self) -> None:
        """Hook; nothing by default."""

    async def body_post(self) -> None:
        """Hook; nothing by default."""

    def produce(self) -> Iterator[T]:
        """Yield the items of this sequence, one at a time."""
        for i in range(self.seq_len):
            item = self.make_item(i)
            self.set_item_inputs(item, i)
            yield item

    def make_item(self, index: int) -> T:
        """Create one blank transaction item."""
        return self.item_type(f"tr{index}")  # type: ignore[return-value]

    def set_item_inputs(self, item: T, index: int) -> None:
        """Fill in one item's inputs; needed unless produce() is overridden."""
        raise NotImplementedError
