# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_clock_mixin.py

"""Edge alignment for components that drive or sample the bus."""

from __future__ import annotations

from typing import cast

import pyuvm
from cocotb.triggers import Timer

from .base_bus import BaseBus


class BaseClockMixin:
    """Where in the clock period a component acts.

    Monitors sample on the rising edge. Drivers change inputs away from it,
    either on the falling edge (the default) or a fraction of the period
    after the rising edge, so the DUT sees stable inputs at every sampling
    edge. See C.E. Cummings, "Applying Stimulus & Sampling Outputs", SNUG 2016.

    Consumers call :meth:`_clock_init_defaults` in ``__init__`` and, when
    driving with a post-edge skew, :meth:`clock_compute_skew` before
    run_phase.
    """

    def _clock_init_defaults(
        self,
        bus: BaseBus,
        *,
        falling: bool = True,
        frac_after: float = 0.20,
    ) -> None:
        self.bus: BaseBus = bus
        self.drive_falling_edge: bool = falling
        self.drive_frac_after: float = frac_after
        self._postedge_delay_ps: int = 0

    def clock_compute_skew(self) -> None:
        """Turn ``drive_frac_after`` into a delay in ps.

        Raises:
            ValueError: Fraction outside [0.0, 1.0).
        """
        if self.drive_falling_edge:
            return
        frac = self.drive_frac_after
        if not 0.0 <= frac < 1.0:
            raise ValueError(f"drive_frac_after must be in [0.0, 1.0), got {frac}")
        self._postedge_delay_ps = int(self.bus.clock_period_ps * frac)
        cast(pyuvm.uvm_component, self).logger.debug(
            "driving %d ps after the rising edge", self._postedge_delay_ps
        )

    async def clock_drive_edge(self) -> None:
        if self.drive_falling_edge:
            await self.bus.falling_edge
            return
        await self.bus.rising_edge
        if self._postedge_delay_ps:
            await Timer(self._postedge_delay_ps, unit="ps")

    async def clock_sample_edge(self) -> None:
        await self.bus.rising_edge
