# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_bus.py

"""Hardware binding handle: the DUT signal boundary plus its clock."""

from __future__ import annotations

import logging
from typing import Any

from cocotb.handle import SimHandleBase

from . import utils_dv


class BindingError(RuntimeError):
    """Fatal configuration error: the DUT boundary could not be bound."""


class BaseBus:
    """Bound view of the DUT pins shared by a driver and a monitor.

    A bus is created once by the test from the simulator top and then passed
    to every component that touches the DUT. Binding happens eagerly in the
    constructor, so a missing top or a missing signal fails before any
    run-phase task starts.

    Writes go through :meth:`drive`, which assigns ``handle.value``. cocotb
    applies such writes in the next read-write region, never in the region
    that issued them, which gives the non-blocking semantics the driver and
    monitor rely on: a value driven at one edge is visible to a sampler at
    the following edge, never at the same one. Reads go through
    :meth:`sample`. There is no lock; ordering comes from the clock-edge
    discipline of the components.

    Subclasses declare their pins:
        input_names: signals the driver may write
        output_names: signals only ever read

    Attributes:
        dut: the bound top-level handle
        clk: the bound clock signal
        clock_period_ps: nominal clock period, used for drive skew and the
            clock driver
    """

    input_names: tuple[str, ...] = ()
    output_names: tuple[str, ...] = ()

    def __init__(
        self,
        dut: Any,
        *,
        clock_name: str = "clk",
        clock_period_ps: int = 1_000,
    ) -> None:
        self.logger: logging.Logger = logging.getLogger(
            f"uvm.{type(self).__name__}"
        )
        utils_dv.configure_non_component_logger(self.logger)
        if dut is None:
            raise BindingError(
                "No DUT handle to bind. Is the bench running inside a simulator?"
            )
        if clock_period_ps <= 0:
            raise BindingError(f"clock_period_ps must be > 0, got {clock_period_ps}")
        self.dut: Any = dut
        self.clock_name: str = clock_name
        self.clock_period_ps: int = clock_period_ps
        self.clk: SimHandleBase = self._bind(clock_name)
        self._signals: dict[str, SimHandleBase] = {
            name: self._bind(name) for name in (*self.input_names, *self.output_names)
        }
        self.logger.debug(
            "bound clock=%s inputs=%s outputs=%s",
            clock_name,
            self.input_names,
            self.output_names,
        )

    def _bind(self, name: str) -> SimHandleBase:
        try:
            return utils_dv.get_signal(self.dut, name)
        except (RuntimeError, TypeError) as exc:
            raise BindingError(f"Cannot bind '{name}': {exc}") from exc

    def handle(self, name: str) -> SimHandleBase:
        """Return the bound handle for one pin."""
        try:
            return self._signals[name]
        except KeyError:
            raise KeyError(f"'{name}' is not a pin of {type(self).__name__}") from None

    def width(self, name: str) -> int:
        """Bit width of one pin."""
        return len(self.handle(name))  # type: ignore[arg-type]

    @property
    def rising_edge(self) -> Any:
        """Trigger for the next rising clock edge."""
        return self.clk.rising_edge  # type: ignore[attr-defined]

    @property
    def falling_edge(self) -> Any:
        """Trigger for the next falling clock edge."""
        return self.clk.falling_edge  # type: ignore[attr-defined]

    def drive(self, **values: int) -> None:
        """Schedule writes to input pins (visible from the next edge on)."""
        for name, val in values.items():
            if name not in self.input_names:
                raise KeyError(f"'{name}' is not an input of {type(self).__name__}")
            self._signals[name].value = val  # type: ignore[attr-defined]

    def sample(self, *names: str) -> dict[str, int | None]:
        """Read pins now; X/Z values read back as None."""
        names = names or (*self.input_names, *self.output_names)
        return {
            n: utils_dv.get_signal_value_int(
                self.handle(n).value  # type: ignore[attr-defined]
            )
            for n in names
        }
