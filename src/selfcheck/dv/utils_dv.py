# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/utils_dv.py

"""Small helpers shared by the bench components.

Log levels follow ``COCOTB_LOG_LEVEL`` so that ``dv --verbosity`` reaches
pyuvm components and plain loggers alike. Pin lookups fail loudly instead of
handing back ``None``. Pin values that hold X or Z come back as ``None``
rather than raising.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Union, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray


def desired_log_level(default: int = logging.INFO) -> int:
    """Level named by COCOTB_LOG_LEVEL (INFO when unset or unknown)."""
    level = logging.getLevelName((os.getenv("COCOTB_LOG_LEVEL") or "INFO").upper())
    return level if isinstance(level, int) else default


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    comp.set_logging_level(desired_log_level())


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Set the level on a plain logger; output goes through cocotb's handlers."""
    logger.setLevel(desired_log_level())
    logger.propagate = True


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """``dut.<signal_name>``, checked.

    Raises:
        RuntimeError: The DUT has no such pin.
        TypeError: The attribute exists but carries no ``.value``.
    """
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(sig: Union[Logic, LogicArray, int]) -> int | None:
    """Unsigned value of a pin read, or None while any bit is X/Z."""
    if isinstance(sig, int):
        return sig
    if not sig.is_resolvable:
        return None
    if isinstance(sig, Logic):
        return int(sig)  # pyright: ignore[reportArgumentType]
    return sig.to_unsigned()
