# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/__init__.py

"""selfcheck: self-checking UVM-style benches for small RTL blocks.

Main Components:

dv:
    Shared verification infrastructure built on cocotb and pyuvm: bus
    binding, items, sequences, driver/monitor, broadcast ports, scoreboard,
    coverage, and a gated base test.

adder:
    The N-bit ripple adder design, a deliberately broken variant without
    carry propagation, and its self-checking bench.

tools:
    Command-line tools to build, run, regress, and report (dv, dv-regress,
    dv-report).

utils:
    Common utilities used by the tools
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("selfcheck")
except PackageNotFoundError:
    __version__ = "0+local"
