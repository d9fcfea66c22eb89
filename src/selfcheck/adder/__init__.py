# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/__init__.py

"""N-bit adder design and its self-checking bench.

Subpackages:
- rtl: Adder RTL, the broken no-carry variant, and the testbench top
- dv: Design verification testbench (cocotb/pyuvm)
"""
