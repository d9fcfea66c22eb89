# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/__init__.py

"""Design verification testbench for the N-bit adder.

This package contains a UVM-style testbench for verifying the adder design
using cocotb and pyuvm.

Components:
- adder_item: Transaction item definition (a, b, cin -> sum, cout)
- adder_bus: Bound view of the adder_tb_top pins
- adder_stimulus: Directed corner cases and random operand generation
- adder_sequence: Random and directed sequences
- adder_driver: Drives operands with a valid strobe
- adder_monitor: Single-edge capture of valid cycles
- adder_ref_model: Reference model for golden behavior
- adder_sb: Scoreboard
- adder_coverage: Functional coverage collection
- adder_env: Environment wiring
- test_adder: Selectable tests (AdderRandomTest, AdderDirectedTest)

To run tests:
    dv --design=adder --test=test_adder
    dv --design=adder --test=test_adder --testcase=AdderDirectedTest
    dv-regress --file=src/selfcheck/adder/dv/dv_regress.yaml
"""
