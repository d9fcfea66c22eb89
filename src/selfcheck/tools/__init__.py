# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/tools/__init__.py

"""DV tools package.

Command-line tools for building, running, and reporting on self-checking
benches using cocotb, pyuvm, and pytest.

Command-line tools:
- dv: Run one bench (optionally one test class) over one or more seeds
- dv-regress: Run YAML-defined regression suites
- dv-report: Generate reports from test results
"""
