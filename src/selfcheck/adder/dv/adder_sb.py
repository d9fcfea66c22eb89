# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_sb.py

"""Adder scoreboard."""

from __future__ import annotations

from selfcheck.dv import BaseSb

from .adder_item import AdderItem


class AdderSb(BaseSb[AdderItem]):
    """Report checks with operands spelled out, so a mismatch names its case."""

    def describe(self, exp: AdderItem, act: AdderItem) -> str:
        return (
            f"a={act.a} b={act.b} cin={act.cin} "
            f"exp(sum={exp.sum} cout={exp.cout}) "
            f"act(sum={act.sum} cout={act.cout}) cycle={act.cycle}"
        )

    def record(self, act: AdderItem) -> dict[str, object]:
        return {**act.to_dict(), "cycle": act.cycle}
