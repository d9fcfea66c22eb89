# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_stimulus.py

"""Operand tables and generators for the adder sequences.

Plain functions with no simulator dependency, so the directed corner cases
and the random operand ranges can be checked without running a bench.
"""

from __future__ import annotations

import random
from typing import Iterator, NamedTuple


class Operands(NamedTuple):
    """One set of adder inputs."""

    a: int
    b: int
    cin: int


def operand_mask(width: int) -> int:
    """All-ones value of an N-bit operand."""
    if width < 1:
        raise ValueError(f"width must be >= 1, got {width}")
    return (1 << width) - 1


def directed_cases(width: int = 4) -> list[Operands]:
    """Named corner cases, in order.

    For width 4 these are (0,0,0), (15,15,1), (15,15,0), (5,3,0), (8,8,0).
    """
    mask = operand_mask(width)
    msb = 1 << (width - 1)
    simple = Operands(5, 3, 0) if width >= 4 else Operands(1, 0, 0)
    return [
        Operands(0, 0, 0),  # all zero, no carry-in
        Operands(mask, mask, 1),  # all ones, carry-in
        Operands(mask, mask, 0),  # all ones, no carry-in
        simple,  # no carry anywhere
        Operands(msb, msb, 0),  # carry-out without carry-in
    ]


def random_operands(
    count: int, width: int, rng: random.Random | None = None
) -> Iterator[Operands]:
    """Yield ``count`` uniformly random operand sets within ``width`` bits.

    Without ``rng`` the module-level generator is used, which cocotb seeds
    from the run seed.
    """
    operand_mask(width)
    gen = rng if rng is not None else random
    for _ in range(count):
        yield Operands(gen.getrandbits(width), gen.getrandbits(width), gen.getrandbits(1))
