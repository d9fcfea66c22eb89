# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/utils_cli.py

"""Bench settings from the environment and from plusargs.

A setting named ``NAME`` is looked up in this order, and the first usable
value wins:

    1. ``$NAME``, then ``$SC_NAME``
    2. ``+NAME=value`` (a bare ``+NAME`` means "1") in ``$PLUSARGS``,
       ``$COCOTB_PLUSARGS`` or ``$SC_PLUSARGS``, whichever is set first
    3. the caller's default

"Usable" depends on the type. Any string is usable. An integer must parse
with ``int(v, 0)``, so ``0x10`` works. A boolean must be one of
1/0, true/false, yes/no, y/n or on/off. An environment value that is not
usable is skipped, not fatal.

This is the bench's version of UVM's ``uvm_cmdline_processor``::

    seq_len = get_int_setting("ADDER_SEQ_LEN", 50)
    check_en = get_bool_setting("CHECK_EN", True)
"""

from __future__ import annotations

import os
from typing import Callable, Iterable, TypeVar

V = TypeVar("V")

_BOOL_WORDS = {
    **dict.fromkeys(("1", "true", "yes", "y", "on"), True),
    **dict.fromkeys(("0", "false", "no", "n", "off"), False),
}
_PLUSARG_VARS = ("PLUSARGS", "COCOTB_PLUSARGS", "SC_PLUSARGS")


def _to_bool(raw: str) -> bool | None:
    return _BOOL_WORDS.get(raw.strip().lower())


def _to_int(raw: str) -> int | None:
    try:
        return int(raw.strip(), 0)
    except ValueError:
        return None


def iter_plusargs() -> Iterable[str]:
    """Tokens of the first non-empty plusargs variable."""
    for var in _PLUSARG_VARS:
        text = os.environ.get(var, "")
        if text:
            return text.split()
    return []


def _plusarg(name: str) -> str | None:
    for tok in iter_plusargs():
        key, sep, val = tok[1:].partition("=")
        if tok.startswith("+") and key == name:
            return val if sep else "1"
    return None


def _resolve(name: str, default: V, convert: Callable[[str], V | None]) -> V:
    for raw in (os.environ.get(name), os.environ.get(f"SC_{name}"), _plusarg(name)):
        if raw is None:
            continue
        value = convert(raw)
        if value is not None:
            return value
    return default


def get_bool_setting(name: str, default: bool) -> bool:
    """Boolean setting; a bare ``+NAME`` counts as true."""
    return _resolve(name, default, _to_bool)


def get_str_setting(name: str, default: str) -> str:
    """String setting, taken as-is."""
    return _resolve(name, default, lambda raw: raw)


def get_int_setting(name: str, default: int) -> int:
    """Integer setting in any base ``int(v, 0)`` accepts."""
    return _resolve(name, default, _to_int)
