# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_ref_model.py

"""Reference model base: predicts a transaction's outputs from its inputs."""

from typing import Generic, TypeVar

import pyuvm

from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseRefModel(pyuvm.uvm_object, Generic[T]):
    """Predictor the scoreboard consults for every observed transaction.

    ``calc_exp`` receives a writable clone, fills in the output fields and
    returns it. Models for combinational designs keep no state between
    calls, so any transaction can be checked in isolation and in any order.
    """

    def __init__(self, name: str = "ref_model") -> None:
        super().__init__(name)

    def calc_exp(self, tr: T) -> T:
        raise NotImplementedError(f"{type(self).__name__} must implement calc_exp()")
