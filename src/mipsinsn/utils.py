"""
Utility Helpers
===============

`Utils` gathers the standalone helpers callers most often need without
decoding anything: immediate sign extension, byte swapping and quick
register-name lookups.

Usage:
    from mipsinsn import Utils

    Utils.sign_extend_immediate(0xFFFF)   # -1
    Utils.get_register_name_o32(4)        # '$a0'

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from mipsinsn import fields, registers
from mipsinsn.enums import Abi


class Utils:
    """Static helper namespace."""

    @staticmethod
    def sign_extend_immediate(value: int) -> int:
        """Sign-extend a 16-bit immediate: 0xFFFF -> -1, 0x0001 -> 1."""
        return fields.sign_extend_immediate(value)

    @staticmethod
    def swap_endianness(word: int) -> int:
        """Reverse the byte order of a 32-bit word."""
        return fields.swap_endianness(word)

    @staticmethod
    def is_power_of_two(value: int) -> bool:
        """True iff value > 0 with exactly one bit set."""
        return fields.is_power_of_two(value)

    @staticmethod
    def get_register_name_o32(index: int) -> str:
        """
        O32 name of a general purpose register.

        Raises:
            InvalidRegisterIndexError: If index is not in 0-31
        """
        return registers.gpr_name(index, Abi.O32)

    @staticmethod
    def get_register_name_numeric(index: int) -> str:
        """
        Numeric name of a general purpose register ($0-$31).

        Raises:
            InvalidRegisterIndexError: If index is not in 0-31
        """
        return registers.gpr_name(index, Abi.NUMERIC)
