"""
Opcode Tables
=============

Static per-category dispatch tables. Every category has one root
OpcodeTable keyed by the primary opcode; `root_table()` maps a category
to it.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from typing import Dict

from mipsinsn.enums import InstrCategory
from mipsinsn.opcodes.cpu import CPU_TABLE
from mipsinsn.opcodes.descriptor import (
    InstrDescriptor,
    OpcodeTable,
    descriptor_index,
    invalid_descriptor,
    make_descriptor,
    rebase,
)
from mipsinsn.opcodes.r3000gte import R3000GTE_TABLE
from mipsinsn.opcodes.r5900 import R5900_TABLE
from mipsinsn.opcodes.rsp import RSP_TABLE

ROOT_TABLES: Dict[InstrCategory, OpcodeTable] = {
    InstrCategory.CPU: CPU_TABLE,
    InstrCategory.RSP: RSP_TABLE,
    InstrCategory.R3000GTE: R3000GTE_TABLE,
    InstrCategory.R5900: R5900_TABLE,
}


def root_table(category: InstrCategory) -> OpcodeTable:
    """Root dispatch table of a category."""
    return ROOT_TABLES[category]


__all__ = [
    "InstrDescriptor",
    "OpcodeTable",
    "ROOT_TABLES",
    "descriptor_index",
    "invalid_descriptor",
    "make_descriptor",
    "rebase",
    "root_table",
]
