"""
PlayStation R3000 + GTE Instruction Set
=======================================

Dispatch tables for the `r3000gte` category: the MIPS I R3000A core of
the PlayStation plus its Geometry Transformation Engine (GTE) mapped on
COP2. The scalar instructions are the MIPS I subset of the `cpu` tables,
rebased onto this category so their identifiers read `r3000gte_*`.

GTE commands are issued through COP2 with the CO bit set and are keyed
by the function field. Each command has a canonical encoding whose
remaining bits (24-20 and 18-6) are fixed; only the option bits a
command takes may vary:

    rtps   0x4A180001
    sqr    0x4AA00428   sf
    mvmva  0x4A400012   sf, mx, v, cv, lm

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import logging
from typing import Dict

from mipsinsn import fields
from mipsinsn.enums import AccessType, InstrIdType, OperandType
from mipsinsn.opcodes import cpu
from mipsinsn.opcodes.descriptor import (
    InstrDescriptor,
    OpcodeTable,
    invalid_descriptor,
    make_descriptor,
    rebase,
)

logger = logging.getLogger(__name__)


def _d(name: str, id_type: InstrIdType, operands=(), **flags) -> InstrDescriptor:
    return make_descriptor("r3000gte", name, id_type, operands, **flags)


def _rebase(source, keys, id_type: InstrIdType) -> Dict[int, InstrDescriptor]:
    return rebase("r3000gte", source, keys, id_type)


# =============================================================================
# MIPS I Scalar Unit
# =============================================================================

R3000GTE_NORMAL = _rebase(
    cpu.CPU_NORMAL,
    (
        0x02, 0x03, 0x04, 0x05, 0x06, 0x07,            # j jal beq bne blez bgtz
        0x08, 0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F,
        0x20, 0x21, 0x22, 0x23, 0x24, 0x25, 0x26,      # loads
        0x28, 0x29, 0x2A, 0x2B, 0x2E,                  # stores
    ),
    InstrIdType.R3000GTE_NORMAL,
)

# GTE data transfers
R3000GTE_NORMAL[0x32] = _d(
    "lwc2", InstrIdType.R3000GTE_NORMAL,
    (OperandType.R3000GTE_COP2T, OperandType.CPU_IMMEDIATE_BASE),
    access_type=AccessType.WORD, does_load=True, does_dereference=True, reads_rs=True, can_be_lo=True,
)
R3000GTE_NORMAL[0x3A] = _d(
    "swc2", InstrIdType.R3000GTE_NORMAL,
    (OperandType.R3000GTE_COP2T, OperandType.CPU_IMMEDIATE_BASE),
    access_type=AccessType.WORD, does_store=True, does_dereference=True, reads_rs=True, can_be_lo=True,
)

R3000GTE_SPECIAL = _rebase(
    cpu.CPU_SPECIAL,
    (
        0x00, 0x02, 0x03, 0x04, 0x06, 0x07,            # shifts
        0x08, 0x09, 0x0C, 0x0D,                        # jr jalr syscall break
        0x10, 0x11, 0x12, 0x13,                        # hi/lo moves
        0x18, 0x19, 0x1A, 0x1B,                        # mult multu div divu
        0x20, 0x21, 0x22, 0x23, 0x24, 0x25, 0x26, 0x27, 0x2A, 0x2B,
    ),
    InstrIdType.R3000GTE_SPECIAL,
)

R3000GTE_REGIMM = _rebase(cpu.CPU_REGIMM, (0x00, 0x01, 0x10, 0x11), InstrIdType.R3000GTE_REGIMM)


# =============================================================================
# COP0
# =============================================================================

R3000GTE_COP0_TLB: Dict[int, InstrDescriptor] = {
    **_rebase(cpu.CPU_COP0_TLB, (0x01, 0x02, 0x06, 0x08), InstrIdType.R3000GTE_COP0_TLB),
    0x10: _d("rfe", InstrIdType.R3000GTE_COP0_TLB, (), not_emitted_by_compilers=True),
}

R3000GTE_COP0: Dict[int, object] = {
    **_rebase(cpu.CPU_COP0, (0x00, 0x02, 0x04, 0x06), InstrIdType.R3000GTE_COP0),
    0x10: OpcodeTable("r3000gte.cop0.tlb", fields.function, R3000GTE_COP0_TLB,
                      invalid_descriptor("r3000gte", InstrIdType.R3000GTE_COP0_TLB)),
}


# =============================================================================
# COP2: GTE
# =============================================================================

R3000GTE_COP2_MOVES: Dict[int, InstrDescriptor] = {
    0x00: _d("mfc2", InstrIdType.R3000GTE_COP2, (OperandType.CPU_RT, OperandType.R3000GTE_COP2D), modifies_rt=True),
    0x02: _d("cfc2", InstrIdType.R3000GTE_COP2, (OperandType.CPU_RT, OperandType.R3000GTE_COP2CD), modifies_rt=True),
    0x04: _d("mtc2", InstrIdType.R3000GTE_COP2, (OperandType.CPU_RT, OperandType.R3000GTE_COP2D), reads_rt=True),
    0x06: _d("ctc2", InstrIdType.R3000GTE_COP2, (OperandType.CPU_RT, OperandType.R3000GTE_COP2CD), reads_rt=True),
}

SF = (OperandType.R3000GTE_SF,)
MVMVA = (
    OperandType.R3000GTE_SF,
    OperandType.R3000GTE_MX,
    OperandType.R3000GTE_V,
    OperandType.R3000GTE_CV,
    OperandType.R3000GTE_LM,
)

GTE = InstrIdType.R3000GTE_COP2_GTE

# function -> (mnemonic, option operands, canonical encoding)
_GTE_COMMANDS = {
    0x01: ("rtps", (), 0x4A180001),
    0x06: ("nclip", (), 0x4B400006),
    0x0C: ("op", SF, 0x4B70000C),
    0x10: ("dpcs", (), 0x4A780010),
    0x11: ("intpl", (), 0x4A980011),
    0x12: ("mvmva", MVMVA, 0x4A400012),
    0x13: ("ncds", (), 0x4AE80413),
    0x14: ("cdp", (), 0x4B280414),
    0x16: ("ncdt", (), 0x4AF80416),
    0x1B: ("nccs", (), 0x4B08041B),
    0x1C: ("cc", (), 0x4B38041C),
    0x1E: ("ncs", (), 0x4AC8041E),
    0x20: ("nct", (), 0x4AD80420),
    0x28: ("sqr", SF, 0x4AA00428),
    0x29: ("dpcl", (), 0x4A680029),
    0x2A: ("dpct", (), 0x4AF8002A),
    0x2D: ("avsz3", (), 0x4B58002D),
    0x2E: ("avsz4", (), 0x4B68002E),
    0x30: ("rtpt", (), 0x4A280030),
    0x3D: ("gpf", SF, 0x4B90003D),
    0x3E: ("gpl", SF, 0x4BA0003E),
    0x3F: ("ncct", (), 0x4B18043F),
}

R3000GTE_COP2_GTE: Dict[int, InstrDescriptor] = {
    funct: _d(name, GTE, operands, fixed_bits=pattern)
    for funct, (name, operands, pattern) in _GTE_COMMANDS.items()
}


# =============================================================================
# Primary opcode table
# =============================================================================

R3000GTE_TABLE = OpcodeTable(
    "r3000gte",
    fields.opcode,
    {
        **R3000GTE_NORMAL,
        0x00: OpcodeTable("r3000gte.special", fields.function, R3000GTE_SPECIAL,
                          invalid_descriptor("r3000gte", InstrIdType.R3000GTE_SPECIAL)),
        0x01: OpcodeTable("r3000gte.regimm", fields.rt, R3000GTE_REGIMM,
                          invalid_descriptor("r3000gte", InstrIdType.R3000GTE_REGIMM)),
        0x10: OpcodeTable("r3000gte.cop0", fields.rs, R3000GTE_COP0,
                          invalid_descriptor("r3000gte", InstrIdType.R3000GTE_COP0)),
        0x12: OpcodeTable(
            "r3000gte.cop2",
            fields.cop_function_bit,
            {
                0: OpcodeTable("r3000gte.cop2.moves", fields.rs, R3000GTE_COP2_MOVES,
                               invalid_descriptor("r3000gte", InstrIdType.R3000GTE_COP2)),
                1: OpcodeTable("r3000gte.cop2.gte", fields.function, R3000GTE_COP2_GTE,
                               invalid_descriptor("r3000gte", InstrIdType.R3000GTE_COP2_GTE)),
            },
            invalid_descriptor("r3000gte", InstrIdType.R3000GTE_COP2),
        ),
    },
    invalid_descriptor("r3000gte", InstrIdType.R3000GTE_INVALID),
)

logger.debug(f"Loaded {len(R3000GTE_TABLE)} r3000gte instruction descriptors")
