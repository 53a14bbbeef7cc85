"""
N64 RSP Instruction Set
=======================

Dispatch tables for the `rsp` category: the Reality Signal Processor of
the Nintendo 64. The scalar unit is a 32-bit MIPS subset without
multiply/divide, HI/LO, FPU or branch-likely instructions. COP0 maps the
SP/DP interface registers, COP2 is the vector unit (VU), and LWC2/SWC2
carry the vector loads and stores.

COP2 Layout
-----------
    CO bit (bit 25) clear -> moves keyed by rs (mfc2/cfc2/mtc2/ctc2)
    CO bit (bit 25) set   -> vector computational ops keyed by function

Vector loads/stores scale their signed 7-bit offset by the access size:

    lqv $v1[0], 0x20($a0)    # offset field 2, scaled by 16

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import logging
from typing import Dict

from mipsinsn import fields
from mipsinsn.enums import AccessType, InstrIdType, OperandType
from mipsinsn.opcodes.cpu import (
    ALU_IMM, ALU_REG, BRANCH_RS, BRANCH_RS_RT, LOAD, SHIFT_REG, SHIFT_SA, STORE,
)
from mipsinsn.opcodes.descriptor import (
    InstrDescriptor,
    OpcodeTable,
    invalid_descriptor,
    make_descriptor,
)

logger = logging.getLogger(__name__)


RS = OperandType.CPU_RS
RT = OperandType.CPU_RT
RD = OperandType.CPU_RD
SA = OperandType.CPU_SA
IMM = OperandType.CPU_IMMEDIATE
IMM_BASE = OperandType.CPU_IMMEDIATE_BASE
BRANCH = OperandType.CPU_BRANCH_TARGET_LABEL
LABEL = OperandType.CPU_LABEL

VD = OperandType.RSP_VD
VS = OperandType.RSP_VS
VT_E = OperandType.RSP_VT_ELEMENTHIGH
VT_EL = OperandType.RSP_VT_ELEMENTLOW
VD_DE = OperandType.RSP_VD_DE
OFFSET_RS = OperandType.RSP_OFFSET_RS

N = InstrIdType.RSP_NORMAL
S = InstrIdType.RSP_SPECIAL
R = InstrIdType.RSP_REGIMM
VU = InstrIdType.RSP_COP2_VU


def _d(name: str, id_type: InstrIdType, operands=(), **flags) -> InstrDescriptor:
    return make_descriptor("rsp", name, id_type, operands, **flags)


# =============================================================================
# Scalar Unit
# =============================================================================

RSP_SPECIAL: Dict[int, InstrDescriptor] = {
    0x00: _d("sll", S, (RD, RT, SA), is_pseudo_candidate=True, **SHIFT_SA),
    0x02: _d("srl", S, (RD, RT, SA), **SHIFT_SA),
    0x03: _d("sra", S, (RD, RT, SA), **SHIFT_SA),
    0x04: _d("sllv", S, (RD, RT, RS), **SHIFT_REG),
    0x06: _d("srlv", S, (RD, RT, RS), **SHIFT_REG),
    0x07: _d("srav", S, (RD, RT, RS), **SHIFT_REG),
    0x08: _d("jr", S, (RS,), is_jump=True, reads_rs=True),
    0x09: _d("jalr", S, (OperandType.CPU_MAYBE_RD_RS,), is_jump=True, does_link=True, modifies_rd=True, reads_rs=True),
    0x0D: _d("break", S, (OperandType.CPU_CODE,)),
    0x20: _d("add", S, (RD, RS, RT), maybe_is_move=True, **ALU_REG),
    0x21: _d("addu", S, (RD, RS, RT), maybe_is_move=True, is_pseudo_candidate=True, **ALU_REG),
    0x22: _d("sub", S, (RD, RS, RT), is_pseudo_candidate=True, **ALU_REG),
    0x23: _d("subu", S, (RD, RS, RT), is_pseudo_candidate=True, **ALU_REG),
    0x24: _d("and", S, (RD, RS, RT), **ALU_REG),
    0x25: _d("or", S, (RD, RS, RT), maybe_is_move=True, is_pseudo_candidate=True, **ALU_REG),
    0x26: _d("xor", S, (RD, RS, RT), **ALU_REG),
    0x27: _d("nor", S, (RD, RS, RT), is_pseudo_candidate=True, **ALU_REG),
    0x2A: _d("slt", S, (RD, RS, RT), **ALU_REG),
    0x2B: _d("sltu", S, (RD, RS, RT), is_unsigned=True, **ALU_REG),
}

RSP_REGIMM: Dict[int, InstrDescriptor] = {
    0x00: _d("bltz", R, (RS, BRANCH), **BRANCH_RS),
    0x01: _d("bgez", R, (RS, BRANCH), **BRANCH_RS),
    0x10: _d("bltzal", R, (RS, BRANCH), does_link=True, **BRANCH_RS),
    0x11: _d("bgezal", R, (RS, BRANCH), does_link=True, is_pseudo_candidate=True, **BRANCH_RS),
}

RSP_COP0: Dict[int, InstrDescriptor] = {
    0x00: _d("mfc0", InstrIdType.RSP_COP0, (RT, OperandType.RSP_COP0D), modifies_rt=True),
    0x04: _d("mtc0", InstrIdType.RSP_COP0, (RT, OperandType.RSP_COP0D), reads_rt=True),
}


# =============================================================================
# Vector Unit (COP2)
# =============================================================================

RSP_COP2_MOVES: Dict[int, InstrDescriptor] = {
    0x00: _d("mfc2", InstrIdType.RSP_COP2, (RT, OperandType.RSP_VS_INDEX), modifies_rt=True),
    0x02: _d("cfc2", InstrIdType.RSP_COP2, (RT, OperandType.RSP_COP2CD), modifies_rt=True),
    0x04: _d("mtc2", InstrIdType.RSP_COP2, (RT, OperandType.RSP_VS_INDEX), reads_rt=True),
    0x06: _d("ctc2", InstrIdType.RSP_COP2, (RT, OperandType.RSP_COP2CD), reads_rt=True),
}

# Three-operand vector ops, keyed by function
_VU_BINARY = {
    0x00: "vmulf", 0x01: "vmulu", 0x02: "vrndp", 0x03: "vmulq",
    0x04: "vmudl", 0x05: "vmudm", 0x06: "vmudn", 0x07: "vmudh",
    0x08: "vmacf", 0x09: "vmacu", 0x0A: "vrndn", 0x0B: "vmacq",
    0x0C: "vmadl", 0x0D: "vmadm", 0x0E: "vmadn", 0x0F: "vmadh",
    0x10: "vadd", 0x11: "vsub", 0x13: "vabs", 0x14: "vaddc",
    0x15: "vsubc", 0x1D: "vsar", 0x20: "vlt", 0x21: "veq",
    0x22: "vne", 0x23: "vge", 0x24: "vcl", 0x25: "vch",
    0x26: "vcr", 0x27: "vmrg", 0x28: "vand", 0x29: "vnand",
    0x2A: "vor", 0x2B: "vnor", 0x2C: "vxor", 0x2D: "vnxor",
}

# Single-lane ops write one element of vd
_VU_LANE = {
    0x30: "vrcp", 0x31: "vrcpl", 0x32: "vrcph", 0x33: "vmov",
    0x34: "vrsq", 0x35: "vrsql", 0x36: "vrsqh",
}

RSP_COP2_VU: Dict[int, InstrDescriptor] = {
    **{funct: _d(name, VU, (VD, VS, VT_E)) for funct, name in _VU_BINARY.items()},
    **{funct: _d(name, VU, (VD_DE, VT_E)) for funct, name in _VU_LANE.items()},
    0x37: _d("vnop", VU),
}


# =============================================================================
# Vector Loads and Stores (LWC2 / SWC2), keyed by rd
# =============================================================================

# (mnemonic suffix, offset shift, access type)
_VECTOR_MEMORY = {
    0x00: ("bv", 0, AccessType.BYTE),
    0x01: ("sv", 1, AccessType.SHORT),
    0x02: ("lv", 2, AccessType.WORD),
    0x03: ("dv", 3, AccessType.DOUBLEWORD),
    0x04: ("qv", 4, AccessType.QUADWORD),
    0x05: ("rv", 4, AccessType.QUADWORD),
    0x06: ("pv", 3, AccessType.DOUBLEWORD),
    0x07: ("uv", 3, AccessType.DOUBLEWORD),
    0x08: ("hv", 4, AccessType.QUADWORD),
    0x09: ("fv", 4, AccessType.QUADWORD),
    0x0B: ("tv", 4, AccessType.QUADWORD),
}

RSP_LWC2: Dict[int, InstrDescriptor] = {
    rd: _d(f"l{suffix}", InstrIdType.RSP_NORMAL_LWC2, (VT_EL, OFFSET_RS),
           offset_shift=shift, access_type=access,
           does_load=True, does_dereference=True, reads_rs=True)
    for rd, (suffix, shift, access) in _VECTOR_MEMORY.items()
}

RSP_SWC2: Dict[int, InstrDescriptor] = {
    rd: _d(f"s{suffix}", InstrIdType.RSP_NORMAL_SWC2, (VT_EL, OFFSET_RS),
           offset_shift=shift, access_type=access,
           does_store=True, does_dereference=True, reads_rs=True)
    for rd, (suffix, shift, access) in _VECTOR_MEMORY.items()
}
RSP_SWC2[0x0A] = _d("swv", InstrIdType.RSP_NORMAL_SWC2, (VT_EL, OFFSET_RS),
                    offset_shift=4, access_type=AccessType.QUADWORD,
                    does_store=True, does_dereference=True, reads_rs=True)


# =============================================================================
# Primary opcode table
# =============================================================================

RSP_NORMAL: Dict[int, InstrDescriptor] = {
    0x02: _d("j", N, (LABEL,), is_jump=True, is_jump_with_address=True),
    0x03: _d("jal", N, (LABEL,), is_jump=True, is_jump_with_address=True, does_link=True),
    0x04: _d("beq", N, (RS, RT, BRANCH), is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x05: _d("bne", N, (RS, RT, BRANCH), is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x06: _d("blez", N, (RS, BRANCH), **BRANCH_RS),
    0x07: _d("bgtz", N, (RS, BRANCH), **BRANCH_RS),
    0x08: _d("addi", N, (RT, RS, IMM), **ALU_IMM),
    0x09: _d("addiu", N, (RT, RS, IMM), can_be_lo=True, **ALU_IMM),
    0x0A: _d("slti", N, (RT, RS, IMM), **ALU_IMM),
    0x0B: _d("sltiu", N, (RT, RS, IMM), is_unsigned=True, **ALU_IMM),
    0x0C: _d("andi", N, (RT, RS, IMM), unsigned_immediate=True, **ALU_IMM),
    0x0D: _d("ori", N, (RT, RS, IMM), unsigned_immediate=True, can_be_lo=True, **ALU_IMM),
    0x0E: _d("xori", N, (RT, RS, IMM), unsigned_immediate=True, **ALU_IMM),
    0x0F: _d("lui", N, (RT, IMM), unsigned_immediate=True, modifies_rt=True, can_be_hi=True),
    0x20: _d("lb", N, (RT, IMM_BASE), access_type=AccessType.BYTE, **LOAD),
    0x21: _d("lh", N, (RT, IMM_BASE), access_type=AccessType.SHORT, **LOAD),
    0x23: _d("lw", N, (RT, IMM_BASE), access_type=AccessType.WORD, **LOAD),
    0x24: _d("lbu", N, (RT, IMM_BASE), access_type=AccessType.BYTE, is_unsigned=True, **LOAD),
    0x25: _d("lhu", N, (RT, IMM_BASE), access_type=AccessType.SHORT, is_unsigned=True, **LOAD),
    0x27: _d("lwu", N, (RT, IMM_BASE), access_type=AccessType.WORD, is_unsigned=True, **LOAD),
    0x28: _d("sb", N, (RT, IMM_BASE), access_type=AccessType.BYTE, **STORE),
    0x29: _d("sh", N, (RT, IMM_BASE), access_type=AccessType.SHORT, **STORE),
    0x2B: _d("sw", N, (RT, IMM_BASE), access_type=AccessType.WORD, **STORE),
}

RSP_TABLE = OpcodeTable(
    "rsp",
    fields.opcode,
    {
        **RSP_NORMAL,
        0x00: OpcodeTable("rsp.special", fields.function, RSP_SPECIAL,
                          invalid_descriptor("rsp", InstrIdType.RSP_SPECIAL)),
        0x01: OpcodeTable("rsp.regimm", fields.rt, RSP_REGIMM,
                          invalid_descriptor("rsp", InstrIdType.RSP_REGIMM)),
        0x10: OpcodeTable("rsp.cop0", fields.rs, RSP_COP0,
                          invalid_descriptor("rsp", InstrIdType.RSP_COP0)),
        0x12: OpcodeTable(
            "rsp.cop2",
            fields.cop_function_bit,
            {
                0: OpcodeTable("rsp.cop2.moves", fields.rs, RSP_COP2_MOVES,
                               invalid_descriptor("rsp", InstrIdType.RSP_COP2)),
                1: OpcodeTable("rsp.cop2.vu", fields.function, RSP_COP2_VU,
                               invalid_descriptor("rsp", InstrIdType.RSP_COP2_VU)),
            },
            invalid_descriptor("rsp", InstrIdType.RSP_COP2),
        ),
        0x32: OpcodeTable("rsp.lwc2", fields.rd, RSP_LWC2,
                          invalid_descriptor("rsp", InstrIdType.RSP_NORMAL_LWC2)),
        0x3A: OpcodeTable("rsp.swc2", fields.rd, RSP_SWC2,
                          invalid_descriptor("rsp", InstrIdType.RSP_NORMAL_SWC2)),
    },
    invalid_descriptor("rsp", InstrIdType.RSP_INVALID),
)

logger.debug(f"Loaded {len(RSP_TABLE)} rsp instruction descriptors")
