"""
MIPS CPU Instruction Set
========================

Dispatch tables for the general `cpu` category: a MIPS III (R4300 class)
CPU with 64-bit integer operations, branch-likely instructions, the
COP0 system control coprocessor, the COP1 floating point unit and raw
COP2 moves.

Table Layout
------------
    primary opcode (bits 31-26)
    ├── 0x00 SPECIAL  -> function (bits 5-0)
    ├── 0x01 REGIMM   -> rt (bits 20-16)
    ├── 0x10 COP0     -> rs (bits 25-21)
    │   ├── 0x08 BC0  -> nd/tf (bits 17-16)
    │   └── 0x10 TLB  -> function
    ├── 0x11 COP1     -> fmt (bits 25-21)
    │   ├── 0x08 BC1  -> nd/tf
    │   └── S / D / W / L -> function
    ├── 0x12 COP2     -> rs
    └── everything else is a plain I-type or J-type instruction

Reference
---------
- MIPS R4000 Microprocessor User's Manual, chapter 16 (CPU) and 17 (FPU)
- NEC VR4300 User's Manual

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import logging
from typing import Dict

from mipsinsn import fields
from mipsinsn.enums import AccessType, InstrIdType, OperandType
from mipsinsn.opcodes.descriptor import (
    InstrDescriptor,
    OpcodeTable,
    invalid_descriptor,
    make_descriptor,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Operand Shorthands
# =============================================================================

RS = OperandType.CPU_RS
RT = OperandType.CPU_RT
RD = OperandType.CPU_RD
SA = OperandType.CPU_SA
ZERO = OperandType.CPU_ZERO
COP0D = OperandType.CPU_COP0D
FS = OperandType.CPU_FS
FT = OperandType.CPU_FT
FD = OperandType.CPU_FD
COP1CS = OperandType.CPU_COP1CS
COP2T = OperandType.CPU_COP2T
COP2D = OperandType.CPU_COP2D
COP2CD = OperandType.CPU_COP2CD
IMM = OperandType.CPU_IMMEDIATE
IMM_BASE = OperandType.CPU_IMMEDIATE_BASE
BRANCH = OperandType.CPU_BRANCH_TARGET_LABEL
LABEL = OperandType.CPU_LABEL
TRAP_CODE = OperandType.CPU_TRAP_CODE


# =============================================================================
# Flag Presets
# =============================================================================
# Shared flag combinations for the common instruction shapes.

ALU_IMM = dict(modifies_rt=True, reads_rs=True)
ALU_REG = dict(modifies_rd=True, reads_rs=True, reads_rt=True)
SHIFT_SA = dict(modifies_rd=True, reads_rt=True)
SHIFT_REG = dict(modifies_rd=True, reads_rt=True, reads_rs=True)
MULDIV = dict(reads_rs=True, reads_rt=True, modifies_hi=True, modifies_lo=True)
BRANCH_RS_RT = dict(is_branch=True, reads_rs=True, reads_rt=True)
BRANCH_RS = dict(is_branch=True, reads_rs=True)
TRAP_REG = dict(is_trap=True, reads_rs=True, reads_rt=True)
TRAP_IMM = dict(is_trap=True, reads_rs=True)
LOAD = dict(does_load=True, does_dereference=True, reads_rs=True, modifies_rt=True, can_be_lo=True)
STORE = dict(does_store=True, does_dereference=True, reads_rs=True, reads_rt=True, can_be_lo=True)
LOAD_COP = dict(does_load=True, does_dereference=True, reads_rs=True, can_be_lo=True)
STORE_COP = dict(does_store=True, does_dereference=True, reads_rs=True, can_be_lo=True)
SYSTEM = dict(not_emitted_by_compilers=True)

N = InstrIdType.CPU_NORMAL
S = InstrIdType.CPU_SPECIAL
R = InstrIdType.CPU_REGIMM


def _d(name: str, id_type: InstrIdType, operands=(), **flags) -> InstrDescriptor:
    return make_descriptor("cpu", name, id_type, operands, **flags)


# =============================================================================
# SPECIAL (opcode 0x00), keyed by function
# =============================================================================

CPU_SPECIAL: Dict[int, InstrDescriptor] = {
    # Shifts
    0x00: _d("sll", S, (RD, RT, SA), is_pseudo_candidate=True, **SHIFT_SA),
    0x02: _d("srl", S, (RD, RT, SA), **SHIFT_SA),
    0x03: _d("sra", S, (RD, RT, SA), **SHIFT_SA),
    0x04: _d("sllv", S, (RD, RT, RS), **SHIFT_REG),
    0x06: _d("srlv", S, (RD, RT, RS), **SHIFT_REG),
    0x07: _d("srav", S, (RD, RT, RS), **SHIFT_REG),

    # Register jumps
    0x08: _d("jr", S, (RS,), is_jump=True, reads_rs=True),
    0x09: _d("jalr", S, (OperandType.CPU_MAYBE_RD_RS,), is_jump=True, does_link=True, modifies_rd=True, reads_rs=True),

    # System
    0x0C: _d("syscall", S, (OperandType.CPU_CODE_LOWER,), **SYSTEM),
    0x0D: _d("break", S, (OperandType.CPU_CODE,)),
    0x0F: _d("sync", S, (), **SYSTEM),

    # HI/LO moves
    0x10: _d("mfhi", S, (RD,), modifies_rd=True, reads_hi=True),
    0x11: _d("mthi", S, (RS,), reads_rs=True, modifies_hi=True),
    0x12: _d("mflo", S, (RD,), modifies_rd=True, reads_lo=True),
    0x13: _d("mtlo", S, (RS,), reads_rs=True, modifies_lo=True),

    # 64-bit variable shifts
    0x14: _d("dsllv", S, (RD, RT, RS), **SHIFT_REG),
    0x16: _d("dsrlv", S, (RD, RT, RS), **SHIFT_REG),
    0x17: _d("dsrav", S, (RD, RT, RS), **SHIFT_REG),

    # Multiply / divide (GNU style: div renders with an explicit $zero)
    0x18: _d("mult", S, (RS, RT), **MULDIV),
    0x19: _d("multu", S, (RS, RT), is_unsigned=True, **MULDIV),
    0x1A: _d("div", S, (ZERO, RS, RT), **MULDIV),
    0x1B: _d("divu", S, (ZERO, RS, RT), is_unsigned=True, **MULDIV),
    0x1C: _d("dmult", S, (RS, RT), **MULDIV),
    0x1D: _d("dmultu", S, (RS, RT), is_unsigned=True, **MULDIV),
    0x1E: _d("ddiv", S, (ZERO, RS, RT), **MULDIV),
    0x1F: _d("ddivu", S, (ZERO, RS, RT), is_unsigned=True, **MULDIV),

    # Three-register ALU
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
    0x2C: _d("dadd", S, (RD, RS, RT), maybe_is_move=True, **ALU_REG),
    0x2D: _d("daddu", S, (RD, RS, RT), maybe_is_move=True, is_pseudo_candidate=True, **ALU_REG),
    0x2E: _d("dsub", S, (RD, RS, RT), is_pseudo_candidate=True, **ALU_REG),
    0x2F: _d("dsubu", S, (RD, RS, RT), is_pseudo_candidate=True, **ALU_REG),

    # Conditional traps
    0x30: _d("tge", S, (RS, RT, TRAP_CODE), **TRAP_REG),
    0x31: _d("tgeu", S, (RS, RT, TRAP_CODE), is_unsigned=True, **TRAP_REG),
    0x32: _d("tlt", S, (RS, RT, TRAP_CODE), **TRAP_REG),
    0x33: _d("tltu", S, (RS, RT, TRAP_CODE), is_unsigned=True, **TRAP_REG),
    0x34: _d("teq", S, (RS, RT, TRAP_CODE), **TRAP_REG),
    0x36: _d("tne", S, (RS, RT, TRAP_CODE), **TRAP_REG),

    # 64-bit constant shifts
    0x38: _d("dsll", S, (RD, RT, SA), **SHIFT_SA),
    0x3A: _d("dsrl", S, (RD, RT, SA), **SHIFT_SA),
    0x3B: _d("dsra", S, (RD, RT, SA), **SHIFT_SA),
    0x3C: _d("dsll32", S, (RD, RT, SA), **SHIFT_SA),
    0x3E: _d("dsrl32", S, (RD, RT, SA), **SHIFT_SA),
    0x3F: _d("dsra32", S, (RD, RT, SA), **SHIFT_SA),
}


# =============================================================================
# REGIMM (opcode 0x01), keyed by rt
# =============================================================================

CPU_REGIMM: Dict[int, InstrDescriptor] = {
    0x00: _d("bltz", R, (RS, BRANCH), **BRANCH_RS),
    0x01: _d("bgez", R, (RS, BRANCH), **BRANCH_RS),
    0x02: _d("bltzl", R, (RS, BRANCH), is_branch_likely=True, **BRANCH_RS),
    0x03: _d("bgezl", R, (RS, BRANCH), is_branch_likely=True, **BRANCH_RS),

    0x08: _d("tgei", R, (RS, IMM), **TRAP_IMM),
    0x09: _d("tgeiu", R, (RS, IMM), is_unsigned=True, **TRAP_IMM),
    0x0A: _d("tlti", R, (RS, IMM), **TRAP_IMM),
    0x0B: _d("tltiu", R, (RS, IMM), is_unsigned=True, **TRAP_IMM),
    0x0C: _d("teqi", R, (RS, IMM), **TRAP_IMM),
    0x0E: _d("tnei", R, (RS, IMM), **TRAP_IMM),

    0x10: _d("bltzal", R, (RS, BRANCH), does_link=True, **BRANCH_RS),
    0x11: _d("bgezal", R, (RS, BRANCH), does_link=True, is_pseudo_candidate=True, **BRANCH_RS),
    0x12: _d("bltzall", R, (RS, BRANCH), does_link=True, is_branch_likely=True, **BRANCH_RS),
    0x13: _d("bgezall", R, (RS, BRANCH), does_link=True, is_branch_likely=True, **BRANCH_RS),
}


# =============================================================================
# COP0 (opcode 0x10)
# =============================================================================

CPU_COP0_BC0: Dict[int, InstrDescriptor] = {
    0x00: _d("bc0f", InstrIdType.CPU_COP0_BC0, (BRANCH,), is_branch=True, **SYSTEM),
    0x01: _d("bc0t", InstrIdType.CPU_COP0_BC0, (BRANCH,), is_branch=True, **SYSTEM),
    0x02: _d("bc0fl", InstrIdType.CPU_COP0_BC0, (BRANCH,), is_branch=True, is_branch_likely=True, **SYSTEM),
    0x03: _d("bc0tl", InstrIdType.CPU_COP0_BC0, (BRANCH,), is_branch=True, is_branch_likely=True, **SYSTEM),
}

CPU_COP0_TLB: Dict[int, InstrDescriptor] = {
    0x01: _d("tlbr", InstrIdType.CPU_COP0_TLB, (), **SYSTEM),
    0x02: _d("tlbwi", InstrIdType.CPU_COP0_TLB, (), **SYSTEM),
    0x06: _d("tlbwr", InstrIdType.CPU_COP0_TLB, (), **SYSTEM),
    0x08: _d("tlbp", InstrIdType.CPU_COP0_TLB, (), **SYSTEM),
    0x18: _d("eret", InstrIdType.CPU_COP0_TLB, (), is_return=True, **SYSTEM),
}

CPU_COP0: Dict[int, object] = {
    0x00: _d("mfc0", InstrIdType.CPU_COP0, (RT, COP0D), modifies_rt=True, **SYSTEM),
    0x01: _d("dmfc0", InstrIdType.CPU_COP0, (RT, COP0D), modifies_rt=True, **SYSTEM),
    0x02: _d("cfc0", InstrIdType.CPU_COP0, (RT, COP0D), modifies_rt=True, **SYSTEM),
    0x04: _d("mtc0", InstrIdType.CPU_COP0, (RT, COP0D), reads_rt=True, **SYSTEM),
    0x05: _d("dmtc0", InstrIdType.CPU_COP0, (RT, COP0D), reads_rt=True, **SYSTEM),
    0x06: _d("ctc0", InstrIdType.CPU_COP0, (RT, COP0D), reads_rt=True, **SYSTEM),
    0x08: OpcodeTable("cpu.cop0.bc0", fields.bc_condition, CPU_COP0_BC0,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP0_BC0)),
    0x10: OpcodeTable("cpu.cop0.tlb", fields.function, CPU_COP0_TLB,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP0_TLB)),
}


# =============================================================================
# COP1 (opcode 0x11)
# =============================================================================

FP_CONDITIONS = (
    "f", "un", "eq", "ueq", "olt", "ult", "ole", "ule",
    "sf", "ngle", "seq", "ngl", "lt", "nge", "le", "ngt",
)


def _fpu_table(fmt: str, id_type: InstrIdType) -> Dict[int, InstrDescriptor]:
    """
    Build the S or D arithmetic table.

    The single and double precision tables only differ by their suffix,
    precision flag and which cvt.{s,d} conversion exists.
    """
    precision = dict(is_float=True) if fmt == "s" else dict(is_double=True)
    arith = dict(modifies_fd=True, reads_fs=True, reads_ft=True, **precision)
    unary = dict(modifies_fd=True, reads_fs=True, **precision)

    table: Dict[int, InstrDescriptor] = {
        0x00: _d(f"add.{fmt}", id_type, (FD, FS, FT), **arith),
        0x01: _d(f"sub.{fmt}", id_type, (FD, FS, FT), **arith),
        0x02: _d(f"mul.{fmt}", id_type, (FD, FS, FT), **arith),
        0x03: _d(f"div.{fmt}", id_type, (FD, FS, FT), **arith),
        0x04: _d(f"sqrt.{fmt}", id_type, (FD, FS), **unary),
        0x05: _d(f"abs.{fmt}", id_type, (FD, FS), **unary),
        0x06: _d(f"mov.{fmt}", id_type, (FD, FS), **unary),
        0x07: _d(f"neg.{fmt}", id_type, (FD, FS), **unary),
        0x08: _d(f"round.l.{fmt}", id_type, (FD, FS), **unary),
        0x09: _d(f"trunc.l.{fmt}", id_type, (FD, FS), **unary),
        0x0A: _d(f"ceil.l.{fmt}", id_type, (FD, FS), **unary),
        0x0B: _d(f"floor.l.{fmt}", id_type, (FD, FS), **unary),
        0x0C: _d(f"round.w.{fmt}", id_type, (FD, FS), **unary),
        0x0D: _d(f"trunc.w.{fmt}", id_type, (FD, FS), **unary),
        0x0E: _d(f"ceil.w.{fmt}", id_type, (FD, FS), **unary),
        0x0F: _d(f"floor.w.{fmt}", id_type, (FD, FS), **unary),
        0x24: _d(f"cvt.w.{fmt}", id_type, (FD, FS), **unary),
        0x25: _d(f"cvt.l.{fmt}", id_type, (FD, FS), **unary),
    }
    if fmt == "s":
        table[0x21] = _d("cvt.d.s", id_type, (FD, FS), **unary)
    else:
        table[0x20] = _d("cvt.s.d", id_type, (FD, FS), **unary)

    for cond, suffix in enumerate(FP_CONDITIONS):
        table[0x30 + cond] = _d(f"c.{suffix}.{fmt}", id_type, (FS, FT),
                                reads_fs=True, reads_ft=True, **precision)
    return table


def _fixed_table(fmt: str, id_type: InstrIdType) -> Dict[int, InstrDescriptor]:
    """Build the W or L (fixed point source) conversion table."""
    return {
        0x20: _d(f"cvt.s.{fmt}", id_type, (FD, FS), modifies_fd=True, reads_fs=True, is_float=True),
        0x21: _d(f"cvt.d.{fmt}", id_type, (FD, FS), modifies_fd=True, reads_fs=True, is_double=True),
    }


CPU_COP1_BC1: Dict[int, InstrDescriptor] = {
    0x00: _d("bc1f", InstrIdType.CPU_COP1_BC1, (BRANCH,), is_branch=True, is_float=True),
    0x01: _d("bc1t", InstrIdType.CPU_COP1_BC1, (BRANCH,), is_branch=True, is_float=True),
    0x02: _d("bc1fl", InstrIdType.CPU_COP1_BC1, (BRANCH,), is_branch=True, is_branch_likely=True, is_float=True),
    0x03: _d("bc1tl", InstrIdType.CPU_COP1_BC1, (BRANCH,), is_branch=True, is_branch_likely=True, is_float=True),
}

CPU_COP1_FPUS = _fpu_table("s", InstrIdType.CPU_COP1_FPUS)
CPU_COP1_FPUD = _fpu_table("d", InstrIdType.CPU_COP1_FPUD)
CPU_COP1_FPUW = _fixed_table("w", InstrIdType.CPU_COP1_FPUW)
CPU_COP1_FPUL = _fixed_table("l", InstrIdType.CPU_COP1_FPUL)

CPU_COP1: Dict[int, object] = {
    0x00: _d("mfc1", InstrIdType.CPU_COP1, (RT, FS), modifies_rt=True, reads_fs=True),
    0x01: _d("dmfc1", InstrIdType.CPU_COP1, (RT, FS), modifies_rt=True, reads_fs=True),
    0x02: _d("cfc1", InstrIdType.CPU_COP1, (RT, COP1CS), modifies_rt=True),
    0x04: _d("mtc1", InstrIdType.CPU_COP1, (RT, FS), reads_rt=True, modifies_fs=True),
    0x05: _d("dmtc1", InstrIdType.CPU_COP1, (RT, FS), reads_rt=True, modifies_fs=True),
    0x06: _d("ctc1", InstrIdType.CPU_COP1, (RT, COP1CS), reads_rt=True),
    0x08: OpcodeTable("cpu.cop1.bc1", fields.bc_condition, CPU_COP1_BC1,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP1_BC1)),
    0x10: OpcodeTable("cpu.cop1.s", fields.function, CPU_COP1_FPUS,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP1_FPUS)),
    0x11: OpcodeTable("cpu.cop1.d", fields.function, CPU_COP1_FPUD,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP1_FPUD)),
    0x14: OpcodeTable("cpu.cop1.w", fields.function, CPU_COP1_FPUW,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP1_FPUW)),
    0x15: OpcodeTable("cpu.cop1.l", fields.function, CPU_COP1_FPUL,
                      invalid_descriptor("cpu", InstrIdType.CPU_COP1_FPUL)),
}


# =============================================================================
# COP2 (opcode 0x12), raw moves only
# =============================================================================

CPU_COP2: Dict[int, InstrDescriptor] = {
    0x00: _d("mfc2", InstrIdType.CPU_COP2, (RT, COP2D), modifies_rt=True),
    0x01: _d("dmfc2", InstrIdType.CPU_COP2, (RT, COP2D), modifies_rt=True),
    0x02: _d("cfc2", InstrIdType.CPU_COP2, (RT, COP2CD), modifies_rt=True),
    0x04: _d("mtc2", InstrIdType.CPU_COP2, (RT, COP2D), reads_rt=True),
    0x05: _d("dmtc2", InstrIdType.CPU_COP2, (RT, COP2D), reads_rt=True),
    0x06: _d("ctc2", InstrIdType.CPU_COP2, (RT, COP2CD), reads_rt=True),
}


# =============================================================================
# Primary opcode table
# =============================================================================

CPU_NORMAL: Dict[int, InstrDescriptor] = {
    # Jumps
    0x02: _d("j", N, (LABEL,), is_jump=True, is_jump_with_address=True),
    0x03: _d("jal", N, (LABEL,), is_jump=True, is_jump_with_address=True, does_link=True),

    # Branches
    0x04: _d("beq", N, (RS, RT, BRANCH), is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x05: _d("bne", N, (RS, RT, BRANCH), is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x06: _d("blez", N, (RS, BRANCH), **BRANCH_RS),
    0x07: _d("bgtz", N, (RS, BRANCH), **BRANCH_RS),

    # Immediate ALU
    0x08: _d("addi", N, (RT, RS, IMM), **ALU_IMM),
    0x09: _d("addiu", N, (RT, RS, IMM), can_be_lo=True, **ALU_IMM),
    0x0A: _d("slti", N, (RT, RS, IMM), **ALU_IMM),
    0x0B: _d("sltiu", N, (RT, RS, IMM), is_unsigned=True, **ALU_IMM),
    0x0C: _d("andi", N, (RT, RS, IMM), unsigned_immediate=True, **ALU_IMM),
    0x0D: _d("ori", N, (RT, RS, IMM), unsigned_immediate=True, can_be_lo=True, **ALU_IMM),
    0x0E: _d("xori", N, (RT, RS, IMM), unsigned_immediate=True, **ALU_IMM),
    0x0F: _d("lui", N, (RT, IMM), unsigned_immediate=True, modifies_rt=True, can_be_hi=True),

    # Branch likely
    0x14: _d("beql", N, (RS, RT, BRANCH), is_branch_likely=True, is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x15: _d("bnel", N, (RS, RT, BRANCH), is_branch_likely=True, is_pseudo_candidate=True, **BRANCH_RS_RT),
    0x16: _d("blezl", N, (RS, BRANCH), is_branch_likely=True, **BRANCH_RS),
    0x17: _d("bgtzl", N, (RS, BRANCH), is_branch_likely=True, **BRANCH_RS),

    # 64-bit immediate ALU
    0x18: _d("daddi", N, (RT, RS, IMM), **ALU_IMM),
    0x19: _d("daddiu", N, (RT, RS, IMM), **ALU_IMM),

    # Loads
    0x1A: _d("ldl", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD_LEFT, reads_rt=True, **LOAD),
    0x1B: _d("ldr", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD_RIGHT, reads_rt=True, **LOAD),
    0x20: _d("lb", N, (RT, IMM_BASE), access_type=AccessType.BYTE, **LOAD),
    0x21: _d("lh", N, (RT, IMM_BASE), access_type=AccessType.SHORT, **LOAD),
    0x22: _d("lwl", N, (RT, IMM_BASE), access_type=AccessType.WORD_LEFT, reads_rt=True, **LOAD),
    0x23: _d("lw", N, (RT, IMM_BASE), access_type=AccessType.WORD, **LOAD),
    0x24: _d("lbu", N, (RT, IMM_BASE), access_type=AccessType.BYTE, is_unsigned=True, **LOAD),
    0x25: _d("lhu", N, (RT, IMM_BASE), access_type=AccessType.SHORT, is_unsigned=True, **LOAD),
    0x26: _d("lwr", N, (RT, IMM_BASE), access_type=AccessType.WORD_RIGHT, reads_rt=True, **LOAD),
    0x27: _d("lwu", N, (RT, IMM_BASE), access_type=AccessType.WORD, is_unsigned=True, **LOAD),

    # Stores
    0x28: _d("sb", N, (RT, IMM_BASE), access_type=AccessType.BYTE, **STORE),
    0x29: _d("sh", N, (RT, IMM_BASE), access_type=AccessType.SHORT, **STORE),
    0x2A: _d("swl", N, (RT, IMM_BASE), access_type=AccessType.WORD_LEFT, **STORE),
    0x2B: _d("sw", N, (RT, IMM_BASE), access_type=AccessType.WORD, **STORE),
    0x2C: _d("sdl", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD_LEFT, **STORE),
    0x2D: _d("sdr", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD_RIGHT, **STORE),
    0x2E: _d("swr", N, (RT, IMM_BASE), access_type=AccessType.WORD_RIGHT, **STORE),
    0x2F: _d("cache", N, (OperandType.CPU_OP, IMM_BASE), reads_rs=True, **SYSTEM),

    # Linked / coprocessor loads
    0x30: _d("ll", N, (RT, IMM_BASE), access_type=AccessType.WORD, **LOAD),
    0x31: _d("lwc1", N, (FT, IMM_BASE), access_type=AccessType.FLOAT, modifies_ft=True, is_float=True, **LOAD_COP),
    0x32: _d("lwc2", N, (COP2T, IMM_BASE), access_type=AccessType.WORD, **LOAD_COP),
    0x33: _d("pref", N, (OperandType.CPU_HINT, IMM_BASE), reads_rs=True),
    0x34: _d("lld", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD, **LOAD),
    0x35: _d("ldc1", N, (FT, IMM_BASE), access_type=AccessType.DOUBLEFLOAT, modifies_ft=True, is_double=True, **LOAD_COP),
    0x36: _d("ldc2", N, (COP2T, IMM_BASE), access_type=AccessType.DOUBLEWORD, **LOAD_COP),
    0x37: _d("ld", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD, **LOAD),

    # Conditional / coprocessor stores
    0x38: _d("sc", N, (RT, IMM_BASE), access_type=AccessType.WORD, modifies_rt=True, **STORE),
    0x39: _d("swc1", N, (FT, IMM_BASE), access_type=AccessType.FLOAT, reads_ft=True, is_float=True, **STORE_COP),
    0x3A: _d("swc2", N, (COP2T, IMM_BASE), access_type=AccessType.WORD, **STORE_COP),
    0x3C: _d("scd", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD, modifies_rt=True, **STORE),
    0x3D: _d("sdc1", N, (FT, IMM_BASE), access_type=AccessType.DOUBLEFLOAT, reads_ft=True, is_double=True, **STORE_COP),
    0x3E: _d("sdc2", N, (COP2T, IMM_BASE), access_type=AccessType.DOUBLEWORD, **STORE_COP),
    0x3F: _d("sd", N, (RT, IMM_BASE), access_type=AccessType.DOUBLEWORD, **STORE),
}

CPU_TABLE = OpcodeTable(
    "cpu",
    fields.opcode,
    {
        **CPU_NORMAL,
        0x00: OpcodeTable("cpu.special", fields.function, CPU_SPECIAL,
                          invalid_descriptor("cpu", InstrIdType.CPU_SPECIAL)),
        0x01: OpcodeTable("cpu.regimm", fields.rt, CPU_REGIMM,
                          invalid_descriptor("cpu", InstrIdType.CPU_REGIMM)),
        0x10: OpcodeTable("cpu.cop0", fields.rs, CPU_COP0,
                          invalid_descriptor("cpu", InstrIdType.CPU_COP0)),
        0x11: OpcodeTable("cpu.cop1", fields.fmt, CPU_COP1,
                          invalid_descriptor("cpu", InstrIdType.CPU_COP1)),
        0x12: OpcodeTable("cpu.cop2", fields.rs, CPU_COP2,
                          invalid_descriptor("cpu", InstrIdType.CPU_COP2)),
    },
    invalid_descriptor("cpu", InstrIdType.CPU_INVALID),
)

logger.debug(f"Loaded {len(CPU_TABLE)} cpu instruction descriptors")
