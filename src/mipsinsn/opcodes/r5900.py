"""
PlayStation 2 Emotion Engine Instruction Set
============================================

Dispatch tables for the `r5900` category: the R5900 core of the
PlayStation 2 Emotion Engine. The base is MIPS III without the
doubleword multiply/divide, the linked loads/stores and the double
precision FPU, extended with:

- 128-bit loads and stores (lq, sq, lqc2, sqc2) and the shift amount
  register (mfsa, mtsa, mtsab, mtsah)
- MMI (opcode 0x1C): SIMD operations on the 128-bit GPRs, plus the
  second multiply/divide pipeline (mult1, div1, madd1, ...)
- an FPU with an accumulator (adda.s, madd.s, ...)
- COP2 as the VU0 vector unit in macro mode

Table Layout
------------
    primary opcode
    ├── 0x00 SPECIAL  -> function (0x0F sync -> stype in sa)
    ├── 0x01 REGIMM   -> rt
    ├── 0x10 COP0     -> rs (BC0 -> nd/tf, C0 -> function)
    ├── 0x11 COP1     -> fmt (BC1, S, W)
    ├── 0x12 COP2     -> rs
    │   ├── 0x01 0x02 0x05 0x06 moves -> interlock bit (.ni / .i)
    │   ├── 0x08 BC2  -> nd/tf
    │   └── 0x10-0x1F SPECIAL1 -> function
    │       └── 0x3C-0x3F SPECIAL2 -> bits 10-6 and 1-0
    └── 0x1C MMI      -> function
        ├── MMI0 MMI1 MMI2 MMI3 -> sa
        └── PMFHL PMTHL -> sa

VU0 macro instructions carry their destination field as a mnemonic
suffix:

    vadd.xyzw   $vf1, $vf2, $vf3
    vmulax.xyz  $ACC, $vf4, $vf5x

The HI1/LO1 registers of the second pipeline are not tracked as a
register file.

Reference
---------
- EE Core Instruction Set Manual
- VU User's Manual, macro mode instruction reference

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import logging
from typing import Dict

from mipsinsn import fields
from mipsinsn.enums import AccessType, InstrIdType, OperandType, RegisterFile
from mipsinsn.opcodes import cpu
from mipsinsn.opcodes.cpu import (
    ALU_REG, LOAD, LOAD_COP, MULDIV, SHIFT_REG, SHIFT_SA, STORE, STORE_COP, SYSTEM,
)
from mipsinsn.opcodes.descriptor import (
    InstrDescriptor,
    OpcodeTable,
    invalid_descriptor,
    make_descriptor,
    rebase,
)

logger = logging.getLogger(__name__)


RS = OperandType.CPU_RS
RT = OperandType.CPU_RT
RD = OperandType.CPU_RD
SA = OperandType.CPU_SA
ZERO = OperandType.CPU_ZERO
FS = OperandType.CPU_FS
FT = OperandType.CPU_FT
FD = OperandType.CPU_FD
IMM = OperandType.CPU_IMMEDIATE
IMM_BASE = OperandType.CPU_IMMEDIATE_BASE
BRANCH = OperandType.CPU_BRANCH_TARGET_LABEL

VFS = OperandType.R5900_VFS
VFT = OperandType.R5900_VFT
VFD = OperandType.R5900_VFD
VFS_FSF = OperandType.R5900_VFS_FSF
VFT_FTF = OperandType.R5900_VFT_FTF
VFT_BC = OperandType.R5900_VFT_BC
VIS = OperandType.R5900_VIS
VIT = OperandType.R5900_VIT
VID = OperandType.R5900_VID
ACC = OperandType.R5900_ACC
Q = OperandType.R5900_Q
I = OperandType.R5900_I  # noqa: E741
R = OperandType.R5900_R

N = InstrIdType.R5900_NORMAL
S = InstrIdType.R5900_SPECIAL


def _d(name: str, id_type: InstrIdType, operands=(), **flags) -> InstrDescriptor:
    return make_descriptor("r5900", name, id_type, operands, **flags)


def _rebase(source, keys, id_type: InstrIdType) -> Dict[int, InstrDescriptor]:
    return rebase("r5900", source, keys, id_type)


# =============================================================================
# SPECIAL (opcode 0x00), keyed by function
# =============================================================================

R5900_SYNC: Dict[int, InstrDescriptor] = {
    0x00: _d("sync", S, (), **SYSTEM),
    0x10: _d("sync.p", S, (), **SYSTEM),
}

R5900_SPECIAL: Dict[int, object] = {
    **_rebase(
        cpu.CPU_SPECIAL,
        (
            0x00, 0x02, 0x03, 0x04, 0x06, 0x07,        # shifts
            0x08, 0x09, 0x0C, 0x0D,                    # jr jalr syscall break
            0x10, 0x11, 0x12, 0x13,                    # hi/lo moves
            0x14, 0x16, 0x17,                          # dsllv dsrlv dsrav
            0x1A, 0x1B,                                # div divu
            0x20, 0x21, 0x22, 0x23, 0x24, 0x25, 0x26, 0x27,
            0x2A, 0x2B, 0x2C, 0x2D, 0x2E, 0x2F,
            0x30, 0x31, 0x32, 0x33, 0x34, 0x36,        # traps
            0x38, 0x3A, 0x3B, 0x3C, 0x3E, 0x3F,        # doubleword shifts
        ),
        S,
    ),
    0x0A: _d("movz", S, (RD, RS, RT), **ALU_REG),
    0x0B: _d("movn", S, (RD, RS, RT), **ALU_REG),
    0x0F: OpcodeTable("r5900.special.sync", fields.sa, R5900_SYNC, invalid_descriptor("r5900", S)),

    # Three-operand multiply: rd receives the low word as well as LO
    0x18: _d("mult", S, (RD, RS, RT), modifies_rd=True, **MULDIV),
    0x19: _d("multu", S, (RD, RS, RT), modifies_rd=True, is_unsigned=True, **MULDIV),

    # Shift amount register
    0x28: _d("mfsa", S, (RD,), modifies_rd=True),
    0x29: _d("mtsa", S, (RS,), reads_rs=True),
}


# =============================================================================
# REGIMM (opcode 0x01), keyed by rt
# =============================================================================

R5900_REGIMM: Dict[int, InstrDescriptor] = {
    **_rebase(
        cpu.CPU_REGIMM,
        (0x00, 0x01, 0x02, 0x03, 0x08, 0x09, 0x0A, 0x0B, 0x0C, 0x0E, 0x10, 0x11, 0x12, 0x13),
        InstrIdType.R5900_REGIMM,
    ),
    0x18: _d("mtsab", InstrIdType.R5900_REGIMM, (RS, IMM), reads_rs=True),
    0x19: _d("mtsah", InstrIdType.R5900_REGIMM, (RS, IMM), reads_rs=True),
}


# =============================================================================
# COP0 (opcode 0x10)
# =============================================================================

R5900_COP0_TLB: Dict[int, InstrDescriptor] = {
    **_rebase(cpu.CPU_COP0_TLB, (0x01, 0x02, 0x06, 0x08, 0x18), InstrIdType.R5900_COP0_TLB),
    0x38: _d("ei", InstrIdType.R5900_COP0_TLB, (), **SYSTEM),
    0x39: _d("di", InstrIdType.R5900_COP0_TLB, (), **SYSTEM),
}

R5900_COP0: Dict[int, object] = {
    **_rebase(cpu.CPU_COP0, (0x00, 0x04), InstrIdType.R5900_COP0),
    0x08: OpcodeTable("r5900.cop0.bc0", fields.bc_condition,
                      _rebase(cpu.CPU_COP0_BC0, range(4), InstrIdType.R5900_COP0_BC0),
                      invalid_descriptor("r5900", InstrIdType.R5900_COP0_BC0)),
    0x10: OpcodeTable("r5900.cop0.c0", fields.function, R5900_COP0_TLB,
                      invalid_descriptor("r5900", InstrIdType.R5900_COP0_TLB)),
}


# =============================================================================
# COP1 (opcode 0x11): single precision only, with an accumulator
# =============================================================================

FPUS = InstrIdType.R5900_COP1_FPUS

ARITH = dict(modifies_fd=True, reads_fs=True, reads_ft=True, is_float=True)
ACCUMULATE = dict(reads_fs=True, reads_ft=True, is_float=True)

R5900_COP1_FPUS: Dict[int, InstrDescriptor] = {
    # add.s sub.s mul.s div.s abs.s mov.s neg.s cvt.w.s c.f.s c.eq.s
    **_rebase(cpu.CPU_COP1_FPUS, (0x00, 0x01, 0x02, 0x03, 0x05, 0x06, 0x07, 0x24, 0x30, 0x32), FPUS),
    0x04: _d("sqrt.s", FPUS, (FD, FT), modifies_fd=True, reads_ft=True, is_float=True),
    0x16: _d("rsqrt.s", FPUS, (FD, FS, FT), **ARITH),
    0x18: _d("adda.s", FPUS, (FS, FT), **ACCUMULATE),
    0x19: _d("suba.s", FPUS, (FS, FT), **ACCUMULATE),
    0x1A: _d("mula.s", FPUS, (FS, FT), **ACCUMULATE),
    0x1C: _d("madd.s", FPUS, (FD, FS, FT), **ARITH),
    0x1D: _d("msub.s", FPUS, (FD, FS, FT), **ARITH),
    0x1E: _d("madda.s", FPUS, (FS, FT), **ACCUMULATE),
    0x1F: _d("msuba.s", FPUS, (FS, FT), **ACCUMULATE),
    0x28: _d("max.s", FPUS, (FD, FS, FT), **ARITH),
    0x29: _d("min.s", FPUS, (FD, FS, FT), **ARITH),
    0x34: _d("c.lt.s", FPUS, (FS, FT), **ACCUMULATE),
    0x36: _d("c.le.s", FPUS, (FS, FT), **ACCUMULATE),
}

R5900_COP1: Dict[int, object] = {
    **_rebase(cpu.CPU_COP1, (0x00, 0x02, 0x04, 0x06), InstrIdType.R5900_COP1),  # mfc1 cfc1 mtc1 ctc1
    0x08: OpcodeTable("r5900.cop1.bc1", fields.bc_condition,
                      _rebase(cpu.CPU_COP1_BC1, range(4), InstrIdType.R5900_COP1_BC1),
                      invalid_descriptor("r5900", InstrIdType.R5900_COP1_BC1)),
    0x10: OpcodeTable("r5900.cop1.s", fields.function, R5900_COP1_FPUS,
                      invalid_descriptor("r5900", FPUS)),
    0x14: OpcodeTable("r5900.cop1.w", fields.function,
                      _rebase(cpu.CPU_COP1_FPUW, (0x20,), InstrIdType.R5900_COP1_FPUW),
                      invalid_descriptor("r5900", InstrIdType.R5900_COP1_FPUW)),
}


# =============================================================================
# COP2 (opcode 0x12): VU0 macro mode
# =============================================================================

VF = RegisterFile.R5900_VF
VI = RegisterFile.R5900_VI
SP1 = InstrIdType.R5900_COP2_SPECIAL1
SP2 = InstrIdType.R5900_COP2_SPECIAL2

_FIELDS = "xyzw"

# vfd = vfs op vft
VF_OP = dict(dest_suffix=True, float_file=VF, modifies_fd=True, reads_fs=True, reads_ft=True)
# vfd = vfs op Q / I
VF_OP_QI = dict(dest_suffix=True, float_file=VF, modifies_fd=True, reads_fs=True)
# ACC = vfs op vft
VF_ACC = dict(dest_suffix=True, float_file=VF, reads_fs=True, reads_ft=True)
VF_ACC_QI = dict(dest_suffix=True, float_file=VF, reads_fs=True)
# vft = f(vfs)
VF_UNARY = dict(dest_suffix=True, float_file=VF, modifies_ft=True, reads_fs=True)
VI_OP = dict(float_file=VI, modifies_fd=True, reads_fs=True, reads_ft=True)

# base function -> mnemonic of the four broadcast (x/y/z/w) variants
_BROADCAST = {
    0x00: "vadd", 0x04: "vsub", 0x08: "vmadd", 0x0C: "vmsub",
    0x10: "vmax", 0x14: "vmini", 0x18: "vmul",
}

_BROADCAST_ACC = {
    0x00: "vadda", 0x04: "vsuba", 0x08: "vmadda", 0x0C: "vmsuba", 0x18: "vmula",
}


def _broadcast(table: Dict[int, str], id_type: InstrIdType, operands, **flags) -> Dict[int, InstrDescriptor]:
    """The x/y/z/w variants, selected by the low two bits."""
    return {
        base + bc: _d(f"{name}{_FIELDS[bc]}", id_type, operands, **flags)
        for base, name in table.items()
        for bc in range(4)
    }


R5900_COP2_SPECIAL2: Dict[int, InstrDescriptor] = {
    **_broadcast(_BROADCAST_ACC, SP2, (ACC, VFS, VFT_BC), **VF_ACC),
    0x10: _d("vitof0", SP2, (VFT, VFS), **VF_UNARY),
    0x11: _d("vitof4", SP2, (VFT, VFS), **VF_UNARY),
    0x12: _d("vitof12", SP2, (VFT, VFS), **VF_UNARY),
    0x13: _d("vitof15", SP2, (VFT, VFS), **VF_UNARY),
    0x14: _d("vftoi0", SP2, (VFT, VFS), **VF_UNARY),
    0x15: _d("vftoi4", SP2, (VFT, VFS), **VF_UNARY),
    0x16: _d("vftoi12", SP2, (VFT, VFS), **VF_UNARY),
    0x17: _d("vftoi15", SP2, (VFT, VFS), **VF_UNARY),
    0x1C: _d("vmulaq", SP2, (ACC, VFS, Q), **VF_ACC_QI),
    0x1D: _d("vabs", SP2, (VFT, VFS), **VF_UNARY),
    0x1E: _d("vmulai", SP2, (ACC, VFS, I), **VF_ACC_QI),
    0x1F: _d("vclipw", SP2, (VFS, VFT_BC), **VF_ACC),
    0x20: _d("vaddaq", SP2, (ACC, VFS, Q), **VF_ACC_QI),
    0x21: _d("vmaddaq", SP2, (ACC, VFS, Q), **VF_ACC_QI),
    0x22: _d("vaddai", SP2, (ACC, VFS, I), **VF_ACC_QI),
    0x23: _d("vmaddai", SP2, (ACC, VFS, I), **VF_ACC_QI),
    0x24: _d("vsubaq", SP2, (ACC, VFS, Q), **VF_ACC_QI),
    0x25: _d("vmsubaq", SP2, (ACC, VFS, Q), **VF_ACC_QI),
    0x26: _d("vsubai", SP2, (ACC, VFS, I), **VF_ACC_QI),
    0x27: _d("vmsubai", SP2, (ACC, VFS, I), **VF_ACC_QI),
    0x28: _d("vadda", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x29: _d("vmadda", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x2A: _d("vmula", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x2C: _d("vsuba", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x2D: _d("vmsuba", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x2E: _d("vopmula", SP2, (ACC, VFS, VFT), **VF_ACC),
    0x2F: _d("vnop", SP2),
    0x30: _d("vmove", SP2, (VFT, VFS), **VF_UNARY),
    0x31: _d("vmr32", SP2, (VFT, VFS), **VF_UNARY),
    0x34: _d("vlqi", SP2, (VFT, OperandType.R5900_VIS_POSTINCR),
             dest_suffix=True, float_file=VF, modifies_ft=True),
    0x35: _d("vsqi", SP2, (VFS, OperandType.R5900_VIT_POSTINCR),
             dest_suffix=True, float_file=VF, reads_fs=True),
    0x36: _d("vlqd", SP2, (VFT, OperandType.R5900_VIS_PREDECR),
             dest_suffix=True, float_file=VF, modifies_ft=True),
    0x37: _d("vsqd", SP2, (VFS, OperandType.R5900_VIT_PREDECR),
             dest_suffix=True, float_file=VF, reads_fs=True),
    0x38: _d("vdiv", SP2, (Q, VFS_FSF, VFT_FTF), float_file=VF, reads_fs=True, reads_ft=True),
    0x39: _d("vsqrt", SP2, (Q, VFT_FTF), float_file=VF, reads_ft=True),
    0x3A: _d("vrsqrt", SP2, (Q, VFS_FSF, VFT_FTF), float_file=VF, reads_fs=True, reads_ft=True),
    0x3B: _d("vwaitq", SP2),
    0x3C: _d("vmtir", SP2, (VIT, VFS_FSF), float_file=VI, modifies_ft=True),
    0x3D: _d("vmfir", SP2, (VFT, VIS), dest_suffix=True, float_file=VF, modifies_ft=True),
    0x3E: _d("vilwr", SP2, (VIT, OperandType.R5900_VIS_PARENTHESIS),
             dest_suffix=True, float_file=VI, modifies_ft=True, reads_fs=True),
    0x3F: _d("viswr", SP2, (VIT, OperandType.R5900_VIS_PARENTHESIS),
             dest_suffix=True, float_file=VI, reads_ft=True, reads_fs=True),
    0x40: _d("vrnext", SP2, (VFT, R), dest_suffix=True, float_file=VF, modifies_ft=True),
    0x41: _d("vrget", SP2, (VFT, R), dest_suffix=True, float_file=VF, modifies_ft=True),
    0x42: _d("vrinit", SP2, (R, VFS_FSF), float_file=VF, reads_fs=True),
    0x43: _d("vrxor", SP2, (R, VFS_FSF), float_file=VF, reads_fs=True),
}

_SPECIAL2_TABLE = OpcodeTable("r5900.cop2.special2", fields.r5900_special2, R5900_COP2_SPECIAL2,
                              invalid_descriptor("r5900", SP2))

R5900_COP2_SPECIAL1: Dict[int, object] = {
    **_broadcast(_BROADCAST, SP1, (VFD, VFS, VFT_BC), **VF_OP),
    0x1C: _d("vmulq", SP1, (VFD, VFS, Q), **VF_OP_QI),
    0x1D: _d("vmaxi", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x1E: _d("vmuli", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x1F: _d("vminii", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x20: _d("vaddq", SP1, (VFD, VFS, Q), **VF_OP_QI),
    0x21: _d("vmaddq", SP1, (VFD, VFS, Q), **VF_OP_QI),
    0x22: _d("vaddi", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x23: _d("vmaddi", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x24: _d("vsubq", SP1, (VFD, VFS, Q), **VF_OP_QI),
    0x25: _d("vmsubq", SP1, (VFD, VFS, Q), **VF_OP_QI),
    0x26: _d("vsubi", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x27: _d("vmsubi", SP1, (VFD, VFS, I), **VF_OP_QI),
    0x28: _d("vadd", SP1, (VFD, VFS, VFT), **VF_OP),
    0x29: _d("vmadd", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2A: _d("vmul", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2B: _d("vmax", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2C: _d("vsub", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2D: _d("vmsub", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2E: _d("vopmsub", SP1, (VFD, VFS, VFT), **VF_OP),
    0x2F: _d("vmini", SP1, (VFD, VFS, VFT), **VF_OP),
    0x30: _d("viadd", SP1, (VID, VIS, VIT), **VI_OP),
    0x31: _d("visub", SP1, (VID, VIS, VIT), **VI_OP),
    0x32: _d("viaddi", SP1, (VIT, VIS, OperandType.R5900_IMM5), float_file=VI, modifies_ft=True, reads_fs=True),
    0x34: _d("viand", SP1, (VID, VIS, VIT), **VI_OP),
    0x35: _d("vior", SP1, (VID, VIS, VIT), **VI_OP),
    0x38: _d("vcallms", SP1, (OperandType.R5900_IMM15,)),
    0x39: _d("vcallmsr", SP1, (VIS,), float_file=VI, reads_fs=True),
    **{funct: _SPECIAL2_TABLE for funct in range(0x3C, 0x40)},
}

_SPECIAL1_TABLE = OpcodeTable("r5900.cop2.special1", fields.function, R5900_COP2_SPECIAL1,
                              invalid_descriptor("r5900", SP1))


def _interlocked(name: str, operands, **flags) -> OpcodeTable:
    """The no-interlock (.ni) and interlock (.i) forms of a COP2 move."""
    return OpcodeTable(
        f"r5900.cop2.{name}",
        fields.r5900_interlock,
        {
            0: _d(f"{name}.ni", InstrIdType.R5900_COP2, operands, **flags),
            1: _d(f"{name}.i", InstrIdType.R5900_COP2, operands, **flags),
        },
        invalid_descriptor("r5900", InstrIdType.R5900_COP2),
    )


R5900_COP2_BC2: Dict[int, InstrDescriptor] = {
    0x00: _d("bc2f", InstrIdType.R5900_COP2_BC2, (BRANCH,), is_branch=True),
    0x01: _d("bc2t", InstrIdType.R5900_COP2_BC2, (BRANCH,), is_branch=True),
    0x02: _d("bc2fl", InstrIdType.R5900_COP2_BC2, (BRANCH,), is_branch=True, is_branch_likely=True),
    0x03: _d("bc2tl", InstrIdType.R5900_COP2_BC2, (BRANCH,), is_branch=True, is_branch_likely=True),
}

R5900_COP2: Dict[int, object] = {
    0x01: _interlocked("qmfc2", (RT, VFS), modifies_rt=True),
    0x02: _interlocked("cfc2", (RT, VIS), modifies_rt=True),
    0x05: _interlocked("qmtc2", (RT, VFS), reads_rt=True),
    0x06: _interlocked("ctc2", (RT, VIS), reads_rt=True),
    0x08: OpcodeTable("r5900.cop2.bc2", fields.bc_condition, R5900_COP2_BC2,
                      invalid_descriptor("r5900", InstrIdType.R5900_COP2_BC2)),
    # CO bit set: rs carries the destination field, every value selects SPECIAL1
    **{rs: _SPECIAL1_TABLE for rs in range(0x10, 0x20)},
}


# =============================================================================
# MMI (opcode 0x1C)
# =============================================================================

MMI = InstrIdType.R5900_MMI

_MMI0 = {
    0x00: "paddw", 0x01: "psubw", 0x02: "pcgtw", 0x03: "pmaxw",
    0x04: "paddh", 0x05: "psubh", 0x06: "pcgth", 0x07: "pmaxh",
    0x08: "paddb", 0x09: "psubb", 0x0A: "pcgtb",
    0x10: "paddsw", 0x11: "psubsw", 0x12: "pextlw", 0x13: "ppacw",
    0x14: "paddsh", 0x15: "psubsh", 0x16: "pextlh", 0x17: "ppach",
    0x18: "paddsb", 0x19: "psubsb", 0x1A: "pextlb", 0x1B: "ppacb",
    0x1E: "pext5", 0x1F: "ppac5",
}

_MMI1 = {
    0x01: "pabsw", 0x02: "pceqw", 0x03: "pminw", 0x04: "padsbh",
    0x05: "pabsh", 0x06: "pceqh", 0x07: "pminh", 0x0A: "pceqb",
    0x10: "padduw", 0x11: "psubuw", 0x12: "pextuw", 0x14: "padduh",
    0x15: "psubuh", 0x16: "pextuh", 0x18: "paddub", 0x19: "psubub",
    0x1A: "pextub", 0x1B: "qfsrv",
}

_MMI2 = {
    0x00: "pmaddw", 0x02: "psllvw", 0x03: "psrlvw", 0x04: "pmsubw",
    0x08: "pmfhi", 0x09: "pmflo", 0x0A: "pinth", 0x0C: "pmultw",
    0x0D: "pdivw", 0x0E: "pcpyld", 0x10: "pmaddh", 0x11: "phmadh",
    0x12: "pand", 0x13: "pxor", 0x14: "pmsubh", 0x15: "phmsbh",
    0x1A: "pexeh", 0x1B: "prevh", 0x1C: "pmulth", 0x1D: "pdivbw",
    0x1E: "pexew", 0x1F: "prot3w",
}

_MMI3 = {
    0x00: "pmadduw", 0x03: "psravw", 0x08: "pmthi", 0x09: "pmtlo",
    0x0A: "pinteh", 0x0C: "pmultuw", 0x0D: "pdivuw", 0x0E: "pcpyud",
    0x12: "por", 0x13: "pnor", 0x1A: "pexch", 0x1B: "pcpyh",
    0x1E: "pexcw",
}

# rd = f(rt)
_MMI_UNARY = {
    "pext5", "ppac5", "pabsw", "pabsh", "pexeh", "prevh", "pexew",
    "prot3w", "pexch", "pcpyh", "pexcw",
}
_MMI_VARIABLE_SHIFT = {"psllvw", "psrlvw", "psravw"}
_MMI_DIVIDE = {"pdivw", "pdivbw", "pdivuw"}
_MMI_MULTIPLY = {"pmultw", "pmulth", "pmultuw"}
_MMI_ACCUMULATE = {"pmaddw", "pmsubw", "pmaddh", "phmadh", "pmsubh", "phmsbh", "pmadduw"}


def _mmi(name: str, id_type: InstrIdType) -> InstrDescriptor:
    """Descriptor of a parallel op; the operand shape follows from the mnemonic."""
    unsigned = dict(is_unsigned=True) if name in ("pmultuw", "pdivuw", "pmadduw") else {}
    if name in _MMI_UNARY:
        return _d(name, id_type, (RD, RT), modifies_rd=True, reads_rt=True)
    if name in _MMI_VARIABLE_SHIFT:
        return _d(name, id_type, (RD, RT, RS), **SHIFT_REG)
    if name in _MMI_DIVIDE:
        return _d(name, id_type, (RS, RT), **MULDIV, **unsigned)
    if name in _MMI_MULTIPLY:
        return _d(name, id_type, (RD, RS, RT), modifies_rd=True, **MULDIV, **unsigned)
    if name in _MMI_ACCUMULATE:
        return _d(name, id_type, (RD, RS, RT), modifies_rd=True, reads_hi=True, reads_lo=True,
                  **MULDIV, **unsigned)
    if name in ("pmfhi", "pmflo"):
        return _d(name, id_type, (RD,), modifies_rd=True, reads_hi=name == "pmfhi", reads_lo=name == "pmflo")
    if name in ("pmthi", "pmtlo"):
        return _d(name, id_type, (RS,), reads_rs=True, modifies_hi=name == "pmthi", modifies_lo=name == "pmtlo")
    return _d(name, id_type, (RD, RS, RT), **ALU_REG)


def _mmi_table(table_name: str, names: Dict[int, str], id_type: InstrIdType) -> OpcodeTable:
    return OpcodeTable(
        table_name,
        fields.sa,
        {sa: _mmi(name, id_type) for sa, name in names.items()},
        invalid_descriptor("r5900", id_type),
    )


R5900_MMI_PMFHL: Dict[int, InstrDescriptor] = {
    sa: _d(f"pmfhl.{fmt}", InstrIdType.R5900_MMI_PMFHL, (RD,), modifies_rd=True, reads_hi=True, reads_lo=True)
    for sa, fmt in enumerate(("lw", "uw", "slw", "lh", "sh"))
}

R5900_MMI_PMTHL: Dict[int, InstrDescriptor] = {
    0x00: _d("pmthl.lw", InstrIdType.R5900_MMI_PMTHL, (RS,), reads_rs=True, modifies_hi=True, modifies_lo=True),
}

R5900_MMI: Dict[int, object] = {
    0x00: _d("madd", MMI, (RD, RS, RT), modifies_rd=True, reads_hi=True, reads_lo=True, **MULDIV),
    0x01: _d("maddu", MMI, (RD, RS, RT), modifies_rd=True, reads_hi=True, reads_lo=True,
             is_unsigned=True, **MULDIV),
    0x04: _d("plzcw", MMI, (RD, RS), modifies_rd=True, reads_rs=True),
    0x08: _mmi_table("r5900.mmi0", _MMI0, InstrIdType.R5900_MMI_0),
    0x09: _mmi_table("r5900.mmi2", _MMI2, InstrIdType.R5900_MMI_2),

    # Second pipeline (HI1/LO1)
    0x10: _d("mfhi1", MMI, (RD,), modifies_rd=True),
    0x11: _d("mthi1", MMI, (RS,), reads_rs=True),
    0x12: _d("mflo1", MMI, (RD,), modifies_rd=True),
    0x13: _d("mtlo1", MMI, (RS,), reads_rs=True),
    0x18: _d("mult1", MMI, (RD, RS, RT), modifies_rd=True, reads_rs=True, reads_rt=True),
    0x19: _d("multu1", MMI, (RD, RS, RT), modifies_rd=True, reads_rs=True, reads_rt=True, is_unsigned=True),
    0x1A: _d("div1", MMI, (ZERO, RS, RT), reads_rs=True, reads_rt=True),
    0x1B: _d("divu1", MMI, (ZERO, RS, RT), reads_rs=True, reads_rt=True, is_unsigned=True),
    0x20: _d("madd1", MMI, (RD, RS, RT), modifies_rd=True, reads_rs=True, reads_rt=True),
    0x21: _d("maddu1", MMI, (RD, RS, RT), modifies_rd=True, reads_rs=True, reads_rt=True, is_unsigned=True),

    0x28: _mmi_table("r5900.mmi1", _MMI1, InstrIdType.R5900_MMI_1),
    0x29: _mmi_table("r5900.mmi3", _MMI3, InstrIdType.R5900_MMI_3),
    0x30: OpcodeTable("r5900.mmi.pmfhl", fields.sa, R5900_MMI_PMFHL,
                      invalid_descriptor("r5900", InstrIdType.R5900_MMI_PMFHL)),
    0x31: OpcodeTable("r5900.mmi.pmthl", fields.sa, R5900_MMI_PMTHL,
                      invalid_descriptor("r5900", InstrIdType.R5900_MMI_PMTHL)),

    # Parallel halfword/word shifts
    0x34: _d("psllh", MMI, (RD, RT, SA), **SHIFT_SA),
    0x36: _d("psrlh", MMI, (RD, RT, SA), **SHIFT_SA),
    0x37: _d("psrah", MMI, (RD, RT, SA), **SHIFT_SA),
    0x3C: _d("psllw", MMI, (RD, RT, SA), **SHIFT_SA),
    0x3E: _d("psrlw", MMI, (RD, RT, SA), **SHIFT_SA),
    0x3F: _d("psraw", MMI, (RD, RT, SA), **SHIFT_SA),
}


# =============================================================================
# Primary opcode table
# =============================================================================

R5900_NORMAL: Dict[int, InstrDescriptor] = {
    **_rebase(
        cpu.CPU_NORMAL,
        (
            0x02, 0x03, 0x04, 0x05, 0x06, 0x07,        # j jal beq bne blez bgtz
            0x08, 0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x0E, 0x0F,
            0x14, 0x15, 0x16, 0x17,                    # branch likely
            0x18, 0x19, 0x1A, 0x1B,                    # daddi daddiu ldl ldr
            0x20, 0x21, 0x22, 0x23, 0x24, 0x25, 0x26, 0x27,
            0x28, 0x29, 0x2A, 0x2B, 0x2C, 0x2D, 0x2E, 0x2F,
            0x31, 0x33, 0x37, 0x39, 0x3F,              # lwc1 pref ld swc1 sd
        ),
        N,
    ),
    0x1E: _d("lq", N, (RT, IMM_BASE), access_type=AccessType.QUADWORD, **LOAD),
    0x1F: _d("sq", N, (RT, IMM_BASE), access_type=AccessType.QUADWORD, **STORE),
    0x36: _d("lqc2", N, (VFT, IMM_BASE), access_type=AccessType.QUADWORD, **LOAD_COP),
    0x3E: _d("sqc2", N, (VFT, IMM_BASE), access_type=AccessType.QUADWORD, **STORE_COP),
}

R5900_TABLE = OpcodeTable(
    "r5900",
    fields.opcode,
    {
        **R5900_NORMAL,
        0x00: OpcodeTable("r5900.special", fields.function, R5900_SPECIAL,
                          invalid_descriptor("r5900", S)),
        0x01: OpcodeTable("r5900.regimm", fields.rt, R5900_REGIMM,
                          invalid_descriptor("r5900", InstrIdType.R5900_REGIMM)),
        0x10: OpcodeTable("r5900.cop0", fields.rs, R5900_COP0,
                          invalid_descriptor("r5900", InstrIdType.R5900_COP0)),
        0x11: OpcodeTable("r5900.cop1", fields.fmt, R5900_COP1,
                          invalid_descriptor("r5900", InstrIdType.R5900_COP1)),
        0x12: OpcodeTable("r5900.cop2", fields.rs, R5900_COP2,
                          invalid_descriptor("r5900", InstrIdType.R5900_COP2)),
        0x1C: OpcodeTable("r5900.mmi", fields.function, R5900_MMI,
                          invalid_descriptor("r5900", MMI)),
    },
    invalid_descriptor("r5900", InstrIdType.R5900_INVALID),
)

logger.debug(f"Loaded {len(R5900_TABLE)} r5900 instruction descriptors")
