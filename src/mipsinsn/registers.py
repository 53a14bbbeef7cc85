"""
Register Naming
===============

Index-to-name lookup for every register file, per naming convention.

General purpose and floating point registers follow an ABI
(numeric, O32, N32, N64). The system/coprocessor files have two
conventions: symbolic names (`$Status`, `$vcc`, `$sxy0`) or purely
numeric ones (`$12`). The RSP COP0 names are bare (`SP_STATUS`), the
way RSP assemblers spell them. Every lookup is a tuple index; indices outside the
file raise InvalidRegisterIndexError.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from typing import Dict, Optional, Tuple

from mipsinsn.enums import Abi, RegisterFile
from mipsinsn.errors import InvalidRegisterIndexError


def _numeric(count: int, prefix: str = "$") -> Tuple[str, ...]:
    return tuple(f"{prefix}{i}" for i in range(count))


def _pad(names: Tuple[str, ...], count: int = 32) -> Tuple[str, ...]:
    """Extend a short symbolic table with numeric names up to `count`."""
    return names + tuple(f"${i}" for i in range(len(names), count))


# =============================================================================
# General Purpose Registers
# =============================================================================

GPR_NUMERIC = _numeric(32)

GPR_O32 = (
    "$zero", "$at", "$v0", "$v1", "$a0", "$a1", "$a2", "$a3",
    "$t0", "$t1", "$t2", "$t3", "$t4", "$t5", "$t6", "$t7",
    "$s0", "$s1", "$s2", "$s3", "$s4", "$s5", "$s6", "$s7",
    "$t8", "$t9", "$k0", "$k1", "$gp", "$sp", "$fp", "$ra",
)

# N32 and N64 trade $t0-$t3 for four more argument registers
GPR_N32 = (
    "$zero", "$at", "$v0", "$v1", "$a0", "$a1", "$a2", "$a3",
    "$a4", "$a5", "$a6", "$a7", "$t0", "$t1", "$t2", "$t3",
    "$s0", "$s1", "$s2", "$s3", "$s4", "$s5", "$s6", "$s7",
    "$t8", "$t9", "$k0", "$k1", "$gp", "$sp", "$fp", "$ra",
)

GPR_N64 = GPR_N32

GPR_ZERO = 0
GPR_RA = 31


# =============================================================================
# Floating Point Registers
# =============================================================================

FPR_NUMERIC = _numeric(32, "$f")

FPR_O32 = (
    "$fv0", "$fv0f", "$fv1", "$fv1f", "$ft0", "$ft0f", "$ft1", "$ft1f",
    "$ft2", "$ft2f", "$ft3", "$ft3f", "$fa0", "$fa0f", "$fa1", "$fa1f",
    "$ft4", "$ft4f", "$ft5", "$ft5f", "$fs0", "$fs0f", "$fs1", "$fs1f",
    "$fs2", "$fs2f", "$fs3", "$fs3f", "$fs4", "$fs4f", "$fs5", "$fs5f",
)

FPR_N32 = (
    "$fv0", "$ft14", "$fv1", "$ft15", "$ft0", "$ft1", "$ft2", "$ft3",
    "$ft4", "$ft5", "$ft6", "$ft7", "$fa0", "$fa1", "$fa2", "$fa3",
    "$fa4", "$fa5", "$fa6", "$fa7", "$fs0", "$ft8", "$fs1", "$ft9",
    "$fs2", "$ft10", "$fs3", "$ft11", "$fs4", "$ft12", "$fs5", "$ft13",
)

FPR_N64 = (
    "$fv0", "$ft12", "$fv1", "$ft13", "$ft0", "$ft1", "$ft2", "$ft3",
    "$ft4", "$ft5", "$ft6", "$ft7", "$fa0", "$fa1", "$fa2", "$fa3",
    "$fa4", "$fa5", "$fa6", "$fa7", "$ft8", "$ft9", "$ft10", "$ft11",
    "$fs0", "$fs1", "$fs2", "$fs3", "$fs4", "$fs5", "$fs6", "$fs7",
)


# =============================================================================
# System Control / Coprocessor Registers
# =============================================================================

COP0_NAMED = (
    "$Index", "$Random", "$EntryLo0", "$EntryLo1",
    "$Context", "$PageMask", "$Wired", "$Reserved07",
    "$BadVaddr", "$Count", "$EntryHi", "$Compare",
    "$Status", "$Cause", "$EPC", "$PRevID",
    "$Config", "$LLAddr", "$WatchLo", "$WatchHi",
    "$XContext", "$Reserved21", "$Reserved22", "$Reserved23",
    "$Reserved24", "$Reserved25", "$PErr", "$CacheErr",
    "$TagLo", "$TagHi", "$ErrorEPC", "$Reserved31",
)

COP1_CONTROL_NAMED = ("$FpcIrev",) + _numeric(32)[1:31] + ("$FpcCsr",)

HI_LO_NAMED = ("$hi", "$lo")

# PlayStation GTE: data registers (MFC2/MTC2/LWC2/SWC2)
GTE_DATA_NAMED = (
    "$vxy0", "$vz0", "$vxy1", "$vz1", "$vxy2", "$vz2", "$rgb", "$otz",
    "$ir0", "$ir1", "$ir2", "$ir3", "$sxy0", "$sxy1", "$sxy2", "$sxyp",
    "$sz0", "$sz1", "$sz2", "$sz3", "$rgb0", "$rgb1", "$rgb2", "$res1",
    "$mac0", "$mac1", "$mac2", "$mac3", "$irgb", "$orgb", "$lzcs", "$lzcr",
)

# PlayStation GTE: control registers (CFC2/CTC2)
GTE_CONTROL_NAMED = (
    "$r11r12", "$r13r21", "$r22r23", "$r31r32", "$r33", "$trx", "$try", "$trz",
    "$l11l12", "$l13l21", "$l22l23", "$l31l32", "$l33", "$rbk", "$gbk", "$bbk",
    "$lr1lr2", "$lr3lg1", "$lg2lg3", "$lb1lb2", "$lb3", "$rfc", "$gfc", "$bfc",
    "$ofx", "$ofy", "$h", "$dqa", "$dqb", "$zsf3", "$zsf4", "$flag",
)

# N64 RSP: COP0 maps the SP and DP (RDP command) interfaces
RSP_COP0_NAMED = _pad((
    "SP_MEM_ADDR", "SP_DRAM_ADDR", "SP_RD_LEN", "SP_WR_LEN",
    "SP_STATUS", "SP_DMA_FULL", "SP_DMA_BUSY", "SP_SEMAPHORE",
    "DPC_START", "DPC_END", "DPC_CURRENT", "DPC_STATUS",
    "DPC_CLOCK", "DPC_BUFBUSY", "DPC_PIPEBUSY", "DPC_TMEM",
))

RSP_VECTOR = _numeric(32, "$v")

RSP_VECTOR_CONTROL_NAMED = _pad(("$vco", "$vcc", "$vce"))

# PlayStation 2 VU0: floating point and integer registers
R5900_VF = _numeric(32, "$vf")
R5900_VI = _numeric(32, "$vi")


# =============================================================================
# Lookup Tables
# =============================================================================

_ABI_TABLES: Dict[RegisterFile, Dict[Abi, Tuple[str, ...]]] = {
    RegisterFile.GPR: {
        Abi.NUMERIC: GPR_NUMERIC,
        Abi.O32: GPR_O32,
        Abi.N32: GPR_N32,
        Abi.N64: GPR_N64,
    },
    RegisterFile.FPR: {
        Abi.NUMERIC: FPR_NUMERIC,
        Abi.O32: FPR_O32,
        Abi.N32: FPR_N32,
        Abi.N64: FPR_N64,
    },
}

# (named, numeric) per non-ABI register file
_NAMED_TABLES: Dict[RegisterFile, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    RegisterFile.HI_LO: (HI_LO_NAMED, HI_LO_NAMED),
    RegisterFile.COP0: (COP0_NAMED, _numeric(32)),
    RegisterFile.COP1_CONTROL: (COP1_CONTROL_NAMED, _numeric(32)),
    RegisterFile.COP2: (_numeric(32), _numeric(32)),
    RegisterFile.GTE_DATA: (GTE_DATA_NAMED, _numeric(32)),
    RegisterFile.GTE_CONTROL: (GTE_CONTROL_NAMED, _numeric(32)),
    RegisterFile.RSP_COP0: (RSP_COP0_NAMED, _numeric(32)),
    RegisterFile.RSP_VECTOR: (RSP_VECTOR, RSP_VECTOR),
    RegisterFile.RSP_VECTOR_CONTROL: (RSP_VECTOR_CONTROL_NAMED, _numeric(32)),
    RegisterFile.R5900_VF: (R5900_VF, R5900_VF),
    RegisterFile.R5900_VI: (R5900_VI, R5900_VI),
}


def register_count(register_file: RegisterFile) -> int:
    """Number of registers in a file."""
    if register_file in _ABI_TABLES:
        return len(_ABI_TABLES[register_file][Abi.NUMERIC])
    return len(_NAMED_TABLES[register_file][1])


def register_name(
    register_file: RegisterFile,
    index: int,
    abi: Optional[Abi] = None,
    named: bool = True,
) -> str:
    """
    Get the display name of a register.

    Args:
        register_file: Which register file the index refers to
        index: Register number within the file
        abi: Naming ABI for GPR/FPR (default: O32 for GPRs, numeric for FPRs)
        named: Symbolic (True) or numeric (False) names for the other files

    Returns:
        The register name (`$`-prefixed, except the RSP COP0 names)

    Raises:
        InvalidRegisterIndexError: If index is outside the register file
    """
    if register_file in _ABI_TABLES:
        if abi is None:
            abi = Abi.O32 if register_file == RegisterFile.GPR else Abi.NUMERIC
        table = _ABI_TABLES[register_file][abi]
    else:
        named_table, numeric_table = _NAMED_TABLES[register_file]
        table = named_table if named else numeric_table

    if not 0 <= index < len(table):
        raise InvalidRegisterIndexError(str(register_file), index, len(table))
    return table[index]


def gpr_name(index: int, abi: Abi = Abi.O32) -> str:
    """Name of a general purpose register, e.g. gpr_name(29) -> '$sp'."""
    return register_name(RegisterFile.GPR, index, abi)


def fpr_name(index: int, abi: Abi = Abi.NUMERIC) -> str:
    """Name of a floating point register, e.g. fpr_name(12) -> '$f12'."""
    return register_name(RegisterFile.FPR, index, abi)


def cop0_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.COP0, index, named=named)


def cop1_control_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.COP1_CONTROL, index, named=named)


def gte_data_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.GTE_DATA, index, named=named)


def gte_control_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.GTE_CONTROL, index, named=named)


def rsp_cop0_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.RSP_COP0, index, named=named)


def rsp_vector_name(index: int) -> str:
    return register_name(RegisterFile.RSP_VECTOR, index)


def rsp_vector_control_name(index: int, named: bool = True) -> str:
    return register_name(RegisterFile.RSP_VECTOR_CONTROL, index, named=named)


def r5900_vf_name(index: int) -> str:
    return register_name(RegisterFile.R5900_VF, index)


def r5900_vi_name(index: int) -> str:
    return register_name(RegisterFile.R5900_VI, index)
