"""
Enumerations
============

Closed enumerations shared by the tables, the decoder and the formatter:

- InstrCategory: the supported instruction-set variants
- Abi: register naming conventions
- AccessType: width/kind of a memory access
- InstrIdType: which dispatch table an identifier came from
- OperandType: how each operand slot is extracted and rendered
- RegisterFile: the register files known to the naming layer

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from enum import Enum, auto
from typing import Union

from mipsinsn.errors import ConfigError, UnsupportedCategoryError


# =============================================================================
# Instruction Category
# =============================================================================

class InstrCategory(Enum):
    """
    Instruction-set variant.

    The category is fixed when an instruction is built and selects the
    dispatch table used to resolve it. Each member knows its own root
    table through the `table` property.
    """
    CPU = "cpu"            # MIPS III CPU (R4300 class)
    RSP = "rsp"            # N64 Reality Signal Processor
    R3000GTE = "r3000gte"  # PlayStation R3000 + Geometry Transformation Engine
    R5900 = "r5900"        # PlayStation 2 Emotion Engine core

    def __str__(self) -> str:
        return self.value

    @property
    def table(self):
        """Root OpcodeTable of this category."""
        from mipsinsn.opcodes import root_table
        return root_table(self)

    @classmethod
    def parse(cls, value: Union["InstrCategory", str]) -> "InstrCategory":
        """
        Resolve a category from an enum member or its string tag.

        Raises:
            UnsupportedCategoryError: If the value names no supported category
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip().lower()
            for member in cls:
                if member.value == tag or member.name.lower() == tag:
                    return member
        raise UnsupportedCategoryError(value, [m.value for m in cls])


# =============================================================================
# Register Naming ABI
# =============================================================================

class Abi(Enum):
    """Register naming convention."""
    NUMERIC = "numeric"  # $0, $1, ... / $f0, $f1, ...
    O32 = "o32"
    N32 = "n32"
    N64 = "n64"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["Abi", str]) -> "Abi":
        """
        Resolve an ABI from an enum member or its name.

        Raises:
            ConfigError: If the name is not a known ABI
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip().lower()
            for member in cls:
                if member.value == tag:
                    return member
        raise ConfigError("abi", value, [m.value for m in cls])


# =============================================================================
# Memory Access Type
# =============================================================================

class AccessType(Enum):
    """Width and kind of the memory access performed by a load/store."""
    INVALID = auto()
    BYTE = auto()
    SHORT = auto()
    WORD = auto()
    DOUBLEWORD = auto()
    QUADWORD = auto()
    FLOAT = auto()
    DOUBLEFLOAT = auto()
    WORD_LEFT = auto()
    WORD_RIGHT = auto()
    DOUBLEWORD_LEFT = auto()
    DOUBLEWORD_RIGHT = auto()


# =============================================================================
# Identifier Table Type
# =============================================================================

class InstrIdType(Enum):
    """The dispatch table an identifier was resolved from."""
    CPU_INVALID = auto()
    CPU_NORMAL = auto()
    CPU_SPECIAL = auto()
    CPU_REGIMM = auto()
    CPU_COP0 = auto()
    CPU_COP0_BC0 = auto()
    CPU_COP0_TLB = auto()
    CPU_COP1 = auto()
    CPU_COP1_BC1 = auto()
    CPU_COP1_FPUS = auto()
    CPU_COP1_FPUD = auto()
    CPU_COP1_FPUW = auto()
    CPU_COP1_FPUL = auto()
    CPU_COP2 = auto()

    RSP_INVALID = auto()
    RSP_NORMAL = auto()
    RSP_NORMAL_LWC2 = auto()
    RSP_NORMAL_SWC2 = auto()
    RSP_SPECIAL = auto()
    RSP_REGIMM = auto()
    RSP_COP0 = auto()
    RSP_COP2 = auto()
    RSP_COP2_VU = auto()

    R3000GTE_INVALID = auto()
    R3000GTE_NORMAL = auto()
    R3000GTE_SPECIAL = auto()
    R3000GTE_REGIMM = auto()
    R3000GTE_COP0 = auto()
    R3000GTE_COP0_TLB = auto()
    R3000GTE_COP2 = auto()
    R3000GTE_COP2_GTE = auto()

    R5900_INVALID = auto()
    R5900_NORMAL = auto()
    R5900_SPECIAL = auto()
    R5900_REGIMM = auto()
    R5900_COP0 = auto()
    R5900_COP0_BC0 = auto()
    R5900_COP0_TLB = auto()
    R5900_COP1 = auto()
    R5900_COP1_BC1 = auto()
    R5900_COP1_FPUS = auto()
    R5900_COP1_FPUW = auto()
    R5900_COP2 = auto()
    R5900_COP2_BC2 = auto()
    R5900_COP2_SPECIAL1 = auto()
    R5900_COP2_SPECIAL2 = auto()
    R5900_MMI = auto()
    R5900_MMI_0 = auto()
    R5900_MMI_1 = auto()
    R5900_MMI_2 = auto()
    R5900_MMI_3 = auto()
    R5900_MMI_PMFHL = auto()
    R5900_MMI_PMTHL = auto()

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Operand Type
# =============================================================================

class OperandType(Enum):
    """
    Operand slot kinds.

    Each kind names both the bit field the operand comes from and the way
    it is rendered (register name, signed hex, memory reference, ...).
    """
    # General CPU operands
    CPU_RS = auto()
    CPU_RT = auto()
    CPU_RD = auto()
    CPU_SA = auto()
    CPU_ZERO = auto()                  # literal $zero (GNU style div/divu)
    CPU_COP0D = auto()
    CPU_FS = auto()
    CPU_FT = auto()
    CPU_FD = auto()
    CPU_COP1CS = auto()
    CPU_COP2T = auto()                 # COP2 register in rt (lwc2/swc2)
    CPU_COP2D = auto()                 # COP2 register in rd (mfc2/mtc2)
    CPU_COP2CD = auto()
    CPU_OP = auto()                    # CACHE operation
    CPU_HINT = auto()                  # PREF hint
    CPU_CODE = auto()                  # BREAK code (upper[, lower])
    CPU_CODE_LOWER = auto()            # SYSCALL 20-bit code
    CPU_TRAP_CODE = auto()             # conditional trap code, omitted when 0
    CPU_COPRAW = auto()
    CPU_LABEL = auto()                 # J/JAL target
    CPU_IMMEDIATE = auto()
    CPU_BRANCH_TARGET_LABEL = auto()
    CPU_IMMEDIATE_BASE = auto()        # imm(base)
    CPU_MAYBE_RD_RS = auto()           # JALR: "rs" when rd == $ra, else "rd, rs"

    # RSP operands
    RSP_COP0D = auto()
    RSP_COP2CD = auto()
    RSP_VS = auto()
    RSP_VT = auto()
    RSP_VD = auto()
    RSP_VT_ELEMENTHIGH = auto()
    RSP_VT_ELEMENTLOW = auto()
    RSP_VD_DE = auto()
    RSP_VS_INDEX = auto()
    RSP_OFFSET_RS = auto()             # scaled vector offset(base)

    # R3000 GTE operands
    R3000GTE_COP2T = auto()            # GTE data register in rt (lwc2/swc2)
    R3000GTE_COP2D = auto()            # GTE data register in rd (mfc2/mtc2)
    R3000GTE_COP2CD = auto()           # GTE control register
    R3000GTE_SF = auto()
    R3000GTE_MX = auto()
    R3000GTE_V = auto()
    R3000GTE_CV = auto()
    R3000GTE_LM = auto()

    # R5900 VU0 macro mode operands
    R5900_VFS = auto()
    R5900_VFT = auto()
    R5900_VFD = auto()
    R5900_VFS_FSF = auto()             # $vf1x: fs with a single field selector
    R5900_VFT_FTF = auto()
    R5900_VFT_BC = auto()              # broadcast field of the bc variants
    R5900_VIS = auto()
    R5900_VIT = auto()
    R5900_VID = auto()
    R5900_VIS_PARENTHESIS = auto()     # ($vi2)
    R5900_VIS_POSTINCR = auto()        # ($vi2++)
    R5900_VIS_PREDECR = auto()         # (--$vi2)
    R5900_VIT_POSTINCR = auto()
    R5900_VIT_PREDECR = auto()
    R5900_ACC = auto()
    R5900_Q = auto()
    R5900_I = auto()
    R5900_R = auto()
    R5900_IMM5 = auto()                # viaddi signed 5-bit immediate
    R5900_IMM15 = auto()               # vcallms micro program address


# =============================================================================
# Register Files
# =============================================================================

class RegisterFile(Enum):
    """Register files known to the naming and classification layers."""
    GPR = "gpr"
    FPR = "fpr"
    HI_LO = "hi/lo"
    COP0 = "cop0"
    COP1_CONTROL = "cop1 control"
    COP2 = "cop2"
    GTE_DATA = "gte data"
    GTE_CONTROL = "gte control"
    RSP_COP0 = "rsp cop0"
    RSP_VECTOR = "rsp vector"
    RSP_VECTOR_CONTROL = "rsp vector control"
    R5900_VF = "r5900 vf"
    R5900_VI = "r5900 vi"

    def __str__(self) -> str:
        return self.value
