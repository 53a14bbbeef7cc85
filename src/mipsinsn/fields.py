"""
Instruction Bit Fields
======================

Pure functions that slice a 32-bit MIPS word into its named fields.
Extraction never depends on the instruction category: the category only
changes how a field is *interpreted* (an `rd` field is a COP0 register
for MFC0 and a vector source register for the RSP vector unit).

Word Layout
-----------
    31    26 25  21 20  16 15  11 10   6 5     0
    +-------+------+------+------+------+-------+
    |opcode |  rs  |  rt  |  rd  |  sa  | funct |   R-type
    +-------+------+------+------+------+-------+
    |opcode |  rs  |  rt  |     immediate       |   I-type
    +-------+------+------+---------------------+
    |opcode |            target                 |   J-type
    +-------+-----------------------------------+

Coprocessor encodings reuse the same positions: fmt = rs, ft = rt,
fs = rd, fd = sa.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass


def _bits(word: int, shift: int, width: int) -> int:
    return (word >> shift) & ((1 << width) - 1)


# =============================================================================
# Primary Fields
# =============================================================================

def opcode(word: int) -> int:
    """Primary opcode, bits 31-26."""
    return _bits(word, 26, 6)


def rs(word: int) -> int:
    """Source register, bits 25-21."""
    return _bits(word, 21, 5)


def rt(word: int) -> int:
    """Target register, bits 20-16."""
    return _bits(word, 16, 5)


def rd(word: int) -> int:
    """Destination register, bits 15-11."""
    return _bits(word, 11, 5)


def sa(word: int) -> int:
    """Shift amount, bits 10-6."""
    return _bits(word, 6, 5)


def function(word: int) -> int:
    """Function code of SPECIAL-style encodings, bits 5-0."""
    return _bits(word, 0, 6)


def immediate(word: int) -> int:
    """Raw (unsigned) 16-bit immediate, bits 15-0."""
    return _bits(word, 0, 16)


def instr_index(word: int) -> int:
    """Jump target index, bits 25-0."""
    return _bits(word, 0, 26)


def code(word: int) -> int:
    """20-bit BREAK/SYSCALL code, bits 25-6."""
    return _bits(word, 6, 20)


def code_upper(word: int) -> int:
    return _bits(word, 16, 10)


def code_lower(word: int) -> int:
    return _bits(word, 6, 10)


# =============================================================================
# Coprocessor Fields
# =============================================================================

def fmt(word: int) -> int:
    """Coprocessor format/sub-opcode (same bits as rs)."""
    return rs(word)


def fs(word: int) -> int:
    return rd(word)


def ft(word: int) -> int:
    return rt(word)


def fd(word: int) -> int:
    return sa(word)


def cop0d(word: int) -> int:
    return rd(word)


def cop1cs(word: int) -> int:
    return rd(word)


def cop2t(word: int) -> int:
    return rt(word)


def cop2d(word: int) -> int:
    return rd(word)


def cop2cd(word: int) -> int:
    """COP2 control register of cfc2/ctc2."""
    return rd(word)


def copraw(word: int) -> int:
    """Raw 25-bit coprocessor operation, bits 24-0."""
    return _bits(word, 0, 25)


def cop_function_bit(word: int) -> int:
    """The CO bit (bit 25): set for coprocessor operations, clear for moves."""
    return _bits(word, 25, 1)


def bc_condition(word: int) -> int:
    """Branch-on-coprocessor condition selector (nd/tf bits of rt)."""
    return _bits(word, 16, 2)


# =============================================================================
# RSP Vector Unit Fields
# =============================================================================

def rsp_vd(word: int) -> int:
    return sa(word)


def rsp_vs(word: int) -> int:
    return rd(word)


def rsp_vt(word: int) -> int:
    return rt(word)


def rsp_element_high(word: int) -> int:
    """Element selector of vector computational ops, bits 24-21."""
    return _bits(word, 21, 4)


def rsp_element_low(word: int) -> int:
    """Element index of vector loads, stores and moves, bits 10-7."""
    return _bits(word, 7, 4)


def rsp_de(word: int) -> int:
    """Destination element of the single-lane ops (VRCP, VMOV, ...)."""
    return _bits(word, 11, 3)


def rsp_offset(word: int) -> int:
    """Signed 7-bit vector load/store offset, bits 6-0 (unscaled)."""
    return sign_extend(_bits(word, 0, 7), 7)


# =============================================================================
# GTE Command Fields
# =============================================================================

def gte_sf(word: int) -> int:
    """Shift-fraction flag, bit 19."""
    return _bits(word, 19, 1)


def gte_mx(word: int) -> int:
    """MVMVA multiply matrix selector, bits 18-17."""
    return _bits(word, 17, 2)


def gte_v(word: int) -> int:
    """MVMVA multiply vector selector, bits 16-15."""
    return _bits(word, 15, 2)


def gte_cv(word: int) -> int:
    """MVMVA translation vector selector, bits 14-13."""
    return _bits(word, 13, 2)


def gte_lm(word: int) -> int:
    """Saturation (lm) flag, bit 10."""
    return _bits(word, 10, 1)


# =============================================================================
# R5900 VU0 Macro Mode Fields
# =============================================================================

def r5900_dest(word: int) -> int:
    """Destination field mask (x=8, y=4, z=2, w=1), bits 24-21."""
    return _bits(word, 21, 4)


def r5900_bc(word: int) -> int:
    """Broadcast field of the bc variants, bits 1-0 (x=0 ... w=3)."""
    return _bits(word, 0, 2)


def r5900_fsf(word: int) -> int:
    return _bits(word, 21, 2)


def r5900_ftf(word: int) -> int:
    return _bits(word, 23, 2)


def r5900_interlock(word: int) -> int:
    """Interlock bit of the COP2 moves (cfc2.i / cfc2.ni), bit 0."""
    return _bits(word, 0, 1)


def r5900_special2(word: int) -> int:
    """Selector of the second VU0 macro table: bits 10-6 then bits 1-0."""
    return (sa(word) << 2) | r5900_bc(word)


def r5900_imm5(word: int) -> int:
    """Signed immediate of viaddi, bits 10-6."""
    return sign_extend(sa(word), 5)


def r5900_imm15(word: int) -> int:
    """Micro program index of vcallms, bits 20-6."""
    return _bits(word, 6, 15)


# =============================================================================
# Value Helpers
# =============================================================================

def sign_extend(value: int, bits: int) -> int:
    """
    Sign-extend the low `bits` bits of `value`.

    Example:
        sign_extend(0x7F, 7) -> -1
        sign_extend(0x3F, 7) -> 63
    """
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def sign_extend_immediate(value: int) -> int:
    """
    Sign-extend a 16-bit immediate to a signed 32-bit value.

    Values 0x0000-0x7FFF are returned unchanged, 0x8000-0xFFFF map to
    value - 0x10000.

    Example:
        sign_extend_immediate(0xFFFF) -> -1
        sign_extend_immediate(0x0001) -> 1
    """
    return sign_extend(value, 16)


def swap_endianness(word: int) -> int:
    """Reverse the byte order of a 32-bit word."""
    word &= 0xFFFFFFFF
    return (
        ((word & 0x000000FF) << 24)
        | ((word & 0x0000FF00) << 8)
        | ((word & 0x00FF0000) >> 8)
        | ((word & 0xFF000000) >> 24)
    )


def is_power_of_two(value: int) -> bool:
    """True iff `value` is positive and has exactly one bit set."""
    return value > 0 and (value & (value - 1)) == 0


# =============================================================================
# Field Snapshot
# =============================================================================

@dataclass(frozen=True)
class InstrFields:
    """
    All primary fields of a word, extracted once.

    Attributes:
        opcode: bits 31-26
        rs: bits 25-21
        rt: bits 20-16
        rd: bits 15-11
        sa: bits 10-6
        function: bits 5-0
        immediate: bits 15-0 (raw, unsigned)
        target: bits 25-0
    """
    opcode: int
    rs: int
    rt: int
    rd: int
    sa: int
    function: int
    immediate: int
    target: int

    @classmethod
    def from_word(cls, word: int) -> "InstrFields":
        return cls(
            opcode=opcode(word),
            rs=rs(word),
            rt=rt(word),
            rd=rd(word),
            sa=sa(word),
            function=function(word),
            immediate=immediate(word),
            target=instr_index(word),
        )
