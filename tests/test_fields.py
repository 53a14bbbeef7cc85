"""
Unit Tests for Field Extraction and Utility Helpers
===================================================

Covers the bit-field slicing functions, sign extension, byte swapping
and the `Utils` helper namespace.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import pytest

from mipsinsn import fields
from mipsinsn.errors import InvalidRegisterIndexError
from mipsinsn.fields import InstrFields
from mipsinsn.utils import Utils


# =============================================================================
# Primary Fields
# =============================================================================

class TestPrimaryFields:
    """Tests for R/I/J-type field extraction."""

    def test_r_type_fields(self):
        """Test all R-type fields of `addu $at, $v0, $v1`."""
        word = 0x00430821
        assert fields.opcode(word) == 0x00
        assert fields.rs(word) == 2
        assert fields.rt(word) == 3
        assert fields.rd(word) == 1
        assert fields.sa(word) == 0
        assert fields.function(word) == 0x21

    def test_i_type_fields(self):
        """Test I-type fields of `addiu $sp, $sp, -0x20`."""
        word = 0x27BDFFE0
        assert fields.opcode(word) == 0x09
        assert fields.rs(word) == 29
        assert fields.rt(word) == 29
        assert fields.immediate(word) == 0xFFE0

    def test_j_type_index(self):
        """Test the 26-bit jump index."""
        assert fields.instr_index(0x0C000400) == 0x400
        assert fields.instr_index(0x0BFFFFFF) == 0x3FFFFFF

    def test_shift_amount(self):
        """Test the shift amount of `sll $v0, $v1, 2`."""
        assert fields.sa(0x00031080) == 2

    def test_code_fields(self):
        """Test BREAK code halves."""
        word = 0x0007000D  # break 7
        assert fields.code_upper(word) == 7
        assert fields.code_lower(word) == 0
        assert fields.code(word) == 7 << 10

    def test_coprocessor_aliases(self):
        """Test that coprocessor fields reuse the standard positions."""
        word = 0x46041000  # add.s $f0, $f2, $f4
        assert fields.fmt(word) == fields.rs(word) == 0x10
        assert fields.ft(word) == 4
        assert fields.fs(word) == 2
        assert fields.fd(word) == 0

    def test_cop_function_bit(self):
        """Test the CO bit of COP2 operations and moves."""
        assert fields.cop_function_bit(0x4A180001) == 1
        assert fields.cop_function_bit(0x48086000) == 0

    def test_bc_condition(self):
        """Test the nd/tf bits of a coprocessor branch."""
        assert fields.bc_condition(0x45010003) == 1
        assert fields.bc_condition(0x45000003) == 0


# =============================================================================
# RSP and GTE Fields
# =============================================================================

class TestVectorFields:
    """Tests for RSP vector unit and GTE command fields."""

    def test_vector_registers(self):
        """Test vd/vs/vt of `vadd $v1, $v2, $v3`."""
        word = 0x4A031050
        assert fields.rsp_vd(word) == 1
        assert fields.rsp_vs(word) == 2
        assert fields.rsp_vt(word) == 3

    def test_element_high(self):
        """Test the element selector of a vector computational op."""
        assert fields.rsp_element_high(0x4BA31050) == 0xD
        assert fields.rsp_element_high(0x4A031050) == 0

    def test_element_low(self):
        """Test the element index of vector moves and loads."""
        assert fields.rsp_element_low(0x48081200) == 4

    def test_rsp_offset_sign(self):
        """Test the signed 7-bit vector offset."""
        assert fields.rsp_offset(0xC8812002) == 2
        assert fields.rsp_offset(0xC881207F) == -1
        assert fields.rsp_offset(0xC8812040) == -64

    def test_rsp_de(self):
        """Test the destination element of single-lane ops."""
        assert fields.rsp_de(0x4A031070) == 2

    def test_gte_option_bits(self):
        """Test the MVMVA option fields."""
        word = 0x4A086412
        assert fields.gte_sf(word) == 1
        assert fields.gte_mx(word) == 0
        assert fields.gte_v(word) == 0
        assert fields.gte_cv(word) == 3
        assert fields.gte_lm(word) == 1


# =============================================================================
# Value Helpers
# =============================================================================

class TestValueHelpers:
    """Tests for sign extension, byte swapping and power-of-two checks."""

    def test_sign_extend_immediate(self):
        """Test 16-bit sign extension boundaries."""
        assert fields.sign_extend_immediate(0x0000) == 0
        assert fields.sign_extend_immediate(0x0001) == 1
        assert fields.sign_extend_immediate(0x7FFF) == 0x7FFF
        assert fields.sign_extend_immediate(0x8000) == -0x8000
        assert fields.sign_extend_immediate(0xFFFF) == -1

    def test_sign_extend_ignores_upper_bits(self):
        """Test that bits above the width are discarded."""
        assert fields.sign_extend(0x1FF, 8) == -1
        assert fields.sign_extend(0x17F, 8) == 0x7F

    def test_swap_endianness(self):
        """Test 32-bit byte reversal."""
        assert fields.swap_endianness(0x27BDFFE0) == 0xE0FFBD27
        assert fields.swap_endianness(fields.swap_endianness(0x12345678)) == 0x12345678

    def test_swap_endianness_masks(self):
        """Test that values wider than 32 bits are masked first."""
        assert fields.swap_endianness(0x1_000000FF) == 0xFF000000

    def test_is_power_of_two(self):
        """Test power-of-two detection."""
        assert fields.is_power_of_two(1)
        assert fields.is_power_of_two(0x80000000)
        assert not fields.is_power_of_two(0)
        assert not fields.is_power_of_two(6)
        assert not fields.is_power_of_two(-4)


# =============================================================================
# Field Snapshot
# =============================================================================

class TestInstrFields:
    """Tests for the InstrFields snapshot."""

    def test_from_word(self):
        """Test that the snapshot matches the individual extractors."""
        snapshot = InstrFields.from_word(0x8FBF0014)  # lw $ra, 0x14($sp)
        assert snapshot.opcode == 0x23
        assert snapshot.rs == 29
        assert snapshot.rt == 31
        assert snapshot.immediate == 0x14
        assert snapshot.target == 0x3BF0014

    def test_frozen(self):
        """Test that the snapshot cannot be modified."""
        snapshot = InstrFields.from_word(0)
        with pytest.raises(AttributeError):
            snapshot.rs = 1


# =============================================================================
# Utils
# =============================================================================

class TestUtils:
    """Tests for the Utils helper namespace."""

    def test_sign_extend_immediate(self):
        """Test the documented examples."""
        assert Utils.sign_extend_immediate(0xFFFF) == -1
        assert Utils.sign_extend_immediate(0x0001) == 1

    def test_swap_endianness(self):
        """Test byte reversal through Utils."""
        assert Utils.swap_endianness(0x03E00008) == 0x0800E003

    def test_is_power_of_two(self):
        """Test the power-of-two helper."""
        assert Utils.is_power_of_two(16)
        assert not Utils.is_power_of_two(18)

    def test_register_name_o32(self):
        """Test O32 names of common registers."""
        assert Utils.get_register_name_o32(0) == "$zero"
        assert Utils.get_register_name_o32(4) == "$a0"
        assert Utils.get_register_name_o32(29) == "$sp"
        assert Utils.get_register_name_o32(31) == "$ra"

    def test_register_name_numeric(self):
        """Test numeric register names."""
        assert Utils.get_register_name_numeric(0) == "$0"
        assert Utils.get_register_name_numeric(31) == "$31"

    def test_register_name_out_of_range(self):
        """Test that indices outside 0-31 are rejected."""
        with pytest.raises(InvalidRegisterIndexError):
            Utils.get_register_name_o32(32)
        with pytest.raises(InvalidRegisterIndexError):
            Utils.get_register_name_numeric(-1)
