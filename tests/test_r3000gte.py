"""
Unit Tests for the PlayStation R3000 + GTE Category
===================================================

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import pytest

from mipsinsn import decode
from mipsinsn.enums import InstrIdType, RegisterFile


def asm(mnemonic: str, operands: str = "") -> str:
    if not operands:
        return mnemonic
    return f"{mnemonic:<11} {operands}"


def gte(word: int, vram: int = 0):
    return decode(word, vram=vram, category="r3000gte")


class TestGteCommands:
    """Tests for GTE commands issued through COP2."""

    @pytest.mark.parametrize("word,name", [
        (0x4A180001, "rtps"),
        (0x4A280030, "rtpt"),
        (0x4B400006, "nclip"),
        (0x4B58002D, "avsz3"),
        (0x4A680029, "dpcl"),
    ])
    def test_plain_commands(self, word, name):
        """Test commands without option operands."""
        instr = gte(word)
        assert instr.identifier == f"r3000gte_{name}"
        assert instr.disassemble() == name
        assert instr.descriptor.id_type == InstrIdType.R3000GTE_COP2_GTE

    def test_sqr_shift_flag(self):
        """Test the sf operand of sqr."""
        assert gte(0x4AA80428).disassemble() == asm("sqr", "1")
        assert gte(0x4AA00428).disassemble() == asm("sqr", "0")

    def test_mvmva_options(self):
        """Test every MVMVA option field."""
        assert gte(0x4A486412).disassemble() == asm("mvmva", "1, 0, 0, 3, 1")

    def test_unknown_command(self):
        """Test an unused GTE function."""
        instr = gte(0x4A000000)
        assert not instr.is_valid()
        assert instr.disassemble() == asm(".word", "0x4A000000 # invalid R3000GTE_COP2_GTE")

    @pytest.mark.parametrize("word", [0x4BEBB86D, 0x4BCBD841])
    def test_command_with_wrong_fixed_bits(self, word):
        """Test that a known function with a broken fixed pattern is invalid."""
        instr = gte(word)
        assert instr.descriptor.is_valid
        assert instr.reserved_bits() != 0
        assert not instr.is_valid()
        assert instr.disassemble().startswith(asm(".word", f"0x{word:08X} # "))

    def test_reserved_bits_of_avsz3(self):
        """Test the bits that differ from the avsz3 pattern."""
        assert gte(0x4BEBB86D).reserved_bits() == 0x00B3B840
        assert gte(0x4B58002D).reserved_bits() == 0

    def test_mvmva_options_are_not_reserved(self):
        """Test that every MVMVA option bit may be set."""
        assert gte(0x4A4FE412).is_valid()

    def test_gte_commands_only_in_gte_category(self):
        """Test that the cpu category does not know GTE commands."""
        assert not decode(0x4A180001, category="cpu").is_valid()


class TestGteTransfers:
    """Tests for GTE register moves, loads and stores."""

    def test_mfc2(self):
        """Test a move from a GTE data register."""
        instr = gte(0x48086000)
        assert instr.disassemble() == asm("mfc2", "$t0, $sxy0")
        assert instr.reads_register(RegisterFile.GTE_DATA, 12)
        assert instr.modifies_register(RegisterFile.GPR, 8)

    def test_mtc2(self):
        """Test a move into a GTE data register."""
        instr = gte(0x48880000)
        assert instr.disassemble() == asm("mtc2", "$t0, $vxy0")
        assert instr.modifies_register(RegisterFile.GTE_DATA, 0)

    def test_cfc2(self):
        """Test that GTE control registers render numerically."""
        assert gte(0x4848F800).disassemble() == asm("cfc2", "$t0, $31")

    def test_ctc2(self):
        """Test that ctc2 writes the GTE control register."""
        instr = gte(0x48C8F800)
        assert instr.disassemble() == asm("ctc2", "$t0, $31")
        assert instr.modifies_register(RegisterFile.GTE_CONTROL, 31)

    def test_lwc2(self):
        """Test a load into a GTE data register (numeric, like cfc2)."""
        instr = gte(0xC8810004)
        assert instr.disassemble() == asm("lwc2", "$1, 0x4($a0)")
        assert instr.does_load()
        assert instr.modifies_register(RegisterFile.GTE_DATA, 1)

    def test_swc2(self):
        """Test a store of a GTE data register."""
        instr = gte(0xE8900004)
        assert instr.disassemble() == asm("swc2", "$16, 0x4($a0)")
        assert instr.does_store()
        assert instr.reads_register(RegisterFile.GTE_DATA, 16)

    def test_numeric_names(self):
        """Test numeric GTE register names."""
        from mipsinsn.config import Config

        instr = decode(0x48086000, category="r3000gte", config=Config(named_registers=False))
        assert instr.disassemble() == asm("mfc2", "$t0, $12")


class TestScalarSubset:
    """Tests for the MIPS I scalar subset."""

    def test_rebased_identifiers(self):
        """Test that scalar identifiers belong to this category."""
        instr = gte(0x27BDFFE0)
        assert instr.identifier == "r3000gte_addiu"
        assert instr.descriptor.id_type == InstrIdType.R3000GTE_NORMAL
        assert instr.disassemble() == asm("addiu", "$sp, $sp, -0x20")

    def test_multiply_divide(self):
        """Test that MIPS I multiply/divide exist."""
        assert gte(0x00850018).identifier == "r3000gte_mult"
        assert gte(0x0085001A).disassemble() == asm("div", "$zero, $a0, $a1")

    @pytest.mark.parametrize("word", [
        0xDFA40008,  # ld
        0x50400001,  # beql
        0x00031038,  # dsll
        0x46041000,  # add.s
        0x0000000F,  # sync
    ])
    def test_mips3_rejected(self, word):
        """Test that MIPS II/III and FPU instructions are invalid."""
        assert not gte(word).is_valid()

    def test_rfe(self):
        """Test the R3000 return from exception."""
        instr = gte(0x42000010)
        assert instr.disassemble() == "rfe"
        assert instr.not_emitted_by_compilers()

    def test_no_eret(self):
        """Test that eret does not exist on the R3000."""
        assert not gte(0x42000018).is_valid()

    def test_pseudos(self):
        """Test scalar pseudo-instructions."""
        assert gte(0).disassemble() == "nop"
        assert gte(0x04110004).disassemble() == asm("bal", "0x00000014")
