"""
Unit Tests for Instruction Classification
=========================================

Test coverage includes:
- Control flow predicates (jumps, branches, calls, returns)
- Memory predicates (loads, stores, unsigned accesses)
- Heuristics (nop, move, %hi/%lo candidates)
- Register read/write effects per register file
- The all-False contract of invalid words

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import pytest

from mipsinsn import classifier, decode
from mipsinsn.config import Config
from mipsinsn.enums import RegisterFile

FLAG_PREDICATES = [
    "is_jump", "is_branch", "is_branch_likely", "is_unconditional_branch",
    "is_jump_with_address", "is_jumptable_jump", "is_function_call", "is_return",
    "has_delay_slot", "does_load", "does_store", "does_dereference", "does_link",
    "does_unsigned_memory_access", "is_nop", "maybe_is_move", "is_pseudo", "is_trap",
    "is_float", "is_double", "is_unsigned", "is_valid", "not_emitted_by_compilers",
    "can_be_hi", "can_be_lo", "modifies_rs", "modifies_rt", "modifies_rd",
    "reads_rs", "reads_rt", "reads_rd", "reads_hi", "reads_lo", "modifies_hi",
    "modifies_lo", "modifies_fs", "modifies_ft", "modifies_fd", "reads_fs",
    "reads_ft", "reads_fd",
]

INVALID_WORDS = [
    ("cpu", 0xEC000000),
    ("cpu", 0x00000001),
    ("cpu", 0x46000028),
    ("rsp", 0x00850018),
    ("rsp", 0xC7A00010),
    ("r3000gte", 0xDFA40008),
    ("r3000gte", 0x42000018),
    ("r5900", 0x46200000),
    ("r5900", 0xC0000000),
]


# =============================================================================
# Control Flow
# =============================================================================

class TestControlFlow:
    """Tests for jump, branch, call and return classification."""

    def test_jr_ra_is_return(self):
        """Test that `jr $ra` is a return and a jump."""
        instr = decode(0x03E00008)
        assert instr.is_return()
        assert instr.is_jump()
        assert not instr.is_jumptable_jump()
        assert instr.has_delay_slot()

    def test_jr_other_is_jumptable(self):
        """Test that `jr $t9` is a jump-table jump, not a return."""
        instr = decode(0x03200008)
        assert instr.is_jumptable_jump()
        assert not instr.is_return()

    def test_jal(self):
        """Test that jal is a call with an absolute target."""
        instr = decode(0x0C000400, vram=0x80000400)
        assert instr.is_jump()
        assert instr.is_jump_with_address()
        assert instr.is_function_call()
        assert instr.does_link()
        assert not instr.is_branch()

    def test_jalr(self):
        """Test that jalr links through rd."""
        instr = decode(0x00A0F809)
        assert instr.is_jump()
        assert instr.is_function_call()
        assert instr.modifies_rd()
        assert instr.reads_rs()
        assert not instr.is_jump_with_address()

    def test_conditional_branch(self):
        """Test a conditional branch."""
        instr = decode(0x10220000)  # beq $at, $v0
        assert instr.is_branch()
        assert not instr.is_jump()
        assert not instr.is_unconditional_branch()
        assert not instr.is_branch_likely()
        assert instr.has_delay_slot()

    def test_unconditional_beq(self):
        """Test that beq $zero, $zero is unconditional."""
        assert decode(0x10000005).is_unconditional_branch()

    def test_unconditional_bgez(self):
        """Test that bgez $zero is unconditional."""
        assert decode(0x04010003).is_unconditional_branch()

    def test_branch_likely(self):
        """Test branch likely detection."""
        assert decode(0x50400001).is_branch_likely()
        assert decode(0x45030003).is_branch_likely()  # bc1tl

    def test_bal_is_call(self):
        """Test that bgezal is a branch that links."""
        instr = decode(0x04110004)
        assert instr.is_branch()
        assert instr.is_function_call()

    def test_eret_is_return(self):
        """Test that eret is classified as a return."""
        instr = decode(0x42000018)
        assert instr.is_return()
        assert instr.not_emitted_by_compilers()

    def test_plain_j_default(self):
        """Test that j is an unconditional branch by default and still a jump."""
        instr = decode(0x08000400, vram=0x80000400)
        assert instr.is_jump()
        assert instr.is_jump_with_address()
        assert instr.is_unconditional_branch()
        assert not instr.is_branch()
        assert instr.has_delay_slot()

    def test_plain_j_not_a_branch(self):
        """Test that disabling the setting drops the unconditional branch view."""
        config = Config(treat_j_as_unconditional_branch=False)
        instr = decode(0x08000400, vram=0x80000400, config=config)
        assert not instr.is_unconditional_branch()
        assert instr.is_jump()
        assert instr.is_jump_with_address()

    def test_jal_unaffected_by_j_setting(self):
        """Test that jal is never an unconditional branch."""
        instr = decode(0x0C000400)
        assert instr.is_jump()
        assert not instr.is_branch()
        assert not instr.is_unconditional_branch()

    def test_traps(self):
        """Test trap classification."""
        assert decode(0x00850034).is_trap()  # teq $a0, $a1
        assert not decode(0x0000000D).is_trap()  # break


# =============================================================================
# Memory
# =============================================================================

class TestMemory:
    """Tests for memory access classification."""

    def test_load(self):
        """Test a word load."""
        instr = decode(0x8C420000)
        assert instr.does_load()
        assert instr.does_dereference()
        assert not instr.does_store()
        assert instr.can_be_lo()

    def test_store(self):
        """Test a word store."""
        instr = decode(0xAC420000)
        assert instr.does_store()
        assert instr.does_dereference()
        assert not instr.does_load()

    def test_unsigned_load(self):
        """Test that lbu is an unsigned memory access."""
        assert decode(0x90820003).does_unsigned_memory_access()
        assert not decode(0x8C420000).does_unsigned_memory_access()

    def test_sltu_not_memory_access(self):
        """Test that unsigned arithmetic is not an unsigned memory access."""
        instr = decode(0x0085102B)  # sltu $v0, $a0, $a1
        assert instr.is_unsigned()
        assert not instr.does_unsigned_memory_access()

    def test_float_load(self):
        """Test a floating point load."""
        instr = decode(0xC7A00010)
        assert instr.does_load()
        assert instr.is_float()
        assert instr.modifies_ft()


# =============================================================================
# Heuristics
# =============================================================================

class TestHeuristics:
    """Tests for nop, move and %hi/%lo heuristics."""

    def test_nop_is_zero_word(self):
        """Test that only the zero word is a nop."""
        assert decode(0x00000000).is_nop()
        assert not decode(0x00031080).is_nop()

    def test_nop_in_every_category(self):
        """Test that the zero word is a nop in every category."""
        for category in ("cpu", "rsp", "r3000gte", "r5900"):
            assert decode(0, category=category).is_nop()

    def test_nop_independent_of_pseudos(self):
        """Test that is_nop does not depend on the pseudo switch."""
        assert decode(0, config=Config(enable_pseudos=False)).is_nop()

    def test_maybe_is_move_addu_zero(self):
        """Test the move heuristic on addu with $zero operands."""
        assert decode(0x00000821).maybe_is_move()  # addu $at, $zero, $zero
        assert decode(0x00A02021).maybe_is_move()  # addu $a0, $a1, $zero

    def test_maybe_is_move_requires_zero(self):
        """Test that a real addition is not a move."""
        assert not decode(0x00430821).maybe_is_move()  # addu $at, $v0, $v1

    def test_maybe_is_move_only_add_or(self):
        """Test that subtraction is never a move candidate."""
        assert not decode(0x00A02023).maybe_is_move()  # subu $a0, $a1, $zero

    def test_lui_can_be_hi(self):
        """Test %hi candidates."""
        assert decode(0x3C01FFFF).can_be_hi()
        assert not decode(0x3C01FFFF).can_be_lo()

    def test_addiu_can_be_lo(self):
        """Test %lo candidates."""
        assert decode(0x24010001).can_be_lo()
        assert not decode(0x24010001).can_be_hi()

    def test_is_pseudo(self):
        """Test pseudo-instruction detection."""
        assert decode(0x00000000).is_pseudo()
        assert decode(0x10400003).is_pseudo()  # beqz
        assert not decode(0x10220000).is_pseudo()

    def test_is_pseudo_disabled(self):
        """Test that pseudo detection honors the master switch."""
        assert not decode(0x00000000, config=Config(enable_pseudos=False)).is_pseudo()

    def test_float_double(self):
        """Test precision classification."""
        assert decode(0x46041000).is_float()
        assert decode(0x46241000).is_double()
        assert not decode(0x46241000).is_float()


# =============================================================================
# Register Effects
# =============================================================================

class TestRegisterEffects:
    """Tests for modifies_register and reads_register."""

    def test_load_effects(self):
        """Test `lw $v0, 0x0($a0)`: writes rt, reads base."""
        instr = decode(0x8C820000)
        assert instr.modifies_register(RegisterFile.GPR, 2)
        assert instr.reads_register(RegisterFile.GPR, 4)
        assert not instr.modifies_register(RegisterFile.GPR, 4)

    def test_store_effects(self):
        """Test that stores write no GPR."""
        instr = decode(0xAC420000)
        assert not instr.modifies_register(RegisterFile.GPR)
        assert instr.reads_register(RegisterFile.GPR, 2)

    def test_jal_writes_ra(self):
        """Test that linking jumps write $ra."""
        assert decode(0x0C000400).modifies_register(RegisterFile.GPR, 31)

    def test_bal_writes_ra(self):
        """Test that linking branches write $ra."""
        assert decode(0x04110004).modifies_register(RegisterFile.GPR, 31)

    def test_jalr_writes_rd(self):
        """Test that jalr writes its rd."""
        instr = decode(0x00A0F809)
        assert instr.modifies_register(RegisterFile.GPR, 31)
        assert instr.reads_register(RegisterFile.GPR, 5)

    def test_hi_lo(self):
        """Test HI/LO effects of div and mfhi."""
        div = decode(0x0085001A)
        assert div.modifies_register(RegisterFile.HI_LO, 0)
        assert div.modifies_register(RegisterFile.HI_LO, 1)
        assert div.reads_register(RegisterFile.GPR, 4)
        assert div.reads_register(RegisterFile.GPR, 5)

        mfhi = decode(0x00001010)
        assert mfhi.reads_register(RegisterFile.HI_LO, 0)
        assert not mfhi.reads_register(RegisterFile.HI_LO, 1)
        assert mfhi.modifies_register(RegisterFile.GPR, 2)

    def test_fpu_arithmetic(self):
        """Test FPR effects of add.s $f0, $f2, $f4."""
        instr = decode(0x46041000)
        assert instr.modifies_register(RegisterFile.FPR, 0)
        assert instr.reads_register(RegisterFile.FPR, 2)
        assert instr.reads_register(RegisterFile.FPR, 4)
        assert not instr.modifies_register(RegisterFile.GPR)

    def test_mtc1(self):
        """Test that mtc1 moves a GPR into an FPR."""
        instr = decode(0x44846000)
        assert instr.reads_register(RegisterFile.GPR, 4)
        assert instr.modifies_register(RegisterFile.FPR, 12)

    def test_mtc0(self):
        """Test that mtc0 writes the COP0 register."""
        instr = decode(0x40886000)
        assert instr.modifies_register(RegisterFile.COP0, 12)
        assert instr.reads_register(RegisterFile.GPR, 8)
        assert not instr.reads_register(RegisterFile.COP0)

    def test_mfc0(self):
        """Test that mfc0 reads the COP0 register."""
        instr = decode(0x40086000)
        assert instr.reads_register(RegisterFile.COP0, 12)
        assert instr.modifies_register(RegisterFile.GPR, 8)
        assert not instr.modifies_register(RegisterFile.COP0)

    def test_ctc1(self):
        """Test that ctc1 writes the FPU control register."""
        instr = decode(0x44C8F800)  # ctc1 $t0, $FpcCsr
        assert instr.modifies_register(RegisterFile.COP1_CONTROL, 31)

    def test_mfc2_raw(self):
        """Test raw COP2 moves."""
        assert decode(0x48082800).reads_register(RegisterFile.COP2, 5)

    def test_file_without_index(self):
        """Test queries for any register of a file."""
        assert decode(0x27BDFFE0).modifies_register(RegisterFile.GPR)
        assert not decode(0x27BDFFE0).modifies_register(RegisterFile.FPR)


# =============================================================================
# Invalid Words
# =============================================================================

class TestInvalid:
    """Tests for the all-False contract of invalid words."""

    @pytest.mark.parametrize("category,word", INVALID_WORDS)
    def test_every_predicate_false(self, category, word):
        """Test that every predicate answers False for an invalid word."""
        instr = decode(word, category=category)
        for name in FLAG_PREDICATES:
            assert getattr(instr, name)() is False, name

    @pytest.mark.parametrize("category,word", INVALID_WORDS)
    def test_no_register_effects(self, category, word):
        """Test that invalid words read and write nothing."""
        instr = decode(word, category=category)
        for register_file in RegisterFile:
            assert not instr.modifies_register(register_file)
            assert not instr.reads_register(register_file)

    def test_free_functions_match_methods(self):
        """Test that the classifier functions agree with the methods."""
        instr = decode(0x03E00008)
        assert classifier.is_return(instr) == instr.is_return()
        assert classifier.is_jump(instr) == instr.is_jump()

    @pytest.mark.parametrize("category,word", [
        ("cpu", 0x02A48CA0),            # add, sa field set
        ("cpu", 0x45050003),            # bc1t, bit 18 set
        ("cpu", 0x0000004F),            # sync, sa field set
        ("r3000gte", 0x4BEBB86D),       # avsz3, broken pattern
        ("r3000gte", 0x4BCBD841),       # rtps, broken pattern
    ])
    def test_reserved_bits_make_word_invalid(self, category, word):
        """Test that stray bits invalidate an otherwise known instruction."""
        instr = decode(word, category=category)
        assert instr.descriptor.is_valid
        assert instr.reserved_bits() != 0
        assert not instr.is_valid()
        assert not classifier.is_valid(instr)
