"""
Decoded MIPS Instruction
========================

The Instruction value: a raw word, its address, its category and the
descriptor the dispatch tables resolved it to. Instances are immutable
and hashable; equality follows (word, vram, category).

Field getters slice the word directly. Classification predicates and
disassembly are thin delegations to mipsinsn.classifier and
mipsinsn.formatter, which can also be used as free functions.

Usage:
    from mipsinsn import Instruction

    instr = Instruction(0x8C420000)
    instr.get_opcode()          # 35
    instr.does_load()           # True
    instr.disassemble()         # 'lw          $v0, 0x0($v0)'

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from typing import Optional, Union

from mipsinsn import classifier, fields, formatter
from mipsinsn.config import Config, get_config
from mipsinsn.decoder import CategoryLike, WORD_MASK, resolve_category, resolve_word
from mipsinsn.enums import AccessType, InstrCategory, OperandType, RegisterFile
from mipsinsn.opcodes.descriptor import InstrDescriptor


# Operand kinds that carry the same field as another kind
_OPERAND_ALIASES = {
    OperandType.CPU_RS: (OperandType.CPU_IMMEDIATE_BASE, OperandType.CPU_MAYBE_RD_RS, OperandType.RSP_OFFSET_RS),
    OperandType.CPU_RD: (OperandType.CPU_MAYBE_RD_RS,),
    OperandType.CPU_IMMEDIATE: (OperandType.CPU_IMMEDIATE_BASE, OperandType.RSP_OFFSET_RS),
    OperandType.RSP_VT: (OperandType.RSP_VT_ELEMENTHIGH, OperandType.RSP_VT_ELEMENTLOW),
    OperandType.RSP_VD: (OperandType.RSP_VD_DE,),
    OperandType.RSP_VS: (OperandType.RSP_VS_INDEX,),
}


class Instruction:
    """
    A decoded 32-bit MIPS instruction.

    Args:
        word: Raw instruction word (masked to 32 bits)
        vram: Address of the instruction (masked to 32 bits, default 0)
        category: InstrCategory or tag; None selects config.default_category
        config: Config handle (default: the process-wide instance)

    Raises:
        UnsupportedCategoryError: If the category is not supported
    """

    __slots__ = ("_word", "_vram", "_category", "_descriptor", "_reserved_bits", "_config")

    def __init__(
        self,
        word: int,
        vram: int = 0,
        category: CategoryLike = None,
        config: Optional[Config] = None,
    ):
        config = config if config is not None else get_config()
        resolved = resolve_category(category, config)
        word &= WORD_MASK
        object.__setattr__(self, "_word", word)
        object.__setattr__(self, "_vram", vram & WORD_MASK)
        object.__setattr__(self, "_category", resolved)
        descriptor, reserved_bits = resolve_word(word, resolved)
        object.__setattr__(self, "_descriptor", descriptor)
        object.__setattr__(self, "_reserved_bits", reserved_bits)
        object.__setattr__(self, "_config", config)

    def __setattr__(self, name, value):
        raise AttributeError(f"Instruction is immutable (cannot set {name!r})")

    def __delattr__(self, name):
        raise AttributeError(f"Instruction is immutable (cannot delete {name!r})")

    # =========================================================================
    # Identity
    # =========================================================================

    @property
    def word(self) -> int:
        return self._word

    @property
    def vram(self) -> int:
        return self._vram

    @property
    def category(self) -> InstrCategory:
        return self._category

    @property
    def descriptor(self) -> InstrDescriptor:
        return self._descriptor

    @property
    def identifier(self) -> str:
        """Unique id of the resolved descriptor, e.g. 'cpu_lw' or 'rsp_INVALID'."""
        return self._descriptor.instr_id

    @property
    def config(self) -> Config:
        return self._config

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instruction):
            return NotImplemented
        return (self._word, self._vram, self._category) == (other._word, other._vram, other._category)

    def __hash__(self) -> int:
        return hash((self._word, self._vram, self._category))

    def __repr__(self) -> str:
        return (
            f"Instruction(0x{self._word:08X}, vram=0x{self._vram:08X}, "
            f"category={self._category}, id={self.identifier})"
        )

    def __str__(self) -> str:
        return self.disassemble()

    # =========================================================================
    # Field Getters
    # =========================================================================

    def get_opcode(self) -> int:
        return fields.opcode(self._word)

    def get_rs(self) -> int:
        return fields.rs(self._word)

    def get_rt(self) -> int:
        return fields.rt(self._word)

    def get_rd(self) -> int:
        return fields.rd(self._word)

    def get_sa(self) -> int:
        return fields.sa(self._word)

    def get_function(self) -> int:
        return fields.function(self._word)

    def get_immediate(self) -> int:
        """Raw unsigned 16-bit immediate."""
        return fields.immediate(self._word)

    def get_instr_index(self) -> int:
        return fields.instr_index(self._word)

    def get_code(self) -> int:
        return fields.code(self._word)

    def get_code_upper(self) -> int:
        return fields.code_upper(self._word)

    def get_code_lower(self) -> int:
        return fields.code_lower(self._word)

    def get_copraw(self) -> int:
        return fields.copraw(self._word)

    def get_cop0d(self) -> int:
        return fields.cop0d(self._word)

    def get_fs(self) -> int:
        return fields.fs(self._word)

    def get_ft(self) -> int:
        return fields.ft(self._word)

    def get_fd(self) -> int:
        return fields.fd(self._word)

    def get_cop1cs(self) -> int:
        return fields.cop1cs(self._word)

    def get_cop2t(self) -> int:
        return fields.cop2t(self._word)

    def fields(self) -> fields.InstrFields:
        """Snapshot of all primary fields."""
        return fields.InstrFields.from_word(self._word)

    # =========================================================================
    # Derived Values
    # =========================================================================

    def processed_immediate(self) -> int:
        """The immediate as the instruction interprets it (signed unless unsigned)."""
        if self._descriptor.unsigned_immediate:
            return self.get_immediate()
        return fields.sign_extend_immediate(self.get_immediate())

    def instr_index_as_vram(self) -> int:
        """
        Absolute target of a J-type instruction.

        The index fills the low 28 bits; the upper 4 bits come from the
        delay slot address, or from KSEG0 when the vram is unknown (0).
        """
        index = self.get_instr_index() << 2
        if self._vram == 0:
            return index | 0x80000000
        return index | ((self._vram + 4) & 0xF0000000)

    def branch_offset(self) -> int:
        """Byte offset from this instruction to the branch target."""
        return (fields.sign_extend_immediate(self.get_immediate()) << 2) + 4

    def branch_offset_generic(self) -> int:
        """Branch offset for branches, target distance for J-type jumps."""
        if self._descriptor.is_jump_with_address:
            return self.instr_index_as_vram() - self._vram
        return self.branch_offset()

    def branch_vram_generic(self) -> int:
        """Absolute target address of a branch or J-type jump."""
        if self._descriptor.is_jump_with_address:
            return self.instr_index_as_vram()
        return (self._vram + self.branch_offset()) & WORD_MASK

    def destination_gpr(self) -> Optional[int]:
        """The GPR written through rd/rt, or None."""
        if self._descriptor.modifies_rd:
            return self.get_rd()
        if self._descriptor.modifies_rt:
            return self.get_rt()
        return None

    def outputs_to_gpr_zero(self) -> bool:
        return self.destination_gpr() == 0

    def opcode_name(self) -> str:
        return self._descriptor.name

    def instr_id_type_name(self) -> str:
        return str(self._descriptor.id_type)

    def access_type(self) -> AccessType:
        return self._descriptor.access_type

    def reserved_bits(self) -> int:
        """
        Bits set outside every field the encoding defines.

        Non-zero values make an otherwise known instruction invalid.
        """
        return self._reserved_bits

    # =========================================================================
    # Comparison
    # =========================================================================

    def same_opcode(self, other: "Instruction") -> bool:
        """True if both resolve to the same valid identifier."""
        if not self.is_valid() or not other.is_valid():
            return False
        return self.identifier == other.identifier

    def same_opcode_but_different_arguments(self, other: "Instruction") -> bool:
        return self.same_opcode(other) and self._word != other._word

    def has_operand(self, operand_type: OperandType) -> bool:
        return operand_type in self._descriptor.operands

    def has_operand_alias(self, operand_type: OperandType) -> bool:
        """has_operand, also accepting operand kinds that embed the same field."""
        if self.has_operand(operand_type):
            return True
        return any(alias in self._descriptor.operands for alias in _OPERAND_ALIASES.get(operand_type, ()))

    # =========================================================================
    # Classification
    # =========================================================================

    def is_jump(self) -> bool:
        return classifier.is_jump(self)

    def is_branch(self) -> bool:
        return classifier.is_branch(self)

    def is_branch_likely(self) -> bool:
        return classifier.is_branch_likely(self)

    def is_unconditional_branch(self) -> bool:
        return classifier.is_unconditional_branch(self)

    def is_jump_with_address(self) -> bool:
        return classifier.is_jump_with_address(self)

    def is_jumptable_jump(self) -> bool:
        return classifier.is_jumptable_jump(self)

    def is_function_call(self) -> bool:
        return classifier.is_function_call(self)

    def is_return(self) -> bool:
        return classifier.is_return(self)

    def has_delay_slot(self) -> bool:
        return classifier.has_delay_slot(self)

    def does_load(self) -> bool:
        return classifier.does_load(self)

    def does_store(self) -> bool:
        return classifier.does_store(self)

    def does_dereference(self) -> bool:
        return classifier.does_dereference(self)

    def does_link(self) -> bool:
        return classifier.does_link(self)

    def does_unsigned_memory_access(self) -> bool:
        return classifier.does_unsigned_memory_access(self)

    def is_nop(self) -> bool:
        return classifier.is_nop(self)

    def maybe_is_move(self) -> bool:
        return classifier.maybe_is_move(self)

    def is_pseudo(self) -> bool:
        return classifier.is_pseudo(self)

    def is_trap(self) -> bool:
        return classifier.is_trap(self)

    def is_float(self) -> bool:
        return classifier.is_float(self)

    def is_double(self) -> bool:
        return classifier.is_double(self)

    def is_unsigned(self) -> bool:
        return classifier.is_unsigned(self)

    def is_valid(self) -> bool:
        return classifier.is_valid(self)

    def not_emitted_by_compilers(self) -> bool:
        return classifier.not_emitted_by_compilers(self)

    def can_be_hi(self) -> bool:
        return classifier.can_be_hi(self)

    def can_be_lo(self) -> bool:
        return classifier.can_be_lo(self)

    def modifies_rs(self) -> bool:
        return classifier.modifies_rs(self)

    def modifies_rt(self) -> bool:
        return classifier.modifies_rt(self)

    def modifies_rd(self) -> bool:
        return classifier.modifies_rd(self)

    def reads_rs(self) -> bool:
        return classifier.reads_rs(self)

    def reads_rt(self) -> bool:
        return classifier.reads_rt(self)

    def reads_rd(self) -> bool:
        return classifier.reads_rd(self)

    def reads_hi(self) -> bool:
        return classifier.reads_hi(self)

    def reads_lo(self) -> bool:
        return classifier.reads_lo(self)

    def modifies_hi(self) -> bool:
        return classifier.modifies_hi(self)

    def modifies_lo(self) -> bool:
        return classifier.modifies_lo(self)

    def modifies_fs(self) -> bool:
        return classifier.modifies_fs(self)

    def modifies_ft(self) -> bool:
        return classifier.modifies_ft(self)

    def modifies_fd(self) -> bool:
        return classifier.modifies_fd(self)

    def reads_fs(self) -> bool:
        return classifier.reads_fs(self)

    def reads_ft(self) -> bool:
        return classifier.reads_ft(self)

    def reads_fd(self) -> bool:
        return classifier.reads_fd(self)

    def modifies_register(self, register_file: RegisterFile, index: Optional[int] = None) -> bool:
        return classifier.modifies_register(self, register_file, index)

    def reads_register(self, register_file: RegisterFile, index: Optional[int] = None) -> bool:
        return classifier.reads_register(self, register_file, index)

    # =========================================================================
    # Disassembly
    # =========================================================================

    def disassemble(
        self,
        immediate_override: Union[int, str, None] = None,
        vram_override: Optional[int] = None,
        extra_ljust: int = 0,
    ) -> str:
        """
        Render the instruction as assembly text.

        Args:
            immediate_override: Integer replacing the immediate value, or text
                                inserted verbatim in its place (e.g. "%lo(sym)")
            vram_override: Address used for branch and jump targets
            extra_ljust: Additional mnemonic padding

        Returns:
            The assembly line (never empty)
        """
        return formatter.disassemble(self, immediate_override, vram_override, extra_ljust)
