"""
Instruction Classifier
======================

Stateless predicates over a decoded Instruction. Each predicate reads
the resolved descriptor's flags and, where needed, specific field values
of the word. On the invalid descriptor every flag is False, so every
predicate answers False for unknown encodings.

Register Effects
----------------
`modifies_register()` and `reads_register()` answer per register file:

    GPR            rs / rt / rd fields, plus $ra for linking J/REGIMM ops
    FPR            fs / ft / fd fields
    R5900_VF, R5900_VI
                   fs / ft / fd fields of the VU0 macro instructions
    HI_LO          0 = hi, 1 = lo
    COP0, COP1_CONTROL, COP2, GTE_*, RSP_*
                   the coprocessor operand of moves, loads and stores;
                   a move to (or load into) the coprocessor writes it,
                   a move from (or store of) it reads it

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from mipsinsn import fields
from mipsinsn.enums import OperandType, RegisterFile
from mipsinsn.pseudos import find_pseudo
from mipsinsn.registers import GPR_RA, GPR_ZERO

if TYPE_CHECKING:
    from mipsinsn.instruction import Instruction


def _is_plain_j(instr: "Instruction") -> bool:
    return instr.config.treat_j_as_unconditional_branch and instr.descriptor.name == "j"


# =============================================================================
# Control Flow
# =============================================================================

def is_jump(instr: "Instruction") -> bool:
    """Unconditional jump, including jump-and-link and register jumps."""
    return instr.descriptor.is_jump


def is_branch(instr: "Instruction") -> bool:
    """Conditional (PC-relative) branch."""
    return instr.descriptor.is_branch


def is_branch_likely(instr: "Instruction") -> bool:
    return instr.descriptor.is_branch_likely


def is_unconditional_branch(instr: "Instruction") -> bool:
    """
    A branch that is always taken: `beq $zero, $zero`, `bgez $zero`, or
    `j` when configured as a branch.

    `j` keeps answering True to is_jump() either way.
    """
    name = instr.descriptor.name
    word = instr.word
    if name == "beq":
        return fields.rs(word) == GPR_ZERO and fields.rt(word) == GPR_ZERO
    if name == "bgez":
        return fields.rs(word) == GPR_ZERO
    return _is_plain_j(instr)


def is_jump_with_address(instr: "Instruction") -> bool:
    """J-type jump with an absolute 26-bit target (j, jal)."""
    return instr.descriptor.is_jump_with_address


def is_jumptable_jump(instr: "Instruction") -> bool:
    """`jr` through any register other than $ra."""
    return instr.descriptor.name == "jr" and fields.rs(instr.word) != GPR_RA


def is_function_call(instr: "Instruction") -> bool:
    """Any linking jump or branch."""
    return instr.descriptor.does_link


def is_return(instr: "Instruction") -> bool:
    """`jr $ra`, or an identifier marked as a return (eret)."""
    if instr.descriptor.name == "jr":
        return fields.rs(instr.word) == GPR_RA
    return instr.descriptor.is_return


def has_delay_slot(instr: "Instruction") -> bool:
    return instr.descriptor.is_branch or instr.descriptor.is_jump


# =============================================================================
# Memory
# =============================================================================

def does_load(instr: "Instruction") -> bool:
    return instr.descriptor.does_load


def does_store(instr: "Instruction") -> bool:
    return instr.descriptor.does_store


def does_dereference(instr: "Instruction") -> bool:
    return instr.descriptor.does_dereference


def does_link(instr: "Instruction") -> bool:
    return instr.descriptor.does_link


def does_unsigned_memory_access(instr: "Instruction") -> bool:
    return instr.descriptor.does_dereference and instr.descriptor.is_unsigned


# =============================================================================
# Heuristics
# =============================================================================

def is_nop(instr: "Instruction") -> bool:
    """Exactly the all-zero word, not any zero-effect instruction."""
    return instr.descriptor.is_valid and instr.word == 0


def maybe_is_move(instr: "Instruction") -> bool:
    """
    Register copy idiom: an add/or style operation with a $zero operand,
    e.g. `addu $a0, $a1, $zero`.

    Approximate by nature; the pseudo `move` rule is the stricter form.
    """
    if not instr.descriptor.maybe_is_move:
        return False
    return fields.rs(instr.word) == GPR_ZERO or fields.rt(instr.word) == GPR_ZERO


def is_pseudo(instr: "Instruction") -> bool:
    """True when an enabled pseudo-instruction rule matches this word."""
    return find_pseudo(instr.descriptor, instr.word, instr.config) is not None


def is_trap(instr: "Instruction") -> bool:
    return instr.descriptor.is_trap


def is_float(instr: "Instruction") -> bool:
    return instr.descriptor.is_float


def is_double(instr: "Instruction") -> bool:
    return instr.descriptor.is_double


def is_unsigned(instr: "Instruction") -> bool:
    return instr.descriptor.is_unsigned


def is_valid(instr: "Instruction") -> bool:
    """A known instruction with no bit set outside its defined fields."""
    return instr.descriptor.is_valid and instr.reserved_bits() == 0


def not_emitted_by_compilers(instr: "Instruction") -> bool:
    return instr.descriptor.not_emitted_by_compilers


def can_be_hi(instr: "Instruction") -> bool:
    """Can be the %hi half of a symbol reference (lui)."""
    return instr.descriptor.can_be_hi


def can_be_lo(instr: "Instruction") -> bool:
    """Can be the %lo half of a symbol reference (addiu, ori, loads, stores)."""
    return instr.descriptor.can_be_lo


# =============================================================================
# Register Field Flags
# =============================================================================

def modifies_rs(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_rs


def modifies_rt(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_rt


def modifies_rd(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_rd


def reads_rs(instr: "Instruction") -> bool:
    return instr.descriptor.reads_rs


def reads_rt(instr: "Instruction") -> bool:
    return instr.descriptor.reads_rt


def reads_rd(instr: "Instruction") -> bool:
    return instr.descriptor.reads_rd


def reads_hi(instr: "Instruction") -> bool:
    return instr.descriptor.reads_hi


def reads_lo(instr: "Instruction") -> bool:
    return instr.descriptor.reads_lo


def modifies_hi(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_hi


def modifies_lo(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_lo


def modifies_fs(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_fs


def modifies_ft(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_ft


def modifies_fd(instr: "Instruction") -> bool:
    return instr.descriptor.modifies_fd


def reads_fs(instr: "Instruction") -> bool:
    return instr.descriptor.reads_fs


def reads_ft(instr: "Instruction") -> bool:
    return instr.descriptor.reads_ft


def reads_fd(instr: "Instruction") -> bool:
    return instr.descriptor.reads_fd


# =============================================================================
# Register Effects
# =============================================================================

# Coprocessor operand kinds: register file and the field holding the index
_COPROCESSOR_OPERANDS: Dict[OperandType, Tuple[RegisterFile, Callable[[int], int]]] = {
    OperandType.CPU_COP0D: (RegisterFile.COP0, fields.cop0d),
    OperandType.CPU_COP1CS: (RegisterFile.COP1_CONTROL, fields.cop1cs),
    OperandType.CPU_COP2T: (RegisterFile.COP2, fields.cop2t),
    OperandType.CPU_COP2D: (RegisterFile.COP2, fields.cop2d),
    OperandType.CPU_COP2CD: (RegisterFile.COP2, fields.cop2cd),
    OperandType.R3000GTE_COP2T: (RegisterFile.GTE_DATA, fields.cop2t),
    OperandType.R3000GTE_COP2D: (RegisterFile.GTE_DATA, fields.cop2d),
    OperandType.R3000GTE_COP2CD: (RegisterFile.GTE_CONTROL, fields.cop2cd),
    OperandType.RSP_COP0D: (RegisterFile.RSP_COP0, fields.cop0d),
    OperandType.RSP_COP2CD: (RegisterFile.RSP_VECTOR_CONTROL, fields.cop2cd),
    OperandType.RSP_VS_INDEX: (RegisterFile.RSP_VECTOR, fields.rsp_vs),
    OperandType.RSP_VT_ELEMENTLOW: (RegisterFile.RSP_VECTOR, fields.rsp_vt),
    OperandType.RSP_VD: (RegisterFile.RSP_VECTOR, fields.rsp_vd),
    OperandType.RSP_VD_DE: (RegisterFile.RSP_VECTOR, fields.rsp_vd),
    OperandType.RSP_VS: (RegisterFile.RSP_VECTOR, fields.rsp_vs),
    OperandType.RSP_VT_ELEMENTHIGH: (RegisterFile.RSP_VECTOR, fields.rsp_vt),
    OperandType.R5900_VFS: (RegisterFile.R5900_VF, fields.fs),
    OperandType.R5900_VFT: (RegisterFile.R5900_VF, fields.ft),
    OperandType.R5900_VIS: (RegisterFile.R5900_VI, fields.fs),
}

# Vector unit destinations and sources
_ALWAYS_WRITTEN = (OperandType.RSP_VD, OperandType.RSP_VD_DE)
_ALWAYS_READ = (OperandType.RSP_VS, OperandType.RSP_VT_ELEMENTHIGH)


def _register_effects(instr: "Instruction", write: bool) -> Dict[RegisterFile, List[int]]:
    """Indices written (write=True) or read (write=False), per register file."""
    d = instr.descriptor
    word = instr.word
    effects: Dict[RegisterFile, List[int]] = {}

    def add(register_file: RegisterFile, index: int) -> None:
        effects.setdefault(register_file, []).append(index)

    if not d.is_valid:
        return effects

    if write:
        gpr = ((d.modifies_rs, fields.rs), (d.modifies_rt, fields.rt), (d.modifies_rd, fields.rd))
        fpr = ((d.modifies_fs, fields.fs), (d.modifies_ft, fields.ft), (d.modifies_fd, fields.fd))
        hi_lo = ((d.modifies_hi, 0), (d.modifies_lo, 1))
    else:
        gpr = ((d.reads_rs, fields.rs), (d.reads_rt, fields.rt), (d.reads_rd, fields.rd))
        fpr = ((d.reads_fs, fields.fs), (d.reads_ft, fields.ft), (d.reads_fd, fields.fd))
        hi_lo = ((d.reads_hi, 0), (d.reads_lo, 1))

    for flag, extract in gpr:
        if flag:
            add(RegisterFile.GPR, extract(word))
    if write and d.does_link and not d.modifies_rd:
        add(RegisterFile.GPR, GPR_RA)
    for flag, extract in fpr:
        if flag:
            add(d.float_file, extract(word))
    for flag, index in hi_lo:
        if flag:
            add(RegisterFile.HI_LO, index)

    # Moves to/from a coprocessor are expressed from the GPR side:
    # mtc0 reads rt and writes cop0d, mfc0 writes rt and reads cop0d.
    to_coprocessor = d.does_load or (d.reads_rt and not d.does_store)
    from_coprocessor = d.does_store or (d.modifies_rt and not d.does_load)
    for operand in d.operands:
        if operand not in _COPROCESSOR_OPERANDS:
            continue
        register_file, extract = _COPROCESSOR_OPERANDS[operand]
        if operand in _ALWAYS_WRITTEN:
            written = True
        elif operand in _ALWAYS_READ:
            written = False
        elif to_coprocessor:
            written = True
        elif from_coprocessor:
            written = False
        else:
            continue
        if written == write:
            add(register_file, extract(word))

    return effects


def modifies_register(instr: "Instruction", register_file: RegisterFile, index: Optional[int] = None) -> bool:
    """
    True if the instruction writes a register of `register_file`.

    With `index`, the written register must additionally be that one.
    """
    written = _register_effects(instr, write=True).get(register_file, [])
    if index is None:
        return bool(written)
    return index in written


def reads_register(instr: "Instruction", register_file: RegisterFile, index: Optional[int] = None) -> bool:
    """
    True if the instruction reads a register of `register_file`.

    With `index`, the read register must additionally be that one.
    """
    read = _register_effects(instr, write=False).get(register_file, [])
    if index is None:
        return bool(read)
    return index in read
