"""
Instruction Descriptors and Dispatch Tables
===========================================

An InstrDescriptor is the static metadata of one instruction kind:
mnemonic, operand layout, memory access type and the flag bits the
classifier reads. Descriptors are immutable (frozen) so the tables
cannot be modified at runtime.

An OpcodeTable maps one bit field of the word to either a descriptor or
a nested OpcodeTable. Decoding walks from a category's root table down
until it reaches a descriptor, or falls back to the table's invalid
descriptor when no entry matches.

Encoding Validity
-----------------
Every bit of a well formed word belongs to a field some table
dispatched on or to one of the descriptor's operands. Any other bit
must match the descriptor's `fixed_bits` (zero unless the encoding has
a fixed pattern, like the GTE commands):

    add $s1, $s5, $a0   0x02A48820   well formed
                        0x02A48CA0   sa field set: reserved bits 0x480

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Tuple, Union

from mipsinsn import fields
from mipsinsn.enums import AccessType, InstrIdType, OperandType, RegisterFile

WORD_MASK = 0xFFFFFFFF

RS_BITS = 0x03E00000
RT_BITS = 0x001F0000
RD_BITS = 0x0000F800
SA_BITS = 0x000007C0
FUNCTION_BITS = 0x0000003F
IMMEDIATE_BITS = 0x0000FFFF


# =============================================================================
# Operand Bits
# =============================================================================

# Bits of the word each operand kind reads
OPERAND_BITS: Dict[OperandType, int] = {
    OperandType.CPU_RS: RS_BITS,
    OperandType.CPU_RT: RT_BITS,
    OperandType.CPU_RD: RD_BITS,
    OperandType.CPU_SA: SA_BITS,
    OperandType.CPU_ZERO: 0,
    OperandType.CPU_COP0D: RD_BITS,
    OperandType.CPU_FS: RD_BITS,
    OperandType.CPU_FT: RT_BITS,
    OperandType.CPU_FD: SA_BITS,
    OperandType.CPU_COP1CS: RD_BITS,
    OperandType.CPU_COP2T: RT_BITS,
    OperandType.CPU_COP2D: RD_BITS,
    OperandType.CPU_COP2CD: RD_BITS,
    OperandType.CPU_OP: RT_BITS,
    OperandType.CPU_HINT: RT_BITS,
    OperandType.CPU_CODE: 0x03FFFFC0,
    OperandType.CPU_CODE_LOWER: 0x03FFFFC0,
    OperandType.CPU_TRAP_CODE: 0x0000FFC0,
    OperandType.CPU_COPRAW: 0x01FFFFFF,
    OperandType.CPU_LABEL: 0x03FFFFFF,
    OperandType.CPU_IMMEDIATE: IMMEDIATE_BITS,
    OperandType.CPU_BRANCH_TARGET_LABEL: IMMEDIATE_BITS,
    OperandType.CPU_IMMEDIATE_BASE: RS_BITS | IMMEDIATE_BITS,
    OperandType.CPU_MAYBE_RD_RS: RS_BITS | RD_BITS,

    OperandType.RSP_COP0D: RD_BITS,
    OperandType.RSP_COP2CD: RD_BITS,
    OperandType.RSP_VS: RD_BITS,
    OperandType.RSP_VT: RT_BITS,
    OperandType.RSP_VD: SA_BITS,
    OperandType.RSP_VT_ELEMENTHIGH: RT_BITS | 0x01E00000,
    OperandType.RSP_VT_ELEMENTLOW: RT_BITS | 0x00000780,
    OperandType.RSP_VD_DE: SA_BITS | RD_BITS,
    OperandType.RSP_VS_INDEX: RD_BITS | 0x00000780,
    OperandType.RSP_OFFSET_RS: RS_BITS | 0x0000007F,

    OperandType.R3000GTE_COP2T: RT_BITS,
    OperandType.R3000GTE_COP2D: RD_BITS,
    OperandType.R3000GTE_COP2CD: RD_BITS,
    OperandType.R3000GTE_SF: 0x00080000,
    OperandType.R3000GTE_MX: 0x00060000,
    OperandType.R3000GTE_V: 0x00018000,
    OperandType.R3000GTE_CV: 0x00006000,
    OperandType.R3000GTE_LM: 0x00000400,

    OperandType.R5900_VFS: RD_BITS,
    OperandType.R5900_VFT: RT_BITS,
    OperandType.R5900_VFD: SA_BITS,
    OperandType.R5900_VFS_FSF: RD_BITS | 0x00600000,
    OperandType.R5900_VFT_FTF: RT_BITS | 0x01800000,
    OperandType.R5900_VFT_BC: RT_BITS | 0x00000003,
    OperandType.R5900_VIS: RD_BITS,
    OperandType.R5900_VIT: RT_BITS,
    OperandType.R5900_VID: SA_BITS,
    OperandType.R5900_VIS_PARENTHESIS: RD_BITS,
    OperandType.R5900_VIS_POSTINCR: RD_BITS,
    OperandType.R5900_VIS_PREDECR: RD_BITS,
    OperandType.R5900_VIT_POSTINCR: RT_BITS,
    OperandType.R5900_VIT_PREDECR: RT_BITS,
    OperandType.R5900_ACC: 0,
    OperandType.R5900_Q: 0,
    OperandType.R5900_I: 0,
    OperandType.R5900_R: 0,
    OperandType.R5900_IMM5: SA_BITS,
    OperandType.R5900_IMM15: 0x001FFFC0,
}

# Destination field of the VU0 macro instructions (".xyzw")
DEST_SUFFIX_BITS = 0x01E00000


# =============================================================================
# Instruction Descriptor
# =============================================================================

@dataclass(frozen=True)
class InstrDescriptor:
    """
    Metadata for a single instruction kind.

    Attributes:
        instr_id: Unique identifier within the category (e.g. "cpu_lw")
        name: Mnemonic as rendered in disassembly
        id_type: The dispatch table the descriptor lives in
        operands: Operand slots, in rendering order
        access_type: Memory access width for loads/stores
        offset_shift: Scale applied to RSP vector load/store offsets
        fixed_bits: Required value of the bits no table or operand covers
        dest_suffix: Append the ".xyzw" destination field to the mnemonic
        float_file: Register file the fs/ft/fd flags refer to
        is_valid: False only for the invalid sentinels

    The remaining attributes are the classification flags read by
    mipsinsn.classifier.
    """
    instr_id: str
    name: str
    id_type: InstrIdType
    operands: Tuple[OperandType, ...] = ()
    access_type: AccessType = AccessType.INVALID
    offset_shift: int = 0
    fixed_bits: int = 0
    dest_suffix: bool = False
    float_file: RegisterFile = RegisterFile.FPR

    # Control flow
    is_branch: bool = False
    is_branch_likely: bool = False
    is_jump: bool = False
    is_jump_with_address: bool = False
    does_link: bool = False
    is_return: bool = False
    is_trap: bool = False

    # Operation kind
    is_float: bool = False
    is_double: bool = False
    is_unsigned: bool = False
    unsigned_immediate: bool = False

    # Memory
    does_load: bool = False
    does_store: bool = False
    does_dereference: bool = False

    # Register effects
    modifies_rs: bool = False
    modifies_rt: bool = False
    modifies_rd: bool = False
    reads_rs: bool = False
    reads_rt: bool = False
    reads_rd: bool = False
    reads_hi: bool = False
    reads_lo: bool = False
    modifies_hi: bool = False
    modifies_lo: bool = False
    modifies_fs: bool = False
    modifies_ft: bool = False
    modifies_fd: bool = False
    reads_fs: bool = False
    reads_ft: bool = False
    reads_fd: bool = False

    # Heuristics
    maybe_is_move: bool = False
    can_be_hi: bool = False
    can_be_lo: bool = False
    not_emitted_by_compilers: bool = False
    is_pseudo_candidate: bool = False

    is_valid: bool = True

    # Union of OPERAND_BITS over the operands (derived)
    operand_bits: int = field(init=False, repr=False, compare=False, default=0)

    def __post_init__(self) -> None:
        if self.is_branch and self.is_jump:
            raise ValueError(f"{self.instr_id}: branch and jump flags are exclusive")
        if self.does_load and self.does_store:
            raise ValueError(f"{self.instr_id}: load and store flags are exclusive")

        bits = DEST_SUFFIX_BITS if self.dest_suffix else 0
        for operand in self.operands:
            bits |= OPERAND_BITS[operand]
        object.__setattr__(self, "operand_bits", bits)

    def __repr__(self) -> str:
        return f"InstrDescriptor({self.instr_id!r}, {self.id_type})"

    def reserved_bits(self, word: int, dispatch_bits: int) -> int:
        """
        Bits of `word` outside every dispatch field and operand that differ
        from `fixed_bits`. Zero for a well formed encoding.

        Args:
            word: The raw instruction word
            dispatch_bits: Union of the fields the tables selected on
        """
        free = dispatch_bits | self.operand_bits
        return (word ^ self.fixed_bits) & ~free & WORD_MASK


def make_descriptor(
    prefix: str,
    name: str,
    id_type: InstrIdType,
    operands: Tuple[OperandType, ...] = (),
    **flags,
) -> InstrDescriptor:
    """Build a descriptor whose id is '<prefix>_<name>'."""
    return InstrDescriptor(f"{prefix}_{name}", name, id_type, tuple(operands), **flags)


def invalid_descriptor(prefix: str, id_type: InstrIdType) -> InstrDescriptor:
    """Sentinel returned when a table has no entry for a word."""
    return InstrDescriptor(f"{prefix}_INVALID", "INVALID", id_type, is_valid=False)


# =============================================================================
# Dispatch Table
# =============================================================================

TableEntry = Union[InstrDescriptor, "OpcodeTable"]

# Bits each selector function reads
KEY_BITS: Dict[Callable[[int], int], int] = {
    fields.opcode: 0xFC000000,
    fields.rs: RS_BITS,
    fields.fmt: RS_BITS,
    fields.rt: RT_BITS,
    fields.rd: RD_BITS,
    fields.sa: SA_BITS,
    fields.function: FUNCTION_BITS,
    fields.cop_function_bit: 0x02000000,
    fields.bc_condition: 0x00030000,
    fields.r5900_interlock: 0x00000001,
    fields.r5900_special2: SA_BITS | 0x00000003,
}


@dataclass(frozen=True, eq=False)
class OpcodeTable:
    """
    One level of table-driven dispatch.

    Attributes:
        name: Human-readable table name (for diagnostics)
        key: Extracts the selector field from a word
        entries: Selector value -> descriptor or nested table
        invalid: Descriptor returned when the selector has no entry
        mask: Bits the key reads (derived from the key when omitted)

    Raises:
        ValueError: If the key is not a known selector and no mask is given
    """
    name: str
    key: Callable[[int], int]
    entries: Mapping[int, TableEntry]
    invalid: InstrDescriptor
    mask: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        if not self.mask:
            if self.key not in KEY_BITS:
                raise ValueError(f"{self.name}: unknown selector {self.key!r}, pass a mask")
            object.__setattr__(self, "mask", KEY_BITS[self.key])

    def resolve(self, word: int) -> Tuple[InstrDescriptor, int]:
        """
        Resolve a word to its descriptor, descending through nested tables.

        Returns:
            (descriptor, dispatch_bits), where dispatch_bits is the union of
            the fields every visited table selected on
        """
        table = self
        dispatch_bits = 0
        while True:
            dispatch_bits |= table.mask
            entry = table.entries.get(table.key(word))
            if entry is None:
                return table.invalid, dispatch_bits
            if isinstance(entry, OpcodeTable):
                table = entry
                continue
            return entry, dispatch_bits

    def lookup(self, word: int) -> InstrDescriptor:
        """Resolve a word to its descriptor."""
        return self.resolve(word)[0]

    def descriptors(self) -> Iterator[InstrDescriptor]:
        """Iterate over every descriptor reachable from this table."""
        for table in self.subtables():
            for entry in table.entries.values():
                if not isinstance(entry, OpcodeTable):
                    yield entry

    def subtables(self) -> Iterator["OpcodeTable"]:
        """
        Iterate over this table and every nested table.

        A table reachable through several selector values is visited once.
        """
        seen = set()
        pending = [self]
        while pending:
            table = pending.pop(0)
            if id(table) in seen:
                continue
            seen.add(id(table))
            yield table
            pending.extend(e for e in table.entries.values() if isinstance(e, OpcodeTable))

    def __len__(self) -> int:
        return sum(1 for _ in self.descriptors())


def descriptor_index(table: OpcodeTable) -> Dict[str, InstrDescriptor]:
    """Map instr_id -> descriptor for every descriptor of a root table."""
    return {d.instr_id: d for d in table.descriptors()}


def rebase(
    prefix: str,
    source: Mapping[int, InstrDescriptor],
    keys: Iterable[int],
    id_type: InstrIdType,
) -> Dict[int, InstrDescriptor]:
    """
    Copy selected descriptors of another category's table into `prefix`.

    The copies keep every flag and operand; only the identifier and the
    table type change.
    """
    return {
        key: replace(source[key], instr_id=f"{prefix}_{source[key].name}", id_type=id_type)
        for key in keys
    }
