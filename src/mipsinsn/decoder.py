"""
MIPS Instruction Decoder
========================

Turns a raw 32-bit word into an Instruction by walking the dispatch
tables of its category.

Decoding never fails for an unknown encoding: an unmatched word resolves
to the invalid descriptor of the deepest table reached, and the
resulting Instruction answers every predicate with False. The only
construction-time failure is an unsupported category.

Usage:
    from mipsinsn import decode

    instr = decode(0x27BDFFE0, vram=0x80001000)
    print(instr.disassemble())        # addiu       $sp, $sp, -0x20

    instr = decode(0x4A180001, category="r3000gte")
    print(instr.opcode_name())        # rtps

    instr = decode(0x02A48CA0)        # add with the sa field set
    instr.is_valid()                  # False
    instr.reserved_bits()             # 0x480

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from functools import lru_cache
from typing import TYPE_CHECKING, Optional, Tuple, Union

from mipsinsn.config import Config
from mipsinsn.enums import InstrCategory
from mipsinsn.opcodes.descriptor import InstrDescriptor

if TYPE_CHECKING:
    from mipsinsn.instruction import Instruction

CategoryLike = Union[InstrCategory, str, None]

WORD_MASK = 0xFFFFFFFF


def resolve_category(category: CategoryLike, config: Config) -> InstrCategory:
    """
    Resolve a category argument, falling back to the configured default.

    Raises:
        UnsupportedCategoryError: If the value names no supported category
    """
    if category is None:
        return config.default_category
    return InstrCategory.parse(category)


@lru_cache(maxsize=8192)
def resolve_word(word: int, category: InstrCategory) -> Tuple[InstrDescriptor, int]:
    """
    Look up the descriptor of a word and the reserved bits it sets.

    The result depends only on the word and the static tables, so lookups
    are memoized.

    Returns:
        (descriptor, reserved_bits); reserved_bits is 0 for well formed
        encodings and for words no table knows
    """
    word &= WORD_MASK
    descriptor, dispatch_bits = category.table.resolve(word)
    if not descriptor.is_valid:
        return descriptor, 0
    return descriptor, descriptor.reserved_bits(word, dispatch_bits)


def resolve_descriptor(word: int, category: InstrCategory) -> InstrDescriptor:
    """Look up the descriptor of a word."""
    return resolve_word(word, category)[0]


def decode(
    word: int,
    vram: int = 0,
    category: CategoryLike = None,
    config: Optional[Config] = None,
) -> "Instruction":
    """
    Decode a single instruction word.

    Args:
        word: Raw instruction word (masked to 32 bits)
        vram: Address of the instruction, used for address-relative operands
        category: InstrCategory or its tag ("cpu", "rsp", "r3000gte", "r5900");
                  None selects config.default_category
        config: Explicit configuration handle (default: process-wide)

    Returns:
        The decoded Instruction

    Raises:
        UnsupportedCategoryError: If the category is not supported
    """
    from mipsinsn.instruction import Instruction
    return Instruction(word, vram, category, config)
