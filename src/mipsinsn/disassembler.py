"""
MIPS Batch Disassembler
=======================

Disassembles byte buffers or word sequences into listing records, one
per 32-bit word, on top of the single-instruction decoder.

Every aligned word produces a record, including words that decode to
no instruction (rendered as `.word`), so a listing of arbitrary data
never stops early. Trailing bytes that do not fill a word become a
`.byte` record.

Branch and jump targets are annotated with a symbol name when the
symbol table knows the target address.

Usage:
    disasm = MipsDisassembler(category="cpu", endian="big")
    disasm.add_symbol(0x80001000, "main")

    for record in disasm.disassemble(code, start_address=0x80000400):
        print(record)

    # 80000400: 0C 00 04 00  jal         0x80001000   # main

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import logging

from mipsinsn.config import Config, get_config
from mipsinsn.decoder import CategoryLike, WORD_MASK, resolve_category
from mipsinsn.enums import InstrCategory
from mipsinsn.errors import ConfigError
from mipsinsn.instruction import Instruction

logger = logging.getLogger(__name__)

WORD_SIZE = 4
ENDIANNESS = ("big", "little")


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class DisassembledInstruction:
    """
    One line of a disassembly listing.

    Attributes:
        address: Memory address of the word
        word: The raw word (or the value of the trailing bytes)
        instruction: The decoded Instruction (None for trailing bytes)
        text: Rendered assembly text
        raw_bytes: The bytes the record was decoded from
        comment: Optional annotation (e.g. the symbol of a branch target)
    """
    address: int
    word: int
    instruction: Optional[Instruction]
    text: str
    raw_bytes: bytes
    comment: str = ""

    @property
    def size(self) -> int:
        return len(self.raw_bytes)

    @property
    def mnemonic(self) -> str:
        if self.instruction is None:
            return ".byte"
        if not self.instruction.is_valid():
            return ".word"
        return self.instruction.opcode_name()

    def __str__(self) -> str:
        """Format as listing line: ADDRESS: BYTES  TEXT  # COMMENT"""
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes).ljust(11)

        if self.comment:
            return f"{self.address:08X}: {hex_bytes}  {self.text:<40} # {self.comment}"
        return f"{self.address:08X}: {hex_bytes}  {self.text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"0x{self.address:08X}",
            "address_int": self.address,
            "word": f"0x{self.word:08X}",
            "mnemonic": self.mnemonic,
            "identifier": self.instruction.identifier if self.instruction is not None else None,
            "text": self.text,
            "size": self.size,
            "bytes": [f"0x{b:02X}" for b in self.raw_bytes],
            "comment": self.comment,
        }


# =============================================================================
# MIPS Disassembler
# =============================================================================

class MipsDisassembler:
    """
    Disassembler for streams of MIPS instruction words.

    Attributes:
        category: Instruction category used for every word
        config: Configuration handle passed to every decoded instruction
        endian: Byte order of the input buffers ("big" or "little")
    """

    def __init__(
        self,
        category: CategoryLike = None,
        config: Optional[Config] = None,
        symbol_table: Optional[Dict[int, str]] = None,
        endian: str = "big",
    ):
        """
        Initialize the disassembler.

        Args:
            category: InstrCategory or tag (default: config.default_category)
            config: Explicit configuration (default: process-wide)
            symbol_table: Optional dict mapping addresses to symbol names
            endian: Byte order of input buffers

        Raises:
            UnsupportedCategoryError: If the category is not supported
            ConfigError: If endian is not "big" or "little"
        """
        if endian not in ENDIANNESS:
            raise ConfigError("endian", endian, ENDIANNESS)

        self.config = config if config is not None else get_config()
        self.category: InstrCategory = resolve_category(category, self.config)
        self.endian = endian
        self._symbol_table = dict(symbol_table or {})

        logger.debug(f"MipsDisassembler: category={self.category}, endian={endian}")

    @property
    def symbol_table(self) -> Dict[int, str]:
        return self._symbol_table

    def disassemble_one(
        self,
        data: bytes,
        address: int = 0,
        offset: int = 0
    ) -> DisassembledInstruction:
        """
        Disassemble a single word.

        Args:
            data: Byte buffer containing the instruction
            address: Memory address of the instruction
            offset: Offset into data where the instruction starts

        Returns:
            DisassembledInstruction for the word, or a `.byte` record when
            fewer than four bytes remain

        Raises:
            ValueError: If offset is beyond the end of data
        """
        if offset >= len(data):
            raise ValueError(f"Offset {offset} beyond data length {len(data)}")

        raw = bytes(data[offset:offset + WORD_SIZE])
        if len(raw) < WORD_SIZE:
            return DisassembledInstruction(
                address=address,
                word=int.from_bytes(raw, self.endian),
                instruction=None,
                text=".byte".ljust(self.config.opcode_ljust) + " " + ", ".join(f"0x{b:02X}" for b in raw),
                raw_bytes=raw,
                comment="incomplete word",
            )

        return self._record(int.from_bytes(raw, self.endian), address, raw)

    def _record(self, word: int, address: int, raw: bytes) -> DisassembledInstruction:
        instr = Instruction(word, address, self.category, self.config)
        return DisassembledInstruction(
            address=address,
            word=instr.word,
            instruction=instr,
            text=instr.disassemble(),
            raw_bytes=raw,
            comment=self._annotate(instr),
        )

    def _annotate(self, instr: Instruction) -> str:
        """Symbol name of a branch or jump target, if known."""
        if not self._symbol_table:
            return ""
        if not (instr.is_branch() or instr.is_jump_with_address()):
            return ""
        return self._symbol_table.get(instr.branch_vram_generic(), "")

    def disassemble(
        self,
        data: bytes,
        start_address: int = 0,
        count: Optional[int] = None,
        max_bytes: Optional[int] = None
    ) -> List[DisassembledInstruction]:
        """
        Disassemble consecutive words of a buffer.

        Args:
            data: Byte buffer containing machine code
            start_address: Memory address of the first byte
            count: Maximum number of records (None = all)
            max_bytes: Maximum number of bytes to process (None = all)

        Returns:
            List of DisassembledInstruction records
        """
        result = []
        offset = 0
        address = start_address

        while offset < len(data):
            if count is not None and len(result) >= count:
                break
            if max_bytes is not None and offset >= max_bytes:
                break

            record = self.disassemble_one(data, address, offset)
            result.append(record)

            offset += record.size
            address = (address + record.size) & WORD_MASK

        return result

    def disassemble_words(
        self,
        words: Iterable[int],
        start_address: int = 0
    ) -> List[DisassembledInstruction]:
        """
        Disassemble already-assembled words (no byte order involved).

        The raw bytes of each record are shown in the configured byte order.
        """
        result = []
        address = start_address
        for word in words:
            word &= WORD_MASK
            result.append(self._record(word, address, word.to_bytes(WORD_SIZE, self.endian)))
            address = (address + WORD_SIZE) & WORD_MASK
        return result

    def disassemble_to_text(
        self,
        data: bytes,
        start_address: int = 0,
        count: Optional[int] = None
    ) -> str:
        """
        Disassemble and return a multi-line listing.

        Args:
            data: Byte buffer containing machine code
            start_address: Memory address of the first byte
            count: Maximum number of records

        Returns:
            Multi-line string with the listing
        """
        records = self.disassemble(data, start_address, count)
        return "\n".join(str(record) for record in records)

    def add_symbol(self, address: int, name: str) -> None:
        """
        Add a symbol to the symbol table.

        Args:
            address: The address value
            name: The symbol name
        """
        self._symbol_table[address] = name

    def add_symbols(self, symbols: Dict[int, str]) -> None:
        """
        Add multiple symbols to the symbol table.

        Args:
            symbols: Dictionary mapping addresses to names
        """
        self._symbol_table.update(symbols)
