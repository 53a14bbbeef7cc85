"""
mipsinsn - MIPS Instruction Decoder, Classifier and Disassembler
================================================================

This package decodes raw 32-bit MIPS machine words into immutable
instruction values, classifies them (control flow, memory access,
register effects) and renders them as assembly text.

Supported instruction-set variants (categories)
-----------------------------------------------
- **cpu**: MIPS III CPU (R4300 class) with COP0, COP1 FPU and COP2 moves
- **rsp**: Nintendo 64 Reality Signal Processor (scalar unit + vector unit)
- **r3000gte**: PlayStation R3000A (MIPS I) + Geometry Transformation Engine
- **r5900**: PlayStation 2 Emotion Engine core (MMI, EE FPU, VU0 macro mode)

Main Components
---------------
- **decoder**: `decode()` and the table walk
- **instruction**: the `Instruction` value with field getters and predicates
- **classifier**: predicate functions (`is_jump`, `does_load`, ...)
- **formatter**: assembly text rendering, pseudo-instructions
- **registers**: register naming per ABI
- **disassembler**: batch disassembly of byte buffers (`MipsDisassembler`)
- **config**: process-wide settings (`Config`, `get_config`, `set_config`)

Quick Start
-----------
Decode and classify a word:
    >>> from mipsinsn import decode
    >>> instr = decode(0x03E00008)
    >>> instr.is_return()
    True
    >>> instr.disassemble()
    'jr          $ra'

Disassemble a buffer:
    >>> from mipsinsn import MipsDisassembler
    >>> disasm = MipsDisassembler(category="rsp")
    >>> listing = disasm.disassemble_to_text(code, start_address=0x04001000)

Or use the command-line tool:
    $ mipsdisasm code.bin --address 0x80000400 --category cpu
"""

__version__ = "1.0.0"
__author__ = "mipsinsn Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from mipsinsn.config import Config, get_config, set_config
from mipsinsn.decoder import decode
from mipsinsn.disassembler import DisassembledInstruction, MipsDisassembler
from mipsinsn.enums import (
    Abi,
    AccessType,
    InstrCategory,
    InstrIdType,
    OperandType,
    RegisterFile,
)
from mipsinsn.errors import (
    ConfigError,
    InvalidRegisterIndexError,
    MipsError,
    UnsupportedCategoryError,
)
from mipsinsn.fields import InstrFields
from mipsinsn.instruction import Instruction
from mipsinsn.registers import register_name
from mipsinsn.utils import Utils

__all__ = [
    "__version__",
    # Decoding
    "decode",
    "Instruction",
    "InstrFields",
    # Batch disassembly
    "MipsDisassembler",
    "DisassembledInstruction",
    # Configuration
    "Config",
    "get_config",
    "set_config",
    # Enumerations
    "Abi",
    "AccessType",
    "InstrCategory",
    "InstrIdType",
    "OperandType",
    "RegisterFile",
    # Errors
    "MipsError",
    "UnsupportedCategoryError",
    "InvalidRegisterIndexError",
    "ConfigError",
    # Helpers
    "register_name",
    "Utils",
]
