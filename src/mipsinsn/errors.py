"""
mipsinsn Error Hierarchy
========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from MipsError, allowing callers to catch every
package error with a single except clause if desired.

Exception Hierarchy
-------------------
MipsError (base)
├── UnsupportedCategoryError - unknown instruction category tag
├── InvalidRegisterIndexError - register index outside its file
└── ConfigError - invalid configuration value

What Is NOT An Error
--------------------
Unknown or malformed instruction words are never reported through
exceptions. They decode to a valid Instruction carrying the category's
invalid identifier, every predicate on it is False, and its disassembly
is a `.word` placeholder. A batch disassembly over arbitrary binary data
therefore never aborts halfway.

Error messages follow this format:
    error: description
    hint: suggestion for fixing (when available)

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from typing import Iterable, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MipsError(Exception):
    """
    Base exception for all mipsinsn errors.

    Carries a message and an optional hint:

        try:
            decode(0x24010001, category="r4000")
        except MipsError as e:
            print(f"Error: {e}")

    Attributes:
        message: The error description
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its hint.

        Example output:
            error: unsupported instruction category 'r4000'
            hint: supported categories are: cpu, rsp, r3000gte, r5900
        """
        parts = [f"error: {self.message}"]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


# =============================================================================
# Decoding Exceptions
# =============================================================================

class UnsupportedCategoryError(MipsError):
    """
    Unknown instruction category.

    Raised when an Instruction is constructed (or decode() is called)
    with a category tag that is not one of the supported instruction-set
    variants. This is the only failure decoding can produce; the
    category is never silently replaced by a default.
    """

    def __init__(self, category: object, supported: Optional[Iterable[str]] = None):
        self.category = category
        self.supported = list(supported or [])

        hint = None
        if self.supported:
            hint = f"supported categories are: {', '.join(self.supported)}"

        super().__init__(f"unsupported instruction category {category!r}", hint=hint)


class InvalidRegisterIndexError(MipsError):
    """
    Register index outside the valid range of its register file.

    Example:
        gpr_name(32)  # Error: GPR indices are 0-31
    """

    def __init__(self, register_file: str, index: int, limit: int):
        self.register_file = register_file
        self.index = index
        self.limit = limit

        super().__init__(
            f"invalid {register_file} register index {index}",
            hint=f"{register_file} register indices are 0-{limit - 1}",
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(MipsError):
    """
    Invalid configuration value.

    Raised when a configuration field is given a value it cannot hold,
    for example an ABI name that does not exist.
    """

    def __init__(self, field: str, value: object, choices: Optional[Iterable[str]] = None):
        self.field = field
        self.value = value
        self.choices = list(choices or [])

        hint = None
        if self.choices:
            hint = f"valid values for {field}: {', '.join(self.choices)}"

        super().__init__(f"invalid value {value!r} for '{field}'", hint=hint)
