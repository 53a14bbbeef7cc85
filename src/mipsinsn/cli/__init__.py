"""
mipsinsn Command-Line Interface
===============================

This package provides the command-line tool of mipsinsn:

- **mipsdisasm**: MIPS binary disassembler

The tool is a Click-based CLI application with built-in help and
consistent exit codes (see mipsinsn.cli.errors).
"""

__all__ = ["mipsdisasm"]
