"""
mipsdisasm - MIPS Disassembler Command-Line Interface
=====================================================

This module implements the command-line interface of the mipsinsn
disassembler. It disassembles raw binary files (no ELF or executable
headers) word by word for any supported instruction category.

Usage Examples
--------------
Disassemble a raw code dump:
    $ mipsdisasm code.bin

With base address:
    $ mipsdisasm code.bin --address 0x80000400

Little-endian PlayStation code:
    $ mipsdisasm overlay.bin --category r3000gte --endian little

N64 RSP microcode without pseudo-instructions:
    $ mipsdisasm ucode.bin --category rsp --no-pseudos

Numeric register names:
    $ mipsdisasm code.bin --abi numeric

Output to file:
    $ mipsdisasm code.bin -o listing.s

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mipsinsn import __version__
from mipsinsn.cli.errors import ExitCode, handle_cli_exception
from mipsinsn.config import get_config
from mipsinsn.disassembler import MipsDisassembler
from mipsinsn.enums import Abi, InstrCategory


def parse_address(value: str) -> int:
    """
    Parse a base address given as hex (0x prefix) or decimal.

    Raises:
        click.BadParameter: If the value is not a valid 32-bit address
    """
    try:
        if value.lower().startswith("0x"):
            address = int(value, 16)
        else:
            address = int(value)
    except ValueError:
        raise click.BadParameter(f"Invalid address '{value}'", param_hint="--address")

    if not 0 <= address <= 0xFFFFFFFF:
        raise click.BadParameter(
            "Address must be 0-4294967295 (0x00000000-0xFFFFFFFF)", param_hint="--address"
        )
    return address


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default="0",
    help="Base address for disassembly (hex with 0x prefix or decimal). Default: 0",
)
@click.option(
    "-c", "--count",
    type=int,
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "--category",
    type=click.Choice([c.value for c in InstrCategory], case_sensitive=False),
    default=None,
    help="Instruction category (default: cpu, or MIPSINSN_CATEGORY)",
)
@click.option(
    "--endian",
    type=click.Choice(["big", "little"]),
    default="big",
    help="Byte order of the input file (default: big)",
)
@click.option(
    "--abi",
    type=click.Choice([a.value for a in Abi], case_sensitive=False),
    default=None,
    help="General purpose register naming, RSP scalar registers included (default: o32, numeric for rsp)",
)
@click.option(
    "--no-pseudos",
    is_flag=True,
    help="Disable pseudo-instructions (nop, move, b, beqz, ...)",
)
@click.option(
    "--hex",
    "show_hex",
    is_flag=True,
    help="Include hex dump before disassembly",
)
@click.option(
    "--no-bytes",
    is_flag=True,
    help="Omit raw bytes from output (show only address and instruction)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (enables debug logging)",
)
@click.version_option(version=__version__, prog_name="mipsdisasm")
def main(
    input_file: Path,
    output: Optional[Path],
    address: str,
    count: Optional[int],
    category: Optional[str],
    endian: str,
    abi: Optional[str],
    no_pseudos: bool,
    show_hex: bool,
    no_bytes: bool,
    verbose: bool,
) -> None:
    """
    Disassemble MIPS machine code.

    INPUT_FILE is the raw binary file to disassemble.

    Examples:

        # Disassemble code loaded at 0x80000400
        mipsdisasm code.bin --address 0x80000400

        # First 20 instructions of RSP microcode
        mipsdisasm ucode.bin --category rsp --count 20 -o listing.s
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        base_address = parse_address(address)

        data = input_file.read_bytes()
        if len(data) == 0:
            click.echo(f"Error: {input_file} is empty", err=True)
            sys.exit(ExitCode.INVALID_ARGS)

        config = get_config()
        if abi is not None:
            config = config.replace(gpr_abi=abi, rsp_gpr_abi=abi)
        if no_pseudos:
            config = config.replace(enable_pseudos=False)

        disasm = MipsDisassembler(category=category, config=config, endian=endian)

        if verbose:
            click.echo(f"Input file: {input_file} ({len(data)} bytes)", err=True)
            click.echo(f"Base address: 0x{base_address:08X}", err=True)
            click.echo(config.describe(), err=True)

        output_lines = []

        # Header
        output_lines.append(f"# Disassembly of {input_file.name}")
        output_lines.append(f"# Size: {len(data)} bytes")
        output_lines.append(f"# Base address: 0x{base_address:08X}")
        output_lines.append(f"# Category: {disasm.category} ({endian} endian)")
        output_lines.append("")

        # Hex dump (if requested)
        if show_hex:
            output_lines.append("# Hex dump:")
            output_lines.append("# " + "-" * 60)
            for i in range(0, len(data), 16):
                chunk = data[i:i + 16]
                hex_str = " ".join(f"{b:02X}" for b in chunk)
                output_lines.append(f"# {base_address + i:08X}: {hex_str}")
            output_lines.append("# " + "-" * 60)
            output_lines.append("")

        records = disasm.disassemble(data, start_address=base_address, count=count)

        for record in records:
            if no_bytes:
                line = f"{record.address:08X}: {record.text}"
                if record.comment:
                    line += f"  # {record.comment}"
                output_lines.append(line)
            else:
                output_lines.append(str(record))

        result = "\n".join(output_lines) + "\n"

        if output:
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Output written to: {output}", err=True)
        else:
            click.echo(result, nl=False)

        if verbose:
            invalid = sum(1 for r in records if r.instruction is not None and not r.instruction.is_valid())
            click.echo(f"Instructions disassembled: {len(records)} ({invalid} invalid)", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
