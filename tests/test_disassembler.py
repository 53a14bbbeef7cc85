"""
Unit Tests for the Batch Disassembler and the mipsdisasm CLI
============================================================

Test coverage includes:
- Byte order handling and word-by-word listing records
- Trailing bytes, count and byte limits
- Symbol annotation of branch and jump targets
- Listing text and dictionary export
- The mipsdisasm command-line tool and its exit codes

Copyright (c) 2025-2026 mipsinsn Contributors
"""

import pytest

from mipsinsn import DisassembledInstruction, MipsDisassembler
from mipsinsn.config import Config
from mipsinsn.enums import InstrCategory
from mipsinsn.errors import ConfigError, UnsupportedCategoryError

# addiu $sp, $sp, -0x20 / sw $ra, 0x14($sp) / jr $ra / nop
PROLOGUE = bytes.fromhex("27BDFFE0" "AFBF0014" "03E00008" "00000000")


def asm(mnemonic: str, operands: str = "") -> str:
    if not operands:
        return mnemonic
    return f"{mnemonic:<11} {operands}"


# =============================================================================
# MipsDisassembler Tests
# =============================================================================

class TestMipsDisassembler:
    """Tests for buffer disassembly."""

    def setup_method(self):
        """Create disassembler instance for each test."""
        self.disasm = MipsDisassembler()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def test_defaults(self):
        """Test default category and byte order."""
        assert self.disasm.category == InstrCategory.CPU
        assert self.disasm.endian == "big"

    def test_category_tag(self):
        """Test selecting a category by tag."""
        assert MipsDisassembler(category="rsp").category == InstrCategory.RSP

    def test_unsupported_category(self):
        """Test that an unsupported category is rejected."""
        with pytest.raises(UnsupportedCategoryError):
            MipsDisassembler(category="r4000allegrex")

    def test_invalid_endian(self):
        """Test that an unknown byte order is rejected."""
        with pytest.raises(ConfigError):
            MipsDisassembler(endian="middle")

    # -------------------------------------------------------------------------
    # Single Words
    # -------------------------------------------------------------------------

    def test_disassemble_one_big_endian(self):
        """Test a big-endian word."""
        record = self.disasm.disassemble_one(bytes.fromhex("27BDFFE0"), address=0x80000400)

        assert record.address == 0x80000400
        assert record.word == 0x27BDFFE0
        assert record.size == 4
        assert record.mnemonic == "addiu"
        assert record.text == asm("addiu", "$sp, $sp, -0x20")

    def test_disassemble_one_little_endian(self):
        """Test a little-endian word."""
        disasm = MipsDisassembler(category="r3000gte", endian="little")
        record = disasm.disassemble_one(bytes.fromhex("E0FFBD27"))

        assert record.word == 0x27BDFFE0
        assert record.instruction.identifier == "r3000gte_addiu"

    def test_disassemble_one_offset(self):
        """Test decoding at an offset into the buffer."""
        record = self.disasm.disassemble_one(PROLOGUE, address=0x80000408, offset=8)
        assert record.text == asm("jr", "$ra")

    def test_offset_beyond_data(self):
        """Test that an offset past the end raises ValueError."""
        with pytest.raises(ValueError):
            self.disasm.disassemble_one(PROLOGUE, offset=16)

    def test_incomplete_word(self):
        """Test that trailing bytes become a .byte record."""
        record = self.disasm.disassemble_one(bytes([0x12, 0x34]), address=0x100)

        assert record.instruction is None
        assert record.mnemonic == ".byte"
        assert record.size == 2
        assert record.text == asm(".byte", "0x12, 0x34")
        assert record.comment == "incomplete word"

    def test_invalid_word(self):
        """Test that invalid words produce .word records."""
        record = self.disasm.disassemble_one(bytes.fromhex("EC000000"))

        assert record.mnemonic == ".word"
        assert record.text == asm(".word", "0xEC000000 # invalid CPU_INVALID")

    # -------------------------------------------------------------------------
    # Buffers
    # -------------------------------------------------------------------------

    def test_disassemble_multiple(self):
        """Test a short function."""
        records = self.disasm.disassemble(PROLOGUE, start_address=0x80000400)

        assert [r.mnemonic for r in records] == ["addiu", "sw", "jr", "sll"]
        assert [r.address for r in records] == [0x80000400, 0x80000404, 0x80000408, 0x8000040C]
        assert records[3].text == "nop"

    def test_trailing_bytes(self):
        """Test a buffer whose length is not a multiple of four."""
        records = self.disasm.disassemble(PROLOGUE[:4] + bytes([0xAA]))

        assert len(records) == 2
        assert records[1].mnemonic == ".byte"
        assert records[1].address == 4

    def test_count_limit(self):
        """Test the record count limit."""
        assert len(self.disasm.disassemble(PROLOGUE, count=2)) == 2

    def test_max_bytes(self):
        """Test the byte limit."""
        assert len(self.disasm.disassemble(PROLOGUE, max_bytes=8)) == 2

    def test_empty_data(self):
        """Test that an empty buffer yields no records."""
        assert self.disasm.disassemble(b"") == []

    def test_invalid_words_do_not_stop_listing(self):
        """Test that invalid words are listed and decoding continues."""
        data = bytes.fromhex("EC000000" "03E00008")
        records = self.disasm.disassemble(data)

        assert [r.mnemonic for r in records] == [".word", "jr"]

    def test_disassemble_words(self):
        """Test disassembly of a word sequence."""
        records = self.disasm.disassemble_words([0x27BDFFE0, 0x03E00008], start_address=0x80000000)

        assert records[0].raw_bytes == bytes.fromhex("27BDFFE0")
        assert records[1].address == 0x80000004
        assert records[1].text == asm("jr", "$ra")

    def test_disassemble_words_little_endian(self):
        """Test that raw bytes follow the configured byte order."""
        disasm = MipsDisassembler(endian="little")
        records = disasm.disassemble_words([0x27BDFFE0])
        assert records[0].raw_bytes == bytes.fromhex("E0FFBD27")

    def test_explicit_config(self):
        """Test that the configuration is applied to every record."""
        disasm = MipsDisassembler(config=Config(gpr_abi="numeric", enable_pseudos=False))
        records = disasm.disassemble(PROLOGUE)

        assert records[0].text == asm("addiu", "$29, $29, -0x20")
        assert records[3].text == asm("sll", "$0, $0, 0")

    def test_rsp_listing(self):
        """Test an RSP buffer."""
        disasm = MipsDisassembler(category="rsp")
        records = disasm.disassemble(bytes.fromhex("4A031050" "C8812002"), start_address=0x04001000)

        assert records[0].text == asm("vadd", "$v1, $v2, $v3")
        assert records[1].text == asm("lqv", "$v1[0], 0x20($4)")

    # -------------------------------------------------------------------------
    # Symbols
    # -------------------------------------------------------------------------

    def test_symbol_jal(self):
        """Test annotation of a call target."""
        self.disasm.add_symbol(0x80001000, "main")
        record = self.disasm.disassemble_one(bytes.fromhex("0C000400"), address=0x80000400)

        assert record.comment == "main"
        assert "# main" in str(record)

    def test_symbol_branch(self):
        """Test annotation of a branch target."""
        disasm = MipsDisassembler(symbol_table={0x80000018: "loop"})
        record = disasm.disassemble_one(bytes.fromhex("10000005"), address=0x80000000)

        assert record.comment == "loop"

    def test_symbol_not_used_for_register_jump(self):
        """Test that register jumps are not annotated."""
        self.disasm.add_symbols({0x0: "zero", 0xC: "after"})
        record = self.disasm.disassemble_one(bytes.fromhex("03E00008"), address=0x4)

        assert record.comment == ""

    def test_symbol_table_property(self):
        """Test the symbol table accessor."""
        self.disasm.add_symbols({0x80001000: "main", 0x80002000: "loop"})
        assert self.disasm.symbol_table == {0x80001000: "main", 0x80002000: "loop"}

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def test_str_format(self):
        """Test the listing line layout."""
        record = self.disasm.disassemble_one(bytes.fromhex("03E00008"), address=0x80000408)
        assert str(record) == "80000408: 03 E0 00 08  " + asm("jr", "$ra")

    def test_disassemble_to_text(self):
        """Test the multi-line listing."""
        text = self.disasm.disassemble_to_text(PROLOGUE, start_address=0x80000400)
        lines = text.split("\n")

        assert len(lines) == 4
        assert lines[0].startswith("80000400: 27 BD FF E0")
        assert lines[3].endswith("nop")

    def test_to_dict(self):
        """Test dictionary export."""
        record = self.disasm.disassemble_one(bytes.fromhex("8FBF0014"), address=0x80000404)
        d = record.to_dict()

        assert d["address"] == "0x80000404"
        assert d["address_int"] == 0x80000404
        assert d["word"] == "0x8FBF0014"
        assert d["mnemonic"] == "lw"
        assert d["identifier"] == "cpu_lw"
        assert d["size"] == 4
        assert d["bytes"] == ["0x8F", "0xBF", "0x00", "0x14"]

    def test_to_dict_trailing_bytes(self):
        """Test dictionary export of a .byte record."""
        record = self.disasm.disassemble_one(bytes([0xAA]))
        assert record.to_dict()["identifier"] is None

    def test_record_is_dataclass(self):
        """Test direct construction of a record."""
        record = DisassembledInstruction(0x10, 0x1, None, ".byte", b"\x01")
        assert record.mnemonic == ".byte"
        assert record.comment == ""


# =============================================================================
# CLI Tests
# =============================================================================

class TestDisassemblerCLI:
    """Tests for the mipsdisasm CLI tool."""

    def test_cli_help(self):
        """Test CLI help output."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Disassemble MIPS" in result.output

    def test_cli_version(self):
        """Test CLI version output."""
        from click.testing import CliRunner
        from mipsinsn import __version__
        from mipsinsn.cli.mipsdisasm import main

        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_basic_disassembly(self, tmp_path):
        """Test basic disassembly."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file)])

        assert result.exit_code == 0
        assert "# Disassembly of test.bin" in result.output
        assert "# Category: cpu (big endian)" in result.output
        assert "addiu" in result.output
        assert "jr" in result.output
        assert "nop" in result.output

    def test_cli_with_address(self, tmp_path):
        """Test disassembly with base address."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(bytes.fromhex("0C000400"))

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--address", "0x80000400"])

        assert result.exit_code == 0
        assert "80000400:" in result.output
        assert "0x80001000" in result.output

    def test_cli_little_endian_category(self, tmp_path):
        """Test byte order and category options."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "gte.bin"
        test_file.write_bytes(bytes.fromhex("0100184A"))  # rtps

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--category", "r3000gte", "--endian", "little"])

        assert result.exit_code == 0
        assert "rtps" in result.output
        assert "# Category: r3000gte (little endian)" in result.output

    def test_cli_abi(self, tmp_path):
        """Test numeric register names."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE[:4])

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--abi", "numeric"])

        assert result.exit_code == 0
        assert "$29, $29, -0x20" in result.output

    def test_cli_no_pseudos(self, tmp_path):
        """Test disabling pseudo-instructions."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(bytes(4))

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--no-pseudos"])

        assert result.exit_code == 0
        assert "sll" in result.output
        assert "nop" not in result.output

    def test_cli_no_bytes(self, tmp_path):
        """Test omitting raw bytes."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE[8:12])

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--no-bytes"])

        assert result.exit_code == 0
        assert "00000000: " + asm("jr", "$ra") in result.output
        assert "03 E0 00 08" not in result.output

    def test_cli_hex_dump(self, tmp_path):
        """Test the hex dump section."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--hex"])

        assert result.exit_code == 0
        assert "# Hex dump:" in result.output
        assert "27 BD FF E0 AF BF 00 14" in result.output

    def test_cli_count(self, tmp_path):
        """Test the instruction count limit."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "-c", "1", "--no-bytes"])

        assert result.exit_code == 0
        assert "addiu" in result.output
        assert "jr" not in result.output

    def test_cli_output_file(self, tmp_path):
        """Test writing the listing to a file."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)
        out_file = tmp_path / "listing.s"

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "-o", str(out_file)])

        assert result.exit_code == 0
        assert out_file.exists()
        assert "addiu" in out_file.read_text()

    def test_cli_verbose(self, tmp_path):
        """Test verbose diagnostics."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(bytes.fromhex("EC000000"))

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "-v"])

        assert result.exit_code == 0
        assert "(1 invalid)" in result.output

    def test_cli_invalid_address(self, tmp_path):
        """Test that a malformed address is an argument error."""
        from click.testing import CliRunner
        from mipsinsn.cli.errors import ExitCode
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--address", "0xZZ"])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Invalid address" in result.output

    def test_cli_address_out_of_range(self, tmp_path):
        """Test that addresses above 32 bits are rejected."""
        from click.testing import CliRunner
        from mipsinsn.cli.errors import ExitCode
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--address", "0x100000000"])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_cli_empty_file(self, tmp_path):
        """Test that an empty input file is rejected."""
        from click.testing import CliRunner
        from mipsinsn.cli.errors import ExitCode
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "empty.bin"
        test_file.write_bytes(b"")

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "is empty" in result.output

    def test_cli_missing_file(self, tmp_path):
        """Test that a missing input file is a usage error."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.bin")])

        assert result.exit_code == 2

    def test_cli_unknown_category(self, tmp_path):
        """Test that an unknown category is refused by option parsing."""
        from click.testing import CliRunner
        from mipsinsn.cli.mipsdisasm import main

        test_file = tmp_path / "test.bin"
        test_file.write_bytes(PROLOGUE)

        runner = CliRunner()
        result = runner.invoke(main, [str(test_file), "--category", "r4000allegrex"])

        assert result.exit_code == 2


class TestCliErrorHandling:
    """Tests for the shared CLI exception handler."""

    def test_mips_error_exit_code(self):
        """Test that package errors exit with DISASSEMBLY_ERROR."""
        from mipsinsn.cli.errors import ExitCode, handle_cli_exception

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(UnsupportedCategoryError("r4000allegrex"))

        assert exc_info.value.code == ExitCode.DISASSEMBLY_ERROR

    def test_file_error_exit_code(self):
        """Test that file errors exit with INVALID_ARGS."""
        from mipsinsn.cli.errors import ExitCode, handle_cli_exception

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(FileNotFoundError("missing.bin"))

        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_internal_error_exit_code(self):
        """Test that unexpected errors exit with INTERNAL_ERROR."""
        from mipsinsn.cli.errors import ExitCode, handle_cli_exception

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))

        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
