"""
Disassembly Formatter
=====================

Renders an Instruction as one line of assembly text:

    <mnemonic padded to opcode_ljust> <operand>, <operand>, ...

    addiu       $sp, $sp, -0x20
    lw          $ra, 0x14($sp)
    beqz        $v0, 0x80001040
    jr          $ra

Operands are rendered by a function per OperandType. Immediates are hex
(`0x1F`, `-0x20`); the unsigned immediates of andi/ori/xori/lui are
rendered raw; shift amounts, codes and GTE option bits are decimal.
Branch targets render as the absolute address `vram + 4 + imm * 4` and
J-type targets as the address inside the current 256 MB region.

Words that resolve to no identifier render as a data directive with an
optional comment naming the table that rejected them. Known instructions
with bits set outside their fields render the same way, the comment
holding the text they would have had:

    .word       0xFC000000 # invalid CPU_NORMAL
    .word       0x02A48CA0 # add         $s1, $s5, $a0

Optional trailing operands that are zero (the code of a conditional
trap) are left out: `teq $v0, $zero` but `teq $v0, $zero, 7`.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Optional, Union

from mipsinsn import fields, registers
from mipsinsn.enums import InstrCategory, OperandType, RegisterFile
from mipsinsn.pseudos import find_pseudo

if TYPE_CHECKING:
    from mipsinsn.instruction import Instruction

ImmediateOverride = Union[int, str, None]


@dataclass(frozen=True)
class _RenderContext:
    """Per-call rendering inputs; the Instruction itself is never modified."""
    instr: "Instruction"
    immediate_override: ImmediateOverride
    vram: int

    @property
    def word(self) -> int:
        return self.instr.word

    @property
    def config(self):
        return self.instr.config


# =============================================================================
# Value Formatting
# =============================================================================

def format_hex(value: int, upper: bool = True) -> str:
    """Signed hex: 0x1F, -0x20."""
    digits = f"{abs(value):X}" if upper else f"{abs(value):x}"
    return f"-0x{digits}" if value < 0 else f"0x{digits}"


def format_address(value: int, upper: bool = True) -> str:
    """Eight-digit address: 0x80001040."""
    return f"0x{value & 0xFFFFFFFF:08X}" if upper else f"0x{value & 0xFFFFFFFF:08x}"


def _immediate_text(ctx: _RenderContext) -> str:
    override = ctx.immediate_override
    if isinstance(override, str):
        return override
    if override is not None:
        return format_hex(override, ctx.config.upper_case_imm)
    return format_hex(ctx.instr.processed_immediate(), ctx.config.upper_case_imm)


# =============================================================================
# Register Operands
# =============================================================================

def _gpr(ctx: _RenderContext, index: int) -> str:
    if ctx.instr.category is InstrCategory.RSP:
        return registers.gpr_name(index, ctx.config.rsp_gpr_abi)
    return registers.gpr_name(index, ctx.config.gpr_abi)


def _fpr(ctx: _RenderContext, index: int) -> str:
    return registers.fpr_name(index, ctx.config.fpr_abi)


def _named(register_file: RegisterFile, extract: Callable[[int], int]) -> Callable[[_RenderContext], str]:
    def render(ctx: _RenderContext) -> str:
        return registers.register_name(register_file, extract(ctx.word), named=ctx.config.named_registers)
    return render


def _numeric(register_file: RegisterFile, extract: Callable[[int], int]) -> Callable[[_RenderContext], str]:
    def render(ctx: _RenderContext) -> str:
        return registers.register_name(register_file, extract(ctx.word), named=False)
    return render


def _element_suffix(element: int) -> str:
    """
    Element selector of a vector computational op.

    0 selects the whole vector, 2-3 a quarter ("[0q]"), 4-7 a half
    ("[1h]"), 8-15 a single lane ("[5]").
    """
    if element == 0:
        return ""
    if element & 0x8:
        return f"[{element & 0x7}]"
    if element & 0x4:
        return f"[{element & 0x3}h]"
    if element & 0x2:
        return f"[{element & 0x1}q]"
    return f"[{element}]"


# =============================================================================
# CPU Operand Renderers
# =============================================================================

def _render_maybe_rd_rs(ctx: _RenderContext) -> str:
    rd = fields.rd(ctx.word)
    rs = _gpr(ctx, fields.rs(ctx.word))
    if rd == registers.GPR_RA:
        return rs
    return f"{_gpr(ctx, rd)}, {rs}"


def _render_code(ctx: _RenderContext) -> str:
    upper = fields.code_upper(ctx.word)
    lower = fields.code_lower(ctx.word)
    if lower:
        return f"{upper}, {lower}"
    return f"{upper}"


def _render_trap_code(ctx: _RenderContext) -> str:
    code = fields.code_lower(ctx.word)
    return str(code) if code else ""


def _render_label(ctx: _RenderContext) -> str:
    index = fields.instr_index(ctx.word) << 2
    if ctx.vram == 0:
        target = index | 0x80000000
    else:
        target = index | ((ctx.vram + 4) & 0xF0000000)
    return format_address(target, ctx.config.upper_case_imm)


def _render_branch_target(ctx: _RenderContext) -> str:
    override = ctx.immediate_override
    if isinstance(override, str):
        return override
    if override is None:
        override = fields.sign_extend_immediate(fields.immediate(ctx.word))
    target = ctx.vram + 4 + (override << 2)
    return format_address(target, ctx.config.upper_case_imm)


def _render_immediate_base(ctx: _RenderContext) -> str:
    return f"{_immediate_text(ctx)}({_gpr(ctx, fields.rs(ctx.word))})"


def _render_cache_op(ctx: _RenderContext) -> str:
    return f"0x{fields.rt(ctx.word):02X}"


# =============================================================================
# RSP Operand Renderers
# =============================================================================

def _vector(index: int) -> str:
    return registers.rsp_vector_name(index)


def _render_rsp_offset_rs(ctx: _RenderContext) -> str:
    override = ctx.immediate_override
    if isinstance(override, str):
        offset = override
    else:
        if override is None:
            override = fields.rsp_offset(ctx.word) << ctx.instr.descriptor.offset_shift
        offset = format_hex(override, ctx.config.upper_case_imm)
    return f"{offset}({_gpr(ctx, fields.rs(ctx.word))})"


# =============================================================================
# R5900 VU0 Operand Renderers
# =============================================================================

_FIELD_LETTERS = "xyzw"


def _vf(index: int, field: Optional[int] = None) -> str:
    name = registers.r5900_vf_name(index)
    return name if field is None else name + _FIELD_LETTERS[field]


def _vi(index: int) -> str:
    return registers.r5900_vi_name(index)


def _dest_suffix(word: int) -> str:
    """'.xyzw' style suffix of the destination field, '' when it is empty."""
    dest = fields.r5900_dest(word)
    letters = "".join(letter for bit, letter in zip((8, 4, 2, 1), _FIELD_LETTERS) if dest & bit)
    return f".{letters}" if letters else ""


# =============================================================================
# Renderer Table
# =============================================================================

_RENDERERS: Dict[OperandType, Callable[[_RenderContext], str]] = {
    OperandType.CPU_RS: lambda ctx: _gpr(ctx, fields.rs(ctx.word)),
    OperandType.CPU_RT: lambda ctx: _gpr(ctx, fields.rt(ctx.word)),
    OperandType.CPU_RD: lambda ctx: _gpr(ctx, fields.rd(ctx.word)),
    OperandType.CPU_SA: lambda ctx: str(fields.sa(ctx.word)),
    OperandType.CPU_ZERO: lambda ctx: _gpr(ctx, registers.GPR_ZERO),
    OperandType.CPU_COP0D: _named(RegisterFile.COP0, fields.cop0d),
    OperandType.CPU_FS: lambda ctx: _fpr(ctx, fields.fs(ctx.word)),
    OperandType.CPU_FT: lambda ctx: _fpr(ctx, fields.ft(ctx.word)),
    OperandType.CPU_FD: lambda ctx: _fpr(ctx, fields.fd(ctx.word)),
    OperandType.CPU_COP1CS: _named(RegisterFile.COP1_CONTROL, fields.cop1cs),
    OperandType.CPU_COP2T: _named(RegisterFile.COP2, fields.cop2t),
    OperandType.CPU_COP2D: _named(RegisterFile.COP2, fields.cop2d),
    OperandType.CPU_COP2CD: _named(RegisterFile.COP2, fields.cop2cd),
    OperandType.CPU_OP: _render_cache_op,
    OperandType.CPU_HINT: _render_cache_op,
    OperandType.CPU_CODE: _render_code,
    OperandType.CPU_CODE_LOWER: lambda ctx: str(fields.code(ctx.word)),
    OperandType.CPU_TRAP_CODE: _render_trap_code,
    OperandType.CPU_COPRAW: lambda ctx: format_hex(fields.copraw(ctx.word), ctx.config.upper_case_imm),
    OperandType.CPU_LABEL: _render_label,
    OperandType.CPU_IMMEDIATE: _immediate_text,
    OperandType.CPU_BRANCH_TARGET_LABEL: _render_branch_target,
    OperandType.CPU_IMMEDIATE_BASE: _render_immediate_base,
    OperandType.CPU_MAYBE_RD_RS: _render_maybe_rd_rs,

    OperandType.RSP_COP0D: _named(RegisterFile.RSP_COP0, fields.cop0d),
    OperandType.RSP_COP2CD: _named(RegisterFile.RSP_VECTOR_CONTROL, fields.cop2cd),
    OperandType.RSP_VS: lambda ctx: _vector(fields.rsp_vs(ctx.word)),
    OperandType.RSP_VT: lambda ctx: _vector(fields.rsp_vt(ctx.word)),
    OperandType.RSP_VD: lambda ctx: _vector(fields.rsp_vd(ctx.word)),
    OperandType.RSP_VT_ELEMENTHIGH: lambda ctx: (
        _vector(fields.rsp_vt(ctx.word)) + _element_suffix(fields.rsp_element_high(ctx.word))
    ),
    OperandType.RSP_VT_ELEMENTLOW: lambda ctx: (
        f"{_vector(fields.rsp_vt(ctx.word))}[{fields.rsp_element_low(ctx.word)}]"
    ),
    OperandType.RSP_VD_DE: lambda ctx: f"{_vector(fields.rsp_vd(ctx.word))}[{fields.rsp_de(ctx.word)}]",
    OperandType.RSP_VS_INDEX: lambda ctx: (
        f"{_vector(fields.rsp_vs(ctx.word))}[{fields.rsp_element_low(ctx.word)}]"
    ),
    OperandType.RSP_OFFSET_RS: _render_rsp_offset_rs,

    OperandType.R3000GTE_COP2T: _numeric(RegisterFile.GTE_DATA, fields.cop2t),
    OperandType.R3000GTE_COP2D: _named(RegisterFile.GTE_DATA, fields.cop2d),
    OperandType.R3000GTE_COP2CD: _numeric(RegisterFile.GTE_CONTROL, fields.cop2cd),
    OperandType.R3000GTE_SF: lambda ctx: str(fields.gte_sf(ctx.word)),
    OperandType.R3000GTE_MX: lambda ctx: str(fields.gte_mx(ctx.word)),
    OperandType.R3000GTE_V: lambda ctx: str(fields.gte_v(ctx.word)),
    OperandType.R3000GTE_CV: lambda ctx: str(fields.gte_cv(ctx.word)),
    OperandType.R3000GTE_LM: lambda ctx: str(fields.gte_lm(ctx.word)),

    OperandType.R5900_VFS: lambda ctx: _vf(fields.fs(ctx.word)),
    OperandType.R5900_VFT: lambda ctx: _vf(fields.ft(ctx.word)),
    OperandType.R5900_VFD: lambda ctx: _vf(fields.fd(ctx.word)),
    OperandType.R5900_VFS_FSF: lambda ctx: _vf(fields.fs(ctx.word), fields.r5900_fsf(ctx.word)),
    OperandType.R5900_VFT_FTF: lambda ctx: _vf(fields.ft(ctx.word), fields.r5900_ftf(ctx.word)),
    OperandType.R5900_VFT_BC: lambda ctx: _vf(fields.ft(ctx.word), fields.r5900_bc(ctx.word)),
    OperandType.R5900_VIS: lambda ctx: _vi(fields.fs(ctx.word)),
    OperandType.R5900_VIT: lambda ctx: _vi(fields.ft(ctx.word)),
    OperandType.R5900_VID: lambda ctx: _vi(fields.fd(ctx.word)),
    OperandType.R5900_VIS_PARENTHESIS: lambda ctx: f"({_vi(fields.fs(ctx.word))})",
    OperandType.R5900_VIS_POSTINCR: lambda ctx: f"({_vi(fields.fs(ctx.word))}++)",
    OperandType.R5900_VIS_PREDECR: lambda ctx: f"(--{_vi(fields.fs(ctx.word))})",
    OperandType.R5900_VIT_POSTINCR: lambda ctx: f"({_vi(fields.ft(ctx.word))}++)",
    OperandType.R5900_VIT_PREDECR: lambda ctx: f"(--{_vi(fields.ft(ctx.word))})",
    OperandType.R5900_ACC: lambda ctx: "$ACC",
    OperandType.R5900_Q: lambda ctx: "$Q",
    OperandType.R5900_I: lambda ctx: "$I",
    OperandType.R5900_R: lambda ctx: "$R",
    OperandType.R5900_IMM5: lambda ctx: format_hex(fields.r5900_imm5(ctx.word), ctx.config.upper_case_imm),
    # vcallms takes a byte address, encoded in units of 8
    OperandType.R5900_IMM15: lambda ctx: format_hex(fields.r5900_imm15(ctx.word) << 3, ctx.config.upper_case_imm),
}


def render_operand(
    instr: "Instruction",
    operand: OperandType,
    immediate_override: ImmediateOverride = None,
    vram_override: Optional[int] = None,
) -> str:
    """Render a single operand slot of an instruction."""
    vram = instr.vram if vram_override is None else vram_override & 0xFFFFFFFF
    return _RENDERERS[operand](_RenderContext(instr, immediate_override, vram))


# =============================================================================
# Line Layout
# =============================================================================

def disassemble(
    instr: "Instruction",
    immediate_override: ImmediateOverride = None,
    vram_override: Optional[int] = None,
    extra_ljust: int = 0,
) -> str:
    """
    Render an instruction as a single assembly line.

    Args:
        instr: The instruction to render
        immediate_override: Integer replacing the immediate value, or text
                            inserted verbatim in its place
        vram_override: Address used for branch and jump targets
        extra_ljust: Additional mnemonic padding

    Returns:
        The assembly text; never empty
    """
    config = instr.config
    width = config.opcode_ljust + extra_ljust
    descriptor = instr.descriptor
    directive = f"{'.word'.ljust(width)} {format_address(instr.word, config.upper_case_imm)}"

    if not descriptor.is_valid:
        if config.unknown_instr_comment:
            directive += f" # invalid {descriptor.id_type}"
        return directive

    text = _render_line(instr, immediate_override, vram_override, width)
    if instr.reserved_bits():
        if config.unknown_instr_comment:
            directive += f" # {text}"
        return directive
    return text


def _render_line(
    instr: "Instruction",
    immediate_override: ImmediateOverride,
    vram_override: Optional[int],
    width: int,
) -> str:
    descriptor = instr.descriptor
    name = descriptor.name
    operands = descriptor.operands
    if (rule := find_pseudo(descriptor, instr.word, instr.config)) is not None:
        name = rule.name
        operands = rule.operands
    if descriptor.dest_suffix:
        name += _dest_suffix(instr.word)

    vram = instr.vram if vram_override is None else vram_override & 0xFFFFFFFF
    ctx = _RenderContext(instr, immediate_override, vram)
    rendered = ", ".join(text for text in (_RENDERERS[operand](ctx) for operand in operands) if text)
    if not rendered:
        return name
    return f"{name.ljust(width)} {rendered}"
