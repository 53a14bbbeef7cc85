"""
Pseudo-Instructions
===================

Simplified renderings of specific encodings, enumerated per base
mnemonic rather than inferred:

    sll   $zero, $zero, 0     -> nop
    beq   $zero, $zero, L     -> b     L
    beq   $a0, $zero, L       -> beqz  $a0, L   (never for $zero, $zero)
    bgezal $zero, L           -> bal   L
    or    $a0, $a1, $zero     -> move  $a0, $a1
    nor   $a0, $a1, $zero     -> not   $a0, $a1
    subu  $a0, $zero, $a1     -> negu  $a0, $a1

Each rule names the Config toggle that gates it (nop is gated only by
the master `enable_pseudos` switch). Rules for the same mnemonic are
tried in order; the first match wins.

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from mipsinsn import fields
from mipsinsn.enums import OperandType
from mipsinsn.opcodes.descriptor import InstrDescriptor

RS = OperandType.CPU_RS
RT = OperandType.CPU_RT
RD = OperandType.CPU_RD
BRANCH = OperandType.CPU_BRANCH_TARGET_LABEL


@dataclass(frozen=True)
class PseudoRule:
    """
    One simplification.

    Attributes:
        name: Pseudo mnemonic
        operands: Operand slots rendered instead of the base ones
        toggle: Config attribute that enables the rule (None: always on)
        matches: Predicate over the raw word
    """
    name: str
    operands: Tuple[OperandType, ...]
    toggle: Optional[str]
    matches: Callable[[int], bool]


def _rt_zero(word: int) -> bool:
    return fields.rt(word) == 0


def _rs_zero(word: int) -> bool:
    return fields.rs(word) == 0


def _rs_rt_zero(word: int) -> bool:
    return fields.rs(word) == 0 and fields.rt(word) == 0


def _rt_zero_rs_nonzero(word: int) -> bool:
    return fields.rt(word) == 0 and fields.rs(word) != 0


_MOVE = PseudoRule("move", (RD, RS), "pseudo_move", _rt_zero)

PSEUDO_RULES: Dict[str, Tuple[PseudoRule, ...]] = {
    "sll": (PseudoRule("nop", (), None, lambda word: word == 0),),
    "beq": (
        PseudoRule("b", (BRANCH,), "pseudo_b", _rs_rt_zero),
        PseudoRule("beqz", (RS, BRANCH), "pseudo_beqz", _rt_zero_rs_nonzero),
    ),
    "bne": (PseudoRule("bnez", (RS, BRANCH), "pseudo_bnez", _rt_zero),),
    "beql": (PseudoRule("beqzl", (RS, BRANCH), "pseudo_beqz", _rt_zero),),
    "bnel": (PseudoRule("bnezl", (RS, BRANCH), "pseudo_bnez", _rt_zero),),
    "bgezal": (PseudoRule("bal", (BRANCH,), "pseudo_bal", _rs_zero),),
    "or": (_MOVE,),
    "addu": (_MOVE,),
    "daddu": (_MOVE,),
    "nor": (PseudoRule("not", (RD, RS), "pseudo_not", _rt_zero),),
    "sub": (PseudoRule("neg", (RD, RT), "pseudo_negu", _rs_zero),),
    "subu": (PseudoRule("negu", (RD, RT), "pseudo_negu", _rs_zero),),
    "dsub": (PseudoRule("dneg", (RD, RT), "pseudo_negu", _rs_zero),),
    "dsubu": (PseudoRule("dnegu", (RD, RT), "pseudo_negu", _rs_zero),),
}


def find_pseudo(descriptor: InstrDescriptor, word: int, config) -> Optional[PseudoRule]:
    """
    Return the enabled rule that simplifies `word`, if any.

    Only descriptors flagged `is_pseudo_candidate` are considered, so a
    category whose table does not mark e.g. `dsubu` never matches.
    """
    if not config.enable_pseudos or not descriptor.is_pseudo_candidate:
        return None
    for rule in PSEUDO_RULES.get(descriptor.name, ()):
        if rule.toggle is not None and not getattr(config, rule.toggle):
            continue
        if rule.matches(word):
            return rule
    return None
