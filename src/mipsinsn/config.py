"""
mipsinsn Configuration
======================

Process-wide settings consulted by the decoder and the formatter:
register naming ABI, pseudo-instruction toggles, layout options and the
default instruction category.

Configuration can come from:
- Default values (defined here)
- Environment variables (`Config.from_env()`)
- An explicit Config handle passed to `decode()`

The process-wide instance is created lazily, exactly once, by
`get_config()`. Reads need no locking; `set_config()` replaces the
instance wholesale and is meant for start-up code.

Usage:
    from mipsinsn.config import get_config, set_config

    set_config(get_config().replace(gpr_abi="n64", enable_pseudos=False))

Copyright (c) 2025-2026 mipsinsn Contributors
"""

from dataclasses import dataclass, fields
from dataclasses import replace as dataclass_replace
from typing import Optional, Union
import logging
import os
import threading

from mipsinsn.enums import Abi, InstrCategory
from mipsinsn.errors import ConfigError, UnsupportedCategoryError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class Config:
    """
    Decoder and formatter settings.

    Attributes:
        gpr_abi: Naming of general purpose registers (default: O32)
        rsp_gpr_abi: Naming of RSP scalar registers (default: NUMERIC)
        fpr_abi: Naming of floating point registers (default: NUMERIC)
        named_registers: Symbolic names for COP0, COP1 control, GTE and
            RSP registers instead of `$N` (default: True)
        enable_pseudos: Master switch for pseudo-instructions (default: True)
        pseudo_beqz: beqz/beqzl (default: True)
        pseudo_bnez: bnez/bnezl (default: True)
        pseudo_b: b (default: True)
        pseudo_bal: bal (default: True)
        pseudo_move: move (default: True)
        pseudo_not: not (default: True)
        pseudo_negu: neg/negu/dneg/dnegu (default: True)
        treat_j_as_unconditional_branch: `j` counts as an unconditional
            branch (default: True)
        opcode_ljust: Mnemonic column width (default: 11)
        unknown_instr_comment: Comment `.word` placeholders (default: True)
        upper_case_imm: Upper case hex digits (default: True)
        default_category: Category used when none is given (default: cpu)
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTER NAMING
    # ═══════════════════════════════════════════════════════════════════════════

    gpr_abi: Abi = Abi.O32
    rsp_gpr_abi: Abi = Abi.NUMERIC
    fpr_abi: Abi = Abi.NUMERIC
    named_registers: bool = True

    # ═══════════════════════════════════════════════════════════════════════════
    # PSEUDO-INSTRUCTIONS
    # ═══════════════════════════════════════════════════════════════════════════

    enable_pseudos: bool = True
    pseudo_beqz: bool = True
    pseudo_bnez: bool = True
    pseudo_b: bool = True
    pseudo_bal: bool = True
    pseudo_move: bool = True
    pseudo_not: bool = True
    pseudo_negu: bool = True

    # ═══════════════════════════════════════════════════════════════════════════
    # CLASSIFICATION AND LAYOUT
    # ═══════════════════════════════════════════════════════════════════════════

    treat_j_as_unconditional_branch: bool = True
    opcode_ljust: int = 11
    unknown_instr_comment: bool = True
    upper_case_imm: bool = True
    default_category: InstrCategory = InstrCategory.CPU

    def __post_init__(self) -> None:
        self.gpr_abi = Abi.parse(self.gpr_abi)
        self.rsp_gpr_abi = Abi.parse(self.rsp_gpr_abi)
        self.fpr_abi = Abi.parse(self.fpr_abi)
        try:
            self.default_category = InstrCategory.parse(self.default_category)
        except UnsupportedCategoryError as exc:
            raise ConfigError("default_category", self.default_category, exc.supported) from exc
        if self.opcode_ljust < 0:
            raise ConfigError("opcode_ljust", self.opcode_ljust)

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config from environment variables.

        Environment variables (all optional):
            MIPSINSN_GPR_ABI: GPR naming ABI ("numeric", "o32", "n32", "n64")
            MIPSINSN_FPR_ABI: FPR naming ABI
            MIPSINSN_PSEUDOS: Master pseudo switch ("0"/"1", "false"/"true", ...)
            MIPSINSN_CATEGORY: Default category ("cpu", "rsp", "r3000gte", "r5900")

        Invalid values are logged and ignored.
        """
        config = cls()

        if abi := os.environ.get("MIPSINSN_GPR_ABI"):
            try:
                config.gpr_abi = Abi.parse(abi)
            except ConfigError:
                logger.warning(f"Ignoring invalid MIPSINSN_GPR_ABI={abi!r}")

        if abi := os.environ.get("MIPSINSN_FPR_ABI"):
            try:
                config.fpr_abi = Abi.parse(abi)
            except ConfigError:
                logger.warning(f"Ignoring invalid MIPSINSN_FPR_ABI={abi!r}")

        if pseudos := os.environ.get("MIPSINSN_PSEUDOS"):
            flag = pseudos.strip().lower()
            if flag in _TRUE_VALUES:
                config.enable_pseudos = True
            elif flag in _FALSE_VALUES:
                config.enable_pseudos = False
            else:
                logger.warning(f"Ignoring invalid MIPSINSN_PSEUDOS={pseudos!r}")

        if category := os.environ.get("MIPSINSN_CATEGORY"):
            try:
                config.default_category = InstrCategory.parse(category)
            except UnsupportedCategoryError:
                logger.warning(f"Ignoring invalid MIPSINSN_CATEGORY={category!r}")

        return config

    def replace(self, **changes) -> "Config":
        """Return a copy with the given fields changed (values are validated)."""
        return dataclass_replace(self, **changes)

    # ═══════════════════════════════════════════════════════════════════════════
    # DIAGNOSTICS
    # ═══════════════════════════════════════════════════════════════════════════

    def describe(self) -> str:
        """Stable, human-readable dump of every setting."""
        lines = ["mipsinsn configuration:"]
        for f in fields(self):
            value = getattr(self, f.name)
            lines.append(f"  {f.name} = {value}")
        return "\n".join(lines)

    @classmethod
    def info(cls) -> str:
        """Dump of the active process-wide configuration."""
        return get_config().describe()


# =============================================================================
# Process-wide Instance
# =============================================================================

_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """
    Return the process-wide Config, creating it from the environment on
    first use.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = Config.from_env()
                logger.debug("Initialized process-wide configuration")
    return _config


def set_config(config: Union[Config, None]) -> None:
    """
    Replace the process-wide Config.

    Passing None drops the current instance so the next `get_config()`
    re-reads the environment.
    """
    global _config
    with _config_lock:
        _config = config
    logger.debug(f"Process-wide configuration replaced: {config!r}")
