"""
Runtime settings for berryargs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

_TRUE_WORDS = ('1', 'true', 't', 'yes', 'y', 'on')
_FALSE_WORDS = ('0', 'false', 'f', 'no', 'n', 'off')


def _env_flag(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    lv = raw.strip().lower()
    if lv in _TRUE_WORDS:
        return True
    if lv in _FALSE_WORDS:
        return False
    raise ValueError(f"Invalid boolean value for {key}: {raw!r}")


@dataclass
class BerrySettings:
    """Settings consumed by the schema builder and the argument runtime.

    Attributes:
        strict_coercion: Raise ``CoercionError`` when a raw value does not fit
            the declared type. When False the raw value is kept and a warning
            is logged.
        log_prepare_hooks: Emit a DEBUG record for every prepare hook call.
    """
    strict_coercion: bool = True
    log_prepare_hooks: bool = False

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        *,
        prefix: str = "BERRYARGS_",
    ) -> "BerrySettings":
        """Build settings from the environment, loading a .env file first.

        Variables already present in the environment take precedence over the
        .env file.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)
        return cls(
            strict_coercion=_env_flag(f"{prefix}STRICT_COERCION", cls.strict_coercion),
            log_prepare_hooks=_env_flag(f"{prefix}LOG_PREPARE_HOOKS", cls.log_prepare_hooks),
        )
