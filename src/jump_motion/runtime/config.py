"""Static settings supplied to the jump controller at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "JUMP_MOTION_"

NON_CHARACTER = "\0"
DEFAULT_TRIGGER_KEY = "ctrl+j"
DEFAULT_DISABLE_COMMAND = "Vim.SetDisabled"
DEFAULT_ENABLE_COMMAND = "Vim.SetEnabled"
DEFAULT_NEUTRALIZE_KEY = "ESC"
DEFAULT_LABEL_ALPHABET = "asdghklqwertyuiopzxcvbnmfj"


@dataclass(frozen=True, slots=True)
class JumpConfig:
    """Keybinding, competing-mode command names and label settings."""

    trigger_key: str = DEFAULT_TRIGGER_KEY
    disable_command: str = DEFAULT_DISABLE_COMMAND
    enable_command: str = DEFAULT_ENABLE_COMMAND
    neutralize_key: str = DEFAULT_NEUTRALIZE_KEY
    non_character: str = NON_CHARACTER
    label_alphabet: str = DEFAULT_LABEL_ALPHABET

    def __post_init__(self) -> None:
        for name in ("trigger_key", "disable_command", "enable_command"):
            if not getattr(self, name).strip():
                raise ValueError(f"{name} cannot be empty")
        if len(self.non_character) != 1:
            raise ValueError("non_character must be a single character")
        alphabet = self.label_alphabet
        if len(alphabet) < 2:
            raise ValueError("label_alphabet needs at least two characters")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("label_alphabet contains duplicate characters")
        if self.non_character in alphabet or not alphabet.isprintable():
            raise ValueError("label_alphabet must hold printable characters only")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JumpConfig":
        env = os.environ if environ is None else environ

        def _get(name: str, default: str) -> str:
            return env.get(f"{ENV_PREFIX}{name}", default)

        return cls(
            trigger_key=_get("TRIGGER_KEY", DEFAULT_TRIGGER_KEY),
            disable_command=_get("DISABLE_COMMAND", DEFAULT_DISABLE_COMMAND),
            enable_command=_get("ENABLE_COMMAND", DEFAULT_ENABLE_COMMAND),
            label_alphabet=_get("LABEL_ALPHABET", DEFAULT_LABEL_ALPHABET),
        )


__all__ = [
    "JumpConfig",
    "NON_CHARACTER",
    "DEFAULT_TRIGGER_KEY",
    "DEFAULT_DISABLE_COMMAND",
    "DEFAULT_ENABLE_COMMAND",
    "DEFAULT_NEUTRALIZE_KEY",
    "DEFAULT_LABEL_ALPHABET",
]
