"""Filter configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .flusher import DEFAULT_STEP_PREFIX
from .patterns import DEFAULT_PROMPT

ENV_PROMPT = "LLDB_GUD_PROMPT"
ENV_STEP_PREFIX = "LLDB_GUD_STEP_PREFIX"
ENV_SYNTHESIZE_PROMPT = "LLDB_GUD_SYNTHESIZE_PROMPT"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class FilterConfigError(ValueError):
    """Raised when a filter configuration cannot be used."""


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise FilterConfigError(f"{name}: expected a boolean, got {value!r}")


@dataclass
class FilterConfig:
    prompt: str = DEFAULT_PROMPT
    step_prefix: str = DEFAULT_STEP_PREFIX
    synthesize_prompt: bool = True

    def validate(self) -> None:
        if not self.prompt:
            raise FilterConfigError("prompt must not be empty")
        if "\n" in self.prompt:
            raise FilterConfigError("prompt must not contain a line break")
        if not self.step_prefix:
            raise FilterConfigError("step prefix must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FilterConfig":
        env = os.environ if environ is None else environ
        config = cls()
        if env.get(ENV_PROMPT):
            config.prompt = env[ENV_PROMPT]
        if env.get(ENV_STEP_PREFIX):
            config.step_prefix = env[ENV_STEP_PREFIX]
        if env.get(ENV_SYNTHESIZE_PROMPT):
            config.synthesize_prompt = _parse_bool(ENV_SYNTHESIZE_PROMPT, env[ENV_SYNTHESIZE_PROMPT])
        return config

    def merged(self, **overrides: Any) -> "FilterConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


__all__ = [
    "ENV_PROMPT",
    "ENV_STEP_PREFIX",
    "ENV_SYNTHESIZE_PROMPT",
    "FilterConfig",
    "FilterConfigError",
]
