from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigurationError
from .rating import DEFAULT_K_FACTOR
from .replay import MOVE_ID_LENGTH


LOGGER = logging.getLogger("chess_vault.settings")

ENV_K_FACTOR = "CHESS_VAULT_K_FACTOR"
ENV_MOVE_ID_LENGTH = "CHESS_VAULT_MOVE_ID_LENGTH"


@dataclass(frozen=True)
class Settings:
    k_factor: float = DEFAULT_K_FACTOR
    move_id_length: int = MOVE_ID_LENGTH

    def __post_init__(self) -> None:
        if self.k_factor <= 0:
            raise ConfigurationError(f"k_factor must be positive, got {self.k_factor}")
        if self.move_id_length < 8:
            raise ConfigurationError(f"move_id_length must be at least 8, got {self.move_id_length}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()

        raw = env.get(ENV_K_FACTOR)
        if raw:
            settings = replace(settings, k_factor=_number(ENV_K_FACTOR, raw, float))
            LOGGER.debug("settings_env_override", extra={"key": ENV_K_FACTOR, "value": raw})

        raw = env.get(ENV_MOVE_ID_LENGTH)
        if raw:
            settings = replace(settings, move_id_length=_number(ENV_MOVE_ID_LENGTH, raw, int))
            LOGGER.debug("settings_env_override", extra={"key": ENV_MOVE_ID_LENGTH, "value": raw})

        return settings


def _number(key: str, raw: str, kind):
    try:
        return kind(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
