"""Editor settings and their ``CELLPAD_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "CELLPAD_"


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunables for an editing session."""

    quit_times: int = 3
    status_timeout: float = 5.0
    page_size: Optional[int] = None  # None: one viewport height
    pending_timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if self.quit_times < 0:
            raise ValueError("quit_times cannot be negative")
        if self.status_timeout < 0:
            raise ValueError("status_timeout cannot be negative")
        if self.page_size is not None and self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.pending_timeout_ms <= 0:
            raise ValueError("pending_timeout_ms must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ
        defaults = cls()

        def read(name: str) -> Optional[str]:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return raw.strip() if raw and raw.strip() else None

        quit_times = read("QUIT_TIMES")
        status_timeout = read("STATUS_TIMEOUT")
        page_size = read("PAGE_SIZE")
        pending = read("PENDING_TIMEOUT_MS")
        try:
            return cls(
                quit_times=int(quit_times) if quit_times else defaults.quit_times,
                status_timeout=(
                    float(status_timeout) if status_timeout else defaults.status_timeout
                ),
                page_size=int(page_size) if page_size else defaults.page_size,
                pending_timeout_ms=(
                    int(pending) if pending else defaults.pending_timeout_ms
                ),
            )
        except ValueError as exc:
            raise ValueError(f"Invalid {ENV_PREFIX}* setting: {exc}") from exc


__all__ = ["EditorSettings", "ENV_PREFIX"]
