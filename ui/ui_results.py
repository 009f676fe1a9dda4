from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelResult:
    ok: bool
    content: str = ""
    models: tuple[str, ...] = ()
    error: str = ""

    @classmethod
    def failure(cls, reason: str) -> "ModelResult":
        return cls(ok=False, error=(reason or "").strip() or "Unknown error")
