from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


def _env_extra_mode(default: str = "ignore") -> str:
    """
    Determine the extra-mode from environment vars.

    CHECKNOTE_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> allow
    """
    raw = (os.getenv("CHECKNOTE_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw

    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "allow"

    return default


_EXTRA = _env_extra_mode()


class NoteModel(BaseModel):
    """
    Project-wide base model for record store payloads.

    Stores usually send bookkeeping columns we don't use (timestamps, owner
    ids), so unknown fields are ignored unless CHECKNOTE_EXTRA says otherwise.
    Instances are frozen so a cached value can be restored as-is.
    """

    model_config = ConfigDict(
        extra=_EXTRA,  # 'forbid' | 'allow' | 'ignore'
        frozen=True,
    )


__all__ = ["NoteModel", "_env_extra_mode"]
