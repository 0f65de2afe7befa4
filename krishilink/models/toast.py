"""
Toast models - transient notifications with a countdown.
"""
from typing import Literal

from pydantic import BaseModel, Field


ToastKind = Literal["success", "error"]
ToastPhase = Literal["active", "expiring"]


class Toast(BaseModel):
    """
    A single notification.

    `remaining_percent` drives the progress bar: it falls from 100 to 0 while
    the toast is active and not paused. Once it hits 0 (or the toast is
    closed) the toast enters the `expiring` phase and is removed when
    `exit_remaining_ms` runs out.
    """
    id: str
    message: str
    kind: ToastKind = "success"
    duration_ms: int = Field(gt=0)
    remaining_percent: float = Field(default=100.0, ge=0, le=100)
    is_paused: bool = False
    phase: ToastPhase = "active"
    exit_remaining_ms: int = 0

    @property
    def title(self) -> str:
        return "Success!" if self.kind == "success" else "Error!"

    @property
    def is_expiring(self) -> bool:
        return self.phase == "expiring"
