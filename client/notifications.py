"""Transient notifications shown after form submissions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List

DEFAULT_DURATION = 5.0


@dataclass
class Toast:
    title: str
    description: str
    variant: str = "default"
    expires_at: float = 0.0


@dataclass
class ToastQueue:
    """Holds toasts until they expire.

    Attributes:
        duration: Seconds a toast stays visible.
        clock: Monotonic time source, replaceable in tests.
    """

    duration: float = DEFAULT_DURATION
    clock: Callable[[], float] = time.monotonic
    _toasts: List[Toast] = field(default_factory=list)

    def push(self, title: str, description: str, variant: str = "default") -> Toast:
        toast = Toast(title, description, variant, expires_at=self.clock() + self.duration)
        self._toasts.append(toast)
        return toast

    def active(self) -> List[Toast]:
        """Drop expired toasts and return the ones still visible."""
        now = self.clock()
        self._toasts = [t for t in self._toasts if t.expires_at > now]
        return list(self._toasts)
