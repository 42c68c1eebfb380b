"""Toast payloads emitted by view models.

Call context:
    ``DirectoryVM``, the form view models and ``LeaveQuotaVM`` hand these to
    their ``on_notify`` callback; ``hrdesk.web_ui.main`` turns them into
    ``ui.notify`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

VARIANT_DEFAULT = "default"
VARIANT_DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: str = VARIANT_DEFAULT

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(title="Success", message=message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(title="Error", message=message, variant=VARIANT_DESTRUCTIVE)

    @property
    def is_error(self) -> bool:
        return self.variant == VARIANT_DESTRUCTIVE


Notifier = Callable[[Notification], None]


def emit(callback: Optional[Notifier], notification: Notification) -> None:
    """Forward ``notification`` when a callback is wired."""
    if callback:
        callback(notification)
