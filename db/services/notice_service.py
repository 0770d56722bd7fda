"""
One-shot operator notices.

A notice is pushed by a failed mutation and read exactly once by the next
listing render of the same client. The Flask implementation keeps the queue
in the signed session cookie via ``flash``; ``get_flashed_messages`` pops it,
so a drained notice never reappears.
"""

from abc import ABC, abstractmethod
from typing import List

from flask import flash, get_flashed_messages

NOTICE_CATEGORY = "error"


class NoticeChannel(ABC):
    """Per-client queue of notices with read-once semantics."""

    @abstractmethod
    def push(self, notice: str) -> None:
        pass

    @abstractmethod
    def drain(self) -> List[str]:
        """Return and discard every pending notice, oldest first."""
        pass


class FlashNoticeChannel(NoticeChannel):
    """Notice channel backed by Flask flash messages (requires a request context)."""

    def push(self, notice: str) -> None:
        flash(notice, NOTICE_CATEGORY)

    def drain(self) -> List[str]:
        return list(get_flashed_messages(category_filter=[NOTICE_CATEGORY]))


def describe_form_errors(form) -> str:
    """
    Collapse WTForms errors into a single notice.

    Produces ``"field: message"`` pairs joined by ``"; "`` in field order.
    """
    parts = []
    for field_name, messages in form.errors.items():
        for message in messages:
            parts.append(f"{field_name}: {message}")
    return "; ".join(parts)
