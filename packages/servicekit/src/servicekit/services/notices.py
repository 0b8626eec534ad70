# servicekit/services/notices.py
"""
Error and notice accounting for a single service invocation.

Two independent, ordered channels are collected per call:

* ``errors``: anything that makes the invocation a failure
* ``notices``: informational messages shown on success

Messages must be non-empty ``str``. Anything else is a programming mistake and
raises instead of being coerced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Literal

from servicekit.utils import humanize

Channel = Literal["errors", "notices"]
CHANNELS: tuple[Channel, ...] = ("errors", "notices")


@dataclass(frozen=True, slots=True)
class NoticeEntry:
    message: str
    cause: BaseException | None = None


class NoticeCollection:
    """Ordered list of :class:`NoticeEntry` for one channel."""

    def __init__(self, channel: Channel) -> None:
        if channel not in CHANNELS:
            raise ValueError(f"unknown notice channel {channel!r}; expected one of {CHANNELS}")
        self.channel: Channel = channel
        self._entries: list[NoticeEntry] = []

    def add(self, message: str, cause: BaseException | None = None) -> None:
        if not isinstance(message, str):
            raise TypeError(
                f"{self.channel} message must be str, got {type(message).__name__}"
            )
        if not message.strip():
            raise ValueError(f"{self.channel} message must not be empty")
        self._entries.append(NoticeEntry(message=message, cause=cause))

    append = add

    def extend(self, entries: NoticeCollection | list[NoticeEntry]) -> None:
        for entry in entries:
            self._entries.append(entry)

    def any(self) -> bool:
        return bool(self._entries)

    def full_messages(self) -> str | None:
        if not self._entries:
            return None
        return "\n".join(e.message for e in self._entries)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self._entries]

    def to_list(self) -> list[NoticeEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[NoticeEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"NoticeCollection({self.channel!r}, {self.messages!r})"


class NoticeCollector:
    """Holds the ``errors`` and ``notices`` channels and decides success."""

    def __init__(self, owner: Any = None, *, success_notice: str | None = None) -> None:
        self._owner = owner
        self._success_notice = success_notice or None
        self.errors = NoticeCollection("errors")
        self.notices = NoticeCollection("notices")

    def channel(self, channel: Channel) -> NoticeCollection:
        if channel == "errors":
            return self.errors
        if channel == "notices":
            return self.notices
        raise ValueError(f"unknown notice channel {channel!r}; expected one of {CHANNELS}")

    def add(self, channel: Channel, message: str, cause: BaseException | None = None) -> None:
        self.channel(channel).add(message, cause)

    def any(self, channel: Channel) -> bool:
        return self.channel(channel).any()

    def full_messages(self, channel: Channel) -> str | None:
        return self.channel(channel).full_messages()

    def has_errors(self) -> bool:
        return self.errors.any()

    def success(self) -> bool:
        return not self.errors.any()

    def notice(self) -> str:
        """Errors if any, else notices if any, else the default success message."""
        if self.errors.any():
            return self.errors.full_messages()  # type: ignore[return-value]
        return self.notices.full_messages() or self.success_notice

    message = notice

    @property
    def success_notice(self) -> str:
        if self._success_notice:
            return self._success_notice
        return default_success_notice(self._owner)

    def merge(self, other: NoticeCollector) -> None:
        """Append `other`'s entries after ours, keeping each channel's order."""
        self.errors.extend(other.errors)
        self.notices.extend(other.notices)

    def __repr__(self) -> str:
        return f"NoticeCollector(errors={self.errors.messages!r}, notices={self.notices.messages!r})"


def default_success_notice(owner: Any) -> str:
    if owner is None:
        return "Operation succeeded"
    cls = owner if isinstance(owner, type) else type(owner)
    return f"{humanize(cls.__name__)} succeeded"


class NoticableMixin:
    """Attach a lazily created :class:`NoticeCollector` to an object.

    Classes may set ``success_notice`` to replace the derived default message.
    """

    success_notice: str | None = None

    @property
    def noticable(self) -> NoticeCollector:
        collector = self.__dict__.get("_noticable")
        if collector is None:
            collector = self.reset_noticable()
        return collector

    def reset_noticable(self) -> NoticeCollector:
        collector = NoticeCollector(self, success_notice=type(self).success_notice)
        self.__dict__["_noticable"] = collector
        return collector

    @classmethod
    def set_default_success_message(cls, text: str) -> None:
        if not isinstance(text, str) or not text.strip():
            raise TypeError("default success message must be a non-empty str")
        cls.success_notice = text

    @property
    def errors(self) -> NoticeCollection:
        return self.noticable.errors

    @property
    def notices(self) -> NoticeCollection:
        return self.noticable.notices

    def notice(self) -> str:
        return self.noticable.notice()

    def success(self) -> bool:
        return self.noticable.success()

    def has_errors(self) -> bool:
        return self.noticable.has_errors()


__all__ = [
    "Channel",
    "NoticeEntry",
    "NoticeCollection",
    "NoticeCollector",
    "NoticableMixin",
    "default_success_notice",
]
