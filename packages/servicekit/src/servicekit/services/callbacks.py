from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class CallbackRegistry:
    """Ordered before/after hook names for one service type.

    Every service type owns its own registry. Subtypes get theirs through
    :meth:`derive`, which copies the parent's current lists so later
    registrations on either side stay local to that side.
    """

    __slots__ = ("owner", "_before", "_after")

    def __init__(self, owner: str | None = None, *, before=(), after=()) -> None:
        self.owner = owner
        self._before: list[str] = list(before)
        self._after: list[str] = list(after)

    def derive(self, owner: str | None = None) -> CallbackRegistry:
        return CallbackRegistry(owner, before=self._before, after=self._after)

    def register_before(self, name: str) -> None:
        self._before.append(self._check(name))
        logger.debug("registered before-hook %r on %s", name, self.owner)

    def register_after(self, name: str) -> None:
        self._after.append(self._check(name))
        logger.debug("registered after-hook %r on %s", name, self.owner)

    @property
    def before(self) -> tuple[str, ...]:
        return tuple(self._before)

    @property
    def after(self) -> tuple[str, ...]:
        return tuple(self._after)

    @staticmethod
    def _check(name: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise TypeError(f"callback name must be a non-empty str, got {name!r}")
        return name

    def __repr__(self) -> str:
        return f"CallbackRegistry({self.owner!r}, before={self.before!r}, after={self.after!r})"


__all__ = ["CallbackRegistry"]
