"""Base class of the generated query trails.

A trail starts out ``NOT_WALKED``: it only knows the selection it might
point at. ``walk()`` checks that the field was actually selected and returns
a ``WALKED`` trail, or ``None`` when it was not. Accessors are only usable on
walked trails::

    friends = trail.friends().walk()
    if friends is not None and friends.avatar_url():
        ...
"""

import enum
from typing import Optional, TypeVar

from .errors import TrailNotWalkedError
from .look_ahead import LookAheadSelection, LookAheadValue

TrailT = TypeVar("TrailT", bound="QueryTrail")


class Phase(enum.Enum):
    NOT_WALKED = "not_walked"
    WALKED = "walked"


class QueryTrail:
    """Selection-aware handle over one object type."""

    __slots__ = ("_look_ahead", "_phase")

    def __init__(
        self,
        look_ahead: Optional[LookAheadSelection] = None,
        phase: Phase = Phase.NOT_WALKED,
    ):
        self._look_ahead = look_ahead
        self._phase = phase

    @classmethod
    def walked(cls: type[TrailT], look_ahead: LookAheadSelection) -> TrailT:
        """Trail for the selection of the field currently being resolved."""
        return cls(look_ahead, Phase.WALKED)

    @property
    def is_walked(self) -> bool:
        return self._phase is Phase.WALKED

    def walk(self: TrailT) -> Optional[TrailT]:
        """Return a walked trail, or ``None`` if the field was not selected."""
        if self._look_ahead is None:
            return None
        return type(self)(self._look_ahead, Phase.WALKED)

    def arguments(self) -> dict[str, LookAheadValue]:
        """Arguments the selected field was requested with."""
        self._require_walked()
        return self._look_ahead.arguments()

    def _require_walked(self) -> None:
        if self._phase is not Phase.WALKED:
            raise TrailNotWalkedError(
                f"{type(self).__name__} must be walked before its fields are inspected"
            )

    def _is_selected(self, name: str) -> bool:
        return self._child(name) is not None

    def _child(self, name: str) -> Optional[LookAheadSelection]:
        self._require_walked()
        if self._look_ahead is None:
            return None
        return self._look_ahead.select_child(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._phase.value})"
