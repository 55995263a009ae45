"""Recursion limits for message parsing, inference and type serialization.

One DepthGuard is created per walk and entered once per nesting level:

    guard = DepthGuard(max_depth=50)
    with guard:
        walk(option.value)

The parser converts an exceeded guard into a MessageSyntaxError with a
position; the inferencer and the serializer let DepthLimitExceededError
propagate, since their input is an already-parsed AST or a mapping built in
code.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from typedmessages.constants import MAX_DEPTH
from typedmessages.diagnostics import ErrorTemplate, TypedMessagesError

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(TypedMessagesError):
    """A walk nested deeper than its DepthGuard allows."""


@dataclass(slots=True)
class DepthGuard:
    """Counts nesting levels of one recursive walk.

    Not frozen: entering and leaving the guard updates current_depth. Each
    walk owns its guard, so no locking is needed.

    Attributes:
        max_depth: Deepest level that may be entered, clamped below the
                   interpreter recursion limit
        current_depth: Levels currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Checked before incrementing: __exit__ does not run when __enter__ raises.
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(ErrorTemplate.max_depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True when entering one more level would raise."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Limit a requested depth to what the interpreter stack can hold.

    Each nesting level costs several Python frames, so a depth close to
    sys.getrecursionlimit() would end in RecursionError instead of a
    diagnostic. reserve_frames are kept free for the caller.

    Returns:
        requested_depth, or the recursion limit minus reserve_frames if smaller
    """
    ceiling = sys.getrecursionlimit() - reserve_frames
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Depth limit %d is above the recursion limit %d; using %d",
        requested_depth,
        sys.getrecursionlimit(),
        ceiling,
    )
    return ceiling
