from __future__ import annotations

from typing import Optional

import structlog

from .dateinfo import DateInfo, Granularity
from .views import describe

logger = structlog.get_logger()


class Navigator:
    """Selected scale plus the DateInfo it steps through."""

    def __init__(
        self,
        info: Optional[DateInfo] = None,
        granularity: Granularity = Granularity.QUARTER,
    ) -> None:
        self._info = info if info is not None else DateInfo()
        self._granularity = granularity

    def select(self, granularity: Granularity) -> None:
        if granularity is not self._granularity:
            logger.debug("granularity_selected", granularity=granularity.name)
        self._granularity = granularity

    def forward(self) -> None:
        self._info.move_forward(self._granularity)

    def backward(self) -> None:
        self._info.move_backward(self._granularity)

    def swipe(self, dx: float) -> None:
        # Dragging leftwards reveals what comes next.
        if dx < 0:
            self.forward()
        else:
            self.backward()

    def reset(self) -> None:
        self._info.reset()

    def lines(self) -> list[str]:
        return describe(self._info, self._granularity)

    @property
    def info(self) -> DateInfo:
        return self._info

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    def __repr__(self) -> str:
        return f"Navigator(granularity={self._granularity.name}, info={self._info!r})"
