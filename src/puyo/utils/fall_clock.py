from __future__ import annotations

from dataclasses import dataclass, field

from puyo.constants import LEVEL_SPEED_BASE, LEVEL_SPEED_STEP, SOFT_DROP_INTERVAL


@dataclass(slots=True)
class FallClock:
	"""Accumulates frame time and reports when the falling piece is due to advance.

	The interval shrinks with level and collapses to ``SOFT_DROP_INTERVAL``
	(before level scaling) while soft drop is held.
	"""

	base_interval: float = 1.0
	soft_drop: bool = False

	_elapsed: float = field(init=False, default=0.0, repr=False)

	def interval(self, level: int) -> float:
		base = SOFT_DROP_INTERVAL if self.soft_drop else self.base_interval
		return base / (LEVEL_SPEED_BASE + level * LEVEL_SPEED_STEP)

	def advance(self, dt: float, level: int) -> bool:
		self._elapsed += max(0.0, float(dt))
		if self._elapsed >= self.interval(level):
			self._elapsed = 0.0
			return True
		return False

	def reset(self, base_interval: float | None = None) -> None:
		if base_interval is not None:
			self.base_interval = float(base_interval)
		self.soft_drop = False
		self._elapsed = 0.0

	@property
	def elapsed(self) -> float:
		return self._elapsed
