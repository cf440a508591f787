"""
Timer-reset debouncing for the watch loop.
"""

# Standard Library
import time
import typing

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config


DEBOUNCE_SECONDS = qc.config.DEBOUNCE_SECONDS


class Debouncer:
	"""
	Hold the latest payload until no new one arrives for the delay.

	Each schedule call replaces the pending payload and restarts the timer,
	so a burst of changes releases a single run with the last payload.
	"""

	def __init__(
		self,
		delay: float = DEBOUNCE_SECONDS,
		clock: typing.Callable[[], float] = time.monotonic,
	) -> None:
		self.delay = delay
		self.clock = clock
		self._payload: str | None = None
		self._deadline: float | None = None

	@property
	def pending(self) -> bool:
		return self._deadline is not None

	def schedule(self, payload: str) -> None:
		self._payload = payload
		self._deadline = self.clock() + self.delay

	#============================================
	def poll(self) -> str | None:
		"""
		Release the pending payload once the quiet period has passed.

		Returns:
			Payload when due, otherwise None.
		"""
		if self._deadline is None or self.clock() < self._deadline:
			return None
		payload = self._payload
		self._payload = None
		self._deadline = None
		return payload
