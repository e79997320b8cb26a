"""Exact rational time and half-open arcs.

Time is measured in cycles and held as :class:`fractions.Fraction` so that
arbitrarily deep compositions of speed changes and shifts never drift.
"""

import dataclasses
import fractions
import math
import typing


Time = fractions.Fraction
TimeLike = typing.Union[int, float, str, fractions.Fraction]


def to_time (value: TimeLike) -> Time:

	"""
	Convert a number (or a ``"p/q"`` string) to exact rational time.

	Floats are read through their shortest decimal representation, so
	``0.1`` becomes ``1/10`` rather than the nearest binary fraction.
	"""

	if isinstance(value, fractions.Fraction):
		return value

	if isinstance(value, bool):
		raise TypeError("Time cannot be a boolean")

	if isinstance(value, float):
		return fractions.Fraction(repr(value))

	return fractions.Fraction(value)


def sam (t: Time) -> Time:

	"""Start of the cycle containing ``t``."""

	return Time(math.floor(t))


def next_sam (t: Time) -> Time:

	"""Start of the cycle following the one containing ``t``."""

	return sam(t) + 1


def cycle_pos (t: Time) -> Time:

	"""Position of ``t`` within its cycle, in ``[0, 1)``."""

	return t - sam(t)


@dataclasses.dataclass(frozen=True)
class Arc:

	"""
	A half-open time interval ``[begin, end)``.

	``begin`` may equal ``end``; such zero-width arcs are used to sample
	continuous signals at a single point.
	"""

	begin: Time
	end: Time

	def __post_init__ (self) -> None:
		object.__setattr__(self, "begin", to_time(self.begin))
		object.__setattr__(self, "end", to_time(self.end))

	@property
	def duration (self) -> Time:
		return self.end - self.begin

	@property
	def midpoint (self) -> Time:
		return self.begin + (self.end - self.begin) / 2

	def sect (self, other: "Arc") -> "Arc":

		"""
		Intersect two arcs without checking the result.

		The result may be inverted when the arcs do not overlap; use
		:meth:`maybe_sect` when that matters.
		"""

		return Arc(max(self.begin, other.begin), min(self.end, other.end))

	def maybe_sect (self, other: "Arc") -> typing.Optional["Arc"]:

		"""
		Intersect two arcs, returning ``None`` when they do not meet.

		A zero-width result is kept when it falls at the start of a
		non-zero arc, but dropped when it touches only the (exclusive) end
		of one. This keeps point samples taken at an arc's onset while
		stopping adjacent arcs ``[0, 1)`` and ``[1, 2)`` from meeting at 1.
		"""

		begin = max(self.begin, other.begin)
		end = min(self.end, other.end)

		if begin > end:
			return None

		if begin == end:
			if begin == self.end and self.begin < self.end:
				return None
			if begin == other.end and other.begin < other.end:
				return None

		return Arc(begin, end)

	def split_arcs (self) -> typing.List["Arc"]:

		"""
		Split the arc at every cycle boundary it crosses.

		Zero-width arcs are returned unchanged; inverted arcs yield nothing.
		"""

		if self.begin == self.end:
			return [self]

		arcs: typing.List[Arc] = []
		begin = self.begin

		while begin < self.end:
			end = min(next_sam(begin), self.end)
			arcs.append(Arc(begin, end))
			begin = end

		return arcs

	def with_time (self, func: typing.Callable[[Time], Time]) -> "Arc":

		"""Apply a time function to both ends of the arc."""

		return Arc(func(self.begin), func(self.end))

	def with_cycle (self, func: typing.Callable[[Time], Time]) -> "Arc":

		"""
		Apply a time function relative to the cycle the arc begins in.
		"""

		cycle = sam(self.begin)

		return Arc(cycle + func(self.begin - cycle), cycle + func(self.end - cycle))

	def whole_cycle (self) -> "Arc":

		"""The full cycle containing the start of this arc."""

		return Arc(sam(self.begin), next_sam(self.begin))

	def __repr__ (self) -> str:
		return f"Arc({self.begin}, {self.end})"
