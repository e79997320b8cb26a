import dataclasses
import typing

import subcycle.time


ValueType = typing.TypeVar("ValueType")
SourcePosition = typing.Tuple[typing.Tuple[int, int], typing.Tuple[int, int]]


@dataclasses.dataclass(frozen=True)
class Metadata:

	"""
	Side-channel information carried by events.

	Currently the source positions (start and end ``(column, line)`` pairs)
	of the notation that produced an event. Metadata combines by
	concatenation and carries no meaning for the event algebra itself.
	"""

	source_positions: typing.Tuple[SourcePosition, ...] = ()

	def __add__ (self, other: "Metadata") -> "Metadata":
		return Metadata(self.source_positions + other.source_positions)


EMPTY_METADATA = Metadata()


@dataclasses.dataclass(frozen=True)
class Event (typing.Generic[ValueType]):

	"""
	A value active over part of a query.

	``active`` is the portion that falls inside the query that produced the
	event. ``whole`` is the full extent of the event, of which ``active``
	is a fragment; it is ``None`` for samples of continuous signals, which
	have no onset or offset.
	"""

	whole: typing.Optional[subcycle.time.Arc]
	active: subcycle.time.Arc
	value: ValueType
	metadata: Metadata = EMPTY_METADATA

	def whole_or_active (self) -> subcycle.time.Arc:

		"""The whole if the event is discrete, otherwise its active arc."""

		if self.whole is not None:
			return self.whole

		return self.active

	def is_discrete (self) -> bool:
		return self.whole is not None

	def has_onset (self) -> bool:

		"""True when this fragment contains the start of the event."""

		return self.whole is not None and self.whole.begin == self.active.begin

	def with_value (self, func: typing.Callable[[ValueType], typing.Any]) -> "Event":
		return dataclasses.replace(self, value=func(self.value))

	def with_arc (self, func: typing.Callable[[subcycle.time.Arc], subcycle.time.Arc]) -> "Event":

		"""Apply an arc function to both the active arc and the whole."""

		whole = func(self.whole) if self.whole is not None else None

		return dataclasses.replace(self, whole=whole, active=func(self.active))

	def with_time (self, func: typing.Callable[[subcycle.time.Time], subcycle.time.Time]) -> "Event":
		return self.with_arc(lambda arc: arc.with_time(func))


@dataclasses.dataclass(frozen=True)
class State:

	"""
	The input to a query: the arc being asked about and any named controls.

	``controls`` is passed through untouched for named-parameter lookups
	made outside this package.
	"""

	arc: subcycle.time.Arc
	controls: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict, compare=False, hash=False)

	def set_arc (self, arc: subcycle.time.Arc) -> "State":
		return dataclasses.replace(self, arc=arc)

	def with_arc (self, func: typing.Callable[[subcycle.time.Arc], subcycle.time.Arc]) -> "State":
		return dataclasses.replace(self, arc=func(self.arc))
