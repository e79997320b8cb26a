"""
Signals: patterns represented as functions from a query to events.

A :class:`Signal` wraps a pure function from a :class:`~subcycle.event.State`
to a list of :class:`~subcycle.event.Event`. Nothing is generated ahead of
time; every combinator wraps the signals it is built from and, when
queried, queries them in turn over a derived state and reshapes what comes
back. The same state always gives the same events, so a signal can be
queried as often as needed, over any arc, from any thread.

Example:
	```python
	import subcycle.signal as sig

	beat = sig.Signal.fastcat([sig.Signal.atom("bd"), sig.Signal.atom("sn")])

	for event in beat.query_arc(0, 1):
		print(event.whole, event.value)
	```
"""

import dataclasses
import logging
import typing

import subcycle.event
import subcycle.pattern
import subcycle.time


logger = logging.getLogger(__name__)

QueryFunction = typing.Callable[[subcycle.event.State], typing.List[subcycle.event.Event]]
WholeChooser = typing.Callable[[typing.Optional[subcycle.time.Arc], typing.Optional[subcycle.time.Arc]], typing.Optional[subcycle.time.Arc]]

Arc = subcycle.time.Arc
Event = subcycle.event.Event
State = subcycle.event.State


def _sect_wholes (outer: typing.Optional[Arc], inner: typing.Optional[Arc]) -> typing.Optional[Arc]:

	"""Intersect two wholes; continuous on either side means continuous."""

	if outer is None or inner is None:
		return None

	return outer.sect(inner)


def _inner_whole (outer: typing.Optional[Arc], inner: typing.Optional[Arc]) -> typing.Optional[Arc]:
	return inner


def _outer_whole (outer: typing.Optional[Arc], inner: typing.Optional[Arc]) -> typing.Optional[Arc]:
	return outer


class Signal (subcycle.pattern.Pattern):

	"""
	A pattern as a query function over time.
	"""

	def __init__ (self, query: QueryFunction) -> None:

		"""
		Wrap a query function. The function must be pure: the same state
		must always give the same events.
		"""

		self._query = query

	def query (self, state: State) -> typing.List[Event]:

		"""Return the events active during ``state.arc``."""

		return self._query(state)

	def query_arc (self, begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike, controls: typing.Optional[typing.Mapping[str, typing.Any]] = None) -> typing.List[Event]:

		"""Query the arc ``[begin, end)`` with optional named controls."""

		return self.query(State(Arc(begin, end), dict(controls) if controls else {}))

	def __repr__ (self) -> str:
		return f"<Signal at {id(self):#x}>"

	# --- Construction ---

	@classmethod
	def silence (cls) -> "Signal":
		return cls(lambda state: [])

	@classmethod
	def atom (cls, value: typing.Any) -> "Signal":

		"""
		Repeat a discrete value once per cycle.
		"""

		def query (state: State) -> typing.List[Event]:
			return [
				Event(whole=arc.whole_cycle(), active=arc, value=value)
				for arc in state.arc.split_arcs()
			]

		return cls(query)

	@classmethod
	def pure (cls, value: typing.Any) -> "Signal":

		"""Lift a plain value as a continuous constant (see :func:`steady`)."""

		return steady(value)

	@classmethod
	def stack (cls, pats: typing.Iterable["Signal"]) -> "Signal":

		"""
		Play signals simultaneously. The result of a query is the
		concatenation of each signal's events; their order carries no meaning.
		"""

		pats = list(pats)

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for pat in pats:
				events.extend(pat.query(state))

			return events

		return cls(query)

	@classmethod
	def slowcat (cls, pats: typing.Iterable["Signal"]) -> "Signal":

		"""
		Play one signal per cycle, round-robin.

		Each signal is shifted so that it only sees its own cycles: with
		three signals, the first plays its cycle 0, 1, 2... on cycles 0, 3,
		6... rather than skipping ahead.
		"""

		pats = list(pats)

		if not pats:
			return cls.silence()

		count = len(pats)

		def query (state: State) -> typing.List[Event]:

			cycle = subcycle.time.sam(state.arc.begin)
			pat = pats[int(cycle) % count]
			offset = cycle - subcycle.time.sam(state.arc.begin / count)

			return pat._late(offset).query(state)

		return cls(query).split_queries()

	def to_signal (self) -> "Signal":
		return self

	# --- Query and event manipulation ---

	def split_queries (self) -> "Signal":

		"""Split queries at cycle boundaries, so the query function only sees one cycle at a time."""

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for arc in state.arc.split_arcs():
				events.extend(self.query(state.set_arc(arc)))

			return events

		return Signal(query)

	def with_query (self, func: typing.Callable[[State], State]) -> "Signal":
		return Signal(lambda state: self.query(func(state)))

	def with_query_arc (self, func: typing.Callable[[Arc], Arc]) -> "Signal":
		return Signal(lambda state: self.query(state.with_arc(func)))

	def with_query_time (self, func: typing.Callable[[subcycle.time.Time], subcycle.time.Time]) -> "Signal":
		return self.with_query_arc(lambda arc: arc.with_time(func))

	def with_events (self, func: typing.Callable[[typing.List[Event]], typing.List[Event]]) -> "Signal":
		return Signal(lambda state: func(self.query(state)))

	def with_event (self, func: typing.Callable[[Event], Event]) -> "Signal":
		return Signal(lambda state: [func(event) for event in self.query(state)])

	def with_event_arc (self, func: typing.Callable[[Arc], Arc]) -> "Signal":
		return self.with_event(lambda event: event.with_arc(func))

	def with_event_time (self, func: typing.Callable[[subcycle.time.Time], subcycle.time.Time]) -> "Signal":
		return self.with_event(lambda event: event.with_time(func))

	def filter_events (self, func: typing.Callable[[Event], bool]) -> "Signal":
		return Signal(lambda state: [event for event in self.query(state) if func(event)])

	def filter_values (self, func: typing.Callable[[typing.Any], bool]) -> "Signal":
		return self.filter_events(lambda event: func(event.value))

	def filter_justs (self) -> "Signal":

		"""Drop events whose value is ``None``."""

		return self.filter_values(lambda value: value is not None)

	def discrete_only (self) -> "Signal":

		"""Drop continuous events."""

		return self.filter_events(lambda event: event.whole is not None)

	def onsets_only (self) -> "Signal":

		"""Keep only event fragments that contain their onset."""

		return self.filter_events(lambda event: event.has_onset())

	def fmap (self, func: typing.Callable[[typing.Any], typing.Any]) -> "Signal":
		return self.with_event(lambda event: event.with_value(func))

	# --- Pointwise combination ---

	def app (self, other: "Signal") -> "Signal":

		"""
		Apply a signal of functions to a signal of values.

		Both are queried over the same arc and every pair of overlapping
		events gives one result, whose whole is the intersection of the two
		wholes (or continuous if either is continuous).
		"""

		def query (state: State) -> typing.List[Event]:

			value_events = other.query(state)
			events: typing.List[Event] = []

			for event_func in self.query(state):
				for event_value in value_events:

					active = event_func.active.maybe_sect(event_value.active)

					if active is None:
						continue

					events.append(Event(
						whole = _sect_wholes(event_func.whole, event_value.whole),
						active = active,
						value = event_func.value(event_value.value),
						metadata = event_func.metadata + event_value.metadata
					))

			return events

		return Signal(query)

	def app_left (self, other: "Signal") -> "Signal":

		"""
		Like :meth:`app`, but the structure comes from the functions.

		For each function event, ``other`` is queried over that event's
		whole extent, and the result keeps the function event's whole.
		"""

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for event_func in self.query(state):
				for event_value in other.query(state.set_arc(event_func.whole_or_active())):

					active = event_func.active.maybe_sect(event_value.active)

					if active is None:
						continue

					events.append(Event(
						whole = event_func.whole,
						active = active,
						value = event_func.value(event_value.value),
						metadata = event_func.metadata + event_value.metadata
					))

			return events

		return Signal(query)

	def app_right (self, other: "Signal") -> "Signal":

		"""
		Like :meth:`app`, but the structure comes from the values.
		"""

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for event_value in other.query(state):
				for event_func in self.query(state.set_arc(event_value.whole_or_active())):

					active = event_func.active.maybe_sect(event_value.active)

					if active is None:
						continue

					events.append(Event(
						whole = event_value.whole,
						active = active,
						value = event_func.value(event_value.value),
						metadata = event_func.metadata + event_value.metadata
					))

			return events

		return Signal(query)

	# --- Joins ---

	def _bind_whole (self, choose_whole: WholeChooser, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""
		Query the signal produced by ``func`` for each event, within that
		event's active arc, using ``choose_whole`` to pick the resulting whole.
		"""

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for outer in self.query(state):
				for inner in func(outer.value).query(state.set_arc(outer.active)):
					events.append(dataclasses.replace(
						inner,
						whole = choose_whole(outer.whole, inner.whole),
						metadata = inner.metadata + outer.metadata
					))

			return events

		return Signal(query)

	def bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""Flat-map, with wholes formed by intersecting outer and inner wholes."""

		return self._bind_whole(_sect_wholes, func)

	def inner_bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""Flat-map, keeping the wholes of the inner signals."""

		return self._bind_whole(_inner_whole, func)

	def outer_bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""Flat-map, keeping the wholes of the outer signal."""

		return self._bind_whole(_outer_whole, func)

	def squeeze_bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""
		Flat-map, fitting one whole cycle of each inner signal into the
		extent of the outer event it came from.

		Only discrete inner events survive, since their wholes are
		intersected with the outer whole.
		"""

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for outer in self.query(state):

				extent = outer.whole_or_active()
				inner_signal = func(outer.value)._focus_arc(extent.begin, extent.end)

				for inner in inner_signal.query(state.set_arc(outer.active)):

					if outer.whole is None or inner.whole is None:
						continue

					whole = outer.whole.maybe_sect(inner.whole)
					active = outer.active.maybe_sect(inner.active)

					if whole is None or active is None:
						continue

					events.append(Event(
						whole = whole,
						active = active,
						value = inner.value,
						metadata = inner.metadata + outer.metadata
					))

			return events

		return Signal(query)

	def _trig_time_bind (self, time_func: typing.Callable[[subcycle.time.Time], subcycle.time.Time], func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""
		Flat-map, restarting each inner signal at the onset of its outer
		event. ``time_func`` maps the onset to the amount of shift.
		"""

		outer_signal = self.discrete_only()

		def query (state: State) -> typing.List[Event]:

			events: typing.List[Event] = []

			for outer in outer_signal.query(state):

				shift = time_func(outer.whole_or_active().begin)

				for inner in func(outer.value)._late(shift).query(state):

					active = inner.active.maybe_sect(outer.active)

					if active is None:
						continue

					if inner.whole is None:
						whole = None
					else:
						whole = inner.whole.maybe_sect(outer.whole)
						if whole is None:
							continue

					events.append(Event(
						whole = whole,
						active = active,
						value = inner.value,
						metadata = inner.metadata + outer.metadata
					))

			return events

		return Signal(query)

	def trig_bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""Restart each inner signal from the absolute time of the outer onset."""

		return self._trig_time_bind(lambda t: t, func)

	def trig_zero_bind (self, func: typing.Callable[[typing.Any], "Signal"]) -> "Signal":

		"""Restart each inner signal from its cycle zero at the outer onset."""

		return self._trig_time_bind(subcycle.time.cycle_pos, func)

	# --- Time ---

	def _fast (self, factor: subcycle.time.TimeLike) -> "Signal":

		"""
		Speed up by ``factor``. Zero gives silence; a negative factor plays
		the sped-up signal in reverse.
		"""

		factor = subcycle.time.to_time(factor)

		if factor == 0:
			logger.debug("fast(0) is silence")
			return Signal.silence()

		if factor < 0:
			return self._fast(-factor).rev()

		return self.with_query_time(lambda t: t * factor).with_event_time(lambda t: t / factor)

	def _early (self, offset: subcycle.time.TimeLike) -> "Signal":

		"""Shift earlier by ``offset`` cycles."""

		offset = subcycle.time.to_time(offset)

		return self.with_query_time(lambda t: t + offset).with_event_time(lambda t: t - offset)

	def _fast_gap (self, factor: subcycle.time.TimeLike) -> "Signal":

		"""
		Squash each cycle into the first ``1/factor`` of the cycle, leaving
		the rest of the cycle empty.
		"""

		factor = subcycle.time.to_time(factor)

		if factor <= 0:
			logger.debug(f"fast_gap({factor}) is silence")
			return Signal.silence()

		# Below one the cycle would spill into the next.
		factor = max(factor, subcycle.time.Time(1))

		def query (state: State) -> typing.List[Event]:

			cycle = subcycle.time.sam(state.arc.begin)
			begin = cycle + min(1, (state.arc.begin - cycle) * factor)
			end = cycle + min(1, (state.arc.end - cycle) * factor)

			# Queries falling entirely in the gap.
			if begin >= cycle + 1:
				return []

			def unscale (arc: Arc) -> Arc:
				return arc.with_time(lambda t: cycle + (t - cycle) / factor)

			return [event.with_arc(unscale) for event in self.query(state.set_arc(Arc(begin, end)))]

		return Signal(query).split_queries()

	def _compress_arc (self, begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike) -> "Signal":

		"""
		Squeeze each cycle into ``[begin, end)`` of the cycle, leaving the
		rest silent. Both ends must lie within ``[0, 1]`` with ``begin``
		before ``end``; anything else gives silence.
		"""

		begin = subcycle.time.to_time(begin)
		end = subcycle.time.to_time(end)

		if begin >= end or begin < 0 or end > 1:
			logger.debug(f"compress_arc({begin}, {end}) is silence")
			return Signal.silence()

		return self._fast_gap(1 / (end - begin))._late(begin)

	def _focus_arc (self, begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike) -> "Signal":

		"""
		Like :meth:`_compress_arc`, but without the gap: the signal is sped
		up so that a cycle fits ``[begin, end)``, which may be any extent.
		"""

		begin = subcycle.time.to_time(begin)
		end = subcycle.time.to_time(end)

		if begin >= end:
			logger.debug(f"focus_arc({begin}, {end}) is silence")
			return Signal.silence()

		return self._fast(1 / (end - begin))._late(subcycle.time.cycle_pos(begin))

	def _zoom_arc (self, begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike) -> "Signal":

		"""
		Play only ``[begin, end)`` of each cycle, stretched to fill the cycle.
		"""

		begin = subcycle.time.to_time(begin)
		end = subcycle.time.to_time(end)
		span = end - begin

		if span <= 0:
			logger.debug(f"zoom_arc({begin}, {end}) is silence")
			return Signal.silence()

		def query (state: State) -> typing.List[Event]:

			cycle = subcycle.time.sam(state.arc.begin)

			def zoom_in (t: subcycle.time.Time) -> subcycle.time.Time:
				return cycle + (t - cycle) * span + begin

			def zoom_out (t: subcycle.time.Time) -> subcycle.time.Time:
				return cycle + (t - cycle - begin) / span

			events = self.query(state.set_arc(state.arc.with_time(zoom_in)))

			return [event.with_arc(lambda arc: arc.with_time(zoom_out)) for event in events]

		return Signal(query).split_queries()

	def rev (self) -> "Signal":

		"""
		Reverse each cycle.
		"""

		def query (state: State) -> typing.List[Event]:

			cycle = subcycle.time.sam(state.arc.begin)
			next_cycle = subcycle.time.next_sam(cycle)

			def reflect (arc: Arc) -> Arc:
				return Arc(cycle + (next_cycle - arc.end), cycle + (next_cycle - arc.begin))

			if state.arc.begin < state.arc.end:
				return [event.with_arc(reflect) for event in self.query(state.with_arc(reflect))]

			# A point reflects onto the exclusive end of the event it belongs to,
			# so discrete events are found from the whole cycle instead.
			events: typing.List[Event] = []

			for event in self.query(state.set_arc(Arc(cycle, next_cycle))):

				if event.whole is None:
					continue

				event = event.with_arc(reflect)
				active = event.active.maybe_sect(state.arc)

				if active is not None:
					events.append(dataclasses.replace(event, active=active))

			continuous = [event.with_arc(reflect) for event in self.query(state.with_arc(reflect)) if event.whole is None]

			return events + continuous

		return Signal(query).split_queries()

	# --- Grouping ---

	def collect (self) -> "Signal":

		"""
		Merge events sharing both whole and active arc into one event whose
		value is the list of their values.
		"""

		def query (state: State) -> typing.List[Event]:

			groups: typing.Dict[typing.Tuple[typing.Optional[Arc], Arc], typing.List[Event]] = {}

			for event in self.query(state):
				groups.setdefault((event.whole, event.active), []).append(event)

			collected: typing.List[Event] = []

			for (whole, active), group in groups.items():

				metadata = subcycle.event.EMPTY_METADATA

				for event in group:
					metadata = metadata + event.metadata

				collected.append(Event(
					whole = whole,
					active = active,
					value = [event.value for event in group],
					metadata = metadata
				))

			return collected

		return Signal(query)

	def uncollect (self) -> "Signal":

		"""Split events with list values into one event per item."""

		def query (state: State) -> typing.List[Event]:
			return [
				dataclasses.replace(event, value=value)
				for event in self.query(state)
				for value in event.value
			]

		return Signal(query)


# --- Fundamental signals ---


silence = Signal.silence
atom = Signal.atom
stack = Signal.stack
slowcat = Signal.slowcat
fastcat = Signal.fastcat
time_cat = Signal.time_cat
from_list = Signal.from_list
fast_from_list = Signal.fast_from_list
from_maybes = Signal.from_maybes


def waveform (time_func: typing.Callable[[subcycle.time.Time], typing.Any]) -> Signal:

	"""
	A continuous signal from a function of time.

	Every query gives a single event spanning the whole query arc, with no
	whole, valued at the midpoint of the arc.
	"""

	def query (state: State) -> typing.List[Event]:
		return [Event(whole=None, active=state.arc, value=time_func(state.arc.midpoint))]

	return Signal(query)


def steady (value: typing.Any) -> Signal:

	"""Hold a value continuously."""

	return waveform(lambda t: value)


def query_arc (pat: Signal, arc: Arc) -> typing.List[Event]:

	"""Query a signal over an arc with no controls."""

	return pat.query(State(arc))


# --- Time transformations with patterned arguments ---


def _time_arg_signal (func: typing.Callable[[subcycle.time.Time, subcycle.time.Time, Signal], Signal], begin: subcycle.pattern.Patternable, duration: subcycle.pattern.Patternable, pat: Signal) -> Signal:

	"""
	Apply ``func(begin, begin + duration, pat)``, sampling patterned arguments
	and keeping the structure of both.
	"""

	if not isinstance(begin, subcycle.pattern.Pattern) and not isinstance(duration, subcycle.pattern.Pattern):
		begin = subcycle.time.to_time(begin)
		return func(begin, begin + subcycle.time.to_time(duration), pat)

	begin_signal = subcycle.pattern.reify(begin, Signal)
	duration_signal = subcycle.pattern.reify(duration, Signal)

	def apply (b: typing.Any) -> typing.Callable[[typing.Any], Signal]:
		b = subcycle.time.to_time(b)
		return lambda d: func(b, b + subcycle.time.to_time(d), pat)

	return begin_signal.fmap(apply).app(duration_signal).inner_join()


def fast_gap (factor: subcycle.pattern.Patternable, pat: Signal) -> Signal:

	"""Like fast, but only plays one cycle of the original per cycle, leaving a gap."""

	return subcycle.pattern._patternify(lambda value, p: p._fast_gap(value), factor, pat)


def compress_arc (begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike, pat: Signal) -> Signal:
	return pat._compress_arc(begin, end)


def compress (begin: subcycle.pattern.Patternable, duration: subcycle.pattern.Patternable, pat: Signal) -> Signal:

	"""Squeeze each cycle into the part of the cycle starting at ``begin`` lasting ``duration``."""

	return _time_arg_signal(lambda b, e, p: p._compress_arc(b, e), begin, duration, pat)


def focus_arc (begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike, pat: Signal) -> Signal:
	return pat._focus_arc(begin, end)


def focus (begin: subcycle.pattern.Patternable, duration: subcycle.pattern.Patternable, pat: Signal) -> Signal:

	"""Like :func:`compress`, but without a gap and not limited to one cycle."""

	return _time_arg_signal(lambda b, e, p: p._focus_arc(b, e), begin, duration, pat)


def zoom_arc (begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike, pat: Signal) -> Signal:
	return pat._zoom_arc(begin, end)


def zoom (begin: subcycle.pattern.Patternable, duration: subcycle.pattern.Patternable, pat: Signal) -> Signal:

	"""
	Play a portion of each cycle, stretched to fill the cycle.

	Example:
		```python
		# The middle half of each cycle.
		zoom(0.25, 0.5, pat)
		```
	"""

	return _time_arg_signal(lambda b, e, p: p._zoom_arc(b, e), begin, duration, pat)


def squash (into: subcycle.time.TimeLike, pat: Signal) -> Signal:

	"""Squash each cycle into the first ``into`` of the cycle."""

	into = subcycle.time.to_time(into)

	if into <= 0:
		logger.debug(f"squash({into}) is silence")
		return Signal.silence()

	return pat._fast_gap(1 / into)


def squash_to (begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike, pat: Signal) -> Signal:

	"""Like :func:`compress_arc`, without the bounds check."""

	begin = subcycle.time.to_time(begin)

	return squash(subcycle.time.to_time(end) - begin, pat)._late(begin)


def when_t (test: typing.Callable[[int], bool], func: subcycle.pattern.Transform, pat: Signal) -> Signal:

	"""
	Apply ``func`` on cycles whose number passes ``test``.

	Example:
		```python
		# Reverse cycles whose number contains a 4.
		when_t(lambda cycle: "4" in str(cycle), rev, pat)
		```
	"""

	transformed = func(pat)

	def query (state: State) -> typing.List[Event]:

		if test(int(subcycle.time.sam(state.arc.begin))):
			return transformed.query(state)

		return pat.query(state)

	return Signal(query).split_queries()


def app_left (pat_func: Signal, pat_value: Signal) -> Signal:
	return pat_func.app_left(pat_value)


def app_right (pat_func: Signal, pat_value: Signal) -> Signal:
	return pat_func.app_right(pat_value)
