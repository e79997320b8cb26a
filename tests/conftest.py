import numbers
import typing

import subcycle.event
import subcycle.signal
import subcycle.time


Arc = subcycle.time.Arc
Signal = subcycle.signal.Signal
T = subcycle.time.Time


def _value_key (value: typing.Any) -> typing.Tuple:

	"""Order numbers numerically and everything else by its text."""

	if isinstance(value, numbers.Real):
		return (0, value, "")

	return (1, 0, str(value))


def summarize (events: typing.Iterable[subcycle.event.Event]) -> typing.List[typing.Tuple]:

	"""Reduce events to sorted ``(whole, active, value)`` tuples, ignoring metadata."""

	return sorted(
		((event.whole, event.active, event.value) for event in events),
		key = lambda item: (item[1].begin, item[1].end, str(item[0]), _value_key(item[2]))
	)


def values (events: typing.Iterable[subcycle.event.Event]) -> typing.List[typing.Any]:

	"""Event values in order of onset."""

	return [value for _, _, value in summarize(events)]


def seq (*items: typing.Any) -> Signal:

	"""A cycle of evenly spaced atoms."""

	return Signal.fast_from_list(items)
