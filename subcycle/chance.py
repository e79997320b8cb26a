"""
Deterministic randomness over time.

Random values here are a pure function of the query position, so the same
arc always gives the same value and patterns stay repeatable however often
they are queried. The generator is an xorshift over a seed taken from the
position within a 300 cycle period.
"""

import typing

import subcycle.event
import subcycle.pattern
import subcycle.signal
import subcycle.time


RAND_PERIOD_CYCLES = 300
RAND_RESOLUTION = 2 ** 29


def _xorwise (x: int) -> int:
	a = (x << 13) ^ x
	b = (a >> 17) ^ a
	return (b << 5) ^ b


def time_to_int_seed (t: subcycle.time.Time) -> int:

	"""An integer seed from the fractional part of ``t / 300``."""

	scaled = subcycle.time.to_time(t) / RAND_PERIOD_CYCLES
	fraction = scaled - int(scaled)

	return _xorwise(int(fraction * RAND_RESOLUTION))


def int_seed_to_rand (seed: int) -> float:
	return (seed % RAND_RESOLUTION) / RAND_RESOLUTION


def time_to_rand (t: subcycle.time.Time) -> float:

	"""A stable pseudorandom value in ``[0, 1)`` for time ``t``."""

	return int_seed_to_rand(time_to_int_seed(t))


def _rand_query (state: subcycle.event.State) -> typing.List[subcycle.event.Event]:
	return [subcycle.event.Event(whole=None, active=state.arc, value=time_to_rand(state.arc.midpoint))]


# A continuous signal of pseudorandom values in [0, 1).
rand = subcycle.signal.Signal(_rand_query)


def _irand (n: typing.Any) -> subcycle.signal.Signal:
	n = int(n)
	return rand.fmap(lambda value: int(value * n))


def irand (n: subcycle.pattern.Patternable) -> subcycle.signal.Signal:

	"""A continuous signal of pseudorandom integers from 0 up to ``n``."""

	if isinstance(n, subcycle.pattern.Pattern):
		return n.inner_bind(_irand)

	return _irand(n)


def _degrade_by_using (source: subcycle.signal.Signal, amount: typing.Any, pat: subcycle.signal.Signal, keep_below: bool = False) -> subcycle.signal.Signal:

	"""
	Pair each event with a value from ``source`` taken over the event's
	whole, and keep it only if that value is at least ``amount`` (or below
	it, with ``keep_below``).
	"""

	amount = float(amount)
	paired = pat.fmap(lambda value: lambda chance: (value, chance)).app_left(source)

	if keep_below:
		kept = paired.filter_values(lambda pair: pair[1] < amount)
	else:
		kept = paired.filter_values(lambda pair: pair[1] >= amount)

	return kept.fmap(lambda pair: pair[0])


def degrade_by (amount: subcycle.pattern.Patternable, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:

	"""
	Randomly drop events, each with probability ``amount``.

	The choice depends only on the event's position, so it is the same on
	every query.
	"""

	return subcycle.pattern._patternify(lambda value, p: _degrade_by_using(rand, value, p), amount, pat)


def undegrade_by (amount: subcycle.pattern.Patternable, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:

	"""The complement of :func:`degrade_by`: keeps exactly the events it would drop."""

	return subcycle.pattern._patternify(lambda value, p: _degrade_by_using(rand, value, p, keep_below=True), amount, pat)


def degrade (pat: subcycle.signal.Signal) -> subcycle.signal.Signal:

	"""Drop half of the events at random."""

	return _degrade_by_using(rand, 0.5, pat)


def sometimes_by (amount: subcycle.pattern.Patternable, func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:

	"""
	Apply ``func`` to a random ``amount`` of the events, leaving the rest.
	"""

	return subcycle.pattern.overlay(degrade_by(amount, pat), func(undegrade_by(amount, pat)))


def sometimes (func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return sometimes_by(0.5, func, pat)


def often (func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return sometimes_by(0.75, func, pat)


def rarely (func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return sometimes_by(0.25, func, pat)


def almost_never (func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return sometimes_by(0.1, func, pat)


def almost_always (func: subcycle.pattern.Transform, pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return sometimes_by(0.9, func, pat)
