import subcycle.chance
import subcycle.pattern

from conftest import Signal, T, seq, summarize, values


def test_time_to_rand_is_stable_and_in_range () -> None:

	"""The same time always gives the same value in [0, 1)."""

	samples = [subcycle.chance.time_to_rand(T(i, 7)) for i in range(50)]

	assert samples == [subcycle.chance.time_to_rand(T(i, 7)) for i in range(50)]
	assert all(0 <= sample < 1 for sample in samples)
	assert len(set(samples)) > 40
	assert subcycle.chance.time_to_rand(0) == 0.0


def test_rand_repeats_every_period () -> None:

	"""Random values repeat after the seed period."""

	t = T(13, 8)

	assert subcycle.chance.time_to_rand(t) == subcycle.chance.time_to_rand(t + subcycle.chance.RAND_PERIOD_CYCLES)


def test_rand_signal_samples_the_midpoint () -> None:

	"""The rand signal is continuous and sampled at the middle of the query."""

	events = subcycle.chance.rand.query_arc(0, T(1, 2))

	assert len(events) == 1
	assert events[0].whole is None
	assert events[0].value == subcycle.chance.time_to_rand(T(1, 4))


def test_irand () -> None:

	"""Random integers fall below the bound."""

	stepped = subcycle.pattern.segment(16, subcycle.chance.irand(8))

	assert all(value in range(8) for value in values(stepped.query_arc(0, 4)))


def test_degrade_by_extremes () -> None:

	"""Degrading by nothing keeps everything; by everything keeps nothing."""

	pattern = subcycle.pattern.fast(16, Signal.atom("x"))

	assert len(subcycle.chance.degrade_by(0, pattern).query_arc(0, 1)) == 16
	assert subcycle.chance.degrade_by(1, pattern).query_arc(0, 1) == []


def test_degrade_and_undegrade_are_complementary () -> None:

	"""Every event is kept by exactly one of the pair."""

	pattern = subcycle.pattern.fast(32, Signal.atom("x"))

	kept = summarize(subcycle.chance.degrade_by(0.3, pattern).query_arc(0, 2))
	dropped = summarize(subcycle.chance.undegrade_by(0.3, pattern).query_arc(0, 2))

	assert len(kept) + len(dropped) == 64
	assert not set(kept) & set(dropped)
	assert 0 < len(kept) < 64


def test_degrade_is_deterministic () -> None:

	"""Degrading is the same on every query."""

	pattern = subcycle.chance.degrade(subcycle.pattern.fast(16, Signal.atom("x")))

	assert summarize(pattern.query_arc(0, 3)) == summarize(pattern.query_arc(0, 3))


def test_sometimes_by () -> None:

	"""Some events are transformed and the rest left alone."""

	pattern = subcycle.chance.sometimes_by(0.5, lambda p: p.fmap(str.upper), subcycle.pattern.fast(32, Signal.atom("x")))
	found = values(pattern.query_arc(0, 2))

	assert len(found) == 64
	assert set(found) == {"x", "X"}


def test_sometimes_family_keeps_every_event () -> None:

	"""Each convenience form keeps the total number of events."""

	pattern = seq("a", "b", "c", "d")

	for func in (subcycle.chance.sometimes, subcycle.chance.often, subcycle.chance.rarely, subcycle.chance.almost_never, subcycle.chance.almost_always):
		assert len(func(lambda p: p.fmap(str.upper), pattern).query_arc(0, 4)) == 16
