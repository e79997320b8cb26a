import subcycle.event
import subcycle.pattern
import subcycle.signal
import subcycle.waveforms

from conftest import Arc, Signal, T, seq, summarize, values


def test_atom_per_cycle () -> None:

	"""An atom gives one event per cycle, filling the cycle."""

	assert summarize(Signal.atom("x").query_arc(0, 2)) == [
		(Arc(0, 1), Arc(0, 1), "x"),
		(Arc(1, 2), Arc(1, 2), "x"),
	]


def test_atom_fragments_partial_queries () -> None:

	"""Queries smaller than a cycle give fragments of the cycle-long event."""

	assert summarize(Signal.atom("x").query_arc(T(1, 4), T(1, 2))) == [
		(Arc(0, 1), Arc(T(1, 4), T(1, 2)), "x"),
	]

	assert summarize(Signal.atom("x").query_arc(T(1, 2), T(1, 2))) == [
		(Arc(0, 1), Arc(T(1, 2), T(1, 2)), "x"),
	]


def test_silence_is_empty () -> None:

	"""Silence has no events anywhere."""

	assert Signal.silence().query_arc(0, 10) == []


def test_fast_doubling () -> None:

	"""Doubling speed halves each event."""

	assert summarize(subcycle.pattern.fast(2, Signal.atom("x")).query_arc(0, 1)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), "x"),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "x"),
	]


def test_fast_slow_round_trip () -> None:

	"""Slowing then speeding up by the same factor changes nothing."""

	pattern = subcycle.pattern.fastcat([Signal.atom("a"), seq("b", "c", "d")])

	for factor in (2, 3, T(2, 3), 0.75):
		round_trip = subcycle.pattern.fast(factor, subcycle.pattern.slow(factor, pattern))
		assert summarize(round_trip.query_arc(T(1, 3), T(7, 2))) == summarize(pattern.query_arc(T(1, 3), T(7, 2)))


def test_fast_zero_and_negative () -> None:

	"""Zero speed is silence; a negative speed plays in reverse."""

	assert subcycle.pattern.fast(0, seq("a", "b")).query_arc(0, 1) == []
	assert subcycle.pattern.slow(0, seq("a", "b")).query_arc(0, 1) == []

	assert values(subcycle.pattern.fast(-2, seq("a", "b")).query_arc(0, 1)) == ["b", "a", "b", "a"]


def test_rev_is_an_involution () -> None:

	"""Reversing twice gives back the original."""

	pattern = subcycle.pattern.fastcat([Signal.atom("a"), seq("b", "c"), Signal.silence()])

	assert summarize(pattern.rev().rev().query_arc(0, 2)) == summarize(pattern.query_arc(0, 2))


def test_fastcat_under_rev () -> None:

	"""Reversal swaps the halves of a two-step cycle."""

	pattern = seq("a", "b")

	assert summarize(pattern.query_arc(0, 1)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), "a"),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "b"),
	]

	assert summarize(pattern.rev().query_arc(0, 1)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), "b"),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "a"),
	]


def test_compress_leaves_a_gap () -> None:

	"""Compressing fits the cycle into part of the cycle and leaves the rest empty."""

	assert summarize(subcycle.signal.compress_arc(0.25, 0.75, Signal.atom("x")).query_arc(0, 1)) == [
		(Arc(T(1, 4), T(3, 4)), Arc(T(1, 4), T(3, 4)), "x"),
	]


def test_degenerate_compress_is_silent () -> None:

	"""Inverted or out-of-range bounds give silence."""

	pattern = seq("a", "b", "c")

	for begin, end in ((0.6, 0.4), (-0.1, 0.5), (0.5, 1.5), (0.5, 0.5)):
		compressed = subcycle.signal.compress_arc(begin, end, pattern)
		assert compressed.query_arc(0, 1) == []
		assert compressed.query_arc(-3, 3) == []


def test_compress_with_duration () -> None:

	"""The duration form of compress starts at ``begin`` and lasts ``duration``."""

	assert summarize(subcycle.signal.compress(0.25, 0.5, Signal.atom("x")).query_arc(0, 1)) == [
		(Arc(T(1, 4), T(3, 4)), Arc(T(1, 4), T(3, 4)), "x"),
	]


def test_split_query_consistency () -> None:

	"""Querying across cycles equals querying each cycle separately."""

	pattern = subcycle.pattern.stack([
		Signal.slowcat([seq("a", "b"), Signal.atom("c")]),
		subcycle.pattern.fast(3, seq("d", "e")),
		subcycle.pattern.early(T(1, 4), seq("f", "g", "h", "i")),
	])

	arc = Arc(T(1, 2), T(7, 2))
	pieces = []

	for part in arc.split_arcs():
		pieces.extend(pattern.query_arc(part.begin, part.end))

	assert summarize(pattern.query_arc(arc.begin, arc.end)) == summarize(pieces)


def test_stack_is_union () -> None:

	"""Stacking gives the events of every layer, whatever the order."""

	a = seq("a", "b")
	b = subcycle.pattern.fast(3, Signal.atom("c"))

	expected = summarize(a.query_arc(0, 2) + b.query_arc(0, 2))

	assert summarize(Signal.stack([a, b]).query_arc(0, 2)) == expected
	assert summarize(Signal.stack([b, a]).query_arc(0, 2)) == expected


def test_slowcat_keeps_each_pattern_on_its_own_cycles () -> None:

	"""Each pattern in a slowcat advances only on the cycles it plays."""

	inner = Signal.slowcat([Signal.atom("x"), Signal.atom("y")])
	pattern = Signal.slowcat([inner, Signal.atom("z")])

	assert values(pattern.query_arc(0, 4)) == ["x", "z", "y", "z"]

	assert summarize(pattern.query_arc(2, 3)) == [(Arc(2, 3), Arc(2, 3), "y")]


def test_time_cat_weights () -> None:

	"""Weighted concatenation divides the cycle in proportion."""

	pattern = Signal.time_cat([(2, Signal.atom("a")), (1, Signal.atom("b"))])

	assert summarize(pattern.query_arc(0, 1)) == [
		(Arc(0, T(2, 3)), Arc(0, T(2, 3)), "a"),
		(Arc(T(2, 3), 1), Arc(T(2, 3), 1), "b"),
	]

	assert Signal.time_cat([]).query_arc(0, 1) == []
	assert Signal.time_cat([(0, Signal.atom("a"))]).query_arc(0, 1) == []


def test_controls_pass_through () -> None:

	"""Named controls reach the innermost query untouched."""

	def query (state: subcycle.event.State) -> list:
		return [subcycle.event.Event(None, state.arc, state.controls["speed"])]

	pattern = subcycle.pattern.fast(2, Signal(query))

	assert values(pattern.query_arc(0, 1, controls={"speed": 7})) == [7]


# ─── Pointwise combination ───────────────────────────────────────────────────


def test_app_intersects_structure () -> None:

	"""Combining with an operator keeps structure from both sides."""

	assert summarize((seq(1, 2) + seq(10, 20, 30)).query_arc(0, 1)) == [
		(Arc(0, T(1, 3)), Arc(0, T(1, 3)), 11),
		(Arc(T(1, 3), T(1, 2)), Arc(T(1, 3), T(1, 2)), 21),
		(Arc(T(1, 2), T(2, 3)), Arc(T(1, 2), T(2, 3)), 22),
		(Arc(T(2, 3), 1), Arc(T(2, 3), 1), 32),
	]


def test_app_left_keeps_left_wholes () -> None:

	"""Structure comes from the functions."""

	funcs = seq(1, 2).fmap(lambda a: lambda b: a + b)

	assert summarize(funcs.app_left(seq(10, 20, 30)).query_arc(0, 1)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 3)), 11),
		(Arc(0, T(1, 2)), Arc(T(1, 3), T(1, 2)), 21),
		(Arc(T(1, 2), 1), Arc(T(1, 2), T(2, 3)), 22),
		(Arc(T(1, 2), 1), Arc(T(2, 3), 1), 32),
	]


def test_app_right_keeps_right_wholes () -> None:

	"""Structure comes from the values."""

	funcs = seq(1, 2).fmap(lambda a: lambda b: a + b)

	assert summarize(funcs.app_right(seq(10, 20, 30)).query_arc(0, 1)) == [
		(Arc(0, T(1, 3)), Arc(0, T(1, 3)), 11),
		(Arc(T(1, 3), T(2, 3)), Arc(T(1, 3), T(1, 2)), 21),
		(Arc(T(1, 3), T(2, 3)), Arc(T(1, 2), T(2, 3)), 22),
		(Arc(T(2, 3), 1), Arc(T(2, 3), 1), 32),
	]


def test_scalar_operands_are_continuous () -> None:

	"""Plain numbers are lifted as continuous constants."""

	assert summarize((Signal.atom(1) + 2).query_arc(0, 1)) == [(None, Arc(0, 1), 3)]
	assert values((10 - seq(1, 2)).query_arc(0, 1)) == [9, 8]
	assert values((-seq(1, 2)).query_arc(0, 1)) == [-1, -2]


def test_operators_between_discrete_patterns () -> None:

	"""Operators between two discrete patterns stay discrete."""

	assert summarize((Signal.atom(3) * Signal.atom(4)).query_arc(0, 1)) == [(Arc(0, 1), Arc(0, 1), 12)]
	assert values((seq(7, 8) % Signal.atom(3)).query_arc(0, 1)) == [1, 2]


# ─── Joins ───────────────────────────────────────────────────────────────────


def _nested () -> Signal:
	return seq(seq("a", "b", "c"), Signal.silence())


def test_inner_join_keeps_inner_wholes () -> None:

	"""Inner joins take timing from the inner patterns."""

	assert summarize(_nested().inner_join().query_arc(0, T(1, 2))) == [
		(Arc(0, T(1, 3)), Arc(0, T(1, 3)), "a"),
		(Arc(T(1, 3), T(2, 3)), Arc(T(1, 3), T(1, 2)), "b"),
	]


def test_outer_join_keeps_outer_wholes () -> None:

	"""Outer joins take timing from the outer pattern."""

	assert summarize(_nested().outer_join().query_arc(0, T(1, 2))) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 3)), "a"),
		(Arc(0, T(1, 2)), Arc(T(1, 3), T(1, 2)), "b"),
	]


def test_join_intersects_wholes () -> None:

	"""A plain join intersects inner and outer wholes."""

	assert summarize(_nested().join().query_arc(0, T(1, 2))) == [
		(Arc(0, T(1, 3)), Arc(0, T(1, 3)), "a"),
		(Arc(T(1, 3), T(1, 2)), Arc(T(1, 3), T(1, 2)), "b"),
	]


def test_squeeze_join_fits_inner_cycles () -> None:

	"""Squeezing fits a whole cycle of each inner pattern into its outer event."""

	nested = seq(seq("a", "b"), Signal.atom("c"))

	assert summarize(nested.squeeze_join().query_arc(0, 1)) == [
		(Arc(0, T(1, 4)), Arc(0, T(1, 4)), "a"),
		(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 2)), "b"),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "c"),
	]


def test_squeeze_join_drops_continuous_inner_events () -> None:

	"""Continuous inner events have no whole to fit."""

	assert Signal.atom(subcycle.waveforms.saw).squeeze_join().query_arc(0, 1) == []


def test_trig_zero_restarts_at_each_onset () -> None:

	"""Each outer onset restarts the inner pattern from its start."""

	pattern = seq(0, 10).trig_zero_bind(lambda offset: seq(1, 2, 3, 4).fmap(lambda value: value + offset))

	assert summarize(pattern.query_arc(0, 1)) == [
		(Arc(0, T(1, 4)), Arc(0, T(1, 4)), 1),
		(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 2)), 2),
		(Arc(T(1, 2), T(3, 4)), Arc(T(1, 2), T(3, 4)), 11),
		(Arc(T(3, 4), 1), Arc(T(3, 4), 1), 12),
	]


def test_trig_uses_absolute_onset_time () -> None:

	"""Trig shifts by the absolute onset; trig zero by the position in the cycle."""

	inner = Signal.from_list(["a", "b"])

	assert values(Signal.atom("x").trig_bind(lambda _: inner).query_arc(1, 2)) == ["a"]
	assert values(Signal.atom("x").trig_zero_bind(lambda _: inner).query_arc(1, 2)) == ["b"]


def test_trig_ignores_continuous_outer_events () -> None:

	"""Continuous events have no onset to trigger from."""

	assert subcycle.waveforms.saw.trig_bind(lambda _: Signal.atom("x")).query_arc(0, 1) == []


# ─── Time remapping ──────────────────────────────────────────────────────────


def test_fast_gap () -> None:

	"""Fast gap plays one cycle in the first part of the cycle."""

	assert summarize(subcycle.signal.fast_gap(2, seq("a", "b")).query_arc(0, 2)) == [
		(Arc(0, T(1, 4)), Arc(0, T(1, 4)), "a"),
		(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 2)), "b"),
		(Arc(1, T(5, 4)), Arc(1, T(5, 4)), "a"),
		(Arc(T(5, 4), T(3, 2)), Arc(T(5, 4), T(3, 2)), "b"),
	]


def test_fast_gap_below_one_plays_unchanged () -> None:

	"""Factors below one are treated as one, so nothing is slowed down."""

	pattern = seq("a", "b")

	assert summarize(subcycle.signal.fast_gap(0.5, pattern).query_arc(0, 2)) == summarize(pattern.query_arc(0, 2))


def test_fast_gap_without_a_positive_factor_is_silent () -> None:

	"""Zero or negative factors give silence."""

	assert subcycle.signal.fast_gap(0, seq("a", "b")).query_arc(0, 1) == []
	assert subcycle.signal.fast_gap(-2, seq("a", "b")).query_arc(0, 1) == []


def test_focus_has_no_gap () -> None:

	"""Focus fits a cycle into the window and keeps playing around it."""

	assert summarize(subcycle.signal.focus_arc(T(1, 4), T(3, 4), seq("a", "b")).query_arc(0, 1)) == [
		(Arc(0, T(1, 4)), Arc(0, T(1, 4)), "b"),
		(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 2)), "a"),
		(Arc(T(1, 2), T(3, 4)), Arc(T(1, 2), T(3, 4)), "b"),
		(Arc(T(3, 4), 1), Arc(T(3, 4), 1), "a"),
	]


def test_zoom () -> None:

	"""Zoom stretches part of each cycle to fill the cycle."""

	pattern = subcycle.signal.zoom(0.25, 0.5, seq("a", "b", "c", "d"))

	assert summarize(pattern.query_arc(0, 2)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), "b"),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "c"),
		(Arc(1, T(3, 2)), Arc(1, T(3, 2)), "b"),
		(Arc(T(3, 2), 2), Arc(T(3, 2), 2), "c"),
	]


def test_zoom_with_no_span_is_silent () -> None:

	"""A zero or negative span gives silence."""

	assert subcycle.signal.zoom_arc(0.5, 0.5, seq("a", "b")).query_arc(0, 1) == []
	assert subcycle.signal.focus_arc(0.5, 0.25, seq("a", "b")).query_arc(0, 1) == []


# ─── Point queries ───────────────────────────────────────────────────────────


def _assert_within_whole (events: list) -> None:

	"""Every discrete fragment lies inside its whole, off the exclusive end."""

	for event in events:
		if event.whole is not None:
			assert event.whole.begin <= event.active.begin <= event.active.end <= event.whole.end
			assert event.active.begin < event.whole.end


def test_rev_point_at_cycle_start () -> None:

	"""A point at the start of a cycle finds the event that now starts there."""

	events = seq(1, 2, 3, 4).rev().query_arc(0, 0)

	assert summarize(events) == [(Arc(0, T(1, 4)), Arc(0, 0), 4)]
	_assert_within_whole(events)

	events = Signal.atom("x").rev().query_arc(1, 1)

	assert summarize(events) == [(Arc(1, 2), Arc(1, 1), "x")]
	_assert_within_whole(events)


def test_rev_point_on_an_inner_boundary () -> None:

	"""A point on a boundary inside the cycle belongs to the event starting there."""

	events = seq(1, 2).rev().query_arc(T(1, 2), T(1, 2))

	assert summarize(events) == [(Arc(T(1, 2), 1), Arc(T(1, 2), T(1, 2)), 1)]
	_assert_within_whole(events)

	for k in range(9):
		_assert_within_whole(seq("a", "b", "c").rev().query_arc(T(k, 3), T(k, 3)))


def test_rev_point_on_a_waveform () -> None:

	"""Continuous signals are sampled at the reflected point."""

	assert summarize(subcycle.waveforms.saw.rev().query_arc(T(1, 4), T(1, 4))) == [(None, Arc(T(1, 4), T(1, 4)), 0.75)]


def test_compress_point_queries () -> None:

	"""Points inside a compressed cycle find events; points in the gap find none."""

	pattern = subcycle.signal.compress_arc(T(1, 4), T(3, 4), seq(1, 2))

	events = pattern.query_arc(T(1, 4), T(1, 4))

	assert summarize(events) == [(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 4)), 1)]
	_assert_within_whole(events)

	assert pattern.query_arc(0, 0) == []
	assert pattern.query_arc(T(3, 4), T(3, 4)) == []
	assert pattern.query_arc(1, 1) == []

	events = subcycle.signal.fast_gap(2, seq(1, 2)).query_arc(T(1, 4), T(1, 4))

	assert summarize(events) == [(Arc(T(1, 4), T(1, 2)), Arc(T(1, 4), T(1, 4)), 2)]
	_assert_within_whole(events)


def test_zoom_point_queries () -> None:

	"""Points at cycle starts find the first event of the zoomed window."""

	pattern = subcycle.signal.zoom_arc(T(1, 4), T(3, 4), seq(1, 2, 3, 4))

	for cycle in range(3):
		events = pattern.query_arc(cycle, cycle)
		assert summarize(events) == [(Arc(cycle, cycle + T(1, 2)), Arc(cycle, cycle), 2)]
		_assert_within_whole(events)


def test_squash () -> None:

	"""Squash fits each cycle into its first part."""

	assert summarize(subcycle.signal.squash(0.5, Signal.atom("x")).query_arc(0, 1)) == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), "x"),
	]

	assert subcycle.signal.squash(0, Signal.atom("x")).query_arc(0, 1) == []

	assert summarize(subcycle.signal.squash_to(0.5, 1, Signal.atom("x")).query_arc(0, 1)) == [
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), "x"),
	]


def test_when_t_tests_cycle_numbers () -> None:

	"""Only cycles passing the test are transformed."""

	pattern = subcycle.signal.when_t(lambda cycle: cycle % 2 == 1, subcycle.pattern.rev, seq("a", "b"))

	assert values(pattern.query_arc(0, 2)) == ["a", "b", "b", "a"]


# ─── Grouping and filtering ──────────────────────────────────────────────────


def test_collect_and_uncollect () -> None:

	"""Coincident events merge into one list-valued event and split back."""

	stacked = Signal.stack([Signal.atom("a"), Signal.atom("b"), subcycle.pattern.fast(2, Signal.atom("c"))])

	collected = summarize(stacked.collect().query_arc(0, 1))

	assert collected == [
		(Arc(0, T(1, 2)), Arc(0, T(1, 2)), ["c"]),
		(Arc(0, 1), Arc(0, 1), ["a", "b"]),
		(Arc(T(1, 2), 1), Arc(T(1, 2), 1), ["c"]),
	]

	assert summarize(stacked.collect().uncollect().query_arc(0, 1)) == summarize(stacked.query_arc(0, 1))


def test_filters () -> None:

	"""Filtering by value, onset and discreteness."""

	pattern = Signal.from_maybes(["a", None, "b"])

	assert values(pattern.query_arc(0, 1)) == ["a", "b"]
	assert values(seq(1, None, 3).filter_justs().query_arc(0, 1)) == [1, 3]

	assert len(Signal.atom("x").onsets_only().query_arc(T(1, 2), T(3, 2))) == 1
	assert Signal.stack([subcycle.waveforms.saw, Signal.atom("x")]).discrete_only().query_arc(0, 1)[0].value == "x"


def test_steady_and_waveform () -> None:

	"""Continuous signals give one event per query, sampled at the midpoint."""

	assert summarize(subcycle.signal.steady(5).query_arc(0, 3)) == [(None, Arc(0, 3), 5)]
	assert summarize(subcycle.signal.waveform(lambda t: t * 2).query_arc(0, 1)) == [(None, Arc(0, 1), 1)]
