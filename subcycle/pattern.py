"""
The pattern capability interface and the combinator library built on it.

:class:`Pattern` lists the few operations a pattern representation must
provide: construction (``silence``, ``atom``, ``pure``, ``stack``,
``slowcat``), mapping and pointwise combination, the join family, speeding
up, shifting, reversing, compressing into part of a cycle and filtering.
Every other combinator in this module is written only in terms of those
operations, so it works unchanged for any representation.

Time-valued arguments may be given either as plain numbers or as patterns.
A patterned argument is sampled and each of its values applied in turn,
keeping the structure of the pattern being transformed.

Example:
	```python
	import subcycle.pattern as pat
	import subcycle.signal

	drums = subcycle.signal.Signal.fastcat([
		subcycle.signal.Signal.atom("bd"),
		subcycle.signal.Signal.atom("sn"),
	])

	# Double speed on every fourth cycle, reversed every other.
	groove = pat.every(4, lambda p: pat.fast(2, p), pat.palindrome(drums))
	```
"""

import abc
import builtins
import logging
import typing

import subcycle.sequence_utils
import subcycle.time


logger = logging.getLogger(__name__)

ValueType = typing.TypeVar("ValueType")
Transform = typing.Callable[["Pattern"], "Pattern"]
Patternable = typing.Union["Pattern", typing.Any]

# Alignment strategies, named after which side's structure is kept.
SQUEEZE = "squeeze"
SQUEEZE_OUT = "squeeze_out"
CYCLE_IN = "cycle_in"
CYCLE_OUT = "cycle_out"
CYCLE_MIX = "cycle_mix"
TRIG = "trig"
TRIG_ZERO = "trig_zero"

ALIGNMENTS = (SQUEEZE, SQUEEZE_OUT, CYCLE_IN, CYCLE_OUT, CYCLE_MIX, TRIG, TRIG_ZERO)


class Pattern (abc.ABC, typing.Generic[ValueType]):

	"""
	Abstract base for pattern representations.

	Constructors are class methods so that derived combinators can build
	new patterns of the same representation as their input.
	"""

	# --- Construction ---

	@classmethod
	@abc.abstractmethod
	def silence (cls) -> "Pattern":

		"""A pattern with no events."""

		...

	@classmethod
	@abc.abstractmethod
	def atom (cls, value: typing.Any) -> "Pattern":

		"""One discrete event per cycle, filling the cycle."""

		...

	@classmethod
	@abc.abstractmethod
	def pure (cls, value: typing.Any) -> "Pattern":

		"""The representation's neutral lifting of a plain value."""

		...

	@classmethod
	@abc.abstractmethod
	def stack (cls, pats: typing.Iterable["Pattern"]) -> "Pattern":

		"""Play patterns simultaneously."""

		...

	@classmethod
	@abc.abstractmethod
	def slowcat (cls, pats: typing.Iterable["Pattern"]) -> "Pattern":

		"""Play one pattern per cycle in turn."""

		...

	# --- Primitive transformations ---

	@abc.abstractmethod
	def to_signal (self) -> "Pattern":
		...

	@abc.abstractmethod
	def fmap (self, func: typing.Callable[[ValueType], typing.Any]) -> "Pattern":
		...

	@abc.abstractmethod
	def app (self, other: "Pattern") -> "Pattern":

		"""Apply a pattern of functions to ``other``, taking structure from both."""

		...

	@abc.abstractmethod
	def app_left (self, other: "Pattern") -> "Pattern":

		"""Apply a pattern of functions to ``other``, taking structure from the functions."""

		...

	@abc.abstractmethod
	def app_right (self, other: "Pattern") -> "Pattern":

		"""Apply a pattern of functions to ``other``, taking structure from ``other``."""

		...

	@abc.abstractmethod
	def bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def inner_bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def outer_bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def squeeze_bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def trig_bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def trig_zero_bind (self, func: typing.Callable[[ValueType], "Pattern"]) -> "Pattern":
		...

	@abc.abstractmethod
	def filter_values (self, func: typing.Callable[[ValueType], bool]) -> "Pattern":
		...

	@abc.abstractmethod
	def _fast (self, factor: subcycle.time.TimeLike) -> "Pattern":
		...

	@abc.abstractmethod
	def _early (self, offset: subcycle.time.TimeLike) -> "Pattern":
		...

	@abc.abstractmethod
	def _compress_arc (self, begin: subcycle.time.TimeLike, end: subcycle.time.TimeLike) -> "Pattern":
		...

	@abc.abstractmethod
	def rev (self) -> "Pattern":
		...

	@abc.abstractmethod
	def collect (self) -> "Pattern":

		"""Group coincident events into single events with list values."""

		...

	@abc.abstractmethod
	def uncollect (self) -> "Pattern":
		...

	# --- Defaults derived from the primitives ---

	@classmethod
	def time_cat (cls, pairs: typing.Iterable[typing.Tuple[subcycle.time.TimeLike, "Pattern"]]) -> "Pattern":

		"""
		Concatenate patterns into one cycle, each taking a share proportional to its weight.
		"""

		weighted = [(subcycle.time.to_time(weight), pat) for weight, pat in pairs]
		total = sum((weight for weight, _ in weighted), subcycle.time.Time(0))

		if not weighted or total <= 0:
			logger.debug("time_cat with no positive total weight, returning silence")
			return cls.silence()

		compressed: typing.List[Pattern] = []
		begin = subcycle.time.Time(0)

		for weight, pat in weighted:
			end = begin + weight
			compressed.append(pat._compress_arc(begin / total, end / total))
			begin = end

		return cls.stack(compressed)

	@classmethod
	def fastcat (cls, pats: typing.Iterable["Pattern"]) -> "Pattern":

		"""Concatenate patterns into one cycle, giving each an equal share."""

		return cls.time_cat([(1, pat) for pat in pats])

	@classmethod
	def from_list (cls, values: typing.Iterable[typing.Any]) -> "Pattern":

		"""One value per cycle, in turn."""

		return cls.slowcat([cls.atom(value) for value in values])

	@classmethod
	def fast_from_list (cls, values: typing.Iterable[typing.Any]) -> "Pattern":

		"""All values squeezed into each cycle."""

		return cls.fastcat([cls.atom(value) for value in values])

	@classmethod
	def from_maybes (cls, values: typing.Iterable[typing.Optional[typing.Any]]) -> "Pattern":

		"""Like :meth:`fast_from_list`, with ``None`` leaving a gap."""

		return cls.fastcat([cls.silence() if value is None else cls.atom(value) for value in values])

	@classmethod
	def _run (cls, n: typing.Any) -> "Pattern":
		return cls.fast_from_list(builtins.range(int(n)))

	@classmethod
	def _scan (cls, n: typing.Any) -> "Pattern":
		return cls.slowcat([cls._run(i) for i in builtins.range(1, int(n) + 1)])

	def _slow (self, factor: subcycle.time.TimeLike) -> "Pattern":

		"""Slow down by ``factor``; slowing by zero gives silence."""

		factor = subcycle.time.to_time(factor)

		if factor == 0:
			logger.debug("slow(0) is silence")
			return self.silence()

		return self._fast(1 / factor)

	def _late (self, offset: subcycle.time.TimeLike) -> "Pattern":
		return self._early(-subcycle.time.to_time(offset))

	def join (self) -> "Pattern":
		return self.bind(_identity)

	def inner_join (self) -> "Pattern":
		return self.inner_bind(_identity)

	def outer_join (self) -> "Pattern":
		return self.outer_bind(_identity)

	def squeeze_join (self) -> "Pattern":
		return self.squeeze_bind(_identity)

	def trig_join (self) -> "Pattern":
		return self.trig_bind(_identity)

	def trig_zero_join (self) -> "Pattern":
		return self.trig_zero_bind(_identity)

	# --- Arithmetic ---

	def _reify (self, value: Patternable) -> "Pattern":

		"""Lift a plain value into this pattern's representation."""

		if isinstance(value, Pattern):
			return value

		return self.pure(value)

	def _lift2 (self, op: typing.Callable[[typing.Any, typing.Any], typing.Any], other: Patternable) -> "Pattern":
		return self.fmap(lambda a: lambda b: op(a, b)).app(self._reify(other))

	def _rlift2 (self, op: typing.Callable[[typing.Any, typing.Any], typing.Any], other: Patternable) -> "Pattern":
		return self._reify(other).fmap(lambda a: lambda b: op(a, b)).app(self)

	def __add__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a + b, other)

	def __radd__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a + b, other)

	def __sub__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a - b, other)

	def __rsub__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a - b, other)

	def __mul__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a * b, other)

	def __rmul__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a * b, other)

	def __truediv__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a / b, other)

	def __rtruediv__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a / b, other)

	def __floordiv__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a // b, other)

	def __rfloordiv__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a // b, other)

	def __mod__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a % b, other)

	def __rmod__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a % b, other)

	def __pow__ (self, other: Patternable) -> "Pattern":
		return self._lift2(lambda a, b: a ** b, other)

	def __rpow__ (self, other: Patternable) -> "Pattern":
		return self._rlift2(lambda a, b: a ** b, other)

	def __neg__ (self) -> "Pattern":
		return self.fmap(lambda a: -a)

	def __pos__ (self) -> "Pattern":
		return self

	def __abs__ (self) -> "Pattern":
		return self.fmap(abs)


def _identity (value: typing.Any) -> typing.Any:
	return value


def _default_kind () -> typing.Type[Pattern]:

	"""The representation used when nothing else decides it."""

	import subcycle.signal

	return subcycle.signal.Signal


def _kind_of (*items: typing.Any) -> typing.Type[Pattern]:

	"""The representation of the first pattern among ``items``."""

	for item in items:
		if isinstance(item, Pattern):
			return type(item)

	return _default_kind()


def reify (value: Patternable, kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:

	"""Return ``value`` if it is a pattern, otherwise lift it with ``pure``."""

	if isinstance(value, Pattern):
		return value

	if kind is None:
		kind = _default_kind()

	return kind.pure(value)


# --- Patterning of parameters ---


def _patternify (func: typing.Callable[[typing.Any, Pattern], Pattern], arg: Patternable, pat: Pattern) -> Pattern:

	"""Apply ``func(arg, pat)``, sampling ``arg`` if it is itself a pattern."""

	if isinstance(arg, Pattern):
		return arg.inner_bind(lambda value: func(value, pat))

	return func(arg, pat)


def _patternify2 (func: typing.Callable[[typing.Any, typing.Any, Pattern], Pattern], arg_a: Patternable, arg_b: Patternable, pat: Pattern) -> Pattern:

	"""Two-parameter form of :func:`_patternify`."""

	if not isinstance(arg_a, Pattern) and not isinstance(arg_b, Pattern):
		return func(arg_a, arg_b, pat)

	kind = _kind_of(arg_a, arg_b, pat)
	pat_a = reify(arg_a, kind)
	pat_b = reify(arg_b, kind)

	return pat_a.fmap(lambda a: lambda b: func(a, b, pat)).app_left(pat_b).inner_join()


def _patternify3 (func: typing.Callable[[typing.Any, typing.Any, typing.Any, Pattern], Pattern], arg_a: Patternable, arg_b: Patternable, arg_c: Patternable, pat: Pattern) -> Pattern:

	"""Three-parameter form of :func:`_patternify`."""

	if not any(isinstance(arg, Pattern) for arg in (arg_a, arg_b, arg_c)):
		return func(arg_a, arg_b, arg_c, pat)

	kind = _kind_of(arg_a, arg_b, arg_c, pat)
	pat_a = reify(arg_a, kind)
	pat_b = reify(arg_b, kind)
	pat_c = reify(arg_c, kind)

	combined = pat_a.fmap(lambda a: lambda b: lambda c: func(a, b, c, pat)).app_left(pat_b).app_left(pat_c)

	return combined.inner_join()


# --- Concatenation and layering ---


def silence (kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:
	return (kind or _default_kind()).silence()


def atom (value: typing.Any, kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:
	return (kind or _default_kind()).atom(value)


def stack (pats: typing.Iterable[Pattern]) -> Pattern:
	pats = list(pats)
	return _kind_of(*pats).stack(pats)


def slowcat (pats: typing.Iterable[Pattern]) -> Pattern:
	pats = list(pats)
	return _kind_of(*pats).slowcat(pats)


def fastcat (pats: typing.Iterable[Pattern]) -> Pattern:
	pats = list(pats)
	return _kind_of(*pats).fastcat(pats)


def time_cat (pairs: typing.Iterable[typing.Tuple[subcycle.time.TimeLike, Pattern]]) -> Pattern:
	pairs = list(pairs)
	return _kind_of(*(pat for _, pat in pairs)).time_cat(pairs)


cat = slowcat
fast_cat = fastcat


def overlay (pat_a: Pattern, pat_b: Pattern) -> Pattern:
	return stack([pat_a, pat_b])


def superimpose (func: Transform, pat: Pattern) -> Pattern:

	"""Play ``pat`` together with a transformed copy of itself."""

	return overlay(pat, func(pat))


def fast_append (pat_a: Pattern, pat_b: Pattern) -> Pattern:
	return fastcat([pat_a, pat_b])


def slow_append (pat_a: Pattern, pat_b: Pattern) -> Pattern:
	return slowcat([pat_a, pat_b])


append = slow_append


def from_list (values: typing.Iterable[typing.Any], kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:
	return (kind or _default_kind()).from_list(values)


def fast_from_list (values: typing.Iterable[typing.Any], kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:
	return (kind or _default_kind()).fast_from_list(values)


def from_maybes (values: typing.Iterable[typing.Optional[typing.Any]], kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:
	return (kind or _default_kind()).from_maybes(values)


def run (n: Patternable, kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:

	"""
	Count from 0 up to (not including) ``n`` within each cycle.

	Example:
		```python
		run(4)   # 0 1 2 3
		```
	"""

	if isinstance(n, Pattern):
		return n.bind(type(n)._run)

	return (kind or _default_kind())._run(n)


def scan (n: Patternable, kind: typing.Optional[typing.Type[Pattern]] = None) -> Pattern:

	"""
	A run of 1 in the first cycle, 2 in the second, and so on up to ``n``.
	"""

	if isinstance(n, Pattern):
		return n.bind(type(n)._scan)

	return (kind or _default_kind())._scan(n)


# --- Speed and time ---


def fast (factor: Patternable, pat: Pattern) -> Pattern:

	"""Speed up by ``factor``."""

	return _patternify(lambda value, p: p._fast(value), factor, pat)


def slow (factor: Patternable, pat: Pattern) -> Pattern:

	"""Slow down by ``factor``. ``slow(0, pat)`` is silence."""

	return _patternify(lambda value, p: p._slow(value), factor, pat)


density = fast
sparsity = slow


def early (offset: Patternable, pat: Pattern) -> Pattern:

	"""Shift the pattern earlier in time by ``offset`` cycles."""

	return _patternify(lambda value, p: p._early(value), offset, pat)


def late (offset: Patternable, pat: Pattern) -> Pattern:

	"""Shift the pattern later in time by ``offset`` cycles."""

	return _patternify(lambda value, p: p._late(value), offset, pat)


def rev (pat: Pattern) -> Pattern:
	return pat.rev()


def _inside (factor: subcycle.time.TimeLike, func: Transform, pat: Pattern) -> Pattern:
	return func(pat._slow(factor))._fast(factor)


def inside (factor: Patternable, func: Transform, pat: Pattern) -> Pattern:

	"""
	Apply ``func`` as if the pattern were ``factor`` times slower.

	``inside(2, rev, pat)`` reverses each half cycle rather than the cycle.
	"""

	return _patternify(lambda value, p: _inside(value, func, p), factor, pat)


def _outside (factor: subcycle.time.TimeLike, func: Transform, pat: Pattern) -> Pattern:

	factor = subcycle.time.to_time(factor)

	if factor == 0:
		logger.debug("outside(0) is silence")
		return pat.silence()

	return _inside(1 / factor, func, pat)


def outside (factor: Patternable, func: Transform, pat: Pattern) -> Pattern:

	"""Apply ``func`` as if the pattern were ``factor`` times faster."""

	return _patternify(lambda value, p: _outside(value, func, p), factor, pat)


# --- Conditional application ---


def when (condition: Pattern, func: Transform, pat: Pattern) -> Pattern:

	"""
	Apply ``func`` wherever the boolean pattern ``condition`` is true.
	"""

	transformed = func(pat)

	return condition.inner_bind(lambda flag: transformed if flag else pat)


def _first_of (n: typing.Any, func: Transform, pat: Pattern) -> Pattern:

	n = int(n)

	if n <= 0:
		logger.debug(f"first_of({n}) is silence")
		return pat.silence()

	return when(type(pat).from_list([True] + [False] * (n - 1)), func, pat)


def first_of (n: Patternable, func: Transform, pat: Pattern) -> Pattern:

	"""Apply ``func`` on the first of every ``n`` cycles."""

	return _patternify(lambda value, p: _first_of(value, func, p), n, pat)


def _last_of (n: typing.Any, func: Transform, pat: Pattern) -> Pattern:

	n = int(n)

	if n <= 0:
		logger.debug(f"last_of({n}) is silence")
		return pat.silence()

	return when(type(pat).from_list([False] * (n - 1) + [True]), func, pat)


def last_of (n: Patternable, func: Transform, pat: Pattern) -> Pattern:

	"""Apply ``func`` on the last of every ``n`` cycles."""

	return _patternify(lambda value, p: _last_of(value, func, p), n, pat)


every = last_of


def fold_every (ns: typing.Iterable[int], func: Transform, pat: Pattern) -> Pattern:

	"""Apply ``func`` every ``n`` cycles for each ``n`` in ``ns``."""

	for n in reversed(list(ns)):
		pat = _last_of(n, func, pat)

	return pat


# --- Values ---


def _range (low: typing.Any, high: typing.Any, pat: Pattern) -> Pattern:
	return pat.fmap(lambda value: value * (high - low) + low)


def range (low: Patternable, high: Patternable, pat: Pattern) -> Pattern:

	"""
	Scale a unipolar pattern (0 to 1) into ``low`` to ``high``.
	"""

	return _patternify2(_range, low, high, pat)


def to_bipolar (pat: Pattern) -> Pattern:

	"""Map 0..1 onto -1..1."""

	return pat.fmap(lambda value: value * 2 - 1)


def from_bipolar (pat: Pattern) -> Pattern:

	"""Map -1..1 onto 0..1."""

	return pat.fmap(lambda value: (value + 1) / 2)


# --- Structure ---


def palindrome (pat: Pattern) -> Pattern:

	"""Alternate between playing the pattern forwards and backwards."""

	return slow_append(pat, pat.rev())


def _iter (n: typing.Any, pat: Pattern, backwards: bool = False) -> Pattern:

	n = int(n)

	if n <= 0:
		logger.debug(f"iter({n}) is silence")
		return pat.silence()

	shift = pat._late if backwards else pat._early

	return type(pat).slowcat([shift(subcycle.time.Time(i, n)) for i in builtins.range(n)])


def iter (n: Patternable, pat: Pattern) -> Pattern:

	"""Start each cycle ``1/n`` of a cycle later into the pattern than the last."""

	return _patternify(lambda value, p: _iter(value, p), n, pat)


def iter_back (n: Patternable, pat: Pattern) -> Pattern:

	"""Like :func:`iter`, but moving backwards through the pattern."""

	return _patternify(lambda value, p: _iter(value, p, backwards=True), n, pat)


def _ply (factor: subcycle.time.TimeLike, pat: Pattern) -> Pattern:

	factor = subcycle.time.to_time(factor)

	if factor <= 0:
		logger.debug(f"ply({factor}) is silence")
		return pat.silence()

	kind = type(pat)

	return pat.squeeze_bind(lambda value: kind.atom(value)._fast(factor))


def ply (factor: Patternable, pat: Pattern) -> Pattern:

	"""Repeat each event ``factor`` times within its own extent."""

	return _patternify(_ply, factor, pat)


def _press_by (amount: subcycle.time.TimeLike, pat: Pattern) -> Pattern:

	amount = subcycle.time.to_time(amount)
	kind = type(pat)

	return pat.squeeze_bind(lambda value: kind.atom(value)._compress_arc(amount, 1))


def press_by (amount: Patternable, pat: Pattern) -> Pattern:

	"""Shift each event ``amount`` of the way into its extent, shortening it to fit."""

	return _patternify(_press_by, amount, pat)


def press (pat: Pattern) -> Pattern:

	"""Syncopate by shifting each event halfway into its extent."""

	return _press_by(subcycle.time.Time(1, 2), pat)


def _segment (n: subcycle.time.TimeLike, pat: Pattern) -> Pattern:

	n = subcycle.time.to_time(n)

	if n <= 0:
		logger.debug(f"segment({n}) is silence")
		return pat.silence()

	return type(pat).atom(_identity)._fast(n).app_left(pat)


def segment (n: Patternable, pat: Pattern) -> Pattern:

	"""
	Sample ``pat`` ``n`` times per cycle, giving a discrete pattern.

	Each slot takes the value at its midpoint, which makes this the usual
	way to turn a continuous waveform into steps.
	"""

	return _patternify(_segment, n, pat)


def _repeat_cycles (n: typing.Any, pat: Pattern) -> Pattern:

	n = int(n)

	if n <= 0:
		logger.debug(f"repeat_cycles({n}) is silence")
		return pat.silence()

	return type(pat).slowcat([pat] * n)


def repeat_cycles (n: Patternable, pat: Pattern) -> Pattern:

	"""Play each cycle of the pattern ``n`` times before moving on."""

	return _patternify(_repeat_cycles, n, pat)


def _fast_repeat_cycles (n: typing.Any, pat: Pattern) -> Pattern:

	n = int(n)

	if n <= 0:
		logger.debug(f"fast_repeat_cycles({n}) is silence")
		return pat.silence()

	return type(pat).fastcat([pat] * n)


def fast_repeat_cycles (n: Patternable, pat: Pattern) -> Pattern:

	"""Squeeze ``n`` repeats of each cycle into one cycle."""

	return _patternify(_fast_repeat_cycles, n, pat)


# --- Euclidean rhythms ---


def _euclid_bool (pulses: int, steps: int, kind: typing.Type[Pattern]) -> typing.Optional[Pattern]:

	"""
	A boolean step pattern of ``pulses`` hits over ``steps``.

	Negative ``pulses`` inverts the rhythm. Returns ``None`` for impossible
	rhythms.
	"""

	pulses = int(pulses)
	steps = int(steps)

	if steps <= 0 or abs(pulses) > steps:
		logger.debug(f"euclid({pulses}, {steps}) is silence")
		return None

	hits = subcycle.sequence_utils.bjorklund(abs(pulses), steps)

	if pulses < 0:
		hits = [not hit for hit in hits]

	return kind.fast_from_list(hits)


def _euclid (pulses: typing.Any, steps: typing.Any, pat: Pattern) -> Pattern:

	structure = _euclid_bool(pulses, steps, type(pat))

	if structure is None:
		return pat.silence()

	return structure.filter_values(bool).fmap(lambda _: _identity).app_left(pat)


def euclid (pulses: Patternable, steps: Patternable, pat: Pattern) -> Pattern:

	"""
	Play ``pat`` on a Euclidean rhythm of ``pulses`` hits over ``steps`` steps.

	Example:
		```python
		euclid(3, 8, atom("bd"))   # bd . . bd . . bd .
		```
	"""

	return _patternify2(_euclid, pulses, steps, pat)


def euclid_inv (pulses: Patternable, steps: Patternable, pat: Pattern) -> Pattern:

	"""Play ``pat`` on the rests of the Euclidean rhythm instead of the hits."""

	return _patternify2(lambda n, k, p: _euclid(-int(n), k, p), pulses, steps, pat)


def euclid_full (pulses: Patternable, steps: Patternable, pat: Pattern, pat_off: Pattern) -> Pattern:

	"""Play ``pat`` on the hits and ``pat_off`` on the rests."""

	return stack([euclid(pulses, steps, pat), euclid_inv(pulses, steps, pat_off)])


def _euclid_off (pulses: typing.Any, steps: typing.Any, rotation: typing.Any, pat: Pattern) -> Pattern:

	steps = int(steps)

	if steps <= 0:
		logger.debug(f"euclid_off with {steps} steps is silence")
		return pat.silence()

	return _euclid(pulses, steps, pat)._early(subcycle.time.Time(int(rotation), steps))


def euclid_off (pulses: Patternable, steps: Patternable, rotation: Patternable, pat: Pattern) -> Pattern:

	"""
	A Euclidean rhythm rotated left by ``rotation`` steps.

	The rotation is a time shift of ``rotation / steps`` cycles.
	"""

	return _patternify3(_euclid_off, pulses, steps, rotation, pat)


# --- Alignment ---


class Align:

	"""
	Two operands paired with the strategy used to combine their structure.

	Build one with :func:`squeeze`, :func:`squeeze_out`, :func:`cycle_in`,
	:func:`cycle_out`, :func:`cycle_mix`, :func:`trig` or :func:`trig_zero`,
	then pass it to an aligned operation such as :func:`add_aligned`.
	"""

	def __init__ (self, how: str, left: Patternable, right: Patternable) -> None:

		if how not in ALIGNMENTS:
			raise ValueError(f"Unknown alignment {how!r}. Available: {', '.join(ALIGNMENTS)}")

		self.how = how
		self.left = left
		self.right = right

	def __repr__ (self) -> str:
		return f"Align({self.how!r}, {self.left!r}, {self.right!r})"


def squeeze (left: Patternable, right: Patternable) -> Align:

	"""Squeeze a whole cycle of ``right`` into each event of ``left``."""

	return Align(SQUEEZE, left, right)


def squeeze_out (left: Patternable, right: Patternable) -> Align:

	"""Squeeze a whole cycle of ``left`` into each event of ``right``."""

	return Align(SQUEEZE_OUT, left, right)


def cycle_in (left: Patternable, right: Patternable) -> Align:

	"""Keep the structure of ``right``."""

	return Align(CYCLE_IN, left, right)


def cycle_out (left: Patternable, right: Patternable) -> Align:

	"""Keep the structure of ``left``."""

	return Align(CYCLE_OUT, left, right)


def cycle_mix (left: Patternable, right: Patternable) -> Align:

	"""Keep structure from both sides, intersecting the events."""

	return Align(CYCLE_MIX, left, right)


def trig (left: Patternable, right: Patternable) -> Align:

	"""Restart ``right`` at each onset of ``left``."""

	return Align(TRIG, left, right)


def trig_zero (left: Patternable, right: Patternable) -> Align:

	"""Restart ``right`` from cycle zero at each onset of ``left``."""

	return Align(TRIG_ZERO, left, right)


def app_align (func: typing.Callable[[typing.Any, Pattern], Pattern], align: Align) -> Pattern:

	"""
	Apply ``func(left_value, right)`` for every value of the left operand,
	joining the results according to the alignment.
	"""

	kind = _kind_of(align.left, align.right)
	left = reify(align.left, kind)
	right = reify(align.right, kind)

	if align.how == SQUEEZE:
		return left.squeeze_bind(lambda value: func(value, right))

	if align.how == SQUEEZE_OUT:
		return right.squeeze_bind(lambda value: left.outer_bind(lambda left_value: func(left_value, kind.pure(value))))

	if align.how == CYCLE_IN:
		return left.inner_bind(lambda value: func(value, right))

	if align.how == CYCLE_OUT:
		return left.outer_bind(lambda value: func(value, right))

	if align.how == CYCLE_MIX:
		return left.bind(lambda value: func(value, right))

	if align.how == TRIG:
		return left.trig_bind(lambda value: func(value, right))

	return left.trig_zero_bind(lambda value: func(value, right))


def _op_aligned (op: typing.Callable[[typing.Any, typing.Any], typing.Any], align: Align) -> Pattern:
	return app_align(lambda left_value, right: right.fmap(lambda right_value: op(left_value, right_value)), align)


def add_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a + b, align)


def sub_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a - b, align)


def mul_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a * b, align)


def div_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a / b, align)


def mod_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a % b, align)


def pow_aligned (align: Align) -> Pattern:
	return _op_aligned(lambda a, b: a ** b, align)


def fast_aligned (align: Align) -> Pattern:

	"""Speed up the right operand by each value of the left."""

	return app_align(lambda factor, pat: pat._fast(factor), align)


def slow_aligned (align: Align) -> Pattern:
	return app_align(lambda factor, pat: pat._slow(factor), align)


def iter_aligned (align: Align) -> Pattern:
	return app_align(_iter, align)


def ply_aligned (align: Align) -> Pattern:
	return app_align(_ply, align)
