"""
Continuous waveform signals.

Each waveform is a pure function of time sampled at the midpoint of the
query, repeating once per cycle. The unipolar forms run from 0 to 1; the
forms ending in ``2`` are bipolar, running from -1 to 1.

Waveforms have no structure of their own, so they are usually combined with
a discrete pattern or sampled into steps:

	```python
	import subcycle.pattern as pat
	import subcycle.waveforms

	# Eight steps rising from 200 to 2000 each cycle.
	cutoff = pat.segment(8, pat.range(200, 2000, subcycle.waveforms.saw))
	```
"""

import math

import subcycle.pattern
import subcycle.signal
import subcycle.time


def _clamp_unit (value: float) -> float:
	return max(0.0, min(value, 1.0))


def _saw_at (t: subcycle.time.Time) -> float:
	return float(subcycle.time.cycle_pos(t))


def _sine2_at (t: subcycle.time.Time) -> float:
	return math.sin(math.pi * 2 * float(t))


def _env_l_at (t: subcycle.time.Time) -> float:
	return _clamp_unit(float(t))


def _env_eq_at (t: subcycle.time.Time) -> float:
	return math.sqrt(math.sin(math.pi / 2 * _clamp_unit(float(1 - t))))


def _env_eqr_at (t: subcycle.time.Time) -> float:
	return math.sqrt(math.cos(math.pi / 2 * _clamp_unit(float(1 - t))))


def _invert (pat: subcycle.signal.Signal) -> subcycle.signal.Signal:
	return pat.fmap(lambda value: 1 - value)


# Sawtooth: rises from 0 to 1 over each cycle.
saw = subcycle.signal.waveform(_saw_at)
saw2 = subcycle.pattern.to_bipolar(saw)

# Inverse sawtooth: falls from 1 to 0.
isaw = _invert(saw)
isaw2 = subcycle.pattern.to_bipolar(isaw)

# Triangle: rises over the first half cycle, falls over the second.
tri = subcycle.pattern.fast_append(saw, isaw)
tri2 = subcycle.pattern.to_bipolar(tri)

sine2 = subcycle.signal.waveform(_sine2_at)
sine = subcycle.pattern.from_bipolar(sine2)

# Cosine is sine a quarter cycle later.
cosine = sine._late(subcycle.time.Time(1, 4))
cosine2 = sine2._late(subcycle.time.Time(1, 4))

# Square: 1 for the first half cycle, 0 for the second.
square = subcycle.pattern.fast_append(subcycle.signal.steady(1), subcycle.signal.steady(0))
square2 = subcycle.pattern.fast_append(subcycle.signal.steady(-1), subcycle.signal.steady(1))

# Envelopes: a linear ramp from 0 to 1 over the first cycle, then held at 1.
env_l = subcycle.signal.waveform(_env_l_at)
env_l2 = subcycle.pattern.to_bipolar(env_l)

env_lr = _invert(env_l)
env_lr2 = subcycle.pattern.to_bipolar(env_lr)

# Equal-power envelopes, for gain crossfades.
env_eq = subcycle.signal.waveform(_env_eq_at)
env_eq2 = subcycle.pattern.to_bipolar(env_eq)

env_eqr = subcycle.signal.waveform(_env_eqr_at)
env_eqr2 = subcycle.pattern.to_bipolar(env_eqr)

# The (rational) time itself.
time = subcycle.signal.waveform(lambda t: t)
