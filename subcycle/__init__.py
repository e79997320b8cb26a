"""
Subcycle - patterns as pure functions of rational time.

A pattern in Subcycle is not a list of notes but a query: ask it for any
span of time and it answers with the events active in that span. Time is
measured in cycles using exact fractions, so subdivisions never drift and
any part of any cycle can be asked for directly, in any order.

What makes it different:

- **Exact time.** Every boundary is a ``fractions.Fraction``. Thirds,
  fifths and sevenths line up exactly however deeply they are nested.
- **Discrete and continuous together.** Events with a whole (``atom``)
  sit alongside continuous signals (``saw``, ``sine``, ``rand``) that are
  sampled wherever they are asked, and the two combine freely.
- **Composable transforms.** ``fast``, ``slow``, ``rev``, ``every``,
  ``euclid``, ``ply``, ``zoom`` and many more take patterns and return
  patterns. Their numeric arguments may themselves be patterns.
- **Structure-aware arithmetic.** ``a + b`` combines values where events
  overlap; ``squeeze``, ``cycle_in``, ``trig`` and friends say whose
  structure the result keeps.
- **Mini-notation.** ``parse("bd(3,8) [~ sn]*2")`` builds a signal from a
  compact string.
- **Repeatable randomness.** Random values are a function of time, so a
  pattern sounds the same every time it is queried.

Minimal example:

    ```python
    import subcycle
    import subcycle.pattern as pat

    melody = pat.every(3, pat.rev, subcycle.parse("0 [2 4] <7 9>"))

    for event in melody.query_arc(0, 1):
        print(event.whole, event.value)
    ```

Package-level exports: ``Signal``, ``Pattern``, ``Arc``, ``Event``, ``State``,
``Time``, ``parse``.
"""

import subcycle.event
import subcycle.mini_notation
import subcycle.pattern
import subcycle.signal
import subcycle.time


Arc = subcycle.time.Arc
Event = subcycle.event.Event
Pattern = subcycle.pattern.Pattern
Signal = subcycle.signal.Signal
State = subcycle.event.State
Time = subcycle.time.Time
parse = subcycle.mini_notation.parse
