import logging

import subcycle
import subcycle.chance
import subcycle.pattern
import subcycle.waveforms

logging.basicConfig(level=logging.INFO)

# Kick on a Euclidean rhythm, snare on the backbeat, hats thinned out at random.
drums = subcycle.parse("bd(3,8), [~ sn]*2, hh*8?0.3")

# Reverse every fourth cycle.
drums = subcycle.pattern.every(4, subcycle.pattern.rev, drums)

# A stepped sine for velocity, sampled eight times a cycle.
velocity = subcycle.pattern.range(60, 110, subcycle.pattern.segment(8, subcycle.waveforms.sine))

for cycle in range(4):

	logging.info(f"Cycle: {cycle}")

	for event in sorted(drums.query_arc(cycle, cycle + 1), key=lambda e: e.active.begin):

		if not event.has_onset():
			continue

		level = velocity.query_arc(event.active.begin, event.active.begin)
		logging.info(f"{float(event.whole.begin):6.3f} {event.value:<3} {level[0].value:.0f}")
