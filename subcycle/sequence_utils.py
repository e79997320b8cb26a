import typing


def bjorklund (pulses: int, steps: int) -> typing.List[bool]:

	"""
	Distribute ``pulses`` hits as evenly as possible over ``steps`` steps.

	Uses Bjorklund's algorithm, rotated so that the first step is a hit.

	Example:
		```python
		bjorklund(3, 8)   # x . . x . . x .
		```
	"""

	if steps <= 0:
		raise ValueError(f"Steps ({steps}) must be positive")

	if pulses < 0 or pulses > steps:
		raise ValueError(f"Pulses ({pulses}) must be between 0 and steps ({steps})")

	if pulses == 0:
		return [False] * steps

	if pulses == steps:
		return [True] * steps

	sequence: typing.List[bool] = []
	counts: typing.List[int] = []
	remainders: typing.List[int] = [pulses]
	divisor = steps - pulses
	level = 0

	while True:
		counts.append(divisor // remainders[level])
		remainders.append(divisor % remainders[level])
		divisor = remainders[level]
		level += 1
		if remainders[level] <= 1:
			break

	counts.append(divisor)

	def build (level: int) -> None:
		if level == -1:
			sequence.append(False)
		elif level == -2:
			sequence.append(True)
		else:
			for _ in range(counts[level]):
				build(level - 1)
			if remainders[level] != 0:
				build(level - 2)

	build(level)

	first_hit = sequence.index(True)

	return sequence[first_hit:] + sequence[:first_hit]
