"""
A compact text notation for building signals.

The notation describes one cycle. Steps separated by spaces share the
cycle equally; brackets group steps into a single subdivided step.

**Syntax:**
- `a b c`: Steps distributed evenly across the cycle.
- `[a b]`: Groups steps into one subdivided step.
- `<a b>`: Alternates, playing one step per cycle.
- `a b, c d e`: Layers sequences on top of each other (also inside brackets).
- `~` or `.`: A rest.
- `_`: Extends the previous step by one step's length.
- `a@3`: Gives a step a relative length of 3.
- `a!3` or `a ! !`: Repeats a step.
- `a*2` / `a/2`: Plays a step faster or slower (the amount may itself be a group, e.g. `a*<2 3>`).
- `a?` or `a?0.3`: Randomly drops the step (with probability 0.5 or the given amount).
- `a(3,8)` or `a(3,8,2)`: Plays the step on a Euclidean rhythm, optionally rotated.

Words that look like integers or decimals become numbers; anything else is
kept as a string.

Example:
	```python
	import subcycle.mini_notation

	drums = subcycle.mini_notation.parse("bd(3,8) [~ sn]*2, hh*4?")
	```
"""

import dataclasses
import logging
import re
import typing

import subcycle.chance
import subcycle.event
import subcycle.pattern
import subcycle.signal
import subcycle.time


logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"(?P<symbol>[\[\]<>(),*/?!@~])|(?P<word>[^\s\[\]<>(),*/?!@~]+)|(?P<space>\s+)")
INTEGER_PATTERN = re.compile(r"^-?\d+$")
DECIMAL_PATTERN = re.compile(r"^-?(\d+\.\d*|\.\d+)$")

CLOSING = {"[": "]", "<": ">"}


class MiniNotationError(Exception):
	pass


@dataclasses.dataclass
class Token:

	"""
	A symbol or word, with its character offsets in the source text.
	"""

	kind: str
	text: str
	start: int
	end: int


@dataclasses.dataclass
class Step:

	"""
	A step in a sequence with its relative length.
	"""

	signal: subcycle.signal.Signal
	weight: subcycle.time.Time = subcycle.time.Time(1)


def parse (notation: str) -> subcycle.signal.Signal:

	"""
	Parse mini-notation into a signal.

	Raises:
		MiniNotationError: if the notation is malformed.
	"""

	tokens = _tokenize(notation)

	if not tokens:
		return subcycle.signal.Signal.silence()

	return _Parser(notation, tokens).parse()


def parse_or (notation: str, fallback: subcycle.signal.Signal) -> subcycle.signal.Signal:

	"""
	Parse mini-notation, returning ``fallback`` if the notation is malformed.

	Intended for live use, where a typo should leave the previous pattern
	playing rather than stop it.
	"""

	try:
		return parse(notation)

	except MiniNotationError as e:
		logger.warning(f"Mini-notation error, keeping previous pattern: {e}")
		return fallback


def _tokenize (text: str) -> typing.List[Token]:

	"""
	Split text into symbol and word tokens, dropping whitespace.
	"""

	tokens: typing.List[Token] = []
	position = 0

	while position < len(text):
		match = TOKEN_PATTERN.match(text, position)

		if match.lastgroup != "space":
			tokens.append(Token(match.lastgroup, match.group(), match.start(), match.end()))

		position = match.end()

	return tokens


def _parse_value (text: str) -> typing.Any:

	"""Convert a word to an int or float where it looks like one."""

	if INTEGER_PATTERN.match(text):
		return int(text)

	if DECIMAL_PATTERN.match(text):
		return float(text)

	return text


def _is_number (token: typing.Optional[Token]) -> bool:
	return token is not None and token.kind == "word" and not isinstance(_parse_value(token.text), str)


class _Parser:

	"""
	Recursive descent over the token list.
	"""

	def __init__ (self, text: str, tokens: typing.List[Token]) -> None:

		self.text = text
		self.tokens = tokens
		self.position = 0

	def parse (self) -> subcycle.signal.Signal:
		return self._parse_layers(closing=None)

	# --- Token access ---

	def _peek (self) -> typing.Optional[Token]:

		if self.position < len(self.tokens):
			return self.tokens[self.position]

		return None

	def _take (self) -> Token:

		token = self._peek()

		if token is None:
			raise MiniNotationError("Unexpected end of notation")

		self.position += 1
		return token

	def _expect (self, text: str) -> Token:

		token = self._take()

		if token.text != text:
			raise MiniNotationError(f"Expected {text!r} at {token.start}, found {token.text!r}")

		return token

	def _peek_adjacent (self, previous: Token) -> typing.Optional[Token]:

		"""The next token, if it follows ``previous`` with no space between."""

		token = self._peek()

		if token is not None and token.start == previous.end:
			return token

		return None

	# --- Grammar ---

	def _parse_layers (self, closing: typing.Optional[str], alternate: bool = False) -> subcycle.signal.Signal:

		"""
		Parse comma-separated sequences up to ``closing`` and stack them.
		"""

		layers = [self._parse_sequence(closing, alternate)]

		while self._peek() is not None and self._peek().text == ",":
			self._take()
			layers.append(self._parse_sequence(closing, alternate))

		if closing is not None:
			self._expect(closing)

		elif self._peek() is not None:
			token = self._peek()
			raise MiniNotationError(f"Unexpected {token.text!r} at {token.start}")

		if len(layers) == 1:
			return layers[0]

		return subcycle.signal.Signal.stack(layers)

	def _parse_sequence (self, closing: typing.Optional[str], alternate: bool) -> subcycle.signal.Signal:

		steps: typing.List[Step] = []

		while True:

			token = self._peek()

			if token is None:
				if closing is not None:
					raise MiniNotationError(f"Missing closing {closing!r}")
				break

			if token.text == "," or token.text == closing:
				break

			if token.kind == "symbol" and token.text in ("]", ">"):
				raise MiniNotationError(f"Unexpected closing {token.text!r} at {token.start}")

			if token.kind == "word" and token.text == "_":
				self._take()
				# A sustain with nothing before it has nothing to extend.
				if steps:
					steps[-1].weight += 1
				continue

			if token.text == "!":
				self._take()
				if not steps:
					raise MiniNotationError(f"Nothing to repeat at {token.start}")
				steps.append(dataclasses.replace(steps[-1]))
				continue

			steps.extend(self._parse_step())

		if not steps:
			return subcycle.signal.Signal.silence()

		if alternate:
			return subcycle.signal.Signal.slowcat([step.signal for step in steps])

		if len(steps) == 1:
			return steps[0].signal

		if all(step.weight == 1 for step in steps):
			return subcycle.signal.Signal.fastcat([step.signal for step in steps])

		return subcycle.signal.Signal.time_cat([(step.weight, step.signal) for step in steps])

	def _parse_step (self) -> typing.List[Step]:

		"""
		Parse a term and its modifiers, returning one step per repeat.
		"""

		signal = self._parse_term()
		weight = subcycle.time.Time(1)
		repeats = 1

		while self._peek() is not None and self._peek().text in ("*", "/", "?", "(", "!", "@"):

			modifier = self._take()

			if modifier.text == "*":
				signal = subcycle.pattern.fast(self._parse_argument(), signal)

			elif modifier.text == "/":
				signal = subcycle.pattern.slow(self._parse_argument(), signal)

			elif modifier.text == "?":
				amount = 0.5
				if _is_number(self._peek_adjacent(modifier)):
					amount = float(self._take().text)
				signal = subcycle.chance.degrade_by(amount, signal)

			elif modifier.text == "(":
				pulses = self._parse_int()
				self._expect(",")
				steps = self._parse_int()
				rotation = 0
				if self._peek() is not None and self._peek().text == ",":
					self._take()
					rotation = self._parse_int()
				self._expect(")")
				signal = subcycle.pattern.euclid_off(pulses, steps, rotation, signal)

			elif modifier.text == "!":
				if _is_number(self._peek_adjacent(modifier)):
					repeats = int(self._parse_int())
				else:
					repeats += 1

			else:
				token = self._take()
				if not _is_number(token):
					raise MiniNotationError(f"Expected a number after '@' at {token.start}")
				weight = subcycle.time.to_time(_parse_value(token.text))

		return [Step(signal, weight) for _ in range(repeats)]

	def _parse_term (self) -> subcycle.signal.Signal:

		token = self._take()

		if token.kind == "symbol" and token.text in CLOSING:
			return self._parse_layers(CLOSING[token.text], alternate=token.text == "<")

		if token.text in ("~", "."):
			return subcycle.signal.Signal.silence()

		if token.kind == "word":
			return self._atom(token)

		raise MiniNotationError(f"Unexpected {token.text!r} at {token.start}")

	def _parse_argument (self) -> typing.Union[int, float, subcycle.signal.Signal]:

		"""A modifier argument: a number, or any term giving a pattern of numbers."""

		if _is_number(self._peek()):
			return _parse_value(self._take().text)

		return self._parse_term()

	def _parse_int (self) -> int:

		token = self._take()

		if token.kind != "word" or not INTEGER_PATTERN.match(token.text):
			raise MiniNotationError(f"Expected an integer at {token.start}, found {token.text!r}")

		return int(token.text)

	def _atom (self, token: Token) -> subcycle.signal.Signal:

		"""
		A discrete value tagged with where it came from in the source.
		"""

		metadata = subcycle.event.Metadata(((self._location(token.start), self._location(token.end)),))

		return subcycle.signal.Signal.atom(_parse_value(token.text)).with_event(
			lambda event: dataclasses.replace(event, metadata=metadata)
		)

	def _location (self, offset: int) -> typing.Tuple[int, int]:

		"""The 1-based ``(column, line)`` of a character offset."""

		line = self.text.count("\n", 0, offset) + 1
		column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1

		return column, line
