import logging
import os

import yaml

import subcycle.mini_notation
import subcycle.signal
import subcycle.time


logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "a [b c] <d e>"


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def main () -> None:

	"""
	Parse the configured pattern and log the events it produces over the configured span.
	"""

	config = load_config()

	level = config.get('logging', {}).get('level', 'INFO')
	logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO))

	notation = config.get('pattern', DEFAULT_PATTERN)
	begin = subcycle.time.to_time(config.get('query', {}).get('begin', 0))
	end = subcycle.time.to_time(config.get('query', {}).get('end', 2))

	signal = subcycle.mini_notation.parse_or(notation, subcycle.signal.silence())

	logger.info(f"Querying {notation!r} from {begin} to {end}")

	events = sorted(signal.query_arc(begin, end), key=lambda event: event.active.begin)

	for event in events:
		logger.info(f"{event.whole} {event.active} {event.value!r}")

	logger.info(f"{len(events)} events")


if __name__ == "__main__":
	main()
