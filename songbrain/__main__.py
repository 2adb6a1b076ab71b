import logging
import os
import random
import sys
import typing

import yaml

import songbrain.arrangement
import songbrain.chords
import songbrain.constants
import songbrain.midi_export
import songbrain.sections


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def arrange_from_config (config: dict) -> songbrain.arrangement.Arrangement:

	"""
	Build an arrangement from the ``song`` section of a config dictionary.
	"""

	song = config.get('song', {}) or {}

	seed: typing.Optional[int] = song.get('seed')
	rng = random.Random(seed) if seed is not None else random.Random()

	return songbrain.arrangement.arrange_song(
		template = song.get('template', 'POP_RADIO'),
		genre = song.get('genre'),
		vibe_index = int(song.get('vibe', 0)),
		root_pc = songbrain.chords.key_name_to_pc(song.get('key', 'C')),
		scale_name = song.get('scale'),
		vocal_range = song.get('vocal_range', 'NONE'),
		steps_per_bar = int(song.get('steps_per_bar', songbrain.constants.DEFAULT_STEPS_PER_BAR)),
		spread = bool(song.get('spread', False)),
		rng = rng
	)


def main () -> None:

	"""
	Main entry point: arrange a song from a config file and optionally write it as MIDI.
	"""

	logger.info("Songbrain starting...")

	config_path = sys.argv[1] if len(sys.argv) > 1 else 'config.yaml'
	config = load_config(config_path)

	arrangement = arrange_from_config(config)

	logger.info(f"{arrangement.template_name}: {arrangement.state.total_bars} bars at {arrangement.bpm} BPM")

	for section, bars, names in arrangement.section_summary():
		logger.info(f"{songbrain.sections.section_label(section):<10} {bars:>3} bars  {' '.join(names)}")

	filename = config.get('output', {}).get('filename') if config.get('output') else None

	if filename:
		songbrain.midi_export.write_midi_file(arrangement, filename)


if __name__ == "__main__":
	main()
