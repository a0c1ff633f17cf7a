"""
Settings for the command-line programs, loaded from an optional YAML file.

Example ``chainwalk.yaml``::

	logging:
	  level: DEBUG
	snakes:
	  max_length: 60
	tweets:
	  max_length: 20
"""

import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "chainwalk.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass
class Settings:

	"""
	Runtime settings for the snakes and tweets programs.

	Attributes:
		log_level: Name of the root logging level.
		snakes_max_length: Cap on cells emitted per board route.
		tweets_max_length: Cap on words emitted per tweet.
	"""

	log_level: str = "INFO"
	snakes_max_length: int = 60
	tweets_max_length: int = 20


	@classmethod
	def from_mapping (cls, data: typing.Optional[typing.Dict[str, typing.Any]]) -> "Settings":

		"""
		Build settings from a parsed YAML document, ignoring unknown keys.

		Raises:
			ValueError: A recognised key has an invalid value.
		"""

		settings = cls()

		if not data:
			return settings

		if not isinstance(data, dict):
			raise ValueError("Configuration must be a mapping")

		level = _section(data, "logging").get("level", settings.log_level)

		if str(level).upper() not in LOG_LEVELS:
			raise ValueError(f"Unknown log level: {level}")

		settings.log_level = str(level).upper()
		settings.snakes_max_length = _positive_int(_section(data, "snakes").get("max_length", settings.snakes_max_length), "snakes.max_length")
		settings.tweets_max_length = _positive_int(_section(data, "tweets").get("max_length", settings.tweets_max_length), "tweets.max_length")

		return settings


def _section (data: typing.Dict[str, typing.Any], name: str) -> typing.Dict[str, typing.Any]:

	section = data.get(name) or {}

	if not isinstance(section, dict):
		raise ValueError(f"Configuration section '{name}' must be a mapping")

	return section


def _positive_int (value: typing.Any, name: str) -> int:

	if isinstance(value, bool) or not isinstance(value, int) or value < 1:
		raise ValueError(f"{name} must be a positive integer")

	return value


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> Settings:

	"""
	Load settings from a YAML file, falling back to defaults when it is missing.
	"""

	if not os.path.exists(config_path):
		logger.debug(f"Config file {config_path} not found. Using defaults.")
		return Settings()

	with open(config_path, 'r') as f:
		return Settings.from_mapping(yaml.safe_load(f))
