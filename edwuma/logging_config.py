import logging
import sys

from edwuma.config import settings


def setup_logging(level: str | None = None) -> None:
	"""Configure root logger for the application."""
	level_name = level or getattr(settings, "log_level", "INFO")
	numeric_level = getattr(logging, level_name.upper(), logging.INFO)

	# Basic configuration for root logger
	logging.basicConfig(
		level=numeric_level,
		format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
		stream=sys.stdout,
	)

	# Werkzeug repeats every request line we already log ourselves
	logging.getLogger("werkzeug").setLevel(logging.WARNING)
	logging.getLogger("urllib3").setLevel(logging.WARNING)
	logging.getLogger("requests").setLevel(logging.WARNING)
