# config.py

import os
from dataclasses import dataclass, field
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


def _env_bool(name: str, default: bool = False) -> bool:
	"""Read a boolean value from environment variables."""
	raw = os.getenv(name)
	if raw is None:
		return default
	return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
	"""Read an integer value from environment variables."""
	raw = os.getenv(name)
	if raw is None:
		return default
	try:
		return int(raw)
	except ValueError:
		return default


def _env_float(name: str, default: float) -> float:
	"""Read a float value from environment variables."""
	raw = os.getenv(name)
	if raw is None:
		return default
	try:
		return float(raw)
	except ValueError:
		return default


@dataclass(frozen=True)
class Settings:
	"""Central application settings loaded from environment variables."""

	# App / Flask
	port: int = _env_int("EDWUMA_PORT", 3000)
	flask_debug: bool = _env_bool("EDWUMA_DEBUG", False)
	log_level: str = os.getenv("EDWUMA_LOG_LEVEL", "INFO")
	secret_key: str = os.getenv("EDWUMA_SECRET_KEY", "dev")

	# Public site URL used by robots.txt and the sitemap
	base_url: str = os.getenv("EDWUMA_BASE_URL", "https://edwuma.com")

	# Flag images
	flag_cdn_base: str = os.getenv("EDWUMA_FLAG_CDN_BASE", "https://flagcdn.com")
	country_meta_path: Path = Path(
		os.getenv(
			"EDWUMA_COUNTRY_META_PATH",
			BASE_DIR / "data" / "country_meta.json",
		)
	)

	# Geolocation
	geoip_city_db: Path = Path(
		os.getenv(
			"EDWUMA_GEOIP_CITY_DB",
			BASE_DIR / "data" / "GeoLite2-City.mmdb",
		)
	)
	geolocation_http_enabled: bool = _env_bool(
		"EDWUMA_GEOLOCATION_HTTP_ENABLED", True
	)
	http_timeout_seconds: float = _env_float("EDWUMA_HTTP_TIMEOUT_SECONDS", 5.0)

	# UI chrome
	toast_position: str = os.getenv("EDWUMA_TOAST_POSITION", "top-right")
	toast_duration_ms: int = _env_int("EDWUMA_TOAST_DURATION_MS", 4000)

	# Local token store inspected by edwuma-check-auth
	auth_store_path: Path = Path(
		os.getenv(
			"EDWUMA_AUTH_STORE",
			Path.home() / ".edwuma" / "auth.json",
		)
	)

	# Extra trusted image hosts, comma separated hostnames
	extra_image_hosts: tuple = field(
		default_factory=lambda: tuple(
			h.strip()
			for h in os.getenv("EDWUMA_EXTRA_IMAGE_HOSTS", "").split(",")
			if h.strip()
		)
	)


settings = Settings()
