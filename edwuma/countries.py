"""Country display data.

Flag emojis do not render on every device, so pages show a region globe next
to the country name and rely on flag images (see flags.py) for the flag itself.
"""

import json
import logging
from pathlib import Path
from typing import Dict, NamedTuple

logger = logging.getLogger(__name__)


class CountryInfo(NamedTuple):
	code: str
	name: str
	region: str


AFRICAN_COUNTRIES: Dict[str, CountryInfo] = {
	"GH": CountryInfo("GH", "Ghana", "west-africa"),
	"NG": CountryInfo("NG", "Nigeria", "west-africa"),
	"KE": CountryInfo("KE", "Kenya", "east-africa"),
	"ZA": CountryInfo("ZA", "South Africa", "southern-africa"),
	"EG": CountryInfo("EG", "Egypt", "north-africa"),
	"ET": CountryInfo("ET", "Ethiopia", "east-africa"),
	"TZ": CountryInfo("TZ", "Tanzania", "east-africa"),
	"UG": CountryInfo("UG", "Uganda", "east-africa"),
	"RW": CountryInfo("RW", "Rwanda", "east-africa"),
	"SN": CountryInfo("SN", "Senegal", "west-africa"),
	"CI": CountryInfo("CI", "Côte d'Ivoire", "west-africa"),
	"CM": CountryInfo("CM", "Cameroon", "central-africa"),
	"MA": CountryInfo("MA", "Morocco", "north-africa"),
	"TN": CountryInfo("TN", "Tunisia", "north-africa"),
	"BW": CountryInfo("BW", "Botswana", "southern-africa"),
	"ZW": CountryInfo("ZW", "Zimbabwe", "southern-africa"),
	"MU": CountryInfo("MU", "Mauritius", "east-africa"),
}

_REGION_EMOJIS = {
	"west-africa": "🌍",
	"east-africa": "🌍",
	"southern-africa": "🌍",
	"north-africa": "🌍",
	"central-africa": "🌍",
	"diaspora": "🌎",
}

DEFAULT_COUNTRY_NAMES: Dict[str, str] = {
	code: info.name for code, info in AFRICAN_COUNTRIES.items()
}


def country_name(code: str) -> str:
	"""Return the display name for an ISO2 code, or the upper-cased code."""
	info = AFRICAN_COUNTRIES.get(code.upper())
	return info.name if info else code.upper()


def region_emoji(region: str) -> str:
	return _REGION_EMOJIS.get(region, "🌍")


def country_display(code: str) -> dict:
	"""Name, globe emoji and region for a country code."""
	info = AFRICAN_COUNTRIES.get(code.upper())
	if info:
		return {
			"name": info.name,
			"emoji": region_emoji(info.region),
			"region": info.region,
		}

	return {"name": code, "emoji": "🌍", "region": "unknown"}


def load_country_names(path: Path) -> Dict[str, str]:
	"""Merge names from a generated country_meta.json over the built-in table.

	A missing file is not an error: the built-in table is returned as is.
	"""
	names = dict(DEFAULT_COUNTRY_NAMES)
	try:
		with Path(path).open("r", encoding="utf-8") as f:
			meta = json.load(f)
	except FileNotFoundError:
		logger.info("Country metadata file not found: %s", path)
		return names

	for code, entry in meta.items():
		if not isinstance(entry, dict):
			continue
		name = entry.get("name")
		if name and len(code) == 2:
			names[code.upper()] = name

	logger.info("Loaded country names for %d countries.", len(names))
	return names
