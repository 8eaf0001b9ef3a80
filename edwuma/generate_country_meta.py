import argparse
import json
from pathlib import Path

import requests

from edwuma.config import settings
from edwuma.flags import (
	FLAGCDN_BASE,
	ProviderWidth,
	circle_flag_url,
	emoji_to_unicode_codes,
	flag_emoji,
	normalize_country_code,
)

RESTCOUNTRIES_URL = "https://restcountries.com/v3.1/all"


def fetch_countries(timeout: float = 15):
	"""Fetch raw country data from RestCountries API."""
	resp = requests.get(
		RESTCOUNTRIES_URL,
		params={
			"fields": "cca2,cca3,name,capital,idd,borders",
		},
		timeout=timeout,
	)
	resp.raise_for_status()
	return resp.json()


def build_alpha3_to_alpha2_map(raw_countries) -> dict:
	"""Build a mapping from ISO3 (cca3) to ISO2 (cca2) codes."""
	mapping: dict = {}
	for c in raw_countries:
		cca2 = c.get("cca2")
		cca3 = c.get("cca3")
		if cca2 and cca3:
			mapping[cca3.upper()] = cca2.upper()
	return mapping


def _calling_code(idd: dict) -> str | None:
	# idd: { root: "+2", suffixes: ["33"] }
	root = idd.get("root")
	suffixes = idd.get("suffixes") or []
	if root and suffixes:
		return f"{root}{suffixes[0]}"
	return root or None


def build_country_meta(raw_countries, alpha3_to_alpha2: dict, cdn_base: str = FLAGCDN_BASE) -> dict:
	"""Build country metadata dict keyed by ISO2 (cca2)."""
	meta: dict = {}
	cdn_base = cdn_base.rstrip("/")
	base_width = int(ProviderWidth.W40)

	for c in raw_countries:
		code, known = normalize_country_code(c.get("cca2"))
		if not known:
			continue

		name_data = c.get("name") or {}
		name = name_data.get("common") or name_data.get("official") or code.upper()

		capitals = c.get("capital") or []

		borders_iso3 = c.get("borders") or []
		borders_iso2 = [
			alpha3_to_alpha2.get(b.upper(), b.upper()) for b in borders_iso3
		]

		emoji = flag_emoji(code)
		meta[code.upper()] = {
			"name": name,
			"calling_code": _calling_code(c.get("idd") or {}),
			"capital": capitals[0] if capitals else None,
			"borders": borders_iso2,
			"flag": {
				"png": f"{cdn_base}/w{base_width}/{code}.png",
				"png_2x": f"{cdn_base}/w{base_width * 2}/{code}.png",
				"svg": f"{cdn_base}/{code}.svg",
				"circle_svg": circle_flag_url(code),
				"emoji": emoji,
				"emoji_unicode": emoji_to_unicode_codes(emoji),
			},
		}

	return meta


def main(argv=None):
	"""Fetch, build and write country metadata file."""
	parser = argparse.ArgumentParser(description="Regenerate country_meta.json from RestCountries")
	parser.add_argument("--output", default=str(settings.country_meta_path))
	args = parser.parse_args(argv)
	output_path = Path(args.output)

	print("[*] Fetching country data from RestCountries...")
	countries = fetch_countries(timeout=settings.http_timeout_seconds * 3)
	print(f"[+] Received {len(countries)} raw country entries.")

	alpha3_to_alpha2 = build_alpha3_to_alpha2_map(countries)
	print(f"[+] Built alpha3->alpha2 mapping for {len(alpha3_to_alpha2)} codes.")

	meta = build_country_meta(countries, alpha3_to_alpha2, settings.flag_cdn_base)
	print(f"[+] Built metadata for {len(meta)} countries.")

	output_path.parent.mkdir(parents=True, exist_ok=True)

	with output_path.open("w", encoding="utf-8") as f:
		json.dump(meta, f, ensure_ascii=False, indent=2)

	print(f"[+] Written country_meta.json to: {output_path}")


if __name__ == "__main__":
	main()
