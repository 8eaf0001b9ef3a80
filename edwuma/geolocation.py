"""Visitor geolocation used to pre-select the country filter.

Resolution order:
	1. Vercel edge headers (no lookup needed)
	2. Local GeoLite2 City database, when present
	3. ipinfo.io, then ip-api.com over HTTP

Every provider failure is logged and the next provider is tried; the caller
only ever sees a location dict or None.
"""

import ipaddress
import logging
import threading
from pathlib import Path
from typing import Mapping, Optional

import geoip2.database
import geoip2.errors
import maxminddb
import requests

logger = logging.getLogger(__name__)

# Checked in order; the first usable address wins.
CLIENT_IP_HEADERS = (
	"x-real-ip",
	"x-forwarded-for",
	"x-client-ip",
	"cf-connecting-ip",
	"x-nf-client-connection-ip",
	"x-vercel-forwarded-for",
)

USER_AGENT = "Edwuma-App/1.0"


def _location(country: str, code: str, region: str, city: str, tz: str, source: str) -> dict:
	return {
		"country": country or "",
		"countryCode": code or "",
		"region": region or "",
		"city": city or "",
		"timezone": tz or "",
		"source": source,
	}


def client_ip(headers: Mapping[str, str], remote_addr: Optional[str] = None) -> Optional[str]:
	"""Extract the visitor IP from proxy headers, skipping loopback."""
	candidates = []
	for name in CLIENT_IP_HEADERS:
		value = headers.get(name)
		if value:
			# x-forwarded-for is "client, proxy1, proxy2"
			candidates.append(value.split(",")[0].strip())
	if remote_addr:
		candidates.append(remote_addr)

	for ip in candidates:
		try:
			ip_obj = ipaddress.ip_address(ip)
		except ValueError:
			logger.debug("Ignoring malformed client IP: %s", ip)
			continue
		if ip_obj.is_loopback:
			continue
		return ip

	return None


class GeoLocator:
	"""Resolves a request's headers to a coarse visitor location."""

	def __init__(
		self,
		city_db_path: Optional[Path] = None,
		http_enabled: bool = True,
		timeout_seconds: float = 5.0,
		session: Optional[requests.Session] = None,
	) -> None:
		self.city_db_path = Path(city_db_path) if city_db_path else None
		self.http_enabled = http_enabled
		self.timeout_seconds = timeout_seconds
		self.session = session or requests.Session()
		self._city_reader = None
		self._city_db_failed = False
		self._lock = threading.Lock()

	def _reader(self):
		"""Open the GeoLite2 database once, on first use.

		A file that cannot be opened is logged once and the provider is skipped
		from then on.
		"""
		with self._lock:
			if self._city_reader is not None or self._city_db_failed:
				return self._city_reader
			if not self.city_db_path or not self.city_db_path.exists():
				return None
			try:
				self._city_reader = geoip2.database.Reader(str(self.city_db_path))
			except (OSError, maxminddb.InvalidDatabaseError) as e:
				self._city_db_failed = True
				logger.warning("Cannot open GeoLite2 City database %s: %s", self.city_db_path, e)
				return None
			logger.info("Opened GeoLite2 City database: %s", self.city_db_path)
			return self._city_reader

	def close(self) -> None:
		with self._lock:
			if self._city_reader is not None:
				self._city_reader.close()
				self._city_reader = None

	def from_vercel_headers(self, headers: Mapping[str, str]) -> Optional[dict]:
		country = headers.get("x-vercel-ip-country")
		if not country:
			return None
		return _location(
			country,
			country,
			headers.get("x-vercel-ip-country-region"),
			headers.get("x-vercel-ip-city"),
			headers.get("x-vercel-ip-timezone"),
			"vercel",
		)

	def from_geoip(self, ip: str) -> Optional[dict]:
		reader = self._reader()
		if reader is None:
			return None

		try:
			city = reader.city(ip)
		except geoip2.errors.AddressNotFoundError:
			logger.info("GeoLite2 has no record for IP: %s", ip)
			return None
		except Exception as e:
			logger.warning("GeoLite2 lookup error for IP %s: %s", ip, e)
			return None

		region = city.subdivisions.most_specific
		return _location(
			city.country.names.get("en") if city.country else None,
			city.country.iso_code if city.country else None,
			region.names.get("en") if region and region.names else None,
			city.city.names.get("en") if city.city else None,
			city.location.time_zone,
			"geoip",
		)

	def _get_json(self, url: str) -> Optional[dict]:
		resp = self.session.get(
			url,
			headers={"Accept": "application/json", "User-Agent": USER_AGENT},
			timeout=self.timeout_seconds,
		)
		if resp.status_code != 200:
			logger.warning("Geolocation provider returned status %s: %s", resp.status_code, url)
			return None
		return resp.json()

	def from_ipinfo(self, ip: str) -> Optional[dict]:
		try:
			data = self._get_json(f"https://ipinfo.io/{ip}/json")
		except (requests.RequestException, ValueError) as e:
			logger.warning("ipinfo.io failed for IP %s: %s", ip, e)
			return None
		if not data:
			return None
		return _location(
			data.get("country"),
			data.get("country"),
			data.get("region"),
			data.get("city"),
			data.get("timezone"),
			"ipinfo",
		)

	def from_ip_api(self, ip: str) -> Optional[dict]:
		try:
			data = self._get_json(f"http://ip-api.com/json/{ip}")
		except (requests.RequestException, ValueError) as e:
			logger.warning("ip-api.com failed for IP %s: %s", ip, e)
			return None
		if not data or data.get("status") != "success":
			return None
		return _location(
			data.get("country"),
			data.get("countryCode"),
			data.get("regionName"),
			data.get("city"),
			data.get("timezone"),
			"ip-api",
		)

	def detect(self, headers: Mapping[str, str], remote_addr: Optional[str] = None) -> Optional[dict]:
		"""Best-effort location for a request, or None."""
		location = self.from_vercel_headers(headers)
		if location:
			return location

		ip = client_ip(headers, remote_addr)
		if not ip:
			logger.warning("Could not determine user IP address")
			return None

		logger.info("Detected user IP: %s", ip)

		location = self.from_geoip(ip)
		if location:
			return location

		if self.http_enabled:
			for provider in (self.from_ipinfo, self.from_ip_api):
				location = provider(ip)
				if location:
					return location

		logger.warning("All geolocation methods failed for IP: %s", ip)
		return None
