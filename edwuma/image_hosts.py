"""Allow-list of remote image hosts the pages may embed."""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Tuple
from urllib.parse import urlparse


@dataclass(frozen=True)
class RemotePattern:
	hostname: str
	pathname: str = "/**"
	protocol: str = "https"

	def matches(self, url: str) -> bool:
		parsed = urlparse(url)
		if parsed.scheme != self.protocol:
			return False
		if (parsed.hostname or "").lower() != self.hostname.lower():
			return False
		# fnmatch "*" already crosses "/", so "**" behaves like a deep glob
		return fnmatchcase(parsed.path or "/", self.pathname)


DEFAULT_REMOTE_PATTERNS: Tuple[RemotePattern, ...] = (
	RemotePattern("jobdataapi.com", "/media/company/logo/**"),
	RemotePattern("api-test.edwuma.com"),
	RemotePattern("flagcdn.com"),
	RemotePattern("hatscripts.github.io", "/circle-flags/**"),
)


def build_patterns(extra_hosts: Iterable[str] = ()) -> Tuple[RemotePattern, ...]:
	return DEFAULT_REMOTE_PATTERNS + tuple(RemotePattern(h) for h in extra_hosts)


def is_trusted_image_url(url: str, patterns: Iterable[RemotePattern] = DEFAULT_REMOTE_PATTERNS) -> bool:
	return any(p.matches(url) for p in patterns)
