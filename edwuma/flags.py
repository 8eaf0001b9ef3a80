"""Country code -> flag image helpers.

Keep this as the ONLY flag mapping in the project.

Notes:
  - UI display sizes collapse onto a few FlagCDN widths so the CDN edge
    caches fewer distinct assets.
  - Every resolved flag has a 2x variant for high-density screens.
  - Malformed codes never raise: they resolve to the "xx" placeholder so the
    page layout stays intact. Only sizes/widths outside their enumerations
    are treated as caller bugs.
  - FlagCDN URLs use lowercase codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from edwuma.countries import DEFAULT_COUNTRY_NAMES


FLAGCDN_BASE = "https://flagcdn.com"
CIRCLE_FLAGS_BASE = "https://hatscripts.github.io/circle-flags/flags"

PLACEHOLDER_CODE = "xx"
UNKNOWN_ALT = "Flag of an unknown country"

# Widths FlagCDN serves for PNG flags.
CDN_WIDTHS = (20, 40, 80, 160, 320, 640, 1280, 2560)

_ALIASES = {
	"UK": "GB",
}


class InvalidArgument(ValueError):
	"""A display size or provider width outside its enumeration."""


class DisplaySize(IntEnum):
	XS = 16
	SM = 20
	MD = 24
	LG = 32
	XL = 40


class ProviderWidth(IntEnum):
	"""Base widths whose 2x variant FlagCDN also serves."""

	W20 = 20
	W40 = 40
	W80 = 80
	W160 = 160


_WIDTH_MAP = {
	DisplaySize.XS: ProviderWidth.W20,
	DisplaySize.SM: ProviderWidth.W20,
	DisplaySize.MD: ProviderWidth.W40,
	DisplaySize.LG: ProviderWidth.W40,
	DisplaySize.XL: ProviderWidth.W80,
}


def _check_width_table(width_map) -> None:
	"""Fail on import when a display size or base width is left unmapped."""
	missing = set(DisplaySize) - set(width_map)
	if missing:
		raise RuntimeError(f"No provider width mapped for display sizes: {sorted(int(s) for s in missing)}")

	for width in ProviderWidth:
		if width * 2 not in CDN_WIDTHS:
			raise RuntimeError(f"FlagCDN does not serve a 2x variant for w{int(width)}")


_check_width_table(_WIDTH_MAP)


def _coerce(enum_cls, value, label: str):
	# bool is an int subclass; True would otherwise look like a size
	if isinstance(value, bool) or not isinstance(value, int):
		raise InvalidArgument(f"{label} must be an integer, got {value!r}")
	try:
		return enum_cls(value)
	except ValueError:
		allowed = ", ".join(str(int(m)) for m in enum_cls)
		raise InvalidArgument(f"Unsupported {label} {value!r} (expected one of {allowed})") from None


def resolve_width(size) -> ProviderWidth:
	"""Map a UI display size onto the FlagCDN width used to render it."""
	return _WIDTH_MAP[_coerce(DisplaySize, size, "display size")]


def normalize_country_code(code) -> Tuple[str, bool]:
	"""Fold a country code to FlagCDN's lowercase two-letter form.

	Returns ``(code, True)`` for a usable code and ``(PLACEHOLDER_CODE, False)``
	for anything else (empty, wrong length, non-letters, non-strings).
	"""
	if not isinstance(code, str):
		return PLACEHOLDER_CODE, False

	value = code.strip().upper()
	value = _ALIASES.get(value, value)

	# Some callers pass emoji or full names; keep it strict.
	if len(value) != 2 or not value.isascii() or not value.isalpha():
		return PLACEHOLDER_CODE, False

	return value.lower(), True


@dataclass(frozen=True)
class FlagImage:
	"""Everything the rendering layer needs to draw one flag."""

	code: str
	known: bool
	width: int
	src: str
	src_2x: str
	alt: str

	@property
	def srcset(self) -> str:
		return f"{self.src_2x} 2x"

	def as_dict(self) -> dict:
		return {
			"code": self.code,
			"known": self.known,
			"width": self.width,
			"src": self.src,
			"src_2x": self.src_2x,
			"srcset": self.srcset,
			"alt": self.alt,
		}


class FlagResolver:
	"""Builds FlagCDN references and alt text for country codes.

	Instances are immutable and safe to share between requests/threads.
	"""

	def __init__(
		self,
		cdn_base: str = FLAGCDN_BASE,
		names: Optional[Mapping[str, str]] = None,
		placeholder: str = PLACEHOLDER_CODE,
	) -> None:
		if len(placeholder) != 2 or not placeholder.isascii() or not placeholder.isalpha():
			raise InvalidArgument(f"Placeholder must be two ASCII letters, got {placeholder!r}")
		self._cdn_base = cdn_base.rstrip("/")
		self._placeholder = placeholder.lower()
		self._names = MappingProxyType(
			dict(DEFAULT_COUNTRY_NAMES if names is None else names)
		)

	@property
	def cdn_base(self) -> str:
		return self._cdn_base

	@property
	def placeholder(self) -> str:
		return self._placeholder

	def url(self, code: str, width: int) -> str:
		return f"{self._cdn_base}/w{int(width)}/{code}.png"

	def alt_text(self, code: str, known: bool) -> str:
		if not known:
			return UNKNOWN_ALT

		upper = code.upper()
		name = self._names.get(upper)
		if name and name != upper:
			return f"Flag of {name} ({upper})"
		return f"Flag of {upper}"

	def resolve(self, code, width) -> FlagImage:
		"""Resolve a country code at a provider width into a FlagImage."""
		base = _coerce(ProviderWidth, width, "provider width")
		normalized, known = normalize_country_code(code)
		if not known:
			normalized = self._placeholder

		return FlagImage(
			code=normalized,
			known=known,
			width=int(base),
			src=self.url(normalized, base),
			src_2x=self.url(normalized, base * 2),
			alt=self.alt_text(normalized, known),
		)

	def resolve_for_display(self, code, size) -> FlagImage:
		return self.resolve(code, resolve_width(size))


default_resolver = FlagResolver()


def resolve(code, width) -> FlagImage:
	return default_resolver.resolve(code, width)


def resolve_for_display(code, size) -> FlagImage:
	return default_resolver.resolve_for_display(code, size)


def flag_image_url(code, width: int = 40) -> str:
	"""Single FlagCDN PNG URL at any width the CDN serves."""
	if isinstance(width, bool) or width not in CDN_WIDTHS:
		raise InvalidArgument(f"Unsupported FlagCDN width {width!r}")
	normalized, _ = normalize_country_code(code)
	return default_resolver.url(normalized, width)


def circle_flag_url(code) -> str:
	"""Round SVG flag from the Hatscripts circle-flags set."""
	normalized, _ = normalize_country_code(code)
	return f"{CIRCLE_FLAGS_BASE}/{normalized}.svg"


def flag_emoji(code) -> Optional[str]:
	"""Convert an ISO2 country code to a flag emoji."""
	normalized, known = normalize_country_code(code)
	if not known:
		return None

	base = 0x1F1E6
	return "".join(chr(base + ord(ch) - ord("a")) for ch in normalized)


def emoji_to_unicode_codes(emoji: str | None) -> str | None:
	"""Convert emoji string to unicode code representation (e.g. U+1F1E7 U+1F1EA)."""
	if not emoji:
		return None
	return " ".join(f"U+{ord(ch):04X}" for ch in emoji)
