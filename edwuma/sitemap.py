"""Static sitemap for the public pages."""

from datetime import datetime, timezone
from typing import Iterable, List, NamedTuple, Optional
from xml.sax.saxutils import escape


class SitemapEntry(NamedTuple):
	url: str
	last_modified: datetime
	change_frequency: str
	priority: float


# path, change frequency, priority
_STATIC_PAGES = (
	("", "daily", 1.0),
	("/jobs", "hourly", 0.9),
	("/blog", "weekly", 0.7),
	("/contact", "monthly", 0.5),
	("/faq", "monthly", 0.5),
	("/auth/login", "monthly", 0.4),
	("/auth/register", "monthly", 0.4),
)


def static_pages(base_url: str, now: Optional[datetime] = None) -> List[SitemapEntry]:
	base = base_url.rstrip("/")
	now = now or datetime.now(timezone.utc)
	return [
		SitemapEntry(f"{base}{path}", now, freq, priority)
		for path, freq, priority in _STATIC_PAGES
	]


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
	lines = [
		'<?xml version="1.0" encoding="UTF-8"?>',
		'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
	]
	for entry in entries:
		lines.append("<url>")
		lines.append(f"<loc>{escape(entry.url)}</loc>")
		lines.append(f"<lastmod>{entry.last_modified.isoformat()}</lastmod>")
		lines.append(f"<changefreq>{entry.change_frequency}</changefreq>")
		lines.append(f"<priority>{entry.priority:.1f}</priority>")
		lines.append("</url>")
	lines.append("</urlset>")
	return "\n".join(lines) + "\n"
