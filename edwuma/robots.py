"""robots.txt policy for search engine crawlers."""

from dataclasses import dataclass, field
from typing import List, Tuple


_PRIVATE_PREFIXES = ("/api/*", "/dashboard/*", "/admin/*", "/private/*")


@dataclass(frozen=True)
class CrawlerRule:
	user_agent: str
	allow: Tuple[str, ...] = ("/",)
	disallow: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CrawlerPolicy:
	rules: Tuple[CrawlerRule, ...]
	sitemap: str


def default_policy(base_url: str) -> CrawlerPolicy:
	"""Site-wide crawler policy with the sitemap hosted under base_url."""
	base = base_url.rstrip("/")
	return CrawlerPolicy(
		rules=(
			CrawlerRule(
				user_agent="*",
				disallow=(
					"/api/*",
					"/dashboard/*",
					"/admin/*",
					"/_next/*",
					"/static/*",
					"/private/*",
				),
			),
			CrawlerRule(user_agent="Googlebot", disallow=_PRIVATE_PREFIXES),
			CrawlerRule(user_agent="Bingbot", disallow=_PRIVATE_PREFIXES),
		),
		sitemap=f"{base}/sitemap.xml",
	)


def render_robots_txt(policy: CrawlerPolicy) -> str:
	lines: List[str] = []
	for rule in policy.rules:
		lines.append(f"User-Agent: {rule.user_agent}")
		for prefix in rule.allow:
			lines.append(f"Allow: {prefix}")
		for prefix in rule.disallow:
			lines.append(f"Disallow: {prefix}")
		lines.append("")

	lines.append(f"Sitemap: {policy.sitemap}")
	return "\n".join(lines) + "\n"
