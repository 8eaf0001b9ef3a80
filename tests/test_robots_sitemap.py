from datetime import datetime, timezone

from edwuma.robots import CrawlerPolicy, CrawlerRule, default_policy, render_robots_txt
from edwuma.sitemap import render_sitemap_xml, static_pages


def test_default_policy_uses_explicit_base_url() -> None:
	policy = default_policy("https://staging.edwuma.test/")
	assert policy.sitemap == "https://staging.edwuma.test/sitemap.xml"
	agents = [rule.user_agent for rule in policy.rules]
	assert agents == ["*", "Googlebot", "Bingbot"]


def test_default_policy_blocks_private_prefixes() -> None:
	rules = {rule.user_agent: rule for rule in default_policy("https://edwuma.com").rules}
	assert "/_next/*" in rules["*"].disallow
	assert "/static/*" in rules["*"].disallow
	assert "/_next/*" not in rules["Googlebot"].disallow
	for rule in rules.values():
		assert rule.allow == ("/",)
		assert "/api/*" in rule.disallow
		assert "/private/*" in rule.disallow


def test_render_robots_txt() -> None:
	policy = CrawlerPolicy(
		rules=(CrawlerRule(user_agent="*", disallow=("/api/*",)),),
		sitemap="https://edwuma.com/sitemap.xml",
	)
	assert render_robots_txt(policy) == (
		"User-Agent: *\n"
		"Allow: /\n"
		"Disallow: /api/*\n"
		"\n"
		"Sitemap: https://edwuma.com/sitemap.xml\n"
	)


def test_sitemap_lists_static_pages() -> None:
	now = datetime(2026, 1, 2, tzinfo=timezone.utc)
	entries = static_pages("https://edwuma.com/", now)
	assert entries[0].url == "https://edwuma.com"
	assert entries[0].priority == 1.0
	assert "https://edwuma.com/jobs" in [e.url for e in entries]

	xml = render_sitemap_xml(entries)
	assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
	assert "<loc>https://edwuma.com/jobs</loc>" in xml
	assert "<changefreq>hourly</changefreq>" in xml
	assert "<lastmod>2026-01-02T00:00:00+00:00</lastmod>" in xml
	assert xml.count("<url>") == len(entries)


def test_sitemap_page_list() -> None:
	now = datetime(2026, 1, 2, tzinfo=timezone.utc)
	entries = static_pages("https://edwuma.com", now)
	assert [(e.url, e.change_frequency, e.priority) for e in entries] == [
		("https://edwuma.com", "daily", 1.0),
		("https://edwuma.com/jobs", "hourly", 0.9),
		("https://edwuma.com/blog", "weekly", 0.7),
		("https://edwuma.com/contact", "monthly", 0.5),
		("https://edwuma.com/faq", "monthly", 0.5),
		("https://edwuma.com/auth/login", "monthly", 0.4),
		("https://edwuma.com/auth/register", "monthly", 0.4),
	]
