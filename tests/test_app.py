def test_robots_txt_uses_configured_base_url(client) -> None:
	resp = client.get("/robots.txt")
	assert resp.status_code == 200
	assert resp.mimetype == "text/plain"
	body = resp.get_data(as_text=True)
	assert "User-Agent: Googlebot" in body
	assert body.strip().endswith("Sitemap: https://example.test/sitemap.xml")


def test_sitemap_xml(client) -> None:
	resp = client.get("/sitemap.xml")
	assert resp.status_code == 200
	assert "<loc>https://example.test/jobs</loc>" in resp.get_data(as_text=True)


def test_flag_api_default_size(client) -> None:
	resp = client.get("/api/flags/GH")
	assert resp.status_code == 200
	data = resp.get_json()
	assert data["display_size"] == 20
	assert data["src"] == "https://flagcdn.com/w20/gh.png"
	assert data["src_2x"] == "https://flagcdn.com/w40/gh.png"
	assert data["alt"] == "Flag of Ghana (GH)"


def test_flag_api_collapses_sizes(client) -> None:
	data = client.get("/api/flags/ng?size=40").get_json()
	assert data["width"] == 80
	assert data["src"].endswith("/w80/ng.png")


def test_flag_api_unknown_code(client) -> None:
	data = client.get("/api/flags/USA?size=24").get_json()
	assert data["known"] is False
	assert data["src"] == "https://flagcdn.com/w40/xx.png"
	assert data["alt"] == "Flag of an unknown country"


def test_flag_api_rejects_unsupported_size(client) -> None:
	for size in ("18", "big"):
		resp = client.get(f"/api/flags/gh?size={size}")
		assert resp.status_code == 400
		assert resp.get_json()["error"] == "invalid_argument"


def test_flag_widget_html(client) -> None:
	resp = client.get("/flags/ke?size=32&rounded=0")
	assert resp.status_code == 200
	html = resp.get_data(as_text=True)
	assert 'src="https://flagcdn.com/w40/ke.png"' in html
	assert 'srcset="https://flagcdn.com/w80/ke.png 2x"' in html
	assert 'width="32" height="24"' in html
	assert "rounded-sm" not in html
	assert 'loading="lazy"' in html


def test_flag_widget_unknown_code_shows_toast(client) -> None:
	html = client.get("/flags/123").get_data(as_text=True)
	assert "Unknown country code: 123" in html
	assert "toast-error" in html
	assert 'data-duration="4000"' in html
	assert "rounded-sm" in html


def test_page_loader(client) -> None:
	assert "Loading..." in client.get("/loading").get_data(as_text=True)
	assert "Fetching jobs" in client.get("/loading?message=Fetching%20jobs").get_data(as_text=True)


def test_geolocation_without_ip_returns_null(client) -> None:
	resp = client.get("/api/geolocation", environ_base={"REMOTE_ADDR": "127.0.0.1"})
	assert resp.status_code == 200
	assert resp.get_json() is None


def test_geolocation_from_vercel_headers(client) -> None:
	resp = client.get("/api/geolocation", headers={"X-Vercel-IP-Country": "NG"})
	assert resp.get_json()["countryCode"] == "NG"


def test_health_and_metrics(client) -> None:
	assert client.get("/health").get_json() == {"status": "ok"}
	client.get("/api/flags/gh")
	client.get("/api/flags/zz1")

	snap = client.get("/metrics").get_json()
	assert snap["flag_resolutions"] == 2
	assert snap["flag_fallbacks"] == 1
	assert snap["by_path"]["/health"] == 1

	text = client.get("/metrics?format=prometheus").get_data(as_text=True)
	assert "edwuma_flag_resolutions_total 2" in text
