from edwuma.flags import circle_flag_url, resolve
from edwuma.image_hosts import RemotePattern, build_patterns, is_trusted_image_url


def test_flag_urls_are_trusted() -> None:
	flag = resolve("gh", 20)
	assert is_trusted_image_url(flag.src)
	assert is_trusted_image_url(flag.src_2x)
	assert is_trusted_image_url(circle_flag_url("gh"))


def test_company_logos_only_under_logo_path() -> None:
	assert is_trusted_image_url("https://jobdataapi.com/media/company/logo/acme/logo.png")
	assert not is_trusted_image_url("https://jobdataapi.com/media/other/logo.png")


def test_protocol_and_host_must_match() -> None:
	assert not is_trusted_image_url("http://flagcdn.com/w20/gh.png")
	assert not is_trusted_image_url("https://localhost:3000/_next/image?url=x")
	assert not is_trusted_image_url("https://evil.example/flagcdn.com/w20/gh.png")


def test_extra_hosts() -> None:
	patterns = build_patterns(["images.example.test"])
	assert RemotePattern("images.example.test") in patterns
	assert is_trusted_image_url("https://images.example.test/a/b.png", patterns)
