from edwuma import generate_country_meta
from edwuma.generate_country_meta import build_alpha3_to_alpha2_map, build_country_meta

RAW = [
	{
		"cca2": "GH",
		"cca3": "GHA",
		"name": {"common": "Ghana", "official": "Republic of Ghana"},
		"capital": ["Accra"],
		"idd": {"root": "+2", "suffixes": ["33"]},
		"borders": ["BFA", "CIV", "TGO"],
	},
	{
		"cca2": "CI",
		"cca3": "CIV",
		"name": {"official": "Republic of Côte d'Ivoire"},
		"idd": {"root": "+2"},
	},
	{"cca2": "", "cca3": "XXX", "name": {"common": "Nowhere"}},
]


def test_alpha3_map() -> None:
	assert build_alpha3_to_alpha2_map(RAW) == {"GHA": "GH", "CIV": "CI"}


def test_build_country_meta() -> None:
	meta = build_country_meta(RAW, build_alpha3_to_alpha2_map(RAW))
	assert set(meta) == {"GH", "CI"}

	gh = meta["GH"]
	assert gh["name"] == "Ghana"
	assert gh["capital"] == "Accra"
	assert gh["calling_code"] == "+233"
	assert gh["borders"] == ["BFA", "CI", "TGO"]
	assert gh["flag"]["png"] == "https://flagcdn.com/w40/gh.png"
	assert gh["flag"]["png_2x"] == "https://flagcdn.com/w80/gh.png"
	assert gh["flag"]["svg"] == "https://flagcdn.com/gh.svg"
	assert gh["flag"]["emoji_unicode"] == "U+1F1EC U+1F1ED"

	ci = meta["CI"]
	assert ci["name"] == "Republic of Côte d'Ivoire"
	assert ci["calling_code"] == "+2"
	assert ci["capital"] is None


def test_main_writes_file(tmp_path, monkeypatch) -> None:
	monkeypatch.setattr(generate_country_meta, "fetch_countries", lambda timeout=15: RAW)
	output = tmp_path / "data" / "country_meta.json"
	generate_country_meta.main(["--output", str(output)])
	assert output.exists()
	assert '"GH"' in output.read_text(encoding="utf-8")
