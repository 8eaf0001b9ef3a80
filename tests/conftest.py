from pathlib import Path

import pytest

from edwuma.app import create_app
from edwuma.config import Settings
from edwuma.geolocation import GeoLocator
from edwuma.metrics import Metrics


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
	return Settings(
		base_url="https://example.test/",
		country_meta_path=tmp_path / "missing_country_meta.json",
		geoip_city_db=tmp_path / "missing.mmdb",
		geolocation_http_enabled=False,
		auth_store_path=tmp_path / "auth.json",
	)


@pytest.fixture
def client(app_settings: Settings):
	app = create_app(
		app_settings,
		app_metrics=Metrics(),
		geolocator=GeoLocator(city_db_path=app_settings.geoip_city_db, http_enabled=False),
	)
	app.config["TESTING"] = True
	return app.test_client()
