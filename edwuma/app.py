import logging
import time

from flask import Flask, Response, g, jsonify, render_template, request

from edwuma.config import Settings, settings as default_settings
from edwuma.countries import load_country_names
from edwuma.flags import DisplaySize, FlagResolver, InvalidArgument
from edwuma.geolocation import GeoLocator
from edwuma.image_hosts import build_patterns, is_trusted_image_url
from edwuma.logging_config import setup_logging
from edwuma.metrics import Metrics, metrics as default_metrics
from edwuma.prometheus_exporter import format_prometheus_metrics
from edwuma.robots import default_policy, render_robots_txt
from edwuma.sitemap import render_sitemap_xml, static_pages
from edwuma.ui import DEFAULT_LOADER_MESSAGE, ToastOptions, pending_toasts, push_toast

logger = logging.getLogger(__name__)


def _size_arg(default: int = DisplaySize.SM) -> int:
	"""Read ?size= as an int; non-numeric values are a bad request."""
	raw = request.args.get("size")
	if raw is None or raw == "":
		return int(default)
	try:
		return int(raw)
	except ValueError:
		raise InvalidArgument(f"display size must be an integer, got {raw!r}") from None


def create_app(app_settings: Settings | None = None, app_metrics: Metrics | None = None,
		geolocator: GeoLocator | None = None) -> Flask:
	"""Build the Flask app with all collaborators wired from settings."""
	cfg = app_settings or default_settings
	stats = app_metrics or default_metrics

	app = Flask(__name__)
	app.config["SECRET_KEY"] = cfg.secret_key

	resolver = FlagResolver(
		cdn_base=cfg.flag_cdn_base,
		names=load_country_names(cfg.country_meta_path),
	)
	image_patterns = build_patterns(cfg.extra_image_hosts)
	robots_txt = render_robots_txt(default_policy(cfg.base_url))
	toast_options = ToastOptions(position=cfg.toast_position, duration_ms=cfg.toast_duration_ms)
	locator = geolocator or GeoLocator(
		city_db_path=cfg.geoip_city_db,
		http_enabled=cfg.geolocation_http_enabled,
		timeout_seconds=cfg.http_timeout_seconds,
	)

	if not is_trusted_image_url(resolver.url("gh", 20), image_patterns):
		logger.warning("Flag CDN %s is not in the trusted image hosts", resolver.cdn_base)

	app.extensions["edwuma"] = {
		"settings": cfg,
		"resolver": resolver,
		"metrics": stats,
		"geolocator": locator,
	}

	@app.context_processor
	def inject_ui():
		return {"pending_toasts": pending_toasts, "toast_options": toast_options}

	@app.before_request
	def before_request():
		"""Store request start time for latency measurement."""
		g.request_start_time = time.perf_counter()

	@app.after_request
	def after_request(response):
		"""Log request details and record metrics after each response."""
		start = getattr(g, "request_start_time", None)
		duration_ms = (time.perf_counter() - start) * 1000.0 if start is not None else 0.0

		stats.record_request(path=request.path, status_code=response.status_code, duration_ms=duration_ms)

		logger.info(
			"request_completed method=%s path=%s status=%s duration_ms=%.2f client_ip=%s",
			request.method,
			request.path,
			response.status_code,
			duration_ms,
			request.headers.get("X-Forwarded-For", request.remote_addr),
		)
		response.headers.pop("X-Powered-By", None)
		return response

	@app.errorhandler(InvalidArgument)
	def invalid_argument(e):
		return jsonify({"error": "invalid_argument", "details": str(e)}), 400

	@app.route("/robots.txt")
	def robots():
		return Response(robots_txt, mimetype="text/plain")

	@app.route("/sitemap.xml")
	def sitemap():
		return Response(render_sitemap_xml(static_pages(cfg.base_url)), mimetype="application/xml")

	@app.route("/api/flags/<code>")
	def flag_lookup(code):
		"""Resolve a flag image reference.

		Query params:
			size=16|20|24|32|40  -> on-screen size (default 20)
		"""
		size = _size_arg()
		flag = resolver.resolve_for_display(code, size)
		stats.record_flag(flag.width, flag.known)

		payload = flag.as_dict()
		payload["display_size"] = size
		return jsonify(payload)

	@app.route("/flags/<code>")
	def flag_widget(code):
		size = _size_arg()
		rounded = request.args.get("rounded", "1").lower() in ("1", "true", "yes")
		flag = resolver.resolve_for_display(code, size)
		stats.record_flag(flag.width, flag.known)

		if not flag.known:
			push_toast(f"Unknown country code: {code}", "error")
		return render_template("flag.html", flag=flag, size=size, rounded=rounded)

	@app.route("/loading")
	def page_loader():
		message = request.args.get("message") or DEFAULT_LOADER_MESSAGE
		return render_template("page_loader.html", message=message)

	@app.route("/api/geolocation")
	def geolocation():
		try:
			location = locator.detect(request.headers, request.remote_addr)
		except Exception:
			logger.exception("Geolocation API error")
			return jsonify({"error": "Failed to detect location"}), 500
		return jsonify(location)

	@app.route("/health")
	def health():
		"""Simple health check endpoint."""
		return jsonify({"status": "ok"}), 200

	@app.route("/metrics")
	def metrics_endpoint():
		"""Expose in-memory metrics as JSON, or Prometheus text with ?format=prometheus."""
		snap = stats.snapshot()
		if request.args.get("format", "").lower() == "prometheus":
			return Response(format_prometheus_metrics(snap), mimetype="text/plain; version=0.0.4")
		return jsonify(snap), 200

	return app


def main() -> None:
	# Configure logging before creating the app
	setup_logging()
	app = create_app()
	app.run(
		host="0.0.0.0",
		port=default_settings.port,
		debug=default_settings.flask_debug,
	)


if __name__ == "__main__":
	main()
