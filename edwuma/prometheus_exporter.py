from typing import Any, Dict


def _sanitize_label_value(value: str) -> str:
	"""Escape characters inside Prometheus label values."""
	return (
		value.replace("\\", "\\\\")
		.replace("\n", "\\n")
		.replace('"', '\\"')
	)


def _metric(lines: list, name: str, kind: str, help_text: str) -> None:
	lines.append(f"# HELP {name} {help_text}")
	lines.append(f"# TYPE {name} {kind}")


def format_prometheus_metrics(snapshot: Dict[str, Any]) -> str:
	"""Convert internal metrics snapshot into Prometheus exposition format."""
	lines: list[str] = []

	_metric(lines, "edwuma_requests_total", "counter", "Total number of HTTP requests handled.")
	lines.append(f"edwuma_requests_total {snapshot.get('total_requests', 0) or 0}")

	_metric(lines, "edwuma_requests_error_total", "counter", "Total number of 4xx/5xx HTTP responses.")
	lines.append(f"edwuma_requests_error_total {snapshot.get('total_errors', 0) or 0}")

	_metric(lines, "edwuma_request_latency_ms_average", "gauge", "Average request latency in milliseconds.")
	lines.append(f"edwuma_request_latency_ms_average {snapshot.get('average_latency_ms', 0.0) or 0.0}")

	last_ts = snapshot.get("last_request_timestamp", 0) or 0
	_metric(lines, "edwuma_last_request_timestamp_seconds", "gauge", "Unix timestamp of the last handled request.")
	lines.append(f"edwuma_last_request_timestamp_seconds {int(last_ts)}")

	_metric(lines, "edwuma_requests_by_path_total", "counter", "Total requests grouped by HTTP path.")
	for path, count in (snapshot.get("by_path") or {}).items():
		if path is None:
			continue
		label = _sanitize_label_value(str(path))
		lines.append(f'edwuma_requests_by_path_total{{path="{label}"}} {count}')

	_metric(lines, "edwuma_requests_by_status_total", "counter", "Total requests grouped by HTTP status code.")
	for status, count in (snapshot.get("by_status_code") or {}).items():
		label = _sanitize_label_value(str(status))
		lines.append(f'edwuma_requests_by_status_total{{status="{label}"}} {count}')

	_metric(lines, "edwuma_flag_resolutions_total", "counter", "Flag images resolved.")
	lines.append(f"edwuma_flag_resolutions_total {snapshot.get('flag_resolutions', 0) or 0}")

	_metric(lines, "edwuma_flag_fallbacks_total", "counter", "Flags resolved to the unknown-country placeholder.")
	lines.append(f"edwuma_flag_fallbacks_total {snapshot.get('flag_fallbacks', 0) or 0}")

	_metric(lines, "edwuma_flags_by_width_total", "counter", "Flag images resolved grouped by CDN width.")
	for width, count in (snapshot.get("flags_by_width") or {}).items():
		lines.append(f'edwuma_flags_by_width_total{{width="{width}"}} {count}')

	# Newline at the end is recommended by Prometheus
	return "\n".join(lines) + "\n"
