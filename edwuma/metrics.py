import threading
from collections import defaultdict
from datetime import datetime, timezone
from time import time


class Metrics:
	"""In-memory request and flag-resolution counters for the web frontend."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self.total_requests = 0
		self.total_errors = 0
		self.path_counters = defaultdict(int)
		self.status_counters = defaultdict(int)
		self.total_latency_ms = 0.0
		self.last_request_timestamp = None
		self.last_request_datetime = None

		self.flag_resolutions = 0
		self.flag_fallbacks = 0
		self.flag_width_counters = defaultdict(int)

	def record_request(self, path: str, status_code: int, duration_ms: float) -> None:
		"""Record a single HTTP request."""
		now_ts = time()
		with self._lock:
			self.total_requests += 1
			self.path_counters[path] += 1
			self.status_counters[status_code] += 1
			self.total_latency_ms += duration_ms
			self.last_request_timestamp = now_ts
			self.last_request_datetime = datetime.fromtimestamp(now_ts, timezone.utc)

			if status_code >= 400:
				self.total_errors += 1

	def record_flag(self, width: int, known: bool) -> None:
		"""Record one resolved flag; unknown codes count as fallbacks."""
		with self._lock:
			self.flag_resolutions += 1
			self.flag_width_counters[width] += 1
			if not known:
				self.flag_fallbacks += 1

	def snapshot(self) -> dict:
		"""Return a snapshot of current metrics as a plain dict."""
		with self._lock:
			avg_latency = (
				self.total_latency_ms / self.total_requests
				if self.total_requests > 0
				else 0.0
			)

			return {
				"total_requests": self.total_requests,
				"total_errors": self.total_errors,
				"average_latency_ms": avg_latency,
				"by_path": dict(self.path_counters),
				"by_status_code": dict(self.status_counters),
				"last_request_timestamp": self.last_request_timestamp,
				"last_request_datetime": (
					self.last_request_datetime.isoformat()
					if self.last_request_datetime
					else None
				),
				"flag_resolutions": self.flag_resolutions,
				"flag_fallbacks": self.flag_fallbacks,
				"flags_by_width": dict(self.flag_width_counters),
			}


metrics = Metrics()
