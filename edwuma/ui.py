"""UI chrome shared by all pages: toast notifications and the page loader."""

from dataclasses import dataclass
from typing import List, Tuple

from flask import flash, get_flashed_messages

TOAST_LEVELS = ("info", "success", "error")
DEFAULT_LOADER_MESSAGE = "Loading..."


@dataclass(frozen=True)
class ToastOptions:
	position: str = "top-right"
	duration_ms: int = 4000
	class_name: str = "text-sm md:text-base"


def push_toast(message: str, level: str = "info") -> None:
	"""Queue a toast for the next rendered page."""
	if level not in TOAST_LEVELS:
		raise ValueError(f"Unknown toast level {level!r}")
	flash(message, level)


def pending_toasts() -> List[Tuple[str, str]]:
	"""Drain queued toasts as (level, message) pairs."""
	return get_flashed_messages(with_categories=True)
