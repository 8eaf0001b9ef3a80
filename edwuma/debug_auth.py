"""Developer CLI: inspect the locally stored authentication token.

Usage:
	edwuma-check-auth [--store PATH] [--json]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from edwuma.config import settings

TOKEN_KEY = "edwuma_access_token"
USER_KEY = "edwuma_user_data"


class AuthStoreError(Exception):
	"""The token store exists but cannot be read as JSON."""


def _read_store(path: Path) -> dict:
	try:
		with path.open("r", encoding="utf-8") as f:
			data = json.load(f)
	except FileNotFoundError:
		return {}
	except (OSError, json.JSONDecodeError) as e:
		raise AuthStoreError(f"Cannot read auth store {path}: {e}") from e

	if not isinstance(data, dict):
		raise AuthStoreError(f"Auth store {path} must contain a JSON object")
	return data


def check_auth_status(store_path: Path) -> dict:
	"""Report whether an access token is stored, plus the cached user."""
	store = _read_store(Path(store_path))
	token = store.get(TOKEN_KEY) or None
	user = store.get(USER_KEY)

	# The browser stored user data as a JSON string; accept both shapes.
	if isinstance(user, str):
		try:
			user = json.loads(user)
		except json.JSONDecodeError as e:
			raise AuthStoreError(f"{USER_KEY} is not valid JSON: {e}") from e

	return {
		"isAuthenticated": bool(token),
		"token": token,
		"user": user or None,
	}


def format_auth_status(status: dict) -> str:
	token = status.get("token")
	user = status.get("user")
	return "\n".join(
		[
			"=== Authentication Status ===",
			f"Token exists: {'true' if token else 'false'}",
			f"Token: {token[:20] + '...' if token else 'None'}",
			f"User data: {json.dumps(user) if user else 'None'}",
			"============================",
		]
	)


def main(argv: Optional[list] = None) -> int:
	parser = argparse.ArgumentParser(description="Show the locally stored Edwuma auth state")
	parser.add_argument("--store", default=str(settings.auth_store_path))
	parser.add_argument("--json", action="store_true", help="print machine-readable JSON")
	args = parser.parse_args(argv)

	try:
		status = check_auth_status(Path(args.store))
	except AuthStoreError as e:
		print(f"[!] {e}", file=sys.stderr)
		return 2

	if args.json:
		print(json.dumps(status, sort_keys=True))
	else:
		print(format_auth_status(status))
	return 0


if __name__ == "__main__":
	sys.exit(main())
