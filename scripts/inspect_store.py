#!/usr/bin/env python3
"""List the keys held in the configured Redis storage.

Session records are summarized by subject and access-token expiry; other
string values are shown truncated. Token values are never printed.

Usage:
    REDIS_URL=redis://localhost:6379 python scripts/inspect_store.py
"""

import asyncio
import sys

from pydantic import ValidationError
from redis.asyncio import Redis

from skylogin.config import Settings
from skylogin.domain.model import TokenSet
from skylogin.persistence.codec import decode_value
from skylogin.persistence.error import RecordSerializationError

PREVIEW_LENGTH = 50


def describe_expiry(token_set: dict) -> str:
    """Expiry of a stored token set; unparseable values are shown as stored."""
    expires_at = token_set.get("expires_at")
    if expires_at is None:
        return "never"
    try:
        parsed = TokenSet.model_validate({"access_token": "", "expires_at": expires_at})
    except ValidationError:
        return str(expires_at)
    return parsed.expires_at.isoformat()


def describe(key: str, raw: str) -> list[str]:
    """Human-readable lines describing one stored string value."""
    try:
        value = decode_value(key, raw)
    except RecordSerializationError:
        return [f"  -> Value: {raw[:PREVIEW_LENGTH]}..."]

    if isinstance(value, dict) and isinstance(value.get("tokenSet"), dict):
        return [
            f"  -> Session for: {value.get('sub') or 'unknown'}",
            f"  -> Access Token expires: {describe_expiry(value['tokenSet'])}",
        ]
    return [f"  -> Value: {raw[:PREVIEW_LENGTH]}..."]


async def main() -> int:
    settings = Settings()
    url = settings.redis_url or "redis://localhost:6379"

    client = Redis.from_url(url, decode_responses=True)
    try:
        await client.ping()
        print(f"Connected to Redis at {url}")

        keys = [key async for key in client.scan_iter("*")]
        print(f"Found {len(keys)} keys:")

        for key in sorted(keys):
            key_type = await client.type(key)
            print(f"- {key} ({key_type})")
            if key_type == "string" and not key.startswith(settings.storage.lock_prefix):
                raw = await client.get(key)
                if raw is not None:
                    for line in describe(key, raw):
                        print(line)
    finally:
        await client.aclose()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
