"""Wire format of the cached snapshot: a JSON array of record objects."""

import json
from dataclasses import asdict

from cache_aside.entities import Record


def encode_snapshot(records: list[Record]) -> str:
    """Serialize records as a JSON array, preserving order."""
    return json.dumps([asdict(record) for record in records])


def decode_snapshot(snapshot: str) -> list[Record]:
    """Parse a JSON array produced by encode_snapshot.

    Raises:
        ValueError: if the payload is not a JSON array of record objects
    """
    items = json.loads(snapshot)
    if not isinstance(items, list):
        raise ValueError("Snapshot must be a JSON array")

    try:
        return [Record(id=int(item["id"]), name=item["name"], email=item["email"]) for item in items]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed record in snapshot: {e}") from e
