"""
Tests for the snapshot wire format.
"""

import json

import pytest

from cache_aside.entities import Record
from cache_aside.services import decode_snapshot, encode_snapshot


def test_encode_is_json_array_in_order():
    records = [Record(id=2, name="Bob", email="b@x.com"), Record(id=1, name="Ana", email="a@x.com")]

    payload = json.loads(encode_snapshot(records))

    assert payload == [
        {"id": 2, "name": "Bob", "email": "b@x.com"},
        {"id": 1, "name": "Ana", "email": "a@x.com"},
    ]


def test_decode_reads_snapshot_written_by_other_clients():
    snapshot = '[{"id": 1, "name": "Ana", "email": "a@x.com"}]'

    assert decode_snapshot(snapshot) == [Record(id=1, name="Ana", email="a@x.com")]


def test_decode_empty_snapshot():
    assert decode_snapshot("[]") == []


@pytest.mark.parametrize(
    "snapshot",
    ["not json", '{"id": 1}', '[{"id": 1, "name": "Ana"}]', "[1, 2]"],
)
def test_decode_rejects_malformed_snapshots(snapshot):
    with pytest.raises(ValueError):
        decode_snapshot(snapshot)
