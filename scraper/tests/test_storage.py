"""Tests for the keyed store backends and typed namespaces."""

from __future__ import annotations

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import redis

from shl_scraper.exceptions import StoreError
from shl_scraper.models import GameEvent, GoalInfo, PeriodEndInfo
from shl_scraper.storage import FileStore, Namespace, RecordNamespace, RedisStore, build_store, upsert_record
from shl_scraper.config import Settings


class TestFileStore:
    def test_read_missing_returns_none(self, file_store):
        assert file_store.read("ns", "missing") is None

    def test_write_then_read(self, file_store):
        file_store.write("ns", "game-1", [{"a": 1}])
        assert file_store.read("ns", "game-1") == [{"a": 1}]

    def test_url_keys_are_sanitized(self, file_store):
        key = "https://www.shl.se/api/gameday/player-stats/g1?x=1"
        file_store.write("rest", key, {"ok": True})
        path = file_store._get_path("rest", key)
        assert path.parent.name == "rest"
        assert "/" not in path.name
        assert file_store.read("rest", key) == {"ok": True}

    def test_similar_keys_do_not_collide(self, file_store):
        keys = ["a/b", "a:b", "a_b", "a?b", "a%2Fb"]
        for value, key in enumerate(keys):
            file_store.write("ns", key, value)
        assert len({file_store._get_path("ns", key) for key in keys}) == len(keys)
        assert [file_store.read("ns", key) for key in keys] == list(range(len(keys)))

    def test_namespaces_are_separate(self, file_store):
        file_store.write("a", "k", 1)
        file_store.write("b", "k", 2)
        assert file_store.read("a", "k") == 1
        assert file_store.read("b", "k") == 2

    def test_corrupt_file_reads_as_absent(self, file_store):
        path = file_store._get_path("ns", "k")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        assert file_store.read("ns", "k") is None

    def test_write_failure_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = FileStore(blocker)
        with pytest.raises(StoreError) as exc_info:
            store.write("ns", "k", [])
        assert exc_info.value.namespace == "ns"
        assert exc_info.value.key == "k"


class TestFileStoreStaleness:
    def test_absent_entry_is_stale(self, file_store):
        assert file_store.is_stale("ns", "k", timedelta(seconds=60)) is True

    def test_unset_ttl_is_always_stale(self, file_store):
        file_store.write("ns", "k", [])
        assert file_store.is_stale("ns", "k", None) is True

    def test_fresh_within_ttl(self, file_store, clock):
        file_store.write("ns", "k", [])
        clock.advance(30)
        assert file_store.is_stale("ns", "k", timedelta(seconds=60)) is False

    def test_stale_after_ttl(self, file_store, clock):
        file_store.write("ns", "k", [])
        clock.advance(61)
        assert file_store.is_stale("ns", "k", timedelta(seconds=60)) is True


class TestRedisStore:
    def _store(self, clock):
        client = MagicMock()
        data: dict[str, str] = {}
        client.get.side_effect = data.get
        client.set.side_effect = lambda k, v: data.__setitem__(k, v)
        return RedisStore(client, clock=clock), client, data

    def test_envelope_written_under_namespaced_key(self, clock):
        store, _, data = self._store(clock)
        store.write("v2_events", "g1", [1, 2])
        envelope = json.loads(data["v2_events:g1"])
        assert envelope == {"written_at": clock.now, "value": [1, 2]}

    def test_read_returns_value(self, clock):
        store, _, _ = self._store(clock)
        store.write("ns", "k", {"x": 1})
        assert store.read("ns", "k") == {"x": 1}

    def test_read_missing(self, clock):
        store, _, _ = self._store(clock)
        assert store.read("ns", "nope") is None

    def test_staleness(self, clock):
        store, _, _ = self._store(clock)
        ttl = timedelta(seconds=10)
        assert store.is_stale("ns", "k", ttl) is True
        store.write("ns", "k", [])
        assert store.is_stale("ns", "k", ttl) is False
        assert store.is_stale("ns", "k", None) is True
        clock.advance(11)
        assert store.is_stale("ns", "k", ttl) is True

    def test_corrupt_envelope_reads_as_absent(self, clock):
        store, _, data = self._store(clock)
        data["ns:k"] = "garbage"
        assert store.read("ns", "k") is None
        assert store.is_stale("ns", "k", timedelta(seconds=10)) is True

    def test_redis_errors_propagate_as_store_error(self, clock):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.set.side_effect = redis.ConnectionError("down")
        store = RedisStore(client, clock=clock)
        with pytest.raises(StoreError):
            store.read("ns", "k")
        with pytest.raises(StoreError):
            store.write("ns", "k", [])


class TestBuildStore:
    def test_file_backend(self, tmp_path):
        settings = Settings(STORE_BACKEND="file", STORE_DIR=str(tmp_path))
        store = build_store(settings)
        assert isinstance(store, FileStore)
        assert store.root == tmp_path

    def test_redis_backend(self):
        settings = Settings(STORE_BACKEND="redis", REDIS_URL="redis://cache.internal:6379/3")
        assert isinstance(build_store(settings), RedisStore)


class TestUpsertRecord:
    def test_append_when_new(self):
        records = [{"id": 1}]
        assert upsert_record(records, {"id": 2}, lambda r: r["id"]) is True
        assert records == [{"id": 1}, {"id": 2}]

    def test_replace_in_place(self):
        records = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}, {"id": 3, "v": "c"}]
        assert upsert_record(records, {"id": 2, "v": "B"}, lambda r: r["id"]) is False
        assert records == [{"id": 1, "v": "a"}, {"id": 2, "v": "B"}, {"id": 3, "v": "c"}]

    def test_lower_revision_still_wins(self):
        """No monotonicity check: the last write wins."""
        records = [{"id": 1, "rev": 5}]
        upsert_record(records, {"id": 1, "rev": 2}, lambda r: r["id"])
        assert records == [{"id": 1, "rev": 2}]


def _event(event_id: str, revision: int = 1, description: str = "") -> GameEvent:
    return GameEvent(
        game_uuid="g1",
        event_id=event_id,
        revision=revision,
        description=description,
        info=PeriodEndInfo(),
    )


class TestRecordNamespace:
    @pytest.fixture
    def events(self, file_store):
        return RecordNamespace(file_store, "v2_events", GameEvent, identity=lambda e: e.event_id)

    def test_read_all_defaults_to_empty(self, events):
        assert events.read_all("g1") == []

    def test_upsert_inserts_then_replaces(self, events):
        assert events.upsert("g1", _event("1")) is True
        assert events.upsert("g1", _event("2")) is True
        assert events.upsert("g1", _event("1", revision=2, description="edited")) is False

        stored = events.read_all("g1")
        assert [e.event_id for e in stored] == ["1", "2"]
        assert stored[0].revision == 2
        assert stored[0].description == "edited"

    def test_upsert_is_idempotent(self, events):
        events.upsert("g1", _event("1"))
        events.upsert("g1", _event("2"))
        before = events.read_all("g1")
        events.upsert("g1", _event("2"))
        assert events.read_all("g1") == before

    def test_upsert_many_counts_inserts(self, events):
        events.upsert("g1", _event("1"))
        inserted = events.upsert_many("g1", [_event("1", revision=3), _event("2"), _event("3")])
        assert inserted == 2
        assert [e.event_id for e in events.read_all("g1")] == ["1", "2", "3"]

    def test_upsert_many_empty_batch_writes_nothing(self, events, file_store):
        assert events.upsert_many("g1", []) == 0
        assert file_store.read("v2_events", "g1") is None

    def test_invalid_record_does_not_erase_its_neighbours(self, events, file_store):
        events.upsert("g1", _event("1"))
        events.upsert("g1", _event("2"))
        stored = file_store.read("v2_events", "g1")
        stored[1]["info"]["type"] = "Assist"
        file_store.write("v2_events", "g1", stored)

        assert [e.event_id for e in events.read_all("g1")] == ["1"]
        events.upsert("g1", _event("3"))

        assert [e.event_id for e in events.read_all("g1")] == ["1", "3"]

    def test_upsert_many_keeps_valid_records(self, events, file_store):
        file_store.write(
            "v2_events",
            "g1",
            [_event("1").model_dump(mode="json"), {"event_id": "broken"}],
        )
        assert events.upsert_many("g1", [_event("2")]) == 1
        assert [e.event_id for e in events.read_all("g1")] == ["1", "2"]

    def test_non_list_value_raises_store_error(self, events, file_store):
        file_store.write("v2_events", "g1", {"event_id": "1"})
        with pytest.raises(StoreError):
            events.read_all("g1")
        with pytest.raises(StoreError):
            events.upsert("g1", _event("2"))
        assert file_store.read("v2_events", "g1") == {"event_id": "1"}

    def test_variant_round_trips_through_store(self, events):
        goal = GameEvent(game_uuid="g1", event_id="9", info=GoalInfo(team="FHC", home_team_result=1))
        events.upsert("g1", goal)
        (stored,) = events.read_all("g1")
        assert stored.info == goal.info
        assert stored.should_publish()


class TestNamespace:
    def test_invalid_stored_value_reads_as_absent(self, file_store):
        file_store.write("v2_events", "g1", [{"unexpected": True}])
        events = RecordNamespace(file_store, "v2_events", GameEvent, identity=lambda e: e.event_id)
        assert events.read("g1") is None
        assert events.read_all("g1") == []

    def test_default_factory(self, file_store):
        ns = Namespace(file_store, "ns", list[int], default=list)
        assert ns.default() == []
        assert ns.read("k") is None
