"""Tests for the draft store and debounced writer."""

import logging
import sqlite3
import time
from decimal import Decimal

import pytest

from paintcalc.config import settings
from paintcalc.data.drafts import (
    DebouncedDraftWriter,
    DraftStore,
    has_meaningful_exterior_draft,
)
from paintcalc.models.draft import StoredDraft
from paintcalc.models.estimate import (
    InteriorJobInput,
    RoomType,
    TrimMode,
    WindowInput,
    create_room,
)
from paintcalc.models.exterior import (
    ExteriorJobInput,
    FlakingSeverity,
    GarageDoorInput,
)

KEY = "test-draft"


@pytest.fixture
def store(tmp_path):
    return DraftStore(db_path=str(tmp_path / "drafts.db"))


@pytest.fixture
def interior_job():
    room = create_room(
        "Kitchen",
        floor_sqft=Decimal("210.5"),
        room_type=RoomType.KITCHEN,
        trim_mode=TrimMode.BASEBOARDS_LF,
        baseboard_lf=Decimal("64"),
        windows=(WindowInput(Decimal("1")), WindowInput(Decimal("2"))),
    )
    return InteriorJobInput(rooms=(room,), num_wall_colors=2, job_name="Smith")


class TestDraftStore:
    def test_round_trip_interior(self, store, interior_job):
        key = settings.interior_draft_key
        saved_at = store.save_now(key, interior_job)
        assert saved_at is not None

        draft = store.load(key, InteriorJobInput)
        assert draft.data == interior_job
        assert draft.saved_at == saved_at
        assert store.last_saved(key) == saved_at

    def test_round_trip_exterior(self, store, one_story_house):
        job = ExteriorJobInput(
            id=one_story_house.id,
            house_sqft=one_story_house.house_sqft,
            flaking_severity=FlakingSeverity.HEAVY,
            heavy_flaking_adjustment=Decimal("0.7"),
            garage_doors=GarageDoorInput(1, 1),
        )
        store.save_now(settings.exterior_draft_key, job)
        assert store.load(settings.exterior_draft_key, ExteriorJobInput).data == job

    def test_missing_draft(self, store):
        assert store.load(KEY, InteriorJobInput) is None
        assert store.has_draft(KEY, InteriorJobInput) is False
        assert store.last_saved(KEY) is None

    def test_overwrite(self, store, interior_job):
        store.save_now(KEY, interior_job)
        store.save_now(KEY, InteriorJobInput())
        assert store.load(KEY, InteriorJobInput).data == InteriorJobInput()

    def test_clear(self, store, interior_job):
        store.save_now(KEY, interior_job)
        store.clear(KEY)
        assert store.has_draft(KEY, InteriorJobInput) is False

    def test_keys_are_independent(self, store, interior_job, one_story_house):
        store.save_now("interior", interior_job)
        store.save_now("exterior", one_story_house)
        store.clear("interior")
        assert store.load("exterior", ExteriorJobInput).data == one_story_house

    def test_unreadable_draft_is_discarded(self, store, caplog):
        with sqlite3.connect(store.db_path) as conn:
            conn.execute(
                "INSERT INTO drafts (draft_key, data_json, saved_at) VALUES (?, ?, ?)",
                (KEY, "{not json", 0),
            )
        with caplog.at_level(logging.WARNING):
            assert store.load(KEY, InteriorJobInput) is None
        assert "unreadable draft" in caplog.text

    def test_creates_parent_directory(self, tmp_path):
        DraftStore(db_path=str(tmp_path / "nested" / "dir" / "drafts.db"))
        assert (tmp_path / "nested" / "dir").is_dir()


class TestDebouncedDraftWriter:
    def test_flush_writes_last_pending_job(self, store):
        writer = DebouncedDraftWriter(store, KEY, debounce_ms=60_000)
        writer.save(InteriorJobInput(job_name="first"))
        writer.save(InteriorJobInput(job_name="second"))
        assert writer.has_pending
        assert store.load(KEY, InteriorJobInput) is None

        writer.flush()
        assert not writer.has_pending
        assert store.load(KEY, InteriorJobInput).data.job_name == "second"
        assert writer.last_saved == store.last_saved(KEY)

    def test_cancel_drops_pending(self, store):
        writer = DebouncedDraftWriter(store, KEY, debounce_ms=60_000)
        writer.save(InteriorJobInput(job_name="draft"))
        writer.cancel()
        writer.flush()
        assert store.load(KEY, InteriorJobInput) is None

    def test_timer_writes_after_delay(self, store):
        writer = DebouncedDraftWriter(store, KEY, debounce_ms=10)
        writer.save(InteriorJobInput(job_name="later"))

        deadline = time.monotonic() + 5
        while writer.last_saved is None and time.monotonic() < deadline:
            time.sleep(0.01)
        assert store.load(KEY, InteriorJobInput).data.job_name == "later"

    def test_superseded_timer_does_not_write_early(self, store, monkeypatch):
        timers = []

        class ManualTimer:
            """Fires only when the test says so; cancel() cannot stop a callback already running."""

            def __init__(self, interval, function, args=()):
                self.function = function
                self.args = args
                self.daemon = False
                timers.append(self)

            def start(self):
                pass

            def cancel(self):
                pass

            def fire(self):
                self.function(*self.args)

        monkeypatch.setattr("paintcalc.data.drafts.threading.Timer", ManualTimer)
        writer = DebouncedDraftWriter(store, KEY, debounce_ms=500)
        writer.save(InteriorJobInput(job_name="first"))
        writer.save(InteriorJobInput(job_name="second"))

        timers[0].fire()
        assert store.load(KEY, InteriorJobInput) is None
        assert writer.has_pending

        timers[1].fire()
        assert store.load(KEY, InteriorJobInput).data.job_name == "second"
        assert not writer.has_pending

    def test_save_now_and_clear(self, store):
        writer = DebouncedDraftWriter(store, KEY, debounce_ms=60_000)
        writer.save_now(InteriorJobInput(job_name="now"))
        assert writer.last_saved is not None
        assert store.has_draft(KEY, InteriorJobInput)

        writer.clear()
        assert writer.last_saved is None
        assert not store.has_draft(KEY, InteriorJobInput)


class TestMeaningfulExteriorDraft:
    def test_empty_draft_is_not_offered(self):
        draft = StoredDraft[ExteriorJobInput](data=ExteriorJobInput(id="x"), saved_at=0)
        assert has_meaningful_exterior_draft(draft) is False
        assert has_meaningful_exterior_draft(None) is False

    def test_draft_with_data(self, one_story_house):
        draft = StoredDraft[ExteriorJobInput](data=one_story_house, saved_at=0)
        assert has_meaningful_exterior_draft(draft) is True
        shutters_only = StoredDraft[ExteriorJobInput](
            data=ExteriorJobInput(id="x", shutter_count=4), saved_at=0
        )
        assert has_meaningful_exterior_draft(shutters_only) is True
