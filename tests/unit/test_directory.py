"""Tests for ResidentDirectory."""
from __future__ import annotations

import threading

import pytest

from resident_directory.directory.models import (
    LIVES_HERE_MESSAGE,
    MOVED_AWAY_MESSAGE,
    NOT_FOUND_MESSAGE,
    Person,
    PersonAdded,
    ResidencyStatus,
)
from resident_directory.directory.store import ResidentDirectory

LIVES = ResidencyStatus.LIVES_HERE
MOVED = ResidencyStatus.MOVED_AWAY


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def events() -> list[PersonAdded]:
    return []


@pytest.fixture()
def directory(events: list[PersonAdded]) -> ResidentDirectory:
    return ResidentDirectory(sink=events.append)


@pytest.fixture()
def populated(directory: ResidentDirectory) -> ResidentDirectory:
    directory.add_new_person("Cyndie", 23, LIVES)
    directory.add_new_person("Jordan", 24, MOVED)
    directory.add_new_person("Jackson", 28, LIVES)
    return directory


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------

class TestEmptyDirectory:
    def test_no_residents(self) -> None:
        directory = ResidentDirectory()
        assert directory.residents == []
        assert len(directory) == 0
        assert directory.count_residents() == 0

    def test_unknown_name_not_found(self) -> None:
        directory = ResidentDirectory()
        assert directory.get_residency_status("nonexistent") == NOT_FOUND_MESSAGE
        assert directory.lookup("nonexistent") is None

    def test_add_without_sink(self) -> None:
        directory = ResidentDirectory()
        directory.add_new_person("Cyndie", 23, LIVES)
        assert len(directory) == 1


# ---------------------------------------------------------------------------
# add_new_person
# ---------------------------------------------------------------------------

class TestAddNewPerson:
    def test_returns_none(self, directory: ResidentDirectory) -> None:
        assert directory.add_new_person("Cyndie", 23, LIVES) is None

    def test_appends_record(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("Cyndie", 23, LIVES)
        assert directory.residents == [Person("Cyndie", 23, LIVES)]

    def test_indexes_record(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("Cyndie", 23, LIVES)
        assert directory.lookup("Cyndie") == Person("Cyndie", 23, LIVES)
        assert "Cyndie" in directory

    def test_preserves_insertion_order(self, populated: ResidentDirectory) -> None:
        assert [p.name for p in populated.residents] == ["Cyndie", "Jordan", "Jackson"]

    def test_accepts_status_string_value(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("Jordan", 24, "moved_away")
        assert directory.lookup("Jordan").residency_status is MOVED  # type: ignore[union-attr]

    def test_accepts_empty_name_and_zero_age(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("", 0, LIVES)
        assert directory.get_residency_status("") == LIVES_HERE_MESSAGE

    def test_no_upper_age_bound(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("Old", 10_000, LIVES)
        assert directory.lookup("Old").age == 10_000  # type: ignore[union-attr]

    def test_negative_age_raises(self, directory: ResidentDirectory) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            directory.add_new_person("Cyndie", -1, LIVES)
        assert len(directory) == 0

    def test_non_integer_age_raises(self, directory: ResidentDirectory) -> None:
        with pytest.raises(TypeError):
            directory.add_new_person("Cyndie", 23.5, LIVES)  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", [["x"], None, 42])
    def test_non_string_name_raises_without_storing(
        self, directory: ResidentDirectory, events: list[PersonAdded], name: object
    ) -> None:
        with pytest.raises(TypeError, match="name must be a string"):
            directory.add_new_person(name, 1, LIVES)  # type: ignore[arg-type]
        assert len(directory) == 0
        assert directory.residents == []
        assert events == []

    def test_unknown_status_raises(self, directory: ResidentDirectory) -> None:
        with pytest.raises(ValueError):
            directory.add_new_person("Cyndie", 23, "visiting")
        assert len(directory) == 0

    def test_residents_is_a_copy(self, populated: ResidentDirectory) -> None:
        snapshot = populated.residents
        snapshot.clear()
        assert len(populated.residents) == 3


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class TestPersonAddedNotification:
    def test_one_event_per_add(
        self, populated: ResidentDirectory, events: list[PersonAdded]
    ) -> None:
        assert len(events) == 3

    def test_event_carries_inputs(
        self, directory: ResidentDirectory, events: list[PersonAdded]
    ) -> None:
        directory.add_new_person("Jordan", 24, MOVED)
        assert events == [PersonAdded("Jordan", 24, MOVED, sequence=0)]

    def test_events_in_add_order(
        self, populated: ResidentDirectory, events: list[PersonAdded]
    ) -> None:
        assert [e.name for e in events] == ["Cyndie", "Jordan", "Jackson"]
        assert [e.sequence for e in events] == [0, 1, 2]

    def test_repeat_add_still_emits(
        self, directory: ResidentDirectory, events: list[PersonAdded]
    ) -> None:
        directory.add_new_person("A", 1, LIVES)
        directory.add_new_person("A", 1, LIVES)
        assert len(events) == 2

    def test_queries_do_not_emit(
        self, populated: ResidentDirectory, events: list[PersonAdded]
    ) -> None:
        populated.get_residency_status("Cyndie")
        populated.count_residents()
        assert len(events) == 3

    def test_sink_error_propagates_after_store(self) -> None:
        def failing_sink(event: PersonAdded) -> None:
            raise RuntimeError("sink down")

        directory = ResidentDirectory(sink=failing_sink)
        with pytest.raises(RuntimeError, match="sink down"):
            directory.add_new_person("Cyndie", 23, LIVES)
        assert directory.lookup("Cyndie") is not None
        assert len(directory) == 1

    def test_set_sink_only_receives_later_adds(self) -> None:
        directory = ResidentDirectory()
        directory.add_new_person("Cyndie", 23, LIVES)
        received: list[PersonAdded] = []
        directory.set_sink(received.append)
        directory.add_new_person("Jordan", 24, MOVED)
        assert [e.name for e in received] == ["Jordan"]
        assert received[0].sequence == 1


# ---------------------------------------------------------------------------
# get_residency_status
# ---------------------------------------------------------------------------

class TestGetResidencyStatus:
    def test_lives_here(self, populated: ResidentDirectory) -> None:
        assert populated.get_residency_status("Cyndie") == "This person lives here!"

    def test_moved_away(self, populated: ResidentDirectory) -> None:
        assert (
            populated.get_residency_status("Jordan")
            == "This person relocated to another area!"
        )

    def test_unknown(self, populated: ResidentDirectory) -> None:
        assert (
            populated.get_residency_status("Unknown")
            == "This person does not exist in the registry"
        )

    def test_name_lookup_is_exact(self, populated: ResidentDirectory) -> None:
        assert populated.get_residency_status("cyndie") == NOT_FOUND_MESSAGE


# ---------------------------------------------------------------------------
# count_residents
# ---------------------------------------------------------------------------

class TestCountResidents:
    def test_scenario(self, populated: ResidentDirectory) -> None:
        assert populated.count_residents() == 2

    @pytest.mark.parametrize(
        ("status", "delta"),
        [(LIVES, 1), (MOVED, 0)],
    )
    def test_count_delta_per_add(
        self, populated: ResidentDirectory, status: ResidencyStatus, delta: int
    ) -> None:
        before = populated.count_residents()
        length_before = len(populated)
        populated.add_new_person("Someone", 40, status)
        assert populated.count_residents() == before + delta
        assert len(populated) == length_before + 1


# ---------------------------------------------------------------------------
# Append log vs latest-wins index
# ---------------------------------------------------------------------------

class TestReAddedName:
    def test_index_reflects_latest(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("A", 30, LIVES)
        directory.add_new_person("A", 31, MOVED)
        assert directory.get_residency_status("A") == MOVED_AWAY_MESSAGE
        assert directory.lookup("A") == Person("A", 31, MOVED)

    def test_count_reflects_history(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("A", 30, LIVES)
        directory.add_new_person("A", 31, MOVED)
        assert directory.count_residents() == 1

    def test_log_keeps_both_rows(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("A", 30, LIVES)
        directory.add_new_person("A", 31, MOVED)
        assert directory.residents == [Person("A", 30, LIVES), Person("A", 31, MOVED)]
        assert directory.names() == ["A"]

    def test_prior_record_not_mutated(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("A", 30, LIVES)
        first = directory.lookup("A")
        directory.add_new_person("A", 31, MOVED)
        assert first == Person("A", 30, LIVES)
        assert directory.residents[0] is first

    def test_duplicate_add_is_not_idempotent(self, directory: ResidentDirectory) -> None:
        directory.add_new_person("A", 30, LIVES)
        index_before = directory.lookup("A")
        count_before = directory.count_residents()
        directory.add_new_person("A", 30, LIVES)
        assert directory.lookup("A") == index_before
        assert directory.count_residents() == count_before + 1
        assert len(directory) == 2


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

class TestConcurrentAdds:
    def test_no_lost_updates(self) -> None:
        events: list[PersonAdded] = []
        directory = ResidentDirectory(sink=events.append)
        count = 200
        barrier = threading.Barrier(8)

        def worker(offset: int) -> None:
            barrier.wait()
            for i in range(offset, count, 8):
                directory.add_new_person(f"person-{i}", i, LIVES)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(directory) == count
        assert len(directory.names()) == count
        assert all(f"person-{i}" in directory for i in range(count))
        assert directory.count_residents() == count

    def test_events_match_log_order(self) -> None:
        events: list[PersonAdded] = []
        directory = ResidentDirectory(sink=events.append)

        def worker(prefix: str) -> None:
            for i in range(50):
                directory.add_new_person(f"{prefix}-{i}", i, MOVED)

        threads = [threading.Thread(target=worker, args=(p,)) for p in "abcd"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert [e.sequence for e in events] == list(range(200))
        assert [e.name for e in events] == [p.name for p in directory.residents]
