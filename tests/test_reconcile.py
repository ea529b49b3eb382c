"""Tests for the assignment reconciler."""
from escala.core.reconcile import apply_assignment, assignment_patch, clear_person, find_assignment
from escala.models.assignment import Assignment
from escala.models.period import Period, Slot


class TestApplyAssignment:

    def test_creates_record_when_missing(self):
        updated, record = apply_assignment([], "2026-01-04", Period.MORNING, Slot.FIRST, "p-ana")

        assert len(updated) == 1
        assert record == Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana")
        assert record.person2_id is None

    def test_updates_only_requested_slot(self):
        existing = [Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana")]

        updated, record = apply_assignment(existing, "2026-01-04", Period.MORNING, Slot.SECOND, "p-bruno")

        assert len(updated) == 1
        assert record.person1_id == "p-ana"
        assert record.person2_id == "p-bruno"

    def test_does_not_mutate_input(self):
        existing = [Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana")]
        apply_assignment(existing, "2026-01-04", Period.MORNING, Slot.FIRST, "p-carla")
        assert existing[0].person1_id == "p-ana"

    def test_clearing_keeps_record(self):
        existing = [Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana", person2_id="p-bruno")]

        updated, record = apply_assignment(existing, "2026-01-04", Period.MORNING, Slot.FIRST, None)

        assert len(updated) == 1
        assert record.person1_id is None
        assert record.person2_id == "p-bruno"

    def test_two_slots_fill_one_record(self):
        first, _ = apply_assignment([], "2026-01-04", "MORNING", 1, "Alice")
        both, record = apply_assignment(first, "2026-01-04", "MORNING", 2, "Bob")

        assert both == [record]
        assert record.key == ("2026-01-04", Period.MORNING)
        assert record.occupants == ("Alice", "Bob")

    def test_other_period_same_date_is_separate(self):
        existing = [Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana")]

        updated, _ = apply_assignment(existing, "2026-01-04", Period.EVENING, Slot.FIRST, "p-bruno")

        assert len(updated) == 2
        assert find_assignment(updated, "2026-01-04", Period.MORNING).person1_id == "p-ana"

    def test_idempotent(self):
        once, _ = apply_assignment([], "2026-01-07", Period.EVENING, Slot.SECOND, "p-ana")
        twice, _ = apply_assignment(once, "2026-01-07", Period.EVENING, Slot.SECOND, "p-ana")
        assert once == twice

    def test_new_record_gets_owner(self):
        _, record = apply_assignment([], "2026-01-07", Period.EVENING, 1, "p-ana", owner_id="u-1")
        assert record.owner_id == "u-1"

    def test_accepts_period_token(self):
        _, record = apply_assignment([], "2026-01-07", "NOITE", 2, "p-ana")
        assert record.period is Period.EVENING


class TestPatchAndClear:

    def test_patch_names_only_changed_column(self):
        assert assignment_patch(Slot.FIRST, "p-ana") == {"person1_id": "p-ana"}
        assert assignment_patch(Slot.SECOND, "") == {"person2_id": None}

    def test_clear_person(self, sample_assignments):
        cleared = clear_person(sample_assignments, "p-ana")

        assert len(cleared) == len(sample_assignments)
        for a in cleared:
            assert "p-ana" not in a.occupants
        assert cleared[0].person2_id == "p-bruno"

    def test_find_assignment_missing(self, sample_assignments):
        assert find_assignment(sample_assignments, "2026-01-11", Period.MORNING) is None
