from __future__ import annotations

import pytest

from residence_rules.clearance.model import ClearanceRequest
from residence_rules.clearance.state_machine import ClearanceStateMachine
from residence_rules.core.enums import ClearanceStatus, ClearanceStep, RuleViolation
from residence_rules.core.exceptions import ValidationError


class InMemoryClearances:
    def __init__(self):
        self.rows: list[ClearanceRequest] = []
        self.concurrent_winner = False

    def get_open_for_resident(self, resident_id):
        for r in reversed(self.rows):
            if r.resident_id == resident_id and r.status == ClearanceStatus.PENDING:
                return r
        return None

    def get_latest_for_resident(self, resident_id):
        mine = [r for r in self.rows if r.resident_id == resident_id]
        return mine[-1] if mine else None

    def create_for_resident(self, resident_id, *, initiated_at):
        if self.concurrent_winner or self.get_open_for_resident(resident_id):
            return None
        req = ClearanceRequest(
            request_id=len(self.rows) + 1,
            resident_id=resident_id,
            status=ClearanceStatus.PENDING,
            room_check_passed=False,
            keys_returned=False,
            initiated_at=initiated_at,
        )
        self.rows.append(req)
        return req

    def update_checks(self, *, request_id, room_check_passed, keys_returned, status):
        for i, r in enumerate(self.rows):
            if r.request_id == request_id and r.status == ClearanceStatus.PENDING:
                self.rows[i] = ClearanceRequest(
                    request_id=r.request_id,
                    resident_id=r.resident_id,
                    status=status,
                    room_check_passed=room_check_passed,
                    keys_returned=keys_returned,
                    initiated_at=r.initiated_at,
                )
                return True
        return False


@pytest.fixture
def machine(clock):
    return ClearanceStateMachine(InMemoryClearances(), clock=clock)


def test_initiate_creates_pending_request(machine, fixed_now):
    outcome = machine.initiate(7)

    assert outcome.ok
    req = outcome.value
    assert req.status == ClearanceStatus.PENDING
    assert not req.room_check_passed and not req.keys_returned
    assert req.initiated_at == fixed_now
    assert req.current_step == ClearanceStep.ROOM_INSPECTION


def test_second_initiate_while_pending_is_already_active(machine):
    machine.initiate(7)
    assert machine.initiate(7).violation == RuleViolation.ALREADY_ACTIVE


def test_other_resident_is_not_blocked(machine):
    machine.initiate(7)
    assert machine.initiate(8).ok


def test_initiate_after_completion_succeeds(machine):
    machine.initiate(7)
    machine.record_checks(7, room_check_passed=True, keys_returned=True)

    again = machine.initiate(7)

    assert again.ok
    assert machine.status(7).request_id == again.value.request_id


def test_completes_only_when_both_checks_pass(machine):
    machine.initiate(7)

    after_room = machine.record_checks(7, room_check_passed=True)
    assert after_room.status == ClearanceStatus.PENDING
    assert after_room.current_step == ClearanceStep.KEY_RETURN

    done = machine.record_checks(7, keys_returned=True)
    assert done.status == ClearanceStatus.COMPLETED
    assert done.current_step == ClearanceStep.DONE


def test_repeating_the_same_check_is_a_no_op(machine):
    machine.initiate(7)
    machine.record_checks(7, room_check_passed=True)

    again = machine.record_checks(7, room_check_passed=True)

    assert again.status == ClearanceStatus.PENDING
    assert again.room_check_passed is True
    assert machine.status(7).current_step == ClearanceStep.KEY_RETURN


def test_record_checks_without_open_request_raises(machine):
    with pytest.raises(ValidationError):
        machine.record_checks(7, room_check_passed=True)


def test_lost_insert_race_is_already_active(clock):
    repo = InMemoryClearances()
    repo.concurrent_winner = True

    assert ClearanceStateMachine(repo, clock=clock).initiate(7).violation == RuleViolation.ALREADY_ACTIVE


def test_status_is_none_before_initiation(machine):
    assert machine.status(7) is None
