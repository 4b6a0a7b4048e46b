from __future__ import annotations

from datetime import datetime

import pytest

from src.workforce_system.workforce_system.core.enums import FingerPosition, Hand, MatchResult
from src.workforce_system.workforce_system.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.workforce_system.workforce_system.fingerprints.schemas import (
    DeviceCreate,
    DeviceUpdate,
    LogCreate,
    TemplateCreate,
    TemplateListQuery,
    TemplateUpdate,
    VerifyRequest,
)


def _enrolment(worker_id, finger, hand, quality):
    return TemplateCreate(
        worker_id=worker_id, template_data="tmpl", finger_position=finger, hand=hand, quality_score=quality
    )


@pytest.fixture
def service(world):
    return world.container().fingerprint_service


def test_verify_matches_enrolled_template(service, world):
    match = service.verify(VerifyRequest(worker_id=1, scan_data="live-scan"), now=world.at(7, 55))

    assert match.attempt.template.id == 1
    assert match.attempt.match_score == 92
    log = world.logs.get_by_id(match.log_id)
    assert log.match_result == MatchResult.SUCCESS
    assert log.matched_template_id == 1
    assert log.scan_timestamp == world.at(7, 55)
    assert set(match.payload()) == {"worker", "matchScore", "scanQuality", "matchedTemplate", "logId"}


def test_verify_below_requested_score_fails_and_is_logged(service, world):
    with pytest.raises(ValidationError) as excinfo:
        service.verify(VerifyRequest(worker_id=1, scan_data="live-scan", min_match_score=95))

    assert excinfo.value.data["matchScore"] == 92
    assert excinfo.value.data["matchResult"] == MatchResult.NO_MATCH
    (log,) = world.logs.rows.values()
    assert log.match_result == MatchResult.NO_MATCH
    assert log.error_message == "Match score below threshold"


def test_verify_without_templates_logs_no_match(service, world):
    with pytest.raises(NotFoundError, match="No fingerprint templates found") as excinfo:
        service.verify(VerifyRequest(worker_id=2, scan_data="live-scan"))

    assert excinfo.value.data == {"matchResult": MatchResult.NO_MATCH}
    (log,) = world.logs.rows.values()
    assert log.worker_id == 2
    assert log.match_result == MatchResult.NO_MATCH
    assert log.matched_template_id is None


def test_verify_inactive_worker_is_rejected(service, world):
    with pytest.raises(ValidationError, match="Worker is not active"):
        service.verify(VerifyRequest(worker_id=3, scan_data="live-scan"))
    assert world.logs.rows == {}


def test_every_attempt_is_logged_and_best_returned(service, world):
    service.enrol_template(_enrolment(1, FingerPosition.INDEX, Hand.LEFT, 97))

    match = service.verify(VerifyRequest(worker_id=1, scan_data="live-scan"))

    assert match.attempt.template.finger_position == FingerPosition.INDEX
    assert sorted(log.match_score for log in world.logs.rows.values()) == [92, 97]
    assert world.logs.get_by_id(match.log_id).matched_template_id == match.attempt.template.id


def test_tied_scores_keep_the_higher_quality_template(service, world):
    second = service.enrol_template(_enrolment(1, FingerPosition.INDEX, Hand.LEFT, 97))
    world.matcher.scores.update({1: 85, second.id: 85})

    match = service.verify(VerifyRequest(worker_id=1, scan_data="live-scan"))

    assert match.attempt.template.id == second.id


def test_enrol_sets_enrollment_date(service, world):
    enrolled_at = datetime(2025, 2, 1, 9, 30)

    template = service.enrol_template(_enrolment(2, FingerPosition.INDEX, Hand.LEFT, 81), now=enrolled_at)

    assert template.worker_id == 2
    assert template.enrollment_date == enrolled_at
    assert template.is_active is True


def test_enrol_same_finger_twice_conflicts(service):
    with pytest.raises(ConflictError, match="already exists for RIGHT THUMB"):
        service.enrol_template(_enrolment(1, FingerPosition.THUMB, Hand.RIGHT, 80))


def test_reactivating_a_replaced_template_conflicts(service, world):
    service.update_template(1, TemplateUpdate(is_active=False))
    replacement = service.enrol_template(_enrolment(1, FingerPosition.THUMB, Hand.RIGHT, 95))

    with pytest.raises(ConflictError, match="already exists for RIGHT THUMB"):
        service.update_template(1, TemplateUpdate(is_active=True))

    assert [t.id for t in world.templates.list_active_for_worker(1)] == [replacement.id]


def test_reactivating_without_replacement_is_allowed(service):
    service.update_template(1, TemplateUpdate(is_active=False))

    assert service.update_template(1, TemplateUpdate(is_active=True)).is_active is True


def test_template_with_logs_cannot_be_deleted(service, world):
    service.verify(VerifyRequest(worker_id=1, scan_data="live-scan"))

    with pytest.raises(ValidationError, match="Consider deactivating instead"):
        service.delete_template(1)
    assert world.templates.get_by_id(1) is not None


def test_template_listing_carries_recent_logs(service, world):
    service.verify(VerifyRequest(worker_id=1, scan_data="a"), now=world.at(7))
    service.verify(VerifyRequest(worker_id=1, scan_data="b"), now=world.at(12))

    page = service.list_templates(TemplateListQuery(worker_id=1))

    (template,) = page.items
    assert [log.scan_timestamp for log in template.recent_logs] == [world.at(12), world.at(7)]


def test_register_device_rejects_duplicate_device_id(service):
    with pytest.raises(ConflictError, match="Device ID already exists"):
        service.register_device(DeviceCreate(device_id="DEV-KGL-01", device_name="Another gate"))


def test_register_device_requires_known_site(service):
    with pytest.raises(NotFoundError, match="Site not found"):
        service.register_device(DeviceCreate(device_id="DEV-NEW", device_name="New gate", site_id=42))


def test_update_device_keeps_own_serial(service, world):
    device = service.register_device(DeviceCreate(device_id="DEV-MSZ-01", device_name="Bridge", serial_number="SN-1"))

    updated = service.update_device(device.id, DeviceUpdate(serial_number="SN-1", is_online=True))

    assert updated.is_online is True


def test_device_with_logs_cannot_be_deleted(service, world):
    service.append_log(LogCreate(device_id=1, match_result=MatchResult.DEVICE_ERROR), now=world.at(6))

    with pytest.raises(ValidationError, match="Cannot delete device with associated logs"):
        service.delete_device(1)
    service.delete_device(2)
    assert world.devices.get_by_id(2) is None


def test_append_log_defaults_timestamp(service, world):
    log = service.append_log(LogCreate(worker_id=1, match_result=MatchResult.POOR_QUALITY), now=world.at(6, 15))

    assert log.scan_timestamp == world.at(6, 15)
    assert log.match_result == MatchResult.POOR_QUALITY
