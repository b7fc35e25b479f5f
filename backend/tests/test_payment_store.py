import json
from decimal import Decimal

import pytest

from payrelay.exceptions import DuplicateTransactionError, InvalidStatusTransition
from payrelay.models.payment import PaymentRecord, PaymentStatus


def _create(store, transaction_id="MSH-2000", **overrides):
    fields = dict(
        transaction_id=transaction_id,
        name_enquiry_transaction_id="MSH-1990",
        partner_code="PC001",
        dest_bank="300591",
        account_number="0241234567",
        account_name="AMA MENSAH",
        amount=Decimal("50.00"),
        narration="Payment Gateway Transaction",
        verification_response={"data": {"nametocredit": "AMA MENSAH"}},
    )
    fields.update(overrides)
    return store.create_pending(**fields)


def test_create_pending_stores_verification_payload(store):
    record = _create(store, event_id=7)

    assert record.id is not None
    assert record.status == PaymentStatus.PENDING.value
    assert json.loads(record.verification_response) == {"data": {"nametocredit": "AMA MENSAH"}}
    assert record.response is None
    assert record.completed_at is None
    assert record.event_id == 7


def test_duplicate_transaction_id_is_rejected(store, db_session):
    _create(store)

    with pytest.raises(DuplicateTransactionError):
        _create(store)

    assert db_session.query(PaymentRecord).count() == 1


def test_forward_transitions_to_completed(store):
    record = _create(store)
    store.mark_processing(record)
    record = store.finalize(record, PaymentStatus.COMPLETED, {"message": {"status": "000"}})

    assert record.status == "completed"
    assert json.loads(record.response) == {"message": {"status": "000"}}
    assert record.completed_at is not None


def test_pending_can_fail_directly(store):
    record = _create(store)
    record = store.mark_failed(record, "boom")

    assert record.status == "failed"
    assert json.loads(record.response) == {"error": "boom"}


def test_terminal_records_do_not_move(store):
    record = _create(store)
    store.mark_processing(record)
    store.finalize(record, PaymentStatus.COMPLETED, {})

    with pytest.raises(InvalidStatusTransition):
        store.mark_failed(record, "late failure")
    with pytest.raises(InvalidStatusTransition):
        store.mark_processing(record)
    assert record.status == "completed"


def test_processing_cannot_return_to_pending(store):
    record = _create(store)
    store.mark_processing(record)

    with pytest.raises(InvalidStatusTransition):
        store.finalize(record, PaymentStatus.PENDING, {})


def test_get_by_transaction_id(store):
    _create(store, transaction_id="MSH-3000")

    assert store.get_by_transaction_id("MSH-3000").account_name == "AMA MENSAH"
    assert store.get_by_transaction_id("MSH-missing") is None
