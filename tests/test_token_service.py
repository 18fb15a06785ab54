from datetime import timedelta

import pytest

from coffee_pos.exceptions import ConflictError, NotFoundError, ValidationError
from coffee_pos.schemas.token import TokenPrefill
from coffee_pos.services.token_service import generate_token


def test_generated_tokens_are_random_hex():
    tokens = {generate_token() for _ in range(50)}
    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 32
        int(token, 16)


def test_issue_then_validate(token_service, clock):
    token = token_service.issue("staff-1", TokenPrefill(customer_name="Jose"))
    
    result = token_service.validate(token)
    
    assert result.valid is True
    assert result.reason is None
    record = result.token_record
    assert record.token == token
    assert record.id != token
    assert record.customer_name == "Jose"
    assert record.customer_phone == ""
    assert record.created_by == "staff-1"
    assert record.is_used is False
    assert record.expires_at == clock.now + timedelta(hours=48)


def test_validate_unknown_token(token_service):
    result = token_service.validate("0" * 32)
    assert result.valid is False
    assert result.reason == "not found"
    assert result.token_record is None


def test_zero_ttl_is_expired_immediately(token_service):
    token = token_service.issue("staff-1", ttl_hours=0)
    result = token_service.validate(token)
    assert result.valid is False
    assert result.reason == "expired"
    assert result.token_record is not None


def test_token_expires_after_ttl(token_service, clock):
    token = token_service.issue("staff-1", ttl_hours=48)
    assert token_service.validate(token).valid is True
    
    clock.advance(hours=47, minutes=59)
    assert token_service.validate(token).valid is True
    
    clock.advance(hours=1, minutes=1)
    result = token_service.validate(token)
    assert result.valid is False
    assert result.reason == "expired"


def test_negative_ttl_rejected(token_service):
    with pytest.raises(ValidationError):
        token_service.issue("staff-1", ttl_hours=-1)


def test_consume_marks_token_used(token_service, clock):
    token = token_service.issue("staff-1")
    record = token_service.validate(token).token_record
    clock.advance(minutes=3)
    
    consumed = token_service.consume(record.id, "order-1")
    
    assert consumed.is_used is True
    assert consumed.order_id == "order-1"
    assert consumed.used_at == clock.now
    result = token_service.validate(token)
    assert result.valid is False
    assert result.reason == "already used"
    assert result.token_record.order_id == "order-1"
    assert result.token_record.used_at == clock.now


def test_used_reason_wins_over_expired(token_service, clock):
    token = token_service.issue("staff-1", ttl_hours=1)
    record = token_service.validate(token).token_record
    token_service.consume(record.id, "order-1")
    clock.advance(hours=2)
    assert token_service.validate(token).reason == "already used"


def test_consume_again_for_same_order_is_noop(token_service):
    token = token_service.issue("staff-1")
    record = token_service.validate(token).token_record
    first = token_service.consume(record.id, "order-1")
    second = token_service.consume(record.id, "order-1")
    assert second.version == first.version


def test_consume_for_other_order_conflicts(token_service):
    token = token_service.issue("staff-1")
    record = token_service.validate(token).token_record
    token_service.consume(record.id, "order-1")
    with pytest.raises(ConflictError):
        token_service.consume(record.id, "order-2")


def test_consume_missing_record(token_service):
    with pytest.raises(NotFoundError):
        token_service.consume("does-not-exist", "order-1")


def test_list_active_filters_used_expired_and_issuer(token_service, clock):
    active_mine = token_service.issue("staff-1")
    token_service.issue("staff-1", ttl_hours=0)
    used = token_service.issue("staff-1")
    token_service.consume(token_service.validate(used).token_record.id, "order-1")
    active_other = token_service.issue("staff-2", ttl_hours=1)
    
    assert {t.token for t in token_service.list_active()} == {active_mine, active_other}
    assert [t.token for t in token_service.list_active("staff-1")] == [active_mine]
    
    clock.advance(hours=2)
    assert [t.token for t in token_service.list_active()] == [active_mine]


def test_link_for(token_service):
    assert token_service.link_for("abc123") == "https://buzz.example/customer/abc123"
