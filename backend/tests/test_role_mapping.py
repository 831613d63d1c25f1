import pytest

from app.core.errors import ConfigurationError
from app.core.role_mapping import MappingRule, match_role_name, parse_email_mapping, resolve_role
from app.db.models.role import Role

MAPPING = "-123@test.com=role1,@testing.com=role2"


def test_parse_email_mapping_keeps_order():
    assert parse_email_mapping(MAPPING) == [
        MappingRule(match_key="-123@test.com", role_name="role1"),
        MappingRule(match_key="@testing.com", role_name="role2"),
    ]


def test_parse_email_mapping_skips_malformed_entries():
    rules = parse_email_mapping("broken,=nokey,@a.com=,@b.com=role=b, @c.com = role_c ,")
    assert rules == [
        MappingRule(match_key="@b.com", role_name="role=b"),
        MappingRule(match_key="@c.com", role_name="role_c"),
    ]


def test_parse_email_mapping_empty():
    assert parse_email_mapping("") == []
    assert parse_email_mapping(None) == []


def test_match_role_name_first_match_wins():
    rules = parse_email_mapping(MAPPING)
    assert match_role_name(rules, "test-123@test.com") == "role1"
    assert match_role_name(rules, "test@testing.com") == "role2"
    assert match_role_name(rules, "test@testing1.com") == "user"

    overlapping = parse_email_mapping("@test.com=first,-123@test.com=second")
    assert match_role_name(overlapping, "test-123@test.com") == "first"


def test_match_role_name_case_sensitivity():
    rules = parse_email_mapping("@Testing.com=role2")
    assert match_role_name(rules, "test@testing.com", case_sensitive=True) == "user"
    assert match_role_name(rules, "test@testing.com", case_sensitive=False) == "role2"


def test_resolve_role_keeps_existing_role(db_session):
    pending = db_session.query(Role).filter(Role.name == "pending", Role.provider == "greenlight").one()
    assert resolve_role(db_session, MAPPING, "test@testing.com", pending, "greenlight") is pending


def test_resolve_role_looks_up_role_in_provider(db_session):
    role2 = Role(name="role2", provider="greenlight", priority=3)
    other = Role(name="role2", provider="other", priority=3)
    db_session.add_all([role2, other])
    db_session.commit()

    assert resolve_role(db_session, MAPPING, "test@testing.com", None, "greenlight").id == role2.id
    default = resolve_role(db_session, MAPPING, "test@testing1.com", None, "greenlight")
    assert (default.name, default.provider) == ("user", "greenlight")


def test_resolve_role_missing_mapped_role_is_configuration_error(db_session):
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_role(db_session, MAPPING, "test-123@test.com", None, "greenlight")
    assert exc_info.value.role_name == "role1"
    assert exc_info.value.provider == "greenlight"


def test_resolve_role_missing_default_role_is_configuration_error(db_session):
    with pytest.raises(ConfigurationError):
        resolve_role(db_session, "", "someone@example.com", None, "unseeded")
