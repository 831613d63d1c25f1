"""Email to role mapping.

Providers configure a free-text mapping such as
``"-123@test.com=role1,@testing.com=role2"``. Each entry pairs a match key with
a role name; the first key found inside the user's email decides the role and
users matching nothing get the default ``"user"`` role.
"""

import logging
import os
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.errors import ConfigurationError
from app.db.models.role import DEFAULT_ROLE_NAME, Role

logger = logging.getLogger(__name__)

EMAIL_MAPPING_CASE_SENSITIVE = os.getenv("EMAIL_MAPPING_CASE_SENSITIVE", "true").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}


@dataclass(frozen=True)
class MappingRule:
    match_key: str
    role_name: str


def parse_email_mapping(raw: str | None) -> list[MappingRule]:
    rules: list[MappingRule] = []
    for entry in (raw or "").split(","):
        if "=" not in entry:
            if entry.strip():
                logger.warning("Skipping malformed email mapping entry %r", entry)
            continue
        match_key, role_name = entry.split("=", 1)
        match_key = match_key.strip()
        role_name = role_name.strip()
        # An empty key would match every email.
        if not match_key or not role_name:
            logger.warning("Skipping malformed email mapping entry %r", entry)
            continue
        rules.append(MappingRule(match_key=match_key, role_name=role_name))
    return rules


def match_role_name(
    rules: list[MappingRule],
    email: str,
    *,
    case_sensitive: bool | None = None,
) -> str:
    if case_sensitive is None:
        case_sensitive = EMAIL_MAPPING_CASE_SENSITIVE
    haystack = email if case_sensitive else email.lower()
    for rule in rules:
        needle = rule.match_key if case_sensitive else rule.match_key.lower()
        if needle in haystack:
            return rule.role_name
    return DEFAULT_ROLE_NAME


def find_role(db: Session, name: str, provider: str) -> Role | None:
    return db.query(Role).filter(Role.name == name, Role.provider == provider).first()


def resolve_role(
    db: Session,
    mapping_config: str | None,
    email: str,
    existing_role: Role | None,
    provider: str,
) -> Role:
    if existing_role is not None:
        return existing_role

    role_name = match_role_name(parse_email_mapping(mapping_config), email)
    role = find_role(db, role_name, provider)
    if role is None:
        logger.error("Email mapping references missing role=%s provider=%s", role_name, provider)
        raise ConfigurationError(role_name, provider)
    return role
