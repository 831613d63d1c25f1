import os
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.db.models.role import DEFAULT_ROLE_NAME, PENDING_ROLE_NAME, Role

DEFAULT_PROVIDER = os.getenv("DEFAULT_PROVIDER", "greenlight")

# name -> priority
REQUIRED_ROLES: dict[str, int] = {
    PENDING_ROLE_NAME: -1,
    DEFAULT_ROLE_NAME: 9999,
}


def normalize_provider(value: str) -> str:
    return value.strip().lower()


def parse_providers(raw: str) -> list[str]:
    providers = [normalize_provider(x) for x in raw.split(",") if x.strip()]
    return sorted(set(providers))


def get_role_sync_providers() -> list[str]:
    return parse_providers(os.getenv("ROLE_SYNC_PROVIDERS", DEFAULT_PROVIDER))


@dataclass
class RoleSyncResult:
    created: int = 0
    existing: int = 0


def sync_default_roles(db: Session, providers: list[str]) -> RoleSyncResult:
    result = RoleSyncResult()

    for provider in providers:
        present = {
            role.name
            for role in db.query(Role).filter(
                Role.provider == provider,
                Role.name.in_(list(REQUIRED_ROLES)),
            )
        }
        for name, priority in REQUIRED_ROLES.items():
            if name in present:
                result.existing += 1
                continue
            db.add(Role(name=name, provider=provider, priority=priority))
            result.created += 1

    db.commit()
    return result
