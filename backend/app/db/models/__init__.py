from app.db.models.auth_attempt import AuthAttempt
from app.db.models.provider_setting import ProviderSetting
from app.db.models.role import Role
from app.db.models.user import User

__all__ = ["AuthAttempt", "ProviderSetting", "Role", "User"]
