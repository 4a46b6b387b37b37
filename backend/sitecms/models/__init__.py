from .settings_document import SettingsDocument
from .audit_log import AuditLog

__all__ = ["SettingsDocument", "AuditLog"]
