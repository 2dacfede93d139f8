"""Server package exports."""

from server.config import get_settings
from server.database import Base, LabelModel, OrganizationModel, TaskModel, WebsiteModel, init_db

__all__ = [
    "get_settings",
    "Base",
    "LabelModel",
    "OrganizationModel",
    "TaskModel",
    "WebsiteModel",
    "init_db",
]
