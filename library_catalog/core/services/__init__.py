from .database import DbManageService, DbSessionService

__all__ = ["DbManageService", "DbSessionService"]
