"""
API Dependencies

Per-request wiring from the application's shared engine to the service layer.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import sessionmaker

from appsettings.services.setting_service import SettingService
from appsettings.stores.setting_store import SettingStore


def get_session_factory(request: Request) -> sessionmaker:
    """Session factory created by the application factory."""
    return request.app.state.session_factory


def get_setting_service(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SettingService:
    """Dependency for the setting service bound to the application's database."""
    return SettingService(SettingStore(session_factory))
