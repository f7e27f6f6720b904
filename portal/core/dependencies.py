"""
Core dependencies for route protection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from portal.config import settings
from portal.core.access import resolve_is_super_admin
from portal.core.exceptions import ForbiddenError, UnauthenticatedError
from portal.core.lookups import Authenticator
from portal.database.supabase_client import get_supabase, get_service_supabase
from portal.modules.auth.service import AuthService, ProjectTokenService
from portal.modules.projects.service import SupabaseProjectAccess
from supabase import Client
from typing import Any, Dict, Optional

# auto_error=False so a missing header becomes UnauthenticatedError (401) instead of FastAPI's default
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_project_access(supabase: Client = Depends(get_service_supabase)) -> SupabaseProjectAccess:
    return SupabaseProjectAccess(supabase)


def get_project_token_service(
    access: SupabaseProjectAccess = Depends(get_project_access)
) -> ProjectTokenService:
    # Secret is read per request so a fixed deployment does not need a restart
    return ProjectTokenService(
        memberships=access,
        super_admin_flags=access,
        granted_permissions=access,
        secret=settings.get_project_token_secret(),
        issuer=settings.project_token_issuer,
        audience=settings.project_token_audience,
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: Authenticator = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Extract current user info from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()
    return auth_service.get_current_user(credentials.credentials)


def require_super_admin(
    user_data: Dict[str, Any] = Depends(get_current_user),
    access: SupabaseProjectAccess = Depends(get_project_access)
) -> Dict[str, Any]:
    """Dependency to restrict a route to global super admins"""
    if not resolve_is_super_admin(user_data, access):
        raise ForbiddenError("Super admin access required")
    return user_data
