import time
import jwt
from supabase import Client
from portal.config.permissions_config import ProjectRole
from portal.core.access import resolve_is_super_admin
from portal.core.exceptions import ConfigurationError, ForbiddenError, UnauthenticatedError
from portal.core.lookups import GrantedPermissionsLookup, MembershipLookup, SuperAdminFlagLookup
from portal.core.permissions import compute_effective_permissions
from portal.core.validators import validate_uuid
from portal.modules.auth.schemas import ProjectTokenPayload, ProjectTokenResponse
from typing import Any, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# Single redirect handoff; not a session token, never refreshed
PROJECT_TOKEN_TTL_SEC = 30
PROJECT_TOKEN_ALGORITHM = "HS256"


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from a Supabase Auth access token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise UnauthenticatedError("Invalid or expired token") from e
            logger.warning(f"Authentication failed: {error_msg}")
            raise UnauthenticatedError("Authentication failed") from e
        if not user_response or not user_response.user:
            raise UnauthenticatedError("Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }


class ProjectTokenService:
    """
    Mints short-lived project tokens that hand a user's identity, project role and
    effective permissions to the external project application.

    Holds no per-request state; one instance may serve concurrent requests.
    """

    def __init__(
        self,
        memberships: MembershipLookup,
        super_admin_flags: SuperAdminFlagLookup,
        granted_permissions: GrantedPermissionsLookup,
        secret: Optional[str],
        issuer: str = "portal",
        audience: str = "pol-app",
        clock: Callable[[], float] = time.time
    ):
        self.memberships = memberships
        self.super_admin_flags = super_admin_flags
        self.granted_permissions = granted_permissions
        self.secret = secret
        self.issuer = issuer
        self.audience = audience
        self.clock = clock

    def issue_project_token(self, caller: Optional[Dict[str, Any]], project_id: Any) -> ProjectTokenResponse:
        if not caller or not caller.get("id"):
            raise UnauthenticatedError()
        project_id = validate_uuid(project_id, field="projectId")
        user_id = caller["id"]

        membership = self.memberships.get_membership(project_id, user_id)
        if membership is None:
            logger.info(f"Project token refused: {user_id} is not a member of {project_id}")
            raise ForbiddenError("You do not have access to this project")

        is_super_admin = resolve_is_super_admin(caller, self.super_admin_flags)

        # Stored grants are irrelevant when the role already implies full access
        granted = []
        if not is_super_admin and membership.role != ProjectRole.OWNER:
            granted = self.granted_permissions.get_granted_permissions(project_id, user_id)
        permissions = compute_effective_permissions(membership.role, is_super_admin, granted)

        if not self.secret:
            logger.error("PROJECT_TOKEN_SECRET or NEXTAUTH_SECRET environment variable is not set")
            raise ConfigurationError("Token signing not configured")

        now = int(self.clock())
        payload = ProjectTokenPayload(
            user_id=user_id,
            project_id=membership.project_id,
            account_id=membership.account_id,
            role=membership.role,
            permissions=permissions,
            iat=now,
            exp=now + PROJECT_TOKEN_TTL_SEC,
        )
        token = jwt.encode(
            payload.to_claims(self.issuer, self.audience),
            self.secret,
            algorithm=PROJECT_TOKEN_ALGORITHM,
            headers={"typ": "JWT"},
        )
        logger.info(
            f"Issued project token for {user_id} in {project_id} "
            f"(role={membership.role.value}, super_admin={is_super_admin}, permissions={len(permissions)})"
        )
        return ProjectTokenResponse(
            token=token,
            expires_in=PROJECT_TOKEN_TTL_SEC,
            project_name=membership.project_name,
        )
