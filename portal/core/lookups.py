"""
Collaborator interfaces consumed by the token issuer and the permission services.
SupabaseProjectAccess in portal.modules.projects.service implements all of them;
tests substitute in-memory fakes.
"""

from typing import Any, Dict, List, Optional, Protocol

from portal.modules.projects.schemas import ProjectMember, ProjectMembership


class Authenticator(Protocol):
    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to a principal dict (id, email, app_metadata, ...)."""
        ...


class MembershipLookup(Protocol):
    def get_membership(self, project_id: str, user_id: str) -> Optional[ProjectMembership]:
        ...


class SuperAdminFlagLookup(Protocol):
    def is_super_admin_flag_set(self, user_id: str) -> bool:
        ...


class GrantedPermissionsLookup(Protocol):
    def get_granted_permissions(self, project_id: str, user_id: str) -> List[str]:
        ...


class PermissionStore(Protocol):
    def revoke_all_permissions(self, project_id: str, user_id: str) -> None:
        ...

    def grant_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        ...

    def has_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        ...


class MemberDirectory(Protocol):
    def list_members(self, project_id: str) -> List[ProjectMember]:
        """Members with profile data; permissions hold stored grants"""
        ...


class ProjectAccess(
    MembershipLookup,
    SuperAdminFlagLookup,
    GrantedPermissionsLookup,
    PermissionStore,
    MemberDirectory,
    Protocol
):
    """Everything the permission editor needs from the backing store"""
