"""
Access checks shared by the token issuer and the HTTP dependencies
"""

from portal.config.permissions_config import FeaturePermission, ProjectRole, SUPER_ADMIN_ROLE
from portal.core.lookups import MembershipLookup, PermissionStore, SuperAdminFlagLookup
from typing import Any, Dict, Optional


def has_super_admin_marker(user_data: Dict[str, Any]) -> bool:
    """True if app_metadata.role carries the super-admin marker (set server-side only)"""
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("role") == SUPER_ADMIN_ROLE


def resolve_is_super_admin(user_data: Dict[str, Any], flags: SuperAdminFlagLookup) -> bool:
    """
    Two sources, checked in order: the app_metadata role marker, then the
    user_roles.is_super_admin flag. Either one being true is enough; the flag
    is only read when the marker is absent.

    Compatibility shim while super-admin status is migrated into user_roles.
    """
    if has_super_admin_marker(user_data):
        return True
    return flags.is_super_admin_flag_set(user_data["id"])


def can_manage_permissions(
    user_data: Dict[str, Any],
    project_id: str,
    memberships: MembershipLookup,
    flags: SuperAdminFlagLookup,
    store: PermissionStore,
    is_super_admin: Optional[bool] = None
) -> bool:
    """Super admins, project owners/admins, and holders of manage_project_members"""
    if is_super_admin is None:
        is_super_admin = resolve_is_super_admin(user_data, flags)
    if is_super_admin:
        return True
    membership = memberships.get_membership(project_id, user_data["id"])
    if membership is None:
        return False
    if membership.role in (ProjectRole.OWNER, ProjectRole.ADMIN):
        return True
    return store.has_permission(
        project_id, user_data["id"], FeaturePermission.MANAGE_PROJECT_MEMBERS.value
    )
