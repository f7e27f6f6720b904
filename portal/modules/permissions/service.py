from portal.config.permissions_config import get_permission_catalog
from portal.core.access import can_manage_permissions, resolve_is_super_admin
from portal.core.exceptions import ForbiddenError, InvalidArgumentError, NotFoundError, UnavailableError
from portal.core.lookups import ProjectAccess
from portal.core.permissions import (
    compute_effective_permissions,
    detect_template,
    get_permission_summary,
    is_feature_permission,
)
from portal.core.validators import validate_uuid
from portal.modules.permissions.schemas import (
    GrantResult,
    MemberPermissionsResponse,
    MemberPermissionsUpdateResponse,
    PermissionCatalogResponse,
    ProjectMemberWithAccess,
)
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


class ProjectPermissionService:
    def __init__(self, access: ProjectAccess):
        self.access = access

    def get_catalog(self) -> PermissionCatalogResponse:
        return PermissionCatalogResponse(**get_permission_catalog())

    def _require_manager(self, caller: Dict[str, Any], project_id: str, is_super_admin: bool) -> None:
        allowed = can_manage_permissions(
            caller, project_id, self.access, self.access, self.access,
            is_super_admin=is_super_admin
        )
        if not allowed:
            raise ForbiddenError("Permission management access required")

    def get_member_permissions(
        self,
        caller: Dict[str, Any],
        project_id: str,
        target_user_id: str
    ) -> MemberPermissionsResponse:
        """Stored grants for a member. Members may read their own; others need management rights"""
        project_id = validate_uuid(project_id, field="projectId")
        if caller["id"] != target_user_id:
            self._require_manager(caller, project_id, resolve_is_super_admin(caller, self.access))

        stored = self.access.get_granted_permissions(project_id, target_user_id)
        permissions = [p for p in stored if is_feature_permission(p)]
        return MemberPermissionsResponse(
            user_id=target_user_id,
            project_id=project_id,
            permissions=permissions,
            template=detect_template(permissions),
            summary=get_permission_summary(permissions),
        )

    def update_member_permissions(
        self,
        caller: Dict[str, Any],
        project_id: str,
        target_user_id: str,
        permissions: List[Any]
    ) -> MemberPermissionsUpdateResponse:
        """
        Replace a member's permission set: revoke everything, then grant each
        requested permission. Individual grant failures are reported in
        grant_results; the call fails only when nothing could be granted.
        """
        project_id = validate_uuid(project_id, field="projectId")
        is_super_admin = resolve_is_super_admin(caller, self.access)
        self._require_manager(caller, project_id, is_super_admin)

        if caller["id"] == target_user_id and not is_super_admin:
            raise InvalidArgumentError("Cannot modify your own permissions")

        invalid = [str(p) for p in permissions if not is_feature_permission(p)]
        if invalid:
            raise InvalidArgumentError(f"Invalid permissions: {', '.join(invalid)}")

        requested: List[str] = []
        for permission in permissions:
            if permission not in requested:
                requested.append(permission)

        if self.access.get_membership(project_id, target_user_id) is None:
            raise NotFoundError("Target user is not a member of this project")

        self.access.revoke_all_permissions(project_id, target_user_id)

        grant_results: List[GrantResult] = []
        for permission in requested:
            try:
                granted = self.access.grant_permission(project_id, target_user_id, permission)
            except UnavailableError as e:
                logger.error(f"Grant of {permission} to {target_user_id} in {project_id} failed: {e.detail}")
                granted = False
            grant_results.append(GrantResult(permission=permission, granted=granted))

        failed = [r for r in grant_results if not r.granted]
        if requested and len(failed) == len(requested):
            raise UnavailableError("Failed to grant any permissions")
        if failed:
            logger.warning(
                f"Partial permission update for {target_user_id} in {project_id}: "
                f"{len(failed)} of {len(requested)} grants failed"
            )

        logger.info(f"{caller['id']} set {len(requested)} permission(s) for {target_user_id} in {project_id}")
        return MemberPermissionsUpdateResponse(
            success=True,
            user_id=target_user_id,
            project_id=project_id,
            permissions=requested,
            template=detect_template(requested),
            grant_results=grant_results,
        )

    def list_members(self, caller: Dict[str, Any], project_id: str) -> List[ProjectMemberWithAccess]:
        """Project members with their effective permissions; visible to members and super admins"""
        project_id = validate_uuid(project_id, field="projectId")
        if not resolve_is_super_admin(caller, self.access):
            if self.access.get_membership(project_id, caller["id"]) is None:
                raise ForbiddenError("You do not have access to this project")

        members = []
        for member in self.access.list_members(project_id):
            effective = compute_effective_permissions(member.role, False, member.permissions)
            members.append(ProjectMemberWithAccess(
                **member.model_dump(exclude={"permissions"}),
                permissions=effective,
                template=detect_template(effective),
                summary=get_permission_summary(effective),
            ))
        return members
