from pydantic import BaseModel
from typing import Any, List, Optional

from portal.modules.projects.schemas import ProjectMember


class PermissionInfo(BaseModel):
    name: str
    label: str
    description: str
    group: str


class PermissionGroupInfo(BaseModel):
    key: str
    label: str
    permissions: List[str]


class PermissionTemplateInfo(BaseModel):
    key: str
    name: str
    description: str
    permissions: List[str]


class PermissionCatalogResponse(BaseModel):
    permissions: List[PermissionInfo]
    groups: List[PermissionGroupInfo]
    templates: List[PermissionTemplateInfo]


class MemberPermissionsResponse(BaseModel):
    user_id: str
    project_id: str
    permissions: List[str]
    template: str
    summary: str


class MemberPermissionsUpdate(BaseModel):
    # Element types are checked against the catalog by the service
    permissions: List[Any]


class GrantResult(BaseModel):
    permission: str
    granted: bool


class MemberPermissionsUpdateResponse(BaseModel):
    success: bool
    user_id: str
    project_id: str
    permissions: List[str]
    template: str
    grant_results: List[GrantResult]


class ProjectMemberWithAccess(ProjectMember):
    template: str
    summary: Optional[str] = None
