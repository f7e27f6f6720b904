from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import pytest

from portal.core.exceptions import UnavailableError
from portal.modules.projects.schemas import ProjectMember, ProjectMembership

PROJECT_ID = "3f2b8c1e-5d4a-4b6f-9a7e-2c1d0e9f8a7b"
OTHER_PROJECT_ID = "7a6b5c4d-3e2f-4a1b-8c9d-0e1f2a3b4c5d"
ACCOUNT_ID = "acct-0001"
SECRET = "test-project-token-secret-with-enough-bytes"


class FakeProjectAccess:
    """In-memory stand-in for SupabaseProjectAccess; records every call."""

    def __init__(self) -> None:
        self.memberships: Dict[Tuple[str, str], ProjectMembership] = {}
        self.grants: Dict[Tuple[str, str], List[str]] = {}
        self.super_admin_flags: Set[str] = set()
        self.permission_holders: Set[Tuple[str, str, str]] = set()
        self.failing_grants: Set[str] = set()
        self.unavailable: Set[str] = set()
        self.calls: List[tuple] = []

    def add_member(
        self,
        user_id: str,
        role: str,
        permissions: Optional[List[str]] = None,
        project_id: str = PROJECT_ID,
        project_name: str = "County Campaign",
    ) -> None:
        self.memberships[(project_id, user_id)] = ProjectMembership(
            project_id=project_id,
            user_id=user_id,
            role=role,
            account_id=ACCOUNT_ID,
            project_name=project_name,
        )
        self.grants[(project_id, user_id)] = list(permissions or [])

    def _call(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.unavailable:
            raise UnavailableError(f"{name} failed")

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)

    def get_membership(self, project_id: str, user_id: str) -> Optional[ProjectMembership]:
        self._call("get_membership", project_id, user_id)
        return self.memberships.get((project_id, user_id))

    def is_super_admin_flag_set(self, user_id: str) -> bool:
        self._call("is_super_admin_flag_set", user_id)
        return user_id in self.super_admin_flags

    def get_granted_permissions(self, project_id: str, user_id: str) -> List[str]:
        self._call("get_granted_permissions", project_id, user_id)
        return list(self.grants.get((project_id, user_id), []))

    def has_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        self._call("has_permission", project_id, user_id, permission)
        return (project_id, user_id, permission) in self.permission_holders

    def revoke_all_permissions(self, project_id: str, user_id: str) -> None:
        self._call("revoke_all_permissions", project_id, user_id)
        self.grants[(project_id, user_id)] = []

    def grant_permission(self, project_id: str, user_id: str, permission: str) -> bool:
        self._call("grant_permission", project_id, user_id, permission)
        if permission in self.failing_grants:
            raise UnavailableError(f"grant of {permission} failed")
        self.grants.setdefault((project_id, user_id), []).append(permission)
        return True

    def list_members(self, project_id: str) -> List[ProjectMember]:
        self._call("list_members", project_id)
        return [
            ProjectMember(
                user_id=membership.user_id,
                email=f"{membership.user_id}@example.org",
                role=membership.role,
                permissions=self.grants.get(key, []),
            )
            for key, membership in self.memberships.items()
            if key[0] == project_id
        ]


def make_user(user_id: str, app_role: Optional[str] = None) -> dict:
    app_metadata = {"role": app_role} if app_role else {}
    return {"id": user_id, "email": f"{user_id}@example.org", "user_metadata": {}, "app_metadata": app_metadata}


@pytest.fixture
def access() -> FakeProjectAccess:
    return FakeProjectAccess()
