"""
Pure functions over feature permission sets: template lookup and detection,
effective permission computation, and display grouping.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Union
import logging

from portal.config.permissions_config import (
    ALL_PERMISSIONS,
    CUSTOM_TEMPLATE,
    PERMISSION_GROUPS,
    PERMISSION_TEMPLATES,
    ProjectRole,
)

logger = logging.getLogger(__name__)

PermissionLike = Union[str, Enum]

_VALID_PERMISSIONS: FrozenSet[str] = frozenset(ALL_PERMISSIONS)
_TEMPLATE_SETS: Dict[str, FrozenSet[str]] = {
    name: frozenset(template["permissions"]) for name, template in PERMISSION_TEMPLATES.items()
}


def _as_str(value: PermissionLike) -> str:
    # str-mixin enums hash by member name, so sets must hold plain values
    return value.value if isinstance(value, Enum) else value


def is_feature_permission(value: PermissionLike) -> bool:
    value = _as_str(value)
    return isinstance(value, str) and value in _VALID_PERMISSIONS


def get_template_permissions(template: str) -> List[str]:
    """Return a copy of the permission list for a template name (never "custom")."""
    return list(PERMISSION_TEMPLATES[template]["permissions"])


def detect_template(permissions: Iterable[PermissionLike]) -> str:
    """Return the template whose set equals ``permissions`` exactly, else "custom".

    Ordering and duplicates are ignored. A near match is still "custom".
    """
    candidate = frozenset(_as_str(p) for p in permissions)
    for name, template_set in _TEMPLATE_SETS.items():
        if candidate == template_set:
            return name
    return CUSTOM_TEMPLATE


def get_permission_summary(permissions: Iterable[PermissionLike]) -> str:
    unique = {_as_str(p) for p in permissions}
    template = detect_template(unique)
    if template != CUSTOM_TEMPLATE:
        return PERMISSION_TEMPLATES[template]["name"]
    return f"Custom ({len(unique)} permissions)"


def compute_effective_permissions(
    role: Union[ProjectRole, str],
    is_super_admin: bool,
    granted_permissions: Optional[Iterable[PermissionLike]],
) -> List[str]:
    """
    Effective permissions for a project member.

    Super admins and project owners always get ALL_PERMISSIONS and the stored
    grants are ignored. Everyone else gets their stored grants, restricted to
    known permission values; unknown entries are dropped and logged.
    """
    if is_super_admin or _as_str(role) == ProjectRole.OWNER.value:
        return list(ALL_PERMISSIONS)

    effective: List[str] = []
    dropped: List[str] = []
    for permission in granted_permissions or []:
        value = _as_str(permission)
        if not isinstance(value, str) or value not in _VALID_PERMISSIONS:
            dropped.append(repr(value))
        elif value not in effective:
            effective.append(value)

    if dropped:
        logger.warning(
            "Dropped %d unknown permission value(s) for role %s: %s",
            len(dropped), _as_str(role), ", ".join(dropped)
        )
    return effective


def get_permission_groups() -> Dict[str, Dict]:
    """Display grouping in editor order. Presentation only; do not validate against it."""
    return {
        key: {"label": group["label"], "permissions": list(group["permissions"])}
        for key, group in PERMISSION_GROUPS.items()
    }
