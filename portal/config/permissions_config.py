"""
Feature Permissions Configuration
This config defines the catalog of project-level feature permissions, how they are
grouped in the permission editor, and the named templates used for quick assignment.
Values mirror the database enum `public.feature_permission` and its template seed data.
"""

from enum import Enum
from typing import Dict, List


class FeaturePermission(str, Enum):
    # Core features
    VIEW_MAP = "view_map"
    VIEW_DATA = "view_data"
    EXPORT_DATA = "export_data"
    EXPORT_ADVANCED = "export_advanced"
    # Analysis
    USE_AI_ASSISTANT = "use_ai_assistant"
    CREATE_SEGMENTS = "create_segments"
    RUN_COMPARISONS = "run_comparisons"
    # Field operations
    MANAGE_CANVASSING = "manage_canvassing"
    VIEW_CANVASSING = "view_canvassing"
    # Donors
    VIEW_DONORS = "view_donors"
    EXPORT_DONORS = "export_donors"
    # Reports
    GENERATE_REPORTS = "generate_reports"
    VIEW_REPORTS = "view_reports"
    # Administrative
    MANAGE_PROJECT_SETTINGS = "manage_project_settings"
    MANAGE_PROJECT_MEMBERS = "manage_project_members"


class ProjectRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


# Marker stored in auth app_metadata.role for global super admins
SUPER_ADMIN_ROLE = "super-admin"

CUSTOM_TEMPLATE = "custom"

# Canonical ordering; used for iteration, validation and full-access grants
ALL_PERMISSIONS: List[str] = [p.value for p in FeaturePermission]

PERMISSION_LABELS: Dict[str, str] = {
    "view_map": "View map",
    "view_data": "View data",
    "export_data": "Export data (CSV)",
    "export_advanced": "Advanced export (GeoJSON)",
    "use_ai_assistant": "AI assistant",
    "create_segments": "Create segments",
    "run_comparisons": "Run comparisons",
    "manage_canvassing": "Manage canvassing",
    "view_canvassing": "View canvassing",
    "view_donors": "View donors",
    "export_donors": "Export donors",
    "generate_reports": "Generate reports",
    "view_reports": "View reports",
    "manage_project_settings": "Project settings",
    "manage_project_members": "Manage members",
}

PERMISSION_DESCRIPTIONS: Dict[str, str] = {
    "view_map": "Access to the interactive map view",
    "view_data": "Access to precinct and district data tables",
    "export_data": "Export data in standard formats (CSV)",
    "export_advanced": "Export in advanced formats (GeoJSON, Excel with geometry)",
    "use_ai_assistant": "Access to the AI-powered natural language assistant",
    "create_segments": "Create and save voter segments",
    "run_comparisons": "Compare precincts, districts, or jurisdictions",
    "manage_canvassing": "Create turfs, assign volunteers, manage field operations",
    "view_canvassing": "View canvassing progress and results (read-only)",
    "view_donors": "Access to FEC donor data and analysis",
    "export_donors": "Export donor lists and contribution data",
    "generate_reports": "Generate new PDF reports",
    "view_reports": "View existing PDF reports",
    "manage_project_settings": "Modify project configuration and defaults",
    "manage_project_members": "Add, remove, and modify team member access",
}

# Display groups for the permission editor (insertion order is display order)
PERMISSION_GROUPS: Dict[str, Dict] = {
    "core": {
        "label": "Map & Data",
        "permissions": ["view_map", "view_data"],
    },
    "exports": {
        "label": "Exports",
        "permissions": ["export_data", "export_advanced"],
    },
    "analysis": {
        "label": "Analysis",
        "permissions": ["use_ai_assistant", "create_segments", "run_comparisons"],
    },
    "fieldOperations": {
        "label": "Field Operations",
        "permissions": ["manage_canvassing", "view_canvassing"],
    },
    "donors": {
        "label": "Donor Access",
        "permissions": ["view_donors", "export_donors"],
    },
    "reports": {
        "label": "Reports",
        "permissions": ["generate_reports", "view_reports"],
    },
    "administrative": {
        "label": "Administrative",
        "permissions": ["manage_project_settings", "manage_project_members"],
    },
}

# Template definitions matching the database seed data
PERMISSION_TEMPLATES: Dict[str, Dict] = {
    "fullAccess": {
        "name": "Full Access",
        "description": "Access to all features",
        # Everything except the administrative group
        "permissions": [
            "view_map",
            "view_data",
            "export_data",
            "export_advanced",
            "use_ai_assistant",
            "create_segments",
            "run_comparisons",
            "manage_canvassing",
            "view_canvassing",
            "view_donors",
            "export_donors",
            "generate_reports",
            "view_reports",
        ],
    },
    "dataAnalyst": {
        "name": "Data Analyst",
        "description": "Map, data, exports, and AI",
        "permissions": [
            "view_map",
            "view_data",
            "export_data",
            "use_ai_assistant",
            "create_segments",
            "run_comparisons",
            "view_reports",
        ],
    },
    "fieldCoordinator": {
        "name": "Field Coordinator",
        "description": "Canvassing and field operations",
        "permissions": [
            "view_map",
            "view_data",
            "manage_canvassing",
            "view_canvassing",
            "view_reports",
        ],
    },
    "reportViewer": {
        "name": "Report Viewer",
        "description": "Read-only reports access",
        "permissions": ["view_reports"],
    },
    "exportOnly": {
        "name": "Export Only",
        "description": "Data export capabilities",
        "permissions": ["export_data", "export_advanced", "export_donors"],
    },
}

TEMPLATE_NAMES: List[str] = list(PERMISSION_TEMPLATES.keys())


def get_permission_catalog():
    """
    Returns the catalog in the shape consumed by the permission editor
    Format: {
        "permissions": [{"name": "view_map", "label": "...", "description": "...", "group": "core"}, ...],
        "groups": [{"key": "core", "label": "...", "permissions": ["view_map", ...]}, ...],
        "templates": [{"key": "fullAccess", "name": "...", "description": "...", "permissions": [...]}, ...]
    }
    """
    group_of = {}
    for group_key, group in PERMISSION_GROUPS.items():
        for permission in group["permissions"]:
            group_of[permission] = group_key

    permissions = [
        {
            "name": permission,
            "label": PERMISSION_LABELS[permission],
            "description": PERMISSION_DESCRIPTIONS[permission],
            "group": group_of[permission],
        }
        for permission in ALL_PERMISSIONS
    ]

    groups = [
        {"key": key, "label": group["label"], "permissions": list(group["permissions"])}
        for key, group in PERMISSION_GROUPS.items()
    ]

    templates = [
        {
            "key": key,
            "name": template["name"],
            "description": template["description"],
            "permissions": list(template["permissions"]),
        }
        for key, template in PERMISSION_TEMPLATES.items()
    ]

    return {
        "permissions": permissions,
        "groups": groups,
        "templates": templates,
    }
