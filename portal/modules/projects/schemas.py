from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from portal.config.permissions_config import ProjectRole


class ProjectMembership(BaseModel):
    project_id: str
    user_id: str
    role: ProjectRole
    account_id: str
    project_name: Optional[str] = None


class ProjectMember(BaseModel):
    user_id: str
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: ProjectRole
    permissions: List[str] = []
    joined_at: Optional[datetime] = None
