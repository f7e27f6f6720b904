from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class AdminUserResponse(BaseModel):
    id: str
    email: str
    name: str = ""
    created_at: Optional[datetime] = None
    is_super_admin: bool = False
    is_super_admin_by_metadata: bool = False


class AdminUserListResponse(BaseModel):
    users: List[AdminUserResponse]
    page: int
    page_size: int
    total: int


class SuperAdminStatusUpdate(BaseModel):
    is_super_admin: bool


class SuperAdminStatusResponse(BaseModel):
    user_id: str
    is_super_admin: bool
