from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from portal.config.permissions_config import ProjectRole


class ProjectTokenRequest(BaseModel):
    # Validated by the issuer so malformed ids map to InvalidArgumentError, not 422
    project_id: Optional[Any] = Field(default=None, alias="projectId")

    model_config = ConfigDict(populate_by_name=True)


class ProjectTokenPayload(BaseModel):
    """Claims asserted by a project token. Built once per request, never stored."""
    user_id: str
    project_id: str
    account_id: str
    role: ProjectRole
    permissions: List[str]
    iat: int
    exp: int

    model_config = ConfigDict(frozen=True)

    def to_claims(self, issuer: str, audience: str) -> Dict[str, Any]:
        return {
            "sub": self.user_id,
            "iss": issuer,
            "aud": audience,
            "iat": self.iat,
            "exp": self.exp,
            "userId": self.user_id,
            "projectId": self.project_id,
            "accountId": self.account_id,
            "role": self.role.value,
            "permissions": list(self.permissions),
        }


class ProjectTokenResponse(BaseModel):
    token: str
    expires_in: int
    project_name: Optional[str] = None


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    is_super_admin: bool
