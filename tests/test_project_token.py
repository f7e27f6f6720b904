from __future__ import annotations

import time

import jwt
import pytest

from portal.config.permissions_config import ALL_PERMISSIONS
from portal.core.exceptions import (
    ConfigurationError,
    ForbiddenError,
    InvalidArgumentError,
    UnauthenticatedError,
    UnavailableError,
)
from portal.core.permissions import compute_effective_permissions
from portal.modules.auth.service import PROJECT_TOKEN_TTL_SEC, ProjectTokenService
from tests.conftest import ACCOUNT_ID, OTHER_PROJECT_ID, PROJECT_ID, SECRET, FakeProjectAccess, make_user


def _service(access: FakeProjectAccess, secret=SECRET, clock=time.time) -> ProjectTokenService:
    return ProjectTokenService(
        memberships=access,
        super_admin_flags=access,
        granted_permissions=access,
        secret=secret,
        clock=clock,
    )


def _decode(token: str) -> dict:
    return jwt.decode(token, SECRET, algorithms=["HS256"], audience="pol-app", issuer="portal")


def test_owner_token_carries_full_permission_set(access: FakeProjectAccess) -> None:
    access.add_member("user-owner", "owner", permissions=["view_map"])

    issued = _service(access).issue_project_token(make_user("user-owner"), PROJECT_ID)
    claims = _decode(issued.token)

    assert issued.expires_in == 30
    assert issued.project_name == "County Campaign"
    assert claims["role"] == "owner"
    assert claims["permissions"] == ALL_PERMISSIONS
    # Grants are never read for owners
    assert not access.called("get_granted_permissions")


def test_member_token_carries_stored_grants(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member", permissions=["view_data", "export_data"])

    claims = _decode(_service(access).issue_project_token(make_user("user-member"), PROJECT_ID).token)

    assert claims["role"] == "member"
    assert set(claims["permissions"]) == {"view_data", "export_data"}
    assert len(claims["permissions"]) == 2


def test_token_has_exactly_the_expected_claims(access: FakeProjectAccess) -> None:
    access.add_member("user-admin", "admin", permissions=["view_reports", "not_a_permission"])

    token = _service(access).issue_project_token(make_user("user-admin"), PROJECT_ID).token
    claims = _decode(token)

    assert set(claims) == {
        "sub", "iss", "aud", "iat", "exp",
        "userId", "projectId", "accountId", "role", "permissions",
    }
    assert claims["sub"] == claims["userId"] == "user-admin"
    assert claims["projectId"] == PROJECT_ID
    assert claims["accountId"] == ACCOUNT_ID
    assert claims["exp"] - claims["iat"] == PROJECT_TOKEN_TTL_SEC == 30
    assert claims["permissions"] == compute_effective_permissions("admin", False, ["view_reports", "not_a_permission"])
    assert jwt.get_unverified_header(token) == {"alg": "HS256", "typ": "JWT"}


def test_iat_and_exp_follow_the_clock(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member")
    now = int(time.time())
    ticks = iter([now - 5, now])
    service = _service(access, clock=lambda: next(ticks))

    first = _decode(service.issue_project_token(make_user("user-member"), PROJECT_ID).token)
    second = _decode(service.issue_project_token(make_user("user-member"), PROJECT_ID).token)

    assert (first["iat"], first["exp"]) == (now - 5, now + 25)
    assert (second["iat"], second["exp"]) == (now, now + 30)


def test_token_is_rejected_with_wrong_secret_or_audience(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member")
    token = _service(access).issue_project_token(make_user("user-member"), PROJECT_ID).token

    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, "another-secret-that-is-long-enough-too", algorithms=["HS256"], audience="pol-app")
    with pytest.raises(jwt.InvalidAudienceError):
        jwt.decode(token, SECRET, algorithms=["HS256"], audience="some-other-app")


def test_expired_token_is_rejected(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member")
    service = _service(access, clock=lambda: time.time() - 31)
    token = service.issue_project_token(make_user("user-member"), PROJECT_ID).token

    with pytest.raises(jwt.ExpiredSignatureError):
        _decode(token)


def test_super_admin_marker_grants_everything_without_flag_lookup(access: FakeProjectAccess) -> None:
    access.add_member("user-root", "member", permissions=[])

    claims = _decode(_service(access).issue_project_token(make_user("user-root", "super-admin"), PROJECT_ID).token)

    assert claims["permissions"] == ALL_PERMISSIONS
    assert claims["role"] == "member"
    assert not access.called("is_super_admin_flag_set")
    assert not access.called("get_granted_permissions")


def test_super_admin_flag_is_the_fallback_source(access: FakeProjectAccess) -> None:
    access.add_member("user-flagged", "member", permissions=["view_map"])
    access.super_admin_flags.add("user-flagged")

    claims = _decode(_service(access).issue_project_token(make_user("user-flagged"), PROJECT_ID).token)

    assert claims["permissions"] == ALL_PERMISSIONS
    assert access.called("is_super_admin_flag_set")


def test_non_member_is_forbidden(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member", project_id=OTHER_PROJECT_ID)

    with pytest.raises(ForbiddenError):
        _service(access).issue_project_token(make_user("user-member"), PROJECT_ID)
    assert not access.called("get_granted_permissions")


def test_super_admin_without_membership_is_still_forbidden(access: FakeProjectAccess) -> None:
    with pytest.raises(ForbiddenError):
        _service(access).issue_project_token(make_user("user-root", "super-admin"), PROJECT_ID)


@pytest.mark.parametrize("caller", [None, {}, {"id": ""}])
def test_missing_principal_is_unauthenticated(access: FakeProjectAccess, caller) -> None:
    with pytest.raises(UnauthenticatedError):
        _service(access).issue_project_token(caller, PROJECT_ID)
    assert access.calls == []


@pytest.mark.parametrize("project_id", [None, "", 42, "not-a-uuid", "3f2b8c1e-5d4a-6b6f-9a7e-2c1d0e9f8a7b"])
def test_malformed_project_id_is_invalid(access: FakeProjectAccess, project_id) -> None:
    with pytest.raises(InvalidArgumentError):
        _service(access).issue_project_token(make_user("user-member"), project_id)
    assert access.calls == []


def test_uppercase_uuid_is_accepted(access: FakeProjectAccess) -> None:
    access.add_member("user-member", "member")
    access.memberships[(PROJECT_ID.upper(), "user-member")] = access.memberships[(PROJECT_ID, "user-member")]

    issued = _service(access).issue_project_token(make_user("user-member"), PROJECT_ID.upper())
    assert issued.token


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_a_configuration_error(access: FakeProjectAccess, secret) -> None:
    access.add_member("user-owner", "owner")

    with pytest.raises(ConfigurationError) as excinfo:
        _service(access, secret=secret).issue_project_token(make_user("user-owner"), PROJECT_ID)
    assert excinfo.value.retryable is False


@pytest.mark.parametrize("failing", ["get_membership", "is_super_admin_flag_set", "get_granted_permissions"])
def test_lookup_failures_propagate_instead_of_issuing(access: FakeProjectAccess, failing: str) -> None:
    access.add_member("user-member", "member", permissions=["view_map"])
    access.unavailable.add(failing)

    with pytest.raises(UnavailableError) as excinfo:
        _service(access).issue_project_token(make_user("user-member"), PROJECT_ID)
    assert excinfo.value.retryable is True
