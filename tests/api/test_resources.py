"""API resource tests."""

from falcon.testing import TestClient

from staffhousing.domain.catalog import ALL_PERMISSIONS, CATALOG_VERSION
from staffhousing.domain.entities import PermissionOverride
from staffhousing.interfaces.api.middleware.auth import PROPERTY_HEADER, USER_HEADER

from tests.api.conftest import ALLOWED_ORIGIN


def _new_user_body(**overrides) -> dict:
    body = {
        "username": "New.Clerk",
        "role_id": 6,
        "property_id": 1,
        "authorized_properties": [1, 2],
        "overrides": [],
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health_ok(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health")
        assert r.status_code == 200
        assert r.json["status"] == "ok"


class TestIdentity:
    def test_missing_identity_is_unauthorized(self, app) -> None:
        r = TestClient(app).simulate_get("/v1/roles")
        assert r.status_code == 401

    def test_invalid_identity_is_unauthorized(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/roles", headers={USER_HEADER: "abc"})
        assert r.status_code == 401

    def test_missing_property_is_bad_request(self, app) -> None:
        r = TestClient(app).simulate_post(
            "/v1/roles",
            headers={USER_HEADER: "1"},
            json={"name": "Night Desk", "permissions": ["DASHBOARD.VIEW"]},
        )
        assert r.status_code == 400


class TestCORS:
    def test_allowed_origin_echoed(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health", headers={"Origin": ALLOWED_ORIGIN})
        assert r.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_other_origin_not_echoed(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health", headers={"Origin": "https://evil.example.com"})
        assert "access-control-allow-origin" not in r.headers

    def test_preflight(self, client: TestClient) -> None:
        r = client.simulate_options("/v1/roles", headers={"Origin": ALLOWED_ORIGIN})
        assert r.status_code == 204
        assert USER_HEADER in r.headers["access-control-allow-headers"]


class TestPermissionCatalog:
    def test_get_catalog(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/permissions")
        assert r.status_code == 200
        assert r.json["version"] == CATALOG_VERSION
        assert r.json["items"] == list(ALL_PERMISSIONS)
        assert r.json["required"] == ["DASHBOARD.VIEW"]
        assert [g["name"] for g in r.json["groups"]][0] == "DASHBOARD"


class TestRoles:
    def test_list_roles(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/roles")
        assert r.status_code == 200
        names = [item["name"] for item in r.json["items"]]
        assert names[0] == "Super Admin"
        assert "Viewer" in names

    def test_create_role(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/roles",
            json={"name": "Night Desk", "permissions": ["HOUSING.VIEW", "DASHBOARD.VIEW"]},
        )
        assert r.status_code == 201
        assert r.json["name"] == "Night Desk"
        assert r.json["permissions"] == ["DASHBOARD.VIEW", "HOUSING.VIEW"]
        assert r.json["is_system"] is False

    def test_create_role_duplicate(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/roles", json={"name": "Viewer", "permissions": []})
        assert r.status_code == 409

    def test_create_role_unknown_key(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/roles", json={"name": "X", "permissions": ["NOPE"]})
        assert r.status_code == 400
        assert "NOPE" in r.json["error"]

    def test_create_role_missing_name(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/roles", json={"permissions": []})
        assert r.status_code == 400

    def test_create_role_forbidden(self, client: TestClient, mock_permission_checker) -> None:
        mock_permission_checker.check.return_value = False
        r = client.simulate_post("/v1/roles", json={"name": "X", "permissions": []})
        assert r.status_code == 403

    def test_update_role(self, client: TestClient) -> None:
        r = client.simulate_put(
            "/v1/roles/6", json={"name": "Viewer", "permissions": ["DASHBOARD.VIEW"]}
        )
        assert r.status_code == 200
        assert r.json["permissions"] == ["DASHBOARD.VIEW"]

    def test_rename_system_role_forbidden(self, client: TestClient) -> None:
        r = client.simulate_put("/v1/roles/6", json={"name": "Readers", "permissions": []})
        assert r.status_code == 403

    def test_update_missing_role(self, client: TestClient) -> None:
        r = client.simulate_put("/v1/roles/404", json={"name": "Ghost", "permissions": []})
        assert r.status_code == 404
        assert r.json["error"] == "Role 404 not found"

    def test_delete_custom_role(self, client: TestClient) -> None:
        created = client.simulate_post("/v1/roles", json={"name": "Temp", "permissions": []})
        r = client.simulate_delete(f"/v1/roles/{created.json['id']}")
        assert r.status_code == 204

    def test_delete_system_role_forbidden(self, client: TestClient) -> None:
        r = client.simulate_delete("/v1/roles/6")
        assert r.status_code == 403


class TestUsers:
    def test_create_user(self, client: TestClient, fake_uow) -> None:
        body = _new_user_body(
            overrides=[
                {
                    "property_id": 2,
                    "permission_key": "HOUSING.MANAGE",
                    "is_allowed": True,
                    "correlation_id": "0b6f3a4e-1c2d-4e5f-8a9b-0c1d2e3f4a5b",
                }
            ]
        )
        r = client.simulate_post("/v1/users", json=body)
        assert r.status_code == 201
        assert r.json["username"] == "new.clerk"
        assert r.json["authorized_properties"] == [1, 2]
        assert r.json["status"] == "active"

    def test_create_user_blocked_without_dashboard(self, client: TestClient) -> None:
        body = _new_user_body(
            overrides=[{"property_id": 1, "permission_key": "DASHBOARD.VIEW", "is_allowed": False}]
        )
        r = client.simulate_post("/v1/users", json=body)
        assert r.status_code == 422
        assert r.json["code"] == "minimum_access"
        assert r.json["property_id"] == 1
        assert r.json["user_id"] is None
        assert "DASHBOARD.VIEW" in r.json["error"]

    def test_create_user_bad_override(self, client: TestClient) -> None:
        body = _new_user_body(
            overrides=[{"property_id": 1, "permission_key": "USER.VIEW", "is_allowed": "yes"}]
        )
        r = client.simulate_post("/v1/users", json=body)
        assert r.status_code == 400

    def test_create_user_super_admin_flag_must_be_boolean(
        self, client: TestClient, fake_uow
    ) -> None:
        body = _new_user_body(is_super_admin="false")
        r = client.simulate_post("/v1/users", json=body)
        assert r.status_code == 400
        assert "is_super_admin" in r.json["title"]
        assert all(u.username != "new.clerk" for u in fake_uow.users._by_id.values())

    def test_create_user_missing_field(self, client: TestClient) -> None:
        body = _new_user_body()
        del body["role_id"]
        r = client.simulate_post("/v1/users", json=body)
        assert r.status_code == 400

    def test_save_security(self, client: TestClient, fake_uow) -> None:
        body = {
            "role_id": 4,
            "property_id": 2,
            "authorized_properties": [1, 2],
            "overrides": [
                {"property_id": 1, "permission_key": "USER.VIEW", "is_allowed": True}
            ],
        }
        r = client.simulate_put("/v1/users/5/security", json=body)
        assert r.status_code == 200
        assert r.json["role_id"] == 4
        assert r.json["property_id"] == 2
        assert fake_uow.overrides._by_key == {
            (5, 1, "USER.VIEW"): PermissionOverride(5, 1, "USER.VIEW", True)
        }

    def test_save_security_unknown_user(self, client: TestClient) -> None:
        body = {"role_id": 6, "property_id": 1, "authorized_properties": [1]}
        r = client.simulate_put("/v1/users/99/security", json=body)
        assert r.status_code == 404

    def test_set_override_state(self, client: TestClient, fake_uow) -> None:
        r = client.simulate_put("/v1/users/5/overrides/2/USER.EDIT", json={"state": "grant"})
        assert r.status_code == 200
        assert r.json["state"] == "grant"
        assert (5, 2, "USER.EDIT") in fake_uow.overrides._by_key

        r = client.simulate_put("/v1/users/5/overrides/2/USER.EDIT", json={"state": "inherit"})
        assert r.status_code == 200
        assert fake_uow.overrides._by_key == {}

    def test_set_override_state_blocked(self, client: TestClient) -> None:
        r = client.simulate_put(
            "/v1/users/5/overrides/1/DASHBOARD.VIEW", json={"state": "deny"}
        )
        assert r.status_code == 422
        assert r.json["user_id"] == 5

    def test_set_override_state_invalid(self, client: TestClient) -> None:
        r = client.simulate_put("/v1/users/5/overrides/1/USER.EDIT", json={"state": "maybe"})
        assert r.status_code == 400

    def test_effective_permissions(self, client: TestClient, fake_uow) -> None:
        fake_uow.overrides.add_override(PermissionOverride(5, 2, "HOUSING.VIEW", False))

        r = client.simulate_get("/v1/users/5/effective-permissions")
        assert r.status_code == 200
        assert r.json["property_id"] == 1
        assert r.json["permissions"] == [
            "DASHBOARD.VIEW",
            "HOUSING.VIEW",
            "EMPLOYEE.VIEW",
            "REPORT.VIEW",
        ]

        r = client.simulate_get("/v1/users/5/effective-permissions", params={"property_id": 2})
        assert "HOUSING.VIEW" not in r.json["permissions"]

    def test_explain_permission(self, client: TestClient, fake_uow) -> None:
        fake_uow.overrides.add_override(PermissionOverride(5, 1, "USER.VIEW", True))

        r = client.simulate_get("/v1/users/5/effective-permissions/USER.VIEW")
        assert r.status_code == 200
        assert r.json["allowed"] is True
        assert r.json["source"] == "override"
        assert r.json["override_state"] == "grant"
        assert r.json["role_allows"] is False

    def test_own_permissions_without_user_view(
        self, client: TestClient, mock_permission_checker
    ) -> None:
        mock_permission_checker.check.return_value = False
        r = client.simulate_get(
            "/v1/users/5/effective-permissions",
            headers={USER_HEADER: "5", PROPERTY_HEADER: "1"},
        )
        assert r.status_code == 200
