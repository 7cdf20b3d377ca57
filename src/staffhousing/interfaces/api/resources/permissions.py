"""Permission catalog resource."""

import falcon.asgi

from staffhousing.domain.catalog import (
    CATALOG_VERSION,
    MINIMUM_ACCESS_PERMISSION,
    PERMISSION_GROUPS,
    all_permissions,
)


class PermissionCatalogResource:
    """GET /v1/permissions - catalog keys and their display groups."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "version": CATALOG_VERSION,
            "items": list(all_permissions()),
            "groups": [
                {"name": name, "permissions": list(keys)}
                for name, keys in PERMISSION_GROUPS.items()
            ],
            "required": [MINIMUM_ACCESS_PERMISSION],
        }
        resp.status = falcon.HTTP_200
