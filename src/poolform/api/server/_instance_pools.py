from typing import List

from pydantic import parse_obj_as

from poolform._internal.core.compatibility.instance_pools import (
    get_update_instance_pool_excludes,
)
from poolform._internal.core.errors import ClientError
from poolform._internal.core.models.instance_pools import InstancePool, InstancePoolAndStats
from poolform._internal.server.schemas.instance_pools import (
    CreateInstancePoolResponse,
    DeleteInstancePoolRequest,
    ListInstancePoolsResponse,
)
from poolform.api.server._group import APIClientGroup


class InstancePoolsAPIClient(APIClientGroup):
    BASE_PATH = "/api/2.0/instance-pools"

    def create(self, pool: InstancePool) -> InstancePoolAndStats:
        resp = self._request(self._path("create"), body=pool.json(exclude_none=True))
        created = parse_obj_as(CreateInstancePoolResponse.__response__, resp.json())
        self._logger.debug("Created instance pool %s", created.instance_pool_id)
        return InstancePoolAndStats.__response__.parse_obj(
            {**pool.dict(), "instance_pool_id": created.instance_pool_id}
        )

    def get(self, instance_pool_id: str) -> InstancePoolAndStats:
        resp = self._request(
            self._path("get"),
            method="GET",
            params={"instance_pool_id": instance_pool_id},
        )
        return parse_obj_as(InstancePoolAndStats.__response__, resp.json())

    def update(self, pool: InstancePoolAndStats) -> None:
        if not pool.instance_pool_id:
            raise ClientError("Cannot edit an instance pool without instance_pool_id")
        body = pool.json(exclude=get_update_instance_pool_excludes(), exclude_none=True)
        self._request(self._path("edit"), body=body)

    def delete(self, instance_pool_id: str) -> None:
        body = DeleteInstancePoolRequest(instance_pool_id=instance_pool_id)
        self._request(self._path("delete"), body=body.json())

    def list(self) -> List[InstancePoolAndStats]:
        resp = self._request(self._path("list"), method="GET")
        return parse_obj_as(ListInstancePoolsResponse.__response__, resp.json()).instance_pools
