from typing import List

from poolform._internal.core.models.common import CoreModel
from poolform._internal.core.models.instance_pools import InstancePoolAndStats


class CreateInstancePoolResponse(CoreModel):
    instance_pool_id: str


class DeleteInstancePoolRequest(CoreModel):
    instance_pool_id: str


class ListInstancePoolsResponse(CoreModel):
    instance_pools: List[InstancePoolAndStats] = []
