from typing import Any, Dict, Optional

from poolform._internal.core.models.instance_pools import (
    APIErrorBody,
    InstancePool,
    InstancePoolAndStats,
)
from poolform._internal.testing.fixtures import HTTPFixture


def get_instance_pool(
    instance_pool_name: str = "Shared Pool",
    min_idle_instances: int = 10,
    max_capacity: Optional[int] = 1000,
    node_type_id: str = "i3.xlarge",
    idle_instance_autotermination_minutes: int = 15,
    **kwargs: Any,
) -> InstancePool:
    return InstancePool(
        instance_pool_name=instance_pool_name,
        min_idle_instances=min_idle_instances,
        max_capacity=max_capacity,
        node_type_id=node_type_id,
        idle_instance_autotermination_minutes=idle_instance_autotermination_minutes,
        **kwargs,
    )


def get_instance_pool_and_stats(
    instance_pool_id: str = "abc",
    instance_pool_name: str = "Shared Pool",
    min_idle_instances: int = 10,
    max_capacity: Optional[int] = 1000,
    node_type_id: str = "i3.xlarge",
    idle_instance_autotermination_minutes: int = 15,
    **kwargs: Any,
) -> InstancePoolAndStats:
    return InstancePoolAndStats(
        instance_pool_id=instance_pool_id,
        instance_pool_name=instance_pool_name,
        min_idle_instances=min_idle_instances,
        max_capacity=max_capacity,
        node_type_id=node_type_id,
        idle_instance_autotermination_minutes=idle_instance_autotermination_minutes,
        **kwargs,
    )


def get_instance_pool_config(**overrides: Any) -> Dict[str, Any]:
    config = {
        "idle_instance_autotermination_minutes": 15,
        "instance_pool_name": "Shared Pool",
        "max_capacity": 1000,
        "min_idle_instances": 10,
        "node_type_id": "i3.xlarge",
    }
    config.update(overrides)
    return config


def get_error_fixture(
    method: str,
    resource: str,
    message: str = "Internal error happened",
    error_code: str = "INVALID_REQUEST",
    status: int = 400,
) -> HTTPFixture:
    return HTTPFixture(
        method=method,
        resource=resource,
        response=APIErrorBody(error_code=error_code, message=message),
        status=status,
    )
