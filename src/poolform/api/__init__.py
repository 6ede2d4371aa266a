# ruff: noqa: F401
from poolform._internal.core.errors import APIError, ClientError, ResourceNotExistsError
from poolform._internal.core.models.instance_pools import (
    InstancePool,
    InstancePoolAndStats,
    InstancePoolAwsAttributes,
    InstancePoolAzureAttributes,
    InstancePoolDiskSpec,
    InstancePoolDiskType,
)
from poolform.api.server import APIClient
