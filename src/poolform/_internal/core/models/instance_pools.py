from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field
from typing_extensions import Annotated

from poolform._internal.core.models.common import CoreModel


class EbsVolumeType(str, Enum):
    GENERAL_PURPOSE_SSD = "GENERAL_PURPOSE_SSD"
    THROUGHPUT_OPTIMIZED_HDD = "THROUGHPUT_OPTIMIZED_HDD"


class AzureDiskVolumeType(str, Enum):
    STANDARD_LRS = "STANDARD_LRS"
    PREMIUM_LRS = "PREMIUM_LRS"


class AwsAvailability(str, Enum):
    SPOT = "SPOT"
    ON_DEMAND = "ON_DEMAND"


class AzureAvailability(str, Enum):
    SPOT_AZURE = "SPOT_AZURE"
    ON_DEMAND_AZURE = "ON_DEMAND_AZURE"


class InstancePoolState(str, Enum):
    ACTIVE = "ACTIVE"
    STOPPED = "STOPPED"
    DELETED = "DELETED"


class InstancePoolDiskType(CoreModel):
    ebs_volume_type: Optional[EbsVolumeType] = None
    azure_disk_volume_type: Optional[AzureDiskVolumeType] = None


class InstancePoolDiskSpec(CoreModel):
    disk_type: Optional[InstancePoolDiskType] = None
    disk_count: Annotated[Optional[int], Field(ge=0)] = None
    disk_size: Annotated[Optional[int], Field(ge=0, description="The disk size in GB")] = None


class InstancePoolAwsAttributes(CoreModel):
    availability: Optional[AwsAvailability] = None
    zone_id: Optional[str] = None
    spot_bid_price_percent: Annotated[Optional[int], Field(ge=0)] = None


class InstancePoolAzureAttributes(CoreModel):
    availability: Optional[AzureAvailability] = None
    spot_bid_max_price: Optional[float] = None


class InstancePoolStats(CoreModel):
    used_count: int = 0
    idle_count: int = 0
    pending_used_count: int = 0
    pending_idle_count: int = 0


class InstancePool(CoreModel):
    """
    The user-declared part of an instance pool. Sent as is to create a pool.
    """

    instance_pool_name: Annotated[str, Field(description="The pool name")]
    min_idle_instances: Annotated[
        int, Field(ge=0, description="The number of instances kept warm when idle")
    ] = 0
    max_capacity: Annotated[
        Optional[int],
        Field(ge=0, description="The maximum number of instances, idle and in use"),
    ] = None
    node_type_id: Annotated[str, Field(description="The node type of the pool instances")]
    idle_instance_autotermination_minutes: Annotated[
        int,
        Field(
            ge=0,
            le=10000,
            description="Minutes after which idle instances above `min_idle_instances` are terminated",
        ),
    ]
    enable_elastic_disk: Optional[bool] = True
    disk_spec: Optional[InstancePoolDiskSpec] = None
    aws_attributes: Optional[InstancePoolAwsAttributes] = None
    azure_attributes: Optional[InstancePoolAzureAttributes] = None
    custom_tags: Optional[Dict[str, str]] = None
    preloaded_spark_versions: Optional[List[str]] = None


class InstancePoolAndStats(InstancePool):
    """
    An instance pool together with the identifier assigned on creation.
    Used as the edit request body and as the get response.
    """

    instance_pool_id: Annotated[str, Field(description="The pool identifier")] = ""
    # read-only fields, only set in responses
    default_tags: Optional[Dict[str, str]] = None
    state: Optional[InstancePoolState] = None
    stats: Optional[InstancePoolStats] = None


class APIErrorBody(CoreModel):
    error_code: str = ""
    message: str = ""
