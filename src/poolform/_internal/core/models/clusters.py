from typing import List, Optional

from pydantic import Field
from typing_extensions import Annotated

from poolform._internal.core.models.common import CoreModel


class NodeInstanceType(CoreModel):
    instance_type_id: Optional[str] = None
    local_disks: int = 0
    local_disk_size_gb: int = 0


class NodeType(CoreModel):
    node_type_id: str
    memory_mb: int = 0
    num_cores: float = 0
    num_gpus: int = 0
    description: str = ""
    category: str = ""
    is_deprecated: bool = False
    node_instance_type: Optional[NodeInstanceType] = None

    @property
    def memory_gb(self) -> float:
        return self.memory_mb / 1024

    def has_local_disk(self) -> bool:
        return self.node_instance_type is not None and self.node_instance_type.local_disks > 0


class NodeTypeRequest(CoreModel):
    min_memory_gb: Annotated[int, Field(ge=0)] = 0
    min_cores: Annotated[int, Field(ge=0)] = 0
    min_gpus: Annotated[int, Field(ge=0)] = 0
    local_disk: bool = False
    category: Optional[str] = None


class SparkVersion(CoreModel):
    key: str
    name: str


class SparkVersionRequest(CoreModel):
    long_term_support: bool = False
    beta: bool = False
    ml: bool = False
    gpu: bool = False
    scala: str = "2.12"


class NodeTypeList(CoreModel):
    node_types: List[NodeType] = []


class SparkVersionList(CoreModel):
    versions: List[SparkVersion] = []
