from typing import List, Optional

from pydantic import Field
from typing_extensions import Annotated

from poolform._internal.core.models.common import CoreModel


class ProfileConfig(CoreModel):
    name: str
    host: str
    token: str
    default: Optional[bool]


class GlobalConfig(CoreModel):
    profiles: Annotated[List[ProfileConfig], Field(description="The list of profiles")] = []
