from typing import Any, Callable, Optional, Union

import orjson
from pydantic_duality import DualBaseModel

from poolform._internal.utils.json_utils import pydantic_orjson_dumps

IncludeExcludeFieldType = Union[int, str]
IncludeExcludeSetType = set[IncludeExcludeFieldType]
IncludeExcludeDictType = dict[
    IncludeExcludeFieldType, Union[bool, IncludeExcludeSetType, "IncludeExcludeDictType"]
]
IncludeExcludeType = Union[IncludeExcludeSetType, IncludeExcludeDictType]


# DualBaseModel creates two classes for the model:
# one with extra = "forbid" (CoreModel/CoreModel.__request__),
# and another with extra = "ignore" (CoreModel.__response__).
# This allows to use the same model both for a strict parsing of the user input and
# for a permissive parsing of the remote API responses.
class CoreModel(DualBaseModel):
    class Config:
        json_loads = orjson.loads
        json_dumps = pydantic_orjson_dumps

    def json(
        self,
        *,
        include: Optional[IncludeExcludeType] = None,
        exclude: Optional[IncludeExcludeType] = None,
        by_alias: bool = False,
        skip_defaults: Optional[bool] = None,  # ignore as it's deprecated
        exclude_unset: bool = False,
        exclude_defaults: bool = False,
        exclude_none: bool = False,
        encoder: Optional[Callable[[Any], Any]] = None,
        models_as_dict: bool = True,
        **dumps_kwargs: Any,
    ) -> str:
        """
        Override `json()` method so that it calls `dict()`.
        Allows changing how models are serialized by overriding `dict()` only.
        By default, `json()` won't call `dict()`, so changes applied in `dict()` won't take place.
        """
        data = self.dict(
            by_alias=by_alias,
            include=include,
            exclude=exclude,
            exclude_unset=exclude_unset,
            exclude_defaults=exclude_defaults,
            exclude_none=exclude_none,
        )
        if self.__custom_root_type__:
            data = data["__root__"]
        return self.__config__.json_dumps(data, default=encoder, **dumps_kwargs)
