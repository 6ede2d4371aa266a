from typing import Any

import orjson
from pydantic import BaseModel


def pydantic_orjson_dumps(v: Any, *, default: Any) -> str:
    return orjson.dumps(
        v,
        option=get_orjson_default_options(),
        default=orjson_default,
    ).decode()


def orjson_default(obj):
    if isinstance(obj, float):
        # orjson does not convert float subclasses be default
        return float(obj)
    if isinstance(obj, BaseModel):
        # Allows calling orjson.dumps() on pydantic models,
        # e.g. fixture responses given as models
        return obj.dict()
    raise TypeError


def get_orjson_default_options() -> int:
    return orjson.OPT_NON_STR_KEYS
