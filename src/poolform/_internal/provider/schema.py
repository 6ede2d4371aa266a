from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, Union

from pydantic import BaseModel
from pydantic.fields import SHAPE_DICT, SHAPE_LIST, SHAPE_MAPPING, SHAPE_SINGLETON, ModelField


class AttributeType(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LIST = "list"
    MAP = "map"
    OBJECT = "object"


@dataclass
class Attribute:
    type: AttributeType
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    default: Any = None
    # Element type for lists and maps, nested schema for objects
    elem: Optional[Union["Schema", AttributeType]] = field(default=None, repr=False)

    def coerce(self, value: Any) -> Any:
        """
        Converts a value from the flat string representation of the prior state,
        e.g. `"true"` or `"15"`, to the attribute type. Other values are returned as is.
        """
        if not isinstance(value, str):
            return value
        if self.type == AttributeType.BOOL:
            if value.lower() in ["true", "1"]:
                return True
            if value.lower() in ["false", "0", ""]:
                return False
            raise ValueError(f"Invalid bool value: {value}")
        if self.type == AttributeType.INT:
            return int(value) if value != "" else None
        if self.type == AttributeType.FLOAT:
            return float(value) if value != "" else None
        return value


Schema = Dict[str, Attribute]
SchemaCustomizer = Callable[[Schema], Schema]


def schema_from_model(
    model: Type[BaseModel], customize: Optional[SchemaCustomizer] = None
) -> Schema:
    """
    Builds a resource schema from pydantic model fields.
    Required model fields become required attributes, the rest are optional
    and carry the model default.
    """
    schema: Schema = {}
    for name, model_field in model.__fields__.items():
        schema[name] = _attribute_from_field(model_field)
    if customize is not None:
        schema = customize(schema)
    return schema


def _attribute_from_field(model_field: ModelField) -> Attribute:
    required = bool(model_field.required)
    default = None if required else model_field.get_default()
    if model_field.shape == SHAPE_LIST:
        attr_type = AttributeType.LIST
        elem: Optional[Union[Schema, AttributeType]] = _elem_from_type(model_field.type_)
    elif model_field.shape in (SHAPE_DICT, SHAPE_MAPPING):
        attr_type = AttributeType.MAP
        elem = _elem_from_type(model_field.type_)
    elif model_field.shape == SHAPE_SINGLETON:
        attr_type = _scalar_type(model_field.type_)
        elem = None
        if attr_type == AttributeType.OBJECT:
            elem = schema_from_model(model_field.type_)
    else:
        raise TypeError(f"Unsupported field shape for {model_field.name}")
    if isinstance(default, Enum):
        default = default.value
    return Attribute(
        type=attr_type,
        required=required,
        optional=not required,
        default=default,
        elem=elem,
    )


def _elem_from_type(type_: Any) -> Union["Schema", AttributeType]:
    attr_type = _scalar_type(type_)
    if attr_type == AttributeType.OBJECT:
        return schema_from_model(type_)
    return attr_type


def _scalar_type(type_: Any) -> AttributeType:
    if isinstance(type_, type):
        # bool is a subclass of int
        if issubclass(type_, bool):
            return AttributeType.BOOL
        if issubclass(type_, Enum) or issubclass(type_, str):
            return AttributeType.STRING
        if issubclass(type_, int):
            return AttributeType.INT
        if issubclass(type_, float):
            return AttributeType.FLOAT
        if issubclass(type_, BaseModel):
            return AttributeType.OBJECT
    raise TypeError(f"Unsupported attribute type: {type_}")
