from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

import orjson
from pydantic import BaseModel, ValidationError

from poolform._internal.core.errors import ConfigurationError
from poolform._internal.core.services.diff import StateDiff, diff_states
from poolform._internal.provider.schema import Attribute, Schema


class ResourceData:
    """
    The state of a single resource as seen by one lifecycle step.

    `config` holds the declared (desired) values, `state` the prior state
    as persisted after the last step. Values set by the step itself take
    precedence over both and become the next persisted state.
    """

    def __init__(
        self,
        schema: Schema,
        config: Optional[Mapping[str, Any]] = None,
        state: Optional[Mapping[str, Any]] = None,
        id: str = "",
    ):
        self._schema = schema
        self._config = dict(config or {})
        self._state = {k: self._attribute(k).coerce(v) for k, v in (state or {}).items()}
        self._set: Dict[str, Any] = {}
        self._id = id
        for key in self._config:
            self._attribute(key)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, id: str):
        self._id = id

    @property
    def schema(self) -> Schema:
        return self._schema

    def get(self, key: str) -> Any:
        """
        Returns the value set by the current step, or the planned value otherwise.
        """
        if key in self._set:
            return self._set[key]
        _, new = self.get_change(key)
        return new

    def set(self, key: str, value: Any):
        self._attribute(key)
        self._set[key] = value

    def get_change(self, key: str) -> Tuple[Any, Any]:
        """
        Returns the prior and the planned value of the attribute.
        """
        attr = self._attribute(key)
        old = self._state.get(key, attr.default)
        if key in self._config:
            new = self._config[key]
        elif attr.computed:
            new = old
        else:
            new = attr.default
        return old, new

    def has_change(self, key: str) -> bool:
        return key in self.changes()

    def changes(self) -> StateDiff:
        old = {}
        new = {}
        for key in self._schema:
            old[key], new[key] = self.get_change(key)
        return diff_states(old, new, keys=self._schema.keys())

    def state(self) -> Dict[str, Any]:
        """
        Returns a snapshot of all attributes values.
        """
        return {key: self.get(key) for key in self._schema}

    def _attribute(self, key: str) -> Attribute:
        try:
            return self._schema[key]
        except KeyError:
            raise KeyError(f"Unknown attribute: {key}") from None


M = TypeVar("M", bound=BaseModel)


def data_to_model(d: ResourceData, model: Type[M], **extra: Any) -> M:
    """
    Builds a request model from the resource data.
    Attributes that are not model fields and unset values are skipped.
    """
    values = {}
    for key in d.schema:
        if key not in model.__fields__:
            continue
        value = d.get(key)
        if value is None:
            continue
        values[key] = value
    values.update(extra)
    try:
        return model.parse_obj(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid resource configuration: {e}") from e


def model_to_data(obj: BaseModel, d: ResourceData):
    """
    Writes model fields known to the resource schema into the resource data.
    Enums and nested models are stored in their JSON form.
    """
    data = orjson.loads(obj.json())
    for key in d.schema:
        if key in data:
            d.set(key, _strip_none(data[key]))


def _strip_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_strip_none(v) for v in value]
    return value
