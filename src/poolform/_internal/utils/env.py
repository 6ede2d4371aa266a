import os
from collections.abc import Mapping
from typing import Optional, overload


class Environ:
    def __init__(self, environ: Mapping[str, str]):
        self._environ = environ

    def get(self, name: str, *, default: Optional[str] = None) -> Optional[str]:
        value = self._environ.get(name)
        if not value:
            return default
        return value

    @overload
    def get_bool(self, name: str, *, default: None = None) -> Optional[bool]: ...

    @overload
    def get_bool(self, name: str, *, default: bool) -> bool: ...

    def get_bool(self, name: str, *, default: Optional[bool] = None) -> Optional[bool]:
        try:
            raw_value = self._environ[name]
        except KeyError:
            return default
        value = raw_value.lower()
        if value in ["0", "false", "off"]:
            return False
        if value in ["1", "true", "on"]:
            return True
        raise ValueError(f"Invalid bool value: {name}={raw_value}")

    @overload
    def get_int(self, name: str, *, default: None = None) -> Optional[int]: ...

    @overload
    def get_int(self, name: str, *, default: int) -> int: ...

    def get_int(self, name: str, *, default: Optional[int] = None) -> Optional[int]:
        try:
            raw_value = self._environ[name]
        except KeyError:
            return default
        try:
            return int(raw_value)
        except ValueError as e:
            raise ValueError(f"Invalid int value: {e}: {name}={raw_value}") from e


environ = Environ(os.environ)
