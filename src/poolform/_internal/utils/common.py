from pathlib import Path
from typing import Optional


def get_poolform_dir() -> Path:
    return Path.joinpath(Path.home(), ".poolform")


def pretty_bool(value: Optional[bool]) -> str:
    if value is None:
        return "-"
    return "yes" if value else "no"
