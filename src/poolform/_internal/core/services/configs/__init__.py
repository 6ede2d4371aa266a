import json
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from poolform._internal.core.models.config import GlobalConfig, ProfileConfig
from poolform._internal.utils.common import get_poolform_dir
from poolform._internal.utils.logging import get_logger

logger = get_logger(__name__)


class ConfigManager:
    config: GlobalConfig

    def __init__(self, poolform_dir: Optional[Path] = None):
        self.poolform_dir = Path(poolform_dir) if poolform_dir else get_poolform_dir()
        self.config_filepath = self.poolform_dir / "config.yml"
        self.load()

    def save(self):
        self.config_filepath.parent.mkdir(parents=True, exist_ok=True)
        with self.config_filepath.open("w") as f:
            # hack to convert enums to strings, etc.
            yaml.dump(json.loads(self.config.json()), f)

    def load(self):
        try:
            with open(self.config_filepath, "r") as f:
                config = yaml.safe_load(f)
            self.config = GlobalConfig.parse_obj(config)
        except FileNotFoundError:
            self.config = GlobalConfig()
        except ValidationError as e:
            logger.warning("Ignoring invalid config %s: %s", self.config_filepath, e)
            self.config = GlobalConfig()

    def get_profile_config(self, name: Optional[str] = None) -> Optional[ProfileConfig]:
        for profile in self.config.profiles:
            if name is None and profile.default:
                return profile
            if profile.name == name:
                return profile
        return None

    def configure_profile(self, name: str, host: str, token: str, default: bool):
        if default:
            for profile in self.config.profiles:
                profile.default = False
        for profile in self.config.profiles:
            if profile.name == name:
                profile.host = host
                profile.token = token
                profile.default = default or profile.default
                return
        self.config.profiles.append(
            ProfileConfig(name=name, host=host, token=token, default=default)
        )
        if len(self.config.profiles) == 1:
            self.config.profiles[0].default = True

    def delete_profile(self, name: str):
        self.config.profiles = [p for p in self.config.profiles if p.name != name]
