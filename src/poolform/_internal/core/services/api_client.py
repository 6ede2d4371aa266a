from typing import Optional

import poolform._internal.core.services.configs as configs
from poolform._internal import settings
from poolform._internal.core.errors import ConfigurationError
from poolform.api.server import APIClient


def get_api_client(profile_name: Optional[str] = None) -> APIClient:
    """
    Returns a client configured from `POOLFORM_HOST`/`POOLFORM_TOKEN` if both are set,
    otherwise from the named (or the default) profile in `~/.poolform/config.yml`.
    """
    if profile_name is None and settings.POOLFORM_HOST and settings.POOLFORM_TOKEN:
        return APIClient.from_env()
    config = configs.ConfigManager()
    profile = config.get_profile_config(profile_name)
    if profile is None:
        if profile_name is not None:
            raise ConfigurationError(f"Profile {profile_name} is not configured")
        raise ConfigurationError(
            "No default profile. Run `poolform config` or set POOLFORM_HOST and POOLFORM_TOKEN"
        )
    return APIClient(profile.host, profile.token)
