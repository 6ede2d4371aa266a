import argparse

import poolform.api.server
from poolform._internal.cli.commands import BaseCommand
from poolform._internal.cli.utils.common import confirm_ask, console
from poolform._internal.core.errors import APIError, CLIError
from poolform._internal.core.services.configs import ConfigManager
from poolform._internal.utils.logging import get_logger

logger = get_logger(__name__)


class ConfigCommand(BaseCommand):
    NAME = "config"
    DESCRIPTION = "Configure connection profiles"

    def _register(self):
        self._parser.add_argument(
            "--profile", type=str, default="default", help="The name of the profile to configure"
        )
        self._parser.add_argument("--host", type=str, help="Workspace URL")
        self._parser.add_argument("--token", type=str, help="API token")
        self._parser.add_argument(
            "--default",
            action="store_true",
            help="Set the profile as default. It will be used when --profile is omitted in commands.",
            default=False,
        )
        self._parser.add_argument(
            "--remove", action="store_true", help="Delete profile configuration"
        )
        self._parser.add_argument(
            "--no-default",
            help="Do not prompt to set the profile as default",
            action="store_true",
        )

    def _command(self, args: argparse.Namespace):
        super()._command(args)
        config_manager = ConfigManager()
        if args.remove:
            config_manager.delete_profile(args.profile)
            config_manager.save()
            console.print("[secondary]OK[/]")
            return

        if not args.host:
            raise CLIError("Specify --host")
        if not args.token:
            raise CLIError("Specify --token")
        api_client = poolform.api.server.APIClient(base_url=args.host, token=args.token)
        try:
            api_client.instance_pools.list()
        except APIError as e:
            if e.status_code in (401, 403):
                raise CLIError("Forbidden. Ensure the token is valid.")
            raise
        default_profile = config_manager.get_profile_config()
        if (
            default_profile is None
            or default_profile.name != args.profile
            or default_profile.host != args.host
            or default_profile.token != args.token
        ):
            set_it_as_default = (
                (
                    args.default
                    or not default_profile
                    or confirm_ask(f"Set '{args.profile}' as your default profile?")
                )
                if not args.no_default
                else False
            )
            config_manager.configure_profile(
                name=args.profile, host=args.host, token=args.token, default=set_it_as_default
            )
            config_manager.save()
        logger.info("Configuration updated at %s", config_manager.config_filepath)
