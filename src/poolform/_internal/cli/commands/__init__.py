import argparse
import os
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from rich_argparse import RichHelpFormatter

from poolform._internal.cli.utils.common import configure_logging
from poolform._internal.core.services.api_client import get_api_client
from poolform.api.server import APIClient


class BaseCommand(ABC):
    NAME: ClassVar[str] = "name the command"
    DESCRIPTION: ClassVar[str] = "describe the command"
    DEFAULT_HELP: ClassVar[bool] = True
    ALIASES: ClassVar[Optional[list[str]]] = None

    def __init__(self, parser: argparse.ArgumentParser):
        self._parser = parser

    @classmethod
    def register(cls, subparsers):
        parser_kwargs = {}
        if cls.DESCRIPTION:
            parser_kwargs["help"] = cls.DESCRIPTION
        if cls.ALIASES is not None:
            parser_kwargs["aliases"] = cls.ALIASES
        parser: argparse.ArgumentParser = subparsers.add_parser(
            cls.NAME,
            add_help=False,
            formatter_class=RichHelpFormatter,
            **parser_kwargs,
        )
        command = cls(parser)
        if cls.DEFAULT_HELP:
            parser.add_argument(
                "-h",
                "--help",
                help="Show this help message and exit",
                action="help",
                default=argparse.SUPPRESS,
            )
        command._register()
        parser.set_defaults(func=command._command)

    @abstractmethod
    def _register(self):
        pass

    @abstractmethod
    def _command(self, args: argparse.Namespace):
        self._configure_logging()

    def _configure_logging(self) -> None:
        """
        Override this method to configure command-specific logging
        """
        configure_logging()


class APIBaseCommand(BaseCommand):
    api: APIClient

    def _register(self):
        self._parser.add_argument(
            "--profile",
            help="The name of the profile. Defaults to [code]$POOLFORM_PROFILE[/]",
            metavar="NAME",
            default=os.getenv("POOLFORM_PROFILE"),
        )

    def _command(self, args: argparse.Namespace):
        super()._command(args)
        self.api = get_api_client(profile_name=args.profile)
