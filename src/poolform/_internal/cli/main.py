import argparse

from rich.markup import escape
from rich_argparse import RichHelpFormatter

from poolform._internal.cli.commands.config import ConfigCommand
from poolform._internal.cli.commands.instance_pool import InstancePoolCommand
from poolform._internal.cli.utils.common import _colors, console
from poolform._internal.core.errors import ClientError, CLIError, ConfigurationError
from poolform._internal.utils.logging import get_logger
from poolform.version import __version__ as version

logger = get_logger(__name__)


def main():
    RichHelpFormatter.usage_markup = True
    RichHelpFormatter.styles["code"] = _colors["code"]
    RichHelpFormatter.styles["argparse.args"] = _colors["code"]
    RichHelpFormatter.styles["argparse.groups"] = "bold grey74"
    RichHelpFormatter.styles["argparse.text"] = "grey74"

    parser = argparse.ArgumentParser(
        description=(
            "Manage instance pools of a compute workspace."
            " Configure access via [code]poolform config[/] or"
            " [code]$POOLFORM_HOST[/] and [code]$POOLFORM_TOKEN[/]\n"
        ),
        formatter_class=RichHelpFormatter,
        epilog="Run [code]poolform COMMAND --help[/] for more information on a particular command.\n ",
        add_help=True,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{version}",
        help="Show poolform version",
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    subparsers = parser.add_subparsers(metavar="COMMAND")
    ConfigCommand.register(subparsers)
    InstancePoolCommand.register(subparsers)

    args = parser.parse_args()

    try:
        args.func(args)
    except (ClientError, CLIError, ConfigurationError) as e:
        console.print(f"[error]{escape(str(e))}[/]")
        logger.debug(e, exc_info=True)
        exit(1)


if __name__ == "__main__":
    main()
