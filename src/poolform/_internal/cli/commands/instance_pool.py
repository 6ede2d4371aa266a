import argparse
from pathlib import Path
from typing import Any, Dict

import orjson
import yaml
from pydantic import ValidationError

from poolform._internal.cli.commands import APIBaseCommand
from poolform._internal.cli.utils.common import confirm_ask, console
from poolform._internal.cli.utils.instance_pool import (
    print_instance_pools_table,
    print_resource_diff,
)
from poolform._internal.core.errors import CLIError, ConfigurationError, ResourceNotExistsError
from poolform._internal.core.models.instance_pools import InstancePool
from poolform._internal.provider.instance_pools import resource_instance_pool


class InstancePoolCommand(APIBaseCommand):
    NAME = "pool"
    DESCRIPTION = "Manage instance pools"
    ALIASES = ["instance-pool"]

    def _register(self):
        super()._register()
        self._parser.set_defaults(subfunc=self._list)
        subparsers = self._parser.add_subparsers(dest="action")

        list_parser = subparsers.add_parser(
            "list", help="List instance pools", formatter_class=self._parser.formatter_class
        )
        list_parser.set_defaults(subfunc=self._list)
        for parser in [self._parser, list_parser]:
            parser.add_argument(
                "-v", "--verbose", action="store_true", help="Show more information"
            )

        get_parser = subparsers.add_parser(
            "get", help="Show an instance pool", formatter_class=self._parser.formatter_class
        )
        get_parser.add_argument("id", help="The instance pool ID")
        get_parser.add_argument(
            "--json", action="store_true", help="Output the instance pool in JSON format"
        )
        get_parser.set_defaults(subfunc=self._get)

        apply_parser = subparsers.add_parser(
            "apply",
            help="Create an instance pool or bring an existing one to the configuration",
            formatter_class=self._parser.formatter_class,
        )
        apply_parser.add_argument(
            "-f",
            "--file",
            type=Path,
            required=True,
            metavar="FILE",
            help="The path to the instance pool configuration file",
        )
        apply_parser.add_argument(
            "--id", help="The ID of the existing instance pool. Omit to create a new one"
        )
        apply_parser.add_argument(
            "-y", "--yes", help="Don't ask for confirmation", action="store_true"
        )
        apply_parser.set_defaults(subfunc=self._apply)

        delete_parser = subparsers.add_parser(
            "delete",
            help="Delete an instance pool",
            formatter_class=self._parser.formatter_class,
        )
        delete_parser.add_argument("id", help="The instance pool ID")
        delete_parser.add_argument(
            "-y", "--yes", help="Don't ask for confirmation", action="store_true"
        )
        delete_parser.set_defaults(subfunc=self._delete)

    def _command(self, args: argparse.Namespace):
        super()._command(args)
        args.subfunc(args)

    def _list(self, args: argparse.Namespace):
        pools = self.api.instance_pools.list()
        print_instance_pools_table(pools, verbose=getattr(args, "verbose", False))

    def _get(self, args: argparse.Namespace):
        try:
            pool = self.api.instance_pools.get(args.id)
        except ResourceNotExistsError:
            raise CLIError(f"Instance pool {args.id} does not exist")
        if args.json:
            console.print_json(pool.json(exclude_none=True))
            return
        print_instance_pools_table([pool], verbose=True)

    def _apply(self, args: argparse.Namespace):
        config = load_instance_pool_config(args.file)
        resource = resource_instance_pool()
        prior_state = None
        if args.id:
            current = resource.data(id=args.id)
            resource.read_context(current, self.api)
            if current.id == "":
                raise CLIError(f"Instance pool {args.id} does not exist")
            prior_state = current.state()
        d = resource.data(config=config, state=prior_state, id=args.id or "")
        diff = resource.diff(d)
        print_resource_diff(diff)

        if args.id and diff.is_empty():
            return
        if not args.id:
            prompt = f"Create the instance pool [code]{config['instance_pool_name']}[/]?"
        elif diff.requires_new:
            prompt = (
                f"The instance pool [code]{args.id}[/] will be deleted and created again."
                " Continue?"
            )
        else:
            prompt = f"Update the instance pool [code]{args.id}[/]?"
        if not args.yes and not confirm_ask(prompt):
            console.print("\nExiting...")
            return

        with console.status("Applying instance pool..."):
            resource.apply(d, self.api)
        console.print(f"Instance pool [code]{d.id}[/] applied")

    def _delete(self, args: argparse.Namespace):
        try:
            self.api.instance_pools.get(args.id)
        except ResourceNotExistsError:
            console.print(f"Instance pool [code]{args.id}[/] does not exist")
            exit(1)

        if not args.yes and not confirm_ask(f"Delete the instance pool [code]{args.id}[/]?"):
            console.print("\nExiting...")
            return

        with console.status("Deleting instance pool..."):
            self.api.instance_pools.delete(args.id)

        console.print(f"Instance pool [code]{args.id}[/] deleted")


def load_instance_pool_config(path: Path) -> Dict[str, Any]:
    """
    Loads and validates an instance pool YAML configuration.
    Returns only the values set in the file so that the rest fall back to the defaults.
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    try:
        pool = InstancePool.parse_obj(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid instance pool configuration {path}: {e}") from e
    return orjson.loads(pool.json(exclude_unset=True))
