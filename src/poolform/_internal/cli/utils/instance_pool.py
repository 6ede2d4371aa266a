from typing import Any, List

from rich.markup import escape
from rich.table import Table

from poolform._internal.cli.utils.common import add_row_from_dict, console
from poolform._internal.core.models.instance_pools import InstancePoolAndStats
from poolform._internal.core.services.diff import StateDiff
from poolform._internal.provider.resource import ResourceDiff
from poolform._internal.utils.common import pretty_bool


def print_instance_pools_table(pools: List[InstancePoolAndStats], verbose: bool = False):
    table = get_instance_pools_table(pools, verbose=verbose)
    console.print(table)
    console.print()


def get_instance_pools_table(pools: List[InstancePoolAndStats], verbose: bool = False) -> Table:
    table = Table(box=None)
    table.add_column("ID", no_wrap=True)
    table.add_column("NAME")
    table.add_column("NODE TYPE")
    table.add_column("IDLE")
    table.add_column("MAX")
    table.add_column("STATE")
    if verbose:
        table.add_column("USED")
        table.add_column("PENDING")
        table.add_column("AUTOTERMINATION")
        table.add_column("ELASTIC DISK")

    for pool in pools:
        stats = pool.stats
        row = {
            "ID": pool.instance_pool_id,
            "NAME": pool.instance_pool_name,
            "NODE TYPE": pool.node_type_id,
            "IDLE": f"{stats.idle_count if stats else 0}/{pool.min_idle_instances}",
            "MAX": str(pool.max_capacity) if pool.max_capacity is not None else "-",
            "STATE": pool.state.value if pool.state else "-",
            "USED": str(stats.used_count if stats else 0),
            "PENDING": str(stats.pending_used_count + stats.pending_idle_count if stats else 0),
            "AUTOTERMINATION": f"{pool.idle_instance_autotermination_minutes}m",
            "ELASTIC DISK": pretty_bool(pool.enable_elastic_disk),
        }
        add_row_from_dict(table, row)
    return table


def print_resource_diff(diff: ResourceDiff):
    if diff.is_empty():
        console.print("No changes\n")
        return
    console.print(get_changes_table(diff.changes, replaced_by=diff.replaced_by))
    console.print()


def get_changes_table(changes: StateDiff, replaced_by: List[str]) -> Table:
    table = Table(box=None)
    table.add_column("ATTRIBUTE", no_wrap=True)
    table.add_column("OLD")
    table.add_column("NEW")
    table.add_column("")
    for key, change in changes.items():
        row = {
            "ATTRIBUTE": key,
            "OLD": _format_value(change["old"]),
            "NEW": _format_value(change["new"]),
            3: "[warning]forces replacement[/]" if key in replaced_by else "",
        }
        add_row_from_dict(table, row)
    return table


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    return escape(str(value))
