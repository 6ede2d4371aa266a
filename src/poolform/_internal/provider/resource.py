from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from poolform._internal.core.errors import APIError
from poolform._internal.core.services.diff import StateDiff
from poolform._internal.provider.data import ResourceData
from poolform._internal.provider.schema import Schema
from poolform._internal.utils.logging import get_logger
from poolform.api.server import APIClient

logger = get_logger(__name__)

CRUDFunc = Callable[[ResourceData, APIClient], None]


@dataclass
class ResourceDiff:
    changes: StateDiff = field(default_factory=dict)
    requires_new: bool = False
    # Changed attributes that force replacement
    replaced_by: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.changes) == 0


class Resource:
    """
    A declarative resource: a schema plus create/read/update/delete functions.

    The `*_context` methods wrap the raw functions with the lifecycle rules
    the host expects: a not found error on read removes the resource
    instead of failing, and deleting a resource that is already gone succeeds.
    """

    def __init__(
        self,
        name: str,
        schema: Schema,
        create: CRUDFunc,
        read: CRUDFunc,
        delete: CRUDFunc,
        update: Optional[CRUDFunc] = None,
    ):
        self.name = name
        self.schema = schema
        self._create = create
        self._read = read
        self._update = update
        self._delete = delete

    def data(
        self,
        config: Optional[Mapping[str, Any]] = None,
        state: Optional[Mapping[str, Any]] = None,
        id: str = "",
    ) -> ResourceData:
        return ResourceData(self.schema, config=config, state=state, id=id)

    def diff(self, d: ResourceData) -> ResourceDiff:
        changes = d.changes()
        replaced_by = [key for key in changes if self.schema[key].force_new]
        # every attribute is immutable if there is no update function
        if self._update is None:
            replaced_by = list(changes)
        return ResourceDiff(
            changes=changes,
            requires_new=len(replaced_by) > 0,
            replaced_by=replaced_by,
        )

    def create_context(self, d: ResourceData, client: APIClient):
        self._create(d, client)
        logger.debug("Created %s %s", self.name, d.id)
        self.read_context(d, client)

    def read_context(self, d: ResourceData, client: APIClient):
        try:
            self._read(d, client)
        except APIError as e:
            if not e.is_missing():
                raise
            logger.info("Removing %s %s from state: %s", self.name, d.id, e)
            d.set_id("")

    def update_context(self, d: ResourceData, client: APIClient):
        if self._update is None:
            raise NotImplementedError(f"{self.name} does not support in-place updates")
        self._update(d, client)
        logger.debug("Updated %s %s", self.name, d.id)
        self.read_context(d, client)

    def delete_context(self, d: ResourceData, client: APIClient):
        try:
            self._delete(d, client)
        except APIError as e:
            if not e.is_missing():
                raise
            logger.info("%s %s is already deleted: %s", self.name, d.id, e)
            return
        logger.debug("Deleted %s %s", self.name, d.id)

    def apply(self, d: ResourceData, client: APIClient) -> ResourceDiff:
        """
        Brings the remote resource to the declared configuration:
        creates it if it has no id, replaces it if an immutable attribute changed,
        updates it in place otherwise.
        """
        diff = self.diff(d)
        if d.id == "":
            self.create_context(d, client)
        elif diff.requires_new:
            logger.info(
                "Replacing %s %s due to changes in %s",
                self.name,
                d.id,
                ", ".join(diff.replaced_by),
            )
            self.delete_context(d, client)
            d.set_id("")
            self.create_context(d, client)
        elif not diff.is_empty():
            self.update_context(d, client)
        else:
            self.read_context(d, client)
        return diff
