import re
from logging import Logger
from typing import List, Optional, Tuple

from pydantic import parse_obj_as

from poolform._internal.core.models.clusters import (
    NodeType,
    NodeTypeList,
    NodeTypeRequest,
    SparkVersion,
    SparkVersionList,
    SparkVersionRequest,
)
from poolform.api.server._group import APIClientGroup, APIRequest

_DEFAULT_NODE_TYPES = {
    "aws": "i3.xlarge",
    "azure": "Standard_D3_v2",
    "gcp": "n1-standard-4",
}

_VERSION_KEY_REGEX = re.compile(r"^(\d+)\.(\d+)\.x")


class ClustersAPIClient(APIClientGroup):
    BASE_PATH = "/api/2.0/clusters"

    def __init__(self, _request: APIRequest, _logger: Logger, cloud: str = "aws"):
        super().__init__(_request, _logger)
        self._cloud = cloud

    def list_node_types(self) -> List[NodeType]:
        resp = self._request(self._path("list-node-types"), method="GET")
        return parse_obj_as(NodeTypeList.__response__, resp.json()).node_types

    def smallest_node_type(self, request: Optional[NodeTypeRequest] = None) -> str:
        """
        Returns the id of the smallest non-deprecated node type matching `request`:
        the fewest cores first, then the least memory.
        Falls back to a well-known per-cloud node type if nothing matches.
        """
        if request is None:
            request = NodeTypeRequest()
        candidates = [nt for nt in self.list_node_types() if _node_type_matches(nt, request)]
        if len(candidates) == 0:
            default = _DEFAULT_NODE_TYPES.get(self._cloud, _DEFAULT_NODE_TYPES["aws"])
            self._logger.debug("No node type matches %s, using %s", request, default)
            return default
        candidates.sort(key=lambda nt: (nt.num_cores, nt.memory_mb))
        return candidates[0].node_type_id

    def spark_versions(self) -> List[SparkVersion]:
        resp = self._request(self._path("spark-versions"), method="GET")
        return parse_obj_as(SparkVersionList.__response__, resp.json()).versions

    def latest_spark_version(
        self,
        request: Optional[SparkVersionRequest] = None,
        default: Optional[str] = None,
    ) -> Optional[str]:
        """
        Returns the key of the highest runtime version matching `request` or `default`.
        """
        if request is None:
            request = SparkVersionRequest()
        matching = [v for v in self.spark_versions() if _spark_version_matches(v, request)]
        if len(matching) == 0:
            return default
        matching.sort(key=lambda v: _version_key_tuple(v.key), reverse=True)
        return matching[0].key


def _node_type_matches(node_type: NodeType, request: NodeTypeRequest) -> bool:
    if node_type.is_deprecated:
        return False
    if node_type.num_cores < request.min_cores:
        return False
    if node_type.memory_gb < request.min_memory_gb:
        return False
    if node_type.num_gpus < request.min_gpus:
        return False
    if request.local_disk and not node_type.has_local_disk():
        return False
    if request.category is not None and node_type.category.lower() != request.category.lower():
        return False
    return True


def _spark_version_matches(version: SparkVersion, request: SparkVersionRequest) -> bool:
    name = version.name
    if f"Scala {request.scala}" not in name and f"scala{request.scala}" not in version.key:
        return False
    if request.long_term_support and "LTS" not in name:
        return False
    if not request.beta and "Beta" in name:
        return False
    if request.ml != (" ML " in f" {name} "):
        return False
    if request.gpu != ("GPU" in name):
        return False
    return True


def _version_key_tuple(key: str) -> Tuple[int, int]:
    match = _VERSION_KEY_REGEX.match(key)
    if match is None:
        return (0, 0)
    return int(match.group(1)), int(match.group(2))
