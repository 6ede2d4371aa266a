from poolform._internal.core.models.instance_pools import InstancePool, InstancePoolAndStats
from poolform._internal.provider.data import ResourceData, data_to_model, model_to_data
from poolform._internal.provider.resource import Resource
from poolform._internal.provider.schema import Attribute, AttributeType, Schema, schema_from_model
from poolform.api.server import APIClient

# Cannot be changed with the edit call, the pool has to be recreated
IMMUTABLE_ATTRIBUTES = [
    "node_type_id",
    "enable_elastic_disk",
    "disk_spec",
    "aws_attributes",
    "azure_attributes",
    "custom_tags",
    "preloaded_spark_versions",
]


def resource_instance_pool() -> Resource:
    return Resource(
        name="instance_pool",
        schema=schema_from_model(InstancePool, _customize_schema),
        create=_create,
        read=_read,
        update=_update,
        delete=_delete,
    )


def _customize_schema(schema: Schema) -> Schema:
    for key in IMMUTABLE_ATTRIBUTES:
        schema[key].force_new = True
    schema["instance_pool_id"] = Attribute(type=AttributeType.STRING, computed=True)
    return schema


def _create(d: ResourceData, client: APIClient):
    pool = data_to_model(d, InstancePool)
    created = client.instance_pools.create(pool)
    d.set_id(created.instance_pool_id)


def _read(d: ResourceData, client: APIClient):
    pool = client.instance_pools.get(d.id)
    model_to_data(pool, d)


def _update(d: ResourceData, client: APIClient):
    pool = data_to_model(d, InstancePoolAndStats, instance_pool_id=d.id)
    client.instance_pools.update(pool)


def _delete(d: ResourceData, client: APIClient):
    client.instance_pools.delete(d.id)
