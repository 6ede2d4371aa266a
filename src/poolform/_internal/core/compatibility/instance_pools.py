from poolform._internal.core.models.common import IncludeExcludeSetType

# Set by the remote side only, rejected in edit requests
_READ_ONLY_FIELDS = {"default_tags", "state", "stats"}


def get_update_instance_pool_excludes() -> IncludeExcludeSetType:
    """
    Returns a set of fields to exclude from the edit request.
    The edit request takes the same shape as the get response minus read-only fields.
    """
    return set(_READ_ONLY_FIELDS)
