from typing import Callable, Optional, TypeVar

from marketplace.errors import forbidden, not_found

T = TypeVar("T")


def require_owner(
    fetch: Callable[[str], Optional[T]],
    resource_id: str,
    uid: str,
    owner_field: str = "owner_id",
) -> T:
    """
    Load a record and make sure `uid` owns it.

    Raises 404 when `fetch` finds nothing and 403 when the record's
    `owner_field` names someone else.
    """
    record = fetch(resource_id)
    if record is None:
        raise not_found()
    if getattr(record, owner_field, None) != uid:
        raise forbidden()
    return record
