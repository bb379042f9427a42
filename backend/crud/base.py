# backend/crud/base.py
"""Shared repository contract.

Every collection read goes through ``list_rows`` which always starts from
``visible_query``, so a new list endpoint cannot skip the visibility clause.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from pydantic.alias_generators import to_camel
from sqlalchemy import or_
from sqlalchemy.orm import Session

from utils.access import Identity, direct_access_decision, list_predicate, require_owner
from utils.errors import NotFound, Unauthorized, ValidationFailed
from utils.pagination import Page, PageParams, SortKey, paginate


@dataclass(frozen=True)
class Resource:
    model: Any
    label: str
    sort: SortKey
    search_columns: Sequence[Any] = ()
    load_options: Sequence[Any] = ()
    # (db, row_id, email) -> bool, only for models carrying a visibility flag
    whitelist: Optional[Callable[[Session, int, str], bool]] = None


def escape_like(term: str) -> str:
    """Search text matched literally: LIKE wildcards are escaped with a backslash."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def visible_query(db: Session, resource: Resource, identity: Optional[Identity]):
    query = db.query(resource.model).filter(list_predicate(resource.model, identity))
    if resource.load_options:
        query = query.options(*resource.load_options)
    return query


def list_rows(
    db: Session,
    resource: Resource,
    identity: Optional[Identity],
    filters: Iterable[Any] = (),
    search: Optional[str] = None,
    params: Optional[PageParams] = None,
) -> Union[List[Any], Page]:
    """Visible rows narrowed by ``filters``/``search``.

    Returns a plain list in canonical order when ``params`` is None, otherwise
    a ``Page``.
    """
    query = visible_query(db, resource, identity)
    for clause in filters:
        query = query.filter(clause)

    term = (search or "").strip()
    if term and resource.search_columns:
        pattern = f"%{escape_like(term)}%"
        query = query.filter(or_(*[column.ilike(pattern, escape="\\") for column in resource.search_columns]))

    if params is None:
        return query.order_by(*resource.sort.order_by()).all()
    return paginate(query, resource.sort, params)


def find_row(db: Session, resource: Resource, row_id: int):
    return db.query(resource.model).filter(resource.model.id == row_id).first()


def get_row(db: Session, resource: Resource, row_id: int):
    row = find_row(db, resource, row_id)
    if row is None:
        raise NotFound(f"{resource.label} not found")
    return row


def get_readable(db: Session, resource: Resource, identity: Optional[Identity], row_id: int):
    """Direct fetch: 404 when absent, 401/403 when the access decision denies."""
    row = get_row(db, resource, row_id)

    is_whitelisted = None
    if resource.whitelist is not None:
        def is_whitelisted(email: str) -> bool:
            return resource.whitelist(db, row.id, email)

    direct_access_decision(identity, row, is_whitelisted).raise_for_denial()
    return row


def get_owned(db: Session, resource: Resource, identity: Optional[Identity], row_id: int):
    """Row locked for the rest of the transaction, after a strict ownership check."""
    if identity is None:
        raise Unauthorized()
    row = (
        db.query(resource.model)
        .filter(resource.model.id == row_id)
        .with_for_update()
        .first()
    )
    if row is None:
        raise NotFound(f"{resource.label} not found")
    require_owner(identity, row)
    return row


def create_row(db: Session, resource: Resource, identity: Identity, values: Dict[str, Any]):
    row = resource.model(user_id=identity.user_id, **values)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def check_not_null(model, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        column = model.__table__.columns.get(key)
        if value is None and column is not None and not column.nullable:
            raise ValidationFailed.for_field(to_camel(key), "Field cannot be null")


def update_row(db: Session, row, values: Dict[str, Any]):
    check_not_null(type(row), values)
    for key, value in values.items():
        setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return row


def delete_row(db: Session, row) -> None:
    db.delete(row)
    db.commit()


def detach_references(db: Session, column, value) -> int:
    """Null out ``column`` wherever it points at ``value``; returns rows touched."""
    return (
        db.query(column.class_)
        .filter(column == value)
        .update({column: None}, synchronize_session=False)
    )
