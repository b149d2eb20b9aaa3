"""
Keyed table store.

Thin helpers over a SQLAlchemy session that give every table the same small
contract: point lookup, indexed equality lookup, ordered traversal with an
optional predicate, single and bulk insert, partial update and an explicit
transaction for multi-row writes.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from sqlalchemy.orm import Session

from talentflow.db.base import Base


def get(db: Session, model: type[Base], key: int) -> Optional[Any]:
    """Return the row with primary key ``key``, or None when it does not exist."""
    if key is None:
        return None
    return db.get(model, key)


def find_first(db: Session, model: type[Base], **criteria: Any) -> Optional[Any]:
    """Return the first row whose columns equal ``criteria`` (lowest id first)."""
    return db.query(model).filter_by(**criteria).order_by(model.id).first()


def find_all(db: Session, model: type[Base], **criteria: Any) -> list[Any]:
    return db.query(model).filter_by(**criteria).order_by(model.id).all()


def count(db: Session, model: type[Base]) -> int:
    return db.query(model).count()


def traverse(
    db: Session,
    model: type[Base],
    field: str,
    descending: bool = False,
    predicate: Optional[Callable[[Any], bool]] = None,
) -> list[Any]:
    """
    Walk a table ordered by ``field``.

    Ties are broken by primary key in the same direction. When ``predicate``
    is given only rows for which it returns True are kept.
    """
    column = getattr(model, field)
    if descending:
        query = db.query(model).order_by(column.desc(), model.id.desc())
    else:
        query = db.query(model).order_by(column.asc(), model.id.asc())

    rows = query.all()
    if predicate is not None:
        rows = [row for row in rows if predicate(row)]
    return rows


def add(db: Session, obj: Base) -> int:
    """Insert one row and return its generated key. The caller commits."""
    db.add(obj)
    db.flush()
    return obj.id


def bulk_add(db: Session, objects: list[Base], return_keys: bool = False) -> Optional[list[int]]:
    """Insert many rows; optionally return their generated keys in insertion order."""
    db.add_all(objects)
    db.flush()
    if return_keys:
        return [obj.id for obj in objects]
    return None


def update(db: Session, model: type[Base], key: int, changes: dict[str, Any]) -> int:
    """
    Merge ``changes`` into the row with primary key ``key``.

    Returns the number of rows updated: 1, or 0 when the key is unknown.
    The caller commits.
    """
    row = get(db, model, key)
    if row is None:
        return 0
    for field, value in changes.items():
        setattr(row, field, value)
    db.flush()
    return 1


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit everything written inside the block at once, or nothing."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
