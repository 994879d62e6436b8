from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

T = TypeVar("T")


class TenantScopedRepository(Generic[T]):
    """Row access for a model owned by one clinic.

    Every query built here filters on ``clinic_id``; callers never add the
    tenant filter themselves.
    """

    def __init__(self, db: Session, model: Type[T], clinic_id: str):
        self.db = db
        self.model = model
        self.clinic_id = clinic_id

    def query(self) -> Query:
        return self.db.query(self.model).filter(self.model.clinic_id == self.clinic_id)

    def get(self, id: Any) -> Optional[T]:
        return self.query().filter(self.model.id == id).first()

    def add(self, **values: Any) -> T:
        values["clinic_id"] = self.clinic_id
        row = self.model(**values)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete(self, id: Any) -> int:
        deleted = self.query().filter(self.model.id == id).delete(synchronize_session=False)
        self.db.commit()
        return deleted
