# marketplace/repos/base.py
from sqlalchemy.orm import Session


class BaseRepo:
    """Transaction control shared by every repo; services decide when to commit."""

    def __init__(self, db: Session):
        self.db = db

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def flush(self):
        self.db.flush()
