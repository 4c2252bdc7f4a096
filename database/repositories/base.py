from sqlalchemy.orm import Session


class BaseRepository:
    """Session holder shared by the matching repositories.

    Repositories only flush; committing belongs to whoever owns the
    transaction (the batch runner, the validation service or a unit of work).
    """

    def __init__(self, db: Session):
        self.db = db

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
