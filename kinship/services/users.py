"""User persistence: lookups and writes against the users table."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kinship.models import User


class UserRepository:
    """
    Thin repository over a SQLAlchemy session.

    Writes commit immediately. On a failed commit the session is rolled back
    and the SQLAlchemy error is re-raised for the calling flow to translate.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_name(self, name: str) -> User | None:
        return self.session.query(User).filter(User.name == name).first()

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def add(self, user: User) -> User:
        """Insert a new user; the database assigns the id."""
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    def save(self, user: User) -> User:
        """Persist changes to an existing user (insert if it is not stored yet)."""
        self.session.add(user)
        self._commit()
        return user

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
