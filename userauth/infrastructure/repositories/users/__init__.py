from .sqlalchemy_user_repository import SqlAlchemyUserRepository

__all__ = ["SqlAlchemyUserRepository"]
