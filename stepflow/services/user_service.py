from stepflow.core.exceptions import ValidationFailedError
from stepflow.models import User
from stepflow.schemas.user import UserCreate
from stepflow.services.store import MemoryStore


class UserService:
    @staticmethod
    def create(store: MemoryStore, user_in: UserCreate) -> User:
        if store.get_user_by_email(user_in.email):
            raise ValidationFailedError("User with this email already exists")
        if store.get_user_by_username(user_in.username):
            raise ValidationFailedError("User with this username already exists")
        return store.create_user(user_in.model_dump())
