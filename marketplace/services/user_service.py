from sqlalchemy.orm import Session

from marketplace.data.models.user import UserModel
from marketplace.domain.enums import UserRole
from marketplace.domain.errors import ConflictError, ForbiddenError, NotFoundError
from marketplace.repos.user_repo import UserRepo
from marketplace.utils.security import hash_password, verify_password, burn_password_check
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, username: str, password: str, email: str, role: UserRole) -> UserModel:
        if self.repo.find_by_username(username):
            raise ConflictError("Username already taken")
        if self.repo.find_by_email(email):
            raise ConflictError("Email already registered")

        user = UserModel(
            username=username,
            password=hash_password(password),
            email=email,
            role=UserRole(role).value,
        )
        try:
            self.repo.add_user(user)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Error creating user {username}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Registered user {user.id} ({username}) as {user.role}")
        return user

    def authenticate(self, username: str, password: str) -> UserModel | None:
        """
        Returns the user when the password matches, None otherwise.
        An unknown username and a wrong password look the same to the caller.
        """
        user = self.repo.find_by_username(username)
        if user is None:
            burn_password_check(password)
            return None

        if not verify_password(password, user.password):
            return None
        return user

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def find_by_username(self, username: str) -> UserModel | None:
        return self.repo.find_by_username(username)

    def find_by_email(self, email: str) -> UserModel | None:
        return self.repo.find_by_email(email)

    def update_role(self, user_id: int, role: UserRole) -> UserModel:
        user = self.get_user(user_id)
        user.role = UserRole(role).value
        self.repo.commit()
        logger.info(f"User {user_id} role changed to {user.role}")
        return user

    def update_profile(self, user_id: int, email: str) -> UserModel:
        user = self.get_user(user_id)
        other = self.repo.find_by_email(email)
        if other and other.id != user_id:
            raise ConflictError("Email already registered")
        user.email = email
        self.repo.commit()
        return user

    def update_password(self, user_id: int, current_password: str, new_password: str) -> UserModel:
        user = self.get_user(user_id)
        if not verify_password(current_password, user.password):
            logger.warning(f"Password change for user {user_id} refused: current password mismatch")
            raise ForbiddenError("Current password is incorrect")
        user.password = hash_password(new_password)
        self.repo.commit()
        logger.info(f"Password updated for user {user_id}")
        return user
