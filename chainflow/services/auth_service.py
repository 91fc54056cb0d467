"""
Auth Service — registration, login and password changes.
"""
import logging

from sqlalchemy.orm import Session

from chainflow.core.exceptions import AuthenticationException, DuplicateEntityException
from chainflow.models.user import User
from chainflow.repositories.user_repository import UserRepository
from chainflow.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    TokenResponse,
    UserCreate,
)
from chainflow.utils.clock import utcnow
from chainflow.utils.events import EntityCreatedEvent, get_event_bus
from chainflow.utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, db: Session):
        self._repo = UserRepository(db)
        self._bus = get_event_bus()

    def register(self, data: UserCreate) -> TokenResponse:
        if self._repo.get_by_email(data.email):
            raise DuplicateEntityException("User", "email", data.email)
        # Self-registration never grants elevated roles
        user = User(
            name=data.name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            company=data.company,
            department=data.department or "",
            phone=data.phone or "",
            role="viewer",
            last_login=utcnow(),
        )
        user = self._repo.create(user)
        logger.info("user_registered id=%s", user.id)
        self._bus.publish(EntityCreatedEvent(entity_type="user", entity_id=user.id, user_id=user.id))
        return self._token_for(user)

    def login(self, data: LoginRequest) -> TokenResponse:
        user = self._repo.get_by_email(data.email)
        if not user or not verify_password(data.password, user.hashed_password):
            logger.warning("login_failed reason=invalid_credentials")
            raise AuthenticationException("Invalid credentials")
        if not user.is_active:
            logger.warning("login_failed reason=inactive user_id=%s", user.id)
            raise AuthenticationException("Your account has been deactivated")

        user = self._repo.update(user, {"last_login": utcnow()})
        return self._token_for(user)

    def change_password(self, user: User, data: ChangePasswordRequest) -> TokenResponse:
        if not verify_password(data.current_password, user.hashed_password):
            raise AuthenticationException("Current password is incorrect")
        user = self._repo.update(user, {"hashed_password": get_password_hash(data.new_password)})
        logger.info("password_changed user_id=%s", user.id)
        return self._token_for(user)

    def logout(self, user: User) -> MessageResponse:
        # Tokens are stateless; the client discards its copy
        logger.info("user_logged_out user_id=%s", user.id)
        return MessageResponse(message="Logged out successfully")

    def _token_for(self, user: User) -> TokenResponse:
        return TokenResponse(access_token=create_access_token(user.id), user=user)
