"""Teacher invite lifecycle: create, email, validate, redeem, cancel."""

import asyncio
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

import structlog

from core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateInviteError,
    InsufficientPermissionsError,
    InvalidInputError,
    InviteAlreadyUsedError,
    InviteExpiredError,
    InviteNotFoundError,
    SchoolRequiredError,
    UserAlreadyExistsError,
    WeakPasswordError,
)
from domain.entities.teacher_invite import (
    INVITE_EXPIRY_DAYS,
    InviteStatus,
    TeacherInvite,
)
from domain.entities.user import ADMIN_ROLES, User, UserRole
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.passwords import hash_password
from infrastructure.auth.provider import TokenUser
from infrastructure.mail.provider import IMailer
from infrastructure.mail.templates import (
    TeacherInviteEmail,
    build_invite_url,
    render_teacher_invite,
)

logger = structlog.get_logger()

# nanoid's URL-safe alphabet: 64 symbols, 6 bits per character
INVITE_CODE_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_CODE_LENGTH = 10
DEFAULT_MIN_PASSWORD_LENGTH = 8
DEFAULT_MAIL_TIMEOUT_SECONDS = 10.0


def generate_invite_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Random redemption code from a CSPRNG."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def split_full_name(name: str) -> tuple[str, str]:
    """Split ``"Ada Lovelace Byron"`` into ``("Ada", "Lovelace Byron")``."""
    parts = name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_email(email: str) -> str:
    email = normalize_email(email)
    if not email:
        raise InvalidInputError("Name and email are required", field="email")
    local, _, domain = email.partition("@")
    if not local or "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise InvalidInputError("Invalid email address", field="email")
    return email


@dataclass
class InviteCreated:
    """Result of creating an invite."""

    invite: TeacherInvite
    email_sent: bool

    @property
    def code(self) -> str:
        return self.invite.code


@dataclass
class InvitePreview:
    """Public projection of a redeemable invite, without internal ids."""

    email: str
    first_name: str
    last_name: str
    school_name: str
    expires_at: datetime


class TeacherInviteService:
    """Service layer for the teacher invite lifecycle.

    Status moves one way only: ``pending -> accepted`` on redemption or
    ``pending -> cancelled`` on cancellation. Expiry is never stored; it is
    evaluated on every read against ``expires_at``.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        mailer: IMailer | None = None,
        *,
        public_app_url: str = "http://localhost:3000",
        expiry_days: int = INVITE_EXPIRY_DAYS,
        code_length: int = DEFAULT_CODE_LENGTH,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
        mail_timeout: float = DEFAULT_MAIL_TIMEOUT_SECONDS,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._uow_factory = uow_factory
        self._mailer = mailer
        self._public_app_url = public_app_url
        self._expiry_days = expiry_days
        self._code_length = code_length
        self._min_password_length = min_password_length
        self._mail_timeout = mail_timeout
        self._hash_password = password_hasher

    async def create_invite(
        self,
        requester: TokenUser | None,
        email: str,
        first_name: str,
        last_name: str = "",
        subject: str | None = None,
    ) -> InviteCreated:
        """Create a teacher invite and email the code to the invitee.

        Args:
            requester: The authenticated caller (must be admin or super_admin).
            email: The invitee's email address.
            first_name: The invitee's first name.
            last_name: The invitee's last name.
            subject: Optional teaching subject, informational only.

        Returns:
            InviteCreated with the persisted invite and whether the email was
            accepted by the mail provider. A mail failure never fails the call;
            the code can be shared manually.

        Raises:
            AuthenticationError: If there is no requester.
            InsufficientPermissionsError: If the requester is not an admin.
            SchoolRequiredError: If the requester has no school.
            InvalidInputError: If name or email is blank or malformed.
            UserAlreadyExistsError: If an account already uses this email.
            DuplicateInviteError: If an unexpired pending invite exists.
        """
        school_id = self._require_school_admin(requester)

        email = _validate_email(email)
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        if not first_name:
            raise InvalidInputError("Name and email are required", field="name")
        subject = subject.strip() if subject and subject.strip() else None

        async with self._uow_factory() as uow:
            school = await uow.schools.get(school_id)
            if not school:
                raise SchoolRequiredError()

            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            existing = await uow.teacher_invites.get_pending_for_school_email(school_id, email)
            if existing:
                if not existing.is_expired:
                    raise DuplicateInviteError(email)
                # Stale pending invite: retire it so a fresh one can be issued
                await uow.teacher_invites.mark_cancelled(existing.id)
                logger.info(
                    "teacher_invite_superseded",
                    invite_id=str(existing.id),
                    school_id=str(school_id),
                )

            now = datetime.utcnow()
            invite = TeacherInvite(
                school_id=school_id,
                code=generate_invite_code(self._code_length),
                email=email,
                first_name=first_name,
                last_name=last_name,
                subject=subject,
                created_at=now,
                expires_at=now + timedelta(days=self._expiry_days),
            )

            created = await uow.teacher_invites.create(invite)
            await uow.commit()

        logger.info(
            "teacher_invite_created",
            invite_id=str(created.id),
            school_id=str(school_id),
            invited_by=str(requester.id) if requester else None,
        )

        email_sent = await self._send_invite_email(created, school.name)
        return InviteCreated(invite=created, email_sent=email_sent)

    async def list_pending_invites(self, requester: TokenUser | None) -> list[TeacherInvite]:
        """List the requester's school's pending invites, newest first.

        Expired invites are included; their ``display_status`` is ``expired``.
        """
        school_id = self._require_school_admin(requester)

        async with self._uow_factory() as uow:
            return await uow.teacher_invites.list_pending_for_school(school_id)  # type: ignore[no-any-return]

    async def cancel_invite(self, requester: TokenUser | None, invite_id: UUID) -> TeacherInvite:
        """Cancel a pending invite.

        Cancelling an already cancelled invite is a no-op. Accepted invites
        cannot be cancelled.

        Raises:
            InviteNotFoundError: If the invite does not exist.
            AuthorizationError: If the invite belongs to another school.
            InviteAlreadyUsedError: If the invite was accepted, including
                by a redemption that committed while this call was running.
        """
        school_id = self._require_school_admin(requester)

        async with self._uow_factory() as uow:
            invite = await uow.teacher_invites.get_by_id(invite_id)
            if not invite:
                raise InviteNotFoundError(str(invite_id))

            if invite.school_id != school_id:
                raise AuthorizationError("Unauthorized to cancel this invite")

            if invite.status == InviteStatus.CANCELLED:
                return invite

            if not invite.can_transition_to(InviteStatus.CANCELLED):
                raise InviteAlreadyUsedError(invite.status.value)

            if not await uow.teacher_invites.mark_cancelled(invite.id):
                raise InviteAlreadyUsedError()

            await uow.commit()

        invite.status = InviteStatus.CANCELLED
        logger.info(
            "teacher_invite_cancelled",
            invite_id=str(invite.id),
            school_id=str(school_id),
        )
        return invite

    async def validate_invite(self, code: str) -> InvitePreview:
        """Check a code without consuming it. Public, no session required.

        Raises:
            InviteNotFoundError: If no invite has this code.
            InviteAlreadyUsedError: If the invite is no longer pending.
            InviteExpiredError: If the invite is past its expiry.
        """
        code = (code or "").strip()
        if not code:
            raise InvalidInputError("Invite code is required", field="code")

        async with self._uow_factory() as uow:
            invite = await self._get_redeemable(uow, code)
            school = await uow.schools.get(invite.school_id)

        return InvitePreview(
            email=invite.email,
            first_name=invite.first_name,
            last_name=invite.last_name,
            school_name=school.name if school else "",
            expires_at=invite.expires_at,
        )

    async def redeem_invite(self, code: str, password: str) -> User:
        """Exchange a valid code and a password for a new teacher account.

        Checks are re-run against fresh state; a prior ``validate_invite``
        call is never trusted. The invite claim, the account insert and the
        ``used_by_user_id`` link commit together or not at all.

        Raises:
            InvalidInputError: If the code is blank.
            WeakPasswordError: If the password is too short.
            InviteNotFoundError: If no invite has this code.
            InviteAlreadyUsedError: If the invite is no longer pending, or a
                concurrent redemption claimed it first.
            InviteExpiredError: If the invite is past its expiry.
            UserAlreadyExistsError: If an account already uses the email.
        """
        code = (code or "").strip()
        if not code or password is None:
            raise InvalidInputError("Invite code and password are required")
        if len(password) < self._min_password_length:
            raise WeakPasswordError(self._min_password_length)

        async with self._uow_factory() as uow:
            invite = await self._get_redeemable(uow, code)

            if await uow.users.get_by_email(invite.email):
                raise UserAlreadyExistsError(invite.email)

            password_hash = await asyncio.to_thread(self._hash_password, password)

            # Claim the invite first; losers of a concurrent race stop here
            if not await uow.teacher_invites.mark_accepted(invite.id, datetime.utcnow()):
                raise InviteAlreadyUsedError()

            user = await uow.users.create(
                User(
                    email=invite.email,
                    first_name=invite.first_name,
                    last_name=invite.last_name,
                    role=UserRole.TEACHER,
                    password_hash=password_hash,
                    school_id=invite.school_id,
                    is_active=True,
                    email_verified=True,
                )
            )
            await uow.teacher_invites.set_used_by(invite.id, user.id)
            await uow.commit()

        logger.info(
            "teacher_invite_redeemed",
            invite_id=str(invite.id),
            user_id=str(user.id),
            school_id=str(invite.school_id),
        )
        return user

    # --- Internal helpers ---

    @staticmethod
    def _require_school_admin(requester: TokenUser | None) -> UUID:
        """Verify the caller is an admin with a school. Returns the school id."""
        if requester is None:
            raise AuthenticationError("Unauthorized: Please log in")
        if requester.user_role not in ADMIN_ROLES:
            raise InsufficientPermissionsError(sorted(role.value for role in ADMIN_ROLES))
        if requester.school_id is None:
            raise SchoolRequiredError()
        return requester.school_id

    @staticmethod
    async def _get_redeemable(uow: IUnitOfWork, code: str) -> TeacherInvite:
        invite = await uow.teacher_invites.get_by_code(code)
        if not invite:
            raise InviteNotFoundError()
        if invite.status != InviteStatus.PENDING:
            raise InviteAlreadyUsedError(invite.status.value)
        if invite.is_expired:
            raise InviteExpiredError()
        return invite

    async def _send_invite_email(self, invite: TeacherInvite, school_name: str) -> bool:
        """Deliver the invite code; report failure instead of raising."""
        if self._mailer is None:
            logger.warning("teacher_invite_email_skipped", invite_id=str(invite.id))
            return False

        message = render_teacher_invite(
            TeacherInviteEmail(
                to=invite.email,
                teacher_name=invite.full_name,
                school_name=school_name,
                invite_code=invite.code,
                invite_url=build_invite_url(self._public_app_url, invite.code),
                expires_at=invite.expires_at,
            )
        )

        try:
            sent = await asyncio.wait_for(self._mailer.send(message), timeout=self._mail_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "teacher_invite_email_failed",
                invite_id=str(invite.id),
                reason="timeout",
                timeout_seconds=self._mail_timeout,
            )
            return False
        except Exception:
            logger.exception("teacher_invite_email_failed", invite_id=str(invite.id))
            return False

        if not sent:
            logger.warning(
                "teacher_invite_email_failed",
                invite_id=str(invite.id),
                reason="rejected",
            )
        return bool(sent)
