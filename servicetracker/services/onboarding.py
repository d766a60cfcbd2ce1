"""
Onboarding - first Business and admin User for a new signup
"""

from dataclasses import dataclass, field
import re
from typing import Optional
import unicodedata

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from servicetracker.core.database import transaction
from servicetracker.core.errors import Conflict, Internal, ValidationError
from servicetracker.core.identity import Identity
from servicetracker.core.tenancy import TenantResolver
from servicetracker.models.business import Business
from servicetracker.models.user import User, UserRole
from servicetracker.services.validation import blank, normalize_optional

logger = structlog.get_logger(__name__)

DEFAULT_SUBDOMAIN = "business"
# Leaves room for a numeric suffix inside the 63 character DNS label limit
MAX_SUBDOMAIN_BASE_LENGTH = 50
DEFAULT_BRAND_COLORS = {"primary": "#6366f1", "secondary": "#06b6d4"}


def slugify_subdomain(name: str) -> str:
    """Derive a subdomain label: ``"Bob's HVAC!!"`` -> ``"bobs-hvac"``"""
    slug = unicodedata.normalize("NFKD", name or "")
    slug = slug.encode("ascii", "ignore").decode("ascii").lower().replace("'", "")
    slug = re.sub(r"[^a-z0-9]+", "-", slug).strip("-")
    slug = slug[:MAX_SUBDOMAIN_BASE_LENGTH].rstrip("-")
    return slug or DEFAULT_SUBDOMAIN


def subdomain_candidates(base: str, max_attempts: int):
    """``base``, ``base-1``, ``base-2``, ... up to ``max_attempts`` names"""
    yield base
    for suffix in range(1, max_attempts):
        yield f"{base}-{suffix}"


@dataclass
class OnboardingRequest:
    business_name: Optional[str]
    business_type: Optional[str] = None
    team_size: Optional[str] = None
    primary_goal: Optional[str] = None
    brand_colors: dict = field(default_factory=dict)
    user_name: Optional[str] = None
    logo_url: Optional[str] = None

    def brand_settings(self) -> dict:
        settings = dict(DEFAULT_BRAND_COLORS)
        settings.update({key: value for key, value in self.brand_colors.items() if value})
        settings.update({
            "businessType": normalize_optional(self.business_type),
            "teamSize": normalize_optional(self.team_size),
            "primaryGoal": normalize_optional(self.primary_goal),
        })
        return settings


class OnboardingService:
    """Creates the tenant for an identity that has none yet"""

    def __init__(
        self,
        session: AsyncSession,
        default_plan: str = "starter",
        max_subdomain_attempts: int = 100,
    ):
        self.session = session
        self.default_plan = default_plan
        self.max_subdomain_attempts = max_subdomain_attempts

    async def _create_business(self, base: str, **fields) -> Business:
        """Claim the first free subdomain; the unique index arbitrates races"""
        for candidate in subdomain_candidates(base, self.max_subdomain_attempts):
            business = Business(subdomain=candidate, **fields)
            try:
                async with self.session.begin_nested():
                    self.session.add(business)
                    await self.session.flush()
                return business
            except IntegrityError:
                logger.debug(f"Subdomain {candidate} taken, trying next")
                continue

        raise Internal("Could not allocate a subdomain", details=base)

    @staticmethod
    def _user_name(identity: Identity, request: OnboardingRequest) -> str:
        if not blank(request.user_name):
            return request.user_name.strip()
        if not blank(identity.name):
            return identity.name.strip()
        if identity.email:
            return identity.email.split("@")[0]
        return "User"

    async def onboard(self, identity: Identity, request: OnboardingRequest) -> tuple[User, Business]:
        if blank(request.business_name):
            raise ValidationError("Missing required field: businessName")
        if blank(identity.email):
            raise ValidationError("Verified identity has no email address")

        if await TenantResolver(self.session).find_user(identity) is not None:
            raise Conflict("User already has a business")

        business_name = request.business_name.strip()

        async with transaction(self.session):
            business = await self._create_business(
                slugify_subdomain(business_name),
                name=business_name,
                plan=self.default_plan,
                brand_colors=request.brand_settings(),
                logo_url=normalize_optional(request.logo_url),
            )

            user = User(
                id=identity.id,
                business_id=business.id,
                email=identity.email,
                name=self._user_name(identity, request),
                role=UserRole.ADMIN,
            )
            self.session.add(user)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                raise Conflict("User already has a business") from exc

        logger.info(f"Business onboarded: {business.id} ({business.subdomain}) by {user.id}")
        return user, business
