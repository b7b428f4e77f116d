"""
Row factories shared by the test modules.
"""

import uuid
from typing import Optional

from brandhub.auth.passwords import hash_password
from brandhub.auth.principal import Principal
from brandhub.models.access_request import AccessRequest, AccessRequestStatus, AccessType
from brandhub.models.asset import Asset, AssetCategory
from brandhub.models.brand import Brand
from brandhub.models.company import Company, SubscriptionStatus
from brandhub.models.user import User, UserRole


DEFAULT_PASSWORD = "correct-horse-battery"


def create_company(
    db,
    name: Optional[str] = None,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    with_brand: bool = True,
) -> Company:
    """Create a company with a MASTER user and (by default) a brand."""
    company = Company(
        name=name or f"Company {uuid.uuid4().hex[:6]}",
        subscription_status=status.value,
    )
    db.add(company)
    db.flush()

    create_user(db, company, role=UserRole.MASTER)

    if with_brand:
        db.add(Brand(name=f"{company.name} Brand", social_links={}, company=company))
        db.flush()
    return company


def create_user(
    db,
    company: Company,
    role: UserRole = UserRole.USER,
    email: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
) -> User:
    user = User(
        email=email or f"user_{uuid.uuid4().hex[:8]}@example.com",
        password_hash=hash_password(password),
        first_name="Test",
        last_name="User",
        role=role.value,
        company_id=company.id,
    )
    db.add(user)
    db.flush()
    db.refresh(company)
    return user


def master_of(company: Company) -> User:
    return next(u for u in company.users if u.role == UserRole.MASTER.value)


def principal_for(user: User) -> Principal:
    return Principal(
        user_id=user.id,
        company_id=user.company_id,
        role=user.role,
        email=user.email,
    )


def master_principal(company: Company) -> Principal:
    return principal_for(master_of(company))


def create_asset(
    db,
    brand: Brand,
    category: AssetCategory = AssetCategory.LOGO,
    name: str = "logo.png",
) -> Asset:
    asset = Asset(
        filename=f"{brand.company_id}/{category.value.lower()}/0-{name}",
        original_name=name,
        file_type="image/png",
        size=128,
        url=f"https://test-bucket.s3.us-east-1.amazonaws.com/{name}",
        category=category.value,
        tags=[],
        brand=brand,
    )
    db.add(asset)
    db.flush()
    return asset


def create_access_request(
    db,
    requester: Company,
    brand: Brand,
    status: AccessRequestStatus = AccessRequestStatus.PENDING,
    access_type: AccessType = AccessType.FULL,
) -> AccessRequest:
    request = AccessRequest(
        requester_company_id=requester.id,
        target_brand_id=brand.id,
        status=status.value,
        access_type=access_type.value,
    )
    if status == AccessRequestStatus.APPROVED:
        request.approve()
    db.add(request)
    db.flush()
    return request
