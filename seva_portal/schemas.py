from datetime import datetime, timezone
from typing import Any, ClassVar, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

# --------------------------
# Shared
# --------------------------
def _utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v

class EmergencyContact(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None

class MessageOut(BaseModel):
    message: str

class PartialUpdate(BaseModel):
    """Base for PUT bodies: omitted fields stay untouched, but fields listed in
    `required_fields` may not be cleared with an explicit null."""
    required_fields: ClassVar[tuple] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_cleared_fields(cls, data):
        if isinstance(data, dict):
            cleared = [f for f in cls.required_fields if f in data and data[f] is None]
            if cleared:
                raise ValueError(f"{', '.join(cleared)} cannot be null")
        return data

# --------------------------
# Auth & admins
# --------------------------
AdminRole = Literal["super_admin", "admin", "moderator"]
Permission = Literal[
    "members", "events", "gallery", "donations", "posts",
    "documents", "team", "volunteers", "settings",
]

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: AdminRole
    email: EmailStr

class AdminCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: AdminRole = "admin"
    permissions: List[Permission] = []

class AdminOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: AdminRole
    permissions: List[str] = []
    is_active: bool = True
    last_login: Optional[datetime] = None

# --------------------------
# Donations
# --------------------------
PaymentMethod = Literal["UPI", "Bank Transfer", "Cash", "Cheque"]
DonationStatus = Literal["Pending", "Completed", "Failed"]

# the donate page and the admin console spell payment methods differently
_PAYMENT_ALIASES = {
    "upi": "UPI",
    "online": "UPI",
    "bank transfer": "Bank Transfer",
    "bank_transfer": "Bank Transfer",
    "cash": "Cash",
    "cheque": "Cheque",
}

def _payment_method(v):
    if isinstance(v, str):
        return _PAYMENT_ALIASES.get(v.strip().lower(), v)
    return v

class DonationIn(BaseModel):
    donor_name: str = Field(min_length=1)
    donor_email: EmailStr
    donor_phone: Optional[str] = None
    amount: float = Field(gt=0, allow_inf_nan=False)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    purpose: str = "General Donation"
    is_anonymous: bool = False
    date: Optional[datetime] = None   # backdated entries from the admin console

    @field_validator("payment_method", mode="before")
    @classmethod
    def normalize_payment_method(cls, v):
        return _payment_method(v)

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v):
        return _utc(v)

class DonationUpdate(PartialUpdate):
    required_fields = ("donor_name", "donor_email", "amount", "payment_method",
                       "purpose", "is_anonymous", "status")

    donor_name: Optional[str] = None
    donor_email: Optional[EmailStr] = None
    donor_phone: Optional[str] = None
    amount: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None
    purpose: Optional[str] = None
    is_anonymous: Optional[bool] = None
    status: Optional[DonationStatus] = None

    @field_validator("payment_method", mode="before")
    @classmethod
    def normalize_payment_method(cls, v):
        return _payment_method(v)

class DonationOut(BaseModel):
    id: str
    donor_name: str
    donor_email: str
    donor_phone: Optional[str] = None
    amount: float
    payment_method: str
    transaction_id: Optional[str] = None
    receipt_number: Optional[str] = None
    purpose: Optional[str] = None
    is_anonymous: bool = False
    status: DonationStatus = "Completed"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class DonationIdsIn(BaseModel):
    donation_ids: List[str] = Field(min_length=1)

# --------------------------
# Members
# --------------------------
MembershipType = Literal["regular", "premium", "lifetime"]
MemberStatus = Literal["pending", "approved", "rejected"]

class MemberIn(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str
    address: str
    membership_type: MembershipType = "regular"
    status: MemberStatus = "pending"
    join_date: Optional[datetime] = None
    emergency_contact: Optional[EmergencyContact] = None
    profile_image: Optional[str] = None

    @field_validator("join_date")
    @classmethod
    def join_date_as_utc(cls, v):
        return _utc(v)

class MemberUpdate(PartialUpdate):
    required_fields = ("name", "email", "phone", "address", "membership_type", "status", "is_active")

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    membership_type: Optional[MembershipType] = None
    status: Optional[MemberStatus] = None
    is_active: Optional[bool] = None
    emergency_contact: Optional[EmergencyContact] = None
    profile_image: Optional[str] = None

class MemberIdsIn(BaseModel):
    member_ids: List[str] = Field(min_length=1)

# --------------------------
# Events
# --------------------------
EventStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]

class EventIn(BaseModel):
    title: str = Field(min_length=1)
    description: str
    date: datetime
    time: str
    venue: str
    organizer: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    category: str = "community"
    status: EventStatus = "upcoming"
    registration_required: bool = True
    image_url: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v):
        return _utc(v)

class EventUpdate(PartialUpdate):
    required_fields = ("title", "description", "date", "time", "venue", "category",
                       "status", "registration_required")

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    time: Optional[str] = None
    venue: Optional[str] = None
    organizer: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    category: Optional[str] = None
    status: Optional[EventStatus] = None
    registration_required: Optional[bool] = None
    image_url: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v):
        return _utc(v)

# --------------------------
# Posts
# --------------------------
PostType = Literal["notice", "blog", "announcement"]

class PostIn(BaseModel):
    title: str = Field(min_length=1)
    content: str
    type: PostType
    author: str
    image: Optional[str] = None
    tags: List[str] = []
    is_published: bool = True
    is_pinned: bool = False

class PostUpdate(PartialUpdate):
    required_fields = ("title", "content", "type", "author", "tags", "is_published", "is_pinned")

    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[PostType] = None
    author: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None
    is_pinned: Optional[bool] = None

# --------------------------
# Gallery
# --------------------------
GalleryType = Literal["photo", "video"]

class GalleryIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: GalleryType = "photo"
    url: str                          # file path for photos, YouTube URL for videos
    thumbnail: Optional[str] = None
    event_id: Optional[str] = None
    tags: List[str] = []
    category: str = "general"

class GalleryUpdate(PartialUpdate):
    required_fields = ("title", "type", "url", "tags", "category")

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[GalleryType] = None
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    event_id: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None

# --------------------------
# Volunteers
# --------------------------
VolunteerStatus = Literal["pending", "approved", "rejected", "inactive"]

class Availability(BaseModel):
    weekdays: bool = False
    weekends: bool = False
    evenings: bool = False

class VolunteerIn(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: str
    age: int = Field(ge=1, le=120)
    occupation: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    availability: Availability = Availability()
    experience: Optional[str] = None
    motivation: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None

class VolunteerStatusIn(BaseModel):
    status: VolunteerStatus
    approved_by: Optional[str] = None

# --------------------------
# Documents
# --------------------------
DocumentType = Literal["certificate", "report", "financial", "other"]

class DocumentIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: DocumentType
    file_name: str
    file_path: str
    file_size: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None
    is_public: bool = True

class DocumentUpdate(PartialUpdate):
    required_fields = ("title", "type", "is_public")

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[DocumentType] = None
    is_public: Optional[bool] = None

# --------------------------
# Team
# --------------------------
class SocialLinks(BaseModel):
    linkedin: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None

class TeamMemberIn(BaseModel):
    name: str = Field(min_length=1)
    designation: str
    bio: Optional[str] = None
    photo: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    social_links: SocialLinks = SocialLinks()
    order: int = 0
    is_active: bool = True

class TeamMemberUpdate(PartialUpdate):
    required_fields = ("name", "designation", "social_links", "order", "is_active")

    name: Optional[str] = None
    designation: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    social_links: Optional[SocialLinks] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None

# --------------------------
# Settings
# --------------------------
class SettingIn(BaseModel):
    key: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_.-]+$")
    value: Any
    description: Optional[str] = None
    category: str = "general"
    is_editable: bool = True

class SettingUpdate(BaseModel):
    value: Any
    description: Optional[str] = None
    category: Optional[str] = None

# --------------------------
# Stats
# --------------------------
class StatsOverview(BaseModel):
    total_donations: int
    total_amount: float
    completed_donations: int
    active_events: int
    upcoming_events: int
    total_members: int
    pending_volunteers: int
    published_posts: int
    top_purposes: List[dict]
