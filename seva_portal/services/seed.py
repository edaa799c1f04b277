# seva_portal/services/seed.py
import logging
from datetime import timedelta

from ..core.config import settings
from ..core.policy import PERMISSIONS
from ..core.security import hash_password
from ..repos import utcnow
from .numbering import next_receipt_number

logger = logging.getLogger(__name__)

# payment and contact details shown on the donate page
DEFAULT_SETTINGS = [
    {"key": "upi_id", "value": "bawaliyaseva@paytm",
     "description": "Primary UPI ID for donations", "category": "payment"},
    {"key": "backup_upi_id", "value": "bawaliyaseva@phonepe",
     "description": "Backup UPI ID for donations", "category": "payment"},
    {"key": "bank_name", "value": "State Bank of India",
     "description": "Bank name for direct transfers", "category": "payment"},
    {"key": "account_number", "value": "1234567890",
     "description": "Bank account number", "category": "payment"},
    {"key": "ifsc_code", "value": "SBIN0001234",
     "description": "IFSC code for bank transfers", "category": "payment"},
    {"key": "account_holder_name", "value": "Bawaliya Seva Sansthan",
     "description": "Account holder name", "category": "payment"},
    {"key": "contact_email", "value": "info@bawaliyaseva.org",
     "description": "Primary contact email", "category": "contact"},
    {"key": "contact_phone", "value": "+91 98765 43210",
     "description": "Primary contact phone", "category": "contact"},
]

DEMO_EVENTS = [
    {
        "title": "Community Health Camp",
        "description": "Free medical checkup and consultation for all community members. "
                       "Basic health screening, blood pressure checks and general health advice.",
        "time": "9:00 AM",
        "venue": "Community Center, Mumbai",
        "max_participants": 100,
        "category": "health",
    },
    {
        "title": "Tree Plantation Drive",
        "description": "Plant trees and spread awareness about environmental conservation. "
                       "Refreshments and saplings will be provided.",
        "time": "7:00 AM",
        "venue": "Shivaji Park, Mumbai",
        "max_participants": 50,
        "category": "environment",
    },
    {
        "title": "Education Workshop",
        "description": "Digital literacy workshop for underprivileged children and their parents.",
        "time": "2:00 PM",
        "venue": "Bawaliya Seva Sansthan Center",
        "max_participants": 30,
        "category": "education",
    },
]

DEMO_DONATIONS = [
    {"donor_name": "Anonymous", "donor_email": "anonymous@example.com", "amount": 5000,
     "payment_method": "UPI", "purpose": "General Donation", "is_anonymous": True},
    {"donor_name": "Rajesh Kumar", "donor_email": "rajesh@example.com", "donor_phone": "+91 98765 11111",
     "amount": 2500, "payment_method": "Bank Transfer", "purpose": "Education", "is_anonymous": False},
    {"donor_name": "Priya Sharma", "donor_email": "priya@example.com", "donor_phone": "+91 98765 22222",
     "amount": 1000, "payment_method": "UPI", "purpose": "Healthcare", "is_anonymous": False},
]

DEMO_TEAM = [
    {"name": "Dr. Amita Patel", "designation": "Founder & President",
     "bio": "A social worker with over 15 years of experience in community development.",
     "email": "amita@bawaliyasevasansthan.org", "phone": "+91 98765 00001",
     "social_links": {"linkedin": "https://linkedin.com/in/amitapatel",
                      "facebook": "https://facebook.com/amitapatel"}},
    {"name": "Rajesh Gupta", "designation": "Secretary",
     "bio": "Former corporate executive turned social entrepreneur, dedicated to education initiatives.",
     "email": "rajesh@bawaliyasevasansthan.org", "phone": "+91 98765 00002",
     "social_links": {"linkedin": "https://linkedin.com/in/rajeshgupta"}},
    {"name": "Sunita Singh", "designation": "Treasurer",
     "bio": "Chartered Accountant with expertise in non-profit financial management.",
     "email": "sunita@bawaliyasevasansthan.org", "phone": "+91 98765 00003"},
    {"name": "Dr. Vikram Shah", "designation": "Program Director",
     "bio": "Medical professional leading our healthcare and wellness programs.",
     "email": "vikram@bawaliyasevasansthan.org", "phone": "+91 98765 00004"},
]


async def ensure_default_settings(repo) -> list:
    """Create the default payment/contact settings that are missing. Returns the created keys."""
    created = []
    for item in DEFAULT_SETTINGS:
        if await repo.find_one("settings", {"key": item["key"]}):
            continue
        now = utcnow()
        await repo.insert_one("settings", {**item, "is_editable": True, "created_at": now, "updated_at": now})
        created.append(item["key"])
    if created:
        logger.info("created default settings: %s", ", ".join(created))
    return created

async def ensure_admin(repo, email: str, password: str, name: str = "Super Admin",
                       role: str = "super_admin") -> dict:
    existing = await repo.find_one("admins", {"email": email})
    if existing:
        return existing
    now = utcnow()
    return await repo.insert_one("admins", {
        "name": name,
        "email": email,
        "password_hash": hash_password(password),
        "role": role,
        "permissions": list(PERMISSIONS) if role == "super_admin" else [],
        "is_active": True,
        "last_login": None,
        "created_at": now,
        "updated_at": now,
    })

async def seed_demo(repo) -> dict:
    """Insert demo data into empty collections. Safe to call repeatedly."""
    created = {"events": 0, "donations": 0, "team": 0}
    await ensure_admin(repo, settings.seed_admin_email, settings.seed_admin_password)

    if await repo.count("events") == 0:
        for i, item in enumerate(DEMO_EVENTS):
            now = utcnow()
            await repo.insert_one("events", {
                **item,
                "date": now + timedelta(days=14 + 5 * i),
                "organizer": settings.org_name,
                "status": "upcoming",
                "registration_required": True,
                "is_active": True,
                "registered_participants": [],
                "created_at": now,
                "updated_at": now,
            })
            created["events"] += 1

    if await repo.count("donations") == 0:
        for item in DEMO_DONATIONS:
            now = utcnow()
            await repo.insert_one("donations", {
                **item,
                "receipt_number": await next_receipt_number(repo, now),
                "status": "Completed",
                "created_at": now,
                "updated_at": now,
            })
            created["donations"] += 1

    if await repo.count("team") == 0:
        for order, item in enumerate(DEMO_TEAM, start=1):
            now = utcnow()
            await repo.insert_one("team", {
                "social_links": {},
                **item,
                "order": order,
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            })
            created["team"] += 1

    created["settings"] = len(await ensure_default_settings(repo))
    logger.info("demo data seeded: %s", created)
    return created
