# seva_portal/services/stats.py
from collections import defaultdict

from ..repos import utcnow

async def top_purposes(repo, limit: int = 5):
    """Completed donation totals grouped by purpose, largest first."""
    totals = defaultdict(lambda: {"count": 0, "amount": 0.0})
    for d in await repo.find("donations", {"status": "Completed"}):
        bucket = totals[d.get("purpose") or "General Donation"]
        bucket["count"] += 1
        bucket["amount"] += float(d.get("amount") or 0)
    rows = [{"purpose": p, **v} for p, v in totals.items()]
    rows.sort(key=lambda r: (-r["amount"], r["purpose"]))
    return rows[:limit]

async def compute_overview(repo):
    """
    Returns a dict that matches the StatsOverview schema.
    Amount totals only count completed donations.
    """
    completed = await repo.find("donations", {"status": "Completed"})
    return {
        "total_donations": await repo.count("donations"),
        "total_amount": round(sum(float(d.get("amount") or 0) for d in completed), 2),
        "completed_donations": len(completed),
        "active_events": await repo.count("events", {"is_active": True}),
        "upcoming_events": await repo.count("events", {"is_active": True, "date": {"$gte": utcnow()}}),
        "total_members": await repo.count("members"),
        "pending_volunteers": await repo.count("volunteers", {"status": "pending"}),
        "published_posts": await repo.count("posts", {"is_published": True}),
        "top_purposes": await top_purposes(repo),
    }
