"""
Demo data for the admin and community views.

All randomness goes through a ``random.Random`` instance so tests can pass
a seeded generator and get the same reports every run.
"""
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from models.enums import ReportCategory, ReportStatus
from models.report import GeoPoint, ReportInput
from services.report_store import ReportStore

logger = logging.getLogger(__name__)

# City centres (lat, lng) with wards for richer location names
CITIES = [
    {"city": "Chennai", "center": (13.0827, 80.2707), "wards": ["T. Nagar", "Velachery", "Adyar", "Anna Nagar", "Mylapore", "Tambaram", "Chromepet", "Pallavaram"]},
    {"city": "Bengaluru", "center": (12.9716, 77.5946), "wards": ["Whitefield", "Koramangala", "Indiranagar", "Jayanagar", "Yelahanka", "Marathahalli", "Electronic City", "HSR Layout"]},
    {"city": "Hyderabad", "center": (17.3850, 78.4867), "wards": ["Hitech City", "Madhapur", "Banjara Hills", "Secunderabad", "Kukatpally", "Gachibowli", "Kondapur", "Begumpet"]},
    {"city": "Mumbai", "center": (19.0760, 72.8777), "wards": ["Andheri", "Bandra", "Dadar", "Borivali", "Powai", "Goregaon", "Malad", "Kandivali"]},
    {"city": "Delhi", "center": (28.6139, 77.2090), "wards": ["Dwarka", "Rohini", "Saket", "Karol Bagh", "Lajpat Nagar", "Pitampura", "Janakpuri", "Vasant Kunj"]},
    {"city": "Thiruvallur", "center": (13.139, 79.908), "wards": ["Tiruvallur", "Poonamallee", "Avadi", "Tiruverkadu", "Pattabiram", "Ambattur", "Red Hills", "Manali"]},
    {"city": "Kochi", "center": (9.9312, 76.2673), "wards": ["Fort Kochi", "Kadavanthra", "Edapally", "Vyttila", "Kakkanad", "Aluva", "Thripunithura", "Palarivattom"]},
    {"city": "Pune", "center": (18.5204, 73.8567), "wards": ["Hinjewadi", "Koregaon Park", "Baner", "Aundh", "Viman Nagar", "Kharadi", "Wakad", "Pimpri"]},
    {"city": "Kolkata", "center": (22.5726, 88.3639), "wards": ["Salt Lake", "New Town", "Park Street", "Ballygunge", "Gariahat", "Behala", "Tollygunge", "Jadavpur"]},
    {"city": "Ahmedabad", "center": (23.0225, 72.5714), "wards": ["Vastrapur", "Bodakdev", "Satellite", "Maninagar", "Naroda", "Bapunagar", "Chandkheda", "Gota"]},
]

SAMPLE_USERS = [
    ("u001", "Arun"), ("u002", "Priya"), ("u003", "Rahul"), ("u004", "Sneha"),
    ("u005", "Vikram"), ("u006", "Anita"), ("u007", "Kiran"), ("u008", "Meera"),
    ("u009", "Rajesh"), ("u010", "Kavitha"), ("u011", "Suresh"), ("u012", "Deepa"),
    ("u013", "Manoj"), ("u014", "Lakshmi"), ("u015", "Ganesh"), ("u016", "Pooja"),
    ("u017", "Ravi"), ("u018", "Sunita"), ("u019", "Kumar"), ("u020", "Radha"),
]

TEST_REPORTS = [
    {
        "title": "Broken streetlight on Main Road",
        "description": "Streetlight has been broken for 3 days, making the area unsafe at night",
        "category": ReportCategory.ELECTRICITY,
        "location": (13.0827, 80.2707),
        "location_name": "T. Nagar, Chennai",
    },
    {
        "title": "Sewage overflow near bus stop",
        "description": "Sewage is overflowing and causing bad smell in the area",
        "category": ReportCategory.SEWAGE,
        "location": (13.0827, 80.2707),
        "location_name": "Velachery, Chennai",
    },
    {
        "title": "Pothole on highway",
        "description": "Large pothole causing traffic issues and vehicle damage",
        "category": ReportCategory.ROADS,
        "location": (12.9716, 77.5946),
        "location_name": "Koramangala, Bengaluru",
    },
    {
        "title": "Garbage not collected",
        "description": "Garbage has not been collected for a week, causing health issues",
        "category": ReportCategory.WASTE,
        "location": (17.3850, 78.4867),
        "location_name": "Hitech City, Hyderabad",
    },
    {
        "title": "Bus stop shelter damaged",
        "description": "Bus stop shelter is damaged and needs repair",
        "category": ReportCategory.TRANSPORT,
        "location": (19.0760, 72.8777),
        "location_name": "Andheri, Mumbai",
    },
    {
        "title": "Water logging on street",
        "description": "Heavy rain caused water logging, making it difficult to walk",
        "category": ReportCategory.SEWAGE,
        "location": (28.6139, 77.2090),
        "location_name": "Dwarka, Delhi",
    },
    {
        "title": "Power outage in area",
        "description": "No electricity for the past 6 hours",
        "category": ReportCategory.ELECTRICITY,
        "location": (18.5204, 73.8567),
        "location_name": "Hinjewadi, Pune",
    },
]


def _jitter(rng: random.Random, base: float, delta: float) -> float:
    return base + (rng.random() - 0.5) * delta


def generate_sample_reports(
    count: int, rng: Optional[random.Random] = None, now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """
    Build ``count`` report dicts ready for ``ReportStore.import_report``.

    Roughly half the reports get 0-11 upvotes from the first N sample
    users; the store derives priority from that count on import.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    categories = list(ReportCategory)
    statuses = list(ReportStatus)

    reports = []
    for _ in range(count):
        city = rng.choice(CITIES)
        ward = rng.choice(city["wards"])
        category = rng.choice(categories)
        status = rng.choice(statuses)
        user_id, username = rng.choice(SAMPLE_USERS)
        lat = _jitter(rng, city["center"][0], 0.18)
        lng = _jitter(rng, city["center"][1], 0.24)
        created_at = now - timedelta(milliseconds=rng.randrange(1000 * 60 * 60 * 24 * 14))

        upvotes = rng.randrange(12) if rng.random() > 0.5 else 0
        upvoted_by = [uid for uid, _ in SAMPLE_USERS[:upvotes]]

        reports.append({
            "title": f"{category.value.capitalize()} issue in {ward}",
            "description": f"Reported {category.value} issue affecting residents of {ward}, {city['city']}.",
            "category": category,
            "status": status,
            "created_at": created_at,
            "created_by_user_id": user_id,
            "created_by_username": username,
            "upvotes": upvotes,
            "upvoted_by": upvoted_by,
            "attachments": [],
            "location": {"lat": lat, "lng": lng},
            "location_name": f"{ward}, {city['city']}",
        })
    return reports


def seed_store(store: ReportStore, count: int, seed: Optional[int] = None) -> int:
    """Fill an empty store with sample reports. Returns how many were added."""
    if store.count() > 0:
        # Avoid reseeding on reload
        return 0
    rng = random.Random(seed)
    for data in generate_sample_reports(count, rng):
        store.import_report(data)
    logger.info("Seeded %d sample reports", count)
    return count


def add_test_reports(store: ReportStore, rng: Optional[random.Random] = None) -> int:
    """Add the fixed set of test reports in common areas, some with upvotes."""
    rng = rng or random.Random()
    added = 0
    for idx, item in enumerate(TEST_REPORTS, start=1):
        lat, lng = item["location"]
        report = store.create(ReportInput(
            title=item["title"],
            description=item["description"],
            category=item["category"],
            created_by_user_id=f"test-user-{idx}",
            created_by_username=f"Test User {idx}",
            location=GeoPoint(lat=lat, lng=lng),
            location_name=item["location_name"],
        ))

        if rng.random() > 0.5:
            for i in range(rng.randint(1, 5)):
                store.upvote(report.id, f"test-upvoter-{i}")
        added += 1

    logger.info("Added %d test reports, store now holds %d", added, store.count())
    return added
