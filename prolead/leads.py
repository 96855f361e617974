"""
Lead persistence and the pure helpers that work on lead records.

Leads live in the `leads` table:

    CREATE TABLE leads (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        name TEXT NOT NULL,
        address TEXT NOT NULL,
        latitude DOUBLE PRECISION NOT NULL,
        longitude DOUBLE PRECISION NOT NULL,
        email TEXT, phone TEXT, website TEXT,
        business_type TEXT, industry TEXT, description TEXT,
        rating DOUBLE PRECISION, reviews INTEGER,
        place_id TEXT UNIQUE,
        notes TEXT,
        status TEXT NOT NULL DEFAULT 'new',
        tags TEXT[] NOT NULL DEFAULT '{}',
        contact_person TEXT, company_size TEXT, revenue TEXT,
        last_contact TIMESTAMPTZ,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );
"""

import json
import math

from psycopg2 import sql

from prolead.contact import best_phone
from prolead.db import execute_query, execute_transaction, execute_write
from prolead.validators import ImportedLead, LeadCreateRequest, LeadFilter

EARTH_RADIUS_KM = 6371

LEAD_COLUMNS = [
    "name",
    "address",
    "latitude",
    "longitude",
    "email",
    "phone",
    "website",
    "business_type",
    "industry",
    "description",
    "rating",
    "reviews",
    "place_id",
    "notes",
    "status",
    "tags",
    "contact_person",
    "company_size",
    "revenue",
    "last_contact",
]

STATUS_POINTS = {
    "new": 0,
    "contacted": 5,
    "qualified": 10,
    "converted": 20,
    "lost": -5,
}

GENERIC_PLACE_TYPES = {"establishment", "point_of_interest", "store"}
OWNER_HINTS = ("proprietário", "gerente", "dono", "owner", "manager")


def _insert_statement(columns):
    return sql.SQL("INSERT INTO leads ({}) VALUES ({}) RETURNING *").format(
        sql.SQL(", ").join(map(sql.Identifier, columns)),
        sql.SQL(", ").join(sql.Placeholder() * len(columns)),
    )


def create_lead(lead: LeadCreateRequest) -> dict:
    values = lead.model_dump()
    return execute_write(_insert_statement(LEAD_COLUMNS), tuple(values[c] for c in LEAD_COLUMNS))


def get_lead(lead_id: str):
    rows = execute_query("SELECT * FROM leads WHERE id = %s", (lead_id,))
    return rows[0] if rows else None


def get_lead_by_place_id(place_id: str):
    rows = execute_query("SELECT * FROM leads WHERE place_id = %s", (place_id,))
    return rows[0] if rows else None


def list_leads() -> list:
    return execute_query("SELECT * FROM leads ORDER BY created_at ASC")


def update_lead(lead_id: str, updates: dict):
    """Apply a partial update; returns the updated lead or None if it does not exist."""
    columns = [c for c in LEAD_COLUMNS if c in updates]
    if not columns:
        return get_lead(lead_id)

    assignments = [
        sql.SQL("{} = {}").format(sql.Identifier(c), sql.Placeholder()) for c in columns
    ]
    assignments.append(sql.SQL("updated_at = NOW()"))
    query = sql.SQL("UPDATE leads SET {} WHERE id = %s RETURNING *").format(
        sql.SQL(", ").join(assignments)
    )
    return execute_write(query, tuple(updates[c] for c in columns) + (lead_id,))


def delete_lead(lead_id: str) -> bool:
    row = execute_write("DELETE FROM leads WHERE id = %s RETURNING id", (lead_id,))
    return row is not None


def replace_all_leads(leads: list) -> int:
    """Swap the whole table for the imported leads in one transaction."""
    columns = ["id", *LEAD_COLUMNS, "created_at", "updated_at"]
    insert = sql.SQL("INSERT INTO leads ({}) VALUES ({})").format(
        sql.SQL(", ").join(map(sql.Identifier, columns)),
        sql.SQL(", ").join(sql.Placeholder() * len(columns)),
    )
    statements = [("DELETE FROM leads", None)]
    for lead in leads:
        values = lead.model_dump()
        values["id"] = str(values["id"])
        statements.append((insert, tuple(values[c] for c in columns)))
    execute_transaction(statements)
    return len(leads)


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _matches_presence(wanted, value) -> bool:
    if wanted is None:
        return True
    return bool(value) == wanted


def filter_leads(leads: list, filters: LeadFilter) -> list:
    matched = []
    for lead in leads:
        if filters.business_type and lead.get("business_type") != filters.business_type:
            continue
        if filters.industry and lead.get("industry") != filters.industry:
            continue
        if filters.status and lead.get("status") != filters.status:
            continue
        if filters.min_rating and (lead.get("rating") or 0) < filters.min_rating:
            continue
        if filters.center_lat is not None and filters.radius:
            distance = distance_km(
                filters.center_lat, filters.center_lng, lead["latitude"], lead["longitude"]
            )
            if distance > filters.radius / 1000:
                continue
        if filters.tags and not set(filters.tags) & set(lead.get("tags") or []):
            continue
        if not (
            _matches_presence(filters.has_phone, lead.get("phone"))
            and _matches_presence(filters.has_email, lead.get("email"))
            and _matches_presence(filters.has_website, lead.get("website"))
            and _matches_presence(filters.has_contact_person, lead.get("contact_person"))
        ):
            continue
        matched.append(lead)
    return matched


def lead_score(lead: dict) -> int:
    """Rank a lead by how complete and promising it is."""
    score = 0
    for field, points in (
        ("name", 10),
        ("address", 10),
        ("phone", 15),
        ("email", 15),
        ("website", 10),
        ("contact_person", 10),
    ):
        if lead.get(field):
            score += points

    if lead.get("rating"):
        score += math.floor(lead["rating"] * 2)
    if lead.get("reviews"):
        score += min(lead["reviews"] / 10, 10)

    score += STATUS_POINTS.get(lead.get("status"), 0)
    return round(score)


def sort_leads(leads: list) -> list:
    return sorted(leads, key=lead_score, reverse=True)


def _contact_person(place: dict):
    for review in place.get("reviews") or []:
        text = (review.get("text") or "").lower()
        if review.get("author_name") and any(hint in text for hint in OWNER_HINTS):
            return review["author_name"]
    return None


def lead_from_place(place: dict) -> LeadCreateRequest:
    """Turn a Places API record into a new lead."""
    types = place.get("types") or []
    business_type = next((t for t in types if t not in GENERIC_PLACE_TYPES), None)
    business_type = business_type or (types[0] if types else "other")

    phone = best_phone(place)
    website = place.get("website")
    rating = place.get("rating")
    ratings_total = place.get("user_ratings_total")

    description = "Found via Google Places API"
    overview = (place.get("editorial_summary") or {}).get("overview")
    if overview:
        description += f" - {overview}"
    if place.get("business_status"):
        description += f" (Status: {place['business_status']})"

    tags = []
    if website:
        tags.append("has-website")
    if phone:
        tags.append("has-phone")
    if rating and rating >= 4.0:
        tags.append("well-rated")
    if ratings_total and ratings_total > 50:
        tags.append("many-reviews")
    if place.get("business_status") == "OPERATIONAL":
        tags.append("active")
    if place.get("price_level"):
        tags.append(f"price-level-{place['price_level']}")

    location = place["geometry"]["location"]
    return LeadCreateRequest(
        name=place["name"],
        address=place.get("formatted_address") or place.get("vicinity") or "",
        latitude=location["lat"],
        longitude=location["lng"],
        business_type=business_type,
        rating=rating,
        reviews=ratings_total,
        website=website,
        phone=phone,
        place_id=place["place_id"],
        description=description,
        contact_person=_contact_person(place),
        tags=tags,
    )


def export_leads(leads: list) -> str:
    return json.dumps(leads, indent=2, default=str)


def parse_import(text: str) -> list:
    """Parse an exported leads document; raises ValueError when it is not one."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of leads")
    if not all(isinstance(item, dict) for item in payload):
        raise ValueError("Every lead must be a JSON object")
    # pydantic.ValidationError is a ValueError subclass.
    return [ImportedLead(**item) for item in payload]
