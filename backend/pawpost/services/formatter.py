"""
Post Formatter - renders a post record into share-ready text.

Rules shared by every layout:
- Output is a list of lines joined with "\\n"; section headers are preceded
  by a blank line.
- A section appears only when its field is non-blank (after trim) or a
  non-empty list. Absent fields never leave an empty header behind.
- Repeated items keep their list order and are numbered from 1.
- Multi-value string fields drop blank entries before being joined.
- Enum values go through the shared label tables in pawpost.schemas.labels.

The functions are pure: same record in, byte-identical text out.
"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from pawpost.schemas.labels import (
    ALERT_SEVERITY_LABELS,
    ALERT_STATUS_LABELS,
    CASE_STATUS_LABELS,
    GENDER_LABELS,
    POST_TYPE_LABELS,
    URGENCY_LABELS,
    VIOLATION_CATEGORY_LABELS,
)
from pawpost.schemas.posts import BlacklistAlert, BlacklistPost, RescuePost, parse_iso_date

RESCUE_SHARE_PROMPT = "Please share to help these animals find loving homes! 🐕🐈"
BLACKLIST_SHARE_PROMPT = "Share this information to protect others from fraud"
ALERT_SHARE_PROMPT = "Share this alert to help protect animals in your community"


def format_date_for_display(value: Optional[str]) -> str:
    """
    '2025-01-05' -> 'January 5, 2025'. Empty input gives an empty string.
    Text that is not an ISO date (an unvalidated draft) is shown as typed.
    """
    if not value:
        return ""
    try:
        d = parse_iso_date(value)
    except ValueError:
        return value
    return f"{d:%B} {d.day}, {d.year}"


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _non_blank(values: Iterable[str]) -> List[str]:
    return [v for v in values if v and v.strip()]


def _hashtag_line(tags: Sequence[str]) -> Optional[str]:
    cleaned = [t.strip().lstrip("#") for t in tags]
    cleaned = [t for t in cleaned if t]
    if not cleaned:
        return None
    return " ".join(f"#{t}" for t in cleaned)


def _field_lines(fields: Sequence[Tuple[str, Optional[str]]]) -> List[str]:
    return [f"{label}: {value}" for label, value in fields if _has_text(value)]


def _joined(label: str, values: Iterable[str]) -> List[str]:
    kept = _non_blank(values)
    if not kept:
        return []
    return [f"{label}: {', '.join(kept)}"]


def _section(lines: List[str], header: str, body: List[str]) -> None:
    if body:
        lines.append(f"\n{header}")
        lines.extend(body)


def _text_section(lines: List[str], header: str, value: Optional[str]) -> None:
    if _has_text(value):
        _section(lines, header, [value])


def _numbered(items: Sequence, noun: str, render: Callable) -> List[str]:
    body = []
    for index, item in enumerate(items, start=1):
        body.append(f"\n▼ {noun} #{index}")
        body.extend(render(item))
    return body


def _finish(lines: List[str], hashtags: Sequence[str], share_prompt: str) -> str:
    tag_line = _hashtag_line(hashtags)
    if tag_line:
        lines.append(f"\n{tag_line}")
    lines.append(f"\n{share_prompt}")
    return "\n".join(lines)


# --- Rescue post -----------------------------------------------------------

def _render_animal(animal) -> List[str]:
    out = _field_lines([
        ("Name", animal.name),
        ("Species", animal.species),
        ("Breed", animal.breed),
        ("Age", animal.age),
        ("Color", animal.color),
    ])
    if animal.gender:
        out.append(f"Gender: {GENDER_LABELS[animal.gender]}")
    out += _field_lines([
        ("Microchip ID", animal.microchip_id),
        ("Medical Conditions", animal.medical_conditions),
        ("Special Needs", animal.special_needs),
    ])
    out += _joined("Photos", animal.photos)
    return out


def _render_contact(person) -> List[str]:
    out = _field_lines([
        ("Name", person.name),
        ("Role", person.role),
        ("Phone", person.phone),
        ("Email", person.email),
        ("Address", person.address),
    ])
    out += _joined("Social Media", person.social_media)
    return out


def _render_rescue_org(org) -> List[str]:
    out = _field_lines([
        ("Name", org.name),
        ("Registration", org.registration),
        ("Website", org.website),
        ("Phone", org.phone),
        ("Email", org.email),
        ("Address", org.address),
        ("Capacity", org.capacity),
    ])
    out += _joined("Specializations", org.specializations)
    out += _joined("Social Media", org.social_media)
    return out


def format_rescue_post(post: RescuePost) -> str:
    type_emoji, type_label = POST_TYPE_LABELS[post.post_type]
    urgency_emoji, urgency_label = URGENCY_LABELS[post.urgency]

    title_parts = [type_emoji, urgency_emoji, post.title.upper(), urgency_emoji, type_emoji]
    lines = [" ".join(p for p in title_parts if p)]
    lines.append(f"Type: {type_label}")
    lines.append(f"Priority: {urgency_label}")
    if _has_text(post.location):
        lines.append(f"Location: {post.location}")
    if _has_text(post.deadline):
        lines.append(f"Deadline: {format_date_for_display(post.deadline)}")

    _text_section(lines, "📋 DESCRIPTION", post.description)
    _section(lines, "🐾 ANIMALS", _numbered(post.animals, "Animal", _render_animal))
    _section(lines, "📞 CONTACT INFORMATION", _numbered(post.contact_persons, "Contact", _render_contact))
    _section(lines, "🏢 RESCUE ORGANIZATIONS", _numbered(post.organizations, "Organization", _render_rescue_org))
    _text_section(lines, "✅ REQUIREMENTS", post.requirements)
    _text_section(lines, "💡 ADDITIONAL INFORMATION", post.additional_info)

    return _finish(lines, post.hashtags, RESCUE_SHARE_PROMPT)


# --- Fraud blacklist case --------------------------------------------------

def _render_individual(individual) -> List[str]:
    out = _field_lines([("Name", individual.name)])
    if _has_text(individual.dob):
        out.append(f"DOB: {format_date_for_display(individual.dob)}")
    out += _field_lines([
        ("Phone", individual.phone),
        ("Email", individual.email),
        ("Address", individual.address),
    ])
    out += _joined("Social Media", individual.social_media)
    return out


def _render_organization(org) -> List[str]:
    return _field_lines([
        ("Name", org.name),
        ("Registration", org.registration),
        ("Website", org.website),
        ("Phone", org.phone),
        ("Address", org.address),
    ])


def format_blacklist_post(post: BlacklistPost) -> str:
    lines = [f"🚨 {post.case_title.upper()} 🚨"]
    if _has_text(post.incident_date):
        lines.append(f"Case Date: {format_date_for_display(post.incident_date)}")
    lines.append(f"Status: {CASE_STATUS_LABELS[post.case_status]}")

    _text_section(lines, "📋 CASE OVERVIEW", post.brief_description)
    _section(lines, "👤 BLACKLISTED INDIVIDUALS", _numbered(post.individuals, "Individual", _render_individual))
    _section(lines, "🎭 KNOWN ALIASES", [f"• {alias}" for alias in _non_blank(post.aliases)])
    _section(lines, "🏢 ASSOCIATED ORGANIZATIONS", _numbered(post.organizations, "Organization", _render_organization))
    _text_section(lines, "⚠️ WARNING SUMMARY", post.summary_statement)

    return _finish(lines, post.hashtags, BLACKLIST_SHARE_PROMPT)


# --- Animal welfare alert --------------------------------------------------

def _render_flagged_individual(individual) -> List[str]:
    out = _field_lines([("Name", individual.name)])
    out += _joined("Also Known As", individual.aliases)
    out += _field_lines([
        ("Role", individual.role),
        ("Phone", individual.phone),
        ("Email", individual.email),
        ("Address", individual.address),
    ])
    out += _joined("Social Media", individual.social_media)
    out += _joined("Photos", individual.photos)
    return out


def _render_flagged_org(org) -> List[str]:
    out = _field_lines([
        ("Name", org.name),
        ("Registration", org.registration),
        ("Website", org.website),
        ("Phone", org.phone),
        ("Email", org.email),
        ("Address", org.address),
    ])
    out += _joined("Social Media", org.social_media)
    return out


def _render_violation(violation) -> List[str]:
    out = [f"Category: {VIOLATION_CATEGORY_LABELS[violation.category]}"]
    out += _field_lines([("Details", violation.description)])
    if _has_text(violation.date):
        out.append(f"Date: {format_date_for_display(violation.date)}")
    out += _field_lines([("Location", violation.location)])
    evidence = _non_blank(violation.evidence)
    if evidence:
        out.append("Evidence:")
        out.extend(f"• {link}" for link in evidence)
    return out


def format_blacklist_alert(post: BlacklistAlert) -> str:
    emoji, header = ALERT_SEVERITY_LABELS[post.severity]
    lines = [f"{emoji} {header}: {post.title.upper()} {emoji}"]
    lines.append(f"Status: {ALERT_STATUS_LABELS[post.status]}")
    if _has_text(post.incident_date):
        lines.append(f"Date: {format_date_for_display(post.incident_date)}")
    if _has_text(post.location):
        lines.append(f"Location: {post.location}")

    _text_section(lines, "📋 DESCRIPTION", post.description)
    _text_section(lines, "🐾 ANIMAL WELFARE IMPACT", post.animal_welfare_impact)
    _section(lines, "👤 FLAGGED INDIVIDUALS", _numbered(post.individuals, "Individual", _render_flagged_individual))
    _section(lines, "🏢 FLAGGED ORGANIZATIONS", _numbered(post.organizations, "Organization", _render_flagged_org))
    _section(lines, "📑 DOCUMENTED VIOLATIONS", _numbered(post.violations, "Violation", _render_violation))
    _text_section(lines, "✅ RECOMMENDED ACTIONS", post.recommended_actions)

    return _finish(lines, post.hashtags, ALERT_SHARE_PROMPT)


FORMATTERS: Dict[str, Callable] = {
    "rescue": format_rescue_post,
    "blacklist": format_blacklist_post,
    "alert": format_blacklist_alert,
}


def format_post(post) -> str:
    """Render any post record variant."""
    return FORMATTERS[post.kind](post)
