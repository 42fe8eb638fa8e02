from __future__ import annotations

from typing import Any, Dict, List

from models.person_record import PersonRecord
from models.sort_options import SortDirection, SortField
from viewstate.state import DirectoryView, ViewKind


SORT_LABELS = {
    SortField.ENTRY_NUMBER: "Entry Number",
    SortField.NAME: "Name",
    SortField.CREATED_AT: "Date Added",
}


def format_date(value) -> str:
    """Long human date, e.g. 'October 25, 2025 at 06:34 PM'."""
    return f"{value:%B} {value.day}, {value:%Y at %I:%M %p}"


def person_to_dict(person: PersonRecord) -> Dict[str, Any]:
    return person.model_dump(mode="json")


def format_person_detail(person: PersonRecord) -> str:
    lines: List[str] = [
        f"Entry Number: {person.entry_number}",
        f"Name: {person.name}",
        f"Date Added: {format_date(person.created_at)}",
        "Social Media:",
    ]
    if person.twitter_handle:
        lines.append(f"  Twitter: {person.twitter_handle}")
    if person.instagram_handle:
        lines.append(f"  Instagram: {person.instagram_handle}")
    if not person.has_social_handles:
        lines.append("  No social media provided")
    return "\n".join(lines)


def format_directory(view: DirectoryView) -> str:
    """Render the directory view as plain text."""
    out: List[str] = []
    if view.error_message:
        out.append(f"[error] {view.error_message}")

    arrow = "↑" if view.sort_direction == SortDirection.ASC else "↓"
    out.append(f"Sort by: {SORT_LABELS[view.sort_field]} {arrow}")

    if view.kind == ViewKind.LOADING:
        out.append("Loading people...")
    elif view.kind == ViewKind.NO_RESULTS:
        out.append("No results found")
        out.append(f"No people found for “{view.search_query}”. Try adjusting your search terms.")
    elif view.kind == ViewKind.NO_RECORDS:
        out.append("No people found")
        out.append("There are no people in the list yet.")
    else:
        width = max(len(str(p.entry_number)) for p in view.people)
        for p in view.people:
            out.append(f"{str(p.entry_number).rjust(width)}. {p.name}")
        out.append(f"({len(view.people)} shown)")

    if view.modal_open and view.selected_person is not None:
        out.append("")
        out.append("=" * 40)
        out.append(format_person_detail(view.selected_person))
        out.append("=" * 40)
    return "\n".join(out)


def print_directory(view: DirectoryView) -> None:
    print(format_directory(view))
