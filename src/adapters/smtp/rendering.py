"""
Email content rendering for registration notifications.

Confirmation and operator-notice bodies are Jinja2 templates stored next to
this module; each message has an HTML and a plain-text rendering. HTML
templates are autoescaped since they interpolate submitted text.
"""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from src.domain.ports import RegistrationRecord

TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html.j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


@dataclass(frozen=True)
class CompetitionDetails:
    """Competition facts quoted in every confirmation email."""

    name: str = "Online Astronomy Competition"
    short_name: str = "OAC"
    date: str = "August 30, 2025"
    time: str = "12:00 - 23:59 Eastern Standard Time"
    format: str = "Online Competition"
    duration: str = "12-hour window"
    contact_email: str = "astronomycompetition@gmail.com"
    next_steps: tuple[str, ...] = (
        "Mark your calendar for the competition date",
        "Review the sample problems on our website",
        "Prepare using the recommended study topics",
        "Check your email for competition access details closer to the date",
    )
    study_resources: tuple[str, ...] = (
        "Visit our website for sample problems",
        "Review the recommended study topics",
        "Practice with astronomy olympiad problems",
        "Join our community for discussion and tips",
    )


@dataclass(frozen=True)
class EmailContent:
    """Rendered subject and bodies of one message."""

    subject: str
    text: str
    html: str


def render_confirmation(
    record: RegistrationRecord, competition: CompetitionDetails
) -> EmailContent:
    """Render the student-facing confirmation email."""
    context = {
        "record": record,
        "competition": competition,
        "next_steps": competition.next_steps,
        "study_resources": competition.study_resources,
    }
    return EmailContent(
        subject=(
            f"{competition.short_name} Registration Confirmed - "
            f"Welcome to the {competition.name}!"
        ),
        text=_env.get_template("confirmation.txt.j2").render(context),
        html=_env.get_template("confirmation.html.j2").render(context),
    )


def operator_fields(record: RegistrationRecord) -> list[tuple[str, str]]:
    """Every record field as (label, value) pairs for the operator notice."""
    return [
        ("Name", record.name),
        ("Email", record.student_email),
        ("School", record.school),
        ("Grade", str(record.grade)),
        ("Age", str(record.age)),
        ("Country", record.country),
        ("Parent Email", record.parent_email),
        ("Previous Experience", record.experience or "Not provided"),
        ("Motivation", record.motivation or "Not provided"),
        ("Registration ID", record.id),
        ("Timestamp", record.created_at.strftime("%Y-%m-%d %H:%M:%S")),
    ]


def render_operator_notice(
    record: RegistrationRecord, competition: CompetitionDetails
) -> EmailContent:
    """Render the operator summary of a new registration."""
    context = {"competition": competition, "fields": operator_fields(record)}
    return EmailContent(
        subject=f"New {competition.short_name} Registration - {record.name}",
        text=_env.get_template("operator_notice.txt.j2").render(context),
        html=_env.get_template("operator_notice.html.j2").render(context),
    )
