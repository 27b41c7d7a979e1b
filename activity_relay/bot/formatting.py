from datetime import datetime, tzinfo
from html import escape
from typing import Optional
from zoneinfo import ZoneInfo

from activity_relay.services.models import ActivityEvent

DEFAULT_TZ = ZoneInfo("Europe/Oslo")
DIVIDER = "━" * 20


def format_timestamp(now: datetime) -> str:
    # same shape as toLocaleString("nb-NO")
    return f"{now.day}.{now.month}.{now.year}, {now:%H:%M:%S}"


def format_activity_message(
    event: ActivityEvent,
    is_new_ip: bool = False,
    now: Optional[datetime] = None,
    tz: tzinfo = DEFAULT_TZ,
) -> str:
    lines = []

    if is_new_ip:
        lines.append("🆕 <b>Ny bruker opprettet</b>")
        lines.append(f"📍 <b>IP-adresse:</b> <code>{escape(event.ip_adresse)}</code>")
        lines.append(DIVIDER)
        lines.append("")

    lines.append("🔔 <b>Aktivitet</b>")
    lines.append(f"📄 <b>Side:</b> {escape(event.page or 'Ukjent')}")
    lines.append(f"📝 <b>Hendelse:</b> {escape(event.event_description or 'Ingen beskrivelse')}")

    if event.klartekst_input:
        lines.append(f"✏️ <b>Input:</b> <code>{escape(event.klartekst_input)}</code>")

    if event.session_uid:
        lines.append(f"🆔 <b>Session ID:</b> <code>{escape(event.session_uid)}</code>")

    if now is None:
        now = datetime.now(tz)
    else:
        now = now.astimezone(tz)

    lines.append("")
    lines.append(f"⏰ <b>Tid:</b> {format_timestamp(now)}")
    return "\n".join(lines)
