"""
Shareable invitation texts for events.

The texts are meant to be pasted into messaging apps, hence the ``*bold*``
markup and the Brazilian Portuguese wording.
"""
from datetime import date, time
from eventboard.core.config import settings
from eventboard.db.models.event import Event, EventStatus
from eventboard.schemas import InviteStyle

WEEKDAYS = [
    "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
    "sexta-feira", "sábado", "domingo",
]
MONTHS = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

STATUS_EMOJI = {
    EventStatus.andamento: "🟢",
    EventStatus.realizado: "✅",
    EventStatus.cancelado: "❌",
}
STATUS_LABEL = {
    EventStatus.andamento: "Confirmado",
    EventStatus.realizado: "Realizado",
    EventStatus.cancelado: "Cancelado",
}

DEFAULT_BLURB = "Atividade escoteira especial!"


def format_long_date(value: date) -> str:
    # segunda-feira, 15 de janeiro de 2024
    return f"{WEEKDAYS[value.weekday()]}, {value.day:02d} de {MONTHS[value.month - 1]} de {value.year}"


def format_short_date(value: date) -> str:
    # seg., 15 de jan.
    return f"{WEEKDAYS[value.weekday()][:3]}., {value.day:02d} de {MONTHS[value.month - 1][:3]}."


def format_numeric_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def status_marker(event_status: EventStatus) -> str:
    return f"{STATUS_EMOJI.get(event_status, '📅')} {STATUS_LABEL.get(event_status, str(event_status))}"


def full_invite(event: Event) -> str:
    org = settings.ORGANIZATION_NAME
    description = event.description or (
        f"Atividade especial do {org}. Venha participar desta experiência única "
        "de aprendizado, diversão e crescimento pessoal!"
    )
    return "\n".join([
        f"⚜️ *{org.upper()}* ⚜️",
        "",
        f"{STATUS_EMOJI.get(event.status, '📅')} *{event.title.upper()}*",
        f"*Situação:* {status_marker(event.status)}",
        "",
        f"📅 *Data:* {format_long_date(event.event_date)}",
        f"🕐 *Horário:* {format_time(event.event_time)}",
        "",
        "📝 *Sobre o evento:*",
        description,
        "",
        f"📍 *Local:* {event.location or org}",
        "",
        "📞 *Dúvidas?* Entre em contato com a chefia do grupo",
        "",
        "---",
        f"🏕️ *{org}*",
    ])


def simple_invite(event: Event) -> str:
    return "\n".join([
        f"⚜️ *{settings.ORGANIZATION_NAME}* ⚜️",
        "",
        f"📅 *{event.title}*",
        f"🗓️ {format_numeric_date(event.event_date)} às {format_time(event.event_time)}",
        "",
        f"📝 {event.description or DEFAULT_BLURB}",
        "",
        "🎯 Traga uniforme, água e lanche",
        f"📍 {event.location or settings.ORGANIZATION_NAME}",
        "",
        "⚜️ *Sempre Alerta!*",
    ])


def whatsapp_invite(event: Event) -> str:
    return "\n".join([
        f"⚜️ *{settings.ORGANIZATION_NAME.upper()}* ⚜️",
        "",
        f"🏕️ *{event.title}*",
        f"📅 {format_short_date(event.event_date)} - {format_time(event.event_time)}",
        "",
        event.description or DEFAULT_BLURB,
        "",
        "🎒 Traga: uniforme, água e lanche",
        f"📍 {event.location or settings.ORGANIZATION_NAME}",
        "",
        "⚜️ *Sempre Alerta!*",
    ])


_RENDERERS = {
    InviteStyle.full: full_invite,
    InviteStyle.simple: simple_invite,
    InviteStyle.whatsapp: whatsapp_invite,
}


def render_invite(event: Event, style: InviteStyle = InviteStyle.full) -> str:
    return _RENDERERS[style](event)
