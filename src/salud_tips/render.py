"""Presentación de la página de consejos (HTML y texto plano)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from html import escape
from typing import Protocol

from salud_tips.catalog import PARTNER_LINKS, PROFESSIONAL_REFERRAL
from salud_tips.model import AdviceItem, Tip

PERSONAL_HEADING = "⚡ Your Personal Power-Ups"
GENERAL_HEADING = "📚 General Power-Up Guide"
REFERRAL_HEADING = "🏥 Need a Real Healer?"

EMPTY_STATE_TITLE = "No Personal Tips Yet!"
EMPTY_STATE_BODY = (
    "Log your first health quest to get personalised power-up tips based on "
    "YOUR stats!"
)


@dataclass(frozen=True)
class TipsPage:
    """Page content in display order: personal, general, referral."""

    personal: tuple[Tip, ...]
    general: tuple[AdviceItem, ...]
    referral: AdviceItem
    links: tuple[tuple[str, str], ...]

    @property
    def is_empty(self) -> bool:
        """True when there are no personal tips to show."""
        return not self.personal


class Renderer(Protocol):
    """Anything that turns tips plus the catalog into displayable text."""

    def render(self, tips: Sequence[Tip], catalog: Sequence[AdviceItem]) -> str:
        """Render the full page."""
        ...


def build_page(tips: Sequence[Tip], catalog: Sequence[AdviceItem]) -> TipsPage:
    """Assemble the three page sections."""
    return TipsPage(
        personal=tuple(tips),
        general=tuple(catalog),
        referral=PROFESSIONAL_REFERRAL,
        links=PARTNER_LINKS,
    )


class HtmlRenderer:
    """Markup renderer; tip severity becomes the card CSS class."""

    def __init__(self, log_url: str = "log.html") -> None:
        self._log_url = log_url

    def render(self, tips: Sequence[Tip], catalog: Sequence[AdviceItem]) -> str:
        page = build_page(tips, catalog)
        parts: list[str] = []
        if page.is_empty:
            parts.append(self._empty_state())
        else:
            parts.append(_heading(PERSONAL_HEADING))
            parts.extend(_tip_card(tip) for tip in page.personal)

        parts.append(_heading(GENERAL_HEADING))
        parts.append('<div class="general-tips-grid">')
        parts.extend(_general_card(item) for item in page.general)
        parts.append("</div>")

        parts.append(_heading(REFERRAL_HEADING))
        parts.append(_referral_card(page.referral, page.links))
        return "\n".join(parts)

    def _empty_state(self) -> str:
        return (
            '<div class="empty-state">'
            '<div class="empty-icon">⚡</div>'
            f"<h2>{escape(EMPTY_STATE_TITLE)}</h2>"
            f"<p>{escape(EMPTY_STATE_BODY)}</p>"
            f'<a href="{escape(self._log_url)}">📝 Log Your First Quest</a>'
            "</div>"
        )


def _heading(text: str) -> str:
    return f'<h2 class="tip-section-title">{escape(text)}</h2>'


def _tip_card(tip: Tip) -> str:
    return (
        f'<div class="tip-card {escape(tip.severity.value)}">'
        '<div class="tip-header">'
        f'<span class="tip-icon">{escape(tip.icon)}</span>'
        f'<span class="tip-title">{escape(tip.title)}</span>'
        '<span class="tip-badge badge-personal">⚡ Personal</span>'
        "</div>"
        f'<div class="tip-body">{escape(tip.body)}</div>'
        "</div>"
    )


def _general_card(item: AdviceItem) -> str:
    return (
        '<div class="general-tip">'
        f'<div class="gt-icon">{escape(item.icon)}</div>'
        f'<div class="gt-title">{escape(item.title)}</div>'
        f'<div class="gt-body">{escape(item.body)}</div>'
        "</div>"
    )


def _referral_card(item: AdviceItem, links: Sequence[tuple[str, str]]) -> str:
    anchors = " or ".join(
        f'<a href="{escape(url)}" target="_blank">{escape(name)}</a>'
        for name, url in links
    )
    return (
        '<div class="tip-card info">'
        '<div class="tip-header">'
        f'<span class="tip-icon">{escape(item.icon)}</span>'
        f'<span class="tip-title">{escape(item.title)}</span>'
        "</div>"
        f'<div class="tip-body">{escape(item.body)} {anchors}.</div>'
        "</div>"
    )


class TextRenderer:
    """Plain-text renderer for terminals and previews."""

    def __init__(self, width: int = 78) -> None:
        self._width = width

    def render(self, tips: Sequence[Tip], catalog: Sequence[AdviceItem]) -> str:
        page = build_page(tips, catalog)
        rule = "=" * self._width
        lines: list[str] = []
        if page.is_empty:
            lines.extend([EMPTY_STATE_TITLE, EMPTY_STATE_BODY])
        else:
            lines.extend([PERSONAL_HEADING, rule])
        for tip in page.personal:
            lines.append(f"[{tip.severity.value.upper()}] {tip.icon} {tip.title}")
            lines.append(f"    {tip.body}")
        lines.extend(["", GENERAL_HEADING, rule])
        for item in page.general:
            lines.append(f"{item.icon} {item.title}")
            lines.append(f"    {item.body}")
        lines.extend(["", REFERRAL_HEADING, rule])
        lines.append(f"{page.referral.icon} {page.referral.title}")
        lines.append(f"    {page.referral.body}")
        lines.extend(f"    - {name}: {url}" for name, url in page.links)
        return "\n".join(lines)
