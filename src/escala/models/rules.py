"""
Business Rules and Constants
============================
Central source of truth for service days, month rollover and UI colors.
"""
import datetime
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class DayStyle:
    label: str
    color_bg: str
    color_border: str
    color_text: str


# Card styles per service weekday label
DAY_STYLES = {
    "DOMINGO": DayStyle("Domingo", "#C5E1A5", "#AED581", "#333333"),
    "QUARTA-FEIRA": DayStyle("Quarta", "#4285F4", "#3B78E7", "#FFFFFF"),
}

MONTH_NAMES: List[str] = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


@dataclass
class RulesConfig:
    """Business rules constants."""

    # From this time on the last day of a month, the next month is shown
    rollover_time: datetime.time = datetime.time(18, 30)

    # Occupants per period
    slots_per_period: int = 2

    # UI
    empty_choice_label: str = "- Escolha -"
    app_title: str = "Escala de Voluntários"
    tab_labels: Dict[str, str] = field(default_factory=lambda: {
        "schedule": "📅 Escala",
        "team": "👥 Equipe",
        "downloads": "📥 Downloads",
    })


RULES = RulesConfig()
