# neurotracker/services/planner.py
# -*- coding: utf-8 -*-
"""
Calendrier : priorités par jour (vert / orange / rouge) et événements à venir.

Les priorités sont générées aléatoirement (démo) ; le générateur est injecté
pour que les tests soient déterministes.
"""

from __future__ import annotations

import calendar
import datetime as dt
import random
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

PRIORITIES = ("green", "orange", "red")
FILL_RATE = 0.6  # ~60 % des jours ont une priorité

EVENT_TITLES: Dict[str, List[str]] = {
    "green": [
        "Coffee Break", "Email Check-in", "Team Sync", "Quick Update",
        "Casual Meeting", "Status Review", "Brief Discussion",
    ],
    "orange": [
        "Project Review", "Client Call", "Strategy Session", "Weekly Planning",
        "Department Meeting", "Progress Review", "Team Workshop",
    ],
    "red": [
        "Board Meeting", "Client Presentation", "Important Deadline", "Executive Review",
        "Critical Decision", "Major Milestone", "Urgent Discussion",
    ],
}

TIME_SLOTS = [
    "9:00 AM - 10:00 AM",
    "10:30 AM - 11:30 AM",
    "1:00 PM - 2:00 PM",
    "2:30 PM - 3:30 PM",
    "3:00 PM - 4:30 PM",
    "4:00 PM - 5:00 PM",
]


@dataclass(frozen=True)
class Event:
    date: dt.date
    title: str
    time: str
    priority: str
    day_label: str


def generate_priorities(year: int, month: int, rng: random.Random | None = None) -> Dict[dt.date, str]:
    rng = rng or random.Random()
    days = calendar.monthrange(year, month)[1]
    priorities: Dict[dt.date, str] = {}
    for day in range(1, days + 1):
        if rng.random() > 1 - FILL_RATE:
            priorities[dt.date(year, month, day)] = rng.choice(PRIORITIES)
    return priorities


def filter_priorities(
    priorities: Dict[dt.date, str],
    show_green: bool = True,
    show_orange: bool = True,
    show_red: bool = True,
) -> Dict[dt.date, str]:
    shown = {"green": show_green, "orange": show_orange, "red": show_red}
    return {d: p for d, p in priorities.items() if shown.get(p, False)}


def day_label(day: dt.date, today: dt.date) -> str:
    offset = (day - today).days
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return f"{day:%a}, {day:%b} {day.day}"


def upcoming_events(
    priorities: Dict[dt.date, str],
    today: dt.date | None = None,
    rng: random.Random | None = None,
    days: int = 14,
) -> List[Event]:
    """Un événement par jour ayant une priorité, sur les `days` prochains jours."""
    today = today or dt.date.today()
    rng = rng or random.Random()
    events: List[Event] = []
    for i in range(days):
        day = today + dt.timedelta(days=i)
        priority = priorities.get(day)
        if not priority:
            continue
        events.append(Event(
            date=day,
            title=rng.choice(EVENT_TITLES[priority]),
            time=rng.choice(TIME_SLOTS),
            priority=priority,
            day_label=day_label(day, today),
        ))
    return events


def events_frame(events: List[Event]) -> pd.DataFrame:
    if not events:
        return pd.DataFrame(columns=["date", "day", "title", "time", "priority"])
    return pd.DataFrame([{
        "date": e.date,
        "day": e.day_label,
        "title": e.title,
        "time": e.time,
        "priority": e.priority,
    } for e in events])


def month_frame(priorities: Dict[dt.date, str], year: int, month: int) -> pd.DataFrame:
    """Grille du mois (semaine x jour) pour la heatmap Altair."""
    rows = []
    for week_idx, week in enumerate(calendar.Calendar(firstweekday=6).monthdatescalendar(year, month)):
        for d in week:
            if d.month != month:
                continue
            rows.append({
                "date": d,
                "day": d.day,
                "weekday": f"{d:%a}",
                "week": week_idx,
                "priority": priorities.get(d, "none"),
            })
    return pd.DataFrame(rows)
