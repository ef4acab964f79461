from dataclasses import dataclass, fields
from datetime import date

# Python's date.weekday() is Monday=0; chains store flags Sunday first.
WEEKDAY_FIELDS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
DAY_ORDER = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

DAY_ALIASES = {
    "sun": "sunday",
    "mon": "monday",
    "tue": "tuesday",
    "tues": "tuesday",
    "wed": "wednesday",
    "thu": "thursday",
    "thur": "thursday",
    "thurs": "thursday",
    "fri": "friday",
    "sat": "saturday",
}

DAY_GROUPS = {
    "all": DAY_ORDER,
    "daily": DAY_ORDER,
    "weekdays": ("monday", "tuesday", "wednesday", "thursday", "friday"),
    "weekends": ("saturday", "sunday"),
}


@dataclass(frozen=True)
class WeekdayCadence:
    """Seven independent weekday flags; a flag set to True marks an expected day."""

    sunday: bool = False
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False

    def is_active(self, day):
        return getattr(self, WEEKDAY_FIELDS[day.weekday()])

    def active_days(self):
        return [name for name in DAY_ORDER if getattr(self, name)]

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def every_day(cls):
        return cls(**{name: True for name in DAY_ORDER})

    @classmethod
    def from_chain(cls, chain):
        return cls(**{name: bool(getattr(chain, name)) for name in DAY_ORDER})

    @classmethod
    def from_days(cls, names):
        """Build a cadence from weekday names such as ``["mon", "Wednesday"]``.

        Accepts a comma separated string or any iterable of names. The
        shorthands ``all``, ``daily``, ``weekdays`` and ``weekends`` expand to
        their days. Unknown names raise ``ValueError``.
        """
        if isinstance(names, str):
            names = names.split(",")
        elif not hasattr(names, "__iter__"):
            raise ValueError(f"Weekdays must be a list or a comma separated string, not {names!r}")
        selected = set()
        for raw in names:
            name = str(raw).strip().lower()
            if not name:
                continue
            if name in DAY_GROUPS:
                selected.update(DAY_GROUPS[name])
                continue
            name = DAY_ALIASES.get(name, name)
            if name not in DAY_ORDER:
                raise ValueError(f"Unknown weekday: {raw!r}")
            selected.add(name)
        return cls(**{name: name in selected for name in DAY_ORDER})


@dataclass(frozen=True)
class IntervalCadence:
    """Every ``every`` days counted from ``anchor`` (in both directions)."""

    anchor: date
    every: int = 1

    def __post_init__(self):
        if self.every < 1:
            raise ValueError("every must be at least 1")

    def is_active(self, day):
        return (day - self.anchor).days % self.every == 0


def is_active(cadence, day):
    """Return True when ``day`` is an expected day under ``cadence``."""
    return cadence.is_active(day)
