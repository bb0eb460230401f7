from __future__ import annotations

from dataclasses import dataclass, replace

# Feldnamen wie im Query-String -> Python-Namen
_WIRE_NAMES = {
    "status": "status",
    "startDate": "start_date",
    "endDate": "end_date",
    "start_date": "start_date",
    "end_date": "end_date",
}


@dataclass(frozen=True)
class FilterCriteria:
    """Client-held list filters. Empty string means "not set"."""

    status: str = ""
    start_date: str = ""
    end_date: str = ""

    def merge(self, name: str, value: str | None) -> "FilterCriteria":
        try:
            field = _WIRE_NAMES[name]
        except KeyError:
            raise ValueError(f"Unknown filter: {name}") from None
        return replace(self, **{field: value or ""})

    def has_date_range(self) -> bool:
        return bool(self.start_date and self.end_date)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.status:
            params["status"] = self.status
        # nur beide Datumsgrenzen zusammen ergeben einen Filter
        if self.has_date_range():
            params["startDate"] = self.start_date
            params["endDate"] = self.end_date
        return params
