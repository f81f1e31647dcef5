from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from .calendar import compute_holidays, holiday_on, sorted_holidays


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays/<int:year>", methods=["GET"], endpoint="api_holidays")
    def api_holidays(year: int):
        return jsonify(
            {
                "year": year,
                "holidays": [{"date": h.iso_date, "name": h.name} for h in sorted_holidays(year)],
            }
        )

    @app.route("/api/holidays/on/<day>", methods=["GET"], endpoint="api_holiday_on")
    def api_holiday_on(day: str):
        when = parse_iso_date(day)
        holiday = holiday_on(when, compute_holidays(when.year))
        return jsonify(
            {
                "date": when.isoformat(),
                "is_holiday": holiday is not None,
                "holiday": holiday.name if holiday else None,
            }
        )
