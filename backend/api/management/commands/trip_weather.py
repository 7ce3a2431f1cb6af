"""Management command to build a trip weather payload using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_trip_weather_service
from core.entities import TripRequest


class Command(BaseCommand):
    help = "Print the trip weather payload for a reservation"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--check-in", required=True, help="Check-in date (YYYY-MM-DD)")
        parser.add_argument("--check-out", help="Check-out date (YYYY-MM-DD)")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--address", help="Full street address")
        parser.add_argument("--city", help="City name")
        parser.add_argument("--state", help="State or region")
        parser.add_argument("--zip", help="Postal code")
        parser.add_argument("--country", help="Country code used to narrow geocoding")
        parser.add_argument("--name", help="Property display name")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        if (options.get("lat") is None) != (options.get("lon") is None):
            raise CommandError("--lat and --lon must be given together")

        trip = TripRequest.from_payload(
            {
                "check_in_date": options["check_in"],
                "check_out_date": options.get("check_out"),
                "property_latitude": options.get("lat"),
                "property_longitude": options.get("lon"),
                "property_address": options.get("address"),
                "property_city": options.get("city"),
                "property_state": options.get("state"),
                "property_zip": options.get("zip"),
                "property_country": options.get("country"),
                "property_name": options.get("name"),
            }
        )
        payload = get_trip_weather_service().forecast(trip)
        self.stdout.write(json.dumps(payload, ensure_ascii=False))
