"""Management command running one screen cycle (the "Refresh" command)."""
from __future__ import annotations

import json
from typing import Any

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from weatherapp.api.views import build_weather_screen
from weatherapp.core.abstractions import Coordinate


class Command(BaseCommand):
    help = "Render the cached weather, then fetch and render the current weather"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, help="Latitude, skips the location fix")
        parser.add_argument("--lon", type=float, help="Longitude, skips the location fix")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        latitude = options.get("lat")
        longitude = options.get("lon")
        if (latitude is None) != (longitude is None):
            raise CommandError("--lat and --lon must be given together")

        screen = build_weather_screen()
        if latitude is None:
            state = async_to_sync(screen.start)()
        else:
            screen.render_cached()
            async_to_sync(screen.load_weather)(Coordinate(latitude=latitude, longitude=longitude))
            state = screen.state

        self.stdout.write(json.dumps(state.as_dict(), ensure_ascii=False))
