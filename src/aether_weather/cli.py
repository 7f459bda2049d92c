"""Terminal front end: resolve a location, show the snapshot and AI commentary."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Settings, load_settings
from .enrichment.client import AIEnrichmentClient
from .enrichment.openai_provider import OpenAITextGenerator
from .exceptions import ConfigError, FavoritesStoreError
from .favorites import JsonFileFavoritesStore
from .geolocation import GeolocationSource, StaticGeolocation, UnavailableGeolocation
from .log_setup import setup_logger
from .pipeline import WeatherPipeline
from .session import WeatherSession
from .theme import THEME_STYLES
from .weather.fetcher import WeatherFetcher
from .weather.models import WeatherData
from .weather.open_meteo import OpenMeteoProvider
from .weather.resolver import LocationResolver


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse weather CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Show current and forecast weather with AI commentary."
    )
    parser.add_argument(
        "location",
        nargs="?",
        default=None,
        help='City name or "lat, lng". Omit to use the device location.',
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Request the deep AI analysis for the snapshot.",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Skip the quick AI summary.",
    )
    parser.add_argument("--suggest", type=str, default=None, help="Print city suggestions.")
    parser.add_argument("--favorites", action="store_true", help="List saved favorites.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Add the displayed city to favorites.",
    )
    parser.add_argument("--remove", type=str, default=None, help="Remove a favorite city.")
    return parser.parse_args(argv)


def _device_geolocation(settings: Settings) -> GeolocationSource:
    if settings.device_lat is not None and settings.device_lon is not None:
        return StaticGeolocation(settings.device_lat, settings.device_lon)
    return UnavailableGeolocation()


def _print_snapshot(console: Console, session: WeatherSession) -> None:
    weather = session.weather
    if weather is None:
        return
    style = THEME_STYLES[session.theme]
    header = weather.city if not weather.country else f"{weather.city}, {weather.country}"
    console.print(
        Panel(
            f"{_fmt(weather.current_temp)}°C  {weather.condition}\n"
            f"Feels like {_fmt(weather.feels_like)}°C | Humidity {_fmt(weather.humidity)}% | "
            f"Wind {_fmt(weather.wind_speed)} km/h\n"
            f"Pressure {_fmt(weather.pressure)} hPa | UV {_fmt(weather.uv_index)} | "
            f"Sunrise {weather.sunrise or '-'} | Sunset {weather.sunset or '-'}",
            title=header,
            subtitle=f"theme={session.theme}",
            style=style,
        )
    )
    _print_hourly(console, weather)
    _print_daily(console, weather)
    if weather.grounding_source:
        console.print(f"Source: {weather.grounding_source}")


def _print_hourly(console: Console, weather: WeatherData) -> None:
    if not weather.hourly:
        console.print("No hourly forecast available.")
        return
    table = Table(title="Next 24 Hours")
    for entry in weather.hourly:
        table.add_column(entry.time, justify="right")
    table.add_row(*[f"{entry.temp}°" for entry in weather.hourly])
    console.print(table)


def _print_daily(console: Console, weather: WeatherData) -> None:
    table = Table(title="5-Day Forecast")
    table.add_column("Day")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("Condition", overflow="fold")
    for day in weather.daily:
        table.add_row(day.day, f"{_fmt(day.high)}°", f"{_fmt(day.low)}°", day.condition)
    console.print(table)


def _print_enrichment(console: Console, session: WeatherSession) -> None:
    if session.summary.is_ready:
        console.print(f"[italic]{session.summary.value}[/italic]")
    if session.analysis.is_ready and session.analysis.value is not None:
        analysis = session.analysis.value
        table = Table(title="Deep Analysis", show_header=False)
        table.add_column("Field")
        table.add_column("Text", overflow="fold")
        table.add_row("Advice", analysis.advice or "-")
        table.add_row("Outfit", analysis.outfit or "-")
        table.add_row("Details", analysis.details or "-")
        console.print(table)


async def _run(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> int:
    console = Console()
    store = JsonFileFavoritesStore(settings.favorites_path)

    async with OpenMeteoProvider(settings=settings, logger=logger) as provider:
        generator: OpenAITextGenerator | None = None
        enrichment: AIEnrichmentClient | None = None
        if settings.ai_enabled:
            generator = OpenAITextGenerator(settings=settings, logger=logger)
            enrichment = AIEnrichmentClient(generator, settings=settings, logger=logger)

        try:
            session = WeatherSession(
                pipeline=WeatherPipeline(
                    resolver=LocationResolver(
                        provider, logger, candidate_count=settings.geocoding_candidate_count
                    ),
                    fetcher=WeatherFetcher(provider),
                    logger=logger,
                ),
                favorites_store=store,
                logger=logger,
                enrichment=enrichment,
                auto_summary=not args.no_summary,
                default_location=settings.default_location,
                geolocation_timeout_seconds=settings.geolocation_timeout_seconds,
                analysis_timeout_seconds=settings.analysis_timeout_seconds,
            )

            if args.remove:
                if session.remove_favorite(args.remove):
                    console.print(f"Removed {args.remove} from favorites.")
                else:
                    console.print(f"{args.remove} is not a favorite.")

            if args.favorites:
                console.print("Favorites: " + (", ".join(session.favorites) or "(none)"))

            if args.suggest is not None:
                suggestions = await session.suggest(args.suggest)
                table = Table(title=f"Suggestions for {args.suggest!r}")
                table.add_column("Name")
                table.add_column("Region")
                table.add_column("Lat, Lng")
                for item in suggestions:
                    table.add_row(
                        item.name, item.region or "-", f"{item.latitude:.4f}, {item.longitude:.4f}"
                    )
                console.print(table)

            if (args.remove or args.favorites or args.suggest is not None) and not args.location:
                return 0

            if args.location:
                await session.search(args.location)
            else:
                await session.start(_device_geolocation(settings))

            if session.weather is None:
                console.print(f"[red]{session.error or 'No weather available.'}[/red]")
                return 4

            _print_snapshot(console, session)
            if session.error:
                console.print(f"[yellow]{session.error}[/yellow]")

            if args.analyze:
                if enrichment is None:
                    console.print("Deep analysis needs OPENAI_API_KEY.")
                else:
                    with console.status("Thinking deeply..."):
                        await session.request_analysis()
                    if not session.analysis.is_ready:
                        console.print("Deep analysis unavailable.")
            await session.wait_for_enrichment()
            _print_enrichment(console, session)

            if args.save and session.add_favorite(session.weather.city):
                console.print(f"Saved {session.weather.city} to favorites.")
            return 0
        finally:
            if generator is not None:
                await generator.close()


def main(argv: list[str] | None = None) -> int:
    """Run the weather CLI."""
    args = parse_args(argv)
    logger = setup_logger()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.debug("Loaded settings: %s", settings.safe_summary())

    try:
        return asyncio.run(_run(args, settings, logger))
    except FavoritesStoreError as exc:
        logger.error("Favorites failure: %s", exc)
        return 3
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected weather CLI failure: %s", exc)
        return 99


def _fmt(value: int | None) -> str:
    return "-" if value is None else str(value)


if __name__ == "__main__":
    sys.exit(main())
