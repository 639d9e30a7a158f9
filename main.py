"""
Mapbox geocoding and directions example program.

Usage:
    MAPBOX_TOKEN=pk.xxx python main.py forward "2 Lincoln Memorial Circle NW" --limit 1
    python main.py reverse -- -77.036556 38.897708
    python main.py directions --profile cycling -- -122.42,37.78 -77.03,38.91
    python main.py demo
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from internal.config.manager import ConfigError, ConfigManager
from lib.logging_utils import initLogging
from lib.mapbox import FeatureCollection, Location, MapboxClient, MapboxError
from lib.mapbox.directions import DirectionsClient, DirectionsRequestOpts, RoutingProfile
from lib.mapbox.geocode import (
    BatchQuery,
    BatchRequestOpts,
    FeatureType,
    ForwardRequestOpts,
    GeocodeClient,
    ReverseRequestOpts,
    StructuredInputOpts,
    typesToString,
)
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET and POST requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

PROFILES = {
    "driving": RoutingProfile.DRIVING,
    "driving-traffic": RoutingProfile.DRIVING_TRAFFIC,
    "walking": RoutingProfile.WALKING,
    "cycling": RoutingProfile.CYCLING,
}


def parseLocation(value: str) -> Location:
    """Parse "lon,lat" command line argument."""
    try:
        lon, lat = (float(part) for part in value.split(","))
        return Location(lon, lat)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid location '{value}', expected lon,lat: {e}")


def printCollection(collection: FeatureCollection, indent: str = "") -> None:
    if not collection.features:
        print(f"{indent}No results")
        return

    for i, feature in enumerate(collection.features, start=1):
        coords = feature.geometry.coordinates
        print(f"{indent}{i}. {feature.name} - {feature.placeFormatted}")
        if feature.geometry.type == "Point" and len(coords) == 2:
            print(f"{indent}   Coordinates: [{coords[0]:f}, {coords[1]:f}], type: {feature.featureType}")
        matchCode = feature.getMatchCode()
        if matchCode is not None and matchCode.confidence:
            print(f"{indent}   Match confidence: {matchCode.confidence}")


class MapboxApp:
    """Wires configuration, logging and the Mapbox clients together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)
        initLogging(self.configManager.getLoggingConfig())

        mapboxConfig = self.configManager.getMapboxConfig()
        self.client = MapboxClient(
            self.configManager.getMapboxToken(),
            baseUrl=mapboxConfig["base-url"],
            requestTimeout=mapboxConfig["timeout"],
        )
        self.geocode = GeocodeClient(self.client)
        self.directions = DirectionsClient(self.client)

    def close(self) -> None:
        self.client.close()

    def runForward(self, args: argparse.Namespace) -> None:
        opts = ForwardRequestOpts(
            country=args.country,
            limit=args.limit,
            language=args.language,
            permanent=True if args.permanent else None,
            types=typesToString([FeatureType(t) for t in args.types]) if args.types else None,
        )
        if args.proximity:
            result = self.geocode.forwardWithProximity(
                args.query, [args.proximity.longitude, args.proximity.latitude], opts
            )
        else:
            result = self.geocode.forward(args.query, opts)
        printCollection(result)

    def runStructured(self, args: argparse.Namespace) -> None:
        opts = StructuredInputOpts(
            address_number=args.number,
            street=args.street,
            place=args.place,
            region=args.region,
            postcode=args.postcode,
            country=args.country,
            limit=args.limit,
        )
        printCollection(self.geocode.forwardStructured(opts))

    def runReverse(self, args: argparse.Namespace) -> None:
        opts = ReverseRequestOpts(limit=args.limit, country=args.country, language=args.language)
        if args.types:
            result = self.geocode.reverseWithTypes(args.location, [FeatureType(t) for t in args.types], opts)
        else:
            result = self.geocode.reverse(args.location, opts)
        printCollection(result)

    def runBatch(self, args: argparse.Namespace) -> None:
        queries = [BatchQuery(q=q, limit=args.limit) for q in args.queries]
        results = self.geocode.batch(queries, BatchRequestOpts(permanent=True if args.permanent else None))

        print(f"Batch geocoding completed - {len(results)} queries processed:")
        for query, collection in zip(args.queries, results):
            print(f"  {query}:")
            printCollection(collection, indent="    ")

    def runDirections(self, args: argparse.Namespace) -> None:
        opts = DirectionsRequestOpts(steps=True if args.steps else None)
        res = self.directions.getDirections(args.locations, PROFILES[args.profile], opts)

        print(f"Response code: {res.code}")
        for i, route in enumerate(res.routes, start=1):
            print(f"Route {i}: {route.distance / 1000:.1f} km, {route.duration / 60:.0f} min")
            for leg in route.legs:
                print(f"  Leg: {leg.summary} ({leg.distance / 1000:.1f} km)")

    def runDemo(self, args: argparse.Namespace) -> None:
        """Run a tour of the geocoding and directions calls."""
        print("=== Mapbox Geocoding API v6 Examples ===")

        print("\n1. Basic Forward Geocoding")
        printCollection(self.geocode.forward("2 Lincoln Memorial Circle NW", ForwardRequestOpts(limit=1)))

        print("\n2. Forward Geocoding with Options")
        printCollection(
            self.geocode.forward(
                "1600 Pennsylvania Avenue",
                ForwardRequestOpts(country="us", limit=5, types="address", autocomplete=False, language="en"),
            )
        )

        print("\n3. Structured Input Forward Geocoding")
        printCollection(
            self.geocode.forwardStructured(
                StructuredInputOpts(
                    address_number="1600",
                    street="Pennsylvania Avenue NW",
                    place="Washington",
                    region="DC",
                    country="US",
                )
            )
        )

        print("\n4. Reverse Geocoding")
        printCollection(
            self.geocode.reverse(
                Location(-77.036556, 38.897708), ReverseRequestOpts(types="address", limit=1, country="us")
            )
        )

        print("\n5. Batch Geocoding")
        results = self.geocode.batch(
            [
                BatchQuery(q="New York City", types="place", country="us", limit=1),
                BatchQuery(longitude=-73.986136, latitude=40.748895, types="address"),
                BatchQuery(address_number="123", street="Main Street", place="Boston", region="MA", country="us"),
            ]
        )
        for i, collection in enumerate(results, start=1):
            print(f"  Query {i}: {len(collection.features)} results")
            printCollection(collection, indent="    ")

        print("\n6. Forward Geocoding with Type Filter and Proximity")
        printCollection(self.geocode.forwardWithTypes("Central Park", [FeatureType.ADDRESS, FeatureType.PLACE]))
        printCollection(
            self.geocode.forwardWithProximity("Starbucks", [-73.968285, 40.785091], ForwardRequestOpts(limit=1))
        )

        print("\n7. Directions")
        res = self.directions.getDirections(
            [Location(-122.42, 37.78), Location(-77.03, 38.91)], RoutingProfile.CYCLING
        )
        print(f"Response code: {res.code}, routes: {len(res.routes)}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Mapbox geocoding and directions example program")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    forward = subparsers.add_parser("forward", help="Forward geocode search text")
    forward.add_argument("query")
    forward.add_argument("--types", nargs="+", choices=[t.value for t in FeatureType])
    forward.add_argument("--proximity", type=parseLocation, help="Bias results toward --proximity=lon,lat")
    forward.add_argument("--permanent", action="store_true")
    forward.set_defaults(handler=MapboxApp.runForward)

    structured = subparsers.add_parser("structured", help="Forward geocode an address given as components")
    structured.add_argument("--number")
    structured.add_argument("--street")
    structured.add_argument("--place")
    structured.add_argument("--region")
    structured.add_argument("--postcode")
    structured.set_defaults(handler=MapboxApp.runStructured)

    reverse = subparsers.add_parser("reverse", help="Reverse geocode a coordinate")
    reverse.add_argument("longitude", type=float)
    reverse.add_argument("latitude", type=float)
    reverse.add_argument("--types", nargs="+", choices=[t.value for t in FeatureType])
    reverse.set_defaults(handler=MapboxApp.runReverse)

    batch = subparsers.add_parser("batch", help="Forward geocode several queries in one request")
    batch.add_argument("queries", nargs="+")
    batch.add_argument("--permanent", action="store_true")
    batch.set_defaults(handler=MapboxApp.runBatch)

    for sub in (forward, structured, reverse, batch):
        sub.add_argument("--limit", type=int)
        sub.add_argument("--country")
        sub.add_argument("--language")

    directions = subparsers.add_parser("directions", help="Route between two or more lon,lat points")
    directions.add_argument("locations", nargs="+", type=parseLocation)
    directions.add_argument("--profile", choices=sorted(PROFILES), default="driving")
    directions.add_argument("--steps", action="store_true")
    directions.set_defaults(handler=MapboxApp.runDirections)

    demo = subparsers.add_parser("demo", help="Run all examples")
    demo.set_defaults(handler=MapboxApp.runDemo)

    args = parser.parse_args(argv)
    # Convert relative paths to absolute paths
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    if not args.print_config and args.command is None:
        parser.error("a command is required")

    if args.command == "reverse":
        try:
            args.location = Location(args.longitude, args.latitude)
        except ValueError as e:
            parser.error(str(e))
    elif args.command == "directions" and len(args.locations) < 2:
        parser.error(f"directions needs at least two locations, got {len(args.locations)}")

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration with the token masked."""
    config = dict(configManager.config)
    if "token" in config.get("mapbox", {}):
        config["mapbox"] = {**config["mapbox"], "token": "***"}

    print("=== Mapbox Client Configuration ===")
    print(jsonDumps(config, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            return 0

        app = MapboxApp(configPath=args.config, configDirs=args.config_dir)
        try:
            args.handler(app, args)
        finally:
            app.close()
    except (ConfigError, MapboxError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
