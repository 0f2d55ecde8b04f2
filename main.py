#!/usr/bin/env python3
"""
Sector Specials - Command Line Entry Point

Loads a JSON map dump, derives slope planes, 3D floors and translucent
lines for the selected port, optionally scans an ACS script for sector
colours, and writes the results as JSON.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sector_specials.conversion.map_json import MapFormatError, export_specials_to_json, load_map
from sector_specials.pipeline.map_specials import MapSpecials
from sector_specials.profiles import PROFILE_CATALOG, PortProfile, load_profile_from_path
from sector_specials.validation.core import SpecialsReport

logger = logging.getLogger("sector_specials")

EXIT_OK = 0
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sector-specials",
        description="Derive slopes, 3D floors and translucent lines from map specials",
    )
    parser.add_argument("map_json", help="Path to a JSON map dump")

    profile_group = parser.add_mutually_exclusive_group()
    profile_group.add_argument("--port", help="Target port string (e.g. zdoom, eternity, edge_classic)")
    profile_group.add_argument("--profile", help="Built-in profile name (%s)" % ", ".join(PROFILE_CATALOG.list_profiles()))
    profile_group.add_argument("--profile-file", help="Path to a JSON port profile")

    parser.add_argument("--acs", help="ACS script source to scan for sector colours")
    parser.add_argument("--output", "-o", help="Write results here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def resolve_profile(args: argparse.Namespace) -> Optional[PortProfile]:
    if args.profile_file:
        return load_profile_from_path(Path(args.profile_file))
    if args.profile:
        return PROFILE_CATALOG.get_profile(args.profile)
    if args.port:
        return PROFILE_CATALOG.get_profile_for_port(args.port) or PortProfile.for_port(args.port)
    return PROFILE_CATALOG.get_profile("ZDoom")


def main(argv: Optional[List[str]] = None) -> int:
    """Main command line entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = resolve_profile(args)
    if profile is None:
        logger.error("Unknown or invalid port profile")
        return EXIT_BAD_INPUT

    try:
        map_data = load_map(Path(args.map_json))
    except (OSError, MapFormatError) as e:
        logger.error("Cannot load map: %s", e)
        return EXIT_BAD_INPUT

    script_text = None
    if args.acs:
        try:
            script_text = Path(args.acs).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.error("Cannot read ACS script: %s", e)
            return EXIT_BAD_INPUT

    specials = MapSpecials(profile)
    specials.process_map_specials(map_data)
    report = SpecialsReport(issues=list(specials.last_report.issues), profile=profile.name)

    if script_text is not None:
        specials.process_acs_scripts(script_text)
        specials.update_tagged_sectors(map_data)
        report.merge(specials.last_report)

    logger.info("%s", report.report())

    output = export_specials_to_json(map_data, specials, report)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info("Results written to %s", args.output)
    else:
        sys.stdout.write(output + "\n")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
