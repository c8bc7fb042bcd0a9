"""Command-line interface for reading and updating an ORCID profile."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from orcid_profile import VALID_API_VERSIONS
from orcid_profile.config import get_config
from orcid_profile.errors import MalformedProfileError, NotAuthenticatedError, UpstreamFetchError
from orcid_profile.logging_config import get_logger, setup_logging
from orcid_profile.profile import ProfileAccessor
from orcid_profile.session import OAuthSession, validate_orcid_id

SHOW_FIELDS = ["summary", "identifier", "name", "email", "person", "bio", "raw"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read or update an ORCID researcher profile with an existing access token."
    )
    parser.add_argument("--orcid", required=True, help="ORCID iD of the authenticated researcher")
    parser.add_argument(
        "--token",
        default=None,
        help="OAuth access token (default: $ORCID_ACCESS_TOKEN)"
    )
    parser.add_argument(
        "--api-version",
        default=None,
        choices=VALID_API_VERSIONS,
        help="ORCID API version (default: from configuration, normally 2.0)"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML configuration file (optional, defaults to .orcid-profile.yaml)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional log file path (logs to stderr if not specified)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print profile fields as JSON")
    show.add_argument(
        "--field",
        default="summary",
        choices=SHOW_FIELDS,
        help="Field to print (default: identifier, name and email)"
    )

    save = commands.add_parser("save", help="PUT an ORCID XML message")
    save.add_argument("--scope", required=True, help="Write endpoint, e.g. 'work' or 'orcid-works'")
    save.add_argument("--xml-file", required=True, help="File containing the ORCID XML message")
    save.add_argument(
        "--unescape",
        action="store_true",
        help="Strip one layer of backslash escaping from the XML before sending"
    )

    return parser


def _show(profile: ProfileAccessor, field: str):
    if field == "identifier":
        return profile.identifier()
    if field == "name":
        return profile.full_name()
    if field == "email":
        return profile.email()
    if field == "person":
        return profile.person()
    if field == "bio":
        return profile.bio()
    if field == "raw":
        return profile.raw_profile()
    return {
        "orcid": profile.identifier(),
        "api_version": profile.api_version.value,
        "name": profile.full_name(),
        "email": profile.email(),
    }


def main():
    """Read or update an ORCID profile."""
    parser = build_parser()
    args = parser.parse_args()

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(level=args.log_level, log_file=log_file)
    logger = get_logger("cli")

    config_file = Path(args.config) if args.config else None
    config = get_config(config_file)
    api_version = args.api_version or config.api_version
    logger.debug(f"Using {config.api_host}, API v{api_version} (timeout: {config.api_timeout}s)")

    if not validate_orcid_id(args.orcid):
        logger.error(f"Invalid ORCID ID format: {args.orcid}")
        logger.error("ORCID IDs must match the pattern: XXXX-XXXX-XXXX-XXXX")
        sys.exit(1)

    token = args.token or os.getenv("ORCID_ACCESS_TOKEN")
    if not token:
        logger.error("An access token is required (--token or ORCID_ACCESS_TOKEN)")
        sys.exit(1)

    with OAuthSession(args.orcid, token, config=config) as session:
        profile = ProfileAccessor(session, api_version, config=config)
        _run_command(args, profile, logger)


def _run_command(args: argparse.Namespace, profile: ProfileAccessor, logger: logging.Logger):
    if args.command == "show":
        try:
            value = _show(profile, args.field)
        except NotAuthenticatedError as e:
            logger.error(str(e))
            sys.exit(1)
        except (UpstreamFetchError, MalformedProfileError) as e:
            logger.error(f"Could not read ORCID profile for {args.orcid}: {e}")
            sys.exit(2)

        print(json.dumps(value, indent=2))
        return

    xml_path = Path(args.xml_file)
    try:
        xml = xml_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read XML file {xml_path}: {e}")
        sys.exit(1)

    try:
        result = profile.save(args.scope, xml, unescape=args.unescape)
    except (NotAuthenticatedError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    if not result.ok:
        logger.error(f"Save to {args.scope} failed: {result.reason}")
        sys.exit(1)

    logger.info(f"Saved {args.scope} ({result.status_code})")
    print(result.body)
