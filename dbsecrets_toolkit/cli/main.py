"""CLI entrypoint for dbsecrets-toolkit."""
import sys
import json
import argparse
import logging

from .validators import validate_env_var_name, validate_secret_id

VERSION = "0.1.0"
PASSWORD_MASK = "********"

# Configure logging to stderr; call site included for diagnostics
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s %(name)s.%(funcName)s line:%(lineno)d %(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def cmd_version(args):
    """Show version information."""
    print(f"dbsecrets-toolkit {VERSION}")


def cmd_config_show(args):
    """Show resolved region and config file."""
    from dbsecrets_toolkit.secrets.domains.config_loader import get_config_path, resolve_region
    from dbsecrets_toolkit.secrets.domains.errors import ConfigError

    try:
        config_path = get_config_path()
        region, source = resolve_region()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Config file: {config_path if config_path else '(none)'}")
    if source == "unset":
        print("Region: (unset, boto3 default resolution applies)")
    else:
        print(f"Region: {region}")
    print(f"Source: {source}")


def cmd_secrets_get(args):
    """Fetch a database secret and print it."""
    from dbsecrets_toolkit.secrets.domains.config_loader import config_from_env
    from dbsecrets_toolkit.secrets.domains.errors import SecretsError
    from dbsecrets_toolkit.secrets.workflows.secret_operations import fetch_secret_details

    validate_env_var_name(args.env_var)

    try:
        config = config_from_env(args.env_var, region=args.region)
        validate_secret_id(config.secret_id, args.env_var)

        details = fetch_secret_details(config)
    except SecretsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == "dsn":
        output = details.dsn()
    else:
        data = details.to_dict()
        if not args.show_password and data["password"]:
            data["password"] = PASSWORD_MASK
        output = json.dumps(data) if args.quiet else json.dumps(data, indent=2)

    if args.quiet:
        print(output)
    else:
        print(f"Secret '{config.secret_id}' ({config.region or 'default region'}):")
        print(output)
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbsecrets",
        description="dbsecrets-toolkit CLI - fetch database credentials from AWS Secrets Manager",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (client, network, secret not found, undecodable payload, etc.)
  2 - Usage error (invalid arguments, unset or invalid secret id, etc.)

Environment variables:
  region           - AWS region (overrides config file)
  DBSECRETS_CONFIG - Path to config file

Configuration:
  Default location: ~/.config/dbsecrets-toolkit/config.yml
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of dbsecrets-toolkit"
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration inspection",
        description="Inspect dbsecrets-toolkit configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    config_subparsers.add_parser(
        "show",
        help="Show resolved region",
        description="""
Display the config file in use and the resolved AWS region.

Sources:
  - env: 'region' environment variable
  - config: aws.region in the config file
  - unset: neither is set; boto3 resolves the region itself
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Secret operations",
        description="Read database secrets from AWS Secrets Manager"
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command")

    get_parser = secrets_subparsers.add_parser(
        "get",
        help="Get database connection details",
        description="""
Fetch the current (AWSCURRENT) version of a database secret and print it.

The secret id is read from the environment variable named on the command
line. String and base64 binary secrets are both supported. A single request
is made; there is no retry and no caching.

Exit codes:
  0 - Secret fetched and printed
  1 - Fetch, decode or parse failure
  2 - Invalid variable name or unset/invalid secret id
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    get_parser.add_argument(
        "env_var",
        help="Name of the environment variable holding the secret name or ARN"
    )
    get_parser.add_argument(
        "--region",
        help="AWS region (overrides the 'region' env var and config file)"
    )
    get_parser.add_argument(
        "--format",
        choices=["json", "dsn"],
        default="json",
        help="Output as JSON (default) or a postgresql:// DSN"
    )
    get_parser.add_argument(
        "--show-password",
        action="store_true",
        help="Print the password in JSON output instead of masking it"
    )
    get_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Output only the value (no header, compact JSON)"
    )

    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors
        2 - Usage errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "config":
            if args.config_command == "show":
                cmd_config_show(args)
            else:
                parser.print_help()
                sys.exit(2)
        elif args.command == "secrets":
            if args.secrets_command == "get":
                cmd_secrets_get(args)
            else:
                parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
