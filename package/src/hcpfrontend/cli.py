import argparse
import sys

from dotenv import load_dotenv, find_dotenv


def _load_env():
    """
    Load environment variables for local/dev usage.
    In Docker / K8s, env vars are injected externally.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hcp-frontend",
        description=(
            "Serve the ARO HCP Frontend. It communicates with the Clusters Service "
            "and a database."
        ),
        epilog=(
            "Example: hcp-frontend --database-name $DB_NAME --database-url $DB_URL "
            "--region $REGION --clusters-service-url http://localhost:8000"
        ),
    )
    parser.add_argument("--database-name", help="database name (DB_NAME)")
    parser.add_argument("--database-url", help="database url (DB_URL)")
    parser.add_argument("--region", help="Azure region (REGION)")
    parser.add_argument("--port", type=int, help="port to listen on (default 8443)")
    parser.add_argument(
        "--clusters-service-url",
        help="URL of the OCM API gateway (default https://api.openshift.com)",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        default=None,
        help="Skip validating TLS for clusters-service.",
    )
    parser.add_argument(
        "--mock-clusters-service",
        action="store_true",
        default=None,
        help="Use an in-memory Clusters Service instead of a remote one.",
    )
    return parser


def settings_overrides(args: argparse.Namespace) -> dict:
    """Map parsed flags onto Settings fields, skipping flags that were not given."""
    mapping = {
        "database_name": args.database_name,
        "database_url": args.database_url,
        "region": args.region,
        "port": args.port,
        "clusters_service_url": args.clusters_service_url,
        "clusters_service_insecure": args.insecure,
        "use_mock_clusters_service": args.mock_clusters_service,
    }
    return {key: value for key, value in mapping.items() if value is not None}


def main(argv=None):
    _load_env()

    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)

    from hcpfrontend.frontend.config import Settings
    from hcpfrontend.frontend.main import run_frontend

    try:
        run_frontend(Settings(**settings_overrides(args)))
    except (OSError, RuntimeError) as e:
        print(f"[hcp-frontend] Failed to start: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
