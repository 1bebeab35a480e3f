"""Entry point for static network provisioning.

This module is invoked once at provisioning/boot time to give the host a
static address from its store's per-role range.

Usage:
    python -m store_netconfig [--store STORE] [--node-type TYPE] [options]

Environment:
    STORE: Store identifier appended to the configuration service URL
    TYPENODE: Node role (server, pos, kds or failover)
    NETCONFIG_API_URL: Configuration service base URL
    NETCONFIG_API_KEY: Token sent in the X-API-KEY header
"""

import argparse
import logging
import os
import sys

from store_netconfig.allocator import AddressAllocator
from store_netconfig.configurators import select_configurator
from store_netconfig.errors import ProvisioningError
from store_netconfig.hostos import HostPlatform, detect_platform
from store_netconfig.models import Settings
from store_netconfig.orchestrator import Orchestrator
from store_netconfig.probe import PingProbe
from store_netconfig.provider import ConfigProvider, HttpClient
from store_netconfig.runner import CommandRunner

logger = logging.getLogger(__name__)

# Exit codes (failures use the exit_code of the raised ProvisioningError)
EXIT_SUCCESS = 0
EXIT_DHCP = 0  # Not an error - the store hands out addresses by DHCP
EXIT_INVALID_SETTINGS = 64


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def provision(
    settings: Settings,
    dry_run: bool = False,
    host: HostPlatform | None = None,
    http: HttpClient | None = None,
    runner: CommandRunner | None = None,
) -> int:
    """Build the components for this host and run provisioning.

    Args:
        settings: Run settings
        dry_run: If True, allocate an address but only log the configuration
        host: Host platform (detected if None)
        http: HTTP client for the configuration service (for testing)
        runner: Command runner for ping and configuration tools (for testing)

    Returns:
        Exit code (0 for success or DHCP-managed stores, non-zero for errors).
    """
    host = host or detect_platform()
    runner = runner or CommandRunner()
    logger.debug("Detected host platform: %s", host.value)

    orchestrator = Orchestrator(
        settings=settings,
        provider=ConfigProvider.from_settings(settings, http=http),
        allocator=AddressAllocator(PingProbe(host, runner=runner)),
        configurator=select_configurator(host, settings=settings, runner=runner),
        dry_run=dry_run,
    )

    try:
        result = orchestrator.run()
    except ProvisioningError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return e.exit_code

    if result is None:
        return EXIT_DHCP

    if result.error is not None:
        logger.error("%s: %s", type(result.error).__name__, result.error)
        return result.error.exit_code

    if result.applied:
        logger.info("Static IP %s configured successfully", result.address)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point for static network provisioning.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Assign a static IP address from the store's per-role range",
        prog="python -m store_netconfig",
    )
    parser.add_argument("--store", default=None, help="Store identifier (default: $STORE)")
    parser.add_argument(
        "--node-type",
        default=None,
        help="Node role: server, pos, kds or failover (default: $TYPENODE)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Configuration service base URL (default: $NETCONFIG_API_URL)",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Configuration service token (default: $NETCONFIG_API_KEY)",
    )
    parser.add_argument("--netplan-path", default=None, help="Netplan file to write (Linux)")
    parser.add_argument("--interface", default=None, help="Interface to configure (Linux)")
    parser.add_argument(
        "--windows-interface",
        default=None,
        help="Interface alias to configure (Windows)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Select an address but don't apply the configuration",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    logger.info("Starting static network provisioning")

    try:
        settings = Settings.from_env(
            os.environ,
            store=args.store,
            node_type=args.node_type,
            api_url=args.api_url,
            api_key=args.api_key,
            netplan_path=args.netplan_path,
            linux_interface=args.interface,
            windows_interface=args.windows_interface,
        )
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return EXIT_INVALID_SETTINGS

    return provision(settings, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
