#!/usr/bin/env python3
"""
SubnetAuthN -- authenticate a client by the IPv4 subnet it connects from.

Runs a single authentication decision from the command line. Handy for
checking a subnet configuration before deploying it behind the API.

Usage:
  python main.py 10.0.1.42
  python main.py 10.0.1.42 --base 10.0.1.0 --mask 255.255.255.0
  python main.py 10.0.1.42 --username alice
  python main.py ::1 --base 127.0.0.0 --mask 255.0.0.0 --json

Environment variables:
  NETWORK_BASE_ADDRESS   Default subnet base address (default: 0.0.0.0)
  SUBNET_MASK            Default subnet mask (default: 255.255.255.0)

Exit status: 0 on SUCCESS, 1 on FAILURE, 2 on a configuration or
processing error.
"""

import argparse
import json
import sys
from typing import Optional

from pydantic import ValidationError

from auth.adapter import CONFIG_BASE_ADDRESS, CONFIG_SUBNET_MASK, AdapterProcessingError, SubnetAdapter
from core.address import InvalidAddressFormat
from core.config import get_settings
from core.models import CHAINED_ATTR_USERNAME, AuthnOutcome


def _print_terminal(source_address: str, outcome: AuthnOutcome) -> None:
    print(f"\n  Client:  {source_address}")
    print(f"  Status:  {outcome.status.value}")
    for name, value in sorted(outcome.attributes.items()):
        print(f"  {name + ':':<12}{value}")
    print()


def main(argv: Optional[list[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"  [!] Bad subnet configuration in environment: {e}", file=sys.stderr)
        return 2

    parser = argparse.ArgumentParser(
        prog="subnet-authn",
        description="Authenticate a client address against an IPv4 subnet.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py 10.0.1.42 --base 10.0.1.0 --mask 255.255.255.0
  python main.py 10.0.1.42 --username alice --json
  NETWORK_BASE_ADDRESS=192.168.0.0 SUBNET_MASK=255.255.0.0 python main.py 192.168.4.20
        """,
    )
    parser.add_argument(
        "source_address",
        metavar="ADDRESS",
        help="Client source address (IPv4 dotted quad or IPv6 literal)",
    )
    parser.add_argument(
        "--base",
        default=settings.network_base_address,
        metavar="ADDR",
        help=f"Network base address (default: {settings.network_base_address})",
    )
    parser.add_argument(
        "--mask",
        default=settings.subnet_mask,
        metavar="ADDR",
        help=f"Subnet mask (default: {settings.subnet_mask})",
    )
    parser.add_argument(
        "--username",
        default=None,
        help="Username established by an upstream adapter (assigns the CORP_USER role)",
    )
    parser.add_argument(
        "--partner",
        default="",
        metavar="ENTITY_ID",
        help="Partner SP entity ID, for the log line only",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON",
    )
    args = parser.parse_args(argv)

    adapter = SubnetAdapter()
    try:
        adapter.configure({CONFIG_BASE_ADDRESS: args.base, CONFIG_SUBNET_MASK: args.mask})
    except InvalidAddressFormat as e:
        print(f"  [!] Bad subnet configuration: {e}", file=sys.stderr)
        return 2

    chained = {CHAINED_ATTR_USERNAME: args.username} if args.username is not None else None
    try:
        outcome = adapter.lookup(args.source_address, args.partner, chained)
    except AdapterProcessingError as e:
        print(f"  [!] {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps({"status": outcome.status.value, "attributes": dict(outcome.attributes)}, indent=2))
    else:
        _print_terminal(args.source_address, outcome)

    return 0 if outcome.authenticated else 1


if __name__ == "__main__":
    sys.exit(main())
