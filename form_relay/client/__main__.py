"""Submit the contact form from the command line.

Usage:
    python -m form_relay.client --url http://127.0.0.1:3000 \\
        --name Ann --contact ann@x.com --service Haircut --service Styling

Prints the status line the page would show and exits with 0 when the
relay accepted the submission, 1 otherwise.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import httpx

from .form import FormController
from .state import Outcome


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Send a contact form submission to the relay.")
    ap.add_argument("--url", default="http://127.0.0.1:3000", help="Base URL of the relay server")
    ap.add_argument("--name", required=True, help="Visitor name")
    ap.add_argument("--contact", required=True, help="Phone, e-mail or messenger handle")
    ap.add_argument("--service", action="append", default=[], dest="services", help="Selected service (repeatable)")
    ap.add_argument("--timeout", type=float, default=15.0, help="Request timeout in seconds")
    return ap.parse_args(argv)


async def submit(args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    async with httpx.AsyncClient(base_url=args.url, timeout=args.timeout, transport=transport) as client:
        controller = FormController.from_options(client, args.services)
        for value in args.services:
            controller.menu.set_checked(value)
        controller.name = args.name
        controller.contact = args.contact
        state = await controller.submit()
    view = controller.render()
    stream = sys.stdout if state.outcome is Outcome.SUCCESS else sys.stderr
    print(view.text, file=stream)
    return 0 if state.outcome is Outcome.SUCCESS else 1


def main(argv: Optional[List[str]] = None) -> int:
    return asyncio.run(submit(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
