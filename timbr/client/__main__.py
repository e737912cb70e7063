"""
Terminal swipe client.

    python -m timbr.client --email buyer0@example.com --password password123

Keys: a/left to pass, d/right to like, r to reload, q to quit.
"""

from typing import Any, Dict, Optional
from timbr.client.api import ApiError, TimbrClient
from timbr.client.controller import LEFT, RIGHT, SwipeController
from timbr.client.session import Session
from timbr.client.tasks import BestEffortDispatcher
from timbr.config import settings
import argparse
import asyncio
import httpx
import logging
import sys

logger = logging.getLogger("timbr.client")

COMMANDS = {
    "a": LEFT,
    "left": LEFT,
    "d": RIGHT,
    "right": RIGHT,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m timbr.client", description="Swipe through listings")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API base URL")
    parser.add_argument("--email", help="Account email; omit to reuse the saved session")
    parser.add_argument("--password", help="Account password")
    parser.add_argument("--signup", action="store_true", help="Create the account first")
    parser.add_argument("--display-name", help="Name for a new account")
    parser.add_argument("--role", default="BUYER", choices=["BUYER", "SELLER", "AGENT"])
    parser.add_argument("--session-file", default=settings.client_session_file)
    parser.add_argument("--logout", action="store_true", help="Forget the saved session and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def describe(house: Dict[str, Any]) -> str:
    """One-screen text card for a listing."""
    location = f"{house['city']}, {house['state']}"
    lines = [
        f"{house['title']}  ({house['propertyType']})",
        f"  ${house['price']:,}  |  {house['bedrooms']} bd  {house['bathrooms']} ba  {house['sqft']:,} sqft",
        f"  {house['addressLine1']}, {location}",
    ]
    extras = [label for label, flag in (("garage", house.get("hasGarage")), ("pool", house.get("hasPool"))) if flag]
    if extras:
        lines.append(f"  with {' and '.join(extras)}")
    agent = house.get("agent")
    if agent:
        lines.append(f"  agent: {agent['user']['displayName']} ({agent.get('brokerage') or 'independent'})")
    lines.append(f"  {len(house.get('images') or [])} photos")
    return "\n".join(lines)


async def sign_in(client: TimbrClient, args: argparse.Namespace) -> Optional[str]:
    """Returns an error message, or None when signed in."""
    if args.email and args.password:
        try:
            if args.signup:
                await client.signup(args.email, args.password, args.display_name or args.email, args.role)
            else:
                await client.login(args.email, args.password)
        except ApiError as e:
            return e.message
        except httpx.HTTPError as e:
            return str(e) or type(e).__name__
        return None

    if client.session.load():
        return None
    return "No saved session; pass --email and --password"


async def reload(controller: SwipeController) -> Optional[str]:
    """Refetch the feed. Returns an error message, or None on success."""
    try:
        await controller.refresh()
    except ApiError as e:
        return e.message
    except httpx.HTTPError as e:
        return str(e) or type(e).__name__
    return None


async def run(args: argparse.Namespace) -> int:
    session = Session(args.session_file)

    if args.logout:
        session.clear()
        return 0

    dispatcher = BestEffortDispatcher()
    async with TimbrClient(args.base_url, session) as client:
        error = await sign_in(client, args)
        if error:
            print(f"Sign-in failed: {error}", file=sys.stderr)
            return 1

        controller = SwipeController(client, dispatcher)
        error = await reload(controller)
        if error:
            print(f"Could not load listings: {error}", file=sys.stderr)
            return 1

        while True:
            house = controller.current
            if house is None:
                print("\nNo more listings. [r] load more, [q] quit")
            else:
                done, total = controller.progress
                print(f"\n[{done + 1}/{total}]\n{describe(house)}")
                print("[a] pass  [d] like  [q] quit")

            command = (await asyncio.to_thread(input, "> ")).strip().lower()
            if command == "q":
                break
            if command == "r":
                error = await reload(controller)
                if error:
                    print(f"Could not load listings: {error}", file=sys.stderr)
            elif command in COMMANDS:
                controller.on_button(COMMANDS[command])

        await dispatcher.drain()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )
    try:
        return asyncio.run(run(args))
    except (KeyboardInterrupt, EOFError):
        return 130


if __name__ == "__main__":
    sys.exit(main())
