"""
Command Line Interface for signet
=================================

A thin terminal front end over `AuthSession`, plus a command that runs the
API server.

Usage:
------
    signet register --email ada@example.com --name "Ada Lovelace"
    signet login --email ada@example.com
    signet profile
    signet logout
    signet serve --port 4000

Passwords are prompted for when not given on the command line. Credentials
are kept in CLIENT_TOKEN_FILE between invocations.

Exit codes: 0 on success, 1 on a handled error, 130 when interrupted.
"""

import argparse
import asyncio
import getpass
import json
import sys
from typing import Optional

from signet.client import AuthSession, FileTokenStore, RequestCoordinator
from signet.core.config.client import ClientSettings
from signet.core.exceptions import SignetError
from signet.core.logging import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="signet",
        description="Register, log in and call the protected profile of a signet API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--api-url", help="Base URL of the authentication API (default: API_URL)")
    parser.add_argument("--token-file", help="Where credentials are stored (default: CLIENT_TOKEN_FILE)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log client activity")

    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser("register", help="Create an account")
    register.add_argument("--email", required=True)
    register.add_argument("--password", help="Prompted for when omitted")
    register.add_argument("--name", help="Optional display name")

    login = subparsers.add_parser("login", help="Log in and store the credentials")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    subparsers.add_parser("profile", help="Show the authenticated profile")
    subparsers.add_parser("logout", help="Log out and forget the credentials")

    serve = subparsers.add_parser("serve", help="Run the API server with uvicorn")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    return parser


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _print_notices(session: AuthSession) -> bool:
    """Print and drop pending notices. Returns True if any was an error."""
    had_error = False
    for notice in session.notices:
        had_error = had_error or notice.kind == "error"
        stream = sys.stderr if notice.kind == "error" else sys.stdout
        print(notice.message, file=stream)
    session.notices.clear()
    return had_error


async def run_client_command(args: argparse.Namespace, session: AuthSession) -> int:
    """Run one client subcommand against `session`. Returns the exit code."""
    try:
        if args.command == "register":
            user = await session.register(args.email, _password(args), args.name)
            _print_notices(session)
            print(json.dumps(user, indent=2))
        elif args.command == "login":
            await session.login(args.email, _password(args))
            _print_notices(session)
        elif args.command == "profile":
            if not session.is_authenticated:
                print("Not logged in.", file=sys.stderr)
                return 1
            profile = await session.profile()
            user = profile["authenticatedUser"]
            print(profile["message"])
            print(f"Email: {user['email']}")
            print(f"Name: {user.get('name') or 'N/A'}")
        elif args.command == "logout":
            await session.logout()
            _print_notices(session)
    except SignetError as e:
        if not _print_notices(session):
            print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


async def _run_client(args: argparse.Namespace, client_settings: ClientSettings) -> int:
    store = FileTokenStore(args.token_file or client_settings.CLIENT_TOKEN_FILE)
    async with RequestCoordinator(
        args.api_url or client_settings.API_URL,
        store,
        timeout=client_settings.CLIENT_TIMEOUT_SECONDS,
    ) as coordinator:
        return await run_client_command(args, AuthSession(coordinator))


def serve(args: argparse.Namespace) -> int:
    """Run the API with uvicorn, using the server settings for defaults."""
    import uvicorn

    from signet.core.config.settings import settings

    uvicorn.run(
        "signet.main:app",
        host=args.host or settings.API_HOST,
        port=args.port or settings.API_PORT,
        reload=args.reload or settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


def main(argv: Optional[list] = None) -> int:
    """CLI entry point."""
    args = create_parser().parse_args(argv)

    if args.command == "serve":
        return serve(args)

    configure_logging(log_level="DEBUG" if args.verbose else "WARNING", json_logs=False)
    try:
        return asyncio.run(_run_client(args, ClientSettings()))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
