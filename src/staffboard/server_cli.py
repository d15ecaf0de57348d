"""CLI entry point for the StaffBoard API server."""

import argparse
import os


def _serve(args: argparse.Namespace) -> None:
    if args.local:
        os.environ["STAFFBOARD_LOCAL_MODE"] = "1"

    import uvicorn

    uvicorn.run("staffboard.main:app", host=args.host, port=args.port)


def _token(args: argparse.Namespace) -> None:
    from staffboard.security import create_access_token

    print(create_access_token(args.user_id, args.role, expires_minutes=args.expires))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="staffboard-server",
        description="StaffBoard API server: role-scoped notifications for the HR portal",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database, tables created on startup",
    )
    parser.set_defaults(func=_serve)

    sub = parser.add_subparsers(dest="command")
    token = sub.add_parser("token", help="Print a development bearer token")
    token.add_argument("user_id", help="Subject of the token (employee/manager/director id)")
    token.add_argument("role", help="Role or job title, e.g. 'manager' or 'Engineering Director'")
    token.add_argument("--expires", type=int, default=None, help="Lifetime in minutes")
    token.set_defaults(func=_token)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
