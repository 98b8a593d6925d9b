import argparse
import logging
import sys

import msgspec
import uvicorn

from devicename.config import DEFAULT_LOCALE, DEFAULT_PORT
from devicename.i18n import Translator
from devicename.preview import preview
from devicename.util import runtime

EPILOG = """\
Examples:
  devicename render "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) Gecko/20100101 Firefox/128.0" --client-id element-web
  devicename serve --listen localhost:4402 --client element-web="Element Web"
"""


def parse_listen(listen: str | None) -> tuple[str, int]:
    """Parse host:port, port, :port or [ipv6]:port."""
    if not listen:
        return "localhost", DEFAULT_PORT
    host, sep, port = listen.rpartition(":")
    if not sep:
        host, port = "", listen
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host or "localhost", int(port)
    except ValueError:
        raise SystemExit(f"Invalid listen address: '{listen}'")


def parse_clients(values: list[str] | None) -> dict[str, str]:
    clients = {}
    for value in values or []:
        client_id, sep, name = value.partition("=")
        if not sep or not client_id.strip() or not name.strip():
            raise SystemExit(f"Invalid --client '{value}', expected ID=NAME")
        clients[client_id.strip()] = name.strip()
    return clients


def cmd_render(args) -> None:
    translator = Translator(default_locale=args.default_locale)
    client = runtime.RuntimeConfig().client(args.client_id, args.client_name)
    result = preview(args.user_agent, client, translator, args.lang)
    if args.json:
        print(msgspec.json.format(msgspec.json.encode(result)).decode())
    else:
        print(result.display_name)


def cmd_serve(args) -> None:
    from devicename.fastapi.logging import configure_access_logging

    host, port = parse_listen(args.listen)
    config = runtime.RuntimeConfig(
        default_locale=args.default_locale,
        escape_html=args.escape_html,
        clients=parse_clients(args.clients),
    )
    # Validates the default locale before starting workers
    Translator(default_locale=config.default_locale)
    runtime.export_config(config)
    configure_access_logging()
    logging.info(f"Serving device names on http://{host}:{port}")
    uvicorn.run(
        "devicename.fastapi.mainapp:app",
        host=host,
        port=port,
        log_level="warning",
        access_log=False,
    )


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="devicename",
        description="Human-readable device names for session approval screens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--default-locale",
        default=DEFAULT_LOCALE,
        help=f"Fallback locale for missing messages (default: {DEFAULT_LOCALE})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("render", help="Print the display name for a user agent")
    p.add_argument("user_agent", help="Raw User-Agent header value")
    p.add_argument("--client-id", required=True, help="Client identifier")
    p.add_argument("--client-name", help="Human-friendly client name")
    p.add_argument("--lang", help="Locale to render in (default: default locale)")
    p.add_argument("--json", action="store_true", help="Print all details as JSON")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("serve", help="Run the HTTP preview server")
    p.add_argument(
        "-l",
        "--listen",
        metavar="LISTEN",
        help=f"Endpoint to listen on (default: localhost:{DEFAULT_PORT})",
    )
    p.add_argument(
        "--escape-html",
        action="store_true",
        help="HTML-escape names substituted into messages",
    )
    p.add_argument(
        "--client",
        action="append",
        dest="clients",
        metavar="ID=NAME",
        help="Known client name. May be specified multiple times.",
    )
    p.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    # Configure logging to remove the "ERROR:root:" prefix
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        force=True,
    )
    try:
        args.func(args)
    except ValueError as e:
        raise SystemExit(str(e))


if __name__ == "__main__":
    sys.exit(main())
