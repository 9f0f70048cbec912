"""
tktranslate - Command Line Entrypoint
-------------------------------------
Responsibilities:
- Load configuration and set up logging
- Build a client for the requested host
- Translate text given as arguments or on stdin

Usage:
    tktranslate -t en 你好
    echo "Bonjour" | tktranslate -s fr -t de --json
    tktranslate --list-languages
"""

import argparse
import json
import logging
import sys
from typing import Optional, TextIO

from tktranslate.clients import (
    SUPPORTED_ADDRS,
    StaticProxy,
    TransportConfig,
    TranslateError,
    UnsupportedAddressError,
    ValidationError,
    new_client,
)
from tktranslate.config import get_settings
from tktranslate.languages import AUTO, SUPPORTED_LANGUAGES
from tktranslate.utils.structured_log import setup_logging

logger = logging.getLogger("tktranslate.main")


def _build_parser(default_addr: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tktranslate", description="Translate text via the public web endpoint"
    )
    parser.add_argument("text", nargs="*", help="Text to translate (default: read stdin)")
    parser.add_argument("-s", "--source", default=AUTO, help="Source language (default: auto)")
    parser.add_argument("-t", "--target", help="Target language code, e.g. en, zh-TW")
    parser.add_argument(
        "--addr",
        default=default_addr,
        help=f"Endpoint host, one of: {', '.join(SUPPORTED_ADDRS)}",
    )
    parser.add_argument("--proxy", help="Proxy URL used for every request")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Print the full decoded result")
    parser.add_argument(
        "--list-languages", action="store_true", help="Print supported language codes and exit"
    )
    parser.add_argument("--log-level", help="Logging level (default from config)")
    return parser


def main(argv: Optional[list] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Returns:
        int exit code (0=success, 1=translate failure, 2=bad input).
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    settings = get_settings()
    parser = _build_parser(settings.server_addr)
    args = parser.parse_args(argv)

    setup_logging(args.log_level or settings.log_level, json_output=settings.log_json)

    if args.list_languages:
        for code, name in sorted(SUPPORTED_LANGUAGES.items()):
            stdout.write(f"{code}\t{name}\n")
        return 0

    if not args.target:
        parser.error("the following arguments are required: -t/--target")

    text = " ".join(args.text) if args.text else stdin.read()
    text = text.strip()
    if not text:
        logger.error("nothing to translate")
        return 2

    proxy = args.proxy or settings.proxy
    cfg = TransportConfig(
        timeout=args.timeout or settings.timeout,
        proxy=StaticProxy(proxy) if proxy else None,
    )
    if settings.user_agent:
        cfg.user_agent = settings.user_agent

    try:
        with new_client(
            args.addr,
            cfg,
            tkk_ttl=settings.tkk_ttl,
            tkk_sweep_interval=settings.tkk_sweep_interval,
        ) as client:
            result = client.translate(args.source, args.target, text)
    except (UnsupportedAddressError, ValidationError) as exc:
        logger.error("%s", exc)
        return 2
    except TranslateError as exc:
        logger.error("translation failed: %s", exc, extra={"stage": exc.stage})
        return 1

    if args.json:
        stdout.write(json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n")
    else:
        stdout.write(result.text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
