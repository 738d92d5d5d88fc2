"""
main.py -- Command line entry point.

Dependencies within the package:
  - config (Config, load_config)
  - errors (LocalizeError, InitError)
  - service (LocalizationService)
  - extract (extract_keys, check_table, load_existing)
  - utils (log, plural)

Commands:
  extract <path>   scan sources for L("...") keys and update the CSV
  check [file]     list keys with missing translations (exit 1 if any)
  lookup KEY...    resolve keys the way the application would
  serve            run the HTTP service (uvicorn)
"""

# ============================================================
# External dependencies
# ============================================================
import argparse
import logging
import os
import sys

# ============================================================
# Internal package imports
# ============================================================
from csv_localize.config import Config, load_config
from csv_localize.errors import LocalizeError, InitError
from csv_localize.service import LocalizationService
from csv_localize.extract import extract_keys, check_table, load_existing
from csv_localize.utils import log, plural

EXIT_OK = 0
EXIT_WARNINGS = 1
EXIT_ERROR = 2


def _split_list(value: str) -> list[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _build_config(args) -> Config:
    base = load_config(args.config) if args.config else None
    return Config.from_env(base)


# ============================================================
# Commands
# ============================================================
def cmd_extract(args, cfg: Config) -> int:
    output_dir = args.output_dir or "."
    if not os.path.isabs(output_dir):
        output_dir = os.path.join(os.getcwd(), output_dir)
    output_file = os.path.join(output_dir, args.file_name or os.path.basename(cfg.source))

    result = extract_keys(
        args.path,
        function_name=args.function or cfg.function_name,
        extensions=_split_list(args.extensions) or cfg.extensions,
        localization_file=output_file,
        languages=_split_list(args.languages) or None,
        default_languages=cfg.languages,
        force_rescan=args.rescan,
        clean=args.clean,
        delimiter=cfg.delimiter,
    )
    for line in result.warnings:
        print(line, file=sys.stderr)
    print(f"{output_file}: {plural(len(result.table), 'key')}, "
          f"{len(result.keys_added)} added, {len(result.keys_removed)} removed, "
          f"{plural(result.files_scanned, 'file')} scanned")
    return EXIT_OK


def cmd_check(args, cfg: Config) -> int:
    path = args.file or cfg.source
    table, _mtime = load_existing(path, cfg.delimiter)
    if table is None:
        print(f"{path}: file not found", file=sys.stderr)
        return EXIT_ERROR
    warnings = check_table(table, path)
    for line in warnings:
        print(line, file=sys.stderr)
    print(f"{path}: {plural(len(table), 'key')}, {', '.join(table.languages)}, "
          f"{plural(len(warnings), 'key')} incomplete")
    return EXIT_WARNINGS if warnings else EXIT_OK


def cmd_lookup(args, cfg: Config) -> int:
    service = LocalizationService(cfg)
    fallback = cfg.fallback_enabled and not args.no_fallback
    service.initialize(args.file or None, fallback, language=args.lang or None)
    for key in args.keys:
        print(service.resolve(key))
    return EXIT_OK


def cmd_serve(args, cfg: Config) -> int:
    import uvicorn

    uvicorn.run("web.server:app", host=args.host or cfg.host, port=args.port or cfg.port,
                log_level="info")
    return EXIT_OK


# ============================================================
# Argument parsing
# ============================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv-localize",
        description="CSV-based string localization: key extraction, checks and lookups.",
    )
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Use verbose output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("extract", help="Scan sources and update the localization file")
    p.add_argument("path", help="Source file or directory to scan")
    p.add_argument("-s", dest="function", help="Name of localization routine [L]")
    p.add_argument("-o", dest="output_dir", help="Output directory for localization file [.]")
    p.add_argument("-n", dest="file_name", help="Name of localization file [Localization.csv]")
    p.add_argument("-e", dest="extensions", help="Comma-separated list of extensions to scan [py]")
    p.add_argument("-l", dest="languages", help="Comma-separated languages for a new file [en]")
    p.add_argument("-r", dest="rescan", action="store_true",
                   help="Force rescan of all files (modification time will be ignored)")
    p.add_argument("-c", dest="clean", action="store_true",
                   help="Clean unused localization strings. Implies -r")
    p.set_defaults(func=cmd_extract)

    p = sub.add_parser("check", help="Report keys with missing translations")
    p.add_argument("file", nargs="?", help="Localization file [Localization.csv]")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("lookup", help="Resolve keys against a localization file")
    p.add_argument("keys", nargs="+")
    p.add_argument("-f", "--file", help="Localization file [Localization.csv]")
    p.add_argument("--lang", help="Active language (default: from the environment)")
    p.add_argument("--no-fallback", action="store_true", help="Do not fall back to the default language")
    p.set_defaults(func=cmd_lookup)

    p = sub.add_parser("serve", help="Run the HTTP service")
    p.add_argument("--host")
    p.add_argument("--port", type=int)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        log.setLevel(logging.DEBUG)

    try:
        cfg = _build_config(args)
        return args.func(args, cfg)
    except InitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (LocalizeError, OSError, ValueError) as e:
        log.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
