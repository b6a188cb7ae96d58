"""CLI for resolving a configuration value from the current environment."""
import argparse
import json
import sys
from datetime import timedelta

from envget.core.converters import CONVERTERS, ValueKind
from envget.core.durations import format_duration_seconds
from envget.core.exceptions import ConversionError
from envget.core.logging_config import LoggingConfig
from envget.core.resolver import resolve_with_source

# used when --default is omitted
EMPTY_DEFAULTS = {
    ValueKind.STRING: "",
    ValueKind.INT: "0",
    ValueKind.INT32: "0",
    ValueKind.INT64: "0",
    ValueKind.FLOAT: "0",
    ValueKind.BOOL: "false",
    ValueKind.DURATION: "0",
    ValueKind.JSON: "{}",
}


def parse_default(kind: ValueKind, text):
    """Turn the --default text into a typed default, raising ConversionError"""
    if text is None:
        text = EMPTY_DEFAULTS[kind]
    if kind is ValueKind.JSON:
        try:
            return json.loads(text)
        except ValueError as e:
            raise ConversionError(kind.value, text, "invalid JSON") from e
    return CONVERTERS[kind](text.strip(), None)


def render(value, as_json: bool) -> str:
    if as_json:
        if isinstance(value, timedelta):
            value = format_duration_seconds(value)
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def cmd_get(args):
    """Resolve one variable and print it."""
    kind = ValueKind(args.type)
    try:
        default = parse_default(kind, args.default)
    except ConversionError as e:
        args.parser.error(f"--default: {e}")
    value, source = resolve_with_source(args.name, default, kind=kind)
    line = render(value, args.json)
    if args.show_source:
        line = f"{line}\t{source.value}"
    print(line)
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="envget", description="Read typed values from NAME_FILE or NAME")
    p.add_argument("--log-level", help="Log level for envget diagnostics (e.g. DEBUG)")
    sub = p.add_subparsers(dest="cmd")
    s = sub.add_parser("get", help="Resolve a variable and print its value")
    s.add_argument("name", help="Variable name, without the _FILE suffix")
    s.add_argument("--default", "-d", help="Value used when nothing resolves")
    s.add_argument(
        "--type", "-t",
        choices=[k.value for k in ValueKind],
        default=ValueKind.STRING.value,
        help="Conversion type (default: string)",
    )
    s.add_argument("--show-source", action="store_true", help="Append the source of the value")
    s.add_argument("--json", action="store_true", help="Print the value as JSON")
    s.set_defaults(func=cmd_get, parser=s)
    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2
    if args.log_level:
        LoggingConfig.configure(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
