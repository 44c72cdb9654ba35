from __future__ import annotations
import argparse
import json
from .settings import Settings
from .log import setup_logger
from .configuration import ConfigStore

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ini-store")
    parser.add_argument("--config", default=None, help="INI file to operate on (default: $INI_STORE_CONFIG)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    get_p = sub.add_parser("get", help="Print one value")
    get_p.add_argument("section")
    get_p.add_argument("key")

    num_p = sub.add_parser("number", help="Print one value parsed strictly as a number")
    num_p.add_argument("section")
    num_p.add_argument("key")
    num_p.add_argument("--float", action="store_true", help="Parse as float instead of int")

    on_p = sub.add_parser("is-on", help="Exit 0 if the value is exactly 'on'")
    on_p.add_argument("section")
    on_p.add_argument("key")

    set_p = sub.add_parser("set", help="Set a value and save the file")
    set_p.add_argument("section")
    set_p.add_argument("key")
    set_p.add_argument("value")

    rm_p = sub.add_parser("remove", help="Remove a value and save the file")
    rm_p.add_argument("section")
    rm_p.add_argument("key")

    sub.add_parser("sections", help="List section names")

    keys_p = sub.add_parser("keys", help="List key names of a section")
    keys_p.add_argument("section")

    sub.add_parser("dump", help="Print all values as JSON")

    backup_p = sub.add_parser("backup", help="Copy the INI file as saved on disk")
    backup_p.add_argument("dest")

    return parser

def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings()
    setup_logger(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=str(settings.log_file) if settings.log_file else None,
    )

    store = ConfigStore(args.config or settings.config_path, apply=False)

    if args.cmd == "get":
        value = store.get(args.section, args.key)
        if value is None:
            return 1
        print(value)
        return 0

    if args.cmd == "number":
        number = store.get_numeric(args.section, args.key, float if args.float else int)
        if number is None:
            return 1
        print(number)
        return 0

    if args.cmd == "is-on":
        on = store.is_on(args.section, args.key)
        print("on" if on else "off")
        return 0 if on else 1

    if args.cmd == "set":
        store.set(args.section, args.key, args.value)
        return 0 if store.save() else 1

    if args.cmd == "remove":
        if not store.remove(args.section, args.key):
            return 1
        return 0 if store.save() else 1

    if args.cmd == "sections":
        for section in sorted(store.get_sections()):
            print(section)
        return 0

    if args.cmd == "keys":
        for key in sorted(store.get_keys(args.section)):
            print(key)
        return 0

    if args.cmd == "dump":
        print(json.dumps(store.to_dict(), indent=2, ensure_ascii=False, sort_keys=True))
        return 0

    if args.cmd == "backup":
        return 0 if store.backup(args.dest) else 1

    return 2
