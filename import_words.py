"""
Kotoba: Vocabulary Notebook
---------------------------

Command-line entry point for importing vocabulary files and browsing the
word list.

    python import_words.py import n5_words.json keigo.xlsx
    python import_words.py list --collection "JLPT N5" --search ねこ
    python import_words.py stats
"""

import argparse
import sys

from kotoba.config import Config, SettingsManager
from kotoba.services import VocabularyService
from kotoba.utils import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kotoba", description="Japanese vocabulary notebook")
    parser.add_argument("--store", help="Path to the word list file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser("import", help="Import JSON, Excel or CSV files")
    import_cmd.add_argument("files", nargs="+")

    list_cmd = commands.add_parser("list", help="List words")
    list_cmd.add_argument("--collection", default=Config.ALL_FILTER)
    list_cmd.add_argument("--group", default=Config.ALL_FILTER)
    list_cmd.add_argument("--search", default="")

    commands.add_parser("stats", help="Show word counts")

    export_cmd = commands.add_parser("export", help="Export the word list to CSV")
    export_cmd.add_argument("path")

    return parser


def run_import(service: VocabularyService, files) -> bool:
    success = True
    for path in files:
        report = service.import_file(path)
        marker = "✅" if report.ok else "❌"
        print(f"{marker} {report.source_name}: {report.message}")
        if report.ok:
            print(f"   Collection: {report.collection_name} ({report.rejected} entries skipped)")
        else:
            success = False
    return success


def run_list(service: VocabularyService, args) -> bool:
    words = service.search(args.search, group=args.group, collection=args.collection)
    for word in words:
        reading = f" [{word.furigana}]" if word.furigana else ""
        print(f"{word.kanji}{reading} - {word.meaning}  ({word.collection} / {word.display_group})")
    print(f"\n{len(words)} words")
    return True


def run_stats(service: VocabularyService) -> bool:
    stats = service.get_statistics()
    print(f"Total words: {stats['total_words']}")
    for name, count in stats["collections"].items():
        print(f"  {name}: {count}")
    return True


def main(argv=None) -> bool:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = SettingsManager()
    setup_logger(
        level="DEBUG" if args.verbose else settings.get("LOG_LEVEL", Config.LOG_LEVEL),
        log_file=Config.LOG_FILE if settings.get("LOG_TO_FILE") else None,
    )

    service = VocabularyService(store_path=args.store, settings=settings)
    if not service.load():
        print(f"❌ Error: could not read {service.store_path}")
        return False

    if args.command == "import":
        return run_import(service, args.files)
    if args.command == "list":
        return run_list(service, args)
    if args.command == "stats":
        return run_stats(service)
    if args.command == "export":
        ok = service.export_csv(args.path)
        print(f"{'✅ Exported to' if ok else '❌ Could not export to'} {args.path}")
        return ok
    return False


def cli() -> None:
    try:
        sys.exit(0 if main() else 1)
    except KeyboardInterrupt:
        print("\n[!] Aborted by user.")
        sys.exit(1)


if __name__ == "__main__":
    cli()
