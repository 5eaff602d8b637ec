# ==================================================
# examples/dump_journal.py
# ==================================================
import argparse, logging, sys
from sdjournal import JournalError, ReaderConfig, open_journal, sort_files

def main():
    p = argparse.ArgumentParser(description="Print the records of systemd journal files")
    p.add_argument("journals", nargs="+", help="path(s) to .journal files")
    args = p.parse_args()

    config = ReaderConfig.from_env()
    logging.basicConfig(level=config.log_level.upper())

    ordered = sort_files(args.journals)
    for path, err in ordered.skipped:
        print(f"skipped {path}: {err}", file=sys.stderr)

    for path in ordered.paths:
        try:
            with open_journal(path, config) as reader:
                for record in reader:
                    print(record)
        except JournalError as e:
            print(f"{path}: {e}", file=sys.stderr)
            return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
