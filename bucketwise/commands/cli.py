import argparse


def _add_plan_args(p):
    """Flags shared by every command that builds a bucket plan."""
    p.add_argument("path", help="Directory whose files should be sorted")
    p.add_argument("--config", help="YAML options file (defaults to <path>/bucketwise.yaml if present)")
    p.add_argument("--split", action="store_true", default=None,
                   help="Split buckets larger than the threshold (a -> a1, a2)")
    p.add_argument("--combine", action="store_true", default=None,
                   help="Merge neighbouring small buckets into ranges (x, y -> x-y)")
    p.add_argument("--threshold", type=int, default=None,
                   help="Bucket size limit (default: 10%% of the file count, rounded up)")
    p.add_argument("--include-empty", action="store_true", default=None,
                   help="Start from all 0-9 and a-z buckets, even unused ones")
    p.add_argument("--upper", action="store_true", default=None, help="Uppercase folder names")
    p.add_argument("--include-count", action="store_true", default=None,
                   help="Append ' [count]' to folder names")
    p.add_argument("--prefix", default=None, help="Text prepended to folder names")
    p.add_argument("--suffix", default=None, help="Text appended to folder names")


def main(argv=None):
    p = argparse.ArgumentParser(prog="bucket", description="Bucketwise CLI - Sort files into first-character folders")
    sub = p.add_subparsers(dest="cmd", required=True)

    # SORT
    p_sort = sub.add_parser("sort", help="Sort a directory's files into bucket folders")
    _add_plan_args(p_sort)
    p_sort.add_argument("-f", "--force", action="store_true", default=None,
                        help="Do not ask for confirmation")
    p_sort.add_argument("--dry-run", "--what-if", dest="dry_run", action="store_true", default=None,
                        help="Show the folders without creating or moving anything")
    p_sort.add_argument("--recurse", action="store_true", default=None,
                        help="Sort again inside every created folder")
    p_sort.add_argument("--max-depth", type=int, default=None,
                        help="How many levels --recurse may go down (default 2)")
    p_sort.add_argument("--journal", action="store_true", default=None,
                        help="Record every action in <path>/.bucketwise/journal.log")

    # EXPORT-PLAN
    p_export = sub.add_parser("export-plan", help="Write the per-file plan to CSV without moving anything")
    _add_plan_args(p_export)
    p_export.add_argument("--out", help="Output CSV (defaults to <path>/.bucketwise/Plan.csv)")

    # REPORT
    p_report = sub.add_parser("report", help="Summarize the journal of earlier sort runs")
    p_report.add_argument("path", help="Directory that was sorted with --journal")

    args = p.parse_args(argv)

    # Route to appropriate module
    if args.cmd == "sort":
        from .sort import run as sort_run
        sort_run(args)
    elif args.cmd == "export-plan":
        from .export_plan import run as export_run
        export_run(args)
    elif args.cmd == "report":
        from .report import run as report_run
        report_run(args)


if __name__ == "__main__":
    main()
