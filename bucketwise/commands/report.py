import sys
from pathlib import Path

from bucketwise.state.io import load_journal, summarize_journal


def run(args):
    root = Path(args.path).resolve()
    try:
        df = load_journal(root)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    summary = summarize_journal(df)
    print(f"[bucket] journal for {root}: {len(df)} entries")
    for operation in sorted(summary):
        counts = ", ".join(f"{status}={n}" for status, n in sorted(summary[operation].items()))
        print(f"  {operation}: {counts}")
