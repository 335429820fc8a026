#!/usr/bin/env python3
"""Export the static word lists as JSON, one row per word.

Usage: python -m scripts.seed_words [output.json]
"""

import json
import sys
from pathlib import Path

from core.models import Category
from core.vocabulary import export_word_lists


def main():
    rows = export_word_lists()
    counts = {c.value: sum(1 for r in rows if r['category'] == c.value) for c in Category}
    text = json.dumps(rows, indent=2, ensure_ascii=False)

    if len(sys.argv) > 1:
        Path(sys.argv[1]).write_text(text, encoding='utf-8')
        print(f"Wrote {len(rows)} words to {sys.argv[1]}")
    else:
        print(text)

    for category, count in counts.items():
        print(f"{category}: {count} words", file=sys.stderr)


if __name__ == '__main__':
    main()
