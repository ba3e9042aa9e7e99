#!/usr/bin/env python3
import sys
from pathlib import Path
from collections import Counter

sys.path.append(str(Path(__file__).resolve().parents[1] / 'src'))
from catalog_import.errors import CsvStructureError  # type: ignore
from catalog_import.importer import parse_products  # type: ignore
from catalog_import.io import read_csv_text  # type: ignore


def main():
    root = Path(sys.argv[1] if len(sys.argv) > 1 else 'data/input')
    files = sorted(root.glob('*.csv'))
    c_format = Counter()
    c_reason = Counter()
    total = valid = 0

    print('Files considered:')
    for p in files:
        try:
            result = parse_products(read_csv_text(p))
        except CsvStructureError as e:
            print(f'- {p.name}: {e}')
            continue
        c_format[result.format.value] += 1
        total += result.total_rows
        valid += len(result.drafts)
        for s in result.skipped:
            c_reason[s.reason.split(' (')[0]] += 1
        print(f'- {p.name}: {result.format.value}, {len(result.drafts)}/{result.total_rows} valid')

    print(f"\nTotal data rows: {total}")
    print(f"Valid drafts: {valid}")

    print('\nDetected formats:')
    for k, v in c_format.most_common():
        print(f'- {k}: {v}')

    print('\nSkip reasons:')
    for k, v in c_reason.most_common(20):
        print(f'- {k}: {v}')


if __name__ == '__main__':
    main()
