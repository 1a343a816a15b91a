"""
Convert personal names to Korean Hangul from the command line.

Names come from positional arguments or from --input_path (one name per line).
Exits with status 1 if any name could not be converted.
"""

import sys
import json
import logging
import argparse

from korean_names.transliteration import KoreanNameConverter

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Convert personal names to Korean Hangul.")
    parser.add_argument("names", nargs="*", help="Names to convert.")
    parser.add_argument("--input_path", type=str, default=None, help="Text file with one name per line.")
    parser.add_argument("--language", type=str, default="auto", help="ISO 639-1 source language, or 'auto'.")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per name.")
    parser.add_argument("--by_syllable", action="store_true", help="Break given names down per syllable.")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    names = list(args.names)
    if args.input_path:
        with open(args.input_path, encoding="utf-8") as f:
            names.extend(line.strip() for line in f if line.strip())
    if not names:
        parser.error("no names given")

    converter = KoreanNameConverter()
    failures = 0
    for name in names:
        outcome = converter.try_convert(name, args.language, breakdown_by_syllable=args.by_syllable)
        if not outcome.success or outcome.result is None:
            failures += 1
            if args.json:
                print(json.dumps({"name": name, "error": outcome.error_message}, ensure_ascii=False))
            else:
                print(f"{name}\tERROR: {outcome.error_message}", file=sys.stderr)
            continue

        if args.json:
            print(json.dumps({"name": name, **outcome.result.to_dict()}, ensure_ascii=False))
        else:
            print(f"{name}\t{outcome.result.korean_name}\t{outcome.result.romanization}")

    sys.exit(1 if failures else 0)
