"""
Build the flat measurement CSV (ECAV x V-Dem x QoG).

Example:
  python scripts/prepare_measurement_data.py \
      --ecav "ECAV datatset_Version 1.2.xls" \
      --vdem V-Dem-CY-Full+Others-v12.csv \
      --qog qog_std_ts_jan23.csv \
      --out outputs/measurement-df.csv
"""

import argparse
import logging
import sys

from prefnet.data.survey_prep import prepare_measurement_data
from prefnet.errors import PrefnetError


def main():
    parser = argparse.ArgumentParser(description="Join and recode the survey tables.")
    parser.add_argument("--ecav", required=True, help="ECAV events (.xls/.xlsx/.csv).")
    parser.add_argument("--vdem", required=True, help="V-Dem country-year CSV.")
    parser.add_argument("--qog", required=True, help="QoG time-series CSV.")
    parser.add_argument("--out", default="outputs/measurement-df.csv")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        result = prepare_measurement_data(args.ecav, args.vdem, args.qog, out_path=args.out)
    except PrefnetError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(
        f"[stats] joined={result.rows_joined}, dropped={result.rows_dropped}, "
        f"written={len(result.frame)}"
    )
    print("[save] Saved to:", args.out)


if __name__ == "__main__":
    main()
