import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from dispatch import DispatchError, NoDriverAvailableError, NotFoundError, TripDispatcher

# Data directory can be set in .env:
# RIDESHARE_DATA_DIR=/path/to/records
load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "sampledata")


def resolve_data_dir(cli_value: Optional[str] = None) -> str:
    """
    --data-dir wins, then RIDESHARE_DATA_DIR, then the bundled sample data.
    """
    return cli_value or os.getenv("RIDESHARE_DATA_DIR") or DEFAULT_DATA_DIR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Request trips against a ride-dispatch dataset.")
    parser.add_argument("passenger_ids", nargs="*", type=int, help="passengers requesting a trip, in order")
    parser.add_argument("--data-dir", default=None, help="directory holding passengers.csv, drivers.csv and trips.csv")
    parser.add_argument("--verbose", action="store_true", help="log at DEBUG level")
    return parser


def run_simulation(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    data_dir = resolve_data_dir(args.data_dir)
    print("=== STARTING DISPATCH SIMULATION ===")

    try:
        dispatcher = TripDispatcher.from_directory(data_dir)
    except DispatchError as exc:
        print(f"[FAILED] Could not load records from '{data_dir}': {exc}")
        return 1

    print(f"Loaded {len(dispatcher.passengers)} Passengers, {len(dispatcher.drivers)} Drivers "
          f"and {len(dispatcher.trips)} Trips.\n")

    failures = 0
    for passenger_id in args.passenger_ids:
        try:
            trip = dispatcher.request_trip(passenger_id)
        except (NotFoundError, NoDriverAvailableError) as exc:
            failures += 1
            print(f"[FAILED] Passenger {passenger_id} -> {exc}")
            continue

        print(f"[SUCCESS] Trip {trip.id}: Passenger {trip.passenger.name} -> "
              f"{trip.driver.name} (started {trip.start_time:%Y-%m-%d %H:%M:%S %Z})")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Available drivers left: {len(dispatcher.find_available_drivers())} / {len(dispatcher.drivers)}")
    return 1 if failures else 0


def main() -> None:
    sys.exit(run_simulation())


if __name__ == "__main__":
    main()
