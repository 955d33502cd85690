#!/usr/bin/env python3
"""
Places Export - Command Line Interface

Usage:
    python cli.py --service-type "dentist" --location "Denver, CO"
    python cli.py -s "gym" -l "New York" --output gyms.xlsx -v
    python cli.py -s "pharmacy" -l "90210" --csv --max-pages 1
"""
import argparse
import logging
import sys
from pathlib import Path

from places_export import (
    InvalidInput,
    MAX_PAGES,
    PlacesExportError,
    SearchRequest,
    create_client,
    fetch_all_places,
    places_to_dataframe,
    export_to_excel,
    export_to_csv,
    get_summary_stats,
)
from places_export.config import LOG_LEVEL, get_api_key


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find businesses by service type and export them to a spreadsheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -s "dentist" -l "Denver, CO"
  %(prog)s -s "gym" -l "NYC" -o gyms.xlsx
  %(prog)s --service-type "hotel" --location "90210" --csv
        """
    )

    parser.add_argument(
        '-s', '--service-type',
        required=True,
        help='Service type keyword (e.g., "restaurant", "dentist")'
    )

    parser.add_argument(
        '-l', '--location',
        required=True,
        help='Search location (address, city, ZIP code)'
    )

    parser.add_argument(
        '-o', '--output',
        default='places.xlsx',
        help='Output file path (default: places.xlsx)'
    )

    parser.add_argument(
        '--csv',
        action='store_true',
        help='Export as CSV instead of Excel'
    )

    parser.add_argument(
        '--max-pages',
        type=int,
        default=MAX_PAGES,
        help=f'Maximum number of result pages to fetch (default: {MAX_PAGES})'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show detailed progress information'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main CLI function."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    # Check API key
    api_key = get_api_key()
    if not api_key:
        print("Error: GOOGLE_MAPS_API_KEY not found in environment variables.")
        print("Please set it in your .env file or export it as an environment variable.")
        sys.exit(1)

    try:
        search_request = SearchRequest(args.service_type, args.location)
    except InvalidInput as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"\n🔍 Searching for '{search_request.service_type}' near: {search_request.location}")
    print()

    def progress_callback(page_number, count):
        if args.verbose:
            print(f"   Page {page_number}: {count} results")

    try:
        places = fetch_all_places(
            create_client(api_key),
            search_request.service_type,
            search_request.location,
            max_pages=args.max_pages,
            progress_callback=progress_callback
        )
    except PlacesExportError as e:
        print(f"Error during search: {e}")
        sys.exit(1)

    if not places:
        print("No places found. Try different search criteria.")
        sys.exit(0)

    print(f"✅ Found {len(places)} places")

    df = places_to_dataframe(places)
    stats = get_summary_stats(df)

    print(f"\n📊 Summary:")
    print(f"   Total places: {stats['total_places']}")
    print(f"   With phone: {stats['with_phone']}")
    print(f"   With website: {stats['with_website']}")
    print(f"   Average rating: {stats['avg_rating']}")

    output_path = Path(args.output)

    if args.csv:
        if output_path.suffix.lower() != '.csv':
            output_path = output_path.with_suffix('.csv')
        export_to_csv(df, output_path)
    else:
        if output_path.suffix.lower() != '.xlsx':
            output_path = output_path.with_suffix('.xlsx')
        export_to_excel(df, output_path)

    print(f"\n💾 Results saved to: {output_path}")

    if args.verbose:
        print("\n📝 Sample results:")
        print(df[['Name', 'Rating', 'Phone']].head().to_string(index=False))

    print("\n✨ Done!")


if __name__ == "__main__":
    main()
