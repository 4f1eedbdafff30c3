#!/usr/bin/env python3
"""Book Lookup CLI - fetch page count, description and rating for a book."""
import argparse
import asyncio
import json
import logging
import sys
import textwrap

from tabulate import tabulate

from zana.book import BookService, RequestType
from zana.config import Config
from zana.errors import ClientError, MissingParameter
from zana.googlebooks import GoogleBooksClient
from zana.openlibrary import OpenLibraryClient
from zana.params import ParameterError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def lookup_book(args, config: Config):
    """Fetch a single book from the selected provider."""
    request_type = RequestType.from_str(args.type)

    async with BookService(
        GoogleBooksClient(config.googlebooks),
        OpenLibraryClient(config.openlibrary)
    ) as service:
        return await service.fetch_book(
            request_type,
            isbn=args.isbn,
            title=args.title,
            author=args.author
        )


def display_book(book, format_type: str):
    """Display book in specified format."""
    if format_type == "table":
        rating = book.rating
        rows = [
            ["Pages", book.page_count or "N/A"],
            ["Description", textwrap.fill(book.description, 60) if book.description else "None"],
            ["Rating", f"{rating.average_rating} ({rating.ratings_count} ratings)" if rating else "Not rated"],
        ]
        print("\n" + tabulate(rows, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps(book.to_dict(), indent=2))


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Lookup - Google Books & Open Library metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up by ISBN on Google Books
  %(prog)s --isbn 9780316387316

  # Look up by ISBN on Open Library
  %(prog)s --type openlibrary --isbn 9780316387316 --format json

  # Look up by title and author
  %(prog)s --title "The Blade Itself" --author "Joe Abercrombie"
        """
    )

    parser.add_argument(
        "--type",
        choices=[request_type.value for request_type in RequestType],
        default=RequestType.GOOGLE_BOOKS.value,
        help="Provider to query (default: googlebooks)"
    )
    parser.add_argument("--isbn", default="", help="ISBN, takes precedence over title and author")
    parser.add_argument("--title", default="", help="Book title")
    parser.add_argument("--author", default="", help="Book author")
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = Config.from_env()
        book = asyncio.run(lookup_book(args, config))
    except MissingParameter as e:
        parser.error(e.details)
    except ParameterError as e:
        logger.error(f"❌ Configuration error: {e} (set GOOGLE_BOOKS_API_KEY)")
        sys.exit(1)
    except ClientError as e:
        logger.error(f"❌ Could not retrieve book data: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)

    if book is None:
        logger.warning("Book not found")
        sys.exit(1)

    display_book(book, args.format)


if __name__ == "__main__":
    main()
