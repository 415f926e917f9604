#!/usr/bin/env python3
"""
Interactive CLI demo for Frame Data Service.

Loads a directory of CSV sheets and answers "<character>: <move>" queries.
Type "reload" to re-import the data, "quit" to exit.
"""
import logging
import sys

# Imports assume PYTHONPATH=src is set (e.g., PYTHONPATH=src python demo/cli_demo.py)
from frame_data.canonicalizer import MoveCanonicalizer
from frame_data.config_loader import load_config_from_env
from frame_data.exceptions import FrameDataError
from frame_data.service import FrameDataService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def print_banner(service):
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Frame Data Service - Interactive CLI Demo")
    print("=" * 60)
    names = ", ".join(c.pretty_name for c in service.list_characters())
    print(f"\nCharacters: {names}")
    print("Ask as '<character>: <move>', e.g. 'Filia: 5lp'.")
    print("Type 'reload' to re-import data, 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def print_response(response):
    """Print formatted lookup response."""
    result = response.result
    print(f"\nTrace: {result.trace}")

    if not response.found:
        print(f"No move found for \"{result.original_query}\".")
        return

    if response.is_guess:
        print("Not sure what that move is, but here's my best guess:")
    print(MoveCanonicalizer.to_text(response.character, response.move))
    print("-" * 60)


def handle_query(service, line):
    if ":" not in line:
        print("Please use '<character>: <move>'.")
        return

    character, query = (part.strip() for part in line.split(":", 1))
    response = service.lookup(character, query)
    print_response(response)

    if not response.found:
        suggestions = service.suggest(character, query, limit=3)
        if suggestions:
            print("Did you mean: " + ", ".join(hit.alias for hit in suggestions))


def main():
    """Main CLI loop."""
    try:
        service = FrameDataService(load_config_from_env())
    except FrameDataError as e:
        print(f"\nFailed to initialize service: {e}")
        print("Please check FRAME_DATA_DIR and your data sheets.")
        return 1

    print_banner(service)

    while True:
        try:
            line = input("You: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!\n")
            break

        if not line:
            continue

        if line.lower() in ['quit', 'exit', 'q']:
            print("\nGoodbye!\n")
            break

        try:
            if line.lower() == "reload":
                summary = service.reload()
                print(f"New data successfully loaded (generation {summary.generation}).")
            else:
                handle_query(service, line)
        except FrameDataError as e:
            print(f"\nError: {e}")
            print("-" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
