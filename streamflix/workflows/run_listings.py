import argparse
import logging
import re
import sys
from typing import Optional

from streamflix.core.config import ConfigError, Settings, load_settings
from streamflix.providers.sample import SampleProvider
from streamflix.providers.tmdb import TMDBProvider
from streamflix.services.aggregator import AggregateResult, ListingAggregator
from streamflix.services.console import ConsoleSink
from streamflix.services.report import filter_titles, render_all, render_matches

log = logging.getLogger("streamflix")


def page_count(value):
    try:
        pages = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: {value!r}") from None
    if pages < 0:
        raise argparse.ArgumentTypeError(f"page count can't be negative: {pages}")
    return pages


def title_pattern(value):
    try:
        re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regular expression {value!r}: {e}") from None
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="streamflix",
        description="Fetch popular and now-playing movies from TMDB and print them three ways.",
    )
    parser.add_argument("--popular-pages", type=page_count, default=None, help="Popular pages to fetch (default 5)")
    parser.add_argument("--now-playing-pages", type=page_count, default=None, help="Now playing pages to fetch (default 1)")
    parser.add_argument("--pattern", type=title_pattern, default=None, help="Regex for the title filter (default '[dD]es')")
    parser.add_argument("--key-file", default=None, help="JSON file holding {\"api_key\": ...}")
    parser.add_argument("--offline", action="store_true", help="Use built-in sample data instead of TMDB")
    parser.add_argument("--no-progress", action="store_true", help="Hide the page progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def report(result: AggregateResult, console: ConsoleSink, pattern: str):
    console.write_block(render_all("POPULAR", result.popular))
    console.write_block(render_all("NOW PLAYING", result.now_playing))

    matches = filter_titles(result.popular, pattern)
    if matches:
        console.write_block(render_matches(matches))


def run_listings(settings: Settings, *, offline: bool = False, progress: bool = True,
                 console: Optional[ConsoleSink] = None) -> AggregateResult:
    """Aggregate both listings once and print the report."""
    console = console or ConsoleSink()
    source = SampleProvider() if offline else TMDBProvider(settings)
    try:
        aggregator = ListingAggregator(
            source,
            console,
            popular_pages=settings.popular_pages,
            now_playing_pages=settings.now_playing_pages,
            progress=progress,
        )
        result = aggregator.run()
    finally:
        source.close()

    if result.failures:
        log.warning(f"{len(result.failures)} page(s) could not be fetched")
    report(result, console, settings.filter_pattern)
    return result


def shutdown(console: ConsoleSink):
    console.write_line()
    console.write_line("Bye Bye")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.key_file, require_key=not args.offline)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    settings = settings.with_overrides(
        popular_pages=args.popular_pages,
        now_playing_pages=args.now_playing_pages,
        filter_pattern=args.pattern,
    )

    console = ConsoleSink()
    try:
        run_listings(settings, offline=args.offline, progress=not args.no_progress, console=console)
    except KeyboardInterrupt:
        console.write_line("\n🛑 Stopped by user.")
    finally:
        shutdown(console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
