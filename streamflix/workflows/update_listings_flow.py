from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from streamflix.core.config import Settings, load_settings
from streamflix.providers.tmdb import TMDBProvider
from streamflix.services.aggregator import AggregateResult, ListingAggregator
from streamflix.services.console import ConsoleSink
from streamflix.workflows.run_listings import report


@task(name="Fetch Listings", retries=1, retry_delay_seconds=5, cache_policy=NO_CACHE)
def task_fetch_listings(settings: Settings, source=None) -> AggregateResult:
    # fetch failures are soft, so retries only cover unexpected crashes
    print("Fetching popular and now playing movies...")
    source = source or TMDBProvider(settings)
    try:
        return ListingAggregator(
            source,
            popular_pages=settings.popular_pages,
            now_playing_pages=settings.now_playing_pages,
        ).run()
    finally:
        source.close()


@task(name="Print Report", cache_policy=NO_CACHE)
def task_print_report(result: AggregateResult, pattern: str):
    report(result, ConsoleSink(), pattern)
    return result.to_dict()


@flow(name="StreamFlix Listings", log_prints=True, validate_parameters=False)
def update_listings_flow(settings: Settings = None, source=None):
    """
    Lightweight flow to fetch and print the current movie listings.
    Designed to run on a schedule.
    """
    settings = settings or load_settings()
    result = task_fetch_listings(settings, source)
    return task_print_report(result, settings.filter_pattern)


if __name__ == "__main__":
    update_listings_flow()
