#!/usr/bin/env python3
"""
Demo script for the distance matrix client.

This script runs a small matrix against the Google Distance Matrix API,
prints the results table and shows the cache saving a second request.

Requires GOOGLE_MAPS_API_KEY in the environment (or a .env file).
"""

import time

from distance_matrix import DistanceMatrixClient, DistanceMatrixError, InMemoryCacheRepository
from distance_matrix.handlers import build_rows


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_basic_matrix(client: DistanceMatrixClient) -> None:
    """Demonstrate a basic calculation and the results table."""
    print_section("Basic Matrix")

    origins = ["1600 Amphitheatre Parkway, Mountain View, CA", "San Francisco, CA"]
    destinations = ["Googleplex, Mountain View, CA", "San Jose, CA"]

    response = client.calculate(origins, destinations)

    print(f"\n{'Origin':<30} {'Destination':<30} {'Distance':<12} {'Duration':<12} Status")
    print("-" * 100)
    for row in build_rows(response):
        print(
            f"{row.origin[:29]:<30} "
            f"{row.destination[:29]:<30} "
            f"{row.distance:<12} "
            f"{row.duration:<12} "
            f"{row.status}"
        )

    if response.is_complete():
        print(
            f"\nSuccessfully calculated {len(response.all_distances())} routes between "
            f"{len(response.origins)} origins and {len(response.destinations)} destinations."
        )

    nearest = response.find_nearest_destination(0)
    if nearest is not None:
        print(f"\nNearest destination to origin 0: {nearest.destination} ({nearest.distance['text']})")


def demo_cache(client: DistanceMatrixClient) -> None:
    """Demonstrate the second identical request being served from cache."""
    print_section("Caching")

    for attempt in ("first", "second"):
        start = time.time()
        client.calculate("New York, NY", "Boston, MA")
        duration_ms = (time.time() - start) * 1000
        print(f"  {attempt} request: {duration_ms:.2f}ms")

    client.set_mode("walking")
    start = time.time()
    client.calculate("New York, NY", "Boston, MA")
    print(f"  walking request (new cache key): {(time.time() - start) * 1000:.2f}ms")
    client.reset_options()

    cleared = client.clear_cache()
    print(f"\n  Cache cleared: {cleared}")


def main() -> None:
    """Run all demos."""
    print("\n🚀 Distance Matrix Demo")
    print("=" * 70)

    client = DistanceMatrixClient.create(repository=InMemoryCacheRepository(), enable_cache=True)

    try:
        demo_basic_matrix(client)
        demo_cache(client)

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except DistanceMatrixError as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure GOOGLE_MAPS_API_KEY is set to a key with the Distance Matrix API enabled.")
    finally:
        client.close()


if __name__ == "__main__":
    main()
