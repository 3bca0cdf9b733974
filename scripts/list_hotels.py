"""Fetch the hotel catalog and print the list screen to the terminal."""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from hotel_catalog.config.settings import Settings
from hotel_catalog.core.logging import configure_logging
from hotel_catalog.hotels import Hotel, SortBy
from hotel_catalog.screen import HotelListController, HotelListSnapshot
from hotel_catalog.services import CatalogClient
from hotel_catalog.storage import JsonStore, save_thumbnails

logger = logging.getLogger(__name__)


def _format_row(index: int, snapshot: HotelListSnapshot) -> str:
    card = snapshot.cards[index]
    review = ""
    if card.review:
        review = f"{card.review.score_label} {card.review.description or ''} ({card.review.count_label})".strip()
    return " | ".join(
        [
            f"{index + 1:>3}",
            card.title,
            card.price_label or "-",
            card.distance_label,
            card.address or "-",
            review or "-",
        ]
    )


def print_snapshot(snapshot: HotelListSnapshot, *, limit: Optional[int] = None) -> None:
    heading = snapshot.title
    if snapshot.sort_mode:
        heading += f" (sorted by {snapshot.sort_mode.label.lower()})"
    print(heading)
    print("-" * len(heading))
    count = len(snapshot) if limit is None else min(limit, len(snapshot))
    for index in range(count):
        print(_format_row(index, snapshot))
    if count < len(snapshot):
        print(f"... {len(snapshot) - count} more")


async def run(
    settings: Settings,
    *,
    sort_mode: Optional[SortBy],
    limit: Optional[int],
    thumbnails: bool,
    thumbnail_dir: Path,
    output: Optional[Path],
    raw_output: Optional[Path] = None,
) -> int:
    renders: list[HotelListSnapshot] = []

    async with CatalogClient(
        catalog_url=settings.catalog_url,
        timeout=settings.request_timeout_s,
        user_agent=settings.user_agent,
    ) as client:
        async with HotelListController(
            client,
            on_render=renders.append,
            settings=settings,
            fetch_thumbnails=thumbnails,
        ) as controller:
            if limit is not None:
                controller.visible_rows = range(limit)
            if not await controller.load():
                logger.error("No hotels loaded from %s", settings.catalog_url)
                return 1
            if sort_mode is not None:
                controller.sort(sort_mode)

            if thumbnails:
                await controller.wait_for_thumbnails()
                shown = controller.hotels if limit is None else controller.hotels[:limit]
                save_thumbnails(shown, thumbnail_dir)
                controller.refresh()

            print_snapshot(controller.snapshot, limit=limit)
            logger.debug("Rendered %s snapshots", len(renders))

            if output is not None:
                store = JsonStore(output.parent)
                path = await store.write_snapshot(controller.snapshot, filename=output.name)
                logger.info("Wrote snapshot to %s", path)

            if raw_output is not None:
                store = JsonStore(raw_output.parent)
                path = await store.write(Hotel.from_iterable(controller.hotels), filename=raw_output.name)
                logger.info("Wrote %s decoded hotels to %s", len(controller.hotels), path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List hotels from the catalog endpoint")
    parser.add_argument(
        "--sort",
        type=SortBy.parse,
        default=None,
        help="Sort mode: recommended, lowest-price, star-rating or distance",
    )
    parser.add_argument("--limit", type=int, default=None, help="Only show (and fetch thumbnails for) the first N rows")
    parser.add_argument("--locale", default=None, help="Locale for names, addresses and review text")
    parser.add_argument("--url", default=None, help="Override the catalog URL")
    parser.add_argument("--thumbnails", action="store_true", help="Download thumbnails for the listed rows")
    parser.add_argument("--thumbnail-dir", type=Path, default=None, help="Where to write thumbnails")
    parser.add_argument("--output", type=Path, default=None, help="Write the rendered snapshot as JSON")
    parser.add_argument("--raw", type=Path, default=None, help="Write the decoded hotel records as JSON")
    parser.add_argument("--log-level", default=None)
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    overrides: dict[str, object] = {}
    if args.locale:
        overrides["locale"] = args.locale
    if args.url:
        overrides["catalog_url"] = args.url
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = Settings(**overrides)

    if args.limit is not None and args.limit <= 0:
        parser.error("--limit must be positive")

    configure_logging(settings.log_level, settings.log_dir)
    settings.ensure_directories()

    exit_code = asyncio.run(
        run(
            settings,
            sort_mode=args.sort,
            limit=args.limit,
            thumbnails=args.thumbnails,
            thumbnail_dir=args.thumbnail_dir or settings.download_dir / "thumbnails",
            output=args.output,
            raw_output=args.raw,
        )
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
