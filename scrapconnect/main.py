"""Command-line front end for the ScrapConnect marketplace."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .cache import LocalCacheStore
from .config_loader import ApiSettings, ConfigBundle, build_api_settings, load_all_configs
from .gateway import LoadingIndicator, MockGateway, RemoteGateway
from .models import Category, GeoPoint, Listing, Role
from .notifier import Notifier
from .service import ReconcilingDataService
from .sheets_backend import SheetsBackend


def build_gateway(settings: ApiSettings, configs: ConfigBundle, loading: LoadingIndicator) -> RemoteGateway:
    if settings.use_mocks:
        return MockGateway(loading=loading)

    service_account = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON")
    spreadsheet_url = os.getenv("SHEETS_SPREADSHEET_ID")
    if service_account and spreadsheet_url:
        sheets = configs.api.get("sheets", {})
        return SheetsBackend.from_service_account(
            service_account,
            spreadsheet_url,
            users_name=os.getenv("SHEETS_NAME_USERS", sheets.get("users")),
            listings_name=os.getenv("SHEETS_NAME_LISTINGS", sheets.get("listings")),
            loading=loading,
        )
    return RemoteGateway(settings.base_url, settings.timeout_ms, loading=loading)


def build_service(configs: Optional[ConfigBundle] = None) -> ReconcilingDataService:
    configs = configs or load_all_configs()
    settings = build_api_settings(configs)
    gateway = build_gateway(settings, configs, LoadingIndicator())
    service = ReconcilingDataService(
        gateway=gateway,
        cache=LocalCacheStore(settings.cache_dir, settings.cache_record),
        seed_listings=configs.seed_listings,
        notifier=Notifier(),
        pricing=configs.pricing,
        country_code=settings.country_code,
    )
    service.hydrate()
    return service


def format_listing(listing: Listing) -> str:
    return (
        f"{listing.id}  {listing.category} - {listing.quantity:g} {listing.unit}  "
        f"{listing.estimated_price}  [{listing.status}]\n"
        f"    {listing.customer_name} ({listing.customer_phone}) | {listing.address}\n"
        f"    {listing.description} | posted {listing.posted_date}"
    )


def print_listings(listings: List[Listing], empty_message: str) -> None:
    if not listings:
        print(empty_message)
        return
    for listing in listings:
        print(format_listing(listing))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ScrapConnect marketplace")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Register with a phone number")
    register.add_argument("--phone", required=True, help="10-digit phone number")
    register.add_argument("--role", required=True, choices=[r.value for r in Role])

    post = sub.add_parser("post", help="Post a scrap listing")
    post.add_argument("--category", required=True, choices=[c.value for c in Category])
    post.add_argument("--quantity", required=True)
    post.add_argument("--unit", default="kg")
    post.add_argument("--address", required=True)
    post.add_argument("--description", default="")
    post.add_argument("--image", action="append", default=[], help="Image reference (repeatable)")

    price = sub.add_parser("price", help="Estimate a price range")
    price.add_argument("--category", required=True)
    price.add_argument("--quantity", required=True)

    locate = sub.add_parser("locate", help="Record the current location")
    locate.add_argument("--lat", type=float, required=True)
    locate.add_argument("--lng", type=float, required=True)

    complete = sub.add_parser("complete", help="Mark a listing as collected")
    complete.add_argument("--id", required=True)

    sub.add_parser("market", help="Show available listings")
    sub.add_parser("history", help="Show your listing or collection history")
    sub.add_parser("dashboard", help="Dealer dashboard")
    sub.add_parser("profile", help="Profile statistics")
    sub.add_parser("logout", help="Log out of this device")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, service: ReconcilingDataService) -> int:
    if args.command == "price":
        print(service.estimate_price(args.category, args.quantity))
    elif args.command == "register":
        user = service.register_user(args.phone, args.role)
        print(f"Welcome, {user.name} ({user.phone}) - {user.role.capitalize()} Account")
    elif args.command == "post":
        listing = service.submit_listing(
            category=args.category,
            quantity=args.quantity,
            unit=args.unit,
            address=args.address,
            description=args.description,
            image_refs=args.image,
        )
        print(format_listing(listing))
    elif args.command == "locate":
        service.set_location(GeoPoint(lat=args.lat, lng=args.lng))
        print(f"Location set to {args.lat:.4f}, {args.lng:.4f}")
    elif args.command == "complete":
        listing = service.complete_listing(args.id)
        if listing is None:
            print(f"Listing {args.id} not found")
            return 1
        print(format_listing(listing))
    elif args.command == "market":
        print_listings(service.marketplace_listings(), "No scrap items are currently available in your area.")
    elif args.command == "history":
        print_listings(service.user_history(), "No history yet.")
    elif args.command == "dashboard":
        stats = service.dealer_dashboard()
        print(f"Total collections: {stats['totalCollections']}")
        print(f"Monthly revenue:   ₹{stats['monthlyRevenue']}")
        print(f"Pending pickups:   {stats['pendingPickups']}")
        print_listings(stats["recentActivity"], "No recent activity")
    elif args.command == "profile":
        stats = service.profile_stats()
        print(f"Total listings:  {stats['totalListings']}")
        print(f"Completed deals: {stats['completedDeals']}")
        print(f"Total earnings:  ₹{stats['totalEarnings']}")
    elif args.command == "logout":
        service.logout()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    service = build_service()
    try:
        return run(args, service)
    except ValueError as e:
        print(f"  [ERROR] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
