"""Tests for ServiceListingService."""
import pytest

from waasha.core.exceptions import (
    AccountNotFoundError,
    InvalidAccountKindError,
    ServiceNotFoundError,
    ValidationError,
)


def test_categories_mirror_the_catalog(listing_service):
    categories = {entry.id: entry for entry in listing_service.list_categories()}

    assert set(categories) == {"hair", "nails", "facials", "massages", "makeup", "carwash", "training"}
    assert categories["carwash"].category == "Carwash"
    assert categories["makeup"].category == "Hair"
    assert categories["hair"].name == "Hair Service"


def test_create_and_list_listings(listing_service, provider_account):
    first = listing_service.create_listing(
        provider_id=provider_account.id,
        title="Box Braids",
        category="Hair",
        price=80.0,
        duration_minutes=240,
    )
    second = listing_service.create_listing(
        provider_id=provider_account.id,
        title="Gel Manicure",
        category="Nails",
        price=30.0,
        description="  Any colour  ",
    )

    listings = listing_service.list_listings(provider_account.id)

    assert [listing.id for listing in listings] == [first.id, second.id]
    assert listings[1].description == "Any colour"
    assert listings[1].available is True
    assert listing_service.get_listing(first.id).title == "Box Braids"


@pytest.mark.parametrize(
    "title,category,price,duration",
    [
        ("", "Hair", 10.0, None),
        ("Braids", " ", 10.0, None),
        ("Braids", "Hair", 0, None),
        ("Braids", "Hair", -5.0, None),
        ("Braids", "Hair", 10.0, 0),
        ("Braids", "Hair", float("inf"), None),
        ("Braids", "Hair", float("nan"), None),
        ("Braids", "Hair", 10.0, 2**63),
    ],
)
def test_invalid_listing_is_rejected(listing_service, provider_account, title, category, price, duration):
    with pytest.raises(ValidationError):
        listing_service.create_listing(
            provider_id=provider_account.id,
            title=title,
            category=category,
            price=price,
            duration_minutes=duration,
        )


def test_clients_cannot_add_listings(listing_service, client_account):
    with pytest.raises(InvalidAccountKindError):
        listing_service.create_listing(provider_id=client_account.id, title="Braids", category="Hair", price=10.0)


def test_listings_for_unknown_account(listing_service):
    with pytest.raises(AccountNotFoundError):
        listing_service.list_listings(31337)


def test_missing_listing(listing_service):
    with pytest.raises(ServiceNotFoundError):
        listing_service.get_listing(31337)


def test_rejected_price_leaves_nothing_stored(listing_service, provider_account):
    with pytest.raises(ValidationError) as exc:
        listing_service.create_listing(
            provider_id=provider_account.id, title="Braids", category="Hair", price=float("inf")
        )

    assert exc.value.message == "Price must be greater than 0."
    assert listing_service.list_listings(provider_account.id) == []
