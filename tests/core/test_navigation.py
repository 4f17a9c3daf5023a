"""Tests for the post-submission redirect and upload banner contract."""

from estate_portal.core.navigation import (
    build_success_redirect,
    consume_upload_status,
)


def test_build_success_redirect():
    url = build_success_redirect("/listings", "prop-1")

    assert url == "/listings?uploadStatus=success&propertyId=prop-1"


def test_consume_reads_banner_and_strips_params():
    banner, cleaned = consume_upload_status("/listings?uploadStatus=success&propertyId=prop-1")

    assert banner is not None
    assert banner.property_id == "prop-1"
    assert banner.message == "Your property has been submitted successfully and is pending review."
    assert cleaned == "/listings"


def test_consume_is_one_shot():
    _, cleaned = consume_upload_status("/listings?uploadStatus=success&propertyId=prop-1")
    banner, again = consume_upload_status(cleaned)

    assert banner is None
    assert again == cleaned


def test_consume_keeps_unrelated_params():
    banner, cleaned = consume_upload_status(
        "https://portal.example.com/listings?page=2&uploadStatus=success&propertyId=p&sort=price"
    )

    assert banner.property_id == "p"
    assert cleaned == "https://portal.example.com/listings?page=2&sort=price"


def test_non_success_status_shows_no_banner_but_is_stripped():
    banner, cleaned = consume_upload_status("/listings?uploadStatus=error&propertyId=p")

    assert banner is None
    assert cleaned == "/listings"


def test_banner_without_property_id():
    banner, _ = consume_upload_status("/listings?uploadStatus=success")

    assert banner is not None
    assert banner.property_id is None

