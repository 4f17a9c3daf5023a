"""Tests for listing form rules and report input mapping."""

from datetime import date

import pydantic
import pytest

from estate_portal.models.auth import SignUpRequest
from estate_portal.models.property import (
    ListingType,
    Property,
    PropertyForm,
    PropertyType,
    RejectPropertyRequest,
    map_listing_type,
    map_property_type,
)
from estate_portal.models.report import (
    DEFAULT_ADDRESS,
    DEFAULT_CITY,
    DEFAULT_DESCRIPTION,
    DEFAULT_STATE,
    DEFAULT_TITLE,
    DEFAULT_ZIP,
    GenerateReportInput,
    PropertyReport,
    ReportType,
)


def _errors(exc_info) -> dict:
    return {str(error["loc"][0]): error["msg"] for error in exc_info.value.errors()}


def test_valid_form_normalizes_values(valid_form_data):
    form = PropertyForm.model_validate(valid_form_data)

    assert form.property_type is PropertyType.SINGLE_FAMILY
    assert form.state == "TX"


@pytest.mark.parametrize(
    "field, value",
    [
        ("title", "Too short"),
        ("description", "Not long enough to describe anything."),
        ("price", 0),
        ("bedrooms", 21),
        ("zipCode", "7870"),
        ("city", "Austin 2"),
        ("contactPhone", "call me"),
        ("yearBuilt", 1799),
    ],
)
def test_form_field_rules(valid_form_data, field, value):
    valid_form_data[field] = value

    with pytest.raises(pydantic.ValidationError) as exc_info:
        PropertyForm.model_validate(valid_form_data)

    assert field in _errors(exc_info)


def test_listing_type_must_be_sale_or_rent(valid_form_data):
    valid_form_data["listingType"] = "SOLD"

    with pytest.raises(pydantic.ValidationError) as exc_info:
        PropertyForm.model_validate(valid_form_data)

    assert "Please select a listing type" in _errors(exc_info)["listingType"]


def test_year_built_may_be_next_year(valid_form_data):
    valid_form_data["yearBuilt"] = date.today().year + 1

    assert PropertyForm.model_validate(valid_form_data).year_built == date.today().year + 1


def test_unknown_state_rejected(valid_form_data):
    valid_form_data["state"] = "ZZ"

    with pytest.raises(pydantic.ValidationError) as exc_info:
        PropertyForm.model_validate(valid_form_data)

    assert "Please select a state" in _errors(exc_info)["state"]


def test_invalid_email_rejected(valid_form_data):
    valid_form_data["contactEmail"] = "jane.example.com"

    with pytest.raises(pydantic.ValidationError):
        PropertyForm.model_validate(valid_form_data)


def test_create_input_drops_empty_optionals(valid_form_data):
    del valid_form_data["yearBuilt"]
    form = PropertyForm.model_validate(valid_form_data)

    payload = form.to_create_input(["k1", "k2", "k3", "k4"])

    assert payload["images"] == ["k1", "k2", "k3", "k4"]
    assert payload["zipCode"] == "78701"
    assert payload["listingType"] == "FOR_SALE"
    assert "yearBuilt" not in payload
    assert "lotSize" not in payload


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Apartment", PropertyType.CONDO),
        ("villa", PropertyType.SINGLE_FAMILY),
        ("TOWNHOUSE", PropertyType.TOWNHOUSE),
        ("castle", PropertyType.OTHER),
        (None, PropertyType.OTHER),
    ],
)
def test_map_property_type(label, expected):
    assert map_property_type(label) is expected


def test_map_listing_type():
    assert map_listing_type("For Rent") is ListingType.FOR_RENT
    assert map_listing_type("auction") is ListingType.FOR_SALE


def test_report_input_fills_defaults_for_sparse_listing():
    report_input = GenerateReportInput.from_listing(
        {"id": "p1", "features": ["Pool"]},
        report_type=ReportType.CUSTOM,
        cognito_user_id="u1",
    )

    assert report_input.title == DEFAULT_TITLE
    assert report_input.description == DEFAULT_DESCRIPTION
    assert report_input.address == DEFAULT_ADDRESS
    assert report_input.city == DEFAULT_CITY
    assert report_input.state == DEFAULT_STATE
    assert report_input.zip_code == DEFAULT_ZIP
    assert report_input.price == 0
    assert report_input.amenities == ["Pool"]
    assert report_input.property_type is PropertyType.OTHER
    assert report_input.listing_type is ListingType.FOR_SALE
    assert report_input.include_detailed_amenities is True


def test_report_input_from_property(sample_property):
    report_input = GenerateReportInput.from_listing(sample_property)

    assert report_input.title == sample_property.title
    assert report_input.square_feet == 1800
    assert report_input.year_built == 2004


def test_synchronous_report_detection():
    assert PropertyReport(report_id="r1").is_synchronous
    assert not PropertyReport(report_id="r1", execution_arn="arn").is_synchronous
    assert not PropertyReport().is_synchronous


def test_property_accepts_camel_case_payload():
    listing = Property.model_validate({"id": "p1", "title": "Home", "zipCode": "78701", "isPublic": True})

    assert listing.zip_code == "78701"
    assert listing.is_public


def test_reject_reason_is_stripped():
    assert RejectPropertyRequest(reason="  Blurry  ").reason == "Blurry"


def test_sign_up_rejects_bad_name():
    with pytest.raises(pydantic.ValidationError):
        SignUpRequest(
            first_name="J4ne",
            last_name="Doe",
            contact_number="5125550100",
            email="jane@example.com",
            password="Secret1!",
            confirm_password="Secret1!",
        )
