"""Tests for submit-time validation and payload building."""

import pytest


def _config(**values):
    from qrposter.core import default_poster_config
    return default_poster_config(("instagram", "website")).with_values(values)


def test_defaults_are_valid():
    from qrposter.core import validate
    assert validate(_config()) is None


@pytest.mark.parametrize("shop_name", ["", "   ", "\t\n"])
def test_blank_shop_name(shop_name):
    from qrposter.core import validate
    from qrposter.io import MissingShopName

    assert isinstance(validate(_config(shop_name=shop_name)), MissingShopName)


@pytest.mark.parametrize("upi_id", ["noatsign", "", "   "])
def test_upi_without_separator(upi_id):
    from qrposter.core import validate
    from qrposter.io import InvalidPaymentIdentifier

    assert isinstance(validate(_config(upi_id=upi_id)), InvalidPaymentIdentifier)


def test_shop_name_checked_before_upi():
    from qrposter.core import validate
    from qrposter.io import MissingShopName

    assert isinstance(validate(_config(shop_name=" ", upi_id="noatsign")), MissingShopName)


def test_other_fields_never_validated():
    from qrposter.core import validate

    config = _config(tagline="", primary_color="not a color", text_color="", instagram="", logo=None)
    assert validate(config) is None


def test_payload_trims_text_and_keeps_colors_verbatim():
    from qrposter.core import build_payload
    from qrposter.protocols import ConfiguratorConfig

    config = _config(
        shop_name="  Sharma Sweets ",
        upi_id=" sharma@upi ",
        tagline="  Since 1970  ",
        primary_color="#AbCdEf",
        instagram="  @sharma ",
        website=" sharma.in ",
    )
    payload = build_payload(config, ConfiguratorConfig())

    assert payload.data() == {
        "shop_name": "Sharma Sweets",
        "upi_id": "sharma@upi",
        "tagline": "Since 1970",
        "primary_color": "#AbCdEf",
        "text_color": "#000000",
        "instagram": "@sharma",
        "website_url": "sharma.in",
    }
    assert payload.files() is None


def test_payload_attaches_logo_under_configured_name():
    from qrposter.core import LogoFile, build_payload
    from qrposter.protocols import ConfiguratorConfig

    logo = LogoFile("logo.png", b"\x89PNG", "image/png")
    payload = build_payload(_config(logo=logo), ConfiguratorConfig(logo_field_name="brand_logo"))

    assert payload.files() == {"brand_logo": ("logo.png", b"\x89PNG", "image/png")}


def test_suggested_filename_collapses_whitespace():
    from qrposter.core import suggested_filename

    assert suggested_filename("Sharma  Sweets", "_MYQR.pdf") == "Sharma_Sweets_MYQR.pdf"
    assert suggested_filename(" Sharma \t Sweets ", "_MYQR.pdf") == "Sharma_Sweets_MYQR.pdf"
    assert suggested_filename("Tea/Coffee", "_MYQR.pdf") == "Tea_Coffee_MYQR.pdf"
