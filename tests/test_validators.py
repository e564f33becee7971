"""
Tests for outlet WhatsApp number validation.
"""

import pytest
from pydantic import ValidationError

import storefront.config as config_mod
from storefront.schemas.catalog import Outlet
from storefront.validators import normalize_whatsapp_number


class TestNormalizeWhatsappNumber:

    def test_international_number(self):
        assert normalize_whatsapp_number("+60 12-345 6789") == "+60123456789"

    def test_local_number_uses_default_region(self):
        """Numbers without a country code are read in the configured region."""
        assert normalize_whatsapp_number("012-345 6789") == "+60123456789"

    def test_region_override(self, monkeypatch):
        monkeypatch.setattr(config_mod, "DEFAULT_PHONE_REGION", "US")
        assert normalize_whatsapp_number("(201) 555-1234") == "+12015551234"
        assert normalize_whatsapp_number("201.555.1234", "US") == "+12015551234"

    def test_blank_number(self):
        assert normalize_whatsapp_number("") == ""
        assert normalize_whatsapp_number("   ") == ""

    def test_too_short_number_rejected(self):
        with pytest.raises(ValueError):
            normalize_whatsapp_number("12345")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            normalize_whatsapp_number("call me")


class TestOutletNumber:

    def test_outlet_stores_e164(self):
        outlet = Outlet(id="o", name="Outlet", whatsappNumber="012 345 6789")
        assert outlet.whatsapp_number == "+60123456789"

    def test_outlet_rejects_invalid_number(self):
        with pytest.raises(ValidationError):
            Outlet(id="o", name="Outlet", whatsapp_number="555")
