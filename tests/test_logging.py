"""Tests for logging helpers"""
from storefront.logging import get_logger, sanitize_id_for_logging


def test_product_id_logged_whole():
    assert sanitize_id_for_logging(123456789) == "123456789"
    assert sanitize_id_for_logging(7) == "7"


def test_control_characters_escaped():
    assert sanitize_id_for_logging("7\nINFO - forged entry") == "7\\nINFO - forged entry"
    assert sanitize_id_for_logging("7\r\t\x00") == "7\\r\\t"


def test_missing_id():
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("") == "N/A"
    assert sanitize_id_for_logging(0) == "0"


def test_get_logger_is_cached():
    assert get_logger("storefront.cart.service") is get_logger("storefront.cart.service")
