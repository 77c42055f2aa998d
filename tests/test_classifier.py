"""Tests for field name classification."""

import pytest

from record_anonymizer.core.classifier import SemanticType, classify_field


class TestClassifyField:
    """Tests for classify_field."""

    @pytest.mark.parametrize(
        "field_name,expected",
        [
            ("firstName", SemanticType.NAME),
            ("LAST_NAME", SemanticType.NAME),
            ("email", SemanticType.EMAIL),
            ("contactMail", SemanticType.EMAIL),
            ("mobile", SemanticType.PHONE),
            ("homePhone", SemanticType.PHONE),
            ("street", SemanticType.ADDRESS),
            ("zipCode", SemanticType.ADDRESS),
            ("ssn", SemanticType.SSN),
            ("socialSecurity", SemanticType.SSN),
            ("creditCard", SemanticType.CREDIT_CARD),
            ("dob", SemanticType.DATE),
            ("birthday", SemanticType.DATE),
            ("customerId", SemanticType.ID),
            ("identifier", SemanticType.ID),
        ],
    )
    def test_keyword_matches(self, field_name, expected):
        assert classify_field(field_name) == expected

    def test_first_category_wins(self):
        """Earlier categories take priority over later ones."""
        assert classify_field("address_id") == SemanticType.ADDRESS
        assert classify_field("email_date") == SemanticType.EMAIL
        assert classify_field("card_id") == SemanticType.CREDIT_CARD

    def test_case_insensitive(self):
        assert classify_field("EMAIL") == classify_field("email")

    def test_unmatched_is_unknown(self):
        assert classify_field("age") == SemanticType.UNKNOWN
        assert classify_field("status") == SemanticType.UNKNOWN

    def test_none_and_empty_are_unknown(self):
        assert classify_field(None) == SemanticType.UNKNOWN
        assert classify_field("") == SemanticType.UNKNOWN


class TestSemanticType:
    """Tests for SemanticType."""

    def test_every_type_has_description(self):
        for semantic_type in SemanticType:
            assert semantic_type.description

    def test_value_matches_name(self):
        assert SemanticType.CREDIT_CARD.value == "CREDIT_CARD"
        assert SemanticType("UNKNOWN") is SemanticType.UNKNOWN
