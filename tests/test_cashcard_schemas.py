"""
Cash Card Service — Schema & Serialization Tests
==================================================

What:  JSON shape of CashCard, input handling of CashCardRequest, and the
       sort/page parsing helpers.
"""

import json
from typing import List

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cashcard.exceptions import ValidationError
from cashcard.schemas.cashcard import (
    MAX_AMOUNT,
    MAX_PAGE_INDEX,
    CashCard,
    CashCardRequest,
    PageRequest,
    SortOrder,
    parse_sort,
)

CARDS = [
    CashCard(id=99, amount=123.45, owner="Bob"),
    CashCard(id=100, amount=1.00, owner="Bob"),
    CashCard(id=101, amount=150.00, owner="Bob"),
    CashCard(id=102, amount=25.00, owner="Joe"),
    CashCard(id=103, amount=5.00, owner="Joe"),
]

card_list = TypeAdapter(List[CashCard])


class TestCashCardSerialization:

    def test_single_card_serializes_to_exact_document(self):
        card = CashCard(id=99, amount=123.45, owner="Bob")

        assert card.model_dump_json() == '{"id":99,"amount":123.45,"owner":"Bob"}'

    def test_single_card_deserializes(self):
        expected = """
            {
                "id": 99,
                "amount": 123.45,
                "owner": "Bob"
            }
        """
        card = CashCard.model_validate_json(expected)

        assert card == CashCard(id=99, amount=123.45, owner="Bob")
        assert card.id == 99
        assert card.amount == 123.45
        assert card.owner == "Bob"

    def test_list_serializes_in_order(self):
        document = json.loads(card_list.dump_json(CARDS))

        assert document == [
            {"id": 99, "amount": 123.45, "owner": "Bob"},
            {"id": 100, "amount": 1.0, "owner": "Bob"},
            {"id": 101, "amount": 150.0, "owner": "Bob"},
            {"id": 102, "amount": 25.0, "owner": "Joe"},
            {"id": 103, "amount": 5.0, "owner": "Joe"},
        ]

    def test_list_deserializes(self):
        expected = """
            [
              {"id": 99, "amount": 123.45, "owner": "Bob" },
              {"id": 100, "amount": 1.00, "owner": "Bob" },
              {"id": 101, "amount": 150.00, "owner": "Bob" },
              {"id": 102, "amount":  25.00, "owner": "Joe" },
              {"id": 103, "amount":  5.00, "owner": "Joe" }
            ]
        """
        assert card_list.validate_json(expected) == CARDS


class TestCashCardValue:

    def test_equality_is_structural(self):
        assert CashCard(id=1, amount=2.5, owner="Bob") == CashCard(id=1, amount=2.5, owner="Bob")
        assert CashCard(id=1, amount=2.5, owner="Bob") != CashCard(id=1, amount=2.5, owner="Joe")

    def test_is_immutable(self):
        card = CashCard(id=1, amount=2.5, owner="Bob")

        with pytest.raises(PydanticValidationError):
            card.amount = 3.0

    def test_all_fields_are_required(self):
        with pytest.raises(PydanticValidationError):
            CashCard(amount=2.5, owner="Bob")


class TestCashCardRequest:

    def test_ignores_id_and_owner(self):
        request = CashCardRequest.model_validate({"id": 5, "amount": 250.0, "owner": "Mallory"})

        assert request.model_dump() == {"amount": 250.0}

    def test_amount_is_required(self):
        with pytest.raises(PydanticValidationError):
            CashCardRequest.model_validate({"owner": "Bob"})

    def test_rejects_non_finite_amounts(self):
        with pytest.raises(PydanticValidationError):
            CashCardRequest.model_validate({"amount": float("inf")})

    def test_amount_must_fit_the_stored_precision(self):
        assert CashCardRequest(amount=MAX_AMOUNT).amount == MAX_AMOUNT
        assert CashCardRequest(amount=-MAX_AMOUNT).amount == -MAX_AMOUNT

        with pytest.raises(PydanticValidationError):
            CashCardRequest(amount=1e10)
        with pytest.raises(PydanticValidationError):
            CashCardRequest(amount=-1e10)


class TestParseSort:

    def test_defaults_to_amount_ascending(self):
        assert parse_sort(None) == [SortOrder(field="amount", direction="asc")]
        assert parse_sort([]) == [SortOrder(field="amount", direction="asc")]

    def test_property_with_direction(self):
        assert parse_sort(["amount,desc"]) == [SortOrder(field="amount", direction="desc")]

    def test_direction_is_case_insensitive(self):
        assert parse_sort(["id,DESC"]) == [SortOrder(field="id", direction="desc")]

    def test_direction_defaults_to_ascending(self):
        assert parse_sort(["owner"]) == [SortOrder(field="owner", direction="asc")]

    def test_direction_applies_to_every_property_in_one_parameter(self):
        assert parse_sort(["amount,id,desc"]) == [
            SortOrder(field="amount", direction="desc"),
            SortOrder(field="id", direction="desc"),
        ]

    def test_repeated_parameters_keep_their_order(self):
        assert parse_sort(["owner", "amount,desc"]) == [
            SortOrder(field="owner", direction="asc"),
            SortOrder(field="amount", direction="desc"),
        ]

    def test_blank_parameters_are_skipped(self):
        assert parse_sort(["", " , "]) == [SortOrder(field="amount", direction="asc")]

    def test_unknown_property_is_rejected(self):
        with pytest.raises(ValidationError, match="Cannot sort by 'balance'"):
            parse_sort(["balance"])

    def test_unknown_direction_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_sort(["amount,sideways"])

    def test_lone_direction_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_sort(["desc"])


class TestPageRequest:

    def test_offset(self):
        assert PageRequest(page=3, size=20).offset == 60

    def test_negative_page_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            PageRequest(page=-1, size=20)

    def test_zero_size_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            PageRequest(page=0, size=0)

    def test_page_index_is_bounded(self):
        assert PageRequest(page=MAX_PAGE_INDEX, size=1).offset == MAX_PAGE_INDEX

        with pytest.raises(PydanticValidationError):
            PageRequest(page=MAX_PAGE_INDEX + 1, size=1)
