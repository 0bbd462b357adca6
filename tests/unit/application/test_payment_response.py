"""Unit tests for interpreting bank notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from banklink.application.ipizza import IPizzaProtocol
from banklink.application.use_cases.payment_response import (
    parse_amount,
    parse_transaction_date,
)
from banklink.domain.entities import MerchantConfig, PaymentStatus
from banklink.domain.errors import (
    InvalidFieldValueError,
    MissingFieldError,
    UnsupportedServiceError,
)
from banklink.protocol.ipizza import fields as f
from banklink.protocol.ipizza import services
from tests.helpers.bank import BankSimulator
from tests.helpers.tamper import tamper_b64_preserve_validity, tamper_text

KeyPair = tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]

# The service id selects the field list itself, so it is tampered separately.
SIGNED_SUCCESS_VALUES = [
    name for name in services.PAYMENT_SUCCESS_FIELDS if name != f.SERVICE_ID
]
SIGNED_CANCEL_VALUES = [
    name for name in services.PAYMENT_CANCEL_FIELDS if name != f.SERVICE_ID
]

FINANCIAL_ATTRIBUTES = (
    "sum",
    "currency",
    "sender_name",
    "sender_bank_account",
    "transaction_id",
    "transaction_date",
)


def assert_no_financial_fields(response) -> None:
    for name in FINANCIAL_ATTRIBUTES:
        assert getattr(response, name) is None, name


class TestSuccessNotification:
    def test_valid_success(self, protocol: IPizzaProtocol, bank: BankSimulator) -> None:
        data = bank.success_notification()
        response = protocol.handle_response(data)

        assert response.status is PaymentStatus.SUCCESS
        assert response.is_successful()
        assert response.order_id == "123"
        assert response.sum == Decimal("10.50")
        assert response.currency == "EUR"
        assert response.sender_name == "Mari Maasikas"
        assert response.sender_bank_account == "EE471000001020145685"
        assert response.transaction_id == "9876"
        assert response.transaction_date == datetime(2026, 10, 19)
        assert dict(response.raw_data) == data

    def test_corrupted_signature_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification()
        data[f.SIGNATURE] = tamper_b64_preserve_validity(data[f.SIGNATURE])

        response = protocol.handle_response(data)

        assert response.status is PaymentStatus.ERROR
        assert response.order_id == "123"
        assert_no_financial_fields(response)

    @pytest.mark.parametrize("field_name", SIGNED_SUCCESS_VALUES)
    def test_tampered_field_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator, field_name: str
    ) -> None:
        data = bank.success_notification()
        data[field_name] = tamper_text(data[field_name])

        response = protocol.handle_response(data)

        assert response.status is PaymentStatus.ERROR
        assert_no_financial_fields(response)

    def test_unsigned_field_change_is_accepted(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification()
        data[f.USER_LANG] = "ENG"
        assert protocol.handle_response(data).status is PaymentStatus.SUCCESS

    @pytest.mark.parametrize("signature", ["not base64!", "", None])
    def test_malformed_signature_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator, signature: object
    ) -> None:
        data = bank.success_notification()
        data[f.SIGNATURE] = signature
        assert protocol.handle_response(data).status is PaymentStatus.ERROR

    def test_missing_signature_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification()
        del data[f.SIGNATURE]
        assert protocol.handle_response(data).status is PaymentStatus.ERROR

    def test_signed_by_another_key_is_error(
        self,
        protocol: IPizzaProtocol,
        merchant: MerchantConfig,
        merchant_key_pair: KeyPair,
    ) -> None:
        forger = BankSimulator(merchant_key_pair[0], merchant)
        response = protocol.handle_response(forger.success_notification())
        assert response.status is PaymentStatus.ERROR
        assert_no_financial_fields(response)

    def test_numeric_values(self, protocol: IPizzaProtocol, bank: BankSimulator) -> None:
        data = bank.success_notification(**{f.ORDER_ID: 123, f.TRANSACTION_ID: 9876})
        response = protocol.handle_response(data)
        assert response.status is PaymentStatus.SUCCESS
        assert response.order_id == "123"
        assert response.transaction_id == "9876"

    def test_iso_transaction_date(self, protocol: IPizzaProtocol, bank: BankSimulator) -> None:
        data = bank.success_notification(**{f.TRANSACTION_DATE: "2026-10-19T12:30:00"})
        response = protocol.handle_response(data)
        assert response.transaction_date == datetime(2026, 10, 19, 12, 30)

    def test_unparseable_transaction_date_raises(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification(**{f.TRANSACTION_DATE: "yesterday"})
        with pytest.raises(InvalidFieldValueError, match=f.TRANSACTION_DATE):
            protocol.handle_response(data)

    def test_missing_hashed_field_raises(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification()
        del data[f.TRANSACTION_ID]
        with pytest.raises(MissingFieldError) as exc_info:
            protocol.handle_response(data)
        assert exc_info.value.field_name == f.TRANSACTION_ID

    def test_failed_verification_is_logged(
        self,
        protocol: IPizzaProtocol,
        bank: BankSimulator,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        data = bank.success_notification()
        data[f.SIGNATURE] = tamper_b64_preserve_validity(data[f.SIGNATURE])
        with caplog.at_level(logging.WARNING):
            protocol.handle_response(data)
        assert "Signature verification failed" in caplog.text
        assert data[f.SIGNATURE] not in caplog.text


class TestCancelNotification:
    def test_valid_cancel(self, protocol: IPizzaProtocol, bank: BankSimulator) -> None:
        response = protocol.handle_response(bank.cancel_notification())
        assert response.status is PaymentStatus.CANCEL
        assert response.order_id == "123"
        assert not response.is_successful()
        assert_no_financial_fields(response)

    def test_corrupted_cancel_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.cancel_notification()
        data[f.SIGNATURE] = tamper_b64_preserve_validity(data[f.SIGNATURE])
        assert protocol.handle_response(data).status is PaymentStatus.ERROR

    @pytest.mark.parametrize("field_name", SIGNED_CANCEL_VALUES)
    def test_tampered_cancel_field_is_error(
        self, protocol: IPizzaProtocol, bank: BankSimulator, field_name: str
    ) -> None:
        data = bank.cancel_notification()
        data[field_name] = tamper_text(data[field_name])
        assert protocol.handle_response(data).status is PaymentStatus.ERROR

    def test_cancel_ignores_extra_financial_fields(
        self, protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.cancel_notification(**{f.SUM: "10.50", f.CURRENCY: "EUR"})
        response = protocol.handle_response(data)
        assert response.status is PaymentStatus.CANCEL
        assert_no_financial_fields(response)


class TestUnsupportedNotification:
    @pytest.mark.parametrize("service_id", ["1001", "9999", "1101 "])
    def test_non_payment_service_raises(
        self, protocol: IPizzaProtocol, bank: BankSimulator, service_id: str
    ) -> None:
        data = bank.success_notification()
        data[f.SERVICE_ID] = service_id
        with pytest.raises(UnsupportedServiceError, match="Unsupported service"):
            protocol.handle_response(data)

    def test_missing_service_id_raises(self, protocol: IPizzaProtocol) -> None:
        with pytest.raises(MissingFieldError) as exc_info:
            protocol.handle_response({f.ORDER_ID: "123"})
        assert exc_info.value.field_name == f.SERVICE_ID


class TestParsers:
    def test_parse_transaction_date(self) -> None:
        assert parse_transaction_date("01.02.2026") == datetime(2026, 2, 1)
        assert parse_transaction_date(" 2026-02-01 ") == datetime(2026, 2, 1)

    def test_parse_amount(self) -> None:
        assert parse_amount("10.50") == Decimal("10.50")
        with pytest.raises(InvalidFieldValueError):
            parse_amount("ten")
        with pytest.raises(InvalidFieldValueError):
            parse_amount("NaN")


class TestCharsetMismatch:
    """Notifications that cannot be encoded in the configured charset."""

    @pytest.fixture
    def latin1_protocol(
        self,
        merchant: MerchantConfig,
        merchant_key_pair: KeyPair,
        bank_key_pair: KeyPair,
    ) -> IPizzaProtocol:
        return IPizzaProtocol(
            merchant, merchant_key_pair[0], bank_key_pair[1], charset="iso-8859-1"
        )

    def test_unencodable_success_is_error(
        self, latin1_protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.success_notification()
        data[f.SENDER_NAME] = "Forged €"

        response = latin1_protocol.handle_response(data)

        assert response.status is PaymentStatus.ERROR
        assert_no_financial_fields(response)

    def test_unencodable_cancel_is_error(
        self, latin1_protocol: IPizzaProtocol, bank: BankSimulator
    ) -> None:
        data = bank.cancel_notification()
        data[f.DESCRIPTION] = "€"
        assert latin1_protocol.handle_response(data).status is PaymentStatus.ERROR

    def test_latin1_notification_verifies(
        self,
        latin1_protocol: IPizzaProtocol,
        bank_key_pair: KeyPair,
        merchant: MerchantConfig,
    ) -> None:
        latin1_bank = BankSimulator(bank_key_pair[0], merchant, charset="iso-8859-1")
        data = latin1_bank.success_notification(**{f.SENDER_NAME: "Jüri Õun"})
        response = latin1_protocol.handle_response(data)
        assert response.status is PaymentStatus.SUCCESS
        assert response.sender_name == "Jüri Õun"
