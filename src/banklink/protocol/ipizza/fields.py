"""iPizza field names as they appear on the wire."""

from __future__ import annotations

from typing import Final

SERVICE_ID: Final[str] = "VK_SERVICE"
PROTOCOL_VERSION: Final[str] = "VK_VERSION"
SELLER_ID: Final[str] = "VK_SND_ID"
RECEIVER_ID: Final[str] = "VK_REC_ID"
ORDER_ID: Final[str] = "VK_STAMP"
SUM: Final[str] = "VK_AMOUNT"
CURRENCY: Final[str] = "VK_CURR"
SELLER_BANK_ACC: Final[str] = "VK_ACC"
SELLER_NAME: Final[str] = "VK_NAME"
RECEIVER_BANK_ACC: Final[str] = "VK_REC_ACC"
RECEIVER_NAME: Final[str] = "VK_REC_NAME"
ORDER_REFERENCE: Final[str] = "VK_REF"
DESCRIPTION: Final[str] = "VK_MSG"
SUCCESS_URL: Final[str] = "VK_RETURN"
CANCEL_URL: Final[str] = "VK_CANCEL"
USER_LANG: Final[str] = "VK_LANG"

# In bank notifications the payer is the sender.
SENDER_NAME: Final[str] = "VK_SND_NAME"
SENDER_BANK_ACC: Final[str] = "VK_SND_ACC"
TRANSACTION_ID: Final[str] = "VK_T_NO"
TRANSACTION_DATE: Final[str] = "VK_T_DATE"

SIGNATURE: Final[str] = "VK_MAC"
