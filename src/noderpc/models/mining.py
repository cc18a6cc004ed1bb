"""Result models for fee estimation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from noderpc.codec.amount import Amount


class EstimateMode(str, Enum):
    """Fee estimation mode accepted by ``estimatesmartfee``."""

    UNSET = "UNSET"
    ECONOMICAL = "ECONOMICAL"
    CONSERVATIVE = "CONSERVATIVE"


class EstimateSmartFee(BaseModel):
    """Result of ``estimatesmartfee``.

    Attributes:
        feerate: Estimated fee rate per kvB, None when no estimate exists
        errors: Reasons no estimate could be made
        blocks: Block target the estimate was found for
    """

    feerate: Amount | None = None
    errors: list[str] | None = None
    blocks: int

    model_config = ConfigDict(frozen=True, extra="ignore")
