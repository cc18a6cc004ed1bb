"""Mining service: fee estimation."""

from __future__ import annotations

from typing import Any

from noderpc.codec.decoders import model
from noderpc.models.mining import EstimateMode, EstimateSmartFee
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.services._validate import require_choice
from noderpc.services.exceptions import ValidationError

# Fee estimates exist for confirmation targets 1 through 1008 blocks.
MIN_CONF_TARGET = 1
MAX_CONF_TARGET = 1008


class MiningService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def estimate_smart_fee(
        self, conf_target: int, mode: EstimateMode | str | None = None
    ) -> EstimateSmartFee:
        """Estimate the fee rate for confirmation within *conf_target* blocks.

        Args:
            conf_target: Confirmation target in blocks (1-1008)
            mode: Estimation mode; the node's default when None

        Returns:
            :class:`EstimateSmartFee`; ``feerate`` is None if no estimate exists

        Raises:
            ValidationError: If the target or mode is invalid
        """
        if isinstance(conf_target, bool) or not isinstance(conf_target, int):
            raise ValidationError("Confirmation target must be an integer")
        if not MIN_CONF_TARGET <= conf_target <= MAX_CONF_TARGET:
            raise ValidationError(
                f"Confirmation target must be between {MIN_CONF_TARGET} and {MAX_CONF_TARGET}",
                details={"conf_target": conf_target},
            )

        params: list[Any] = [conf_target]
        if mode is not None:
            params.append(require_choice(mode, EstimateMode, "mode"))
        return self.dispatcher.call("estimatesmartfee", params, model(EstimateSmartFee))
