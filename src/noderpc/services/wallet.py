"""Wallet service.

Only the calls needed to move funds are exposed; amounts in and out are
:class:`~noderpc.codec.amount.Amount` so no value ever passes through a
float.
"""

from __future__ import annotations

from noderpc.codec.amount import Amount, decode_amount
from noderpc.codec.decoders import decode_str
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.services.exceptions import ValidationError


class WalletService:
    """Service for the node's loaded wallet.

    Example:
        >>> wallet = WalletService(dispatcher)
        >>> wallet.get_balance()
        Amount(units=150000000)
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def get_balance(self) -> Amount:
        """Return the wallet's trusted balance."""
        return self.dispatcher.call("getbalance", decoder=decode_amount)

    def send_to_address(self, address: str, amount: Amount) -> str:
        """Send *amount* to *address*.

        Not idempotent: a caller retrying after a transport failure may pay
        twice.

        Returns:
            Transaction id

        Raises:
            ValidationError: If the address is empty or the amount not positive
            RpcError: If the node rejects the payment
        """
        if not address or not address.strip():
            raise ValidationError("Address cannot be empty")
        if not isinstance(amount, Amount):
            raise ValidationError(
                f"Amount must be an Amount, got {type(amount).__name__}"
            )
        if amount.units <= 0:
            raise ValidationError("Amount must be positive", details={"amount": str(amount)})
        return self.dispatcher.call(
            "sendtoaddress", [address.strip(), amount], decode_str
        )
