"""Money value object for prices and cart totals."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from marketplace.domain import marketplace

CURRENCY_SYMBOLS = {
    "USD": "$",
    "AUD": "$",
    "CAD": "$",
    "NZD": "$",
    "EUR": "€",
    "GBP": "£",
}


@marketplace.value_object
class Money:
    """A monetary amount in a single currency."""

    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")

    @invariant.post
    def currency_must_be_supported(self):
        if self.currency not in CURRENCY_SYMBOLS:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    def display(self) -> str:
        """Render for the storefront, e.g. ``$12.34``."""
        return f"{CURRENCY_SYMBOLS[self.currency]}{self.amount:,.2f}"


def format_amount(amount: float, currency: str = "USD") -> str:
    return Money(amount=round(amount, 2), currency=currency).display()
