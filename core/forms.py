"""Forms for dashboard controls."""

from __future__ import annotations

from django import forms
from django.conf import settings


class SymbolSelectForm(forms.Form):
    """Validate a posted market symbol selection."""

    symbol = forms.CharField(max_length=32)
    next = forms.CharField(required=False)

    def clean_symbol(self) -> str:
        """Normalize the symbol and reject characters outside market tickers.

        Returns:
            The upper-cased symbol.
        """

        symbol = (self.cleaned_data.get("symbol") or "").strip().upper()
        if not symbol or not all(char.isalnum() or char in "-_/" for char in symbol):
            raise forms.ValidationError("Enter a valid market symbol.")
        return symbol


def symbol_choices() -> list[tuple[str, str]]:
    """Return (symbol, label) choices for the configured major symbols."""

    return [(symbol, symbol.removesuffix("-PERP")) for symbol in settings.NUMORA_MAJOR_SYMBOLS]


class PrecisionSelectForm(forms.Form):
    """Validate a posted order-book grouping precision."""

    precision = forms.FloatField(required=False, min_value=0)
    next = forms.CharField(required=False)

    def clean_precision(self) -> float | None:
        """Return a positive precision, or None to restore the default."""

        precision = self.cleaned_data.get("precision")
        if precision is not None and precision <= 0:
            raise forms.ValidationError("Precision must be positive.")
        return precision
