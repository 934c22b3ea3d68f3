from storefront.core.config import settings


def format_amount(value: float) -> str:
    """Importes enteros sin decimales (200), el resto con dos (199.50)."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def money(value: float, symbol: str = None) -> str:
    return f"{symbol if symbol is not None else settings.CURRENCY_SYMBOL}{format_amount(value)}"
