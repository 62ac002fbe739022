# backend/utils/formatting.py

PAYMENT_LABELS = {
    "cash": "Efectivo",
    "transfer": "Transferencia",
}

def format_cop(amount: float) -> str:
    """Format an amount the Colombian way: 1234567.5 -> '1.234.567,5'."""
    amount = round(float(amount), 2)
    sign = "-" if amount < 0 else ""
    whole, _, frac = f"{abs(amount):.2f}".partition(".")
    whole = f"{int(whole):,}".replace(",", ".")
    frac = frac.rstrip("0")
    return f"{sign}{whole},{frac}" if frac else f"{sign}{whole}"

def money(amount: float) -> str:
    return f"${format_cop(amount)} COP"

def payment_label(method: str) -> str:
    return PAYMENT_LABELS.get(method, method)

def short_id(order_id) -> str:
    return str(order_id)[:8]
