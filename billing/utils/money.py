def money(x) -> float:
    """Round a figure to 2 decimals for display or persistence."""
    return round(float(x or 0.0), 2)


def money_str(x) -> str:
    """2-decimal string, the format the billing backend stores."""
    return f"{float(x or 0.0):.2f}"
