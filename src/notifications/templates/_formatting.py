"""Small formatting helpers shared by the email templates."""


def humanize(value) -> str:
    """``refund_initiated`` -> ``Refund Initiated``."""
    if not value:
        return "N/A"
    return str(value).replace("_", " ").replace("-", " ").title()


def format_timestamp(value) -> str:
    if value is None:
        return "N/A"
    if hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d %H:%M UTC")
    return str(value)
