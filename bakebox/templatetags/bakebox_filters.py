from decimal import Decimal

from django import template

from bakebox.services import scaling

register = template.Library()


@register.filter
def percent(value):
    """Format a baker's percentage: Decimal("70.0") -> "70.0%", None -> ""."""
    if value is None or value == "":
        return ""
    number = scaling.to_decimal(value)
    if number is None:
        return str(value)
    return f"{number.quantize(Decimal('0.1'))}%"


@register.filter
def amount(line):
    """Amount with unit for a scaled ingredient; sentinels such as "to taste" stand alone."""
    display = getattr(line, "display_amount", line)
    unit = getattr(line, "unit", "")
    if scaling.is_unitless(display) or not unit:
        return display
    return f"{display} {unit}"
