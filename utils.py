# utils.py

from errors import ValidationError


def parse_int_sequence(text, label="sequence"):
    """Parse "1, 2, 3" into [1, 2, 3]; blank items are skipped."""
    items = [item.strip() for item in text.split(",")]
    values = []
    for item in items:
        if item == "":
            continue
        try:
            values.append(int(item, 10))
        except ValueError:
            raise ValidationError(
                f"Invalid {label}. Please enter comma-separated numbers."
            ) from None
    return values


def parse_positive(value, label):
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Please enter a valid {label}") from None
    if number <= 0:
        raise ValidationError(f"Please enter a valid {label}")
    return number


def get_color(alloc_id):
    """Stable pastel color for an allocation, grey for free space."""
    if alloc_id is None:
        return "#e5e7eb"
    return f"hsl({(alloc_id * 47) % 360}, 70%, 75%)"
