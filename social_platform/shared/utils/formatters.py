# 📄 File: social_platform/shared/utils/formatters.py

# 🧭 Purpose (Layman Explanation):
# Turns raw numbers into text people can read, like "2.5 MB" instead of 2621440.

# 🧪 Purpose (Technical Summary):
# Human-readable formatting helpers used by domain models for display-only properties.

# 🔗 Dependencies:
# - typing: Type hints

# 🔄 Connected Modules / Calls From:
# Used by: media_attachment.py (file size display)

_SIZE_PREFIXES = "KMGTPE"


def format_file_size(size_bytes: int, precision: int = 1) -> str:
    """
    Format file size in human-readable binary units.

    Sizes below 1024 bytes are shown as a whole number of bytes; anything
    larger is shown with ``precision`` decimals, e.g. ``1.5 KB``.

    Args:
        size_bytes: Size in bytes
        precision: Decimal precision

    Returns:
        Formatted file size string
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = float(size_bytes)
    exponent = 0
    while size >= 1024 and exponent < len(_SIZE_PREFIXES):
        size /= 1024
        exponent += 1

    return f"{size:.{precision}f} {_SIZE_PREFIXES[exponent - 1]}B"
